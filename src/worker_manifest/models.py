"""Pydantic models for the manifest document.

The document is the typed view of a `wrangler.toml`-style tree: top-level
fields plus a table of named environment overlays. Models are frozen; the
resolution layers never mutate them.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .deploy import RouteConfig


class TargetType(str, Enum):
    """Build mode of a worker."""

    JAVASCRIPT = "javascript"
    RUST = "rust"
    WEBPACK = "webpack"

    def __str__(self) -> str:
        return self.value


def _empty_as_none(value):
    if isinstance(value, str) and value == "":
        return None
    return value


class KvNamespace(BaseModel):
    """KV namespace binding."""

    id: str
    binding: str
    bucket: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class Site(BaseModel):
    """Static site configuration (`[site]` table)."""

    bucket: str
    entry_point: Optional[str] = Field(default=None, alias="entry-point")
    include: Optional[Tuple[str, ...]] = None
    exclude: Optional[Tuple[str, ...]] = None

    # kv-namespaces under [site] is a common mistake; unknown keys must surface.
    model_config = ConfigDict(frozen=True, extra="forbid")


class Environment(BaseModel):
    """Named overlay under `[env.<name>]`."""

    name: Optional[str] = None
    account_id: Optional[str] = None
    workers_dev: Optional[bool] = None
    route: Optional[str] = None
    routes: Optional[Tuple[str, ...]] = None
    zone_id: Optional[str] = None
    webpack_config: Optional[str] = None
    private: Optional[bool] = None
    kv_namespaces: Optional[Tuple[KvNamespace, ...]] = Field(default=None, alias="kv-namespaces")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("account_id", "route", "zone_id", mode="before")
    @classmethod
    def normalize_empty(cls, v):
        return _empty_as_none(v)

    def has_routing(self) -> bool:
        return self.workers_dev is not None or self.route is not None or self.routes is not None

    def route_config(
        self, top_level_account_id: str, top_level_zone_id: Optional[str]
    ) -> Optional[RouteConfig]:
        """Routing inputs for this overlay, or None when it declares no routing.

        Account and zone ids fall back to the top level; the routing fields
        themselves never do.
        """
        if not self.has_routing():
            return None
        account_id = self.account_id if self.account_id is not None else top_level_account_id
        zone_id = self.zone_id if self.zone_id is not None else top_level_zone_id
        return RouteConfig(
            workers_dev=self.workers_dev,
            route=self.route,
            routes=self.routes,
            zone_id=zone_id,
            account_id=account_id,
        )


class ManifestDocument(BaseModel):
    """Top-level manifest document."""

    name: str = ""
    target_type: TargetType = Field(..., alias="type")
    account_id: str = ""
    workers_dev: Optional[bool] = None
    route: Optional[str] = None
    routes: Optional[Tuple[str, ...]] = None
    zone_id: Optional[str] = None
    webpack_config: Optional[str] = None
    private: Optional[bool] = None
    site: Optional[Site] = None
    kv_namespaces: Optional[Tuple[KvNamespace, ...]] = Field(default=None, alias="kv-namespaces")
    env: Optional[Dict[str, Environment]] = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("route", "zone_id", mode="before")
    @classmethod
    def normalize_empty(cls, v):
        return _empty_as_none(v)

    @field_validator("account_id", mode="before")
    @classmethod
    def account_id_none_as_empty(cls, v):
        return "" if v is None else v

    def route_config(self) -> RouteConfig:
        return RouteConfig(
            workers_dev=self.workers_dev,
            route=self.route,
            routes=self.routes,
            zone_id=self.zone_id,
            account_id=self.account_id,
        )

    @property
    def environments(self) -> Dict[str, Environment]:
        return dict(self.env or {})
