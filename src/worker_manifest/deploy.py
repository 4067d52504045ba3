"""Deploy target resolution.

A worker deploys either to the platform subdomain (zoneless, `workers_dev`)
or to explicit route patterns inside a DNS zone (zoned). Exactly one of the
two is produced for a given set of routing fields:

1. `route` together with `routes`, or `workers_dev = true` together with
   either of them, is ambiguous.
2. `workers_dev = true` is zoneless.
3. Any route pattern or a `zone_id` is a zone signal: zoned, which needs an
   account id, a zone id and at least one pattern.
4. Nothing at all is no target, unless the caller accepts an unrouted
   (dev-only) worker.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union, assert_never

from .errors import (
    AmbiguousConfigError,
    MissingAccountIdError,
    MissingZoneIdError,
    NoTargetError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteConfig:
    """Routing inputs of one resolution level (top level or an environment)."""

    workers_dev: Optional[bool] = None
    route: Optional[str] = None
    routes: Optional[Tuple[str, ...]] = None
    zone_id: Optional[str] = None
    account_id: Optional[str] = None

    def is_zoneless(self) -> bool:
        return bool(self.workers_dev)

    def has_routes_defined(self) -> bool:
        return self.route is not None or self.routes is not None

    def is_zoned(self) -> bool:
        return self.has_routes_defined() or bool(self.zone_id)

    def has_conflicting_targets(self) -> bool:
        if self.route is not None and self.routes is not None:
            return True
        return self.is_zoneless() and self.has_routes_defined()


@dataclass(frozen=True)
class Zoned:
    account_id: str
    zone_id: str
    script_name: str
    routes: Tuple[str, ...]


@dataclass(frozen=True)
class Zoneless:
    account_id: str
    script_name: str
    workers_dev: bool


DeployConfig = Union[Zoned, Zoneless]


def build_deploy_config(
    script_name: str,
    route_config: RouteConfig,
    *,
    allow_unrouted: bool = False,
) -> DeployConfig:
    """Resolve routing inputs into exactly one deploy target.

    Args:
        script_name: Effective worker name the routes are bound to.
        route_config: Routing fields of a single resolution level.
        allow_unrouted: Return a zoneless, non-workers.dev target instead of
            failing when nothing is configured.

    Raises:
        AmbiguousConfigError: More than one target kind is configured.
        MissingAccountIdError: Routes are configured without an account id.
        MissingZoneIdError: Routes are configured without a zone id.
        NoTargetError: No deploy target is configured.
    """
    if route_config.has_conflicting_targets():
        if route_config.route is not None and route_config.routes is not None:
            raise AmbiguousConfigError("specify either `route` or `routes`, not both")
        raise AmbiguousConfigError(
            "`workers_dev = true` cannot be combined with `route` or `routes`"
        )

    if route_config.is_zoneless():
        logger.debug("Resolved %s as zoneless (workers_dev)", script_name)
        return Zoneless(
            account_id=route_config.account_id or "",
            script_name=script_name,
            workers_dev=True,
        )

    if route_config.is_zoned():
        return _build_zoned(script_name, route_config)

    if allow_unrouted:
        logger.debug("No deploy target for %s; returning unrouted zoneless config", script_name)
        return Zoneless(
            account_id=route_config.account_id or "",
            script_name=script_name,
            workers_dev=False,
        )

    raise NoTargetError(
        "no deploy target configured: set `workers_dev = true` or provide `route(s)` and `zone_id`"
    )


def _build_zoned(script_name: str, route_config: RouteConfig) -> Zoned:
    if not route_config.account_id:
        raise MissingAccountIdError()
    if not route_config.zone_id:
        raise MissingZoneIdError()

    if route_config.route is not None:
        patterns: Tuple[str, ...] = (route_config.route,)
    else:
        patterns = tuple(p for p in (route_config.routes or ()) if p)
    if not patterns:
        raise NoTargetError("no routes specified for zoned deploy")

    logger.debug("Resolved %s as zoned (%d route(s))", script_name, len(patterns))
    return Zoned(
        account_id=route_config.account_id,
        zone_id=route_config.zone_id,
        script_name=script_name,
        routes=patterns,
    )


def describe(config: DeployConfig) -> dict:
    """Plain-dict view of a deploy config, tagged with its kind."""
    if isinstance(config, Zoned):
        return {
            "kind": "zoned",
            "account_id": config.account_id,
            "zone_id": config.zone_id,
            "script_name": config.script_name,
            "routes": list(config.routes),
        }
    if isinstance(config, Zoneless):
        return {
            "kind": "zoneless",
            "account_id": config.account_id,
            "script_name": config.script_name,
            "workers_dev": config.workers_dev,
        }
    assert_never(config)

