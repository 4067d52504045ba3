"""Override providers layered over the raw manifest tree.

Process environment variables are read here and nowhere else; the
resolution core only ever sees the merged tree.
"""

import logging
import os
from typing import Any, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)

# Top-level scalar fields that may be overridden by name.
OVERRIDABLE_FIELDS = frozenset(
    {
        "name",
        "type",
        "account_id",
        "zone_id",
        "route",
        "workers_dev",
        "webpack_config",
        "private",
    }
)


class OverrideProvider(Protocol):
    def overrides(self) -> dict[str, Any]:
        """Return top-level fields to layer over the document."""
        ...


class StaticOverrideProvider:
    """Overrides from an in-memory mapping."""

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values = dict(values)

    def overrides(self) -> dict[str, Any]:
        return dict(self._values)


class EnvVarOverrideProvider:
    """Overrides from prefixed environment variables.

    `CF_ACCOUNT_ID=abc` sets `account_id = "abc"`. Variables naming anything
    other than an overridable top-level field are ignored.
    """

    def __init__(self, prefix: str = "CF", environ: Optional[Mapping[str, str]] = None) -> None:
        self.prefix = prefix
        self._environ = environ

    def overrides(self) -> dict[str, Any]:
        environ = self._environ if self._environ is not None else os.environ
        marker = f"{self.prefix.upper()}_"
        values: dict[str, Any] = {}
        for key, value in environ.items():
            if not key.upper().startswith(marker):
                continue
            field = key[len(marker):].lower()
            if field in OVERRIDABLE_FIELDS:
                values[field] = value
        if values:
            logger.debug("Environment overrides for fields: %s", ", ".join(sorted(values)))
        return values


def deep_merge(base: dict[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Merge `overlay` into a copy of `base`; nested tables merge key by key."""
    result: dict[str, Any] = dict(base)
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def apply_overrides(data: dict[str, Any], provider: Optional[OverrideProvider]) -> dict[str, Any]:
    if provider is None:
        return data
    return deep_merge(data, provider.overrides())
