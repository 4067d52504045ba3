"""Effective target resolution for a selected environment.

Each target field follows one inheritance policy, listed in `FIELD_POLICIES`:

- INHERIT: always the top-level value; overlays cannot set it.
- OVERRIDE: the overlay value when set, otherwise the top-level value.
- ISOLATE: only ever the overlay's own value, never the top level's.

The worker name is not table driven; see `naming.environment_worker_name`.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .errors import NoEnvironmentsDefinedError, UnknownEnvironmentError
from .models import Environment, KvNamespace, ManifestDocument, Site, TargetType
from .naming import environment_worker_name

logger = logging.getLogger(__name__)


class FieldPolicy(str, Enum):
    INHERIT = "inherit"
    OVERRIDE = "override"
    ISOLATE = "isolate"


FIELD_POLICIES: Mapping[str, FieldPolicy] = MappingProxyType(
    {
        "target_type": FieldPolicy.INHERIT,
        "account_id": FieldPolicy.OVERRIDE,
        "webpack_config": FieldPolicy.OVERRIDE,
        # Sharing namespaces across environments lets staging write production data.
        "kv_namespaces": FieldPolicy.ISOLATE,
        "site": FieldPolicy.INHERIT,
    }
)


class Target(BaseModel):
    """Resolved configuration of one worker for one environment."""

    name: str
    target_type: TargetType
    account_id: str
    webpack_config: Optional[str] = None
    kv_namespaces: Optional[Tuple[KvNamespace, ...]] = None
    site: Optional[Site] = None

    model_config = ConfigDict(frozen=True)


def apply_policy(policy: FieldPolicy, top_level_value: Any, overlay_value: Any) -> Any:
    """Pick a field value for an environment target according to `policy`."""
    if policy is FieldPolicy.INHERIT:
        return top_level_value
    if policy is FieldPolicy.OVERRIDE:
        return overlay_value if overlay_value is not None else top_level_value
    if policy is FieldPolicy.ISOLATE:
        return overlay_value
    raise ValueError(f"Unknown inheritance policy: {policy!r}")


def effective_target_type(document: ManifestDocument) -> TargetType:
    # Site projects always build with webpack regardless of the declared type.
    if document.site is not None:
        return TargetType.WEBPACK
    return document.target_type


def get_environment(
    document: ManifestDocument, environment_name: Optional[str]
) -> Optional[Environment]:
    """Select an overlay by name; None selects the top level.

    Raises:
        NoEnvironmentsDefinedError: A name was given but the document has no overlays.
        UnknownEnvironmentError: A name was given that matches no overlay.
    """
    if environment_name is None:
        return None
    if not document.env:
        raise NoEnvironmentsDefinedError(environment_name)
    environment = document.env.get(environment_name)
    if environment is None:
        raise UnknownEnvironmentError(environment_name)
    return environment


def _top_level_values(document: ManifestDocument) -> dict[str, Any]:
    return {
        "target_type": effective_target_type(document),
        "account_id": document.account_id,
        "webpack_config": document.webpack_config,
        "kv_namespaces": document.kv_namespaces,
        "site": document.site,
    }


def resolve_target(document: ManifestDocument, environment_name: Optional[str] = None) -> Target:
    """Build the effective target for `environment_name` (or the top level)."""
    environment = get_environment(document, environment_name)
    values = _top_level_values(document)

    if environment is not None:
        for field, policy in FIELD_POLICIES.items():
            overlay_value = getattr(environment, field, None)
            values[field] = apply_policy(policy, values[field], overlay_value)
        logger.debug("Applied environment %r overlay to target", environment_name)

    name = environment_worker_name(document.name, environment_name, environment)
    return Target(name=name, **values)
