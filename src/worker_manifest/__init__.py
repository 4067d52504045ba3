"""Worker Manifest - resolve environment-specific deploy targets from a worker manifest."""

from .__version__ import __version__, __version_info__

from .models import Environment, KvNamespace, ManifestDocument, Site, TargetType
from .deploy import DeployConfig, RouteConfig, Zoned, Zoneless, build_deploy_config
from .inheritance import FIELD_POLICIES, FieldPolicy, Target, resolve_target
from .naming import check_for_duplicate_names, is_valid_worker_name
from .manifest import Manifest
from .loader import load_manifest, manifest_from_dict, parse_document, parse_manifest
from .overrides import EnvVarOverrideProvider, OverrideProvider, StaticOverrideProvider
from .serialize import serialize, to_toml
from .report import PlaceholderReport, placeholder_report
from .errors import (
    AmbiguousConfigError,
    EnvironmentLookupError,
    EnvironmentRouteRequiredError,
    FormatError,
    InvalidWorkerNameError,
    ManifestError,
    ManifestNotFoundError,
    MisplacedFieldError,
    MissingAccountIdError,
    MissingZoneIdError,
    NameConflictError,
    NoEnvironmentsDefinedError,
    NoTargetError,
    RouteError,
    UnknownEnvironmentError,
)

__all__ = [
    # Version
    "__version__",
    "__version_info__",
    # Document
    "Environment",
    "KvNamespace",
    "ManifestDocument",
    "Site",
    "TargetType",
    # Routing
    "DeployConfig",
    "RouteConfig",
    "Zoned",
    "Zoneless",
    "build_deploy_config",
    # Inheritance
    "FIELD_POLICIES",
    "FieldPolicy",
    "Target",
    "resolve_target",
    # Naming
    "check_for_duplicate_names",
    "is_valid_worker_name",
    # Facade and loading
    "Manifest",
    "load_manifest",
    "manifest_from_dict",
    "parse_document",
    "parse_manifest",
    "EnvVarOverrideProvider",
    "OverrideProvider",
    "StaticOverrideProvider",
    "serialize",
    "to_toml",
    "PlaceholderReport",
    "placeholder_report",
    # Errors
    "AmbiguousConfigError",
    "EnvironmentLookupError",
    "EnvironmentRouteRequiredError",
    "FormatError",
    "InvalidWorkerNameError",
    "ManifestError",
    "ManifestNotFoundError",
    "MisplacedFieldError",
    "MissingAccountIdError",
    "MissingZoneIdError",
    "NameConflictError",
    "NoEnvironmentsDefinedError",
    "NoTargetError",
    "RouteError",
    "UnknownEnvironmentError",
]
