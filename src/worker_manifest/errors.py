"""Exception taxonomy for worker-manifest."""

from pathlib import Path
from typing import Iterable, Optional


class ManifestError(Exception):
    """Base exception for all manifest errors."""

    pass


# Document errors


class ManifestNotFoundError(ManifestError):
    """Manifest file not found."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Manifest not found: {path}")


class FormatError(ManifestError):
    """Document could not be parsed into a manifest."""

    def __init__(self, details: str, path: Optional[Path] = None) -> None:
        self.details = details
        self.path = path
        if path is not None:
            super().__init__(f"Invalid manifest {path}: {details}")
        else:
            super().__init__(f"Invalid manifest: {details}")


class MisplacedFieldError(FormatError):
    """A known field was declared inside the wrong table."""

    def __init__(self, field: str, parent: str, path: Optional[Path] = None) -> None:
        self.field = field
        self.parent = parent
        super().__init__(
            f"{field} should not live under the [{parent}] table; "
            f"please move it above [{parent}].",
            path=path,
        )


class NameConflictError(ManifestError):
    """Top-level and environment names are not unique."""

    def __init__(self, duplicates: Iterable[str]) -> None:
        self.duplicates = frozenset(duplicates)
        names = ", ".join(sorted(self.duplicates))
        if len(self.duplicates) == 1:
            message = "this name is duplicated"
        else:
            message = "these names are duplicated"
        super().__init__(f"Each name in your manifest must be unique, {message}: {names}")


class InvalidWorkerNameError(ManifestError):
    """Effective worker name is not a valid script name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Worker name {name!r} is invalid: use only lowercase letters, "
            "digits, dashes and underscores"
        )


# Environment lookup errors


class EnvironmentLookupError(ManifestError):
    """Requested environment could not be selected."""

    pass


class UnknownEnvironmentError(EnvironmentLookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Could not find environment with name "{name}"')


class NoEnvironmentsDefinedError(EnvironmentLookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'Environment "{name}" requested but there are no environments specified in your manifest'
        )


# Route errors


class RouteError(ManifestError):
    """Routing fields do not resolve to a single deploy target."""

    pass


class NoTargetError(RouteError):
    """Neither workers_dev nor a route is configured."""

    pass


class AmbiguousConfigError(RouteError):
    """More than one deploy target is configured at the same level."""

    pass


class MissingAccountIdError(RouteError):
    def __init__(self) -> None:
        super().__init__("field `account_id` is required to deploy to routes")


class MissingZoneIdError(RouteError):
    def __init__(self) -> None:
        super().__init__("field `zone_id` is required to deploy to routes")


class EnvironmentRouteRequiredError(RouteError):
    """Top level is zoned but the environment declares no routing of its own."""

    def __init__(self, environment: str) -> None:
        self.environment = environment
        super().__init__(
            f'Environment "{environment}" has no route configuration; '
            "you must specify route(s) per environment for zoned deploys."
        )
