"""Load manifests from TOML text, files or already-parsed trees."""

import logging
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from .errors import FormatError, ManifestNotFoundError, MisplacedFieldError
from .manifest import Manifest, NameValidator
from .models import Environment, ManifestDocument
from .naming import is_valid_worker_name
from .overrides import OverrideProvider, apply_overrides

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "wrangler.toml"

# Fields that belong at the top level but are commonly nested one table too deep.
_MISPLACED_FIELDS = {("site", "kv-namespaces")}


def _known_keys(model: type[BaseModel]) -> set[str]:
    return {info.alias or name for name, info in model.model_fields.items()}


def _log_ignored_keys(data: dict[str, Any]) -> None:
    ignored = sorted(set(data) - _known_keys(ManifestDocument))
    if ignored:
        logger.debug("Ignoring unrecognized top-level keys: %s", ", ".join(ignored))
    env = data.get("env")
    if isinstance(env, dict):
        known = _known_keys(Environment)
        for env_name, table in env.items():
            if isinstance(table, dict):
                extra = sorted(set(table) - known)
                if extra:
                    logger.debug("Ignoring unrecognized keys in [env.%s]: %s", env_name, ", ".join(extra))


def parse_document(data: Any, path: Optional[Path] = None) -> ManifestDocument:
    """Validate a generic key/value tree into a `ManifestDocument`.

    Raises:
        MisplacedFieldError: `kv-namespaces` was declared inside `[site]`.
        FormatError: Any other structural problem.
    """
    if not isinstance(data, dict):
        raise FormatError(f"manifest root must be a table, got {type(data).__name__}", path=path)

    _log_ignored_keys(data)
    try:
        return ManifestDocument.model_validate(data)
    except ValidationError as e:
        for error in e.errors():
            loc = tuple(str(part) for part in error["loc"])
            if error["type"] == "extra_forbidden" and loc in _MISPLACED_FIELDS:
                parent, field = loc
                raise MisplacedFieldError(field, parent, path=path) from e
        raise FormatError(str(e), path=path) from e


def manifest_from_dict(
    data: Any,
    *,
    overrides: Optional[OverrideProvider] = None,
    name_validator: NameValidator = is_valid_worker_name,
    path: Optional[Path] = None,
) -> Manifest:
    if isinstance(data, dict):
        data = apply_overrides(data, overrides)
    document = parse_document(data, path=path)
    return Manifest(document, name_validator=name_validator)


def parse_manifest(
    text: str,
    *,
    overrides: Optional[OverrideProvider] = None,
    name_validator: NameValidator = is_valid_worker_name,
) -> Manifest:
    """Build a manifest from TOML text."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise FormatError(f"invalid TOML: {e}") from e
    return manifest_from_dict(data, overrides=overrides, name_validator=name_validator)


def load_manifest(
    path: Path,
    *,
    overrides: Optional[OverrideProvider] = None,
    name_validator: NameValidator = is_valid_worker_name,
) -> Manifest:
    """Read and validate a manifest file.

    A directory is resolved to the `wrangler.toml` inside it.
    """
    path = Path(path)
    if path.is_dir():
        path = path / DEFAULT_MANIFEST_NAME
    if not path.exists():
        raise ManifestNotFoundError(path)

    logger.debug("Loading manifest from %s", path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise FormatError(f"invalid TOML: {e}", path=path) from e
    except OSError as e:
        raise FormatError(f"could not read manifest: {e}", path=path) from e

    return manifest_from_dict(
        data, overrides=overrides, name_validator=name_validator, path=path
    )
