"""Worker naming rules: validity, uniqueness and per-environment names."""

import re
from collections import Counter
from typing import Optional

from .errors import NameConflictError
from .models import Environment, ManifestDocument

_WORKER_NAME_RE = re.compile(r"[a-z0-9_][a-z0-9_-]*")


def is_valid_worker_name(name: str) -> bool:
    """Default script name predicate: lowercase alphanumerics, `-` and `_`."""
    return bool(_WORKER_NAME_RE.fullmatch(name))


def check_for_duplicate_names(document: ManifestDocument) -> None:
    """Ensure the top-level name and every explicit environment name are distinct.

    Raises:
        NameConflictError: With each duplicated name reported once.
    """
    names = [document.name]
    names.extend(env.name for env in document.environments.values() if env.name is not None)
    duplicates = {name for name, count in Counter(names).items() if count > 1}
    if duplicates:
        raise NameConflictError(duplicates)


def environment_worker_name(
    top_level_name: str,
    environment_name: Optional[str],
    environment: Optional[Environment],
) -> str:
    """Name a worker is published under for the selected environment."""
    if environment is None:
        return top_level_name
    if environment.name is not None:
        return environment.name
    if environment_name is not None:
        return f"{top_level_name}-{environment_name}"
    return top_level_name
