"""Serialize manifest documents back to generic trees and TOML."""

from typing import Any

import tomli_w

from .models import ManifestDocument


def serialize(document: ManifestDocument) -> dict[str, Any]:
    """Generic key/value tree for `document`.

    Only fields present in the source are emitted, under their manifest
    names (`type`, `kv-namespaces`, `entry-point`).
    """
    return document.model_dump(
        mode="json",
        by_alias=True,
        exclude_unset=True,
        exclude_none=True,
    )


def to_toml(document: ManifestDocument) -> str:
    return tomli_w.dumps(serialize(document))
