from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import typer

from worker_manifest import EnvVarOverrideProvider, Manifest, ManifestError, load_manifest


def configure_stdio() -> None:
    """Replace unencodable characters on Windows consoles instead of crashing."""

    if os.name != "nt":
        return

    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(errors="replace")


def configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def load_or_exit(config: Path, *, env_overrides: bool = True) -> Manifest:
    """Load the manifest at `config`, exiting with status 1 on manifest errors."""
    provider = EnvVarOverrideProvider() if env_overrides else None
    try:
        return load_manifest(config, overrides=provider)
    except ManifestError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
