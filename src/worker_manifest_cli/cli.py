from __future__ import annotations

import typer

from .util import configure_logging, configure_stdio

app = typer.Typer(help="worker-manifest: resolve per-environment worker deploy targets")


@app.callback()
def _init(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    configure_stdio()
    configure_logging(verbose)


from .commands import manifest_cmd  # noqa: E402

app.add_typer(manifest_cmd.app, name="manifest", help="Manifest inspection and validation")


def main():
    app()
