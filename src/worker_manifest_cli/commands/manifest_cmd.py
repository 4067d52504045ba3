from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from worker_manifest import (
    EnvVarOverrideProvider,
    ManifestError,
    placeholder_report,
    to_toml,
)
from worker_manifest.deploy import describe

from ..util import load_or_exit

app = typer.Typer(help="Manifest inspection and validation")
console = Console()

ConfigOption = typer.Option(Path("wrangler.toml"), "--config", "-c", help="Manifest file or directory")
EnvOption = typer.Option(None, "--env", "-e", help="Environment name")
EnvOverridesOption = typer.Option(
    True, "--env-overrides/--no-env-overrides", help="Apply CF_* environment variable overrides"
)


@app.command("check")
def manifest_check(
    config: Path = ConfigOption,
    env_overrides: bool = EnvOverridesOption,
):
    """Validate the manifest and resolve every environment."""
    manifest = load_or_exit(config, env_overrides=env_overrides)

    table = Table(show_header=True)
    table.add_column("Environment", style="cyan")
    table.add_column("Worker", style="bold")
    table.add_column("Deploy target")

    failed = False
    for env_name in [None, *manifest.environment_names()]:
        label = env_name or "(top level)"
        worker = manifest.worker_name(env_name)
        try:
            summary = describe(manifest.deploy_config(env_name))
        except ManifestError as e:
            failed = True
            table.add_row(label, worker, f"[red]{e}[/red]")
            continue
        if summary["kind"] == "zoned":
            target = f"zoned: {', '.join(summary['routes'])}"
        else:
            target = "workers.dev" if summary["workers_dev"] else "unrouted"
        table.add_row(label, worker, f"[green]{target}[/green]")

    console.print(table)
    if failed:
        raise typer.Exit(1)
    console.print("[green]Manifest is valid[/green]")


@app.command("name")
def manifest_name(
    config: Path = ConfigOption,
    env: Optional[str] = EnvOption,
    env_overrides: bool = EnvOverridesOption,
):
    """Print the effective worker name."""
    manifest = load_or_exit(config, env_overrides=env_overrides)
    typer.echo(manifest.worker_name(env))


@app.command("target")
def manifest_target(
    config: Path = ConfigOption,
    env: Optional[str] = EnvOption,
    env_overrides: bool = EnvOverridesOption,
):
    """Print the effective target as JSON."""
    manifest = load_or_exit(config, env_overrides=env_overrides)
    try:
        target = manifest.get_target(env)
    except ManifestError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(json.dumps(target.model_dump(mode="json", by_alias=True), indent=2))


@app.command("deploy-config")
def manifest_deploy_config(
    config: Path = ConfigOption,
    env: Optional[str] = EnvOption,
    env_overrides: bool = EnvOverridesOption,
    allow_unrouted: bool = typer.Option(
        False, "--allow-unrouted", help="Accept a manifest with no deploy target"
    ),
):
    """Print the resolved deploy config as JSON."""
    manifest = load_or_exit(config, env_overrides=env_overrides)
    try:
        deploy = manifest.deploy_config(env, allow_unrouted=allow_unrouted)
    except ManifestError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(json.dumps(describe(deploy), indent=2))


@app.command("export")
def manifest_export(
    config: Path = ConfigOption,
    out: Path = typer.Option(..., "--out", help="Output TOML path"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Overwrite if output already exists"),
    env_overrides: bool = EnvOverridesOption,
):
    """Write the validated manifest (with overrides applied) as TOML."""
    manifest = load_or_exit(config, env_overrides=env_overrides)
    if out.exists() and not overwrite:
        typer.echo(f"Refusing to overwrite existing file: {out}", err=True)
        raise typer.Exit(1)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(to_toml(manifest.document), encoding="utf-8")
    typer.echo(f"Wrote {out}")


@app.command("placeholders")
def manifest_placeholders(
    config: Path = ConfigOption,
    env_overrides: bool = EnvOverridesOption,
):
    """List template fields that must be filled in before deploying."""
    manifest = load_or_exit(config, env_overrides=False)
    provider = EnvVarOverrideProvider() if env_overrides else None
    report = placeholder_report(manifest.document, provider)
    if report.is_empty:
        console.print("[green]No placeholder fields to update[/green]")
        return
    console.print("[yellow]You will need to update the following fields before deploying:[/yellow]")
    for line in report.lines():
        console.print(line, markup=False)
