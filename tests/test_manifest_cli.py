import json
from pathlib import Path

import tomllib
from typer.testing import CliRunner

from worker_manifest_cli.cli import app

from conftest import ENVIRONMENTS_TOML, write_manifest

runner = CliRunner()


def test_name_command(environments_manifest_path: Path):
    result = runner.invoke(
        app, ["manifest", "name", "--config", str(environments_manifest_path), "--env", "staging"]
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "worker-staging"


def test_target_command_outputs_json(environments_manifest_path: Path):
    result = runner.invoke(
        app,
        ["manifest", "target", "--config", str(environments_manifest_path), "--env", "production"],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["name"] == "worker-live"
    assert data["account_id"] == "acct-prod"
    assert data["target_type"] == "webpack"


def test_deploy_config_command(environments_manifest_path: Path):
    result = runner.invoke(
        app,
        [
            "manifest",
            "deploy-config",
            "--config",
            str(environments_manifest_path),
            "--env",
            "staging",
            "--no-env-overrides",
        ],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data == {
        "kind": "zoned",
        "account_id": "acct-top",
        "zone_id": "zone-top",
        "script_name": "worker-staging",
        "routes": ["staging.example.com/*"],
    }


def test_deploy_config_command_reports_route_errors(tmp_path: Path):
    path = write_manifest(
        tmp_path,
        ENVIRONMENTS_TOML + "\n[env.dev]\naccount_id = \"other\"\n",
    )
    result = runner.invoke(
        app,
        ["manifest", "deploy-config", "--config", str(path), "--env", "dev", "--no-env-overrides"],
    )
    assert result.exit_code == 1
    assert "route(s) per environment" in result.output


def test_check_command_valid(environments_manifest_path: Path):
    result = runner.invoke(
        app, ["manifest", "check", "--config", str(environments_manifest_path), "--no-env-overrides"]
    )
    assert result.exit_code == 0, result.output
    assert "Manifest is valid" in result.output


def test_check_command_fails_on_duplicate_names(tmp_path: Path):
    path = write_manifest(
        tmp_path, 'name = "worker"\ntype = "javascript"\n\n[env.prod]\nname = "worker"\n'
    )
    result = runner.invoke(app, ["manifest", "check", "--config", str(path)])
    assert result.exit_code == 1
    assert "must be unique" in result.output


def test_check_command_fails_on_unresolvable_environment(tmp_path: Path):
    path = write_manifest(tmp_path, 'name = "worker"\ntype = "javascript"\n\n[env.prod]\n')
    result = runner.invoke(
        app, ["manifest", "check", "--config", str(path), "--no-env-overrides"]
    )
    assert result.exit_code == 1


def test_export_command_writes_toml(environments_manifest_path: Path, tmp_path: Path):
    out = tmp_path / "out" / "exported.toml"
    result = runner.invoke(
        app,
        [
            "manifest",
            "export",
            "--config",
            str(environments_manifest_path),
            "--out",
            str(out),
            "--no-env-overrides",
        ],
    )
    assert result.exit_code == 0, result.output
    data = tomllib.loads(out.read_text(encoding="utf-8"))
    assert data["name"] == "worker"
    assert data["env"]["production"]["name"] == "worker-live"


def test_export_command_refuses_overwrite(environments_manifest_path: Path, tmp_path: Path):
    out = tmp_path / "exists.toml"
    out.write_text("", encoding="utf-8")
    result = runner.invoke(
        app,
        ["manifest", "export", "--config", str(environments_manifest_path), "--out", str(out)],
    )
    assert result.exit_code == 1


def test_placeholders_command(environments_manifest_path: Path):
    result = runner.invoke(
        app,
        ["manifest", "placeholders", "--config", str(environments_manifest_path), "--no-env-overrides"],
    )
    assert result.exit_code == 0, result.output
    assert "[env.production]" in result.output
    assert "- route" in result.output


def test_missing_manifest_exits_with_error(tmp_path: Path):
    result = runner.invoke(app, ["manifest", "name", "--config", str(tmp_path / "missing.toml")])
    assert result.exit_code == 1
    assert "Manifest not found" in result.output


def test_invalid_utf8_manifest_exits_with_error(tmp_path: Path):
    path = tmp_path / "wrangler.toml"
    path.write_bytes(b'name = "w\xff"\ntype = "javascript"\n')
    result = runner.invoke(app, ["manifest", "name", "--config", str(path)])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Invalid manifest" in result.output
