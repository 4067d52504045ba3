from pathlib import Path

import pytest
from hypothesis import settings

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile("worker-manifest-tests", database=None)
settings.load_profile("worker-manifest-tests")


ENVIRONMENTS_TOML = """\
name = "worker"
type = "webpack"
account_id = "acct-top"
zone_id = "zone-top"
route = "example.com/*"

[env.staging]
route = "staging.example.com/*"

[env.production]
name = "worker-live"
account_id = "acct-prod"
routes = ["example.com/*", "www.example.com/*"]
"""


KV_NAMESPACES_TOML = """\
name = "worker"
type = "javascript"
account_id = "acct"
workers_dev = true

[[kv-namespaces]]
binding = "topKV"
id = "top-level-id"

[env.production]
[[env.production.kv-namespaces]]
binding = "prodKV-1"
id = "somecrazylongidentifierstring"

[[env.production.kv-namespaces]]
binding = "prodKV-2"
id = "anotherwaytoolongidstring"

[env.staging]
"""


def write_manifest(directory: Path, content: str, filename: str = "wrangler.toml") -> Path:
    """Write a manifest file under `directory` and return its path."""
    path = directory / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def environments_manifest_path(tmp_path: Path) -> Path:
    return write_manifest(tmp_path, ENVIRONMENTS_TOML)
