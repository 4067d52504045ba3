"""Tests for writing documents back to generic trees and TOML."""

import tomllib

from hypothesis import given, strategies as st

from worker_manifest.loader import parse_document, parse_manifest
from worker_manifest.serialize import serialize, to_toml

from conftest import ENVIRONMENTS_TOML, KV_NAMESPACES_TOML

words = st.from_regex(r"[a-z][a-z0-9-]{0,10}", fullmatch=True)
patterns = st.builds(lambda host: f"{host}.example.com/*", words)

kv_namespaces = st.lists(
    st.fixed_dictionaries(
        {"id": words, "binding": words},
        optional={"bucket": words},
    ),
    max_size=3,
)

routing = st.fixed_dictionaries(
    {},
    optional={
        "workers_dev": st.booleans(),
        "route": patterns,
        "routes": st.lists(patterns, max_size=3),
        "zone_id": words,
        "webpack_config": words,
        "private": st.booleans(),
    },
)

environments = st.dictionaries(
    words,
    st.builds(
        lambda base, extra: {**base, **extra},
        routing,
        st.fixed_dictionaries(
            {},
            optional={"name": words, "account_id": words, "kv-namespaces": kv_namespaces},
        ),
    ),
    max_size=3,
)

documents = st.builds(
    lambda base, extra: {**base, **extra},
    routing,
    st.fixed_dictionaries(
        {"name": words, "type": st.sampled_from(["javascript", "rust", "webpack"])},
        optional={
            "account_id": st.one_of(st.just(""), words),
            "kv-namespaces": kv_namespaces,
            "site": st.fixed_dictionaries(
                {"bucket": words},
                optional={"entry-point": words, "include": st.lists(words, max_size=2)},
            ),
            "env": environments,
        },
    ),
)


@given(documents)
def test_serialize_round_trips_understood_fields(doc):
    assert serialize(parse_document(doc)) == doc


def test_serialize_uses_manifest_key_names():
    tree = serialize(parse_manifest(KV_NAMESPACES_TOML).document)
    assert tree["type"] == "javascript"
    assert tree["kv-namespaces"] == [{"binding": "topKV", "id": "top-level-id"}]
    assert "target_type" not in tree


def test_serialize_omits_unset_fields():
    tree = serialize(parse_document({"name": "worker", "type": "rust"}))
    assert tree == {"name": "worker", "type": "rust"}


def test_to_toml_reparses_to_same_document():
    document = parse_manifest(ENVIRONMENTS_TOML).document
    text = to_toml(document)
    assert parse_document(tomllib.loads(text)) == document
