"""Tests for the default worker name predicate."""

import pytest

from worker_manifest.naming import is_valid_worker_name


@pytest.mark.parametrize("name", ["worker", "my-worker", "_worker", "w0rk_er-2"])
def test_valid_worker_names(name):
    assert is_valid_worker_name(name)


@pytest.mark.parametrize("name", ["", "Worker", "-worker", "my worker", "worker.js"])
def test_invalid_worker_names(name):
    assert not is_valid_worker_name(name)


def test_trailing_newline_is_rejected():
    assert not is_valid_worker_name("worker\n")
