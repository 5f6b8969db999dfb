#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.

"""Pytest configuration for powd tests."""

import os

import pytest


@pytest.fixture
def host_root(tmp_path):
    root = tmp_path / "Hosts"
    root.mkdir()
    return root


@pytest.fixture
def app_dir(tmp_path):
    """Return a factory creating application directories outside the host root."""
    def _make(name):
        path = tmp_path / "apps" / name
        path.mkdir(parents=True)
        return path
    return _make


@pytest.fixture
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("POW_"):
            monkeypatch.delenv(key)
    return monkeypatch
