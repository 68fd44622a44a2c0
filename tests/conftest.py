"""Shared fixtures: every test runs against an empty, isolated config directory."""

import pytest


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    """Point GY_TAX_CONFIG_PATH at a fresh directory so no user config leaks in."""
    path = tmp_path / "config"
    path.mkdir()
    monkeypatch.setenv("GY_TAX_CONFIG_PATH", str(path))
    return path
