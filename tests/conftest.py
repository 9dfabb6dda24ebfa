"""Shared fixtures."""

import pytest

from book_pager.config import CONFIG_ENV


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point the config at a (not yet existing) file in tmp_path."""
    path = tmp_path / ".book_pager.json"
    monkeypatch.setenv(CONFIG_ENV, str(path))
    return path
