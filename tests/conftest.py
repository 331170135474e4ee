"""Shared fixtures: keep every test away from the user's real config."""

import logging
import os

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, tmp_path_factory, monkeypatch):
    """Run each test in an empty CWD/HOME with no APPLY_EDIT_* variables."""
    for key in list(os.environ):
        if key.startswith("APPLY_EDIT_"):
            monkeypatch.delenv(key)
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers the CLI attached to the package logger."""
    yield
    logger = logging.getLogger("apply_edit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
