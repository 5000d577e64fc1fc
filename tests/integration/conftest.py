"""Shared fixtures for integration tests: real files under tmp_path."""

from pathlib import Path

import pytest


@pytest.fixture
def state_file(tmp_path) -> Path:
    """Path of a not-yet-existing state file."""
    return tmp_path / "state.json"


@pytest.fixture
def write_state(state_file):
    """Factory: put raw text at the state file path before create()."""

    def _write(text: str) -> Path:
        state_file.write_text(text, encoding="utf-8")
        return state_file

    return _write
