"""Shared pytest fixtures."""

import tempfile
from pathlib import Path

import pytest

from tests.helpers.scripted_input import ScriptedInput


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def mock_wizard_dir(temp_dir, monkeypatch):
    """Set up a mock ~/.config/cwwizard directory."""
    from cwwizard.utils.debug import reload_config

    wizard_dir = temp_dir / ".config" / "cwwizard"
    wizard_dir.mkdir(parents=True)
    monkeypatch.setenv("CWWIZARD_DIR", str(wizard_dir))
    reload_config()
    yield wizard_dir
    reload_config()


@pytest.fixture
def scripted():
    """Factory for a reader that replays the given lines."""
    return ScriptedInput
