"""Pytest configuration"""

import sys
from pathlib import Path

import pytest

# Add src to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from phasehook.core.dispatcher import HookDispatcher  # noqa: E402


@pytest.fixture()
def dispatcher():
    """A fresh dispatcher with its own namespace registry."""
    return HookDispatcher()
