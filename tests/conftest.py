"""
Shared test configuration and fixtures.
"""

from pathlib import Path

import pytest

from note_access import TeamStore
from note_access.local import LocalDocumentClient


@pytest.fixture
def team_store(tmp_path: Path) -> TeamStore:
    """Team store backed by JSON files in a temp directory."""
    return TeamStore(LocalDocumentClient(tmp_path / "data"))
