"""Tests for the member activation maintenance script."""

import importlib.util
from pathlib import Path

import pytest
from factories import OWNER, TEAM_ID, make_team

from note_access import MemberStatus, TeamStore
from note_access.local import LocalDocumentClient

BOB = "665f1c2a9b1e8a0012a0a0b2"
CAROL = "665f1c2a9b1e8a0012a0a0c3"

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "activate_members.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("activate_members", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


activate_members = _load_script()


async def _seed(data_dir: Path) -> TeamStore:
    store = TeamStore(LocalDocumentClient(data_dir))
    await store.save_team(
        make_team(
            members=[
                (BOB, "editor", "pending"),
                (CAROL, "viewer", "suspended"),
            ]
        )
    )
    return store


class TestRun:
    @pytest.mark.asyncio
    async def test_single_member(self, tmp_path: Path):
        store = await _seed(tmp_path)

        assert await activate_members.run(tmp_path, TEAM_ID, OWNER, CAROL) == 0

        team = await store.get_team(TEAM_ID)
        assert team.get_member(CAROL).status == MemberStatus.ACTIVE
        assert team.get_member(BOB).status == MemberStatus.PENDING

    @pytest.mark.asyncio
    async def test_all_pending_members(self, tmp_path: Path):
        store = await _seed(tmp_path)

        assert await activate_members.run(tmp_path, TEAM_ID, OWNER, None) == 0

        team = await store.get_team(TEAM_ID)
        assert team.get_member(BOB).status == MemberStatus.ACTIVE
        assert team.get_member(CAROL).status == MemberStatus.SUSPENDED

    @pytest.mark.asyncio
    async def test_non_owner_is_refused(self, tmp_path: Path):
        store = await _seed(tmp_path)

        assert await activate_members.run(tmp_path, TEAM_ID, BOB, CAROL) == 1

        team = await store.get_team(TEAM_ID)
        assert team.get_member(CAROL).status == MemberStatus.SUSPENDED

    @pytest.mark.asyncio
    async def test_missing_team(self, tmp_path: Path):
        assert await activate_members.run(tmp_path, TEAM_ID, OWNER, None) == 1
