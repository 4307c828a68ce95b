"""Tests for the team store over the local document client."""

import json
from pathlib import Path

import pytest
from factories import OWNER, TEAM_ID, make_team

from note_access import (
    AccessDeniedError,
    MemberStatus,
    Role,
    StorageIOError,
    TeamNotFoundError,
    TeamStore,
)
from note_access.local import LocalDocumentClient

BOB = "665f1c2a9b1e8a0012a0a0b2"
CAROL = "665f1c2a9b1e8a0012a0a0c3"
OTHER_TEAM = "665f1c2a9b1e8a0012a0b002"


class TestLocalDocumentClient:
    @pytest.mark.asyncio
    async def test_missing_item(self, tmp_path: Path):
        client = LocalDocumentClient(tmp_path)

        assert await client.read_item("teams", "nope") is None
        assert await client.list_items("teams") == []

    @pytest.mark.asyncio
    async def test_upsert_and_read(self, tmp_path: Path):
        client = LocalDocumentClient(tmp_path)

        await client.upsert_item("teams", {"_id": "t1", "name": "Platform"})

        assert await client.read_item("teams", "t1") == {"_id": "t1", "name": "Platform"}
        assert json.loads((tmp_path / "teams" / "t1.json").read_text())["name"] == "Platform"

    @pytest.mark.asyncio
    async def test_upsert_requires_id(self, tmp_path: Path):
        with pytest.raises(StorageIOError):
            await LocalDocumentClient(tmp_path).upsert_item("teams", {"name": "x"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("item_id", ["../escape", ".hidden", "a/b"])
    async def test_unsafe_ids_rejected(self, tmp_path: Path, item_id: str):
        with pytest.raises(StorageIOError):
            await LocalDocumentClient(tmp_path).read_item("teams", item_id)

    @pytest.mark.asyncio
    async def test_corrupt_document(self, tmp_path: Path):
        (tmp_path / "teams").mkdir()
        (tmp_path / "teams" / "t1.json").write_text("{not json")

        with pytest.raises(StorageIOError):
            await LocalDocumentClient(tmp_path).read_item("teams", "t1")


class TestTeamStore:
    @pytest.mark.asyncio
    async def test_save_and_get(self, team_store: TeamStore):
        await team_store.save_team(make_team(members=[(BOB, "editor", "active")]))

        team = await team_store.get_team({"_id": TEAM_ID})

        assert team is not None
        assert team.get_active_member(BOB).role == Role.EDITOR

    @pytest.mark.asyncio
    async def test_get_missing(self, team_store: TeamStore):
        assert await team_store.get_team(TEAM_ID) is None
        assert await team_store.get_team(None) is None

    @pytest.mark.asyncio
    async def test_get_active_team_skips_archived(self, team_store: TeamStore):
        team = make_team()
        team.is_archived = True
        await team_store.save_team(team)

        assert await team_store.get_team(TEAM_ID) is not None
        assert await team_store.get_active_team(TEAM_ID) is None

    @pytest.mark.asyncio
    async def test_get_teams_for_user(self, team_store: TeamStore):
        await team_store.save_team(make_team(members=[(BOB, "viewer", "active")]))
        await team_store.save_team(
            make_team(members=[(BOB, "viewer", "pending")], owner=CAROL, team_id=OTHER_TEAM)
        )

        bob_teams = await team_store.get_teams_for_user(BOB)
        carol_teams = await team_store.get_teams_for_user(CAROL)

        assert [str(t.team_id) for t in bob_teams] == [TEAM_ID]
        assert [str(t.team_id) for t in carol_teams] == [OTHER_TEAM]

    @pytest.mark.asyncio
    async def test_activate_pending_members(self, team_store: TeamStore):
        await team_store.save_team(
            make_team(members=[(BOB, "viewer", "pending"), (CAROL, "editor", "suspended")])
        )

        count = await team_store.activate_pending_members(TEAM_ID, OWNER)
        team = await team_store.get_team(TEAM_ID)

        assert count == 1
        assert team.get_member(BOB).status == MemberStatus.ACTIVE
        assert team.get_member(BOB).joined_at is not None
        assert team.get_member(CAROL).status == MemberStatus.SUSPENDED

    @pytest.mark.asyncio
    async def test_activate_requires_owner(self, team_store: TeamStore):
        await team_store.save_team(make_team(members=[(BOB, "admin", "active")]))

        with pytest.raises(AccessDeniedError):
            await team_store.activate_pending_members(TEAM_ID, BOB)

    @pytest.mark.asyncio
    async def test_activate_missing_team(self, team_store: TeamStore):
        with pytest.raises(TeamNotFoundError):
            await team_store.activate_pending_members(TEAM_ID, OWNER)

    @pytest.mark.asyncio
    async def test_activate_single_member(self, team_store: TeamStore):
        await team_store.save_team(make_team(members=[(CAROL, "editor", "suspended")]))

        assert await team_store.activate_member(TEAM_ID, CAROL, OWNER) is True
        assert await team_store.activate_member(TEAM_ID, CAROL, OWNER) is False
        team = await team_store.get_team(TEAM_ID)
        assert team.get_active_member(CAROL) is not None
