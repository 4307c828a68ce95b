"""Tests for the note and team data model."""

import pytest
from factories import OWNER, TEAM_ID, make_note, make_team, wrap_document, wrap_object_id

from note_access import (
    Collaborator,
    MemberExistsError,
    MemberNotFoundError,
    MemberPermissions,
    MemberStatus,
    Note,
    Role,
    Team,
    TeamMember,
)

BOB = "665f1c2a9b1e8a0012a0a0b2"
CAROL = "665f1c2a9b1e8a0012a0a0c3"


class TestRole:
    def test_levels_are_ordered(self):
        levels = [r.level for r in (Role.VIEWER, Role.EDITOR, Role.ADMIN, Role.OWNER)]
        assert levels == [1, 2, 3, 4]

    @pytest.mark.parametrize("role", list(Role))
    def test_from_level(self, role):
        assert Role.from_level(role.level) == role

    def test_from_level_out_of_range(self):
        with pytest.raises(ValueError):
            Role.from_level(0)


class TestCollaborator:
    def test_legacy_owner_permission_reads_as_editor(self):
        collaborator = Collaborator.from_dict({"userId": BOB, "permission": "owner"})
        assert collaborator.permission == Role.EDITOR

    def test_string_permission_is_parsed(self):
        assert Collaborator(user_id=BOB, permission="viewer").permission == Role.VIEWER

    def test_default_permission(self):
        assert Collaborator.from_dict({"userId": BOB}).permission == Role.VIEWER


class TestNote:
    def test_add_collaborator(self):
        note = make_note()

        note.add_collaborator(BOB, Role.EDITOR)

        assert note.get_collaborator(BOB).permission == Role.EDITOR
        assert note.get_collaborator(BOB).added_at is not None

    def test_add_collaborator_updates_existing(self):
        note = make_note(collaborators=[(wrap_object_id(BOB), "viewer")])

        note.add_collaborator(BOB, "editor")

        assert len(note.collaborators) == 1
        assert note.collaborators[0].permission == Role.EDITOR

    def test_add_collaborator_caps_at_editor(self):
        note = make_note()

        note.add_collaborator(BOB, Role.ADMIN)

        assert note.get_collaborator(BOB).permission == Role.EDITOR

    def test_remove_collaborator(self):
        note = make_note(collaborators=[(wrap_document(BOB), "viewer"), (CAROL, "editor")])

        assert note.remove_collaborator(BOB) is True
        assert note.get_collaborator(BOB) is None
        assert note.get_collaborator(CAROL) is not None
        assert note.remove_collaborator(BOB) is False

    def test_from_dict_stored_document(self):
        note = Note.from_dict(
            {
                "_id": "n1",
                "userId": OWNER,
                "title": "Roadmap",
                "isTeamNote": True,
                "teamId": TEAM_ID,
                "collaborators": [
                    {"userId": BOB, "permission": "editor", "addedAt": "2024-06-01T10:00:00+00:00"}
                ],
            }
        )

        assert note.owner_id == OWNER
        assert note.is_team_note is True
        assert note.team_id == TEAM_ID
        assert note.collaborators[0].permission == Role.EDITOR
        assert note.collaborators[0].added_at.year == 2024

    @pytest.mark.parametrize("key", ["isTeamResource", "is_team_resource"])
    def test_from_dict_team_resource_flag(self, key):
        note = Note.from_dict({"ownerId": OWNER, key: True, "teamId": TEAM_ID})

        assert note.owner_id == OWNER
        assert note.is_team_note is True

    def test_to_dict_normalizes_references(self):
        note = make_note(owner=wrap_document(OWNER), collaborators=[(wrap_object_id(BOB), "viewer")])

        data = note.to_dict()

        assert data["userId"] == OWNER
        assert data["collaborators"][0]["userId"] == BOB


class TestMemberPermissions:
    @pytest.mark.parametrize(
        "role,edit,manage",
        [
            (Role.VIEWER, False, False),
            (Role.EDITOR, True, False),
            (Role.ADMIN, True, True),
            (Role.OWNER, True, True),
        ],
    )
    def test_for_role(self, role, edit, manage):
        permissions = MemberPermissions.for_role(role)

        assert permissions.can_create_notes is True
        assert permissions.can_edit_notes is edit
        assert permissions.can_delete_notes is manage
        assert permissions.can_invite_members is manage
        assert permissions.can_manage_team is manage


class TestTeamMember:
    def test_defaults(self):
        member = TeamMember(user_id=BOB)

        assert member.role == Role.VIEWER
        assert member.status == MemberStatus.PENDING
        assert member.is_active is False
        assert member.permissions == MemberPermissions.for_role(Role.VIEWER)

    def test_from_dict_keeps_stored_permissions(self):
        member = TeamMember.from_dict(
            {
                "userId": BOB,
                "role": "viewer",
                "status": "active",
                "permissions": {"canManageTeam": True},
            }
        )

        assert member.permissions.can_manage_team is True

    def test_activate(self):
        member = TeamMember(user_id=BOB, status="pending")

        assert member.activate() is True
        assert member.is_active is True
        assert member.joined_at is not None
        assert member.activate() is False


class TestTeam:
    def test_get_member_any_reference(self):
        team = make_team(members=[(wrap_document(BOB), "editor", "active")])

        assert team.get_member(wrap_object_id(BOB)) is not None
        assert team.get_member(CAROL) is None

    def test_get_active_member_skips_inactive(self):
        team = make_team(members=[(BOB, "editor", "suspended")])

        assert team.get_member(BOB) is not None
        assert team.get_active_member(BOB) is None

    def test_get_active_member_with_duplicate_rows(self):
        team = make_team(members=[(BOB, "viewer", "pending"), (BOB, "admin", "active")])

        assert team.get_member(BOB).status == MemberStatus.PENDING
        assert team.get_active_member(BOB).role == Role.ADMIN

    def test_add_member_joins_active(self):
        team = make_team()

        member = team.add_member(BOB, "admin", invited_by=OWNER)

        assert member.is_active is True
        assert member.joined_at is not None
        assert member.permissions.can_manage_team is True
        assert team.member_count == 1

    def test_add_existing_member_raises(self):
        team = make_team(members=[(BOB, "viewer", "pending")])

        with pytest.raises(MemberExistsError):
            team.add_member(wrap_document(BOB))

    def test_remove_member(self):
        team = make_team(members=[(BOB, "viewer", "active")])

        assert team.remove_member(wrap_object_id(BOB)) is True
        assert team.members == []
        assert team.remove_member(BOB) is False

    def test_update_member_role_resets_permissions(self):
        team = make_team(members=[(BOB, "admin", "active")])

        member = team.update_member_role(BOB, "viewer")

        assert member.role == Role.VIEWER
        assert member.permissions.can_edit_notes is False
        assert member.permissions.can_manage_team is False

    def test_update_missing_member_raises(self):
        with pytest.raises(MemberNotFoundError):
            make_team().update_member_role(BOB, "editor")

    def test_activate_pending_members(self):
        team = make_team(
            members=[
                (BOB, "viewer", "pending"),
                (CAROL, "editor", "suspended"),
                ("665f1c2a9b1e8a0012a0a0d4", "editor", "active"),
            ]
        )

        assert team.activate_pending_members() == 1
        assert team.get_member(BOB).is_active is True
        assert team.get_member(CAROL).status == MemberStatus.SUSPENDED
        assert team.member_count == 2

    def test_activate_missing_member_raises(self):
        with pytest.raises(MemberNotFoundError):
            make_team().activate_member(BOB)

    def test_roundtrip(self):
        team = make_team(members=[(BOB, "editor", "active"), (CAROL, "viewer", "pending")])

        restored = Team.from_dict(team.to_dict())

        assert restored.team_id == TEAM_ID
        assert restored.owner_id == OWNER
        assert [m.role for m in restored.members] == [Role.EDITOR, Role.VIEWER]
        assert restored.get_active_member(BOB) is not None
        assert restored.get_active_member(CAROL) is None
