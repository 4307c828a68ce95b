"""Access resolution for notes.

Single authority for "what can this user do with this note". Access
comes from ownership, a direct collaborator grant, or an active role in
the team that owns the note; the highest permission level wins.
"""

from collections.abc import Mapping
from typing import Any

from ..exceptions import InvalidInputError
from ..id_utils import normalize_id, same_id
from ..protocol import AccessSource, Note, Role, Team
from .permissions import AccessDecision

TIE_BREAK_SOURCES = (AccessSource.TEAM, AccessSource.DIRECT_SHARE)


def coerce_note(note: Note | Mapping[str, Any] | None) -> Note:
    if note is None:
        raise InvalidInputError("note", "note is required")
    if isinstance(note, Mapping):
        return Note.from_dict(dict(note))
    return note


def coerce_team(team: Team | Mapping[str, Any] | None) -> Team | None:
    if team is None or isinstance(team, Team):
        return team
    return Team.from_dict(dict(team))


def collaborator_role(subject_id: str, note: Note) -> Role | None:
    """Direct grant of the subject on the note, if any."""
    collaborator = note.get_collaborator(subject_id)
    return collaborator.permission if collaborator else None


def team_role(subject_id: str, note: Note, team: Team | None) -> Role | None:
    """Role of the subject in the note's team, counting active members only."""
    if not note.is_team_note or team is None:
        return None
    # A team loaded for some other id grants nothing on this note
    if (
        normalize_id(note.team_id) is not None
        and normalize_id(team.team_id) is not None
        and not same_id(note.team_id, team.team_id)
    ):
        return None
    member = team.get_active_member(subject_id)
    return member.role if member else None


def resolve_access(
    subject_id: Any,
    note: Note | Mapping[str, Any],
    team: Team | Mapping[str, Any] | None = None,
    *,
    tie_break: AccessSource = AccessSource.TEAM,
) -> AccessDecision:
    """Compute the effective access decision of a user on a note.

    Args:
        subject_id: User being checked (raw id or populated user reference)
        note: Note, or the stored note document
        team: Team owning the note, if the caller loaded it
        tie_break: Source label reported when collaborator and team levels
            are equal (TEAM or DIRECT_SHARE). Capabilities never depend on it.

    Returns:
        AccessDecision; a denial is returned, not raised

    Raises:
        InvalidInputError: subject_id missing, note missing or without owner
    """
    subject = normalize_id(subject_id)
    if subject is None:
        raise InvalidInputError("subject_id", "subject_id is required")

    resolved_note = coerce_note(note)
    if normalize_id(resolved_note.owner_id) is None:
        raise InvalidInputError("note.owner_id", "note has no owner")

    if tie_break not in TIE_BREAK_SOURCES:
        raise InvalidInputError("tie_break", f"unsupported tie break: {tie_break}")

    # Ownership short-circuits every other grant
    if same_id(subject, resolved_note.owner_id):
        return AccessDecision.for_owner()

    collab = collaborator_role(subject, resolved_note)
    member_role = team_role(subject, resolved_note, coerce_team(team))

    collab_level = collab.level if collab else 0
    team_level = member_role.level if member_role else 0
    final_level = max(collab_level, team_level)

    if final_level == 0:
        return AccessDecision.denied()

    if team_level > collab_level:
        source = AccessSource.TEAM
    elif collab_level > team_level:
        source = AccessSource.DIRECT_SHARE
    else:
        source = tie_break

    return AccessDecision.for_level(
        final_level,
        source,
        team_role=member_role,
        collaborator_role=collab,
    )


def has_access(
    subject_id: Any,
    note: Note | Mapping[str, Any],
    team: Team | Mapping[str, Any] | None = None,
    required: Role = Role.VIEWER,
) -> bool:
    """Check whether the user reaches the required level on the note."""
    return resolve_access(subject_id, note, team).permits(required)


def can_access_team(subject_id: Any, team: Team | Mapping[str, Any]) -> bool:
    """Team owner or active member."""
    resolved = coerce_team(team)
    if resolved is None:
        return False
    if same_id(subject_id, resolved.owner_id):
        return True
    return resolved.get_active_member(subject_id) is not None


def can_manage_team(subject_id: Any, team: Team | Mapping[str, Any]) -> bool:
    """Team owner, or an active member allowed to manage the team."""
    resolved = coerce_team(team)
    if resolved is None:
        return False
    if same_id(subject_id, resolved.owner_id):
        return True
    member = resolved.get_active_member(subject_id)
    return bool(member and member.permissions and member.permissions.can_manage_team)
