"""
Core types for note access resolution.

Defines roles, membership status, notes, collaborators and teams as
they are stored by the note application. Stored documents use camelCase
keys; from_dict accepts snake_case keys as well.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from .exceptions import MemberExistsError, MemberNotFoundError
from .id_utils import normalize_id, same_id

# =============================================================================
# Roles and Status
# =============================================================================


class Role(Enum):
    """Permission levels, ordered viewer < editor < admin < owner."""

    VIEWER = "viewer"
    EDITOR = "editor"
    ADMIN = "admin"
    OWNER = "owner"

    @property
    def level(self) -> int:
        """Numeric rank used to merge grants."""
        return ROLE_LEVELS[self]

    @classmethod
    def from_level(cls, level: int) -> "Role":
        """Map a numeric level back to its role label."""
        for role, role_level in ROLE_LEVELS.items():
            if role_level == level:
                return role
        raise ValueError(f"No role for permission level {level}")


ROLE_LEVELS: dict[Role, int] = {
    Role.VIEWER: 1,
    Role.EDITOR: 2,
    Role.ADMIN: 3,
    Role.OWNER: 4,
}

# Direct collaborator grants never go above editor
COLLABORATOR_ROLES: frozenset[Role] = frozenset({Role.VIEWER, Role.EDITOR})


class MemberStatus(Enum):
    """Team membership status. Only active members get team access."""

    ACTIVE = "active"
    PENDING = "pending"
    SUSPENDED = "suspended"


class AccessSource(Enum):
    """Which grant path produced the winning permission level."""

    OWNER = "owner"
    DIRECT_SHARE = "direct-share"
    TEAM = "team"
    NONE = "none"


def _parse_datetime(raw: Any) -> datetime | None:
    if not raw:
        return None
    return datetime.fromisoformat(raw) if isinstance(raw, str) else raw


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


# =============================================================================
# Note Types
# =============================================================================


@dataclass
class Collaborator:
    """Per-note grant for a single user."""

    user_id: Any
    permission: Role = Role.VIEWER
    added_at: datetime | None = None

    def __post_init__(self) -> None:
        if isinstance(self.permission, str):
            self.permission = parse_collaborator_permission(self.permission)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "userId": normalize_id(self.user_id),
            "permission": self.permission.value,
            "addedAt": self.added_at.isoformat() if self.added_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Collaborator":
        """Create from dictionary."""
        return cls(
            user_id=_pick(data, "userId", "user_id"),
            permission=parse_collaborator_permission(data.get("permission", "viewer")),
            added_at=_parse_datetime(_pick(data, "addedAt", "added_at")),
        )


def parse_collaborator_permission(value: str | Role) -> Role:
    """Parse a stored collaborator permission.

    Legacy documents may carry "owner" as a collaborator permission; the
    owner is decided by the note's owner_id alone, so it reads as editor.
    """
    role = value if isinstance(value, Role) else Role(value)
    if role in COLLABORATOR_ROLES:
        return role
    return Role.EDITOR


@dataclass
class Note:
    """The access-relevant attributes of a note."""

    note_id: Any
    owner_id: Any
    title: str = ""
    is_team_note: bool = False
    team_id: Any = None
    collaborators: list[Collaborator] = field(default_factory=list)

    def get_collaborator(self, user_id: Any) -> Collaborator | None:
        """Find a collaborator entry by user reference."""
        for collaborator in self.collaborators:
            if same_id(collaborator.user_id, user_id):
                return collaborator
        return None

    def add_collaborator(self, user_id: Any, permission: Role | str = Role.VIEWER) -> Collaborator:
        """Grant or update a collaborator permission."""
        role = parse_collaborator_permission(permission)
        existing = self.get_collaborator(user_id)
        if existing is not None:
            existing.permission = role
            return existing
        collaborator = Collaborator(user_id=user_id, permission=role, added_at=datetime.now(UTC))
        self.collaborators.append(collaborator)
        return collaborator

    def remove_collaborator(self, user_id: Any) -> bool:
        """Revoke a collaborator grant. Returns True if one was removed."""
        before = len(self.collaborators)
        self.collaborators = [c for c in self.collaborators if not same_id(c.user_id, user_id)]
        return len(self.collaborators) != before

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "_id": normalize_id(self.note_id),
            "userId": normalize_id(self.owner_id),
            "title": self.title,
            "isTeamNote": self.is_team_note,
            "teamId": normalize_id(self.team_id),
            "collaborators": [c.to_dict() for c in self.collaborators],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Note":
        """Create from dictionary."""
        return cls(
            note_id=_pick(data, "_id", "id", "note_id"),
            owner_id=_pick(data, "userId", "owner_id", "ownerId"),
            title=data.get("title", ""),
            is_team_note=bool(
                _pick(
                    data,
                    "isTeamNote",
                    "is_team_note",
                    "isTeamResource",
                    "is_team_resource",
                    default=False,
                )
            ),
            team_id=_pick(data, "teamId", "team_id"),
            collaborators=[Collaborator.from_dict(c) for c in data.get("collaborators") or []],
        )


# =============================================================================
# Team Types
# =============================================================================


@dataclass
class MemberPermissions:
    """Capability flags stored on each team member."""

    can_create_notes: bool = True
    can_edit_notes: bool = True
    can_delete_notes: bool = False
    can_invite_members: bool = False
    can_manage_team: bool = False

    @classmethod
    def for_role(cls, role: Role) -> "MemberPermissions":
        """Derive the default flags for a team role."""
        privileged = role in (Role.OWNER, Role.ADMIN)
        return cls(
            can_create_notes=True,
            can_edit_notes=role != Role.VIEWER,
            can_delete_notes=privileged,
            can_invite_members=privileged,
            can_manage_team=privileged,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "canCreateNotes": self.can_create_notes,
            "canEditNotes": self.can_edit_notes,
            "canDeleteNotes": self.can_delete_notes,
            "canInviteMembers": self.can_invite_members,
            "canManageTeam": self.can_manage_team,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MemberPermissions":
        """Create from dictionary."""
        return cls(
            can_create_notes=bool(_pick(data, "canCreateNotes", "can_create_notes", default=True)),
            can_edit_notes=bool(_pick(data, "canEditNotes", "can_edit_notes", default=True)),
            can_delete_notes=bool(_pick(data, "canDeleteNotes", "can_delete_notes", default=False)),
            can_invite_members=bool(
                _pick(data, "canInviteMembers", "can_invite_members", default=False)
            ),
            can_manage_team=bool(_pick(data, "canManageTeam", "can_manage_team", default=False)),
        )


@dataclass
class TeamMember:
    """A user's membership within a team."""

    user_id: Any
    role: Role = Role.VIEWER
    status: MemberStatus = MemberStatus.PENDING
    invited_by: Any = None
    invited_at: datetime | None = None
    joined_at: datetime | None = None
    permissions: MemberPermissions | None = None

    def __post_init__(self) -> None:
        if isinstance(self.role, str):
            self.role = Role(self.role)
        if isinstance(self.status, str):
            self.status = MemberStatus(self.status)
        if self.permissions is None:
            self.permissions = MemberPermissions.for_role(self.role)

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.ACTIVE

    def activate(self) -> bool:
        """Mark the member active. Returns False if already active."""
        if self.is_active:
            return False
        self.status = MemberStatus.ACTIVE
        self.joined_at = datetime.now(UTC)
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "userId": normalize_id(self.user_id),
            "role": self.role.value,
            "status": self.status.value,
            "invitedBy": normalize_id(self.invited_by),
            "invitedAt": self.invited_at.isoformat() if self.invited_at else None,
            "joinedAt": self.joined_at.isoformat() if self.joined_at else None,
            "permissions": self.permissions.to_dict() if self.permissions else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TeamMember":
        """Create from dictionary."""
        permissions_raw = data.get("permissions")
        return cls(
            user_id=_pick(data, "userId", "user_id"),
            role=Role(data.get("role", "viewer")),
            status=MemberStatus(data.get("status", "pending")),
            invited_by=_pick(data, "invitedBy", "invited_by"),
            invited_at=_parse_datetime(_pick(data, "invitedAt", "invited_at")),
            joined_at=_parse_datetime(_pick(data, "joinedAt", "joined_at")),
            permissions=MemberPermissions.from_dict(permissions_raw) if permissions_raw else None,
        )


@dataclass
class Team:
    """Team workspace that can own notes."""

    team_id: Any
    owner_id: Any
    name: str = ""
    members: list[TeamMember] = field(default_factory=list)
    description: str = ""
    slug: str | None = None
    is_active: bool = True
    is_archived: bool = False

    def get_member(self, user_id: Any) -> TeamMember | None:
        """Find a member by user reference, whatever their status."""
        for member in self.members:
            if same_id(member.user_id, user_id):
                return member
        return None

    def get_active_member(self, user_id: Any) -> TeamMember | None:
        """Find the active entry for a user reference, skipping stale rows."""
        for member in self.members:
            if member.is_active and same_id(member.user_id, user_id):
                return member
        return None

    def active_members(self) -> list[TeamMember]:
        return [m for m in self.members if m.is_active]

    @property
    def member_count(self) -> int:
        return len(self.active_members())

    def add_member(
        self,
        user_id: Any,
        role: Role | str = Role.VIEWER,
        invited_by: Any = None,
    ) -> TeamMember:
        """Add a member. New members join active immediately."""
        if self.get_member(user_id) is not None:
            raise MemberExistsError(str(normalize_id(user_id)), normalize_id(self.team_id))

        role = Role(role) if isinstance(role, str) else role
        now = datetime.now(UTC)
        member = TeamMember(
            user_id=user_id,
            role=role,
            status=MemberStatus.ACTIVE,
            invited_by=invited_by,
            invited_at=now,
            joined_at=now,
            permissions=MemberPermissions.for_role(role),
        )
        self.members.append(member)
        return member

    def remove_member(self, user_id: Any) -> bool:
        """Remove a member. Returns True if one was removed."""
        before = len(self.members)
        self.members = [m for m in self.members if not same_id(m.user_id, user_id)]
        return len(self.members) != before

    def update_member_role(self, user_id: Any, role: Role | str) -> TeamMember:
        """Change a member's role and reset their permission flags."""
        member = self.get_member(user_id)
        if member is None:
            raise MemberNotFoundError(str(normalize_id(user_id)), normalize_id(self.team_id))

        member.role = Role(role) if isinstance(role, str) else role
        member.permissions = MemberPermissions.for_role(member.role)
        return member

    def activate_member(self, user_id: Any) -> bool:
        """Activate one member. Returns True if their status changed."""
        member = self.get_member(user_id)
        if member is None:
            raise MemberNotFoundError(str(normalize_id(user_id)), normalize_id(self.team_id))
        return member.activate()

    def activate_pending_members(self) -> int:
        """Activate every pending member. Suspended members are left alone."""
        activated = 0
        for member in self.members:
            if member.status == MemberStatus.PENDING:
                member.activate()
                activated += 1
        return activated

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "_id": normalize_id(self.team_id),
            "ownerId": normalize_id(self.owner_id),
            "name": self.name,
            "description": self.description,
            "slug": self.slug,
            "members": [m.to_dict() for m in self.members],
            "isActive": self.is_active,
            "isArchived": self.is_archived,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Team":
        """Create from dictionary."""
        return cls(
            team_id=_pick(data, "_id", "id", "team_id"),
            owner_id=_pick(data, "ownerId", "owner_id"),
            name=data.get("name", ""),
            members=[TeamMember.from_dict(m) for m in data.get("members") or []],
            description=data.get("description") or "",
            slug=data.get("slug"),
            is_active=bool(_pick(data, "isActive", "is_active", default=True)),
            is_archived=bool(_pick(data, "isArchived", "is_archived", default=False)),
        )
