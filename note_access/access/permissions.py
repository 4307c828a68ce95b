"""Decision types for access resolution."""

from dataclasses import dataclass
from typing import Any

from ..protocol import AccessSource, Role

# Capability thresholds on the numeric permission level
EDIT_LEVEL = Role.EDITOR.level
SHARE_LEVEL = Role.EDITOR.level
DELETE_LEVEL = Role.ADMIN.level


@dataclass(frozen=True)
class AccessDecision:
    """Effective access of one user on one note.

    A denied decision is a normal value: access_source is NONE, role is
    None and every capability flag is False.
    """

    role: Role | None
    can_edit: bool
    can_share: bool
    can_delete: bool
    access_source: AccessSource
    team_role: Role | None = None
    collaborator_role: Role | None = None

    @property
    def allowed(self) -> bool:
        return self.access_source != AccessSource.NONE

    @property
    def is_owner(self) -> bool:
        return self.access_source == AccessSource.OWNER

    @property
    def level(self) -> int:
        return self.role.level if self.role is not None else 0

    def permits(self, required: Role) -> bool:
        """Check whether the effective level reaches the required role."""
        return self.allowed and self.level >= required.level

    @classmethod
    def for_owner(cls) -> "AccessDecision":
        return cls(
            role=Role.OWNER,
            can_edit=True,
            can_share=True,
            can_delete=True,
            access_source=AccessSource.OWNER,
        )

    @classmethod
    def for_level(
        cls,
        level: int,
        source: AccessSource,
        team_role: Role | None = None,
        collaborator_role: Role | None = None,
    ) -> "AccessDecision":
        """Build a granted decision; capabilities follow the level only."""
        return cls(
            role=Role.from_level(level),
            can_edit=level >= EDIT_LEVEL,
            can_share=level >= SHARE_LEVEL,
            can_delete=level >= DELETE_LEVEL,
            access_source=source,
            team_role=team_role,
            collaborator_role=collaborator_role,
        )

    @classmethod
    def denied(
        cls,
        team_role: Role | None = None,
        collaborator_role: Role | None = None,
    ) -> "AccessDecision":
        return cls(
            role=None,
            can_edit=False,
            can_share=False,
            can_delete=False,
            access_source=AccessSource.NONE,
            team_role=team_role,
            collaborator_role=collaborator_role,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the shape the permissions endpoint returns."""
        role = self.role.value if self.role else None
        team_role = self.team_role.value if self.team_role else None
        collaborator_role = self.collaborator_role.value if self.collaborator_role else None
        return {
            "role": role,
            "canEdit": self.can_edit,
            "canShare": self.can_share,
            "canDelete": self.can_delete,
            "isOwner": self.is_owner,
            "accessSource": self.access_source.value,
            "teamRole": team_role,
            "collaboratorRole": collaborator_role,
            "permissionDetails": {
                "hasTeamAccess": team_role is not None,
                "hasDirectShare": collaborator_role is not None,
                "effectivePermission": role,
                "teamPermission": team_role,
                "directSharePermission": collaborator_role,
            },
        }
