"""Access control for notes."""

from collections.abc import Mapping
from typing import Any

from ..config import AccessConfig
from ..exceptions import AccessDeniedError
from ..id_utils import normalize_id
from ..logging_utils import AccessLoggerAdapter, get_access_logger
from ..membership.store import TeamStore
from ..protocol import Note, Role, Team
from .permissions import AccessDecision
from .resolver import coerce_note, resolve_access

logger = get_access_logger("controller")


class AccessController:
    """Centralized access control for notes.

    Wraps the pure resolver with the configured tie-break, logging,
    enforcement, and (optionally) loading of the note's team.
    """

    def __init__(self, config: AccessConfig | None = None, team_store: TeamStore | None = None):
        """Initialize the controller.

        Args:
            config: Access configuration (defaults apply when None)
            team_store: Store used by the *_for_note methods to load teams
        """
        self.config = config or AccessConfig()
        self.team_store = team_store

    def resolve(
        self,
        subject_id: Any,
        note: Note | Mapping[str, Any],
        team: Team | Mapping[str, Any] | None = None,
    ) -> AccessDecision:
        """Resolve the user's effective access on a note."""
        resolved_note = coerce_note(note)
        decision = resolve_access(
            subject_id, resolved_note, team, tie_break=self.config.tie_break
        )
        self._log(subject_id, resolved_note).debug(
            "Resolved access",
            extra={
                "role": decision.role.value if decision.role else None,
                "access_source": decision.access_source.value,
            },
        )
        return decision

    def require(
        self,
        subject_id: Any,
        note: Note | Mapping[str, Any],
        team: Team | Mapping[str, Any] | None = None,
        required: Role = Role.VIEWER,
    ) -> AccessDecision:
        """Resolve access and raise unless the required level is reached.

        Raises:
            AccessDeniedError: the user does not reach the required level
        """
        resolved_note = coerce_note(note)
        decision = self.resolve(subject_id, resolved_note, team)
        self._enforce(subject_id, resolved_note, decision, required)
        return decision

    async def resolve_for_note(
        self,
        subject_id: Any,
        note: Note | Mapping[str, Any],
    ) -> AccessDecision:
        """Load the note's team (if any) through the store, then resolve."""
        resolved_note = coerce_note(note)
        team = await self._load_team(resolved_note)
        return self.resolve(subject_id, resolved_note, team)

    async def require_for_note(
        self,
        subject_id: Any,
        note: Note | Mapping[str, Any],
        required: Role = Role.VIEWER,
    ) -> AccessDecision:
        """Async counterpart of require() that loads the team first."""
        resolved_note = coerce_note(note)
        decision = await self.resolve_for_note(subject_id, resolved_note)
        self._enforce(subject_id, resolved_note, decision, required)
        return decision

    async def _load_team(self, note: Note) -> Team | None:
        if not note.is_team_note or normalize_id(note.team_id) is None:
            return None
        if self.team_store is None:
            logger.warning(
                "No team store configured; team roles ignored",
                extra={"note_id": normalize_id(note.note_id)},
            )
            return None
        return await self.team_store.get_team(note.team_id)

    def _enforce(
        self,
        subject_id: Any,
        note: Note,
        decision: AccessDecision,
        required: Role,
    ) -> None:
        if decision.permits(required):
            return
        reason = "no_access" if not decision.allowed else f"requires_{required.value}"
        self._log(subject_id, note).info("Access denied: %s", reason)
        raise AccessDeniedError(
            str(normalize_id(subject_id)),
            normalize_id(note.note_id),
            reason,
        )

    def _log(self, subject_id: Any, note: Note) -> AccessLoggerAdapter:
        return AccessLoggerAdapter(
            logger,
            {"subject_id": normalize_id(subject_id), "note_id": normalize_id(note.note_id)},
        )
