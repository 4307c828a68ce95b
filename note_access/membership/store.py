"""Team data storage."""

from typing import Any, Protocol

from ..exceptions import AccessDeniedError, TeamNotFoundError
from ..id_utils import normalize_id, same_id
from ..logging_utils import get_access_logger
from ..protocol import Team

logger = get_access_logger("store")


class DocumentClientProtocol(Protocol):
    """Protocol for document database operations."""

    async def read_item(
        self,
        container_name: str,
        item_id: str,
    ) -> dict[str, Any] | None: ...

    async def list_items(
        self,
        container_name: str,
    ) -> list[dict[str, Any]]: ...

    async def upsert_item(
        self,
        container_name: str,
        item: dict[str, Any],
    ) -> dict[str, Any]: ...


# Container names
TEAMS_CONTAINER = "teams"


class TeamStore:
    """Store for team documents.

    Loads the team a note belongs to so the resolver can take team roles
    into account. The resolver itself never fetches anything.
    """

    def __init__(self, client: DocumentClientProtocol):
        """Initialize team store.

        Args:
            client: Document database client
        """
        self.client = client

    async def get_team(self, team_id: Any) -> Team | None:
        """Get team by ID.

        Args:
            team_id: Team ID (raw or populated reference)

        Returns:
            Team or None if not found
        """
        key = normalize_id(team_id)
        if key is None:
            return None
        result = await self.client.read_item(TEAMS_CONTAINER, key)
        if result:
            return Team.from_dict(result)
        return None

    async def get_active_team(self, team_id: Any) -> Team | None:
        """Get team by ID, ignoring inactive and archived teams."""
        team = await self.get_team(team_id)
        if team is None or not team.is_active or team.is_archived:
            return None
        return team

    async def get_teams_for_user(self, user_id: Any) -> list[Team]:
        """Get all active teams a user owns or is an active member of.

        Args:
            user_id: User ID

        Returns:
            List of teams
        """
        teams = []
        for doc in await self.client.list_items(TEAMS_CONTAINER):
            team = Team.from_dict(doc)
            if not team.is_active or team.is_archived:
                continue
            if same_id(team.owner_id, user_id) or team.get_active_member(user_id):
                teams.append(team)
        return teams

    async def save_team(self, team: Team) -> Team:
        """Create or update a team.

        Args:
            team: Team to save

        Returns:
            The saved team
        """
        doc = team.to_dict()
        doc["_type"] = "team"
        await self.client.upsert_item(TEAMS_CONTAINER, doc)
        return team

    async def activate_pending_members(self, team_id: Any, actor_id: Any) -> int:
        """Activate all pending members of a team.

        Args:
            team_id: Team to update
            actor_id: User performing the change; must own the team

        Returns:
            Number of members activated

        Raises:
            TeamNotFoundError: team missing, inactive or archived
            AccessDeniedError: actor is not the team owner
        """
        team = await self._require_owned_team(team_id, actor_id)

        activated = team.activate_pending_members()
        if activated > 0:
            await self.save_team(team)
        logger.info(
            "Activated %d pending members",
            activated,
            extra={"team_id": normalize_id(team_id), "actor_id": normalize_id(actor_id)},
        )
        return activated

    async def activate_member(self, team_id: Any, user_id: Any, actor_id: Any) -> bool:
        """Activate a single member (pending or suspended).

        Returns:
            True if the member's status changed
        """
        team = await self._require_owned_team(team_id, actor_id)

        changed = team.activate_member(user_id)
        if changed:
            await self.save_team(team)
            logger.info(
                "Activated member %s",
                normalize_id(user_id),
                extra={"team_id": normalize_id(team_id)},
            )
        return changed

    async def _require_owned_team(self, team_id: Any, actor_id: Any) -> Team:
        team = await self.get_active_team(team_id)
        if team is None:
            raise TeamNotFoundError(str(normalize_id(team_id)))
        if not same_id(team.owner_id, actor_id):
            raise AccessDeniedError(
                str(normalize_id(actor_id)),
                None,
                "only the team owner can activate members",
            )
        return team
