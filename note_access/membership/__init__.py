"""Team membership storage."""

from .store import TEAMS_CONTAINER, DocumentClientProtocol, TeamStore

__all__ = ["DocumentClientProtocol", "TeamStore", "TEAMS_CONTAINER"]
