"""Access control module for notes."""

from .controller import AccessController
from .permissions import AccessDecision
from .resolver import can_access_team, can_manage_team, has_access, resolve_access

__all__ = [
    "AccessController",
    "AccessDecision",
    "can_access_team",
    "can_manage_team",
    "has_access",
    "resolve_access",
]
