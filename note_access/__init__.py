"""
Note Access

Access resolution for a multi-tenant note application.

A user's access to a note comes from owning it, a direct collaborator
grant, or an active role in the team that owns it. The highest
permission level wins.

Usage:

    >>> from note_access import Note, Team, resolve_access
    >>> note = Note.from_dict(note_document)
    >>> team = Team.from_dict(team_document) if note.is_team_note else None
    >>> decision = resolve_access(user_id, note, team)
    >>> if not decision.allowed:
    ...     ...  # respond 403
    >>> decision.to_dict()
    {'role': 'editor', 'canEdit': True, 'canShare': True, 'canDelete': False, ...}

Loading teams from a document store:

    from note_access import AccessConfig, AccessController, Role, TeamStore
    from note_access.local import LocalDocumentClient

    config = AccessConfig.from_env()
    controller = AccessController(config, TeamStore(LocalDocumentClient(config.data_dir)))
    decision = await controller.require_for_note(user_id, note, Role.EDITOR)
"""

# Access resolution
from .access import (
    AccessController,
    AccessDecision,
    can_access_team,
    can_manage_team,
    has_access,
    resolve_access,
)

# Configuration
from .config import AccessConfig

# Exceptions
from .exceptions import (
    AccessDeniedError,
    ConfigurationError,
    InvalidInputError,
    MemberExistsError,
    MemberNotFoundError,
    NoteAccessError,
    StorageIOError,
    TeamNotFoundError,
)

# Identifier handling
from .id_utils import normalize_id, same_id

# Storage
from .membership import DocumentClientProtocol, TeamStore

# Data model
from .protocol import (
    AccessSource,
    Collaborator,
    MemberPermissions,
    MemberStatus,
    Note,
    Role,
    Team,
    TeamMember,
)

__all__ = [
    # Access
    "AccessController",
    "AccessDecision",
    "resolve_access",
    "has_access",
    "can_access_team",
    "can_manage_team",
    # Config
    "AccessConfig",
    # Identifiers
    "normalize_id",
    "same_id",
    # Storage
    "DocumentClientProtocol",
    "TeamStore",
    # Data model
    "AccessSource",
    "Collaborator",
    "MemberPermissions",
    "MemberStatus",
    "Note",
    "Role",
    "Team",
    "TeamMember",
    # Exceptions
    "NoteAccessError",
    "InvalidInputError",
    "AccessDeniedError",
    "TeamNotFoundError",
    "MemberNotFoundError",
    "MemberExistsError",
    "StorageIOError",
    "ConfigurationError",
]

__version__ = "0.1.0"
