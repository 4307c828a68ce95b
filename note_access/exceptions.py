"""
Custom exceptions for note access resolution.

A denied access check is a normal AccessDecision value, not an exception.
These exceptions cover malformed input, explicit enforcement, and the
team repository.
"""


class NoteAccessError(Exception):
    """Base exception for all note access errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputError(NoteAccessError):
    """Raised when the resolver receives malformed input (caller bug)."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid input for {field}: {reason}", {"field": field, "reason": reason})
        self.field = field
        self.reason = reason


class AccessDeniedError(NoteAccessError):
    """User does not have the permission required for the operation."""

    def __init__(self, subject_id: str, note_id: str | None, reason: str):
        details = {"subject_id": subject_id, "note_id": note_id, "reason": reason}
        target = f"note {note_id}" if note_id else "resource"
        super().__init__(
            f"Access denied for user {subject_id} on {target}: {reason}",
            details,
        )
        self.subject_id = subject_id
        self.note_id = note_id
        self.reason = reason


class TeamNotFoundError(NoteAccessError):
    """Raised when a team does not exist or is no longer active."""

    def __init__(self, team_id: str):
        super().__init__(f"Team not found: {team_id}", {"team_id": team_id})
        self.team_id = team_id


class MemberNotFoundError(NoteAccessError):
    """Raised when a user is not a member of a team."""

    def __init__(self, user_id: str, team_id: str | None = None):
        details = {"user_id": user_id}
        if team_id:
            details["team_id"] = team_id
        super().__init__(f"Member not found: {user_id}", details)
        self.user_id = user_id
        self.team_id = team_id


class MemberExistsError(NoteAccessError):
    """Raised when adding a user who is already a team member."""

    def __init__(self, user_id: str, team_id: str | None = None):
        details = {"user_id": user_id}
        if team_id:
            details["team_id"] = team_id
        super().__init__(f"User is already a member of this team: {user_id}", details)
        self.user_id = user_id
        self.team_id = team_id


class StorageIOError(NoteAccessError):
    """Raised when a storage I/O operation fails."""

    def __init__(self, operation: str, path: str | None = None, cause: Exception | None = None):
        details = {"operation": operation}
        if path:
            details["path"] = path
        if cause:
            details["cause"] = str(cause)
        message = f"Storage I/O error during {operation}"
        if path:
            message += f": {path}"
        super().__init__(message, details)
        self.operation = operation
        self.path = path
        self.cause = cause


class ConfigurationError(NoteAccessError):
    """Raised when a configuration value is invalid."""

    def __init__(self, key: str, reason: str, value: str | None = None):
        details = {"key": key, "reason": reason}
        if value is not None:
            details["value"] = value
        super().__init__(f"Invalid configuration for {key}: {reason}", details)
        self.key = key
        self.reason = reason
        self.value = value
