"""
Configuration for note access resolution.

Settings come from environment variables or the ``access:`` section of
a YAML settings file:

```yaml
access:
  tie_break: team          # or "direct-share"
  data_dir: ~/.note_access/data
  log_level: INFO
  json_logs: false
```
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError
from .protocol import AccessSource

DEFAULT_DATA_DIR = Path.home() / ".note_access" / "data"

TIE_BREAK_CHOICES = {AccessSource.TEAM.value, AccessSource.DIRECT_SHARE.value}


def _parse_tie_break(value: str | AccessSource) -> AccessSource:
    if isinstance(value, AccessSource):
        value = value.value
    normalized = str(value).strip().lower()
    if normalized not in TIE_BREAK_CHOICES:
        raise ConfigurationError(
            "tie_break",
            f"must be one of {sorted(TIE_BREAK_CHOICES)}",
            str(value),
        )
    return AccessSource(normalized)


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "y"}


@dataclass
class AccessConfig:
    """Configuration for access resolution and the local team store."""

    tie_break: AccessSource = AccessSource.TEAM
    data_dir: Path = field(default_factory=lambda: DEFAULT_DATA_DIR)
    log_level: str = "INFO"
    json_logs: bool = False

    def __post_init__(self) -> None:
        self.tie_break = _parse_tie_break(self.tie_break)
        self.data_dir = Path(self.data_dir).expanduser()
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls) -> "AccessConfig":
        """Create config from environment variables."""
        return cls(
            tie_break=os.environ.get("NOTE_ACCESS_TIE_BREAK", AccessSource.TEAM.value),
            data_dir=Path(os.environ.get("NOTE_ACCESS_DATA_DIR", str(DEFAULT_DATA_DIR))),
            log_level=os.environ.get("NOTE_ACCESS_LOG_LEVEL", "INFO"),
            json_logs=_parse_bool(os.environ.get("NOTE_ACCESS_JSON_LOGS", "false")),
        )

    @classmethod
    def from_file(cls, path: Path) -> "AccessConfig":
        """Create config from a YAML settings file.

        A missing file or a missing ``access:`` section gives defaults.
        """
        if not path.exists():
            return cls()

        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError("settings", f"invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError("settings", f"{path} must contain a mapping")

        section = data.get("access") or {}
        if not isinstance(section, dict):
            raise ConfigurationError("access", "section must be a mapping")

        return cls(
            tie_break=section.get("tie_break", AccessSource.TEAM.value),
            data_dir=Path(section.get("data_dir", str(DEFAULT_DATA_DIR))),
            log_level=str(section.get("log_level", "INFO")),
            json_logs=_parse_bool(section.get("json_logs", False)),
        )
