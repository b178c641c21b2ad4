"""Configuration management for lifelog."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(levelname)s] %(message)s"


def lifelog_home() -> Path:
    """Per-user data directory (``$LIFELOG_HOME`` or ``~/.lg``)."""
    return Path(os.environ.get("LIFELOG_HOME", Path.home() / ".lg"))


def storage_file() -> Path:
    return lifelog_home() / "storage.json"


def gist_config_file() -> Path:
    return lifelog_home() / "gist_config.json"


def debug_config_file() -> Path:
    return lifelog_home() / "debug_config.json"


@dataclass
class GistConfig:
    """GitHub Gist sync settings."""

    token: str = ""
    gist_id: str | None = None

    @property
    def is_configured(self) -> bool:
        """Sync runs only with both a token and a gist id."""
        return bool(self.token and self.gist_id)

    def save(self, path: Path | None = None) -> None:
        """Save the config to file."""
        path = path or gist_config_file()
        data = {"token": self.token}
        if self.gist_id:
            data["gistId"] = self.gist_id
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2))
        path.chmod(0o600)
        logger.debug("Gist configuration saved")

    @classmethod
    def load(cls, path: Path | None = None) -> "GistConfig":
        """Load the config from file. Missing or unreadable files mean no sync."""
        path = path or gist_config_file()
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
            return cls(token=data.get("token", ""), gist_id=data.get("gistId"))
        except (json.JSONDecodeError, AttributeError) as e:
            logger.warning(f"Failed to load gist config: {e}")
            return cls()


@dataclass
class DebugConfig:
    """Persisted debug logging toggle."""

    enabled: bool = False

    def save(self, path: Path | None = None) -> None:
        path = path or debug_config_file()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({"debugEnabled": self.enabled}, indent=2))

    @classmethod
    def load(cls, path: Path | None = None) -> "DebugConfig":
        path = path or debug_config_file()
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
            return cls(enabled=bool(data.get("debugEnabled", False)))
        except (json.JSONDecodeError, AttributeError):
            return cls()


def configure_logging(debug: bool) -> None:
    """Route log records to stderr; debug records only when enabled."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("lifelog").setLevel(logging.DEBUG if debug else logging.WARNING)
