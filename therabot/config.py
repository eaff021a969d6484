"""
Runtime configuration for TheraBot.

Settings are read from the environment once and shared as a singleton.
"""

import logging
import os
from pathlib import Path
from typing import Optional

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_KNOWLEDGE_PATH = PACKAGE_ROOT / "knowledge" / "diseases.yaml"


class Settings:
    """Configuration for the prescription service."""

    def __init__(self):
        self.host = os.environ.get("THERABOT_HOST", "0.0.0.0")
        self.port = os.environ.get("THERABOT_PORT", "3003")
        self.knowledge_path = Path(
            os.environ.get("THERABOT_KNOWLEDGE_PATH", str(DEFAULT_KNOWLEDGE_PATH))
        )
        self.assets_dir = Path(os.environ.get("THERABOT_ASSETS_DIR", "assets"))
        self.log_level = os.environ.get("THERABOT_LOG_LEVEL", "INFO").upper()

    @property
    def port_number(self) -> int:
        """Port as an integer."""
        return int(self.port)

    def validate(self) -> None:
        """Raise error if not properly configured."""
        try:
            port = int(self.port)
        except ValueError:
            raise ValueError(f"THERABOT_PORT must be an integer, got {self.port!r}") from None
        if not 0 < port < 65536:
            raise ValueError(f"THERABOT_PORT out of range: {port}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown THERABOT_LOG_LEVEL: {self.log_level!r}")


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the service settings (singleton)."""
    global _settings
    if _settings is None:
        settings = Settings()
        settings.validate()
        _settings = settings
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
