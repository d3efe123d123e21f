"""Configuration management for bookcircle.

Loads configuration from environment variables and provides defaults.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_PAGE_SIZE = 5


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Directory
    page_size: int

    # Acting user for the CLI
    current_user: Optional[str]

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get(
            "BOOKCIRCLE_DB_PATH",
            str(Path.home() / ".bookcircle" / "bookcircle.db"),
        )
        db_path = Path(db_path_str) if db_path_str == ":memory:" else Path(db_path_str).expanduser()

        return cls(
            db_path=db_path,
            page_size=int(os.environ.get("BOOKCIRCLE_PAGE_SIZE", str(DEFAULT_PAGE_SIZE))),
            current_user=os.environ.get("BOOKCIRCLE_USER") or None,
            log_level=os.environ.get("BOOKCIRCLE_LOG_LEVEL", "WARNING").upper(),
        )

    @property
    def is_memory(self) -> bool:
        return str(self.db_path) == ":memory:"

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.page_size < 1:
            errors.append(f"Page size must be at least 1, got {self.page_size}")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown log level: {self.log_level}")

        # Check database directory is writable
        if not self.is_memory and not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
