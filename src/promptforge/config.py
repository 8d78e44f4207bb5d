"""Runtime configuration for prompt-forge.

Precedence per setting (highest first):

1. Explicit value (CLI option or keyword argument)
2. Environment variable (``PROMPT_FORGE_DB``, ``PROMPT_FORGE_DATA``,
   ``PROMPT_FORGE_LOG_LEVEL``)
3. Built-in default

Usage::

    config = ServerConfig.resolve(db_path=None, data_path="records.yaml")
    provider = config.create_provider()
"""
from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from promptforge.snapshot.providers import (
    BuiltinSnapshotProvider,
    FileSnapshotProvider,
    SnapshotProvider,
    SqliteSnapshotProvider,
)

logger = logging.getLogger(__name__)

ENV_DB = "PROMPT_FORGE_DB"
ENV_DATA = "PROMPT_FORGE_DATA"
ENV_LOG_LEVEL = "PROMPT_FORGE_LOG_LEVEL"

APP_IDENTIFIER = "com.promptforge.app"
DB_FILENAME = "promptforge.db"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_data_dir(env: Mapping[str, str] | None = None) -> Path:
    """Return the per-user local data directory for the current platform."""
    env = os.environ if env is None else env
    home = Path.home()
    if sys.platform == "win32":
        local = env.get("LOCALAPPDATA")
        return Path(local) if local else home / "AppData" / "Local"
    if sys.platform == "darwin":
        return home / "Library" / "Application Support"
    xdg = env.get("XDG_DATA_HOME")
    return Path(xdg) if xdg else home / ".local" / "share"


def default_db_path(env: Mapping[str, str] | None = None) -> Path:
    """Return where the desktop application keeps its database."""
    return default_data_dir(env) / APP_IDENTIFIER / DB_FILENAME


def normalize_log_level(level: str) -> str:
    """Upper-case ``level`` and check it names a logging level.

    Raises
    ------
    ValueError
        If ``level`` is not one of :data:`LOG_LEVELS`.
    """
    normalized = level.strip().upper()
    if normalized not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level {level!r}; expected one of {', '.join(LOG_LEVELS)}"
        )
    return normalized


@dataclass(frozen=True)
class ServerConfig:
    """Where records come from and how loudly to log.

    Attributes:
        db_path: SQLite database to read, or None.
        data_path: JSON/YAML snapshot file to read, or None.
        log_level: Name of the root logging level.
    """

    db_path: Path | None = None
    data_path: Path | None = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        object.__setattr__(self, "log_level", normalize_log_level(self.log_level))

    @classmethod
    def resolve(
        cls,
        db_path: str | Path | None = None,
        data_path: str | Path | None = None,
        log_level: str | None = None,
        *,
        default_log_level: str = "WARNING",
        env: Mapping[str, str] | None = None,
    ) -> "ServerConfig":
        """Merge explicit values over environment variables and defaults."""
        env = os.environ if env is None else env
        db = db_path if db_path is not None else env.get(ENV_DB) or None
        data = data_path if data_path is not None else env.get(ENV_DATA) or None
        level = log_level or env.get(ENV_LOG_LEVEL) or default_log_level
        return cls(
            db_path=Path(db) if db is not None else None,
            data_path=Path(data) if data is not None else None,
            log_level=level,
        )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ServerConfig":
        """Build a config from environment variables only."""
        return cls.resolve(env=env)

    def create_provider(self, env: Mapping[str, str] | None = None) -> SnapshotProvider:
        """Pick the snapshot provider for this configuration.

        An explicit database wins over a data file.  With neither, the
        desktop application's database is used if it exists, otherwise
        the built-in seed records.
        """
        if self.db_path is not None:
            return SqliteSnapshotProvider(self.db_path)
        if self.data_path is not None:
            return FileSnapshotProvider(self.data_path)
        fallback = default_db_path(env)
        if fallback.is_file():
            logger.debug("Using application database at %s", fallback)
            return SqliteSnapshotProvider(fallback)
        logger.debug("No database found at %s; using built-in records", fallback)
        return BuiltinSnapshotProvider()
