"""Snapshot providers for prompt-forge.

Defines the ``SnapshotProvider`` protocol plus three built-in
implementations:

- ``SqliteSnapshotProvider``: reads the desktop application's SQLite
  database, read-only.
- ``FileSnapshotProvider``: reads a JSON or YAML snapshot document.
- ``BuiltinSnapshotProvider``: serves the default seed records; never
  touches the filesystem.

Usage
-----
::

    from promptforge.snapshot.providers import FileSnapshotProvider

    provider = FileSnapshotProvider("records.yaml")
    agents, skills, instructions = provider.load()
"""
from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from promptforge.records.models import (
    AgentRecord,
    InstructionCategory,
    InstructionRecord,
    Personality,
    SkillRecord,
    SkillType,
    empty_definition,
)
from promptforge.records.serializer import RecordFormatError, RecordSerializer, RecordSet

logger = logging.getLogger(__name__)


@runtime_checkable
class SnapshotProvider(Protocol):
    """Protocol for record sources.

    ``load`` is called once at startup and again on every reload
    notification.  It may raise ``OSError``, ``sqlite3.Error`` or
    ``ValueError``; the store logs those and keeps its previous snapshot.
    """

    def load(self) -> RecordSet:
        """Return ``(agents, skills, instructions)`` in source order."""
        ...  # pragma: no cover


# ---------------------------------------------------------------------------
# SQLite
# ---------------------------------------------------------------------------


def _json_column(raw: object, default: Any) -> Any:
    """Decode a JSON text column, falling back to ``default`` when malformed."""
    if not isinstance(raw, str):
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return default


def _category(token: object) -> InstructionCategory:
    try:
        return InstructionCategory(str(token))
    except ValueError:
        return InstructionCategory.GENERAL


def _skill_type(token: object) -> SkillType:
    try:
        return SkillType(str(token))
    except ValueError:
        return SkillType.PROMPT


class SqliteSnapshotProvider:
    """Reads agents, skills and instructions from a prompt-forge database.

    The database is opened read-only for each ``load`` call and closed
    before returning.  JSON columns that fail to decode fall back to empty
    values instead of failing the whole load.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.
    """

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self._serializer = RecordSerializer()

    def load(self) -> RecordSet:
        if not self.db_path.is_file():
            raise FileNotFoundError(f"Database not found: {self.db_path}")
        conn = sqlite3.connect(f"{self.db_path.resolve().as_uri()}?mode=ro", uri=True)
        conn.row_factory = sqlite3.Row
        try:
            return (
                self._load_agents(conn),
                self._load_skills(conn),
                self._load_instructions(conn),
            )
        finally:
            conn.close()

    def _columns(self, conn: sqlite3.Connection, table: str) -> set[str]:
        return {row["name"] for row in conn.execute(f"PRAGMA table_info({table})")}

    def _load_agents(self, conn: sqlite3.Connection) -> list[AgentRecord]:
        columns = self._columns(conn, "agents")
        order = " ORDER BY usage_count DESC" if "usage_count" in columns else ""
        agents: list[AgentRecord] = []
        for row in conn.execute(f"SELECT * FROM agents{order}"):
            personality_data = _json_column(row["personality_json"], {})
            try:
                personality = self._serializer.personality_from_dict(personality_data)
            except (TypeError, ValueError, AttributeError):
                personality = Personality()
            agents.append(
                AgentRecord(
                    id=row["id"],
                    name=row["name"],
                    description=row["description"] or "",
                    avatar_emoji=row["avatar_emoji"] or "",
                    personality=personality,
                    system_prompt=row["system_prompt"] or "",
                    skill_refs=_ref_tuple(_json_column(row["skills_json"], [])),
                    instruction_refs=_ref_tuple(_json_column(row["instructions_json"], [])),
                    tags=_ref_tuple(_json_column(row["tags_json"], [])),
                    created_at=row["created_at"],
                    updated_at=row["updated_at"],
                    usage_count=(row["usage_count"] or 0) if "usage_count" in columns else 0,
                    last_used_at=row["last_used_at"] if "last_used_at" in columns else None,
                )
            )
        return agents

    def _load_skills(self, conn: sqlite3.Connection) -> list[SkillRecord]:
        skills: list[SkillRecord] = []
        for row in conn.execute("SELECT * FROM skills"):
            skill_type = _skill_type(row["skill_type"])
            try:
                definition = self._serializer.definition_from_dict(
                    _json_column(row["definition_json"], {})
                )
            except (KeyError, TypeError, ValueError, AttributeError):
                definition = empty_definition(skill_type)
            if not isinstance(definition, type(empty_definition(skill_type))):
                logger.warning(
                    "Skill %r: definition does not match type %r; using an empty definition",
                    row["id"],
                    skill_type.value,
                )
                definition = empty_definition(skill_type)
            skills.append(
                SkillRecord(
                    id=row["id"],
                    name=row["name"],
                    description=row["description"] or "",
                    icon_emoji=row["icon_emoji"] or "",
                    skill_type=skill_type,
                    definition=definition,
                    enabled=bool(row["enabled"]),
                    created_at=row["created_at"],
                    updated_at=row["updated_at"],
                )
            )
        return skills

    def _load_instructions(self, conn: sqlite3.Connection) -> list[InstructionRecord]:
        instructions: list[InstructionRecord] = []
        for row in conn.execute("SELECT * FROM instructions"):
            try:
                instructions.append(
                    InstructionRecord(
                        id=row["id"],
                        name=row["name"],
                        description=row["description"] or "",
                        icon_emoji=row["icon_emoji"] or "",
                        category=_category(row["category"]),
                        content=row["content"] or "",
                        priority=row["priority"] if row["priority"] is not None else 5,
                        tags=_ref_tuple(_json_column(row["tags_json"], [])),
                        enabled=bool(row["enabled"]),
                        created_at=row["created_at"],
                        updated_at=row["updated_at"],
                    )
                )
            except ValueError as exc:
                raise RecordFormatError("instruction", row["id"], str(exc)) from exc
        return instructions

    def __repr__(self) -> str:
        return f"SqliteSnapshotProvider({str(self.db_path)!r})"


def _ref_tuple(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in value)


# ---------------------------------------------------------------------------
# Snapshot files
# ---------------------------------------------------------------------------


class FileSnapshotProvider:
    """Reads a snapshot document from a ``.json``, ``.yaml`` or ``.yml`` file.

    The document is a mapping with optional ``agents``, ``skills`` and
    ``instructions`` lists in the serializer's dict form.  The file is
    re-read on every ``load`` call so edits are picked up on reload.

    Parameters
    ----------
    path:
        Location of the snapshot document.

    Raises
    ------
    ValueError
        At construction time, if the suffix is not supported.
    """

    SUFFIXES = (".json", ".yaml", ".yml")

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        if self.path.suffix.lower() not in self.SUFFIXES:
            raise ValueError(
                f"Unsupported snapshot file {self.path.name!r}; "
                f"expected one of {', '.join(self.SUFFIXES)}"
            )
        self._serializer = RecordSerializer()

    def load(self) -> RecordSet:
        text = self.path.read_text(encoding="utf-8")
        if self.path.suffix.lower() == ".json":
            return self._serializer.from_json(text)
        return self._serializer.from_yaml(text)

    def __repr__(self) -> str:
        return f"FileSnapshotProvider({str(self.path)!r})"


# ---------------------------------------------------------------------------
# Built-in seed records
# ---------------------------------------------------------------------------


class BuiltinSnapshotProvider:
    """Serves the default agent, skills and instructions.

    Used when no database or snapshot file is configured, and in tests.
    """

    def load(self) -> RecordSet:
        from promptforge.snapshot.defaults import (
            default_agents,
            default_instructions,
            default_skills,
        )

        return default_agents(), default_skills(), default_instructions()

    def __repr__(self) -> str:
        return "BuiltinSnapshotProvider()"
