"""Immutable record snapshots and the swappable store that holds them.

A ``Snapshot`` is a frozen value: three tuples of records plus lookup
helpers.  ``SnapshotStore`` keeps exactly one current snapshot and
replaces it with a single reference assignment, so a reader that grabbed
``store.current`` keeps a complete, consistent view for as long as it
holds the reference.

Usage
-----
::

    from promptforge.snapshot import SnapshotStore, BuiltinSnapshotProvider

    store = SnapshotStore(BuiltinSnapshotProvider())
    store.refresh()
    snapshot = store.current
    agent = snapshot.find_agent("default")
"""
from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterable
from dataclasses import dataclass

import yaml

from promptforge.records.models import AgentRecord, InstructionRecord, SkillRecord
from promptforge.snapshot.providers import SnapshotProvider

logger = logging.getLogger(__name__)

# Failures a provider may raise while loading; anything else is a bug.
_LOAD_ERRORS = (OSError, sqlite3.Error, ValueError, yaml.YAMLError)


def normalize_skill_name(name: str) -> str:
    """Lowercase ``name`` and map spaces and underscores to hyphens."""
    return name.lower().replace(" ", "-").replace("_", "-")


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time copy of all records served by the protocol engine.

    Parameters
    ----------
    agents:
        Agents in provider order.
    skills:
        Skills in provider order.
    instructions:
        Instructions in provider (declaration) order.
    """

    agents: tuple[AgentRecord, ...] = ()
    skills: tuple[SkillRecord, ...] = ()
    instructions: tuple[InstructionRecord, ...] = ()

    @classmethod
    def from_records(
        cls,
        agents: Iterable[AgentRecord],
        skills: Iterable[SkillRecord],
        instructions: Iterable[InstructionRecord],
    ) -> "Snapshot":
        """Build a snapshot from any iterables of records."""
        return cls(tuple(agents), tuple(skills), tuple(instructions))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find_agent(self, identifier: str) -> AgentRecord | None:
        """Resolve an agent by exact id, then by case-insensitive name."""
        for agent in self.agents:
            if agent.id == identifier:
                return agent
        lowered = identifier.lower()
        for agent in self.agents:
            if agent.name.lower() == lowered:
                return agent
        return None

    def find_skill(self, identifier: str) -> SkillRecord | None:
        """Resolve a skill by exact id, then by normalized name.

        Names compare after :func:`normalize_skill_name` on both sides, so
        ``"code_review"`` and ``"Code Review"`` both find ``code-review``.
        """
        for skill in self.skills:
            if skill.id == identifier:
                return skill
        wanted = normalize_skill_name(identifier)
        for skill in self.skills:
            if normalize_skill_name(skill.name) == wanted:
                return skill
        return None

    def enabled_skill(self, skill_id: str) -> SkillRecord | None:
        """Return the enabled skill with id ``skill_id``, if any."""
        for skill in self.skills:
            if skill.id == skill_id and skill.enabled:
                return skill
        return None

    def enabled_instruction(self, instruction_id: str) -> InstructionRecord | None:
        """Return the enabled instruction with id ``instruction_id``, if any."""
        for instruction in self.instructions:
            if instruction.id == instruction_id and instruction.enabled:
                return instruction
        return None

    def enabled_instructions(self) -> list[InstructionRecord]:
        """Return enabled instructions in declaration order."""
        return [i for i in self.instructions if i.enabled]

    def __repr__(self) -> str:
        return (
            f"Snapshot(agents={len(self.agents)}, skills={len(self.skills)}, "
            f"instructions={len(self.instructions)})"
        )


class SnapshotStore:
    """Holds the current ``Snapshot`` and refreshes it from a provider.

    The current value is only ever replaced as a whole.  ``refresh``
    swallows and logs provider failures so that the server keeps serving
    the previous (or empty) snapshot.

    Parameters
    ----------
    provider:
        Source of records; ``None`` leaves the store permanently empty
        unless :meth:`replace` is called.
    initial:
        Snapshot served before the first successful refresh.
    """

    def __init__(
        self,
        provider: SnapshotProvider | None = None,
        initial: Snapshot | None = None,
    ) -> None:
        self._provider = provider
        self._current = initial if initial is not None else Snapshot()
        self._write_lock = threading.Lock()

    @property
    def current(self) -> Snapshot:
        """The snapshot in effect right now."""
        return self._current

    def replace(self, snapshot: Snapshot) -> Snapshot:
        """Swap in ``snapshot`` and return the one it replaced."""
        with self._write_lock:
            previous = self._current
            self._current = snapshot
        return previous

    def refresh(self) -> bool:
        """Reload from the provider.

        Returns
        -------
        bool
            ``True`` if a new snapshot was installed, ``False`` if there is
            no provider or loading failed.
        """
        if self._provider is None:
            logger.warning("No snapshot provider configured; keeping %r", self._current)
            return False
        try:
            agents, skills, instructions = self._provider.load()
            snapshot = Snapshot.from_records(agents, skills, instructions)
        except _LOAD_ERRORS:
            logger.exception(
                "Failed to load records from %r; keeping %r", self._provider, self._current
            )
            return False
        self.replace(snapshot)
        logger.info(
            "Loaded %d agents, %d skills, %d instructions from %r",
            len(snapshot.agents),
            len(snapshot.skills),
            len(snapshot.instructions),
            self._provider,
        )
        return True

    def __repr__(self) -> str:
        return f"SnapshotStore(provider={self._provider!r}, current={self._current!r})"
