"""Unit tests for promptforge.snapshot.store — lookups on Snapshot and
refresh/replace semantics of SnapshotStore.
"""
from __future__ import annotations

import logging
import sqlite3

import pytest

from promptforge.records import AgentRecord, InstructionRecord, SkillRecord
from promptforge.records.serializer import RecordSet
from promptforge.snapshot import (
    BuiltinSnapshotProvider,
    Snapshot,
    SnapshotProvider,
    SnapshotStore,
    normalize_skill_name,
)


class _StaticProvider:
    def __init__(self, records: RecordSet) -> None:
        self.records = records
        self.calls = 0

    def load(self) -> RecordSet:
        self.calls += 1
        return self.records


class _FailingProvider:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    def load(self) -> RecordSet:
        raise self.exc


# ===========================================================================
# normalize_skill_name
# ===========================================================================


class TestNormalizeSkillName:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Code Review", "code-review"),
            ("code_review", "code-review"),
            ("CODE-REVIEW", "code-review"),
            ("frontend design_v2", "frontend-design-v2"),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        assert normalize_skill_name(raw) == expected


# ===========================================================================
# Snapshot lookups
# ===========================================================================


class TestSnapshotFindAgent:
    def test_exact_id(self, builtin_snapshot: Snapshot) -> None:
        agent = builtin_snapshot.find_agent("default")
        assert agent is not None
        assert agent.name == "Default Assistant"

    def test_name_case_insensitive(self, builtin_snapshot: Snapshot) -> None:
        agent = builtin_snapshot.find_agent("default ASSISTANT")
        assert agent is not None
        assert agent.id == "default"

    def test_id_wins_over_name(self) -> None:
        by_name = AgentRecord(id="x", name="target")
        by_id = AgentRecord(id="target", name="Other")
        snapshot = Snapshot.from_records([by_name, by_id], [], [])
        assert snapshot.find_agent("target") is by_id

    def test_missing(self, builtin_snapshot: Snapshot) -> None:
        assert builtin_snapshot.find_agent("nobody") is None


class TestSnapshotFindSkill:
    def test_exact_id(self, builtin_snapshot: Snapshot) -> None:
        skill = builtin_snapshot.find_skill("explain-code")
        assert skill is not None
        assert skill.name == "Explain Code"

    @pytest.mark.parametrize("query", ["Code Review", "code_review", "CODE REVIEW"])
    def test_normalized_name(self, builtin_snapshot: Snapshot, query: str) -> None:
        skill = builtin_snapshot.find_skill(query)
        assert skill is not None
        assert skill.id == "code-review"

    def test_finds_disabled_skills(self, sample_snapshot: Snapshot) -> None:
        skill = sample_snapshot.find_skill("disabled-skill")
        assert skill is not None
        assert skill.enabled is False


class TestSnapshotEnabledLookups:
    def test_enabled_skill_skips_disabled(self, sample_snapshot: Snapshot) -> None:
        assert sample_snapshot.enabled_skill("review") is not None
        assert sample_snapshot.enabled_skill("disabled-skill") is None
        assert sample_snapshot.enabled_skill("missing-skill") is None

    def test_enabled_instruction_skips_disabled(self, sample_snapshot: Snapshot) -> None:
        assert sample_snapshot.enabled_instruction("style") is not None
        assert sample_snapshot.enabled_instruction("disabled-instruction") is None

    def test_enabled_instructions_keep_declaration_order(self, sample_snapshot: Snapshot) -> None:
        assert [i.id for i in sample_snapshot.enabled_instructions()] == ["style", "security", "tone"]

    def test_repr_shows_counts(self, sample_snapshot: Snapshot) -> None:
        assert repr(sample_snapshot) == "Snapshot(agents=1, skills=3, instructions=4)"


# ===========================================================================
# SnapshotStore
# ===========================================================================


class TestSnapshotStore:
    def test_starts_empty(self) -> None:
        store = SnapshotStore()
        assert store.current == Snapshot()

    def test_initial_snapshot(self, sample_snapshot: Snapshot) -> None:
        assert SnapshotStore(initial=sample_snapshot).current is sample_snapshot

    def test_refresh_without_provider(self, caplog: pytest.LogCaptureFixture) -> None:
        store = SnapshotStore()
        with caplog.at_level(logging.WARNING, logger="promptforge.snapshot.store"):
            assert store.refresh() is False
        assert "No snapshot provider" in caplog.text

    def test_refresh_installs_new_snapshot(self) -> None:
        provider = _StaticProvider(([AgentRecord(id="a", name="A")], [], []))
        store = SnapshotStore(provider)
        assert store.refresh() is True
        assert [a.id for a in store.current.agents] == ["a"]
        assert provider.calls == 1

    def test_refresh_replaces_whole_value(self) -> None:
        provider = _StaticProvider(([AgentRecord(id="a", name="A")], [], []))
        store = SnapshotStore(provider)
        store.refresh()
        held = store.current
        provider.records = ([AgentRecord(id="b", name="B")], [], [InstructionRecord(id="i", name="I")])
        store.refresh()
        # A reader holding the old reference keeps a complete old view.
        assert [a.id for a in held.agents] == ["a"]
        assert held.instructions == ()
        assert [a.id for a in store.current.agents] == ["b"]
        assert [i.id for i in store.current.instructions] == ["i"]

    @pytest.mark.parametrize(
        "exc",
        [
            FileNotFoundError("gone"),
            sqlite3.OperationalError("locked"),
            ValueError("bad record"),
        ],
    )
    def test_failed_refresh_keeps_previous_snapshot(
        self,
        exc: Exception,
        sample_snapshot: Snapshot,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        store = SnapshotStore(_FailingProvider(exc), initial=sample_snapshot)
        with caplog.at_level(logging.ERROR, logger="promptforge.snapshot.store"):
            assert store.refresh() is False
        assert store.current is sample_snapshot
        assert "Failed to load records" in caplog.text

    def test_unexpected_errors_propagate(self) -> None:
        store = SnapshotStore(_FailingProvider(RuntimeError("bug")))
        with pytest.raises(RuntimeError):
            store.refresh()

    def test_replace_returns_previous(self, sample_snapshot: Snapshot) -> None:
        store = SnapshotStore()
        empty = store.current
        assert store.replace(sample_snapshot) is empty
        assert store.current is sample_snapshot

    def test_builtin_provider_satisfies_protocol(self) -> None:
        assert isinstance(BuiltinSnapshotProvider(), SnapshotProvider)

    def test_records_are_tuples(self, builtin_store: SnapshotStore) -> None:
        snapshot = builtin_store.current
        assert isinstance(snapshot.agents, tuple)
        assert isinstance(snapshot.skills[0], SkillRecord)
