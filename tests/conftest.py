"""Shared test fixtures for prompt-forge.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from promptforge.records import (
    AgentRecord,
    InstructionCategory,
    InstructionRecord,
    Personality,
    PromptDefinition,
    SkillRecord,
    SkillType,
    ToolDefinition,
    ToolParameter,
)
from promptforge.snapshot import BuiltinSnapshotProvider, Snapshot, SnapshotStore


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "promptforge"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def reviewer_agent() -> AgentRecord:
    return AgentRecord(
        id="reviewer",
        name="Code Reviewer",
        description="Reviews pull requests",
        avatar_emoji="🔍",
        personality=Personality(
            tone="direct",
            verbosity="concise",
            creativity=0.2,
            formality=0.8,
            traits=("precise", "blunt"),
        ),
        system_prompt="You review code.",
        skill_refs=("review", "lint-tool", "missing-skill", "disabled-skill"),
        instruction_refs=("security", "missing-instruction", "disabled-instruction"),
        tags=("engineering",),
    )


@pytest.fixture()
def sample_skills() -> list[SkillRecord]:
    return [
        SkillRecord(
            id="review",
            name="Review",
            icon_emoji="🔎",
            definition=PromptDefinition(template="Look for bugs."),
        ),
        SkillRecord(
            id="lint-tool",
            name="Lint Tool",
            icon_emoji="🧹",
            skill_type=SkillType.TOOL,
            definition=ToolDefinition(
                parameters=(ToolParameter(name="path", required=True),),
                handler="lint",
            ),
        ),
        SkillRecord(
            id="disabled-skill",
            name="Disabled Skill",
            definition=PromptDefinition(template="NEVER SHOWN SKILL"),
            enabled=False,
        ),
    ]


@pytest.fixture()
def sample_instructions() -> list[InstructionRecord]:
    return [
        InstructionRecord(
            id="style",
            name="Style",
            icon_emoji="📝",
            category=InstructionCategory.CODE_STYLE,
            content="Use clear names.",
            priority=3,
        ),
        InstructionRecord(
            id="security",
            name="Security",
            icon_emoji="🔒",
            category=InstructionCategory.SECURITY,
            content="Never log secrets.",
            priority=9,
        ),
        InstructionRecord(
            id="tone",
            name="Tone",
            icon_emoji="💬",
            category=InstructionCategory.COMMUNICATION,
            content="Be kind.",
            priority=9,
        ),
        InstructionRecord(
            id="disabled-instruction",
            name="Disabled Instruction",
            content="NEVER SHOWN INSTRUCTION",
            priority=10,
            enabled=False,
        ),
    ]


@pytest.fixture()
def sample_snapshot(
    reviewer_agent: AgentRecord,
    sample_skills: list[SkillRecord],
    sample_instructions: list[InstructionRecord],
) -> Snapshot:
    return Snapshot.from_records([reviewer_agent], sample_skills, sample_instructions)


@pytest.fixture()
def builtin_snapshot() -> Snapshot:
    agents, skills, instructions = BuiltinSnapshotProvider().load()
    return Snapshot.from_records(agents, skills, instructions)


@pytest.fixture()
def builtin_store() -> SnapshotStore:
    store = SnapshotStore(BuiltinSnapshotProvider())
    store.refresh()
    return store
