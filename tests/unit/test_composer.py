"""Unit tests for promptforge.compose.composer — the apply-agent document."""
from __future__ import annotations

import pytest

from promptforge.compose import AgentComposer, compose_agent, skill_prompt_text
from promptforge.records import (
    AgentRecord,
    InstructionCategory,
    InstructionRecord,
    Personality,
    PromptDefinition,
    ToolDefinition,
    WorkflowDefinition,
)
from promptforge.snapshot import Snapshot


def _instruction(instruction_id: str, content: str, priority: int = 5, **kwargs: object) -> InstructionRecord:
    return InstructionRecord(
        id=instruction_id,
        name=instruction_id.upper(),
        icon_emoji="•",
        content=content,
        priority=priority,
        **kwargs,  # type: ignore[arg-type]
    )


# ===========================================================================
# skill_prompt_text
# ===========================================================================


class TestSkillPromptText:
    def test_prompt_template(self) -> None:
        assert skill_prompt_text(PromptDefinition("Do X")) == "Do X"

    def test_tool_and_workflow_have_no_text(self) -> None:
        assert skill_prompt_text(ToolDefinition()) is None
        assert skill_prompt_text(WorkflowDefinition()) is None

    def test_unknown_variant_raises(self) -> None:
        with pytest.raises(TypeError):
            skill_prompt_text(object())  # type: ignore[arg-type]


# ===========================================================================
# Full document
# ===========================================================================


class TestComposeDocument:
    def test_exact_document(self, sample_snapshot: Snapshot, reviewer_agent: AgentRecord) -> None:
        expected = (
            "# Agent Configuration\n\n"
            "**Agent:** 🔍 Code Reviewer\n\n"
            "**Tone:** direct | **Verbosity:** concise\n\n"
            "**Traits:** precise, blunt\n\n"
            "## System Prompt\n\n"
            "You review code.\n\n"
            "## Attached Skills\n\n"
            "### 🔎 Review\n"
            "Look for bugs.\n\n"
            "### 🧹 Lint Tool\n"
            "## Attached Instructions\n\n"
            "### 🔒 Security\n"
            "Never log secrets.\n\n"
            "## Global Instructions\n\n"
            "### 📝 Style (code_style)\n"
            "Use clear names.\n\n"
            "### 💬 Tone (communication)\n"
            "Be kind.\n\n"
        )
        assert AgentComposer(sample_snapshot).compose(reviewer_agent) == expected

    def test_is_deterministic(self, sample_snapshot: Snapshot, reviewer_agent: AgentRecord) -> None:
        first = compose_agent(sample_snapshot, reviewer_agent)
        assert all(compose_agent(sample_snapshot, reviewer_agent) == first for _ in range(5))

    def test_disabled_and_missing_refs_are_skipped(
        self, sample_snapshot: Snapshot, reviewer_agent: AgentRecord
    ) -> None:
        document = compose_agent(sample_snapshot, reviewer_agent)
        assert "NEVER SHOWN SKILL" not in document
        assert "NEVER SHOWN INSTRUCTION" not in document
        assert "missing-skill" not in document
        assert "Disabled" not in document

    def test_traits_line_omitted_without_traits(self) -> None:
        agent = AgentRecord(id="a", name="A", personality=Personality(traits=()))
        assert "**Traits:**" not in compose_agent(Snapshot(), agent)

    def test_minimal_agent_has_header_and_prompt_only(self) -> None:
        agent = AgentRecord(id="a", name="A", avatar_emoji="🤖", system_prompt="Hi")
        assert compose_agent(Snapshot(), agent) == (
            "# Agent Configuration\n\n"
            "**Agent:** 🤖 A\n\n"
            "**Tone:** friendly | **Verbosity:** balanced\n\n"
            "**Traits:** helpful, clear\n\n"
            "## System Prompt\n\n"
            "Hi\n\n"
        )

    def test_skill_order_follows_refs(self, sample_snapshot: Snapshot) -> None:
        agent = AgentRecord(id="a", name="A", skill_refs=("lint-tool", "review"))
        document = compose_agent(sample_snapshot, agent)
        assert document.index("Lint Tool") < document.index("Review")

    def test_tool_skill_contributes_heading_only(self, sample_snapshot: Snapshot) -> None:
        agent = AgentRecord(id="a", name="A", skill_refs=("lint-tool",))
        document = compose_agent(sample_snapshot, agent)
        assert "## Attached Skills\n\n### 🧹 Lint Tool\n## Global Instructions" in document

    def test_only_unresolvable_refs_omits_sections(self, sample_snapshot: Snapshot) -> None:
        agent = AgentRecord(
            id="a",
            name="A",
            skill_refs=("missing-skill", "disabled-skill"),
            instruction_refs=("disabled-instruction",),
        )
        document = compose_agent(sample_snapshot, agent)
        assert "## Attached Skills" not in document
        assert "## Attached Instructions" not in document


# ===========================================================================
# Attached vs. global instructions
# ===========================================================================


class TestInstructionPartitioning:
    def test_attached_and_global_are_disjoint(self) -> None:
        snapshot = Snapshot.from_records(
            [], [], [_instruction("i1", "X"), _instruction("i2", "Y")]
        )
        agent = AgentRecord(id="a1", name="A1", instruction_refs=("i1",))
        document = compose_agent(snapshot, agent)

        attached, _, global_part = document.partition("## Global Instructions")
        assert document.count("X") == 1
        assert document.count("Y") == 1
        assert "X" in attached.split("## Attached Instructions")[1]
        assert "Y" in global_part

    def test_global_section_keeps_declaration_order(self) -> None:
        snapshot = Snapshot.from_records(
            [], [], [_instruction("low", "LOW", priority=3), _instruction("high", "HIGH", priority=9)]
        )
        document = compose_agent(snapshot, AgentRecord(id="a", name="A"))
        assert document.index("LOW") < document.index("HIGH")

    def test_global_heading_shows_category_token(self) -> None:
        snapshot = Snapshot.from_records(
            [], [], [_instruction("t", "Test it", category=InstructionCategory.TESTING)]
        )
        document = compose_agent(snapshot, AgentRecord(id="a", name="A"))
        assert "### • T (testing)\nTest it\n\n" in document

    def test_disabled_instruction_never_global(self) -> None:
        snapshot = Snapshot.from_records([], [], [_instruction("off", "OFF", enabled=False)])
        document = compose_agent(snapshot, AgentRecord(id="a", name="A"))
        assert "## Global Instructions" not in document

    def test_attached_but_disabled_is_not_global(self) -> None:
        snapshot = Snapshot.from_records([], [], [_instruction("off", "OFF", enabled=False)])
        agent = AgentRecord(id="a", name="A", instruction_refs=("off",))
        assert "OFF" not in compose_agent(snapshot, agent)

    def test_duplicate_refs_are_rendered_each_time(self) -> None:
        snapshot = Snapshot.from_records([], [], [_instruction("i1", "X")])
        agent = AgentRecord(id="a", name="A", instruction_refs=("i1", "i1"))
        assert compose_agent(snapshot, agent).count("X") == 2
