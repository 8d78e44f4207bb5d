"""Unit tests for promptforge.tools.catalog — the six built-in tools."""
from __future__ import annotations

import json

import pytest

from promptforge.compose import compose_agent
from promptforge.snapshot import Snapshot
from promptforge.tools import TOOLS, ToolResult


def _call(snapshot: Snapshot, name: str, **arguments: object) -> ToolResult:
    return TOOLS.call(name, snapshot, arguments)


class TestCatalogue:
    def test_six_tools_in_order(self) -> None:
        assert TOOLS.list_tools() == [
            "get_agent",
            "list_agents",
            "get_instructions",
            "get_skill",
            "list_skills",
            "apply_agent",
        ]

    @pytest.mark.parametrize("name", ["get_agent", "apply_agent"])
    def test_agent_tools_require_agent_id(self, name: str) -> None:
        assert TOOLS.get(name).input_schema["required"] == ["agent_id"]

    def test_every_schema_is_an_object(self) -> None:
        assert all(d["inputSchema"]["type"] == "object" for d in TOOLS.descriptors())


# ===========================================================================
# Agents
# ===========================================================================


class TestGetAgent:
    def test_by_id(self, builtin_snapshot: Snapshot) -> None:
        result = _call(builtin_snapshot, "get_agent", agent_id="default")
        assert result.is_error is False
        data = json.loads(result.text)
        assert data["id"] == "default"
        assert data["avatar_emoji"] == "🧠"
        assert data["skills"] == []

    def test_pretty_printed(self, builtin_snapshot: Snapshot) -> None:
        text = _call(builtin_snapshot, "get_agent", agent_id="default").text
        assert text.startswith('{\n  "id": "default"')

    def test_by_name(self, builtin_snapshot: Snapshot) -> None:
        result = _call(builtin_snapshot, "get_agent", agent_id="DEFAULT assistant")
        assert json.loads(result.text)["id"] == "default"

    def test_not_found(self, builtin_snapshot: Snapshot) -> None:
        result = _call(builtin_snapshot, "get_agent", agent_id="ghost")
        assert result == ToolResult(
            "Agent not found: 'ghost'. Use list_agents to see available agents.", is_error=True
        )

    @pytest.mark.parametrize("arguments", [{}, {"agent_id": 7}])
    def test_missing_agent_id(self, builtin_snapshot: Snapshot, arguments: dict) -> None:
        result = TOOLS.call("get_agent", builtin_snapshot, arguments)
        assert result == ToolResult("Missing agent_id", is_error=True)


class TestListAgents:
    def test_summary_fields(self, builtin_snapshot: Snapshot) -> None:
        data = json.loads(_call(builtin_snapshot, "list_agents").text)
        assert data == [
            {
                "id": "default",
                "name": "Default Assistant",
                "description": "A general-purpose assistant: helpful, harmless, and honest.",
                "emoji": "🧠",
            }
        ]

    def test_empty(self) -> None:
        assert _call(Snapshot(), "list_agents").text == "[]"


# ===========================================================================
# Instructions
# ===========================================================================


class TestGetInstructions:
    def test_declaration_order(self, sample_snapshot: Snapshot) -> None:
        text = _call(sample_snapshot, "get_instructions").text
        assert text.index("Style") < text.index("Security") < text.index("Tone")

    def test_category_filter(self, sample_snapshot: Snapshot) -> None:
        text = _call(sample_snapshot, "get_instructions", category="SECURITY").text
        assert text == "## 🔒 Security (Priority: 9)\nCategory: security\n\nNever log secrets.\n\n---\n\n"

    def test_no_match(self, sample_snapshot: Snapshot) -> None:
        result = _call(sample_snapshot, "get_instructions", category="documentation")
        assert result == ToolResult("No instructions found.")

    def test_non_string_category_ignored(self, sample_snapshot: Snapshot) -> None:
        unfiltered = _call(sample_snapshot, "get_instructions").text
        assert _call(sample_snapshot, "get_instructions", category=3).text == unfiltered


# ===========================================================================
# Skills
# ===========================================================================


class TestGetSkill:
    @pytest.mark.parametrize("query", ["code-review", "Code Review", "code_review"])
    def test_lookup(self, builtin_snapshot: Snapshot, query: str) -> None:
        data = json.loads(_call(builtin_snapshot, "get_skill", skill_id=query).text)
        assert data["id"] == "code-review"
        assert data["definition"]["type"] == "prompt"
        assert data["definition"]["template"].startswith("Review the following code")

    def test_not_found(self, builtin_snapshot: Snapshot) -> None:
        result = _call(builtin_snapshot, "get_skill", skill_id="frontend-design")
        assert result == ToolResult(
            "Skill not found: 'frontend-design'. Use list_skills to see available skills.",
            is_error=True,
        )

    def test_missing_skill_id(self, builtin_snapshot: Snapshot) -> None:
        assert _call(builtin_snapshot, "get_skill") == ToolResult("Missing skill_id", is_error=True)


class TestListSkills:
    def test_includes_enabled_flag(self, sample_snapshot: Snapshot) -> None:
        data = json.loads(_call(sample_snapshot, "list_skills").text)
        assert [(s["id"], s["enabled"]) for s in data] == [
            ("review", True),
            ("lint-tool", True),
            ("disabled-skill", False),
        ]
        assert set(data[0]) == {"id", "name", "description", "emoji", "enabled"}

    def test_empty(self) -> None:
        assert _call(Snapshot(), "list_skills") == ToolResult("No skills configured.")


# ===========================================================================
# apply_agent
# ===========================================================================


class TestApplyAgent:
    def test_matches_composer(self, sample_snapshot: Snapshot) -> None:
        agent = sample_snapshot.find_agent("reviewer")
        assert agent is not None
        result = _call(sample_snapshot, "apply_agent", agent_id="Code Reviewer")
        assert result == ToolResult(compose_agent(sample_snapshot, agent))

    def test_not_found(self, sample_snapshot: Snapshot) -> None:
        result = _call(sample_snapshot, "apply_agent", agent_id="nobody")
        assert result.is_error is True
        assert result.text.startswith("Agent not found: 'nobody'")

    def test_builtin_default_agent(self, builtin_snapshot: Snapshot) -> None:
        text = _call(builtin_snapshot, "apply_agent", agent_id="default").text
        assert text.startswith("# Agent Configuration\n\n**Agent:** 🧠 Default Assistant\n\n")
        assert "**Traits:** helpful, thoughtful, clear\n\n" in text
        assert "## Attached Skills" not in text
        assert "### 📝 Code Style Guidelines (code_style)\n" in text
        assert "### 💬 Communication Style (communication)\n" in text
