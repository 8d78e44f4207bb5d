"""The fixed prompt-forge tool catalogue.

Six tools are registered on the module-level ``TOOLS`` registry, in the
order ``tools/list`` reports them:

``get_agent``, ``list_agents``, ``get_instructions``, ``get_skill``,
``list_skills``, ``apply_agent``.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from promptforge.compose.composer import AgentComposer
from promptforge.compose.instructions import render_instruction_listing, select_instructions
from promptforge.records.models import AgentRecord
from promptforge.records.serializer import RecordSerializer
from promptforge.snapshot.store import Snapshot
from promptforge.tools.registry import ToolError, ToolRegistry

TOOLS = ToolRegistry("prompt-forge")

_serializer = RecordSerializer()

_AGENT_ID_SCHEMA = {
    "type": "object",
    "properties": {
        "agent_id": {
            "type": "string",
            "description": "The ID or name of the agent. Use 'default' for the default agent.",
        }
    },
    "required": ["agent_id"],
}

_EMPTY_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}


def _require_str(arguments: Mapping[str, Any], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str):
        raise ToolError(f"Missing {key}")
    return value


def _resolve_agent(snapshot: Snapshot, arguments: Mapping[str, Any]) -> AgentRecord:
    agent_id = _require_str(arguments, "agent_id")
    agent = snapshot.find_agent(agent_id)
    if agent is None:
        raise ToolError(
            f"Agent not found: '{agent_id}'. Use list_agents to see available agents."
        )
    return agent


@TOOLS.register(
    "get_agent",
    description=(
        "Get a Prompt Forge agent's full configuration including system prompt, "
        "personality, and attached skills/instructions"
    ),
    input_schema=_AGENT_ID_SCHEMA,
)
def get_agent(snapshot: Snapshot, arguments: Mapping[str, Any]) -> str:
    agent = _resolve_agent(snapshot, arguments)
    return _serializer.to_pretty_json(_serializer.agent_to_dict(agent))


@TOOLS.register(
    "list_agents",
    description="List all available Prompt Forge agents",
    input_schema=_EMPTY_SCHEMA,
)
def list_agents(snapshot: Snapshot, arguments: Mapping[str, Any]) -> str:
    summary = [
        {"id": a.id, "name": a.name, "description": a.description, "emoji": a.avatar_emoji}
        for a in snapshot.agents
    ]
    return _serializer.to_pretty_json(summary)


@TOOLS.register(
    "get_instructions",
    description="Get all enabled instructions/guidelines from Prompt Forge",
    input_schema={
        "type": "object",
        "properties": {
            "category": {
                "type": "string",
                "description": (
                    "Optional category filter: general, code_style, communication, "
                    "workflow, security, testing, documentation, custom"
                ),
            }
        },
    },
)
def get_instructions(snapshot: Snapshot, arguments: Mapping[str, Any]) -> str:
    category = arguments.get("category")
    if not isinstance(category, str):
        category = None
    return render_instruction_listing(select_instructions(snapshot, category))


@TOOLS.register(
    "get_skill",
    description=(
        "Get a specific skill's full configuration and prompt template. Use the skill "
        "name (e.g., 'code-review', 'frontend-design') or ID."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "skill_id": {
                "type": "string",
                "description": (
                    "The ID or name of the skill to retrieve "
                    "(e.g., 'code-review', 'explain-code', 'frontend-design')"
                ),
            }
        },
        "required": ["skill_id"],
    },
)
def get_skill(snapshot: Snapshot, arguments: Mapping[str, Any]) -> str:
    skill_id = _require_str(arguments, "skill_id")
    skill = snapshot.find_skill(skill_id)
    if skill is None:
        raise ToolError(
            f"Skill not found: '{skill_id}'. Use list_skills to see available skills."
        )
    return _serializer.to_pretty_json(_serializer.skill_to_dict(skill))


@TOOLS.register(
    "list_skills",
    description="List all available skills",
    input_schema=_EMPTY_SCHEMA,
)
def list_skills(snapshot: Snapshot, arguments: Mapping[str, Any]) -> str:
    if not snapshot.skills:
        return "No skills configured."
    summary = [
        {
            "id": s.id,
            "name": s.name,
            "description": s.description,
            "emoji": s.icon_emoji,
            "enabled": s.enabled,
        }
        for s in snapshot.skills
    ]
    return _serializer.to_pretty_json(summary)


@TOOLS.register(
    "apply_agent",
    description=(
        "Apply an agent's configuration - returns the full system prompt with all "
        "attached skills and instructions combined"
    ),
    input_schema={
        "type": "object",
        "properties": {
            "agent_id": {"type": "string", "description": "The ID or name of the agent to apply"}
        },
        "required": ["agent_id"],
    },
)
def apply_agent(snapshot: Snapshot, arguments: Mapping[str, Any]) -> str:
    agent = _resolve_agent(snapshot, arguments)
    return AgentComposer(snapshot).compose(agent)
