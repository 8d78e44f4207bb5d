"""Record serialization for prompt-forge.

Converts records to and from the plain dict form used on the wire, in
snapshot files and in the SQLite JSON columns.  Field names follow the
desktop application's serialized form (``avatar_emoji``,
``system_prompt``, ``skills``, ``instructions``...), and skill
definitions carry a ``"type"`` discriminator.

Usage
-----
::

    from promptforge.records.serializer import RecordSerializer

    serializer = RecordSerializer()
    data = serializer.agent_to_dict(agent)
    text = serializer.to_pretty_json(data)
    agents, skills, instructions = serializer.from_yaml(path.read_text())
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import yaml

from promptforge.records.models import (
    AgentRecord,
    InstructionCategory,
    InstructionRecord,
    Personality,
    PromptDefinition,
    SkillDefinition,
    SkillRecord,
    SkillType,
    ToolDefinition,
    ToolParameter,
    WorkflowDefinition,
    WorkflowStep,
)

RecordSet = tuple[list[AgentRecord], list[SkillRecord], list[InstructionRecord]]


class RecordFormatError(ValueError):
    """Raised when a dict cannot be converted into a record."""

    def __init__(self, kind: str, record_id: object, reason: str) -> None:
        self.kind = kind
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"Invalid {kind} record {record_id!r}: {reason}")


def _str_tuple(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise TypeError(f"expected a list of strings, got {type(value).__name__}")
    return tuple(str(item) for item in value)


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _flag(data: Mapping[str, Any], key: str, default: bool) -> bool:
    # Strings such as "false" are rejected rather than coerced.
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise TypeError(f"{key!r} must be a boolean, got {type(value).__name__}")
    return value


class RecordSerializer:
    """Converts between record objects and JSON-compatible dicts."""

    # ------------------------------------------------------------------
    # Serialization (record → dict)
    # ------------------------------------------------------------------

    def agent_to_dict(self, agent: AgentRecord) -> dict[str, Any]:
        """Serialize an ``AgentRecord`` to a JSON-compatible dict."""
        return {
            "id": agent.id,
            "name": agent.name,
            "description": agent.description,
            "avatar_emoji": agent.avatar_emoji,
            "personality": self.personality_to_dict(agent.personality),
            "system_prompt": agent.system_prompt,
            "skills": list(agent.skill_refs),
            "instructions": list(agent.instruction_refs),
            "tags": list(agent.tags),
            "created_at": agent.created_at,
            "updated_at": agent.updated_at,
            "usage_count": agent.usage_count,
            "last_used_at": agent.last_used_at,
        }

    def personality_to_dict(self, p: Personality) -> dict[str, Any]:
        return {
            "tone": p.tone,
            "verbosity": p.verbosity,
            "creativity": p.creativity,
            "formality": p.formality,
            "traits": list(p.traits),
        }

    def skill_to_dict(self, skill: SkillRecord) -> dict[str, Any]:
        """Serialize a ``SkillRecord`` to a JSON-compatible dict."""
        return {
            "id": skill.id,
            "name": skill.name,
            "description": skill.description,
            "icon_emoji": skill.icon_emoji,
            "skill_type": skill.skill_type.value,
            "definition": self.definition_to_dict(skill.definition),
            "enabled": skill.enabled,
            "created_at": skill.created_at,
            "updated_at": skill.updated_at,
        }

    def definition_to_dict(self, definition: SkillDefinition) -> dict[str, Any]:
        """Serialize a skill definition with its ``"type"`` discriminator."""
        if isinstance(definition, PromptDefinition):
            return {"type": "prompt", "template": definition.template}
        if isinstance(definition, ToolDefinition):
            return {
                "type": "tool",
                "parameters": [
                    {
                        "name": p.name,
                        "description": p.description,
                        "param_type": p.param_type,
                        "required": p.required,
                        "default": p.default,
                    }
                    for p in definition.parameters
                ],
                "handler": definition.handler,
            }
        if isinstance(definition, WorkflowDefinition):
            return {
                "type": "workflow",
                "steps": [
                    {
                        "id": s.id,
                        "name": s.name,
                        "action": s.action,
                        "inputs": dict(s.inputs),
                        "outputs": list(s.outputs),
                    }
                    for s in definition.steps
                ],
            }
        raise TypeError(f"Unknown skill definition type: {type(definition).__name__}")

    def instruction_to_dict(self, instruction: InstructionRecord) -> dict[str, Any]:
        """Serialize an ``InstructionRecord`` to a JSON-compatible dict."""
        return {
            "id": instruction.id,
            "name": instruction.name,
            "description": instruction.description,
            "icon_emoji": instruction.icon_emoji,
            "category": instruction.category.token,
            "content": instruction.content,
            "priority": instruction.priority,
            "tags": list(instruction.tags),
            "enabled": instruction.enabled,
            "created_at": instruction.created_at,
            "updated_at": instruction.updated_at,
        }

    def records_to_dict(
        self,
        agents: list[AgentRecord],
        skills: list[SkillRecord],
        instructions: list[InstructionRecord],
    ) -> dict[str, Any]:
        """Serialize full record collections as a snapshot document."""
        return {
            "agents": [self.agent_to_dict(a) for a in agents],
            "skills": [self.skill_to_dict(s) for s in skills],
            "instructions": [self.instruction_to_dict(i) for i in instructions],
        }

    # ------------------------------------------------------------------
    # Deserialization (dict → record)
    # ------------------------------------------------------------------

    def agent_from_dict(self, data: Mapping[str, Any]) -> AgentRecord:
        """Deserialize an ``AgentRecord``.

        Raises
        ------
        RecordFormatError
            If required fields are missing or have the wrong shape.
        """
        try:
            return AgentRecord(
                id=str(data["id"]),
                name=str(data["name"]),
                description=str(data.get("description", "")),
                avatar_emoji=str(data.get("avatar_emoji", "🤖")),
                personality=self.personality_from_dict(data.get("personality") or {}),
                system_prompt=str(data.get("system_prompt", "")),
                skill_refs=_str_tuple(data.get("skills")),
                instruction_refs=_str_tuple(data.get("instructions")),
                tags=_str_tuple(data.get("tags")),
                created_at=_optional_str(data.get("created_at")),
                updated_at=_optional_str(data.get("updated_at")),
                usage_count=int(data.get("usage_count") or 0),
                last_used_at=_optional_str(data.get("last_used_at")),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise RecordFormatError("agent", _record_id(data), str(exc)) from exc

    def personality_from_dict(self, data: Mapping[str, Any]) -> Personality:
        defaults = Personality()
        return Personality(
            tone=str(data.get("tone", defaults.tone)),
            verbosity=str(data.get("verbosity", defaults.verbosity)),
            creativity=float(data.get("creativity", defaults.creativity)),
            formality=float(data.get("formality", defaults.formality)),
            traits=_str_tuple(data["traits"]) if "traits" in data else defaults.traits,
        )

    def skill_from_dict(self, data: Mapping[str, Any]) -> SkillRecord:
        """Deserialize a ``SkillRecord``.

        When ``skill_type`` is absent it is taken from the definition's
        ``"type"`` discriminator.

        Raises
        ------
        RecordFormatError
            If required fields are missing, the type is unknown, or the
            definition does not match the skill type.
        """
        try:
            definition_data = data.get("definition") or {"type": data.get("skill_type", "prompt")}
            definition = self.definition_from_dict(definition_data)
            raw_type = data.get("skill_type", definition_data.get("type", "prompt"))
            return SkillRecord(
                id=str(data["id"]),
                name=str(data["name"]),
                description=str(data.get("description", "")),
                icon_emoji=str(data.get("icon_emoji", "⚡")),
                skill_type=SkillType(raw_type),
                definition=definition,
                enabled=_flag(data, "enabled", True),
                created_at=_optional_str(data.get("created_at")),
                updated_at=_optional_str(data.get("updated_at")),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise RecordFormatError("skill", _record_id(data), str(exc)) from exc

    def definition_from_dict(self, data: Mapping[str, Any]) -> SkillDefinition:
        """Deserialize a skill definition tagged by its ``"type"`` key."""
        kind = data.get("type")
        if kind == "prompt":
            return PromptDefinition(template=str(data.get("template", "")))
        if kind == "tool":
            return ToolDefinition(
                parameters=tuple(
                    ToolParameter(
                        name=str(p["name"]),
                        description=str(p.get("description", "")),
                        param_type=str(p.get("param_type", "string")),
                        required=_flag(p, "required", False),
                        default=p.get("default"),
                    )
                    for p in data.get("parameters") or []
                ),
                handler=str(data.get("handler", "")),
            )
        if kind == "workflow":
            return WorkflowDefinition(
                steps=tuple(
                    WorkflowStep(
                        id=str(s["id"]),
                        name=str(s["name"]),
                        action=str(s.get("action", "")),
                        inputs=dict(s.get("inputs") or {}),
                        outputs=_str_tuple(s.get("outputs")),
                    )
                    for s in data.get("steps") or []
                )
            )
        raise ValueError(f"unknown skill definition type {kind!r}")

    def instruction_from_dict(self, data: Mapping[str, Any]) -> InstructionRecord:
        """Deserialize an ``InstructionRecord``.

        Raises
        ------
        RecordFormatError
            If required fields are missing, the category is unknown, or
            the priority is out of range.
        """
        try:
            return InstructionRecord(
                id=str(data["id"]),
                name=str(data["name"]),
                description=str(data.get("description", "")),
                icon_emoji=str(data.get("icon_emoji", "📋")),
                category=InstructionCategory(str(data.get("category", "general")).lower()),
                content=str(data.get("content", "")),
                priority=int(data.get("priority", 5)),
                tags=_str_tuple(data.get("tags")),
                enabled=_flag(data, "enabled", True),
                created_at=_optional_str(data.get("created_at")),
                updated_at=_optional_str(data.get("updated_at")),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise RecordFormatError("instruction", _record_id(data), str(exc)) from exc

    def records_from_dict(self, data: Mapping[str, Any]) -> RecordSet:
        """Deserialize a snapshot document with ``agents``, ``skills`` and
        ``instructions`` lists.  Missing sections are treated as empty."""
        if not isinstance(data, Mapping):
            raise RecordFormatError("snapshot", None, "document must be a mapping")
        return (
            [self.agent_from_dict(a) for a in _section(data, "agents")],
            [self.skill_from_dict(s) for s in _section(data, "skills")],
            [self.instruction_from_dict(i) for i in _section(data, "instructions")],
        )

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def to_pretty_json(self, data: object) -> str:
        """Render ``data`` as 2-space indented JSON, keeping non-ASCII text."""
        return json.dumps(data, indent=2, ensure_ascii=False)

    def from_json(self, text: str) -> RecordSet:
        """Deserialize a snapshot document from a JSON string."""
        return self.records_from_dict(json.loads(text))

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------

    def to_yaml(
        self,
        agents: list[AgentRecord],
        skills: list[SkillRecord],
        instructions: list[InstructionRecord],
    ) -> str:
        """Serialize full record collections as a YAML snapshot document."""
        return yaml.dump(
            self.records_to_dict(agents, skills, instructions),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )

    def from_yaml(self, text: str) -> RecordSet:
        """Deserialize a snapshot document from a YAML string."""
        data = yaml.safe_load(text)
        return self.records_from_dict(data if data is not None else {})


def _record_id(data: object) -> object:
    return data.get("id") if isinstance(data, Mapping) else None


def _section(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    items = data.get(key) or []
    if not isinstance(items, list):
        raise RecordFormatError("snapshot", None, f"{key!r} must be a list")
    return items
