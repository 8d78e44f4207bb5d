"""Record types for prompt-forge.

Exports the agent, skill and instruction record types and the
serializer that converts them to and from JSON/YAML documents.
"""
from __future__ import annotations

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
    empty_definition,
)
from promptforge.records.serializer import RecordFormatError, RecordSerializer, RecordSet

__all__ = [
    # Records
    "AgentRecord",
    "Personality",
    "SkillRecord",
    "InstructionRecord",
    # Enums
    "SkillType",
    "InstructionCategory",
    # Skill definitions
    "SkillDefinition",
    "PromptDefinition",
    "ToolDefinition",
    "WorkflowDefinition",
    "ToolParameter",
    "WorkflowStep",
    "empty_definition",
    # Serializer
    "RecordSerializer",
    "RecordFormatError",
    "RecordSet",
]
