"""Record definitions for agents, skills and instructions.

Every record served by prompt-forge is a frozen dataclass so that a
loaded snapshot can be shared between handlers without copying.  The
``SkillDefinition`` union is closed: code that consumes it must handle
``PromptDefinition``, ``ToolDefinition`` and ``WorkflowDefinition``
explicitly with ``isinstance`` checks.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class SkillType(Enum):
    """Kind of capability a skill provides."""

    PROMPT = "prompt"
    TOOL = "tool"
    WORKFLOW = "workflow"


class InstructionCategory(Enum):
    """Closed set of instruction categories.

    The enum value is the canonical lowercase token used on the wire, in
    category filters and in rendered output.
    """

    GENERAL = "general"
    CODE_STYLE = "code_style"
    COMMUNICATION = "communication"
    WORKFLOW = "workflow"
    SECURITY = "security"
    TESTING = "testing"
    DOCUMENTATION = "documentation"
    CUSTOM = "custom"

    @property
    def token(self) -> str:
        """Return the canonical lowercase token, e.g. ``"code_style"``."""
        return self.value


# ---------------------------------------------------------------------------
# Agent
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Personality:
    """Communication style of an agent.

    Parameters
    ----------
    tone:
        Free-form tone label, e.g. ``"friendly"``.
    verbosity:
        Free-form verbosity label, e.g. ``"concise"``.
    creativity:
        Value in ``[0, 1]``.
    formality:
        Value in ``[0, 1]``; 0 is casual, 1 is formal.
    traits:
        Ordered trait labels.
    """

    tone: str = "friendly"
    verbosity: str = "balanced"
    creativity: float = 0.5
    formality: float = 0.5
    traits: tuple[str, ...] = ("helpful", "clear")

    def __post_init__(self) -> None:
        for name in ("creativity", "formality"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Personality.{name} must be within [0, 1], got {value!r}")


@dataclass(frozen=True, slots=True)
class AgentRecord:
    """A configurable AI persona.

    ``skill_refs`` and ``instruction_refs`` are ordered ids.  They may point
    at records that are missing from the snapshot or disabled; composition
    skips such references.
    """

    id: str
    name: str
    description: str = ""
    avatar_emoji: str = "🤖"
    personality: Personality = field(default_factory=Personality)
    system_prompt: str = ""
    skill_refs: tuple[str, ...] = ()
    instruction_refs: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    created_at: str | None = None
    updated_at: str | None = None
    usage_count: int = 0
    last_used_at: str | None = None


# ---------------------------------------------------------------------------
# Skill definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ToolParameter:
    """A single declared parameter of a tool skill."""

    name: str
    description: str = ""
    param_type: str = "string"
    required: bool = False
    default: Any = None


@dataclass(frozen=True, slots=True)
class WorkflowStep:
    """One step of a workflow skill."""

    id: str
    name: str
    action: str
    inputs: dict[str, Any] = field(default_factory=dict)
    outputs: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PromptDefinition:
    """A prompt-template skill body."""

    template: str = ""


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """A tool skill: declared parameters plus the handler to invoke."""

    parameters: tuple[ToolParameter, ...] = ()
    handler: str = ""


@dataclass(frozen=True, slots=True)
class WorkflowDefinition:
    """A multi-step workflow skill."""

    steps: tuple[WorkflowStep, ...] = ()


SkillDefinition = Union[PromptDefinition, ToolDefinition, WorkflowDefinition]

_DEFINITION_TYPES: dict[SkillType, type] = {
    SkillType.PROMPT: PromptDefinition,
    SkillType.TOOL: ToolDefinition,
    SkillType.WORKFLOW: WorkflowDefinition,
}


def empty_definition(skill_type: SkillType) -> SkillDefinition:
    """Return an empty definition of the variant matching ``skill_type``."""
    return _DEFINITION_TYPES[skill_type]()


# ---------------------------------------------------------------------------
# Skill and instruction records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SkillRecord:
    """A reusable capability that agents reference by id.

    Raises
    ------
    ValueError
        If ``definition`` is not the variant that matches ``skill_type``.
    """

    id: str
    name: str
    description: str = ""
    icon_emoji: str = "⚡"
    skill_type: SkillType = SkillType.PROMPT
    definition: SkillDefinition = field(default_factory=PromptDefinition)
    enabled: bool = True
    created_at: str | None = None
    updated_at: str | None = None

    def __post_init__(self) -> None:
        expected = _DEFINITION_TYPES[self.skill_type]
        if not isinstance(self.definition, expected):
            raise ValueError(
                f"Skill {self.id!r}: {self.skill_type.value} skills need a "
                f"{expected.__name__}, got {type(self.definition).__name__}"
            )


@dataclass(frozen=True, slots=True)
class InstructionRecord:
    """A structured guideline, optionally attached to agents.

    Raises
    ------
    ValueError
        If ``priority`` is outside ``0..255``.
    """

    id: str
    name: str
    description: str = ""
    icon_emoji: str = "📋"
    category: InstructionCategory = InstructionCategory.GENERAL
    content: str = ""
    priority: int = 5
    tags: tuple[str, ...] = ()
    enabled: bool = True
    created_at: str | None = None
    updated_at: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.priority <= 255:
            raise ValueError(
                f"Instruction {self.id!r}: priority must be within 0..255, got {self.priority!r}"
            )
