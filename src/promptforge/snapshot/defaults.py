"""Default seed records served by ``BuiltinSnapshotProvider``.

These mirror the records a fresh prompt-forge database is initialised
with: one general-purpose agent, two prompt skills and two instruction
sets.  Each call returns new lists so callers may not alias each other.
"""
from __future__ import annotations

from promptforge.records.models import (
    AgentRecord,
    InstructionCategory,
    InstructionRecord,
    Personality,
    PromptDefinition,
    SkillRecord,
    SkillType,
)

_CODE_REVIEW_TEMPLATE = """\
Review the following code for:
- Bugs and potential issues
- Performance optimizations
- Code style and best practices
- Security concerns

Provide specific, actionable feedback."""

_EXPLAIN_CODE_TEMPLATE = """\
Explain this code step by step:
1. What does it do overall?
2. Break down each important section
3. Highlight any clever or tricky parts
4. Suggest improvements if applicable"""

_CODE_STYLE_CONTENT = """\
# Code Style Guidelines

- Use meaningful variable and function names
- Keep functions small and focused (max 20-30 lines)
- Add comments for complex logic, not obvious code
- Follow the language's official style guide
- Use consistent indentation (spaces preferred)
- Group related code together
- Avoid deep nesting (max 3 levels)"""

_COMMUNICATION_CONTENT = """\
# Communication Style

- Be direct and concise
- Start with the answer, then explain
- Use code examples when helpful
- Format responses with markdown
- Break complex topics into steps
- Acknowledge uncertainty honestly
- Ask clarifying questions when needed"""


def default_agents() -> list[AgentRecord]:
    return [
        AgentRecord(
            id="default",
            name="Default Assistant",
            description="A general-purpose assistant: helpful, harmless, and honest.",
            avatar_emoji="🧠",
            personality=Personality(
                tone="friendly",
                verbosity="balanced",
                creativity=0.7,
                formality=0.5,
                traits=("helpful", "thoughtful", "clear"),
            ),
            system_prompt=(
                "You are a helpful, harmless, and honest AI assistant. You aim to be "
                "direct and concise while being warm and personable."
            ),
            tags=("default",),
        )
    ]


def default_skills() -> list[SkillRecord]:
    return [
        SkillRecord(
            id="code-review",
            name="Code Review",
            description="Perform thorough code reviews with constructive feedback",
            icon_emoji="🔍",
            skill_type=SkillType.PROMPT,
            definition=PromptDefinition(template=_CODE_REVIEW_TEMPLATE),
        ),
        SkillRecord(
            id="explain-code",
            name="Explain Code",
            description="Explain code in clear, simple terms",
            icon_emoji="📚",
            skill_type=SkillType.PROMPT,
            definition=PromptDefinition(template=_EXPLAIN_CODE_TEMPLATE),
        ),
    ]


def default_instructions() -> list[InstructionRecord]:
    return [
        InstructionRecord(
            id="code-style",
            name="Code Style Guidelines",
            description="Standard code formatting and style rules",
            icon_emoji="📝",
            category=InstructionCategory.CODE_STYLE,
            content=_CODE_STYLE_CONTENT,
            priority=7,
            tags=("code", "style"),
        ),
        InstructionRecord(
            id="communication",
            name="Communication Style",
            description="How to communicate responses",
            icon_emoji="💬",
            category=InstructionCategory.COMMUNICATION,
            content=_COMMUNICATION_CONTENT,
            priority=8,
            tags=("communication",),
        ),
    ]
