"""Compose engine: agent composition and instruction rendering."""
from __future__ import annotations

from promptforge.compose.composer import AgentComposer, compose_agent, skill_prompt_text
from promptforge.compose.instructions import (
    NO_INSTRUCTIONS_ENABLED,
    NO_INSTRUCTIONS_FOUND,
    combine_instructions,
    render_instruction_listing,
    render_instructions_markdown,
    select_instructions,
    sort_by_priority,
)

__all__ = [
    "AgentComposer",
    "compose_agent",
    "skill_prompt_text",
    "combine_instructions",
    "render_instructions_markdown",
    "render_instruction_listing",
    "select_instructions",
    "sort_by_priority",
    "NO_INSTRUCTIONS_FOUND",
    "NO_INSTRUCTIONS_ENABLED",
]
