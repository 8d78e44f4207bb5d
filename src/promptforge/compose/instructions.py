"""Instruction renderers.

Two orderings exist and are kept apart on purpose:

- listings (``render_instruction_listing``) keep declaration order;
- combined views (``combine_instructions``,
  ``render_instructions_markdown``) sort by priority, highest first,
  keeping declaration order among equal priorities.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from promptforge.records.models import InstructionRecord
from promptforge.snapshot.store import Snapshot

SEPARATOR = "\n\n---\n\n"
NO_INSTRUCTIONS_FOUND = "No instructions found."
NO_INSTRUCTIONS_ENABLED = "No instructions enabled."
MARKDOWN_TITLE = "# Prompt Forge Instructions\n\n"


def sort_by_priority(instructions: Iterable[InstructionRecord]) -> list[InstructionRecord]:
    """Return ``instructions`` by descending priority.

    ``sorted`` is stable, so equal priorities keep their input order.
    """
    return sorted(instructions, key=lambda i: i.priority, reverse=True)


def select_instructions(snapshot: Snapshot, category: str | None = None) -> list[InstructionRecord]:
    """Return enabled instructions in declaration order, optionally
    restricted to the category whose token equals ``category`` ignoring
    case.  An unknown category selects nothing."""
    enabled = snapshot.enabled_instructions()
    if category is None:
        return enabled
    wanted = category.lower()
    return [i for i in enabled if i.category.token == wanted]


def render_instruction_listing(instructions: Sequence[InstructionRecord]) -> str:
    """Render instructions in the given order for the ``get_instructions``
    tool; returns ``"No instructions found."`` when empty."""
    if not instructions:
        return NO_INSTRUCTIONS_FOUND
    parts: list[str] = []
    for instruction in instructions:
        parts.append(
            f"## {instruction.icon_emoji} {instruction.name} "
            f"(Priority: {instruction.priority})\n"
        )
        parts.append(f"Category: {instruction.category.token}\n\n")
        parts.append(instruction.content)
        parts.append(SEPARATOR)
    return "".join(parts)


def combine_instructions(snapshot: Snapshot) -> str:
    """Join all enabled instructions, highest priority first.

    Each block is ``## <name>`` followed by the content; blocks are
    separated by a horizontal rule.  Returns an empty string when no
    instruction is enabled.
    """
    blocks = [
        f"## {i.name}\n{i.content}" for i in sort_by_priority(snapshot.enabled_instructions())
    ]
    return SEPARATOR.join(blocks)


def render_instructions_markdown(snapshot: Snapshot) -> str:
    """Render the ``instructions/all`` resource document.

    Same ordering as :func:`combine_instructions`, with icons, priorities
    and categories in each block and a document title.
    """
    ordered = sort_by_priority(snapshot.enabled_instructions())
    if not ordered:
        return NO_INSTRUCTIONS_ENABLED
    blocks = [
        f"## {i.icon_emoji} {i.name} (Priority: {i.priority})\n"
        f"*Category: {i.category.token}*\n\n"
        f"{i.content}"
        for i in ordered
    ]
    return MARKDOWN_TITLE + SEPARATOR.join(blocks) + "\n"
