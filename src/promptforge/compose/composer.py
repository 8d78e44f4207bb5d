"""Agent composition: snapshot records → one prompt document.

The ``AgentComposer`` merges an agent with the skills and instructions it
references, plus every enabled instruction it does not reference, into a
markdown document:

- a header with the avatar, name, tone, verbosity and traits
- the system prompt, verbatim
- ``## Attached Skills``: referenced, enabled skills in reference order
- ``## Attached Instructions``: referenced, enabled instructions in
  reference order
- ``## Global Instructions``: all other enabled instructions in
  declaration order

Sections without entries are left out.  Output depends only on the
snapshot and the agent, so repeated calls produce identical text.

Usage
-----
::

    from promptforge.compose import AgentComposer

    composer = AgentComposer(store.current)
    document = composer.compose(agent)
"""
from __future__ import annotations

from promptforge.records.models import (
    AgentRecord,
    InstructionRecord,
    PromptDefinition,
    SkillDefinition,
    SkillRecord,
    ToolDefinition,
    WorkflowDefinition,
)
from promptforge.snapshot.store import Snapshot


def skill_prompt_text(definition: SkillDefinition) -> str | None:
    """Return the text a skill contributes to a composed prompt.

    Only prompt templates carry text; tool and workflow skills are listed
    by name alone.

    Raises
    ------
    TypeError
        If ``definition`` is not a known definition variant.
    """
    if isinstance(definition, PromptDefinition):
        return definition.template
    if isinstance(definition, (ToolDefinition, WorkflowDefinition)):
        return None
    raise TypeError(f"Unhandled skill definition: {type(definition).__name__}")


class AgentComposer:
    """Builds the apply-agent document for agents of one snapshot.

    Parameters
    ----------
    snapshot:
        The records to resolve references against.  The composer never
        re-reads the store, so one composition sees one snapshot.
    """

    def __init__(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot

    def compose(self, agent: AgentRecord) -> str:
        """Render ``agent`` with its skills and instructions.

        Parameters
        ----------
        agent:
            The agent to compose; it need not belong to the snapshot.

        Returns
        -------
        str
            The composed markdown document.
        """
        parts: list[str] = []
        parts.extend(self._header(agent))
        parts.append("## System Prompt\n\n")
        parts.append(f"{agent.system_prompt}\n\n")
        parts.extend(self._attached_skills(agent))
        parts.extend(self._attached_instructions(agent))
        parts.extend(self._global_instructions(agent))
        return "".join(parts)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _header(self, agent: AgentRecord) -> list[str]:
        personality = agent.personality
        parts = [
            "# Agent Configuration\n\n",
            f"**Agent:** {agent.avatar_emoji} {agent.name}\n\n",
            f"**Tone:** {personality.tone} | **Verbosity:** {personality.verbosity}\n\n",
        ]
        if personality.traits:
            parts.append(f"**Traits:** {', '.join(personality.traits)}\n\n")
        return parts

    def _attached_skills(self, agent: AgentRecord) -> list[str]:
        skills: list[SkillRecord] = []
        for skill_id in agent.skill_refs:
            skill = self._snapshot.enabled_skill(skill_id)
            if skill is not None:
                skills.append(skill)
        if not skills:
            return []

        parts = ["## Attached Skills\n\n"]
        for skill in skills:
            parts.append(f"### {skill.icon_emoji} {skill.name}\n")
            text = skill_prompt_text(skill.definition)
            if text is not None:
                parts.append(f"{text}\n\n")
        return parts

    def _attached_instructions(self, agent: AgentRecord) -> list[str]:
        instructions: list[InstructionRecord] = []
        for instruction_id in agent.instruction_refs:
            instruction = self._snapshot.enabled_instruction(instruction_id)
            if instruction is not None:
                instructions.append(instruction)
        if not instructions:
            return []

        parts = ["## Attached Instructions\n\n"]
        for instruction in instructions:
            parts.append(f"### {instruction.icon_emoji} {instruction.name}\n")
            parts.append(f"{instruction.content}\n\n")
        return parts

    def _global_instructions(self, agent: AgentRecord) -> list[str]:
        # Declaration order, not priority order.
        attached = set(agent.instruction_refs)
        instructions = [
            i for i in self._snapshot.enabled_instructions() if i.id not in attached
        ]
        if not instructions:
            return []

        parts = ["## Global Instructions\n\n"]
        for instruction in instructions:
            parts.append(
                f"### {instruction.icon_emoji} {instruction.name} "
                f"({instruction.category.token})\n"
            )
            parts.append(f"{instruction.content}\n\n")
        return parts


def compose_agent(snapshot: Snapshot, agent: AgentRecord) -> str:
    """Convenience wrapper around :meth:`AgentComposer.compose`."""
    return AgentComposer(snapshot).compose(agent)
