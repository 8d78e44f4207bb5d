"""Tool registry for prompt-forge.

Provides a decorator-based registration system for the tools exposed via
``tools/list`` and ``tools/call``.  Each tool is a plain function that
receives the current snapshot and the call arguments and returns result
text; raising :class:`ToolError` turns the call into a tool-level failure
(``isError: true``) rather than a protocol error.

Example
-------
Define a registry and register a tool::

    from promptforge.tools.registry import ToolError, ToolRegistry

    registry = ToolRegistry("example")

    @registry.register(
        "echo",
        description="Echo the text argument",
        input_schema={"type": "object", "properties": {"text": {"type": "string"}}},
    )
    def echo(snapshot, arguments):
        if "text" not in arguments:
            raise ToolError("Missing text")
        return arguments["text"]

Invoke it::

    result = registry.call("echo", snapshot, {"text": "hi"})
    result.to_dict()
    # {'content': [{'type': 'text', 'text': 'hi'}]}
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from promptforge.snapshot.store import Snapshot

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Snapshot, Mapping[str, Any]], str]


class ToolError(Exception):
    """Raised by a tool body to report a domain-level failure.

    The message is returned to the caller as the text of a tool result
    flagged ``isError``.
    """


class ToolNotFoundError(KeyError):
    """Raised when a requested tool name is not in the registry."""

    def __init__(self, name: str, registry_name: str) -> None:
        self.tool_name = name
        self.registry_name = registry_name
        super().__init__(f"Tool {name!r} is not registered in the {registry_name!r} registry.")


class ToolAlreadyRegisteredError(ValueError):
    """Raised when attempting to register a name that already exists."""

    def __init__(self, name: str, registry_name: str) -> None:
        self.tool_name = name
        self.registry_name = registry_name
        super().__init__(
            f"Tool {name!r} is already registered in the {registry_name!r} registry. "
            "Use a unique name."
        )


@dataclass(frozen=True)
class ToolSpec:
    """A registered tool: its public descriptor plus the handler.

    Parameters
    ----------
    name:
        Tool name as used in ``tools/call``.
    description:
        Human-readable summary shown to clients.
    input_schema:
        JSON schema of the ``arguments`` object.
    handler:
        Function computing the result text.
    """

    name: str
    description: str
    input_schema: dict[str, Any]
    handler: ToolHandler = field(repr=False, compare=False)

    def descriptor(self) -> dict[str, Any]:
        """Return the ``tools/list`` entry for this tool."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool invocation.

    ``is_error`` distinguishes a failed tool call from a successful one;
    both travel inside a successful JSON-RPC response.
    """

    text: str
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the ``tools/call`` result payload; ``isError`` is omitted
        on success."""
        payload: dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            payload["isError"] = True
        return payload


class ToolRegistry:
    """Ordered catalogue of tools.

    Tools are listed in registration order.

    Parameters
    ----------
    name:
        A human-readable name for this registry (used in error messages).
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._tools: dict[str, ToolSpec] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        name: str,
        description: str,
        input_schema: dict[str, Any] | None = None,
    ) -> Callable[[ToolHandler], ToolHandler]:
        """Return a function decorator that registers the decorated handler.

        Parameters
        ----------
        name:
            The unique tool name.
        description:
            Summary shown in ``tools/list``.
        input_schema:
            JSON schema for the arguments; defaults to an empty object
            schema.

        Returns
        -------
        Callable[[ToolHandler], ToolHandler]
            A decorator that registers the handler and returns it
            unchanged.

        Raises
        ------
        ToolAlreadyRegisteredError
            If ``name`` is already in use in this registry.
        """

        def decorator(handler: ToolHandler) -> ToolHandler:
            self.register_tool(
                ToolSpec(
                    name=name,
                    description=description,
                    input_schema=input_schema or {"type": "object", "properties": {}},
                    handler=handler,
                )
            )
            return handler

        return decorator

    def register_tool(self, spec: ToolSpec) -> None:
        """Register a ``ToolSpec`` directly.

        Raises
        ------
        ToolAlreadyRegisteredError
            If ``spec.name`` is already registered.
        """
        if spec.name in self._tools:
            raise ToolAlreadyRegisteredError(spec.name, self._name)
        self._tools[spec.name] = spec
        logger.debug("Registered tool %r in registry %r", spec.name, self._name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> ToolSpec:
        """Return the tool registered under ``name``.

        Raises
        ------
        ToolNotFoundError
            If no tool is registered under ``name``.
        """
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(name, self._name) from None

    def list_tools(self) -> list[str]:
        """Return tool names in registration order."""
        return list(self._tools)

    def descriptors(self) -> list[dict[str, Any]]:
        """Return ``tools/list`` descriptors in registration order."""
        return [spec.descriptor() for spec in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __repr__(self) -> str:
        return f"ToolRegistry(name={self._name!r}, tools={self.list_tools()})"

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def call(self, name: str, snapshot: Snapshot, arguments: Mapping[str, Any]) -> ToolResult:
        """Invoke tool ``name`` against ``snapshot``.

        Unknown tools and :class:`ToolError` failures both come back as a
        ``ToolResult`` with ``is_error`` set; they never raise.

        Parameters
        ----------
        name:
            Tool to invoke.
        snapshot:
            Records the tool reads from.
        arguments:
            The call arguments.

        Returns
        -------
        ToolResult
            Result text and error flag.
        """
        try:
            spec = self.get(name)
        except ToolNotFoundError:
            return ToolResult(f"Unknown tool: {name}", is_error=True)
        try:
            return ToolResult(spec.handler(snapshot, arguments))
        except ToolError as exc:
            logger.debug("Tool %r failed: %s", name, exc)
            return ToolResult(str(exc), is_error=True)
