"""Protocol method handlers.

Each handler takes the request's ``params`` (``None`` when absent) and
returns the JSON-compatible ``result``, or raises
:class:`~promptforge.protocol.errors.JsonRpcError`.  Handlers read
``store.current`` once at entry and use that snapshot for the whole
call.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from promptforge import __version__
from promptforge.compose.instructions import render_instructions_markdown
from promptforge.protocol.errors import JsonRpcError
from promptforge.records.serializer import RecordSerializer
from promptforge.snapshot.store import SnapshotStore
from promptforge.tools.catalog import TOOLS
from promptforge.tools.registry import ToolRegistry

SERVER_NAME = "prompt-forge"
PROTOCOL_VERSION = "2024-11-05"
URI_SCHEME = "prompt-forge://"
AGENT_URI_PREFIX = f"{URI_SCHEME}agents/"
INSTRUCTIONS_URI = f"{URI_SCHEME}instructions/all"


def _require_params(params: Any) -> Mapping[str, Any]:
    if not isinstance(params, Mapping):
        raise JsonRpcError.invalid_params()
    return params


class ProtocolHandlers:
    """Implements every method the server answers.

    Parameters
    ----------
    store:
        Source of the current snapshot; refreshed by :meth:`reload`.
    tools:
        Tool catalogue; defaults to the built-in six tools.
    """

    def __init__(self, store: SnapshotStore, tools: ToolRegistry | None = None) -> None:
        self.store = store
        self.tools = tools if tools is not None else TOOLS
        self._serializer = RecordSerializer()

    # ------------------------------------------------------------------
    # Handshake
    # ------------------------------------------------------------------

    def initialize(self, params: Any) -> dict[str, Any]:
        # Accepted at any time; there is no session state to reset.
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {
                "tools": {"listChanged": False},
                "resources": {"listChanged": False, "subscribe": False},
            },
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    def initialized(self, params: Any) -> dict[str, Any]:
        return {}

    def ping(self, params: Any) -> dict[str, Any]:
        return {}

    def reload(self, params: Any) -> dict[str, Any]:
        """Refresh the snapshot from the provider.

        Provider failures are logged by the store and reported here only
        as ``reloaded: false``.
        """
        return {"reloaded": self.store.refresh()}

    # ------------------------------------------------------------------
    # Tools
    # ------------------------------------------------------------------

    def tools_list(self, params: Any) -> dict[str, Any]:
        return {"tools": self.tools.descriptors()}

    def tools_call(self, params: Any) -> dict[str, Any]:
        """Invoke a tool.

        Raises
        ------
        JsonRpcError
            ``-32602`` if ``params`` is not an object or ``name`` is not a
            string.  Unknown tools and tool failures are *not* protocol
            errors; they come back as results with ``isError: true``.
        """
        params = _require_params(params)
        name = params.get("name")
        if not isinstance(name, str):
            raise JsonRpcError.invalid_params("Missing tool name")
        arguments = params.get("arguments")
        if not isinstance(arguments, Mapping):
            arguments = {}
        snapshot = self.store.current
        return self.tools.call(name, snapshot, arguments).to_dict()

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def resources_list(self, params: Any) -> dict[str, Any]:
        snapshot = self.store.current
        resources = [
            {
                "uri": f"{AGENT_URI_PREFIX}{agent.id}",
                "name": agent.name,
                "description": agent.description,
                "mimeType": "application/json",
            }
            for agent in snapshot.agents
        ]
        resources.append(
            {
                "uri": INSTRUCTIONS_URI,
                "name": "All Instructions",
                "description": "All enabled instructions combined",
                "mimeType": "text/markdown",
            }
        )
        return {"resources": resources}

    def resources_read(self, params: Any) -> dict[str, Any]:
        """Read one resource by exact uri.

        Raises
        ------
        JsonRpcError
            ``-32602`` for missing params/uri and for unknown resources.
        """
        params = _require_params(params)
        uri = params.get("uri")
        if not isinstance(uri, str):
            raise JsonRpcError.invalid_params("Missing uri")

        snapshot = self.store.current
        if uri == INSTRUCTIONS_URI:
            return _contents(uri, "text/markdown", render_instructions_markdown(snapshot))

        if uri.startswith(AGENT_URI_PREFIX):
            agent_id = uri[len(AGENT_URI_PREFIX):]
            for agent in snapshot.agents:
                if agent.id == agent_id:
                    text = self._serializer.to_pretty_json(self._serializer.agent_to_dict(agent))
                    return _contents(uri, "application/json", text)

        raise JsonRpcError.invalid_params(f"Resource not found: {uri}")


def _contents(uri: str, mime_type: str, text: str) -> dict[str, Any]:
    return {"contents": [{"uri": uri, "mimeType": mime_type, "text": text}]}
