"""stdio transport for the prompt-forge JSON-RPC server."""
from __future__ import annotations

from promptforge.server.stdio import StdioServer, build_server

__all__ = ["StdioServer", "build_server"]
