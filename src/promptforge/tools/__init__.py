"""Tool subsystem: the registry and the fixed tool catalogue.

Importing this package registers the six catalogue tools on
:data:`promptforge.tools.catalog.TOOLS`.
"""
from __future__ import annotations

from promptforge.tools.catalog import TOOLS
from promptforge.tools.registry import (
    ToolAlreadyRegisteredError,
    ToolError,
    ToolNotFoundError,
    ToolRegistry,
    ToolResult,
    ToolSpec,
)

__all__ = [
    "TOOLS",
    "ToolRegistry",
    "ToolSpec",
    "ToolResult",
    "ToolError",
    "ToolNotFoundError",
    "ToolAlreadyRegisteredError",
]
