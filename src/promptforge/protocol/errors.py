"""JSON-RPC error types.

Every protocol-level failure is raised as a ``JsonRpcError`` and turned
into the response's ``error`` member by the dispatcher.  Domain failures
inside tools do not use this type; see :class:`promptforge.tools.ToolError`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


@dataclass(frozen=True)
class JsonRpcError(Exception):
    """A JSON-RPC error object.

    Parameters
    ----------
    code:
        Numeric JSON-RPC error code, e.g. ``-32601``.
    message:
        Human-readable description.
    data:
        Optional extra payload; omitted from the wire form when ``None``.
    """

    code: int
    message: str
    data: Any = field(default=None)

    def __str__(self) -> str:
        return f"JSON-RPC error {self.code}: {self.message}"

    # dataclass(frozen=True) doesn't call Exception.__init__ automatically
    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (str(self),))

    def to_dict(self) -> dict[str, Any]:
        """Return the ``error`` member of a response."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error

    # ------------------------------------------------------------------
    # Constructors for the standard codes
    # ------------------------------------------------------------------

    @classmethod
    def parse_error(cls, detail: str) -> "JsonRpcError":
        return cls(PARSE_ERROR, f"Parse error: {detail}")

    @classmethod
    def method_not_found(cls, method: str) -> "JsonRpcError":
        return cls(METHOD_NOT_FOUND, f"Method not found: {method}")

    @classmethod
    def invalid_params(cls, message: str = "Invalid params") -> "JsonRpcError":
        return cls(INVALID_PARAMS, message)

    @classmethod
    def internal_error(cls, message: str = "Internal error") -> "JsonRpcError":
        return cls(INTERNAL_ERROR, message)
