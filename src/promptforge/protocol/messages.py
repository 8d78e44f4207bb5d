"""JSON-RPC 2.0 message framing.

One line of input decodes to one :class:`Request`.  A request without an
``id`` (or with ``"id": null``) is a notification and never gets a
response.  Responses are plain dicts built by :func:`success_response`
and :func:`error_response` and encoded with :func:`encode_message`.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from promptforge.protocol.errors import JsonRpcError

JSONRPC_VERSION = "2.0"


@dataclass(frozen=True)
class Request:
    """A decoded JSON-RPC request or notification.

    Parameters
    ----------
    method:
        The method name, matched case-sensitively.
    id:
        The request id, or ``None`` for notifications.
    params:
        The ``params`` member as sent; ``None`` when absent.
    """

    method: str
    id: Any = None
    params: Any = None

    @property
    def is_notification(self) -> bool:
        """Return True if no response must be sent for this message."""
        return self.id is None


def decode_request(line: str) -> Request:
    """Decode one input line into a :class:`Request`.

    Raises
    ------
    JsonRpcError
        With code ``-32700`` if the line is not valid JSON or not a
        JSON-RPC 2.0 request object.
    """
    try:
        message = json.loads(line)
    except (ValueError, RecursionError) as exc:
        # ValueError also covers integers past the int-conversion digit limit.
        raise JsonRpcError.parse_error(str(exc)) from exc
    if not isinstance(message, dict):
        raise JsonRpcError.parse_error(f"expected a JSON object, got {type(message).__name__}")
    if message.get("jsonrpc") != JSONRPC_VERSION:
        raise JsonRpcError.parse_error('missing or unsupported "jsonrpc" version')
    method = message.get("method")
    if not isinstance(method, str):
        raise JsonRpcError.parse_error('missing or non-string "method"')
    return Request(method=method, id=message.get("id"), params=message.get("params"))


def success_response(request_id: Any, result: Any) -> dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(request_id: Any, error: JsonRpcError) -> dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error.to_dict()}


def encode_message(message: dict[str, Any]) -> str:
    """Encode ``message`` as a single compact, ASCII-only JSON line (no newline)."""
    return json.dumps(message, separators=(",", ":"))
