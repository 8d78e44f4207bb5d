"""JSON-RPC 2.0 protocol layer: errors, message framing, handlers and routing."""
from __future__ import annotations

from promptforge.protocol.dispatcher import Dispatcher
from promptforge.protocol.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JsonRpcError,
)
from promptforge.protocol.handlers import (
    AGENT_URI_PREFIX,
    INSTRUCTIONS_URI,
    PROTOCOL_VERSION,
    SERVER_NAME,
    ProtocolHandlers,
)
from promptforge.protocol.messages import (
    JSONRPC_VERSION,
    Request,
    decode_request,
    encode_message,
    error_response,
    success_response,
)

__all__ = [
    "Dispatcher",
    "ProtocolHandlers",
    "JsonRpcError",
    "Request",
    "decode_request",
    "encode_message",
    "error_response",
    "success_response",
    "JSONRPC_VERSION",
    "PROTOCOL_VERSION",
    "SERVER_NAME",
    "AGENT_URI_PREFIX",
    "INSTRUCTIONS_URI",
    "PARSE_ERROR",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
]
