"""Method routing for decoded JSON-RPC requests."""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from promptforge.protocol.errors import JsonRpcError
from promptforge.protocol.handlers import ProtocolHandlers
from promptforge.protocol.messages import (
    Request,
    decode_request,
    error_response,
    success_response,
)

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Any]


class Dispatcher:
    """Routes requests to :class:`ProtocolHandlers` by exact method name.

    The method table is fixed when the dispatcher is built.
    """

    def __init__(self, handlers: ProtocolHandlers) -> None:
        self.handlers = handlers
        self._methods: dict[str, Handler] = {
            "initialize": handlers.initialize,
            "initialized": handlers.initialized,
            "notifications/initialized": handlers.initialized,
            "notifications/reload": handlers.reload,
            "ping": handlers.ping,
            "tools/list": handlers.tools_list,
            "tools/call": handlers.tools_call,
            "resources/list": handlers.resources_list,
            "resources/read": handlers.resources_read,
        }

    @property
    def methods(self) -> tuple[str, ...]:
        return tuple(self._methods)

    def dispatch(self, request: Request) -> dict[str, Any] | None:
        """Run the handler for ``request`` and build its response.

        Returns ``None`` for notifications, whatever the handler did.
        Unknown methods sent as notifications are ignored silently.
        """
        try:
            result = self._invoke(request)
        except JsonRpcError as exc:
            if request.is_notification:
                logger.debug("Notification %s failed: %s", request.method, exc)
                return None
            return error_response(request.id, exc)
        except Exception:
            logger.exception("Unhandled error in %s", request.method)
            if request.is_notification:
                return None
            return error_response(request.id, JsonRpcError.internal_error())

        if request.is_notification:
            return None
        return success_response(request.id, result)

    def handle_line(self, line: str) -> dict[str, Any] | None:
        """Decode ``line`` and dispatch it.

        A line that fails to decode always gets a parse-error response
        with a ``null`` id, because no id can be trusted.
        """
        try:
            request = decode_request(line)
        except JsonRpcError as exc:
            logger.warning("Rejected input line: %s", exc.message)
            return error_response(None, exc)
        return self.dispatch(request)

    def _invoke(self, request: Request) -> Any:
        handler = self._methods.get(request.method)
        if handler is None:
            raise JsonRpcError.method_not_found(request.method)
        logger.debug("Dispatching %s (id=%r)", request.method, request.id)
        return handler(request.params)
