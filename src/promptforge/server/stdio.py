"""Line-delimited JSON-RPC transport over a pair of text streams.

The loop is strictly sequential: read one line, dispatch it, write and
flush the response (if any), then read the next line.  Nothing but
protocol messages is ever written to the output stream.
"""
from __future__ import annotations

import io
import logging
import sys
from typing import TextIO

from promptforge.protocol.dispatcher import Dispatcher
from promptforge.protocol.handlers import ProtocolHandlers
from promptforge.protocol.messages import encode_message
from promptforge.snapshot.providers import SnapshotProvider
from promptforge.snapshot.store import SnapshotStore

logger = logging.getLogger(__name__)


class StdioServer:
    """Serves one JSON-RPC message per input line.

    Parameters
    ----------
    dispatcher:
        Routes decoded requests to handlers.
    reader:
        Input stream; defaults to ``sys.stdin``, switched to UTF-8 with
        undecodable bytes replaced so a bad line still reaches the decoder.
    writer:
        Output stream; defaults to ``sys.stdout``.

    Example
    -------
    ::

        server = build_server(BuiltinSnapshotProvider())
        server.serve_forever()
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        reader: TextIO | None = None,
        writer: TextIO | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        if reader is None:
            reader = sys.stdin
            if isinstance(reader, io.TextIOWrapper):
                reader.reconfigure(encoding="utf-8", errors="replace")
        self.reader = reader
        self.writer = writer if writer is not None else sys.stdout

    def handle_line(self, line: str) -> str | None:
        """Process one raw input line and return the encoded response.

        Returns ``None`` for blank lines and notifications.
        """
        if not line.strip():
            return None
        response = self.dispatcher.handle_line(line)
        if response is None:
            return None
        return encode_message(response)

    def serve_forever(self) -> None:
        """Run until the input stream reaches end of file.

        Raises
        ------
        OSError
            If reading from or writing to the streams fails.
        """
        logger.info("prompt-forge server listening on stdio")
        while True:
            line = self.reader.readline()
            if not line:
                break
            encoded = self.handle_line(line)
            if encoded is not None:
                self._write(encoded)
        logger.info("Input closed; shutting down")

    def _write(self, encoded: str) -> None:
        self.writer.write(encoded + "\n")
        self.writer.flush()


def build_server(
    provider: SnapshotProvider | None,
    reader: TextIO | None = None,
    writer: TextIO | None = None,
) -> StdioServer:
    """Wire a store, handlers and dispatcher around ``provider``.

    The snapshot is loaded once here; a failed load leaves the store
    empty and the server still starts.
    """
    store = SnapshotStore(provider)
    store.refresh()
    dispatcher = Dispatcher(ProtocolHandlers(store))
    return StdioServer(dispatcher, reader=reader, writer=writer)
