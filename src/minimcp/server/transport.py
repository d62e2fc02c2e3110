"""StdioServer — one JSON-RPC request per input line, one response per output line.

Requests are handled strictly in sequence.  A line that fails to parse, or
whose handling raises, produces an id-less error line and the loop carries
on with the next line.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from minimcp.server.models import JsonRpcRequest, TransportError

if TYPE_CHECKING:
    from minimcp.server.router import RequestRouter

logger = logging.getLogger(__name__)


class StdioServer:
    """Reads newline-delimited JSON from *stdin* and writes responses to *stdout*.

    Usage::

        server = StdioServer(RequestRouter(default_registry()))
        server.serve_forever()   # returns on end of input
    """

    def __init__(
        self,
        router: RequestRouter,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._router = router
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout

    def serve_forever(self) -> None:
        """Process lines until the input stream is exhausted."""
        logger.info("Server started, waiting for requests")
        while True:
            line = self._stdin.readline()
            if not line:
                break
            output = self.handle_line(line)
            if output is not None:
                self._write(output)
        logger.info("Input closed, server stopping")

    def handle_line(self, line: str) -> str | None:
        """Turn one input line into one output line.  Blank lines yield ``None``."""
        if not line.strip():
            return None

        logger.debug("INPUT: %s", line.rstrip("\n"))
        try:
            request = JsonRpcRequest.model_validate_json(line)
            response = self._router.handle(request)
            return response.model_dump_json()
        except Exception as exc:
            logger.exception("Failed to process request line")
            return TransportError(error=str(exc)).model_dump_json()

    def _write(self, output: str) -> None:
        self._stdout.write(output + "\n")
        self._stdout.flush()
