"""
Stdio host for the Gemini MCP server.

Protocol: JSON-RPC 2.0 over stdio (one JSON object per line). Each request
line is dispatched in its own task, so a slow generation call does not hold
up the lines behind it. Every response is written as one whole line.

Claude Desktop / MCP client entry
---------------------------------
{
  "mcpServers": {
    "gemini": {
      "command": "gemini-mcp",
      "env": {"GEMINI_API_KEY": "<key>"}
    }
  }
}
"""
from __future__ import annotations

import asyncio
import logging
import sys
from typing import Callable

from .backend import GeminiClient, GenerationBackend
from .config import MissingCredentialError, ServerConfig, require_api_key
from .dispatcher import Dispatcher, Reply
from .errors import InternalError, ParseError
from .logging_config import setup_logging
from .protocol import (
    Message,
    Notification,
    Request,
    Response,
    decode_line,
    encode_response,
    parse_error_response,
)
from .sessions import SessionStore
from .tools.handlers import ToolHandlers, build_registry

logger = logging.getLogger(__name__)


def _stdout_write(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


class StdioServer:
    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        write: Callable[[str], None] | None = None,
        max_line_bytes: int = ServerConfig.max_line_bytes,
    ) -> None:
        self.dispatcher = dispatcher
        self.write = write or _stdout_write
        self.max_line_bytes = max_line_bytes
        self._pending: set[asyncio.Task[None]] = set()

    def _emit(self, response: Response) -> None:
        self.write(encode_response(response))

    async def _handle(self, message: Message) -> None:
        try:
            outcome = await self.dispatcher.dispatch(message)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unhandled error while dispatching %s", message.method)
            if isinstance(message, Request):
                self._emit(Response.failure(message.id, InternalError.from_exception(exc)))
            return
        if isinstance(outcome, Reply):
            self._emit(outcome.response)

    def feed(self, line: str) -> bool:
        """Decode one line and schedule its handling.

        Returns False when the line asks the server to stop reading.
        """
        try:
            message = decode_line(line)
        except ParseError:
            logger.warning("Unparseable input line (%d chars)", len(line))
            self._emit(parse_error_response())
            return True
        if isinstance(message, Notification) and message.is_exit:
            logger.info("Exit notification received; draining %d in-flight calls", len(self._pending))
            return False
        task = asyncio.create_task(self._handle(message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return True

    async def drain(self) -> None:
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def _discard_line(self, reader: asyncio.StreamReader, consumed: int) -> int:
        """Skip the rest of an over-long line, newline included.

        Returns the number of bytes dropped.
        """
        dropped = 0
        while True:
            dropped += len(await reader.readexactly(consumed))
            try:
                tail = await reader.readuntil(b"\n")
            except asyncio.LimitOverrunError as exc:
                consumed = exc.consumed
                continue
            except asyncio.IncompleteReadError as exc:
                return dropped + len(exc.partial)
            return dropped + len(tail)

    async def serve(self, reader: asyncio.StreamReader) -> int:
        while True:
            try:
                line_bytes = await reader.readuntil(b"\n")
            except asyncio.IncompleteReadError as exc:
                # EOF; a final line without a newline still counts.
                line_bytes = exc.partial
            except asyncio.LimitOverrunError as exc:
                self._emit(parse_error_response())
                dropped = await self._discard_line(reader, exc.consumed)
                logger.warning("Dropped over-long input line (%d bytes)", dropped)
                continue
            if not line_bytes:
                break
            line = line_bytes.decode("utf-8", errors="replace").strip()
            if line and not self.feed(line):
                break
        await self.drain()
        logger.info("Input closed; shutting down")
        return 0

    async def serve_stdio(self) -> int:
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader(limit=self.max_line_bytes)
        protocol = asyncio.StreamReaderProtocol(reader)
        await loop.connect_read_pipe(lambda: protocol, sys.stdin)
        return await self.serve(reader)


def create_server(
    config: ServerConfig,
    api_key: str,
    *,
    backend: GenerationBackend | None = None,
    write: Callable[[str], None] | None = None,
) -> StdioServer:
    if backend is None:
        backend = GeminiClient(
            api_key,
            model=config.model,
            base_url=config.base_url,
            api_version=config.api_version,
            timeout=config.request_timeout,
        )
    handlers = ToolHandlers(backend, SessionStore())
    dispatcher = Dispatcher(build_registry(handlers))
    return StdioServer(dispatcher, write=write, max_line_bytes=config.max_line_bytes)


def run(config: ServerConfig, api_key: str | None = None) -> int:
    """Start the server on stdin/stdout and return the process exit status."""
    if api_key is None:
        try:
            api_key = require_api_key()
        except MissingCredentialError as exc:
            print(str(exc), file=sys.stderr)
            return 1
    setup_logging(config.log_level, secrets=[api_key])
    logger.info("Starting Gemini MCP server (model %s)", config.model)
    server = create_server(config, api_key)
    return asyncio.run(server.serve_stdio())
