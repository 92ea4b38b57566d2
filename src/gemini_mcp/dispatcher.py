"""
Request routing for the MCP stdio server.

Every decoded message is classified by method name and turned into an
:class:`Outcome`: ``Reply(response)`` for requests, ``NoReply`` for
notifications. Handler failures never escape :meth:`Dispatcher.dispatch`;
they come back as JSON-RPC error envelopes.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Union

from .errors import InternalError, InvalidParamsError, MethodNotFoundError, RpcError
from .protocol import Message, Notification, Request, Response
from .registry import ToolRegistry

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "gemini-2.5-pro-mcp-server"
SERVER_VERSION = "2.5.0"

# Declared by MCP but intentionally unsupported: clients get "not found",
# never an empty list.
UNSUPPORTED_DISCOVERY_METHODS = frozenset({"resources/list", "prompts/list"})


class MessageKind(str, enum.Enum):
    NOTIFICATION = "notification"
    LIFECYCLE = "lifecycle"
    LIST_TOOLS = "list_tools"
    CALL_TOOL = "call_tool"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Reply:
    response: Response


@dataclass(frozen=True, slots=True)
class NoReply:
    shutdown: bool = False


Outcome = Union[Reply, NoReply]


def classify(message: Message) -> MessageKind:
    if isinstance(message, Notification):
        return MessageKind.NOTIFICATION
    if message.method == "initialize":
        return MessageKind.LIFECYCLE
    if message.method == "tools/list":
        return MessageKind.LIST_TOOLS
    if message.method == "tools/call":
        return MessageKind.CALL_TOOL
    if message.method in UNSUPPORTED_DISCOVERY_METHODS:
        return MessageKind.UNSUPPORTED
    return MessageKind.UNKNOWN


class Dispatcher:
    def __init__(
        self,
        registry: ToolRegistry,
        *,
        server_name: str = SERVER_NAME,
        server_version: str = SERVER_VERSION,
        protocol_version: str = PROTOCOL_VERSION,
    ) -> None:
        self.registry = registry
        self.server_name = server_name
        self.server_version = server_version
        self.protocol_version = protocol_version
        # Advisory only: tool calls are accepted before the handshake.
        self.initialized = False

    async def dispatch(self, message: Message) -> Outcome:
        kind = classify(message)
        logger.debug("dispatch %s -> %s", message.method, kind.value)
        if not isinstance(message, Request):
            return self._notify(message)
        try:
            if kind is MessageKind.LIFECYCLE:
                result = self._initialize(message)
            elif kind is MessageKind.LIST_TOOLS:
                result = {"tools": [d.as_dict() for d in self.registry.list()]}
            elif kind is MessageKind.CALL_TOOL:
                result = await self._call_tool(message.params)
            else:
                raise MethodNotFoundError("Method not found")
        except RpcError as exc:
            return Reply(Response.failure(message.id, exc))
        return Reply(Response.success(message.id, result))

    def _notify(self, message: Notification) -> NoReply:
        try:
            if message.method == "notifications/initialized":
                self.initialized = True
                logger.info("Client completed initialization")
            elif message.is_exit:
                logger.info("Exit notification received")
                return NoReply(shutdown=True)
        except Exception:  # noqa: BLE001
            logger.exception("Error while handling notification %s", message.method)
        return NoReply()

    def _initialize(self, request: Request) -> dict[str, Any]:
        params = request.params if isinstance(request.params, dict) else {}
        client = params.get("clientInfo") or {}
        if isinstance(client, dict) and client.get("name"):
            logger.info(
                "initialize from %s %s (requested protocol %s)",
                client.get("name"),
                client.get("version", ""),
                params.get("protocolVersion", "?"),
            )
        return {
            "protocolVersion": self.protocol_version,
            "serverInfo": {"name": self.server_name, "version": self.server_version},
            "capabilities": {"tools": {}},
        }

    async def _call_tool(self, params: Any) -> dict[str, Any]:
        if params is None:
            params = {}
        if not isinstance(params, dict):
            raise InvalidParamsError("tools/call params must be an object")
        name = params.get("name")
        tool = self.registry.resolve(name) if isinstance(name, str) else None
        if tool is None:
            raise MethodNotFoundError(f"Unknown tool: {name}")
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise InvalidParamsError("tools/call arguments must be an object")

        try:
            text = await tool.handler(arguments)
        except InvalidParamsError as exc:
            logger.warning("Tool %s rejected arguments: %s", name, exc.message)
            raise
        except RpcError as exc:
            logger.warning("Tool %s failed: %s", name, exc.message)
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Tool %s failed: %s", name, exc, exc_info=logger.isEnabledFor(logging.DEBUG))
            raise InternalError.from_exception(exc) from exc
        return {"content": [{"type": "text", "text": text}]}
