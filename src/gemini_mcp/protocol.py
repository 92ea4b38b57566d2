"""
JSON-RPC 2.0 message codec for the stdio transport.

One inbound line decodes to a :class:`Request` or a :class:`Notification`;
one :class:`Response` encodes to exactly one outbound line.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Union

from .errors import ParseError, RpcError

JSONRPC_VERSION = "2.0"
NOTIFICATION_PREFIX = "notifications/"
EXIT_METHOD = "exit"

# Used when a line is too broken to recover its id.
SENTINEL_ID = 0

RequestId = Union[str, int, None]


@dataclass(frozen=True, slots=True)
class Request:
    id: RequestId
    method: str
    params: Any = None


@dataclass(frozen=True, slots=True)
class Notification:
    method: str
    params: Any = None

    @property
    def is_exit(self) -> bool:
        return self.method == EXIT_METHOD


Message = Union[Request, Notification]


@dataclass(frozen=True, slots=True)
class Response:
    id: RequestId
    result: Any = None
    error: dict[str, Any] | None = field(default=None)

    @classmethod
    def success(cls, request_id: RequestId, result: Any) -> "Response":
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId, exc: RpcError) -> "Response":
        return cls(id=request_id, error=exc.to_error())

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error
        else:
            payload["result"] = self.result
        return payload


def is_notification_method(method: str) -> bool:
    return method.startswith(NOTIFICATION_PREFIX) or method == EXIT_METHOD


def decode_line(line: str) -> Message:
    try:
        raw = json.loads(line)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise ParseError("Parse error") from exc
    if not isinstance(raw, dict):
        raise ParseError("Parse error")
    method = raw.get("method")
    if not isinstance(method, str):
        raise ParseError("Parse error")
    params = raw.get("params")
    if is_notification_method(method):
        return Notification(method=method, params=params)
    return Request(id=raw.get("id"), method=method, params=params)


def encode_response(response: Response) -> str:
    # json.dumps escapes control characters, so the result never spans lines.
    return json.dumps(response.as_dict(), ensure_ascii=False)


def parse_error_response() -> Response:
    return Response.failure(SENTINEL_ID, ParseError("Parse error"))
