from __future__ import annotations

from typing import Any

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class RpcError(RuntimeError):
    """A failure that maps onto a JSON-RPC error object."""

    code = INTERNAL_ERROR

    def __init__(self, message: str, *, data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.data = data

    def to_error(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


class ParseError(RpcError):
    code = PARSE_ERROR


class MethodNotFoundError(RpcError):
    code = METHOD_NOT_FOUND


class InvalidParamsError(RpcError):
    code = INVALID_PARAMS


class InternalError(RpcError):
    code = INTERNAL_ERROR

    @classmethod
    def from_exception(cls, exc: BaseException) -> "InternalError":
        return cls(str(exc) or type(exc).__name__)
