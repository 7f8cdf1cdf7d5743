"""JSON-RPC 2.0 envelopes: requests, responses and error objects."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from agentwire.parts import DecodeError
from agentwire.protocol import generate_rpc_id

__all__ = [
    "VERSION",
    "CODE_PARSE_ERROR",
    "CODE_INVALID_REQUEST",
    "CODE_METHOD_NOT_FOUND",
    "CODE_INVALID_PARAMS",
    "CODE_INTERNAL_ERROR",
    "JSONRPCError",
    "parse_error",
    "invalid_request",
    "method_not_found",
    "invalid_params",
    "internal_error",
    "Request",
    "Response",
    "new_request",
    "new_response",
    "new_error_response",
    "new_notification_response",
]

VERSION = "2.0"

CODE_PARSE_ERROR = -32700
CODE_INVALID_REQUEST = -32600
CODE_METHOD_NOT_FOUND = -32601
CODE_INVALID_PARAMS = -32602
CODE_INTERNAL_ERROR = -32603


def _encode(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def _dumps(value: Any) -> str:
    return json.dumps(
        value,
        default=_encode,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def _loads(text: Union[str, bytes, bytearray]) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise DecodeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _version(data: Mapping[str, Any]) -> str:
    value = data.get("jsonrpc")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError("field 'jsonrpc' must be a string")
    return value


class JSONRPCError(Exception):
    """A JSON-RPC error object, usable as an exception."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(code, message, data)
        self.code = code
        self.message = message
        self.data = data

    def __str__(self) -> str:
        return f"jsonrpc error {self.code}: {self.message}"

    def __repr__(self) -> str:
        return f"JSONRPCError(code={self.code!r}, message={self.message!r}, data={self.data!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSONRPCError):
            return NotImplemented
        return (self.code, self.message, self.data) == (other.code, other.message, other.data)

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out

    @classmethod
    def from_dict(cls, data: Any) -> JSONRPCError:
        data = _mapping(data, "error")
        code = data.get("code", 0)
        if isinstance(code, bool) or not isinstance(code, int):
            raise DecodeError("field 'code' must be an integer")
        message = data.get("message")
        if message is None:
            message = ""
        if not isinstance(message, str):
            raise DecodeError("field 'message' must be a string")
        return cls(code, message, data.get("data"))


def parse_error(data: Any = None) -> JSONRPCError:
    """Invalid JSON was received."""
    return JSONRPCError(CODE_PARSE_ERROR, "Parse error", data)


def invalid_request(data: Any = None) -> JSONRPCError:
    """The JSON is not a valid request object."""
    return JSONRPCError(CODE_INVALID_REQUEST, "Invalid Request", data)


def method_not_found(data: Any = None) -> JSONRPCError:
    """The requested method does not exist."""
    return JSONRPCError(CODE_METHOD_NOT_FOUND, "Method not found", data)


def invalid_params(data: Any = None) -> JSONRPCError:
    """The method parameters are invalid."""
    return JSONRPCError(CODE_INVALID_PARAMS, "Invalid params", data)


def internal_error(data: Any = None) -> JSONRPCError:
    """A generic internal server error."""
    return JSONRPCError(CODE_INTERNAL_ERROR, "Internal error", data)


@dataclass
class Request:
    """A JSON-RPC request; an ``id`` of None makes it a notification."""

    method: str
    id: Any = None
    params: Any = None
    jsonrpc: str = VERSION

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.id is not None:
            out["id"] = self.id
        out["method"] = self.method
        if self.params is not None:
            out["params"] = self.params
        return out

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Any) -> Request:
        data = _mapping(data, "request")
        method = data.get("method")
        if method is None:
            method = ""
        if not isinstance(method, str):
            raise DecodeError("field 'method' must be a string")
        return cls(
            method=method,
            id=data.get("id"),
            params=data.get("params"),
            jsonrpc=_version(data),
        )

    @classmethod
    def from_json(cls, text: Union[str, bytes, bytearray]) -> Request:
        return cls.from_dict(_loads(text))


@dataclass
class Response:
    """A JSON-RPC response carrying either a result or an error."""

    id: Any = None
    result: Any = None
    error: Optional[JSONRPCError] = None
    jsonrpc: str = VERSION

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.id is not None:
            out["id"] = self.id
        if self.result is not None:
            out["result"] = self.result
        if self.error is not None:
            out["error"] = self.error.to_dict()
        return out

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Any) -> Response:
        data = _mapping(data, "response")
        raw_error = data.get("error")
        return cls(
            id=data.get("id"),
            result=data.get("result"),
            error=None if raw_error is None else JSONRPCError.from_dict(raw_error),
            jsonrpc=_version(data),
        )

    @classmethod
    def from_json(cls, text: Union[str, bytes, bytearray]) -> Response:
        return cls.from_dict(_loads(text))


def new_request(method: str, id: str = "") -> Request:
    """Create a request; an empty ``id`` is replaced by a generated one."""
    if not id:
        id = generate_rpc_id()
    return Request(method=method, id=id)


def new_response(id: Any, result: Any) -> Response:
    """Create a success response."""
    return Response(id=id, result=result)


def new_error_response(id: Any, error: JSONRPCError) -> Response:
    """Create an error response."""
    return Response(id=id, error=error)


def new_notification_response(id: Any, result: Any) -> Response:
    """Create a response for event streams; the ID is omitted when None."""
    return Response(id=id, result=result)