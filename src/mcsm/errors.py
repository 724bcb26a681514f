"""Error taxonomy for the management protocol client.

Validation errors are raised while parsing anything the server sends and always
carry the path to the offending value. Protocol errors are well-formed JSON-RPC
error objects. Everything else a transport reports is passed through untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from typing import Any

PathSegment = str | int


def json_type_name(value: object) -> str:
    """Name the JSON type of a decoded value, for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


class InvalidResponseError(Exception):
    """Base class for responses that do not match the expected shape."""

    def __init__(self, message: str, response: Any, path: tuple[PathSegment, ...]) -> None:
        self.response = response
        self.path = path
        self.detail = message
        super().__init__(f"Invalid response from server at '{'.'.join(str(p) for p in path)}'. {message}")


class IncorrectTypeError(InvalidResponseError):
    """A value has the wrong JSON type."""

    def __init__(self, expected_type: str, found_type: str, response: Any = None, *path: PathSegment) -> None:
        super().__init__(f"Expected {expected_type}, received {found_type}.", response, path)
        self.expected_type = expected_type
        self.found_type = found_type


class MissingPropertyError(InvalidResponseError):
    """A required property is absent."""

    def __init__(self, property: str, response: Any = None, *path: PathSegment) -> None:
        super().__init__(f"Missing required property '{property}'.", response, (*path, property))
        self.property = property


class UnknownEnumVariantError(InvalidResponseError):
    """A string value is not one of the known variants of an enum."""

    def __init__(self, enum: str, value: str, response: Any = None, *path: PathSegment) -> None:
        super().__init__(f"Unknown enum value {value} for enum {enum}.", response, path)
        self.enum = enum
        self.value = value


class JSONRPCErrorCode(IntEnum):
    """Standard JSON-RPC 2.0 error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    SERVER_ERROR_START = -32099
    SERVER_ERROR_END = -32000


class JSONRPCError(Exception):
    """Error object returned by the server for a failed call."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(self.format_message(code, message, data))
        self.code = code
        self.message = message
        self.data = data

    @staticmethod
    def format_message(code: int, message: str, data: Any = None) -> str:
        output = message
        if isinstance(data, str):
            output = data if data.startswith(message) else f"{message}: {data}"
        return f"{output} (code: {code})"

    @classmethod
    def parse(cls, error: Mapping[str, Any], *path: PathSegment) -> JSONRPCError:
        """Build from a `{code, message, data?}` object."""
        if "code" not in error:
            raise MissingPropertyError("code", error, *path)
        code = error["code"]
        if isinstance(code, bool) or not isinstance(code, int):
            raise IncorrectTypeError("number", json_type_name(code), error, *path, "code")
        if "message" not in error:
            raise MissingPropertyError("message", error, *path)
        message = error["message"]
        if not isinstance(message, str):
            raise IncorrectTypeError("string", json_type_name(message), error, *path, "message")
        return cls(code, message, error.get("data"))


class CallFailedError(Exception):
    """A call failed with a value that is neither an exception nor a protocol error.

    The raw failure value is kept unchanged in `error`.
    """

    def __init__(self, error: Any) -> None:
        super().__init__(f"Call failed: {error!r}")
        self.error = error


class DiscoveryFailedError(Exception):
    """Capability discovery failed. The underlying error is `__cause__`."""

    def __init__(self) -> None:
        super().__init__("Failed to discover server capabilities")


class MissingParameterError(Exception):
    """A notification carried neither the positional nor the named parameter."""

    def __init__(self, name: str, position: int, data: Any) -> None:
        super().__init__(f"Could not get parameter '{name}' ({position}) from notification data: {data!r}")
        self.name = name
        self.position = position
        self.data = data


class InvalidStateError(Exception):
    """Internal invariant violated. Indicates a client bug."""


__all__ = [
    "CallFailedError",
    "DiscoveryFailedError",
    "IncorrectTypeError",
    "InvalidResponseError",
    "InvalidStateError",
    "JSONRPCError",
    "JSONRPCErrorCode",
    "MissingParameterError",
    "MissingPropertyError",
    "PathSegment",
    "UnknownEnumVariantError",
    "json_type_name",
]
