"""JSON-RPC 2.0 type definitions.

Wire frames, the call result union and the transport protocol the client runs on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, TypeAdapter

RequestId = str | int
Params = list[Any] | dict[str, Any]


@runtime_checkable
class Transport(Protocol):
    """Protocol for message transport layer.

    Abstracts the underlying transport mechanism (WebSocket, in-memory, etc.)
    This is the only external interface we need to mock for testing.
    """

    async def send_message(self, message: str) -> None:
        """Send a message string through the transport."""
        ...

    async def receive_message(self) -> str:
        """Receive a message string from the transport."""
        ...


class JSONRPCRequest(BaseModel):
    """A JSON-RPC request that expects a response."""

    jsonrpc: str
    id: RequestId
    method: str
    params: Params | None = None

    model_config = ConfigDict(extra="forbid")


class JSONRPCNotification(BaseModel):
    """A JSON-RPC notification which does not expect a response."""

    jsonrpc: str
    method: str
    params: Params | None = None

    model_config = ConfigDict(extra="forbid")


class JSONRPCErrorResponse(BaseModel):
    """A response to a request that indicates an error occurred.

    The error object is kept raw; it is validated where it is translated.
    """

    jsonrpc: str
    id: RequestId | None
    error: Any

    model_config = ConfigDict(extra="forbid")


class JSONRPCResponse(BaseModel):
    """A successful (non-error) response to a request."""

    jsonrpc: str
    id: RequestId | None
    result: Any

    model_config = ConfigDict(extra="forbid")


# Union type for all JSON-RPC messages
JSONRPCMessage = JSONRPCRequest | JSONRPCNotification | JSONRPCResponse | JSONRPCErrorResponse


# Type adapter for validating JSON-RPC messages
jsonrpc_message_adapter: TypeAdapter[JSONRPCMessage] = TypeAdapter(JSONRPCMessage)


@dataclass(frozen=True)
class CallSuccess:
    data: Any
    success: Literal[True] = True


@dataclass(frozen=True)
class CallFailure:
    """Failed call. `error` is whatever the transport reported, unchanged."""

    error: Any
    success: Literal[False] = False


CallResponse = CallSuccess | CallFailure


__all__ = [
    "CallFailure",
    "CallResponse",
    "CallSuccess",
    "JSONRPCErrorResponse",
    "JSONRPCMessage",
    "JSONRPCNotification",
    "JSONRPCRequest",
    "JSONRPCResponse",
    "Params",
    "RequestId",
    "Transport",
    "jsonrpc_message_adapter",
]
