"""In-memory connections for tests.

`StubConnection` answers calls from a queue of canned responses and records
every request. `PairedTransport` links two transports through queues so the
JSON-RPC client can run without a socket.
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Any

from mcsm.rpc.connection import DISCOVERY_METHOD, Connection
from mcsm.rpc.types import CallFailure, CallResponse, CallSuccess, Params, Transport

DEFAULT_DISCOVERY: dict[str, Any] = {
    "openrpc": "1.3.2",
    "info": {"title": "Minecraft Server Management", "version": "2.0.0"},
}


class StubConnection(Connection):
    """Connection answering from a queue of canned responses."""

    def __init__(self, discovery: Any = None) -> None:
        super().__init__()
        self.responses: deque[CallResponse] = deque()
        self.requests: list[tuple[str, Params]] = []
        self.discovery_result: Any = DEFAULT_DISCOVERY if discovery is None else discovery
        self.discovery_calls = 0
        self.close_calls = 0

    def add_result(self, data: Any) -> None:
        self.responses.append(CallSuccess(data))

    def add_error(self, error: Any) -> None:
        self.responses.append(CallFailure(error))

    def set_protocol_version(self, version: str) -> None:
        self.discovery_result = {
            "openrpc": "1.3.2",
            "info": {"title": "Minecraft Server Management", "version": version},
        }

    @property
    def methods(self) -> list[str]:
        return [method for method, _ in self.requests]

    async def call_raw(self, method: str, params: Params) -> CallResponse:
        if method == DISCOVERY_METHOD:
            self.discovery_calls += 1
            return CallSuccess(self.discovery_result)
        self.requests.append((method, params))
        if not self.responses:
            raise AssertionError(f"No response queued for {method}")
        return self.responses.popleft()

    async def close(self) -> None:
        self.close_calls += 1


class _PairedTransportImpl(Transport):
    """One side of a paired transport."""

    def __init__(self, name: str, recv_queue: asyncio.Queue[str], send_queue: asyncio.Queue[str]):
        self._name = name
        self._recv_queue = recv_queue
        self._send_queue = send_queue
        self._closed = False

    @property
    def name(self) -> str:
        return self._name

    async def send_message(self, message: str) -> None:
        if self._closed:
            raise RuntimeError("Transport closed")
        await self._send_queue.put(message)

    async def receive_message(self) -> str:
        if self._closed:
            raise RuntimeError("Transport closed")
        return await self._recv_queue.get()

    async def close(self) -> None:
        self._closed = True


class PairedTransport:
    """Two connected transports: messages sent on `a` are received on `b` and vice versa."""

    def __init__(self):
        self._a_to_b: asyncio.Queue[str] = asyncio.Queue()
        self._b_to_a: asyncio.Queue[str] = asyncio.Queue()

        self.a = _PairedTransportImpl("A", self._b_to_a, self._a_to_b)
        self.b = _PairedTransportImpl("B", self._a_to_b, self._b_to_a)
