"""JSON-RPC 2.0 client.

Transport-agnostic caller side of JSON-RPC: correlates responses to requests,
allows any number of outstanding calls and fans notifications out to callbacks.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Callable
from typing import Any

from loguru import logger
from pydantic import ValidationError

from mcsm.rpc.types import (
    JSONRPCErrorResponse,
    JSONRPCMessage,
    JSONRPCNotification,
    JSONRPCRequest,
    JSONRPCResponse,
    Params,
    RequestId,
    Transport,
    jsonrpc_message_adapter,
)

NotificationHandler = Callable[[str, Any], None]


class RemoteCallError(Exception):
    """The server answered a request with an error object, kept raw in `error`."""

    def __init__(self, error: Any) -> None:
        super().__init__(f"JSON-RPC error: {error!r}")
        self.error = error


class JSONRPCClient:
    """Caller side of a JSON-RPC 2.0 connection.

    The client handles:
    - Request/response correlation with pending requests
    - Passing every server notification to the registered handlers
    """

    def __init__(self, transport: Transport, *, call_timeout: float | None = None) -> None:
        self._transport = transport
        self._call_timeout = call_timeout
        self._pending_requests: dict[RequestId, asyncio.Future[Any]] = {}
        self._notification_handlers: list[NotificationHandler] = []
        self._running = False
        self._stop_event = asyncio.Event()

    @property
    def pending_count(self) -> int:
        return len(self._pending_requests)

    async def send_request(self, method: str, params: Params | None = None) -> Any:
        """Send JSON-RPC request and await response.

        Raises RemoteCallError when the server answers with an error object.
        """
        request_id = str(uuid.uuid4())
        request = JSONRPCRequest(jsonrpc="2.0", id=request_id, method=method, params=params)

        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._pending_requests[request_id] = future

        try:
            await self._send_message(request)
            if self._call_timeout is None:
                return await future
            return await asyncio.wait_for(future, timeout=self._call_timeout)
        finally:
            self._pending_requests.pop(request_id, None)

    async def _send_message(self, message: JSONRPCMessage) -> None:
        json_str = message.model_dump_json(by_alias=True, exclude_none=True)
        await self._transport.send_message(json_str)

    async def listen(self) -> None:
        """Receive and dispatch messages until stopped or the transport fails.

        Outstanding requests are failed with ConnectionError when the loop exits.
        """
        self._running = True
        self._stop_event.clear()

        try:
            while self._running:
                try:
                    raw_message = await asyncio.wait_for(self._transport.receive_message(), timeout=0.1)
                except TimeoutError:
                    if self._stop_event.is_set():
                        break
                    continue
                except Exception:
                    if not self._running:
                        break
                    raise
                self._process_message(raw_message)
        finally:
            self._running = False
            self._fail_pending(ConnectionError("Connection closed"))

    def _process_message(self, raw_message: str) -> None:
        try:
            message = jsonrpc_message_adapter.validate_json(raw_message)
        except ValidationError:
            logger.warning("mcsm.rpc.invalid_message raw={}", raw_message[:200])
            return

        if isinstance(message, JSONRPCNotification):
            self._handle_notification(message)
        elif isinstance(message, JSONRPCResponse):
            self._resolve(message.id, result=message.result)
        elif isinstance(message, JSONRPCErrorResponse):
            self._resolve(message.id, error=RemoteCallError(message.error))
        elif isinstance(message, JSONRPCRequest):
            logger.debug("mcsm.rpc.ignored_request method={}", message.method)

    def _handle_notification(self, notification: JSONRPCNotification) -> None:
        for handler in list(self._notification_handlers):
            try:
                handler(notification.method, notification.params)
            except Exception:
                logger.exception("mcsm.rpc.notification_handler_error method={}", notification.method)

    def _resolve(self, request_id: RequestId | None, *, result: Any = None, error: Exception | None = None) -> None:
        if request_id is None:
            return
        future = self._pending_requests.get(request_id)
        if future is None or future.done():
            logger.debug("mcsm.rpc.unmatched_response id={}", request_id)
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def _fail_pending(self, error: Exception) -> None:
        for future in self._pending_requests.values():
            if not future.done():
                future.set_exception(error)

    def on_notification(self, handler: NotificationHandler) -> None:
        """Register a handler called with `(method, params)` for every notification."""
        self._notification_handlers.append(handler)

    async def stop(self) -> None:
        """Stop listening for messages."""
        self._running = False
        self._stop_event.set()


__all__ = [
    "JSONRPCClient",
    "NotificationHandler",
    "RemoteCallError",
]
