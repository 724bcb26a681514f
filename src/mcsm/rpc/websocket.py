"""WebSocket connection to a management server."""

from __future__ import annotations

import asyncio
import contextlib
from typing import Any

import websockets
from loguru import logger
from websockets.asyncio.client import ClientConnection, connect

from mcsm.config.settings import ClientSettings, load_settings
from mcsm.events import ERROR_EVENT
from mcsm.rpc.connection import Connection
from mcsm.rpc.framework import JSONRPCClient, RemoteCallError
from mcsm.rpc.types import CallFailure, CallResponse, CallSuccess, Params

ABNORMAL_CLOSURE = 1006


def bearer_auth_header(token: str | None) -> dict[str, str] | None:
    """`Authorization` header for a management API token, or None without one."""
    if not token:
        return None
    return {"Authorization": f"Bearer {token}"}


class WebSocketTransport:
    """WebSocket transport adapter for the JSON-RPC client."""

    def __init__(self, ws: ClientConnection) -> None:
        self._ws = ws

    async def send_message(self, message: str) -> None:
        await self._ws.send(message)

    async def receive_message(self) -> str:
        data = await self._ws.recv()
        if isinstance(data, (bytes, bytearray)):
            data = data.decode("utf-8")
        return data


class WebSocketConnection(Connection):
    """Connection over a WebSocket, optionally reconnecting with exponential back-off.

    Emits `open` after every successful (re)connect and `close(code, reason)`
    whenever the socket goes away.
    """

    def __init__(
        self,
        url: str,
        *,
        token: str | None = None,
        reconnect: bool = False,
        max_reconnect_delay: float = 30.0,
        call_timeout: float | None = None,
    ) -> None:
        super().__init__()
        self._url = url
        self._token = token
        self._reconnect = reconnect
        self._max_reconnect_delay = max_reconnect_delay
        self._call_timeout = call_timeout
        self._reconnect_delay = 1.0
        self._reconnect_attempts = 0
        self._ws: ClientConnection | None = None
        self._client: JSONRPCClient | None = None
        self._run_task: asyncio.Task[None] | None = None
        self._reconnect_task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()
        self._closed = False

    @classmethod
    async def connect(
        cls,
        url: str,
        token: str | None = None,
        reconnect: bool | None = None,
        **kwargs: Any,
    ) -> WebSocketConnection:
        """Open a connection to `url`. Raises if the first attempt fails and reconnect is off."""
        connection = cls(url, token=token, reconnect=bool(reconnect), **kwargs)
        await connection.open()
        return connection

    @classmethod
    async def from_settings(cls, settings: ClientSettings | None = None) -> WebSocketConnection:
        settings = settings or load_settings()
        return await cls.connect(
            settings.url,
            token=settings.token,
            reconnect=settings.reconnect,
            max_reconnect_delay=settings.max_reconnect_delay,
            call_timeout=settings.call_timeout,
        )

    @property
    def url(self) -> str:
        return self._url

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def open(self) -> None:
        """Connect, retrying with back-off when reconnect is enabled."""
        while not self._stop_event.is_set():
            try:
                await self._connect_once()
                self._reconnect_delay = 1.0
                self._reconnect_attempts = 0
                return
            except (websockets.exceptions.WebSocketException, OSError) as e:
                if not self._reconnect:
                    raise
                self._reconnect_attempts += 1
                logger.warning(
                    "mcsm.websocket.connect_failed attempt={} delay={:.1f}s error={}",
                    self._reconnect_attempts,
                    self._reconnect_delay,
                    e,
                )
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self._reconnect_delay)
                    return
                except TimeoutError:
                    pass
                self._reconnect_delay = min(self._reconnect_delay * 2, self._max_reconnect_delay)

    async def _connect_once(self) -> None:
        ws = await connect(self._url, additional_headers=bearer_auth_header(self._token))
        client = JSONRPCClient(WebSocketTransport(ws), call_timeout=self._call_timeout)
        client.on_notification(self._on_notification)
        self._ws = ws
        self._client = client
        self._run_task = asyncio.create_task(self._run(ws, client))
        logger.info("mcsm.websocket.connected url={}", self._url)
        self.emit("open")

    def _on_notification(self, method: str, params: Any) -> None:
        self.emit(method, params)

    async def _run(self, ws: ClientConnection, client: JSONRPCClient) -> None:
        try:
            await client.listen()
        except websockets.exceptions.ConnectionClosed:
            logger.info("mcsm.websocket.connection_closed url={}", self._url)
        except Exception as e:
            logger.error("mcsm.websocket.run_error error={}", e)
            self.emit(ERROR_EVENT, e)
        finally:
            self._client = None
            self._ws = None
            self.emit("close", ws.close_code or ABNORMAL_CLOSURE, ws.close_reason or "")
            if self._reconnect and not self._stop_event.is_set():
                logger.info("mcsm.websocket.triggering_reconnect")
                self._reconnect_task = asyncio.create_task(self.open())

    async def call_raw(self, method: str, params: Params) -> CallResponse:
        client = self._client
        if client is None:
            return CallFailure(ConnectionError("Not connected"))
        try:
            result = await client.send_request(method, params)
        except RemoteCallError as e:
            return CallFailure(e.error)
        except Exception as e:
            return CallFailure(e)
        return CallSuccess(result)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        if self._closed:
            return
        self._closed = True
        self._stop_event.set()

        if self._reconnect_task and self._reconnect_task is not asyncio.current_task():
            self._reconnect_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._reconnect_task
        if self._client:
            await self._client.stop()
        if self._ws:
            await self._ws.close(code, reason)
        if self._run_task and self._run_task is not asyncio.current_task():
            await self._run_task
        logger.info("mcsm.websocket.disconnected url={}", self._url)


__all__ = ["WebSocketConnection", "WebSocketTransport", "bearer_auth_header"]
