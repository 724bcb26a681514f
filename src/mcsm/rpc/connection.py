"""Transport-independent connection to a management server."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from loguru import logger

from mcsm.errors import CallFailedError, DiscoveryFailedError, InvalidResponseError, JSONRPCError
from mcsm.events import ERROR_EVENT, AliasedEventEmitter
from mcsm.rpc.types import CallResponse, Params
from mcsm.schemas.discovery import DiscoveryResponse

DISCOVERY_METHOD = "rpc.discover"

# Protocol versions this client understands: [min, max)
MIN_SUPPORTED_VERSION = (1, 0, 0)
MAX_SUPPORTED_VERSION = (4, 0, 0)

SNAKE_CASE_GAME_RULES_SINCE = (3, 0, 0)


def is_supported_version(version: tuple[int, ...] | None) -> bool:
    return version is not None and MIN_SUPPORTED_VERSION <= version < MAX_SUPPORTED_VERSION


def translate_error(error: Any) -> BaseException:
    """Turn the failure value of a call into the exception to raise.

    Exceptions pass through unchanged. Objects shaped like a JSON-RPC error
    become `JSONRPCError`. Anything else, including malformed error objects,
    is wrapped untouched in `CallFailedError`.
    """
    if isinstance(error, BaseException):
        return error
    if isinstance(error, Mapping):
        try:
            return JSONRPCError.parse(error)
        except InvalidResponseError:
            pass
    return CallFailedError(error)


class Connection(AliasedEventEmitter, ABC):
    """Call/response contract plus the connection's event surface.

    Events: `open`, `close(code, reason)`, `error(exc)` and one event per
    server notification, carrying the raw notification params. Discovery runs
    in the background every time `open` is emitted.
    """

    def __init__(self) -> None:
        super().__init__()
        self._discovery: DiscoveryResponse | None = None
        self._snake_case_game_rules: bool | None = None
        self.on("open", self._discover_on_open)

    @abstractmethod
    async def call_raw(self, method: str, params: Params) -> CallResponse:
        """Send a call and report its outcome. Must not raise."""

    @abstractmethod
    async def close(self) -> None:
        """Close the connection. Closing twice is a no-op."""

    async def call(self, method: str, params: Params | None = None) -> Any:
        """Call `method` and return its result, raising the translated error on failure."""
        response = await self.call_raw(method, [] if params is None else params)
        if response.success:
            return response.data
        raise translate_error(response.error)

    @property
    def discovery(self) -> DiscoveryResponse | None:
        """Cached discovery result, if discovery has completed."""
        return self._discovery

    async def discover(self) -> DiscoveryResponse:
        """Discover the server's capabilities. The result is cached for the connection's lifetime."""
        if self._discovery is not None:
            return self._discovery

        result = await self.call(DISCOVERY_METHOD, [])
        discovery = DiscoveryResponse.parse(result)
        self._discovery = discovery
        logger.debug(
            "mcsm.connection.discovered title={} version={}",
            discovery.protocol_title,
            discovery.protocol_version,
        )
        if not is_supported_version(discovery.info.version_tuple):
            logger.warning(
                "mcsm.connection.unsupported_version version={} "
                "The server provides a management protocol version this client does not support, "
                "some features may not work as expected.",
                discovery.protocol_version,
            )
        return discovery

    async def uses_snake_case_game_rules(self) -> bool:
        """Whether the server names game rules in snake_case."""
        if self._snake_case_game_rules is None:
            try:
                discovery = await self.discover()
            except Exception as e:
                logger.warning("mcsm.connection.discovery_unavailable error={}", e)
                return False
            version = discovery.info.version_tuple
            self._snake_case_game_rules = version is not None and version >= SNAKE_CASE_GAME_RULES_SINCE
        return self._snake_case_game_rules

    async def _discover_on_open(self) -> None:
        try:
            await self.discover()
        except Exception as e:
            error = DiscoveryFailedError()
            error.__cause__ = e
            self.emit(ERROR_EVENT, error)


__all__ = [
    "DISCOVERY_METHOD",
    "MAX_SUPPORTED_VERSION",
    "MIN_SUPPORTED_VERSION",
    "SNAKE_CASE_GAME_RULES_SINCE",
    "Connection",
    "is_supported_version",
    "translate_error",
]
