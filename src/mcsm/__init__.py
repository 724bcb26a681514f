"""Client for the Minecraft server management protocol."""

from mcsm.errors import (
    CallFailedError,
    DiscoveryFailedError,
    IncorrectTypeError,
    InvalidResponseError,
    InvalidStateError,
    JSONRPCError,
    JSONRPCErrorCode,
    MissingParameterError,
    MissingPropertyError,
    UnknownEnumVariantError,
)
from mcsm.gamerules import GameRules
from mcsm.lists import AllowList, BanList, CachedList, IPBanList, OperatorList
from mcsm.notifications import Notification
from mcsm.rpc import CallFailure, CallResponse, CallSuccess, Connection, WebSocketConnection
from mcsm.server import MinecraftServer
from mcsm.server_settings import ServerSettings

__version__ = "0.1.0"

__all__ = [
    "AllowList",
    "BanList",
    "CachedList",
    "CallFailedError",
    "CallFailure",
    "CallResponse",
    "CallSuccess",
    "Connection",
    "DiscoveryFailedError",
    "GameRules",
    "IPBanList",
    "IncorrectTypeError",
    "InvalidResponseError",
    "InvalidStateError",
    "JSONRPCError",
    "JSONRPCErrorCode",
    "MinecraftServer",
    "MissingParameterError",
    "MissingPropertyError",
    "Notification",
    "OperatorList",
    "ServerSettings",
    "UnknownEnumVariantError",
    "WebSocketConnection",
]
