"""Management protocol data types."""

from mcsm.schemas.ban import Ban, BanExpiryInput, IncomingIPBan, IPBan, UserBan
from mcsm.schemas.base import ProtocolModel
from mcsm.schemas.discovery import DiscoveryResponse, ProtocolInfo
from mcsm.schemas.gamerule import GameRuleType, TypedGameRule, UntypedGameRule
from mcsm.schemas.message import KickPlayer, Message, SystemMessage
from mcsm.schemas.player import Operator, Player
from mcsm.schemas.server import Difficulty, GameMode, ServerState, Version

__all__ = [
    "Ban",
    "BanExpiryInput",
    "Difficulty",
    "DiscoveryResponse",
    "GameMode",
    "GameRuleType",
    "IPBan",
    "IncomingIPBan",
    "KickPlayer",
    "Message",
    "Operator",
    "Player",
    "ProtocolInfo",
    "ProtocolModel",
    "ServerState",
    "SystemMessage",
    "TypedGameRule",
    "UntypedGameRule",
    "UserBan",
    "Version",
]
