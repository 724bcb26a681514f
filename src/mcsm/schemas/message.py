"""Chat messages sent to players."""

from __future__ import annotations

from pydantic import Field

from mcsm.schemas.base import ProtocolModel
from mcsm.schemas.player import Player


class Message(ProtocolModel):
    """Literal text or a translation key with parameters."""

    literal: str | None = None
    translatable: str | None = None
    translatable_params: list[str] | None = None

    @classmethod
    def of_literal(cls, literal: str) -> Message:
        return cls(literal=literal)

    @classmethod
    def of_translatable(cls, key: str, params: list[str] | None = None) -> Message:
        return cls(translatable=key, translatable_params=params or [])

    @classmethod
    def from_input(cls, value: Message | str) -> Message:
        """Plain strings become literal messages."""
        if isinstance(value, Message):
            return value
        return cls(literal=value)


class SystemMessage(ProtocolModel):
    message: Message
    overlay: bool = False
    receiving_players: list[Player] | None = None


class KickPlayer(ProtocolModel):
    """Request to kick players, with an optional message shown to them."""

    players: list[Player] = Field(alias="player")
    message: Message | None = None


__all__ = ["KickPlayer", "Message", "SystemMessage"]
