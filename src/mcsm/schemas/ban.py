"""Ban list entries."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import field_validator

from mcsm.errors import PathSegment
from mcsm.schemas.base import ProtocolModel
from mcsm.schemas.player import Player
from mcsm.validation import expect_object, expect_str, optional_field, require

BanExpiryInput = datetime | str | None


class Ban(ProtocolModel):
    """Fields shared by all ban entries."""

    reason: str | None = None
    source: str | None = None
    # ISO 8601; absent means permanent
    expires: str | None = None

    @field_validator("expires", mode="before")
    @classmethod
    def expires_to_iso(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.isoformat()
        return value

    @property
    def expires_at(self) -> datetime | None:
        """Expiry as a datetime, or None if permanent or unparseable."""
        if not self.expires:
            return None
        try:
            return datetime.fromisoformat(self.expires)
        except ValueError:
            return None

    @staticmethod
    def parse_common_fields(obj: Any, response: Any, *path: PathSegment) -> dict[str, str | None]:
        return {
            "reason": optional_field(obj, "reason", expect_str, response, *path),
            "source": optional_field(obj, "source", expect_str, response, *path),
            "expires": optional_field(obj, "expires", expect_str, response, *path),
        }


class UserBan(Ban):
    """Entry on the player ban list."""

    player: Player

    @classmethod
    def from_input(
        cls,
        value: UserBan | Player | str,
        reason: str | None = None,
        source: str | None = None,
        expires: BanExpiryInput = None,
    ) -> UserBan:
        """Accept a ban, or a player to ban with the given defaults."""
        if isinstance(value, UserBan):
            return value
        return cls(player=Player.from_input(value), reason=reason, source=source, expires=expires)

    @classmethod
    def parse(cls, data: Any, response: Any = None, *path: PathSegment) -> UserBan:
        response = data if response is None else response
        obj = expect_object(data, response, *path)
        player = Player.parse(require(obj, "player", response, *path), response, *path, "player")
        return cls(player=player, **cls.parse_common_fields(obj, response, *path))


class IPBan(Ban):
    """Entry on the IP ban list."""

    ip: str

    @classmethod
    def from_input(
        cls,
        value: IPBan | str,
        reason: str | None = None,
        source: str | None = None,
        expires: BanExpiryInput = None,
    ) -> IPBan:
        if isinstance(value, IPBan):
            return value
        return cls(ip=value, reason=reason, source=source, expires=expires)

    @classmethod
    def parse(cls, data: Any, response: Any = None, *path: PathSegment) -> IPBan:
        response = data if response is None else response
        obj = expect_object(data, response, *path)
        ip = expect_str(require(obj, "ip", response, *path), response, *path, "ip")
        return cls(ip=ip, **cls.parse_common_fields(obj, response, *path))


class IncomingIPBan(Ban):
    """Request to ban an IP address, or the address of a connected player."""

    ip: str | None = None
    player: Player | None = None

    @classmethod
    def from_input(
        cls,
        value: IncomingIPBan | Player | str,
        reason: str | None = None,
        source: str | None = None,
        expires: BanExpiryInput = None,
    ) -> IncomingIPBan:
        if isinstance(value, IncomingIPBan):
            return value
        if isinstance(value, Player):
            return cls(player=value, reason=reason, source=source, expires=expires)
        return cls(ip=value, reason=reason, source=source, expires=expires)


__all__ = ["Ban", "BanExpiryInput", "IPBan", "IncomingIPBan", "UserBan"]
