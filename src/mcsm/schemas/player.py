"""Player and operator types."""

from __future__ import annotations

from typing import Any

from mcsm.errors import PathSegment
from mcsm.schemas.base import ProtocolModel
from mcsm.validation import (
    expect_bool,
    expect_int,
    expect_object,
    expect_str,
    optional_field,
    parse_list,
    require,
)


class Player(ProtocolModel):
    """A player, identified by UUID, name or both."""

    id: str | None = None
    name: str | None = None

    @classmethod
    def with_id(cls, id: str) -> Player:
        return cls(id=id)

    @classmethod
    def with_name(cls, name: str) -> Player:
        return cls(name=name)

    @classmethod
    def from_input(cls, value: Player | str) -> Player:
        """Accept a Player or a plain player name."""
        if isinstance(value, Player):
            return value
        return cls(name=value)

    @classmethod
    def parse(cls, data: Any, response: Any = None, *path: PathSegment) -> Player:
        response = data if response is None else response
        obj = expect_object(data, response, *path)
        return cls(
            id=optional_field(obj, "id", expect_str, response, *path),
            name=optional_field(obj, "name", expect_str, response, *path),
        )

    @classmethod
    def parse_list(cls, data: Any, response: Any = None, *path: PathSegment) -> list[Player]:
        return parse_list(data, cls.parse, response, *path)

    def same_player(self, other: Player) -> bool:
        """Players match by UUID; when either UUID is unknown, by name."""
        if self.id is not None and other.id is not None:
            return self.id == other.id
        return self.name is not None and self.name == other.name


class Operator(ProtocolModel):
    """Entry on the operator list."""

    player: Player
    permission_level: int | None = None
    bypasses_player_limit: bool | None = None

    @classmethod
    def from_input(cls, value: Operator | Player | str) -> Operator:
        if isinstance(value, Operator):
            return value
        return cls(player=Player.from_input(value))

    @classmethod
    def parse(cls, data: Any, response: Any = None, *path: PathSegment) -> Operator:
        response = data if response is None else response
        obj = expect_object(data, response, *path)
        player = Player.parse(require(obj, "player", response, *path), response, *path, "player")
        return cls(
            player=player,
            permission_level=optional_field(obj, "permissionLevel", expect_int, response, *path),
            bypasses_player_limit=optional_field(obj, "bypassesPlayerLimit", expect_bool, response, *path),
        )


__all__ = ["Operator", "Player"]
