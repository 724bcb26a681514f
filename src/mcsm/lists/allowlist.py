"""Server allowlist."""

from __future__ import annotations

from typing import Any

from mcsm.errors import PathSegment
from mcsm.lists.base import CachedList
from mcsm.schemas.player import Player


class AllowList(CachedList[Player, Player | str, Player | str]):
    """Players allowed to join. Names are accepted wherever a player is expected."""

    name = "minecraft:allowlist"

    def parse_item(self, data: Any, response: Any, *path: PathSegment) -> Player:
        return Player.parse(data, response, *path)

    def add_input(self, value: Player | str) -> Player:
        return Player.from_input(value)

    def remove_input(self, value: Player | str) -> Player:
        return Player.from_input(value)


__all__ = ["AllowList"]
