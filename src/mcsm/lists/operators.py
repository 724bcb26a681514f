"""Server operator list."""

from __future__ import annotations

from typing import Any

from mcsm.errors import PathSegment
from mcsm.lists.base import CachedList
from mcsm.schemas.player import Operator, Player


class OperatorList(CachedList[Operator, Operator | Player | str, Player | str]):
    name = "minecraft:operators"

    def parse_item(self, data: Any, response: Any, *path: PathSegment) -> Operator:
        return Operator.parse(data, response, *path)

    def add_input(self, value: Operator | Player | str) -> Operator:
        return Operator.from_input(value)

    def remove_input(self, value: Player | str) -> Player:
        return Player.from_input(value)


__all__ = ["OperatorList"]
