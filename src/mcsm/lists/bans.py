"""Player and IP ban lists.

`set` and `add` take default `reason`, `source` and `expires` values that are
applied to every input that is not already a ban entry.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mcsm.errors import PathSegment
from mcsm.lists.base import CachedList, encode_param
from mcsm.schemas.ban import BanExpiryInput, IncomingIPBan, IPBan, UserBan
from mcsm.schemas.player import Player
from mcsm.validation import ItemOrList, from_item_or_list


class BanList(CachedList[UserBan, UserBan | Player | str, Player | str]):
    name = "minecraft:bans"

    def parse_item(self, data: Any, response: Any, *path: PathSegment) -> UserBan:
        return UserBan.parse(data, response, *path)

    def remove_input(self, value: Player | str) -> Player:
        return Player.from_input(value)

    async def set(
        self,
        items: Sequence[UserBan | Player | str],
        reason: str | None = None,
        source: str | None = None,
        expires: BanExpiryInput = None,
    ) -> list[UserBan]:
        bans = [UserBan.from_input(item, reason, source, expires) for item in items]
        return await self._call_and_parse("set", [encode_param(ban) for ban in bans])

    async def add(
        self,
        items: ItemOrList[UserBan | Player | str],
        reason: str | None = None,
        source: str | None = None,
        expires: BanExpiryInput = None,
    ) -> list[UserBan]:
        bans = [UserBan.from_input(item, reason, source, expires) for item in from_item_or_list(items)]
        return await self._call_and_parse("add", [encode_param(ban) for ban in bans])


class IPBanList(CachedList[IPBan, IncomingIPBan | Player | str, str]):
    """Banned IP addresses.

    `add` accepts addresses, or connected players whose address is banned.
    `remove` takes addresses only.
    """

    name = "minecraft:ip_bans"

    def parse_item(self, data: Any, response: Any, *path: PathSegment) -> IPBan:
        return IPBan.parse(data, response, *path)

    async def set(
        self,
        items: Sequence[IPBan | str],
        reason: str | None = None,
        source: str | None = None,
        expires: BanExpiryInput = None,
    ) -> list[IPBan]:
        bans = [IPBan.from_input(item, reason, source, expires) for item in items]
        return await self._call_and_parse("set", [encode_param(ban) for ban in bans])

    async def add(
        self,
        items: ItemOrList[IncomingIPBan | Player | str],
        reason: str | None = None,
        source: str | None = None,
        expires: BanExpiryInput = None,
    ) -> list[IPBan]:
        bans = [IncomingIPBan.from_input(item, reason, source, expires) for item in from_item_or_list(items)]
        return await self._call_and_parse("add", [encode_param(ban) for ban in bans])


__all__ = ["BanList", "IPBanList"]
