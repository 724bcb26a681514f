"""Server settings wrapper.

Each setting is read with `minecraft:serversettings/<name>` and written with
`minecraft:serversettings/<name>/set`; both return the current value.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any, TypeVar

from mcsm.errors import PathSegment, UnknownEnumVariantError
from mcsm.rpc.connection import Connection
from mcsm.schemas.server import Difficulty, GameMode
from mcsm.validation import expect_bool, expect_int, expect_str

SETTINGS_PREFIX = "minecraft:serversettings/"

T = TypeVar("T")
E = TypeVar("E", bound=StrEnum)


def _enum_check(enum: type[E]) -> Callable[..., E]:
    def check(value: Any, response: Any, *path: PathSegment) -> E:
        raw = expect_str(value, response, *path)
        try:
            return enum(raw)
        except ValueError:
            raise UnknownEnumVariantError(enum.__name__, raw, response, *path) from None

    return check


class ServerSettings:
    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    async def _get(self, name: str, check: Callable[..., T]) -> T:
        result = await self._connection.call(f"{SETTINGS_PREFIX}{name}", [])
        return check(result, result)

    async def _set(self, name: str, value: Any, check: Callable[..., T]) -> T:
        result = await self._connection.call(f"{SETTINGS_PREFIX}{name}/set", [value])
        return check(result, result)

    async def get_autosave(self) -> bool:
        """Whether the world is saved periodically."""
        return await self._get("autosave", expect_bool)

    async def set_autosave(self, value: bool) -> bool:
        return await self._set("autosave", value, expect_bool)

    async def get_difficulty(self) -> Difficulty:
        return await self._get("difficulty", _enum_check(Difficulty))

    async def set_difficulty(self, value: Difficulty) -> Difficulty:
        return await self._set("difficulty", str(value), _enum_check(Difficulty))

    async def get_enforce_allowlist(self) -> bool:
        """Whether players removed from the allowlist are kicked immediately."""
        return await self._get("enforce_allowlist", expect_bool)

    async def set_enforce_allowlist(self, value: bool) -> bool:
        return await self._set("enforce_allowlist", value, expect_bool)

    async def get_use_allowlist(self) -> bool:
        return await self._get("use_allowlist", expect_bool)

    async def set_use_allowlist(self, value: bool) -> bool:
        return await self._set("use_allowlist", value, expect_bool)

    async def get_max_players(self) -> int:
        return await self._get("max_players", expect_int)

    async def set_max_players(self, value: int) -> int:
        return await self._set("max_players", value, expect_int)

    async def get_pause_when_empty_seconds(self) -> int:
        """Seconds without players before the server pauses; non-positive means never."""
        return await self._get("pause_when_empty_seconds", expect_int)

    async def set_pause_when_empty_seconds(self, value: int) -> int:
        return await self._set("pause_when_empty_seconds", value, expect_int)

    async def get_player_idle_timeout(self) -> int:
        """Minutes before idle players are kicked; 0 disables the kick."""
        return await self._get("player_idle_timeout", expect_int)

    async def set_player_idle_timeout(self, value: int) -> int:
        return await self._set("player_idle_timeout", value, expect_int)

    async def get_allow_flight(self) -> bool:
        """Whether flight detection is disabled for survival players."""
        return await self._get("allow_flight", expect_bool)

    async def set_allow_flight(self, value: bool) -> bool:
        return await self._set("allow_flight", value, expect_bool)

    async def get_motd(self) -> str:
        return await self._get("motd", expect_str)

    async def set_motd(self, value: str) -> str:
        return await self._set("motd", value, expect_str)

    async def get_spawn_protection_radius(self) -> int:
        return await self._get("spawn_protection_radius", expect_int)

    async def set_spawn_protection_radius(self, value: int) -> int:
        return await self._set("spawn_protection_radius", value, expect_int)

    async def get_force_game_mode(self) -> bool:
        return await self._get("force_game_mode", expect_bool)

    async def set_force_game_mode(self, value: bool) -> bool:
        return await self._set("force_game_mode", value, expect_bool)

    async def get_game_mode(self) -> GameMode:
        """Default game mode for new players, or for everyone when forced."""
        return await self._get("game_mode", _enum_check(GameMode))

    async def set_game_mode(self, value: GameMode) -> GameMode:
        return await self._set("game_mode", str(value), _enum_check(GameMode))

    async def get_view_distance(self) -> int:
        return await self._get("view_distance", expect_int)

    async def set_view_distance(self, value: int) -> int:
        return await self._set("view_distance", value, expect_int)

    async def get_simulation_distance(self) -> int:
        return await self._get("simulation_distance", expect_int)

    async def set_simulation_distance(self, value: int) -> int:
        return await self._set("simulation_distance", value, expect_int)

    async def get_accept_transfers(self) -> bool:
        return await self._get("accept_transfers", expect_bool)

    async def set_accept_transfers(self, value: bool) -> bool:
        return await self._set("accept_transfers", value, expect_bool)

    async def get_status_heartbeat_interval(self) -> int:
        """Seconds between status notifications; 0 disables them."""
        return await self._get("status_heartbeat_interval", expect_int)

    async def set_status_heartbeat_interval(self, value: int) -> int:
        return await self._set("status_heartbeat_interval", value, expect_int)

    async def get_operator_user_permission_level(self) -> int:
        """Permission level (1-4) granted to new operators."""
        return await self._get("operator_user_permission_level", expect_int)

    async def set_operator_user_permission_level(self, value: int) -> int:
        return await self._set("operator_user_permission_level", value, expect_int)

    async def get_hide_online_players(self) -> bool:
        return await self._get("hide_online_players", expect_bool)

    async def set_hide_online_players(self, value: bool) -> bool:
        return await self._set("hide_online_players", value, expect_bool)

    async def get_status_replies(self) -> bool:
        """Whether the server answers status requests from the multiplayer list."""
        return await self._get("status_replies", expect_bool)

    async def set_status_replies(self, value: bool) -> bool:
        return await self._set("status_replies", value, expect_bool)

    async def get_entity_broadcast_range(self) -> int:
        """Entity update range as a percentage of the default (10-1000)."""
        return await self._get("entity_broadcast_range", expect_int)

    async def set_entity_broadcast_range(self, value: int) -> int:
        return await self._set("entity_broadcast_range", value, expect_int)


__all__ = ["SETTINGS_PREFIX", "ServerSettings"]
