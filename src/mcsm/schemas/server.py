"""Server state and settings enums."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import Field

from mcsm.errors import PathSegment
from mcsm.schemas.base import ProtocolModel
from mcsm.schemas.player import Player
from mcsm.validation import expect_bool, expect_int, expect_object, expect_str, require


class Difficulty(StrEnum):
    PEACEFUL = "peaceful"
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


class GameMode(StrEnum):
    SURVIVAL = "survival"
    CREATIVE = "creative"
    ADVENTURE = "adventure"
    SPECTATOR = "spectator"


class Version(ProtocolModel):
    """Game version reported by the server."""

    name: str
    protocol: int

    @classmethod
    def parse(cls, data: Any, response: Any = None, *path: PathSegment) -> Version:
        response = data if response is None else response
        obj = expect_object(data, response, *path)
        name = require(obj, "name", response, *path)
        protocol = require(obj, "protocol", response, *path)
        return cls(
            name=expect_str(name, response, *path, "name"),
            protocol=expect_int(protocol, response, *path, "protocol"),
        )


class ServerState(ProtocolModel):
    """Snapshot of the server status."""

    players: list[Player] = Field(default_factory=list)
    started: bool
    version: Version

    @classmethod
    def parse(cls, data: Any, response: Any = None, *path: PathSegment) -> ServerState:
        response = data if response is None else response
        obj = expect_object(data, response, *path)
        started = expect_bool(require(obj, "started", response, *path), response, *path, "started")
        players: list[Player] = []
        if "players" in obj:
            players = Player.parse_list(obj["players"], response, *path, "players")
        version = Version.parse(require(obj, "version", response, *path), response, *path, "version")
        return cls(players=players, started=started, version=version)


__all__ = ["Difficulty", "GameMode", "ServerState", "Version"]
