"""Game rules and type-directed value parsing."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Any

from mcsm.errors import IncorrectTypeError, PathSegment, UnknownEnumVariantError, json_type_name
from mcsm.schemas.base import ProtocolModel
from mcsm.validation import expect_object, expect_str, require

_INTEGER = re.compile(r"[+-]?\d+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class GameRuleType(StrEnum):
    BOOLEAN = "boolean"
    INTEGER = "integer"


def camel_to_snake(key: str) -> str:
    """`doDaylightCycle` -> `do_daylight_cycle`; keys without capitals are unchanged."""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def parse_game_rule_value(rule_type: GameRuleType, value: Any, response: Any, *path: PathSegment) -> bool | int:
    """Parse a rule value according to its declared type.

    Booleans may be sent as `true`/`false` or as the strings "true"/"false".
    Integers may be sent natively or as a string holding an exact integer.
    """
    if rule_type is GameRuleType.BOOLEAN:
        if isinstance(value, bool):
            return value
        if value == "true" or value == "false":
            return value == "true"
        raise IncorrectTypeError("string|boolean", json_type_name(value), response, *path)

    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _INTEGER.fullmatch(value):
        return int(value)
    raise IncorrectTypeError("string|integer", json_type_name(value), response, *path)


class UntypedGameRule(ProtocolModel):
    """Game rule update request; the value is always sent as a string."""

    key: str
    value: str

    @classmethod
    def of(cls, key: str, value: bool | int | str) -> UntypedGameRule:
        if isinstance(value, bool):
            return cls(key=key, value="true" if value else "false")
        return cls(key=key, value=str(value))


class TypedGameRule(ProtocolModel):
    """Game rule as reported by the server."""

    type: GameRuleType
    key: str
    value: bool | int

    @classmethod
    def parse(cls, data: Any, response: Any = None, *path: PathSegment) -> TypedGameRule:
        response = data if response is None else response
        obj = expect_object(data, response, *path)
        key = require(obj, "key", response, *path)
        value = require(obj, "value", response, *path)
        raw_type = require(obj, "type", response, *path)
        key = expect_str(key, response, *path, "key")
        raw_type = expect_str(raw_type, response, *path, "type")
        try:
            rule_type = GameRuleType(raw_type)
        except ValueError:
            raise UnknownEnumVariantError("GameRuleType", raw_type, response, *path, "type") from None
        return cls(
            type=rule_type,
            key=key,
            value=parse_game_rule_value(rule_type, value, response, *path, "value"),
        )


__all__ = [
    "GameRuleType",
    "TypedGameRule",
    "UntypedGameRule",
    "camel_to_snake",
    "parse_game_rule_value",
]
