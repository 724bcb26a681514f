"""Locally cached game rules, keyed by rule name."""

from __future__ import annotations

from loguru import logger

from mcsm.rpc.connection import Connection
from mcsm.schemas.gamerule import TypedGameRule, UntypedGameRule, camel_to_snake
from mcsm.validation import parse_list

GAME_RULES_METHOD = "minecraft:gamerules"
UPDATE_GAME_RULE_METHOD = "minecraft:gamerules/update"


class GameRules:
    """Game rules fetched lazily and patched from updates and notifications."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection
        self._rules: dict[str, TypedGameRule] | None = None

    @property
    def loaded(self) -> bool:
        return self._rules is not None

    async def get(self, force: bool = False) -> dict[str, TypedGameRule]:
        if self._rules is None or force:
            result = await self._connection.call(GAME_RULES_METHOD, [])
            rules = parse_list(result, TypedGameRule.parse, result)
            self._rules = {rule.key: rule for rule in rules}
        return dict(self._rules)

    async def update(self, key: str, value: bool | int | str) -> TypedGameRule:
        """Set one rule and return it as the server reports it.

        camelCase keys are converted for servers that name rules in snake_case.
        """
        if await self._connection.uses_snake_case_game_rules():
            key = camel_to_snake(key)
        rule = UntypedGameRule.of(key, value)
        logger.debug("mcsm.gamerules.update key={} value={}", rule.key, rule.value)
        result = await self._connection.call(UPDATE_GAME_RULE_METHOD, [rule.to_params()])
        updated = TypedGameRule.parse(result)
        self.apply(updated)
        return updated

    def apply(self, rule: TypedGameRule) -> None:
        """Patch a single rule into the cache if it has been loaded."""
        if self._rules is not None:
            self._rules[rule.key] = rule


__all__ = ["GAME_RULES_METHOD", "UPDATE_GAME_RULE_METHOD", "GameRules"]
