"""Server notification names.

Every notification has a canonical `minecraft:notification/<topic>` name and a
deprecated `notification:<topic>` name that older servers and clients use.
"""

from __future__ import annotations

from enum import StrEnum


class Notification(StrEnum):
    SERVER_STARTED = "minecraft:notification/server/started"
    SERVER_STOPPING = "minecraft:notification/server/stopping"
    SERVER_SAVING = "minecraft:notification/server/saving"
    SERVER_SAVED = "minecraft:notification/server/saved"
    # network connection to the server initiated (25w41a and later)
    SERVER_ACTIVITY = "minecraft:notification/server/activity"
    SERVER_STATUS = "minecraft:notification/server/status"
    PLAYER_JOINED = "minecraft:notification/players/joined"
    PLAYER_LEFT = "minecraft:notification/players/left"
    OPERATOR_ADDED = "minecraft:notification/operators/added"
    OPERATOR_REMOVED = "minecraft:notification/operators/removed"
    ALLOWLIST_ADDED = "minecraft:notification/allowlist/added"
    ALLOWLIST_REMOVED = "minecraft:notification/allowlist/removed"
    IP_BAN_ADDED = "minecraft:notification/ip_bans/added"
    IP_BAN_REMOVED = "minecraft:notification/ip_bans/removed"
    BAN_ADDED = "minecraft:notification/bans/added"
    BAN_REMOVED = "minecraft:notification/bans/removed"
    GAME_RULE_UPDATED = "minecraft:notification/gamerules/updated"

    LEGACY_SERVER_STARTED = "notification:server/started"
    LEGACY_SERVER_STOPPING = "notification:server/stopping"
    LEGACY_SERVER_SAVING = "notification:server/saving"
    LEGACY_SERVER_SAVED = "notification:server/saved"
    LEGACY_SERVER_ACTIVITY = "notification:server/activity"
    LEGACY_SERVER_STATUS = "notification:server/status"
    LEGACY_PLAYER_JOINED = "notification:players/joined"
    LEGACY_PLAYER_LEFT = "notification:players/left"
    LEGACY_OPERATOR_ADDED = "notification:operators/added"
    LEGACY_OPERATOR_REMOVED = "notification:operators/removed"
    LEGACY_ALLOWLIST_ADDED = "notification:allowlist/added"
    LEGACY_ALLOWLIST_REMOVED = "notification:allowlist/removed"
    LEGACY_IP_BAN_ADDED = "notification:ip_bans/added"
    LEGACY_IP_BAN_REMOVED = "notification:ip_bans/removed"
    LEGACY_BAN_ADDED = "notification:bans/added"
    LEGACY_BAN_REMOVED = "notification:bans/removed"
    LEGACY_GAME_RULE_UPDATED = "notification:gamerules/updated"

    @property
    def is_legacy(self) -> bool:
        return self.name.startswith("LEGACY_")


CANONICAL_NOTIFICATIONS: tuple[Notification, ...] = tuple(n for n in Notification if not n.is_legacy)

_LEGACY_BY_CANONICAL: dict[str, str] = {
    str(n): str(Notification[f"LEGACY_{n.name}"]) for n in CANONICAL_NOTIFICATIONS
}
_CANONICAL_BY_LEGACY: dict[str, str] = {legacy: canonical for canonical, legacy in _LEGACY_BY_CANONICAL.items()}


def canonical_name(name: str) -> str | None:
    """Canonical name for either name of a pair, or None for other events."""
    if name in _LEGACY_BY_CANONICAL:
        return name
    return _CANONICAL_BY_LEGACY.get(name)


def legacy_name(name: str) -> str:
    """Legacy name paired with a canonical notification name."""
    return _LEGACY_BY_CANONICAL[name]


__all__ = [
    "CANONICAL_NOTIFICATIONS",
    "Notification",
    "canonical_name",
    "legacy_name",
]
