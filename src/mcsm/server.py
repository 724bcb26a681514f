"""Session facade for a managed Minecraft server."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from loguru import logger

from mcsm.config.settings import ClientSettings
from mcsm.events import ERROR_EVENT, AliasedEventEmitter
from mcsm.gamerules import GameRules
from mcsm.lists import AllowList, BanList, IPBanList, OperatorList
from mcsm.notifications import Notification
from mcsm.rpc.connection import Connection
from mcsm.rpc.websocket import WebSocketConnection
from mcsm.schemas.ban import IPBan, UserBan
from mcsm.schemas.gamerule import TypedGameRule
from mcsm.schemas.message import KickPlayer, Message, SystemMessage
from mcsm.schemas.player import Operator, Player
from mcsm.schemas.server import ServerState
from mcsm.server_settings import ServerSettings
from mcsm.validation import ItemOrList, expect_bool, expect_str, from_item_or_list, get_param

NotificationHandler = Callable[[Any], None]


class MinecraftServer(AliasedEventEmitter):
    """Entry point for managing a server over the management protocol.

    Owns the connection and every cache built on it. Server notifications are
    parsed, applied to the caches and re-emitted as typed events under both
    their canonical and legacy names. A notification that cannot be handled
    is emitted as `error` instead.
    """

    def __init__(self, connection: Connection) -> None:
        super().__init__()
        self._connection = connection
        self._state: ServerState | None = None
        self._game_rules = GameRules(connection)
        self._allowlist: AllowList | None = None
        self._ban_list: BanList | None = None
        self._ip_ban_list: IPBanList | None = None
        self._operator_list: OperatorList | None = None

        connection.on(ERROR_EVENT, lambda error: self.emit(ERROR_EVENT, error))

        for notification in (
            Notification.SERVER_STARTED,
            Notification.SERVER_STOPPING,
            Notification.SERVER_SAVING,
            Notification.SERVER_SAVED,
            Notification.SERVER_ACTIVITY,
        ):
            self._subscribe(notification, self._relay(notification))
        self._subscribe(Notification.SERVER_STATUS, self._on_server_status)
        self._subscribe(Notification.PLAYER_JOINED, self._on_player_joined)
        self._subscribe(Notification.PLAYER_LEFT, self._on_player_left)
        self._subscribe(Notification.OPERATOR_ADDED, self._on_operator_added)
        self._subscribe(Notification.OPERATOR_REMOVED, self._on_operator_removed)
        self._subscribe(Notification.ALLOWLIST_ADDED, self._on_allowlist_added)
        self._subscribe(Notification.ALLOWLIST_REMOVED, self._on_allowlist_removed)
        self._subscribe(Notification.IP_BAN_ADDED, self._on_ip_ban_added)
        self._subscribe(Notification.IP_BAN_REMOVED, self._on_ip_ban_removed)
        self._subscribe(Notification.BAN_ADDED, self._on_ban_added)
        self._subscribe(Notification.BAN_REMOVED, self._on_ban_removed)
        self._subscribe(Notification.GAME_RULE_UPDATED, self._on_game_rule_updated)

    @classmethod
    async def connect(cls, url: str, token: str | None = None, reconnect: bool | None = None) -> MinecraftServer:
        """Open a WebSocket connection and wrap it in a session."""
        return cls(await WebSocketConnection.connect(url, token=token, reconnect=reconnect))

    @classmethod
    async def from_settings(cls, settings: ClientSettings | None = None) -> MinecraftServer:
        return cls(await WebSocketConnection.from_settings(settings))

    @property
    def connection(self) -> Connection:
        return self._connection

    async def close(self) -> None:
        await self._connection.close()

    # notifications

    def _subscribe(self, notification: Notification, handler: NotificationHandler) -> None:
        # Legacy names reach the canonical listener through the connection's alias relay.
        def _guarded(params: Any = None) -> None:
            try:
                handler(params)
            except Exception as e:
                logger.debug("mcsm.server.notification_error method={} error={}", notification, e)
                self.emit(ERROR_EVENT, e)

        self._connection.on(notification, _guarded)

    def _relay(self, notification: Notification) -> NotificationHandler:
        return lambda params: self.emit(notification)

    def _on_server_status(self, params: Any) -> None:
        path, value = get_param(params, "status")
        self._state = ServerState.parse(value, params, *path)
        self.emit(Notification.SERVER_STATUS, self._state)

    def _on_player_joined(self, params: Any) -> None:
        path, value = get_param(params, "player")
        self.emit(Notification.PLAYER_JOINED, Player.parse(value, params, *path))

    def _on_player_left(self, params: Any) -> None:
        path, value = get_param(params, "player")
        self.emit(Notification.PLAYER_LEFT, Player.parse(value, params, *path))

    def _on_operator_added(self, params: Any) -> None:
        path, value = get_param(params, "player")
        operator = Operator.parse(value, params, *path)
        if self._operator_list is not None:
            self._operator_list.add_item(operator)
        self.emit(Notification.OPERATOR_ADDED, operator)

    def _on_operator_removed(self, params: Any) -> None:
        path, value = get_param(params, "player")
        operator = Operator.parse(value, params, *path)
        if self._operator_list is not None:
            self._operator_list.remove_matching(lambda item: item.player.same_player(operator.player))
        self.emit(Notification.OPERATOR_REMOVED, operator)

    def _on_allowlist_added(self, params: Any) -> None:
        path, value = get_param(params, "player")
        player = Player.parse(value, params, *path)
        if self._allowlist is not None:
            self._allowlist.add_item(player)
        self.emit(Notification.ALLOWLIST_ADDED, player)

    def _on_allowlist_removed(self, params: Any) -> None:
        path, value = get_param(params, "player")
        player = Player.parse(value, params, *path)
        if self._allowlist is not None:
            self._allowlist.remove_matching(player.same_player)
        self.emit(Notification.ALLOWLIST_REMOVED, player)

    def _on_ip_ban_added(self, params: Any) -> None:
        path, value = get_param(params, "player")
        ban = IPBan.parse(value, params, *path)
        if self._ip_ban_list is not None:
            self._ip_ban_list.add_item(ban)
        self.emit(Notification.IP_BAN_ADDED, ban)

    def _on_ip_ban_removed(self, params: Any) -> None:
        # carries the unbanned address under the "player" parameter
        path, value = get_param(params, "player")
        ip = expect_str(value, params, *path)
        if self._ip_ban_list is not None:
            self._ip_ban_list.remove_matching(lambda item: item.ip == ip)
        self.emit(Notification.IP_BAN_REMOVED, ip)

    def _on_ban_added(self, params: Any) -> None:
        path, value = get_param(params, "player")
        ban = UserBan.parse(value, params, *path)
        if self._ban_list is not None:
            self._ban_list.add_item(ban)
        self.emit(Notification.BAN_ADDED, ban)

    def _on_ban_removed(self, params: Any) -> None:
        path, value = get_param(params, "player")
        player = Player.parse(value, params, *path)
        if self._ban_list is not None:
            self._ban_list.remove_matching(lambda item: item.player.same_player(player))
        self.emit(Notification.BAN_REMOVED, player)

    def _on_game_rule_updated(self, params: Any) -> None:
        path, value = get_param(params, "gamerule")
        rule = TypedGameRule.parse(value, params, *path)
        self._game_rules.apply(rule)
        self.emit(Notification.GAME_RULE_UPDATED, rule)

    # server

    async def get_status(self, force: bool = False) -> ServerState:
        """Current server state, served from the last status notification unless forced."""
        if self._state is None or force:
            result = await self._connection.call("minecraft:server/status", [])
            self._state = ServerState.parse(result)
        return self._state

    async def get_connected_players(self, force: bool = False) -> list[Player]:
        if self._state is not None and not force:
            return list(self._state.players)
        result = await self._connection.call("minecraft:players", [])
        return Player.parse_list(result)

    async def kick_players(
        self,
        players: ItemOrList[Player | str],
        message: Message | str | None = None,
    ) -> list[Player]:
        """Kick players, optionally showing them a message. Returns the players kicked."""
        request = KickPlayer(
            players=[Player.from_input(player) for player in from_item_or_list(players)],
            message=None if message is None else Message.from_input(message),
        )
        result = await self._connection.call("minecraft:players/kick", [request.to_params()])
        return Player.parse_list(result)

    async def save(self, flush: bool = True) -> bool:
        """Save the world. With `flush`, chunks are written to disk immediately."""
        result = await self._connection.call("minecraft:server/save", [flush])
        return expect_bool(result, result)

    async def stop(self) -> bool:
        result = await self._connection.call("minecraft:server/stop", [])
        return expect_bool(result, result)

    async def send_system_message(
        self,
        message: Message | str,
        players: ItemOrList[Player | str] | None = None,
        overlay: bool = False,
    ) -> bool:
        """Send a system message to some players, or to everyone when `players` is None.

        With `overlay` the message is shown above the hotbar instead of in chat.
        """
        request = SystemMessage(
            message=Message.from_input(message),
            receiving_players=None
            if players is None
            else [Player.from_input(player) for player in from_item_or_list(players)],
            overlay=overlay,
        )
        result = await self._connection.call("minecraft:server/system_message", [request.to_params()])
        return expect_bool(result, result)

    # game rules

    async def get_game_rules(self, force: bool = False) -> dict[str, TypedGameRule]:
        return await self._game_rules.get(force)

    async def update_game_rule(self, key: str, value: bool | int | str) -> TypedGameRule:
        return await self._game_rules.update(key, value)

    # lists

    def allowlist(self) -> AllowList:
        if self._allowlist is None:
            self._allowlist = AllowList(self._connection)
        return self._allowlist

    def ban_list(self) -> BanList:
        if self._ban_list is None:
            self._ban_list = BanList(self._connection)
        return self._ban_list

    def ip_ban_list(self) -> IPBanList:
        if self._ip_ban_list is None:
            self._ip_ban_list = IPBanList(self._connection)
        return self._ip_ban_list

    def operator_list(self) -> OperatorList:
        if self._operator_list is None:
            self._operator_list = OperatorList(self._connection)
        return self._operator_list

    def settings(self) -> ServerSettings:
        return ServerSettings(self._connection)


__all__ = ["MinecraftServer"]
