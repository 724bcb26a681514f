import pytest

from mcsm.errors import IncorrectTypeError, UnknownEnumVariantError
from mcsm.schemas import Difficulty, GameMode
from mcsm.server_settings import ServerSettings

from mock_connection import StubConnection


def _settings() -> tuple[ServerSettings, StubConnection]:
    connection = StubConnection()
    return ServerSettings(connection), connection


@pytest.mark.asyncio
async def test_get_reads_setting() -> None:
    settings, connection = _settings()
    connection.add_result(20)

    assert await settings.get_max_players() == 20
    assert connection.requests == [("minecraft:serversettings/max_players", [])]


@pytest.mark.asyncio
async def test_set_sends_value_and_returns_server_value() -> None:
    settings, connection = _settings()
    connection.add_result("A Minecraft Server")

    assert await settings.set_motd("A Minecraft Server") == "A Minecraft Server"
    assert connection.requests == [("minecraft:serversettings/motd/set", ["A Minecraft Server"])]


@pytest.mark.asyncio
async def test_boolean_settings() -> None:
    settings, connection = _settings()
    connection.add_result(True)
    connection.add_result(False)

    assert await settings.get_enforce_allowlist() is True
    assert await settings.set_use_allowlist(False) is False
    assert connection.methods == [
        "minecraft:serversettings/enforce_allowlist",
        "minecraft:serversettings/use_allowlist/set",
    ]


@pytest.mark.asyncio
async def test_enum_settings() -> None:
    settings, connection = _settings()
    connection.add_result("hard")
    connection.add_result("creative")

    assert await settings.set_difficulty(Difficulty.HARD) is Difficulty.HARD
    assert await settings.get_game_mode() is GameMode.CREATIVE
    assert connection.requests[0] == ("minecraft:serversettings/difficulty/set", ["hard"])


@pytest.mark.asyncio
async def test_unknown_enum_value() -> None:
    settings, connection = _settings()
    connection.add_result("nightmare")

    with pytest.raises(UnknownEnumVariantError, match="Unknown enum value nightmare for enum Difficulty"):
        await settings.get_difficulty()


@pytest.mark.asyncio
async def test_wrong_type_is_rejected() -> None:
    settings, connection = _settings()
    connection.add_result("ten")

    with pytest.raises(IncorrectTypeError, match="Expected number, received string"):
        await settings.get_view_distance()


@pytest.mark.asyncio
async def test_integral_float_is_accepted() -> None:
    settings, connection = _settings()
    connection.add_result(10.0)

    assert await settings.get_simulation_distance() == 10


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("getter", "method", "result"),
    [
        ("get_autosave", "autosave", True),
        ("get_pause_when_empty_seconds", "pause_when_empty_seconds", 60),
        ("get_player_idle_timeout", "player_idle_timeout", 0),
        ("get_allow_flight", "allow_flight", False),
        ("get_spawn_protection_radius", "spawn_protection_radius", 16),
        ("get_force_game_mode", "force_game_mode", False),
        ("get_accept_transfers", "accept_transfers", True),
        ("get_status_heartbeat_interval", "status_heartbeat_interval", 5),
        ("get_operator_user_permission_level", "operator_user_permission_level", 4),
        ("get_hide_online_players", "hide_online_players", False),
        ("get_status_replies", "status_replies", True),
        ("get_entity_broadcast_range", "entity_broadcast_range", 100),
    ],
)
async def test_setting_method_names(getter, method, result) -> None:
    settings, connection = _settings()
    connection.add_result(result)

    assert await getattr(settings, getter)() == result
    assert connection.methods == [f"minecraft:serversettings/{method}"]
