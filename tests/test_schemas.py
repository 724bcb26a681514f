from datetime import UTC, datetime

import pytest

from mcsm.errors import IncorrectTypeError, MissingPropertyError
from mcsm.schemas import (
    DiscoveryResponse,
    IncomingIPBan,
    IPBan,
    KickPlayer,
    Message,
    Operator,
    Player,
    ProtocolInfo,
    ServerState,
    SystemMessage,
    UserBan,
)


class TestPlayer:
    def test_from_input(self):
        assert Player.from_input("Steve") == Player(name="Steve")
        player = Player(id="abc")
        assert Player.from_input(player) is player

    def test_parse_optional_fields(self):
        assert Player.parse({}) == Player()
        assert Player.parse({"id": None, "name": "Steve"}) == Player(name="Steve")

    def test_parse_rejects_non_object(self):
        with pytest.raises(IncorrectTypeError) as exc_info:
            Player.parse("Steve")
        assert exc_info.value.expected_type == "object"

    def test_parse_list_paths(self):
        with pytest.raises(IncorrectTypeError) as exc_info:
            Player.parse_list([{"name": "a"}, {"name": "b"}, {"name": 3}])
        assert exc_info.value.path == (2, "name")

    @pytest.mark.parametrize(
        ("left", "right", "same"),
        [
            (Player(id="1", name="a"), Player(id="1", name="b"), True),
            (Player(id="1", name="a"), Player(id="2", name="a"), False),
            (Player(id="1", name="a"), Player(name="a"), True),
            (Player(name="a"), Player(name="b"), False),
            (Player(), Player(), False),
        ],
    )
    def test_same_player(self, left, right, same):
        assert left.same_player(right) is same

    def test_to_params_omits_missing(self):
        assert Player.with_name("Steve").to_params() == {"name": "Steve"}
        assert Player.with_id("abc").to_params() == {"id": "abc"}


class TestOperator:
    def test_parse_camel_case_fields(self):
        op = Operator.parse({"player": {"name": "Steve"}, "permissionLevel": 4.0, "bypassesPlayerLimit": True})
        assert op.permission_level == 4
        assert op.bypasses_player_limit is True
        assert op.to_params() == {"player": {"name": "Steve"}, "permissionLevel": 4, "bypassesPlayerLimit": True}

    def test_parse_rejects_bool_level(self):
        with pytest.raises(IncorrectTypeError) as exc_info:
            Operator.parse({"player": {}, "permissionLevel": True})
        assert exc_info.value.path == ("permissionLevel",)


class TestBans:
    def test_user_ban_parse(self):
        ban = UserBan.parse(
            {"player": {"name": "Steve"}, "reason": "grief", "source": "console", "expires": "2030-01-01T00:00:00+00:00"}
        )
        assert ban.player == Player(name="Steve")
        assert ban.expires_at == datetime(2030, 1, 1, tzinfo=UTC)

    def test_datetime_expiry_is_serialized(self):
        ban = UserBan.from_input("Steve", expires=datetime(2030, 1, 1, tzinfo=UTC))
        assert ban.to_params() == {"player": {"name": "Steve"}, "expires": "2030-01-01T00:00:00+00:00"}

    def test_permanent_ban_has_no_expiry(self):
        assert IPBan(ip="192.0.2.1").expires_at is None

    def test_ip_ban_rejects_non_string_reason(self):
        with pytest.raises(IncorrectTypeError) as exc_info:
            IPBan.parse({"ip": "192.0.2.1", "reason": 5}, None, 3)
        assert exc_info.value.path == (3, "reason")

    def test_incoming_ip_ban_from_input(self):
        assert IncomingIPBan.from_input("192.0.2.1").ip == "192.0.2.1"
        by_player = IncomingIPBan.from_input(Player(name="Steve"), reason="r")
        assert by_player.player == Player(name="Steve")
        assert by_player.ip is None
        assert by_player.to_params() == {"player": {"name": "Steve"}, "reason": "r"}


class TestServerState:
    def test_parse(self):
        state = ServerState.parse(
            {"started": True, "version": {"name": "1.21.9", "protocol": 773}, "players": [{"name": "Steve"}]}
        )
        assert state.started is True
        assert state.version.protocol == 773
        assert state.players == [Player(name="Steve")]

    def test_players_default_to_empty(self):
        state = ServerState.parse({"started": False, "version": {"name": "1.21.9", "protocol": 773}})
        assert state.players == []

    def test_missing_version_name(self):
        with pytest.raises(MissingPropertyError) as exc_info:
            ServerState.parse({"started": True, "version": {"protocol": 1}})
        assert exc_info.value.path == ("version", "name")


class TestMessages:
    def test_literal_from_string(self):
        assert Message.from_input("hi").to_params() == {"literal": "hi"}

    def test_translatable(self):
        message = Message.of_translatable("chat.type.text", ["a", "b"])
        assert message.to_params() == {"translatable": "chat.type.text", "translatableParams": ["a", "b"]}

    def test_system_message_params(self):
        message = SystemMessage(message=Message.of_literal("hi"), receiving_players=[Player(name="Steve")])
        assert message.to_params() == {
            "message": {"literal": "hi"},
            "overlay": False,
            "receivingPlayers": [{"name": "Steve"}],
        }

    def test_kick_player_uses_singular_key(self):
        kick = KickPlayer(players=[Player(name="Steve")])
        assert kick.to_params() == {"player": [{"name": "Steve"}]}


class TestDiscovery:
    def test_parse_openrpc(self):
        response = DiscoveryResponse.parse({"openrpc": "1.3.2", "info": {"title": "MSMP", "version": "1.0.0"}})
        assert response.spec_version == "1.3.2"
        assert response.protocol_title == "MSMP"
        assert response.protocol_version == "1.0.0"

    def test_missing_spec_version(self):
        with pytest.raises(MissingPropertyError) as exc_info:
            DiscoveryResponse.parse({"info": {"title": "MSMP", "version": "1.0.0"}})
        assert exc_info.value.property == "openrpc"

    @pytest.mark.parametrize(
        ("version", "expected"),
        [
            ("1.0.0", (1, 0, 0)),
            ("2", (2, 0, 0)),
            ("3.1", (3, 1, 0)),
            ("1.2.3.4", (1, 2, 3, 4)),
            ("3.0.0-beta+build", (3, 0, 0)),
            ("latest", None),
        ],
    )
    def test_version_tuple(self, version, expected):
        assert ProtocolInfo(title="t", version=version).version_tuple == expected
