import asyncio

import pytest
from loguru import logger

from mcsm.events import AliasedEventEmitter, EventEmitter
from mcsm.notifications import CANONICAL_NOTIFICATIONS, Notification, canonical_name, legacy_name


class TestEventEmitter:
    def test_emit_calls_listener_with_args(self):
        emitter = EventEmitter()
        calls = []
        emitter.on("thing", lambda *args: calls.append(args))

        assert emitter.emit("thing", 1, "two") is True
        assert calls == [(1, "two")]

    def test_emit_without_listeners_returns_false(self):
        emitter = EventEmitter()
        assert emitter.emit("nothing") is False
        assert emitter.has_listeners("nothing") is False

    def test_remove_listener(self):
        emitter = EventEmitter()
        calls = []
        remove = emitter.on("thing", calls.append)
        remove()

        assert emitter.emit("thing", 1) is False
        assert calls == []

    def test_once_fires_a_single_time(self):
        emitter = EventEmitter()
        calls = []
        emitter.once("thing", calls.append)

        emitter.emit("thing", 1)
        emitter.emit("thing", 2)
        assert calls == [1]
        assert emitter.has_listeners("thing") is False

    def test_emitters_do_not_share_listeners(self):
        first = EventEmitter()
        second = EventEmitter()
        calls = []
        first.on("thing", calls.append)

        assert second.emit("thing", 1) is False
        assert calls == []

    def test_unhandled_error_goes_to_log(self):
        emitter = EventEmitter()
        messages: list[str] = []
        sink_id = logger.add(messages.append, level="ERROR", format="{message}")
        try:
            assert emitter.emit("error", RuntimeError("boom")) is False
        finally:
            logger.remove(sink_id)
        assert len(messages) == 1
        assert "boom" in messages[0]

    def test_handled_error_is_not_logged(self):
        emitter = EventEmitter()
        received = []
        emitter.on("error", received.append)
        messages: list[str] = []
        sink_id = logger.add(messages.append, level="ERROR", format="{message}")
        try:
            error = RuntimeError("boom")
            assert emitter.emit("error", error) is True
        finally:
            logger.remove(sink_id)
        assert received == [error]
        assert messages == []

    def test_listeners_run_in_registration_order(self):
        emitter = EventEmitter()
        calls = []
        for index in range(20):
            emitter.on("thing", lambda index=index: calls.append(index))

        emitter.emit("thing")

        assert calls == list(range(20))

    def test_failing_listener_does_not_stop_others(self):
        emitter = EventEmitter()
        calls = []
        errors = []
        failure = RuntimeError("listener failed")

        def fail():
            raise failure

        emitter.on("error", errors.append)
        emitter.on("thing", fail)
        emitter.on("thing", lambda: calls.append("second"))

        assert emitter.emit("thing") is True
        assert calls == ["second"]
        assert errors == [failure]

    def test_failing_error_listener_is_logged(self):
        emitter = EventEmitter()
        messages: list[str] = []

        def fail(error):
            raise RuntimeError("error listener failed")

        emitter.on("error", fail)
        sink_id = logger.add(messages.append, level="ERROR", format="{message}")
        try:
            emitter.emit("error", ValueError("original"))
        finally:
            logger.remove(sink_id)

        assert len(messages) == 1
        assert "mcsm.events.error_listener_failed" in messages[0]

    @pytest.mark.asyncio
    async def test_failing_coroutine_listener_is_emitted_as_error(self):
        emitter = EventEmitter()
        received = asyncio.Event()
        errors = []

        async def listener():
            raise RuntimeError("async listener failed")

        def on_error(error):
            errors.append(error)
            received.set()

        emitter.on("error", on_error)
        emitter.on("thing", listener)
        emitter.emit("thing")
        await asyncio.wait_for(received.wait(), timeout=1)

        assert [str(error) for error in errors] == ["async listener failed"]

    @pytest.mark.asyncio
    async def test_coroutine_listener_is_scheduled(self):
        emitter = EventEmitter()
        done = asyncio.Event()

        async def listener(value):
            assert value == 42
            done.set()

        emitter.on("thing", listener)
        emitter.emit("thing", 42)
        await asyncio.wait_for(done.wait(), timeout=1)


class TestNotificationNames:
    def test_every_canonical_name_has_a_legacy_alias(self):
        assert len(CANONICAL_NOTIFICATIONS) == 17
        for notification in CANONICAL_NOTIFICATIONS:
            legacy = legacy_name(notification)
            assert legacy.startswith("notification:")
            assert legacy.removeprefix("notification:") == notification.removeprefix("minecraft:notification/")
            assert canonical_name(legacy) == notification
            assert canonical_name(notification) == notification

    def test_other_events_have_no_alias(self):
        assert canonical_name("error") is None
        assert canonical_name("open") is None

    def test_legacy_members(self):
        assert Notification.LEGACY_PLAYER_JOINED == "notification:players/joined"
        assert Notification.LEGACY_PLAYER_JOINED.is_legacy
        assert not Notification.PLAYER_JOINED.is_legacy


def _record(emitter: AliasedEventEmitter, canonical: str) -> list[tuple[str, tuple]]:
    calls: list[tuple[str, tuple]] = []
    legacy = legacy_name(canonical)
    emitter.on(canonical, lambda *args: calls.append((canonical, args)))
    emitter.on(legacy, lambda *args: calls.append((legacy, args)))
    return calls


class TestAliasedEventEmitter:
    @pytest.mark.parametrize("notification", CANONICAL_NOTIFICATIONS)
    def test_canonical_emission_reaches_both_names(self, notification):
        emitter = AliasedEventEmitter()
        calls = _record(emitter, notification)

        assert emitter.emit(notification, "payload", 1) is True

        assert calls == [
            (notification, ("payload", 1)),
            (legacy_name(notification), ("payload", 1)),
        ]

    @pytest.mark.parametrize("notification", CANONICAL_NOTIFICATIONS)
    def test_legacy_emission_reaches_both_names_canonical_first(self, notification):
        emitter = AliasedEventEmitter()
        calls = _record(emitter, notification)

        assert emitter.emit(legacy_name(notification), "payload") is True

        assert calls == [
            (notification, ("payload",)),
            (legacy_name(notification), ("payload",)),
        ]

    def test_only_legacy_listener(self):
        emitter = AliasedEventEmitter()
        calls = []
        emitter.on(Notification.LEGACY_SERVER_SAVED, lambda: calls.append("legacy"))

        assert emitter.emit(Notification.SERVER_SAVED) is True
        assert calls == ["legacy"]

    def test_no_listeners(self):
        emitter = AliasedEventEmitter()
        assert emitter.emit(Notification.SERVER_SAVED) is False

    def test_failing_canonical_listener_still_reaches_legacy_name(self):
        emitter = AliasedEventEmitter()
        calls = []
        errors = []

        def fail(*args):
            raise RuntimeError("canonical listener failed")

        emitter.on("error", errors.append)
        emitter.on(Notification.PLAYER_LEFT, fail)
        emitter.on(Notification.LEGACY_PLAYER_LEFT, lambda player: calls.append(player))

        emitter.emit(Notification.PLAYER_LEFT, "Steve")

        assert calls == ["Steve"]
        assert [str(error) for error in errors] == ["canonical listener failed"]

    def test_relay_does_not_loop_when_listener_re_emits(self):
        emitter = AliasedEventEmitter()
        calls = []

        def relay(*args):
            calls.append("canonical")
            if len(calls) == 1:
                emitter.emit(Notification.LEGACY_SERVER_STARTED)

        emitter.on(Notification.SERVER_STARTED, relay)
        emitter.on(Notification.LEGACY_SERVER_STARTED, lambda: calls.append("legacy"))

        emitter.emit(Notification.SERVER_STARTED)
        assert calls == ["canonical", "canonical", "legacy", "legacy"]

    def test_plain_events_are_not_relayed(self):
        emitter = AliasedEventEmitter()
        calls = []
        emitter.on("open", lambda: calls.append("open"))
        emitter.emit("open")
        assert calls == ["open"]
