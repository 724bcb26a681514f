"""Named-event emitter backed by blinker signals."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable
from typing import Any

from blinker import Namespace
from loguru import logger

from mcsm.notifications import canonical_name, legacy_name

Listener = Callable[..., Any]
ErrorCallback = Callable[[BaseException], None]

ERROR_EVENT = "error"

background_tasks: set[asyncio.Task[Any]] = set()


def _schedule(result: Any, on_error: ErrorCallback) -> None:
    task = asyncio.ensure_future(result)
    background_tasks.add(task)
    task.add_done_callback(background_tasks.discard)
    task.add_done_callback(lambda done: _report_failure(done, on_error))


def _report_failure(task: asyncio.Future[Any], on_error: ErrorCallback) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        on_error(error)


class EventEmitter:
    """Synchronous emitter: `emit` calls the listeners of an event in registration order.

    Coroutine listeners are scheduled as background tasks on the running loop.
    A listener that fails does not stop the others; its exception is emitted
    as `error`, or logged when it was raised by an `error` listener.
    """

    def __init__(self) -> None:
        self._signals = Namespace()
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: str, listener: Listener) -> Callable[[], None]:
        """Register `listener` for `event`. Returns a callable that removes it."""
        listeners = self._listeners.get(event)
        if listeners is None:
            listeners = self._listeners[event] = []
            self._signals.signal(event).connect(self._dispatcher(event), weak=False)
        listeners.append(listener)
        return lambda: self._remove(event, listener)

    def once(self, event: str, listener: Listener) -> Callable[[], None]:
        """Register `listener` for the next emission of `event` only."""
        remove: Callable[[], None] | None = None

        def _once(*args: Any) -> Any:
            if remove is not None:
                remove()
            return listener(*args)

        remove = self.on(event, _once)
        return remove

    def has_listeners(self, event: str) -> bool:
        return bool(self._listeners.get(event))

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of `event` with `args`.

        Returns whether any listener was registered. An `error` event nobody
        listens to is written to the log instead of being dropped.
        """
        if not self.has_listeners(event):
            if event == ERROR_EVENT:
                error = args[0] if args else None
                logger.error(
                    "mcsm.events.unhandled_error type={} error={} cause={}",
                    type(error).__name__,
                    error,
                    getattr(error, "__cause__", None),
                )
            return False
        self._signals.signal(event).send(self, args=args)
        return True

    def _remove(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)

    def _dispatcher(self, event: str) -> Callable[..., None]:
        def _receiver(sender: Any, *, args: tuple[Any, ...]) -> None:
            # snapshot: `once` listeners remove themselves while running
            for listener in list(self._listeners.get(event, [])):
                self._call(event, listener, args)

        return _receiver

    def _call(self, event: str, listener: Listener, args: tuple[Any, ...]) -> None:
        try:
            result = listener(*args)
        except Exception as e:
            self._listener_failed(event, e)
            return
        if inspect.isawaitable(result):
            _schedule(result, lambda error: self._listener_failed(event, error))

    def _listener_failed(self, event: str, error: BaseException) -> None:
        if event == ERROR_EVENT:
            logger.opt(exception=error).error("mcsm.events.error_listener_failed error={}", error)
            return
        logger.debug("mcsm.events.listener_failed event={} error={}", event, error)
        self.emit(ERROR_EVENT, error)


class AliasedEventEmitter(EventEmitter):
    """Emitter that mirrors every notification onto its canonical or legacy name.

    Emitting either name of a pair notifies listeners of the canonical name
    first, then listeners of the legacy name, each exactly once.
    """

    def emit(self, event: str, *args: Any) -> bool:
        canonical = canonical_name(event)
        if canonical is None:
            return super().emit(event, *args)
        legacy = legacy_name(canonical)
        handled = super().emit(canonical, *args)
        return super().emit(legacy, *args) or handled


__all__ = ["ERROR_EVENT", "AliasedEventEmitter", "EventEmitter", "Listener", "background_tasks"]
