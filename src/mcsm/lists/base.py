"""Locally cached mirror of a server-owned list."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any, ClassVar, Generic, TypeVar

from loguru import logger

from mcsm.errors import IncorrectTypeError, InvalidStateError, PathSegment, json_type_name
from mcsm.rpc.connection import Connection
from mcsm.schemas.base import ProtocolModel
from mcsm.validation import ItemOrList, from_item_or_list, parse_list

ItemT = TypeVar("ItemT")
AddT = TypeVar("AddT")
RemoveT = TypeVar("RemoveT")


def encode_param(value: Any) -> Any:
    if isinstance(value, ProtocolModel):
        return value.to_params()
    return value


class CachedList(ABC, Generic[ItemT, AddT, RemoveT]):
    """A server-owned list, fetched lazily and kept in sync.

    The cache starts out unloaded. `get` fetches it; `set`, `add`, `remove`
    and `clear` replace it with the list the server returns. Notifications
    patch it through `add_item` and `remove_matching`, which do nothing until
    the list has been loaded.
    """

    # RPC base name, e.g. "minecraft:allowlist"
    name: ClassVar[str]

    def __init__(self, connection: Connection) -> None:
        self._connection = connection
        self._items: list[ItemT] | None = None

    @property
    def loaded(self) -> bool:
        return self._items is not None

    @abstractmethod
    def parse_item(self, data: Any, response: Any, *path: PathSegment) -> ItemT:
        """Parse one list entry returned by the server."""

    def add_input(self, value: AddT) -> Any:
        """Convert an `add` argument into the entry sent to the server."""
        return value

    def remove_input(self, value: RemoveT) -> Any:
        """Convert a `remove` argument into the entry sent to the server."""
        return value

    async def get(self, force: bool = False) -> list[ItemT]:
        """Return the list, fetching it if it was never loaded or `force` is set."""
        if self._items is None or force:
            await self._call_and_parse()
        if self._items is None:
            raise InvalidStateError(f"List {self.name} is missing after fetching it")
        return list(self._items)

    async def set(self, items: Sequence[AddT]) -> list[ItemT]:
        """Replace the whole list. Entries are converted like `add` arguments."""
        return await self._call_and_parse("set", [encode_param(self.add_input(item)) for item in items])

    async def add(self, items: ItemOrList[AddT]) -> list[ItemT]:
        return await self._call_and_parse(
            "add", [encode_param(self.add_input(item)) for item in from_item_or_list(items)]
        )

    async def remove(self, items: ItemOrList[RemoveT]) -> list[ItemT]:
        return await self._call_and_parse(
            "remove", [encode_param(self.remove_input(item)) for item in from_item_or_list(items)]
        )

    async def clear(self) -> list[ItemT]:
        """Empty the list.

        Some servers acknowledge with `true`, others return the (empty) list.
        """
        result = await self._call("clear")
        if result is True:
            self._items = []
        elif isinstance(result, list):
            self._items = self._parse(result)
        else:
            raise IncorrectTypeError("array|true", json_type_name(result), result)
        return list(self._items)

    def add_item(self, item: ItemT) -> None:
        """Append an entry reported by a notification."""
        if self._items is None:
            return
        self._items.append(item)

    def remove_matching(self, predicate: Callable[[ItemT], bool]) -> None:
        """Drop every entry matching `predicate`, as reported by a notification."""
        if self._items is None:
            return
        self._items = [item for item in self._items if not predicate(item)]

    async def _call(self, action: str | None = None, entries: list[Any] | None = None) -> Any:
        method = self.name if action is None else f"{self.name}/{action}"
        params: list[Any] = [] if entries is None else [entries]
        logger.debug("mcsm.lists.call method={} entries={}", method, 0 if entries is None else len(entries))
        return await self._connection.call(method, params)

    async def _call_and_parse(self, action: str | None = None, entries: list[Any] | None = None) -> list[ItemT]:
        result = await self._call(action, entries)
        self._items = self._parse(result)
        return list(self._items)

    def _parse(self, result: Any) -> list[ItemT]:
        return parse_list(result, self.parse_item, result)


__all__ = ["AddT", "CachedList", "ItemT", "RemoveT", "encode_param"]
