"""Typed parse helpers for decoded JSON.

Every helper takes the value to check, the full response it came from and the
path to the value inside that response, so failures can point at the exact
field.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from mcsm.errors import IncorrectTypeError, MissingParameterError, MissingPropertyError, PathSegment, json_type_name

T = TypeVar("T")
ItemOrList = T | Sequence[T]


def expect_object(data: Any, response: Any, *path: PathSegment) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise IncorrectTypeError("object", json_type_name(data), response, *path)
    return data


def expect_list(data: Any, response: Any, *path: PathSegment) -> list[Any]:
    if not isinstance(data, list):
        raise IncorrectTypeError("array", json_type_name(data), response, *path)
    return data


def expect_str(value: Any, response: Any, *path: PathSegment) -> str:
    if not isinstance(value, str):
        raise IncorrectTypeError("string", json_type_name(value), response, *path)
    return value


def expect_bool(value: Any, response: Any, *path: PathSegment) -> bool:
    if not isinstance(value, bool):
        raise IncorrectTypeError("boolean", json_type_name(value), response, *path)
    return value


def expect_int(value: Any, response: Any, *path: PathSegment) -> int:
    # JSON has no separate integer type, so integral floats are accepted.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise IncorrectTypeError("number", json_type_name(value), response, *path)
    return value


def require(data: Mapping[str, Any], name: str, response: Any, *path: PathSegment) -> Any:
    """Return `data[name]` or raise `MissingPropertyError`."""
    if name not in data:
        raise MissingPropertyError(name, response, *path)
    return data[name]


def optional_field(
    data: Mapping[str, Any],
    name: str,
    check: Callable[..., T],
    response: Any,
    *path: PathSegment,
) -> T | None:
    """Check `data[name]` with `check` unless it is absent or null."""
    value = data.get(name)
    if value is None:
        return None
    return check(value, response, *path, name)


def parse_list(
    data: Any,
    parse_item: Callable[..., T],
    response: Any = None,
    *path: PathSegment,
) -> list[T]:
    """Parse a JSON array element by element; each element is reported by index."""
    if response is None:
        response = data
    items = expect_list(data, response, *path)
    return [parse_item(item, response, *path, index) for index, item in enumerate(items)]


def get_param(data: Any, name: str, position: int = 0) -> tuple[tuple[PathSegment, ...], Any]:
    """Extract a notification parameter given either positionally or by name.

    Returns the path used for the lookup together with the value.
    """
    if isinstance(data, (list, tuple)) and len(data) > position:
        return (position,), data[position]
    if isinstance(data, Mapping) and name in data:
        return (name,), data[name]
    raise MissingParameterError(name, position, data)


def from_item_or_list(items: ItemOrList[T]) -> list[T]:
    if isinstance(items, (list, tuple)):
        return list(items)
    return [items]  # type: ignore[list-item]


__all__ = [
    "ItemOrList",
    "expect_bool",
    "expect_int",
    "expect_list",
    "expect_object",
    "expect_str",
    "from_item_or_list",
    "get_param",
    "optional_field",
    "parse_list",
    "require",
]
