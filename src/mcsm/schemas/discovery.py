"""Capability discovery response."""

from __future__ import annotations

from typing import Any

from mcsm.errors import MissingPropertyError, PathSegment
from mcsm.schemas.base import ProtocolModel
from mcsm.validation import expect_object, expect_str, require


class ProtocolInfo(ProtocolModel):
    """Name and version of the management protocol."""

    title: str
    version: str

    @classmethod
    def parse(cls, data: Any, response: Any = None, *path: PathSegment) -> ProtocolInfo:
        response = data if response is None else response
        obj = expect_object(data, response, *path)
        title = expect_str(require(obj, "title", response, *path), response, *path, "title")
        version = expect_str(require(obj, "version", response, *path), response, *path, "version")
        return cls(title=title, version=version)

    @property
    def version_tuple(self) -> tuple[int, ...] | None:
        """Numeric version components padded to at least three, or None if not dotted integers."""
        core = self.version.split("-", 1)[0].split("+", 1)[0]
        try:
            parts = [int(part) for part in core.split(".")]
        except ValueError:
            return None
        parts.extend([0] * (3 - len(parts)))
        return tuple(parts)


class DiscoveryResponse(ProtocolModel):
    """Result of the `rpc.discover` call.

    The specification version is sent as `openrpc`; `specVersion` is accepted as well.
    """

    spec_version: str
    info: ProtocolInfo

    @classmethod
    def parse(cls, data: Any, response: Any = None, *path: PathSegment) -> DiscoveryResponse:
        response = data if response is None else response
        obj = expect_object(data, response, *path)
        if "openrpc" in obj:
            spec_version = expect_str(obj["openrpc"], response, *path, "openrpc")
        elif "specVersion" in obj:
            spec_version = expect_str(obj["specVersion"], response, *path, "specVersion")
        else:
            raise MissingPropertyError("openrpc", response, *path)
        info = ProtocolInfo.parse(require(obj, "info", response, *path), response, *path, "info")
        return cls(spec_version=spec_version, info=info)

    @property
    def protocol_title(self) -> str:
        return self.info.title

    @property
    def protocol_version(self) -> str:
        return self.info.version


__all__ = ["DiscoveryResponse", "ProtocolInfo"]
