"""Base model for management protocol types."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProtocolModel(BaseModel):
    """Base model for protocol types.

    Uses alias_generator to convert snake_case to camelCase.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_params(self) -> dict[str, Any]:
        """Serialize for use as a call parameter."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


__all__ = ["ProtocolModel"]
