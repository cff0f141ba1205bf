"""Shared pydantic base – snake_case in Python, camelCase on the wire."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self, exclude_none: bool = False) -> dict[str, Any]:
        """Dump with camelCase keys and JSON-native values."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=exclude_none)
