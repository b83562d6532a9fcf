"""Shared pydantic base for engine data types.

Field names are snake_case in Python; every field also accepts the camelCase
name used by survey documents exported from the platform.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


__all__ = ["CamelModel"]
