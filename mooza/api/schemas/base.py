"""
Shared API base schemas.

API DTOs are separate from domain entities and persistence tables. They
serialize with camelCase keys, the shape the web client consumes.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base response model emitting camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )
