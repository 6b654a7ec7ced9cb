"""
Shared model base for camelCase wire payloads.

Dependencies: pydantic
System role: Request/response serialization convention
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes fields as camelCase; accepts snake_case or camelCase input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
