"""
Common response models and utilities.

CamelModel is the base for every request/response schema: fields are
snake_case in Python and camelCase on the wire.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema with camelCase aliases; snake_case names are accepted too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain success/message acknowledgement."""

    success: bool = True
    message: str

