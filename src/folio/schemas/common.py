"""Shared response envelope and base schema.

Every endpoint answers with the same envelope:
`{success: bool, data?: T, message?: str, errors?: list}`.
JSON keys are camelCase on the wire (the site's client expects
`isAdmin`, `featuredImage`, ...); inputs accept either spelling.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FieldError(BaseModel):
    field: str
    message: str


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    errors: Optional[list[Any]] = None
