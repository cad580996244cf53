from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional

from app.models.enums import UserRole


class CamelModel(BaseModel):
    """Base for API schemas: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Message(BaseModel):
    message: str


# This schema is used in multiple other schemas, so it's in a common file
# to avoid circular imports.
class UserSimple(CamelModel):
    """A simplified user schema for nested representations."""
    id: int
    name: str
    email: str
    role: Optional[UserRole] = None
    organization: Optional[str] = None
