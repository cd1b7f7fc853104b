"""Shared base model for all API schemas."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

# SQLite stores integers as signed 64-bit values.
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1


class APIModel(BaseModel):
    """Base model serialising attributes as camelCase.

    ``populate_by_name`` lets services build models with the snake_case
    attribute names while clients send and receive camelCase keys.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
