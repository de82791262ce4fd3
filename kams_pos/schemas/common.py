"""
Shared schema building blocks.

Every POS payload is camelCase on the wire while the Python side stays
snake_case. CamelModel wires that up once; FastAPI serializes response models
by alias, and requests are accepted under either name.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases that can be built from ORM objects."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(CamelModel):
    success: bool = True


def blank_to_none(value: Any) -> Optional[Any]:
    """Treat empty or whitespace-only strings as missing."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def number_to_str(value: Any) -> Any:
    """PIN keypads may send digits as a JSON number."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value
