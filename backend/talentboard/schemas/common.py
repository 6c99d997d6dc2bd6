from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from talentboard.services.filters import split_csv

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T


def coerce_str_list(value):
    """Accept a JSON list or a comma-separated string for list fields."""
    if value is None:
        return []
    if isinstance(value, str):
        return split_csv(value)
    return value
