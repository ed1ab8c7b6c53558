"""Response envelopes shared by the catalog and shop APIs."""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Serializes with camelCase keys and accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginatedResponse(CamelModel, Generic[T]):
    results: list[T]
    current_page: int
    per_page: int
    total_pages: int
    total_items: int

    @classmethod
    def build(cls, results: list, limit: int, offset: int, total: int):
        return cls(
            results=results,
            current_page=offset // limit + 1,
            per_page=limit,
            total_pages=math.ceil(total / limit),
            total_items=total,
        )
