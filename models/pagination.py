"""Paginated list envelope returned by every ``GET /<resource>?page&limit`` call."""

from __future__ import annotations

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class PaginatedResult(BaseModel, Generic[T]):
    """One page of a server-side list.

    ``total`` counts every record on the server and does not depend on
    ``page``; it is the only input for :attr:`page_count`.
    """

    model_config = ConfigDict(populate_by_name=True)

    items: list[T] = Field(default_factory=list, alias="data")
    total: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @model_validator(mode="after")
    def _page_fits_limit(self) -> PaginatedResult[T]:
        if len(self.items) > self.limit:
            raise ValueError(f"page holds {len(self.items)} items but limit is {self.limit}")
        return self

    @property
    def page_count(self) -> int:
        return math.ceil(self.total / self.limit)
