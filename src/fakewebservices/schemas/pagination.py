"""Page-number pagination models.

List endpoints of the backend return a JSON:API collection document
whose ``meta.pagination`` object describes where the page sits::

    "meta": {"pagination": {"current-page": 1, "prev-page": null,
                            "next-page": 2, "total-pages": 3,
                            "total-count": 42}}
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class Pagination(BaseModel):
    """Pagination details of a list response."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(default=0, alias="current-page")
    previous_page: int = Field(default=0, alias="prev-page")
    next_page: int = Field(default=0, alias="next-page")
    total_pages: int = Field(default=0, alias="total-pages")
    total_count: int = Field(default=0, alias="total-count")

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_zero(cls, value: Any) -> Any:
        # The backend sends null for prev-page on the first page and
        # next-page on the last one.
        return 0 if value is None else value


class PaginationMeta(BaseModel):
    """The ``meta`` object of a list response."""

    pagination: Pagination | None = None


class PaginationEnvelope(BaseModel):
    """Just enough of a list document to reach ``meta.pagination``."""

    meta: PaginationMeta | None = None

    @property
    def pagination(self) -> Pagination:
        if self.meta is None or self.meta.pagination is None:
            return Pagination()
        return self.meta.pagination


class Page(BaseModel, Generic[T]):
    """One page of a collection: the decoded items plus their pagination.

    Pass an instance (e.g. ``Page[Server]()``) as the destination of
    ``Client.do`` to decode a list response.
    """

    items: list[T] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
