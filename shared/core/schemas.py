from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from shared.core.exceptions import ValidationException

# Shared properties
T = TypeVar("T")


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
    errors: Optional[Any] = None


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


class OrderBy(BaseModel):
    field: str
    direction: SortDirection = SortDirection.asc


class PaginationOptions(BaseModel):
    paginate: bool = False
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)


class PaginatedResult(BaseModel, Generic[T]):
    docs: List[T]
    total_docs: int
    limit: int
    page: int
    total_pages: int
    paging_counter: int
    has_prev_page: bool
    has_next_page: bool
    prev_page: Optional[int] = None
    next_page: Optional[int] = None

    @classmethod
    def build(cls, docs: List[Any], total_docs: int, page: int, limit: int):
        total_pages = max(1, -(-total_docs // limit))
        return cls(
            docs=docs,
            total_docs=total_docs,
            limit=limit,
            page=page,
            total_pages=total_pages,
            paging_counter=(page - 1) * limit + 1,
            has_prev_page=page > 1,
            has_next_page=page < total_pages,
            prev_page=page - 1 if page > 1 else None,
            next_page=page + 1 if page < total_pages else None,
        )


class ListQueryParams(BaseModel):
    paginate: bool = True
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    # e.g. "created_at:desc,serial_number:asc"
    order_by: Optional[str] = None
    active: Optional[bool] = True

    def pagination(self) -> PaginationOptions:
        return PaginationOptions(paginate=self.paginate, page=self.page, limit=self.limit)

    def ordering(self) -> List[OrderBy]:
        return parse_order_by(self.order_by)


def parse_order_by(value: Optional[str]) -> List[OrderBy]:
    if not value:
        return []

    ordering = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        field, _, direction = item.partition(":")
        direction = (direction.strip() or "asc").lower()
        if direction not in (SortDirection.asc.value, SortDirection.desc.value):
            raise ValidationException(f"Invalid sort direction '{direction}'")
        ordering.append(OrderBy(field=field.strip(), direction=direction))
    return ordering


class FileUpload(BaseModel):
    """A file payload waiting to be written to the file storage."""

    filename: str
    content_type: str = "application/octet-stream"
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)
