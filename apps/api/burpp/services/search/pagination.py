from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def has_more(self) -> bool:
        return offset_for(self.page, self.limit) + len(self.items) < self.total


def offset_for(page: int, limit: int) -> int:
    """1-based page number to row offset."""
    return (page - 1) * limit


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive")
    offset = offset_for(page, limit)
    return Page(items=list(items[offset:offset + limit]), total=len(items), page=page, limit=limit)
