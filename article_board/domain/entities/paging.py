"""Paging envelope returned by paged queries."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class PagingResult(Generic[T]):
    """One page of items plus the total number of rows behind the query."""

    items: list[T] = field(default_factory=list)
    total_records: int = 0
