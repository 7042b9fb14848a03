"""
Page requests and pages.

Clients count pages from 1; the store counts them from 0.  Every list
endpoint uses the same fixed page size.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List

from clinic.exceptions import ValidationFailed

PAGE_SIZE = 5


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index plus page size."""
    number: int
    size: int = PAGE_SIZE

    @property
    def offset(self) -> int:
        return self.number * self.size


@dataclass
class Page:
    items: List[Any]
    page_number: int
    page_size: int
    total_elements: int
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        self.total_pages = math.ceil(self.total_elements / self.page_size) if self.page_size else 0

    def as_dict(self, serializer_class=None) -> Dict[str, Any]:
        """Wire form of the page; items go through ``serializer_class`` if given."""
        items = serializer_class(self.items, many=True).data if serializer_class else list(self.items)
        return {
            'items': items,
            'pageNumber': self.page_number,
            'pageSize': self.page_size,
            'totalElements': self.total_elements,
            'totalPages': self.total_pages,
        }


def page_request(page: int, size: int = PAGE_SIZE) -> PageRequest:
    """Translate a 1-based page number into a store page request.

    Pages below 1 are rejected; there is no clamping.
    """
    if page < 1:
        raise ValidationFailed([{'field': 'page', 'message': 'page must be 1 or greater', 'code': 'min_value'}])
    return PageRequest(page - 1, size)


def paginate(queryset, request: PageRequest) -> Page:
    """Slice an ordered queryset into one page.

    A page past the end comes back with no items and the real totals.
    """
    total = queryset.count()
    items = list(queryset[request.offset:request.offset + request.size])
    return Page(items, request.number + 1, request.size, total)
