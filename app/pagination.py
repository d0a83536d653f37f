"""
Catalog API — Length-Aware Pagination
=======================================

What:  Page-number pagination with total counts, plus an async helper that
       runs the count and page queries for a SQLAlchemy select.
How:   LengthAwarePaginator holds one page of items and the numbers needed to
       describe it; to_dict() renders the conventional paginator shape that
       the response builder reads pagination metadata from.
Who:   ProductService.list_products(); the resource layer wraps the result in
       a ResourceCollection.

to_dict() shape:
    {
        "current_page": 2,
        "data": [...],
        "first_page_url": "http://host/api/products?page=1",
        "from": 16,
        "last_page": 7,
        "last_page_url": "http://host/api/products?page=7",
        "next_page_url": "http://host/api/products?page=3",
        "path": "http://host/api/products",
        "per_page": 15,
        "prev_page_url": "http://host/api/products?page=1",
        "to": 30,
        "total": 100
    }

Pagination Strategy:
    Offset-based (LIMIT/OFFSET) because clients address pages by number and
    need total_pages. Deep pages cost O(offset); acceptable for catalog sizes.
"""

import math
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar
from urllib.parse import urlencode

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class LengthAwarePaginator(Generic[T]):
    """
    One page of a result set whose total size is known.

    Args:
        items:        The records on this page
        total:        Number of records across all pages
        per_page:     Page size
        current_page: 1-based page number
        path:         Base URL used to build page links (None → no links)
        query:        Extra query parameters preserved on every page link
    """

    page_name = "page"

    def __init__(
        self,
        items: Sequence[T],
        total: int,
        per_page: int,
        current_page: int = 1,
        path: Optional[str] = None,
        query: Optional[Mapping[str, Any]] = None,
    ):
        if per_page < 1:
            raise ValueError("per_page must be at least 1")
        self.items: List[T] = list(items)
        self.total = max(int(total), 0)
        self.per_page = per_page
        self.current_page = max(int(current_page), 1)
        self.path = path
        self.query = {k: v for k, v in (query or {}).items() if k != self.page_name}

    # ── Derived numbers ───────────────────────────────────────────────────

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)

    @property
    def from_item(self) -> Optional[int]:
        """1-based index of the first item on this page, None when empty."""
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + 1

    @property
    def to_item(self) -> Optional[int]:
        """1-based index of the last item on this page, None when empty."""
        if not self.items:
            return None
        return self.from_item + len(self.items) - 1

    def has_more_pages(self) -> bool:
        return self.current_page < self.last_page

    # ── Links ─────────────────────────────────────────────────────────────

    def url(self, page: int) -> Optional[str]:
        if self.path is None:
            return None
        params = dict(self.query)
        params[self.page_name] = max(page, 1)
        separator = "&" if "?" in self.path else "?"
        return f"{self.path}{separator}{urlencode(params)}"

    @property
    def first_page_url(self) -> Optional[str]:
        return self.url(1)

    @property
    def last_page_url(self) -> Optional[str]:
        return self.url(self.last_page)

    @property
    def next_page_url(self) -> Optional[str]:
        if not self.has_more_pages():
            return None
        return self.url(self.current_page + 1)

    @property
    def prev_page_url(self) -> Optional[str]:
        if self.current_page <= 1:
            return None
        return self.url(self.current_page - 1)

    # ── Serialization ─────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_page": self.current_page,
            "data": self.items,
            "first_page_url": self.first_page_url,
            "from": self.from_item,
            "last_page": self.last_page,
            "last_page_url": self.last_page_url,
            "next_page_url": self.next_page_url,
            "path": self.path,
            "per_page": self.per_page,
            "prev_page_url": self.prev_page_url,
            "to": self.to_item,
            "total": self.total,
        }

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


async def paginate(
    session: AsyncSession,
    statement: Select,
    page: int = 1,
    per_page: int = 15,
    path: Optional[str] = None,
    query: Optional[Mapping[str, Any]] = None,
) -> LengthAwarePaginator:
    """
    Run `statement` as a paginated query.

    Two round trips:
        1. SELECT count(*) FROM (<statement>), ordering stripped
        2. <statement> LIMIT :per_page OFFSET :offset

    A page past the end returns an empty page with the real total, so the
    client still learns total/last_page.
    """
    page = max(page, 1)

    count_stmt = select(func.count()).select_from(statement.order_by(None).subquery())
    total = (await session.execute(count_stmt)).scalar() or 0

    page_stmt = statement.limit(per_page).offset((page - 1) * per_page)
    result = await session.execute(page_stmt)
    items = list(result.scalars().all())

    return LengthAwarePaginator(
        items=items,
        total=total,
        per_page=per_page,
        current_page=page,
        path=path,
        query=query,
    )
