"""Pagination: page counts, offsets, and request-scoped page state."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Pagination:
    """Resolved page for one request. ``page == 0`` marks the empty state."""

    page: int
    total_pages: int
    offset: int


def total_pages(total_count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    if total_count < 0:
        raise ValueError("total_count must be >= 0")
    return math.ceil(total_count / page_size)


@dataclass
class PageState:
    """Current page of a listing.

    ``go_to_page`` is the only transition and ignores out-of-range
    requests, leaving ``page`` unchanged.
    """

    page_size: int
    total_pages: int
    page: int = 1

    @classmethod
    def from_request(
        cls, total_count: int, page_size: int, requested_page: int | None = None
    ) -> "PageState":
        """Fresh state at page 1, then navigate to ``requested_page`` if valid."""
        state = cls(page_size=page_size, total_pages=total_pages(total_count, page_size))
        if requested_page is not None:
            state.go_to_page(requested_page)
        return state

    @property
    def is_empty(self) -> bool:
        return self.total_pages == 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def go_to_page(self, page: int) -> bool:
        """Move to ``page`` if 1 <= page <= total_pages. Returns whether it moved."""
        if page < 1 or page > self.total_pages:
            return False
        self.page = page
        return True

    def next_page(self) -> bool:
        return self.go_to_page(self.page + 1)

    def previous_page(self) -> bool:
        return self.go_to_page(self.page - 1)


def paginate(total_count: int, page_size: int, requested_page: int) -> Pagination:
    """Resolve ``requested_page`` against ``total_count`` items.

    With no items, returns page 0 / total_pages 0 (render the empty view).
    Out-of-range requests fall back to page 1 rather than being clamped.
    """
    state = PageState.from_request(total_count, page_size, requested_page)
    if state.is_empty:
        return Pagination(page=0, total_pages=0, offset=0)
    return Pagination(page=state.page, total_pages=state.total_pages, offset=state.offset)
