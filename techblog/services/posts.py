"""Post queries: listing, single-post lookup, and neighbours.

Thin layer over the content store that fixes the collection and the
default ordering (newest first). Absence is never an error here: empty
collections give empty lists and unknown paths give ``None``.
"""

import logging
from dataclasses import dataclass

from techblog.config import get_settings
from techblog.models.post import Post
from techblog.services.content_store import (
    ContentQuery,
    Order,
    Window,
    apply_window,
    get_content_store,
)
from techblog.services.pagination import Pagination, paginate
from techblog.services.search import filter_posts

logger = logging.getLogger(__name__)

NEWEST_FIRST = Order("published_at", "desc")


@dataclass(frozen=True)
class Adjacent:
    """The posts either side of a post in the newest-first listing."""

    previous: Post | None = None
    next: Post | None = None


def _base_query(order: Order) -> ContentQuery:
    settings = get_settings()
    return get_content_store().query(settings.collection).order(
        order.field, order.direction
    )


def _windowed(query: ContentQuery, window: Window | None) -> ContentQuery:
    if window is None:
        return query
    return query.skip(window.skip).limit(window.limit)


def normalize_path(path: str) -> str:
    """Accept either a full content path (``/blog/x``) or a bare slug (``x``)."""
    if path.startswith("/"):
        return path
    return f"/{get_settings().collection}/{path}"


async def list_posts(
    order: Order = NEWEST_FIRST, window: Window | None = None
) -> list[Post]:
    """List posts in ``order``, optionally restricted to one window."""
    return _windowed(_base_query(order), window).all()


@dataclass(frozen=True)
class PostWindow:
    """One page of the listing, resolved against a single read of the posts."""

    items: list[Post]
    total: int
    pagination: Pagination


async def list_page(
    page_size: int,
    requested_page: int,
    term: str | None = None,
    order: Order = NEWEST_FIRST,
) -> PostWindow:
    """Search, paginate and window the listing from one read of the collection.

    The total and the page window can't disagree even if content changes
    mid-request. Out-of-range pages fall back to page 1.
    """
    posts = filter_posts(_base_query(order).all(), term)
    pagination = paginate(len(posts), page_size, requested_page)
    items = apply_window(posts, Window(limit=page_size, skip=pagination.offset))
    return PostWindow(items=items, total=len(posts), pagination=pagination)


async def get_post(path: str) -> Post | None:
    """Find a post by exact path (or slug). Returns None if it doesn't exist."""
    return _base_query(NEWEST_FIRST).path(normalize_path(path)).first()


async def list_adjacent(path: str) -> Adjacent:
    """Locate ``path`` in the newest-first listing and return its neighbours.

    ``previous`` is the newer post listed just before it, ``next`` the older
    post listed just after it. Both are None if the path is unknown.
    """
    target = normalize_path(path)
    posts = await list_posts()
    for index, post in enumerate(posts):
        if post.path == target:
            previous = posts[index - 1] if index > 0 else None
            following = posts[index + 1] if index + 1 < len(posts) else None
            return Adjacent(previous=previous, next=following)
    logger.debug("No adjacent posts for unknown path %s", target)
    return Adjacent()


async def list_posts_by_tag(tag: str) -> list[Post]:
    """Posts carrying ``tag`` (exact, case-sensitive match), newest first."""
    return _base_query(NEWEST_FIRST).where_tag(tag).all()
