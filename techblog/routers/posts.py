"""Post listing and single-post endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Path, Query

from techblog.config import get_settings
from techblog.models.post import PostDetail, PostPage, ViewMode
from techblog.services.content_store import SLUG_PATTERN
from techblog.services.posts import get_post, list_adjacent, list_page
from techblog.services.rendering import render_markdown

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=PostPage)
async def list_blog_posts(
    page: int = Query(default=1, description="Page number (1-based)"),
    view: ViewMode = Query(default="grid", description="Card grid or compact list"),
    q: str = Query(
        default="",
        max_length=200,
        description="Search title, description and tags (case-insensitive)",
    ),
):
    """Get one page of posts, newest first, optionally filtered by a search term.

    Out-of-range pages fall back to page 1. With no matching posts the
    response has ``total_pages == 0`` and no items.
    """
    page_size = get_settings().page_size
    result = await list_page(page_size, page, term=q)
    pagination = result.pagination
    if page != pagination.page and pagination.total_pages:
        logger.debug(
            "Page %d out of range (1..%d), showing page 1", page, pagination.total_pages
        )

    return PostPage(
        items=[p.summary() for p in result.items],
        total=result.total,
        page=pagination.page,
        total_pages=pagination.total_pages,
        page_size=page_size,
        view=view,
        q=q,
    )


@router.get("/{slug}", response_model=PostDetail)
async def get_blog_post(
    slug: str = Path(..., pattern=SLUG_PATTERN, max_length=200),
):
    """Get a single post with its rendered body, table of contents and neighbours."""
    post = await get_post(slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")

    adjacent = await list_adjacent(post.path)
    rendered = render_markdown(post.body)
    return PostDetail(
        post=post.summary(),
        html=rendered.html,
        toc=rendered.toc,
        previous=adjacent.previous.summary() if adjacent.previous else None,
        next=adjacent.next.summary() if adjacent.next else None,
    )
