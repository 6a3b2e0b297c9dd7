"""Tests for the post query layer: listing, lookup, neighbours, tags."""

from techblog.services.content_store import Order, Window
from techblog.services.posts import (
    get_post,
    list_adjacent,
    list_page,
    list_posts,
    list_posts_by_tag,
)


async def test_list_posts_newest_first_by_default(mock_settings, dated_posts):
    dated_posts(4)

    posts = await list_posts()

    assert [p.slug for p in posts] == ["post-04", "post-03", "post-02", "post-01"]


async def test_list_posts_custom_order(mock_settings, dated_posts):
    dated_posts(3)

    posts = await list_posts(order=Order("published_at", "asc"))

    assert [p.slug for p in posts] == ["post-01", "post-02", "post-03"]


async def test_list_posts_window_second_page(mock_settings, dated_posts):
    """13 posts in 6-post pages: the second window holds posts 7-12."""
    dated_posts(13)

    posts = await list_posts(
        order=Order("published_at", "asc"), window=Window(limit=6, skip=6)
    )

    assert [p.slug for p in posts] == [f"post-{i:02d}" for i in range(7, 13)]


async def test_list_posts_window_past_the_end(mock_settings, dated_posts):
    dated_posts(3)

    assert await list_posts(window=Window(limit=6, skip=6)) == []


async def test_list_posts_empty_store(mock_settings):
    assert await list_posts() == []


async def test_list_page_resolves_the_window(mock_settings, dated_posts):
    """13 posts in 6-post pages: page 3 holds only the oldest post."""
    dated_posts(13)

    result = await list_page(page_size=6, requested_page=3)

    assert result.total == 13
    assert result.pagination.page == 3
    assert result.pagination.total_pages == 3
    assert result.pagination.offset == 12
    assert [p.slug for p in result.items] == ["post-01"]


async def test_list_page_searches_before_paginating(mock_settings, write_post):
    for i in range(1, 8):
        write_post(f"java-{i}", published_at=f"2025-01-{i:02d}", tags=["java"])
    write_post("sql", published_at="2025-02-01", tags=["sql"])

    result = await list_page(page_size=6, requested_page=2, term="JAVA")

    assert result.total == 7
    assert result.pagination.total_pages == 2
    assert [p.slug for p in result.items] == ["java-1"]


async def test_list_page_out_of_range_falls_back_to_first_page(
    mock_settings, dated_posts
):
    dated_posts(13)

    result = await list_page(page_size=6, requested_page=4)

    assert result.pagination.page == 1
    assert result.items[0].slug == "post-13"


async def test_list_page_empty_store(mock_settings):
    result = await list_page(page_size=6, requested_page=1)

    assert result.items == []
    assert result.total == 0
    assert result.pagination.total_pages == 0


async def test_get_post_by_slug_or_path(mock_settings, dated_posts):
    dated_posts(2)

    by_slug = await get_post("post-01")
    by_path = await get_post("/blog/post-01")

    assert by_slug is not None
    assert by_slug == by_path


async def test_get_post_not_found(mock_settings, dated_posts):
    dated_posts(2)

    assert await get_post("missing") is None


async def test_list_adjacent_middle_post(mock_settings, dated_posts):
    dated_posts(5)

    adjacent = await list_adjacent("/blog/post-03")

    # Newest-first listing: post-05, post-04, post-03, post-02, post-01
    assert adjacent.previous.slug == "post-04"
    assert adjacent.next.slug == "post-02"


async def test_list_adjacent_first_and_last(mock_settings, dated_posts):
    dated_posts(5)

    first = await list_adjacent("post-05")
    last = await list_adjacent("post-01")

    assert first.previous is None
    assert first.next.slug == "post-04"
    assert last.previous.slug == "post-02"
    assert last.next is None


async def test_list_adjacent_unknown_path(mock_settings, dated_posts):
    dated_posts(3)

    adjacent = await list_adjacent("/blog/nope")

    assert adjacent.previous is None
    assert adjacent.next is None


async def test_list_posts_by_tag(mock_settings, write_post):
    write_post("old", published_at="2024-01-01", tags=["java"])
    write_post("new", published_at="2025-01-01", tags=["java", "spring"])
    write_post("other", published_at="2025-02-01", tags=["sql"])

    posts = await list_posts_by_tag("java")

    assert [p.slug for p in posts] == ["new", "old"]
    assert await list_posts_by_tag("rust") == []
