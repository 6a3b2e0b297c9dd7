"""Free-text post search over an already-loaded list of posts."""

from collections.abc import Sequence
from typing import TypeVar

from techblog.models.post import PostSummary

P = TypeVar("P", bound=PostSummary)


def matches(post: PostSummary, term: str) -> bool:
    """True if the lower-cased ``term`` occurs in the title, description or tags."""
    return (
        term in post.title.lower()
        or term in post.description.lower()
        or term in " ".join(post.tags).lower()
    )


def filter_posts(posts: Sequence[P], term: str | None) -> list[P]:
    """Keep the posts matching ``term`` (case-insensitive substring).

    A blank term means no filtering. Input order is preserved.
    """
    needle = (term or "").strip().lower()
    if not needle:
        return list(posts)
    return [p for p in posts if matches(p, needle)]
