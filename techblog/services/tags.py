"""Tag aggregation for the tag cloud."""

from collections import Counter
from collections.abc import Iterable

from techblog.models.post import PostSummary
from techblog.models.tag import TagCount


def aggregate_tags(posts: Iterable[PostSummary]) -> list[TagCount]:
    """Count tag occurrences across ``posts``, most used first.

    Every occurrence counts, including a tag repeated within one post.
    Equal counts are ordered alphabetically (case-insensitive, then exact)
    so the result doesn't depend on post load order.
    """
    counts: Counter[str] = Counter()
    for post in posts:
        counts.update(post.tags)

    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0].lower(), kv[0]))
    return [TagCount(name=name, count=count) for name, count in ranked]
