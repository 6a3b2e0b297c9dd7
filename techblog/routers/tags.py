"""Tag cloud and tag detail endpoints."""

from fastapi import APIRouter, Path

from techblog.models.tag import TagCloud, TagDetail
from techblog.services.posts import list_posts, list_posts_by_tag
from techblog.services.tags import aggregate_tags

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=TagCloud)
async def list_tags():
    """Get every tag with its post count, most used first."""
    tags = aggregate_tags(await list_posts())
    return TagCloud(tags=tags, total=len(tags))


# Tags are used verbatim and may contain "/" (e.g. "ci/cd")
@router.get("/{tag:path}", response_model=TagDetail)
async def get_tag(tag: str = Path(..., min_length=1, max_length=200)):
    """Get the posts carrying a tag. An unknown tag gives an empty list."""
    posts = await list_posts_by_tag(tag)
    return TagDetail(tag=tag, posts=[p.summary() for p in posts], total=len(posts))
