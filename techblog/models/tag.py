"""Tag data models."""

from pydantic import BaseModel, Field

from techblog.models.post import PostSummary


class TagCount(BaseModel):
    """How many times a tag occurs across all posts."""

    name: str
    count: int = Field(..., ge=1)


class TagCloud(BaseModel):
    """All tags, most used first."""

    tags: list[TagCount]
    total: int


class TagDetail(BaseModel):
    """Posts carrying a single tag."""

    tag: str
    posts: list[PostSummary]
    total: int
