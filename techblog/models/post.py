"""Blog post data models."""

from datetime import date, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_READ_TIME = "5 min read"

# Front-matter keys written by authors -> model field names
_FRONT_MATTER_ALIASES = {
    "publishedAt": "published_at",
    "readTime": "read_time",
    "readingTime": "read_time",
}

ViewMode = Literal["grid", "list"]

Tag = Annotated[str, Field(min_length=1)]


class PostSummary(BaseModel):
    """Post metadata for listing, tag and adjacency display."""

    model_config = ConfigDict(frozen=True)

    path: str
    slug: str
    title: str = Field(..., min_length=3)
    description: str = Field(..., min_length=10)
    published_at: date
    tags: list[Tag] = []
    read_time: str = DEFAULT_READ_TIME
    image: str | None = None
    author: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_front_matter(cls, data: dict) -> dict:
        """Map authored front-matter keys onto field names."""
        if isinstance(data, dict):
            data = dict(data)
            for key, field_name in _FRONT_MATTER_ALIASES.items():
                if key in data:
                    value = data.pop(key)
                    data.setdefault(field_name, value)
            published = data.get("published_at")
            # YAML timestamps load as datetime; only the calendar day matters
            if isinstance(published, datetime):
                data["published_at"] = published.date()
            if data.get("read_time") is None:
                data.pop("read_time", None)
            if data.get("tags") is None:
                data.pop("tags", None)
        return data


class Post(PostSummary):
    """A full blog post, including its raw markdown body."""

    body: str = ""

    def summary(self) -> PostSummary:
        return PostSummary(**self.model_dump(exclude={"body"}))


class TocEntry(BaseModel):
    """One heading in a post's table of contents."""

    id: str
    name: str
    level: int
    children: list["TocEntry"] = []


class PostDetail(BaseModel):
    """Single post view: metadata, rendered body, and its neighbours."""

    post: PostSummary
    html: str
    toc: list[TocEntry] = []
    previous: PostSummary | None = None
    next: PostSummary | None = None


class PostPage(BaseModel):
    """One page of the post listing.

    ``total_pages == 0`` (with ``page == 0``) marks the empty state.
    """

    items: list[PostSummary]
    total: int
    page: int
    total_pages: int
    page_size: int
    view: ViewMode = "grid"
    q: str = ""
