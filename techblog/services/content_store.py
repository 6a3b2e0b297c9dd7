"""Markdown content store: reads posts from the content directory.

Each collection is a directory of ``*.md`` files with YAML front-matter.
Files are parsed with python-frontmatter and validated into ``Post``
records on every read; invalid files are logged and skipped, so callers
only ever see valid posts. There is no cache: the collection is whatever
is on disk at query time.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar

import frontmatter
import yaml
from pydantic import ValidationError

from techblog.config import get_settings
from techblog.models.post import DEFAULT_READ_TIME, Post

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=Post)

SORTABLE_FIELDS = ("published_at", "title", "path")
# File stems become URL segments, so they must match the detail route's pattern
SLUG_PATTERN = r"^[a-zA-Z0-9][a-zA-Z0-9._-]*$"
SLUG_RE = re.compile(SLUG_PATTERN)
DIRECTIONS = ("asc", "desc")

# Lazy singleton, lives for the process lifetime
_store: "ContentStore | None" = None


class ContentError(Exception):
    """A content file could not be read or failed front-matter validation."""

    def __init__(self, file_path: Path, reason: str) -> None:
        super().__init__(f"{file_path}: {reason}")
        self.file_path = file_path
        self.reason = reason


@dataclass(frozen=True)
class Order:
    """Sort order for a query."""

    field: str = "published_at"
    direction: str = "desc"


@dataclass(frozen=True)
class Window:
    """One page of an ordered sequence: at most ``limit`` items after ``skip``."""

    limit: int
    skip: int = 0


def load_post_file(
    file_path: Path, collection: str, default_read_time: str = DEFAULT_READ_TIME
) -> Post:
    """Parse and validate a single markdown file.

    Raises:
        ContentError: If the file can't be read or its front-matter is invalid.
    """
    try:
        parsed = frontmatter.load(str(file_path))
    except (OSError, UnicodeDecodeError) as e:
        raise ContentError(file_path, f"unreadable: {e}") from e
    except (yaml.YAMLError, ValueError) as e:
        # PyYAML raises a bare ValueError for impossible dates like 2025-02-30
        raise ContentError(file_path, f"malformed front-matter: {e}") from e

    data: dict[str, Any] = dict(parsed.metadata)
    data["path"] = f"/{collection}/{file_path.stem}"
    data["slug"] = file_path.stem
    data["body"] = parsed.content
    if not any(data.get(k) for k in ("read_time", "readTime", "readingTime")):
        data["read_time"] = default_read_time

    try:
        return Post(**data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'post'}: {err['msg']}"
            for err in e.errors()
        )
        raise ContentError(file_path, problems) from e


class ContentStore:
    """Read-only view over a content directory."""

    def __init__(
        self, root: str | Path, default_read_time: str = DEFAULT_READ_TIME
    ) -> None:
        self.root = Path(root)
        self.default_read_time = default_read_time

    def collection_dir(self, collection: str) -> Path:
        return self.root / collection

    def files(self, collection: str) -> list[Path]:
        """List the markdown files of a collection. Raises OSError if unreadable."""
        directory = self.collection_dir(collection)
        if not directory.is_dir():
            raise FileNotFoundError(f"Collection directory not found: {directory}")
        files = []
        for p in sorted(directory.glob("*.md")):
            if not p.is_file():
                continue
            if not SLUG_RE.match(p.stem):
                logger.warning("Skipping %s: file name is not a valid slug", p.name)
                continue
            files.append(p)
        return files

    def load(self, collection: str) -> list[Post]:
        """Load every valid post in a collection.

        A missing or unreadable collection is treated as empty.
        """
        try:
            files = self.files(collection)
        except OSError as e:
            logger.warning("Could not read collection %r: %s", collection, e)
            return []

        posts: list[Post] = []
        for file_path in files:
            try:
                posts.append(
                    load_post_file(file_path, collection, self.default_read_time)
                )
            except ContentError as e:
                logger.warning("Skipping invalid post %s: %s", file_path.name, e.reason)
        return posts

    def query(self, collection: str) -> "ContentQuery":
        return ContentQuery(self, collection)


class ContentQuery:
    """Chainable, immutable query over one collection.

    Usage::

        store.query("blog").order("published_at", "desc").limit(6).skip(6).all()
        store.query("blog").path("/blog/hello-world").first()
    """

    def __init__(
        self,
        store: ContentStore,
        collection: str,
        order: Order | None = None,
        limit: int | None = None,
        skip: int = 0,
        path: str | None = None,
        tag: str | None = None,
    ) -> None:
        self._store = store
        self._collection = collection
        self._order = order
        self._limit = limit
        self._skip = skip
        self._path = path
        self._tag = tag

    def _copy(self, **changes: Any) -> "ContentQuery":
        params = {
            "order": self._order,
            "limit": self._limit,
            "skip": self._skip,
            "path": self._path,
            "tag": self._tag,
        }
        params.update(changes)
        return ContentQuery(self._store, self._collection, **params)

    def order(self, field: str, direction: str = "desc") -> "ContentQuery":
        if field not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot order by {field!r}")
        if direction not in DIRECTIONS:
            raise ValueError(f"Invalid sort direction {direction!r}")
        return self._copy(order=Order(field, direction))

    def limit(self, n: int) -> "ContentQuery":
        if n < 0:
            raise ValueError("limit must be >= 0")
        return self._copy(limit=n)

    def skip(self, n: int) -> "ContentQuery":
        if n < 0:
            raise ValueError("skip must be >= 0")
        return self._copy(skip=n)

    def path(self, path: str) -> "ContentQuery":
        return self._copy(path=path)

    def where_tag(self, tag: str) -> "ContentQuery":
        return self._copy(tag=tag)

    def _matching(self) -> list[Post]:
        """All posts matching the filters, in query order (no window applied)."""
        posts = self._store.load(self._collection)
        if self._path is not None:
            posts = [p for p in posts if p.path == self._path]
        if self._tag is not None:
            posts = [p for p in posts if self._tag in p.tags]
        if self._order is not None:
            field = self._order.field
            # Files load sorted by name, and sort() is stable, so ties keep that order
            posts.sort(
                key=lambda p: getattr(p, field),
                reverse=self._order.direction == "desc",
            )
        return posts

    def _window(self, posts: list[Post]) -> list[Post]:
        if self._limit is None:
            return posts[self._skip :]
        return apply_window(posts, Window(limit=self._limit, skip=self._skip))

    def all(self) -> list[Post]:
        return self._window(self._matching())

    def first(self) -> Post | None:
        posts = self._window(self._matching())
        return posts[0] if posts else None


def apply_window(posts: list[P], window: Window) -> list[P]:
    """Slice one window out of an already-ordered list."""
    return posts[window.skip : window.skip + window.limit]


def get_content_store() -> ContentStore:
    """Return the shared content store (lazy singleton)."""
    global _store
    if _store is None:
        settings = get_settings()
        _store = ContentStore(
            settings.content_dir, default_read_time=settings.default_read_time
        )
    return _store


def check_content_connectivity() -> bool:
    """Lightweight content check: the collection directory is listable."""
    try:
        get_content_store().files(get_settings().collection)
        return True
    except OSError:
        return False
