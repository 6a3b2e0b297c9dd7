"""Shared fixtures for techblog tests."""

from datetime import date, timedelta
from pathlib import Path

import pytest
import yaml


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset all module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from techblog.config import get_settings

    get_settings.cache_clear()

    # 2. Content store singleton
    import techblog.services.content_store as store_mod

    store_mod._store = None

    # 3. Health check cache
    import techblog.main as main_mod

    main_mod._health_cache = None


@pytest.fixture
def mock_settings(monkeypatch, tmp_path):
    """Provide a Settings object pointing at an empty temporary content dir."""
    from techblog.config import Settings, get_settings

    content_dir = tmp_path / "content"
    (content_dir / "blog").mkdir(parents=True)

    test_settings = Settings(
        content_dir=str(content_dir),
        collection="blog",
        page_size=6,
        default_read_time="5 min read",
        cors_origins=["http://localhost:3000"],
    )

    get_settings.cache_clear()
    monkeypatch.setattr("techblog.config.get_settings", lambda: test_settings)

    # Patch get_settings in all modules that import it directly
    # (from techblog.config import get_settings creates a local binding that
    # the techblog.config monkeypatch above does not affect)
    for mod_path in [
        "techblog.main",
        "techblog.services.content_store",
        "techblog.services.posts",
        "techblog.routers.posts",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    import techblog.services.content_store as store_mod

    store_mod._store = None
    return test_settings


@pytest.fixture
def blog_dir(mock_settings) -> Path:
    return Path(mock_settings.content_dir) / mock_settings.collection


@pytest.fixture
def write_post(blog_dir):
    """Factory writing a markdown post with YAML front-matter into the blog dir."""

    def _write(
        slug: str,
        *,
        title: str | None = None,
        description: str | None = None,
        published_at: str | date = "2025-01-01",
        tags: list[str] | None = None,
        body: str = "Some content.",
        **extra,
    ) -> Path:
        meta = {
            "title": title if title is not None else f"Post {slug}",
            "description": (
                description if description is not None else f"All about {slug} in detail"
            ),
            "publishedAt": published_at,
            "tags": tags if tags is not None else [],
            **extra,
        }
        path = blog_dir / f"{slug}.md"
        path.write_text(
            "---\n" + yaml.safe_dump(meta, sort_keys=False) + "---\n\n" + body + "\n"
        )
        return path

    return _write


@pytest.fixture
def dated_posts(write_post):
    """Factory writing ``n`` posts, one day apart, post-01 being the oldest."""

    def _make(n: int, start: date = date(2025, 1, 1)) -> list[str]:
        slugs = []
        for i in range(1, n + 1):
            slug = f"post-{i:02d}"
            write_post(slug, published_at=start + timedelta(days=i - 1))
            slugs.append(slug)
        return slugs

    return _make
