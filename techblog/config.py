"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"
    site_title: str = "TechBlog - Java & Software Development"
    site_description: str = (
        "A personal tech blog sharing insights about Java development "
        "and software engineering best practices."
    )

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Content
    content_dir: str = "content"
    collection: str = "blog"
    page_size: int = 6
    default_read_time: str = "5 min read"

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
