"""
TechBlog API

Thin FastAPI backend serving markdown blog posts: listing, search,
tags, pagination and single-post views.
"""

import logging
import time
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from techblog.config import get_settings
from techblog.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from techblog.routers import posts, tags
from techblog.services.content_store import check_content_connectivity

logger = logging.getLogger(__name__)

settings = get_settings()

# Health check cache: (result_dict, timestamp)
_health_cache: tuple[dict[str, Any], float] | None = None
_HEALTH_CACHE_TTL = 30  # seconds


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    logger.info(
        "Serving collection %r from %s", settings.collection, settings.content_dir
    )
    yield


app = FastAPI(
    title=settings.site_title,
    description=settings.site_description,
    version="0.1.0",
    lifespan=lifespan,
)

# Request IDs and security headers
app.add_middleware(RequestIDMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

# Routers
app.include_router(posts.router, prefix="/api/blog")
app.include_router(tags.router, prefix="/api/blog")


def _check_config() -> str:
    """Verify required configuration is loaded. Returns 'ok' or 'fail'."""
    s = get_settings()
    if s.content_dir and s.collection and s.page_size >= 1:
        return "ok"
    return "fail"


def _run_health_checks() -> dict[str, Any]:
    """Run all health checks, returning the full response body."""
    global _health_cache
    now = time.time()
    if _health_cache is not None:
        cached_result, cached_at = _health_cache
        if now - cached_at < _HEALTH_CACHE_TTL:
            return cached_result

    config_status = _check_config()
    content_status = "ok" if check_content_connectivity() else "fail"

    checks = {"config": config_status, "content": content_status}
    failed = [k for k, v in checks.items() if v != "ok"]

    if failed:
        overall = "degraded"
        logger.warning("Health check degraded, failed: %s", ", ".join(failed))
    else:
        overall = "ok"

    result: dict[str, Any] = {
        "status": overall,
        "service": "techblog-api",
        "version": "0.1.0",
        "checks": checks,
    }
    _health_cache = (result, now)
    return result


@app.get("/api/blog/health")
async def health_check() -> JSONResponse:
    """Health check verifying the content directory is readable.

    Always 200: a missing content directory only degrades the blog to its
    empty state.
    """
    return JSONResponse(content=_run_health_checks())
