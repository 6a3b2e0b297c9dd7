"""Validate every post's front-matter before deploying.

Usage:
    python -m scripts.check_content                        # Uses CONTENT_DIR / COLLECTION settings
    python -m scripts.check_content --content-dir content  # Check another directory
"""

import argparse
import logging
import sys
from pathlib import Path

from techblog.config import get_settings
from techblog.services.content_store import ContentError, ContentStore, load_post_file
from techblog.services.tags import aggregate_tags

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("check_content")


def check_collection(store: ContentStore, collection: str) -> int:
    """Strictly load every file in ``collection``. Returns a process exit code."""
    try:
        files = store.files(collection)
    except OSError as e:
        logger.error("Cannot read collection %r: %s", collection, e)
        return 1

    valid = []
    errors: list[ContentError] = []
    for file_path in files:
        try:
            valid.append(load_post_file(file_path, collection, store.default_read_time))
        except ContentError as e:
            errors.append(e)

    print(f"Checked {len(files)} files in {store.collection_dir(collection)}")
    print(f"  Valid:   {len(valid)}")
    print(f"  Invalid: {len(errors)}")
    for error in errors:
        print(f"    {error.file_path.name}: {error.reason}")

    if valid:
        newest = max(valid, key=lambda p: p.published_at)
        print(f"\nNewest post: {newest.path} ({newest.published_at.isoformat()})")
        top = ", ".join(f"{t.name} ({t.count})" for t in aggregate_tags(valid)[:5])
        print(f"Top tags: {top or '-'}")

    return 1 if errors else 0


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--content-dir", default=settings.content_dir)
    parser.add_argument("--collection", default=settings.collection)
    args = parser.parse_args(argv)

    store = ContentStore(Path(args.content_dir), settings.default_read_time)
    return check_collection(store, args.collection)


if __name__ == "__main__":
    sys.exit(main())
