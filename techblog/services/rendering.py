"""Markdown rendering for the single-post view.

Markdown parsing and syntax highlighting are delegated to the ``markdown``
package; this module only configures it and reshapes the table of
contents it produces.
"""

from dataclasses import dataclass, field
from typing import Any

import markdown

from techblog.models.post import TocEntry

MARKDOWN_EXTENSIONS = ["fenced_code", "codehilite", "tables", "toc"]

MARKDOWN_EXTENSION_CONFIGS: dict[str, dict[str, Any]] = {
    "codehilite": {"css_class": "highlight", "guess_lang": False},
    "toc": {"toc_depth": "2-3", "permalink": False},
}


@dataclass
class Rendered:
    html: str
    toc: list[TocEntry] = field(default_factory=list)


def _toc_entries(tokens: list[dict[str, Any]]) -> list[TocEntry]:
    return [
        TocEntry(
            id=token["id"],
            name=token["name"],
            level=token["level"],
            children=_toc_entries(token.get("children", [])),
        )
        for token in tokens
    ]


def render_markdown(body: str) -> Rendered:
    """Render a post body to HTML and collect its h2/h3 headings."""
    md = markdown.Markdown(
        extensions=MARKDOWN_EXTENSIONS,
        extension_configs=MARKDOWN_EXTENSION_CONFIGS,
    )
    html = md.convert(body)
    return Rendered(html=html, toc=_toc_entries(getattr(md, "toc_tokens", [])))
