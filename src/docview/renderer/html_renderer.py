"""Render a post into a self-contained HTML page."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ..config import RenderSettings
from ..content.resources import ApiResourceResolver, ResourceResolver
from ..document.model import DocumentTree, Post
from ..toc.extract import extract_toc
from ..toc.nav import render_toc_nav
from .transformer import DocumentTransformer

logger = logging.getLogger(__name__)


class PageRenderer:
    """Render posts into the page template: header, content panel and sticky TOC."""

    def __init__(self, template_path: Path | None = None) -> None:
        if template_path is None:
            template_path = Path(__file__).resolve().parent.parent / "template" / "page.html"

        loader = FileSystemLoader(str(template_path.parent))
        self._env = Environment(loader=loader, autoescape=True, trim_blocks=True, lstrip_blocks=True)
        self._template_name = template_path.name

    def render(
        self,
        post: Post,
        *,
        settings: RenderSettings | None = None,
        resolver: ResourceResolver | None = None,
        title_override: str | None = None,
    ) -> str:
        settings = settings or RenderSettings()
        if resolver is None and settings.server_url:
            resolver = ApiResourceResolver(settings.server_url)

        tree = DocumentTree(post.content)
        toc = extract_toc(tree)
        transformer = DocumentTransformer(
            heading_ids=toc.heading_ids,
            resolver=resolver,
            math_engine=settings.math_engine,
        )
        content_html = transformer.transform(tree.root).to_html()
        nav_html = render_toc_nav(toc.entries).to_html()
        logger.info("Rendered %r: %d nodes, %d TOC entries", post.slug or post.title, len(tree), len(toc.entries))

        template = self._env.get_template(self._template_name)
        return template.render(
            page_title=title_override or post.title or "Untitled",
            date_text=format_post_date(post),
            category=post.category,
            tags=post.tags,
            author=post.author,
            content_html=content_html,
            nav_html=nav_html,
            has_toc=bool(toc.entries),
            dark_mode=settings.dark_mode,
            math_engine=settings.math_engine,
        )


def format_post_date(post: Post) -> str:
    """Creation date, or the last update date marked as edited."""
    if not post.edited:
        return _format_timestamp(post.create_timestamp)
    return _format_timestamp(post.update_timestamp) + " (edited)"


def _format_timestamp(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date().isoformat()
