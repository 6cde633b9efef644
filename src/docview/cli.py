"""docview CLI entrypoint."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from docview.config import DEFAULT_VIEWPORT_HEIGHT, MATH_ENGINES, RenderSettings
from docview.content.resources import ApiResourceResolver
from docview.content.source import DirectoryContentSource, fetch_post, load_post
from docview.document.model import DocumentTree, Post
from docview.errors import DocviewError
from docview.renderer.html_renderer import PageRenderer
from docview.toc.extract import extract_toc
from docview.view.document_view import DocumentView
from docview.view.viewport import Viewport

_POST_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def main(verbose: bool) -> None:
    """Render tagged documents into pages with a scroll-synchronized table of contents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _page_options(func):
    """Options shared by the commands that write HTML pages."""
    func = click.option(
        "--server-url",
        type=str,
        default=None,
        envvar="DOCVIEW_SERVER_URL",
        help="Content server used to resolve embedded resources",
    )(func)
    func = click.option(
        "--math-engine",
        type=click.Choice(MATH_ENGINES, case_sensitive=False),
        default="none",
        show_default=True,
        envvar="DOCVIEW_MATH_ENGINE",
        help="Math rendering mode",
    )(func)
    func = click.option("--dark-mode", is_flag=True, help="Enable dark mode stylesheet")(func)
    return func


@main.command()
@click.argument("post_path", type=_POST_PATH)
@click.option("--output", "-o", type=click.Path(path_type=Path), required=True, help="Output HTML path")
@click.option("--title", type=str, default=None, help="Override page title")
@_page_options
def render(
    post_path: Path,
    output: Path,
    title: str | None,
    dark_mode: bool,
    math_engine: str,
    server_url: str | None,
) -> None:
    """Render a post JSON file into a self-contained HTML page."""
    post = _load(post_path)
    settings = RenderSettings(server_url=server_url, dark_mode=dark_mode, math_engine=math_engine)

    html = PageRenderer().render(post, settings=settings, title_override=title)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")

    click.echo(f"Rendered: {output}")


@main.command()
@click.argument("content_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("slugs", nargs=-1, required=True)
@click.option("--output-dir", "-o", type=click.Path(file_okay=False, path_type=Path), required=True)
@_page_options
def build(
    content_dir: Path,
    slugs: tuple[str, ...],
    output_dir: Path,
    dark_mode: bool,
    math_engine: str,
    server_url: str | None,
) -> None:
    """Render posts stored as <slug>.json under CONTENT_DIR into OUTPUT_DIR/<slug>.html."""
    source = DirectoryContentSource(content_dir)
    settings = RenderSettings(server_url=server_url, dark_mode=dark_mode, math_engine=math_engine)
    renderer = PageRenderer()

    output_dir.mkdir(parents=True, exist_ok=True)
    for slug in slugs:
        try:
            post = fetch_post(source, slug)
        except json.JSONDecodeError as exc:
            raise click.ClickException(f"{slug}.json is not valid JSON: {exc}") from exc
        except DocviewError as exc:
            raise click.ClickException(str(exc)) from exc

        target = output_dir / f"{slug}.html"
        target.write_text(renderer.render(post, settings=settings), encoding="utf-8")
        click.echo(f"Rendered: {target}")


@main.command()
@click.argument("post_path", type=_POST_PATH)
def toc(post_path: Path) -> None:
    """Print the table of contents of a post."""
    post = _load(post_path)
    info = extract_toc(DocumentTree(post.content))
    if not info.entries:
        click.echo("(no headings)")
        return
    for entry in info.entries:
        indent = "  " * (max(entry.level, 1) - 1)
        click.echo(f"{indent}{entry.level}  {entry.target_id}  {entry.title}")


@main.command()
@click.argument("post_path", type=_POST_PATH)
@click.option("--scroll", "scroll_y", type=float, required=True, help="Vertical scroll offset in pixels")
@click.option(
    "--viewport-height",
    type=click.FloatRange(min=1),
    default=DEFAULT_VIEWPORT_HEIGHT,
    show_default=True,
    help="Viewport height in pixels",
)
@click.option("--server-url", type=str, default=None, envvar="DOCVIEW_SERVER_URL")
def spy(post_path: Path, scroll_y: float, viewport_height: float, server_url: str | None) -> None:
    """Show which TOC entry is active at a scroll offset, using the built-in layout."""
    post = _load(post_path)
    resolver = ApiResourceResolver(server_url) if server_url else None

    viewport = Viewport(viewport_height)
    view = DocumentView(post, viewport, resolver=resolver)
    view.mount()
    try:
        viewport.scroll_to(scroll_y)
        click.echo(view.active_id or "(none)")
    finally:
        view.unmount()


def _load(post_path: Path) -> Post:
    try:
        return load_post(post_path)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{post_path.name} is not valid JSON: {exc}") from exc
    except DocviewError as exc:
        raise click.ClickException(f"Cannot read {post_path.name}: {exc}") from exc


if __name__ == "__main__":  # pragma: no cover
    main()
