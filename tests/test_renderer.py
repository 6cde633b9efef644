from __future__ import annotations

import pytest

from docview.config import RenderSettings
from docview.content.resources import MappingResourceResolver
from docview.document.model import Post, RootTag, node, paragraph
from docview.document.wire import decode_post
from docview.renderer.html_renderer import PageRenderer, format_post_date


def test_renderer_generates_page_with_toc(post_data: dict) -> None:
    post = decode_post(post_data)

    html = PageRenderer().render(post)

    assert "<title>Fixture Post</title>" in html
    assert 'class="doc-toc"' in html
    assert 'href="#1-Intro"' in html
    assert 'href="#2-Background"' in html
    assert '<h2 class="doc-heading" id="1-Intro">' in html
    assert '<h3 class="doc-heading" id="2-Background">' in html
    assert "language-cpp" in html
    assert "2023-11-15 (edited)" in html
    assert "notes | #python, #docs" in html
    assert "doc-light" in html
    assert "katex.min.js" not in html


def test_renderer_resolves_embedded_images_through_server_url(post_data: dict) -> None:
    post = decode_post(post_data)

    html = PageRenderer().render(post, settings=RenderSettings(server_url="https://blog.example/"))

    assert 'src="https://blog.example/api/resources/abc-123"' in html


def test_renderer_prefers_explicit_resolver(post_data: dict) -> None:
    post = decode_post(post_data)
    resolver = MappingResourceResolver({"abc-123": "https://cdn.example/abc.png"})

    html = PageRenderer().render(post, resolver=resolver, settings=RenderSettings(server_url="https://ignored/"))

    assert 'src="https://cdn.example/abc.png"' in html


def test_renderer_placeholder_without_resolver(post_data: dict) -> None:
    html = PageRenderer().render(decode_post(post_data))

    assert "doc-image-missing" in html
    assert "Diagram" in html


def test_renderer_options(post_data: dict) -> None:
    post = decode_post(post_data)

    html = PageRenderer().render(
        post,
        settings=RenderSettings(dark_mode=True, math_engine="KaTeX"),
        title_override="Custom <Title>",
    )

    assert "doc-dark" in html
    assert "katex.min.js" in html
    assert "<title>Custom &lt;Title&gt;</title>" in html


def test_renderer_without_headings_omits_nav() -> None:
    post = Post(title="Plain", slug="plain", content=node(RootTag(), paragraph("just text")))

    html = PageRenderer().render(post)

    assert 'class="doc-toc"' not in html
    assert "just text" in html


def test_format_post_date() -> None:
    root = node(RootTag())

    fresh = Post(title="t", slug="s", content=root, create_timestamp=1700000000, update_timestamp=1700000000)
    edited = Post(title="t", slug="s", content=root, create_timestamp=1700000000, update_timestamp=1700086400)

    assert format_post_date(fresh) == "2023-11-14"
    assert format_post_date(edited) == "2023-11-15 (edited)"


def test_settings_validation() -> None:
    with pytest.raises(ValueError):
        RenderSettings(math_engine="mathml")
    with pytest.raises(ValueError):
        RenderSettings(viewport_height=0)
