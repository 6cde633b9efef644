"""End-to-end tests: content and nav panels mounted into a viewport with a live scroll spy."""

from __future__ import annotations

import pytest

from docview.content.resources import MappingResourceResolver
from docview.document.model import QuoteTag, RootTag, UnknownTag, heading, node, paragraph
from docview.document.wire import decode_post
from docview.toc.scroll_spy import ACTIVE_CLASSES
from docview.view.document_view import DocumentView
from docview.view.element import TextNode, element
from docview.view.viewport import Viewport

ACTIVE = ACTIVE_CLASSES[0]

# Layout (see Viewport): h2 Intro top=32, paragraph 116..356, h3 Background top=404,
# h2 Method top=500; document height 568.


def _document():
    return node(
        RootTag(),
        heading(1, "Intro"),
        paragraph("word " * 160),
        heading(2, "Background"),
        heading(1, "Method"),
    )


def _active_items(view: DocumentView) -> list[str]:
    return [item.attrs["href"] for item in view.nav.find_by_class(ACTIVE)]


# ---------------------------------------------------------------------------
# Viewport
# ---------------------------------------------------------------------------

def test_viewport_layout_positions_blocks() -> None:
    viewport = Viewport(200)
    root = _document()
    view = DocumentView(root, viewport)
    view.mount()

    states = [view.registry.get(entry.target_id) for entry in view.entries]
    tops = [state.heading.bounding_rect().top for state in states]
    assert tops == [32.0, 404.0, 500.0]
    assert viewport.document_height == 568.0


def test_viewport_scroll_is_clamped_and_notifies() -> None:
    viewport = Viewport(200)
    viewport.mount(element("main", element("p", TextNode("x" * 800))))
    calls = []
    viewport.add_listener("scroll", lambda: calls.append(viewport.scroll_y))

    viewport.scroll_to(10_000)
    viewport.scroll_to(-50)

    assert calls == [72.0, 0.0]


def test_viewport_rejects_unknown_events() -> None:
    with pytest.raises(ValueError):
        Viewport().add_listener("click", lambda: None)


def test_handle_class_state_writes_through_to_element() -> None:
    viewport = Viewport(200)
    para = element("p", TextNode("x"), classes=["a"])
    tree = viewport.mount(element("main", para))

    handle = tree.handle_for(para)
    handle.add_class("b", "a")
    assert para.classes == ["a", "b"]

    handle.remove_class("a")
    assert not handle.has_class("a")
    assert handle.has_class("b")
    assert handle.bounding_rect().top == 16.0


def test_unmounted_handles_are_disconnected() -> None:
    viewport = Viewport(200)
    tree = viewport.mount(element("main", element("p", TextNode("x"))))

    handles = tree.handles
    tree.unmount()

    assert handles and all(not handle.connected for handle in handles)
    assert viewport.document_height == 0.0


# ---------------------------------------------------------------------------
# Scroll tracking
# ---------------------------------------------------------------------------

def test_active_entry_follows_scroll() -> None:
    viewport = Viewport(200)
    view = DocumentView(_document(), viewport)
    view.mount()

    assert view.active_id == "1-Intro"
    assert _active_items(view) == ["#1-Intro"]

    viewport.scroll_to(300)
    assert view.active_id == "1-Intro"

    viewport.scroll_to(368)
    assert view.active_id == "2-Background"
    assert _active_items(view) == ["#2-Background"]


def test_at_most_one_item_active_while_scrolling() -> None:
    viewport = Viewport(200)
    view = DocumentView(_document(), viewport)
    view.mount()

    for y in range(0, 400, 20):
        viewport.scroll_to(y)
        assert len(_active_items(view)) <= 1


def test_nav_mounted_first_still_pairs_entries() -> None:
    viewport = Viewport(200)
    view = DocumentView(_document(), viewport)

    view.mount(nav_first=True)

    refs = view.registry.collect_ordered_references()
    assert [ref.target_id for ref in refs] == ["1-Intro", "2-Background", "3-Method"]


def test_scroll_to_anchor() -> None:
    viewport = Viewport(200)
    view = DocumentView(_document(), viewport)
    view.mount()

    assert view.scroll_to_anchor("2-Background")
    assert viewport.scroll_y == 368.0  # clamped: 404 is past the end
    assert not view.scroll_to_anchor("9-Nope")


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

def test_unmount_detaches_listeners_and_clears_registry() -> None:
    viewport = Viewport(200)
    view = DocumentView(_document(), viewport)
    view.mount()
    assert viewport.listener_count() == 2

    view.unmount()
    view.unmount()

    assert viewport.listener_count() == 0
    assert len(view.registry) == 0
    assert view.active_id is None
    viewport.scroll_to(368)  # no listener left to react


def test_remount_cycles_do_not_leak() -> None:
    viewport = Viewport(200)
    view = DocumentView(_document(), viewport)

    for _ in range(3):
        view.mount()
        viewport.scroll_to(368)
        assert view.active_id == "2-Background"
        assert _active_items(view) == ["#2-Background"]
        view.unmount()
        viewport.scroll_to(0)

    assert viewport.listener_count() == 0
    assert len(view.registry) == 0


def test_every_outline_entry_is_complete_after_mount() -> None:
    root = node(
        RootTag(),
        node(UnknownTag(type="toggle"), heading(1, "Hidden")),
        heading(1, "Shown"),
        node(QuoteTag(), heading(2, "Quoted")),
    )
    view = DocumentView(root, Viewport(200))

    view.mount()

    content_ids = [el.attrs["id"] for el in view.content.iter_elements() if "id" in el.attrs]
    assert [entry.target_id for entry in view.entries] == content_ids == ["1-Shown", "2-Quoted"]
    assert all(view.registry.get(entry.target_id).complete for entry in view.entries)


def test_mount_twice_is_an_error() -> None:
    view = DocumentView(_document(), Viewport(200))
    view.mount()

    with pytest.raises(RuntimeError):
        view.mount()


def test_post_with_unresolved_image(post_data: dict) -> None:
    post = decode_post(post_data)
    viewport = Viewport(200)
    view = DocumentView(post, viewport, resolver=MappingResourceResolver({}))
    view.mount()

    assert [e.target_id for e in view.entries] == ["1-Intro", "2-Background", "3-Method"]
    assert view.content.find_by_class("doc-image-missing")

    viewport.scroll_to(684)
    assert view.active_id == "3-Method"
