"""Shared fixtures: a small post in the content API's JSON shape."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def _text(value: str) -> dict:
    return {"tag": {"type": "inlineText", "text": value}, "children": []}


def _heading(level: int, title: str) -> dict:
    return {"tag": {"type": "heading", "level": level}, "children": [_text(title)]}


def _paragraph(value: str) -> dict:
    return {"tag": {"type": "paragraph"}, "children": [_text(value)]}


@pytest.fixture
def post_data() -> dict:
    return {
        "title": "Fixture Post",
        "slug": "fixture-post",
        "author": "Alice",
        "createTimestamp": 1700000000,
        "updateTimestamp": 1700086400,
        "category": "notes",
        "tags": ["python", "docs"],
        "content": {
            "tag": {"type": "root"},
            "children": [
                _heading(1, "Intro"),
                _paragraph("word " * 160),
                _heading(2, "Background"),
                {
                    "tag": {"type": "image", "link": {"type": "embedded", "uuid": "abc-123"}, "caption": "Diagram"},
                    "children": [],
                },
                _heading(1, "Method"),
                {
                    "tag": {"type": "code", "language": "c++", "caption": None, "code": "int main() {}"},
                    "children": [],
                },
            ],
        },
    }


@pytest.fixture
def post_file(tmp_path: Path, post_data: dict) -> Path:
    path = tmp_path / "fixture-post.json"
    path.write_text(json.dumps(post_data), encoding="utf-8")
    return path
