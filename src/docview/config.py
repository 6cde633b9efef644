"""Render settings shared by the CLI and the page renderer."""

from __future__ import annotations

from dataclasses import dataclass

MATH_ENGINES = ("none", "katex")

DEFAULT_VIEWPORT_HEIGHT = 800.0


@dataclass(slots=True)
class RenderSettings:
    """Controls how a post is turned into a page."""

    server_url: str | None = None  # content server serving /api/resources/<uuid>
    dark_mode: bool = False
    math_engine: str = "none"
    viewport_height: float = DEFAULT_VIEWPORT_HEIGHT

    def __post_init__(self) -> None:
        self.math_engine = self.math_engine.lower()
        if self.math_engine not in MATH_ENGINES:
            raise ValueError(f"Unsupported math engine: {self.math_engine!r} (expected one of {MATH_ENGINES})")
        if self.viewport_height <= 0:
            raise ValueError("viewport_height must be positive")
