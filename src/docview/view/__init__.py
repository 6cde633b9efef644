"""View tree and the headless viewport it mounts into."""

from .element import TextNode, ViewElement, ViewNode, element
from .viewport import ElementHandle, MountedTree, Rect, Viewport

__all__ = [
    "ElementHandle",
    "MountedTree",
    "Rect",
    "TextNode",
    "ViewElement",
    "ViewNode",
    "Viewport",
    "element",
]
