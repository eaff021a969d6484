"""
Positioned blocks making up a prescription page.

Coordinates are in points with the origin at the top-left corner of the
page and y growing downward. The PDF exporter flips them when drawing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class TextBlock:
    """A run of text. `lines` holds the wrapped lines actually drawn."""
    name: str
    text: str
    x: float
    y: float
    font_name: str
    font_size: float
    color: str
    lines: tuple[str, ...]
    line_height: float
    width: float | None = None

    @property
    def height(self) -> float:
        return len(self.lines) * self.line_height


@dataclass(frozen=True)
class LineBlock:
    """A straight stroked line."""
    name: str
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    line_width: float


@dataclass(frozen=True)
class ImageBlock:
    """An image scaled to fit inside a box, preserving aspect ratio."""
    name: str
    path: Path
    x: float
    y: float
    width: float
    height: float


Block = Union[TextBlock, LineBlock, ImageBlock]


@dataclass(frozen=True)
class DocumentLayout:
    """A single page worth of positioned blocks, in drawing order."""
    page_width: float
    page_height: float
    blocks: tuple[Block, ...] = field(default_factory=tuple)

    def block(self, name: str) -> Block:
        """Get a block by name."""
        for b in self.blocks:
            if b.name == name:
                return b
        raise KeyError(name)

    def has_block(self, name: str) -> bool:
        return any(b.name == name for b in self.blocks)

    @property
    def text_blocks(self) -> list[TextBlock]:
        return [b for b in self.blocks if isinstance(b, TextBlock)]
