"""
Export functionality for TheraBot.
"""

from .pdf import compose_layout, render, render_layout
from .text import line_height, measure_height, wrap_text

__all__ = [
    "compose_layout",
    "render",
    "render_layout",
    "line_height",
    "measure_height",
    "wrap_text",
]
