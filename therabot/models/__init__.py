"""
Data models for TheraBot.
"""

from .prescription import DiseaseRecord, RenderRequest
from .layout import Block, DocumentLayout, ImageBlock, LineBlock, TextBlock

__all__ = [
    "DiseaseRecord",
    "RenderRequest",
    "Block",
    "DocumentLayout",
    "ImageBlock",
    "LineBlock",
    "TextBlock",
]
