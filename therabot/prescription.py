"""
Prescription building: disease name in, PDF bytes out.

Shared by the HTTP server and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from knowledge import KnowledgeBase, get_knowledge_base, normalize_disease_name
from therabot.exporters import render
from therabot.models import RenderRequest

FILENAME = "Prescription.pdf"
MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True)
class Prescription:
    """A rendered prescription document."""
    request: RenderRequest
    content: bytes
    filename: str = FILENAME
    media_type: str = MEDIA_TYPE


def build_render_request(
    raw_name: str,
    knowledge_base: Optional[KnowledgeBase] = None,
) -> RenderRequest:
    """
    Resolve a free-text disease name into a RenderRequest.

    Raises:
        MalformedInput: if the name is missing or blank
        RecommendationNotFound: if the disease is not in the knowledge base
    """
    kb = knowledge_base if knowledge_base is not None else get_knowledge_base()
    identifier = normalize_disease_name(raw_name)
    recommendation, treatment = kb.lookup(identifier)
    return RenderRequest(
        disease_identifier=identifier,
        recommendation=recommendation,
        treatment=treatment,
    )


def prescribe(
    raw_name: str,
    knowledge_base: Optional[KnowledgeBase] = None,
    assets_dir: Optional[Path] = None,
    compress: bool = True,
) -> Prescription:
    """
    Look up a disease and render its prescription.

    Raises:
        MalformedInput, RecommendationNotFound: before any rendering starts
        RenderingFailure: if the document could not be built
    """
    request = build_render_request(raw_name, knowledge_base)
    content = render(
        request.disease_label,
        request.recommendation,
        request.treatment,
        assets_dir=assets_dir,
        compress=compress,
    )
    return Prescription(request=request, content=content)
