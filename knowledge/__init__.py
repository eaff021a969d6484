"""
TheraBot knowledge base.

Contains the static disease fact table (diseases.yaml) and the lookup
over it.
"""

from .disease_facts import (
    KnowledgeBase,
    disease_label,
    get_knowledge_base,
    normalize_disease_name,
    reset_knowledge_base,
)

__all__ = [
    "KnowledgeBase",
    "disease_label",
    "get_knowledge_base",
    "normalize_disease_name",
    "reset_knowledge_base",
]
