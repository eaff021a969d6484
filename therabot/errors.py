"""
Exception hierarchy for TheraBot.

Lookup and input errors are client-visible; rendering errors are reported
to callers as a generic internal failure.
"""

from __future__ import annotations


class TherabotError(Exception):
    """Base class for all TheraBot errors."""


class KnowledgeBaseError(TherabotError):
    """The disease fact table could not be loaded."""


class MalformedInput(TherabotError, ValueError):
    """A disease name was missing, not a string, or blank."""


class DiseaseNotFound(TherabotError, LookupError):
    """No fact exists for the requested disease identifier."""

    field = "record"

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"No {self.field} found for {identifier}")


class RecommendationNotFound(DiseaseNotFound):
    field = "recommendation"


class TreatmentNotFound(DiseaseNotFound):
    field = "treatment"


class RenderingFailure(TherabotError):
    """The prescription document could not be built."""
