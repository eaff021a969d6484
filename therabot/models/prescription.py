"""
Core data models for TheraBot.

A DiseaseRecord is one ground fact of the knowledge base; a RenderRequest is
the per-request value handed to the document composer.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class DiseaseRecord(BaseModel):
    """Recommendation and treatment text for one disease identifier."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(description="Normalized disease key, e.g. 'gastric_ulcer'")
    recommendation: str = Field(description="Lifestyle and care recommendation")
    treatment: str = Field(description="Clinical treatment text")

    @field_validator("identifier", "recommendation", "treatment")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value


class RenderRequest(BaseModel):
    """Everything the composer needs to build one prescription."""

    model_config = ConfigDict(frozen=True)

    disease_identifier: str
    recommendation: str
    treatment: str

    @computed_field
    @property
    def disease_label(self) -> str:
        """Human-readable disease name, e.g. 'Gastric Ulcer'."""
        from knowledge import disease_label

        return disease_label(self.disease_identifier)
