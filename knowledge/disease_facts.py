"""
Disease fact table: recommendation and treatment text per disease.

The table is loaded once, validated as a whole, and frozen. Lookups are a
single exact match on the normalized identifier:

    "Acute   Pancreatitis"  ->  "acute_pancreatitis"

Normalization strips surrounding whitespace, collapses each internal
whitespace run into "_" and lowercases, so matching is case-insensitive.
Nothing is matched partially.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from therabot.errors import (
    KnowledgeBaseError,
    MalformedInput,
    RecommendationNotFound,
    TreatmentNotFound,
)
from therabot.models import DiseaseRecord

logger = logging.getLogger(__name__)

SEPARATOR = "_"
_WHITESPACE = re.compile(r"\s+")


def normalize_disease_name(raw_name: Any) -> str:
    """
    Turn a free-text disease name into a table identifier.

    Raises:
        MalformedInput: if the name is missing, not a string, or blank
    """
    if raw_name is None:
        raise MalformedInput("Disease name is required")
    if not isinstance(raw_name, str):
        raise MalformedInput(f"Disease name must be a string, got {type(raw_name).__name__}")
    stripped = raw_name.strip()
    if not stripped:
        raise MalformedInput("Disease name must not be empty")
    return _WHITESPACE.sub(SEPARATOR, stripped).lower()


def disease_label(identifier: str) -> str:
    """
    Human-readable form of an identifier.

    "gastric_ulcer" -> "Gastric Ulcer". Words are split on single spaces only,
    so doubled separators survive as doubled spaces.
    """
    words = identifier.replace(SEPARATOR, " ").split(" ")
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def _coerce_record(raw: Any) -> DiseaseRecord:
    if isinstance(raw, DiseaseRecord):
        return raw
    if isinstance(raw, Mapping):
        data = dict(raw)
        if "id" in data and "identifier" not in data:
            data["identifier"] = data.pop("id")
        return DiseaseRecord.model_validate(data)
    if isinstance(raw, (tuple, list)) and len(raw) == 3:
        identifier, recommendation, treatment = raw
        return DiseaseRecord(
            identifier=identifier,
            recommendation=recommendation,
            treatment=treatment,
        )
    raise KnowledgeBaseError(f"Unrecognized disease record: {raw!r}")


class KnowledgeBase:
    """
    Immutable mapping from disease identifier to DiseaseRecord.

    Build one with `load()` or `from_yaml()`; the constructor expects an
    already validated mapping.
    """

    def __init__(self, records: Mapping[str, DiseaseRecord]):
        self._records = MappingProxyType(dict(records))

    @classmethod
    def load(cls, records: Iterable[Any]) -> "KnowledgeBase":
        """
        Validate and freeze a sequence of records.

        Each record is a DiseaseRecord, a mapping with id/identifier,
        recommendation and treatment keys, or an
        (identifier, recommendation, treatment) triple.

        Raises:
            KnowledgeBaseError: on empty fields, duplicated identifiers, or
                identifiers that are not in normalized form
        """
        table: dict[str, DiseaseRecord] = {}
        for position, raw in enumerate(records):
            try:
                record = _coerce_record(raw)
            except ValidationError as e:
                raise KnowledgeBaseError(f"Invalid disease record at position {position}: {e}") from e

            try:
                normalized = normalize_disease_name(record.identifier)
            except MalformedInput as e:
                raise KnowledgeBaseError(str(e)) from e
            if normalized != record.identifier:
                raise KnowledgeBaseError(
                    f"Identifier {record.identifier!r} is not normalized (expected {normalized!r})"
                )
            if record.identifier in table:
                raise KnowledgeBaseError(f"Duplicate disease identifier: {record.identifier}")

            table[record.identifier] = record

        return cls(table)

    @classmethod
    def from_yaml(cls, path: Path) -> "KnowledgeBase":
        """Load the table from a YAML list of records."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise KnowledgeBaseError(f"Could not read knowledge base {path}: {e}") from e

        if data is None:
            data = []
        if not isinstance(data, list):
            raise KnowledgeBaseError(f"{path} must contain a list of disease records")

        kb = cls.load(data)
        logger.info("Loaded %d disease records from %s", len(kb), path)
        return kb

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, raw_name: object) -> bool:
        try:
            return normalize_disease_name(raw_name) in self._records
        except MalformedInput:
            return False

    def identifiers(self) -> list[str]:
        """All identifiers, sorted."""
        return sorted(self._records)

    def records(self) -> list[DiseaseRecord]:
        return [self._records[key] for key in self.identifiers()]

    def get(self, raw_name: str) -> Optional[DiseaseRecord]:
        """Get a record by name, or None."""
        return self._records.get(normalize_disease_name(raw_name))

    def lookup(self, raw_name: str) -> tuple[str, str]:
        """
        Resolve a disease name to its (recommendation, treatment) pair.

        Raises:
            MalformedInput: if the name is missing or blank
            RecommendationNotFound: if no record exists for the name
        """
        key = normalize_disease_name(raw_name)
        record = self._records.get(key)
        if record is None:
            logger.info("No disease record for %s", key)
            raise RecommendationNotFound(key)
        return record.recommendation, record.treatment

    def recommendation(self, raw_name: str) -> str:
        key = normalize_disease_name(raw_name)
        record = self._records.get(key)
        if record is None:
            raise RecommendationNotFound(key)
        return record.recommendation

    def treatment(self, raw_name: str) -> str:
        key = normalize_disease_name(raw_name)
        record = self._records.get(key)
        if record is None:
            raise TreatmentNotFound(key)
        return record.treatment


# -----------------------------------------------------------------------------
# Singleton instance
# -----------------------------------------------------------------------------

_knowledge_base: Optional[KnowledgeBase] = None


def get_knowledge_base() -> KnowledgeBase:
    """
    Get the process-wide knowledge base (singleton).

    Loaded from the configured YAML path on first use. Call this before
    serving requests so the table is never written while being read.
    """
    global _knowledge_base
    if _knowledge_base is None:
        from therabot.config import get_settings

        _knowledge_base = KnowledgeBase.from_yaml(get_settings().knowledge_path)
    return _knowledge_base


def reset_knowledge_base() -> None:
    """Drop the singleton (useful for testing)."""
    global _knowledge_base
    _knowledge_base = None
