"""
Integration tests for TheraBot.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest


class TestModels:
    """Test data models."""

    def test_disease_record_is_frozen(self):
        from pydantic import ValidationError
        from therabot.models import DiseaseRecord

        record = DiseaseRecord(identifier="gastritis", recommendation="rest", treatment="antacids")

        with pytest.raises(ValidationError):
            record.treatment = "surgery"

    def test_render_request_label(self):
        from therabot.models import RenderRequest

        request = RenderRequest(
            disease_identifier="acute_pancreatitis",
            recommendation="rest",
            treatment="fluids",
        )

        assert request.disease_label == "Acute Pancreatitis"
        assert request.model_dump()["disease_label"] == "Acute Pancreatitis"


class TestPrescribe:
    """End-to-end prescription scenarios."""

    def test_gastritis(self):
        from knowledge import get_knowledge_base
        from therabot.exporters import compose_layout
        from therabot.prescription import prescribe

        kb = get_knowledge_base()
        recommendation, treatment = kb.lookup("gastritis")

        prescription = prescribe("gastritis", knowledge_base=kb, compress=False)

        assert prescription.filename == "Prescription.pdf"
        assert prescription.media_type == "application/pdf"
        assert prescription.content.startswith(b"%PDF-")
        assert b"(Gastritis)" in prescription.content

        request = prescription.request
        assert request.disease_label == "Gastritis"
        assert request.treatment == treatment
        assert request.recommendation == recommendation

        layout = compose_layout(request.disease_label, request.recommendation, request.treatment)
        assert layout.block("disease").text == "Gastritis"
        assert layout.block("treatment").text == treatment
        assert layout.block("recommendation").text == recommendation

        treatment_block = layout.block("treatment")
        heading = layout.block("recommendation_heading")
        assert heading.y - (treatment_block.y + treatment_block.height) > 0

    def test_nonexistent_disease(self):
        from knowledge import get_knowledge_base
        from therabot.errors import RecommendationNotFound
        from therabot.prescription import prescribe

        with pytest.raises(RecommendationNotFound) as excinfo:
            prescribe("nonexistent disease", knowledge_base=get_knowledge_base())

        assert str(excinfo.value) == "No recommendation found for nonexistent_disease"

    def test_mixed_case_and_spacing(self):
        from knowledge import get_knowledge_base
        from therabot.prescription import build_render_request

        kb = get_knowledge_base()

        request = build_render_request("Acute   Pancreatitis", knowledge_base=kb)

        assert request.disease_identifier == "acute_pancreatitis"
        assert request.disease_label == "Acute Pancreatitis"
        assert (request.recommendation, request.treatment) == kb.lookup("acute_pancreatitis")

    def test_lookup_miss_skips_rendering(self, monkeypatch):
        import therabot.prescription as prescription_module
        from knowledge import KnowledgeBase
        from therabot.errors import DiseaseNotFound

        calls = []
        monkeypatch.setattr(prescription_module, "render", lambda *a, **kw: calls.append(a))
        kb = KnowledgeBase.load([("gastritis", "rest", "antacids")])

        with pytest.raises(DiseaseNotFound):
            prescription_module.prescribe("appendicitis", knowledge_base=kb)

        assert calls == []

    def test_empty_knowledge_base_is_used(self):
        from knowledge import KnowledgeBase
        from therabot.errors import RecommendationNotFound
        from therabot.prescription import prescribe

        with pytest.raises(RecommendationNotFound):
            prescribe("gastritis", knowledge_base=KnowledgeBase.load([]))

    def test_every_disease_renders(self):
        from knowledge import get_knowledge_base
        from therabot.prescription import prescribe

        kb = get_knowledge_base()

        for identifier in kb.identifiers():
            assert prescribe(identifier, knowledge_base=kb).content.startswith(b"%PDF-")


class TestConfig:
    """Test settings."""

    def test_defaults(self, monkeypatch):
        from therabot.config import DEFAULT_KNOWLEDGE_PATH, Settings

        for var in ("THERABOT_PORT", "THERABOT_KNOWLEDGE_PATH", "THERABOT_ASSETS_DIR", "THERABOT_LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings()
        settings.validate()

        assert settings.port_number == 3003
        assert settings.knowledge_path == DEFAULT_KNOWLEDGE_PATH
        assert settings.assets_dir == Path("assets")
        assert settings.log_level == "INFO"

    @pytest.mark.parametrize("var,value", [
        ("THERABOT_PORT", "abc"),
        ("THERABOT_PORT", "70000"),
        ("THERABOT_LOG_LEVEL", "LOUD"),
    ])
    def test_invalid(self, monkeypatch, var, value):
        from therabot.config import Settings

        monkeypatch.setenv(var, value)

        with pytest.raises(ValueError):
            Settings().validate()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
