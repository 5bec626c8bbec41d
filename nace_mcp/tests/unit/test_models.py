"""
tests/unit/test_models.py
──────────────────────────────────────────────────────────────────────────────
Unit tests for domain model validation (Pydantic).

Tests cover:
  • ClassificationLevel enum values
  • RawRow alias parsing of the source keys
  • ClassificationEntry level/parent consistency and immutability
  • Result shapes expose exactly the contract fields
"""
from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from nace_mcp.domain.models import (
    BrowseItem,
    ClassificationEntry,
    ClassificationLevel,
    RawRow,
    SearchHit,
    Suggestion,
    SuggestResponse,
)


class TestClassificationLevel:
    def test_values(self):
        assert [lvl.value for lvl in ClassificationLevel] == [
            "section", "division", "group", "class",
        ]

    def test_from_string(self):
        assert ClassificationLevel("class") == ClassificationLevel.CLASS


class TestRawRow:
    def test_parses_source_keys(self):
        r = RawRow.model_validate({
            "Section": "A", "Division": "01", "Group": "01.1", "Class": "01.11",
            "Activity": "Growing of cereals",
        })
        assert r.section == "A"
        assert r.class_ == "01.11"
        assert r.activity == "Growing of cereals"

    def test_level_fields_optional(self):
        r = RawRow.model_validate({"Section": "A", "Activity": "Agriculture"})
        assert r.division is None
        assert r.group is None
        assert r.class_ is None

    def test_field_names_accepted(self):
        r = RawRow(section="A", activity="Agriculture")
        assert r.section == "A"

    def test_missing_activity_raises(self):
        with pytest.raises(ValidationError):
            RawRow.model_validate({"Section": "A"})


class TestClassificationEntry:
    def test_section_without_parent(self):
        e = ClassificationEntry(code="A", label="Agriculture", level="section")
        assert e.parent is None
        assert e.level == ClassificationLevel.SECTION

    def test_section_with_parent_raises(self):
        with pytest.raises(ValidationError):
            ClassificationEntry(code="A", label="x", level="section", parent="B")

    def test_class_without_parent_raises(self):
        with pytest.raises(ValidationError):
            ClassificationEntry(code="01.11", label="x", level="class")

    def test_is_frozen(self):
        e = ClassificationEntry(code="01", label="Crops", level="division", parent="A")
        with pytest.raises(ValidationError):
            e.label = "changed"

    def test_dump_uses_level_string(self):
        e = ClassificationEntry(code="01.1", label="Growing", level="group", parent="01")
        assert e.model_dump(mode="json") == {
            "code": "01.1", "label": "Growing", "level": "group", "parent": "01",
        }


class TestResultShapes:
    def test_browse_item_fields(self):
        assert set(BrowseItem(code="A", label="x").model_dump()) == {"code", "label"}

    def test_search_hit_fields(self):
        h = SearchHit(code="A", label="x", level="section")
        assert set(h.model_dump()) == {"code", "label", "level"}

    def test_suggestion_fields(self):
        s = Suggestion(code="01.12", label="Growing of rice", level="class",
                       reason='Matched: "rice"')
        assert set(s.model_dump()) == {"code", "label", "level", "reason"}

    def test_suggest_response_without_tokens(self):
        r = SuggestResponse(query="and the", tokens=[], message="nothing")
        assert r.has_tokens is False
        assert r.results == []

    def test_suggest_response_is_json_serialisable(self):
        r = SuggestResponse(
            query="rice",
            tokens=["rice"],
            results=[Suggestion(code="01.12", label="Growing of rice",
                                level="class", reason='Matched: "rice"')],
        )
        serialised = json.dumps(r.model_dump(mode="json"))
        assert "01.12" in serialised
