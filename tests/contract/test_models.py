"""Tests for hive_canon.contract.models: field and entity contracts."""

from __future__ import annotations

import dataclasses

import pytest

from hive_canon.contract.models import (
    Criticality,
    EnforcementResult,
    EntitySpec,
    FieldSpec,
    FieldType,
    ValidationReport,
)


class TestFieldSpec:
    def test_required_string_with_min_length_is_critical(self):
        spec = FieldSpec("positioning.statement", "Statement", FieldType.STRING, required=True, min_length=15)
        assert spec.criticality is Criticality.CRITICAL
        assert spec.is_critical

    def test_required_array_is_standard(self):
        spec = FieldSpec("differentiators.bullets", "Bullets", FieldType.ARRAY, required=True, min_items=1)
        assert spec.criticality is Criticality.STANDARD
        assert not spec.is_critical

    def test_required_string_without_min_length_is_standard(self):
        spec = FieldSpec("uxMaturity", "UX Maturity", FieldType.STRING, required=True)
        assert spec.criticality is Criticality.STANDARD

    def test_optional_field_never_critical(self):
        spec = FieldSpec("note", "Note", FieldType.STRING, criticality=Criticality.CRITICAL)
        assert not spec.is_critical

    def test_explicit_criticality_wins(self):
        spec = FieldSpec("topIssues", "Top Issues", FieldType.ARRAY, required=True,
                         criticality=Criticality.CRITICAL)
        assert spec.is_critical

    @pytest.mark.parametrize("path", ["", "a..b", ".a", "a."])
    def test_bad_path_rejected(self, path):
        with pytest.raises(ValueError, match="Invalid field path"):
            FieldSpec(path, "Bad", FieldType.STRING)

    def test_frozen(self):
        spec = FieldSpec("a", "A", FieldType.STRING)
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec.required = True  # type: ignore[misc]

    def test_to_dict(self):
        spec = FieldSpec("differentiators.bullets", "Differentiators", FieldType.ARRAY,
                         required=True, min_items=1)
        assert spec.to_dict() == {
            "path": "differentiators.bullets",
            "label": "Differentiators",
            "type": "array",
            "required": True,
            "criticality": "standard",
            "minItems": 1,
        }


class TestEntitySpec:
    def _spec(self, *fields: FieldSpec) -> EntitySpec:
        return EntitySpec("demo", "Demo Lab", "demo", "demo", fields)

    def test_duplicate_paths_rejected(self):
        with pytest.raises(ValueError, match="Duplicate field paths"):
            self._spec(FieldSpec("a", "A", FieldType.STRING), FieldSpec("a", "A2", FieldType.STRING))

    def test_required_paths_in_order(self):
        spec = self._spec(
            FieldSpec("b", "B", FieldType.STRING, required=True),
            FieldSpec("opt", "Opt", FieldType.STRING),
            FieldSpec("a", "A", FieldType.ARRAY, required=True),
        )
        assert spec.required_paths == ["b", "a"]
        assert [f.path for f in spec.required_fields] == ["b", "a"]

    def test_field_lookup(self):
        field_a = FieldSpec("a", "A", FieldType.STRING)
        spec = self._spec(field_a)
        assert spec.field("a") is field_a
        assert spec.field("missing") is None

    def test_to_dict_uses_camel_case(self):
        d = self._spec(FieldSpec("a", "A", FieldType.NUMBER)).to_dict()
        assert d["labType"] == "demo"
        assert d["contextDomain"] == "demo"
        assert d["qbrDomain"] == "demo"
        assert d["fields"][0]["type"] == "number"


class TestResults:
    def test_enforcement_result_defaults(self):
        result = EnforcementResult(canonical={})
        assert result.valid is True
        assert result.synthesized_fields == [] and result.null_fields == [] and result.errors == []

    def test_enforcement_result_to_dict(self):
        result = EnforcementResult(
            canonical={"a": None}, synthesized_fields=["b"], null_fields=["a"], valid=False, errors=["x"]
        )
        assert result.to_dict() == {
            "canonical": {"a": None},
            "synthesizedFields": ["b"],
            "nullFields": ["a"],
            "valid": False,
            "errors": ["x"],
        }

    def test_validation_report_to_dict(self):
        report = ValidationReport(valid=False, errors=["e"], missing_fields=["a.b"])
        assert report.to_dict() == {"valid": False, "errors": ["e"], "missingFields": ["a.b"]}
