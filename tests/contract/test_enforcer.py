"""Tests for hive_canon.contract.enforcer: fill, null and strip."""

from __future__ import annotations

import copy

import pytest

from hive_canon.contract.enforcer import enforce, ensure_canonical

BRAND_REQUIRED = [
    "positioning.statement",
    "valueProp.headline",
    "differentiators.bullets",
    "icp.primaryAudience",
]
THEME = "We serve growth-stage B2B SaaS teams with usage-based pricing needs."


def _theme_source(theme: str) -> dict:
    return {"diagnostic": {"positioning": {"positioningTheme": theme}}}


class TestBrandEnforcement:
    def test_synthesizes_statement_from_theme(self):
        result = enforce("brand", {}, _theme_source(THEME))

        assert result.canonical["positioning"]["statement"] == THEME
        assert "positioning.statement" in result.synthesized_fields
        assert not any("positioning.statement" in e for e in result.errors)

    def test_empty_input_nulls_required_leaves(self):
        result = enforce("brand", {})

        assert result.canonical == {
            "positioning": {"statement": None},
            "valueProp": {"headline": None},
            "differentiators": {"bullets": None},
            "icp": {"primaryAudience": None},
        }
        assert result.null_fields == BRAND_REQUIRED
        assert result.errors == [
            "Required field positioning.statement could not be synthesized",
            "Required field valueProp.headline could not be synthesized",
            "Required field icp.primaryAudience could not be synthesized",
        ]
        assert result.valid is False
        assert result.synthesized_fields == []

    def test_complete_canonical_untouched(self, complete_brand_canonical):
        result = enforce("brand", complete_brand_canonical)

        assert result.canonical == complete_brand_canonical
        assert result.valid is True
        assert result.synthesized_fields == [] and result.null_fields == [] and result.errors == []

    def test_full_v1_result(self, brand_v1_result):
        result = enforce("brand", {}, brand_v1_result)

        assert result.valid is True
        assert result.synthesized_fields == [
            "positioning.statement",
            "positioning.summary",
            "positioning.confidence",
            "valueProp.headline",
            "valueProp.description",
            "differentiators.bullets",
            "icp.primaryAudience",
        ]
        # Only contract leaves are copied, not sibling keys of the synthesized block
        assert result.canonical["valueProp"] == {
            "headline": "Comprehensive data coverage",
            "description": "Access verified information on millions of companies worldwide",
        }
        assert "toneOfVoice" not in result.canonical

    def test_existing_value_wins_over_sources(self):
        own = "Our own positioning statement, already confirmed."
        result = enforce("brand", {"positioning": {"statement": own}}, _theme_source(THEME), _theme_source(THEME))

        assert result.canonical["positioning"]["statement"] == own
        assert "positioning.statement" not in result.synthesized_fields

    def test_first_source_wins(self):
        first = "First source theme that is long enough."
        second = "Second source theme that is long enough."
        result = enforce("brand", {}, _theme_source(first), _theme_source(second))

        assert result.canonical["positioning"]["statement"] == first

    def test_second_source_used_when_first_falls_short(self):
        result = enforce("brand", {}, _theme_source("Too short"), _theme_source(THEME))

        assert result.canonical["positioning"]["statement"] == THEME
        assert "positioning.statement" in result.synthesized_fields

    def test_second_source_alone(self):
        result = enforce("brand", {}, None, _theme_source(THEME))
        assert result.canonical["positioning"]["statement"] == THEME

    def test_short_value_replaced(self):
        result = enforce("brand", {"positioning": {"statement": "Short"}}, _theme_source(THEME))
        assert result.canonical["positioning"]["statement"] == THEME

    def test_short_value_nulled_without_sources(self):
        result = enforce("brand", {"positioning": {"statement": "Short"}})

        assert result.canonical["positioning"]["statement"] is None
        assert "positioning.statement" in result.null_fields
        assert "Required field positioning.statement could not be synthesized" in result.errors

    def test_vacuous_containers_stripped(self):
        canonical = {
            "positioning": {"statement": THEME, "summary": ""},
            "extra": {},
            "notes": [],
            "meta": {"inner": {"deeper": ""}},
        }
        result = enforce("brand", canonical)

        assert result.canonical["positioning"] == {"statement": THEME}
        assert not {"extra", "notes", "meta"} & set(result.canonical)

    def test_explicit_null_on_optional_field_kept(self):
        result = enforce("brand", {"positioning": {"statement": THEME, "summary": None}})
        assert result.canonical["positioning"]["summary"] is None
        assert "positioning.summary" not in result.null_fields

    def test_invalid_optional_value_left_in_place(self):
        result = enforce("brand", {"positioning": {"statement": THEME, "confidence": "high"}})
        assert result.canonical["positioning"]["confidence"] == "high"

    def test_non_mapping_intermediate_replaced(self, brand_v1_result):
        result = enforce("brand", {"positioning": "legacy text"}, brand_v1_result)
        assert result.canonical["positioning"]["statement"].startswith("The leading platform")

    def test_empty_bullets_nulled_without_error(self):
        result = enforce("brand", {"differentiators": {"bullets": []}})

        assert result.canonical["differentiators"] == {"bullets": None}
        assert "differentiators.bullets" in result.null_fields
        assert not any("differentiators" in e for e in result.errors)


class TestOtherLabs:
    def test_competition_without_competitors(self):
        result = enforce("competition", {}, {"competitors": []})

        assert result.canonical == {"competitors": None, "positionSummary": "No competitors identified."}
        assert result.null_fields == ["competitors"]
        assert result.synthesized_fields == ["positionSummary"]
        assert result.valid is True

    def test_competition_from_v1(self, competition_v1_result):
        result = enforce("competition", {}, competition_v1_result)

        assert result.synthesized_fields == ["competitors", "positionSummary", "threatLevel"]
        assert result.canonical["threatLevel"] == 65

    def test_website_required_nulls_are_not_errors(self):
        result = enforce("website", {})

        assert result.null_fields == ["uxMaturity", "topIssues"]
        assert result.errors == []
        assert result.valid is True

    def test_website_from_v1(self, website_v1_result):
        result = enforce("website", {}, website_v1_result)

        assert result.canonical["uxMaturity"] == "Established"
        assert len(result.canonical["topIssues"]) == 2
        assert "conversionBlockers" not in result.canonical

    def test_ops_from_v1(self, ops_v1_result):
        result = enforce("ops", {}, ops_v1_result)
        assert result.synthesized_fields == [
            "maturityStage", "hasAnalytics", "trackingStack", "topIssues", "crmStatus",
        ]

    def test_demand_from_v1(self, demand_v1_result):
        result = enforce("demand", {"maturityStage": "emerging"}, demand_v1_result)

        assert result.canonical["maturityStage"] == "emerging"
        assert result.canonical["hasPaidTraffic"] == "yes"
        assert result.canonical["conversionRate"] == 2.4

    def test_creative_has_no_synthesis(self):
        result = enforce("creative", {}, {"messaging": {"coreMessage": "Taken from a legacy result verbatim"}})

        assert result.null_fields == ["messaging.coreMessage", "territories"]
        assert result.errors == ["Required field messaging.coreMessage could not be synthesized"]


class TestUnknownType:
    def test_input_echoed(self):
        canonical = {"anything": {"goes": []}}
        result = enforce("not_a_real_type", canonical)

        assert result.canonical is canonical
        assert result.valid is False
        assert result.errors == ["Unknown lab type: not_a_real_type"]
        assert result.synthesized_fields == [] and result.null_fields == []


class TestInputHandling:
    def test_inputs_not_mutated(self, brand_v1_result):
        canonical = {"positioning": {"statement": "Short", "summary": ""}, "extra": {}}
        before = copy.deepcopy((canonical, brand_v1_result))

        enforce("brand", canonical, brand_v1_result)

        assert (canonical, brand_v1_result) == before

    def test_result_detached_from_sources(self, competition_v1_result):
        result = enforce("competition", {}, competition_v1_result)
        result.canonical["competitors"].append({"name": "Acme"})
        assert len(competition_v1_result["competitors"]) == 3

    @pytest.mark.parametrize("canonical", [None, "text", [1, 2]])
    def test_non_mapping_canonical_treated_as_empty(self, canonical):
        result = enforce("brand", canonical)
        assert result.null_fields == BRAND_REQUIRED

    def test_non_mapping_sources_ignored(self):
        result = enforce("brand", {}, "legacy", ["x"])
        assert result.synthesized_fields == []


class TestEnsureCanonical:
    def test_keyword_form_matches_enforce(self, brand_v1_result):
        keyword = ensure_canonical(lab_type="brand", canonical={}, llm_result=brand_v1_result)
        positional = enforce("brand", {}, None, brand_v1_result)
        assert keyword.to_dict() == positional.to_dict()
