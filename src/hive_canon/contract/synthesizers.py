"""Fallback synthesis of canonical fields from legacy Lab results.

Older ("v1") Lab runs and raw LLM output use their own ad hoc shapes. Each
synthesizer maps one Lab's legacy shape into its canonical path namespace,
returning only the fields it could derive. Acceptance thresholds here are the
synthesizer's own; the enforcer still checks every value against the field
contract before using it.

Synthesizers are pure and never raise: anything of an unexpected type is
treated as absent.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from types import MappingProxyType
from typing import Any, Mapping

from hive_canon.contract.values import get_nested
from hive_canon.core.jsontypes import MISSING, JsonObject
from hive_canon.core.logging import get_logger

logger = get_logger(__name__)

Synthesizer = Callable[..., JsonObject]

_synthesizers: dict[str, Synthesizer] = {}

# Headline/description boundary in a value-prop statement
_SENTENCE_BREAK = re.compile(r"[.!?:—–-]\s+")


def register_synthesizer(entity_type: str) -> Callable[[Synthesizer], Synthesizer]:
    """Decorator to register the synthesizer for a Lab type."""

    def decorator(fn: Synthesizer) -> Synthesizer:
        if entity_type in _synthesizers:
            raise ValueError(f"Synthesizer for '{entity_type}' is already registered")
        _synthesizers[entity_type] = fn
        return fn

    return decorator


def _no_synthesis(source: JsonObject, diagnostic_input: JsonObject | None = None) -> JsonObject:
    return {}


def get_synthesizer(entity_type: str) -> Synthesizer:
    """Synthesizer for a Lab type; a no-op for types without one."""
    if not isinstance(entity_type, str):
        return _no_synthesis
    return _synthesizers.get(entity_type, _no_synthesis)


def synthesize(
    entity_type: str, source: Any, diagnostic_input: JsonObject | None = None
) -> JsonObject:
    """Run the Lab's synthesizer on ``source``; non-mapping sources yield ``{}``."""
    if not isinstance(source, dict):
        if source is not None:
            logger.debug("synthesis_source_ignored", lab_type=entity_type,
                         source_type=type(source).__name__)
        return {}
    return get_synthesizer(entity_type)(source, diagnostic_input)


# =============================================================================
# Shape helpers
# =============================================================================


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str | None:
    """Non-empty string or None."""
    return value if isinstance(value, str) and value else None


def _items(value: Any) -> list | None:
    """Non-empty list or None."""
    return value if isinstance(value, list) and value else None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _pick(item: dict, *keys: str) -> dict:
    return {key: item[key] for key in keys if key in item}


def _top_issues(source: JsonObject, *keys: str) -> list:
    issues = _items(source.get("issues")) or []
    return [_pick(issue, *keys) for issue in issues[:5] if isinstance(issue, dict)]


def _copy_text(source: JsonObject, key: str, out: JsonObject) -> None:
    value = _text(source.get(key))
    if value:
        out[key] = value


# =============================================================================
# Per-Lab synthesizers
# =============================================================================


@register_synthesizer("brand")
def synthesize_brand(source: JsonObject, diagnostic_input: JsonObject | None = None) -> JsonObject:
    """Brand Lab: read the v1 ``diagnostic`` block (or the top level)."""
    synthesized: JsonObject = {}
    diagnostic = source.get("diagnostic") or source
    if not isinstance(diagnostic, dict):
        return synthesized

    theme = _text(get_nested(diagnostic, "positioning.positioningTheme"))
    tagline = _text(get_nested(diagnostic, "identitySystem.tagline"))
    core_promise = _text(get_nested(diagnostic, "identitySystem.corePromise"))

    if theme and len(theme) > 15:
        synthesized["positioning"] = {
            "statement": theme,
            "summary": theme,
            "confidence": 0.7,
        }
    elif tagline and len(tagline) > 10:
        synthesized["positioning"] = {
            "statement": tagline,
            "summary": core_promise or tagline,
            "confidence": 0.6,
        }

    value_props = _items(get_nested(diagnostic, "messagingSystem.valueProps"))
    if value_props:
        statement = _text(_mapping(value_props[0]).get("statement"))
        if statement and len(statement) >= 15:
            parts = _SENTENCE_BREAK.split(statement)
            synthesized["valueProp"] = {
                "headline": parts[0].strip() or statement[:50],
                "description": " ".join(parts[1:]).strip() if len(parts) > 1 else "",
                "confidence": 0.7,
            }

    differentiators = get_nested(diagnostic, "positioning.differentiators")
    if not isinstance(differentiators, list):
        differentiators = get_nested(diagnostic, "messagingSystem.uniqueValueProps")
    if isinstance(differentiators, list) and differentiators:
        synthesized["differentiators"] = {
            "bullets": [d for d in differentiators if isinstance(d, str) and len(d) > 5][:7],
            "confidence": 0.7,
        }

    icp_text = _text(get_nested(diagnostic, "audienceFit.primaryICPDescription")) or _text(
        get_nested(diagnostic, "audienceFit.targetAudience")
    )
    if icp_text and len(icp_text) > 10:
        synthesized["icp"] = {
            "primaryAudience": icp_text,
            "confidence": 0.7,
        }

    return synthesized


@register_synthesizer("website")
def synthesize_website(source: JsonObject, diagnostic_input: JsonObject | None = None) -> JsonObject:
    """Website Lab: read the v1 ``siteAssessment`` block (or the top level)."""
    synthesized: JsonObject = {}
    assessment = _mapping(source.get("siteAssessment") or source)

    benchmark = _text(assessment.get("benchmarkLabel"))
    if benchmark:
        synthesized["uxMaturity"] = benchmark

    primary_cta = _text(get_nested(assessment, "conversionAnalysis.primaryCta"))
    if primary_cta:
        synthesized["primaryCta"] = primary_cta

    issues = _items(assessment.get("issues")) or []
    synthesized["topIssues"] = [
        {
            "title": issue.get("title") or issue.get("description"),
            "severity": issue.get("severity") or "medium",
        }
        for issue in issues[:5]
        if isinstance(issue, dict)
    ]
    return synthesized


@register_synthesizer("seo")
def synthesize_seo(source: JsonObject, diagnostic_input: JsonObject | None = None) -> JsonObject:
    synthesized: JsonObject = {}
    _copy_text(source, "maturityStage", synthesized)

    for subscore in _items(source.get("subscores")) or []:
        label = _text(_mapping(subscore).get("label"))
        if label and "technical" in label.lower():
            synthesized["technicalHealth"] = subscore.get("status") or "unknown"
            break

    synthesized["topIssues"] = _top_issues(source, "title", "severity", "category")

    queries = _items(get_nested(source, "analyticsSnapshot.topQueries"))
    if queries:
        synthesized["topQueries"] = queries[:10]
    return synthesized


@register_synthesizer("content")
def synthesize_content(source: JsonObject, diagnostic_input: JsonObject | None = None) -> JsonObject:
    synthesized: JsonObject = {}
    _copy_text(source, "maturityStage", synthesized)

    findings = _mapping(source.get("findings"))
    content_types = findings.get("contentTypes")
    if isinstance(content_types, list):
        synthesized["contentTypes"] = [
            ct.get("type") for ct in content_types if isinstance(ct, dict) and ct.get("present")
        ]
    else:
        synthesized["contentTypes"] = []

    topics = _items(findings.get("topics"))
    if topics:
        synthesized["topTopics"] = topics[:10]

    synthesized["topIssues"] = _top_issues(source, "title", "severity")
    return synthesized


@register_synthesizer("competition")
def synthesize_competition(source: JsonObject, diagnostic_input: JsonObject | None = None) -> JsonObject:
    synthesized: JsonObject = {}

    competitors = _items(source.get("competitors"))
    if competitors:
        synthesized["competitors"] = competitors
        entries = [c for c in competitors if isinstance(c, dict)]
        direct = sum(1 for c in entries if c.get("category") == "direct" or c.get("role") == "core")
        indirect = sum(
            1 for c in entries if c.get("category") == "indirect" or c.get("role") == "secondary"
        )
        synthesized["positionSummary"] = (
            f"Competitive landscape includes {direct} direct competitors "
            f"and {indirect} indirect competitors."
        )
    else:
        synthesized["competitors"] = []
        synthesized["positionSummary"] = "No competitors identified."

    threat = source.get("overallThreatLevel")
    if _is_number(threat):
        synthesized["threatLevel"] = threat
    return synthesized


@register_synthesizer("audience")
def synthesize_audience(source: JsonObject, diagnostic_input: JsonObject | None = None) -> JsonObject:
    synthesized: JsonObject = {}

    audience = _text(source.get("primaryAudience")) or _text(source.get("targetAudience"))
    if audience:
        synthesized["primaryAudience"] = audience

    segments = _items(source.get("segments"))
    if segments:
        synthesized["segments"] = segments

    pain_points = _items(source.get("painPoints"))
    if pain_points:
        synthesized["painPoints"] = pain_points
    return synthesized


@register_synthesizer("ops")
def synthesize_ops(source: JsonObject, diagnostic_input: JsonObject | None = None) -> JsonObject:
    synthesized: JsonObject = {}
    _copy_text(source, "maturityStage", synthesized)

    snapshot = _mapping(source.get("analyticsSnapshot"))
    tracking = _items(snapshot.get("trackingStack"))
    synthesized["trackingStack"] = tracking or []

    if snapshot.get("hasGa4") or snapshot.get("hasGtm"):
        synthesized["hasAnalytics"] = "yes"
    elif tracking:
        synthesized["hasAnalytics"] = "partial"
    else:
        synthesized["hasAnalytics"] = "no"

    synthesized["topIssues"] = _top_issues(source, "title", "severity", "category")

    has_crm = get_nested(snapshot, "hasCrm")
    if has_crm is not MISSING:
        synthesized["crmStatus"] = "connected" if has_crm else "none"
    return synthesized


@register_synthesizer("demand")
def synthesize_demand(source: JsonObject, diagnostic_input: JsonObject | None = None) -> JsonObject:
    synthesized: JsonObject = {}
    _copy_text(source, "maturityStage", synthesized)

    snapshot = _mapping(source.get("analyticsSnapshot"))
    synthesized["primaryChannels"] = _items(snapshot.get("topChannels")) or []

    paid_share = snapshot.get("paidShare")
    if paid_share is None:
        synthesized["hasPaidTraffic"] = "unknown"
    else:
        synthesized["hasPaidTraffic"] = "yes" if _is_number(paid_share) and paid_share > 0 else "no"

    synthesized["topIssues"] = _top_issues(source, "title", "severity", "category")

    conversion_rate = snapshot.get("conversionRate")
    if _is_number(conversion_rate):
        synthesized["conversionRate"] = conversion_rate
    return synthesized


SYNTHESIZERS: Mapping[str, Synthesizer] = MappingProxyType(_synthesizers)


__all__ = [
    "SYNTHESIZERS",
    "Synthesizer",
    "register_synthesizer",
    "get_synthesizer",
    "synthesize",
    "synthesize_brand",
    "synthesize_website",
    "synthesize_seo",
    "synthesize_content",
    "synthesize_competition",
    "synthesize_audience",
    "synthesize_ops",
    "synthesize_demand",
]
