"""Canonical field contract registry.

Each diagnostic Lab registers one ``EntitySpec`` describing the leaves its
canonical output must carry. The registry is built once at import time and
exposed read-only; lookups of unregistered Lab types return ``None`` (or an
``Err`` through ``lookup_spec``) rather than raising.

Tags:
    contract, registry, lab-types, hive-canon
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from hive_canon.contract.models import EntitySpec, FieldSpec, FieldType
from hive_canon.core.errors import UnknownEntityTypeError
from hive_canon.core.result import Result, from_optional

STRING = FieldType.STRING
ARRAY = FieldType.ARRAY
NUMBER = FieldType.NUMBER


# =============================================================================
# Lab contracts
# =============================================================================

BRAND_LAB_SPEC = EntitySpec(
    entity_type="brand",
    label="Brand Lab",
    context_domain="brand",
    qbr_domain="brand",
    fields=(
        FieldSpec("positioning.statement", "Positioning Statement", STRING, required=True, min_length=15),
        FieldSpec("positioning.summary", "Positioning Summary", STRING),
        FieldSpec("positioning.confidence", "Positioning Confidence", NUMBER),
        FieldSpec("valueProp.headline", "Value Proposition Headline", STRING, required=True, min_length=5),
        FieldSpec("valueProp.description", "Value Proposition Description", STRING, min_length=10),
        FieldSpec("differentiators.bullets", "Differentiators", ARRAY, required=True, min_items=1),
        FieldSpec("icp.primaryAudience", "Primary Audience", STRING, required=True, min_length=10),
        FieldSpec("toneOfVoice.descriptor", "Tone of Voice", STRING),
    ),
)

WEBSITE_LAB_SPEC = EntitySpec(
    entity_type="website",
    label="Website Lab",
    context_domain="website",
    qbr_domain="website",
    fields=(
        FieldSpec("uxMaturity", "UX Maturity", STRING, required=True),
        FieldSpec("primaryCta", "Primary CTA", STRING),
        FieldSpec("topIssues", "Top Issues", ARRAY, required=True, min_items=0),
        FieldSpec("conversionBlockers", "Conversion Blockers", ARRAY, min_items=1),
    ),
)

SEO_LAB_SPEC = EntitySpec(
    entity_type="seo",
    label="SEO Lab",
    context_domain="seo",
    qbr_domain="seo",
    fields=(
        FieldSpec("maturityStage", "Maturity Stage", STRING, required=True),
        FieldSpec("technicalHealth", "Technical Health", STRING),
        FieldSpec("topIssues", "Top Issues", ARRAY, required=True, min_items=0),
        FieldSpec("topQueries", "Top Queries", ARRAY, min_items=1),
    ),
)

CONTENT_LAB_SPEC = EntitySpec(
    entity_type="content",
    label="Content Lab",
    context_domain="content",
    qbr_domain="content",
    fields=(
        FieldSpec("maturityStage", "Maturity Stage", STRING, required=True),
        FieldSpec("contentTypes", "Content Types", ARRAY, min_items=1),
        FieldSpec("topTopics", "Top Topics", ARRAY, min_items=1),
        FieldSpec("topIssues", "Top Issues", ARRAY, required=True, min_items=0),
    ),
)

COMPETITION_LAB_SPEC = EntitySpec(
    entity_type="competition",
    label="Competition Lab",
    context_domain="competitive",
    qbr_domain="competitive",
    fields=(
        FieldSpec("competitors", "Competitors", ARRAY, required=True, min_items=0),
        FieldSpec("positionSummary", "Position Summary", STRING, required=True, min_length=10),
        FieldSpec("threatLevel", "Threat Level", NUMBER),
    ),
)

AUDIENCE_LAB_SPEC = EntitySpec(
    entity_type="audience",
    label="Audience Lab",
    context_domain="audience",
    qbr_domain="audience",
    fields=(
        FieldSpec("primaryAudience", "Primary Audience", STRING, required=True, min_length=10),
        FieldSpec("segments", "Segments", ARRAY, min_items=1),
        FieldSpec("painPoints", "Pain Points", ARRAY, min_items=1),
    ),
)

OPS_LAB_SPEC = EntitySpec(
    entity_type="ops",
    label="Ops Lab",
    context_domain="ops",
    qbr_domain="analytics",
    fields=(
        FieldSpec("maturityStage", "Maturity Stage", STRING, required=True),
        FieldSpec("hasAnalytics", "Has Analytics", STRING, required=True),
        FieldSpec("trackingStack", "Tracking Stack", ARRAY, min_items=1),
        FieldSpec("topIssues", "Top Issues", ARRAY, required=True, min_items=0),
        FieldSpec("crmStatus", "CRM Status", STRING),
    ),
)

DEMAND_LAB_SPEC = EntitySpec(
    entity_type="demand",
    label="Demand Lab",
    context_domain="performanceMedia",
    qbr_domain="media",
    fields=(
        FieldSpec("maturityStage", "Maturity Stage", STRING, required=True),
        FieldSpec("primaryChannels", "Primary Channels", ARRAY, min_items=1),
        FieldSpec("hasPaidTraffic", "Has Paid Traffic", STRING, required=True),
        FieldSpec("topIssues", "Top Issues", ARRAY, required=True, min_items=0),
        FieldSpec("conversionRate", "Conversion Rate", NUMBER),
    ),
)

CREATIVE_LAB_SPEC = EntitySpec(
    entity_type="creative",
    label="Creative Lab",
    context_domain="creative",
    qbr_domain="content",
    fields=(
        FieldSpec("messaging.coreMessage", "Core Message", STRING, required=True, min_length=15),
        FieldSpec("messaging.proofPoints", "Proof Points", ARRAY, min_items=1),
        FieldSpec("territories", "Creative Territories", ARRAY, required=True, min_items=1),
        FieldSpec("campaignConcepts", "Campaign Concepts", ARRAY, min_items=1),
    ),
)


def _build_registry(*specs: EntitySpec) -> Mapping[str, EntitySpec]:
    registry: dict[str, EntitySpec] = {}
    for spec in specs:
        if spec.entity_type in registry:
            raise ValueError(f"Lab type '{spec.entity_type}' is already registered")
        if not spec.required_fields:
            raise ValueError(f"Lab type '{spec.entity_type}' declares no required fields")
        registry[spec.entity_type] = spec
    return MappingProxyType(registry)


CANONICAL_REGISTRY: Mapping[str, EntitySpec] = _build_registry(
    BRAND_LAB_SPEC,
    WEBSITE_LAB_SPEC,
    SEO_LAB_SPEC,
    CONTENT_LAB_SPEC,
    COMPETITION_LAB_SPEC,
    AUDIENCE_LAB_SPEC,
    OPS_LAB_SPEC,
    DEMAND_LAB_SPEC,
    CREATIVE_LAB_SPEC,
)


def get_spec(entity_type: str) -> EntitySpec | None:
    """Get the contract for a Lab type, or None if it is not registered."""
    if not isinstance(entity_type, str):
        return None
    return CANONICAL_REGISTRY.get(entity_type)


def lookup_spec(entity_type: str) -> Result[EntitySpec]:
    """Get the contract for a Lab type as a Result."""
    return from_optional(get_spec(entity_type), UnknownEntityTypeError(entity_type))


def get_required_paths(entity_type: str) -> list[str]:
    """Required field paths for a Lab type; empty for unregistered types."""
    spec = get_spec(entity_type)
    return spec.required_paths if spec else []


def is_registered(entity_type: str) -> bool:
    return get_spec(entity_type) is not None


def list_entity_types() -> list[str]:
    """Registered Lab types in registration order."""
    return list(CANONICAL_REGISTRY)


__all__ = [
    "CANONICAL_REGISTRY",
    "BRAND_LAB_SPEC",
    "WEBSITE_LAB_SPEC",
    "SEO_LAB_SPEC",
    "CONTENT_LAB_SPEC",
    "COMPETITION_LAB_SPEC",
    "AUDIENCE_LAB_SPEC",
    "OPS_LAB_SPEC",
    "DEMAND_LAB_SPEC",
    "CREATIVE_LAB_SPEC",
    "get_spec",
    "lookup_spec",
    "get_required_paths",
    "is_registered",
    "list_entity_types",
]
