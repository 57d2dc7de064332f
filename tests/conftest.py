"""
Shared pytest fixtures and configuration for hive-canon tests.

This module provides:
- Legacy (v1) Lab result samples used as synthesis sources
- Logging and settings reset between tests
- Automatic unit/integration markers based on test location
"""

import sys
from pathlib import Path
from typing import Any

import pytest
import structlog

# Ensure hive_canon package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hive_canon.core.logging import clear_context
from hive_canon.core.settings import reset_settings


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path) or "cli" in test_path.parts:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_logging_and_settings(monkeypatch):
    """Start every test with default structlog config and fresh settings."""
    for var in ("HIVE_CANON_LOG_LEVEL", "HIVE_CANON_JSON_LOGS", "HIVE_CANON_FAIL_ON_INVALID"):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    structlog.reset_defaults()
    clear_context()
    reset_settings()


# =============================================================================
# Legacy Lab Results
# =============================================================================


@pytest.fixture
def brand_v1_result() -> dict[str, Any]:
    return {
        "diagnostic": {
            "positioning": {
                "positioningTheme": "The leading platform for business intelligence and company research.",
            },
            "identitySystem": {
                "tagline": "Find the companies that matter",
                "corePromise": "Access verified data on millions of companies",
            },
            "messagingSystem": {
                "valueProps": [
                    {
                        "statement": "Comprehensive data coverage — Access verified information "
                        "on millions of companies worldwide",
                    },
                ],
                "uniqueValueProps": ["Real-time data updates", "AI-powered insights", "Global coverage"],
            },
            "audienceFit": {
                "primaryICPDescription": "Sales professionals, investors, and market researchers "
                "who need accurate company data",
                "targetAudience": "Business professionals seeking market intelligence",
            },
        },
    }


@pytest.fixture
def website_v1_result() -> dict[str, Any]:
    return {
        "siteAssessment": {
            "benchmarkLabel": "Established",
            "conversionAnalysis": {"primaryCta": "Start Free Trial"},
            "issues": [
                {"title": "Slow page load", "severity": "high"},
                {"title": "Missing meta descriptions", "severity": "medium"},
            ],
        },
    }


@pytest.fixture
def seo_v1_result() -> dict[str, Any]:
    return {
        "maturityStage": "scaling",
        "subscores": [
            {"label": "Technical SEO", "status": "good", "score": 75},
            {"label": "On-Page SEO", "status": "needs-work", "score": 55},
        ],
        "issues": [
            {"title": "Missing alt tags", "severity": "medium", "category": "accessibility"},
            {"title": "Duplicate content", "severity": "high", "category": "content"},
        ],
        "analyticsSnapshot": {
            "topQueries": ["company research", "business data", "funding rounds"],
        },
    }


@pytest.fixture
def content_v1_result() -> dict[str, Any]:
    return {
        "maturityStage": "emerging",
        "findings": {
            "contentTypes": [
                {"type": "blog", "present": True},
                {"type": "case-studies", "present": False},
            ],
            "topics": ["market intelligence", "startup ecosystem", "investor data"],
        },
        "issues": [
            {"title": "Inconsistent publishing cadence", "severity": "medium"},
            {"title": "Missing content calendar", "severity": "low"},
        ],
    }


@pytest.fixture
def competition_v1_result() -> dict[str, Any]:
    return {
        "competitors": [
            {"name": "PitchBook", "domain": "pitchbook.com", "category": "direct"},
            {"name": "ZoomInfo", "domain": "zoominfo.com", "category": "indirect"},
            {"name": "LinkedIn", "domain": "linkedin.com", "category": "indirect"},
        ],
        "overallThreatLevel": 65,
    }


@pytest.fixture
def audience_v1_result() -> dict[str, Any]:
    return {
        "primaryAudience": "Enterprise sales teams and venture capital analysts",
        "segments": [
            {"name": "Sales Professionals", "size": "large"},
            {"name": "Investors", "size": "medium"},
        ],
        "painPoints": ["Data accuracy concerns", "Integration challenges", "Pricing"],
    }


@pytest.fixture
def ops_v1_result() -> dict[str, Any]:
    return {
        "maturityStage": "developing",
        "analyticsSnapshot": {
            "trackingStack": ["GA4", "Segment"],
            "hasGa4": True,
            "hasCrm": False,
        },
        "issues": [{"title": "No conversion events", "severity": "high", "category": "tracking"}],
    }


@pytest.fixture
def demand_v1_result() -> dict[str, Any]:
    return {
        "maturityStage": "scaling",
        "analyticsSnapshot": {
            "topChannels": ["organic", "paid_search"],
            "paidShare": 0.35,
            "conversionRate": 2.4,
        },
        "issues": [{"title": "High CPA on display", "severity": "medium", "category": "paid"}],
    }


@pytest.fixture
def complete_brand_canonical() -> dict[str, Any]:
    return {
        "positioning": {
            "statement": "A complete positioning statement for the company.",
            "summary": "Summary text",
            "confidence": 0.9,
        },
        "valueProp": {
            "headline": "Value prop headline",
            "description": "Description of the value proposition",
            "confidence": 0.9,
        },
        "differentiators": {
            "bullets": ["Diff 1", "Diff 2", "Diff 3"],
            "confidence": 0.9,
        },
        "icp": {
            "primaryAudience": "Primary audience description for the company.",
            "confidence": 0.9,
        },
    }
