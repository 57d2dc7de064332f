"""hive-canon -- canonical field contract enforcement for diagnostic Labs.

Every Lab (brand, website, SEO, ...) hands its findings to ``enforce`` right
before saving them. The result is a canonical object in which each required
field holds a meaningful value or an explicit null, with no empty containers
left behind, plus a report of what was synthesized and what is missing.

Quick start::

    from hive_canon import enforce

    result = enforce("brand", findings, v1_result, llm_result)
    if not result.valid:
        logger.warning("canonical_invalid", errors=result.errors)
    save(result.canonical)
"""

from hive_canon.contract import (
    CANONICAL_REGISTRY,
    EnforcementResult,
    EntitySpec,
    FieldSpec,
    FieldType,
    ValidationReport,
    enforce,
    ensure_canonical,
    get_required_paths,
    get_spec,
    is_registered,
    lookup_spec,
    validate,
    validate_canonical,
)

__version__ = "0.1.0"

__all__ = [
    "CANONICAL_REGISTRY",
    "EnforcementResult",
    "EntitySpec",
    "FieldSpec",
    "FieldType",
    "ValidationReport",
    "enforce",
    "ensure_canonical",
    "get_required_paths",
    "get_spec",
    "is_registered",
    "lookup_spec",
    "validate",
    "validate_canonical",
    "__version__",
]
