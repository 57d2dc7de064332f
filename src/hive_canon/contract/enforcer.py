"""
Canonical contract enforcement.

Called by each Lab right before its result is persisted. Given the Lab's
current canonical object plus up to two legacy sources (a v1 result and a raw
LLM result), ``enforce`` returns a cleaned copy in which:

1. Every required field holds a contract-satisfying value or explicit null
2. Missing fields are synthesized from the legacy sources where possible
3. No empty ``{}``, ``[]`` or ``""`` survives anywhere in the mapping tree
4. The caller's objects are never mutated

Architecture:
    ::

        canonical ──deepcopy──▶ working
        v1 result ──synthesize──▶ synth1     (same synthesizer for both)
        llm result ─synthesize──▶ synth2
                                    │
        for field in spec.fields (registration order):
            working ✓  →  keep
            synth1  ✓  →  copy, record synthesized
            synth2  ✓  →  copy, record synthesized
            required   →  null, record null (+ error if critical)
            optional   →  leave absent
                                    │
        strip_empty(working) ──▶ EnforcementResult

Guardrails:
    ❌ DON'T: Persist ``result.canonical`` without looking at ``result.valid``
    ✅ DO: Surface ``result.errors`` to operators when invalid

    ❌ DON'T: Treat ``None`` in the output as a bug
    ✅ DO: Read it as "this Lab could not produce this field"

Examples:
    >>> result = enforce("brand", {}, {"diagnostic": {"positioning": {
    ...     "positioningTheme": "We serve growth-stage B2B SaaS teams."}}})
    >>> result.canonical["positioning"]["statement"]
    'We serve growth-stage B2B SaaS teams.'
    >>> "positioning.statement" in result.synthesized_fields
    True

Tags:
    contract, enforcement, synthesis, normalisation, hive-canon
"""

from __future__ import annotations

import copy
from typing import Any

from hive_canon.contract.models import EnforcementResult, FieldSpec
from hive_canon.contract.registry import get_spec
from hive_canon.contract.synthesizers import synthesize
from hive_canon.contract.values import (
    deep_copy_json,
    get_nested,
    meets_spec,
    set_nested,
    settle,
    strip_empty,
)
from hive_canon.core.jsontypes import MISSING, JsonObject
from hive_canon.core.logging import get_logger

logger = get_logger(__name__)


def _usable(value: Any, spec: FieldSpec) -> tuple[bool, Any]:
    """Whether ``value`` satisfies ``spec`` once vacuous contents are stripped.

    A value that would disappear in the final strip pass is never usable, so
    a required field cannot end up absent.
    """
    settled = settle(value)
    if settled is MISSING:
        return False, MISSING
    return meets_spec(settled, spec), settled


def enforce(
    entity_type: str,
    canonical: JsonObject | None,
    alt_source_1: JsonObject | None = None,
    alt_source_2: JsonObject | None = None,
    *,
    diagnostic_input: JsonObject | None = None,
) -> EnforcementResult:
    """
    Enforce the Lab's field contract on ``canonical``.

    Args:
        entity_type: Registered Lab type ("brand", "website", ...)
        canonical: Current canonical object; may be partial
        alt_source_1: First fallback source (v1 result), tried first
        alt_source_2: Second fallback source (raw LLM result)
        diagnostic_input: Extra hint passed through to the synthesizer

    Returns:
        EnforcementResult with the cleaned canonical object. For an
        unregistered Lab type the input is echoed back with ``valid=False``.
    """
    spec = get_spec(entity_type)
    if spec is None:
        logger.warning("unknown_entity_type", lab_type=entity_type)
        return EnforcementResult(
            canonical=canonical,
            valid=False,
            errors=[f"Unknown lab type: {entity_type}"],
        )

    working = deep_copy_json(canonical)
    synthesized_fields: list[str] = []
    null_fields: list[str] = []
    errors: list[str] = []

    sources = [
        synthesize(entity_type, source, diagnostic_input)
        for source in (alt_source_1, alt_source_2)
        if source is not None
    ]

    for field_spec in spec.fields:
        current = get_nested(working, field_spec.path)
        ok, _ = _usable(current, field_spec)
        if ok:
            continue

        for synthesized in sources:
            ok, value = _usable(get_nested(synthesized, field_spec.path), field_spec)
            if ok:
                set_nested(working, field_spec.path, copy.deepcopy(value))
                synthesized_fields.append(field_spec.path)
                break
        else:
            if field_spec.required:
                set_nested(working, field_spec.path, None)
                null_fields.append(field_spec.path)
                if field_spec.is_critical:
                    errors.append(f"Required field {field_spec.path} could not be synthesized")

    result = EnforcementResult(
        canonical=strip_empty(working),
        synthesized_fields=synthesized_fields,
        null_fields=null_fields,
        valid=not errors,
        errors=errors,
    )
    logger.debug(
        "canonical_enforced",
        lab_type=entity_type,
        synthesized=len(synthesized_fields),
        nulled=len(null_fields),
        valid=result.valid,
    )
    return result


def ensure_canonical(
    *,
    lab_type: str,
    canonical: JsonObject | None,
    v1_result: JsonObject | None = None,
    llm_result: JsonObject | None = None,
    diagnostic_input: JsonObject | None = None,
) -> EnforcementResult:
    """
    Keyword form of ``enforce`` used by Lab builders.

    Example:
        result = ensure_canonical(
            lab_type="brand",
            canonical=brand_result["findings"],
            v1_result=brand_result["findings"].get("diagnosticV1"),
        )
        if not result.valid:
            logger.warning("canonical_invalid", errors=result.errors)
    """
    return enforce(
        lab_type,
        canonical,
        v1_result,
        llm_result,
        diagnostic_input=diagnostic_input,
    )


__all__ = ["enforce", "ensure_canonical"]
