"""Canonical field contracts for diagnostic Lab outputs.

Module Map
----------
    models.py         FieldSpec, EntitySpec, EnforcementResult, ValidationReport
    registry.py       Per-Lab contracts (CANONICAL_REGISTRY) and lookups
    values.py         Path access, emptiness and spec predicates, strip pass
    synthesizers.py   Per-Lab fallback synthesis from legacy results
    enforcer.py       enforce / ensure_canonical
    validator.py      validate / validate_canonical
"""

from hive_canon.contract.enforcer import enforce, ensure_canonical
from hive_canon.contract.models import (
    Criticality,
    EnforcementResult,
    EntitySpec,
    FieldSpec,
    FieldType,
    ValidationReport,
)
from hive_canon.contract.registry import (
    CANONICAL_REGISTRY,
    get_required_paths,
    get_spec,
    is_registered,
    list_entity_types,
    lookup_spec,
)
from hive_canon.contract.synthesizers import get_synthesizer
from hive_canon.contract.validator import validate, validate_canonical
from hive_canon.contract.values import (
    get_nested,
    is_empty,
    meets_spec,
    set_nested,
    strip_empty,
    would_be_stripped,
)

__all__ = [
    "enforce",
    "ensure_canonical",
    "validate",
    "validate_canonical",
    "Criticality",
    "EnforcementResult",
    "EntitySpec",
    "FieldSpec",
    "FieldType",
    "ValidationReport",
    "CANONICAL_REGISTRY",
    "get_required_paths",
    "get_spec",
    "is_registered",
    "list_entity_types",
    "lookup_spec",
    "get_synthesizer",
    "get_nested",
    "is_empty",
    "meets_spec",
    "set_nested",
    "strip_empty",
    "would_be_stripped",
]
