"""Read-only contract validation.

``validate`` answers "would this canonical object pass as-is?" without
synthesizing or mutating anything. Lab builders use it as a gate before
writing into the context graph; the enforcer is the repair path.
"""

from __future__ import annotations

from hive_canon.contract.models import FieldSpec, ValidationReport
from hive_canon.contract.registry import get_spec
from hive_canon.contract.values import get_nested, is_empty, meets_spec
from hive_canon.core.errors import ValidationError
from hive_canon.core.jsontypes import MISSING, JsonObject


def _constraint(spec: FieldSpec) -> str:
    """Short description of what ``spec`` demands, e.g. ``string, min_length=15``."""
    parts = [spec.type.value]
    if spec.min_length is not None:
        parts.append(f"min_length={spec.min_length}")
    if spec.min_items is not None:
        parts.append(f"min_items={spec.min_items}")
    return ", ".join(parts)


def validate(entity_type: str, canonical: JsonObject) -> ValidationReport:
    """Check every required field of the Lab's contract against ``canonical``."""
    spec = get_spec(entity_type)
    if spec is None:
        return ValidationReport(valid=False, errors=[f"Unknown lab type: {entity_type}"])

    violations: list[ValidationError] = []

    for field_spec in spec.required_fields:
        value = get_nested(canonical, field_spec.path)
        if meets_spec(value, field_spec):
            continue

        if value is MISSING:
            message = f"Missing required field: {field_spec.path}"
        elif is_empty(value):
            message = f"Empty value for required field: {field_spec.path}"
        else:
            message = f"Invalid value for {field_spec.path}: does not meet spec"
        violations.append(
            ValidationError(
                message,
                field=field_spec.path,
                value=None if value is MISSING else value,
                constraint=_constraint(field_spec),
            ).with_context(lab_type=entity_type)
        )

    return ValidationReport(
        valid=not violations,
        errors=[v.message for v in violations],
        missing_fields=[v.field for v in violations],
        violations=violations,
    )


# Name used by the Lab builders
validate_canonical = validate


__all__ = ["validate", "validate_canonical"]
