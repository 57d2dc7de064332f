"""
Data model for canonical field contracts.

A Lab's contract is an ``EntitySpec``: an ordered tuple of ``FieldSpec``
leaves, each addressed by a dot-separated path into the canonical object.
Enforcement and validation runs report back through ``EnforcementResult`` and
``ValidationReport``, both of which serialise to the camelCase wire shape the
rest of the platform persists.

Manifesto:
    - **Specs are data:** Contracts are frozen dataclasses declared once
    - **Explicit criticality:** Whether an unfilled field is an error is a
      declared attribute, derived from type and min_length when not given
    - **Plain JSON out:** Results serialise without custom encoders

Examples:
    >>> spec = FieldSpec("positioning.statement", "Positioning Statement",
    ...                  FieldType.STRING, required=True, min_length=15)
    >>> spec.criticality
    <Criticality.CRITICAL: 'critical'>
    >>> FieldSpec("topIssues", "Top Issues", FieldType.ARRAY, required=True).is_critical
    False

Tags:
    contract, field-spec, dataclass, hive-canon
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from hive_canon.core.errors import ValidationError
from hive_canon.core.jsontypes import JsonObject


class FieldType(str, Enum):
    """JSON shape a canonical leaf must have."""

    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    NUMBER = "number"


class Criticality(str, Enum):
    """
    How severe it is when a required field cannot be filled.

    - **CRITICAL:** Enforcement nulls the field and reports an error
    - **STANDARD:** Enforcement nulls the field silently
    """

    CRITICAL = "critical"
    STANDARD = "standard"


@dataclass(frozen=True)
class FieldSpec:
    """
    Contract for one leaf value of a canonical object.

    Attributes:
        path: Dot-separated address within the canonical object
        label: Display name
        type: Required JSON shape
        required: If True the field must end up present, as a value or null
        min_length: Minimum characters for a string to count as meaningful
        min_items: Minimum elements for an array to count as meaningful
        criticality: Declared criticality; derived when omitted
    """

    path: str
    label: str
    type: FieldType
    required: bool = False
    min_length: int | None = None
    min_items: int | None = None
    criticality: Criticality | None = None

    def __post_init__(self) -> None:
        if not self.path or any(not part for part in self.path.split(".")):
            raise ValueError(f"Invalid field path: {self.path!r}")
        if self.criticality is None:
            object.__setattr__(self, "criticality", self._derived_criticality())

    def _derived_criticality(self) -> Criticality:
        # Prose fields are the ones worth flagging when they cannot be filled.
        if self.required and self.type is FieldType.STRING and (self.min_length or 0) > 0:
            return Criticality.CRITICAL
        return Criticality.STANDARD

    @property
    def is_critical(self) -> bool:
        return self.required and self.criticality is Criticality.CRITICAL

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "path": self.path,
            "label": self.label,
            "type": self.type.value,
            "required": self.required,
            "criticality": self.criticality.value,
        }
        if self.min_length is not None:
            result["minLength"] = self.min_length
        if self.min_items is not None:
            result["minItems"] = self.min_items
        return result


@dataclass(frozen=True)
class EntitySpec:
    """
    Field contract for one Lab type.

    Attributes:
        entity_type: Lab type identifier ("brand", "website", ...)
        label: Human label ("Brand Lab")
        context_domain: Context-graph domain the confirmed output feeds
        qbr_domain: QBR narrative domain the confirmed output feeds
        fields: Field specs in registration order
    """

    entity_type: str
    label: str
    context_domain: str
    qbr_domain: str
    fields: tuple[FieldSpec, ...]

    def __post_init__(self) -> None:
        paths = [f.path for f in self.fields]
        duplicates = sorted({p for p in paths if paths.count(p) > 1})
        if duplicates:
            raise ValueError(f"Duplicate field paths in {self.entity_type}: {duplicates}")

    @property
    def required_fields(self) -> list[FieldSpec]:
        return [f for f in self.fields if f.required]

    @property
    def required_paths(self) -> list[str]:
        return [f.path for f in self.fields if f.required]

    def field(self, path: str) -> FieldSpec | None:
        """Return the spec registered at ``path``, if any."""
        for spec in self.fields:
            if spec.path == path:
                return spec
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "labType": self.entity_type,
            "label": self.label,
            "contextDomain": self.context_domain,
            "qbrDomain": self.qbr_domain,
            "fields": [f.to_dict() for f in self.fields],
        }


@dataclass
class EnforcementResult:
    """Outcome of one ``enforce`` call."""

    canonical: JsonObject
    synthesized_fields: list[str] = field(default_factory=list)
    null_fields: list[str] = field(default_factory=list)
    valid: bool = True
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "canonical": self.canonical,
            "synthesizedFields": list(self.synthesized_fields),
            "nullFields": list(self.null_fields),
            "valid": self.valid,
            "errors": list(self.errors),
        }


@dataclass
class ValidationReport:
    """Outcome of one read-only ``validate`` call.

    ``violations`` carries one ``ValidationError`` per failing field with the
    offending value and constraint; ``errors`` holds their messages.
    """

    valid: bool
    errors: list[str] = field(default_factory=list)
    missing_fields: list[str] = field(default_factory=list)
    violations: list[ValidationError] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "missingFields": list(self.missing_fields),
        }


__all__ = [
    "FieldType",
    "Criticality",
    "FieldSpec",
    "EntitySpec",
    "EnforcementResult",
    "ValidationReport",
]
