"""
Value inspection helpers for untyped canonical objects.

Two predicates live here and they answer different questions:

- ``is_empty`` asks "is there anything here?" and treats ``None`` as empty.
- ``meets_spec`` asks "does this satisfy the field contract?" and accepts
  ``None`` only for optional fields.

An explicit ``None`` is the sanctioned "no data" placeholder for required
fields, so it is empty but never stripped (see ``would_be_stripped``).

Examples:
    >>> obj = {"positioning": {"statement": "Growth-stage B2B SaaS"}}
    >>> get_nested(obj, "positioning.statement")
    'Growth-stage B2B SaaS'
    >>> get_nested(obj, "positioning.statement.extra") is MISSING
    True
    >>> strip_empty({"a": None, "b": {"c": None}, "d": {}})
    {'a': None, 'b': {'c': None}}

Tags:
    json-path, validation, normalisation, hive-canon
"""

from __future__ import annotations

import copy
import math
from typing import Any

from hive_canon.contract.models import FieldSpec, FieldType
from hive_canon.core.jsontypes import MISSING, JsonObject


def get_nested(obj: Any, path: str) -> Any:
    """Read the value at a dot-separated ``path``; ``MISSING`` if unreachable."""
    current: Any = obj
    for part in path.split("."):
        if not isinstance(current, dict):
            return MISSING
        if part not in current:
            return MISSING
        current = current[part]
    return current


def set_nested(obj: JsonObject, path: str, value: Any) -> None:
    """Write ``value`` at ``path``, replacing non-mapping intermediates with ``{}``."""
    parts = path.split(".")
    current = obj
    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[parts[-1]] = value


def is_empty(value: Any) -> bool:
    """True for ``None``, ``MISSING``, ``""``, ``[]`` and ``{}``."""
    if value is None or value is MISSING:
        return True
    if isinstance(value, (str, list, dict)):
        return len(value) == 0
    return False


def would_be_stripped(value: Any) -> bool:
    """True if ``strip_empty`` would drop ``value``; explicit ``None`` survives."""
    return is_empty(value) and value is not None


def meets_spec(value: Any, spec: FieldSpec) -> bool:
    """Check ``value`` against one field contract."""
    if value is None:
        return not spec.required
    if value is MISSING:
        return False

    if spec.type is FieldType.STRING:
        if not isinstance(value, str):
            return False
        return not spec.min_length or len(value) >= spec.min_length

    if spec.type is FieldType.ARRAY:
        if not isinstance(value, list):
            return False
        return spec.min_items is None or len(value) >= spec.min_items

    if spec.type is FieldType.OBJECT:
        return isinstance(value, dict) and len(value) > 0

    if spec.type is FieldType.NUMBER:
        # bool is an int subclass but never a JSON number
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return math.isfinite(value)

    return True


def strip_empty(obj: JsonObject) -> JsonObject:
    """
    Rebuild ``obj`` without vacuous values.

    Drops ``MISSING``, ``""``, ``[]`` and mappings that are empty once their
    own contents are stripped. Explicit ``None`` is kept at any depth. Arrays
    are kept as-is; their elements are not inspected.
    """
    result: JsonObject = {}
    for key, value in obj.items():
        if value is None:
            result[key] = None
        elif value is MISSING or value == "" or (isinstance(value, list) and not value):
            continue
        elif isinstance(value, dict):
            stripped = strip_empty(value)
            if stripped:
                result[key] = stripped
        else:
            result[key] = value
    return result


def settle(value: Any) -> Any:
    """Return ``value`` as it would look after ``strip_empty``.

    Mappings are stripped; ``""`` and ``[]`` become ``MISSING``; anything
    else is returned unchanged.
    """
    if isinstance(value, dict):
        stripped = strip_empty(value)
        return stripped if stripped else MISSING
    if would_be_stripped(value):
        return MISSING
    return value


def deep_copy_json(obj: JsonObject | None) -> JsonObject:
    """Detached copy of a JSON-compatible mapping; anything else becomes ``{}``."""
    if not isinstance(obj, dict):
        return {}
    return copy.deepcopy(obj)


__all__ = [
    "get_nested",
    "set_nested",
    "is_empty",
    "would_be_stripped",
    "meets_spec",
    "strip_empty",
    "settle",
    "deep_copy_json",
]
