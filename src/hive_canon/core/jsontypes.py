"""JSON value types, the MISSING sentinel, and JSON object loading.

Canonical objects are plain ``dict``/``list``/scalar trees as produced by
``json.loads``. ``JsonValue`` names that shape for type hints, and ``MISSING``
stands for "no value at this path" so it can never be confused with an
explicit JSON ``null`` (``None``).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Final, Union

from hive_canon.core.errors import ErrorContext, ParseError
from hive_canon.core.result import Err, Ok, Result, try_result

JsonScalar = Union[str, int, float, bool, None]
JsonValue = Union[JsonScalar, list["JsonValue"], dict[str, "JsonValue"]]
JsonObject = dict[str, JsonValue]


class _Missing:
    """Type of the ``MISSING`` singleton."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict) -> _Missing:
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


def load_json_object(path: str | Path) -> Result[JsonObject]:
    """Read ``path`` and return its top-level JSON object.

    Returns ``Err(ParseError)`` when the file cannot be read or decoded as
    UTF-8, is not valid JSON, or does not hold an object at the top level.
    """
    source = str(path)
    match try_result(lambda: Path(path).read_text(encoding="utf-8")):
        case Ok(text):
            return parse_json_object(text, source=source)
        case Err(error):
            reason = getattr(error, "strerror", None) or error
            return Err(ParseError(f"Cannot read {source}: {reason}", cause=error,
                                  context=ErrorContext(source=source)))


def parse_json_object(text: str, *, source: str = "<string>") -> Result[JsonObject]:
    """Decode ``text`` and require a JSON object at the top level."""
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ParseError(f"Invalid JSON in {source}: {e.msg} (line {e.lineno})", cause=e,
                              context=ErrorContext(source=source)))
    if not isinstance(data, dict):
        return Err(ParseError(
            f"Expected a JSON object in {source}, got {type(data).__name__}",
            context=ErrorContext(source=source),
        ))
    return Ok(data)


__all__ = [
    "JsonScalar",
    "JsonValue",
    "JsonObject",
    "MISSING",
    "load_json_object",
    "parse_json_object",
]
