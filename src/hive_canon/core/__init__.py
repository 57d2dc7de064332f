"""hive-canon core -- errors, results, logging, settings and JSON types.

Module Map
----------
    errors.py      Structured error hierarchy (CanonError, UnknownEntityTypeError)
    result.py      Result[T] envelope (Ok / Err / from_optional)
    jsontypes.py   JsonValue alias, MISSING sentinel, JSON object loading
    logging.py     Structured logging (structlog)
    settings.py    CanonSettings (pydantic-settings)
"""

from hive_canon.core.errors import (
    CanonError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    ParseError,
    UnknownEntityTypeError,
    ValidationError,
)
from hive_canon.core.jsontypes import MISSING, JsonObject, JsonValue
from hive_canon.core.result import Err, Ok, Result

__all__ = [
    "CanonError",
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "ParseError",
    "UnknownEntityTypeError",
    "ValidationError",
    "MISSING",
    "JsonObject",
    "JsonValue",
    "Err",
    "Ok",
    "Result",
]
