"""
Structured error types for hive-canon.

Provides a small hierarchy of typed errors with metadata for categorisation,
reporting, and root cause analysis through error chaining.

Contract enforcement itself never raises for missing or malformed data: it
reports degradation through ``EnforcementResult``. The errors here cover the
edges of the library: lookups of unregistered Lab types through the
``Result`` API, unreadable JSON handed to the CLI, and bad configuration.

Manifesto:
    - **Typed Error Hierarchy:** Different error types for different causes
    - **Rich Context:** Errors carry metadata for logging and operator output
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                       CanonError                          │
        │            (category, context, cause)                     │
        ├──────────────────────────────────────────────────────────┤
        │                                                           │
        │  ValidationError   ConfigError    ParseError  StorageError │
        │  (VALIDATION)      (CONFIG)       (PARSE)     (STORAGE)    │
        │                        │                                  │
        │                UnknownEntityTypeError                     │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> from hive_canon.core.errors import UnknownEntityTypeError
    >>> err = UnknownEntityTypeError("podcast")
    >>> err.category.value
    'CONFIG'
    >>> err.to_dict()["entity_type"]
    'podcast'

Tags:
    errors, exceptions, error-handling, hive-canon

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    - **VALIDATION:** A canonical object does not satisfy its contract
    - **CONFIG:** Caller misconfiguration (unknown Lab type, bad settings)
    - **PARSE:** Input could not be decoded (invalid JSON, wrong top-level shape)
    - **STORAGE:** Output could not be written (missing directory, permissions)
    - **INTERNAL / UNKNOWN:** Everything else

    Tags:
        error-category, enum, hive-canon
    """

    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    PARSE = "PARSE"
    STORAGE = "STORAGE"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Attributes:
        lab_type: Lab type the failing operation was working on
        field_path: Dot-separated canonical path involved, if any
        source: Where the input came from (file path, caller name)
        metadata: Additional key-value pairs
    """

    lab_type: str | None = None
    field_path: str | None = None
    source: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["lab_type", "field_path", "source"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class CanonError(Exception):
    """
    Base class for all hive-canon errors.

    Carries a category, an ``ErrorContext`` and an optional chained cause.
    Subclasses set ``default_category``.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CanonError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ParseError("Bad JSON").with_context(source="findings.json")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(CanonError):
    """
    A canonical value does not satisfy its field contract.

    Never retryable: the data must be fixed or re-synthesized.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.constraint = constraint
        if field is not None:
            self.context.field_path = field

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.constraint:
            result["constraint"] = self.constraint
        return result


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(CanonError):
    """Configuration or caller setup error."""

    default_category = ErrorCategory.CONFIG


class UnknownEntityTypeError(ConfigError):
    """The requested Lab type has no registered field contract."""

    def __init__(self, entity_type: str, message: str | None = None, **kwargs: Any):
        super().__init__(message or f"Unknown lab type: {entity_type}", **kwargs)
        self.entity_type = entity_type
        self.context.lab_type = entity_type

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["entity_type"] = self.entity_type
        return result


# =============================================================================
# PARSE ERRORS
# =============================================================================


class ParseError(CanonError):
    """Input could not be decoded into a canonical JSON object."""

    default_category = ErrorCategory.PARSE


# =============================================================================
# STORAGE ERRORS
# =============================================================================


class StorageError(CanonError):
    """Cleaned output could not be written (disk, permissions)."""

    default_category = ErrorCategory.STORAGE


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, CanonError):
        return error.category
    if isinstance(error, ValueError):
        return ErrorCategory.PARSE
    if isinstance(error, (KeyError, AttributeError)):
        return ErrorCategory.CONFIG
    if isinstance(error, OSError):
        return ErrorCategory.STORAGE
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "CanonError",
    "ValidationError",
    "ConfigError",
    "UnknownEntityTypeError",
    "ParseError",
    "StorageError",
    "categorize_error",
]
