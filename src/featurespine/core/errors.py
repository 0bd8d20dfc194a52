"""
Structured error types for featurespine.

Provides a small hierarchy of typed errors carrying a category, structured
context and an optional chained cause. Adapters raise these for problems they
detect themselves (unknown adapter names, malformed gates or keys). Backends
report their own read or write failures as ``StorageError``. Failures coming
from a wrapped backend are never converted: the memoizing adapter lets them
propagate untouched.

Manifesto:
    - **Typed Error Hierarchy:** Different error types for different concerns
    - **Rich Context:** Errors carry adapter, feature key and gate metadata
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                    FeatureSpineError                      │
        │              (category, context, cause)                   │
        ├──────────────────────────────────────────────────────────┤
        │                                                           │
        │  ConfigError        ValidationError       StorageError    │
        │  (CONFIG)           (VALIDATION)          (STORAGE)       │
        │       │                   │                               │
        │  InvalidConfigError InvalidGateError                      │
        │                     InvalidFeatureKeyError                │
        └──────────────────────────────────────────────────────────┘

Examples:
    Adding context to an error:

    >>> error = InvalidGateError("Unknown gate: colour")
    >>> error.with_context(adapter="memory", feature_key="search")
    InvalidGateError('Unknown gate: colour', category=VALIDATION)
    >>> error.context.feature_key
    'search'

    Chaining errors for root cause:

    >>> try:
    ...     int("fifty")
    ... except ValueError as e:
    ...     error = ValidationError("Percentage must be an integer", cause=e)
    >>> error.cause
    ValueError("invalid literal for int() with base 10: 'fifty'")

Guardrails:
    ❌ DON'T: Wrap backend exceptions inside the memoizing adapter
    ✅ DO: Let backend failures propagate unmodified

    ❌ DON'T: Swallow the original exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, featurespine
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    CONFIG = "CONFIG"
    VALIDATION = "VALIDATION"
    STORAGE = "STORAGE"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        adapter: Name of the adapter that raised the error
        feature_key: Feature the operation was acting on
        gate: Gate key involved, if any
        metadata: Additional key-value pairs
    """

    adapter: str | None = None
    feature_key: str | None = None
    gate: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["adapter", "feature_key", "gate"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class FeatureSpineError(Exception):
    """
    Base exception for all featurespine errors.

    Subclasses set ``default_category`` to classify themselves; callers can
    still override the category per instance.

    Examples:
        >>> error = FeatureSpineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["error_type"]
        'FeatureSpineError'
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

    def with_context(self, **kwargs: Any) -> FeatureSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ConfigError("Unknown adapter").with_context(adapter="redis")
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
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(FeatureSpineError):
    """Configuration is missing, unknown or invalid."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """A configuration value failed validation."""


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(FeatureSpineError):
    """Input handed to an adapter is malformed."""

    default_category = ErrorCategory.VALIDATION


class InvalidGateError(ValidationError):
    """Gate is not one of the known gate types."""


class InvalidFeatureKeyError(ValidationError):
    """Feature key is empty or not a string."""


# =============================================================================
# STORAGE ERRORS
# =============================================================================


class StorageError(FeatureSpineError):
    """A backend failed to read or write feature state."""

    default_category = ErrorCategory.STORAGE


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "FeatureSpineError",
    "ConfigError",
    "InvalidConfigError",
    "ValidationError",
    "InvalidGateError",
    "InvalidFeatureKeyError",
    "StorageError",
]
