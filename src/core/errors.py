"""
Centralized error taxonomy for the validation field widgets.

This module provides the error categories and the custom exception hierarchy
used throughout the engine and widget layers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Error type categories for consistent error handling."""

    CONTRACT = "contract"
    CONFIG = "config"
    SYSTEM = "system"


class ErrorCode(Enum):
    """Specific error codes for common scenarios."""

    # Contract violations
    UNSUPPORTED_EDGE = "UNSUPPORTED_EDGE"

    # Configuration errors
    INVALID_TRIGGER = "INVALID_TRIGGER"
    CONFIG_INVALID = "CONFIG_INVALID"

    # Validation errors
    PREDICATE_FAILED = "PREDICATE_FAILED"

    # Generic
    UNKNOWN = "UNKNOWN"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class BaseAppError(Exception):
    """
    Base application error with structured metadata.

    Root of all custom errors raised by this package.
    """

    type: ErrorType
    code: ErrorCode
    user_message: str
    technical_message: str | None = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return user-friendly error message."""
        return self.user_message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"type={self.type.value}, "
            f"code={self.code.value}, "
            f"message='{self.user_message}'"
            f")"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "type": self.type.value,
            "code": self.code.value,
            "user_message": self.user_message,
            "technical_message": self.technical_message,
            "severity": self.severity.value,
            "context": self.context,
        }


class UnsupportedEdgeError(BaseAppError):
    """
    An edge tag outside TOP/BOTTOM/LEFT/RIGHT reached frame computation.

    This is a programming error in the caller and is never recovered from.
    """

    def __init__(self, edge: object):
        super().__init__(
            type=ErrorType.CONTRACT,
            code=ErrorCode.UNSUPPORTED_EDGE,
            user_message="That border direction is not supported",
            technical_message=f"Cannot compute a border frame for edge {edge!r}",
            severity=ErrorSeverity.CRITICAL,
            context={"edge": repr(edge)},
        )


class ConfigError(BaseAppError):
    """Configuration related errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.CONFIG,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            context=context or {},
        )


class TriggerConfigurationError(ConfigError):
    """A trigger was registered with missing or unusable arguments."""

    def __init__(self, user_message: str, technical_message: str | None = None):
        super().__init__(
            code=ErrorCode.INVALID_TRIGGER,
            user_message=user_message,
            technical_message=technical_message,
        )


class SystemError(BaseAppError):
    """Unexpected runtime errors, including failing predicates."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.SYSTEM,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            context=context or {},
        )


def from_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """
    Convert any exception to a BaseAppError.

    Custom errors are returned unchanged. Anything else is wrapped as a
    SystemError; a ``predicate`` key in ``context`` marks it as a failed
    trigger predicate.

    Args:
        exc: The exception to convert
        context: Optional context information

    Returns:
        BaseAppError instance
    """
    context = context or {}

    if isinstance(exc, BaseAppError):
        return exc

    exc_type = type(exc)
    if "predicate" in context:
        return SystemError(
            code=ErrorCode.PREDICATE_FAILED,
            user_message="A validation rule failed to run",
            technical_message=f"{exc_type.__name__}: {exc}",
            context=context,
        )

    logger.warning(f"Unknown exception type: {exc_type.__name__}: {exc}")
    return SystemError(
        code=ErrorCode.UNKNOWN,
        user_message="An unexpected error occurred",
        technical_message=f"{exc_type.__name__}: {exc}",
        context=context,
    )
