"""
Error Taxonomy

Standard error codes used across the foundation toolkit.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Transport Errors
    HTTP_TRANSPORT_ERROR = "HTTP_TRANSPORT_ERROR"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"

    # Validation Errors
    VALIDATION_FAILED = "VALIDATION_FAILED"
    RULE_DEFINITION_ERROR = "RULE_DEFINITION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    NOT_CONFIGURED = "NOT_CONFIGURED"

    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class FoundationError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors between layers without exceptions,
    enabling structured error handling and serialization.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.VALIDATION_FAILED],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "FoundationException":
        """Convert this error model to a raised exception."""
        return FoundationException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class FoundationException(Exception):
    """
    Base exception for all toolkit errors.

    Carries structured error information and can be converted
    to/from FoundationError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "FOUNDATION_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> FoundationError:
        """Convert this exception to a FoundationError model."""
        return FoundationError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class HttpTransportException(FoundationException):
    """Raised when an HTTP call could not be completed at the transport level."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if url:
            full_details["url"] = url
        super().__init__(
            message=message,
            code=ErrorCodes.HTTP_TRANSPORT_ERROR,
            details=full_details,
            retryable=True,
        )


class ValidationFailedException(FoundationException):
    """Raised when input data does not satisfy its validation rules."""

    def __init__(
        self,
        errors: dict[str, list[str]],
        message: str = "The given data was invalid",
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.VALIDATION_FAILED,
            details={"errors": errors},
            retryable=False,
        )
        self.errors = errors


class RuleDefinitionException(FoundationException):
    """Raised when a validation rule string cannot be parsed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        rule: str | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if rule:
            details["rule"] = rule
        super().__init__(
            message=message,
            code=ErrorCodes.RULE_DEFINITION_ERROR,
            details=details,
            retryable=False,
        )


class ConfigurationException(FoundationException):
    """Raised when runtime configuration is missing or malformed."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=details,
            retryable=False,
        )
