"""Centralized exception hierarchy for check-report.

Exception Hierarchy:
    CheckReportError (base)
     ConfigurationError - Settings loading/validation errors
     ResultsFileError - Results document loading errors
     AggregationError - Result aggregation errors
        UnregisteredApplicationError - Result recorded for an unknown application

Usage Examples:
    try:
        aggregate.record_result("my-app", result)
    except UnregisteredApplicationError as e:
        logger.error("record_failed", **e.to_dict())
"""

from typing import Any

from .error_codes import ErrorCode


class CheckReportError(Exception):
    """Base exception for all check-report errors.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
        error_code: Structured error code for machine-readable handling
        context: Additional context for debugging (e.g., application names)
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.message = message
        self.suggestion = suggestion
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with error code and suggestion if available."""
        parts = []
        if self.error_code:
            parts.append(f"[{self.error_code}] {self.message}")
        else:
            parts.append(self.message)
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging.

        Returns:
            Dictionary with error details
        """
        return {
            "message": self.message,
            "error_code": self.error_code,
            "suggestion": self.suggestion,
            "context": self.context,
            "type": type(self).__name__,
        }


class ConfigurationError(CheckReportError):
    """Configuration loading or validation errors.

    Raised when:
    - Config file is malformed
    - Configuration values fail validation
    """


class ResultsFileError(CheckReportError):
    """Results document could not be loaded.

    Raised when:
    - The file is missing or unreadable
    - The content is not valid YAML/JSON
    - The content does not describe applications and their check results
    """


class AggregationError(CheckReportError):
    """Errors raised by the result aggregate."""


class UnregisteredApplicationError(AggregationError):
    """A result was recorded for an application that was never registered."""

    def __init__(self, application: str):
        self.application = application
        super().__init__(
            f"Application '{application}' is not registered",
            suggestion="Call register_application() before recording results",
            error_code=ErrorCode.AGG_APP_UNREGISTERED.value,
            context={"application": application},
        )
