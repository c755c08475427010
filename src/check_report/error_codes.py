"""Structured error codes for machine-readable error handling.

Error codes follow the format: {DOMAIN}-{CATEGORY}-{NUMBER}

Error Domains:
    AGG - Result aggregation errors
    CFG - Configuration errors
    RES - Results document errors

Usage:
    from check_report.error_codes import ErrorCode

    logger.error(
        "unregistered_application",
        error_code=ErrorCode.AGG_APP_UNREGISTERED.value,
        application="my-app",
    )
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes for machine-readable handling.

    All error codes inherit from str for JSON serialization compatibility.
    """

    # =========================================================================
    # Aggregation Errors (AGG-xxx-xxx)
    # =========================================================================
    AGG_APP_UNREGISTERED = "AGG-APP-001"
    """Result recorded for an application that was never registered."""

    AGG_PRODUCER_FAILED = "AGG-PRODUCER-001"
    """A check producer raised while collecting results for an application."""

    # =========================================================================
    # Configuration Errors (CFG-xxx-xxx)
    # =========================================================================
    CFG_LOAD_FAILED = "CFG-LOAD-001"
    """Configuration file could not be read or parsed."""

    CFG_INVALID_VALUE = "CFG-VALUE-001"
    """Configuration value failed validation."""

    # =========================================================================
    # Results Document Errors (RES-xxx-xxx)
    # =========================================================================
    RES_PARSE_FAILED = "RES-PARSE-001"
    """Results document is not valid YAML/JSON."""

    RES_SCHEMA_INVALID = "RES-SCHEMA-001"
    """Results document does not match the expected shape."""

    @property
    def domain(self) -> str:
        """Get the error domain (e.g., 'AGG', 'CFG')."""
        return self.value.split("-")[0]

    @property
    def category(self) -> str:
        """Get the error category (e.g., 'APP', 'LOAD')."""
        parts = self.value.split("-")
        return parts[1] if len(parts) > 1 else ""
