"""
Exception hierarchy for logforge.

Defines all exception types raised by builders, registries and the service
container, with error codes and wrapped causes.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Any, Dict, Optional


class LogforgeError(Exception):
    """
    Base exception for all logforge errors.

    All logforge exceptions inherit from this class. Provides standard
    error attributes: message, error_code, details, original_exception.

    Attributes:
        message: Human-readable error message
        error_code: Programmatic error code (e.g., "CFG_001")
        details: Additional context (dict)
        original_exception: Wrapped exception (if any)

    Example:
        raise LogforgeError(
            message="Operation failed",
            error_code="ERR_UNKNOWN",
            details={"builder": "line"},
        )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Initialize LogforgeError.

        Args:
            message: Error message
            error_code: Error code for programmatic handling
            details: Additional context dict
            original_exception: Original wrapped exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.original_exception = original_exception

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with all error information
        """
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "original_error": str(self.original_exception) if self.original_exception else None,
        }


class ConfigurationError(LogforgeError):
    """
    Raised when builder options are shaped incorrectly.

    Error Codes:
        CFG_001: Missing required key
        CFG_002: Options (or a nested value) has the wrong shape
        CFG_003: Value rejected by the options schema

    Always detected before any product is constructed.
    """

    def __init__(self, message: str, error_code: str = "CFG_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)


class ServiceNotFoundError(LogforgeError):
    """
    Raised when a referenced service or builder does not exist.

    Error Codes:
        SVC_001: Name not known to the container or registry
    """

    def __init__(self, message: str, error_code: str = "SVC_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)


class ServiceNotCreatedError(LogforgeError):
    """
    Raised when a referenced service exists but could not be produced.

    Error Codes:
        SVC_002: Retrieval or construction of the service failed

    The underlying failure is kept in ``original_exception`` and chained
    as ``__cause__`` by the raising code.
    """

    def __init__(self, message: str, error_code: str = "SVC_002", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
