"""Exception hierarchy for TuyaTray

Structured errors carrying a category, a severity and context
information for logging.
"""

import time
from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """Error severity levels"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories"""

    CONFIGURATION = "configuration"
    NETWORK = "network"
    CLOUD_API = "cloud_api"
    UI = "ui"
    SYSTEM = "system"


class TuyaTrayError(Exception):
    """Base exception for TuyaTray

    Provides:
    - Error codes for programmatic handling
    - Context information for debugging
    - Severity levels
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = time.time()
        self.error_code = error_code or self._generate_error_code()

        if "component" not in self.context:
            self.context["component"] = self.__class__.__name__

    def _generate_error_code(self) -> str:
        """Generate a default error code based on class name"""
        return f"{self.__class__.__name__.upper()}_{int(self.timestamp)}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "context": self.context,
            "timestamp": self.timestamp,
            "exception_type": self.__class__.__name__,
            "original_exception": str(self.original_exception)
            if self.original_exception
            else None,
        }


class ConfigurationError(TuyaTrayError):
    """Configuration file or credential problems"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=kwargs.pop("severity", ErrorSeverity.HIGH),
            **kwargs,
        )


class CloudAPIError(TuyaTrayError):
    """Tuya cloud request failed or returned an unsuccessful response"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=kwargs.pop("category", ErrorCategory.CLOUD_API),
            severity=kwargs.pop("severity", ErrorSeverity.MEDIUM),
            **kwargs,
        )

    @property
    def api_code(self) -> Optional[Any]:
        """Vendor error code, if the API returned one"""
        return self.context.get("api_code")


__all__ = [
    "ErrorSeverity",
    "ErrorCategory",
    "TuyaTrayError",
    "ConfigurationError",
    "CloudAPIError",
]
