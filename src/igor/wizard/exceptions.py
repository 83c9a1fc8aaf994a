"""
Igor Wizard Exceptions

Custom exception types for better error handling and remediation suggestions.
"""

from typing import Optional


class IgorError(Exception):
    """Base exception for all Igor errors."""

    def __init__(
        self,
        message: str,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        """Initialize the error.

        Args:
            message: Human-readable error message
            remediation: Suggested fix for the user
            details: Technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.remediation = remediation
        self.details = details

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.remediation:
            parts.append(f"To fix: {self.remediation}")
        return "\n".join(parts)


class ConfigError(IgorError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.config_key = config_key
        if not remediation and config_key:
            remediation = f"Check the value of '{config_key}' in your igor config file or environment"
        super().__init__(message, remediation, details)


class DetectionError(IgorError):
    """Hardware or system detection errors."""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.component = component
        if not remediation and component:
            remediation = f"Make sure {component} information is readable (try running with sudo)"
        super().__init__(message, remediation, details)


class InstallationError(IgorError):
    """Errors raised while an installation step runs."""

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.step = step
        if not remediation and step:
            remediation = f"Review the installation log for step '{step}' and retry from the Error screen"
        super().__init__(message, remediation, details)


class ScriptError(IgorError):
    """Errors in scripted session files."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        index: Optional[int] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.path = path
        self.index = index
        if not remediation and path:
            where = f" (event #{index})" if index is not None else ""
            remediation = f"Fix the session script at {path}{where}"
        super().__init__(message, remediation, details)


class ValidationError(IgorError):
    """Input validation errors."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        expected_format: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.field = field
        self.expected_format = expected_format
        if not remediation and field and expected_format:
            remediation = f"The {field} should be in format: {expected_format}"
        super().__init__(message, remediation, details)


# Error code mapping for CLI exit codes
ERROR_CODES = {
    ConfigError: 10,
    DetectionError: 11,
    InstallationError: 12,
    ScriptError: 13,
    ValidationError: 14,
    IgorError: 1,
}


def get_error_code(error: Exception) -> int:
    """Get the exit code for an error type."""
    for error_type, code in ERROR_CODES.items():
        if isinstance(error, error_type):
            return code
    return 1
