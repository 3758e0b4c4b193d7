"""
devsetup Installer Exceptions

Custom exception types for better error handling and remediation suggestions.
"""

from typing import Optional, List


class DevSetupError(Exception):
    """Base exception for all devsetup errors."""

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


class ConfigError(DevSetupError):
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
            remediation = f"Check the '{config_key}' entry in your devsetup config.yaml"
        super().__init__(message, remediation, details)


class NetworkError(DevSetupError):
    """Network-related errors (timeouts, connection issues)."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.endpoint = endpoint
        if not remediation:
            remediation = "Check your internet connection and try again. If the issue persists, the service may be temporarily unavailable."
        super().__init__(message, remediation, details)


class DownloadError(NetworkError):
    """A release archive, install script or signing key could not be fetched."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.url = url
        super().__init__(message, endpoint=url, remediation=remediation, details=details)


class CommandError(DevSetupError):
    """An external command exited non-zero, timed out or was not found."""

    def __init__(
        self,
        message: str,
        argv: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
        remediation: Optional[str] = None
    ):
        self.argv = argv or []
        self.returncode = returncode
        self.stderr = stderr or ""
        details = self.stderr.strip() or None
        if details and len(details) > 500:
            details = details[-500:]
        super().__init__(message, remediation, details)


class StepError(DevSetupError):
    """Installation step errors."""

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.step = step
        if not remediation and step:
            remediation = f"Run 'devsetup doctor' to inspect the host, then re-run 'devsetup run --yes --accept {step}'"
        super().__init__(message, remediation, details)


class FatalPrerequisiteError(DevSetupError):
    """A mandatory step failed; nothing after it can run."""

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.step = step
        if not remediation:
            remediation = "Make sure 'sudo apt update' works on this machine (network, mirrors, dpkg lock) and try again"
        super().__init__(message, remediation, details)


# Error code mapping for CLI exit codes
ERROR_CODES = {
    ConfigError: 10,
    DownloadError: 12,
    NetworkError: 13,
    CommandError: 14,
    StepError: 15,
    FatalPrerequisiteError: 20,
    DevSetupError: 1,
}


def get_error_code(error: Exception) -> int:
    """Get the exit code for an error type."""
    for error_type, code in ERROR_CODES.items():
        if isinstance(error, error_type):
            return code
    return 1
