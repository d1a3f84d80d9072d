"""Custom exceptions for the mcp-redhat-kb launcher."""

from typing import Optional, Dict, Any, List
from mcp_redhat_kb.bootstrap.error_handling import ErrorCategory, ErrorSeverity


class LauncherError(Exception):
    """Base exception for all launcher errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
    ):
        """Initialize launcher error.

        Args:
            message: Error message
            category: Error category
            severity: Error severity level
            details: Additional error details
            context: Error context information
            recovery_suggestions: Suggestions for error recovery
        """
        super().__init__(message)
        self.category = category
        self.severity = severity
        self.details = details
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []


class PrerequisiteError(LauncherError):
    """Exception for a missing credential or Java runtime."""

    def __init__(
        self,
        message: str,
        prerequisite: Optional[str] = None,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
    ):
        """Initialize prerequisite error.

        Args:
            message: Error message
            prerequisite: Name of the missing prerequisite
            details: Additional error details
            context: Error context information
            recovery_suggestions: Suggestions for error recovery
        """
        context = context or {}
        if prerequisite:
            context["prerequisite"] = prerequisite

        super().__init__(
            message=message,
            category=ErrorCategory.PREREQUISITE,
            severity=ErrorSeverity.CRITICAL,
            details=details,
            context=context,
            recovery_suggestions=recovery_suggestions,
        )


class ConfigurationError(LauncherError):
    """Exception for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
    ):
        context = context or {}
        if config_key:
            context["config_key"] = config_key

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            details=details,
            context=context,
            recovery_suggestions=recovery_suggestions
            or [
                "Review configuration file syntax",
                "Unset MCP_REDHAT_KB_CONFIG to use the defaults",
            ],
        )


class FetchError(LauncherError):
    """Base exception for release lookup and download failures.

    Every fetch error may be recovered from by falling back to a
    previously cached artifact.
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.NETWORK,
        url: Optional[str] = None,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
    ):
        context = context or {}
        if url:
            context["url"] = url

        super().__init__(
            message=message,
            category=category,
            severity=ErrorSeverity.MEDIUM,
            details=details,
            context=context,
            recovery_suggestions=recovery_suggestions,
        )


class NetworkError(FetchError):
    """Exception for connection failures and unexpected HTTP statuses."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if status_code is not None:
            context["status_code"] = status_code

        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            url=url,
            details=details,
            context=context,
            recovery_suggestions=["Check your network connection and retry"],
        )


class DownloadError(NetworkError):
    """Exception for a failed artifact download."""


class ReleaseParseError(FetchError):
    """Exception for malformed release metadata."""

    def __init__(
        self,
        message: str = "Failed to parse release info",
        url: Optional[str] = None,
        details: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.RELEASE_METADATA,
            url=url,
            details=details,
        )


class AssetNotFoundError(FetchError):
    """Exception for a release that carries no matching artifact."""

    def __init__(
        self,
        message: str = "No JAR found in release",
        tag_name: Optional[str] = None,
        suffix: Optional[str] = None,
    ):
        context: Dict[str, Any] = {}
        if tag_name:
            context["tag_name"] = tag_name
        if suffix:
            context["suffix"] = suffix

        super().__init__(
            message=message,
            category=ErrorCategory.ARTIFACT,
            context=context,
        )


class ChecksumError(FetchError):
    """Exception for a downloaded artifact that does not match its digest."""

    def __init__(self, message: str, expected: str, actual: str):
        super().__init__(
            message=message,
            category=ErrorCategory.ARTIFACT,
            context={"expected": expected, "actual": actual},
        )


class SpawnError(LauncherError):
    """Exception for a Java process that could not be started."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        details: Optional[str] = None,
    ):
        context: Dict[str, Any] = {}
        if command:
            context["command"] = command

        super().__init__(
            message=message,
            category=ErrorCategory.PROCESS,
            severity=ErrorSeverity.CRITICAL,
            details=details,
            context=context,
        )
