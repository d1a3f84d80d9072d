"""Error classification and reporting for the launcher."""

import logging
import sys
from enum import Enum
from typing import TextIO, Optional


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors that can occur."""

    PREREQUISITE = "prerequisite"
    CONFIGURATION = "configuration"
    NETWORK = "network"
    RELEASE_METADATA = "release_metadata"
    ARTIFACT = "artifact"
    PROCESS = "process"


def report_error(error: Exception, stream: Optional[TextIO] = None) -> None:
    """Write a user-facing diagnostic for an error and log it.

    The first line is always ``Error: <message>``; recovery suggestions
    carried by launcher errors follow, one per line.

    Args:
        error: The exception to report
        stream: Output stream, standard error when omitted
    """
    stream = stream or sys.stderr
    logger = logging.getLogger("mcp_redhat_kb.error_handler")

    print(f"Error: {error}", file=stream)
    for suggestion in getattr(error, "recovery_suggestions", None) or []:
        print(suggestion, file=stream)

    category = getattr(error, "category", None)
    if category is not None:
        severity = getattr(error, "severity", ErrorSeverity.MEDIUM)
        logger.debug(
            f"{category.value} error ({severity.value}): {error}",
            exc_info=error,
        )
    else:
        logger.debug(f"Unhandled error: {error}", exc_info=error)
