import os
import re
import subprocess
from typing import Optional

from .bootstrap.exceptions import PrerequisiteError
from .bootstrap.logging_config import get_logger

TOKEN_URL = "https://access.redhat.com/management/api"
JAVA_INSTALL_URL = "https://adoptium.net/"

logger = get_logger("validation")


def check_credential(env_var: str = "REDHAT_TOKEN") -> None:
    if not os.environ.get(env_var):
        raise PrerequisiteError(
            f"{env_var} environment variable is required.",
            prerequisite=env_var,
            recovery_suggestions=[f"Get your token at: {TOKEN_URL}"],
        )


def parse_java_major_version(version_output: str) -> Optional[int]:
    """Extract the major version from ``java -version`` output.

    Legacy ``1.x`` version strings report ``x`` as the major version.
    """
    match = re.search(r'version "(\d+)(?:\.(\d+))?', version_output)
    if not match:
        return None

    major = int(match.group(1))
    if major == 1 and match.group(2):
        return int(match.group(2))
    return major


def check_java_runtime(
    java_executable: str = "java", min_version: int = 21, timeout: int = 30
) -> Optional[int]:
    """Verify that a Java runtime of at least ``min_version`` is installed.

    Returns:
        The detected major version, or None when it could not be parsed

    Raises:
        PrerequisiteError: If java cannot be run or is too old
    """
    try:
        result = subprocess.run(
            [java_executable, "-version"],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise PrerequisiteError(
            f"Java {min_version}+ is required but not found.",
            prerequisite="java",
            details=str(e),
            recovery_suggestions=[f"Install Java from: {JAVA_INSTALL_URL}"],
        ) from e

    if result.returncode != 0:
        raise PrerequisiteError(
            f"Java {min_version}+ is required but not found.",
            prerequisite="java",
            details=result.stderr,
            recovery_suggestions=[f"Install Java from: {JAVA_INSTALL_URL}"],
        )

    # java -version reports on stderr
    output = result.stderr or result.stdout
    major = parse_java_major_version(output)
    if major is None:
        logger.debug(f"Could not parse Java version from: {output!r}")
        return None

    if major < min_version:
        first_line = output.strip().splitlines()[0] if output.strip() else ""
        raise PrerequisiteError(
            f"Java {min_version}+ is required. Found: {first_line}",
            prerequisite="java",
            context={"found_version": major},
            recovery_suggestions=[f"Install Java from: {JAVA_INSTALL_URL}"],
        )

    logger.debug(f"Found Java {major}")
    return major
