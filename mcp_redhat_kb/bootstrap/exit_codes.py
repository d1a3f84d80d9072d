"""Exit codes for the mcp-redhat-kb launcher."""

from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Exit codes owned by the launcher itself.

    Any other exit status is the launched server's own code.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    INTERRUPTED = 130


def exit_code_for_child(returncode: Optional[int]) -> int:
    """Map a child process return code to the launcher's exit code.

    A child that reports no code (still unknown, or terminated by a signal,
    which ``subprocess`` reports as a negative number) maps to success.

    Args:
        returncode: ``Popen.returncode`` of the finished child

    Returns:
        Exit code to propagate to the parent shell
    """
    if returncode is None or returncode < 0:
        return ExitCode.SUCCESS
    return returncode
