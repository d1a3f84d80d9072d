"""Java server launcher and child process supervision."""

import os
import signal
import subprocess
import sys
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Sequence, TextIO, Union

from ..bootstrap.exceptions import SpawnError
from ..bootstrap.exit_codes import exit_code_for_child
from ..bootstrap.logging_config import get_logger

logger = get_logger("launcher")

SSE_ENDPOINT_PATH = "/mcp/sse"

STDIO_MODE_FLAGS = [
    "-Dquarkus.http.host-enabled=false",
    "-Dquarkus.mcp.server.stdio.enabled=true",
    "-Dquarkus.banner.enabled=false",
    "-Dquarkus.log.level=WARN",
    "-Dquarkus.mcp.server.traffic-logging.enabled=false",
]


def build_java_args(
    artifact_path: Union[str, Path],
    port: Optional[str] = None,
    extra_args: Sequence[str] = (),
) -> List[str]:
    """Build the arguments passed to ``java``.

    With a port the server listens for SSE connections on all interfaces;
    without one it speaks MCP over stdio and keeps its own logging quiet.

    Args:
        artifact_path: Path to the server jar
        port: Port to listen on, None for stdio mode
        extra_args: Arguments forwarded verbatim to the server

    Returns:
        Argument list, excluding the java executable itself
    """
    if port:
        java_args = [f"-Dquarkus.http.port={port}", "-Dquarkus.http.host=0.0.0.0"]
    else:
        java_args = list(STDIO_MODE_FLAGS)

    java_args.extend(["-jar", str(artifact_path)])
    java_args.extend(extra_args)
    return java_args


def announce_sse_mode(port: str, stream: Optional[TextIO] = None) -> None:
    """Tell the user where the SSE server will listen."""
    stream = stream or sys.stderr
    print(f"Starting MCP server in SSE mode on port {port}...", file=stream)
    print(f"SSE endpoint: http://localhost:{port}{SSE_ENDPOINT_PATH}", file=stream)


class LaunchState(Enum):
    """Lifecycle of the supervised process."""

    IDLE = "idle"
    SPAWNING = "spawning"
    RUNNING = "running"
    EXITED = "exited"
    SPAWN_FAILED = "spawn_failed"


class ProcessSupervisor:
    """Runs a child process with inherited stdio and forwards termination signals.

    While the child runs, SIGINT and SIGTERM received by this process are
    delivered to the child instead; the supervisor keeps waiting until the
    child exits and reports its exit code.
    """

    def __init__(
        self,
        command: Sequence[str],
        env: Optional[Dict[str, str]] = None,
        forwarded_signals: Sequence[int] = (signal.SIGINT, signal.SIGTERM),
    ):
        """Initialize the supervisor.

        Args:
            command: Full command line, executable first
            env: Child environment, the current environment when omitted
            forwarded_signals: Signals to relay to the child
        """
        self.command = list(command)
        self.env = env
        self.forwarded_signals = list(forwarded_signals)
        self.process: Optional[subprocess.Popen] = None
        self.state = LaunchState.IDLE
        self.returncode: Optional[int] = None
        self._previous_handlers: Dict[int, object] = {}

    def start(self) -> subprocess.Popen:
        """Spawn the child process.

        Raises:
            SpawnError: If the executable cannot be started
        """
        self.state = LaunchState.SPAWNING
        logger.debug(f"Spawning: {' '.join(self.command)}")

        try:
            # No stdio redirection: the child owns this process's streams
            self.process = subprocess.Popen(
                self.command,
                env=self.env if self.env is not None else os.environ.copy(),
            )
        except OSError as e:
            self.state = LaunchState.SPAWN_FAILED
            raise SpawnError(
                f"Failed to start Java: {e.strerror or e}", command=self.command
            ) from e

        self.state = LaunchState.RUNNING
        return self.process

    def forward_signal(self, signum: int, frame=None) -> None:
        """Deliver a signal received by this process to the child."""
        if self.process is None or self.process.poll() is not None:
            return

        logger.debug(f"Forwarding {signal.Signals(signum).name} to child")
        try:
            self.process.send_signal(signum)
        except ProcessLookupError:
            # Child exited between poll() and send_signal()
            pass

    def wait(self) -> int:
        """Wait for the child and return the exit code to propagate."""
        if self.process is None:
            raise RuntimeError("Process has not been started")

        self.returncode = self.process.wait()
        self.state = LaunchState.EXITED
        logger.debug(f"Child exited with {self.returncode}")
        return exit_code_for_child(self.returncode)

    def run(self) -> int:
        """Spawn the child, supervise it until exit, and return its exit code."""
        self.start()
        self._install_signal_handlers()
        try:
            return self.wait()
        finally:
            self._restore_signal_handlers()

    def _install_signal_handlers(self) -> None:
        for signum in self.forwarded_signals:
            try:
                self._previous_handlers[signum] = signal.signal(
                    signum, self.forward_signal
                )
            except (ValueError, OSError):
                # Not on the main thread, or signal unsupported on this platform
                logger.debug(f"Cannot forward signal {signum}")

    def _restore_signal_handlers(self) -> None:
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        self._previous_handlers.clear()
