"""Tests for the Java launcher and process supervisor."""

import io
import signal
import subprocess
from unittest.mock import Mock, patch

import pytest

from mcp_redhat_kb.bootstrap.exceptions import SpawnError
from mcp_redhat_kb.runtime.launcher import (
    STDIO_MODE_FLAGS,
    LaunchState,
    ProcessSupervisor,
    announce_sse_mode,
    build_java_args,
)

# Captured before any test patches subprocess.Popen
_POPEN = subprocess.Popen


class TestBuildJavaArgs:
    def test_stdio_mode(self):
        args = build_java_args("/cache/app.jar")

        assert args[: len(STDIO_MODE_FLAGS)] == STDIO_MODE_FLAGS
        assert "-Dquarkus.http.host-enabled=false" in args
        assert "-Dquarkus.log.level=WARN" in args
        assert "-Dquarkus.mcp.server.traffic-logging.enabled=false" in args
        assert args[-2:] == ["-jar", "/cache/app.jar"]
        assert not any(a.startswith("-Dquarkus.http.port") for a in args)

    def test_sse_mode(self):
        args = build_java_args("/cache/app.jar", port="9081")

        assert args == [
            "-Dquarkus.http.port=9081",
            "-Dquarkus.http.host=0.0.0.0",
            "-jar",
            "/cache/app.jar",
        ]

    def test_empty_port_selects_stdio_mode(self):
        args = build_java_args("/cache/app.jar", port="")

        assert args[: len(STDIO_MODE_FLAGS)] == STDIO_MODE_FLAGS
        assert "-Dquarkus.http.port=" not in args

    def test_extra_args_follow_jar(self):
        args = build_java_args("/cache/app.jar", None, ("--x", "y"))
        assert args[-4:] == ["-jar", "/cache/app.jar", "--x", "y"]

    def test_stdio_flags_not_shared(self):
        build_java_args("/a.jar").append("mutated")
        assert "mutated" not in STDIO_MODE_FLAGS


def test_announce_sse_mode():
    stream = io.StringIO()
    announce_sse_mode("9081", stream)

    lines = stream.getvalue().splitlines()
    assert lines == [
        "Starting MCP server in SSE mode on port 9081...",
        "SSE endpoint: http://localhost:9081/mcp/sse",
    ]


def _mock_process(returncode=0):
    process = Mock(spec=_POPEN)
    process.wait.return_value = returncode
    process.poll.return_value = None
    return process


class TestProcessSupervisor:
    def test_initial_state(self):
        supervisor = ProcessSupervisor(["java", "-version"])
        assert supervisor.state == LaunchState.IDLE
        assert supervisor.process is None

    @patch("mcp_redhat_kb.runtime.launcher.subprocess.Popen")
    def test_run_inherits_stdio_and_returns_exit_code(self, mock_popen):
        mock_popen.return_value = _mock_process(returncode=3)
        supervisor = ProcessSupervisor(["java", "-jar", "app.jar"])

        assert supervisor.run() == 3
        assert supervisor.state == LaunchState.EXITED

        args, kwargs = mock_popen.call_args
        assert args[0] == ["java", "-jar", "app.jar"]
        assert "stdin" not in kwargs
        assert "stdout" not in kwargs
        assert "stderr" not in kwargs
        assert "REDHAT_TOKEN" in kwargs["env"]

    @patch("mcp_redhat_kb.runtime.launcher.subprocess.Popen")
    def test_signal_terminated_child_maps_to_zero(self, mock_popen):
        mock_popen.return_value = _mock_process(returncode=-signal.SIGTERM)

        assert ProcessSupervisor(["java"]).run() == 0

    @patch("mcp_redhat_kb.runtime.launcher.subprocess.Popen")
    def test_spawn_failure(self, mock_popen):
        mock_popen.side_effect = FileNotFoundError(2, "No such file or directory")
        supervisor = ProcessSupervisor(["java"])

        with pytest.raises(SpawnError) as exc_info:
            supervisor.run()

        assert str(exc_info.value) == "Failed to start Java: No such file or directory"
        assert supervisor.state == LaunchState.SPAWN_FAILED

    @patch("mcp_redhat_kb.runtime.launcher.subprocess.Popen")
    def test_forward_signal_to_running_child(self, mock_popen):
        process = _mock_process()
        mock_popen.return_value = process
        supervisor = ProcessSupervisor(["java"])
        supervisor.start()

        supervisor.forward_signal(signal.SIGTERM)

        process.send_signal.assert_called_once_with(signal.SIGTERM)

    @patch("mcp_redhat_kb.runtime.launcher.subprocess.Popen")
    def test_forward_signal_ignored_after_exit(self, mock_popen):
        process = _mock_process()
        process.poll.return_value = 0
        mock_popen.return_value = process
        supervisor = ProcessSupervisor(["java"])
        supervisor.start()

        supervisor.forward_signal(signal.SIGINT)

        process.send_signal.assert_not_called()

    def test_forward_signal_before_start_is_noop(self):
        ProcessSupervisor(["java"]).forward_signal(signal.SIGINT)

    @patch("mcp_redhat_kb.runtime.launcher.subprocess.Popen")
    def test_signal_during_wait_is_forwarded(self, mock_popen):
        process = _mock_process(returncode=143)
        mock_popen.return_value = process

        def wait():
            handler = signal.getsignal(signal.SIGTERM)
            handler(signal.SIGTERM, None)
            return 143

        process.wait.side_effect = wait
        supervisor = ProcessSupervisor(["java"])

        assert supervisor.run() == 143
        process.send_signal.assert_called_once_with(signal.SIGTERM)

    @patch("mcp_redhat_kb.runtime.launcher.subprocess.Popen")
    def test_handlers_restored_after_run(self, mock_popen):
        mock_popen.return_value = _mock_process()
        before_int = signal.getsignal(signal.SIGINT)
        before_term = signal.getsignal(signal.SIGTERM)

        ProcessSupervisor(["java"]).run()

        assert signal.getsignal(signal.SIGINT) == before_int
        assert signal.getsignal(signal.SIGTERM) == before_term

    def test_wait_before_start(self):
        with pytest.raises(RuntimeError):
            ProcessSupervisor(["java"]).wait()
