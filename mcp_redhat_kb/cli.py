import sys
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import requests

from . import __version__
from .artifacts.cache import ArtifactCacheManager
from .artifacts.release import ReleaseClient
from .bootstrap.config import get_config
from .bootstrap.error_handling import report_error
from .bootstrap.exit_codes import ExitCode
from .bootstrap.logging_config import setup_logging
from .runtime.launcher import ProcessSupervisor, announce_sse_mode, build_java_args
from .validation import check_credential, check_java_runtime

USAGE = """
mcp-redhat-kb - MCP Server for Red Hat Knowledge Base

USAGE:
  mcp-redhat-kb [OPTIONS]

OPTIONS:
  --port <PORT>    Start in SSE mode on specified port (default: stdio mode)
  --help, -h       Show this help message
  --version, -v    Show version

ENVIRONMENT:
  REDHAT_TOKEN   Red Hat API offline token (required)
                 Generate at: https://access.redhat.com/management/api

EXAMPLES:
  # stdio mode (for Claude Code, Claude Desktop)
  mcp-redhat-kb

  # SSE mode on port 9081
  mcp-redhat-kb --port 9081

MCP CLIENT CONFIGURATION:
  {
    "mcpServers": {
      "redhat-kb": {
        "command": "mcp-redhat-kb",
        "env": {
          "REDHAT_TOKEN": "your-token"
        }
      }
    }
  }
"""


@dataclass(frozen=True)
class Options:
    """Parsed command line options."""

    port: Optional[str] = None
    help: bool = False
    version: bool = False
    extra_args: Tuple[str, ...] = ()


def parse_args(argv: Sequence[str]) -> Options:
    """Parse the launcher's own flags.

    Every other token is kept, in order, for the server.
    """
    port = None
    show_help = False
    show_version = False
    extra_args = []

    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--port" and i + 1 < len(argv) and argv[i + 1]:
            port = argv[i + 1]
            i += 1
        elif arg.startswith("--port="):
            # An empty value selects stdio mode
            port = arg.partition("=")[2] or None
        elif arg in ("--help", "-h"):
            show_help = True
        elif arg in ("--version", "-v"):
            show_version = True
        else:
            extra_args.append(arg)
        i += 1

    return Options(
        port=port,
        help=show_help,
        version=show_version,
        extra_args=tuple(extra_args),
    )


def run_server(options: Options) -> int:
    """Check prerequisites, fetch the server jar and run it."""
    config = get_config()
    setup_logging(config.logging)

    check_credential(config.runtime.credential_env_var)
    check_java_runtime(
        config.runtime.java_executable,
        config.runtime.min_java_version,
        timeout=config.runtime.probe_timeout,
    )

    # In stdio mode, suppress download messages to keep stderr quiet
    verbose = bool(options.port)
    with requests.Session() as session:
        cache = ArtifactCacheManager(
            cache_config=config.cache,
            client=ReleaseClient(config.release, session=session),
            release_config=config.release,
            verbose=verbose,
        )
        artifact_path = cache.get_artifact()

    if options.port:
        announce_sse_mode(options.port)

    java_args = build_java_args(artifact_path, options.port, options.extra_args)
    supervisor = ProcessSupervisor([config.runtime.java_executable, *java_args])
    return supervisor.run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    options = parse_args(sys.argv[1:] if argv is None else argv)

    if options.help:
        print(USAGE)
        return ExitCode.SUCCESS

    if options.version:
        print(__version__)
        return ExitCode.SUCCESS

    try:
        return run_server(options)
    except KeyboardInterrupt:
        # Interrupted before the server was running
        return ExitCode.INTERRUPTED
    except Exception as e:
        report_error(e)
        return ExitCode.GENERAL_ERROR


if __name__ == "__main__":
    sys.exit(main())
