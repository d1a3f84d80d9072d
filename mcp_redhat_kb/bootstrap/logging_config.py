"""Logging configuration for the launcher."""

import logging
import sys
from typing import Optional

from .config import LoggingConfig


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """Set up logging for the launcher.

    Logs always go to standard error: in stdio mode standard output belongs
    to the launched server.

    Args:
        config: Logging configuration object. If None, uses default configuration.
    """
    if config is None:
        config = LoggingConfig()

    numeric_level = getattr(logging, config.level.upper(), logging.WARNING)

    root_logger = logging.getLogger("mcp_redhat_kb")
    root_logger.setLevel(numeric_level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(config.format_string)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if config.file_path:
        file_handler = logging.FileHandler(config.file_path, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Prevent propagation to root logger
    root_logger.propagate = False

    root_logger.debug(f"Logging initialized - Level: {config.level}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific component.

    Args:
        name: Logger name (will be prefixed with 'mcp_redhat_kb.')

    Returns:
        Logger instance
    """
    return logging.getLogger(f"mcp_redhat_kb.{name}")


def log_launch_step(logger: logging.Logger, step_name: str, stage: str) -> None:
    """Log a bootstrap step.

    Args:
        logger: Logger instance
        step_name: Name of the step
        stage: Current stage (start, complete, error)
    """
    labels = {"start": "Starting", "complete": "Completed", "error": "Failed"}
    if stage in labels:
        logger.debug(f"{labels[stage]} step: {step_name}")
    else:
        logger.debug(f"Step {step_name}: {stage}")
