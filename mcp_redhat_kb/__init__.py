"""Launcher for the Red Hat Knowledge Base MCP server."""

__version__ = "1.0.0"
