"""Global test configuration and fixtures."""

import logging
import os
import pytest

from mcp_redhat_kb.bootstrap.config import CacheConfig, ReleaseConfig
from mcp_redhat_kb.artifacts.models import ReleaseAsset, ReleaseInfo


@pytest.fixture(autouse=True)
def setup_test_environment(tmp_path, monkeypatch):
    """Isolate tests from the user's config, cache and credentials."""
    for key in list(os.environ):
        if key.startswith("MCP_REDHAT_KB_"):
            monkeypatch.delenv(key)

    monkeypatch.setenv("MCP_REDHAT_KB_CONFIG", str(tmp_path / "missing.toml"))
    monkeypatch.setenv("MCP_REDHAT_KB_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("REDHAT_TOKEN", "test-token-12345")

    yield

    logger = logging.getLogger("mcp_redhat_kb")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True


@pytest.fixture
def cache_config(tmp_path):
    """Cache configuration rooted in a temporary directory."""
    return CacheConfig(directory=str(tmp_path / "cache"))


@pytest.fixture
def release_config():
    return ReleaseConfig(api_url="https://api.example.test", repository="acme/app")


@pytest.fixture
def release():
    """A release with a single jar asset."""
    return ReleaseInfo(
        tag_name="v1.2.0",
        assets=[
            ReleaseAsset(
                name="app.jar",
                browser_download_url="https://example.test/download/app.jar",
            )
        ],
    )
