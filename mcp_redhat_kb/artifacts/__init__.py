"""
Server artifact handling.

This package handles:
1. Looking up the latest release
2. Downloading and verifying the jar
3. Keeping a single-entry local cache
"""

from .cache import ArtifactCacheManager
from .release import ReleaseClient, select_asset

__all__ = ["ArtifactCacheManager", "ReleaseClient", "select_asset"]
