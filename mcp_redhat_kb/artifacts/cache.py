"""Local cache of the server artifact, keyed by release version."""

import sys
from pathlib import Path
from typing import Optional, TextIO

from ..bootstrap.config import CacheConfig, ReleaseConfig
from ..bootstrap.exceptions import FetchError
from ..bootstrap.logging_config import get_logger, log_launch_step
from .models import CacheEntry
from .release import ReleaseClient, select_asset

logger = get_logger("cache")


class ArtifactCacheManager:
    """Keeps the newest release artifact in a single-entry on-disk cache.

    The cache directory holds one artifact and one plain-text version marker.
    The marker is trusted as the version of the cached artifact.
    """

    def __init__(
        self,
        cache_config: Optional[CacheConfig] = None,
        client: Optional[ReleaseClient] = None,
        release_config: Optional[ReleaseConfig] = None,
        verbose: bool = True,
        stream: Optional[TextIO] = None,
    ):
        """Initialize the cache manager.

        Args:
            cache_config: Cache location settings
            client: Release client used for lookup and download
            release_config: Release feed settings, used for the asset suffix
            verbose: Whether to print status lines
            stream: Stream for status lines, standard error when omitted
        """
        self.cache_config = cache_config or CacheConfig()
        self.release_config = release_config or ReleaseConfig()
        self.client = client or ReleaseClient(self.release_config)
        self.verbose = verbose
        self.stream = stream

    @property
    def cache_dir(self) -> Path:
        return Path(self.cache_config.directory)

    @property
    def artifact_path(self) -> Path:
        return self.cache_config.artifact_path

    @property
    def version_path(self) -> Path:
        return self.cache_config.version_path

    def read_cached_version(self) -> Optional[str]:
        """Return the cached version marker, or None when there is none.

        An unreadable marker counts as no marker, so the artifact is fetched again.
        """
        try:
            marker = self.version_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            if self.version_path.exists():
                logger.debug(f"Ignoring unreadable version marker: {e}")
            return None
        return marker.strip() or None

    def cached_entry(self) -> Optional[CacheEntry]:
        """Return the cached artifact, if any."""
        if not self.artifact_path.is_file():
            return None
        return CacheEntry(
            version=self.read_cached_version(), artifact_path=self.artifact_path
        )

    def get_artifact(self) -> Path:
        """Return the path to an up-to-date artifact, downloading if needed.

        Falls back to a stale cached artifact when the release feed cannot be
        reached or yields nothing usable.

        Raises:
            FetchError: If the fetch failed and nothing is cached
        """
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        log_launch_step(logger, "fetch artifact", "start")
        try:
            path = self._refresh()
        except FetchError as e:
            if self.artifact_path.is_file():
                logger.debug(f"Update check failed, using cached artifact: {e}")
                self._status(
                    "Warning: Could not check for updates, using cached version."
                )
                return self.artifact_path
            log_launch_step(logger, "fetch artifact", "error")
            raise

        log_launch_step(logger, "fetch artifact", "complete")
        return path

    def _refresh(self) -> Path:
        release = self.client.get_latest_release()
        latest_version = release.tag_name

        if (
            self.read_cached_version() == latest_version
            and self.artifact_path.is_file()
        ):
            logger.debug(f"Cached artifact is up to date ({latest_version})")
            return self.artifact_path

        asset = select_asset(release, self.release_config.asset_suffix)

        self._status(f"Downloading mcp-redhat-kb {latest_version}...")
        self.client.download(asset, self.artifact_path)
        self.version_path.write_text(latest_version, encoding="utf-8")
        self._status("Download complete.")

        return self.artifact_path

    def _status(self, message: str) -> None:
        if self.verbose:
            print(message, file=self.stream or sys.stderr)
