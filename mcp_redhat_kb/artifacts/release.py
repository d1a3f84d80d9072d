"""Release lookup and artifact download against the GitHub releases API."""

import hashlib
import os
from pathlib import Path
from typing import Optional

import requests
from pydantic import ValidationError

from ..bootstrap.config import ReleaseConfig
from ..bootstrap.exceptions import (
    AssetNotFoundError,
    ChecksumError,
    DownloadError,
    NetworkError,
    ReleaseParseError,
)
from ..bootstrap.logging_config import get_logger
from .models import ReleaseAsset, ReleaseInfo

logger = get_logger("release")


def select_asset(release: ReleaseInfo, suffix: str = ".jar") -> ReleaseAsset:
    """Pick the first release asset whose name ends with ``suffix``.

    Raises:
        AssetNotFoundError: If no asset matches
    """
    for asset in release.assets:
        if asset.name.endswith(suffix):
            return asset
    raise AssetNotFoundError(tag_name=release.tag_name, suffix=suffix)


class ReleaseClient:
    """Client for the release-listing and download endpoints."""

    def __init__(
        self,
        config: Optional[ReleaseConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the release client.

        Args:
            config: Release feed settings
            session: HTTP session to use, a new one when omitted
        """
        self.config = config or ReleaseConfig()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})

    def get_latest_release(self) -> ReleaseInfo:
        """Fetch the latest published release.

        Returns:
            Parsed release metadata

        Raises:
            NetworkError: If the request fails or returns a non-2xx status
            ReleaseParseError: If the body is not a valid release document
        """
        url = self.config.latest_release_url
        logger.debug(f"Fetching latest release from {url}")

        try:
            response = self.session.get(
                url,
                headers={"Accept": "application/vnd.github+json"},
                timeout=self.config.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            raise NetworkError(
                f"Release lookup failed: {e.response.status_code}",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except requests.RequestException as e:
            raise NetworkError(f"Release lookup failed: {e}", url=url) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise ReleaseParseError(url=url, details=str(e)) from e

        try:
            release = ReleaseInfo.model_validate(payload)
        except ValidationError as e:
            raise ReleaseParseError(url=url, details=str(e)) from e

        logger.debug(f"Latest release is {release.tag_name}")
        return release

    def download(self, asset: ReleaseAsset, destination: Path) -> Path:
        """Download an asset to ``destination``.

        The body is streamed to a ``.part`` file next to the destination and
        renamed into place only once complete (and, when the release
        publishes a digest, verified). Redirects are followed.

        Raises:
            DownloadError: If the transfer or the write fails
            ChecksumError: If the content does not match the published digest
        """
        destination = Path(destination)
        partial = destination.with_name(destination.name + ".part")
        url = asset.download_url
        logger.debug(f"Downloading {url} to {destination}")

        try:
            sha256 = hashlib.sha256()
            with self.session.get(
                url, stream=True, allow_redirects=True, timeout=self.config.timeout
            ) as response:
                if response.status_code != 200:
                    raise DownloadError(
                        f"Download failed: {response.status_code}",
                        url=url,
                        status_code=response.status_code,
                    )
                with open(partial, "wb") as f:
                    for chunk in response.iter_content(
                        chunk_size=self.config.chunk_size
                    ):
                        if chunk:
                            f.write(chunk)
                            sha256.update(chunk)

            self._verify_digest(asset, sha256.hexdigest())
            os.replace(partial, destination)
        except requests.RequestException as e:
            partial.unlink(missing_ok=True)
            raise DownloadError(f"Download failed: {e}", url=url) from e
        except OSError as e:
            partial.unlink(missing_ok=True)
            raise DownloadError(
                f"Could not write {destination}: {e}", url=url
            ) from e
        except (DownloadError, ChecksumError):
            partial.unlink(missing_ok=True)
            raise

        return destination

    @staticmethod
    def _verify_digest(asset: ReleaseAsset, actual_sha256: str) -> None:
        if not asset.digest:
            return

        algorithm, _, expected = asset.digest.partition(":")
        if algorithm.lower() != "sha256" or not expected:
            logger.debug(f"Skipping verification of unsupported digest {asset.digest}")
            return

        if expected.lower() != actual_sha256:
            raise ChecksumError(
                f"Checksum mismatch for {asset.name}",
                expected=expected.lower(),
                actual=actual_sha256,
            )
