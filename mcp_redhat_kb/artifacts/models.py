"""Release metadata models."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReleaseAsset(BaseModel):
    """A downloadable file attached to a release."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    download_url: str = Field(alias="browser_download_url")
    size: Optional[int] = None
    digest: Optional[str] = Field(
        default=None, description="Content digest such as 'sha256:<hex>'"
    )


class ReleaseInfo(BaseModel):
    """The subset of a GitHub release the launcher needs."""

    tag_name: str
    assets: List[ReleaseAsset] = Field(default_factory=list)


@dataclass(frozen=True)
class CacheEntry:
    """An artifact stored in the local cache."""

    version: Optional[str]
    artifact_path: Path
