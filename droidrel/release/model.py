from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from droidrel.release.variants import Variant

ReleaseType = Literal["prerelease", "full"]


@dataclass(frozen=True, slots=True)
class ReleaseArtifact:
    """One built APK, ready to upload."""

    variant: Variant
    download_url: str
    file_name: str
    local_path: Path


@dataclass(frozen=True, slots=True)
class GhRelease:
    id: int
    upload_url: str
    html_url: str | None = None


@dataclass(frozen=True, slots=True)
class UploadedAsset:
    name: str
    browser_download_url: str


@dataclass(frozen=True, slots=True)
class ReleaseReport:
    """Outcome of a successful run."""

    tag: str
    version: str
    version_code: int
    is_prerelease: bool
    artifacts: tuple[ReleaseArtifact, ...]
    release_url: str | None = None
    uploaded: tuple[UploadedAsset, ...] = field(default_factory=tuple)

    @property
    def main_download_url(self) -> str | None:
        for artifact in self.artifacts:
            if artifact.variant.is_primary:
                return artifact.download_url
        return None
