"""Error variants for a release run.

Each variant is a frozen dataclass; ``ReleaseError`` is their union. Every
variant is fatal to the run: callers propagate it as ``Err(...)`` up to the
CLI, which renders it and exits non-zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ParseError:
    """Build configuration text did not match the expected pattern."""

    field: str
    message: str


@dataclass(frozen=True, slots=True)
class NoChangeError:
    """A version patch produced text identical to its input."""

    field: str


@dataclass(frozen=True, slots=True)
class ArtifactNotFoundError:
    """Gradle reported success but the APK is not where expected."""

    path: Path


@dataclass(frozen=True, slots=True)
class UploadError:
    file_name: str
    message: str


@dataclass(frozen=True, slots=True)
class BuildFailed:
    """An external build command exited non-zero."""

    step: str
    returncode: int
    detail: str = ""


@dataclass(frozen=True, slots=True)
class GitHubApiError:
    message: str
    status: int = 0


@dataclass(frozen=True, slots=True)
class TokenMissing:
    hint: str = "Set GITHUB_TOKEN, configure github.token_file, or run: gh auth login"


@dataclass(frozen=True, slots=True)
class FileIoError:
    path: Path
    message: str


@dataclass(frozen=True, slots=True)
class UnknownVariant:
    name: str
    available: tuple[str, ...]


ReleaseError = (
    ParseError
    | NoChangeError
    | ArtifactNotFoundError
    | UploadError
    | BuildFailed
    | GitHubApiError
    | TokenMissing
    | FileIoError
    | UnknownVariant
)
