"""Error presentation utilities.

Centralized error formatting and exit code mapping for the release command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from droidrel.core.errors import ErrorCode
from droidrel.output.console import Style
from droidrel.release.errors import (
    ArtifactNotFoundError,
    BuildFailed,
    FileIoError,
    GitHubApiError,
    NoChangeError,
    ParseError,
    ReleaseError,
    TokenMissing,
    UnknownVariant,
    UploadError,
)

if TYPE_CHECKING:
    from droidrel.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a release error to the console."""
    match error:
        case ParseError(field=field, message=message):
            console.error(f"cannot parse {field}: {message}")
        case NoChangeError(field=field):
            console.error(f"could not update {field}")
            console.print("hint: the field was not replaced in build.gradle", Style.DIM)
        case ArtifactNotFoundError(path=path):
            console.error(f"built APK not found: {path}")
        case UploadError(file_name=file_name, message=message):
            console.error(f"could not upload {file_name} to GitHub: {message}")
        case BuildFailed(step=step, returncode=rc, detail=detail):
            console.error(f"{step} failed (exit {rc})")
            if detail:
                console.print(detail, Style.DIM)
        case GitHubApiError(message=message, status=status):
            if status:
                console.error(f"GitHub API error (HTTP {status}): {message}")
            else:
                console.error(f"GitHub API error: {message}")
        case TokenMissing(hint=hint):
            console.error("GitHub token not found")
            console.print(f"hint: {hint}", Style.DIM)
        case FileIoError(path=path, message=message):
            console.error(f"{path}: {message}")
        case UnknownVariant(name=name, available=available):
            console.error(f"Unknown release name: {name}")
            console.print(f"Available: {', '.join(available)}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    """Get exit code for a release error."""
    match error:
        case UnknownVariant():
            return int(ErrorCode.USAGE_ERROR)
        case _:
            return int(ErrorCode.RELEASE_FAILED)
