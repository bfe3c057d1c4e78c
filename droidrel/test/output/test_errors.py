from __future__ import annotations

from pathlib import Path

import pytest

from droidrel.core.errors import ErrorCode
from droidrel.output.console import MockConsole
from droidrel.output.errors import print_release_error, release_error_exit_code
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

ALL_ERRORS: list[ReleaseError] = [
    ParseError(field="versionCode", message="no match"),
    NoChangeError(field="versionName"),
    ArtifactNotFoundError(path=Path("/x/app-release.apk")),
    UploadError(file_name="joplin-v2.3.2.apk", message="no download URL (HTTP 201)"),
    BuildFailed(step="yarn run build", returncode=1, detail="boom"),
    GitHubApiError(message="create release: Bad credentials", status=401),
    TokenMissing(),
    FileIoError(path=Path("/x/build.gradle"), message="failed to read"),
    UnknownVariant(name="arm64", available=("main", "32bit", "vosk")),
]


@pytest.mark.parametrize("error", ALL_ERRORS, ids=lambda e: type(e).__name__)
def test_every_error_is_printed(error: ReleaseError) -> None:
    console = MockConsole()

    print_release_error(error, console)

    assert console.has_error()


def test_upload_error_names_file() -> None:
    console = MockConsole()

    print_release_error(ALL_ERRORS[3], console)

    assert console.find("could not upload joplin-v2.3.2.apk")


def test_build_failure_prints_detail() -> None:
    console = MockConsole()

    print_release_error(BuildFailed(step="gradle", returncode=1, detail="BUILD FAILED"), console)

    assert "BUILD FAILED" in console.text


def test_unknown_variant_lists_available() -> None:
    console = MockConsole()

    print_release_error(UnknownVariant(name="x", available=("main", "vosk")), console)

    assert console.find("Unknown release name: x")
    assert console.find("Available: main, vosk")


def test_exit_codes() -> None:
    unknown = UnknownVariant(name="x", available=())
    assert release_error_exit_code(unknown) == ErrorCode.USAGE_ERROR
    assert release_error_exit_code(TokenMissing()) == ErrorCode.RELEASE_FAILED
    assert release_error_exit_code(NoChangeError(field="versionCode")) == 1
