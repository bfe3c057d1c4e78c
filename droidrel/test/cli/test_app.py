from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from droidrel import __version__
from droidrel.cli import app as app_mod
from droidrel.core.result import Err, Ok, Result
from droidrel.release.errors import BuildFailed, ReleaseError
from droidrel.release.model import ReleaseReport
from droidrel.release.run_state import RunState, Step

from ..release._app_repo import make_app_repo

runner = CliRunner()


class FakeService:
    outcome: Result[ReleaseReport, ReleaseError] | Exception = Ok(
        ReleaseReport(
            tag="android-v2.3.2",
            version="2.3.2",
            version_code=41,
            is_prerelease=True,
            artifacts=(),
        )
    )
    seen: dict[str, object] = {}

    def __init__(self, **kwargs: object) -> None:
        self.state = RunState()
        self.state.done(Step.PROJECT_BUILD)
        self.state.done(Step.VERSION_BUMP, "2.3.2 (code 41)")

    def run(self, *, release_type: str, only: str | None) -> Result[ReleaseReport, ReleaseError]:
        FakeService.seen = {"release_type": release_type, "only": only}
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    make_app_repo(tmp_path)
    return tmp_path


@pytest.fixture
def fake_service(monkeypatch: pytest.MonkeyPatch) -> type[FakeService]:
    monkeypatch.setattr(app_mod, "AndroidReleaseService", FakeService)
    monkeypatch.setattr(FakeService, "outcome", FakeService.outcome)
    return FakeService


def test_version() -> None:
    result = runner.invoke(app_mod.app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_documents_exit_status() -> None:
    result = runner.invoke(app_mod.app, ["--help"])

    text = " ".join(result.output.replace("│", " ").split())
    assert result.exit_code == 0
    assert "Exit status: 0 on success, 1 when the release fails" in text
    assert "unknown --release-name" in text


def test_not_an_app_repository(tmp_path: Path) -> None:
    result = runner.invoke(app_mod.app, ["--root", str(tmp_path)])

    assert result.exit_code == 2
    assert "build.gradle" in result.output


def test_broken_config(app_root: Path) -> None:
    (app_root / "droidrel.toml").write_text("[github\n", encoding="utf-8")

    result = runner.invoke(app_mod.app, ["--root", str(app_root)])

    assert result.exit_code == 2
    assert "Invalid TOML" in result.output


def test_unknown_release_name(app_root: Path) -> None:
    before = (app_root / "packages/app-mobile/android/app/build.gradle").read_bytes()

    result = runner.invoke(app_mod.app, ["--root", str(app_root), "--release-name", "arm64"])

    assert result.exit_code == 2
    assert "Unknown release name: arm64" in result.output
    assert (app_root / "packages/app-mobile/android/app/build.gradle").read_bytes() == before


def test_success(app_root: Path, fake_service: type[FakeService]) -> None:
    result = runner.invoke(
        app_mod.app, ["--root", str(app_root), "--type", "full", "--release-name", "vosk"]
    )

    assert result.exit_code == 0
    assert "Released android-v2.3.2" in result.output
    assert fake_service.seen == {"release_type": "full", "only": "vosk"}


def test_defaults_to_prerelease(app_root: Path, fake_service: type[FakeService]) -> None:
    runner.invoke(app_mod.app, ["--root", str(app_root)])

    assert fake_service.seen == {"release_type": "prerelease", "only": None}


def test_release_failure_reports_progress(
    app_root: Path, fake_service: type[FakeService], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        fake_service, "outcome", Err(BuildFailed(step="gradle assembleRelease", returncode=1))
    )

    result = runner.invoke(app_mod.app, ["--root", str(app_root)])

    assert result.exit_code == 1
    assert "Fatal error" in result.output
    assert "gradle assembleRelease failed (exit 1)" in result.output
    assert "version bump: 2.3.2 (code 41)" in result.output


def test_unexpected_exception(
    app_root: Path, fake_service: type[FakeService], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(fake_service, "outcome", RuntimeError("disk on fire"))

    result = runner.invoke(app_mod.app, ["--root", str(app_root)])

    assert result.exit_code == 1
    assert "Fatal error: disk on fire" in result.output
    assert "project build" in result.output
