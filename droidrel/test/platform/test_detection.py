from __future__ import annotations

from pathlib import Path

import pytest

from droidrel.platform import detection
from droidrel.platform.detection import GradleHost, HostInfo, detect_gradle_host


def test_wsl_when_cmd_exe_present(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cmd_exe = tmp_path / "cmd.exe"
    cmd_exe.write_bytes(b"")
    monkeypatch.setattr(detection._sys, "platform", "linux")

    assert detect_gradle_host(cmd_exe) == GradleHost.WSL_CMD


def test_unix_without_cmd_exe(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(detection._sys, "platform", "linux")

    assert detect_gradle_host(tmp_path / "cmd.exe") == GradleHost.UNIX


def test_unix_on_macos(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cmd_exe = tmp_path / "cmd.exe"
    cmd_exe.write_bytes(b"")
    monkeypatch.setattr(detection._sys, "platform", "darwin")

    assert detect_gradle_host(cmd_exe) == GradleHost.UNIX


def test_host_info() -> None:
    assert HostInfo(gradle_host=GradleHost.WSL_CMD).uses_windows_gradle
    assert not HostInfo(gradle_host=GradleHost.UNIX).uses_windows_gradle
    assert str(GradleHost.WSL_CMD) == "wsl_cmd"


def test_detect_is_cached() -> None:
    assert detection.detect() is detection.detect()
