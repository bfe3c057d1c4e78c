"""Tests for droidrel.core.workspace module."""

from __future__ import annotations

from pathlib import Path

from droidrel.core.config import PathsConfig
from droidrel.core.result import Err, Ok
from droidrel.core.workspace import Workspace, detect_workspace


class TestWorkspacePaths:
    def test_default_layout(self, tmp_path: Path) -> None:
        ws = Workspace(root=tmp_path)
        app = tmp_path / "packages" / "app-mobile"

        assert ws.app_dir == app
        assert ws.android_dir == app / "android"
        assert ws.gradle_file == app / "android" / "app" / "build.gradle"
        assert ws.release_dir == app / "dist"
        assert ws.build_dir("build-vosk") == app / "android" / "app" / "build-vosk"
        assert ws.changelog_path == tmp_path / "readme" / "changelog_android.md"

    def test_custom_paths(self, tmp_path: Path) -> None:
        ws = Workspace(root=tmp_path, paths=PathsConfig(app="mobile", changelog="CHANGES.md"))

        assert ws.app_dir == tmp_path / "mobile"
        assert ws.changelog_path == tmp_path / "CHANGES.md"

    def test_relative_app_dir_uses_backslashes(self, tmp_path: Path) -> None:
        assert Workspace(root=tmp_path).relative_app_dir() == "packages\\app-mobile"


class TestDetectWorkspace:
    def test_app_repository(self, tmp_path: Path) -> None:
        gradle = tmp_path / "packages" / "app-mobile" / "android" / "app" / "build.gradle"
        gradle.parent.mkdir(parents=True)
        gradle.write_text("android {}\n", encoding="utf-8")

        result = detect_workspace(tmp_path)

        assert isinstance(result, Ok)
        assert result.value.root == tmp_path

    def test_missing_gradle_file(self, tmp_path: Path) -> None:
        result = detect_workspace(tmp_path)

        assert isinstance(result, Err)
        assert "build.gradle" in result.error.message
        assert result.error.searched_from == tmp_path
