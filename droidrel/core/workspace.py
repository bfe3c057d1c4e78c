"""Repository layout used by a release run.

The workspace is the root of the application monorepo. The mobile app lives
under ``paths.app`` (``packages/app-mobile`` by default) and everything the
release touches is derived from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .config import PathsConfig
from .result import Err, Ok, Result

__all__ = ["Workspace", "WorkspaceError", "detect_workspace"]


@dataclass(frozen=True, slots=True)
class WorkspaceError:
    """Error when the repository root does not look like the app monorepo."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Workspace:
    """Resolved paths of the repository being released.

    The app directory contains:
    - android/ (Gradle project, gradlew, app/build.gradle)
    - services/voiceTyping/ (real and stub voice typing modules)
    - package.json
    - dist/ (release APKs, generated)
    """

    root: Path
    paths: PathsConfig = field(default_factory=PathsConfig)

    @property
    def app_dir(self) -> Path:
        return self.root / self.paths.app

    @property
    def android_dir(self) -> Path:
        return self.app_dir / "android"

    @property
    def android_app_dir(self) -> Path:
        """Gradle module directory (android/app)."""
        return self.android_dir / "app"

    @property
    def gradle_file(self) -> Path:
        """Path to android/app/build.gradle."""
        return self.android_app_dir / "build.gradle"

    @property
    def release_dir(self) -> Path:
        """Directory receiving the release APKs."""
        return self.app_dir / "dist"

    @property
    def changelog_path(self) -> Path:
        return self.root / self.paths.changelog

    def build_dir(self, build_dir_name: str) -> Path:
        """Per-variant Gradle output directory."""
        return self.android_app_dir / build_dir_name

    def relative_app_dir(self) -> str:
        """App directory relative to root, with Windows separators."""
        return "\\".join(Path(self.paths.app).parts)


def detect_workspace(
    root: Path, paths: PathsConfig | None = None
) -> Result[Workspace, WorkspaceError]:
    """Validate that ``root`` holds an Android app with a Gradle build file."""
    workspace = Workspace(root=root, paths=paths or PathsConfig())
    if not workspace.gradle_file.is_file():
        return Err(
            WorkspaceError(
                message=f"not an app repository: missing {workspace.gradle_file}",
                searched_from=root,
            )
        )
    return Ok(workspace)
