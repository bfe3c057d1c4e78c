"""Build one APK variant.

For a variant the builder edits the sources its recipe names, runs Gradle
into a variant-specific build directory, copies the APK into the release
directory and reverts the edits. The revert runs on every exit path,
including build failures and interrupts, because all variants share the same
working tree.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from droidrel.core.config import GitHubConfig
from droidrel.core.result import Err, Ok, Result
from droidrel.core.workspace import Workspace
from droidrel.output.console import ConsoleProtocol, Style
from droidrel.platform.detection import HostInfo
from droidrel.platform.process import run_silent
from droidrel.release.errors import (
    ArtifactNotFoundError,
    BuildFailed,
    FileIoError,
    ReleaseError,
)
from droidrel.release.model import ReleaseArtifact
from droidrel.release.mutations import PendingMutation
from droidrel.release.variants import Variant, recipe_for

__all__ = ["VariantBuilder", "GRADLE_TASK"]

GRADLE_TASK = "assembleRelease"


class VariantBuilder:
    """Builds APK variants for one release version."""

    def __init__(
        self,
        *,
        workspace: Workspace,
        host: HostInfo,
        console: ConsoleProtocol,
        github: GitHubConfig,
        artifact_prefix: str,
        gradle_timeout: float | None = None,
    ) -> None:
        self._workspace = workspace
        self._host = host
        self._console = console
        self._github = github
        self._artifact_prefix = artifact_prefix
        self._gradle_timeout = gradle_timeout

    def artifact_file_name(self, variant: Variant, version: str) -> str:
        return f"{self._artifact_prefix}-v{version}{variant.suffix}.apk"

    @property
    def latest_file_name(self) -> str:
        return f"{self._artifact_prefix}-latest.apk"

    def download_url(self, tag: str, file_name: str) -> str:
        """Public URL the asset will have once uploaded to release ``tag``."""
        return f"https://github.com/{self._github.slug}/releases/download/{tag}/{file_name}"

    def built_apk_path(self, variant: Variant) -> Path:
        build_dir = self._workspace.build_dir(variant.build_dir_name)
        return build_dir / "outputs" / "apk" / "release" / "app-release.apk"

    def gradle_command(self, variant: Variant) -> tuple[list[str], Path]:
        """Gradle invocation and its working directory for this host."""
        args = [GRADLE_TASK, f"-PbuildDir={variant.build_dir_name}"]

        if self._host.uses_windows_gradle and self._host.cmd_exe is not None:
            android_rel = f"{self._workspace.relative_app_dir()}\\android"
            script = f"cd {android_rel} && gradlew.bat {' '.join(args)}"
            return [str(self._host.cmd_exe), "/c", script], self._workspace.root

        return ["./gradlew", *args], self._workspace.android_dir

    def build(
        self, variant: Variant, *, tag: str, version: str
    ) -> Result[ReleaseArtifact, ReleaseError]:
        """Build ``variant`` and copy its APK into the release directory.

        Returns:
            Ok(ReleaseArtifact) on success
            Err(ReleaseError) on failure; mutated files are restored either way
        """
        self._console.header(f"Creating release: {version}{variant.suffix}")

        pending = PendingMutation(self._workspace.app_dir)
        try:
            result = self._build_mutated(variant, pending, tag=tag, version=version)
        finally:
            restored = pending.restore()

        if isinstance(restored, Err):
            if isinstance(result, Err):
                # Keep the build error; the restore failure is only warned about
                err = restored.error
                self._console.warning(f"could not restore {err.path}: {err.message}")
                return result
            return restored
        return result

    def _build_mutated(
        self,
        variant: Variant,
        pending: PendingMutation,
        *,
        tag: str,
        version: str,
    ) -> Result[ReleaseArtifact, ReleaseError]:
        applied = pending.apply(recipe_for(variant))
        if isinstance(applied, Err):
            return applied
        for description in applied.value:
            self._console.warning(f"{variant}: pattern not found, skipped: {description}")

        build_dir = self._workspace.build_dir(variant.build_dir_name)
        if build_dir.exists():
            try:
                shutil.rmtree(build_dir)
            except OSError as e:
                return Err(FileIoError(path=build_dir, message=f"failed to clean: {e}"))

        cmd, cwd = self.gradle_command(variant)
        self._console.info(f"Building APK file v{version}{variant.suffix}...")
        self._console.print(f"({cwd}) {' '.join(cmd)}", Style.DIM)
        built = run_silent(cmd, cwd=cwd, timeout=self._gradle_timeout)
        if isinstance(built, Err):
            return Err(
                BuildFailed(
                    step=f"gradle {GRADLE_TASK} ({variant})",
                    returncode=built.error.returncode,
                    detail=built.error.stderr.strip(),
                )
            )

        built_apk = self.built_apk_path(variant)
        if not built_apk.is_file():
            return Err(ArtifactNotFoundError(path=built_apk))

        file_name = self.artifact_file_name(variant, version)
        release_dir = self._workspace.release_dir
        apk_path = release_dir / file_name

        self._console.print(f"Built APK at {built_apk}", Style.DIM)
        self._console.print(f"APK size: {built_apk.stat().st_size}", Style.DIM)

        try:
            release_dir.mkdir(parents=True, exist_ok=True)
            self._console.print(f"Copying APK to {apk_path}", Style.DIM)
            shutil.copyfile(built_apk, apk_path)
            if variant.is_primary:
                latest = release_dir / self.latest_file_name
                self._console.print(f"Copying APK to {latest}", Style.DIM)
                shutil.copyfile(built_apk, latest)
        except OSError as e:
            return Err(FileIoError(path=release_dir, message=f"failed to copy APK: {e}"))

        return Ok(
            ReleaseArtifact(
                variant=variant,
                download_url=self.download_url(tag, file_name),
                file_name=file_name,
                local_path=apk_path,
            )
        )
