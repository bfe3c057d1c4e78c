"""Android release orchestration.

Sequence of a run:
1. git pull (best effort: a failure only warns)
2. project build (JS bundle and generated sources)
3. version bump in build.gradle, release tag computed from it
4. one Gradle build per variant, strictly in order
5. GitHub release creation
6. one upload per APK
7. changelog entry and release notes

Every step other than the pull is fatal on failure and nothing is retried.
``state`` records what completed so a failure can be reported precisely.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Protocol

from droidrel.core.config import ReleaseConfig
from droidrel.core.result import Err, Ok, Result
from droidrel.core.workspace import Workspace
from droidrel.git.repository import GitError, Repository
from droidrel.output.console import ConsoleProtocol, Style
from droidrel.platform.detection import HostInfo
from droidrel.platform.process import run as run_process
from droidrel.release import changelog, gh
from droidrel.release.builder import VariantBuilder
from droidrel.release.errors import BuildFailed, FileIoError, ReleaseError
from droidrel.release.http import HttpClient, RealHttpClient
from droidrel.release.model import ReleaseArtifact, ReleaseReport, ReleaseType, UploadedAsset
from droidrel.release.run_state import RunState, Step
from droidrel.release.uploader import upload
from droidrel.release.variants import select_variants
from droidrel.release.version import bump_gradle_file, release_tag

__all__ = ["AndroidReleaseService", "SourceRepo"]

_STDERR_TAIL_LINES = 20


class SourceRepo(Protocol):
    def pull(self) -> Result[str, GitError]: ...

    def latest_tag(self, *, pattern: str) -> str | None: ...

    def commit_subjects(self, *, since: str | None) -> Result[list[str], GitError]: ...


class AndroidReleaseService:
    """Builds and publishes one Android release."""

    def __init__(
        self,
        *,
        workspace: Workspace,
        host: HostInfo,
        config: ReleaseConfig,
        console: ConsoleProtocol,
        http: HttpClient | None = None,
        repo: SourceRepo | None = None,
    ) -> None:
        self._workspace = workspace
        self._config = config
        self._console = console
        self._http: HttpClient = http or RealHttpClient()
        self._repo: SourceRepo = repo or Repository(workspace.root)
        timeout = config.release.gradle_timeout
        self._builder = VariantBuilder(
            workspace=workspace,
            host=host,
            console=console,
            github=config.github,
            artifact_prefix=config.release.artifact_prefix,
            gradle_timeout=float(timeout) if timeout else None,
        )
        self.state = RunState()

    def run(
        self,
        *,
        release_type: ReleaseType = "prerelease",
        only: str | None = None,
    ) -> Result[ReleaseReport, ReleaseError]:
        """Run the whole release.

        Args:
            release_type: "prerelease" or "full".
            only: Build a single variant by name instead of all of them.
        """
        variants = select_variants(only)
        if isinstance(variants, Err):
            return variants

        is_prerelease = release_type == "prerelease"
        settings = self._config.release

        self._sync()

        built = self._project_build()
        if isinstance(built, Err):
            return built
        self.state.done(Step.PROJECT_BUILD)

        if is_prerelease:
            self._console.info("Creating pre-release")
        self._console.info("Updating version numbers in build.gradle...")
        bumped = bump_gradle_file(self._workspace.gradle_file)
        if isinstance(bumped, Err):
            return bumped
        version = bumped.value
        tag = release_tag(version.name, settings.tag_prefix)
        self.state.done(Step.VERSION_BUMP, f"{version.name} (code {version.code})")

        artifacts: list[ReleaseArtifact] = []
        for variant in variants.value:
            artifact = self._builder.build(variant, tag=tag, version=version.name)
            if isinstance(artifact, Err):
                return artifact
            artifacts.append(artifact.value)
            self.state.done(Step.VARIANT_BUILD, artifact.value.file_name)

        self._console.header(f"Creating GitHub release {tag}...")
        token = gh.read_token(workspace_root=self._workspace.root, token_file=self._token_file())
        if isinstance(token, Err):
            return token

        repo_slug = self._config.github.slug
        release = gh.create_release(
            self._http,
            token=token.value,
            repo=repo_slug,
            tag=tag,
            is_prerelease=is_prerelease,
        )
        if isinstance(release, Err):
            return release
        self.state.done(Step.GITHUB_RELEASE, release.value.html_url or tag)

        uploaded: list[UploadedAsset] = []
        for artifact in artifacts:
            asset = self._upload(artifact, upload_url=release.value.upload_url, token=token.value)
            if isinstance(asset, Err):
                return asset
            uploaded.append(asset.value)
            self.state.done(Step.UPLOAD, artifact.file_name)

        report = ReleaseReport(
            tag=tag,
            version=version.name,
            version_code=version.code,
            is_prerelease=is_prerelease,
            artifacts=tuple(artifacts),
            release_url=release.value.html_url,
            uploaded=tuple(uploaded),
        )
        if report.main_download_url is not None:
            self._console.success(f"Main download URL: {report.main_download_url}")

        entry = self._changelog_entry(tag=tag, is_prerelease=is_prerelease)
        written = changelog.write_entry(self._workspace.changelog_path, entry)
        if isinstance(written, Err):
            return written
        notes = gh.update_release_body(
            self._http,
            token=token.value,
            repo=repo_slug,
            release_id=release.value.id,
            body=entry.notes,
        )
        if isinstance(notes, Err):
            return notes
        self.state.done(Step.CHANGELOG, str(self._workspace.changelog_path))

        return Ok(report)

    def _sync(self) -> None:
        # Offline or diverged checkouts can still be released
        pulled = self._repo.pull()
        if isinstance(pulled, Err):
            self._console.warning(f"git pull failed, continuing: {pulled.error.message}")
            return
        if pulled.value:
            self._console.print(pulled.value, Style.DIM)
        self.state.done(Step.SYNC)

    def _project_build(self) -> Result[None, ReleaseError]:
        cmd = shlex.split(self._config.release.project_build)
        self._console.info(f"Running: {' '.join(cmd)}")
        result = run_process(cmd, cwd=self._workspace.app_dir)
        if isinstance(result, Err):
            err = result.error
            tail = "\n".join(err.stderr.strip().splitlines()[-_STDERR_TAIL_LINES:])
            return Err(BuildFailed(step=" ".join(cmd), returncode=err.returncode, detail=tail))
        return Ok(None)

    def _token_file(self) -> Path | None:
        token_file = self._config.github.token_file
        return Path(token_file) if token_file else None

    def _upload(
        self,
        artifact: ReleaseArtifact,
        *,
        upload_url: str,
        token: str,
    ) -> Result[UploadedAsset, ReleaseError]:
        url = gh.expand_upload_url(upload_url, name=artifact.file_name)
        try:
            content = artifact.local_path.read_bytes()
        except OSError as e:
            return Err(FileIoError(path=artifact.local_path, message=f"failed to read APK: {e}"))

        self._console.info(f"Uploading {artifact.file_name} to {url}")
        return upload(self._http, url, content, token, file_name=artifact.file_name)

    def _changelog_entry(self, *, tag: str, is_prerelease: bool) -> changelog.ChangelogEntry:
        previous = self._repo.latest_tag(pattern=f"{self._config.release.tag_prefix}*")
        subjects = self._repo.commit_subjects(since=previous)
        lines: list[str] = []
        if isinstance(subjects, Err):
            self._console.warning(f"could not list commits for changelog: {subjects.error.message}")
        else:
            lines = subjects.value

        changelog_repo = f"{self._config.github.owner}/{self._config.github.changelog_repo}"
        return changelog.build_entry(
            tag=tag,
            repo=changelog_repo,
            is_prerelease=is_prerelease,
            lines=lines,
        )
