"""Git repository abstraction.

Only the operations a release needs: pulling upstream changes and reading
the commit subjects since the previous release tag.

Usage:
    repo = Repository(root)
    match repo.pull():
        case Ok(output):
            console.print(output, Style.DIM)
        case Err(e):
            console.warning(f"git pull failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from droidrel.core.result import Err, Ok, Result
from droidrel.platform.process import ProcessError
from droidrel.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git repository rooted at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def pull(self) -> Result[str, GitError]:
        """Pull from the configured upstream.

        Returns:
            Ok(output) on success
            Err(GitError) on failure (conflicts, no upstream, offline, etc.)
        """
        result = self._run(["pull"])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="pull",
                        message=e.stderr.strip() or e.stdout.strip() or "pull failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip())

    def latest_tag(self, *, pattern: str) -> str | None:
        """Most recent tag reachable from HEAD matching the glob ``pattern``.

        Returns None if there is no such tag or git fails.
        """
        result = self._run(["describe", "--tags", "--abbrev=0", f"--match={pattern}", "HEAD"])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def commit_subjects(self, *, since: str | None) -> Result[list[str], GitError]:
        """Subjects of non-merge commits after ``since`` (or the last 50)."""
        args = ["log", "--no-merges", "--pretty=format:%s"]
        if since:
            args.append(f"{since}..HEAD")
        else:
            args.extend(["-n", "50"])

        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="log",
                        message=e.stderr.strip() or "git log failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
