from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from droidrel.core.result import Err, Ok, Result
from droidrel.platform.files import atomic_write_text
from droidrel.release.errors import FileIoError, ReleaseError

DEFAULT_TITLE = "# Android Changelog"


@dataclass(frozen=True, slots=True)
class ChangelogEntry:
    heading: str
    lines: tuple[str, ...]

    @property
    def notes(self) -> str:
        """Body used for the GitHub release description."""
        if not self.lines:
            return "No changes listed."
        return "\n".join(f"- {line}" for line in self.lines)

    def render(self) -> str:
        if not self.lines:
            return self.heading + "\n"
        return f"{self.heading}\n\n{self.notes}\n"


def _utc_timestamp(now: datetime | None = None) -> str:
    moment = now or datetime.now(UTC)
    return moment.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_entry(
    *,
    tag: str,
    repo: str,
    is_prerelease: bool,
    lines: list[str],
    now: datetime | None = None,
) -> ChangelogEntry:
    """Changelog entry for release ``tag``.

    The heading links to the tag page of ``repo`` (owner/name) and is
    classified as a pre-release or a full release.
    """
    link = f"[{tag}](https://github.com/{repo}/releases/tag/{tag})"
    kind = " (Pre-release)" if is_prerelease else ""
    heading = f"## {link}{kind} - {_utc_timestamp(now)}"
    return ChangelogEntry(heading=heading, lines=tuple(lines))


def insert_entry(content: str, entry: ChangelogEntry) -> str:
    """Place ``entry`` above the newest existing entry, below the title."""
    rendered = entry.render()
    if not content.strip():
        return f"{DEFAULT_TITLE}\n\n{rendered}"

    lines = content.splitlines(keepends=True)
    for i, line in enumerate(lines):
        if line.startswith("## "):
            return "".join(lines[:i]) + rendered + "\n" + "".join(lines[i:])

    if not content.endswith("\n"):
        content += "\n"
    return f"{content}\n{rendered}"


def write_entry(path: Path, entry: ChangelogEntry) -> Result[None, ReleaseError]:
    """Insert ``entry`` into the changelog at ``path``, creating it if needed."""
    try:
        existing = path.read_bytes().decode("utf-8") if path.exists() else ""
    except (OSError, UnicodeDecodeError) as e:
        return Err(FileIoError(path=path, message=f"failed to read changelog: {e}"))

    try:
        atomic_write_text(path, insert_entry(existing, entry))
    except OSError as e:
        return Err(FileIoError(path=path, message=f"failed to write changelog: {e}"))
    return Ok(None)
