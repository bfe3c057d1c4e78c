from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from droidrel.core.result import Ok
from droidrel.release.changelog import (
    DEFAULT_TITLE,
    ChangelogEntry,
    build_entry,
    insert_entry,
    write_entry,
)

NOW = datetime(2024, 5, 1, 12, 30, 45, tzinfo=UTC)

EXISTING = """# Joplin Android Changelog

## [android-v2.3.1](https://github.com/laurent22/joplin/releases) - 2024-04-01T10:00:00Z

- Fixed crash
"""


def test_build_entry_prerelease_heading() -> None:
    entry = build_entry(
        tag="android-v2.3.2",
        repo="laurent22/joplin",
        is_prerelease=True,
        lines=["Fixed sync", "Improved search"],
        now=NOW,
    )

    assert entry.heading == (
        "## [android-v2.3.2](https://github.com/laurent22/joplin/releases/tag/android-v2.3.2)"
        " (Pre-release) - 2024-05-01T12:30:45Z"
    )
    assert entry.notes == "- Fixed sync\n- Improved search"


def test_build_entry_full_release_has_no_marker() -> None:
    entry = build_entry(
        tag="android-v2.3.2", repo="laurent22/joplin", is_prerelease=False, lines=[], now=NOW
    )

    assert "(Pre-release)" not in entry.heading
    assert entry.render() == entry.heading + "\n"
    assert entry.notes == "No changes listed."


def test_insert_above_newest_entry() -> None:
    entry = ChangelogEntry(heading="## new", lines=("A",))

    result = insert_entry(EXISTING, entry)

    assert result.startswith("# Joplin Android Changelog\n\n## new\n\n- A\n\n## [android-v2.3.1]")
    assert result.endswith("- Fixed crash\n")


def test_insert_into_empty_file_adds_title() -> None:
    entry = ChangelogEntry(heading="## new", lines=())

    assert insert_entry("", entry) == f"{DEFAULT_TITLE}\n\n## new\n"


def test_insert_without_entries_appends() -> None:
    entry = ChangelogEntry(heading="## new", lines=())

    assert insert_entry("# Title", entry) == "# Title\n\n## new\n"


def test_write_entry_creates_file(tmp_path: Path) -> None:
    path = tmp_path / "readme" / "changelog_android.md"
    entry = ChangelogEntry(heading="## new", lines=("A",))

    assert write_entry(path, entry) == Ok(None)
    assert path.read_text(encoding="utf-8") == f"{DEFAULT_TITLE}\n\n## new\n\n- A\n"


def test_write_entry_preserves_history(tmp_path: Path) -> None:
    path = tmp_path / "changelog_android.md"
    path.write_text(EXISTING, encoding="utf-8")

    write_entry(path, ChangelogEntry(heading="## new", lines=()))

    content = path.read_text(encoding="utf-8")
    assert content.count("## ") == 2
    assert content.index("## new") < content.index("## [android-v2.3.1]")
