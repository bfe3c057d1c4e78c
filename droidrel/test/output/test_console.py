from __future__ import annotations

import pytest

from droidrel.output.console import MockConsole, RichConsole, Style


def test_mock_console_records_styles() -> None:
    console = MockConsole()

    console.info("Building APK")
    console.warning("pattern not found")
    console.success("done")

    assert console.messages == ["info: Building APK", "warning: pattern not found", "OK done"]
    assert console.has_warning()
    assert not console.has_error()
    assert [o.style for o in console.find("done")] == [Style.SUCCESS]


def test_rich_console_splits_streams(capsys: pytest.CaptureFixture[str]) -> None:
    console = RichConsole()

    console.info("building [main]")
    console.error("upload failed")

    captured = capsys.readouterr()
    assert "building [main]" in captured.out
    assert "upload failed" in captured.err
    assert "upload failed" not in captured.out
