from __future__ import annotations

from enum import StrEnum
from pathlib import Path

import typer

from droidrel import __version__
from droidrel.cli.context import build_context
from droidrel.core.errors import ErrorCode
from droidrel.core.result import Err, Ok
from droidrel.output.console import ConsoleProtocol, Style
from droidrel.output.errors import print_release_error, release_error_exit_code
from droidrel.release.model import ReleaseType
from droidrel.release.run_state import RunState
from droidrel.release.service import AndroidReleaseService

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)


class ReleaseKind(StrEnum):
    prerelease = "prerelease"
    full = "full"


def _print_progress(state: RunState, console: ConsoleProtocol) -> None:
    completed = state.summary()
    if not completed:
        console.print("No release step completed.", Style.DIM)
        return
    console.print("Completed before the failure:", Style.DIM)
    for line in completed:
        console.print(f"  - {line}", Style.DIM)


def _print_traceback() -> None:
    from rich.console import Console

    Console(stderr=True).print_exception()


@app.command()
def release(
    release_type: ReleaseKind = typer.Option(
        ReleaseKind.prerelease, "--type", help="Publish as a pre-release or a full release"
    ),
    release_name: str | None = typer.Option(
        None,
        "--release-name",
        help="Build only this variant (main, 32bit, vosk); any other name exits with 2",
        show_default=False,
    ),
    root: Path = typer.Option(Path("."), "--root", help="Repository root"),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: <root>/droidrel.toml)",
        show_default=False,
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Build the Android APK variants and publish them as a GitHub release.

    Exit status: 0 on success, 1 when the release fails, 2 for usage errors
    such as an unknown --release-name or an invalid root or config.
    """
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    ctx = build_context(root=root, config_path=config)
    service = AndroidReleaseService(
        workspace=ctx.workspace,
        host=ctx.host,
        config=ctx.config,
        console=ctx.console,
    )

    kind: ReleaseType = "full" if release_type == ReleaseKind.full else "prerelease"
    try:
        result = service.run(release_type=kind, only=release_name)
    except Exception as e:  # noqa: BLE001
        ctx.console.error(f"Fatal error: {e}")
        _print_traceback()
        _print_progress(service.state, ctx.console)
        raise typer.Exit(code=int(ErrorCode.RELEASE_FAILED))

    match result:
        case Ok(report):
            ctx.console.success(f"Released {report.tag}")
            if report.release_url:
                ctx.console.print(report.release_url, Style.DIM)
        case Err(error):
            ctx.console.error("Fatal error")
            print_release_error(error, ctx.console)
            _print_progress(service.state, ctx.console)
            raise typer.Exit(code=release_error_exit_code(error))


def main() -> None:
    app()
