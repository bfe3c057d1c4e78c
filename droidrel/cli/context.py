from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from droidrel.core.config import CONFIG_FILE_NAME, ReleaseConfig, load_config_or_default
from droidrel.core.errors import ErrorCode
from droidrel.core.result import Err
from droidrel.core.workspace import Workspace, detect_workspace
from droidrel.output.console import ConsoleProtocol, RichConsole
from droidrel.platform.detection import HostInfo, detect


@dataclass(frozen=True, slots=True)
class CLIContext:
    workspace: Workspace
    host: HostInfo
    config: ReleaseConfig
    console: ConsoleProtocol


def build_context(*, root: Path, config_path: Path | None) -> CLIContext:
    """Resolve config and workspace, exiting with a usage error if invalid."""
    try:
        resolved_root = root.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --root: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USAGE_ERROR))

    config_result = load_config_or_default(config_path or resolved_root / CONFIG_FILE_NAME)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USAGE_ERROR))
    config = config_result.value

    workspace_result = detect_workspace(resolved_root, config.paths)
    if isinstance(workspace_result, Err):
        typer.echo(f"error: {workspace_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USAGE_ERROR))

    return CLIContext(
        workspace=workspace_result.value,
        host=detect(),
        config=config,
        console=RichConsole(),
    )
