"""Typed configuration loading.

The release tool works without any config file; ``droidrel.toml`` at the
repository root only overrides the defaults below.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "GitHubConfig",
    "PathsConfig",
    "ReleaseConfig",
    "ReleaseSettings",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "droidrel.toml"

DEFAULT_OWNER = "laurent22"
DEFAULT_PROJECT = "joplin-android"
DEFAULT_CHANGELOG_REPO = "joplin"
DEFAULT_TAG_PREFIX = "android-v"
DEFAULT_ARTIFACT_PREFIX = "joplin"
DEFAULT_PROJECT_BUILD = "yarn run build"
DEFAULT_APP_DIR = "packages/app-mobile"
DEFAULT_CHANGELOG = "readme/changelog_android.md"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Where releases are published and how to authenticate."""

    owner: str = DEFAULT_OWNER
    project: str = DEFAULT_PROJECT
    changelog_repo: str = DEFAULT_CHANGELOG_REPO
    token_file: str | None = None

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.project}"


@dataclass(frozen=True, slots=True)
class ReleaseSettings:
    tag_prefix: str = DEFAULT_TAG_PREFIX
    artifact_prefix: str = DEFAULT_ARTIFACT_PREFIX
    project_build: str = DEFAULT_PROJECT_BUILD
    # 0 disables the timeout
    gradle_timeout: int = 0


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Paths relative to the repository root."""

    app: str = DEFAULT_APP_DIR
    changelog: str = DEFAULT_CHANGELOG


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Main configuration container."""

    github: GitHubConfig = field(default_factory=GitHubConfig)
    release: ReleaseSettings = field(default_factory=ReleaseSettings)
    paths: PathsConfig = field(default_factory=PathsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create ReleaseConfig from a mapping (parsed TOML)."""
        github: StrDict = get_table(data, "github") or {}
        release: StrDict = get_table(data, "release") or {}
        paths: StrDict = get_table(data, "paths") or {}

        timeout = get_int(release, "gradle_timeout")
        if timeout is not None and timeout < 0:
            raise ValueError("release.gradle_timeout must be >= 0")

        return cls(
            github=GitHubConfig(
                owner=get_str(github, "owner") or DEFAULT_OWNER,
                project=get_str(github, "project") or DEFAULT_PROJECT,
                changelog_repo=get_str(github, "changelog_repo") or DEFAULT_CHANGELOG_REPO,
                token_file=get_str(github, "token_file"),
            ),
            release=ReleaseSettings(
                tag_prefix=get_str(release, "tag_prefix") or DEFAULT_TAG_PREFIX,
                artifact_prefix=get_str(release, "artifact_prefix") or DEFAULT_ARTIFACT_PREFIX,
                project_build=get_str(release, "project_build") or DEFAULT_PROJECT_BUILD,
                gradle_timeout=timeout or 0,
            ),
            paths=PathsConfig(
                app=get_str(paths, "app") or DEFAULT_APP_DIR,
                changelog=get_str(paths, "changelog") or DEFAULT_CHANGELOG,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to droidrel.toml

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load config from ``path`` if it exists, else return the defaults.

    A file that exists but does not parse is still an error.
    """
    if not path.exists():
        return Ok(ReleaseConfig())
    return load_config(path)
