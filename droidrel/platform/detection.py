"""Host detection for choosing how Gradle is invoked.

Release builds can run from a Linux shell inside WSL while the Android SDK
lives on the Windows side. In that case Gradle must be started through
``cmd.exe`` with ``gradlew.bat``; everywhere else ``./gradlew`` is used.
"""

from __future__ import annotations

import sys as _sys
from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache
from pathlib import Path

__all__ = [
    "GradleHost",
    "HostInfo",
    "WINDOWS_CMD",
    "detect",
    "detect_gradle_host",
]

WINDOWS_CMD = Path("/mnt/c/Windows/System32/cmd.exe")


class GradleHost(Enum):
    """How the Gradle wrapper is launched."""

    UNIX = auto()  # ./gradlew from the android directory
    WSL_CMD = auto()  # cmd.exe /c "cd ... && gradlew.bat ..."

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class HostInfo:
    gradle_host: GradleHost
    cmd_exe: Path | None = None

    @property
    def uses_windows_gradle(self) -> bool:
        return self.gradle_host == GradleHost.WSL_CMD


def detect_gradle_host(cmd_exe: Path = WINDOWS_CMD) -> GradleHost:
    """Pick the Gradle launcher for this host.

    ``cmd_exe`` exists only when running under WSL with the C: drive mounted.
    """
    if _sys.platform.startswith("linux") and cmd_exe.is_file():
        return GradleHost.WSL_CMD
    return GradleHost.UNIX


@lru_cache(maxsize=1)
def detect() -> HostInfo:
    """Detect host information (cached)."""
    host = detect_gradle_host()
    return HostInfo(
        gradle_host=host,
        cmd_exe=WINDOWS_CMD if host == GradleHost.WSL_CMD else None,
    )
