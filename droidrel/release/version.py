"""Version bump for the Gradle build file.

``build.gradle`` is only patched in two places, ``versionCode N`` and
``versionName "X.Y.Z"``, so the edits are regex splices that leave every
other byte of the file untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from droidrel.core.result import Err, Ok, Result
from droidrel.platform.files import atomic_write_text
from droidrel.release.errors import FileIoError, NoChangeError, ParseError, ReleaseError

__all__ = [
    "VersionInfo",
    "bump_gradle_file",
    "extract_version_code",
    "extract_version_name",
    "increment_version_code",
    "increment_version_name",
    "release_tag",
]

_VERSION_CODE_RE = re.compile(r"versionCode\s+(\d+)")
_VERSION_NAME_RE = re.compile(r'versionName\s+"(\d+?\.\d+?\.)(\d+)"')


@dataclass(frozen=True, slots=True)
class VersionInfo:
    code: int
    name: str


def _splice(text: str, start: int, end: int, value: str) -> str:
    return text[:start] + value + text[end:]


def increment_version_code(text: str) -> Result[str, ReleaseError]:
    """Add 1 to the first ``versionCode``."""
    m = _VERSION_CODE_RE.search(text)
    if m is None:
        return Err(ParseError(field="versionCode", message="field not found"))

    n = int(m.group(1))
    if n == 0:
        return Err(ParseError(field="versionCode", message=f"invalid version code: {m.group(1)}"))

    out = _splice(text, m.start(1), m.end(1), str(n + 1))
    if out == text:
        return Err(NoChangeError(field="versionCode"))
    return Ok(out)


def increment_version_name(text: str) -> Result[str, ReleaseError]:
    """Add 1 to the patch component of the first ``versionName``."""
    m = _VERSION_NAME_RE.search(text)
    if m is None:
        return Err(ParseError(field="versionName", message='no "MAJOR.MINOR.PATCH" value'))

    patch = int(m.group(2))
    out = _splice(text, m.start(2), m.end(2), str(patch + 1))
    if out == text:
        return Err(NoChangeError(field="versionName"))
    return Ok(out)


def extract_version_name(text: str) -> Result[str, ReleaseError]:
    m = _VERSION_NAME_RE.search(text)
    if m is None:
        return Err(ParseError(field="versionName", message="cannot get version name"))
    return Ok(m.group(1) + m.group(2))


def extract_version_code(text: str) -> Result[int, ReleaseError]:
    m = _VERSION_CODE_RE.search(text)
    if m is None:
        return Err(ParseError(field="versionCode", message="cannot get version code"))
    return Ok(int(m.group(1)))


def release_tag(version: str, prefix: str = "android-v") -> str:
    return f"{prefix}{version}"


def bump_gradle_file(path: Path) -> Result[VersionInfo, ReleaseError]:
    """Increment version code and name in ``path`` and write it back.

    The file is written only once both increments succeeded.

    Returns:
        Ok(VersionInfo) with the new values, or the first error.
    """
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(FileIoError(path=path, message=f"failed to read: {e}"))

    code_bumped = increment_version_code(text)
    if isinstance(code_bumped, Err):
        return code_bumped
    name_bumped = increment_version_name(code_bumped.value)
    if isinstance(name_bumped, Err):
        return name_bumped

    new_text = name_bumped.value
    name = extract_version_name(new_text)
    if isinstance(name, Err):
        return name
    code = extract_version_code(new_text)
    if isinstance(code, Err):
        return code

    try:
        atomic_write_text(path, new_text)
    except OSError as e:
        return Err(FileIoError(path=path, message=f"failed to write: {e}"))

    return Ok(VersionInfo(code=code.value, name=name.value))
