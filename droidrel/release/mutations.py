"""Snapshot and restore of files edited for a variant build.

``PendingMutation`` records the original bytes of a file before its first
edit. ``restore()`` writes every recorded file back, so the working tree is
byte-identical to how the variant found it.

Usage:
    pending = PendingMutation(app_dir)
    try:
        pending.apply(recipe_for(variant))
        ...
    finally:
        pending.restore()
"""

from __future__ import annotations

import re
from pathlib import Path

from droidrel.core.result import Err, Ok, Result
from droidrel.platform.files import atomic_write_bytes
from droidrel.release.errors import FileIoError, ReleaseError
from droidrel.release.variants import CopyFrom, Mutation, ReplacePattern

__all__ = ["PendingMutation"]


class PendingMutation:
    """Original content of every file mutated for one variant."""

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir
        self._originals: dict[Path, bytes] = {}

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(self._originals)

    def original(self, path: Path) -> bytes | None:
        return self._originals.get(path)

    def apply(self, mutations: tuple[Mutation, ...]) -> Result[list[str], ReleaseError]:
        """Apply ``mutations`` in order.

        Returns:
            Ok(descriptions) of pattern replacements that matched nothing,
            or Err on the first I/O failure. Files already edited stay
            recorded so ``restore()`` still reverts them.
        """
        unmatched: list[str] = []
        for mutation in mutations:
            target = self._base_dir / mutation.target
            match mutation:
                case CopyFrom(source=source):
                    result = self._copy_from(target, self._base_dir / source)
                case ReplacePattern(pattern=pattern, replacement=replacement):
                    result = self._replace(target, pattern, replacement)
                case _:
                    raise AssertionError(f"unexpected mutation: {mutation}")

            if isinstance(result, Err):
                return result
            if not result.value:
                unmatched.append(mutation.description)
        return Ok(unmatched)

    def restore(self) -> Result[None, FileIoError]:
        """Write back every recorded file.

        All files are attempted even if one fails; the first failure is
        returned. Successfully restored files are forgotten.
        """
        first_error: FileIoError | None = None
        for path, content in list(self._originals.items()):
            try:
                atomic_write_bytes(path, content)
            except OSError as e:
                if first_error is None:
                    first_error = FileIoError(path=path, message=f"failed to restore: {e}")
                continue
            del self._originals[path]

        if first_error is not None:
            return Err(first_error)
        return Ok(None)

    def _snapshot(self, path: Path) -> Result[bytes, ReleaseError]:
        if path in self._originals:
            return Ok(self._originals[path])
        try:
            content = path.read_bytes()
        except OSError as e:
            return Err(FileIoError(path=path, message=f"failed to read: {e}"))
        self._originals[path] = content
        return Ok(content)

    def _write(self, path: Path, content: bytes) -> Result[bool, ReleaseError]:
        try:
            atomic_write_bytes(path, content)
        except OSError as e:
            return Err(FileIoError(path=path, message=f"failed to write: {e}"))
        return Ok(True)

    def _copy_from(self, target: Path, source: Path) -> Result[bool, ReleaseError]:
        try:
            content = source.read_bytes()
        except OSError as e:
            return Err(FileIoError(path=source, message=f"failed to read: {e}"))

        snap = self._snapshot(target)
        if isinstance(snap, Err):
            return snap
        return self._write(target, content)

    def _replace(self, target: Path, pattern: str, replacement: str) -> Result[bool, ReleaseError]:
        # Current content, which may already carry earlier edits
        try:
            current = target.read_bytes()
        except OSError as e:
            return Err(FileIoError(path=target, message=f"failed to read: {e}"))

        try:
            text = current.decode("utf-8")
        except UnicodeDecodeError as e:
            return Err(FileIoError(path=target, message=f"invalid UTF-8: {e}"))

        new_text, count = re.subn(pattern, lambda _m: replacement, text, count=1)
        if count == 0:
            return Ok(False)

        snap = self._snapshot(target)
        if isinstance(snap, Err):
            return snap
        return self._write(target, new_text.encode("utf-8"))
