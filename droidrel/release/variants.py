"""APK variants and the source edits each one needs.

The set of variants is closed. Each carries its recipe as data: a tuple of
file mutations, applied in order before Gradle runs and reverted after.
Paths in a recipe are relative to the app directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from droidrel.core.result import Err, Ok, Result
from droidrel.release.errors import ReleaseError, UnknownVariant

__all__ = [
    "CopyFrom",
    "Mutation",
    "ReplacePattern",
    "VARIANT_ORDER",
    "Variant",
    "recipe_for",
    "select_variants",
]


class Variant(StrEnum):
    MAIN = "main"
    ABI_32BIT = "32bit"
    VOSK = "vosk"

    @property
    def is_primary(self) -> bool:
        return self == Variant.MAIN

    @property
    def suffix(self) -> str:
        """File name suffix; the primary variant has none."""
        return "" if self.is_primary else f"-{self.value}"

    @property
    def build_dir_name(self) -> str:
        return f"build-{self.value}"


VARIANT_ORDER: tuple[Variant, ...] = (Variant.MAIN, Variant.ABI_32BIT, Variant.VOSK)


@dataclass(frozen=True, slots=True)
class ReplacePattern:
    """Replace the first match of ``pattern`` in ``target``."""

    target: str
    pattern: str
    replacement: str
    description: str


@dataclass(frozen=True, slots=True)
class CopyFrom:
    """Overwrite ``target`` with the content of ``source``."""

    target: str
    source: str
    description: str


Mutation = ReplacePattern | CopyFrom


_GRADLE = "android/app/build.gradle"
_ALL_ABIS = '"armeabi-v7a", "x86", "arm64-v8a", "x86_64"'
_32BIT_ABIS = '"armeabi-v7a", "x86"'

_RESTRICT_ABIS: tuple[Mutation, ...] = (
    ReplacePattern(
        target=_GRADLE,
        pattern=f"abiFilters {_ALL_ABIS}",
        replacement=f"abiFilters {_32BIT_ABIS}",
        description="restrict abiFilters to 32-bit",
    ),
    ReplacePattern(
        target=_GRADLE,
        pattern=f"include {_ALL_ABIS}",
        replacement=f"include {_32BIT_ABIS}",
        description="restrict ABI splits to 32-bit",
    ),
)

_STRIP_VOICE_TYPING: tuple[Mutation, ...] = (
    CopyFrom(
        target="services/voiceTyping/vosk.js",
        source="services/voiceTyping/vosk.dummy.js",
        description="swap voice typing for its stub",
    ),
    ReplacePattern(
        target="package.json",
        pattern=r'\s+"@joplin/react-native-vosk": ".*",',
        replacement="",
        description="drop react-native-vosk dependency",
    ),
)

_RECIPES: dict[Variant, tuple[Mutation, ...]] = {
    Variant.MAIN: _STRIP_VOICE_TYPING,
    Variant.ABI_32BIT: _RESTRICT_ABIS + _STRIP_VOICE_TYPING,
    Variant.VOSK: (),
}


def recipe_for(variant: Variant) -> tuple[Mutation, ...]:
    return _RECIPES[variant]


def select_variants(only: str | None) -> Result[tuple[Variant, ...], ReleaseError]:
    """Variants to build, in release order, optionally restricted to ``only``.

    An empty name selects every variant, like no name at all.
    """
    if not only:
        return Ok(VARIANT_ORDER)
    for variant in VARIANT_ORDER:
        if variant.value == only:
            return Ok((variant,))
    return Err(UnknownVariant(name=only, available=tuple(v.value for v in VARIANT_ORDER)))
