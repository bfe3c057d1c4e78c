from __future__ import annotations

from droidrel.core.result import Err, Ok
from droidrel.release.errors import UnknownVariant
from droidrel.release.variants import (
    VARIANT_ORDER,
    CopyFrom,
    ReplacePattern,
    Variant,
    recipe_for,
    select_variants,
)


def test_variant_order_is_fixed() -> None:
    assert [v.value for v in VARIANT_ORDER] == ["main", "32bit", "vosk"]


def test_suffix_and_build_dir() -> None:
    assert Variant.MAIN.suffix == ""
    assert Variant.ABI_32BIT.suffix == "-32bit"
    assert Variant.VOSK.suffix == "-vosk"
    assert Variant.VOSK.build_dir_name == "build-vosk"


def test_select_all_by_default() -> None:
    assert select_variants(None) == Ok(VARIANT_ORDER)


def test_select_empty_name_means_all() -> None:
    assert select_variants("") == Ok(VARIANT_ORDER)


def test_select_single() -> None:
    assert select_variants("vosk") == Ok((Variant.VOSK,))


def test_select_unknown() -> None:
    result = select_variants("x86")
    assert isinstance(result, Err)
    assert result.error == UnknownVariant(name="x86", available=("main", "32bit", "vosk"))


def _targets(variant: Variant) -> set[str]:
    return {m.target for m in recipe_for(variant)}


def test_vosk_keeps_voice_typing() -> None:
    assert recipe_for(Variant.VOSK) == ()


def test_main_and_32bit_swap_voice_typing_stub() -> None:
    for variant in (Variant.MAIN, Variant.ABI_32BIT):
        swaps = [m for m in recipe_for(variant) if isinstance(m, CopyFrom)]
        assert len(swaps) == 1
        assert swaps[0].target == "services/voiceTyping/vosk.js"
        assert swaps[0].source == "services/voiceTyping/vosk.dummy.js"
        assert "package.json" in _targets(variant)


def test_only_32bit_restricts_abis() -> None:
    assert "android/app/build.gradle" in _targets(Variant.ABI_32BIT)
    assert "android/app/build.gradle" not in _targets(Variant.MAIN)

    replacements = [m for m in recipe_for(Variant.ABI_32BIT) if isinstance(m, ReplacePattern)]
    gradle = [m for m in replacements if m.target == "android/app/build.gradle"]
    assert all(m.replacement.endswith('"armeabi-v7a", "x86"') for m in gradle)
