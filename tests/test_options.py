"""测试编解码标志与预设."""

import pytest

from simple_json import (
    DEFAULT_ENCODE_FLAGS,
    ENCODE_ASCII,
    ENCODE_HEX,
    ENCODE_HTML,
    ENCODE_PRETTY,
    DecodeFlag,
    EncodeFlag,
    OptionKey,
)


def test_encode_flags_are_distinct_bits() -> None:
    """编码标志两两不重叠."""
    members = [flag for flag in EncodeFlag if flag]
    combined = 0
    for flag in members:
        assert not combined & flag
        combined |= flag


def test_bigint_does_not_imply_hex_amp() -> None:
    """默认编码标志不包含任何 HEX_* 转义."""
    hex_flags = (
        EncodeFlag.HEX_TAG
        | EncodeFlag.HEX_AMP
        | EncodeFlag.HEX_APOS
        | EncodeFlag.HEX_QUOT
    )

    assert not DEFAULT_ENCODE_FLAGS & hex_flags


def test_throw_on_error_shares_bit() -> None:
    """编码与解码的 THROW_ON_ERROR 使用同一位."""
    assert int(EncodeFlag.THROW_ON_ERROR) == int(DecodeFlag.THROW_ON_ERROR)


@pytest.mark.parametrize(
    ("preset", "added", "removed"),
    [
        (ENCODE_ASCII, EncodeFlag.NONE, EncodeFlag.UNESCAPED_UNICODE),
        (
            ENCODE_HEX,
            EncodeFlag.HEX_TAG
            | EncodeFlag.HEX_AMP
            | EncodeFlag.HEX_APOS
            | EncodeFlag.HEX_QUOT,
            EncodeFlag.NONE,
        ),
        (ENCODE_HTML, EncodeFlag.NONE, EncodeFlag.UNESCAPED_SLASHES),
        (ENCODE_PRETTY, EncodeFlag.PRETTY_PRINT, EncodeFlag.NONE),
    ],
)
def test_presets_derived_from_defaults(preset, added, removed) -> None:
    """每个预设都只在默认标志上增减少数几位."""
    assert preset == (DEFAULT_ENCODE_FLAGS | added) & ~removed


def test_option_key_values() -> None:
    """OptionKey 的值即映射中的字符串键."""
    assert [key.value for key in OptionKey] == [
        "assoc",
        "depth",
        "decode_flags",
        "encode_flags",
    ]
    assert OptionKey.DEPTH == "depth"
