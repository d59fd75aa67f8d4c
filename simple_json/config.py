"""编解码选项记录与校验.

`Options` 是所有配置的统一容器, 在 API 入口层由选项映射校验生成,
然后传递给编解码器.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import ErrorKind, ValidationError
from .options import (
    DEFAULT_ASSOC,
    DEFAULT_DECODE_FLAGS,
    DEFAULT_DEPTH,
    DEFAULT_ENCODE_FLAGS,
    DecodeFlag,
    EncodeFlag,
    OptionKey,
)


@dataclass(frozen=True)
class Options:
    """编解码选项 (不可变).

    构造时即校验各字段, 无效的值抛出 ValidationError;
    重新配置时整体替换, 不逐字段修改.

    Attributes:
        assoc: 是否将 JSON 对象解码为 dict.
        depth: 允许的最大嵌套层数.
        decode_flags: 解码标志 (已合并 THROW_ON_ERROR).
        encode_flags: 编码标志 (已合并 THROW_ON_ERROR).
    """

    assoc: bool = DEFAULT_ASSOC
    depth: int = DEFAULT_DEPTH
    decode_flags: int = int(DEFAULT_DECODE_FLAGS | DecodeFlag.THROW_ON_ERROR)
    encode_flags: int = int(DEFAULT_ENCODE_FLAGS | EncodeFlag.THROW_ON_ERROR)

    def __post_init__(self) -> None:
        # 直接构造的记录同样要校验, 并合并 THROW_ON_ERROR
        values = self.to_dict()
        object.__setattr__(self, "assoc", _read_assoc(values))
        object.__setattr__(self, "depth", _read_depth(values))
        object.__setattr__(self, "decode_flags", _read_decode_flags(values))
        object.__setattr__(self, "encode_flags", _read_encode_flags(values))

    @property
    def pretty(self) -> bool:
        """是否缩进输出."""
        return bool(self.encode_flags & EncodeFlag.PRETTY_PRINT)

    @property
    def escape_unicode(self) -> bool:
        """是否转义非 ASCII 字符."""
        return not self.encode_flags & EncodeFlag.UNESCAPED_UNICODE

    @property
    def escape_slashes(self) -> bool:
        """是否转义 /."""
        return not self.encode_flags & EncodeFlag.UNESCAPED_SLASHES

    @property
    def bigint_as_string(self) -> bool:
        """解码时超大整数是否保留为字符串."""
        return bool(self.decode_flags & DecodeFlag.BIGINT_AS_STRING)

    def to_dict(self) -> dict[str, Any]:
        """返回可以再次传给校验函数的选项映射."""
        return {
            OptionKey.ASSOC.value: self.assoc,
            OptionKey.DEPTH.value: self.depth,
            OptionKey.DECODE_FLAGS.value: self.decode_flags,
            OptionKey.ENCODE_FLAGS.value: self.encode_flags,
        }


OptionsLike = Mapping[OptionKey | str, Any] | Options | None


def _normalize(options: Mapping[Any, Any] | None) -> dict[str, Any]:
    if options is None:
        return {}
    # OptionKey 成员与其字符串值视为同一个键
    return {
        k.value if isinstance(k, OptionKey) else k: v for k, v in options.items()
    }


def _is_int(value: Any) -> bool:
    # bool 是 int 的子类, 但不是合法的整数选项
    return isinstance(value, int) and not isinstance(value, bool)


def _read_assoc(options: dict[str, Any]) -> bool:
    assoc = options.get(OptionKey.ASSOC.value, DEFAULT_ASSOC)
    if not isinstance(assoc, bool):
        raise ValidationError(ErrorKind.INVALID_ASSOC, {"type": type(assoc).__name__})
    return assoc


def _read_depth(options: dict[str, Any]) -> int:
    depth = options.get(OptionKey.DEPTH.value, DEFAULT_DEPTH)
    if not _is_int(depth) or depth < 0:
        raise ValidationError(
            ErrorKind.INVALID_DEPTH, {"type": type(depth).__name__, "value": depth}
        )
    return int(depth)


def _read_decode_flags(options: dict[str, Any]) -> int:
    flags = options.get(OptionKey.DECODE_FLAGS.value, DEFAULT_DECODE_FLAGS)
    if not _is_int(flags):
        raise ValidationError(
            ErrorKind.INVALID_DECODE_FLAGS, {"type": type(flags).__name__}
        )
    return int(flags) | int(DecodeFlag.THROW_ON_ERROR)


def _read_encode_flags(options: dict[str, Any]) -> int:
    flags = options.get(OptionKey.ENCODE_FLAGS.value, DEFAULT_ENCODE_FLAGS)
    if not _is_int(flags):
        raise ValidationError(
            ErrorKind.INVALID_ENCODE_FLAGS, {"type": type(flags).__name__}
        )
    return int(flags) | int(EncodeFlag.THROW_ON_ERROR)


def _reject_unknown(options: dict[str, Any]) -> None:
    known = {key.value for key in OptionKey}
    for key in options:
        if key not in known:
            raise ValidationError(ErrorKind.UNKNOWN_OPTION, {"key": key})


def validate_decode_options(options: OptionsLike = None) -> Options:
    """校验解码选项.

    按 assoc -> depth -> decode_flags 的固定顺序校验, 只报告第一个无效选项.
    映射中的 encode_flags 不参与解码, 被忽略.

    Args:
        options: 选项映射, 或已校验的 `Options`.

    Returns:
        Options: 合法的选项记录.

    Raises:
        ValidationError: INVALID_ASSOC / INVALID_DEPTH / INVALID_DECODE_FLAGS,
            或包含未知选项时为 UNKNOWN_OPTION.
    """
    if isinstance(options, Options):
        return options
    values = _normalize(options)
    assoc = _read_assoc(values)
    depth = _read_depth(values)
    decode_flags = _read_decode_flags(values)
    _reject_unknown(values)
    return Options(assoc=assoc, depth=depth, decode_flags=decode_flags)


def validate_encode_options(options: OptionsLike = None) -> Options:
    """校验编码选项.

    按 encode_flags -> depth 的固定顺序校验, 只报告第一个无效选项.
    映射中的 assoc 与 decode_flags 不参与编码, 被忽略.

    Raises:
        ValidationError: INVALID_ENCODE_FLAGS / INVALID_DEPTH / UNKNOWN_OPTION.
    """
    if isinstance(options, Options):
        return options
    values = _normalize(options)
    encode_flags = _read_encode_flags(values)
    depth = _read_depth(values)
    _reject_unknown(values)
    return Options(depth=depth, encode_flags=encode_flags)


def validate_options(options: OptionsLike = None) -> Options:
    """校验全部四个选项, 供可配置的 `Json` 实例使用.

    顺序为 assoc -> depth -> decode_flags -> encode_flags.
    """
    if isinstance(options, Options):
        return options
    values = _normalize(options)
    assoc = _read_assoc(values)
    depth = _read_depth(values)
    decode_flags = _read_decode_flags(values)
    encode_flags = _read_encode_flags(values)
    _reject_unknown(values)
    return Options(
        assoc=assoc,
        depth=depth,
        decode_flags=decode_flags,
        encode_flags=encode_flags,
    )
