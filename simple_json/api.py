"""simple_json API模块.

提供无状态的高级接口 `decode`, `encode`, `is_jsonable`, `is_valid`, `check`.
每次调用都会重新校验选项; 需要复用同一组选项时请使用 `simple_json.Json`.
"""

from typing import Any, cast

from . import codec
from .config import (
    Options,
    OptionsLike,
    validate_decode_options,
    validate_encode_options,
)
from .exceptions import ErrorKind, JsonError, UnsupportedTypeError, ValidationError
from .log import logger
from .types import is_jsonable


def decode(text: str | bytes | bytearray, options: OptionsLike = None) -> Any:
    """解码 JSON 文本.

    Args:
        text: JSON 文本. bytes/bytearray 按 UTF-8 解码.
        options: 解码选项: {
            "assoc": 对象解码为 dict (True, 默认) 还是 SimpleNamespace (False),
            "depth": 最大嵌套层数 (默认 512),
            "decode_flags": `DecodeFlag` 位掩码 (默认 BIGINT_AS_STRING),
        }

    Returns:
        解码后的值.

    Raises:
        ValidationError: 选项无效, 或 text 不是字符串 (JSON_MUST_BE_STRING).
        DecodeError: 解码失败.

    Examples:
        >>> decode('{"a": [1, 2]}')
        {'a': [1, 2]}
        >>> decode('{"a": 1}', {"assoc": False}).a
        1
    """
    return _decode(text, validate_decode_options(options))


def encode(value: Any, options: OptionsLike = None) -> str:
    """编码为 JSON 文本.

    Args:
        value: 待编码的值, 必须满足 `is_jsonable`.
        options: 编码选项: {
            "encode_flags": `EncodeFlag` 位掩码 (默认见 DEFAULT_ENCODE_FLAGS),
            "depth": 最大嵌套层数 (默认 512),
        }

    Returns:
        str: JSON 文本.

    Raises:
        ValidationError: 选项无效.
        UnsupportedTypeError: 值不可编码, 此时不会调用编解码器.
        EncodeError: 编码失败.

    Examples:
        >>> encode({"path": "a/b", "name": "café"})
        '{"path":"a/b","name":"café"}'
    """
    return _encode(value, validate_encode_options(options))


def is_valid(text: Any) -> bool:
    """判断值是否为合法的 JSON 字符串 (使用默认选项).

    不会抛出任何 simple_json 异常.
    """
    return check(text) is None


def check(text: Any) -> JsonError | None:
    """尝试以默认选项解码, 返回导致失败的异常.

    Returns:
        JsonError | None: 合法时为 None, 否则为捕获到的异常.
    """
    try:
        _decode(text, validate_decode_options())
    except JsonError as e:
        logger.debug("JSON 无效: %s", codec.describe_failure(e, text))
        return e
    return None


def _decode(text: Any, options: Options) -> Any:
    if not isinstance(text, str | bytes | bytearray):
        raise ValidationError(
            ErrorKind.JSON_MUST_BE_STRING, {"type": type(text).__name__}
        )
    return codec.loads(text, options.assoc, options.depth, options.decode_flags)


def _encode(value: Any, options: Options) -> str:
    if not is_jsonable(value):
        raise UnsupportedTypeError(value)
    return cast(str, codec.dumps(value, options.encode_flags, options.depth))
