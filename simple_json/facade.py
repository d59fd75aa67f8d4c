"""可配置的 JSON 编解码器.

提供 `Json` 类: 构造时校验一次选项并绑定, 之后的每次调用都复用该选项记录.
适合 "配置一次, 多次使用" 的热路径.
"""

from typing import Any

from typing_extensions import Self

from . import codec
from .api import _decode, _encode, is_jsonable
from .config import Options, OptionsLike, validate_options
from .exceptions import JsonError
from .log import logger
from .options import ENCODE_ASCII, ENCODE_HEX, ENCODE_HTML, ENCODE_PRETTY, OptionKey


class Json:
    """绑定了一组选项的 JSON 编解码器.

    与模块级函数 `decode` / `encode` 行为等价, 只是选项只在构造或
    `set_options` 时校验一次.

    Examples:
        >>> json = Json({"depth": 8})
        >>> json.decode('{"a": 1}')
        {'a': 1}
        >>> Json.pretty().encode({"a": 1})
        '{\\n    "a": 1\\n}'
    """

    def __init__(self, options: OptionsLike = None) -> None:
        """初始化编解码器.

        Args:
            options: 选项映射 (assoc, depth, decode_flags, encode_flags),
                或已校验的 `Options`.

        Raises:
            ValidationError: 选项无效.
        """
        self._options = validate_options(options)

    @classmethod
    def ascii(cls) -> Self:
        """非 ASCII 字符以 \\uXXXX 转义输出."""
        return cls({OptionKey.ENCODE_FLAGS: ENCODE_ASCII})

    @classmethod
    def hex(cls) -> Self:
        """字符串中的 < > & ' " 以 \\uXXXX 转义输出, 可安全嵌入 HTML."""
        return cls({OptionKey.ENCODE_FLAGS: ENCODE_HEX})

    @classmethod
    def html(cls) -> Self:
        """转义 /, 避免输出中出现 </script>."""
        return cls({OptionKey.ENCODE_FLAGS: ENCODE_HTML})

    @classmethod
    def pretty(cls) -> Self:
        """四空格缩进输出."""
        return cls({OptionKey.ENCODE_FLAGS: ENCODE_PRETTY})

    @property
    def options(self) -> Options:
        """当前绑定的选项记录."""
        return self._options

    def set_options(self, options: OptionsLike) -> Self:
        """整体替换绑定的选项记录.

        校验失败时保留原有选项.

        Returns:
            Json: self, 便于链式调用.

        Raises:
            ValidationError: 选项无效.
        """
        self._options = validate_options(options)
        return self

    def decode(self, text: str | bytes | bytearray) -> Any:
        """使用绑定的选项解码.

        Raises:
            ValidationError: text 不是字符串.
            DecodeError: 解码失败.
        """
        return _decode(text, self._options)

    def encode(self, value: Any) -> str:
        """使用绑定的选项编码.

        Raises:
            UnsupportedTypeError: 值不可编码.
            EncodeError: 编码失败.
        """
        return _encode(value, self._options)

    def is_jsonable(self, value: Any) -> bool:
        """同 `simple_json.is_jsonable`."""
        return is_jsonable(value)

    def is_valid(self, text: Any) -> bool:
        """使用绑定的选项判断 text 是否为合法 JSON, 不抛出异常."""
        return self.check(text) is None

    def check(self, text: Any) -> JsonError | None:
        """使用绑定的选项解码, 返回导致失败的异常或 None."""
        try:
            _decode(text, self._options)
        except JsonError as e:
            logger.debug("JSON 无效: %s", codec.describe_failure(e, text))
            return e
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._options!r})"
