"""JSON 编码/解码的配置选项.

该模块定义了控制 `encode` 和 `decode` 行为的位标志、选项键以及默认值.
"""

from enum import Enum, IntFlag


class OptionKey(str, Enum):
    """选项映射中可用的键.

    调用方既可以使用枚举成员, 也可以直接使用其字符串值:
        {OptionKey.DEPTH: 32} 等价于 {"depth": 32}
    """

    # 是否将 JSON 对象解码为 dict (否则为 SimpleNamespace)
    ASSOC = "assoc"

    # 允许的最大嵌套层数
    DEPTH = "depth"

    # 解码标志
    DECODE_FLAGS = "decode_flags"

    # 编码标志
    ENCODE_FLAGS = "encode_flags"


class EncodeFlag(IntFlag):
    """编码标志.

    可以使用位运算组合多个标志:
        flags = EncodeFlag.PRETTY_PRINT | EncodeFlag.UNESCAPED_SLASHES
    """

    NONE = 0

    # 字符串中的 < 和 > 写为 \u003C \u003E
    HEX_TAG = 1 << 0

    # 字符串中的 & 写为 \u0026
    HEX_AMP = 1 << 1

    # 字符串中的 ' 写为 \u0027
    HEX_APOS = 1 << 2

    # 字符串中的 " 写为 \u0022
    HEX_QUOT = 1 << 3

    # 列表也编码为对象 (键为下标)
    FORCE_OBJECT = 1 << 4

    # 不转义 /
    UNESCAPED_SLASHES = 1 << 6

    # 四空格缩进输出
    PRETTY_PRINT = 1 << 7

    # 非 ASCII 字符原样输出
    UNESCAPED_UNICODE = 1 << 8

    # 整数值的浮点数保留 .0
    PRESERVE_ZERO_FRACTION = 1 << 10

    # 配合 UNESCAPED_UNICODE 时不转义 U+2028/U+2029
    UNESCAPED_LINE_TERMINATORS = 1 << 11

    # 超出 64 位有符号整数范围的整数编码为字符串
    BIGINT_AS_STRING = 1 << 12

    # 失败时抛出异常而不是返回 None
    THROW_ON_ERROR = 1 << 22


class DecodeFlag(IntFlag):
    """解码标志."""

    NONE = 0

    # 对象解码为 dict (assoc 为 True 时总是如此)
    OBJECT_AS_ARRAY = 1 << 0

    # 超出 64 位有符号整数范围的整数解码为字符串
    BIGINT_AS_STRING = 1 << 1

    # 丢弃非法 UTF-8 字节
    INVALID_UTF8_IGNORE = 1 << 20

    # 用 U+FFFD 替换非法 UTF-8 字节
    INVALID_UTF8_SUBSTITUTE = 1 << 21

    # 失败时抛出异常而不是返回 None
    THROW_ON_ERROR = 1 << 22


DEFAULT_ASSOC = True
DEFAULT_DEPTH = 512
DEFAULT_DECODE_FLAGS = DecodeFlag.BIGINT_AS_STRING
DEFAULT_ENCODE_FLAGS = (
    EncodeFlag.BIGINT_AS_STRING
    | EncodeFlag.PRESERVE_ZERO_FRACTION
    | EncodeFlag.UNESCAPED_SLASHES
    | EncodeFlag.UNESCAPED_UNICODE
)

# 预设编码标志, 均由默认值派生
ENCODE_ASCII = DEFAULT_ENCODE_FLAGS & ~EncodeFlag.UNESCAPED_UNICODE
ENCODE_HEX = (
    DEFAULT_ENCODE_FLAGS
    | EncodeFlag.HEX_TAG
    | EncodeFlag.HEX_AMP
    | EncodeFlag.HEX_APOS
    | EncodeFlag.HEX_QUOT
)
ENCODE_HTML = DEFAULT_ENCODE_FLAGS & ~EncodeFlag.UNESCAPED_SLASHES
ENCODE_PRETTY = DEFAULT_ENCODE_FLAGS | EncodeFlag.PRETTY_PRINT
