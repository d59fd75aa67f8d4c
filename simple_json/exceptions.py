"""simple_json 异常类.

该模块定义了两层异常体系:
1. 选项校验错误 (`ValidationError`): 在调用编解码器之前抛出.
2. 编解码错误 (`DecodeError` / `EncodeError`): 由编解码器抛出, 携带数字错误码.
"""

from enum import Enum, IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """编解码器错误码."""

    NONE = 0
    DEPTH = 1
    STATE_MISMATCH = 2
    CTRL_CHAR = 3
    SYNTAX = 4
    UTF8 = 5
    RECURSION = 6
    INF_OR_NAN = 7
    UNSUPPORTED_TYPE = 8
    INVALID_PROPERTY_NAME = 9
    UTF16 = 10


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.NONE: "No error",
    ErrorCode.DEPTH: "Maximum stack depth exceeded",
    ErrorCode.STATE_MISMATCH: "State mismatch (invalid or malformed JSON)",
    ErrorCode.CTRL_CHAR: "Control character error, possibly incorrectly encoded",
    ErrorCode.SYNTAX: "Syntax error",
    ErrorCode.UTF8: "Malformed UTF-8 characters, possibly incorrectly encoded",
    ErrorCode.RECURSION: "Recursion detected",
    ErrorCode.INF_OR_NAN: "Inf and NaN cannot be JSON encoded",
    ErrorCode.UNSUPPORTED_TYPE: "Type is not supported",
    ErrorCode.INVALID_PROPERTY_NAME: "The decoded property name is invalid",
    ErrorCode.UTF16: "Single unpaired UTF-16 surrogate in unicode escape",
}


class ErrorKind(str, Enum):
    """选项校验错误的种类."""

    INVALID_ASSOC = "INVALID_ASSOC"
    INVALID_DEPTH = "INVALID_DEPTH"
    INVALID_DECODE_FLAGS = "INVALID_DECODE_FLAGS"
    INVALID_ENCODE_FLAGS = "INVALID_ENCODE_FLAGS"
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    UNKNOWN_OPTION = "UNKNOWN_OPTION"
    JSON_MUST_BE_STRING = "JSON_MUST_BE_STRING"


# kind -> (简短消息, 带上下文的消息模板)
ERROR_TEMPLATES: dict[ErrorKind, tuple[str, str]] = {
    ErrorKind.INVALID_ASSOC: (
        "ASSOC must be boolean",
        "ASSOC must be boolean; {type} provided",
    ),
    ErrorKind.INVALID_DEPTH: (
        "DEPTH must be a non-negative integer",
        "DEPTH must be a non-negative integer; {type} {value!r} provided",
    ),
    ErrorKind.INVALID_DECODE_FLAGS: (
        "DECODE_FLAGS must be integer",
        "DECODE_FLAGS must be integer; {type} provided",
    ),
    ErrorKind.INVALID_ENCODE_FLAGS: (
        "ENCODE_FLAGS must be integer",
        "ENCODE_FLAGS must be integer; {type} provided",
    ),
    ErrorKind.UNSUPPORTED_TYPE: (
        "Value is not encodable as json",
        "Value is not encodable as json; {type} provided",
    ),
    ErrorKind.UNKNOWN_OPTION: (
        "Unknown option",
        "Unknown option {key!r}",
    ),
    ErrorKind.JSON_MUST_BE_STRING: (
        "Json must be a string",
        "Json must be a string; {type} provided",
    ),
}


class JsonError(Exception):
    """所有 simple_json 异常的基类.

    Attributes:
        code: 编解码器错误码, 不来自编解码器的错误为 None.
    """

    code: ErrorCode | None = None


class ValidationError(JsonError, TypeError):
    """选项或输入类型无效时抛出, 此时编解码器尚未被调用.

    Case:
        - assoc 不是 bool.
        - depth 不是非负整数.
        - decode_flags / encode_flags 不是整数.
        - 待编码的值不可编码.
    """

    def __init__(self, kind: ErrorKind, context: dict[str, Any] | None = None) -> None:
        """初始化校验错误.

        Args:
            kind: 错误种类.
            context: 用于填充消息模板的上下文 (如 type, value).
        """
        self.kind = kind
        self.context = context or {}
        message, template = ERROR_TEMPLATES[kind]
        if self.context:
            message = template.format(**self.context)
        # 不走协作式 super(), UnsupportedTypeError 的 MRO 中还有 EncodeError
        JsonError.__init__(self, message)


class DecodeError(JsonError, ValueError):
    """解码失败时抛出.

    Case:
        - 语法错误.
        - 嵌套层数超出 depth.
        - 非法 UTF-8 字节.
    """

    def __init__(
        self,
        code: ErrorCode,
        msg: str | None = None,
        pos: int | None = None,
        lineno: int | None = None,
        colno: int | None = None,
    ) -> None:
        """初始化解码错误.

        Args:
            code: 错误码.
            msg: 错误描述, 默认使用错误码对应的消息.
            pos: 出错位置 (字符偏移).
            lineno: 出错行号.
            colno: 出错列号.
        """
        super().__init__(msg or ERROR_MESSAGES[code])
        self.code = code
        self.pos = pos
        self.lineno = lineno
        self.colno = colno

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.lineno is not None and self.colno is not None:
            return f"{base_msg} (at line {self.lineno} column {self.colno})"
        return base_msg


class EncodeError(JsonError, ValueError):
    """编码失败时抛出.

    Case:
        - 嵌套层数超出 depth.
        - 循环引用.
        - NaN 或 Infinity.
        - 不支持的类型 (如 set, bytes).
    """

    def __init__(self, code: ErrorCode, msg: str | None = None) -> None:
        super().__init__(msg or ERROR_MESSAGES[code])
        self.code = code


class UnsupportedTypeError(ValidationError, EncodeError):
    """值在交给编解码器之前即被判定为不可编码时抛出.

    同时携带 `kind=UNSUPPORTED_TYPE` 与编解码器的 `ErrorCode.UNSUPPORTED_TYPE`,
    只检查错误码的调用方也能识别.
    """

    def __init__(self, value: Any) -> None:
        ValidationError.__init__(
            self, ErrorKind.UNSUPPORTED_TYPE, {"type": type(value).__name__}
        )
        self.code = ErrorCode.UNSUPPORTED_TYPE
