"""带选项校验的 JSON 编解码封装库.

提供了选项校验, 编码(encode), 解码(decode) 以及结构化的异常体系.
"""

from .api import check, decode, encode, is_jsonable, is_valid
from .config import (
    Options,
    validate_decode_options,
    validate_encode_options,
    validate_options,
)
from .exceptions import (
    DecodeError,
    EncodeError,
    ErrorCode,
    ErrorKind,
    JsonError,
    UnsupportedTypeError,
    ValidationError,
)
from .facade import Json
from .options import (
    DEFAULT_ASSOC,
    DEFAULT_DECODE_FLAGS,
    DEFAULT_DEPTH,
    DEFAULT_ENCODE_FLAGS,
    ENCODE_ASCII,
    ENCODE_HEX,
    ENCODE_HTML,
    ENCODE_PRETTY,
    DecodeFlag,
    EncodeFlag,
    OptionKey,
)
from .types import JsonSerializable, JsonValue

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_ASSOC",
    "DEFAULT_DECODE_FLAGS",
    "DEFAULT_DEPTH",
    "DEFAULT_ENCODE_FLAGS",
    "ENCODE_ASCII",
    "ENCODE_HEX",
    "ENCODE_HTML",
    "ENCODE_PRETTY",
    "DecodeError",
    "DecodeFlag",
    "EncodeError",
    "EncodeFlag",
    "ErrorCode",
    "ErrorKind",
    "Json",
    "JsonError",
    "JsonSerializable",
    "JsonValue",
    "OptionKey",
    "Options",
    "UnsupportedTypeError",
    "ValidationError",
    "__version__",
    "check",
    "decode",
    "encode",
    "is_jsonable",
    "is_valid",
    "validate_decode_options",
    "validate_encode_options",
    "validate_options",
]
