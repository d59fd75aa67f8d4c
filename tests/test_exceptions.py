"""测试异常体系."""

import pytest

from simple_json import (
    DecodeError,
    EncodeError,
    ErrorCode,
    ErrorKind,
    JsonError,
    UnsupportedTypeError,
    ValidationError,
)
from simple_json.exceptions import ERROR_MESSAGES, ERROR_TEMPLATES


def test_hierarchy() -> None:
    """所有异常都继承自 JsonError, 并兼容内置异常类型."""
    assert issubclass(ValidationError, JsonError)
    assert issubclass(ValidationError, TypeError)
    assert issubclass(DecodeError, ValueError)
    assert issubclass(EncodeError, ValueError)
    assert issubclass(UnsupportedTypeError, ValidationError)
    assert issubclass(UnsupportedTypeError, EncodeError)


@pytest.mark.parametrize("kind", list(ErrorKind))
def test_every_kind_has_messages(kind) -> None:
    """每个错误种类都有简短消息和消息模板."""
    short, template = ERROR_TEMPLATES[kind]

    assert short
    assert template.startswith(short)


@pytest.mark.parametrize("code", list(ErrorCode))
def test_every_code_has_message(code) -> None:
    """每个错误码都有对应的描述."""
    assert ERROR_MESSAGES[code]


def test_validation_error_without_context() -> None:
    """不带上下文时使用简短消息."""
    error = ValidationError(ErrorKind.INVALID_ASSOC)

    assert str(error) == "ASSOC must be boolean"
    assert error.context == {}
    assert error.code is None


def test_validation_error_with_context() -> None:
    """带上下文时填充消息模板."""
    error = ValidationError(ErrorKind.INVALID_DEPTH, {"type": "int", "value": -1})

    assert str(error) == "DEPTH must be a non-negative integer; int -1 provided"
    assert error.kind is ErrorKind.INVALID_DEPTH


def test_decode_error_message() -> None:
    """DecodeError 默认使用错误码的描述, 有行列号时附加位置."""
    assert str(DecodeError(ErrorCode.DEPTH)) == "Maximum stack depth exceeded"

    error = DecodeError(ErrorCode.SYNTAX, pos=5, lineno=1, colno=6)
    assert str(error) == "Syntax error (at line 1 column 6)"
    assert error.pos == 5


def test_encode_error_message() -> None:
    """EncodeError 可以覆盖默认描述."""
    assert str(EncodeError(ErrorCode.RECURSION)) == "Recursion detected"
    assert str(EncodeError(ErrorCode.UNSUPPORTED_TYPE, "custom")) == "custom"


def test_unsupported_type_error() -> None:
    """UnsupportedTypeError 同时携带 kind 和 code."""
    error = UnsupportedTypeError(object())

    assert error.kind is ErrorKind.UNSUPPORTED_TYPE
    assert error.code is ErrorCode.UNSUPPORTED_TYPE
    assert str(error) == "Value is not encodable as json; object provided"

    with pytest.raises(EncodeError):
        raise error
