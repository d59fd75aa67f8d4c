"""测试可配置的 Json 编解码器.

覆盖 simple_json.facade 模块的核心特性:
1. 构造时校验并绑定选项
2. set_options 整体替换选项
3. 预设工厂 (ascii/hex/html/pretty)
4. 与模块级函数行为等价
"""

import inspect
from types import SimpleNamespace

import pytest

from simple_json import (
    ENCODE_PRETTY,
    DecodeError,
    ErrorCode,
    ErrorKind,
    Json,
    Options,
    UnsupportedTypeError,
    ValidationError,
    decode,
    encode,
)


def test_default_options() -> None:
    """不带参数构造时绑定默认选项."""
    assert Json().options == Options()


def test_invalid_options_rejected() -> None:
    """构造时校验全部选项."""
    with pytest.raises(ValidationError) as exc_info:
        Json({"assoc": "yes"})
    assert exc_info.value.kind is ErrorKind.INVALID_ASSOC

    with pytest.raises(ValidationError) as exc_info:
        Json({"encode_flags": 1.5})
    assert exc_info.value.kind is ErrorKind.INVALID_ENCODE_FLAGS


def test_set_options_replaces_record() -> None:
    """set_options() 整体替换选项记录并返回 self."""
    json = Json()
    before = json.options

    assert json.set_options({"assoc": False}) is json
    assert json.options is not before
    assert json.options.assoc is False
    assert before.assoc is True
    assert isinstance(json.decode('{"a": 1}'), SimpleNamespace)


def test_set_options_failure_keeps_previous() -> None:
    """校验失败时保留原有选项."""
    json = Json({"depth": 4})

    with pytest.raises(ValidationError):
        json.set_options({"depth": -1})

    assert json.options.depth == 4


def test_options_property_is_read_only() -> None:
    """options 属性不能直接赋值."""
    json = Json()

    with pytest.raises(AttributeError):
        json.options = Options()  # type: ignore[misc]


def test_bound_options_reused() -> None:
    """绑定的 depth 对之后的每次调用生效."""
    json = Json({"depth": 1})

    assert json.decode("[1]") == [1]
    assert json.encode([1]) == "[1]"
    with pytest.raises(DecodeError) as exc_info:
        json.decode("[[1]]")
    assert exc_info.value.code is ErrorCode.DEPTH


@pytest.mark.parametrize(
    "value", [{"a": [1, 2.5]}, "café", [None, True], SimpleNamespace(x="a/b")]
)
def test_equivalent_to_module_functions(value) -> None:
    """实例方法与模块级函数在相同选项下结果一致."""
    options = {"encode_flags": ENCODE_PRETTY, "depth": 8}
    json = Json(options)

    text = json.encode(value)
    assert text == encode(value, options)
    assert json.decode(text) == decode(text, options)


# --- 预设 ---


def test_ascii_preset() -> None:
    """ascii() 以 \\uXXXX 转义非 ASCII 字符."""
    assert Json.ascii().encode("café") == '"caf\\u00e9"'


def test_pretty_preset() -> None:
    """pretty() 输出多行缩进文本."""
    text = Json.pretty().encode({"a": 1})

    assert text == '{\n    "a": 1\n}'
    assert len(text.splitlines()) == 3


def test_hex_preset() -> None:
    """hex() 将 < 写为 \\u003C."""
    json = Json.hex()

    assert json.encode("<") == '"\\u003C"'
    assert json.encode("a&'\"b>") == '"a\\u0026\\u0027\\u0022b\\u003E"'


def test_html_preset() -> None:
    """html() 转义 /."""
    assert Json.html().encode("</script>") == '"<\\/script>"'


def test_presets_keep_other_defaults() -> None:
    """预设只改变编码标志, 其余选项保持默认."""
    for json in (Json.ascii(), Json.hex(), Json.html(), Json.pretty()):
        assert json.options.assoc is True
        assert json.options.depth == 512
        assert json.options.decode_flags == Options().decode_flags


# --- 判定 ---


def test_instance_is_valid_uses_bound_options() -> None:
    """is_valid()/check() 使用绑定的选项."""
    json = Json({"depth": 1})

    assert json.is_valid("[1]") is True
    assert json.check("[1]") is None
    assert json.is_valid("[[1]]") is False

    error = json.check("[[1]]")
    assert isinstance(error, DecodeError)
    assert error.code is ErrorCode.DEPTH


def test_instance_encode_rejects_unsupported() -> None:
    """实例的 encode() 同样在编码前拒绝不可编码的值."""
    json = Json()

    assert json.is_jsonable({1, 2}) is False
    with pytest.raises(UnsupportedTypeError):
        json.encode({1, 2})


def test_repr() -> None:
    """repr 应包含绑定的选项."""
    assert repr(Json({"depth": 3})).startswith("Json(Options(assoc=True, depth=3")


def test_init_signature() -> None:
    """构造函数只接受可选的 options, 返回注解为 None."""
    signature = inspect.signature(Json.__init__)

    assert list(signature.parameters) == ["self", "options"]
    assert signature.return_annotation is None
