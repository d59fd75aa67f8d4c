"""基于标准库 json 的标志驱动编解码器.

语法解析和序列化完全交给 `json.loads` / `json.dumps`, 本模块只负责:
1. 把位标志翻译为 `json` 的参数.
2. 遍历值树以检查嵌套层数, 循环引用和不支持的类型.
3. 对输出中的字符串做额外转义 (斜杠, HEX_* 系列).

失败时抛出 `DecodeError` / `EncodeError`, 未设置 THROW_ON_ERROR 时改为返回 None,
错误码可通过 `last_error()` 查询.
"""

import json
import math
import re
from contextvars import ContextVar
from types import SimpleNamespace
from typing import Any

from pydantic import BaseModel

from .exceptions import ERROR_MESSAGES, DecodeError, EncodeError, ErrorCode, JsonError
from .log import get_excerpt, logger
from .options import DEFAULT_DEPTH, DecodeFlag, EncodeFlag
from .types import is_described

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# 字符串内部的转义对, 如 \" \\ \n
_ESCAPE_PAIR = re.compile(r"\\(.)")

_last_error: ContextVar[ErrorCode] = ContextVar(
    "simple_json_last_error", default=ErrorCode.NONE
)


def last_error() -> ErrorCode:
    """返回当前上下文中最近一次编解码的错误码."""
    return _last_error.get()


def last_error_msg() -> str:
    """返回当前上下文中最近一次编解码的错误描述."""
    return ERROR_MESSAGES[_last_error.get()]


def _hex_escape(char: str) -> str:
    return "\\u%04X" % ord(char)


def _fail(error: JsonError, throw: bool, text: Any = None) -> None:
    _last_error.set(error.code or ErrorCode.NONE)
    if throw:
        raise error
    logger.debug("编解码失败, 返回 None: %s", describe_failure(error, text))


# --- 解码 ---


def loads(
    text: str | bytes | bytearray,
    assoc: bool = True,
    depth: int = DEFAULT_DEPTH,
    flags: int = DecodeFlag.NONE,
) -> Any:
    """解码 JSON 文本.

    Args:
        text: JSON 文本, bytes 按 UTF-8 解码.
        assoc: True 时对象解码为 dict, 否则为 SimpleNamespace.
        depth: 允许的最大嵌套层数, 标量为 0 层, `[]` 为 1 层.
        flags: `DecodeFlag` 位掩码.

    Returns:
        解码后的值; 失败且未设置 THROW_ON_ERROR 时返回 None.

    Raises:
        DecodeError: 设置了 THROW_ON_ERROR 且解码失败.
    """
    try:
        value = _loads(text, assoc, depth, flags)
    except DecodeError as e:
        _fail(e, bool(flags & DecodeFlag.THROW_ON_ERROR), text)
        return None
    _last_error.set(ErrorCode.NONE)
    return value


def _loads(text: str | bytes | bytearray, assoc: bool, depth: int, flags: int) -> Any:
    if isinstance(text, bytes | bytearray):
        text = _decode_utf8(bytes(text), flags)

    try:
        value = json.loads(
            text,
            object_hook=None if assoc else _make_namespace,
            parse_int=_int_parser(bool(flags & DecodeFlag.BIGINT_AS_STRING)),
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as e:
        code = (
            ErrorCode.CTRL_CHAR
            if e.msg.startswith("Invalid control character")
            else ErrorCode.SYNTAX
        )
        raise DecodeError(
            code,
            f"{ERROR_MESSAGES[code]}: {e.msg}",
            pos=e.pos,
            lineno=e.lineno,
            colno=e.colno,
        ) from e
    except RecursionError as e:
        raise DecodeError(ErrorCode.DEPTH) from e

    if _nesting_exceeds(value, depth):
        raise DecodeError(ErrorCode.DEPTH)
    return value


def _decode_utf8(data: bytes, flags: int) -> str:
    if flags & DecodeFlag.INVALID_UTF8_IGNORE:
        errors = "ignore"
    elif flags & DecodeFlag.INVALID_UTF8_SUBSTITUTE:
        errors = "replace"
    else:
        errors = "strict"
    try:
        return data.decode("utf-8", errors)
    except UnicodeDecodeError as e:
        raise DecodeError(ErrorCode.UTF8, pos=e.start) from e


def _make_namespace(obj: dict[str, Any]) -> SimpleNamespace:
    for key in obj:
        if key.startswith("\0"):
            raise DecodeError(ErrorCode.INVALID_PROPERTY_NAME)
    return SimpleNamespace(**obj)


def _int_parser(bigint_as_string: bool):
    def parse(literal: str) -> int | float | str:
        # JSON 整数没有前导零, 位数即可判断是否可能超出范围
        if len(literal.lstrip("-")) <= 19:
            value = int(literal)
            if INT64_MIN <= value <= INT64_MAX:
                return value
        return literal if bigint_as_string else float(literal)

    return parse


def _reject_constant(name: str) -> Any:
    raise DecodeError(ErrorCode.SYNTAX, f"Syntax error: unexpected {name}")


def _nesting_exceeds(value: Any, depth: int) -> bool:
    """检查值树的容器嵌套层数是否超过 depth."""
    stack = [(value, 0)]
    while stack:
        node, level = stack.pop()
        if isinstance(node, SimpleNamespace):
            node = vars(node)
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        level += 1
        if level > depth:
            return True
        stack.extend((child, level) for child in children)
    return False


# --- 编码 ---


def dumps(
    value: Any, flags: int = EncodeFlag.NONE, depth: int = DEFAULT_DEPTH
) -> str | None:
    """编码为 JSON 文本.

    Args:
        value: 待编码的值.
        flags: `EncodeFlag` 位掩码.
        depth: 允许的最大嵌套层数.

    Returns:
        JSON 文本; 失败且未设置 THROW_ON_ERROR 时返回 None.

    Raises:
        EncodeError: 设置了 THROW_ON_ERROR 且编码失败.
    """
    try:
        text = _dumps(value, flags, depth)
    except EncodeError as e:
        _fail(e, bool(flags & EncodeFlag.THROW_ON_ERROR))
        return None
    _last_error.set(ErrorCode.NONE)
    return text


def _dumps(value: Any, flags: int, depth: int) -> str:
    prepared = _Preparer(flags, depth).prepare(value)

    pretty = bool(flags & EncodeFlag.PRETTY_PRINT)
    try:
        text = json.dumps(
            prepared,
            ensure_ascii=not flags & EncodeFlag.UNESCAPED_UNICODE,
            allow_nan=False,
            indent=4 if pretty else None,
            separators=(",", ": ") if pretty else (",", ":"),
        )
    except RecursionError as e:
        raise EncodeError(ErrorCode.DEPTH) from e

    table = _escape_table(flags)
    if table:
        text = text.translate(str.maketrans(table))
    if flags & EncodeFlag.HEX_QUOT:
        text = _ESCAPE_PAIR.sub(_hex_quote, text)
    return text


def _escape_table(flags: int) -> dict[str, str]:
    """json.dumps 从不在转义序列中输出这些字符, 可以按字符直接替换."""
    table = {}
    if not flags & EncodeFlag.UNESCAPED_SLASHES:
        table["/"] = "\\/"
    if flags & EncodeFlag.HEX_TAG:
        table["<"] = _hex_escape("<")
        table[">"] = _hex_escape(">")
    if flags & EncodeFlag.HEX_AMP:
        table["&"] = _hex_escape("&")
    if flags & EncodeFlag.HEX_APOS:
        table["'"] = _hex_escape("'")
    if flags & EncodeFlag.UNESCAPED_UNICODE and not (
        flags & EncodeFlag.UNESCAPED_LINE_TERMINATORS
    ):
        for char in (chr(0x2028), chr(0x2029)):
            table[char] = _hex_escape(char)
    return table


def _hex_quote(match: re.Match[str]) -> str:
    if match.group(1) == '"':
        return _hex_escape('"')
    return match.group(0)


# 栈上的离开标记, 弹出时把对应 id 移出 _active
_LEAVE = object()


class _Preparer:
    """把任意可编码值转换为 json.dumps 可直接处理的 dict/list/标量树.

    使用显式栈遍历, 嵌套层数只受 depth 限制而不受解释器递归深度限制.
    栈中每一项为 (节点, 所在层数, 结果容器, 结果槽位).
    """

    def __init__(self, flags: int, depth: int) -> None:
        self.depth = depth
        self.force_object = bool(flags & EncodeFlag.FORCE_OBJECT)
        self.preserve_zero_fraction = bool(flags & EncodeFlag.PRESERVE_ZERO_FRACTION)
        self.bigint_as_string = bool(flags & EncodeFlag.BIGINT_AS_STRING)
        self._active: set[int] = set()

    def prepare(self, value: Any) -> Any:
        holder: list[Any] = [None]
        stack: list[tuple[Any, int, Any, Any]] = [(value, 0, holder, 0)]
        while stack:
            node, level, target, slot = stack.pop()
            if node is _LEAVE:
                self._active.discard(slot)
            else:
                self._visit(node, level, target, slot, stack)
        return holder[0]

    def _visit(
        self, value: Any, level: int, target: Any, slot: Any, stack: list
    ) -> None:
        if value is None or isinstance(value, bool | str):
            target[slot] = value
        elif isinstance(value, int):
            if self.bigint_as_string and not INT64_MIN <= value <= INT64_MAX:
                target[slot] = str(value)
            else:
                target[slot] = value
        elif isinstance(value, float):
            target[slot] = self._prepare_float(value)
        elif is_described(value):
            # 描述结果替换原对象, 留在同一层
            self._enter(value, stack)
            stack.append((self._describe(value), level, target, slot))
        elif isinstance(value, SimpleNamespace | dict | list | tuple):
            target[slot] = self._open_container(value, level + 1, stack)
        else:
            raise EncodeError(
                ErrorCode.UNSUPPORTED_TYPE,
                f"Type is not supported: {type(value).__name__}",
            )

    def _prepare_float(self, value: float) -> float | int:
        if not math.isfinite(value):
            raise EncodeError(ErrorCode.INF_OR_NAN)
        if (
            not self.preserve_zero_fraction
            and value.is_integer()
            and abs(value) < 1e15
        ):
            return int(value)
        return value

    def _describe(self, value: Any) -> Any:
        try:
            if isinstance(value, BaseModel):
                return value.model_dump(mode="json")
            return value.__json__()
        except JsonError:
            raise
        except Exception as e:
            raise EncodeError(
                ErrorCode.UNSUPPORTED_TYPE,
                f"Failed to describe {type(value).__name__}: {e}",
            ) from e

    def _enter(self, owner: Any, stack: list) -> None:
        marker = id(owner)
        if marker in self._active:
            raise EncodeError(ErrorCode.RECURSION)
        self._active.add(marker)
        stack.append((_LEAVE, 0, None, marker))

    def _open_container(self, value: Any, level: int, stack: list) -> dict | list:
        if level > self.depth:
            raise EncodeError(ErrorCode.DEPTH)
        self._enter(value, stack)

        if isinstance(value, SimpleNamespace):
            value = vars(value)
        if isinstance(value, dict):
            result: dict[str, Any] = {}
            for key in value:
                if not isinstance(key, str):
                    raise EncodeError(
                        ErrorCode.UNSUPPORTED_TYPE,
                        f"Type is not supported as key: {type(key).__name__}",
                    )
                result[key] = None
            stack.extend((item, level, result, key) for key, item in value.items())
            return result

        items = list(value)
        if self.force_object:
            # 先按顺序占位, 保证键的顺序与下标一致
            forced = {str(i): None for i in range(len(items))}
            stack.extend((item, level, forced, str(i)) for i, item in enumerate(items))
            return forced
        slots: list[Any] = [None] * len(items)
        stack.extend((item, level, slots, i) for i, item in enumerate(items))
        return slots


def describe_failure(error: JsonError, text: Any = None) -> str:
    """为错误生成描述, 解码错误附带出错位置附近的文本摘录, 用于日志."""
    if not isinstance(error, DecodeError) or error.pos is None:
        return str(error)
    if not isinstance(text, str):
        return str(error)
    return f"{error}\n{get_excerpt(text, error.pos)}"
