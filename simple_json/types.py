"""JSON 值的类型定义与可编码性判定.

本模块定义了 "可编码" 的判定规则, `encode` 在调用编解码器之前,
以及 `is_jsonable` 都使用这里的规则.
"""

from types import SimpleNamespace
from typing import Any, Protocol, TypeAlias, runtime_checkable

from pydantic import BaseModel

JsonScalar: TypeAlias = None | bool | int | float | str
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]

SCALAR_TYPES = (str, int, float, bool, type(None))


@runtime_checkable
class JsonSerializable(Protocol):
    """能够自行给出 JSON 表示的对象.

    `__json__` 返回的值会代替对象本身被编码.

    Examples:
        >>> class Point:
        ...     def __init__(self, x, y):
        ...         self.x, self.y = x, y
        ...     def __json__(self):
        ...         return [self.x, self.y]
        >>> encode(Point(1, 2))
        '[1,2]'
    """

    def __json__(self) -> Any: ...


def is_described(value: Any) -> bool:
    """判断值是否由自身描述 JSON 表示 (pydantic 模型或 `__json__`).

    类对象本身不算, 即使它定义了 `__json__`.
    """
    if isinstance(value, type):
        return False
    return isinstance(value, BaseModel | JsonSerializable)


def is_jsonable(value: Any) -> bool:
    """判断值能否被编码为 JSON.

    可编码的值:
        - None, bool, int, float, str
        - 键为 str 的 dict, list, tuple
        - SimpleNamespace (普通结构化对象)
        - pydantic `BaseModel` 与实现了 `__json__` 的对象

    容器会被逐层检查, 包含循环引用的容器视为不可编码.
    文件对象, socket, set, bytes, 类对象以及其他任意对象均不可编码.
    """
    active: set[int] = set()
    # (节点, 是否为离开标记); 离开标记携带的是容器的 id
    stack: list[tuple[Any, bool]] = [(value, False)]
    while stack:
        node, leaving = stack.pop()
        if leaving:
            active.discard(node)
            continue
        if isinstance(node, SCALAR_TYPES) or is_described(node):
            # 由对象自行描述的结果在编码时再检查
            continue

        if isinstance(node, SimpleNamespace):
            children = list(vars(node).values())
        elif isinstance(node, dict):
            if not all(isinstance(key, str) for key in node):
                return False
            children = list(node.values())
        elif isinstance(node, list | tuple):
            children = list(node)
        else:
            return False

        marker = id(node)
        if marker in active:
            return False
        active.add(marker)
        stack.append((marker, True))
        stack.extend((child, False) for child in children)
    return True
