"""simple_json 日志记录器."""

import logging

logger = logging.getLogger("simple_json")


def get_excerpt(text: str, pos: int, window: int = 16) -> str:
    """获取指定位置周围文本的摘录, 用于定位解码错误."""
    start = max(0, pos - window)
    end = min(len(text), pos + window)
    chunk = text[start:end]

    # 控制字符以转义形式显示, 避免日志被换行打断
    shown = chunk.encode("unicode_escape").decode("ascii")
    marker = " " * len(text[start:pos].encode("unicode_escape")) + "^"

    return f"位置 {pos} 的上下文 (显示 {start}-{end}):\n{shown}\n{marker}"
