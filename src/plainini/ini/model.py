# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 21:57:03
# @Author : Kariko Lin

"""
Basically a plain INI structure: `{section: {key: value}}`, all `str`.

No inheritance, no `+=`, no comments. See `ini.parser` for the text format.
"""

from collections.abc import Mapping
from typing import Iterator


class IniDocument(Mapping[str, dict[str, str]]):
    """INI 文档。

    维护`小节名 -> {键: 值}`的两层字典。键值对之前没有小节头的，
    归入名为空串`''`的小节。

    外层字典仅由文档持有，每个内层字典仅由对应小节持有：
    传入、传出的字典一律复制，*不会*与调用方共享引用。

    作为`Mapping`，`doc[name]`同样返回小节的副本；
    但不提供删除操作，所以不是`MutableMapping`。
    """

    def __init__(self) -> None:
        self.__raw: dict[str, dict[str, str]] = {}

    def get_value(self, section: str, key: str) -> str | None:
        """获取指定小节中指定键的值。小节或键不存在时返回`None`（不是空串）。"""
        pairs = self.__raw.get(section)
        if pairs is None:
            return None
        return pairs.get(key)

    def set_value(self, section: str, key: str, value: str) -> None:
        """设置键值，小节不存在则先创建。同名键后写者优先。"""
        self.__raw.setdefault(section, {})[key] = value

    def get_section(self, section: str) -> dict[str, str]:
        """获取整个小节的副本；小节不存在时返回空字典，而不是`None`。"""
        if section in self.__raw:
            return self.__raw[section].copy()
        return {}

    def set_section(
        self, section: str, values: Mapping[str, str] | None
    ) -> None:
        """整体替换小节内容，原有但`values`中没有的键会被丢弃。

        `values`为`None`时什么也不做（已有小节保持原样）。
        """
        if values is None:
            return
        # shouldn't keep ptr to external dict.
        self.__raw[section] = dict(values)

    def load_contents(self, text: str) -> bool:
        """Replace the whole content with `text` parsed.

        On failure the document keeps what it had before.
        """
        from .parser import parse

        result = parse(text)
        if not result:
            return False
        # take over the fresh document's dicts, nobody else refers to them.
        self.__raw = result.document.__raw
        return True

    def save_contents(self) -> str:
        from .parser import serialize

        return serialize(self)

    def _iter_pairs(self) -> Iterator[tuple[str, dict[str, str]]]:
        """for serializer, no copies. Callers must not mutate."""
        return iter(self.__raw.items())

    def __getitem__(self, key: str) -> dict[str, str]:
        if key not in self.__raw:
            raise KeyError(key)
        return self.__raw[key].copy()

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __repr__(self) -> str:
        return 'IniDocument { .cnt = %d }' % len(self.__raw)
