"""
页面组装器 - 构建单页完整输入记录

职责：
1. 原样复制全部表头字段
2. 注入页码字段（当前页/总页数，1-based，字符串）
3. 把分配到本页的重复项按本地槽位写入对应模板字段

无匹配槽位的值直接丢弃（不写占位），由调用方计入诊断。
"""

from __future__ import annotations

from typing import Any

from ..layout import SlotMatcher
from ..models import PaginationConfig

# (本地槽位号, 该项的 {数据键: 值})
PageItem = tuple[int, dict[str, Any]]


class PageAssembler:
    """页面组装器"""

    def __init__(self, matcher: SlotMatcher, config: PaginationConfig):
        self.matcher = matcher
        self.config = config

    def assemble(
        self,
        header: dict[str, Any],
        items: list[PageItem],
        page_number: int,
        total_pages: int,
    ) -> tuple[dict[str, Any], list[str]]:
        """
        组装单页

        Args:
            header: 表头数据（不以前缀开头的键）
            items: 本页的重复项，按数据顺序
            page_number: 当前页（1-based）
            total_pages: 总页数

        Returns:
            (页面记录, 被丢弃的数据键)
        """
        page = dict(header)
        page[self.config.current_page_key] = str(page_number)
        page[self.config.total_pages_key] = str(total_pages)

        dropped = []
        for slot, values in items:
            for data_key, value in values.items():
                target = self.matcher.resolve(data_key, slot)
                if target is None:
                    dropped.append(data_key)
                    continue
                page[target.name] = value

        return page, dropped
