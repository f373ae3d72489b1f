"""
槽位匹配器 - 把数据键解析到模板字段

匹配条件（同时满足）：
1. 模板字段去数字后的名称 == 数据键去数字后的名称
2. 模板字段的本地槽位号 == 目标槽位号（页内位置，而非数据全局序号）

找不到匹配不是错误：调用方丢弃该值并计入诊断。
"""

from __future__ import annotations

from ..models import ItemKey, Row, TemplateField


class SlotMatcher:
    """基于行布局的槽位索引"""

    def __init__(self, rows: list[Row]):
        self.rows = rows
        self._index: dict[tuple[str, int], TemplateField] = {}
        for row in rows:
            for row_field in row.fields:
                if row_field.slot is None:
                    continue
                key = (ItemKey.parse(row_field.name).match_key, row_field.slot)
                # 同一(列, 槽位)重复属于模板编写问题，按行序取第一个
                self._index.setdefault(key, row_field.field)

    def resolve(self, data_key: str, slot: int) -> TemplateField | None:
        """
        解析数据键在指定槽位上的目标字段

        Args:
            data_key: 数据键（如 Tr12Date）
            slot: 页内槽位号（1-based）

        Returns:
            目标模板字段；无匹配时返回None
        """
        return self._index.get((ItemKey.parse(data_key).match_key, slot))

    @property
    def columns(self) -> set[str]:
        """模板声明的全部列（去数字后的名称）"""
        return {column for column, _ in self._index}

    @property
    def slot_count(self) -> int:
        """模板声明的最大槽位号"""
        return max((slot for _, slot in self._index), default=0)


def resolve(rows: list[Row], data_key: str, slot: int) -> TemplateField | None:
    """无状态形式：逐个扫描所有行的字段"""
    target = ItemKey.parse(data_key).match_key
    for row in rows:
        for row_field in row.fields:
            if row_field.slot == slot and ItemKey.parse(row_field.name).match_key == target:
                return row_field.field
    return None
