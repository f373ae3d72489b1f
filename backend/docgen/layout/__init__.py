"""
布局模块 - 从模板字段位置推断重复行结构

子模块：
- row_grouper: 按纵坐标聚类成行
- slot_matcher: 数据键 → 模板字段 的槽位匹配
"""

from .row_grouper import DEFAULT_Y_TOLERANCE, RowGrouper, group_rows
from .slot_matcher import SlotMatcher, resolve

__all__ = [
    "DEFAULT_Y_TOLERANCE",
    "RowGrouper",
    "group_rows",
    "SlotMatcher",
    "resolve",
]
