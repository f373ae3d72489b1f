"""
分页模型 - 行布局/数据键/分页配置/分页结果

键命名约定：prefix + index + suffix（如 Tr12Date）
- zone: 重复区前缀（Tr）
- index: 名称中第一段连续数字（12）
- column: 去掉前缀后再去掉全部数字的部分（Date）

注意：列身份按“去掉全部数字”计算，列名本身含数字（如 USD2）会被误判，
保持与模板现有命名约定一致，不做修正。
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .template import TemplateField

_DIGITS = re.compile(r"\d+")


def strip_digits(name: str) -> str:
    """去掉名称中的全部数字"""
    return _DIGITS.sub("", name)


def extract_index(name: str) -> int | None:
    """提取名称中第一段连续数字"""
    match = _DIGITS.search(name)
    if match:
        return int(match.group())
    return None


class ItemKey(BaseModel):
    """重复项键的结构化形式（在数据/模板边界一次性解析）"""
    model_config = ConfigDict(frozen=True)

    zone: str
    index: int | None = None
    column: str

    @classmethod
    def parse(cls, name: str, zone: str = "") -> ItemKey:
        if zone and name.startswith(zone):
            remainder = name[len(zone):]
        else:
            zone, remainder = "", name
        return cls(zone=zone, index=extract_index(name), column=strip_digits(remainder))

    @property
    def match_key(self) -> str:
        """用于列匹配的键（等同于整个名称去掉全部数字）"""
        return strip_digits(self.zone) + self.column


class RowField(BaseModel):
    """行内字段（带本地槽位号）"""
    field: TemplateField
    slot: int | None = None

    @property
    def name(self) -> str:
        return self.field.name


class Row(BaseModel):
    """按纵坐标聚类得到的模板行"""
    y: float
    fields: list[RowField] = Field(default_factory=list)

    @property
    def names(self) -> list[str]:
        return [f.name for f in self.fields]


class PaginationConfig(BaseModel):
    """分页配置（随请求传入，不持久化）"""
    model_config = ConfigDict(populate_by_name=True)

    item_prefix: str = Field("", alias="itemPrefix")
    items_per_page: int = Field(0, alias="itemsPerPage")

    # 页码字段名（由模板约定决定）
    current_page_key: str = Field("currentPage", alias="currentPageKey")
    total_pages_key: str = Field("totalPages", alias="totalPagesKey")


class PaginationDiagnostics(BaseModel):
    """分页诊断信息（丢弃的数据可被断言）"""
    total_items: int = 0
    total_pages: int = 1
    row_count: int = 0
    placed: int = 0
    page_item_counts: list[int] = Field(default_factory=list, description="每页分配的重复项数")
    dropped_keys: list[str] = Field(default_factory=list, description="模板中无对应槽位")
    unplaced_keys: list[str] = Field(default_factory=list, description="无序号或超出页窗口")

    @property
    def dropped_count(self) -> int:
        return len(self.dropped_keys) + len(self.unplaced_keys)


class PaginationResult(BaseModel):
    """分页结果：每页一条输入记录（顺序即渲染页序）"""
    pages: list[dict[str, Any]] = Field(default_factory=list)
    diagnostics: PaginationDiagnostics = Field(default_factory=PaginationDiagnostics)

    @property
    def page_count(self) -> int:
        return len(self.pages)
