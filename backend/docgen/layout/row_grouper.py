"""
行聚类器 - 按纵坐标把重复区字段聚成行

职责：
1. 选出名称以前缀开头的模板字段
2. 按y坐标（容差窗口）聚类成行
3. 行按y升序，行内按x升序
4. 为每个字段标注本地槽位号（字段名中的数字）

聚类模式：
- linkage（默认）: 先按y排序，相邻间距超过容差即开新行，与输入顺序无关
- legacy: 按遇到顺序贪心归入第一个“代表y”在容差内的行（结果依赖输入顺序）

测试要点：
- test_single_row_within_tolerance: 容差内同一行
- test_rows_sorted_top_to_bottom: 行排序
- test_linkage_order_independent: 单链聚类与顺序无关
- test_legacy_order_dependent: 旧算法依赖顺序
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from ..models import Row, RowField, TemplateField, extract_index

DEFAULT_Y_TOLERANCE = 1.0

ClusteringMode = Literal["linkage", "legacy"]


class RowGrouper:
    """行聚类器（纯函数，无状态）"""

    def __init__(
        self,
        tolerance: float = DEFAULT_Y_TOLERANCE,
        mode: ClusteringMode = "linkage",
    ):
        if mode not in ("linkage", "legacy"):
            raise ValueError(f"未知聚类模式: {mode}")
        self.tolerance = tolerance
        self.mode = mode

    def group(self, fields: Iterable[TemplateField], prefix: str) -> list[Row]:
        """
        聚类重复区字段

        Args:
            fields: 模板字段
            prefix: 重复区前缀

        Returns:
            按y升序排列的行；无匹配字段时返回空列表
        """
        candidates = [f for f in fields if f.name.startswith(prefix)]
        if not candidates:
            return []

        if self.mode == "legacy":
            clusters = self._cluster_legacy(candidates)
        else:
            clusters = self._cluster_linkage(candidates)

        rows = [self._build_row(y, members) for y, members in clusters]
        rows.sort(key=lambda r: r.y)
        return rows

    def _cluster_linkage(
        self, fields: list[TemplateField]
    ) -> list[tuple[float, list[TemplateField]]]:
        """单链聚类：排序后按相邻间距切分"""
        ordered = sorted(fields, key=lambda f: (f.position.y, f.name))
        clusters: list[tuple[float, list[TemplateField]]] = []
        prev_y: float | None = None

        for field in ordered:
            y = field.position.y
            if prev_y is None or y - prev_y > self.tolerance:
                clusters.append((y, [field]))
            else:
                clusters[-1][1].append(field)
            prev_y = y

        return clusters

    def _cluster_legacy(
        self, fields: list[TemplateField]
    ) -> list[tuple[float, list[TemplateField]]]:
        """旧算法：按遇到顺序，与各行首个y比较"""
        clusters: list[tuple[float, list[TemplateField]]] = []

        for field in fields:
            y = field.position.y
            for row_y, members in clusters:
                if abs(row_y - y) <= self.tolerance:
                    members.append(field)
                    break
            else:
                clusters.append((y, [field]))

        return clusters

    def _build_row(self, y: float, members: list[TemplateField]) -> Row:
        ordered = sorted(members, key=lambda f: (f.position.x, f.name))
        return Row(
            y=y,
            fields=[RowField(field=f, slot=extract_index(f.name)) for f in ordered],
        )


def group_rows(
    fields: Iterable[TemplateField],
    prefix: str,
    tolerance: float = DEFAULT_Y_TOLERANCE,
    mode: ClusteringMode = "linkage",
) -> list[Row]:
    """便捷函数：聚类重复区字段"""
    return RowGrouper(tolerance=tolerance, mode=mode).group(fields, prefix)
