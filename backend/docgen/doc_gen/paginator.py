"""
分页器 - 把一份数据拆成逐页输入记录

职责：
1. 从模板布局识别重复行（无重复行 → 单页）
2. 统计数据中的重复项数量，计算总页数
3. 按页窗口分配重复项，全局序号 → 本地槽位
4. 输出逐页记录与诊断（丢弃/未放置的键）

页窗口：第p页覆盖全局序号 [(p-1)*N+1, p*N]，本地槽位 = 序号 - 窗口起点 + 1

依赖：
- layout.RowGrouper / SlotMatcher
- runtime.yaml: pagination.y_tolerance / clustering

测试要点：
- test_page_count: 总页数 = ceil(项数 / 每页项数)
- test_item_placement: 第i项落在第ceil(i/N)页、槽位((i-1) mod N)+1
- test_unmatched_dropped: 无匹配槽位的值被丢弃且计入诊断
- test_invalid_config: 每页项数<=0 或前缀为空时报错
"""

from __future__ import annotations

import logging
import math
from typing import Any

from ..config import get_config
from ..interfaces import PaginationConfigError
from ..layout import RowGrouper, SlotMatcher
from ..models import (
    PaginationConfig,
    PaginationDiagnostics,
    PaginationResult,
    Template,
    extract_index,
)
from .page_assembler import PageAssembler

logger = logging.getLogger(__name__)


def validate_pagination(config: PaginationConfig) -> None:
    """分页前校验配置"""
    per_page = config.items_per_page
    if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page <= 0:
        raise PaginationConfigError(f"itemsPerPage 必须为正整数: {per_page!r}")
    if not config.item_prefix:
        raise PaginationConfigError("itemPrefix 不能为空")


class Paginator:
    """分页器（纯函数，可并发调用）"""

    def __init__(self, grouper: RowGrouper | None = None):
        if grouper is None:
            cfg = get_config().pagination
            grouper = RowGrouper(tolerance=cfg.y_tolerance, mode=cfg.clustering)
        self.grouper = grouper

    def paginate(
        self,
        template: Template,
        data: dict[str, Any],
        config: PaginationConfig,
    ) -> PaginationResult:
        """
        生成逐页输入记录

        Args:
            template: 单页模板
            data: 扁平数据（重复项键为 prefix+序号+后缀）
            config: 分页配置

        Returns:
            分页结果（pages 的顺序即渲染页序）

        Raises:
            PaginationConfigError: 配置非法
        """
        validate_pagination(config)
        prefix = config.item_prefix

        rows = self.grouper.group(template.field_list(), prefix)
        if not rows:
            logger.info(f"模板 {template.name} 无前缀 {prefix} 的字段，按单页处理")
            return self._single_page(data, config)

        # 1. 拆分表头与重复项（保持数据顺序）
        header: dict[str, Any] = {}
        items: dict[int, dict[str, Any]] = {}
        unplaced: list[str] = []

        for key, value in data.items():
            if not key.startswith(prefix):
                header[key] = value
                continue
            index = extract_index(key)
            if index is None or index < 1:
                unplaced.append(key)
                continue
            items.setdefault(index, {})[key] = value

        # 2. 计算页数
        per_page = config.items_per_page
        total_items = len(items)
        total_pages = max(1, math.ceil(total_items / per_page))

        logger.info(
            f"分页: 模板 {template.name} 有 {len(rows)} 行, "
            f"数据 {total_items} 项, 生成 {total_pages} 页"
        )

        # 3. 逐页组装
        assembler = PageAssembler(SlotMatcher(rows), config)
        diagnostics = PaginationDiagnostics(
            total_items=total_items,
            total_pages=total_pages,
            row_count=len(rows),
        )
        pages = []

        for page_number in range(1, total_pages + 1):
            window_start = (page_number - 1) * per_page + 1
            window_end = page_number * per_page
            page_items = [
                (index - window_start + 1, values)
                for index, values in items.items()
                if window_start <= index <= window_end
            ]

            page, dropped = assembler.assemble(header, page_items, page_number, total_pages)
            pages.append(page)

            diagnostics.page_item_counts.append(len(page_items))
            diagnostics.placed += sum(len(values) for _, values in page_items) - len(dropped)
            diagnostics.dropped_keys.extend(dropped)

        # 4. 超出全部页窗口的项（序号不连续时出现）
        last_index = total_pages * per_page
        for index, values in items.items():
            if index > last_index:
                unplaced.extend(values)

        diagnostics.unplaced_keys = unplaced
        self._log_losses(template.name, diagnostics)

        return PaginationResult(pages=pages, diagnostics=diagnostics)

    def _single_page(self, data: dict[str, Any], config: PaginationConfig) -> PaginationResult:
        """无重复区：整份数据作为唯一一页"""
        page = dict(data)
        page[config.current_page_key] = "1"
        page[config.total_pages_key] = "1"
        return PaginationResult(
            pages=[page],
            diagnostics=PaginationDiagnostics(
                total_items=0,
                total_pages=1,
                page_item_counts=[0],
            ),
        )

    def _log_losses(self, template_name: str, diagnostics: PaginationDiagnostics) -> None:
        if diagnostics.dropped_keys:
            logger.warning(
                f"模板 {template_name} 无对应槽位，丢弃 {len(diagnostics.dropped_keys)} 个值: "
                f"{diagnostics.dropped_keys[:10]}"
            )
        if diagnostics.unplaced_keys:
            logger.warning(
                f"模板 {template_name} 有 {len(diagnostics.unplaced_keys)} 个重复项键未放置"
                f"（无序号或超出页窗口）: {diagnostics.unplaced_keys[:10]}"
            )
