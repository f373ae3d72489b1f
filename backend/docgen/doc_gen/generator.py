"""
文档生成器 - 加载模板、准备逐页输入、调用渲染器

职责：
1. 按模板名称加载模板
2. 解析两种输入形态（对象/数组），按需分页
3. 字体解码后交给渲染器
4. 渲染失败统一包装为 RenderError，不重试

错误传播：
- 模板/分页阶段的错误在调用渲染器之前抛出
- 渲染阶段的错误原样上报（不修改分页结果）

测试要点：
- test_generate_paginated: 分页后调用渲染器
- test_generate_list_input: 数组输入逐页透传
- test_template_not_found: 模板不存在时不调用渲染器
- test_render_failure_wrapped: 渲染异常包装
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..interfaces import (
    InvalidRequestError,
    IRenderer,
    ITemplateStore,
    RenderError,
)
from ..models import GenerationRequest, PaginationConfig, PaginationDiagnostics, Template
from .paginator import Paginator

logger = logging.getLogger(__name__)


@dataclass
class GenerationOutcome:
    """生成结果"""
    content: bytes
    page_count: int
    diagnostics: PaginationDiagnostics | None = None
    inputs: list[dict[str, Any]] = field(default_factory=list)


class DocumentGenerator:
    """文档生成器"""

    def __init__(
        self,
        store: ITemplateStore,
        renderer: IRenderer,
        paginator: Paginator | None = None,
    ):
        self.store = store
        self.renderer = renderer
        self.paginator = paginator or Paginator()

    def generate(self, request: GenerationRequest) -> GenerationOutcome:
        """生成文档"""
        template = self.store.load(request.template_name)
        inputs, diagnostics = self.resolve_inputs(template, request.data, request.pagination)
        content = self.render(template, inputs)

        logger.info(
            f"文档生成完成: template={template.name}, pages={len(inputs)}, bytes={len(content)}"
        )
        return GenerationOutcome(
            content=content,
            page_count=len(inputs),
            diagnostics=diagnostics,
            inputs=inputs,
        )

    def resolve_inputs(
        self,
        template: Template,
        data: dict[str, Any] | list[dict[str, Any]],
        pagination: PaginationConfig | None = None,
    ) -> tuple[list[dict[str, Any]], PaginationDiagnostics | None]:
        """
        解析逐页输入

        - data 为数组：每个元素即一页（不分页）
        - data 为对象且无 pagination：单页
        - data 为对象且有 pagination：分页

        Returns:
            (逐页输入, 分页诊断；未分页时为None)
        """
        if isinstance(data, list):
            if pagination is not None:
                raise InvalidRequestError("pagination 仅支持对象形式的 data")
            return [dict(page) for page in data], None

        if pagination is None:
            return [dict(data)], None

        result = self.paginator.paginate(template, data, pagination)
        return result.pages, result.diagnostics

    def render(self, template: Template, inputs: list[dict[str, Any]]) -> bytes:
        """调用渲染器（字体先解码，解码失败同样包装为RenderError）"""
        try:
            render_template = template.model_copy(update={"fonts": template.decoded_fonts()})
            return self.renderer.render(render_template, inputs)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"PDF generation failed: {e}") from e
