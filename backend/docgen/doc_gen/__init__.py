"""
文档生成模块 - 分页/组装/生成

子模块：
- page_assembler: 单页输入记录组装
- paginator: 重复项分页
- template_store: 模板加载
- generator: 生成门面（模板+输入 → 渲染器）
- statement: 对账单解析器输出转换
"""

from .generator import DocumentGenerator, GenerationOutcome
from .page_assembler import PageAssembler
from .paginator import Paginator, validate_pagination
from .statement import StatementTransformer, count_valid_transactions
from .template_store import TemplateStore

__all__ = [
    "DocumentGenerator",
    "GenerationOutcome",
    "PageAssembler",
    "Paginator",
    "validate_pagination",
    "StatementTransformer",
    "count_valid_transactions",
    "TemplateStore",
]
