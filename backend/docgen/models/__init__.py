"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- Template/TemplateField: 单页模板与字段
- Row/ItemKey/PaginationConfig: 行布局与分页
- GenerationRequest/ParserOutput: 生成请求
- Job/StorageMessage: 任务与存储消息
"""

from .job import Job, JobProgress, JobStatus
from .pagination import (
    ItemKey,
    PaginationConfig,
    PaginationDiagnostics,
    PaginationResult,
    Row,
    RowField,
    extract_index,
    strip_digits,
)
from .request import GenerationRequest, ParserOutput, StorageMessage, Transaction
from .template import Position, Template, TemplateField

__all__ = [
    "Job",
    "JobProgress",
    "JobStatus",
    "ItemKey",
    "PaginationConfig",
    "PaginationDiagnostics",
    "PaginationResult",
    "Row",
    "RowField",
    "extract_index",
    "strip_digits",
    "GenerationRequest",
    "ParserOutput",
    "StorageMessage",
    "Transaction",
    "Position",
    "Template",
    "TemplateField",
]
