"""
规范加载器 - 读取 documents/generation_spec.yaml

职责：
- 解析YAML并提供类型安全访问
- 提供 orgId → 模板 映射、对账单分页默认值
- 缓存加载结果（避免重复解析）

使用方式：
    spec = SpecLoader.load("documents/generation_spec.yaml")
    template_name = spec.get_template_for_org("266")
    pagination = spec.get_statement_pagination()
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from ..interfaces import TemplateNotFoundError
from ..models import PaginationConfig


class StatementSpec(BaseModel):
    """对账单分页约定"""
    item_prefix: str = "Tr"
    items_per_page: int = 15
    current_page_key: str = "Cpage"
    total_pages_key: str = "Mpage"


class GenerationSpec(BaseModel):
    """生成规范（generation_spec.yaml 的结构化表示）"""
    schema_version: str = "1.0"

    # orgId → 模板名称
    org_templates: dict[str, str] = Field(default_factory=dict)

    # 对账单转换配置
    statement: StatementSpec = Field(default_factory=StatementSpec)

    @classmethod
    def default(cls) -> GenerationSpec:
        """内置默认规范（规范文件缺失时使用）"""
        return cls(org_templates={"266": "new-template"})

    # === 便捷访问方法 ===

    def has_template_mapping(self, org_id: str) -> bool:
        return str(org_id) in self.org_templates

    def get_template_for_org(self, org_id: str) -> str:
        """获取机构对应的模板名称"""
        template_name = self.org_templates.get(str(org_id))
        if not template_name:
            raise TemplateNotFoundError(f"No template mapping found for orgId: {org_id}")
        return template_name

    def get_statement_pagination(self) -> PaginationConfig:
        """获取对账单分页配置"""
        return PaginationConfig(
            item_prefix=self.statement.item_prefix,
            items_per_page=self.statement.items_per_page,
            current_page_key=self.statement.current_page_key,
            total_pages_key=self.statement.total_pages_key,
        )


class SpecLoader:
    """规范加载器（缓存）"""

    @classmethod
    @lru_cache(maxsize=1)
    def load(cls, spec_path: str | Path = "documents/generation_spec.yaml") -> GenerationSpec:
        """加载并缓存规范"""
        path = Path(spec_path)
        if not path.exists():
            raise FileNotFoundError(f"规范文件不存在: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        org_templates = {str(k): str(v) for k, v in (data.pop("org_templates", None) or {}).items()}
        return GenerationSpec(org_templates=org_templates, **data)

    @classmethod
    def reload(cls, spec_path: str | Path = "documents/generation_spec.yaml") -> GenerationSpec:
        """强制重新加载（清除缓存）"""
        cls.load.cache_clear()
        return cls.load(spec_path)


# 便捷函数
def load_spec(spec_path: str | Path = "documents/generation_spec.yaml") -> GenerationSpec:
    """加载生成规范"""
    return SpecLoader.load(spec_path)
