"""
模板存储 - 从模板目录加载 <name>.json

职责：
1. 按名称读取模板文档并解析为 Template
2. 区分“模板不存在”和“模板无法解析”
3. 列出可用模板

模板的保存/编辑不在本模块范围内。
"""

from __future__ import annotations

import json
from pathlib import Path

from ..config import get_config
from ..interfaces import ITemplateStore, TemplateLoadError, TemplateNotFoundError
from ..models import Template


class TemplateStore(ITemplateStore):
    """基于文件目录的模板存储"""

    def __init__(self, templates_dir: str | Path | None = None):
        self.templates_dir = Path(templates_dir) if templates_dir else get_config().templates_dir

    def load(self, template_name: str) -> Template:
        """加载模板"""
        template_path = self._path_for(template_name)
        if not template_path.is_file():
            raise TemplateNotFoundError(f"Template not found: {template_name}")

        try:
            with open(template_path, "r", encoding="utf-8") as f:
                doc = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise TemplateLoadError(f"Failed to load template: {e}") from e

        if not isinstance(doc, dict):
            raise TemplateLoadError(f"Failed to load template: {template_name} 不是JSON对象")

        return Template.from_document(template_name, doc)

    def list_templates(self) -> list[str]:
        """列出可用模板名称"""
        if not self.templates_dir.exists():
            return []
        return sorted(p.stem for p in self.templates_dir.glob("*.json"))

    def _path_for(self, template_name: str) -> Path:
        # 名称中不允许出现路径分隔
        if not template_name or Path(template_name).name != template_name:
            raise TemplateNotFoundError(f"Template not found: {template_name}")
        return self.templates_dir / f"{template_name}.json"
