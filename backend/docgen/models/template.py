"""
模板模型 - 声明式单页模板的结构化表示

对应 pdfme 模板文档：
- schemas[0]: 单页字段表（字段名 → {position:{x,y}, ...}）
- basePdf: 页面背景（透传，不解析）
- fonts: 字体资源（透传，渲染前仅做base64解码）
"""

from __future__ import annotations

import base64
from typing import Any

from pydantic import BaseModel, Field


class Position(BaseModel):
    """字段在页面上的位置"""
    x: float = 0.0
    y: float = 0.0


class TemplateField(BaseModel):
    """模板字段（名称唯一，位置用于布局，其余属性原样透传）"""
    name: str
    position: Position
    attrs: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_schema(cls, name: str, schema: dict[str, Any]) -> TemplateField:
        """从模板文档的字段定义构建"""
        attrs = {k: v for k, v in schema.items() if k != "position"}
        position = schema.get("position") or {}
        return cls(name=name, position=Position(**position), attrs=attrs)

    def to_schema(self) -> dict[str, Any]:
        return {**self.attrs, "position": self.position.model_dump()}


class Template(BaseModel):
    """模板（只读输入，一次生成内所有页共享）"""
    name: str
    base_pdf: Any = None
    fields: dict[str, TemplateField] = Field(default_factory=dict)
    fonts: dict[str, Any] = Field(default_factory=dict)

    # 未识别的顶层内容（原样回传给渲染器）
    extra: dict[str, Any] = Field(default_factory=dict)

    # 第一页之后的schemas（单页模板一般为空）
    extra_schemas: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_document(cls, name: str, doc: dict[str, Any]) -> Template:
        """
        解析模板文档

        Args:
            name: 模板名称
            doc: JSON解析后的模板文档

        Returns:
            Template实例（字段保持声明顺序）
        """
        schemas = doc.get("schemas") or [{}]
        page_schema = schemas[0] or {}
        fields = {
            field_name: TemplateField.from_schema(field_name, schema)
            for field_name, schema in page_schema.items()
        }
        extra = {k: v for k, v in doc.items() if k not in ("schemas", "basePdf", "fonts")}
        return cls(
            name=name,
            base_pdf=doc.get("basePdf"),
            fields=fields,
            fonts=doc.get("fonts") or {},
            extra=extra,
            extra_schemas=list(schemas[1:]),
        )

    def to_document(self) -> dict[str, Any]:
        """还原为渲染器使用的模板文档"""
        doc: dict[str, Any] = dict(self.extra)
        doc["basePdf"] = self.base_pdf
        doc["schemas"] = [
            {name: field.to_schema() for name, field in self.fields.items()},
            *self.extra_schemas,
        ]
        if self.fonts:
            doc["fonts"] = dict(self.fonts)
        return doc

    def field_list(self) -> list[TemplateField]:
        return list(self.fields.values())

    def decoded_fonts(self) -> dict[str, Any]:
        """字体资源：base64字符串解码为bytes，其余原样返回"""
        fonts = {}
        for font_name, font_data in self.fonts.items():
            if isinstance(font_data, str):
                fonts[font_name] = base64.b64decode(font_data)
            else:
                fonts[font_name] = font_data
        return fonts
