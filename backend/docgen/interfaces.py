"""
模块接口契约 - 定义外部协作方的抽象接口与异常

设计原则：
1. 分页核心是纯函数，不依赖任何外部接口
2. 模板存储、渲染器通过接口注入，便于测试替换
3. 分页阶段的错误在调用渲染器之前抛出

使用方式：
    from docgen.interfaces import IRenderer

    class MyRenderer(IRenderer):
        def render(self, template: Template, inputs: list[dict]) -> bytes:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import Template


# ============================================================================
# 外部协作方接口
# ============================================================================

class ITemplateStore(ABC):
    """模板存储接口 - 按名称加载模板"""

    @abstractmethod
    def load(self, template_name: str) -> Template:
        """
        加载模板

        Args:
            template_name: 模板名称（不含扩展名）

        Returns:
            模板对象

        Raises:
            TemplateNotFoundError: 模板不存在
            TemplateLoadError: 模板无法解析
        """
        ...

    @abstractmethod
    def list_templates(self) -> list[str]:
        """列出可用模板名称"""
        ...


class IRenderer(ABC):
    """渲染器接口 - 模板+逐页输入 → 文档二进制"""

    @abstractmethod
    def render(self, template: Template, inputs: list[dict[str, Any]]) -> bytes:
        """
        渲染文档

        页数等于 inputs 长度，每条记录的值写入同名字段，
        未匹配的模板字段保持默认/空白。

        Args:
            template: 模板（字体已解码）
            inputs: 按页序排列的输入记录

        Returns:
            文档二进制内容

        Raises:
            任意异常均视为渲染失败
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class DocGenError(Exception):
    """基础异常"""
    pass


class TemplateNotFoundError(DocGenError):
    """模板不存在"""
    pass


class TemplateLoadError(DocGenError):
    """模板加载失败"""
    pass


class PaginationConfigError(DocGenError):
    """分页配置错误"""
    pass


class InvalidRequestError(DocGenError):
    """请求不合法"""
    pass


class GenerationError(DocGenError):
    """生成错误"""
    pass


class RenderError(GenerationError):
    """渲染失败"""
    pass
