"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(row_template, paginator):
        result = paginator.paginate(row_template, data, config)
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any, Generator

import pytest

from docgen.config import GenerationSpec, RuntimeConfig, StatementSpec
from docgen.doc_gen import DocumentGenerator, Paginator, TemplateStore
from docgen.interfaces import IRenderer
from docgen.layout import RowGrouper
from docgen.models import PaginationConfig, Template


def make_template(name: str, fields: dict[str, tuple[float, float]], **doc: Any) -> Template:
    """按 {字段名: (x, y)} 构建模板"""
    schema = {
        field_name: {"type": "text", "position": {"x": x, "y": y}, "width": 20, "height": 5}
        for field_name, (x, y) in fields.items()
    }
    return Template.from_document(name, {"basePdf": "BLANK", "schemas": [schema], **doc})


def row_fields(slots: int, columns=("Date", "Details", "Amount"), top: float = 100.0) -> dict:
    """生成 slots 行重复字段，每行y有轻微抖动（容差内）"""
    fields = {}
    for slot in range(1, slots + 1):
        y = top + (slot - 1) * 10
        for i, column in enumerate(columns):
            fields[f"Tr{slot}{column}"] = (10.0 + i * 40, y + i * 0.5)
    return fields


def item_data(count: int, columns=("Date", "Details", "Amount")) -> dict[str, str]:
    """生成 count 项重复数据"""
    data = {}
    for index in range(1, count + 1):
        for column in columns:
            data[f"Tr{index}{column}"] = f"{column}-{index}"
    return data


class FakeRenderer(IRenderer):
    """记录调用的渲染器"""

    def __init__(self, fail_with: Exception | None = None):
        self.calls: list[tuple[Template, list[dict[str, Any]]]] = []
        self.fail_with = fail_with

    def render(self, template: Template, inputs: list[dict[str, Any]]) -> bytes:
        self.calls.append((template, inputs))
        if self.fail_with is not None:
            raise self.fail_with
        return f"%PDF-fake pages={len(inputs)}".encode()


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置"""
    return RuntimeConfig()


@pytest.fixture
def spec() -> GenerationSpec:
    """生成规范（测试用）"""
    return GenerationSpec(
        schema_version="1.0",
        org_templates={"266": "statement"},
        statement=StatementSpec(item_prefix="Tr", items_per_page=3),
    )


@pytest.fixture
def pagination() -> PaginationConfig:
    """每页3项的分页配置"""
    return PaginationConfig(item_prefix="Tr", items_per_page=3)


# ============================================================================
# 模板 Fixtures
# ============================================================================

@pytest.fixture
def template_factory():
    return make_template


@pytest.fixture
def rows_factory():
    return row_fields


@pytest.fixture
def data_factory():
    return item_data


@pytest.fixture
def header_fields() -> dict[str, tuple[float, float]]:
    return {
        "Cname": (20.0, 30.0),
        "StatmentDate": (150.0, 30.0),
        "currentPage": (170.0, 285.0),
        "totalPages": (182.0, 285.0),
    }


@pytest.fixture
def row_template(header_fields) -> Template:
    """三行重复区（Date/Details/Amount）+ 表头"""
    return make_template("statement", {**header_fields, **row_fields(3)})


@pytest.fixture
def flat_template(header_fields) -> Template:
    """无重复区的模板"""
    return make_template("letter", header_fields)


@pytest.fixture
def paginator() -> Paginator:
    return Paginator(RowGrouper(tolerance=1.0, mode="linkage"))


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def templates_dir(temp_dir: Path, row_template: Template) -> Path:
    """写入 statement.json 的模板目录"""
    doc = row_template.to_document()
    doc["fonts"] = {"NotoSans": "AAEC", "Builtin": {"data": "x", "fallback": True}}
    (temp_dir / "statement.json").write_text(json.dumps(doc), encoding="utf-8")
    return temp_dir


@pytest.fixture
def store(templates_dir: Path) -> TemplateStore:
    return TemplateStore(templates_dir)


@pytest.fixture
def fake_renderer_cls() -> type[FakeRenderer]:
    return FakeRenderer


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def generator(store: TemplateStore, renderer: FakeRenderer, paginator: Paginator) -> DocumentGenerator:
    return DocumentGenerator(store, renderer, paginator)
