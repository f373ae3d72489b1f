"""
数据模型单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_models.py -v
"""

import pytest

from docgen.models import (
    GenerationRequest,
    ItemKey,
    Job,
    JobStatus,
    PaginationConfig,
    ParserOutput,
    Template,
    extract_index,
    strip_digits,
)


class TestItemKey:
    """重复项键测试"""

    def test_parse_item_key(self):
        """测试前缀+序号+后缀拆分"""
        key = ItemKey.parse("Tr12Date", "Tr")
        assert key.zone == "Tr"
        assert key.index == 12
        assert key.column == "Date"
        assert key.match_key == "TrDate"

    def test_parse_header_key(self):
        """测试不以前缀开头的键"""
        key = ItemKey.parse("Cname", "Tr")
        assert key.zone == ""
        assert key.index is None
        assert key.match_key == "Cname"

    def test_column_digits_stripped(self):
        """测试列名中的数字也被去掉"""
        key = ItemKey.parse("Tr3USD2", "Tr")
        assert key.index == 3
        assert key.column == "USD"

    def test_match_key_without_zone(self):
        """测试无前缀解析与整体去数字一致"""
        assert ItemKey.parse("Tr3USD2").match_key == strip_digits("Tr3USD2") == "TrUSD"

    def test_extract_index_first_run(self):
        """测试取第一段连续数字"""
        assert extract_index("Tr105Date2") == 105
        assert extract_index("Date") is None


class TestTemplate:
    """模板模型测试"""

    @pytest.fixture
    def doc(self) -> dict:
        return {
            "basePdf": "data:application/pdf;base64,AAAA",
            "schemas": [
                {
                    "Cname": {"type": "text", "position": {"x": 1, "y": 2}, "fontSize": 9},
                    "Tr1Date": {"type": "text", "position": {"x": 3, "y": 4.5}},
                }
            ],
            "fonts": {"Noto": "AAEC"},
            "columns": ["Cname"],
        }

    def test_from_document(self, doc: dict):
        """测试字段解析与属性透传"""
        template = Template.from_document("t", doc)

        assert list(template.fields) == ["Cname", "Tr1Date"]
        assert template.fields["Tr1Date"].position.y == 4.5
        assert template.fields["Cname"].attrs == {"type": "text", "fontSize": 9}
        assert template.extra == {"columns": ["Cname"]}

    def test_to_document_roundtrip(self, doc: dict):
        """测试还原渲染器文档"""
        assert Template.from_document("t", doc).to_document() == doc

    def test_decoded_fonts(self, doc: dict):
        """测试base64字体解码，非字符串原样返回"""
        doc["fonts"]["Builtin"] = {"fallback": True}
        fonts = Template.from_document("t", doc).decoded_fonts()
        assert fonts["Noto"] == b"\x00\x01\x02"
        assert fonts["Builtin"] == {"fallback": True}


class TestRequestModels:
    """请求模型测试"""

    def test_generation_request_aliases(self):
        """测试驼峰字段名"""
        request = GenerationRequest.model_validate({
            "templateName": "statement",
            "data": {"Cname": "Alice"},
            "pagination": {"itemPrefix": "Tr", "itemsPerPage": 15},
        })
        assert request.template_name == "statement"
        assert request.pagination == PaginationConfig(item_prefix="Tr", items_per_page=15)
        assert not request.is_multi_page_input

    def test_generation_request_list_data(self):
        """测试数组形式的逐页数据"""
        request = GenerationRequest(template_name="t", data=[{"a": "1"}, {"a": "2"}])
        assert request.is_multi_page_input
        assert request.pagination is None

    def test_parser_output_coerces_numbers(self):
        """测试数字型orgId/卡号转为字符串"""
        out = ParserOutput.model_validate({"orgId": 266, "cardNumber": 4111, "transactions": []})
        assert out.org_id == "266"
        assert out.card_number == "4111"

    def test_valid_transactions(self):
        """测试有效交易过滤"""
        out = ParserOutput.model_validate({
            "orgId": "266",
            "transactions": [
                {"date": "01/01", "description": "Coffee"},
                {"date": "", "description": "No date"},
                {"date": "01/01", "description": "Account transactions summary"},
            ],
        })
        assert [tx.description for tx in out.valid_transactions()] == ["Coffee"]


class TestJob:
    """任务模型测试"""

    @pytest.fixture
    def job(self) -> Job:
        return Job(job_id="job-1", file_hash="hash-1")

    def test_mark_running(self, job: Job):
        """测试标记运行中"""
        job.mark_running("LOAD_TEMPLATE")
        assert job.status == JobStatus.RUNNING
        assert job.progress.stage == "LOAD_TEMPLATE"
        assert job.started_at is not None

    def test_mark_succeeded(self, job: Job):
        """测试标记成功"""
        job.mark_running()
        job.mark_succeeded()
        assert job.status == JobStatus.SUCCEEDED
        assert job.progress.percent == 100

    def test_mark_failed(self, job: Job):
        """测试标记失败"""
        job.mark_running()
        job.mark_failed("Test error")
        assert job.status == JobStatus.FAILED
        assert "Test error" in job.errors

    def test_add_flag_dedup(self, job: Job):
        """测试告警标记去重"""
        job.add_flag("x")
        job.add_flag("x")
        assert job.flags == ["x"]
