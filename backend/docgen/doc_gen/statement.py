"""
对账单转换器 - 解析器输出 → 模板数据

职责：
1. 按 orgId 选择模板
2. 写入表头字段（姓名/地址/卡号/账单日/余额）
3. 卡号逐位拆分为 CN1..CNn
4. 有效交易编号为 Tr1, Tr2, ...（借/贷分列）
5. 附带对账单分页约定（前缀/每页行数/页码字段名）

依赖：
- generation_spec.yaml: org_templates, statement

测试要点：
- test_header_fields: 表头字段
- test_card_number_digits: 卡号拆分
- test_transactions_numbered: 交易编号与借贷分列
- test_invalid_transactions_skipped: 表头行/无效交易过滤
- test_unknown_org: 未映射的orgId
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import GenerationSpec, get_config, load_spec
from ..models import GenerationRequest, ParserOutput, Transaction

logger = logging.getLogger(__name__)


class StatementTransformer:
    """对账单转换器"""

    def __init__(self, spec: GenerationSpec | None = None, spec_path: str | None = None):
        if spec is None:
            try:
                spec = load_spec(spec_path or get_config().spec_path)
            except FileNotFoundError as e:
                logger.warning(f"{e}，使用内置生成规范")
                spec = GenerationSpec.default()
        self.spec = spec

    def transform(self, parser_output: ParserOutput | dict[str, Any]) -> GenerationRequest:
        """转换解析器输出为生成请求"""
        if not isinstance(parser_output, ParserOutput):
            parser_output = ParserOutput.model_validate(parser_output)

        template_name = self.spec.get_template_for_org(parser_output.org_id)
        pagination = self.spec.get_statement_pagination()

        data = self._build_header(parser_output)
        prefix = pagination.item_prefix

        for number, tx in enumerate(parser_output.valid_transactions(), start=1):
            data.update(self._build_transaction(f"{prefix}{number}", tx))

        return GenerationRequest(
            template_name=template_name,
            data=data,
            pagination=pagination,
        )

    def _build_header(self, out: ParserOutput) -> dict[str, Any]:
        """表头字段"""
        data: dict[str, Any] = {
            "Cname": out.name or "",
            "Caddress": out.address or "",
            "CardNumber": out.card_number or "",
            "StatmentDate": out.statement_date or "",
        }

        # 卡号逐位拆分
        if out.card_number:
            for i, digit in enumerate(out.card_number, start=1):
                data[f"CN{i}"] = digit

        balances = {
            "AvailableBalance": out.available_balance,
            "OpeningBalance": out.opening_balance,
            "CurrentBalance": out.current_balance,
            "TotalDepits": out.total_debits,
            "TotalCredits": out.total_credits,
        }
        for key, value in balances.items():
            if value is not None:
                data[key] = str(value)

        return data

    def _build_transaction(self, key: str, tx: Transaction) -> dict[str, str]:
        """单笔交易字段（cr为真记贷方，否则记借方）"""
        amount = str(tx.amount_in_bhd) if tx.amount_in_bhd else ""
        fields = {
            f"{key}Date": tx.date or "",
            f"{key}Pdate": tx.post_date or "",
            f"{key}Details": tx.description or "",
            f"{key}Debits": "" if tx.cr is True else amount,
            f"{key}Credits": amount if tx.cr is True else "",
        }
        if tx.currency:
            fields[f"{key}Currency"] = tx.currency
        if tx.amount:
            fields[f"{key}Amount"] = str(tx.amount)
        return fields


def count_valid_transactions(parser_output: ParserOutput | dict[str, Any]) -> int:
    """有效交易数"""
    if not isinstance(parser_output, ParserOutput):
        parser_output = ParserOutput.model_validate(parser_output)
    return len(parser_output.valid_transactions())
