"""
请求模型 - 生成请求/解析器输出/存储消息

两种输入形态并存：
- data 为对象：单页，或按 pagination 拆分为多页
- data 为数组：每个元素即一页
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .pagination import PaginationConfig


class GenerationRequest(BaseModel):
    """文档生成请求"""
    model_config = ConfigDict(populate_by_name=True)

    template_name: str = Field(
        ..., validation_alias=AliasChoices("template_name", "templateName")
    )
    data: dict[str, Any] | list[dict[str, Any]]
    pagination: PaginationConfig | None = None

    # 存储相关（仅队列任务使用）
    bucket_name: str | None = None
    filename_prefix: str | None = None

    @property
    def is_multi_page_input(self) -> bool:
        return isinstance(self.data, list)


class Transaction(BaseModel):
    """解析器输出的单笔交易"""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    date: str | None = None
    post_date: str | None = Field(None, alias="postDate")
    description: str | None = None
    cr: bool | None = None
    amount_in_bhd: Any = Field(None, alias="amountInBHD")
    currency: str | None = None
    amount: Any = None

    def is_valid(self) -> bool:
        """有日期和描述，且不是表头行"""
        return bool(
            self.date
            and self.description
            and "Account transactions" not in self.description
        )


class ParserOutput(BaseModel):
    """对账单解析器输出"""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    org_id: str = Field(..., alias="orgId")
    name: str | None = None
    address: str | None = None
    card_number: str | None = Field(None, alias="cardNumber")
    statement_date: str | None = Field(None, alias="statementDate")
    available_balance: Any = Field(None, alias="availableBalance")
    opening_balance: Any = Field(None, alias="openingBalance")
    current_balance: Any = Field(None, alias="currentBalance")
    total_debits: Any = Field(None, alias="toatalDepits")  # 上游字段名拼写如此
    total_credits: Any = Field(None, alias="totalCredits")
    transactions: list[Transaction] = Field(default_factory=list)

    def valid_transactions(self) -> list[Transaction]:
        return [tx for tx in self.transactions if tx.is_valid()]


class StorageMessage(BaseModel):
    """交给存储服务的消息（job_id/file_hash 必须透传）"""
    job_id: str
    file_hash: str
    bucket_name: str
    filename: str
    file_content: str = Field(..., description="base64编码的PDF")
