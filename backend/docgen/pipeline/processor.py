"""
请求处理器 - 编排单个生成任务

职责：
1. 校验透传字段（job_id / file_hash）
2. 识别请求形态（解析器输出 / 直接请求）
3. 按阶段执行：加载模板 → 分页 → 渲染 → 打包
4. 更新任务进度，失败记录后重新抛出

队列连接、确认与重试由外部服务负责。

测试要点：
- test_process_direct_request: 直接请求
- test_process_parser_output: 解析器输出
- test_missing_passthrough_fields: 缺少job_id/file_hash
- test_failure_marks_job: 失败时任务状态
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..config import get_config
from ..doc_gen import DocumentGenerator, StatementTransformer
from ..interfaces import InvalidRequestError
from ..models import GenerationRequest, Job, StorageMessage
from .packager import Packager
from .stages import GENERATION_STAGES, PipelineStage, StageEnum

logger = logging.getLogger(__name__)


class RequestProcessor:
    """请求处理器"""

    def __init__(
        self,
        generator: DocumentGenerator,
        transformer: StatementTransformer | None = None,
        packager: Packager | None = None,
    ):
        self.config = get_config()
        self.generator = generator
        self.transformer = transformer
        self.packager = packager or Packager(self.config.storage.default_bucket)

    def process(self, payload: dict[str, Any]) -> tuple[Job, StorageMessage]:
        """处理一条生成请求（创建任务并执行）"""
        job = self.create_job(payload)
        return job, self.execute(job, payload)

    def create_job(self, payload: dict[str, Any]) -> Job:
        """
        创建任务

        Raises:
            InvalidRequestError: 缺少 job_id / file_hash
        """
        job_id = payload.get("jobId") or payload.get("job_id")
        file_hash = payload.get("fileHash") or payload.get("file_hash")
        if not job_id or not file_hash:
            raise InvalidRequestError("job_id and file_hash are required fields")
        return Job(job_id=str(job_id), file_hash=str(file_hash))

    def execute(self, job: Job, payload: dict[str, Any]) -> StorageMessage:
        """
        执行生成任务

        Args:
            job: 任务对象（状态在执行中更新）
            payload: 请求消息（已JSON解析）

        Returns:
            存储消息

        Raises:
            InvalidRequestError: 请求不合法
            DocGenError: 模板/分页/渲染失败
        """
        job.mark_running()
        context: dict[str, Any] = {"payload": payload}

        try:
            for stage in GENERATION_STAGES:
                self._execute_stage(job, stage, context)
            job.mark_succeeded()
        except Exception as e:
            logger.exception(f"生成任务失败: {job.job_id}")
            job.mark_failed(str(e))
            raise

        logger.info(f"[{job.job_id}] 生成完成: {context['message'].filename}")
        return context["message"]

    def _execute_stage(self, job: Job, stage: PipelineStage, context: dict[str, Any]) -> None:
        """执行单个阶段"""
        job.progress.stage = stage.name
        job.progress.percent = stage.progress_start
        logger.info(f"[{job.job_id}] 开始阶段: {stage.name}")

        if stage.name == StageEnum.PARSE_REQUEST.value:
            context["request"] = self._parse_request(context["payload"])
            job.template_name = context["request"].template_name

        elif stage.name == StageEnum.LOAD_TEMPLATE.value:
            context["template"] = self.generator.store.load(context["request"].template_name)

        elif stage.name == StageEnum.PAGINATE.value:
            request: GenerationRequest = context["request"]
            inputs, diagnostics = self.generator.resolve_inputs(
                context["template"], request.data, request.pagination
            )
            context["inputs"] = inputs
            job.page_count = len(inputs)
            if diagnostics is not None and diagnostics.dropped_count:
                job.add_flag(f"分页丢弃{diagnostics.dropped_count}个值")

        elif stage.name == StageEnum.RENDER.value:
            context["content"] = self.generator.render(context["template"], context["inputs"])

        elif stage.name == StageEnum.PACKAGE.value:
            context["message"] = self.packager.build(
                job, context["request"], context["content"]
            )

        job.progress.percent = stage.progress_end

    def _parse_request(self, payload: dict[str, Any]) -> GenerationRequest:
        """识别请求形态并转换为生成请求"""
        if payload.get("orgId") and payload.get("transactions") is not None:
            if self.transformer is None:
                self.transformer = StatementTransformer()
            try:
                request = self.transformer.transform(payload)
            except ValidationError as e:
                raise InvalidRequestError(f"解析器数据格式错误: {e}") from e
            request.bucket_name = payload.get("bucket_name") or self.config.storage.default_bucket
            request.filename_prefix = f"statement_{payload['orgId']}"
            logger.info(
                f"解析器数据: orgId={payload['orgId']}, "
                f"transactions={len(payload['transactions'])}, template={request.template_name}"
            )
            return request

        if not payload.get("template_name") and not payload.get("templateName"):
            raise InvalidRequestError("template_name is required")
        if payload.get("data") is None:
            raise InvalidRequestError("data is required")

        try:
            return GenerationRequest.model_validate(payload)
        except ValidationError as e:
            raise InvalidRequestError(f"请求格式错误: {e}") from e
