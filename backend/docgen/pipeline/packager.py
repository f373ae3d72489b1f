"""
打包器 - 生成交给存储服务的消息

职责：
1. 文档内容base64编码
2. 生成文件名（前缀_毫秒时间戳.pdf）
3. 透传 job_id / file_hash

测试要点：
- test_storage_message: 消息结构
- test_filename_prefix: 文件名前缀回退到模板名
"""

from __future__ import annotations

import base64
import time

from ..config import get_config
from ..models import GenerationRequest, Job, StorageMessage


class Packager:
    """打包器实现"""

    def __init__(self, default_bucket: str | None = None):
        self.default_bucket = default_bucket or get_config().storage.default_bucket

    def build(self, job: Job, request: GenerationRequest, content: bytes) -> StorageMessage:
        """构建存储消息"""
        prefix = request.filename_prefix or request.template_name
        timestamp = int(time.time() * 1000)

        return StorageMessage(
            job_id=job.job_id,
            file_hash=job.file_hash,
            bucket_name=request.bucket_name or self.default_bucket,
            filename=f"{prefix}_{timestamp}.pdf",
            file_content=base64.b64encode(content).decode("ascii"),
        )
