"""
任务模型 - 单次文档生成任务的状态与生命周期
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class JobStatus(str, Enum):
    """任务状态枚举"""
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class JobProgress(BaseModel):
    """任务进度"""
    stage: str = "INIT"
    percent: int = 0
    message: str = ""


class Job(BaseModel):
    """生成任务实体"""
    job_id: str = Field(..., description="上游任务ID（透传）")
    file_hash: str = Field(..., description="源文件哈希（透传）")
    template_name: str | None = None

    # 状态
    status: JobStatus = JobStatus.QUEUED
    progress: JobProgress = Field(default_factory=JobProgress)

    # 结果
    page_count: int | None = None
    flags: list[str] = Field(default_factory=list, description="告警标记")
    errors: list[str] = Field(default_factory=list, description="错误信息")

    # 时间戳
    created_at: datetime = Field(default_factory=datetime.now)
    started_at: datetime | None = None
    finished_at: datetime | None = None

    def mark_running(self, stage: str = "PARSE_REQUEST") -> None:
        """标记为运行中"""
        self.status = JobStatus.RUNNING
        self.started_at = datetime.now()
        self.progress.stage = stage

    def mark_succeeded(self) -> None:
        """标记为成功"""
        self.status = JobStatus.SUCCEEDED
        self.finished_at = datetime.now()
        self.progress.percent = 100

    def mark_failed(self, error: str) -> None:
        """标记为失败"""
        self.status = JobStatus.FAILED
        self.finished_at = datetime.now()
        self.errors.append(error)

    def add_flag(self, flag: str) -> None:
        """添加告警标记（不中断）"""
        if flag not in self.flags:
            self.flags.append(flag)
