"""
流水线模块 - 生成任务编排

子模块：
- stages: 流水线各阶段定义
- processor: 请求处理器
- packager: 存储消息打包
"""

from .packager import Packager
from .processor import RequestProcessor
from .stages import GENERATION_STAGES, PipelineStage, StageEnum

__all__ = [
    "Packager",
    "RequestProcessor",
    "GENERATION_STAGES",
    "PipelineStage",
    "StageEnum",
]
