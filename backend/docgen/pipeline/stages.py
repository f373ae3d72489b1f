"""
流水线阶段定义

职责：
1. 定义生成任务各阶段的名称与进度区间
2. 按顺序由 RequestProcessor 分派执行
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StageEnum(str, Enum):
    """流水线阶段枚举"""
    PARSE_REQUEST = "PARSE_REQUEST"
    LOAD_TEMPLATE = "LOAD_TEMPLATE"
    PAGINATE = "PAGINATE"
    RENDER = "RENDER"
    PACKAGE = "PACKAGE"


@dataclass
class PipelineStage:
    """流水线阶段"""
    name: str
    progress_start: int  # 进度起点（0-100）
    progress_end: int    # 进度终点


# 生成任务各阶段配置
GENERATION_STAGES: list[PipelineStage] = [
    PipelineStage(StageEnum.PARSE_REQUEST.value, 0, 10),
    PipelineStage(StageEnum.LOAD_TEMPLATE.value, 10, 20),
    PipelineStage(StageEnum.PAGINATE.value, 20, 40),
    PipelineStage(StageEnum.RENDER.value, 40, 90),
    PipelineStage(StageEnum.PACKAGE.value, 90, 100),
]
