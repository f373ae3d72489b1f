"""
配置层 - 加载生成规范与运行期配置

职责：
- 加载 documents/generation_spec.yaml（机构模板映射、对账单分页约定）
- 加载 documents/runtime.yaml（运行期参数）
- 提供类型安全的配置访问接口
"""

from .runtime_config import RuntimeConfig, configure_logging, get_config, reload_config
from .spec_loader import GenerationSpec, SpecLoader, StatementSpec, load_spec

__all__ = [
    "SpecLoader",
    "GenerationSpec",
    "StatementSpec",
    "load_spec",
    "RuntimeConfig",
    "configure_logging",
    "get_config",
    "reload_config",
]
