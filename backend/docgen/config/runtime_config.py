"""
运行期配置 - 读取 documents/runtime.yaml

职责：
- 加载模板目录/分页/存储/日志等运行参数
- 提供环境变量覆盖机制
- 类型安全的配置访问
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class PaginationRuntimeConfig(BaseModel):
    """分页运行参数"""

    y_tolerance: float = 1.0
    clustering: Literal["linkage", "legacy"] = "linkage"


class StorageConfig(BaseModel):
    """存储消息配置"""

    default_bucket: str = "pdfs"


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_format: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    # 基础路径
    templates_dir: Path = Path("templates")
    spec_path: Path = Path("documents/generation_spec.yaml")

    # 各子配置
    pagination: PaginationRuntimeConfig = Field(default_factory=PaginationRuntimeConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "DOCGEN_",
        "env_nested_delimiter": "__",
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        # 只传YAML中出现的键（字典形式），未出现的键仍可由环境变量提供
        kwargs: dict[str, Any] = {}
        for section in ("pagination", "storage", "logging"):
            values = cls._extract(runtime_opts, section)
            if values:
                kwargs[section] = values
        paths = cls._extract(runtime_opts, "paths")
        if "templates_dir" in paths:
            kwargs["templates_dir"] = cls._resolve(paths["templates_dir"], path.parent)
        if "spec_path" in paths:
            kwargs["spec_path"] = cls._resolve(paths["spec_path"], path.parent)

        return cls(**kwargs)

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置（支持 {default: x} 写法）"""
        section = data.get(key, {}) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    @staticmethod
    def _resolve(value: str, base_dir: Path) -> Path:
        """相对路径基于配置文件所在目录解析"""
        p = Path(value)
        return p if p.is_absolute() else (base_dir / p).resolve()


def configure_logging(config: RuntimeConfig | None = None) -> None:
    """按配置初始化根日志"""
    cfg = (config or get_config()).logging
    logging.basicConfig(
        level=cfg.log_level.upper(),
        format=cfg.log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


# 全局配置实例
_config: RuntimeConfig | None = None

_DEFAULT_RUNTIME_PATH = "documents/runtime.yaml"


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(_DEFAULT_RUNTIME_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    _config = RuntimeConfig.from_yaml(yaml_path or _DEFAULT_RUNTIME_PATH)
    return _config
