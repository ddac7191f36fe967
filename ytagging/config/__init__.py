"""配置模块

- AppSettings: 聚合 database / logging / tagging 三段配置
- load_yaml_config: 从 YAML 文件构造配置

快速开始:
    from ytagging.config import AppSettings, load_yaml_config

    settings = load_yaml_config("config/settings.yaml", AppSettings)
"""

from .settings import (
    AppSettings,
    DatabaseSettings,
    LoggingSettings,
    TaggingSettings,
)
from .loader import load_yaml_config

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "TaggingSettings",
    "load_yaml_config",
]
