"""YAML 配置加载

使用示例:
    from ytagging.config import AppSettings, TaggingSettings, load_yaml_config

    settings = load_yaml_config("config/settings.yaml", AppSettings)
    tagging = load_yaml_config("config/settings.yaml", TaggingSettings, section="tagging")
"""

import os
from typing import Optional, Type, TypeVar

import yaml

T = TypeVar("T")


def load_yaml_config(
    config_path: str,
    settings_class: Type[T],
    section: Optional[str] = None,
    **overrides
) -> T:
    """读取 YAML 文件并构造 Settings 实例

    Args:
        config_path: 配置文件路径
        settings_class: pydantic Settings 类
        section: 只取文件中的某一段（如 "tagging"），为空时取整个文件
        **overrides: 覆盖文件中的同名顶层配置

    Raises:
        FileNotFoundError: 配置文件不存在
        yaml.YAMLError: YAML 格式错误
    """
    path = os.path.abspath(config_path)
    if not os.path.exists(path):
        raise FileNotFoundError(f"配置文件不存在: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if section is not None:
        data = data.get(section) or {}
    return settings_class(**{**data, **overrides})
