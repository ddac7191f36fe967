"""标签配置对象

TaggingConfig 在组装阶段构造一次，显式传给 TagRepository / TaggingService，
标签逻辑内部不读取任何全局配置。
"""

from dataclasses import dataclass
from typing import Callable, Optional, TYPE_CHECKING

from .slug import slugify, title_case

if TYPE_CHECKING:
    from ytagging.config import TaggingSettings


@dataclass(frozen=True)
class TaggingConfig:
    """标签策略配置

    Attributes:
        normalizer: 标签名 -> slug，默认 slugify
        displayer: 标签名 -> 展示名（仅在新建标签时使用），默认 title_case
        delimiter: 单个字符串参数的拆分分隔符，None 表示不拆分

    使用示例:
        config = TaggingConfig(displayer=str.upper)
        service = TaggingService(Tag, Tagged, "Article", config=config)
    """
    normalizer: Callable[[str], str] = slugify
    displayer: Callable[[str], str] = title_case
    delimiter: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: "TaggingSettings") -> "TaggingConfig":
        """从 TaggingSettings 构造，未配置的策略使用默认函数"""
        return cls(
            normalizer=settings.normalizer or slugify,
            displayer=settings.displayer or title_case,
            delimiter=settings.delimiter,
        )


DEFAULT_TAGGING_CONFIG = TaggingConfig()
