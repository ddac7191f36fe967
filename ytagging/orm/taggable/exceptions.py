"""标签系统异常定义"""


class TaggingError(Exception):
    """标签系统异常基类"""

    def __init__(self, message: str = None):
        self.message = message or self.__class__.__doc__
        super().__init__(self.message)


class TaggingConfigError(TaggingError):
    """标签配置错误（如缺少标签模型或主键列）"""


class TaggableNotPersistedError(TaggingError):
    """记录尚未保存，无法操作标签"""

    def __init__(self, taggable_type: str = None, message: str = None):
        self.taggable_type = taggable_type
        if message is None and taggable_type:
            message = f"{taggable_type} 必须先保存记录才能操作标签"
        super().__init__(message)


__all__ = [
    "TaggingError",
    "TaggingConfigError",
    "TaggableNotPersistedError",
]
