"""
YTagging - 基于 SQLAlchemy 的通用标签扩展

提供标签规范化、标签/关联模型、标签服务、按标签过滤查询以及可选的 FastAPI 路由
"""

from .version import __version__, __author__, __description__

# 导出响应模块
from .response import Resp

# 导出ORM基类
from .orm import (
    Base,
    CoreModel,
    init_database,
    get_engine,
    get_db,
    db_session_scope,
    on_request_end,
)

# 导出标签系统
from .orm.taggable import (
    slugify,
    title_case,
    TaggingConfig,
    AbstractTag,
    AbstractTagged,
    TagRepository,
    TaggedRepository,
    TaggingService,
    TaggableMixin,
    TaggingError,
    TaggingConfigError,
    TaggableNotPersistedError,
)

# 导出配置
from .config import (
    AppSettings,
    DatabaseSettings,
    LoggingSettings,
    TaggingSettings,
    load_yaml_config,
)

# 导出日志
from .log import setup_logger, setup_root_logger, get_logger

# 导出异常
from .exceptions import ErrorCode, BusinessException, TaggableTypeNotFound, register_exception_handlers

# 导出 API
from .api import create_tag_router

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "Resp",
    "Base",
    "CoreModel",
    "init_database",
    "get_engine",
    "get_db",
    "db_session_scope",
    "on_request_end",
    "slugify",
    "title_case",
    "TaggingConfig",
    "AbstractTag",
    "AbstractTagged",
    "TagRepository",
    "TaggedRepository",
    "TaggingService",
    "TaggableMixin",
    "TaggingError",
    "TaggingConfigError",
    "TaggableNotPersistedError",
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "TaggingSettings",
    "load_yaml_config",
    "setup_logger",
    "setup_root_logger",
    "get_logger",
    "TaggableTypeNotFound",
    "ErrorCode",
    "BusinessException",
    "register_exception_handlers",
    "create_tag_router",
]
