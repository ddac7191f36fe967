"""异常处理模块

使用示例:
    from ytagging.exceptions import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from .exceptions import ErrorCode, BusinessException, TaggableTypeNotFound
from .handlers import register_exception_handlers, tagging_error_status

__all__ = [
    "ErrorCode",
    "BusinessException",
    "TaggableTypeNotFound",
    "register_exception_handlers",
    "tagging_error_status",
]
