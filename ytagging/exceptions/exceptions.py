"""HTTP 层业务异常

标签路由只会主动抛出一种业务异常：请求了未注册的 taggable_type。
服务层的 TaggingError 由异常处理器按类型映射为错误码。
"""

from enum import Enum
from typing import Any, Iterable, List, Optional

from fastapi import status


class ErrorCode(str, Enum):
    """错误代码，写入响应的 error_code 字段"""

    BUSINESS_ERROR = "BUSINESS_ERROR"
    TAGGABLE_TYPE_NOT_FOUND = "TAGGABLE_TYPE_NOT_FOUND"
    TAGGABLE_NOT_PERSISTED = "TAGGABLE_NOT_PERSISTED"
    TAGGING_MISCONFIGURED = "TAGGING_MISCONFIGURED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class BusinessException(Exception):
    """业务异常基类

    子类通过类属性 status_code / code 指定默认的 HTTP 状态码和错误码。

    属性:
        message: 面向调用方的错误消息
        code: 错误码
        details: 写入 msg_details 的明细
        context: 写日志用的上下文
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: ErrorCode = ErrorCode.BUSINESS_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        details: Optional[List[str]] = None,
        **context: Any
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = list(details or [])
        self.context = context

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code.value})"


class TaggableTypeNotFound(BusinessException):
    """请求的 taggable_type 没有注册到标签路由

    使用示例:
        raise TaggableTypeNotFound("Video", supported=["Article", "shop.Product"])
    """

    status_code = status.HTTP_404_NOT_FOUND
    code = ErrorCode.TAGGABLE_TYPE_NOT_FOUND

    def __init__(self, taggable_type: str, supported: Iterable[str] = ()):
        supported = sorted(supported)
        details = [f"可用类型: {', '.join(supported)}"] if supported else []
        super().__init__(
            f"不支持的标签目标类型: {taggable_type}",
            details=details,
            taggable_type=taggable_type,
        )
        self.taggable_type = taggable_type
