"""全局异常处理器

把业务异常、标签服务异常、参数校验失败和未捕获异常统一转换为错误外壳。
"""

from typing import Tuple

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ytagging.log import get_logger
from ytagging.orm.taggable.exceptions import (
    TaggableNotPersistedError,
    TaggingConfigError,
    TaggingError,
)
from ytagging.response import Resp
from .exceptions import BusinessException, ErrorCode

logger = get_logger()

# 标签服务异常 -> (HTTP 状态码, 错误码)，按 MRO 匹配
TAGGING_ERROR_STATUS = {
    TaggableNotPersistedError: (status.HTTP_409_CONFLICT, ErrorCode.TAGGABLE_NOT_PERSISTED),
    TaggingConfigError: (status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.TAGGING_MISCONFIGURED),
    TaggingError: (status.HTTP_400_BAD_REQUEST, ErrorCode.BUSINESS_ERROR),
}


def tagging_error_status(exc: TaggingError) -> Tuple[int, ErrorCode]:
    for cls in type(exc).__mro__:
        if cls in TAGGING_ERROR_STATUS:
            return TAGGING_ERROR_STATUS[cls]
    return TAGGING_ERROR_STATUS[TaggingError]


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} -> {exc.code.value}: {exc.message} {exc.context}")
    return Resp.Error(exc.status_code, exc.message, error_code=exc.code, msg_details=exc.details)


async def tagging_exception_handler(request: Request, exc: TaggingError) -> JSONResponse:
    status_code, code = tagging_error_status(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(f"{request.method} {request.url.path} -> {code.value}: {exc.message}")
    return Resp.Error(status_code, exc.message, error_code=code)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """把 pydantic 的错误列表压平为 "字段: 消息" """
    details = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append(f"{field}: {error['msg']}" if field else error["msg"])
    return Resp.Error(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "请求参数验证失败",
        error_code=ErrorCode.VALIDATION_ERROR,
        msg_details=details,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} 未处理的异常: {exc!r}", exc_info=exc)
    return Resp.Error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "服务器内部错误",
        error_code=ErrorCode.INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app) -> None:
    """注册异常处理器

    使用示例:
        app = FastAPI()
        register_exception_handlers(app)
        app.include_router(create_tag_router(Tag, services), prefix="/api/tags")
    """
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(TaggingError, tagging_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
