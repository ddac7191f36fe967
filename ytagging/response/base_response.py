"""标签接口的统一响应结构

成功与失败都返回同一个外壳::

    {"status": "success" | "error", "message": "...", "msg_details": [...], "data": ...}

失败响应额外带 error_code，由异常处理器填写。
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from fastapi import status
from fastapi.responses import JSONResponse


class ResponseStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


def to_jsonable(value: Any, top: bool = True) -> Any:
    """把标签对象、时间等转换为可 JSON 编码的值

    顶层的 None 输出为 {}，嵌套的 None 原样保留。
    """
    if value is None:
        return {} if top else None
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if hasattr(value, "__table__"):
        # ORM 对象按表字段展开，关联关系不展开
        return {
            column.name: to_jsonable(getattr(value, column.name, None), False)
            for column in value.__table__.columns
        }
    if isinstance(value, dict):
        return {key: to_jsonable(item, False) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item, False) for item in value]
    return value


def envelope(
    message: str,
    data: Any = None,
    msg_details: Optional[List[str]] = None,
    response_status: ResponseStatus = ResponseStatus.SUCCESS,
    error_code: Optional[str] = None,
) -> dict:
    body = {
        "status": response_status.value,
        "message": message,
        "msg_details": list(msg_details or []),
        "data": to_jsonable(data),
    }
    if error_code is not None:
        body["error_code"] = str(getattr(error_code, "value", error_code))
    return body


class Resp:
    """响应快捷类

    使用示例:
        from ytagging.response import Resp

        return Resp.OK(data={"names": article.tag_names()}, message="打标签成功")
        return Resp.Error(404, "未注册的标签目标类型", error_code="TAGGABLE_TYPE_NOT_FOUND")
    """

    @staticmethod
    def OK(data: Any = None, message: str = "请求成功") -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_200_OK, content=envelope(message, data))

    @staticmethod
    def Error(
        status_code: int,
        message: str,
        error_code: Optional[str] = None,
        msg_details: Optional[List[str]] = None,
    ) -> JSONResponse:
        content = envelope(
            message,
            msg_details=msg_details,
            response_status=ResponseStatus.ERROR,
            error_code=error_code,
        )
        return JSONResponse(status_code=status_code, content=content)
