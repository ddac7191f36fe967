"""响应模块

使用示例:
    from ytagging.response import Resp

    return Resp.OK(data=tags)
"""

from .base_response import Resp, ResponseStatus, envelope, to_jsonable

__all__ = [
    "Resp",
    "ResponseStatus",
    "envelope",
    "to_jsonable",
]
