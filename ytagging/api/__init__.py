"""标签 API 模块

使用示例:
    from ytagging.api import create_tag_router

    app.include_router(create_tag_router(Tag, {"Article": Article.tagging()}), prefix="/api/tags")
"""

from .tag_api import create_tag_router
from .schemas import TaggingRequest, UntagRequest, TagResponse, EntityTagsResponse

__all__ = [
    "create_tag_router",
    "TaggingRequest",
    "UntagRequest",
    "TagResponse",
    "EntityTagsResponse",
]
