"""
标签 API

提供标签查询与打标签接口。
使用动词风格路由，只使用 GET 和 POST 请求。
"""

from typing import Dict, Optional, Type, TYPE_CHECKING

from fastapi import APIRouter, Query

from ytagging.exceptions import TaggableTypeNotFound
from ytagging.log import get_logger
from ytagging.response import Resp

from .schemas import TaggingRequest, UntagRequest, TagResponse, EntityTagsResponse

if TYPE_CHECKING:
    from ytagging.config import TaggingSettings
    from ytagging.orm.taggable import AbstractTag, TaggingService

logger = get_logger("ytagging.api")


def create_tag_router(
    tag_model: Type["AbstractTag"],
    services: Dict[str, "TaggingService"],
    settings: Optional["TaggingSettings"] = None,
) -> APIRouter:
    """创建标签路由

    Args:
        tag_model: 标签模型类
        services: taggable_type -> TaggingService 映射，决定哪些类型可以通过接口打标签
        settings: 标签配置，提供列表/搜索的默认返回数量

    Returns:
        APIRouter

    生成的路由:
        GET  /list    - 热门标签（或推荐标签）
        GET  /search  - 搜索标签
        GET  /entity  - 获取记录的标签
        POST /tag     - 打标签
        POST /untag   - 去标签
        POST /retag   - 重设标签

    使用示例:
        router = create_tag_router(Tag, {
            "Article": Article.tagging(),
            "Product": Product.tagging(),
        })
        app.include_router(router, prefix="/api/tags", tags=["标签"])
    """
    router = APIRouter()
    popular_limit = settings.popular_limit if settings is not None else 10
    search_limit = settings.search_limit if settings is not None else 20

    def get_service(taggable_type: str) -> "TaggingService":
        service = services.get(taggable_type)
        if service is None:
            raise TaggableTypeNotFound(taggable_type, supported=services)
        return service

    def dump_tags(tags) -> list:
        return [TagResponse.model_validate(t).model_dump() for t in tags]

    @router.get(
        "/list",
        summary="获取标签列表",
        description="默认按关联数返回热门标签，suggested=true 时返回推荐标签"
    )
    async def list_tags(
        limit: Optional[int] = Query(None, ge=1, le=1000, description="返回数量"),
        suggested: bool = Query(False, description="只返回推荐标签"),
    ):
        if suggested:
            tags = tag_model.get_suggested()
        else:
            tags = tag_model.get_popular(limit=limit or popular_limit)
        return Resp.OK(data=dump_tags(tags))

    @router.get(
        "/search",
        summary="搜索标签",
        description="按名称模糊搜索（大小写不敏感）"
    )
    async def search_tags(
        keyword: str = Query(..., min_length=1, description="关键词"),
        limit: Optional[int] = Query(None, ge=1, le=1000, description="返回数量"),
    ):
        tags = tag_model.search(keyword, limit=limit or search_limit)
        return Resp.OK(data=dump_tags(tags))

    @router.get(
        "/entity",
        summary="获取记录的标签",
    )
    async def get_entity_tags(
        taggable_type: str = Query(..., description="目标模型类型"),
        taggable_id: int = Query(..., ge=1, description="目标记录ID"),
    ):
        service = get_service(taggable_type)
        data = EntityTagsResponse(
            taggable_type=taggable_type,
            taggable_id=taggable_id,
            names=service.tag_names(taggable_id),
        )
        return Resp.OK(data=data.model_dump())

    @router.post(
        "/tag",
        summary="打标签",
    )
    async def tag_entity(data: TaggingRequest):
        service = get_service(data.taggable_type)
        service.tag(data.taggable_id, data.names)
        logger.info(f"打标签: {data.taggable_type}#{data.taggable_id} {data.names}")
        return Resp.OK(
            data=EntityTagsResponse(
                taggable_type=data.taggable_type,
                taggable_id=data.taggable_id,
                names=service.tag_names(data.taggable_id),
            ).model_dump(),
            message="打标签成功",
        )

    @router.post(
        "/untag",
        summary="去标签",
        description="names 为空时移除记录的全部标签"
    )
    async def untag_entity(data: UntagRequest):
        service = get_service(data.taggable_type)
        removed = service.untag(data.taggable_id, data.names)
        logger.info(f"去标签: {data.taggable_type}#{data.taggable_id} {data.names}, removed={removed}")
        return Resp.OK(
            data={
                "removed": removed,
                "names": service.tag_names(data.taggable_id),
            },
            message="去标签成功",
        )

    @router.post(
        "/retag",
        summary="重设标签",
    )
    async def retag_entity(data: TaggingRequest):
        service = get_service(data.taggable_type)
        service.retag(data.taggable_id, data.names)
        logger.info(f"重设标签: {data.taggable_type}#{data.taggable_id} {data.names}")
        return Resp.OK(
            data=EntityTagsResponse(
                taggable_type=data.taggable_type,
                taggable_id=data.taggable_id,
                names=service.tag_names(data.taggable_id),
            ).model_dump(),
            message="重设标签成功",
        )

    return router
