"""
标签 API - 请求/响应 Schema

响应 Schema 使用 extra="allow"，业务项目在 Tag 模型上扩展的字段会原样返回。
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, ConfigDict


class TaggingRequest(BaseModel):
    """打标签 / 重设标签请求"""
    taggable_type: str = Field(..., min_length=1, max_length=255, description="目标模型类型")
    taggable_id: int = Field(..., ge=1, description="目标记录ID")
    names: Union[str, List[str]] = Field(..., description="标签名或标签名列表")

    class Config:
        json_schema_extra = {
            "example": {
                "taggable_type": "Article",
                "taggable_id": 1,
                "names": ["Python", "FastAPI"]
            }
        }


class UntagRequest(BaseModel):
    """去标签请求，names 为空表示移除全部标签"""
    taggable_type: str = Field(..., min_length=1, max_length=255, description="目标模型类型")
    taggable_id: int = Field(..., ge=1, description="目标记录ID")
    names: Optional[Union[str, List[str]]] = Field(None, description="标签名或标签名列表")


class TagResponse(BaseModel):
    """标签响应"""
    id: int = Field(..., description="标签ID")
    name: str = Field(..., description="展示名称")
    slug: str = Field(..., description="规范化标识")
    count: int = Field(..., description="关联记录数")
    suggest: bool = Field(..., description="是否推荐")
    created_at: Optional[datetime] = Field(None, description="创建时间")

    model_config = ConfigDict(from_attributes=True, extra="allow")


class EntityTagsResponse(BaseModel):
    """记录标签响应"""
    taggable_type: str
    taggable_id: int
    names: List[str] = Field(default_factory=list, description="标签展示名称")
