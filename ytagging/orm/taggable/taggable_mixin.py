"""标签管理 Mixin

业务模型混入 TaggableMixin 后获得标签能力，具体逻辑由按类缓存的
TaggingService 完成，Mixin 只负责把 self.id 与类型标识交给服务。

使用示例:
    class Article(CoreModel, TaggableMixin):
        __tag_model__ = Tag
        __tagged_model__ = Tagged

        title: Mapped[str] = mapped_column(String(200))

    article = Article(title="Python 教程")
    article.save(commit=True)

    article.tag(["Python", "Tutorial"])
    article.tag_names()          # ["Python", "Tutorial"]
    article.retag("Python")
    article.untag()

    Article.with_all_tags(["python", "web"]).all()
    Article.with_any_tag("python", query=select(Article))

注意:
    删除业务记录不会自动删除标签关联，需要先调用 untag()：
        article.untag(commit=False)
        article.delete(commit=True)
"""

from typing import List, Optional, Type, TYPE_CHECKING

from .config import TaggingConfig
from .exceptions import TaggingConfigError
from .service import TaggingService, TagNames

if TYPE_CHECKING:
    from .tag_model import AbstractTag, AbstractTagged


class TaggableMixin:
    """标签管理 Mixin

    配置属性:
        __tag_model__: 标签模型类（必须）
        __tagged_model__: 标签关联模型类（必须）
        __taggable_type__: 类型标识，默认使用类名
        __tagging_config__: TaggingConfig，默认使用内置策略
    """

    __tag_model__: Type["AbstractTag"] = None
    __tagged_model__: Type["AbstractTagged"] = None
    __taggable_type__: Optional[str] = None
    __tagging_config__: Optional[TaggingConfig] = None

    @classmethod
    def tagging(cls) -> TaggingService:
        """获取本类的标签服务（首次调用时创建并缓存在类上）"""
        service = cls.__dict__.get("_tagging_service")
        if service is None:
            if cls.__tag_model__ is None or cls.__tagged_model__ is None:
                raise TaggingConfigError(
                    f"{cls.__name__} 必须设置 __tag_model__ 和 __tagged_model__ 属性"
                )
            service = TaggingService(
                cls.__tag_model__,
                cls.__tagged_model__,
                cls.__taggable_type__ or cls.__name__,
                id_column=cls.id,
                config=cls.__tagging_config__,
            )
            cls._tagging_service = service
        return service

    # ==================== 实例方法 ====================

    def tag(self, names: TagNames, commit: bool = True) -> list:
        return self.tagging().tag(self.id, names, commit=commit)

    def untag(self, names: TagNames = None, commit: bool = True) -> int:
        return self.tagging().untag(self.id, names, commit=commit)

    def retag(self, names: TagNames, commit: bool = True) -> None:
        self.tagging().retag(self.id, names, commit=commit)

    def tag_names(self) -> List[str]:
        return self.tagging().tag_names(self.id)

    def tags(self) -> list:
        return self.tagging().tags(self.id)

    def has_tag(self, name: str) -> bool:
        return self.tagging().has_tag(self.id, name)

    def has_any_tags(self, names: TagNames) -> bool:
        return self.tagging().has_any_tags(self.id, names)

    def has_all_tags(self, names: TagNames) -> bool:
        return self.tagging().has_all_tags(self.id, names)

    def tag_count(self) -> int:
        return self.tagging().tag_count(self.id)

    # ==================== 类方法：按标签查询 ====================

    @classmethod
    def with_all_tags(cls, names: TagNames, query=None):
        """拥有全部指定标签的记录查询，query 默认 cls.query"""
        if query is None:
            query = cls.query
        return cls.tagging().with_all_tags(query, names)

    @classmethod
    def with_any_tag(cls, names: TagNames, query=None):
        """拥有任一指定标签的记录查询，query 默认 cls.query"""
        if query is None:
            query = cls.query
        return cls.tagging().with_any_tag(query, names)

    @classmethod
    def count_by_tag(cls, name: str) -> int:
        return cls.tagging().count_by_tag(name)

    @classmethod
    def get_all_used_tags(cls, limit: int = None) -> list:
        return cls.tagging().used_tags(limit)


__all__ = [
    "TaggableMixin",
]
