"""标签模型定义

提供标签表与标签关联表的抽象模型，由业务项目与 CoreModel 组合成具体模型。

使用示例:
    from ytagging.orm import CoreModel
    from ytagging.orm.taggable import AbstractTag, AbstractTagged

    class Tag(CoreModel, AbstractTag):
        __tablename__ = "tagging_tag"

    class Tagged(CoreModel, AbstractTagged):
        __tablename__ = "tagging_tagged"
"""

from typing import List, Optional

from sqlalchemy import Boolean, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, declared_attr, mapped_column


class AbstractTag:
    """标签抽象模型

    字段说明:
        - name: 展示名称（首次创建时经 displayer 格式化，之后不再修改）
        - slug: 规范化标识，全局唯一，是标签去重与查找的依据
        - count: 当前关联记录数（冗余字段，由标签服务维护，不小于 0）
        - suggest: 是否推荐标签

    使用示例:
        Tag.get_popular(limit=10)
        Tag.get_by_slug("machine-learning")
        Tag.search("py")
    """

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="标签展示名称"
    )

    slug: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="规范化标识（如 machine-learning）"
    )

    count: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        index=True,
        comment="关联记录数"
    )

    suggest: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="是否推荐标签"
    )

    # ==================== 类方法 ====================

    @classmethod
    def get_by_slug(cls, slug: str) -> Optional["AbstractTag"]:
        return cls.query.filter_by(slug=slug).first()

    @classmethod
    def get_popular(cls, limit: int = 10) -> List["AbstractTag"]:
        """获取热门标签（按关联数降序）"""
        return cls.query.filter(cls.count > 0).order_by(
            cls.count.desc(), cls.id
        ).limit(limit).all()

    @classmethod
    def get_suggested(cls) -> List["AbstractTag"]:
        """获取推荐标签（按名称排序）"""
        return cls.query.filter(cls.suggest.is_(True)).order_by(cls.name).all()

    @classmethod
    def search(cls, keyword: str, limit: int = 20) -> List["AbstractTag"]:
        """按名称模糊搜索标签

        Args:
            keyword: 搜索关键词（大小写不敏感）
            limit: 返回数量

        Returns:
            匹配的标签列表，按关联数降序
        """
        return cls.query.filter(
            cls.name.ilike(f"%{keyword}%")
        ).order_by(cls.count.desc(), cls.id).limit(limit).all()

    @classmethod
    def delete_unused(cls, commit: bool = True) -> int:
        """删除关联数为 0 的标签

        标签服务本身从不删除标签，需要清理时由业务方显式调用。

        Returns:
            删除的标签数量
        """
        session = cls.query.session
        deleted = cls.query.filter(cls.count <= 0).delete(synchronize_session="fetch")
        if commit:
            session.commit()
        return deleted

    # ==================== 实例方法 ====================

    def is_unused(self) -> bool:
        return (self.count or 0) == 0


class AbstractTagged:
    """标签关联抽象模型（多态关联）

    通过 taggable_type + taggable_id 关联任意业务模型，
    同一条记录对同一个标签最多只有一条关联。

    约束与索引:
        - UNIQUE(tag_id, taggable_id, taggable_type)
        - INDEX(taggable_type, taggable_id): 查询某记录的所有标签
        - INDEX(tag_id): 统计某标签的关联记录
    """

    tag_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="标签ID"
    )

    taggable_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="目标记录ID"
    )

    taggable_type: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="目标模型类型"
    )

    @declared_attr.directive
    def __table_args__(cls):
        table = cls.__tablename__
        return (
            UniqueConstraint("tag_id", "taggable_id", "taggable_type", name=f"uq_{table}_tag_taggable"),
            Index(f"ix_{table}_taggable", "taggable_type", "taggable_id"),
        )


__all__ = [
    "AbstractTag",
    "AbstractTagged",
]
