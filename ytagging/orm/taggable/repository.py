"""标签仓储

TagRepository 负责标签表的查找、创建与计数维护；
TaggedRepository 负责某一种业务类型（taggable_type）的关联表读写，
并生成按标签过滤业务记录所需的 EXISTS 子查询。
"""

from typing import List, Optional, Sequence, Type

from sqlalchemy import case, select, update
from sqlalchemy.orm import Session

from .config import DEFAULT_TAGGING_CONFIG, TaggingConfig


class TagRepository:
    """标签表仓储

    使用示例:
        repo = TagRepository(Tag, TaggingConfig())
        tag = repo.find_or_create("machine learning")
        tag.name   # "Machine Learning"
        tag.slug   # "machine-learning"
    """

    def __init__(self, tag_model: Type, config: TaggingConfig = None):
        self.tag_model = tag_model
        self.config = config or DEFAULT_TAGGING_CONFIG

    @property
    def session(self) -> Session:
        return self.tag_model.query.session

    def normalize(self, name: str) -> str:
        return self.config.normalizer(name)

    def find_by_name(self, name: str):
        """按名称查找标签（先规范化为 slug）"""
        return self.tag_model.get_by_slug(self.normalize(name))

    def find_or_create(self, name: str, commit: bool = True):
        """获取或创建标签

        已存在的标签原样返回，展示名称不会因为本次传入的写法而改变。

        Args:
            name: 标签名称
            commit: 新建时是否立即提交；False 时只 flush 以获取 ID

        Returns:
            标签对象
        """
        slug = self.normalize(name)
        tag = self.tag_model.get_by_slug(slug)
        if tag is not None:
            return tag

        tag = self.tag_model(
            name=self.config.displayer(name),
            slug=slug,
            count=0,
            suggest=False,
        )
        self.session.add(tag)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        return tag

    def increment_count(self, tag, by: int = 1) -> None:
        self._adjust_count(tag, by)

    def decrement_count(self, tag, by: int = 1) -> None:
        self._adjust_count(tag, -by)

    def _adjust_count(self, tag, delta: int) -> None:
        """在数据库端原子地调整计数，结果不小于 0"""
        Tag = self.tag_model
        new_count = Tag.count + delta
        stmt = (
            update(Tag)
            .where(Tag.id == tag.id)
            .values(count=case((new_count < 0, 0), else_=new_count))
            .execution_options(synchronize_session=False)
        )
        self.session.execute(stmt)
        # 下次读取 count 时重新加载
        self.session.expire(tag, ["count"])


class TaggedRepository:
    """标签关联表仓储（绑定一种 taggable_type）

    使用示例:
        repo = TaggedRepository(Tagged, Tag, "Article")
        repo.create(tag.id, article.id)
        repo.tag_names(article.id)   # ["Python"]
    """

    def __init__(self, tagged_model: Type, tag_model: Type, taggable_type: str):
        self.tagged_model = tagged_model
        self.tag_model = tag_model
        self.taggable_type = taggable_type

    @property
    def session(self) -> Session:
        return self.tagged_model.query.session

    def _by_taggable(self, taggable_id: int):
        return self.tagged_model.query.filter_by(
            taggable_type=self.taggable_type,
            taggable_id=taggable_id,
        )

    # ==================== 写操作 ====================

    def exists(self, tag_id: int, taggable_id: int) -> bool:
        return self._by_taggable(taggable_id).filter_by(tag_id=tag_id).first() is not None

    def create(self, tag_id: int, taggable_id: int, commit: bool = True):
        tagged = self.tagged_model(
            tag_id=tag_id,
            taggable_id=taggable_id,
            taggable_type=self.taggable_type,
        )
        self.session.add(tagged)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        return tagged

    def delete(self, tag_id: int, taggable_id: int) -> int:
        """删除关联，返回实际删除的行数"""
        return self._by_taggable(taggable_id).filter_by(tag_id=tag_id).delete(
            synchronize_session="fetch"
        )

    # ==================== 读操作 ====================

    def tags(self, taggable_id: int) -> list:
        """记录当前的标签对象（按关联创建顺序）"""
        Tag, Tagged = self.tag_model, self.tagged_model
        return (
            Tag.query
            .join(Tagged, Tagged.tag_id == Tag.id)
            .filter(
                Tagged.taggable_type == self.taggable_type,
                Tagged.taggable_id == taggable_id,
            )
            .order_by(Tagged.id)
            .all()
        )

    def tag_names(self, taggable_id: int) -> List[str]:
        Tag, Tagged = self.tag_model, self.tagged_model
        rows = (
            Tag.query
            .with_entities(Tag.name)
            .join(Tagged, Tagged.tag_id == Tag.id)
            .filter(
                Tagged.taggable_type == self.taggable_type,
                Tagged.taggable_id == taggable_id,
            )
            .order_by(Tagged.id)
            .all()
        )
        return [row[0] for row in rows]

    def count(self, taggable_id: int) -> int:
        return self._by_taggable(taggable_id).count()

    def count_for_tag(self, tag_id: int) -> int:
        return self.tagged_model.query.filter_by(
            taggable_type=self.taggable_type,
            tag_id=tag_id,
        ).count()

    def used_tags(self, limit: Optional[int] = None) -> list:
        """该类型记录用到的所有标签（按关联数降序）"""
        Tag, Tagged = self.tag_model, self.tagged_model
        tag_ids = (
            select(Tagged.tag_id)
            .where(Tagged.taggable_type == self.taggable_type)
            .distinct()
        )
        query = Tag.query.filter(Tag.id.in_(tag_ids)).order_by(Tag.count.desc(), Tag.id)
        if limit:
            query = query.limit(limit)
        return query.all()

    # ==================== 过滤子查询 ====================

    def _exists_for(self, id_column, *criteria):
        Tag, Tagged = self.tag_model, self.tagged_model
        return (
            select(Tagged.id)
            .join(Tag, Tag.id == Tagged.tag_id)
            .where(
                Tagged.taggable_type == self.taggable_type,
                Tagged.taggable_id == id_column,
                *criteria,
            )
            .exists()
        )

    def has_tag_slug_clause(self, id_column, slug: str):
        """EXISTS：记录有 slug 等于给定值的标签"""
        return self._exists_for(id_column, self.tag_model.slug == slug)

    def has_any_slug_clause(self, id_column, slugs: Sequence[str]):
        """EXISTS：记录有 slug 属于给定集合的任一标签"""
        return self._exists_for(id_column, self.tag_model.slug.in_(list(slugs)))


__all__ = [
    "TagRepository",
    "TaggedRepository",
]
