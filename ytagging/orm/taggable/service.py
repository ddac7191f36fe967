"""标签服务

TaggingService 接收目标记录的 ID 与类型标识，完成打标签、去标签、重设标签，
维护标签计数，并提供按标签过滤业务查询的能力。

使用示例:
    from ytagging.orm.taggable import TaggingService, TaggingConfig

    articles = TaggingService(Tag, Tagged, "Article", id_column=Article.id)

    articles.tag(article.id, ["Python", "Web"])
    articles.tag_names(article.id)           # ["Python", "Web"]
    articles.retag(article.id, ["Python", "FastAPI"])
    articles.untag(article.id)               # 移除全部标签

    query = articles.with_all_tags(Article.query, ["python", "fastapi"])
    query = articles.with_any_tag(select(Article), "python")
"""

from typing import Iterable, List, Optional, Type, Union

from ytagging.log import get_logger
from .config import DEFAULT_TAGGING_CONFIG, TaggingConfig
from .exceptions import TaggableNotPersistedError, TaggingConfigError
from .repository import TagRepository, TaggedRepository
from .slug import make_tag_list, slugify

logger = get_logger("ytagging.orm.taggable")

TagNames = Union[str, Iterable[str], None]


class TaggingService:
    """标签服务（绑定一种 taggable_type）

    - 标签按 slug 去重，"Red"、"red"、"  red  " 指向同一个标签
    - 重复打同一个标签、移除不存在的标签都静默忽略
    - 数据库异常（如唯一约束冲突）原样抛出，不做补偿
    - commit=True 时每个操作结束后提交一次，否则只 flush

    Args:
        tag_model: 标签模型（AbstractTag + CoreModel）
        tagged_model: 关联模型（AbstractTagged + CoreModel）
        taggable_type: 目标类型标识，通常为业务模型类名
        id_column: 业务模型主键列，过滤查询时使用
        config: 标签策略配置，默认 TaggingConfig()
    """

    def __init__(
        self,
        tag_model: Type,
        tagged_model: Type,
        taggable_type: str,
        id_column=None,
        config: TaggingConfig = None,
    ):
        if tag_model is None or tagged_model is None:
            raise TaggingConfigError("必须提供标签模型和标签关联模型")
        if not taggable_type:
            raise TaggingConfigError("taggable_type 不能为空")

        self.taggable_type = taggable_type
        self.id_column = id_column
        self.config = config or DEFAULT_TAGGING_CONFIG
        self.tag_repo = TagRepository(tag_model, self.config)
        self.tagged_repo = TaggedRepository(tagged_model, tag_model, taggable_type)

    def __repr__(self):
        return f"<TaggingService taggable_type={self.taggable_type!r}>"

    # ==================== 内部方法 ====================

    def _names(self, names: TagNames) -> List[str]:
        return make_tag_list(names, self.config.delimiter)

    def _require_id(self, taggable_id) -> None:
        if taggable_id is None:
            raise TaggableNotPersistedError(self.taggable_type)

    def _finish(self, commit: bool) -> None:
        session = self.tag_repo.session
        if commit:
            session.commit()
        else:
            session.flush()

    def _add_tag(self, taggable_id: int, name: str):
        if not self.tag_repo.normalize(name):
            logger.debug(f"[{self.taggable_type}#{taggable_id}] 标签名 {name!r} 规范化后为空，跳过")
            return None

        tag = self.tag_repo.find_or_create(name, commit=False)
        if self.tagged_repo.exists(tag.id, taggable_id):
            return tag

        self.tagged_repo.create(tag.id, taggable_id, commit=False)
        self.tag_repo.increment_count(tag)
        return tag

    def _remove_tag(self, taggable_id: int, tag) -> int:
        deleted = self.tagged_repo.delete(tag.id, taggable_id)
        if deleted:
            self.tag_repo.decrement_count(tag, deleted)
        return deleted

    # ==================== 写操作 ====================

    def tag(self, taggable_id: int, names: TagNames, commit: bool = True) -> list:
        """给记录打标签

        规范化后 slug 为空的名称（如只有标点的 "!!!"）不会建标签，直接跳过。

        Args:
            taggable_id: 目标记录ID
            names: 单个标签名或标签名列表
            commit: 是否提交

        Returns:
            本次涉及的标签对象列表（含已存在的关联）
        """
        self._require_id(taggable_id)
        names = self._names(names)

        tags = []
        for name in names:
            tag = self._add_tag(taggable_id, name)
            if tag is not None:
                tags.append(tag)

        self._finish(commit)
        logger.debug(f"[{self.taggable_type}#{taggable_id}] tag {names}")
        return tags

    def untag(self, taggable_id: int, names: TagNames = None, commit: bool = True) -> int:
        """移除记录的标签

        Args:
            taggable_id: 目标记录ID
            names: 要移除的标签名；None 表示移除全部标签
            commit: 是否提交

        Returns:
            删除的关联数量
        """
        self._require_id(taggable_id)
        if names is None:
            # 按关联的标签逐个删除，展示名不一定能规范化回原来的 slug
            tags = self.tags(taggable_id)
        else:
            tags = [self.tag_repo.find_by_name(name) for name in self._names(names)]

        removed = 0
        for tag in tags:
            if tag is not None:
                removed += self._remove_tag(taggable_id, tag)

        self._finish(commit)
        logger.debug(f"[{self.taggable_type}#{taggable_id}] untag {names}, removed={removed}")
        return removed

    def retag(self, taggable_id: int, names: TagNames, commit: bool = True) -> None:
        """重设记录的标签

        按展示名称精确比较（区分大小写）：只移除不在新列表中的标签，
        只添加当前没有的标签，两边都有的标签不做任何改动。
        """
        self._require_id(taggable_id)
        requested = self._names(names)
        current = self.tags(taggable_id)
        current_names = [tag.name for tag in current]

        to_remove = [tag for tag in current if tag.name not in requested]
        to_add = [name for name in requested if name not in current_names]

        for tag in to_remove:
            self._remove_tag(taggable_id, tag)
        self.tag(taggable_id, to_add, commit=False)

        self._finish(commit)
        logger.debug(
            f"[{self.taggable_type}#{taggable_id}] retag -{[tag.name for tag in to_remove]} +{to_add}"
        )

    # ==================== 读操作 ====================

    def tag_names(self, taggable_id: Optional[int]) -> List[str]:
        if taggable_id is None:
            return []
        return self.tagged_repo.tag_names(taggable_id)

    def tags(self, taggable_id: Optional[int]) -> list:
        if taggable_id is None:
            return []
        return self.tagged_repo.tags(taggable_id)

    def _slugs(self, taggable_id: Optional[int]) -> set:
        return {tag.slug for tag in self.tags(taggable_id)}

    def has_tag(self, taggable_id: Optional[int], name: str) -> bool:
        """是否有指定标签（按 slug 比较）"""
        return self.tag_repo.normalize(name) in self._slugs(taggable_id)

    def has_any_tags(self, taggable_id: Optional[int], names: TagNames) -> bool:
        wanted = {self.tag_repo.normalize(name) for name in self._names(names)}
        return bool(wanted & self._slugs(taggable_id))

    def has_all_tags(self, taggable_id: Optional[int], names: TagNames) -> bool:
        wanted = {self.tag_repo.normalize(name) for name in self._names(names)}
        return wanted.issubset(self._slugs(taggable_id))

    def tag_count(self, taggable_id: Optional[int]) -> int:
        if taggable_id is None:
            return 0
        return self.tagged_repo.count(taggable_id)

    def count_by_tag(self, name: str) -> int:
        """有指定标签的记录数量（仅统计本类型）"""
        tag = self.tag_repo.find_by_name(name)
        if tag is None:
            return 0
        return self.tagged_repo.count_for_tag(tag.id)

    def used_tags(self, limit: Optional[int] = None) -> list:
        return self.tagged_repo.used_tags(limit)

    # ==================== 查询过滤 ====================

    def _resolve_id_column(self, id_column):
        id_column = id_column if id_column is not None else self.id_column
        if id_column is None:
            raise TaggingConfigError(
                f"{self.taggable_type} 的标签过滤需要提供业务模型主键列 id_column"
            )
        return id_column

    def with_all_tags(self, query, names: TagNames, id_column=None):
        """过滤出拥有全部指定标签的记录

        每个标签一个独立的 EXISTS 条件（AND）。
        标签名固定使用默认 slugify 规范化，不受 normalizer 配置影响。

        Args:
            query: Query 或 Select
            names: 标签名
            id_column: 业务模型主键列，默认使用构造时传入的列

        Returns:
            追加过滤条件后的查询；names 为空时原样返回
        """
        id_column = self._resolve_id_column(id_column)
        for name in self._names(names):
            query = query.filter(self.tagged_repo.has_tag_slug_clause(id_column, slugify(name)))
        return query

    def with_any_tag(self, query, names: TagNames, id_column=None):
        """过滤出拥有任一指定标签的记录（单个 EXISTS ... IN）"""
        id_column = self._resolve_id_column(id_column)
        names = self._names(names)
        if not names:
            return query
        slugs = [self.tag_repo.normalize(name) for name in names]
        return query.filter(self.tagged_repo.has_any_slug_clause(id_column, slugs))


__all__ = [
    "TaggingService",
]
