"""标签模型与仓储测试"""

import pytest
from sqlalchemy.exc import IntegrityError

from ytagging.orm.taggable import TagRepository, TaggedRepository, TaggingConfig

from tests.helpers import Tag, Tagged, make_article


class TestTagModel:
    """AbstractTag 字段与类方法测试"""

    @pytest.fixture(autouse=True)
    def setup_db(self, tagging_db):
        self.session = tagging_db()
        yield

    def _tag(self, name, slug, count=0, suggest=False):
        return Tag(name=name, slug=slug, count=count, suggest=suggest).save(commit=True)

    def test_defaults(self):
        tag = Tag(name="Python", slug="python").save(commit=True)
        assert tag.count == 0
        assert tag.suggest is False
        assert tag.is_unused()
        assert tag.created_at is not None

    def test_slug_is_unique(self):
        self._tag("Python", "python")
        with pytest.raises(IntegrityError):
            self._tag("PYTHON", "python")
        self.session.rollback()

    def test_get_by_slug(self):
        tag = self._tag("Python", "python")
        assert Tag.get_by_slug("python").id == tag.id
        assert Tag.get_by_slug("java") is None

    def test_get_popular(self):
        """按 count 降序，不包含未使用的标签"""
        self._tag("A", "a", count=1)
        self._tag("B", "b", count=5)
        self._tag("C", "c", count=3)
        self._tag("D", "d", count=0)

        assert [t.slug for t in Tag.get_popular(limit=10)] == ["b", "c", "a"]
        assert [t.slug for t in Tag.get_popular(limit=2)] == ["b", "c"]

    def test_get_suggested(self):
        self._tag("Web", "web", suggest=True)
        self._tag("Api", "api", suggest=True)
        self._tag("Misc", "misc")

        assert [t.name for t in Tag.get_suggested()] == ["Api", "Web"]

    def test_search_case_insensitive(self):
        self._tag("Python", "python", count=2)
        self._tag("CPython", "cpython", count=7)
        self._tag("Java", "java")

        assert [t.slug for t in Tag.search("PYTH")] == ["cpython", "python"]
        assert Tag.search("ruby") == []

    def test_delete_unused(self):
        self._tag("A", "a", count=1)
        self._tag("B", "b", count=0)
        self._tag("C", "c", count=0)

        assert Tag.delete_unused() == 2
        assert [t.slug for t in Tag.get_all()] == ["a"]


class TestTaggedModel:
    """AbstractTagged 约束测试"""

    def test_table_args(self, tagging_db):
        table = Tagged.__table__
        index_names = {index.name for index in table.indexes}
        assert "ix_test_tagging_tagged_taggable" in index_names

        unique_columns = [
            {c.name for c in constraint.columns}
            for constraint in table.constraints
            if constraint.__class__.__name__ == "UniqueConstraint"
        ]
        assert {"tag_id", "taggable_id", "taggable_type"} in unique_columns

    def test_duplicate_association_rejected(self, tagging_db):
        repo = TaggedRepository(Tagged, Tag, "Article")
        repo.create(1, 1)
        with pytest.raises(IntegrityError):
            repo.create(1, 1)
        tagging_db().rollback()


class TestTagRepository:
    """TagRepository 测试"""

    @pytest.fixture(autouse=True)
    def setup_db(self, tagging_db):
        self.repo = TagRepository(Tag)
        yield

    def test_find_or_create_new(self):
        tag = self.repo.find_or_create("machine learning")
        assert tag.id is not None
        assert tag.name == "Machine Learning"
        assert tag.slug == "machine-learning"
        assert tag.count == 0
        assert tag.suggest is False

    def test_find_or_create_reuses_without_renaming(self):
        """已存在的标签原样返回，展示名称不变"""
        first = self.repo.find_or_create("PYTHON")
        second = self.repo.find_or_create("  python ")

        assert second.id == first.id
        assert second.name == "Python"
        assert Tag.query.count() == 1

    def test_find_or_create_without_commit_flushes(self):
        tag = self.repo.find_or_create("Web", commit=False)
        assert tag.id is not None
        assert Tag.get_by_slug("web") is tag

    def test_find_by_name(self):
        self.repo.find_or_create("Web API")
        assert self.repo.find_by_name("web   api").slug == "web-api"
        assert self.repo.find_by_name("graphql") is None

    def test_custom_strategies(self):
        repo = TagRepository(Tag, TaggingConfig(
            normalizer=lambda name: name.strip().upper(),
            displayer=lambda name: f"#{name.strip()}",
        ))
        tag = repo.find_or_create(" rust ")
        assert tag.slug == "RUST"
        assert tag.name == "#rust"

    def test_increment_and_decrement(self):
        tag = self.repo.find_or_create("Python")
        self.repo.increment_count(tag)
        self.repo.increment_count(tag, 2)
        assert tag.count == 3

        self.repo.decrement_count(tag)
        assert tag.count == 2

    def test_decrement_floors_at_zero(self):
        tag = self.repo.find_or_create("Python")
        self.repo.increment_count(tag)
        self.repo.decrement_count(tag, 5)
        assert tag.count == 0

        self.repo.decrement_count(tag)
        assert tag.count == 0


class TestTaggedRepository:
    """TaggedRepository 测试"""

    @pytest.fixture(autouse=True)
    def setup_db(self, tagging_db):
        self.tags = TagRepository(Tag)
        self.repo = TaggedRepository(Tagged, Tag, "Article")
        self.article = make_article()
        yield

    def test_create_exists_delete(self):
        tag = self.tags.find_or_create("Python")
        assert not self.repo.exists(tag.id, self.article.id)

        self.repo.create(tag.id, self.article.id)
        assert self.repo.exists(tag.id, self.article.id)
        assert self.repo.count(self.article.id) == 1

        assert self.repo.delete(tag.id, self.article.id) == 1
        assert self.repo.delete(tag.id, self.article.id) == 0
        assert not self.repo.exists(tag.id, self.article.id)

    def test_names_in_association_order(self):
        for name in ("Web", "Api", "Python"):
            tag = self.tags.find_or_create(name)
            self.repo.create(tag.id, self.article.id)

        assert self.repo.tag_names(self.article.id) == ["Web", "Api", "Python"]
        assert [t.slug for t in self.repo.tags(self.article.id)] == ["web", "api", "python"]

    def test_scoped_by_taggable_type(self):
        tag = self.tags.find_or_create("Python")
        other = TaggedRepository(Tagged, Tag, "Product")
        other.create(tag.id, self.article.id)

        assert self.repo.tag_names(self.article.id) == []
        assert self.repo.count_for_tag(tag.id) == 0
        assert other.count_for_tag(tag.id) == 1
        assert self.repo.used_tags() == []
        assert [t.slug for t in other.used_tags()] == ["python"]
