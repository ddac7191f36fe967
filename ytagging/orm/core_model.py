"""
ORM 基础模型

标签模型、关联模型以及宿主业务模型都继承 CoreModel。
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, FrozenSet, List, Optional, TYPE_CHECKING

from sqlalchemy import DateTime, func, inspect
from sqlalchemy.orm import Mapped, Query, Session, declared_attr, mapped_column

if TYPE_CHECKING:
    from typing_extensions import Self

from .id_model import IdModel
from .utils import to_snake_case


class CoreModel(IdModel):
    """ORM 基础模型

    - 表名默认取类名的 snake_case（TaggedItem -> tagged_item）
    - created_at / updated_at 由数据库维护，构造时传入会被忽略
    - 读取未 flush 对象的 id 时自动 flush，打标签前不必手动提交业务记录

    使用示例:
        class Article(TaggableMixin, CoreModel):
            __tag_model__ = Tag
            __tagged_model__ = Tagged

            title: Mapped[str] = mapped_column(String(200))

        article = Article(title="SQLAlchemy").save()
        article.tag(["python", "orm"])
    """
    __abstract__ = True

    # 由 init_database() 通过 scoped_session.query_property() 设置
    if TYPE_CHECKING:
        query: ClassVar[Query[Self]]

    @declared_attr.directive
    def __tablename__(cls) -> str:
        if "_" in cls.__name__:
            raise ValueError(f"无法从类名 {cls.__name__} 推导表名，请显式指定 __tablename__")
        return to_snake_case(cls.__name__)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), comment="创建时间")
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime, onupdate=func.now(), comment="更新时间")

    _managed_fields: ClassVar[FrozenSet[str]] = frozenset({"id", "created_at", "updated_at"})

    def __init__(self, **kwargs):
        super().__init__(**{k: v for k, v in kwargs.items() if k not in self._managed_fields})

    def __repr__(self):
        return f"<{type(self).__name__} id={self.id}>"

    def __getattribute__(self, name):
        value = super().__getattribute__(name)
        if name != "id" or value is not None:
            return value

        state = inspect(self, raiseerr=False)
        session = state.session if state is not None else None
        # flush 过程中不能再次 flush
        if session is None or not state.pending or session._flushing:
            return value
        session.flush()
        return super().__getattribute__(name)

    @property
    def session(self) -> Session:
        return type(self).get_session()

    @classmethod
    def get_session(cls) -> Session:
        return cls.query.session

    def _maybe_commit(self, commit: bool) -> None:
        if commit:
            self.session.commit()

    def save(self, commit: bool = False) -> Self:
        self.session.add(self)
        self._maybe_commit(commit)
        return self

    def update(self, commit: bool = False, **values) -> Self:
        """批量设置属性，模型上不存在的属性名被忽略

        使用示例:
            Tag.get_by_slug("python").update(suggest=True, commit=True)
        """
        for key, value in values.items():
            if hasattr(type(self), key):
                setattr(self, key, value)
        self._maybe_commit(commit)
        return self

    def delete(self, commit: bool = False) -> None:
        """删除记录

        不会清理该记录的标签关联，需要时先调用 untag()。
        """
        self.session.delete(self)
        self._maybe_commit(commit)

    @classmethod
    def get(cls, id: int) -> Optional[Self]:
        return cls.query.filter_by(id=id).one_or_none()

    @classmethod
    def get_all(cls) -> List[Self]:
        return cls.query.all()

    def to_dict(self, exclude=()) -> dict:
        return {
            column.name: getattr(self, column.name)
            for column in self.__table__.columns
            if column.name not in exclude
        }
