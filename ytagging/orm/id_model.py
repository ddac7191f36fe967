"""自增主键基类

关联表通过 (taggable_type, taggable_id) 引用业务记录，taggable_id 是整数列，
所以参与标签的模型统一使用自增整数主键。一般直接继承 CoreModel。
"""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

Base = declarative_base()


class IdModel(Base):
    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, comment="主键ID")
