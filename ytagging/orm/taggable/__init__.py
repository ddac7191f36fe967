"""标签系统模块

导出:
    - slugify / title_case / make_tag_list: 标签名规范化
    - TaggingConfig: 标签策略配置
    - AbstractTag / AbstractTagged: 标签抽象模型
    - TagRepository / TaggedRepository: 标签仓储
    - TaggingService: 标签服务
    - TaggableMixin: 业务模型标签 Mixin

使用示例:
    from ytagging.orm import CoreModel
    from ytagging.orm.taggable import AbstractTag, AbstractTagged, TaggableMixin

    # 1. 定义标签模型（项目级别，一次性）
    class Tag(CoreModel, AbstractTag):
        __tablename__ = "tagging_tag"

    class Tagged(CoreModel, AbstractTagged):
        __tablename__ = "tagging_tagged"

    # 2. 业务模型使用 TaggableMixin
    class Article(CoreModel, TaggableMixin):
        __tag_model__ = Tag
        __tagged_model__ = Tagged

        title = mapped_column(String(200))

    # 3. 使用标签功能
    article.tag(["Python", "Web"])
    article.retag(["Python", "FastAPI"])
    Article.with_any_tag(["python", "java"]).all()
"""

from .slug import slugify, title_case, make_tag_list
from .config import TaggingConfig, DEFAULT_TAGGING_CONFIG
from .exceptions import TaggingError, TaggingConfigError, TaggableNotPersistedError
from .tag_model import AbstractTag, AbstractTagged
from .repository import TagRepository, TaggedRepository
from .service import TaggingService
from .taggable_mixin import TaggableMixin

__all__ = [
    "slugify",
    "title_case",
    "make_tag_list",
    "TaggingConfig",
    "DEFAULT_TAGGING_CONFIG",
    "TaggingError",
    "TaggingConfigError",
    "TaggableNotPersistedError",
    "AbstractTag",
    "AbstractTagged",
    "TagRepository",
    "TaggedRepository",
    "TaggingService",
    "TaggableMixin",
]
