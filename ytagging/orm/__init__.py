"""ORM 模块

导出:
    - Base / IdModel / CoreModel: 模型基类
    - init_database / get_engine / get_db / db_session_scope / on_request_end / db_manager: 会话管理
    - to_snake_case: 类名转表名
"""

from .id_model import Base, IdModel
from .core_model import CoreModel
from .db_session import (
    db_manager,
    init_database,
    get_engine,
    get_db,
    db_session_scope,
    on_request_end,
)
from .utils import to_snake_case

__all__ = [
    "Base",
    "IdModel",
    "CoreModel",
    "db_manager",
    "init_database",
    "get_engine",
    "get_db",
    "db_session_scope",
    "on_request_end",
    "to_snake_case",
]
