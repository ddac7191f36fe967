"""
Pytest 公共配置和 Fixtures

提供测试所需的公共资源：
- 内存数据库引擎
- 绑定 CoreModel.query 的标签测试数据库
- 临时文件
"""

import os
import tempfile
from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from ytagging.orm import CoreModel

# 注册测试模型到 metadata
from tests.helpers import tagging_models  # noqa: F401


# ==================== 基础 Fixtures ====================

@pytest.fixture(scope="session")
def temp_dir():
    """创建临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def temp_file(temp_dir):
    """创建临时文件的工厂函数"""
    created_files = []

    def _create_file(filename: str, content: str = "") -> str:
        filepath = os.path.join(temp_dir, filename)
        if os.path.dirname(filepath):
            os.makedirs(os.path.dirname(filepath), exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
        created_files.append(filepath)
        return filepath

    yield _create_file

    for f in created_files:
        if os.path.exists(f):
            os.remove(f)


@pytest.fixture
def log_dir(temp_dir):
    """创建日志目录"""
    log_path = os.path.join(temp_dir, "logs")
    os.makedirs(log_path, exist_ok=True)
    return log_path


# ==================== 数据库 Fixtures ====================

@pytest.fixture(scope="function")
def memory_engine():
    """创建内存数据库引擎

    StaticPool + check_same_thread=False：所有操作共用一个连接，
    TestClient 在其他线程执行路由时也能访问同一个库。
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def tagging_db(memory_engine) -> Generator[scoped_session, None, None]:
    """建表并把 CoreModel.query 绑定到测试 session

    scopefunc 固定返回同一个键，测试线程与 TestClient 线程共用一个 session。
    """
    CoreModel.metadata.create_all(bind=memory_engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=True, bind=memory_engine)
    session_scope = scoped_session(SessionLocal, scopefunc=lambda: "test")
    CoreModel.query = session_scope.query_property()
    yield session_scope
    session_scope.remove()
    CoreModel.metadata.drop_all(bind=memory_engine)


@pytest.fixture
def sample_yaml_config(temp_file):
    """创建示例 YAML 配置文件"""
    yaml_content = """
database:
  url: "sqlite:///tags.db"
  pool_size: 3

logging:
  level: "DEBUG"
  sql_log_enabled: true

tagging:
  delimiter: ","
  displayer: "string.capwords"
  popular_limit: 5
"""
    return temp_file("config/settings.yaml", yaml_content)
