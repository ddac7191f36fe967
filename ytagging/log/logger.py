"""
日志工具

标签扩展内部都通过 get_logger() 取日志器，名称挂在 "ytagging" 之下；
宿主应用调用一次 setup_root_logger(settings.logging) 即可看到打标签的 DEBUG 日志。
"""

import inspect
import logging
import os
import time
from typing import List, Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
SQL_LOG_FORMAT = "%(asctime)s - SQL - %(message)s"


class MicrosecondFormatter(logging.Formatter):
    """时间戳精确到微秒"""

    def formatTime(self, record, datefmt=None):
        stamp = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", self.converter(record.created))
        micros = int(round(record.created % 1 * 1_000_000)) % 1_000_000
        return f"{stamp}.{micros:06d}"


def _to_level(level) -> int:
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def _build_handlers(console: bool, file_path: Optional[str], encoding: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler())
    if file_path:
        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handlers.append(logging.FileHandler(file_path, encoding=encoding))
    return handlers


def setup_logger(
    name: Optional[str] = None,
    level: str = "INFO",
    file_path: Optional[str] = None,
    console: bool = True,
    log_format: str = LOG_FORMAT,
    propagate: bool = True,
    encoding: str = "utf-8",
) -> logging.Logger:
    """配置一个日志器，原有处理器会被替换

    使用示例:
        setup_logger("ytagging.orm.taggable", level="DEBUG", file_path="logs/tagging.log")
    """
    target = logging.getLogger(name)
    target.setLevel(_to_level(level))
    target.propagate = propagate

    for handler in list(target.handlers):
        target.removeHandler(handler)

    formatter = MicrosecondFormatter(log_format)
    for handler in _build_handlers(console, file_path, encoding):
        handler.setFormatter(formatter)
        target.addHandler(handler)
    return target


def setup_root_logger(settings=None, level: str = "INFO") -> logging.Logger:
    """按 LoggingSettings 配置根日志器

    settings.sql_log_enabled 为 True 时，sqlalchemy.engine 单独输出到控制台，
    不进入根日志器的文件。

    Args:
        settings: LoggingSettings；为空时只按 level 输出到控制台
        level: 未提供 settings 时使用的级别

    使用示例:
        settings = load_yaml_config("config/settings.yaml", AppSettings)
        setup_root_logger(settings.logging)
    """
    if settings is None:
        return setup_logger(level=level)

    if settings.sql_log_enabled:
        setup_logger(
            "sqlalchemy.engine",
            level=settings.sql_log_level,
            console=settings.enable_console,
            log_format=SQL_LOG_FORMAT,
            propagate=False,
        )

    return setup_logger(
        level=settings.level,
        file_path=settings.file_path,
        console=settings.enable_console,
        encoding=settings.file_encoding,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """获取日志器

    - 不传 name：使用调用方模块的 __name__
    - 不含点号的简写自动加 "ytagging." 前缀（"api" -> "ytagging.api"）
    - 含点号的名称原样使用
    """
    if name is None:
        caller = inspect.currentframe().f_back
        name = caller.f_globals.get("__name__", "ytagging") if caller else "ytagging"
    elif "." not in name and name != "ytagging":
        name = f"ytagging.{name}"
    return logging.getLogger(name)
