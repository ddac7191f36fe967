"""日志模块

使用示例:
    from ytagging.log import setup_root_logger, get_logger

    setup_root_logger(settings.logging)
    logger = get_logger()
"""

from .logger import (
    LOG_FORMAT,
    MicrosecondFormatter,
    setup_logger,
    setup_root_logger,
    get_logger,
)

__all__ = [
    "LOG_FORMAT",
    "MicrosecondFormatter",
    "setup_logger",
    "setup_root_logger",
    "get_logger",
]
