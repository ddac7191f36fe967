"""版本信息"""

__version__ = "0.3.0"
__author__ = "ytagging contributors"
__description__ = "基于 SQLAlchemy 的通用标签扩展"
