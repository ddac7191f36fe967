"""测试辅助模块"""

from .tagging_models import (
    Tag,
    Tagged,
    Article,
    Product,
    make_article,
    make_product,
    assert_counts_consistent,
)

__all__ = [
    "Tag",
    "Tagged",
    "Article",
    "Product",
    "make_article",
    "make_product",
    "assert_counts_consistent",
]
