"""标签名称规范化

提供默认的 slug 生成函数、展示名格式化函数，以及标签名参数的统一整理。

使用示例:
    from ytagging.orm.taggable import slugify, title_case

    slugify("  Machine Learning ")   # "machine-learning"
    slugify("C++ / Rust")            # "c-rust"
    title_case("machine learning")   # "Machine Learning"
"""

import re
from typing import Iterable, List, Optional, Union

# 非字母数字（含下划线）的连续字符，Unicode 感知
_NON_WORD_RE = re.compile(r"[\W_]+", re.UNICODE)

# 单词：字母数字串，允许内部出现撇号（如 "don't"）
_WORD_RE = re.compile(r"[^\W_]+(?:'[^\W_]+)*", re.UNICODE)


def slugify(name: str, separator: str = "-") -> str:
    """把标签名转换为 slug

    去掉首尾空白、转小写，连续的非字母数字字符折叠为一个分隔符，
    再去掉首尾分隔符。纯函数，任何字符串输入都不会抛异常。

    Args:
        name: 原始标签名
        separator: 分隔符，默认 "-"

    Returns:
        slug 字符串；输入只有标点时返回空字符串
    """
    slug = _NON_WORD_RE.sub(separator, str(name).strip().lower())
    return slug.strip(separator) if separator else slug


def title_case(name: str) -> str:
    """默认展示名格式：每个单词首字母大写，其余小写"""
    return _WORD_RE.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), str(name).strip())


def make_tag_list(
    names: Union[str, Iterable[str], None],
    delimiter: Optional[str] = None,
) -> List[str]:
    """整理标签名参数

    - None 返回空列表
    - 单个字符串视为只有一个元素（配置了 delimiter 时按分隔符拆分）
    - 其他可迭代对象逐项处理
    - 去掉首尾空白，丢弃空串，按原顺序去重（精确匹配）
    """
    if names is None:
        return []

    if isinstance(names, str):
        items = names.split(delimiter) if delimiter else [names]
    else:
        items = list(names)

    result = []
    seen = set()
    for item in items:
        item = str(item).strip()
        if not item or item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


__all__ = [
    "slugify",
    "title_case",
    "make_tag_list",
]
