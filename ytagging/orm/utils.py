"""ORM 工具函数"""

import re

# 缩写后紧跟一个新单词：APIKey -> API_Key，E2ETest -> E2E_Test
_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
# 小写字母后紧跟大写字母：TaggedItem -> Tagged_Item
_WORD_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def to_snake_case(name: str) -> str:
    """类名转表名

    >>> to_snake_case("TaggedItem")
    'tagged_item'
    >>> to_snake_case("APIKey")
    'api_key'
    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    return _WORD_BOUNDARY.sub(r"\1_\2", name).lower()
