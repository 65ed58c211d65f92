"""实体 ID 工具 -- ULID 格式，时间有序"""

import re

from ulid import ULID

# Crockford Base32，首字符不超过 7（128 bit 上限）
_ULID_PATTERN = re.compile(r"^[0-7][0-9A-HJKMNP-TV-Z]{25}$")


def new_id() -> str:
    """生成新的实体 ID"""
    return str(ULID())


def is_valid_id(value: str) -> bool:
    """判断字符串是否为格式正确的实体 ID（不检查是否存在）"""
    return bool(_ULID_PATTERN.match(value.upper()))


def normalize_id(value: str) -> str:
    """转换为落盘使用的规范写法（大写）

    Raises:
        ValueError: 格式错误
    """
    if not is_valid_id(value):
        raise ValueError(f"Malformed id: {value}")
    return str(ULID.from_str(value.upper()))
