"""时间工具 -- 所有时间统一为 UTC

落盘格式固定为带微秒的 ISO 8601，保证字符串字典序与时间先后一致，
SQL 中可直接用 < / ORDER BY 比较。
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def to_utc(value: datetime) -> datetime:
    """统一为 UTC 时区；无时区信息的时间按 UTC 解释"""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_ts(value: datetime) -> str:
    """序列化为落盘字符串"""
    return to_utc(value).isoformat(timespec="microseconds")


def parse_ts(value: str) -> datetime:
    return to_utc(datetime.fromisoformat(value))
