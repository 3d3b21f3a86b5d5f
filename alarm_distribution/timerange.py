"""
报表服务时间范围格式化。

报表服务要求的时间范围格式为 "yyyy-MM-dd HH:mm:ss|yyyy-MM-dd HH:mm:ss"，
两端均为服务所在环境的本地时间。此格式属于线上协议，不可随意修改。
"""
from datetime import MAXYEAR, datetime, timezone, tzinfo
from typing import Optional

RANGE_DELIMITER = "|"


def _render(t: datetime) -> str:
    # 年份固定四位（strftime 的 %Y 不补零）
    return f"{t.year:04d}-{t:%m-%d %H:%M:%S}"


def to_local_time(utc_time: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """把 UTC 时间转换为本地时间。

    naive datetime 视为 UTC；tz 为空时使用运行环境的本地时区。
    转换结果超出 datetime 可表示范围时截断到 datetime.max / datetime.min。
    """
    if utc_time.tzinfo is None:
        utc_time = utc_time.replace(tzinfo=timezone.utc)
    try:
        return utc_time.astimezone(tz) if tz is not None else utc_time.astimezone()
    except (OverflowError, OSError):
        return datetime.max if utc_time.year == MAXYEAR else datetime.min


def format_report_datetime(utc_time: datetime, tz: Optional[tzinfo] = None) -> str:
    """把 UTC 时间转换为本地时间并格式化为 yyyy-MM-dd HH:mm:ss。"""
    return _render(to_local_time(utc_time, tz))


def format_time_range(utc_start: datetime, utc_end: datetime, tz: Optional[tzinfo] = None) -> str:
    """生成 "<start>|<end>" 时间范围字符串，开始时间在前。"""
    start = format_report_datetime(utc_start, tz)
    end = format_report_datetime(utc_end, tz)
    return f"{start}{RANGE_DELIMITER}{end}"
