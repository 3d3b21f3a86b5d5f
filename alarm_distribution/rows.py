"""Alarm state proportion rows."""
import locale
from typing import List

from alarm_distribution.schemas import OutputRow, StateDistributionResponse

# 输出顺序固定，不得调整
STATES = (
    ("Critical", "percentage_critical"),
    ("Major", "percentage_major"),
    ("Masked", "percentage_masked"),
    ("Minor", "percentage_minor"),
    ("Normal", "percentage_normal"),
    ("No template", "percentage_no_template"),
    ("Timeout", "percentage_timeout"),
    ("Unknown", "percentage_unknown"),
    ("Warning", "percentage_warning"),
)
STATE_NAMES = tuple(name for name, _ in STATES)


def format_proportion(proportion: float) -> str:
    """按当前进程的数值区域设置格式化百分比，两位小数，如 0.5 -> '50.00%'。"""
    return locale.format_string("%.2f", proportion * 100, grouping=True) + "%"


def create_state_row(name: str, percentage: float) -> OutputRow:
    proportion = percentage / 100
    return OutputRow(state=name, proportion=proportion, display=format_proportion(proportion))


def build_rows(states: StateDistributionResponse) -> List[OutputRow]:
    """把九种状态百分比转换为固定顺序的九行输出。"""
    return [create_state_row(name, getattr(states, field)) for name, field in STATES]
