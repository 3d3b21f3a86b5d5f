"""
元素告警状态分布数据源 (Element Alarm State Distribution Source)

功能描述 (Description):
    按元素标识和 UTC 时间窗口，查询该元素在九种告警状态中各自停留的时间比例，
    输出固定顺序的 (状态, 比例) 表。

数据流 (Pipeline):
    parse_element_id -> build_state_request -> fetch_state_distribution -> build_rows

宿主接口 (Host interface):
    initialize(context)        设置运行上下文（报表通道），只设置一次
    declare_inputs()           输入参数：Element ID / Start time / End time
    declare_columns()          输出列：State / Proportion
    bind_inputs(values)        解析输入 -> (identifier, window)
    fetch_rows(identifier, window)
                               返回完整结果页，has_next_page 恒为 False
"""
import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional, Tuple

from alarm_distribution.exceptions import MissingArgumentError, SourceNotInitializedError
from alarm_distribution.fetcher import fetch_state_distribution
from alarm_distribution.identifier import parse_element_id
from alarm_distribution.request_builder import build_state_request
from alarm_distribution.rows import build_rows
from alarm_distribution.schemas import (
    Column,
    ElementIdentifier,
    InputArgument,
    Page,
    SourceContext,
    TimeWindow,
)

logger = logging.getLogger(__name__)

ELEMENT_ID_ARG = "Element ID"
START_TIME_ARG = "Start time"
END_TIME_ARG = "End time"

STATE_COLUMN = "State"
PROPORTION_COLUMN = "Proportion"


class AlarmStateDistributionSource:
    """元素告警状态分布数据源。每次查询互不共享状态，除只读的上下文外。"""

    NAME = "Element alarm state distribution"

    def __init__(self):
        self._context: Optional[SourceContext] = None

    def initialize(self, context: SourceContext):
        """设置运行上下文。上下文设置后只读。"""
        if self._context is not None:
            logger.debug("Source already initialized, keeping existing context")
            return
        self._context = context

    def declare_inputs(self) -> List[InputArgument]:
        return [
            InputArgument(name=ELEMENT_ID_ARG, kind="string"),
            InputArgument(name=START_TIME_ARG, kind="datetime"),
            InputArgument(name=END_TIME_ARG, kind="datetime"),
        ]

    def declare_columns(self) -> List[Column]:
        return [
            Column(name=STATE_COLUMN, kind="string"),
            Column(name=PROPORTION_COLUMN, kind="double"),
        ]

    def bind_inputs(self, values: Mapping[str, Any]) -> Tuple[Optional[ElementIdentifier], TimeWindow]:
        """解析输入参数。

        元素标识无法解析时返回 None（不是错误）；缺少开始/结束时间属于宿主
        契约违规，抛出 MissingArgumentError。
        """
        identifier = parse_element_id(values.get(ELEMENT_ID_ARG))
        start = values.get(START_TIME_ARG)
        end = values.get(END_TIME_ARG)
        for name, value in ((START_TIME_ARG, start), (END_TIME_ARG, end)):
            if not isinstance(value, datetime):
                raise MissingArgumentError(f"Argument '{name}' is required", repr(value))
        return identifier, TimeWindow(start=start, end=end)

    def fetch_rows(self, identifier: Optional[ElementIdentifier], window: TimeWindow) -> Page:
        """执行一次查询，返回包含九行的完整结果页。"""
        if self._context is None:
            raise SourceNotInitializedError("initialize() must be called before fetch_rows()")

        request = build_state_request(identifier, window, self._context.local_timezone)
        states = fetch_state_distribution(self._context.channel, request)
        return Page(rows=build_rows(states), has_next_page=False)

    def query(self, element_id: str, start: datetime, end: datetime) -> Page:
        identifier, window = self.bind_inputs({
            ELEMENT_ID_ARG: element_id,
            START_TIME_ARG: start,
            END_TIME_ARG: end,
        })
        return self.fetch_rows(identifier, window)
