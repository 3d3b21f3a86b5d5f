"""
告警状态分布相关数据模型

定义元素标识、时间窗口、报表请求/响应以及输出行的数据结构。
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


# 报表服务中 max_amount=0 表示不限制返回条数
UNLIMITED_RESULTS = 0

# 系统 ID 和元素 ID 均为 32 位有符号整数
INT32_MAX = 2**31 - 1


class ElementIdentifier(BaseModel):
    """元素标识：(系统 ID, 元素 ID)，构造后不可变。"""
    system_id: int = Field(ge=0, le=INT32_MAX)
    element_id: int = Field(ge=0, le=INT32_MAX)

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.system_id}/{self.element_id}"


class TimeWindow(BaseModel):
    """查询时间窗口（UTC）。不校验 start <= end。"""
    start: datetime
    end: datetime


class ReportFilter(BaseModel):
    """报表过滤条件，目前只支持按元素过滤。"""
    type: Literal["element"] = "element"
    system_id: int
    element_id: int

    @classmethod
    def element(cls, identifier: ElementIdentifier) -> "ReportFilter":
        return cls(system_id=identifier.system_id, element_id=identifier.element_id)


class StateDistributionRequest(BaseModel):
    """发往报表服务的状态分布请求。"""
    max_amount: int = UNLIMITED_RESULTS
    timespan: str
    filter: ReportFilter

    model_config = {"frozen": True}


class StateDistributionResponse(BaseModel):
    """报表服务返回的九种告警状态百分比（0-100），缺省全部为 0。"""
    percentage_critical: float = 0.0
    percentage_major: float = 0.0
    percentage_masked: float = 0.0
    percentage_minor: float = 0.0
    percentage_normal: float = 0.0
    percentage_no_template: float = 0.0
    percentage_timeout: float = 0.0
    percentage_unknown: float = 0.0
    percentage_warning: float = 0.0

    model_config = {"extra": "ignore"}


class OutputRow(BaseModel):
    """输出表中的一行：状态名、比例（0-1）、百分比显示文本。"""
    state: str
    proportion: float
    display: str

    def cells(self) -> List[Dict[str, Any]]:
        return [
            {"value": self.state},
            {"value": self.proportion, "display_value": self.display},
        ]


class Column(BaseModel):
    """输出列定义。"""
    name: str
    kind: Literal["string", "double"]


class InputArgument(BaseModel):
    """输入参数定义。"""
    name: str
    kind: Literal["string", "datetime"]
    required: bool = True


class Page(BaseModel):
    """一次返回的结果页；本数据源始终一次返回全部行。"""
    rows: List[OutputRow] = []
    has_next_page: bool = False


class SourceContext(BaseModel):
    """数据源运行上下文，初始化时设置一次，之后只读。"""
    channel: Any
    local_timezone: Optional[Any] = None

    model_config = {"frozen": True}
