"""
告警状态分布测试基础配置

提供内存级报表通道、样例分布、已初始化数据源等通用 fixture。
所有测试都不依赖真实的报表服务。
"""
import locale
from datetime import datetime, timezone

import pytest

from alarm_distribution.schemas import SourceContext, StateDistributionResponse, TimeWindow
from alarm_distribution.source import AlarmStateDistributionSource


# ── Fake 报表通道 ─────────────────────────────────────────────────────
class FakeChannel:
    """内存级报表通道，记录收到的请求并返回预设响应。"""
    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.requests = []

    def send(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def sample_states() -> StateDistributionResponse:
    return StateDistributionResponse(percentage_critical=25, percentage_normal=75)


@pytest.fixture
def window():
    return TimeWindow(
        start=datetime(2024, 1, 1, tzinfo=timezone.utc),
        end=datetime(2024, 1, 2, tzinfo=timezone.utc),
    )


@pytest.fixture
def fake_channel(sample_states):
    return FakeChannel(response=sample_states)


@pytest.fixture
def source(fake_channel):
    src = AlarmStateDistributionSource()
    src.initialize(SourceContext(channel=fake_channel, local_timezone=timezone.utc))
    return src


@pytest.fixture
def make_channel():
    """返回 FakeChannel 工厂。"""
    return FakeChannel


@pytest.fixture(autouse=True)
def numeric_locale():
    """每个测试在 C 数值区域下运行，结束后恢复原设置。"""
    saved = locale.setlocale(locale.LC_NUMERIC)
    locale.setlocale(locale.LC_NUMERIC, "C")
    yield
    locale.setlocale(locale.LC_NUMERIC, saved)
