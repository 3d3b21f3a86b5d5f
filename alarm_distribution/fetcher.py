"""
告警状态分布查询 (State Distribution Fetcher)

向报表服务发送请求并获取九种告警状态的百分比。
静默降级：无请求、无响应、响应类型不符或通道故障时一律返回全零分布，
调用方只会看到全零行，不会收到异常。
"""
import logging
from typing import Optional

from alarm_distribution.channel import ReportingChannel
from alarm_distribution.schemas import StateDistributionRequest, StateDistributionResponse

logger = logging.getLogger(__name__)


def default_distribution() -> StateDistributionResponse:
    """全零的缺省分布。"""
    return StateDistributionResponse()


def fetch_state_distribution(
    channel: ReportingChannel,
    request: Optional[StateDistributionRequest],
) -> StateDistributionResponse:
    """获取状态分布，任何失败都返回缺省分布。

    Args:
        channel: 报表服务通道。
        request: 状态分布请求；为 None 时不访问外部服务。

    Returns:
        报表服务返回的原始分布（不做范围校验），或全零分布。
    """
    if request is None:
        logger.debug("No request built, using default distribution")
        return default_distribution()

    element = f"{request.filter.system_id}/{request.filter.element_id}"
    try:
        response = channel.send(request)
    except Exception as e:
        logger.warning(f"State data request failed for element {element}: {e}")
        return default_distribution()

    if response is None:
        logger.debug(f"No state data for element {element}")
        return default_distribution()
    if not isinstance(response, StateDistributionResponse):
        logger.debug(f"Unexpected response type for element {element}: {type(response).__name__}")
        return default_distribution()
    return response
