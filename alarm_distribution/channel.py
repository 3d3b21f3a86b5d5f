"""
报表服务通道 (Reporting Service Channel)

对外部报表服务的同步请求/响应通道做抽象，只暴露一个操作：
    send(request) -> response | None

任何满足该接口的传输方式（进程内调用、HTTP、RPC）都可以替换使用。
传输层故障统一包装为 ChannelError，由上层的 fetcher 静默降级处理。

Abstraction over the synchronous request/response channel to the external
reporting service. Transport failures surface as ChannelError.
"""
import logging
from typing import Any, Callable, Optional, Protocol

import httpx
from pydantic import ValidationError

from alarm_distribution.exceptions import ChannelError
from alarm_distribution.schemas import StateDistributionRequest, StateDistributionResponse

logger = logging.getLogger(__name__)

STATE_DATA_PATH = "/api/v1/reports/state-data"
STATE_FIELDS = frozenset(StateDistributionResponse.model_fields)


class ReportingChannel(Protocol):
    """报表服务通道接口 (Reporting channel capability)"""

    def send(self, request: StateDistributionRequest) -> Any:
        ...


class CallableReportingChannel:
    """把任意进程内可调用对象适配为报表通道。"""

    def __init__(self, handler: Callable[[StateDistributionRequest], Any]):
        self._handler = handler

    def send(self, request: StateDistributionRequest) -> Any:
        return self._handler(request)


class HttpReportingChannel:
    """
    基于 httpx 的同步 HTTP 报表通道 (Synchronous HTTP reporting channel)

    以 JSON 形式 POST 请求到报表服务；响应体包含全部九个状态字段且能通过
    StateDistributionResponse 校验时返回该模型，否则原样返回解析后的 JSON
    （由调用方判定为类型不符）。
    204 / 空响应体返回 None。
    """

    def __init__(self, base_url: str, token: str = "", timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._client: Optional[httpx.Client] = None

    def _headers(self) -> dict:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _get_client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers=self._headers(),
                timeout=self.timeout,
            )
        return self._client

    def send(self, request: StateDistributionRequest) -> Any:
        client = self._get_client()
        try:
            resp = client.post(STATE_DATA_PATH, json=request.model_dump(mode="json"))
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ChannelError("Reporting service returned an error", str(e)) from e
        except httpx.HTTPError as e:
            raise ChannelError("Reporting service unreachable", str(e)) from e

        if resp.status_code == 204 or not resp.content:
            return None

        try:
            data = resp.json()
        except ValueError as e:
            raise ChannelError("Reporting service returned invalid JSON", str(e)) from e

        if not isinstance(data, dict) or not STATE_FIELDS.issubset(data):
            return data
        try:
            return StateDistributionResponse.model_validate(data)
        except ValidationError:
            logger.debug(f"Response does not match state data shape: {data!r}")
            return data

    def close(self):
        if self._client is not None and not self._client.is_closed:
            self._client.close()

    def __enter__(self) -> "HttpReportingChannel":
        return self

    def __exit__(self, *exc_info):
        self.close()
