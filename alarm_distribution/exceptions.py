"""
异常定义模块 (Exception Definitions)

数据源适配层使用的异常类。核心流水线（解析、请求构建、查询、行构建）
从不向调用方抛出异常，所有失败都降级为全零结果；这里的异常只用于
传输层故障的内部传递以及宿主侧的契约违规。

Exception classes for the adapter layers. The core pipeline never raises to
its caller; these exist for transport failures (absorbed by the fetcher) and
host-side contract violations.
"""
from typing import Optional


class AlarmDistributionError(Exception):
    """异常基类 (Base Exception)"""
    error: str = "alarm_distribution_error"

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class ChannelError(AlarmDistributionError):
    """报表服务通道故障 (Reporting channel failure)"""
    error = "channel_error"


class ConfigError(AlarmDistributionError):
    """配置错误 (Invalid configuration)"""
    error = "config_error"


class MissingArgumentError(AlarmDistributionError):
    """必填输入参数缺失 (Required input argument missing)"""
    error = "missing_argument"


class SourceNotInitializedError(AlarmDistributionError):
    """数据源未初始化 (Source used before initialize())"""
    error = "source_not_initialized"
