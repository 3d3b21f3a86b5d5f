"""
数据源配置加载模块。

定义配置数据类，并从 YAML 文件加载配置。
支持环境变量覆盖（ALARM_DISTRIBUTION_TOKEN）和超时时间简写（如 '30s'、'1m'）。
"""
import locale
import logging
import os
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from alarm_distribution.exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    """报表服务连接配置。"""
    url: str = "http://localhost:8001"
    token: str = ""
    timeout: int = 30  # 请求超时（秒）


@dataclass
class ReportConfig:
    """报表输出配置。"""
    local_timezone: str = ""  # 空字符串表示使用运行环境本地时区
    locale: str = ""          # 空字符串表示使用运行环境（LANG / LC_*）的区域设置

    def zone(self) -> Optional[tzinfo]:
        if not self.local_timezone:
            return None
        return ZoneInfo(self.local_timezone)

    def apply_locale(self):
        """设置数值格式使用的区域（LC_NUMERIC）。

        未配置时采用运行环境的默认区域；环境区域不可用时退回 C。
        """
        if not self.locale:
            try:
                locale.setlocale(locale.LC_NUMERIC, "")
            except locale.Error:
                logger.warning("Environment locale unavailable, falling back to C")
                locale.setlocale(locale.LC_NUMERIC, "C")
            return
        try:
            locale.setlocale(locale.LC_NUMERIC, self.locale)
        except locale.Error as e:
            raise ConfigError("Unsupported report.locale", self.locale) from e


@dataclass
class SourceConfig:
    """主配置，聚合所有子配置。"""
    server: ServerConfig = field(default_factory=ServerConfig)
    report: ReportConfig = field(default_factory=ReportConfig)


def _parse_timeout(val) -> int:
    """解析请求超时秒数，支持 '30s'、'1m' 或纯数字。"""
    if isinstance(val, int):
        return val
    s = str(val).strip().lower()
    if s.endswith("s"):
        return int(s[:-1])
    if s.endswith("m"):
        return int(s[:-1]) * 60
    return int(s)


def load_config(path: str) -> SourceConfig:
    """从 YAML 文件加载配置。

    Args:
        path: 配置文件路径。

    Returns:
        解析后的 SourceConfig 实例。

    Raises:
        FileNotFoundError: 配置文件不存在时抛出。
        ConfigError: 配置值无效时抛出。
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(p) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}", str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config in {path}", "top level must be a mapping")

    cfg = SourceConfig()

    # 解析服务端配置，token 优先从环境变量读取
    srv = data.get("server") or {}
    cfg.server.url = str(srv.get("url") or cfg.server.url).rstrip("/")
    cfg.server.token = os.environ.get("ALARM_DISTRIBUTION_TOKEN", srv.get("token") or "")
    try:
        cfg.server.timeout = _parse_timeout(srv.get("timeout") or cfg.server.timeout)
    except ValueError:
        raise ConfigError("Invalid server.timeout", str(srv.get("timeout")))

    # 解析报表输出配置
    rpt = data.get("report") or {}
    cfg.report.local_timezone = rpt.get("local_timezone") or ""
    cfg.report.locale = rpt.get("locale") or ""
    try:
        cfg.report.zone()
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigError("Unknown report.local_timezone", cfg.report.local_timezone)

    return cfg
