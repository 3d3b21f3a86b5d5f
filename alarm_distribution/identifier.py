"""Element identifier parsing ("<systemId>/<elementId>")."""
import logging
from typing import Optional

from pydantic import ValidationError

from alarm_distribution.schemas import ElementIdentifier

logger = logging.getLogger(__name__)

SEPARATOR = "/"


def parse_element_id(text: Optional[str]) -> Optional[ElementIdentifier]:
    """解析元素标识字符串。

    无法解析为两个非负整数时返回 None，而不是抛出异常。

    Args:
        text: 形如 "127/4521" 的复合标识。

    Returns:
        ElementIdentifier 实例，或 None（标识缺失）。
    """
    if not text:
        return None

    parts = str(text).split(SEPARATOR)
    if len(parts) != 2:
        logger.debug(f"Unparseable element id: {text!r}")
        return None

    parts = [p.strip() for p in parts]
    # 只接受 ASCII 数字，拒绝 "+5"、"1_000" 及其他文字的数字
    if not all(p.isascii() and p.isdigit() for p in parts):
        logger.debug(f"Unparseable element id: {text!r}")
        return None

    try:
        system_id, element_id = (int(p) for p in parts)
        return ElementIdentifier(system_id=system_id, element_id=element_id)
    except (ValueError, ValidationError):
        logger.debug(f"Unparseable element id: {text!r}")
        return None
