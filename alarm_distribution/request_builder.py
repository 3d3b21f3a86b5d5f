"""State distribution request construction."""
from datetime import tzinfo
from typing import Optional

from alarm_distribution.schemas import (
    UNLIMITED_RESULTS,
    ElementIdentifier,
    ReportFilter,
    StateDistributionRequest,
    TimeWindow,
)
from alarm_distribution.timerange import format_time_range


def build_state_request(
    identifier: Optional[ElementIdentifier],
    window: TimeWindow,
    tz: Optional[tzinfo] = None,
) -> Optional[StateDistributionRequest]:
    """Build the report request, or None when the element is unknown."""
    if identifier is None:
        return None

    return StateDistributionRequest(
        max_amount=UNLIMITED_RESULTS,
        timespan=format_time_range(window.start, window.end, tz),
        filter=ReportFilter.element(identifier),
    )
