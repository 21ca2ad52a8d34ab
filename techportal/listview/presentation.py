"""
Row presentation helpers
Static status-to-colour lookups and date formatting used when rendering rows.
Statuses are labels assigned by the backend; nothing here changes them.
"""

import re
from dataclasses import dataclass
from typing import Any, Generic, Mapping, Optional, TypeVar

from .values import parse_date

V = TypeVar("V")


class StatusPalette(Generic[V]):
    """Lookup table from a status label to a display value with a fallback"""

    def __init__(self, mapping: Mapping[str, V], default: V, case_insensitive: bool = False):
        self.case_insensitive = case_insensitive
        self.default = default
        if case_insensitive:
            self._mapping = {k.strip().lower(): v for k, v in mapping.items()}
        else:
            self._mapping = dict(mapping)

    def lookup(self, status: Optional[str]) -> V:
        if status is None:
            return self.default
        key = status.strip()
        if self.case_insensitive:
            key = key.lower()
        return self._mapping.get(key, self.default)

    def color(self, status: Optional[str]) -> V:
        return self.lookup(status)


@dataclass(frozen=True)
class StatusIcon:
    tooltip: str
    color: str


EQUIPMENT_STATUS: StatusPalette[StatusIcon] = StatusPalette(
    {
        "A": StatusIcon("Off-Line", "#dc3545"),
        "B": StatusIcon("On-Line(Major Deficiency)", "#fd7e14"),
        "C": StatusIcon("On-Line(Minor Deficiency)", "#ffc107"),
        "E": StatusIcon("Critical Deficiency", "#dc3545"),
        "F": StatusIcon("Replacement Recommended", "#fd7e14"),
        "G": StatusIcon("Proactive Replacement", "#00cdcd"),
    },
    default=StatusIcon("On-Line", "#198754"),
)

QUOTE_STATUS_COLORS: StatusPalette[str] = StatusPalette(
    {
        "Email Sent": "#E8A90E",
        "Viewed": "#008ed6",
        "In Discussion": "#cc00cc",
        "Accepted": "#00b300",
        "Confirmed": "#958C02",
        "Job Scheduled": "#00b300",
        "To Be Sent": "#958C02",
        "Draft": "#808080",
        "Cancelled": "#730202",
    },
    default="#730202",
)

PRIORITY_COLORS: StatusPalette[str] = StatusPalette({"Critical": "red"}, default="black")

JOB_STATUS_CLASSES: StatusPalette[str] = StatusPalette(
    {
        "completed": "status-cyber status-completed",
        "in progress": "status-cyber status-active",
        "in-progress": "status-cyber status-active",
        "pending": "status-cyber status-pending",
        "cancelled": "status-cyber status-cancelled",
    },
    default="status-cyber status-active",
    case_insensitive=True,
)

PARTS_REQUEST_STATUS_COLORS: StatusPalette[str] = StatusPalette(
    {
        "Pending": "#FFA500",
        "Approved": "#00b300",
        "Rejected": "#dc3545",
        "Submitted": "#008ed6",
        "Initiated": "#958C02",
        "Needs Attention": "#fd7e14",
        "Shipped": "#198754",
    },
    default="#808080",
)


def status_badge_class(status: Optional[str]) -> str:
    if not status or not status.strip():
        return "status-default"
    return "status-" + re.sub(r"\s+", "-", status.strip().lower())


# Backend stores 01-Jan-1900 when a date was never set
PLACEHOLDER_YEAR = 1900


def is_placeholder_date(value: Any) -> bool:
    moment = parse_date(value)
    return (
        moment is not None
        and moment.year == PLACEHOLDER_YEAR
        and moment.month == 1
        and moment.day == 1
    )


def format_date(value: Any, fmt: str = "%m/%d/%Y") -> str:
    """Format a date cell; blank for missing, placeholder or unparseable values"""
    moment = parse_date(value)
    if moment is None or is_placeholder_date(moment):
        return ""
    return moment.strftime(fmt)
