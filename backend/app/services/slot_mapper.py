"""Weekly period grid <-> absolute time ranges.

The school day has seven fixed one-hour periods. Period 7 ("after school") is
a catch-all: any start hour that is not one of the first six periods maps back
to it, so the reverse mapping is lossy (16:00 and 20:00 both read as 7).
"""

from dataclasses import dataclass
from datetime import date as Date, datetime, timedelta

from backend.app.services.date_resolver import TZ, to_calendar_date

PERIOD_START_HOURS = {1: 8, 2: 9, 3: 10, 4: 11, 5: 13, 6: 14, 7: 15}
PERIOD_LENGTH = timedelta(hours=1)
AFTER_SCHOOL_PERIOD = 7

_HOUR_TO_PERIOD = {
    hour: period
    for period, hour in PERIOD_START_HOURS.items()
    if period != AFTER_SCHOOL_PERIOD
}
_WEEKDAY_LABELS = ["月", "火", "水", "木", "金", "土", "日"]

@dataclass(frozen=True)
class WeekDay:
    date: Date
    key: str  # "{month}/{day}", used to look up grid cells
    label: str
    is_weekend: bool

def week_monday(anchor: Date) -> Date:
    """Monday of the week containing `anchor`."""
    anchor = to_calendar_date(anchor)
    return anchor - timedelta(days=anchor.weekday())

def date_key(d: Date) -> str:
    return f"{d.month}/{d.day}"

def build_week(anchor: Date) -> list[WeekDay]:
    """Seven Monday-first days of the week containing `anchor`."""
    monday = week_monday(anchor)
    days = []
    for i in range(7):
        d = monday + timedelta(days=i)
        days.append(WeekDay(date=d, key=date_key(d), label=_WEEKDAY_LABELS[i], is_weekend=i >= 5))
    return days

def period_to_instant(week_anchor: Date, weekday_index: int, period: int) -> tuple[datetime, datetime]:
    """Start/end of `period` on the `weekday_index`-th day (0 = Monday) of the anchor's week."""
    if not 0 <= weekday_index <= 6:
        raise ValueError(f"weekday_index must be 0-6, got {weekday_index}")
    if period not in PERIOD_START_HOURS:
        raise ValueError(f"period must be 1-7, got {period}")
    day = week_monday(week_anchor) + timedelta(days=weekday_index)
    # built from components in the local zone so the hour survives a round-trip
    start = datetime(day.year, day.month, day.day, PERIOD_START_HOURS[period], tzinfo=TZ)
    return start, start + PERIOD_LENGTH

def slot_for_date(d: Date, period: int) -> tuple[datetime, datetime]:
    """Start/end of `period` on calendar date `d`."""
    d = to_calendar_date(d)
    return period_to_instant(d, d.weekday(), period)

def instant_to_period(instant: datetime) -> int:
    """Period whose start hour matches `instant`; everything else is period 7."""
    if instant.tzinfo is not None:
        instant = instant.astimezone(TZ)
    return _HOUR_TO_PERIOD.get(instant.hour, AFTER_SCHOOL_PERIOD)

def slot_label(period: int) -> str:
    if period == AFTER_SCHOOL_PERIOD:
        return "放課後"
    return f"{period}時間目"
