"""Calendar-date helpers that avoid instant-to-local drift.

Due dates in the planner are calendar intentions ("hand in on the 15th"), not
timestamps, so they are read from their date components only. Instants
(reminder fire times, schedule slots) are persisted as UTC and always read
back in the configured local zone.
"""

from datetime import date as Date, datetime, timezone
from zoneinfo import ZoneInfo

from backend.app.core.config import settings

TZ = ZoneInfo(settings.timezone)

_JA_WEEKDAYS = ["月", "火", "水", "木", "金", "土", "日"]
_EN_WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
_EN_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

def local_now() -> datetime:
    """Wall-clock now as an aware datetime in the local zone."""
    return datetime.now(TZ)

def local_today() -> Date:
    return local_now().date()

def to_calendar_date(raw) -> Date:
    """Return the calendar date of `raw` without any time-zone conversion.

    Accepts a `date`, a `datetime` (its own date component is used as-is) or a
    string, of which only the leading `YYYY-MM-DD` is parsed.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, Date):
        return raw
    if raw is None:
        raise ValueError("no date given")
    text = str(raw).strip()[:10]
    return Date.fromisoformat(text)

def local_midnight(d: Date) -> datetime:
    """Aware local midnight for a calendar date."""
    return datetime(d.year, d.month, d.day, tzinfo=TZ)

def days_until(target: Date, today: Date | None = None) -> int:
    """Whole days from `today` to `target` (positive = future).

    Computed from date ordinals, so DST transitions never shift the result.
    """
    if today is None:
        today = local_today()
    return (to_calendar_date(target) - to_calendar_date(today)).days

def format_human(d: Date, locale: str = "ja-JP") -> str:
    """Display form "month day (weekday)", e.g. 1月15日(水)."""
    d = to_calendar_date(d)
    if locale == "ja-JP":
        return f"{d.month}月{d.day}日({_JA_WEEKDAYS[d.weekday()]})"
    if locale == "en-US":
        return f"{_EN_MONTHS[d.month - 1]} {d.day} ({_EN_WEEKDAYS[d.weekday()]})"
    raise ValueError(f"unsupported locale: {locale}")

def to_storage(dt: datetime) -> str:
    """Serialize an instant for the store (UTC, seconds precision).

    Naive datetimes are taken to be local wall-clock time.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=TZ)
    return dt.astimezone(timezone.utc).isoformat(timespec="seconds")

def from_storage(text: str) -> datetime:
    """Parse a stored instant back into the local zone."""
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=TZ)
    return dt.astimezone(TZ)
