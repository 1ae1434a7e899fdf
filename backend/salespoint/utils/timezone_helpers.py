"""
Local wall-clock helpers for day-level bucketing.
Timestamps are compared as naive local datetimes; aware values are converted
to the process's local timezone first.
"""
from datetime import date, datetime, time, timedelta
from typing import Optional, Union


def to_local(value: datetime) -> datetime:
    """Return `value` as a naive datetime in the process's local timezone."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def parse_timestamp(value: Union[datetime, date, str, None]) -> Optional[datetime]:
    """Accept a datetime, date or ISO-8601 string; return a naive local datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_local(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return to_local(parsed)


def local_date(value: Union[datetime, date, str, None]) -> Optional[date]:
    """Calendar day of a timestamp in local time."""
    parsed = parse_timestamp(value)
    return parsed.date() if parsed else None


def start_of_day(now: datetime) -> datetime:
    """Local midnight of the day containing `now`."""
    return to_local(now).replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    """First instant of the Monday that starts the week containing `now`.

    Weeks run Monday→Sunday regardless of locale; a Sunday steps back 6 days.
    """
    midnight = start_of_day(now)
    return midnight - timedelta(days=midnight.weekday())
