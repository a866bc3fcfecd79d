"""Date manipulation utilities"""

from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo


def parse_date(value) -> Optional[date]:
    """Parse an upstream date or datetime string ("2024-05-01", "2024-05-01 10:00:00")"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value).strip()).date()


def window_start(days: int, tz_name: str, now: datetime | None = None) -> datetime:
    """Start of a trailing window of `days` ending now, in the given timezone"""
    if now is None:
        now = datetime.now(ZoneInfo(tz_name))
    return now - timedelta(days=days)


def days_until(end: Optional[date], today: date) -> Optional[int]:
    """Whole days left until `end`; None when unknown or not in the future"""
    if end is None or end < today:
        return None
    days = (end - today).days
    return days or None
