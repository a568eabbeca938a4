"""Datetime utilities for timezone-aware timestamps and local calendar dates.

Usage:
    from libs.common.datetime_utils import local_today, utc_now
"""

from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from libs.common.config import get_settings


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime.

    This replaces the deprecated datetime.utcnow() which returns naive datetimes.
    """
    return datetime.now(timezone.utc)


def to_local_date(moment: date | datetime, tz_name: Optional[str] = None) -> date:
    """Return the calendar date of ``moment`` in the configured timezone.

    Plain dates and naive datetimes are taken as already local.
    """
    if not isinstance(moment, datetime):
        return moment
    if moment.tzinfo is None:
        return moment.date()
    tz = ZoneInfo(tz_name or get_settings().TIMEZONE)
    return moment.astimezone(tz).date()


def local_today() -> date:
    """Today's date in the configured timezone."""
    return to_local_date(utc_now())
