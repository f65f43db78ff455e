"""
Local clock for eventgrid.

Events are naive calendar dates, so the only place a timezone matters is
deciding what "today" is: for the default expansion horizon and for the
"is this cell today" flag of the month view.
"""

from datetime import date, datetime, timedelta
import time as _time
from typing import Optional

import pytz
from dateutil.relativedelta import relativedelta


# None means "use the system timezone"; can be overridden by config
_local_timezone_name: Optional[str] = None


def set_timezone(timezone_name: Optional[str]):
    """Set the local timezone used to decide what today is."""
    global _local_timezone_name
    _local_timezone_name = timezone_name


def get_local_timezone():
    """
    Get the local timezone as a pytz timezone object.

    Falls back to the system timezone name, then to a fixed offset built
    from the C library's idea of the local offset.
    """
    if _local_timezone_name:
        try:
            return pytz.timezone(_local_timezone_name)
        except pytz.UnknownTimeZoneError:
            pass
    try:
        return pytz.timezone(_time.tzname[0])
    except pytz.UnknownTimeZoneError:
        if _time.localtime().tm_isdst:
            offset_seconds = -_time.altzone
        else:
            offset_seconds = -_time.timezone
        return pytz.FixedOffset(offset_seconds // 60)


def now() -> datetime:
    return datetime.now(get_local_timezone())


def today() -> date:
    """Today's date in the local timezone."""
    return now().date()


def default_horizon(days: Optional[int] = None, start: Optional[date] = None) -> date:
    """
    Last date recurring events are expanded to.

    One calendar year after today unless a day count is given.
    """
    base = start if start is not None else today()
    if days is None:
        return base + relativedelta(years=1)
    return base + timedelta(days=days)
