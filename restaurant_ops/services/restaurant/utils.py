"""Money and date helpers."""
import uuid
from datetime import datetime, timedelta
from typing import Optional


def currency(amount: float) -> str:
    """Format an amount as US dollars, e.g. 1234.5 -> '$1,234.50'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def uid() -> str:
    """Generate a short unique id."""
    return uuid.uuid4().hex[:8]


def start_of_day(moment: datetime) -> datetime:
    """Midnight of the moment's calendar day."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def is_same_day(a: datetime, b: datetime) -> bool:
    """Check whether two moments fall on the same calendar day."""
    return a.date() == b.date()


def within_last_n_days(
    moment: datetime, n: int, now: Optional[datetime] = None
) -> bool:
    """
    Check whether moment falls in the trailing window of n calendar days.

    The window is [start of today - (n - 1) days, now], inclusive on both ends.
    """
    if now is None:
        now = datetime.now()
    start = start_of_day(now) - timedelta(days=n - 1)
    return start <= moment <= now
