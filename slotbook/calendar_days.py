"""Day list generation and Russian date formatting for the day picker."""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from slotbook import config

WEEKDAYS_SHORT = ["пн", "вт", "ср", "чт", "пт", "сб", "вс"]

# Genitive case: "20 марта"
MONTHS_GENITIVE = [
    "января", "февраля", "марта", "апреля", "мая", "июня",
    "июля", "августа", "сентября", "октября", "ноября", "декабря",
]


@dataclass(frozen=True)
class Day:
    """One button of the day selector."""
    value: str    # YYYY-MM-DD
    label: str    # DD.MM
    weekday: str  # пн..вс


def today(now: Optional[datetime] = None) -> str:
    """Today's date in YYYY-MM-DD."""
    now = now or datetime.now()
    return now.date().isoformat()


def upcoming_days(count: int, start: Optional[date] = None) -> List[Day]:
    """Return `count` consecutive days starting at `start` (default: today)."""
    start = start or date.today()
    days = []
    for offset in range(count):
        d = start + timedelta(days=offset)
        days.append(Day(
            value=d.isoformat(),
            label=d.strftime("%d.%m"),
            weekday=WEEKDAYS_SHORT[d.weekday()]
        ))
    return days


def days_until(month: Optional[int] = None, day: Optional[int] = None,
               now: Optional[datetime] = None) -> int:
    """
    Number of days to show in the picker up to a cut-off date this year.

    Today counts as the first day. Once the cut-off has passed only today is shown.

    Args:
        month: Cut-off month, defaults to config.BOOKING_CUTOFF
        day: Cut-off day of month, defaults to config.BOOKING_CUTOFF
        now: Reference time (default: now)

    Returns:
        Day count, at least 1
    """
    default_month, default_day = config.BOOKING_CUTOFF
    month = month or default_month
    day = day or default_day
    now = now or datetime.now()

    target = datetime(now.year, month, day)
    if now > target:
        return 1
    return (target - now).days + 1


def format_date(value: Union[str, date]) -> str:
    """'2026-03-20' -> '20 марта'."""
    if isinstance(value, str):
        value = date.fromisoformat(value)
    return f"{value.day:02d} {MONTHS_GENITIVE[value.month - 1]}"
