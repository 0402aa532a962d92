"""
Day-of-period numbering.

Period ends are always derived from the period length passed in, so a change
to the average period length reflows the numbering of every logged period.
"""
from typing import List, Optional
from datetime import date

from src.models.period import PeriodRecord
from src.models.phase import PeriodDayInfo
from src.services.constants import DEFAULT_PERIOD_LENGTH
from src.services.utils import derived_period_end, sort_periods

ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}

def format_day_label(day_number: int) -> str:
    """
    Ordinal label for a period day.

    Example:
        >>> format_day_label(2)
        '2nd day'
        >>> format_day_label(12)
        '12th day'
    """
    return f"{day_number}{ORDINAL_SUFFIXES.get(day_number, 'th')} day"

def get_period_day_info(
    target_date: date,
    periods: List[PeriodRecord],
    fallback_period_length: int = DEFAULT_PERIOD_LENGTH
) -> Optional[PeriodDayInfo]:
    """
    Position of ``target_date`` within the period containing it.

    Args:
        target_date: Day to look up
        periods: Period records, never modified
        fallback_period_length: Period length used to derive every period's end

    Returns:
        PeriodDayInfo, or None when the date is not a period day. When
        periods overlap, the most recently started one wins.

    Example:
        >>> info = get_period_day_info(date(2024, 1, 5), periods, 5)
        >>> info.day_label, info.is_end
        ('5th day', True)
    """
    period_length = max(1, fallback_period_length)

    current = next(
        (
            p for p in sort_periods(periods)
            if p.start_date <= target_date <= derived_period_end(p, period_length)
        ),
        None
    )
    if current is None:
        return None

    day_number = (target_date - current.start_date).days + 1
    if day_number > period_length:
        return None

    return PeriodDayInfo(
        day_number=day_number,
        day_label=format_day_label(day_number),
        period_length=period_length,
        is_start=day_number == 1,
        is_middle=1 < day_number < period_length,
        is_end=day_number == period_length
    )
