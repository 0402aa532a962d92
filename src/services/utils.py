"""
Shared utility functions for cycle-related services.

These utilities are used across multiple service modules to handle common
operations like period sorting, period end resolution, and calendar-month
arithmetic.
"""
import math
from typing import List, Optional
from datetime import date, timedelta

from src.models.period import CycleSettings, PeriodRecord
from src.services.constants import DEFAULT_CYCLE_LENGTH, DEFAULT_PERIOD_LENGTH

def sort_periods(periods: List[PeriodRecord], reverse: bool = True) -> List[PeriodRecord]:
    """
    Return a sorted copy of the period list.

    Args:
        periods: Period records, never modified
        reverse: Whether to sort newest first (default)

    Returns:
        New list of periods sorted by start date

    Example:
        >>> latest = sort_periods(periods)[0]
    """
    return sorted(periods, key=lambda p: p.start_date, reverse=reverse)

def get_latest_period(periods: List[PeriodRecord]) -> Optional[PeriodRecord]:
    """Return the period with the most recent start date, if any."""
    if not periods:
        return None
    return max(periods, key=lambda p: p.start_date)

def derived_period_end(period: PeriodRecord, period_length: int) -> date:
    """Assumed last day of a period of ``period_length`` days."""
    return period.start_date + timedelta(days=max(1, period_length) - 1)

def resolve_period_end(period: PeriodRecord, period_length: int) -> date:
    """
    Last day of a period: the logged end when present, otherwise derived.

    Args:
        period: Period record
        period_length: Length used when the record has no end date

    Returns:
        Inclusive end date
    """
    if period.end_date is not None:
        return period.end_date
    return derived_period_end(period, period_length)

def round_half_up(value: float) -> int:
    """Round to the nearest whole number, halves away from zero for positives."""
    return int(math.floor(value + 0.5))

def settings_cycle_length(settings: Optional[CycleSettings]) -> int:
    """Average cycle length from settings, or the default when unset."""
    if settings is None or not settings.average_cycle_length:
        return DEFAULT_CYCLE_LENGTH
    return settings.average_cycle_length

def settings_period_length(settings: Optional[CycleSettings]) -> int:
    """Average period length from settings, or the default when unset/non-positive."""
    if settings is None or settings.average_period_length <= 0:
        return DEFAULT_PERIOD_LENGTH
    return settings.average_period_length

def month_index(day: date) -> int:
    """Months since year 0, for comparing calendar months."""
    return day.year * 12 + day.month - 1

def months_between(start: date, end: date) -> int:
    """
    Calendar-month distance from ``start``'s month to ``end``'s month.

    Example:
        >>> months_between(date(2024, 1, 31), date(2024, 2, 1))
        1
    """
    return month_index(end) - month_index(start)
