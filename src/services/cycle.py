"""
Service module for menstrual cycle calculations and predictions.

This module provides functionality for predicting the next period, ovulation
day, fertile window and PMS window from period history, and for projecting
future periods over a horizon of months. Every function takes the current
day explicitly so results are reproducible.

Typical usage:
    periods = get_effective_periods(logged_periods, settings)
    prediction = calculate_predictions(periods, settings, today)
    windows = get_future_periods(periods, settings, today, months=6)
"""
from typing import List, Optional
from datetime import date, timedelta

from aws_lambda_powertools import Logger
from dateutil.relativedelta import relativedelta

from src.models.period import CycleSettings, PeriodRecord
from src.models.phase import ConfidenceLevel
from src.models.prediction import CyclePrediction, PeriodWindow
from src.services.constants import (
    FERTILE_WINDOW_DAYS,
    LUTEAL_PHASE_DAYS,
    MAX_PROJECTED_CYCLES,
    PMS_WINDOW_DAYS,
    PROJECTION_MONTHS
)
from src.services.statistics import calculate_cycle_statistics
from src.services.utils import get_latest_period

logger = Logger()

def next_period_after(anchor: date, cycle_length: int, today: date) -> date:
    """
    First cycle start after ``today``, counting whole cycles from ``anchor``.

    Args:
        anchor: Start of the most recent period
        cycle_length: Cycle length in days, must be positive
        today: Current calendar day

    Returns:
        ``anchor + n * cycle_length`` for the smallest ``n >= 1`` that lands
        strictly after ``today``

    Example:
        >>> next_period_after(date(2024, 1, 1), 28, date(2024, 1, 29))
        datetime.date(2024, 2, 26)
    """
    next_date = anchor + timedelta(days=cycle_length)
    if next_date <= today:
        cycles_passed = (today - anchor).days // cycle_length
        next_date = anchor + timedelta(days=(cycles_passed + 1) * cycle_length)
    return next_date

def calculate_predictions(
    periods: List[PeriodRecord],
    settings: Optional[CycleSettings],
    today: date
) -> CyclePrediction:
    """
    Calculate the next period, ovulation, fertile and PMS windows.

    Args:
        periods: Effective period history
        settings: Optional user settings supplying fallbacks
        today: Current calendar day

    Returns:
        CyclePrediction. With no periods every date is None and confidence
        is low; otherwise the next period date is strictly after ``today``.

    Example:
        >>> prediction = calculate_predictions(periods, settings, date(2024, 2, 20))
        >>> print(f"Next period expected on {prediction.next_period_date}")
    """
    stats = calculate_cycle_statistics(periods, settings)

    if not periods:
        return CyclePrediction(
            cycle_length=stats.cycle_length,
            period_length=stats.period_length,
            confidence=ConfidenceLevel.LOW
        )

    anchor = get_latest_period(periods).start_date
    next_period = next_period_after(anchor, stats.cycle_length, today)
    ovulation = next_period - timedelta(days=LUTEAL_PHASE_DAYS)

    logger.debug("Calculated cycle prediction", extra={
        "anchor": str(anchor),
        "next_period": str(next_period),
        "cycle_length": stats.cycle_length
    })

    return CyclePrediction(
        next_period_date=next_period,
        ovulation_date=ovulation,
        fertile_window_start=ovulation - timedelta(days=FERTILE_WINDOW_DAYS),
        fertile_window_end=ovulation,
        pms_start=next_period - timedelta(days=PMS_WINDOW_DAYS),
        pms_end=next_period - timedelta(days=1),
        cycle_length=stats.cycle_length,
        period_length=stats.period_length,
        confidence=stats.confidence
    )

def get_future_periods(
    periods: List[PeriodRecord],
    settings: Optional[CycleSettings],
    today: date,
    months: int = PROJECTION_MONTHS,
    cycle_length: Optional[int] = None,
    period_length: Optional[int] = None
) -> List[PeriodWindow]:
    """
    Project upcoming periods by stepping whole cycles from the latest start.

    Args:
        periods: Effective period history
        settings: Optional user settings
        today: Current calendar day
        months: Horizon in calendar months after ``today``
        cycle_length: Override for the estimated cycle length
        period_length: Override for the estimated period length

    Returns:
        Period windows in chronological order. Windows between the latest
        logged period and ``today`` are included. At most
        MAX_PROJECTED_CYCLES windows are produced; a non-positive cycle
        length yields an empty list.
    """
    latest = get_latest_period(periods)
    if latest is None:
        return []

    if cycle_length is None or period_length is None:
        stats = calculate_cycle_statistics(periods, settings)
        cycle_length = stats.cycle_length if cycle_length is None else cycle_length
        period_length = stats.period_length if period_length is None else period_length

    if cycle_length <= 0:
        logger.warning("Skipping projection for non-positive cycle length", extra={
            "cycle_length": cycle_length
        })
        return []

    horizon = today + relativedelta(months=months)
    span = timedelta(days=max(1, period_length) - 1)
    windows = []
    anchor = latest.start_date
    for _ in range(MAX_PROJECTED_CYCLES):
        anchor = anchor + timedelta(days=cycle_length)
        if anchor > horizon:
            break
        windows.append(PeriodWindow(start_date=anchor, end_date=anchor + span))
    else:
        logger.warning("Projection stopped at iteration cap", extra={
            "cap": MAX_PROJECTED_CYCLES,
            "cycle_length": cycle_length,
            "horizon": str(horizon)
        })

    return windows

def get_cycle_day(periods: List[PeriodRecord], today: date) -> Optional[int]:
    """
    Day of the current cycle, counting the latest period start as day 1.

    Returns None when there is no period history.
    """
    latest = get_latest_period(periods)
    if latest is None:
        return None
    return (today - latest.start_date).days + 1

def days_until_next_period(prediction: CyclePrediction, today: date) -> Optional[int]:
    """Whole days until the predicted next period, or None if unknown."""
    if prediction.next_period_date is None:
        return None
    remaining = (prediction.next_period_date - today).days
    return remaining if remaining > 0 else None
