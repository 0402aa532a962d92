"""
Statistics calculation service for cycle tracking data.

This module estimates the average cycle length (start to start) and average
period length from period history, together with a confidence tier based on
how many cycles were observed.
"""
from typing import List, Optional
from statistics import mean
from aws_lambda_powertools import Logger
from src.models.period import CycleSettings, PeriodRecord
from src.models.phase import ConfidenceLevel
from src.models.prediction import CycleStatistics
from src.services.constants import (
    DEFAULT_CYCLE_LENGTH,
    HIGH_CONFIDENCE_CYCLES,
    MEDIUM_CONFIDENCE_CYCLES
)
from src.services.utils import (
    round_half_up,
    settings_cycle_length,
    settings_period_length,
    sort_periods
)

logger = Logger()

def calculate_cycle_lengths(periods: List[PeriodRecord]) -> List[int]:
    """
    Days between consecutive period starts.

    Args:
        periods: Period records in any order

    Returns:
        One absolute day difference per adjacent pair, newest pair first
    """
    sorted_periods = sort_periods(periods)
    return [
        abs((sorted_periods[i].start_date - sorted_periods[i + 1].start_date).days)
        for i in range(len(sorted_periods) - 1)
    ]

def calculate_period_lengths(
    periods: List[PeriodRecord],
    settings: Optional[CycleSettings] = None
) -> List[int]:
    """
    Length in days of each period, inclusive of both ends.

    Periods without an end date count as the settings' average period length.
    """
    fallback = settings_period_length(settings)
    lengths = []
    for period in sort_periods(periods):
        if period.end_date is not None:
            lengths.append(abs((period.end_date - period.start_date).days) + 1)
        else:
            lengths.append(fallback)
    return lengths

def determine_confidence(cycle_count: int) -> ConfidenceLevel:
    """Confidence tier for the number of observed start-to-start intervals."""
    if cycle_count >= HIGH_CONFIDENCE_CYCLES:
        return ConfidenceLevel.HIGH
    if cycle_count >= MEDIUM_CONFIDENCE_CYCLES:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW

def calculate_cycle_statistics(
    periods: List[PeriodRecord],
    settings: Optional[CycleSettings] = None
) -> CycleStatistics:
    """
    Calculate average cycle and period lengths from period history.

    Args:
        periods: Effective period history (see ``get_effective_periods``)
        settings: Optional user settings supplying fallbacks

    Returns:
        CycleStatistics with:
        - cycle_length: Mean days between starts, or the settings value with
          fewer than two periods; never below 1 (falls back to 28)
        - period_length: Mean period length, or the settings value
        - cycle_count: Number of intervals used
        - period_count: Number of periods used
        - confidence: high (3+ intervals), medium (1+), low otherwise

    Example:
        >>> stats = calculate_cycle_statistics(periods, settings)
        >>> print(f"{stats.cycle_length} day cycle ({stats.confidence.value})")
    """
    cycle_lengths = calculate_cycle_lengths(periods)
    period_lengths = calculate_period_lengths(periods, settings)

    if cycle_lengths:
        cycle_length = round_half_up(mean(cycle_lengths))
    else:
        cycle_length = settings_cycle_length(settings)
    if cycle_length <= 0:
        logger.warning("Non-positive cycle length, using default", extra={
            "cycle_length": cycle_length,
            "default": DEFAULT_CYCLE_LENGTH
        })
        cycle_length = DEFAULT_CYCLE_LENGTH

    if period_lengths:
        period_length = round_half_up(mean(period_lengths))
    else:
        period_length = settings_period_length(settings)

    confidence = determine_confidence(len(cycle_lengths))
    logger.debug("Calculated cycle statistics", extra={
        "cycle_length": cycle_length,
        "period_length": period_length,
        "cycle_count": len(cycle_lengths),
        "period_count": len(period_lengths),
        "confidence": confidence.value
    })

    return CycleStatistics(
        cycle_length=cycle_length,
        period_length=period_length,
        cycle_count=len(cycle_lengths),
        period_count=len(period_lengths),
        confidence=confidence
    )
