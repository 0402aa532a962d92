"""
Service module for period history handling.

This module turns what the user has entered into the "effective" history the
prediction engine works from, and checks new period entries before they are
stored by the caller.

Typical usage:
    periods = get_effective_periods(logged_periods, settings)
    validate_new_period(start, periods, settings, today)
    record = build_period_record(start, settings)
"""
from typing import List, Optional
from datetime import date, timedelta
from uuid import uuid4

from aws_lambda_powertools import Logger

from src.models.period import CycleSettings, FlowLevel, PeriodRecord
from src.services.constants import SETTINGS_PERIOD_ID
from src.services.exceptions import FuturePeriodError, OverlappingPeriodError
from src.services.utils import resolve_period_end, settings_period_length

logger = Logger()

def get_effective_periods(
    periods: List[PeriodRecord],
    settings: Optional[CycleSettings] = None
) -> List[PeriodRecord]:
    """
    Get the period history used for predictions.

    When nothing has been logged yet but onboarding captured a last period
    date, a single period is synthesized from the settings so downstream
    calculations have an anchor.

    Args:
        periods: Logged periods (possibly empty), never modified
        settings: Optional user cycle settings

    Returns:
        New list: the logged periods, or a single synthesized period

    Example:
        >>> settings = CycleSettings(last_period_date=date(2024, 1, 1))
        >>> get_effective_periods([], settings)[0].end_date
        datetime.date(2024, 1, 5)
    """
    if periods or settings is None or settings.last_period_date is None:
        return list(periods)

    if settings.period_duration is not None and settings.period_duration > 0:
        length = settings.period_duration
    else:
        length = settings_period_length(settings)
    start = settings.last_period_date
    synthesized = PeriodRecord(
        id=SETTINGS_PERIOD_ID,
        start_date=start,
        end_date=start + timedelta(days=length - 1),
    )
    logger.debug("Synthesized period from settings", extra={
        "start_date": str(synthesized.start_date),
        "end_date": str(synthesized.end_date)
    })
    return [synthesized]

def build_period_record(
    start: date,
    settings: Optional[CycleSettings] = None,
    flow_level: Optional[FlowLevel] = FlowLevel.MEDIUM,
    period_id: Optional[str] = None
) -> PeriodRecord:
    """
    Create a new period entry spanning the user's average period length.

    Args:
        start: First day of the period
        settings: Optional settings providing the average period length
        flow_level: Flow to record, medium unless given
        period_id: Identifier to use; a random one is generated otherwise

    Returns:
        New PeriodRecord with an explicit end date
    """
    length = settings_period_length(settings)
    return PeriodRecord(
        id=period_id or str(uuid4()),
        start_date=start,
        end_date=start + timedelta(days=length - 1),
        flow_level=flow_level,
    )

def validate_new_period(
    start: date,
    periods: List[PeriodRecord],
    settings: Optional[CycleSettings],
    today: date
) -> None:
    """
    Check that a period starting on ``start`` may be logged.

    Args:
        start: Proposed first day
        periods: Already logged periods
        settings: Optional settings; periods without an end are assumed to
            last the average period length
        today: Current calendar day

    Raises:
        FuturePeriodError: If ``start`` is after ``today``
        OverlappingPeriodError: If ``start`` falls inside a logged period
    """
    if start > today:
        raise FuturePeriodError(f"Cannot log a period starting in the future ({start})")

    length = settings_period_length(settings)
    for period in periods:
        end = resolve_period_end(period, length)
        if period.start_date <= start <= end:
            raise OverlappingPeriodError(
                f"A period is already logged from {period.start_date} to {end}"
            )
