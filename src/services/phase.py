"""
Service module for classifying calendar dates into cycle phases.

Classification precedence for a date:
    1. inside any logged period            -> menstrual (logged)
    2. a past date with no logged period   -> unknown
    3. inside a projected future period    -> menstrual (projected)
    4. beyond next calendar month          -> unknown
    5. fertile window / ovulation day      -> ovulation
       after ovulation, before next period -> luteal
       after last period, before ovulation -> follicular

Typical usage:
    >>> prediction = calculate_predictions(periods, settings, today)
    >>> phase = classify_phase(target, periods, prediction, settings, today)
    >>> day = get_day_info(target, periods, prediction, settings, today)
    >>> print(get_phase_note(day.phase))
"""
from typing import List, Optional
from datetime import date, timedelta

from src.models.period import CycleSettings, PeriodRecord
from src.models.phase import (
    ConfidenceLevel,
    DayInfo,
    DayPhaseType,
    PhaseClassification,
    PhaseMetadata,
    PhaseSource,
    PhaseType
)
from src.models.prediction import CyclePrediction
from src.services.constants import (
    DAY_PHASE_NOTES,
    FERTILE_WINDOW_DAYS,
    LUTEAL_PHASE_DAYS,
    PHASE_METADATA,
    PMS_WINDOW_DAYS,
    PROJECTION_MONTHS
)
from src.services.cycle import get_future_periods, next_period_after
from src.services.utils import (
    get_latest_period,
    months_between,
    resolve_period_end,
    settings_cycle_length
)

ONE_DAY = timedelta(days=1)

def _find_logged_period(
    target_date: date,
    periods: List[PeriodRecord],
    period_length: int
) -> Optional[PhaseClassification]:
    for period in periods:
        end = resolve_period_end(period, period_length)
        if period.start_date <= target_date <= end:
            return PhaseClassification(
                phase=PhaseType.MENSTRUAL,
                is_predicted=False,
                phase_start=period.start_date,
                phase_end=end,
                source=PhaseSource.LOGGED
            )
    return None

def _previous_period_end(
    cycle_start: date,
    periods: List[PeriodRecord],
    period_length: int
) -> date:
    """End of the period that opened the cycle starting on ``cycle_start``."""
    for period in periods:
        if period.start_date == cycle_start:
            return resolve_period_end(period, period_length)
    return cycle_start + timedelta(days=period_length - 1)

def _estimate_phase(
    target_date: date,
    periods: List[PeriodRecord],
    prediction: CyclePrediction,
    settings: Optional[CycleSettings],
    today: date
) -> Optional[PhaseClassification]:
    """
    Full four-phase estimate for a date in the current or next month.

    Uses the predicted next period and ovulation when available; otherwise
    both are estimated from the latest period start and the average cycle
    length, stepped by whole cycles until the estimate is after today. Only
    the cycle ending at that reference period is classified.
    """
    period_length = max(1, prediction.period_length)
    cycle_length = prediction.cycle_length
    if cycle_length <= 0:
        cycle_length = settings_cycle_length(settings)
    if cycle_length <= 0:
        return None

    if prediction.next_period_date is not None:
        reference = prediction.next_period_date
        ovulation = prediction.ovulation_date
    else:
        latest = get_latest_period(periods)
        if latest is None:
            return None
        reference = next_period_after(latest.start_date, cycle_length, today)
        ovulation = None

    if target_date >= reference:
        return None

    if ovulation is None:
        ovulation = reference - timedelta(days=LUTEAL_PHASE_DAYS)

    fertile_start = ovulation - timedelta(days=FERTILE_WINDOW_DAYS)
    previous_end = _previous_period_end(
        reference - timedelta(days=cycle_length), periods, period_length
    )

    if fertile_start <= target_date <= ovulation:
        phase, start, end = PhaseType.OVULATION, fertile_start, ovulation
    elif target_date == ovulation:
        phase, start, end = PhaseType.OVULATION, ovulation, ovulation
    elif ovulation + ONE_DAY <= target_date <= reference - ONE_DAY:
        phase, start, end = PhaseType.LUTEAL, ovulation + ONE_DAY, reference - ONE_DAY
    elif previous_end + ONE_DAY <= target_date <= ovulation - ONE_DAY:
        phase, start, end = PhaseType.FOLLICULAR, previous_end + ONE_DAY, fertile_start - ONE_DAY
    else:
        return None

    return PhaseClassification(
        phase=phase,
        is_predicted=True,
        phase_start=start,
        phase_end=end,
        source=PhaseSource.ESTIMATED
    )

def classify_phase(
    target_date: date,
    periods: List[PeriodRecord],
    prediction: CyclePrediction,
    settings: Optional[CycleSettings],
    today: date
) -> Optional[PhaseClassification]:
    """
    Determine the cycle phase of a calendar date.

    Args:
        target_date: Day to classify
        periods: Effective period history, never modified
        prediction: Result of ``calculate_predictions`` for the same history
        settings: Optional user settings
        today: Current calendar day

    Returns:
        PhaseClassification, or None when no phase can be given: past days
        outside logged periods, and days beyond next month outside
        projected periods

    Example:
        >>> phase = classify_phase(date(2024, 2, 10), periods, prediction, settings, today)
        >>> print(f"{phase.phase.value} (predicted: {phase.is_predicted})")
    """
    period_length = max(1, prediction.period_length)

    logged = _find_logged_period(target_date, periods, period_length)
    if logged is not None:
        return logged.model_copy(update={"is_predicted": target_date >= today})

    if target_date < today:
        return None

    projected = get_future_periods(
        periods,
        settings,
        today,
        months=PROJECTION_MONTHS,
        cycle_length=prediction.cycle_length,
        period_length=period_length
    )
    for window in projected:
        if window.contains(target_date):
            return PhaseClassification(
                phase=PhaseType.MENSTRUAL,
                is_predicted=True,
                phase_start=window.start_date,
                phase_end=window.end_date,
                source=PhaseSource.PROJECTED
            )

    if months_between(today, target_date) > 1:
        return None

    return _estimate_phase(target_date, periods, prediction, settings, today)

def get_day_info(
    target_date: date,
    periods: List[PeriodRecord],
    prediction: CyclePrediction,
    settings: Optional[CycleSettings],
    today: date
) -> DayInfo:
    """
    Coarse day bucket for a date: period, predicted_period, fertile, pms or normal.

    Args:
        target_date: Day to describe
        periods: Effective period history
        prediction: Result of ``calculate_predictions``
        settings: Optional user settings
        today: Current calendar day

    Returns:
        DayInfo. Predicted buckets carry the prediction's confidence; logged
        period days and normal days are reported with high confidence.
    """
    classification = classify_phase(target_date, periods, prediction, settings, today)

    if classification is None:
        return DayInfo(date=target_date, phase=DayPhaseType.NORMAL, confidence=ConfidenceLevel.HIGH)

    if classification.is_menstrual:
        if classification.source == PhaseSource.LOGGED:
            return DayInfo(
                date=target_date,
                phase=DayPhaseType.PERIOD,
                confidence=ConfidenceLevel.HIGH,
                is_period=True
            )
        return DayInfo(
            date=target_date,
            phase=DayPhaseType.PREDICTED_PERIOD,
            confidence=prediction.confidence,
            is_predicted=True
        )

    if classification.phase == PhaseType.OVULATION:
        return DayInfo(
            date=target_date,
            phase=DayPhaseType.FERTILE,
            confidence=prediction.confidence,
            is_fertile=True,
            is_predicted=True
        )

    if (
        classification.phase == PhaseType.LUTEAL
        and classification.phase_end is not None
        and target_date > classification.phase_end - timedelta(days=PMS_WINDOW_DAYS)
    ):
        return DayInfo(
            date=target_date,
            phase=DayPhaseType.PMS,
            confidence=prediction.confidence,
            is_pms=True,
            is_predicted=True
        )

    return DayInfo(date=target_date, phase=DayPhaseType.NORMAL, confidence=ConfidenceLevel.HIGH)

def get_phase_metadata(phase: PhaseType) -> PhaseMetadata:
    """Display copy (label, emoji, summary, description) for a phase."""
    return PHASE_METADATA[phase]

def get_phase_note(phase: DayPhaseType) -> str:
    """Short supportive note for a day bucket."""
    return DAY_PHASE_NOTES.get(phase, DAY_PHASE_NOTES[DayPhaseType.NORMAL])
