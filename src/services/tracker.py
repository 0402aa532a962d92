"""
Cycle engine facade bound to one snapshot of user data.

Screens build a ``CycleTracker`` from the periods and settings they loaded and
ask it for predictions, phases and day details. The tracker is the only place
that reads the real clock; everything below it takes ``today`` explicitly.

Typical usage:
    tracker = CycleTracker.from_payload(periods_json, settings_json)
    summary = tracker.get_cycle_summary()
    for window in tracker.future_periods():
        print(window.start_date, window.end_date)
"""
from typing import Any, Callable, Dict, Iterable, List, Optional
from datetime import date
from functools import cached_property

from src.models.period import CycleSettings, PeriodRecord
from src.models.phase import DayInfo, PeriodDayInfo, PhaseClassification
from src.models.prediction import CycleStatistics, CyclePrediction, CycleSummary, PeriodWindow
from src.services.constants import PROJECTION_MONTHS
from src.services.cycle import (
    calculate_predictions,
    days_until_next_period,
    get_cycle_day,
    get_future_periods
)
from src.services.exceptions import PeriodValidationError
from src.services.history import get_effective_periods, validate_new_period
from src.services.period_day import get_period_day_info
from src.services.phase import classify_phase, get_day_info
from src.services.statistics import calculate_cycle_statistics
from src.utils.logging import logger

Clock = Callable[[], date]


class CycleTracker:
    """
    Cycle calculations over an immutable (periods, settings) snapshot.

    Args:
        periods: Logged periods; copied, never modified
        settings: Optional user settings
        clock: Zero-argument callable returning the current day
    """

    def __init__(
        self,
        periods: Iterable[PeriodRecord],
        settings: Optional[CycleSettings] = None,
        clock: Optional[Clock] = None
    ):
        self.periods = tuple(periods)
        self.settings = settings
        self.clock = clock or date.today

    @classmethod
    def from_payload(
        cls,
        periods: List[Dict[str, Any]],
        settings: Optional[Dict[str, Any]] = None,
        clock: Optional[Clock] = None
    ) -> "CycleTracker":
        """
        Build a tracker from API JSON (camelCase keys, ISO-8601 dates).

        Raises:
            pydantic.ValidationError: If a record or the settings are malformed
        """
        return cls(
            [PeriodRecord.model_validate(p) for p in periods],
            CycleSettings.model_validate(settings) if settings is not None else None,
            clock
        )

    @property
    def today(self) -> date:
        return self.clock()

    @cached_property
    def effective_periods(self) -> List[PeriodRecord]:
        return get_effective_periods(list(self.periods), self.settings)

    def statistics(self) -> CycleStatistics:
        return calculate_cycle_statistics(self.effective_periods, self.settings)

    def prediction(self, today: Optional[date] = None) -> CyclePrediction:
        return calculate_predictions(self.effective_periods, self.settings, today or self.today)

    def phase_for(self, target_date: date) -> Optional[PhaseClassification]:
        today = self.today
        return classify_phase(
            target_date,
            self.effective_periods,
            self.prediction(today),
            self.settings,
            today
        )

    def day_info_for(self, target_date: date) -> DayInfo:
        today = self.today
        return get_day_info(
            target_date,
            self.effective_periods,
            self.prediction(today),
            self.settings,
            today
        )

    def period_day_for(self, target_date: date) -> Optional[PeriodDayInfo]:
        """Day-of-period info using the estimated period length."""
        return get_period_day_info(
            target_date,
            self.effective_periods,
            self.statistics().period_length
        )

    def future_periods(self, months: int = PROJECTION_MONTHS) -> List[PeriodWindow]:
        return get_future_periods(self.effective_periods, self.settings, self.today, months=months)

    def get_cycle_summary(self) -> CycleSummary:
        """
        Where today sits in the cycle.

        Returns:
            CycleSummary with cycle day, phase and day within the phase,
            current period day, and days until the next period (None while
            on a period)
        """
        today = self.today
        periods = self.effective_periods
        prediction = self.prediction(today)
        phase = classify_phase(today, periods, prediction, self.settings, today)
        period_day = get_period_day_info(today, periods, prediction.period_length)

        phase_day = None
        if phase is not None and phase.phase_start is not None:
            phase_day = max(1, (today - phase.phase_start).days + 1)

        is_on_period = period_day is not None
        return CycleSummary(
            date=today,
            cycle_day=get_cycle_day(periods, today),
            phase=phase.phase if phase is not None else None,
            phase_day=phase_day,
            is_predicted=phase.is_predicted if phase is not None else False,
            is_on_period=is_on_period,
            period_day=period_day,
            days_until_next_period=None if is_on_period else days_until_next_period(prediction, today),
            has_period_data=bool(self.periods),
            confidence=prediction.confidence
        )

    def validate_new_period(self, start: date) -> None:
        """
        Check a new period entry against logged periods.

        Raises:
            FuturePeriodError: If ``start`` is after today
            OverlappingPeriodError: If ``start`` falls inside a logged period
        """
        try:
            validate_new_period(start, list(self.periods), self.settings, self.today)
        except PeriodValidationError as e:
            logger.exception("Rejected period entry", exc_info=e, extra={
                "start_date": str(start)
            })
            raise
