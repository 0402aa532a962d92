"""
Derived cycle statistics and prediction models.
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.models.phase import ConfidenceLevel, PeriodDayInfo, PhaseType


class CycleStatistics(BaseModel):
    """
    Averages estimated from period history.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    cycle_length: int
    period_length: int
    cycle_count: int  # Number of start-to-start intervals observed
    period_count: int
    confidence: ConfidenceLevel


class CyclePrediction(BaseModel):
    """
    Next-cycle prediction. Window ends are inclusive.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    next_period_date: Optional[date] = None
    ovulation_date: Optional[date] = None
    fertile_window_start: Optional[date] = None
    fertile_window_end: Optional[date] = None
    pms_start: Optional[date] = None
    pms_end: Optional[date] = None
    cycle_length: int
    period_length: int
    confidence: ConfidenceLevel


class PeriodWindow(BaseModel):
    """
    A projected period, both ends inclusive.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class CycleSummary(BaseModel):
    """
    Snapshot of where "today" sits in the cycle.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    date: date
    cycle_day: Optional[int] = None
    phase: Optional[PhaseType] = None
    phase_day: Optional[int] = None
    is_predicted: bool = False
    is_on_period: bool = False
    period_day: Optional[PeriodDayInfo] = None
    days_until_next_period: Optional[int] = None
    has_period_data: bool = False
    confidence: ConfidenceLevel = ConfidenceLevel.LOW
