"""
Phase model definitions for cycle classification results.
"""
from enum import Enum
from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PhaseType(str, Enum):
    """
    The four named menstrual cycle phases.
    """
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATION = "ovulation"
    LUTEAL = "luteal"


class DayPhaseType(str, Enum):
    """
    Coarse calendar buckets used by day-level views.
    """
    PERIOD = "period"
    PREDICTED_PERIOD = "predicted_period"
    FERTILE = "fertile"
    PMS = "pms"
    NORMAL = "normal"


class ConfidenceLevel(str, Enum):
    """
    Reliability tier of a prediction, based on observed cycles.
    """
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class PhaseSource(str, Enum):
    """
    Which rule produced a classification.
    """
    LOGGED = "logged"        # Inside a logged period
    PROJECTED = "projected"  # Inside a projected future period
    ESTIMATED = "estimated"  # Derived from ovulation/next-period estimates


class PhaseClassification(BaseModel):
    """
    Phase of a single calendar date.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    phase: PhaseType
    is_predicted: bool
    phase_start: Optional[date] = None
    phase_end: Optional[date] = None
    source: PhaseSource

    @property
    def is_menstrual(self) -> bool:
        """Check if the date falls on a (logged or projected) period day."""
        return self.phase == PhaseType.MENSTRUAL


class PeriodDayInfo(BaseModel):
    """
    Position of a date within the period that contains it.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    day_number: int
    day_label: str
    period_length: int
    is_start: bool
    is_middle: bool
    is_end: bool


class DayInfo(BaseModel):
    """
    Coarse day bucket with display flags.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    date: date
    phase: DayPhaseType
    confidence: ConfidenceLevel
    is_period: bool = False
    is_fertile: bool = False
    is_pms: bool = False
    is_predicted: bool = False


class PhaseMetadata(BaseModel):
    """
    Display copy for one of the four phases.
    """
    label: str
    short_label: str
    emoji: str
    summary: str
    description: str
