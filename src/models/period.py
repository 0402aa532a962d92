"""
Period record and cycle settings models.

Both models accept the camelCase keys used by the app's JSON payloads
(``startDate``, ``averageCycleLength``, ...) as well as snake_case names.
Dates may be given as ``date`` objects or ISO-8601 date/date-time strings and
are always stored as calendar days.
"""
from enum import Enum
from datetime import date, datetime
from typing import Any, Optional

from dateutil.parser import isoparse
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


def parse_calendar_date(value: Any) -> Any:
    """
    Normalize a date-like value to a calendar day.

    Date-times are truncated to their date, ISO-8601 strings are parsed.
    Anything else is handed back to pydantic for the usual validation.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and value:
        return isoparse(value).date()
    return value


class FlowLevel(str, Enum):
    """
    Logged flow intensity.
    """
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


class PeriodRecord(BaseModel):
    """
    A logged (or settings-derived) menstrual period.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    start_date: date
    end_date: Optional[date] = None
    flow_level: Optional[FlowLevel] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _normalize_dates(cls, value: Any) -> Any:
        return parse_calendar_date(value)


class CycleSettings(BaseModel):
    """
    User cycle settings snapshot.

    Lengths are not range-checked here; zero or negative values fall back to
    defaults wherever they are used.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    average_cycle_length: int = 28
    average_period_length: int = 5
    period_duration: Optional[int] = None
    last_period_date: Optional[date] = None
    reminder_enabled: bool = False
    reminder_days_before: Optional[int] = None

    @field_validator("last_period_date", mode="before")
    @classmethod
    def _normalize_last_period(cls, value: Any) -> Any:
        return parse_calendar_date(value)
