"""
Tests for effective period history and new period validation.
"""
import pytest
from datetime import date

from src.models.period import CycleSettings, FlowLevel
from src.services.exceptions import FuturePeriodError, OverlappingPeriodError
from src.services.history import (
    build_period_record,
    get_effective_periods,
    validate_new_period
)

def test_logged_periods_returned_unchanged(two_periods):
    """Logged periods take priority over the settings' last period date."""
    settings = CycleSettings(last_period_date=date(2023, 12, 1))
    effective = get_effective_periods(two_periods, settings)

    assert effective == two_periods
    assert effective is not two_periods

def test_no_periods_and_no_settings():
    """Without settings there is nothing to synthesize."""
    assert get_effective_periods([], None) == []

def test_settings_without_last_period_date(default_settings):
    """Settings lacking a last period date do not produce a period."""
    assert get_effective_periods([], default_settings) == []

def test_synthesizes_period_from_settings():
    """Onboarding data yields a single period using the average length."""
    settings = CycleSettings(last_period_date=date(2024, 1, 1))
    effective = get_effective_periods([], settings)

    assert len(effective) == 1
    period = effective[0]
    assert period.id == "settings"
    assert period.start_date == date(2024, 1, 1)
    assert period.end_date == date(2024, 1, 5)
    assert period.flow_level is None

@pytest.mark.parametrize("settings_kwargs, expected_end", [
    ({"period_duration": 7}, date(2024, 1, 7)),
    ({"average_period_length": 4}, date(2024, 1, 4)),
    ({"period_duration": 3, "average_period_length": 6}, date(2024, 1, 3)),
    ({"average_period_length": 0}, date(2024, 1, 5)),
    ({"period_duration": -2}, date(2024, 1, 5)),
    ({"average_period_length": -3}, date(2024, 1, 5)),
    ({"period_duration": 0, "average_period_length": 6}, date(2024, 1, 6)),
    ({"period_duration": -1, "average_period_length": 6}, date(2024, 1, 6)),
])
def test_synthesized_period_length(settings_kwargs, expected_end):
    """The synthesized end prefers the period duration, then the average length."""
    settings = CycleSettings(last_period_date=date(2024, 1, 1), **settings_kwargs)
    assert get_effective_periods([], settings)[0].end_date == expected_end

def test_synthesized_from_iso_datetime_string():
    """A date-time last period date is truncated to its calendar day."""
    settings = CycleSettings.model_validate({"lastPeriodDate": "2024-01-01T18:45:00.000Z"})
    assert get_effective_periods([], settings)[0].start_date == date(2024, 1, 1)

def test_build_period_record():
    """New entries span the average period length with medium flow."""
    record = build_period_record(date(2024, 3, 1), CycleSettings(average_period_length=6))

    assert record.start_date == date(2024, 3, 1)
    assert record.end_date == date(2024, 3, 6)
    assert record.flow_level == FlowLevel.MEDIUM
    assert record.id

def test_build_period_record_with_id():
    """An explicit identifier is kept."""
    record = build_period_record(date(2024, 3, 1), None, flow_level=None, period_id="abc")

    assert record.id == "abc"
    assert record.end_date == date(2024, 3, 5)
    assert record.flow_level is None

def test_validate_rejects_future_start(two_periods, default_settings):
    """Periods cannot be logged for future dates."""
    with pytest.raises(FuturePeriodError):
        validate_new_period(date(2024, 3, 2), two_periods, default_settings, date(2024, 3, 1))

def test_validate_rejects_overlap(make_period, default_settings):
    """A start inside a logged period (derived end) is rejected."""
    periods = [make_period(date(2024, 1, 1))]
    with pytest.raises(OverlappingPeriodError, match="already logged"):
        validate_new_period(date(2024, 1, 5), periods, default_settings, date(2024, 2, 1))

def test_validate_respects_explicit_end(make_period, default_settings):
    """Logged end dates bound the overlap check."""
    periods = [make_period(date(2024, 1, 1), date(2024, 1, 3))]
    validate_new_period(date(2024, 1, 4), periods, default_settings, date(2024, 2, 1))

def test_validate_accepts_day_after_derived_end(make_period, default_settings):
    """The day after an assumed five-day period is free."""
    periods = [make_period(date(2024, 1, 1))]
    validate_new_period(date(2024, 1, 6), periods, default_settings, date(2024, 1, 6))
