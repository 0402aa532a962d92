"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date, timedelta
from typing import List, Optional

from src.models.period import CycleSettings, PeriodRecord

@pytest.fixture
def make_period():
    """Factory creating a PeriodRecord from a start date and optional end."""
    counter = {"n": 0}

    def _factory(start: date, end: Optional[date] = None, **kwargs) -> PeriodRecord:
        counter["n"] += 1
        return PeriodRecord(
            id=kwargs.pop("id", f"p{counter['n']}"),
            start_date=start,
            end_date=end,
            **kwargs
        )
    return _factory

@pytest.fixture
def default_settings() -> CycleSettings:
    """Settings with the app defaults (28-day cycle, 5-day period)."""
    return CycleSettings()

@pytest.fixture
def two_periods(make_period) -> List[PeriodRecord]:
    """Two logged periods 28 days apart, without end dates."""
    return [
        make_period(date(2024, 1, 1)),
        make_period(date(2024, 1, 29)),
    ]

@pytest.fixture
def regular_periods(make_period) -> List[PeriodRecord]:
    """Five logged periods on a regular 28-day cycle."""
    return [
        make_period(date(2024, 1, 1) + timedelta(days=i * 28))
        for i in range(5)
    ]

@pytest.fixture
def irregular_periods(make_period) -> List[PeriodRecord]:
    """Four logged periods with 24, 31 and 26 day cycles."""
    return [
        make_period(date(2024, 1, 1)),
        make_period(date(2024, 1, 25)),  # 24 days
        make_period(date(2024, 2, 25)),  # 31 days
        make_period(date(2024, 3, 22)),  # 26 days
    ]
