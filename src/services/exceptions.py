"""
Service-level exceptions.

The prediction engine itself reports "not found" through ``None`` results;
these exceptions are raised only when validating a new period entry.
"""

class CycleEngineError(Exception):
    """Base exception for cycle engine errors."""
    pass

class PeriodValidationError(CycleEngineError):
    """Raised when a new period entry cannot be accepted."""
    pass

class FuturePeriodError(PeriodValidationError):
    """Raised when a period is logged with a start date after today."""
    pass

class OverlappingPeriodError(PeriodValidationError):
    """Raised when a new period starts inside an already logged period."""
    pass
