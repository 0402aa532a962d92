"""
Constants and shared data for cycle-related services.

Engine defaults can be overridden through environment variables; the
physiological windows are fixed.
"""
import os
from typing import Dict

from src.models.phase import DayPhaseType, PhaseMetadata, PhaseType

DEFAULT_CYCLE_LENGTH = int(os.environ.get("DEFAULT_CYCLE_LENGTH", "28"))
DEFAULT_PERIOD_LENGTH = int(os.environ.get("DEFAULT_PERIOD_LENGTH", "5"))
PROJECTION_MONTHS = int(os.environ.get("PROJECTION_MONTHS", "6"))
MAX_PROJECTED_CYCLES = int(os.environ.get("MAX_PROJECTED_CYCLES", "100"))

# Ovulation is assumed to fall this many days before the next period
LUTEAL_PHASE_DAYS = 14
# Fertile window: this many days before ovulation, through ovulation day
FERTILE_WINDOW_DAYS = 5
# PMS window: this many days immediately before the next period
PMS_WINDOW_DAYS = 5

HIGH_CONFIDENCE_CYCLES = 3
MEDIUM_CONFIDENCE_CYCLES = 1

SETTINGS_PERIOD_ID = "settings"

PHASE_METADATA: Dict[PhaseType, PhaseMetadata] = {
    PhaseType.MENSTRUAL: PhaseMetadata(
        label="Menstrual Phase",
        short_label="Menstrual",
        emoji="\U0001fa78",
        summary="Period days - listen to your body and take things gently.",
        description=(
            "Your cycle resets as the uterine lining sheds. Estrogen and "
            "progesterone are at their lowest, so rest, hydration, and warmth "
            "help ease cramps and fatigue."
        ),
    ),
    PhaseType.FOLLICULAR: PhaseMetadata(
        label="Follicular Phase",
        short_label="Follicular",
        emoji="\U0001f33c",
        summary="Fresh start - follicles grow and the lining rebuilds.",
        description=(
            "FSH gently coaxes follicles to grow while estrogen rebuilds the "
            "uterine lining. Energy and creativity typically climb, so it is a "
            "great time to plan and learn."
        ),
    ),
    PhaseType.OVULATION: PhaseMetadata(
        label="Ovulation Phase",
        short_label="Ovulation",
        emoji="\U0001f4a7",
        summary="Egg release - peak fertility for roughly 24 hours.",
        description=(
            "LH surges and a mature egg is released. Cervical fluid is clear "
            "and stretchy, libido may peak, and this is the most fertile "
            "moment of the cycle."
        ),
    ),
    PhaseType.LUTEAL: PhaseMetadata(
        label="Luteal Phase",
        short_label="Luteal",
        emoji="\U0001f319",
        summary="Wind-down - progesterone peaks, then gently falls toward the next period.",
        description=(
            "Progesterone from the corpus luteum thickens the uterine lining in "
            "case of pregnancy. If conception does not occur, hormone levels "
            "drop and PMS can appear."
        ),
    ),
}

DAY_PHASE_NOTES: Dict[DayPhaseType, str] = {
    DayPhaseType.PERIOD: "Rest and be gentle with yourself. Your body is working hard \U0001f495",
    DayPhaseType.FERTILE: "You're in your fertile window! Energy may be higher \U0001f31f",
    DayPhaseType.PMS: "Premenstrual phase - mood changes are normal and valid \U0001faf6",
    DayPhaseType.PREDICTED_PERIOD: "Predicted period day - listen to what your body needs",
    DayPhaseType.NORMAL: "You're doing great! Keep tracking to know your cycle better ✨",
}
