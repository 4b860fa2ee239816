"""
Core data models for Vaccine Helper.
"""

from .dates import (
    MAX_YEAR,
    MIN_YEAR,
    as_date,
    month_name,
    month_offset_to_year_month,
    months_between,
)
from .schedule import (
    LIFETIME_BOOSTER_MONTHS,
    BoosterSchedule,
    DoseKind,
    DoseSchedule,
    LifetimeBooster,
    RepeatedDoses,
    RepeatedRangeDoses,
    SeasonalBooster,
    SingleDose,
    Vaccine,
    VaccineAppointment,
    VaccineRecord,
    YearsBooster,
    all_dose_kinds,
    appointment_sort_key,
    booster_sort_key,
    dose_kind_sort_key,
    months_since,
    vaccine_sort_key,
)

__all__ = [
    "MAX_YEAR",
    "MIN_YEAR",
    "as_date",
    "month_name",
    "month_offset_to_year_month",
    "months_between",
    "LIFETIME_BOOSTER_MONTHS",
    "BoosterSchedule",
    "DoseKind",
    "DoseSchedule",
    "LifetimeBooster",
    "RepeatedDoses",
    "RepeatedRangeDoses",
    "SeasonalBooster",
    "SingleDose",
    "Vaccine",
    "VaccineAppointment",
    "VaccineRecord",
    "YearsBooster",
    "all_dose_kinds",
    "appointment_sort_key",
    "booster_sort_key",
    "dose_kind_sort_key",
    "months_since",
    "vaccine_sort_key",
]
