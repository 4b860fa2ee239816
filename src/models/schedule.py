"""
Vaccine regimen and appointment models.

A vaccine's regimen is an initial dose series (DoseSchedule) followed by
recurring boosters (BoosterSchedule). Both compute integer month offsets
relative to the caller's reference date; VaccineAppointment turns an offset
into a calendar (year, month).

Ordering is expressed through explicit key functions (dose_kind_sort_key,
booster_sort_key, vaccine_sort_key, appointment_sort_key) used with sorted().
"""

from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Annotated, Iterable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from src.errors import InvalidRecord, UnanchoredBooster
from src.models.dates import as_date, month_offset_to_year_month, months_between

# Months between boosters for the near-lifetime cadence.
LIFETIME_BOOSTER_MONTHS = 300


# =============================================================================
# DOSE KIND
# =============================================================================


class DoseKind(BaseModel):
    """Either one dose of the initial series (0-based index) or a booster."""
    model_config = ConfigDict(frozen=True)

    type: Literal["dose", "booster"] = "booster"
    index: int | None = Field(default=None, ge=0, description="0-based dose index")

    @model_validator(mode="after")
    def _check_index(self) -> DoseKind:
        if self.type == "dose" and self.index is None:
            raise ValueError("a dose requires an index")
        if self.type == "booster" and self.index is not None:
            raise ValueError("a booster has no index")
        return self

    @classmethod
    def dose(cls, index: int) -> DoseKind:
        return cls(type="dose", index=index)

    @classmethod
    def booster(cls) -> DoseKind:
        return cls(type="booster")

    @classmethod
    def parse(cls, text: str) -> DoseKind:
        """Parse the display form: 'Booster' or 'Dose#N' (1-based)."""
        cleaned = text.strip()
        if cleaned.lower() == "booster":
            return cls.booster()
        prefix, _, number = cleaned.partition("#")
        if prefix.lower() == "dose" and number.isdigit() and int(number) >= 1:
            return cls.dose(int(number) - 1)
        raise ValueError(f"Unrecognized dose kind: {text!r}")

    @property
    def is_booster(self) -> bool:
        return self.type == "booster"

    def __str__(self) -> str:
        if self.is_booster:
            return "Booster"
        return f"Dose#{self.index + 1}"


def dose_kind_sort_key(kind: DoseKind) -> tuple[int, int]:
    """Doses order by index and all sort before boosters; boosters tie."""
    if kind.is_booster:
        return (1, 0)
    return (0, kind.index)


def all_dose_kinds() -> list[tuple[str, DoseKind]]:
    """Kinds offered when entering a record by hand."""
    kinds = [DoseKind.booster()] + [DoseKind.dose(i) for i in range(4)]
    return [(str(kind), kind) for kind in kinds]


# =============================================================================
# RECORDS & APPOINTMENTS
# =============================================================================


class VaccineRecord(BaseModel):
    """A dose or booster that has already been administered."""
    vaccine: str
    date: date
    kind: DoseKind = Field(default_factory=DoseKind.booster)
    notes: str = ""


class VaccineAppointment(BaseModel):
    """A planned dose or booster, dated to the month."""
    model_config = ConfigDict(frozen=True)

    vaccine: str
    kind: DoseKind
    year: int
    month: int = Field(ge=1, le=12)

    @classmethod
    def from_month_offset(
        cls,
        vaccine: str,
        kind: DoseKind,
        now: date | datetime,
        mo: int,
    ) -> VaccineAppointment:
        year, month = month_offset_to_year_month(now, mo)
        return cls(vaccine=vaccine, kind=kind, year=year, month=month)

    @computed_field
    @property
    def month_name(self) -> str:
        return calendar.month_name[self.month]


def appointment_sort_key(appointment: VaccineAppointment) -> tuple[int, int]:
    return (appointment.year, appointment.month)


# =============================================================================
# HISTORY HELPERS
# =============================================================================


def months_since(record: VaccineRecord, now: date | datetime) -> int:
    """Whole months from a record to `now`; future-dated records are rejected."""
    today = as_date(now)
    if record.date > today:
        raise InvalidRecord(record, f"dated {record.date.isoformat()}, after {today.isoformat()}")
    try:
        return months_between(record.date, today)
    except (OverflowError, ValueError) as e:
        raise InvalidRecord(record, f"month difference out of range ({e})") from e


def _history(records: Iterable[VaccineRecord], now: date | datetime) -> list[VaccineRecord]:
    """Records in ascending date order, each checked against `now`."""
    history = sorted(records, key=lambda r: r.date)
    for record in history:
        months_since(record, now)
    return history


# =============================================================================
# DOSE SCHEDULES
# =============================================================================


class _DoseScheduleBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    def minimum_interval(self) -> int:
        raise NotImplementedError

    def baseline_offsets(self) -> list[tuple[DoseKind, int]]:
        raise NotImplementedError

    def remaining_offsets(
        self,
        now: date | datetime,
        records: Iterable[VaccineRecord],
    ) -> list[tuple[DoseKind, int]]:
        """
        Month offsets for the doses still needed.

        Administered doses are removed. The first remaining dose lands as soon
        as the minimum interval since the most recent dose allows; the spacing
        between the remaining doses is preserved.
        """
        dose_records = _history((r for r in records if not r.kind.is_booster), now)
        if not dose_records:
            return self.baseline_offsets()

        given = {record.kind for record in dose_records}
        required = [(kind, mo) for kind, mo in self.baseline_offsets() if kind not in given]
        if not required:
            return []

        next_dose_mo = required[0][1]
        elapsed = months_since(dose_records[-1], now)
        min_interval = self.minimum_interval
        anchor = 0 if elapsed >= min_interval else min_interval - elapsed

        shift = anchor - next_dose_mo
        return [(kind, mo + shift) for kind, mo in required]


class SingleDose(_DoseScheduleBase):
    """One dose."""
    type: Literal["single"] = "single"

    @property
    def number(self) -> int:
        return 1

    @property
    def minimum_interval(self) -> int:
        return 0

    def baseline_offsets(self) -> list[tuple[DoseKind, int]]:
        return [(DoseKind.dose(0), 0)]

    def __str__(self) -> str:
        return "1x"


class RepeatedDoses(_DoseScheduleBase):
    """`number` doses spaced a fixed `interval` months apart."""
    type: Literal["repeated"] = "repeated"
    number: int = Field(ge=1)
    interval: int = Field(ge=0, description="Months between doses")

    @property
    def minimum_interval(self) -> int:
        return self.interval

    def baseline_offsets(self) -> list[tuple[DoseKind, int]]:
        return [(DoseKind.dose(i), i * self.interval) for i in range(self.number)]

    def __str__(self) -> str:
        return f"{self.number}x every {self.interval}mo"


class RepeatedRangeDoses(_DoseScheduleBase):
    """
    `number` doses spaced between `minimum` and `maximum` months apart.

    Scheduling always uses the minimum; the maximum is informational.
    """
    type: Literal["repeated_range"] = "repeated_range"
    number: int = Field(ge=1)
    minimum: int = Field(ge=0, description="Minimum months between doses")
    maximum: int = Field(ge=0, description="Maximum months between doses")

    @model_validator(mode="after")
    def _check_range(self) -> RepeatedRangeDoses:
        if self.maximum < self.minimum:
            raise ValueError("maximum interval must not be shorter than the minimum")
        return self

    @property
    def minimum_interval(self) -> int:
        return self.minimum

    def baseline_offsets(self) -> list[tuple[DoseKind, int]]:
        return [(DoseKind.dose(i), i * self.minimum) for i in range(self.number)]

    def __str__(self) -> str:
        return f"{self.number}x every {self.minimum}-{self.maximum}mo"


DoseSchedule = Annotated[
    Union[SingleDose, RepeatedDoses, RepeatedRangeDoses],
    Field(discriminator="type"),
]


# =============================================================================
# BOOSTER SCHEDULES
# =============================================================================


class _BoosterScheduleBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    def duration(self) -> int:
        """Months between boosters."""
        raise NotImplementedError

    def adjust_anchor(self, now: date | datetime, anchor: int) -> int:
        return anchor

    def future_offsets(
        self,
        now: date | datetime,
        limit_mo: int,
        planned_last_dose_offset: int | None,
        records: Iterable[VaccineRecord],
        vaccine: str | None = None,
    ) -> list[tuple[DoseKind, int]]:
        """
        Month offsets of every booster before `limit_mo`.

        Boosting starts one duration after the last planned dose of the
        initial series, or, when the series is complete, one duration after
        the most recent record (immediately if that is already overdue).
        """
        history = _history(records, now)
        if planned_last_dose_offset is not None:
            anchor = planned_last_dose_offset + self.duration
        elif history:
            elapsed = months_since(history[-1], now)
            anchor = 0 if elapsed >= self.duration else self.duration - elapsed
        else:
            raise UnanchoredBooster(vaccine)

        anchor = self.adjust_anchor(now, anchor)
        return [(DoseKind.booster(), mo) for mo in range(anchor, limit_mo, self.duration)]


class SeasonalBooster(_BoosterScheduleBase):
    """Annual booster given inside a calendar window (inclusive months)."""
    type: Literal["seasonal"] = "seasonal"
    start_month: int = Field(default=9, ge=1, le=12)
    end_month: int = Field(default=10, ge=1, le=12)

    @property
    def duration(self) -> int:
        return 12

    def in_window(self, month: int) -> bool:
        if self.start_month <= self.end_month:
            return self.start_month <= month <= self.end_month
        # Window wraps the year end, e.g. Nov-Feb.
        return month >= self.start_month or month <= self.end_month

    def adjust_anchor(self, now: date | datetime, anchor: int) -> int:
        """Push the anchor forward to the next window start if it lands off-season."""
        _, month = month_offset_to_year_month(now, anchor)
        if self.in_window(month):
            return anchor
        return anchor + (self.start_month - month) % 12

    def __str__(self) -> str:
        start = calendar.month_abbr[self.start_month]
        end = calendar.month_abbr[self.end_month]
        return f"every year ({start}-{end})"


class YearsBooster(_BoosterScheduleBase):
    """Booster every `years` years."""
    type: Literal["years"] = "years"
    years: int = Field(ge=1)

    @property
    def duration(self) -> int:
        return 12 * self.years

    def __str__(self) -> str:
        return f"every {self.years} years"


class LifetimeBooster(_BoosterScheduleBase):
    """Durable immunity; boost only after decades or on exposure."""
    type: Literal["lifetime"] = "lifetime"

    @property
    def duration(self) -> int:
        return LIFETIME_BOOSTER_MONTHS

    def __str__(self) -> str:
        return "every 25-30 years or when exposed"


BoosterSchedule = Annotated[
    Union[SeasonalBooster, YearsBooster, LifetimeBooster],
    Field(discriminator="type"),
]


def booster_sort_key(schedule: _BoosterScheduleBase) -> int:
    """Shorter booster cadences sort first."""
    return schedule.duration


# =============================================================================
# VACCINE
# =============================================================================


class Vaccine(BaseModel):
    """A catalog entry: what a vaccine treats and how it is dosed."""
    model_config = ConfigDict(frozen=True)

    name: str
    treats: tuple[str, ...]
    initial_schedule: DoseSchedule
    booster_schedule: BoosterSchedule
    notes: str = ""
    recommended: bool = True

    @property
    def treats_str(self) -> str:
        return ", ".join(self.treats)

    def all_doses(
        self,
        now: date | datetime,
        records: Iterable[VaccineRecord],
        limit_mo: int,
    ) -> list[tuple[DoseKind, int]]:
        """
        Every dose and booster still needed, as month offsets from `now`.

        `records` must all belong to this vaccine; they may mix doses and
        boosters.
        """
        records = list(records)
        doses = self.initial_schedule.remaining_offsets(now, records)
        planned_last = doses[-1][1] if doses else None
        boosters = self.booster_schedule.future_offsets(
            now, limit_mo, planned_last, records, vaccine=self.name
        )
        return doses + boosters


def vaccine_sort_key(vaccine: Vaccine) -> tuple[int, str]:
    """Catalog display order: booster cadence, then name."""
    return (booster_sort_key(vaccine.booster_schedule), vaccine.name)
