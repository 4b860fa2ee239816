"""
Profile models.

A profile is one person's scheduling state: which catalog vaccines are
enabled and in what priority order, how far ahead to plan, the records of
doses already received, and the last computed schedule. A ProfileBook holds
several named profiles with one of them active.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from src.config import get_config
from src.engines import ScheduleEngine, VaccineCatalog, get_catalog
from src.errors import ProfileError
from src.models import VaccineAppointment, VaccineRecord

DEFAULT_PROFILE = "Default"


class VaccineConfig(BaseModel):
    """Selection state of one catalog vaccine within a profile."""
    name: str
    enabled: bool = False


class Profile(BaseModel):
    """Scheduling configuration and history for one person."""
    vaccines: list[VaccineConfig] = Field(
        default_factory=list,
        description="Catalog vaccines in priority order",
    )
    end_plan_year: int = Field(description="Last year to plan boosters for")
    records: list[VaccineRecord] = Field(
        default_factory=list,
        description="Administered doses, kept in date order",
    )
    schedule: list[VaccineAppointment] = Field(
        default_factory=list,
        description="Most recently computed schedule",
    )

    @classmethod
    def default(
        cls,
        catalog: VaccineCatalog | None = None,
        today: date | None = None,
        plan_years: int | None = None,
    ) -> Profile:
        """A profile with every catalog vaccine listed and the recommended ones enabled."""
        catalog = catalog or get_catalog()
        today = today or date.today()
        if plan_years is None:
            plan_years = get_config().plan_years
        return cls(
            vaccines=[
                VaccineConfig(name=v.name, enabled=v.recommended)
                for v in catalog.ordered()
            ],
            end_plan_year=today.year + plan_years,
        )

    def enabled_vaccines(self) -> list[str]:
        return [v.name for v in self.vaccines if v.enabled]

    def _vaccine_config(self, name: str) -> VaccineConfig:
        for config in self.vaccines:
            if config.name == name:
                return config
        raise ProfileError(f"Vaccine {name!r} is not part of this profile")

    def set_enabled(self, name: str, enabled: bool) -> None:
        self._vaccine_config(name).enabled = enabled

    def move_vaccine(self, name: str, position: int) -> None:
        """Move a vaccine to a 0-based priority position (clamped to the list)."""
        config = self._vaccine_config(name)
        self.vaccines.remove(config)
        position = max(0, min(position, len(self.vaccines)))
        self.vaccines.insert(position, config)

    def sync_catalog(self, catalog: VaccineCatalog | None = None) -> None:
        """Drop vaccines the catalog no longer has and append new ones at the end."""
        catalog = catalog or get_catalog()
        self.vaccines = [v for v in self.vaccines if v.name in catalog]
        known = {v.name for v in self.vaccines}
        for vaccine in catalog.ordered():
            if vaccine.name not in known:
                self.vaccines.append(VaccineConfig(name=vaccine.name, enabled=vaccine.recommended))

    def add_record(self, record: VaccineRecord, catalog: VaccineCatalog | None = None) -> None:
        """Add a record, keeping records ordered by date received (not entry time)."""
        (catalog or get_catalog()).lookup(record.vaccine)
        self.records.append(record)
        self.records.sort(key=lambda r: r.date)

    def remove_record(self, index: int) -> VaccineRecord:
        if not 0 <= index < len(self.records):
            raise ProfileError(f"No record at position {index + 1}")
        return self.records.pop(index)

    def recompute(
        self,
        now: date | datetime | None = None,
        engine: ScheduleEngine | None = None,
    ) -> list[VaccineAppointment]:
        """Recompute and store the schedule."""
        engine = engine or ScheduleEngine()
        self.schedule = engine.schedule(
            now or date.today(),
            self.enabled_vaccines(),
            self.end_plan_year,
            self.records,
        )
        return self.schedule


def _default_profiles() -> dict[str, Profile]:
    return {DEFAULT_PROFILE: Profile.default()}


class ProfileBook(BaseModel):
    """All saved profiles plus the name of the active one."""
    active_profile: str = DEFAULT_PROFILE
    profiles: dict[str, Profile] = Field(default_factory=_default_profiles)

    def names(self) -> list[str]:
        return sorted(self.profiles)

    def get(self, name: str) -> Profile:
        try:
            return self.profiles[name]
        except KeyError:
            raise ProfileError(f"No profile named {name!r}") from None

    def active(self) -> Profile:
        return self.get(self.active_profile)

    def add(self, name: str, profile: Profile | None = None) -> Profile:
        """Create a profile and make it active."""
        name = name.strip()
        if not name:
            raise ProfileError("Profile name must not be empty")
        if name in self.profiles:
            raise ProfileError(f"Profile {name!r} already exists")
        self.profiles[name] = profile or Profile.default()
        self.active_profile = name
        return self.profiles[name]

    def activate(self, name: str) -> Profile:
        profile = self.get(name)
        self.active_profile = name
        return profile

    def delete(self, name: str) -> Profile:
        if name == self.active_profile:
            raise ProfileError("Cannot delete the active profile")
        profile = self.get(name)
        del self.profiles[name]
        return profile
