"""
Scheduling engine.

Turns a list of enabled vaccines, a record history and a planning horizon
into a dated appointment plan. Everything is tracked internally as month
offsets from the reference date and only converted to (year, month) when an
appointment is produced.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable

from src.engines.catalog import VaccineCatalog, get_catalog
from src.errors import DateArithmeticOverflow
from src.models import (
    MAX_YEAR,
    MIN_YEAR,
    Vaccine,
    VaccineAppointment,
    VaccineRecord,
    appointment_sort_key,
)

logger = logging.getLogger(__name__)


class ScheduleEngine:
    """
    Computes appointment plans against a vaccine catalog.

    The engine holds no state besides the catalog; every call recomputes the
    plan from scratch.
    """

    def __init__(self, catalog: VaccineCatalog | None = None):
        self.catalog = catalog or get_catalog()

    @staticmethod
    def plan_limit(now: date | datetime, end_plan_year: int) -> int:
        """Months from the start of `now`'s year to the end plan year, never negative."""
        if not MIN_YEAR <= end_plan_year <= MAX_YEAR:
            raise DateArithmeticOverflow(
                end_plan_year, f"outside the supported year range {MIN_YEAR}..{MAX_YEAR}"
            )
        return max(0, (end_plan_year - now.year) * 12)

    def vaccine_appointments(
        self,
        vaccine: Vaccine,
        now: date | datetime,
        records: Iterable[VaccineRecord],
        limit_mo: int,
    ) -> list[VaccineAppointment]:
        """Appointments for one vaccine, in the order its offsets were produced."""
        offsets = vaccine.all_doses(now, records, limit_mo)
        logger.debug(
            "%s: %d dose(s), %d booster(s) before month %d",
            vaccine.name,
            sum(1 for kind, _ in offsets if not kind.is_booster),
            sum(1 for kind, _ in offsets if kind.is_booster),
            limit_mo,
        )
        return [
            VaccineAppointment.from_month_offset(vaccine.name, kind, now, mo)
            for kind, mo in offsets
        ]

    def schedule(
        self,
        now: date | datetime,
        enabled_vaccines: Iterable[str],
        end_plan_year: int,
        records: Iterable[VaccineRecord],
    ) -> list[VaccineAppointment]:
        """
        Plan every dose and booster for the enabled vaccines.

        Args:
            now: Reference date; offsets are counted from its month
            enabled_vaccines: Vaccine names in priority order
            end_plan_year: Last year boosters are planned for
            records: Full record history (any vaccine)

        Returns:
            Appointments sorted by (year, month); ties keep priority order

        Raises:
            UnknownVaccine: an enabled name is not in the catalog
            InvalidRecord: a record is dated after `now`
            DateArithmeticOverflow: `end_plan_year` is out of range
        """
        vaccines = [self.catalog.lookup(name) for name in enabled_vaccines]
        limit_mo = self.plan_limit(now, end_plan_year)
        if end_plan_year < now.year:
            logger.debug("End plan year %d is already past; nothing to schedule", end_plan_year)
            return []

        records = list(records)
        appointments: list[VaccineAppointment] = []
        for vaccine in vaccines:
            vaccine_records = [r for r in records if r.vaccine == vaccine.name]
            appointments.extend(
                self.vaccine_appointments(vaccine, now, vaccine_records, limit_mo)
            )

        # sorted() is stable, so same-month ties keep vaccine priority order.
        return sorted(appointments, key=appointment_sort_key)


def schedule(
    now: date | datetime,
    enabled_vaccines: Iterable[str],
    end_plan_year: int,
    records: Iterable[VaccineRecord],
    catalog: VaccineCatalog | None = None,
) -> list[VaccineAppointment]:
    """Plan appointments with a one-off engine (see ScheduleEngine.schedule)."""
    return ScheduleEngine(catalog).schedule(now, enabled_vaccines, end_plan_year, records)
