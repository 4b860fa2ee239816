"""
Tests for dose kinds, dose schedules and booster schedules.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date

import pytest
from dateutil.relativedelta import relativedelta
from pydantic import ValidationError

from src.errors import InvalidRecord, UnanchoredBooster
from src.models import (
    DoseKind,
    LifetimeBooster,
    RepeatedDoses,
    RepeatedRangeDoses,
    SeasonalBooster,
    SingleDose,
    Vaccine,
    VaccineRecord,
    YearsBooster,
    all_dose_kinds,
    booster_sort_key,
    dose_kind_sort_key,
)

NOW = date(2025, 6, 1)

DOSE_0 = DoseKind.dose(0)
DOSE_1 = DoseKind.dose(1)
DOSE_2 = DoseKind.dose(2)
BOOSTER = DoseKind.booster()


def record(kind: DoseKind, months_ago: int, vaccine: str = "Tdap") -> VaccineRecord:
    return VaccineRecord(vaccine=vaccine, date=NOW - relativedelta(months=months_ago), kind=kind)


class TestDoseKind:
    """Dose kind construction, display and ordering."""

    def test_display(self):
        assert str(DOSE_0) == "Dose#1"
        assert str(DoseKind.dose(3)) == "Dose#4"
        assert str(BOOSTER) == "Booster"

    def test_parse(self):
        assert DoseKind.parse("Dose#2") == DOSE_1
        assert DoseKind.parse("booster") == BOOSTER
        with pytest.raises(ValueError):
            DoseKind.parse("Dose#0")
        with pytest.raises(ValueError):
            DoseKind.parse("shot")

    def test_index_required_for_doses(self):
        with pytest.raises(ValidationError):
            DoseKind(type="dose")
        with pytest.raises(ValidationError):
            DoseKind(type="booster", index=1)

    def test_ordering(self):
        kinds = [BOOSTER, DOSE_2, DOSE_0, DOSE_1]
        assert sorted(kinds, key=dose_kind_sort_key) == [DOSE_0, DOSE_1, DOSE_2, BOOSTER]
        assert dose_kind_sort_key(BOOSTER) == dose_kind_sort_key(DoseKind.booster())

    def test_hashable(self):
        assert len({DoseKind.dose(0), DoseKind.dose(0), BOOSTER}) == 2

    def test_all_dose_kinds(self):
        labels = [label for label, _ in all_dose_kinds()]
        assert labels == ["Booster", "Dose#1", "Dose#2", "Dose#3", "Dose#4"]


class TestDoseScheduleBaseline:
    """History-free dose offsets."""

    def test_repeated(self):
        schedule = RepeatedDoses(number=3, interval=6)
        assert schedule.baseline_offsets() == [(DOSE_0, 0), (DOSE_1, 6), (DOSE_2, 12)]

    def test_repeated_range_uses_minimum(self):
        schedule = RepeatedRangeDoses(number=2, minimum=1, maximum=6)
        assert schedule.baseline_offsets() == [(DOSE_0, 0), (DOSE_1, 1)]

    def test_single(self):
        assert SingleDose().baseline_offsets() == [(DOSE_0, 0)]

    def test_invariants(self):
        with pytest.raises(ValidationError):
            RepeatedDoses(number=0, interval=6)
        with pytest.raises(ValidationError):
            RepeatedDoses(number=2, interval=-1)
        with pytest.raises(ValidationError):
            RepeatedRangeDoses(number=2, minimum=6, maximum=1)

    def test_display(self):
        assert str(SingleDose()) == "1x"
        assert str(RepeatedDoses(number=3, interval=6)) == "3x every 6mo"
        assert str(RepeatedRangeDoses(number=2, minimum=1, maximum=6)) == "2x every 1-6mo"


class TestDoseScheduleRemaining:
    """Remaining doses given a record history."""

    schedule = RepeatedDoses(number=3, interval=6)

    def test_no_records_is_baseline(self):
        assert self.schedule.remaining_offsets(NOW, []) == self.schedule.baseline_offsets()

    def test_last_dose_old_enough_resumes_now(self):
        records = [record(DOSE_0, 7)]
        assert self.schedule.remaining_offsets(NOW, records) == [(DOSE_1, 0), (DOSE_2, 6)]

    def test_last_dose_too_recent_waits(self):
        records = [record(DOSE_0, 5)]
        assert self.schedule.remaining_offsets(NOW, records) == [(DOSE_1, 1), (DOSE_2, 7)]

    def test_exactly_minimum_interval_is_due_now(self):
        records = [record(DOSE_0, 6)]
        assert self.schedule.remaining_offsets(NOW, records) == [(DOSE_1, 0), (DOSE_2, 6)]

    def test_series_complete(self):
        records = [record(DOSE_0, 30), record(DOSE_1, 24), record(DOSE_2, 18)]
        assert self.schedule.remaining_offsets(NOW, records) == []

    def test_uses_most_recent_dose(self):
        # Out of date order on purpose
        records = [record(DOSE_1, 2), record(DOSE_0, 10)]
        assert self.schedule.remaining_offsets(NOW, records) == [(DOSE_2, 4)]

    def test_missing_middle_dose(self):
        records = [record(DOSE_0, 14), record(DOSE_2, 1)]
        assert self.schedule.remaining_offsets(NOW, records) == [(DOSE_1, 5)]

    def test_booster_records_ignored(self):
        records = [record(BOOSTER, 2)]
        assert self.schedule.remaining_offsets(NOW, records) == self.schedule.baseline_offsets()

    def test_single_dose_given(self):
        assert SingleDose().remaining_offsets(NOW, [record(DOSE_0, 1)]) == []

    def test_offsets_never_negative(self):
        for months_ago in range(0, 24):
            offsets = self.schedule.remaining_offsets(NOW, [record(DOSE_0, months_ago)])
            assert all(mo >= 0 for _, mo in offsets)

    def test_future_record_rejected(self):
        future = VaccineRecord(vaccine="Tdap", date=date(2025, 7, 1), kind=DOSE_0)
        with pytest.raises(InvalidRecord):
            self.schedule.remaining_offsets(NOW, [future])


class TestBoosterSchedule:
    """Booster cadence and anchoring."""

    def test_durations(self):
        assert SeasonalBooster().duration == 12
        assert YearsBooster(years=5).duration == 60
        assert LifetimeBooster().duration == 300

    def test_sort_by_duration(self):
        schedules = [LifetimeBooster(), YearsBooster(years=10), SeasonalBooster(), YearsBooster(years=5)]
        ordered = sorted(schedules, key=booster_sort_key)
        assert [s.duration for s in ordered] == [12, 60, 120, 300]

    def test_anchor_on_planned_dose(self):
        offsets = YearsBooster(years=10).future_offsets(NOW, 300, 12, [])
        assert offsets == [(BOOSTER, 132), (BOOSTER, 252)]

    def test_limit_is_exclusive(self):
        assert YearsBooster(years=10).future_offsets(NOW, 132, 12, []) == []
        assert YearsBooster(years=10).future_offsets(NOW, 133, 12, []) == [(BOOSTER, 132)]

    def test_anchor_on_last_record(self):
        records = [record(DOSE_2, 30), record(BOOSTER, 24)]
        offsets = YearsBooster(years=10).future_offsets(NOW, 240, None, records)
        assert offsets == [(BOOSTER, 96), (BOOSTER, 216)]

    def test_overdue_booster_is_due_now(self):
        records = [record(BOOSTER, 132)]
        offsets = YearsBooster(years=10).future_offsets(NOW, 240, None, records)
        assert offsets == [(BOOSTER, 0), (BOOSTER, 120)]

    def test_unanchored(self):
        with pytest.raises(UnanchoredBooster):
            YearsBooster(years=10).future_offsets(NOW, 240, None, [])

    def test_future_record_rejected(self):
        future = VaccineRecord(vaccine="Tdap", date=date(2026, 1, 1), kind=BOOSTER)
        with pytest.raises(InvalidRecord):
            YearsBooster(years=10).future_offsets(NOW, 240, None, [future])

    def test_display(self):
        assert str(SeasonalBooster()) == "every year (Sep-Oct)"
        assert str(YearsBooster(years=10)) == "every 10 years"
        assert str(LifetimeBooster()) == "every 25-30 years or when exposed"


class TestSeasonalBooster:
    """Seasonal boosters land inside the window."""

    booster = SeasonalBooster(start_month=9, end_month=10)

    def test_before_window_moves_to_same_year(self):
        # Last dose June 2025 -> anchor June 2026 -> September 2026
        offsets = self.booster.future_offsets(NOW, 40, 0, [])
        assert offsets == [(BOOSTER, 15), (BOOSTER, 27), (BOOSTER, 39)]

    def test_after_window_moves_to_next_year(self):
        # Last dose November 2025 -> anchor November 2026 -> September 2027
        offsets = self.booster.future_offsets(NOW, 40, 5, [])
        assert offsets == [(BOOSTER, 27), (BOOSTER, 39)]

    def test_inside_window_unchanged(self):
        offsets = self.booster.future_offsets(NOW, 40, 3, [])
        assert offsets == [(BOOSTER, 15), (BOOSTER, 27), (BOOSTER, 39)]

    def test_anchor_from_history(self):
        # Last booster October 2024 -> due October 2025
        records = [record(BOOSTER, 8, vaccine="Flu")]
        assert self.booster.future_offsets(NOW, 30, None, records) == [(BOOSTER, 4), (BOOSTER, 16), (BOOSTER, 28)]

    def test_off_season_history(self):
        # Last booster January 2025 -> anchor January 2026 -> September 2026
        records = [record(BOOSTER, 5, vaccine="Flu")]
        assert self.booster.future_offsets(NOW, 30, None, records) == [(BOOSTER, 15), (BOOSTER, 27)]

    def test_wrapping_window(self):
        winter = SeasonalBooster(start_month=11, end_month=2)
        assert winter.in_window(12)
        assert winter.in_window(1)
        assert not winter.in_window(6)
        assert winter.adjust_anchor(NOW, 0) == 5  # June -> November
        assert winter.adjust_anchor(NOW, 7) == 7  # January stays

    def test_months_always_in_window(self):
        for planned in range(0, 24):
            for _, mo in self.booster.future_offsets(NOW, 120, planned, []):
                assert (NOW.month - 1 + mo) % 12 + 1 in (9, 10)


class TestVaccineAllDoses:
    """Doses and boosters combined."""

    tdap = Vaccine(
        name="Tdap",
        treats=["Tetanus", "Diphtheria", "Pertussis"],
        initial_schedule={"type": "repeated", "number": 3, "interval": 6},
        booster_schedule={"type": "years", "years": 10},
    )

    def test_fresh_series(self):
        assert self.tdap.all_doses(NOW, [], 300) == [
            (DOSE_0, 0),
            (DOSE_1, 6),
            (DOSE_2, 12),
            (BOOSTER, 132),
            (BOOSTER, 252),
        ]

    def test_complete_series_only_boosters(self):
        records = [record(DOSE_0, 29), record(DOSE_1, 23), record(DOSE_2, 17)]
        assert self.tdap.all_doses(NOW, records, 300) == [(BOOSTER, 103), (BOOSTER, 223)]

    def test_partial_series(self):
        records = [record(DOSE_0, 5)]
        assert self.tdap.all_doses(NOW, records, 200) == [(DOSE_1, 1), (DOSE_2, 7), (BOOSTER, 127)]

    def test_treats_str(self):
        assert self.tdap.treats_str == "Tetanus, Diphtheria, Pertussis"
