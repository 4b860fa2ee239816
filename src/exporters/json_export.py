"""
JSON exporter for Vaccine Helper.

Exports schedules and profiles as clean, human-readable JSON, and reads
profiles back.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable

from src.models import VaccineAppointment
from src.profiles import Profile


class DateTimeEncoder(json.JSONEncoder):
    """JSON encoder that handles dates and datetimes."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, date):
            return obj.isoformat()
        return super().default(obj)


def _write(text: str, output_path: Path | None) -> str:
    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text)
    return text


def export_schedule_json(
    appointments: Iterable[VaccineAppointment],
    output_path: Path | None = None,
    indent: int = 2,
) -> str:
    """
    Export a computed schedule to JSON.

    Args:
        appointments: The appointments to export, already sorted
        output_path: Optional path to write the JSON file
        indent: JSON indentation level

    Returns:
        JSON string with an "appointments" list
    """
    data = {
        "appointments": [
            {**appt.model_dump(mode="json"), "kind_label": str(appt.kind)}
            for appt in appointments
        ],
    }
    return _write(json.dumps(data, indent=indent, cls=DateTimeEncoder), output_path)


def export_profile_json(
    profile: Profile,
    output_path: Path | None = None,
    indent: int = 2,
) -> str:
    """Export a profile (selection, records and cached schedule) to JSON."""
    data = profile.model_dump(mode="json")
    return _write(json.dumps(data, indent=indent, cls=DateTimeEncoder), output_path)


def import_profile_json(text: str) -> Profile:
    """
    Parse a profile exported by export_profile_json.

    Vaccines missing from the current catalog are dropped and new catalog
    entries are appended.

    Raises:
        pydantic.ValidationError: the JSON does not describe a profile
    """
    profile = Profile.model_validate_json(text)
    profile.sync_catalog()
    return profile


def export_schedule_summary(appointments: Iterable[VaccineAppointment]) -> dict[str, Any]:
    """
    Summarize a schedule (useful for listings/previews).

    Returns a dict with counts per year and the first appointment.
    """
    appointments = list(appointments)
    per_year: dict[int, int] = {}
    for appt in appointments:
        per_year[appt.year] = per_year.get(appt.year, 0) + 1
    first = appointments[0] if appointments else None
    return {
        "appointment_count": len(appointments),
        "vaccines": sorted({appt.vaccine for appt in appointments}),
        "per_year": per_year,
        "next": (
            {"vaccine": first.vaccine, "kind": str(first.kind), "year": first.year, "month": first.month}
            if first else None
        ),
    }
