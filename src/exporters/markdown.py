"""
Markdown exporter for Vaccine Helper.

Exports a schedule as a human-readable plan grouped by year and month.
"""

from __future__ import annotations

from itertools import groupby
from pathlib import Path
from typing import Iterable

from src.models import VaccineAppointment, month_name


def export_schedule_markdown(
    appointments: Iterable[VaccineAppointment],
    output_path: Path | None = None,
    title: str = "Vaccination Plan",
) -> str:
    """
    Export a schedule to Markdown format.

    Args:
        appointments: Appointments sorted by (year, month)
        output_path: Optional path to write the Markdown file
        title: Top-level heading

    Returns:
        Markdown string with one section per year and month
    """
    lines = [f"# {title}", ""]
    appointments = list(appointments)

    if not appointments:
        lines.append("*Nothing to schedule.*")
        lines.append("")

    for year, year_appts in groupby(appointments, key=lambda a: a.year):
        lines.append(f"## {year}")
        lines.append("")
        for month, month_appts in groupby(year_appts, key=lambda a: a.month):
            lines.append(f"### {month_name(month)}")
            lines.append("")
            for appt in month_appts:
                lines.append(f"- {appt.vaccine} {appt.kind}")
            lines.append("")

    markdown = "\n".join(lines)

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(markdown)

    return markdown
