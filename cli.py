#!/usr/bin/env python3
"""
Vaccine Helper CLI

Command-line interface for tracking vaccine records and planning future
doses and boosters.
"""

import functools
import logging
import sys
from datetime import date, datetime
from itertools import groupby
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

console = Console()


def setup_paths():
    """Add the project root to sys.path for imports."""
    root = Path(__file__).parent
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


setup_paths()

from src.config import get_config  # noqa: E402
from src.errors import ProfileError, ProfileStoreError, SchedulingError  # noqa: E402


def setup_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else get_config().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def handle_errors(func):
    """Report domain errors as CLI errors instead of tracebacks."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (SchedulingError, ProfileError, ProfileStoreError) as e:
            raise click.ClickException(str(e)) from e
    return wrapper


def _store(ctx: click.Context):
    from src.profiles import ProfileStore
    return ProfileStore(ctx.obj.get("profile_file"))


def _reference_date(value: Optional[datetime]) -> date:
    return value.date() if value else date.today()


@click.group()
@click.version_option(version="0.1.0", prog_name="vaccine-helper")
@click.option("--profile-file", type=click.Path(dir_okay=False, path_type=Path),
              help="Profile file (default: $VACCINE_HELPER_PROFILE_FILE or ~/.vaccine-helper/profiles.json)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, profile_file: Optional[Path], verbose: bool):
    """
    Vaccine Helper - Vaccination Planner

    Track the vaccines you have received and plan every dose and booster
    needed to stay current.
    """
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["profile_file"] = profile_file


@cli.command()
def vaccines():
    """
    List the vaccines in the catalog.
    """
    from src.engines import get_catalog

    table = Table(title="Vaccine Catalog")
    table.add_column("Vaccine", style="cyan")
    table.add_column("Treats")
    table.add_column("Doses")
    table.add_column("Boosters")
    table.add_column("Recommended", justify="center")

    for vaccine in get_catalog().ordered():
        table.add_row(
            vaccine.name,
            vaccine.treats_str,
            str(vaccine.initial_schedule),
            str(vaccine.booster_schedule),
            "[green]yes[/green]" if vaccine.recommended else "[dim]no[/dim]",
        )

    console.print(table)


@cli.command()
@click.option("--profile", "profile_name", type=str, help="Profile to plan (default: active profile)")
@click.option("--until", "until", type=int, help="Override the end plan year")
@click.option("--date", "ref_date", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Plan as of this date (default: today)")
@click.option("--format", "fmt", type=click.Choice(["table", "json", "markdown"]), default="table",
              help="Output format")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
              help="Write the schedule to a file")
@click.pass_context
@handle_errors
def schedule(
    ctx: click.Context,
    profile_name: Optional[str],
    until: Optional[int],
    ref_date: Optional[datetime],
    fmt: str,
    output: Optional[Path],
):
    """
    Compute the vaccination schedule for a profile.

    Examples:

        vaccine-helper schedule

        vaccine-helper schedule --until 2040 --format markdown -o plan.md
    """
    from src.exporters import export_schedule_json, export_schedule_markdown, export_schedule_summary

    store = _store(ctx)
    book = store.load()
    profile = book.get(profile_name) if profile_name else book.active()
    if until is not None:
        profile.end_plan_year = until

    appointments = profile.recompute(_reference_date(ref_date))
    store.save(book)

    if fmt == "json":
        text = export_schedule_json(appointments, output)
    elif fmt == "markdown" or output:
        # Tables are terminal-only; files get Markdown.
        text = export_schedule_markdown(appointments, output)
    else:
        text = None

    if output:
        console.print(f"[green]✓ Wrote {len(appointments)} appointments to {output}[/green]")
        return
    if text is not None:
        click.echo(text)
        return

    if not appointments:
        console.print("[dim]Nothing to schedule[/dim]")
        return

    tree = Tree(f"[bold]Schedule for {profile_name or book.active_profile}[/bold]")
    for year, year_appts in groupby(appointments, key=lambda a: a.year):
        year_node = tree.add(f"[bold underline]{year}[/bold underline]")
        for _, month_appts in groupby(year_appts, key=lambda a: a.month):
            month_appts = list(month_appts)
            month_node = year_node.add(f"[cyan]{month_appts[0].month_name}[/cyan]")
            for appt in month_appts:
                month_node.add(f"{appt.vaccine} {appt.kind}")
    console.print(tree)

    summary = export_schedule_summary(appointments)
    console.print(
        f"\n[bold]Appointments:[/bold] {summary['appointment_count']} "
        f"across {len(summary['per_year'])} year(s)"
    )


# -----------------------------------------------------------------------------
# Records
# -----------------------------------------------------------------------------


@cli.group()
def records():
    """
    Manage the active profile's vaccine records.
    """
    pass


@records.command("list")
@click.pass_context
@handle_errors
def records_list(ctx: click.Context):
    """List recorded doses."""
    book = _store(ctx).load()
    profile = book.active()

    if not profile.records:
        console.print("[dim]No records[/dim]")
        return

    table = Table(title=f"Vaccine Records ({book.active_profile})")
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Vaccine", style="cyan")
    table.add_column("Kind")
    table.add_column("Notes")
    for i, record in enumerate(profile.records, start=1):
        table.add_row(str(i), record.date.strftime("%d %b %y"), record.vaccine, str(record.kind), record.notes)
    console.print(table)


@records.command("add")
@click.argument("vaccine")
@click.option("--date", "when", type=click.DateTime(formats=["%Y-%m-%d"]), required=True,
              help="Date received (YYYY-MM-DD)")
@click.option("--kind", type=str, default="Booster", show_default=True,
              help="Dose kind: Booster, Dose#1, Dose#2, ...")
@click.option("--notes", type=str, default="", help="Free-text notes")
@click.pass_context
@handle_errors
def records_add(ctx: click.Context, vaccine: str, when: datetime, kind: str, notes: str):
    """
    Record a received dose.

    Example:

        vaccine-helper records add Tdap --date 2024-11-01 --kind Dose#1
    """
    from src.models import DoseKind, VaccineRecord

    try:
        dose_kind = DoseKind.parse(kind)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--kind") from e

    store = _store(ctx)
    book = store.load()
    book.active().add_record(
        VaccineRecord(vaccine=vaccine, date=when.date(), kind=dose_kind, notes=notes)
    )
    store.save(book)
    console.print(f"[green]✓ Recorded {vaccine} {dose_kind} on {when.date().isoformat()}[/green]")


@records.command("delete")
@click.argument("number", type=int)
@click.pass_context
@handle_errors
def records_delete(ctx: click.Context, number: int):
    """Delete a record by its number in `records list`."""
    store = _store(ctx)
    book = store.load()
    record = book.active().remove_record(number - 1)
    store.save(book)
    console.print(f"[green]✓ Deleted {record.vaccine} {record.kind} ({record.date.isoformat()})[/green]")


# -----------------------------------------------------------------------------
# Vaccine selection
# -----------------------------------------------------------------------------


def _set_enabled(ctx: click.Context, name: str, enabled: bool) -> None:
    store = _store(ctx)
    book = store.load()
    book.active().set_enabled(name, enabled)
    store.save(book)
    state = "enabled" if enabled else "disabled"
    console.print(f"[green]✓ {name} {state}[/green]")


@cli.command()
@click.argument("name")
@click.pass_context
@handle_errors
def enable(ctx: click.Context, name: str):
    """Include a vaccine in the schedule."""
    _set_enabled(ctx, name, True)


@cli.command()
@click.argument("name")
@click.pass_context
@handle_errors
def disable(ctx: click.Context, name: str):
    """Leave a vaccine out of the schedule."""
    _set_enabled(ctx, name, False)


@cli.command()
@click.argument("name")
@click.argument("position", type=click.IntRange(min=1))
@click.pass_context
@handle_errors
def prioritize(ctx: click.Context, name: str, position: int):
    """
    Move a vaccine to a priority position (1 = highest).

    Same-month appointments are listed in priority order.
    """
    store = _store(ctx)
    book = store.load()
    profile = book.active()
    profile.move_vaccine(name, position - 1)
    store.save(book)

    table = Table(title="Vaccine Priority")
    table.add_column("#", justify="right")
    table.add_column("Vaccine", style="cyan")
    table.add_column("Enabled", justify="center")
    for i, config in enumerate(profile.vaccines, start=1):
        table.add_row(str(i), config.name, "✓" if config.enabled else "")
    console.print(table)


@cli.command("plan-until")
@click.argument("year", type=int)
@click.pass_context
@handle_errors
def plan_until(ctx: click.Context, year: int):
    """Set the last year to plan boosters for."""
    store = _store(ctx)
    book = store.load()
    book.active().end_plan_year = year
    store.save(book)
    console.print(f"[green]✓ Planning through {year}[/green]")


# -----------------------------------------------------------------------------
# Profiles
# -----------------------------------------------------------------------------


@cli.group()
def profiles():
    """
    Manage profiles (one per person).
    """
    pass


@profiles.command("list")
@click.pass_context
@handle_errors
def profiles_list(ctx: click.Context):
    """List profiles; the active one is marked."""
    book = _store(ctx).load()
    table = Table(title="Profiles")
    table.add_column("Active", justify="center")
    table.add_column("Name", style="cyan")
    table.add_column("Enabled Vaccines", justify="right")
    table.add_column("Records", justify="right")
    table.add_column("Plan Until", justify="right")
    for name in book.names():
        profile = book.profiles[name]
        table.add_row(
            "✓" if name == book.active_profile else "",
            name,
            str(len(profile.enabled_vaccines())),
            str(len(profile.records)),
            str(profile.end_plan_year),
        )
    console.print(table)


@profiles.command("add")
@click.argument("name")
@click.pass_context
@handle_errors
def profiles_add(ctx: click.Context, name: str):
    """Create a profile and make it active."""
    store = _store(ctx)
    book = store.load()
    book.add(name)
    store.save(book)
    console.print(f"[green]✓ Created and activated profile {name}[/green]")


@profiles.command("activate")
@click.argument("name")
@click.pass_context
@handle_errors
def profiles_activate(ctx: click.Context, name: str):
    """Switch the active profile."""
    store = _store(ctx)
    book = store.load()
    book.activate(name)
    store.save(book)
    console.print(f"[green]✓ Active profile: {name}[/green]")


@profiles.command("delete")
@click.argument("name")
@click.pass_context
@handle_errors
def profiles_delete(ctx: click.Context, name: str):
    """Delete a profile. This is immediate and irreversible."""
    store = _store(ctx)
    book = store.load()
    book.delete(name)
    store.save(book)
    console.print(f"[green]✓ Deleted profile {name}[/green]")


# -----------------------------------------------------------------------------
# Import / export
# -----------------------------------------------------------------------------


@cli.command()
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
@handle_errors
def export(ctx: click.Context, output: Path):
    """
    Export the active profile to a JSON file.

    Example:

        vaccine-helper export ./my-vaccines.json
    """
    from src.exporters import export_profile_json

    book = _store(ctx).load()
    export_profile_json(book.active(), output)
    console.print(f"[green]✓ Exported {book.active_profile} to {output}[/green]")


@cli.command("import")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--name", type=str, help="Import as a new profile with this name (default: replace the active profile)")
@click.pass_context
@handle_errors
def import_profile(ctx: click.Context, input_path: Path, name: Optional[str]):
    """
    Import a profile from a JSON file.
    """
    from pydantic import ValidationError
    from src.exporters import import_profile_json

    try:
        profile = import_profile_json(input_path.read_text())
    except ValidationError as e:
        raise click.ClickException(f"{input_path} is not a valid profile: {e}") from e

    store = _store(ctx)
    book = store.load()
    if name:
        book.add(name, profile)
    else:
        book.profiles[book.active_profile] = profile
    store.save(book)
    console.print(f"[green]✓ Imported {input_path} into {book.active_profile}[/green]")


@cli.command()
def info():
    """
    Show information about Vaccine Helper.
    """
    console.print(Panel(
        "[bold]Vaccine Helper[/bold]\n\n"
        "A simple way for adults to track and schedule immunizations:\n"
        "• Record the doses you have already received\n"
        "• Choose and prioritize the vaccines you want\n"
        "• Get a month-by-month plan of doses and boosters\n\n"
        "[dim]Usage of this tool does not constitute medical advice.[/dim]\n"
        "[dim]Please consult a doctor or pharmacist.[/dim]",
        title="About",
        border_style="blue",
    ))

    config = get_config()
    console.print("\n[bold]Configuration:[/bold]")
    console.print(f"  • Profile file: {config.profile_file}")
    console.print(f"  • Default plan length: {config.plan_years} years")

    console.print("\n[bold]Quick Start:[/bold]")
    console.print("  vaccine-helper vaccines")
    console.print("  vaccine-helper records add Tdap --date 2024-11-01 --kind Dose#1")
    console.print("  vaccine-helper schedule")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
