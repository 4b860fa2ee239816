"""
Tests for the command-line interface.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import json

import pytest
from click.testing import CliRunner

from cli import cli
from src.profiles import ProfileStore


@pytest.fixture
def profile_file(tmp_path):
    return tmp_path / "profiles.json"


@pytest.fixture
def run(profile_file):
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(cli, ["--profile-file", str(profile_file), *args])

    return invoke


class TestCatalogCommands:
    """Read-only commands."""

    def test_vaccines(self, run):
        result = run("vaccines")
        assert result.exit_code == 0
        assert "Tdap" in result.output
        assert "MMR" in result.output

    def test_info(self, run):
        result = run("info")
        assert result.exit_code == 0
        assert "Vaccine Helper" in result.output


class TestRecordCommands:
    """Recording received doses."""

    def test_add_and_list(self, run, profile_file):
        result = run("records", "add", "Tdap", "--date", "2024-11-01", "--kind", "Dose#1")
        assert result.exit_code == 0, result.output

        book = ProfileStore(profile_file).load()
        record = book.active().records[0]
        assert record.vaccine == "Tdap"
        assert str(record.kind) == "Dose#1"

        result = run("records", "list")
        assert result.exit_code == 0
        assert "Tdap" in result.output

    def test_unknown_vaccine(self, run):
        result = run("records", "add", "Nope", "--date", "2024-11-01")
        assert result.exit_code == 1
        assert "Unknown vaccine" in result.output

    def test_bad_kind(self, run):
        result = run("records", "add", "Tdap", "--date", "2024-11-01", "--kind", "third")
        assert result.exit_code == 2

    def test_delete(self, run, profile_file):
        run("records", "add", "Flu", "--date", "2024-10-01")
        result = run("records", "delete", "1")
        assert result.exit_code == 0
        assert ProfileStore(profile_file).load().active().records == []

        result = run("records", "delete", "1")
        assert result.exit_code == 1


class TestScheduleCommand:
    """Schedule computation from the command line."""

    def _only(self, run, name):
        for vaccine in ("COVID-19", "Flu", "Tdap", "Mpox", "Meningitis", "MMR", "Shinglex",
                        "PCV20", "Gardacil-9", "Hepatitis B", "Hepatitis A", "IPV", "Chickenpox"):
            run("disable", vaccine)
        run("enable", name)

    def test_json(self, run):
        self._only(run, "Tdap")
        result = run("schedule", "--date", "2025-06-01", "--until", "2040", "--format", "json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [(a["year"], a["month"], a["kind_label"]) for a in data["appointments"]] == [
            (2025, 6, "Dose#1"),
            (2025, 12, "Dose#2"),
            (2026, 6, "Dose#3"),
            (2036, 6, "Booster"),
        ]

    def test_markdown_file(self, run, tmp_path):
        self._only(run, "Tdap")
        output = tmp_path / "plan.md"
        result = run("schedule", "--date", "2025-06-01", "--until", "2030", "-o", str(output))
        assert result.exit_code == 0
        assert "- Tdap Dose#1" in output.read_text()

    def test_table(self, run):
        self._only(run, "Hepatitis B")
        result = run("schedule", "--date", "2025-06-01", "--until", "2030")
        assert result.exit_code == 0
        assert "Hepatitis B Dose#1" in result.output
        assert "June" in result.output

    def test_schedule_is_saved(self, run, profile_file):
        self._only(run, "Hepatitis B")
        run("schedule", "--date", "2025-06-01", "--until", "2030")
        profile = ProfileStore(profile_file).load().active()
        assert profile.end_plan_year == 2030
        assert len(profile.schedule) == 1


class TestSelectionCommands:
    """Enable, disable, prioritize and plan-until."""

    def test_enable_disable(self, run, profile_file):
        assert run("enable", "Hepatitis A&B").exit_code == 0
        assert run("disable", "Flu").exit_code == 0
        enabled = ProfileStore(profile_file).load().active().enabled_vaccines()
        assert "Hepatitis A&B" in enabled
        assert "Flu" not in enabled

    def test_enable_unknown(self, run):
        result = run("enable", "Nope")
        assert result.exit_code == 1

    def test_prioritize(self, run, profile_file):
        result = run("prioritize", "Tdap", "1")
        assert result.exit_code == 0
        assert ProfileStore(profile_file).load().active().vaccines[0].name == "Tdap"

    def test_plan_until(self, run, profile_file):
        assert run("plan-until", "2045").exit_code == 0
        assert ProfileStore(profile_file).load().active().end_plan_year == 2045


class TestProfileCommands:
    """Profile management and import/export."""

    def test_lifecycle(self, run, profile_file):
        assert run("profiles", "add", "Sam").exit_code == 0
        assert ProfileStore(profile_file).load().active_profile == "Sam"

        result = run("profiles", "list")
        assert "Sam" in result.output

        assert run("profiles", "delete", "Sam").exit_code == 1
        assert run("profiles", "activate", "Default").exit_code == 0
        assert run("profiles", "delete", "Sam").exit_code == 0
        assert ProfileStore(profile_file).load().names() == ["Default"]

    def test_export_import(self, run, profile_file, tmp_path):
        run("records", "add", "Tdap", "--date", "2024-11-01", "--kind", "Dose#1")
        exported = tmp_path / "me.json"
        assert run("export", str(exported)).exit_code == 0

        result = run("import", str(exported), "--name", "Copy")
        assert result.exit_code == 0, result.output
        book = ProfileStore(profile_file).load()
        assert book.active_profile == "Copy"
        assert book.active().records == book.get("Default").records

    def test_import_invalid(self, run, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{}")
        result = run("import", str(bad))
        assert result.exit_code == 1
