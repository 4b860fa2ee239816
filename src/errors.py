"""
Exceptions raised by the scheduling core.

Every error derives from SchedulingError (itself a ValueError) so callers can
catch the whole family at once. None of them are recovered internally; the
CLI and HTTP layers decide how to present them.
"""

from __future__ import annotations

from typing import Any


class SchedulingError(ValueError):
    """Base class for scheduling failures."""


class UnknownVaccine(SchedulingError):
    """An enabled vaccine name has no catalog entry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown vaccine: {name!r}")


class InvalidRecord(SchedulingError):
    """A vaccine record cannot be used for scheduling."""

    def __init__(self, record: Any, reason: str):
        self.record = record
        self.reason = reason
        super().__init__(f"Invalid record for {getattr(record, 'vaccine', '?')!r}: {reason}")


class UnanchoredBooster(SchedulingError):
    """Booster computation has neither history nor a planned dose to start from."""

    def __init__(self, vaccine: str | None = None):
        self.vaccine = vaccine
        label = f" for {vaccine!r}" if vaccine else ""
        super().__init__(f"Cannot anchor booster schedule{label}: no records and no planned dose")


class DateArithmeticOverflow(SchedulingError):
    """A year or month computation left the supported calendar range."""

    def __init__(self, value: Any, detail: str = "outside the supported calendar range"):
        self.value = value
        super().__init__(f"{value!r} is {detail}")


class ProfileStoreError(Exception):
    """A profile file could not be read or written."""


class ProfileError(ValueError):
    """A profile operation refers to a missing or conflicting profile."""
