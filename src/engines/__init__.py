"""
Scheduling engines.
"""

from .catalog import VaccineCatalog, get_catalog
from .scheduling import ScheduleEngine, schedule

__all__ = [
    "VaccineCatalog",
    "get_catalog",
    "ScheduleEngine",
    "schedule",
]
