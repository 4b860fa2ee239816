"""
Vaccine regimen tables.
"""

from .catalog import VACCINE_DEFINITIONS, SEASONAL_WINDOW

__all__ = [
    "VACCINE_DEFINITIONS",
    "SEASONAL_WINDOW",
]
