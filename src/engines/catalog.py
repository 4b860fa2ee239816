"""
Vaccine catalog.

The catalog is built once from the knowledge tables on first access and is
read-only afterwards.
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from knowledge.vaccines import VACCINE_DEFINITIONS
from src.errors import UnknownVaccine
from src.models import Vaccine, vaccine_sort_key


class VaccineCatalog:
    """Immutable name -> Vaccine registry."""

    def __init__(self, vaccines: Iterable[Vaccine]):
        entries: dict[str, Vaccine] = {}
        for vaccine in vaccines:
            if vaccine.name in entries:
                raise ValueError(f"Duplicate vaccine in catalog: {vaccine.name!r}")
            entries[vaccine.name] = vaccine
        self._vaccines = MappingProxyType(entries)

    @classmethod
    def from_definitions(cls, definitions: Iterable[dict[str, Any]]) -> VaccineCatalog:
        return cls(Vaccine.model_validate(definition) for definition in definitions)

    @property
    def vaccines(self) -> Mapping[str, Vaccine]:
        return self._vaccines

    def lookup(self, name: str) -> Vaccine:
        try:
            return self._vaccines[name]
        except KeyError:
            raise UnknownVaccine(name) from None

    def names(self) -> list[str]:
        return sorted(self._vaccines)

    def ordered(self) -> list[Vaccine]:
        """Vaccines in default priority order (shortest booster cadence first)."""
        return sorted(self._vaccines.values(), key=vaccine_sort_key)

    def __contains__(self, name: object) -> bool:
        return name in self._vaccines

    def __iter__(self) -> Iterator[str]:
        return iter(self._vaccines)

    def __len__(self) -> int:
        return len(self._vaccines)


# -----------------------------------------------------------------------------
# Singleton instance
# -----------------------------------------------------------------------------

_catalog: Optional[VaccineCatalog] = None
_catalog_lock = threading.Lock()


def get_catalog() -> VaccineCatalog:
    """Get the built-in catalog, constructing it on first use."""
    global _catalog
    if _catalog is None:
        with _catalog_lock:
            if _catalog is None:
                _catalog = VaccineCatalog.from_definitions(VACCINE_DEFINITIONS)
    return _catalog
