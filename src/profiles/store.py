"""
JSON persistence for profile books.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from src.config import get_config
from src.errors import ProfileStoreError
from src.profiles.profile import ProfileBook

logger = logging.getLogger(__name__)


class ProfileStore:
    """Loads and saves a ProfileBook as a JSON file."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else get_config().profile_file

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> ProfileBook:
        """Load the saved profiles, or a fresh book if nothing has been saved yet."""
        if not self.path.exists():
            logger.info("No profile file at %s; starting with a default profile", self.path)
            return ProfileBook()

        try:
            book = ProfileBook.model_validate_json(self.path.read_text())
        except OSError as e:
            raise ProfileStoreError(f"Cannot read {self.path}: {e}") from e
        except ValidationError as e:
            raise ProfileStoreError(f"Malformed profile file {self.path}: {e}") from e

        if book.active_profile not in book.profiles:
            raise ProfileStoreError(
                f"Malformed profile file {self.path}: active profile "
                f"{book.active_profile!r} does not exist"
            )

        # Older files may predate catalog additions.
        for profile in book.profiles.values():
            profile.sync_catalog()

        logger.info("Loaded %d profile(s) from %s", len(book.profiles), self.path)
        return book

    def save(self, book: ProfileBook) -> Path:
        """Write the book atomically (temp file + rename)."""
        data = book.model_dump_json(indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            tmp_path.write_text(data)
            tmp_path.replace(self.path)
        except OSError as e:
            raise ProfileStoreError(f"Cannot write {self.path}: {e}") from e
        logger.info("Saved %d profile(s) to %s", len(book.profiles), self.path)
        return self.path
