"""
Runtime configuration for Vaccine Helper.

Values come from environment variables; get_config() caches a single
instance for the process.
"""

import os
from pathlib import Path
from typing import Optional

DEFAULT_PLAN_YEARS = 55


class AppConfig:
    """Configuration read from the environment."""

    def __init__(self):
        home = os.environ.get("VACCINE_HELPER_HOME")
        self.home = Path(home).expanduser() if home else Path.home() / ".vaccine-helper"

        profile_file = os.environ.get("VACCINE_HELPER_PROFILE_FILE")
        self.profile_file = (
            Path(profile_file).expanduser() if profile_file else self.home / "profiles.json"
        )

        self.plan_years = self._int_env("VACCINE_HELPER_PLAN_YEARS", DEFAULT_PLAN_YEARS)
        self.log_level = os.environ.get("VACCINE_HELPER_LOG_LEVEL", "WARNING").upper()

    @staticmethod
    def _int_env(name: str, default: int) -> int:
        raw = os.environ.get(name)
        if raw is None or raw.strip() == "":
            return default
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {raw!r}") from None

    def validate(self) -> None:
        """Raise error if the configuration is unusable."""
        if self.plan_years < 0:
            raise ValueError("VACCINE_HELPER_PLAN_YEARS must not be negative")


# -----------------------------------------------------------------------------
# Singleton instance
# -----------------------------------------------------------------------------

_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the application configuration (singleton)."""
    global _config
    if _config is None:
        config = AppConfig()
        config.validate()
        _config = config
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (useful for testing)."""
    global _config
    _config = None
