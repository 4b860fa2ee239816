"""
Profile state and persistence.
"""

from .profile import DEFAULT_PROFILE, Profile, ProfileBook, VaccineConfig
from .store import ProfileStore

__all__ = [
    "DEFAULT_PROFILE",
    "Profile",
    "ProfileBook",
    "VaccineConfig",
    "ProfileStore",
]
