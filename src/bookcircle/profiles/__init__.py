"""User profiles and the profile dashboard."""

from .manager import ProfileManager
from .schemas import ProfileCreate, ProfileSummary

__all__ = [
    "ProfileManager",
    "ProfileCreate",
    "ProfileSummary",
]
