"""Page-level views holding client-side state."""

from .base import DIRECTORY_ROUTE, LOGIN_ROUTE, RequestTracker, book_route
from .book_form import BookFormView
from .detail import BookDetailView
from .directory import DirectoryView
from .profile import ProfileTab, ProfileView
from .review_session import ReviewMode, ReviewSession

__all__ = [
    "DIRECTORY_ROUTE",
    "LOGIN_ROUTE",
    "RequestTracker",
    "book_route",
    "BookFormView",
    "BookDetailView",
    "DirectoryView",
    "ProfileTab",
    "ProfileView",
    "ReviewMode",
    "ReviewSession",
]
