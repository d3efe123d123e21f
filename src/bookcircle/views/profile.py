"""Profile view: the caller's dashboard of books added and reviews written."""

from enum import Enum
from typing import Optional, Union

from ..auth import AuthSession
from ..books.schemas import BookWithRating
from ..errors import BookCircleError
from ..notifications import Notifier
from ..profiles.manager import ProfileManager
from ..profiles.schemas import ProfileSummary
from ..reviews.schemas import ReviewWithBook
from .base import LOGIN_ROUTE, report_failure


class ProfileTab(str, Enum):
    """Switchable list on the profile page."""

    BOOKS = "books"
    REVIEWS = "reviews"


class ProfileView:
    """State of the profile page. Everything loads at once, no pagination."""

    def __init__(
        self,
        auth: AuthSession,
        profiles: ProfileManager,
        notifier: Optional[Notifier] = None,
    ):
        self.auth = auth
        self.profiles = profiles
        self.notifier = notifier or Notifier()

        self.summary: Optional[ProfileSummary] = None
        self.loading = True
        self.tab = ProfileTab.BOOKS
        self.redirect: Optional[str] = None

    def load(self) -> bool:
        if not self.auth.is_authenticated:
            self.notifier.error("Please log in to view your profile")
            self.redirect = LOGIN_ROUTE
            self.loading = False
            return False

        try:
            self.summary = self.profiles.get_summary(self.auth)
        except BookCircleError as e:
            report_failure(self.notifier, e, "Failed to fetch profile data")
            return False
        finally:
            self.loading = False
        return True

    def switch_tab(self, tab: Union[ProfileTab, str]) -> None:
        self.tab = ProfileTab(tab)

    @property
    def visible_items(self) -> Union[list[BookWithRating], list[ReviewWithBook]]:
        """Items of the selected tab."""
        if self.summary is None:
            return []
        if self.tab == ProfileTab.BOOKS:
            return self.summary.books
        return self.summary.reviews

    @property
    def empty_message(self) -> Optional[str]:
        if self.visible_items:
            return None
        if self.tab == ProfileTab.BOOKS:
            return "You haven't added any books yet"
        return "You haven't written any reviews yet"
