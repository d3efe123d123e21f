"""Profile manager for user profiles and the profile dashboard."""

import logging
from typing import Optional

from sqlalchemy import select

from ..auth import AuthSession
from ..books.manager import BookManager
from ..db.models import Profile
from ..db.schemas import ProfileRecord, to_record
from ..db.sqlite import Database, get_db
from ..errors import NotFoundError, ValidationError
from ..reviews.manager import ReviewManager
from .schemas import ProfileCreate, ProfileSummary

logger = logging.getLogger(__name__)


class ProfileManager:
    """Manages profiles and builds profile summaries."""

    def __init__(
        self,
        db: Optional[Database] = None,
        books: Optional[BookManager] = None,
        reviews: Optional[ReviewManager] = None,
    ):
        self.db = db or get_db()
        self.books = books or BookManager(self.db)
        self.reviews = reviews or ReviewManager(self.db)

    def get_profile(self, user_id: str) -> ProfileRecord:
        """Get a profile by user ID.

        Raises:
            NotFoundError: If the user has no profile
        """
        with self.db.get_session() as session:
            stmt = select(Profile).where(Profile.user_id == user_id)
            profile = session.execute(stmt).scalar_one_or_none()
            if not profile:
                raise NotFoundError(f"Profile not found: {user_id}")
            return to_record(ProfileRecord, profile)

    def create_profile(self, data: ProfileCreate) -> ProfileRecord:
        """Register a profile for a user.

        Raises:
            ValidationError: If the user already has a profile
        """
        with self.db.get_session() as session:
            stmt = select(Profile).where(Profile.user_id == data.user_id)
            if session.execute(stmt).scalar_one_or_none():
                raise ValidationError(f"Profile already exists for user: {data.user_id}")

            profile = Profile(user_id=data.user_id, name=data.name, email=data.email)
            session.add(profile)
            session.flush()
            record = to_record(ProfileRecord, profile)

        logger.info("Profile created for %s", data.user_id)
        return record

    def get_summary(self, auth: AuthSession) -> ProfileSummary:
        """Build the caller's dashboard: profile, books added and reviews written.

        Raises:
            AuthorizationError: If the caller is anonymous
            NotFoundError: If the caller has no profile
        """
        user_id = auth.require_user("Please log in to view your profile")

        return ProfileSummary(
            profile=self.get_profile(user_id),
            books=self.books.list_books_by_owner(user_id),
            reviews=self.reviews.list_for_user(user_id),
        )
