"""Current-user identity passed explicitly to managers and views."""

from dataclasses import dataclass
from typing import Optional

from .errors import AuthorizationError


@dataclass(frozen=True)
class AuthSession:
    """Identity of the caller. ``user_id`` is None for anonymous readers."""

    user_id: Optional[str] = None

    @classmethod
    def anonymous(cls) -> "AuthSession":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    def require_user(self, message: str = "Please log in to continue") -> str:
        """Return the user id or raise if the caller is anonymous."""
        if not self.user_id:
            raise AuthorizationError(message)
        return self.user_id

    def owns(self, owner_id: Optional[str]) -> bool:
        """Check whether the caller is the given owner."""
        return self.is_authenticated and owner_id == self.user_id
