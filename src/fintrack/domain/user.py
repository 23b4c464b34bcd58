"""User domain service."""

from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.entities import TrackingOption, User
from fintrack.domain.errors import ConflictError, NotFoundError, ValidationError, user_not_found


def _parse_tracking_option(value: str) -> TrackingOption:
    try:
        return TrackingOption(value)
    except ValueError:
        allowed = ", ".join(o.value for o in TrackingOption)
        raise ValidationError(f"Unknown tracking option '{value}'. Expected one of: {allowed}")


class UserService:
    """Service for registering and looking up users."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def register(self, username: str, name: str, tracking_option: str = "both") -> int:
        """Register a user.

        Args:
            username: Unique login name
            name: Display name
            tracking_option: One of income, expenses, both

        Returns:
            User ID

        Raises:
            ValidationError: If a field is empty or the tracking option is unknown
            ConflictError: If the username is taken
        """
        username = username.strip()
        name = name.strip()
        if not username:
            raise ValidationError("Username is required")
        if not name:
            raise ValidationError("Name is required")
        option = _parse_tracking_option(tracking_option)

        if self.db.get_user_by_username(username) is not None:
            raise ConflictError(f"Username '{username}' already exists")

        return self.db.create_user(username=username, name=name, tracking_option=option.value)

    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        return self.db.get_user(user_id)

    def get_by_username(self, username: str) -> User:
        """Get user by username.

        Raises:
            NotFoundError: If no such user exists
        """
        user = self.db.get_user_by_username(username)
        if user is None:
            raise NotFoundError(user_not_found(username))
        return user

    def set_tracking_option(self, user_id: int, tracking_option: str) -> None:
        """Change whether a user tracks income, expenses or both.

        Raises:
            ValidationError: If the tracking option is unknown
            NotFoundError: If the user does not exist
        """
        option = _parse_tracking_option(tracking_option)
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(str(user_id)))
        self.db.set_tracking_option(user_id, option.value)
