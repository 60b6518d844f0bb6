"""Account registration and sign-in."""

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote
from uuid import UUID

from donation_board.domain.errors import RemoteCallError, ValidationError
from donation_board.domain.models import Role, SessionUser
from donation_board.services.products import ProfileRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthClient(Protocol):
    """Hosted authentication interface."""

    def sign_up(
        self, email: str, password: str, metadata: dict[str, object]
    ) -> SessionUser:
        """Create an account and return its user."""

    def sign_in(self, email: str, password: str) -> SessionUser:
        """Sign in with email and password."""

    def sign_out(self) -> None:
        """End the current session."""

    def delete_user(self, user_id: UUID) -> None:
        """Delete an account."""


@dataclass
class AuthService:
    """Registration with profile creation, sign-in and sign-out."""

    client: AuthClient
    profiles: ProfileRepository

    def register(
        self, email: str, password: str, full_name: str, role: Role
    ) -> SessionUser:
        """Create the account and its profile, undoing the account on failure."""
        email = email.strip()
        full_name = full_name.strip()
        if "@" not in email:
            raise ValidationError("A valid email is required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if not full_name:
            raise ValidationError("Full name is required")

        user = self.client.sign_up(
            email, password, {"full_name": full_name, "role": role.value}
        )
        try:
            self.profiles.create_profile(
                {
                    "id": str(user.id),
                    "username": email.split("@")[0],
                    "full_name": full_name,
                    "role": role.value,
                    "biography": "",
                    "city": "",
                    "visibility": True,
                    "avatar_url": default_avatar_url(full_name),
                }
            )
        except RemoteCallError:
            logger.warning("Profile creation failed; removing account %s", user.id)
            self.client.delete_user(user.id)
            raise
        return user

    def sign_in(self, email: str, password: str) -> SessionUser:
        """Sign in with email and password."""
        if not email.strip() or not password:
            raise ValidationError("Email and password are required")
        return self.client.sign_in(email.strip(), password)

    def sign_out(self) -> None:
        """Sign out of the hosted session."""
        self.client.sign_out()


def default_avatar_url(full_name: str) -> str:
    """Return a generated avatar URL for a name."""
    return f"https://ui-avatars.com/api/?name={quote(full_name)}&background=random"
