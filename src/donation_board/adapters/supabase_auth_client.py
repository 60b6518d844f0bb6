"""Supabase Auth adapter."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from donation_board.adapters.supabase_errors import remote_call
from donation_board.domain.errors import RemoteCallError
from donation_board.domain.models import SessionUser
from donation_board.services.auth import AuthClient


@dataclass
class SupabaseAuthClient(AuthClient):
    """Authenticate against Supabase Auth."""

    client: Client

    def sign_up(
        self, email: str, password: str, metadata: dict[str, object]
    ) -> SessionUser:
        """Create an account and return its user."""
        with remote_call("sign up"):
            response = self.client.auth.sign_up(
                {"email": email, "password": password, "options": {"data": metadata}}
            )
        if response.user is None:
            raise RemoteCallError("sign up", "Registration failed. Please try again.")
        return _session_user(response.user)

    def sign_in(self, email: str, password: str) -> SessionUser:
        """Sign in with email and password."""
        with remote_call("sign in"):
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        if response.user is None:
            raise RemoteCallError("sign in", "no user returned")
        return _session_user(response.user)

    def sign_out(self) -> None:
        """End the current session."""
        with remote_call("sign out"):
            self.client.auth.sign_out()

    def delete_user(self, user_id: UUID) -> None:
        """Delete an account with the admin API."""
        with remote_call("delete user"):
            self.client.auth.admin.delete_user(str(user_id))


def _session_user(user) -> SessionUser:  # type: ignore[no-untyped-def]
    return SessionUser(
        id=UUID(str(user.id)),
        email=str(user.email or ""),
        metadata=dict(user.user_metadata or {}),
    )
