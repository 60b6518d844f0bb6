"""Sign-up, sign-in and sign-out view."""

from dataclasses import dataclass

from donation_board.domain.models import Role, SessionUser
from donation_board.domain.notifications import Notification, NotificationKind
from donation_board.domain.results import Failure, Ok
from donation_board.services.auth import AuthService
from donation_board.services.store import ClientStateStore
from donation_board.views.base import run_action


@dataclass
class AuthView:
    """Keeps the store's session user in step with the hosted session."""

    store: ClientStateStore
    auth_service: AuthService

    def sign_up(
        self, email: str, password: str, full_name: str, role: Role
    ) -> Ok[SessionUser] | Failure:
        """Register an account and sign the new user in."""
        outcome = run_action(
            self.store,
            "sign_up",
            lambda: self.auth_service.register(email, password, full_name, role),
        )
        if isinstance(outcome, Ok):
            self.store.set_user(outcome.value)
            self.store.add_notification(
                Notification(
                    message="Account created",
                    kind=NotificationKind.SUCCESS,
                    duration_ms=3000,
                )
            )
        return outcome

    def sign_in(self, email: str, password: str) -> Ok[SessionUser] | Failure:
        """Sign in and store the session user."""
        outcome = run_action(
            self.store, "sign_in", lambda: self.auth_service.sign_in(email, password)
        )
        if isinstance(outcome, Ok):
            self.store.set_user(outcome.value)
        return outcome

    def sign_out(self) -> Ok[None] | Failure:
        """Sign out and clear the session user."""
        outcome = run_action(self.store, "sign_out", self.auth_service.sign_out)
        if isinstance(outcome, Ok):
            self.store.set_user(None)
        return outcome
