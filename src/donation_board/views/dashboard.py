"""Owner dashboard view."""

from dataclasses import dataclass
from uuid import UUID

from donation_board.domain.dashboard import Dashboard
from donation_board.domain.results import Failure, Ok
from donation_board.services.dashboard import DashboardService
from donation_board.services.store import ClientStateStore
from donation_board.views.base import require_user, run_action
from donation_board.views.listing_editor import ListingEditorView


@dataclass
class DashboardView:
    """The session user's listings, stats and delete action."""

    store: ClientStateStore
    dashboard_service: DashboardService
    editor: ListingEditorView
    dashboard: Dashboard | None = None

    def load(self) -> Ok[Dashboard] | Failure:
        """Load the dashboard for the session user."""
        outcome = run_action(self.store, "load_dashboard", self._load)
        if isinstance(outcome, Ok):
            self.dashboard = outcome.value
        return outcome

    def delete(self, listing_id: UUID) -> Ok[Dashboard] | Failure:
        """Delete a listing and reload the dashboard."""
        deleted = self.editor.delete(listing_id)
        if isinstance(deleted, Failure):
            return deleted
        return self.load()

    def _load(self) -> Dashboard:
        user = require_user(self.store, "view your dashboard")
        return self.dashboard_service.load(user.id)
