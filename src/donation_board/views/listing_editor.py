"""Create and edit listing forms."""

from dataclasses import dataclass
from uuid import UUID

from donation_board.domain.listings import Listing
from donation_board.domain.notifications import Notification, NotificationKind
from donation_board.domain.results import Failure, Ok
from donation_board.services.listings import ListingDraft, ListingService
from donation_board.services.store import ClientStateStore
from donation_board.views.base import run_action


@dataclass
class ListingEditorView:
    """Submit listing drafts on behalf of the session user."""

    store: ClientStateStore
    listing_service: ListingService

    def create(self, draft: ListingDraft) -> Ok[Listing] | Failure:
        """Create a listing from a draft."""
        outcome = run_action(
            self.store,
            "create_listing",
            lambda: self.listing_service.create_listing(self.store.user, draft),
        )
        if isinstance(outcome, Ok):
            self._notify_success("Listing created")
        return outcome

    def load(self, listing_id: UUID) -> Ok[Listing] | Failure:
        """Load an owned listing into the edit form."""
        return run_action(
            self.store,
            "load_listing",
            lambda: self.listing_service.get_owned_listing(
                self.store.user, listing_id
            ),
        )

    def update(self, listing_id: UUID, draft: ListingDraft) -> Ok[Listing] | Failure:
        """Save changes to an owned listing."""
        outcome = run_action(
            self.store,
            "update_listing",
            lambda: self.listing_service.update_listing(
                self.store.user, listing_id, draft
            ),
        )
        if isinstance(outcome, Ok):
            self._notify_success("Listing updated")
        return outcome

    def delete(self, listing_id: UUID) -> Ok[None] | Failure:
        """Delete an owned listing."""
        outcome = run_action(
            self.store,
            "delete_listing",
            lambda: self.listing_service.delete_listing(self.store.user, listing_id),
        )
        if isinstance(outcome, Ok):
            self._notify_success("Listing deleted")
        return outcome

    def _notify_success(self, message: str) -> None:
        self.store.add_notification(
            Notification(
                message=message, kind=NotificationKind.SUCCESS, duration_ms=3000
            )
        )
