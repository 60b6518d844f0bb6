"""Owner dashboard service."""

from dataclasses import dataclass
from uuid import UUID

from donation_board.domain.dashboard import Dashboard, DashboardStats
from donation_board.domain.listings import Listing, ListingStatus
from donation_board.services.listings import ListingRepository


@dataclass
class DashboardService:
    """Load a user's listings and compute their stats."""

    repository: ListingRepository

    def load(self, user_id: UUID) -> Dashboard:
        """Return the user's listings, newest first, with stats."""
        items = self.repository.list_user_listings(user_id)
        return Dashboard(items=tuple(items), stats=compute_stats(items))


def compute_stats(items: list[Listing]) -> DashboardStats:
    """Aggregate counts over a user's listings."""
    beneficiaries = {item.claimed_by for item in items if item.claimed_by}
    return DashboardStats(
        total_donations=len(items),
        active_donations=sum(
            1 for item in items if item.status is ListingStatus.PENDING
        ),
        completed_donations=sum(
            1 for item in items if item.status is ListingStatus.COMPLETED
        ),
        total_beneficiaries=len(beneficiaries),
    )
