"""Domain models for the owner dashboard."""

from dataclasses import dataclass

from donation_board.domain.listings import Listing


@dataclass(frozen=True)
class DashboardStats:
    """Aggregate counts over a user's listings."""

    total_donations: int
    active_donations: int
    completed_donations: int
    total_beneficiaries: int


@dataclass(frozen=True)
class Dashboard:
    """A user's listings with their stats."""

    items: tuple[Listing, ...]
    stats: DashboardStats
