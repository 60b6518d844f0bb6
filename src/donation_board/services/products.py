"""Product detail service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from donation_board.domain.errors import NotFoundError
from donation_board.domain.models import Profile, Review
from donation_board.domain.products import OwnerSummary, ProductDetails
from donation_board.services.listings import ListingRepository

RELATED_LIMIT = 4


class ProfileRepository(Protocol):
    """Persistence interface for profiles, reviews and wishlists."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return a profile by user id, if present."""

    def create_profile(self, payload: dict[str, object]) -> Profile:
        """Insert a profile row and return it."""

    def list_reviews(self, reviewed_id: UUID) -> list[Review]:
        """Return reviews left for a user."""

    def is_favorite(self, user_id: UUID, listing_id: UUID) -> bool:
        """Return True when the listing is in the user's wishlist."""

    def add_favorite(self, user_id: UUID, listing_id: UUID) -> None:
        """Add a listing to the user's wishlist."""

    def remove_favorite(self, user_id: UUID, listing_id: UUID) -> None:
        """Remove a listing from the user's wishlist."""


@dataclass
class ProductService:
    """Assemble product detail pages and manage wishlists."""

    listing_repository: ListingRepository
    profile_repository: ProfileRepository

    def get_details(self, listing_id: UUID, viewer_id: UUID | None) -> ProductDetails:
        """Return the listing with its owner, reviews and related items."""
        listing = self.listing_repository.get_listing(listing_id)
        if listing is None:
            raise NotFoundError(f"Listing {listing_id} not found")
        profile = self.profile_repository.get_profile(listing.user_id)
        if profile is None:
            raise NotFoundError(f"Profile {listing.user_id} not found")

        reviews = self.profile_repository.list_reviews(listing.user_id)
        rating = (
            sum(review.rating for review in reviews) / len(reviews) if reviews else 0.0
        )
        related = self.listing_repository.list_related(
            listing.category, exclude_id=listing.id, limit=RELATED_LIMIT
        )
        is_favorite = (
            self.profile_repository.is_favorite(viewer_id, listing.id)
            if viewer_id
            else False
        )
        return ProductDetails(
            listing=listing,
            owner=OwnerSummary(
                profile=profile, rating=rating, review_count=len(reviews)
            ),
            reviews=tuple(reviews),
            related=tuple(related[:RELATED_LIMIT]),
            is_favorite=is_favorite,
        )

    def toggle_favorite(self, user_id: UUID, listing_id: UUID) -> bool:
        """Flip the wishlist state and return the new state."""
        if self.profile_repository.is_favorite(user_id, listing_id):
            self.profile_repository.remove_favorite(user_id, listing_id)
            return False
        self.profile_repository.add_favorite(user_id, listing_id)
        return True
