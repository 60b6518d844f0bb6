"""Domain models for the product detail page."""

from dataclasses import dataclass

from donation_board.domain.listings import Listing
from donation_board.domain.models import Profile, Review


@dataclass(frozen=True)
class OwnerSummary:
    """The listing owner's profile with review aggregates."""

    profile: Profile
    rating: float
    review_count: int


@dataclass(frozen=True)
class ProductDetails:
    """Everything shown on a listing's detail page."""

    listing: Listing
    owner: OwnerSummary
    reviews: tuple[Review, ...]
    related: tuple[Listing, ...]
    is_favorite: bool
