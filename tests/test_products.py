"""Tests for the product detail page."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from donation_board.domain.errors import NotFoundError
from donation_board.domain.listings import Listing
from donation_board.domain.models import Profile, Review
from donation_board.domain.results import Failure, FailureKind, Ok
from donation_board.services.products import ProductService
from donation_board.views.product_detail import ProductDetailView
from tests.conftest import (
    InMemoryListingRepository,
    InMemoryProfileRepository,
    make_user,
)


def _seed() -> tuple[InMemoryListingRepository, InMemoryProfileRepository, Listing]:
    listings = InMemoryListingRepository()
    profiles = InMemoryProfileRepository()
    owner_id = uuid4()
    profiles.profiles[owner_id] = Profile(id=owner_id, full_name="Olga Owner")
    profiles.reviews[owner_id] = [
        Review(id=uuid4(), rating=4, comment="Kind", created_at=datetime.now(tz=UTC)),
        Review(id=uuid4(), rating=5, comment="Fast", created_at=None),
    ]
    listing = listings.add(user_id=str(owner_id), category="Toys", title="Train set")
    for index in range(6):
        listings.add(category="Toys", title=f"Toy {index}")
    listings.add(category="Books", title="Atlas")
    return listings, profiles, listing


def test_details_include_owner_rating_and_related_items() -> None:
    listings, profiles, listing = _seed()
    service = ProductService(listings, profiles)

    details = service.get_details(listing.id, viewer_id=None)

    assert details.listing == listing
    assert details.owner.profile.full_name == "Olga Owner"
    assert details.owner.rating == pytest.approx(4.5)
    assert details.owner.review_count == 2
    assert len(details.related) == 4
    assert all(item.category == "Toys" for item in details.related)
    assert listing.id not in {item.id for item in details.related}
    assert details.is_favorite is False


def test_missing_listing_raises_not_found() -> None:
    service = ProductService(InMemoryListingRepository(), InMemoryProfileRepository())

    with pytest.raises(NotFoundError):
        service.get_details(uuid4(), viewer_id=None)


def test_toggle_favorite_flips_state(store) -> None:
    listings, profiles, listing = _seed()
    view = ProductDetailView(
        store=store, product_service=ProductService(listings, profiles)
    )

    anonymous = view.toggle_favorite(listing.id)
    store.set_user(make_user())
    added = view.toggle_favorite(listing.id)
    loaded = view.load(listing.id)
    removed = view.toggle_favorite(listing.id)

    assert isinstance(anonymous, Failure)
    assert anonymous.kind is FailureKind.VALIDATION
    assert added == Ok(True)
    assert isinstance(loaded, Ok)
    assert loaded.value.is_favorite is True
    assert removed == Ok(False)
