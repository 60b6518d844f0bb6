"""Product detail view."""

from dataclasses import dataclass
from uuid import UUID

from donation_board.domain.products import ProductDetails
from donation_board.domain.results import Failure, Ok
from donation_board.services.products import ProductService
from donation_board.services.store import ClientStateStore
from donation_board.views.base import require_user, run_action


@dataclass
class ProductDetailView:
    store: ClientStateStore
    product_service: ProductService

    def load(self, listing_id: UUID) -> Ok[ProductDetails] | Failure:
        """Load a listing's detail page for the current viewer."""
        viewer_id = self.store.user.id if self.store.user else None
        return run_action(
            self.store,
            "load_product",
            lambda: self.product_service.get_details(listing_id, viewer_id),
        )

    def toggle_favorite(self, listing_id: UUID) -> Ok[bool] | Failure:
        """Add or remove the listing from the viewer's wishlist."""

        def toggle() -> bool:
            user = require_user(self.store, "save favorites")
            return self.product_service.toggle_favorite(user.id, listing_id)

        return run_action(self.store, "toggle_favorite", toggle)
