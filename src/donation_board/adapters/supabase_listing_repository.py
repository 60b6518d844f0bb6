"""Supabase-backed listing repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from donation_board.adapters.supabase_errors import remote_call
from donation_board.domain.errors import RemoteCallError
from donation_board.domain.listings import Listing, listing_from_row
from donation_board.services.listings import ListingRepository
from donation_board.services.query_builder import ListingQuery
from donation_board.services.search import ListingSearchRepository

# PostgREST reports a range starting past the last row as unsatisfiable.
_RANGE_NOT_SATISFIABLE = "PGRST103"


@dataclass
class SupabaseListingRepository(ListingRepository, ListingSearchRepository):
    """Supabase implementation for the announcements table."""

    client: Client
    table_name: str = "announcements"

    def search_listings(
        self, query: ListingQuery
    ) -> tuple[list[dict[str, object]], int]:
        """Run a filtered, sorted and paginated query with an exact count."""
        builder = self._filtered(
            self.client.table(self.table_name).select("*", count="exact"), query
        )
        try:
            with remote_call("search listings"):
                response = (
                    builder.order(query.order_field, desc=not query.ascending)
                    .range(query.start, query.end)
                    .execute()
                )
        except RemoteCallError as exc:
            if exc.code != _RANGE_NOT_SATISFIABLE:
                raise
            return [], self._count(query)
        return list(response.data or []), response.count or 0

    def create_listing(self, payload: dict[str, object]) -> Listing:
        """Insert a listing row and return it."""
        with remote_call("create listing"):
            response = self.client.table(self.table_name).insert(payload).execute()
        if not response.data:
            raise RemoteCallError("create listing", "no row returned")
        return listing_from_row(response.data[0])

    def update_listing(self, listing_id: UUID, payload: dict[str, object]) -> Listing:
        """Update a listing row and return it."""
        with remote_call("update listing"):
            response = (
                self.client.table(self.table_name)
                .update(payload)
                .eq("id", str(listing_id))
                .execute()
            )
        if not response.data:
            raise RemoteCallError("update listing", "no row returned")
        return listing_from_row(response.data[0])

    def get_listing(self, listing_id: UUID) -> Listing | None:
        """Return a listing by id, if present."""
        with remote_call("load listing"):
            response = (
                self.client.table(self.table_name)
                .select("*")
                .eq("id", str(listing_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return listing_from_row(response.data[0])

    def delete_listing(self, listing_id: UUID) -> None:
        """Delete a listing row."""
        with remote_call("delete listing"):
            self.client.table(self.table_name).delete().eq(
                "id", str(listing_id)
            ).execute()

    def list_user_listings(self, user_id: UUID) -> list[Listing]:
        """Return a user's listings, newest first."""
        with remote_call("load dashboard"):
            response = (
                self.client.table(self.table_name)
                .select("*")
                .eq("user_id", str(user_id))
                .order("created_at", desc=True)
                .execute()
            )
        return [listing_from_row(row) for row in response.data or []]

    def list_related(
        self, category: str, exclude_id: UUID, limit: int
    ) -> list[Listing]:
        """Return other listings in the same category."""
        with remote_call("load related listings"):
            response = (
                self.client.table(self.table_name)
                .select("*")
                .eq("category", category)
                .neq("id", str(exclude_id))
                .limit(limit)
                .execute()
            )
        return [listing_from_row(row) for row in response.data or []]

    def _count(self, query: ListingQuery) -> int:
        with remote_call("count listings"):
            response = self._filtered(
                self.client.table(self.table_name).select("id", count="exact"), query
            ).limit(1).execute()
        return response.count or 0

    @staticmethod
    def _filtered(builder, query: ListingQuery):  # type: ignore[no-untyped-def]
        for column, value in query.equals:
            builder = builder.eq(column, value)
        text_filter = query.text_filter()
        if text_filter:
            builder = builder.or_(text_filter)
        return builder
