"""Supabase repository for profiles, reviews and wishlists."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from donation_board.adapters.supabase_errors import remote_call
from donation_board.domain.errors import RemoteCallError
from donation_board.domain.models import Profile, Review, Role
from donation_board.services.products import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile-related tables."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return a profile by user id, if present."""
        with remote_call("load profile"):
            response = (
                self.client.table("profiles")
                .select("*")
                .eq("id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def create_profile(self, payload: dict[str, object]) -> Profile:
        """Insert a profile row and return it."""
        with remote_call("create profile"):
            response = self.client.table("profiles").insert(payload).execute()
        if not response.data:
            raise RemoteCallError("create profile", "no row returned")
        return _parse_profile(response.data[0])

    def list_reviews(self, reviewed_id: UUID) -> list[Review]:
        """Return reviews left for a user, with reviewer names."""
        with remote_call("load reviews"):
            response = (
                self.client.table("reviews")
                .select(
                    "id, rating, comment, created_at, "
                    "profiles!reviewer_id (full_name, avatar_url)"
                )
                .eq("reviewed_id", str(reviewed_id))
                .execute()
            )
        return [_parse_review(row) for row in response.data or []]

    def is_favorite(self, user_id: UUID, listing_id: UUID) -> bool:
        """Return True when the listing is in the user's wishlist."""
        with remote_call("load wishlist"):
            response = (
                self.client.table("wishlists")
                .select("id")
                .eq("user_id", str(user_id))
                .eq("announcement_id", str(listing_id))
                .limit(1)
                .execute()
            )
        return bool(response.data)

    def add_favorite(self, user_id: UUID, listing_id: UUID) -> None:
        """Add a listing to the user's wishlist."""
        with remote_call("add to wishlist"):
            self.client.table("wishlists").insert(
                {"user_id": str(user_id), "announcement_id": str(listing_id)}
            ).execute()

    def remove_favorite(self, user_id: UUID, listing_id: UUID) -> None:
        """Remove a listing from the user's wishlist."""
        with remote_call("remove from wishlist"):
            self.client.table("wishlists").delete().eq("user_id", str(user_id)).eq(
                "announcement_id", str(listing_id)
            ).execute()


def _parse_profile(row: dict[str, object]) -> Profile:
    role_raw = row.get("role")
    last_seen_raw = row.get("last_seen")
    return Profile(
        id=UUID(str(row["id"])),
        full_name=str(row.get("full_name") or ""),
        avatar_url=row.get("avatar_url"),
        role=Role(role_raw) if role_raw in Role.__members__ else None,
        username=row.get("username"),
        city=row.get("city"),
        biography=row.get("biography"),
        visibility=bool(row.get("visibility", True)),
        last_seen=(
            datetime.fromisoformat(last_seen_raw)
            if isinstance(last_seen_raw, str) and last_seen_raw
            else None
        ),
    )


def _parse_review(row: dict[str, object]) -> Review:
    reviewer = row.get("profiles")
    reviewer = reviewer if isinstance(reviewer, dict) else {}
    created_raw = row.get("created_at")
    return Review(
        id=UUID(str(row["id"])),
        rating=float(row.get("rating", 0.0)),
        comment=str(row.get("comment") or ""),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
        reviewer_name=reviewer.get("full_name"),
        reviewer_avatar_url=reviewer.get("avatar_url"),
    )
