"""Domain models for donated item listings."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

ALL_CATEGORIES = "All Categories"

CATEGORIES = (
    "Furniture",
    "Electronics",
    "Clothing",
    "Books",
    "Kitchen",
    "Sports",
    "Toys",
    "Tools",
    "Other",
)


class Condition(StrEnum):
    """Physical condition of a donated item."""

    LIKE_NEW = "LIKE_NEW"
    GOOD = "GOOD"
    WORN = "WORN"
    BROKEN = "BROKEN"


class ListingStatus(StrEnum):
    """Availability of a listing."""

    PENDING = "PENDING"
    CLAIMED = "CLAIMED"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class Dimensions:
    """Physical dimensions of an item."""

    length: float
    width: float
    height: float
    unit: str

    def describe(self) -> str:
        """Return a compact `LxWxH unit` label."""
        return f"{self.length:g}x{self.width:g}x{self.height:g} {self.unit}"


@dataclass(frozen=True)
class Listing:
    """Represents a row of the announcements table."""

    id: UUID
    user_id: UUID
    title: str
    description: str
    category: str
    condition: Condition
    status: ListingStatus
    location: str
    photos: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    dimensions: Dimensions | None = None
    pickup_instructions: str | None = None
    rating: float | None = None
    review_count: int | None = None
    claimed_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


def listing_from_row(row: dict[str, object]) -> Listing:
    """Parse an announcements row into a listing."""
    return Listing(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        category=str(row.get("category") or ""),
        condition=Condition(row.get("condition") or Condition.GOOD),
        status=ListingStatus(row.get("status") or ListingStatus.PENDING),
        location=str(row.get("location") or ""),
        photos=tuple(str(url) for url in row.get("photos") or []),
        tags=unique_tags(row.get("tags") or []),
        dimensions=_parse_dimensions(row.get("dimensions")),
        pickup_instructions=row.get("pickup_instructions"),
        rating=float(row["rating"]) if row.get("rating") is not None else None,
        review_count=(
            int(row["review_count"]) if row.get("review_count") is not None else None
        ),
        claimed_by=UUID(str(row["claimed_by"])) if row.get("claimed_by") else None,
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def listing_to_row(listing: Listing) -> dict[str, object]:
    """Serialize a listing back into its row representation."""
    dimensions = listing.dimensions
    return {
        "id": str(listing.id),
        "user_id": str(listing.user_id),
        "title": listing.title,
        "description": listing.description,
        "category": listing.category,
        "condition": listing.condition.value,
        "status": listing.status.value,
        "location": listing.location,
        "photos": list(listing.photos),
        "tags": list(listing.tags),
        "dimensions": (
            {
                "length": dimensions.length,
                "width": dimensions.width,
                "height": dimensions.height,
                "unit": dimensions.unit,
            }
            if dimensions
            else None
        ),
        "pickup_instructions": listing.pickup_instructions,
        "rating": listing.rating,
        "review_count": listing.review_count,
        "claimed_by": str(listing.claimed_by) if listing.claimed_by else None,
        "created_at": listing.created_at.isoformat() if listing.created_at else None,
        "updated_at": listing.updated_at.isoformat() if listing.updated_at else None,
    }


def unique_tags(tags: object) -> tuple[str, ...]:
    """Return trimmed tags in first-seen order without duplicates."""
    seen: list[str] = []
    if not isinstance(tags, list | tuple):
        return ()
    for tag in tags:
        cleaned = str(tag).strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return tuple(seen)


def _parse_dimensions(raw: object) -> Dimensions | None:
    if not isinstance(raw, dict):
        return None
    try:
        return Dimensions(
            length=float(raw["length"]),
            width=float(raw["width"]),
            height=float(raw["height"]),
            unit=str(raw.get("unit", "cm")),
        )
    except (KeyError, TypeError, ValueError):
        return None


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None
