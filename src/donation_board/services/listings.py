"""Create, edit and delete listings owned by the session user."""

import logging
import secrets
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from donation_board.domain.errors import (
    NotFoundError,
    PermissionDeniedError,
    RemoteCallError,
    ValidationError,
)
from donation_board.domain.listings import (
    CATEGORIES,
    Condition,
    Dimensions,
    Listing,
    ListingStatus,
    unique_tags,
)
from donation_board.domain.models import SessionUser

logger = logging.getLogger(__name__)

MAX_PHOTOS = 5
MAX_TAGS = 5
MAX_PHOTO_BYTES = 5 * 1024 * 1024


class ListingRepository(Protocol):
    """Persistence interface for listings."""

    def create_listing(self, payload: dict[str, object]) -> Listing:
        """Insert a listing row and return it."""

    def update_listing(self, listing_id: UUID, payload: dict[str, object]) -> Listing:
        """Update a listing row and return it."""

    def get_listing(self, listing_id: UUID) -> Listing | None:
        """Return a listing by id, if present."""

    def delete_listing(self, listing_id: UUID) -> None:
        """Delete a listing row."""

    def list_user_listings(self, user_id: UUID) -> list[Listing]:
        """Return a user's listings, newest first."""

    def list_related(
        self, category: str, exclude_id: UUID, limit: int
    ) -> list[Listing]:
        """Return other listings in the same category."""


class PhotoStorage(Protocol):
    """Object storage for listing photos."""

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Upload an object and return its public URL."""

    def remove(self, paths: list[str]) -> None:
        """Remove objects by path."""

    def path_from_url(self, url: str) -> str | None:
        """Return the object path for a public URL produced by this storage."""


@dataclass(frozen=True)
class PhotoUpload:
    """A photo selected for upload."""

    filename: str
    content_type: str
    content: bytes

    @property
    def extension(self) -> str:
        """Return the lowercase file extension, defaulting to `jpg`."""
        _, dot, ext = self.filename.rpartition(".")
        return ext.lower() if dot and ext else "jpg"


@dataclass(frozen=True)
class ListingDraft:
    """Form state for creating or editing a listing."""

    title: str
    description: str
    category: str
    location: str
    condition: Condition = Condition.GOOD
    status: ListingStatus = ListingStatus.PENDING
    pickup_instructions: str = ""
    tags: tuple[str, ...] = ()
    dimensions: Dimensions | None = None
    photos: tuple[PhotoUpload, ...] = ()
    kept_photos: tuple[str, ...] = field(default=())


def validate_draft(user: SessionUser | None, draft: ListingDraft, action: str) -> None:
    """Raise ValidationError when the draft cannot be submitted."""
    if user is None:
        raise ValidationError(f"Please sign in to {action}")
    if not draft.title.strip():
        raise ValidationError("Title is required")
    if not draft.category:
        raise ValidationError("Category is required")
    if draft.category not in CATEGORIES:
        raise ValidationError(f"Unknown category: {draft.category}")
    if not draft.description.strip():
        raise ValidationError("Description is required")
    if not draft.location.strip():
        raise ValidationError("Location is required")
    if len(draft.kept_photos) + len(draft.photos) > MAX_PHOTOS:
        raise ValidationError(f"Maximum {MAX_PHOTOS} photos allowed")
    for photo in draft.photos:
        if not photo.content_type.startswith("image/"):
            raise ValidationError(f"{photo.filename} is not an image")
        if len(photo.content) > MAX_PHOTO_BYTES:
            raise ValidationError(f"{photo.filename} is larger than 5MB")
    if len(unique_tags(list(draft.tags))) > MAX_TAGS:
        raise ValidationError(f"Maximum {MAX_TAGS} tags allowed")


@dataclass
class ListingService:
    """Application service for listing mutations."""

    repository: ListingRepository
    photo_storage: PhotoStorage

    def create_listing(self, user: SessionUser | None, draft: ListingDraft) -> Listing:
        """Upload photos and insert a listing, cleaning up uploads on failure."""
        validate_draft(user, draft, "create a listing")
        uploaded: list[str] = []
        try:
            photo_urls = self._upload_photos(user.id, draft.photos, uploaded)
            return self.repository.create_listing(
                {
                    "user_id": str(user.id),
                    **_draft_payload(draft),
                    "photos": photo_urls,
                }
            )
        except Exception:
            self._discard_uploads(uploaded)
            raise

    def update_listing(
        self, user: SessionUser | None, listing_id: UUID, draft: ListingDraft
    ) -> Listing:
        """Update an owned listing; kept photos come first, new uploads after."""
        validate_draft(user, draft, "update the listing")
        current = self.get_owned_listing(user, listing_id)
        if any(url not in current.photos for url in draft.kept_photos):
            raise ValidationError("Kept photos must belong to the listing")
        uploaded: list[str] = []
        try:
            new_urls = self._upload_photos(user.id, draft.photos, uploaded)
            updated = self.repository.update_listing(
                listing_id,
                {
                    **_draft_payload(draft),
                    "photos": [*draft.kept_photos, *new_urls],
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
            )
        except Exception:
            self._discard_uploads(uploaded)
            raise

        dropped = [url for url in current.photos if url not in draft.kept_photos]
        self._remove_photo_objects(dropped)
        return updated

    def delete_listing(self, user: SessionUser | None, listing_id: UUID) -> None:
        """Delete an owned listing and its stored photos."""
        listing = self.get_owned_listing(user, listing_id)
        self.repository.delete_listing(listing_id)
        self._remove_photo_objects(list(listing.photos))

    def get_owned_listing(self, user: SessionUser | None, listing_id: UUID) -> Listing:
        """Return a listing after checking the user owns it."""
        if user is None:
            raise ValidationError("Please sign in to manage listings")
        listing = self.repository.get_listing(listing_id)
        if listing is None:
            raise NotFoundError(f"Listing {listing_id} not found")
        if listing.user_id != user.id:
            raise PermissionDeniedError("Only the owner can change this listing")
        return listing

    def _upload_photos(
        self, user_id: UUID, photos: tuple[PhotoUpload, ...], uploaded: list[str]
    ) -> list[str]:
        urls = []
        for photo in photos:
            path = f"{user_id}/{secrets.token_hex(8)}.{photo.extension}"
            url = self.photo_storage.upload(path, photo.content, photo.content_type)
            urls.append(url)
            uploaded.append(path)
        return urls

    def _discard_uploads(self, paths: list[str]) -> None:
        if not paths:
            return
        try:
            self.photo_storage.remove(paths)
        except RemoteCallError:
            logger.exception("Failed to remove orphaned uploads: %s", paths)

    def _remove_photo_objects(self, urls: list[str]) -> None:
        paths = [
            path for url in urls if (path := self.photo_storage.path_from_url(url))
        ]
        if not paths:
            return
        try:
            self.photo_storage.remove(paths)
        except RemoteCallError:
            logger.exception("Failed to remove listing photos: %s", paths)


def _draft_payload(draft: ListingDraft) -> dict[str, object]:
    dimensions = draft.dimensions
    return {
        "title": draft.title.strip(),
        "description": draft.description.strip(),
        "category": draft.category,
        "condition": draft.condition.value,
        "status": draft.status.value,
        "location": draft.location.strip(),
        "pickup_instructions": draft.pickup_instructions.strip(),
        "tags": list(unique_tags(list(draft.tags))),
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
    }
