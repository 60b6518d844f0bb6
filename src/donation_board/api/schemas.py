"""Pydantic request models for the HTTP shell."""

from uuid import UUID

from pydantic import Base64Bytes, BaseModel, Field

from donation_board.domain.listings import Condition, Dimensions, ListingStatus
from donation_board.domain.models import Role
from donation_board.domain.search import SortKey
from donation_board.services.listings import ListingDraft, PhotoUpload


class SignUpPayload(BaseModel):
    """Registration form."""

    email: str
    password: str
    full_name: str
    role: Role = Role.BENEFICIARY


class SignInPayload(BaseModel):
    """Sign-in form."""

    email: str
    password: str


class ThemePayload(BaseModel):
    """Theme toggle."""

    is_dark_mode: bool


class SearchFiltersPayload(BaseModel):
    """Partial search filter update; omitted fields keep their value."""

    query: str | None = None
    category: str | None = None
    condition: Condition | None = None
    sort: SortKey | None = None
    page: int | None = Field(default=None, ge=1)

    @property
    def clears_condition(self) -> bool:
        """Return True when the condition was explicitly set to null."""
        return "condition" in self.model_fields_set and self.condition is None


class DimensionsPayload(BaseModel):
    """Item dimensions."""

    length: float = Field(ge=0)
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    unit: str = "cm"


class PhotoPayload(BaseModel):
    """A base64-encoded photo upload."""

    filename: str
    content_type: str
    content: Base64Bytes


class ListingPayload(BaseModel):
    """Create or edit listing form."""

    title: str
    description: str
    category: str
    location: str
    condition: Condition = Condition.GOOD
    status: ListingStatus = ListingStatus.PENDING
    pickup_instructions: str = ""
    tags: list[str] = Field(default_factory=list)
    dimensions: DimensionsPayload | None = None
    photos: list[PhotoPayload] = Field(default_factory=list)
    kept_photos: list[str] = Field(default_factory=list)

    def to_draft(self) -> ListingDraft:
        """Convert the form into a listing draft."""
        dimensions = self.dimensions
        return ListingDraft(
            title=self.title,
            description=self.description,
            category=self.category,
            location=self.location,
            condition=self.condition,
            status=self.status,
            pickup_instructions=self.pickup_instructions,
            tags=tuple(self.tags),
            dimensions=(
                Dimensions(
                    length=dimensions.length,
                    width=dimensions.width,
                    height=dimensions.height,
                    unit=dimensions.unit,
                )
                if dimensions
                else None
            ),
            photos=tuple(
                PhotoUpload(
                    filename=photo.filename,
                    content_type=photo.content_type,
                    content=photo.content,
                )
                for photo in self.photos
            ),
            kept_photos=tuple(self.kept_photos),
        )


class MessagePayload(BaseModel):
    """Outgoing chat message."""

    content: str
    announcement_id: UUID | None = None
