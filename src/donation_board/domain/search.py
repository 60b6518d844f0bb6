"""Domain models for listing search."""

import math
from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from donation_board.domain.listings import ALL_CATEGORIES, Condition, Listing

PAGE_SIZE = 12
MAX_REMEMBERED_DELETES = 256


class SortKey(StrEnum):
    """Supported result orderings, encoded as `<field>-<direction>`."""

    CREATED_AT_DESC = "created_at-desc"
    CREATED_AT_ASC = "created_at-asc"
    TITLE_ASC = "title-asc"
    TITLE_DESC = "title-desc"
    RATING_DESC = "rating-desc"
    RATING_ASC = "rating-asc"

    @property
    def field(self) -> str:
        """Return the column the key orders by."""
        return self.value.rsplit("-", maxsplit=1)[0]

    @property
    def ascending(self) -> bool:
        """Return True for ascending order."""
        return self.value.endswith("-asc")


@dataclass(frozen=True)
class SearchFilters:
    """UI-selected search state."""

    query: str = ""
    category: str | None = None
    condition: Condition | None = None
    sort: SortKey = SortKey.CREATED_AT_DESC
    page: int = 1

    @property
    def text(self) -> str | None:
        """Return the trimmed search text, or None when no text filter applies."""
        cleaned = self.query.strip()
        return cleaned or None

    @property
    def category_filter(self) -> str | None:
        """Return the category to filter on, ignoring the all-categories sentinel."""
        if not self.category or self.category == ALL_CATEGORIES:
            return None
        return self.category

    def same_predicate(self, other: "SearchFilters") -> bool:
        """Return True when both filters select the same rows."""
        return (
            self.text == other.text
            and self.category_filter == other.category_filter
            and self.condition == other.condition
        )


@dataclass(frozen=True)
class ListingPage:
    """One page of search results with the total matching count."""

    items: tuple[Listing, ...]
    total: int
    page: int
    page_size: int = PAGE_SIZE

    @property
    def page_count(self) -> int:
        """Return the number of pages for the total count."""
        return page_count(self.total, self.page_size)


@dataclass(frozen=True)
class ResultSet:
    """Locally held search results, reconciled against change events."""

    filters: SearchFilters
    items: tuple[Listing, ...] = ()
    total: int = 0
    page_size: int = PAGE_SIZE
    removed_ids: tuple[UUID, ...] = ()

    @classmethod
    def from_page(
        cls,
        filters: SearchFilters,
        page: ListingPage,
        removed_ids: tuple[UUID, ...] = (),
    ) -> "ResultSet":
        """Build a result set from a queried page.

        `removed_ids` carries already-applied deletes across a refresh of the
        same predicate, so a late duplicate delete stays a no-op.
        """
        return cls(
            filters=filters,
            items=tuple(item for item in page.items if item.id not in removed_ids),
            total=page.total,
            page_size=page.page_size,
            removed_ids=removed_ids,
        )

    @property
    def page(self) -> int:
        """Return the 1-based page index of the result set."""
        return self.filters.page

    @property
    def page_count(self) -> int:
        """Return the number of pages for the current total."""
        return page_count(self.total, self.page_size)

    def ids(self) -> list[UUID]:
        """Return listing ids in result order."""
        return [item.id for item in self.items]

    def index_of(self, listing_id: UUID) -> int | None:
        """Return the position of a listing id, if present."""
        for index, item in enumerate(self.items):
            if item.id == listing_id:
                return index
        return None

    def remember_removed(self, listing_id: UUID) -> tuple[UUID, ...]:
        """Return removed ids with `listing_id` appended, oldest dropped first."""
        remembered = (*self.removed_ids, listing_id)
        return remembered[-MAX_REMEMBERED_DELETES:]


def page_count(total: int, page_size: int) -> int:
    """Return ceil(total / page_size)."""
    if total <= 0:
        return 0
    return math.ceil(total / page_size)
