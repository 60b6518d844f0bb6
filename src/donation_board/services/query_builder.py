"""Translate search filters into a backend-agnostic listing query."""

from dataclasses import dataclass

from donation_board.domain.errors import ValidationError
from donation_board.domain.search import PAGE_SIZE, SearchFilters

TEXT_COLUMNS = ("title", "description")


@dataclass(frozen=True)
class ListingQuery:
    """A filtered, sorted and paginated query against the listings table.

    `start` and `end` form an inclusive row range, matching the backend's
    range semantics.
    """

    equals: tuple[tuple[str, str], ...]
    text: str | None
    order_field: str
    ascending: bool
    start: int
    end: int

    @property
    def limit(self) -> int:
        """Return the page size encoded by the row range."""
        return self.end - self.start + 1

    def text_filter(self) -> str | None:
        """Return the `or` filter expression matching title or description."""
        if self.text is None:
            return None
        escaped = self.text.replace("\\", "\\\\").replace('"', '\\"')
        return ",".join(f'{column}.ilike."%{escaped}%"' for column in TEXT_COLUMNS)

    def can_evaluate(self, row: dict[str, object]) -> bool:
        """Return True when the row carries every column the predicate reads."""
        columns = [column for column, _ in self.equals]
        if self.text is not None:
            columns.extend(TEXT_COLUMNS)
        return all(column in row for column in columns)

    def matches(self, row: dict[str, object]) -> bool:
        """Return True when the row satisfies the query predicate."""
        for column, value in self.equals:
            if str(row.get(column)) != value:
                return False
        if self.text is None:
            return True
        needle = self.text.casefold()
        return any(
            needle in str(row.get(column) or "").casefold() for column in TEXT_COLUMNS
        )

    def sort_rows(self, rows: list[dict[str, object]]) -> list[dict[str, object]]:
        """Order rows like the backend: nulls last ascending, first descending."""
        present = [row for row in rows if row.get(self.order_field) is not None]
        missing = [row for row in rows if row.get(self.order_field) is None]
        ordered = sorted(
            present,
            key=lambda row: row[self.order_field],
            reverse=not self.ascending,
        )
        return ordered + missing if self.ascending else missing + ordered


def build_listing_query(
    filters: SearchFilters, page_size: int = PAGE_SIZE
) -> ListingQuery:
    """Build the listing query for the current search state."""
    if filters.page < 1:
        raise ValidationError("Page must be 1 or greater")
    if page_size < 1:
        raise ValidationError("Page size must be 1 or greater")

    equals: list[tuple[str, str]] = []
    if filters.category_filter:
        equals.append(("category", filters.category_filter))
    if filters.condition:
        equals.append(("condition", filters.condition.value))

    start = (filters.page - 1) * page_size
    return ListingQuery(
        equals=tuple(equals),
        text=filters.text,
        order_field=filters.sort.field,
        ascending=filters.sort.ascending,
        start=start,
        end=start + page_size - 1,
    )
