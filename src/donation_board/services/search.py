"""Listing search service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from donation_board.domain.errors import RemoteCallError, ValidationError
from donation_board.domain.listings import listing_from_row
from donation_board.domain.results import Failure, Ok
from donation_board.domain.search import PAGE_SIZE, ListingPage, SearchFilters
from donation_board.services.query_builder import ListingQuery, build_listing_query

logger = logging.getLogger(__name__)


class ListingSearchRepository(Protocol):
    """Query interface for the listings table."""

    def search_listings(
        self, query: ListingQuery
    ) -> tuple[list[dict[str, object]], int]:
        """Return the rows in the query's range and the exact matching count."""


@dataclass
class SearchService:
    """Run filtered, sorted and paginated listing searches."""

    repository: ListingSearchRepository
    page_size: int = PAGE_SIZE

    def search(self, filters: SearchFilters) -> Ok[ListingPage] | Failure:
        """Run one search and return the page or a recoverable failure."""
        try:
            query = build_listing_query(filters, self.page_size)
            rows, total = self.repository.search_listings(query)
        except ValidationError as exc:
            return Failure.from_exception(exc)
        except RemoteCallError as exc:
            logger.warning("Listing search failed: %s", exc)
            return Failure.from_exception(exc)

        return Ok(
            ListingPage(
                items=tuple(listing_from_row(row) for row in rows),
                total=total,
                page=filters.page,
                page_size=self.page_size,
            )
        )
