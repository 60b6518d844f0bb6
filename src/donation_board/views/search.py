"""Search page view: debounced queries kept current by realtime events."""

import logging
from dataclasses import dataclass, field, replace

from donation_board.domain.events import ChangeEvent
from donation_board.domain.listings import Condition
from donation_board.domain.results import Failure, Ok
from donation_board.domain.search import ResultSet, SearchFilters, SortKey
from donation_board.services.debounce import Debouncer
from donation_board.services.reconciler import reconcile
from donation_board.services.search import SearchService
from donation_board.services.store import ClientStateStore
from donation_board.views.base import notify_failure

logger = logging.getLogger(__name__)

SEARCH_ACTION = "search"


@dataclass
class SearchView:
    """Holds the search filters and the reconciled result set."""

    store: ClientStateStore
    search_service: SearchService
    debounce_seconds: float = 0.3
    filters: SearchFilters = field(default_factory=SearchFilters)
    result_set: ResultSet | None = None
    error: Failure | None = None
    loading: bool = False
    debouncer: Debouncer = field(init=False)

    def __post_init__(self) -> None:
        self.debouncer = Debouncer(self.debounce_seconds, self.refresh)

    def set_query(self, query: str) -> None:
        """Handle a keystroke in the search box."""
        self.update_filters(query=query)

    def update_filters(  # noqa: PLR0913
        self,
        *,
        query: str | None = None,
        category: str | None = None,
        condition: Condition | None = None,
        clear_condition: bool = False,
        sort: SortKey | None = None,
        page: int | None = None,
    ) -> SearchFilters:
        """Apply filter changes and schedule a debounced search.

        Changing the predicate or the sort order returns to the first page
        unless a page is given explicitly.
        """
        updated = replace(
            self.filters,
            query=self.filters.query if query is None else query,
            category=self.filters.category if category is None else category,
            condition=(
                None
                if clear_condition
                else (self.filters.condition if condition is None else condition)
            ),
            sort=self.filters.sort if sort is None else sort,
        )
        if page is not None:
            updated = replace(updated, page=page)
        elif (
            not updated.same_predicate(self.filters)
            or updated.sort != self.filters.sort
        ):
            updated = replace(updated, page=1)
        self.filters = updated
        self.debouncer.trigger()
        return updated

    async def refresh(self) -> None:
        """Run the active query now and replace the result set."""
        filters = self.filters
        self.loading = True
        try:
            outcome = self.search_service.search(filters)
        finally:
            self.loading = False

        if isinstance(outcome, Failure):
            self.error = outcome
            if outcome.retryable:
                notify_failure(self.store, SEARCH_ACTION, outcome)
            return

        previous = self.result_set
        removed_ids = (
            previous.removed_ids
            if previous is not None and previous.filters.same_predicate(filters)
            else ()
        )
        self.result_set = ResultSet.from_page(filters, outcome.value, removed_ids)
        self.error = None

    async def submit(self) -> None:
        """Run the active query now, dropping any pending debounced run."""
        self.debouncer.cancel()
        await self.refresh()

    async def retry(self) -> None:
        """Retry the last failed search."""
        logger.info("Retrying listing search")
        await self.submit()

    async def apply_change(self, event: ChangeEvent) -> None:
        """Reconcile one realtime event into the result set."""
        if self.result_set is None:
            return
        outcome = reconcile(self.result_set, event)
        self.result_set = outcome.result_set
        if outcome.refresh_required:
            await self.refresh()

    def snapshot(self) -> Ok[ResultSet] | Failure | None:
        """Return the current results, the pending error, or None before any search."""
        if self.error is not None:
            return self.error
        if self.result_set is None:
            return None
        return Ok(self.result_set)
