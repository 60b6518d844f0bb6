"""Tests for debounced search input."""

import asyncio

from donation_board.services.debounce import Debouncer
from donation_board.services.search import SearchService
from donation_board.views.search import SearchView
from tests.conftest import InMemoryListingRepository


def test_debouncer_runs_only_the_last_call() -> None:
    calls: list[str] = []

    async def record(value: str) -> None:
        calls.append(value)

    async def scenario() -> None:
        debouncer = Debouncer(0.01, record)
        debouncer.trigger("c")
        debouncer.trigger("ca")
        debouncer.trigger("cat")
        assert debouncer.pending
        await debouncer.wait()

    asyncio.run(scenario())

    assert calls == ["cat"]


def test_failing_callback_is_contained_and_next_call_runs() -> None:
    calls: list[str] = []

    async def flaky(value: str) -> None:
        calls.append(value)
        if value == "boom":
            raise RuntimeError("search exploded")

    async def scenario() -> None:
        debouncer = Debouncer(0.01, flaky)
        failed = debouncer.trigger("boom")
        await debouncer.wait()
        assert failed.done()
        assert failed.exception() is None
        debouncer.trigger("ok")
        await debouncer.wait()

    asyncio.run(scenario())

    assert calls == ["boom", "ok"]


def test_flush_runs_pending_call_immediately() -> None:
    calls: list[str] = []

    async def record(value: str) -> None:
        calls.append(value)

    async def scenario() -> None:
        debouncer = Debouncer(60, record)
        debouncer.trigger("now")
        await debouncer.flush()
        assert not debouncer.pending

    asyncio.run(scenario())

    assert calls == ["now"]


def test_typing_issues_a_single_query(store) -> None:
    repository = InMemoryListingRepository()
    repository.add(title="Cat tree")
    repository.add(title="Dog bed")

    async def scenario() -> SearchView:
        view = SearchView(
            store=store,
            search_service=SearchService(repository),
            debounce_seconds=0.01,
        )
        for text in ("c", "ca", "cat"):
            view.set_query(text)
        await view.debouncer.wait()
        return view

    view = asyncio.run(scenario())

    assert len(repository.search_calls) == 1
    assert repository.search_calls[0].text == "cat"
    assert [item.title for item in view.result_set.items] == ["Cat tree"]
