"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TypeVar
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request

from donation_board.api.schemas import (
    ListingPayload,
    MessagePayload,
    SearchFiltersPayload,
    SignInPayload,
    SignUpPayload,
    ThemePayload,
)
from donation_board.app_logging import configure_logging
from donation_board.containers import AppContainer
from donation_board.domain.dashboard import Dashboard
from donation_board.domain.listings import Listing
from donation_board.domain.messages import Chat, Message
from donation_board.domain.notifications import Notification
from donation_board.domain.products import ProductDetails
from donation_board.domain.results import Failure, FailureKind, Ok
from donation_board.views.search import SearchView

T = TypeVar("T")

_FAILURE_STATUS = {
    FailureKind.VALIDATION: 422,
    FailureKind.NOT_FOUND: 404,
    FailureKind.FORBIDDEN: 403,
    FailureKind.REMOTE: 502,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        reconciler = state_container.reconciler
        if reconciler is not None:
            try:
                await reconciler.start()
            except Exception:
                logger.exception("Failed to subscribe to listing changes")
        await state_container.search_view.submit()
        state_container.store.set_loading(False)
        yield
        if reconciler is not None:
            try:
                await reconciler.stop()
            except Exception:
                logger.exception("Failed to unsubscribe from listing changes")
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/session")
    async def session(request: Request) -> dict[str, object]:
        """Return the session user and the global loading flag."""
        store = _container(request).store
        return {"user": store.user, "is_loading": store.is_loading}

    @app.post("/auth/sign-up")
    async def sign_up(payload: SignUpPayload, request: Request) -> dict[str, object]:
        """Register an account."""
        user = _unwrap(
            _container(request).auth_view.sign_up(
                payload.email, payload.password, payload.full_name, payload.role
            )
        )
        return {"user": user}

    @app.post("/auth/sign-in")
    async def sign_in(payload: SignInPayload, request: Request) -> dict[str, object]:
        """Sign in with email and password."""
        user = _unwrap(
            _container(request).auth_view.sign_in(payload.email, payload.password)
        )
        return {"user": user}

    @app.post("/auth/sign-out")
    async def sign_out(request: Request) -> dict[str, str]:
        """End the session."""
        _unwrap(_container(request).auth_view.sign_out())
        return {"status": "ok"}

    @app.get("/preferences/theme")
    async def get_theme(request: Request) -> dict[str, object]:
        """Return the persisted theme flag and the applied visual mode."""
        state_container = _container(request)
        return {
            "is_dark_mode": state_container.store.is_dark_mode,
            "mode": state_container.appearance.mode,
        }

    @app.put("/preferences/theme")
    async def set_theme(payload: ThemePayload, request: Request) -> dict[str, object]:
        """Toggle the theme and persist it."""
        state_container = _container(request)
        state_container.store.set_dark_mode(payload.is_dark_mode)
        return {
            "is_dark_mode": state_container.store.is_dark_mode,
            "mode": state_container.appearance.mode,
        }

    @app.get("/notifications")
    async def list_notifications(request: Request) -> list[Notification]:
        """Return queued notifications, oldest first."""
        return _container(request).store.notifications

    @app.delete("/notifications/{notification_id}")
    async def dismiss_notification(
        notification_id: str, request: Request
    ) -> dict[str, str]:
        """Dismiss a notification."""
        _container(request).store.remove_notification(notification_id)
        return {"status": "ok"}

    @app.put("/search/filters")
    async def update_search_filters(
        payload: SearchFiltersPayload, request: Request
    ) -> dict[str, object]:
        """Change the search filters; the query runs after the debounce window."""
        filters = _container(request).search_view.update_filters(
            query=payload.query,
            category=payload.category,
            condition=payload.condition,
            clear_condition=payload.clears_condition,
            sort=payload.sort,
            page=payload.page,
        )
        return {"filters": filters}

    @app.post("/search/refresh")
    async def refresh_search(request: Request) -> dict[str, object]:
        """Run the active search now."""
        search_view = _container(request).search_view
        await search_view.submit()
        return _search_state(search_view)

    @app.post("/search/retry")
    async def retry_search(request: Request) -> dict[str, object]:
        """Retry a failed search."""
        search_view = _container(request).search_view
        await search_view.retry()
        return _search_state(search_view)

    @app.get("/search/results")
    async def search_results(request: Request) -> dict[str, object]:
        """Return the reconciled result set and any pending error."""
        return _search_state(_container(request).search_view)

    @app.post("/listings")
    async def create_listing(payload: ListingPayload, request: Request) -> Listing:
        """Create a listing owned by the session user."""
        return _unwrap(_container(request).listing_editor.create(payload.to_draft()))

    @app.get("/listings/{listing_id}")
    async def get_listing(listing_id: UUID, request: Request) -> Listing:
        """Load an owned listing for editing."""
        return _unwrap(_container(request).listing_editor.load(listing_id))

    @app.patch("/listings/{listing_id}")
    async def update_listing(
        listing_id: UUID, payload: ListingPayload, request: Request
    ) -> Listing:
        """Save changes to an owned listing."""
        return _unwrap(
            _container(request).listing_editor.update(listing_id, payload.to_draft())
        )

    @app.delete("/listings/{listing_id}")
    async def delete_listing(listing_id: UUID, request: Request) -> dict[str, str]:
        """Delete an owned listing and its photos."""
        _unwrap(_container(request).listing_editor.delete(listing_id))
        return {"status": "ok"}

    @app.get("/dashboard")
    async def dashboard(request: Request) -> Dashboard:
        """Return the session user's listings and stats."""
        return _unwrap(_container(request).dashboard_view.load())

    @app.get("/products/{listing_id}")
    async def product_detail(listing_id: UUID, request: Request) -> ProductDetails:
        """Return a listing's detail page."""
        return _unwrap(_container(request).product_view.load(listing_id))

    @app.post("/products/{listing_id}/favorite")
    async def toggle_favorite(listing_id: UUID, request: Request) -> dict[str, bool]:
        """Toggle the listing in the session user's wishlist."""
        is_favorite = _unwrap(
            _container(request).product_view.toggle_favorite(listing_id)
        )
        return {"is_favorite": is_favorite}

    @app.get("/chats")
    async def list_chats(request: Request) -> list[Chat]:
        """Return the session user's chats."""
        return _unwrap(_container(request).messages_view.chats())

    @app.get("/chats/{user_id}/messages")
    async def conversation(user_id: UUID, request: Request) -> list[Message]:
        """Return the conversation with another user."""
        return _unwrap(_container(request).messages_view.conversation(user_id))

    @app.post("/chats/{user_id}/messages")
    async def send_message(
        user_id: UUID, payload: MessagePayload, request: Request
    ) -> Message:
        """Send a message to another user."""
        return _unwrap(
            _container(request).messages_view.send(
                user_id, payload.content, payload.announcement_id
            )
        )

    return app


def _unwrap(outcome: Ok[T] | Failure) -> T:
    if isinstance(outcome, Failure):
        raise HTTPException(
            status_code=_FAILURE_STATUS[outcome.kind],
            detail={
                "kind": outcome.kind.value,
                "message": outcome.message,
                "retryable": outcome.retryable,
            },
        )
    return outcome.value


def _search_state(search_view: SearchView) -> dict[str, object]:
    return {
        "filters": search_view.filters,
        "results": search_view.result_set,
        "error": search_view.error,
        "loading": search_view.loading,
    }
