"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from donation_board.adapters.json_preferences_storage import (
    InMemoryPreferencesStorage,
    JsonFilePreferencesStorage,
)
from donation_board.adapters.supabase_auth_client import SupabaseAuthClient
from donation_board.adapters.supabase_listing_repository import (
    SupabaseListingRepository,
)
from donation_board.adapters.supabase_message_repository import (
    SupabaseMessageRepository,
)
from donation_board.adapters.supabase_photo_storage import SupabasePhotoStorage
from donation_board.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from donation_board.adapters.supabase_realtime_feed import SupabaseRealtimeFeed
from donation_board.config import Settings
from donation_board.services.auth import AuthService
from donation_board.services.dashboard import DashboardService
from donation_board.services.listings import ListingService
from donation_board.services.messages import MessageService
from donation_board.services.products import ProductService
from donation_board.services.reconciler import RealtimeReconciler
from donation_board.services.search import SearchService
from donation_board.services.store import (
    Appearance,
    ClientStateStore,
    PreferencesStorage,
)
from donation_board.views.auth import AuthView
from donation_board.views.dashboard import DashboardView
from donation_board.views.listing_editor import ListingEditorView
from donation_board.views.messages import MessagesView
from donation_board.views.product_detail import ProductDetailView
from donation_board.views.search import SearchView


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: ClientStateStore
    appearance: Appearance
    search_view: SearchView
    listing_editor: ListingEditorView
    dashboard_view: DashboardView
    product_view: ProductDetailView
    messages_view: MessagesView
    auth_view: AuthView
    reconciler: RealtimeReconciler | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    listing_repository = SupabaseListingRepository(
        supabase_client, table_name=resolved_settings.listings_table
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    message_repository = SupabaseMessageRepository(supabase_client)
    photo_storage = SupabasePhotoStorage(
        supabase_client, bucket=resolved_settings.storage_bucket
    )
    auth_client = SupabaseAuthClient(supabase_client)

    appearance = Appearance()
    store = ClientStateStore.restore(
        _preferences_storage(resolved_settings), appearance.apply
    )

    search_view = SearchView(
        store=store,
        search_service=SearchService(
            listing_repository, page_size=resolved_settings.page_size
        ),
        debounce_seconds=resolved_settings.search_debounce_seconds,
    )
    listing_editor = ListingEditorView(
        store=store,
        listing_service=ListingService(listing_repository, photo_storage),
    )
    dashboard_view = DashboardView(
        store=store,
        dashboard_service=DashboardService(listing_repository),
        editor=listing_editor,
    )
    product_view = ProductDetailView(
        store=store,
        product_service=ProductService(listing_repository, profile_repository),
    )
    messages_view = MessagesView(
        store=store,
        message_service=MessageService(message_repository, profile_repository),
    )
    auth_view = AuthView(
        store=store, auth_service=AuthService(auth_client, profile_repository)
    )

    reconciler = None
    if resolved_settings.realtime_enabled:
        feed = SupabaseRealtimeFeed(
            supabase_url=resolved_settings.supabase_url,
            supabase_key=resolved_settings.supabase_key,
            table=resolved_settings.listings_table,
            channel_name=resolved_settings.realtime_channel,
        )
        reconciler = RealtimeReconciler(feed=feed, target=search_view)

    async def close_resources() -> None:
        search_view.debouncer.cancel()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        appearance=appearance,
        search_view=search_view,
        listing_editor=listing_editor,
        dashboard_view=dashboard_view,
        product_view=product_view,
        messages_view=messages_view,
        auth_view=auth_view,
        reconciler=reconciler,
        close_resources=close_resources,
    )


def _preferences_storage(settings: Settings) -> PreferencesStorage:
    if settings.preferences_path is None:
        return InMemoryPreferencesStorage()
    return JsonFilePreferencesStorage(Path(settings.preferences_path))
