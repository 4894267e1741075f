"""
Storefront session.

Owns everything one shopper's page works with: config, catalog index,
cart, favorites, the toast surface and the view synchronizer. UI event
handlers call the cart and favorites methods directly; views pull the
current state when the synchronizer re-renders them.
"""

from typing import Mapping, Optional

from storefront.cart import Cart
from storefront.catalog import CatalogIndex, CatalogLoader
from storefront.checkout import OrderHandoff
from storefront.config import Settings, StoreConfig, get_settings
from storefront.errors import ERROR_CONFIG_NOT_LOADED
from storefront.favorites import Favorites
from storefront.i18n import DEFAULT_LANGUAGE, detect_language
from storefront.logging import get_logger
from storefront.notifications import Notifier
from storefront.storage import KeyValueStore, get_store
from storefront.views import CATALOG, Sink, StorefrontViews, ViewSynchronizer

logger = get_logger(__name__)


class Storefront:
    """One shopper session. Construct a separate instance per test."""

    def __init__(
        self,
        store: KeyValueStore,
        config: Optional[StoreConfig] = None,
        catalog: Optional[CatalogIndex] = None,
        query: Optional[Mapping[str, str]] = None,
        language: str = DEFAULT_LANGUAGE,
        notifier: Optional[Notifier] = None,
    ):
        self.store = store
        self.config = config if config is not None else StoreConfig()
        self.catalog = catalog if catalog is not None else CatalogIndex()
        self.query: dict[str, str] = dict(query or {})
        self.language = detect_language(language)
        self.notifier = notifier or Notifier(self.config.ui.toast_duration_ms, self.language)

        self.synchronizer = ViewSynchronizer()
        self.cart = Cart(store, self.catalog, self.notifier, on_change=self._on_change)
        self.favorites = Favorites(store, self.catalog, self.notifier, on_change=self._on_change)
        self.views = StorefrontViews(self)
        self.views.register(self.synchronizer)
        self.handoff = OrderHandoff(self)

        # Nothing renders until the catalog load has finished
        self.ready = catalog is not None

    @classmethod
    async def start(
        cls,
        settings: Optional[Settings] = None,
        loader: Optional[CatalogLoader] = None,
        store: Optional[KeyValueStore] = None,
        query: Optional[Mapping[str, str]] = None,
        mounts: Optional[Mapping[str, Sink]] = None,
    ) -> "Storefront":
        """
        Load config and catalog, then render every mounted view once.

        Args:
            settings: Process settings (defaults to get_settings())
            loader: Catalog loader (defaults to one on settings.data_url)
            store: Persistent store (defaults to the configured backend)
            query: Page query parameters ("id", "category")
            mounts: View name -> sink for the views present on the page

        Returns:
            Ready session
        """
        settings = settings or get_settings()
        loader = loader or CatalogLoader(settings.data_url, timeout=settings.http_timeout)

        config = await loader.load_config()
        if config is None:
            logger.error(ERROR_CONFIG_NOT_LOADED)
        catalog = await loader.load_catalog()

        session = cls(
            store if store is not None else get_store(settings),
            config=config,
            query=query,
            language=settings.language,
        )
        for name, sink in (mounts or {}).items():
            session.synchronizer.mount(name, sink)
        session.set_catalog(catalog)
        return session

    def _on_change(self, model: str) -> None:
        if self.ready:
            self.synchronizer.refresh(model)

    def set_catalog(self, catalog: CatalogIndex) -> None:
        """Swap in a (re)loaded catalog and re-render everything."""
        self.catalog = catalog
        self.cart.catalog = catalog
        self.favorites.catalog = catalog
        self.ready = True
        self.synchronizer.refresh_all()

    def navigate(self, query: Mapping[str, str]) -> None:
        """Change page query parameters and re-render."""
        self.query = dict(query)
        if self.ready:
            self.synchronizer.refresh(CATALOG)

    def mount(self, name: str, sink: Sink) -> None:
        """Mount a view; renders at once if the catalog is already loaded."""
        self.synchronizer.mount(name, sink)
        if self.ready:
            self.synchronizer.refresh_view(name)

    def unmount(self, name: str) -> None:
        self.synchronizer.unmount(name)

    def prune_stale(self) -> dict[str, list[int]]:
        """Drop cart entries and favorites the loaded catalog no longer has."""
        return {"cart": self.cart.prune_stale(), "favorites": self.favorites.prune_stale()}
