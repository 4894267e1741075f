"""Pytest configuration and fixtures"""
import os

import pytest

# Keep the developer's .env and real storage out of test runs
os.environ.setdefault("STOREFRONT_STORAGE", "memory")
os.environ.setdefault("STOREFRONT_LANG", "en")

from storefront.catalog import CatalogIndex, Category, Product
from storefront.config import StoreConfig
from storefront.notifications import Notifier
from storefront.session import Storefront
from storefront.storage import KeyValueStore, MemoryBackend


class FakeClock:
    """Manually advanced clock for notification timing."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def backend():
    """Fresh in-memory storage backend"""
    return MemoryBackend()


@pytest.fixture
def store(backend):
    """Key-value store over the in-memory backend"""
    return KeyValueStore(backend)


@pytest.fixture
def sample_products():
    """Sample catalog products"""
    return [
        Product(id=1, name="Rose Bouquet", price=100, category="flowers",
                images=["img/rose.jpg"], featured=True, occasion=True),
        Product(id=2, name="Chocolate Box", price=50, category="sweets",
                images=["img/choco.jpg"], shortDesc="Dark chocolate"),
        Product(id=3, name="Gift Card", price="25.50", category="cards",
                images=[], featured=True),
    ]


@pytest.fixture
def sample_categories():
    """Sample catalog categories"""
    return [
        Category(id="flowers", name="Flowers", image="img/flowers.jpg"),
        Category(id="sweets", name="Sweets"),
    ]


@pytest.fixture
def catalog(sample_products, sample_categories):
    """Loaded catalog index"""
    return CatalogIndex(sample_products, sample_categories)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier(clock):
    """English notifier with a controllable clock"""
    return Notifier(duration_ms=2000, lang="en", clock=clock)


@pytest.fixture
def config():
    """Store config with a WhatsApp number"""
    return StoreConfig.model_validate({
        "whatsappNumber": "+20 100 123 4567",
        "locale": {"currency": "EGP"},
        "ui": {"toastDurationMs": 1500, "featuredLimit": 1},
    })


@pytest.fixture
def session(store, config, catalog, notifier):
    """Ready storefront session over the sample catalog"""
    return Storefront(store, config=config, catalog=catalog, language="en", notifier=notifier)
