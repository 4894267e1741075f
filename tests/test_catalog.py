"""Tests for catalog models, index and loader"""
import json
from decimal import Decimal

import httpx
import pytest
from pydantic import ValidationError

from storefront.catalog import CatalogIndex, CatalogLoader, Category, Product

PRODUCTS = [
    {"id": 1, "name": "Rose Bouquet", "price": 100, "category": "flowers",
     "images": ["img/rose.jpg"], "featured": True, "shortDesc": "Red roses"},
    {"id": 2, "name": "Chocolate Box", "price": 49.9, "category": 5},
    {"id": "bad", "name": "Broken", "price": 10},
    {"id": 4, "name": "Negative", "price": -1},
]
CATEGORIES = [{"id": "flowers", "name": "Flowers", "image": "img/flowers.jpg"}]
CONFIG = {"whatsappNumber": "201001234567", "locale": {"currency": "EGP"}, "ui": {"toastDurationMs": 1000}}


def make_transport(documents, status=200):
    """Serve documents by file name; anything else is a 404"""
    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.path.rsplit("/", 1)[-1]
        if name not in documents:
            return httpx.Response(404)
        body = documents[name]
        content = body if isinstance(body, str) else json.dumps(body)
        return httpx.Response(status, content=content)
    return httpx.MockTransport(handler)


class TestProduct:

    def test_price_is_decimal(self):
        product = Product(id=1, name="A", price=49.9)
        assert product.price == Decimal("49.9")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product(id=1, name="A", price=-5)

    @pytest.mark.parametrize("price", ["abc", None, float("nan"), float("inf"), True])
    def test_unusable_price_rejected(self, price):
        with pytest.raises(ValidationError):
            Product(id=1, name="A", price=price)

    def test_image_fallback(self):
        assert Product(id=1, name="A", price=1, images=["", "b.jpg"]).image == "b.jpg"
        assert Product(id=1, name="A", price=1).image == ""

    def test_category_id_normalized(self):
        assert Product(id=1, name="A", price=1, category=5).category == "5"
        assert Category(id=5, name="Five").id == "5"


class TestCatalogIndex:

    def test_lookup(self, catalog):
        assert catalog.get(2).name == "Chocolate Box"
        assert catalog.get(404) is None
        assert 1 in catalog
        assert 404 not in catalog

    def test_first_duplicate_wins(self):
        index = CatalogIndex([
            Product(id=1, name="First", price=1),
            Product(id=1, name="Second", price=2),
        ])
        assert index.get(1).name == "First"
        assert len(index) == 1

    def test_not_loaded(self):
        index = CatalogIndex(None, None)
        assert not index.loaded
        assert index.products == []
        assert index.get(1) is None

    def test_category_lookup(self, catalog):
        assert catalog.category("sweets").name == "Sweets"
        assert catalog.category("nope") is None


class TestCatalogLoader:

    @pytest.mark.asyncio
    async def test_load_catalog_over_http(self):
        transport = make_transport({"products.json": PRODUCTS, "categories.json": CATEGORIES})
        async with httpx.AsyncClient(transport=transport) as client:
            loader = CatalogLoader("https://shop.example/data/", client=client)
            catalog = await loader.load_catalog()

        assert catalog.loaded
        assert [p.id for p in catalog.products] == [1, 2]
        assert catalog.get(1).short_desc == "Red roses"
        assert catalog.get(2).category == "5"
        assert [c.id for c in catalog.categories] == ["flowers"]

    @pytest.mark.asyncio
    async def test_failed_fetch_yields_unloaded_catalog(self):
        transport = make_transport({"categories.json": CATEGORIES})
        async with httpx.AsyncClient(transport=transport) as client:
            catalog = await CatalogLoader("https://shop.example", client=client).load_catalog()

        assert not catalog.loaded
        assert catalog.categories_loaded

    @pytest.mark.asyncio
    async def test_server_error_returns_none(self):
        transport = make_transport({"products.json": PRODUCTS}, status=500)
        async with httpx.AsyncClient(transport=transport) as client:
            assert await CatalogLoader("https://shop.example", client=client).load_json("products.json") is None

    @pytest.mark.asyncio
    async def test_invalid_json_returns_none(self):
        transport = make_transport({"products.json": "{oops"})
        async with httpx.AsyncClient(transport=transport) as client:
            assert await CatalogLoader("https://shop.example", client=client).load_json("products.json") is None

    @pytest.mark.asyncio
    async def test_non_array_document_is_unavailable(self):
        transport = make_transport({"products.json": {"items": []}, "categories.json": []})
        async with httpx.AsyncClient(transport=transport) as client:
            catalog = await CatalogLoader("https://shop.example", client=client).load_catalog()
        assert not catalog.loaded

    @pytest.mark.asyncio
    async def test_load_config(self):
        transport = make_transport({"config.json": CONFIG})
        async with httpx.AsyncClient(transport=transport) as client:
            config = await CatalogLoader("https://shop.example", client=client).load_config()

        assert config.whatsapp_number == "201001234567"
        assert config.currency == "EGP"
        assert config.ui.toast_duration_ms == 1000
        assert config.ui.featured_limit == 10

    @pytest.mark.asyncio
    async def test_missing_config_returns_none(self):
        async with httpx.AsyncClient(transport=make_transport({})) as client:
            assert await CatalogLoader("https://shop.example", client=client).load_config() is None

    @pytest.mark.asyncio
    async def test_load_from_directory(self, tmp_path):
        (tmp_path / "products.json").write_text(json.dumps(PRODUCTS), encoding="utf-8")
        (tmp_path / "categories.json").write_text(json.dumps(CATEGORIES), encoding="utf-8")

        catalog = await CatalogLoader(str(tmp_path)).load_catalog()

        assert [p.name for p in catalog.products] == ["Rose Bouquet", "Chocolate Box"]

    @pytest.mark.asyncio
    async def test_missing_directory_file_returns_none(self, tmp_path):
        assert await CatalogLoader(str(tmp_path)).load_json("products.json") is None

    @pytest.mark.asyncio
    async def test_records_with_unusable_prices_are_skipped(self):
        body = (
            '[{"id": 1, "name": "Text", "price": "abc"},'
            ' {"id": 2, "name": "Null", "price": null},'
            ' {"id": 3, "name": "NotANumber", "price": NaN},'
            ' {"id": 4, "name": "Valid", "price": "12.50"}]'
        )
        transport = make_transport({"products.json": body, "categories.json": CATEGORIES})
        async with httpx.AsyncClient(transport=transport) as client:
            catalog = await CatalogLoader("https://shop.example", client=client).load_catalog()

        assert catalog.loaded
        assert [p.id for p in catalog.products] == [4]
        assert catalog.get(4).price == Decimal("12.50")
