"""
View Synchronizer

Views are zero-argument render functions producing plain view-model dicts
from the current session state. A view is shown only while a sink is
mounted for it (the counterpart of a page container being present).

Every cart or favorites mutation calls refresh() with the model name and
each mounted view depending on that model is rebuilt from scratch. There is
no diffing: data volumes are small and a full rebuild is always correct.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

from storefront import derivation
from storefront.catalog import Category, Product
from storefront.errors import ERROR_VIEW_RENDER
from storefront.i18n import get_text
from storefront.logging import get_logger
from storefront.services.money import format_money, to_float

if TYPE_CHECKING:
    from storefront.session import Storefront

logger = get_logger(__name__)

ViewModel = dict[str, Any]
Sink = Callable[[ViewModel], None]

STATUS_OK = "ok"
STATUS_EMPTY = "empty"
STATUS_UNAVAILABLE = "unavailable"

CART = "cart"
FAVORITES = "favorites"
CATALOG = "catalog"


@dataclass
class View:
    name: str
    render: Callable[[], ViewModel]
    depends_on: frozenset[str] = field(default_factory=frozenset)


class ViewSynchronizer:
    """Registry of views and their mounted sinks."""

    def __init__(self) -> None:
        self._views: dict[str, View] = {}
        self._sinks: dict[str, Sink] = {}

    def register(self, name: str, render: Callable[[], ViewModel], depends_on=()) -> None:
        self._views[name] = View(name=name, render=render, depends_on=frozenset(depends_on))

    def mount(self, name: str, sink: Sink) -> None:
        """Attach a sink; the view renders into it from the next refresh on."""
        if name not in self._views:
            raise KeyError(f"Unknown view: {name}")
        self._sinks[name] = sink

    def unmount(self, name: str) -> None:
        self._sinks.pop(name, None)

    def is_mounted(self, name: str) -> bool:
        return name in self._sinks

    @property
    def views(self) -> list[str]:
        return list(self._views)

    def render(self, name: str) -> ViewModel:
        """Render a view without delivering it to a sink."""
        return self._views[name].render()

    def _deliver(self, view: View) -> None:
        sink = self._sinks.get(view.name)
        if sink is None:
            return
        try:
            sink(view.render())
        except Exception:
            # One broken view must not block the others or the mutation
            logger.error(ERROR_VIEW_RENDER, view.name, exc_info=True)

    def refresh(self, model: str) -> None:
        """Rebuild every mounted view that reads the given model."""
        for view in list(self._views.values()):
            if model in view.depends_on:
                self._deliver(view)

    def refresh_view(self, name: str) -> None:
        view = self._views.get(name)
        if view is not None:
            self._deliver(view)

    def refresh_all(self) -> None:
        for view in list(self._views.values()):
            self._deliver(view)


def unavailable(message: str) -> ViewModel:
    return {"status": STATUS_UNAVAILABLE, "message": message}


def empty(message: str, **extra) -> ViewModel:
    return {"status": STATUS_EMPTY, "message": message, **extra}


def ok(**data) -> ViewModel:
    return {"status": STATUS_OK, **data}


def product_card(product: Product, currency: str) -> ViewModel:
    return {
        "id": product.id,
        "name": product.name,
        "price": to_float(product.price),
        "formatted_price": format_money(product.price, currency),
        "image": product.image,
        "url": f"product.html?id={product.id}",
    }


def category_card(category: Category) -> ViewModel:
    return {
        "id": category.id,
        "name": category.name,
        "image": category.image or "",
        "url": f"products.html?category={category.id}",
    }


class StorefrontViews:
    """Built-in render functions of a storefront session."""

    def __init__(self, session: "Storefront"):
        self.session = session

    def _text(self, key: str) -> str:
        return get_text(key, self.session.language)

    def _money(self, value) -> str:
        return format_money(value, self.session.config.currency)

    def cart(self) -> ViewModel:
        s = self.session
        if not s.catalog.loaded:
            return unavailable(self._text("empty.cart"))

        items = []
        for item in s.cart.line_items():
            data = item.to_dict()
            data["formatted_unit_price"] = self._money(item.product.price)
            data["formatted_line_total"] = self._money(item.line_total)
            items.append(data)

        total = s.cart.grand_total
        totals = {
            "total": to_float(total),
            "formatted_total": self._money(total),
            "total_count": s.cart.total_count,
            "checkout_enabled": not s.cart.is_empty,
        }
        if not items:
            return empty(self._text("empty.cart"), items=[], **totals)
        return ok(items=items, **totals)

    def favorites(self) -> ViewModel:
        s = self.session
        if not s.catalog.loaded:
            return unavailable(self._text("empty.favorites"))
        products = s.favorites.products()
        if not products:
            return empty(self._text("empty.favorites"), items=[])
        return ok(items=[product_card(p, s.config.currency) for p in products])

    def featured(self) -> ViewModel:
        s = self.session
        if not s.catalog.loaded:
            return unavailable(self._text("empty.featured"))
        products = derivation.featured_products(s.catalog, s.config.ui.featured_limit)
        if not products:
            return empty(self._text("empty.featured_now"), items=[])
        return ok(items=[product_card(p, s.config.currency) for p in products])

    def categories(self) -> ViewModel:
        s = self.session
        if not s.catalog.categories_loaded:
            return unavailable(self._text("empty.categories"))
        return ok(items=[category_card(c) for c in s.catalog.categories])

    def products(self) -> ViewModel:
        s = self.session
        if not s.catalog.loaded:
            return unavailable(self._text("empty.products"))
        category_id = s.query.get("category")
        products = derivation.products_in_category(s.catalog, category_id)
        if not products:
            return empty(self._text("empty.products_in_category"), items=[], category=category_id)
        return ok(
            items=[product_card(p, s.config.currency) for p in products],
            category=category_id,
        )

    def product_details(self) -> ViewModel:
        s = self.session
        product_id = _int_param(s.query.get("id"))
        if not product_id or not s.catalog.loaded:
            return unavailable(self._text("empty.product"))
        product = s.catalog.get(product_id)
        if product is None:
            return unavailable(self._text("empty.product"))

        details = product_card(product, s.config.currency)
        details.update(
            images=list(product.images),
            short_desc=product.short_desc or "",
            description=product.description or "",
            is_favorite=s.favorites.is_favorite(product.id),
            in_cart=s.cart.quantity_of(product.id),
        )
        return ok(product=details)

    def occasions(self) -> ViewModel:
        s = self.session
        if not s.catalog.loaded:
            return unavailable(self._text("empty.occasions"))
        products = derivation.occasion_products(s.catalog)
        if not products:
            return empty(self._text("empty.occasions_now"), items=[])
        return ok(items=[product_card(p, s.config.currency) for p in products])

    def register(self, synchronizer: ViewSynchronizer) -> None:
        synchronizer.register("cart", self.cart, depends_on={CART, CATALOG})
        synchronizer.register("favorites", self.favorites, depends_on={FAVORITES, CATALOG})
        synchronizer.register("featured", self.featured, depends_on={CATALOG})
        synchronizer.register("categories", self.categories, depends_on={CATALOG})
        synchronizer.register("products", self.products, depends_on={CATALOG})
        synchronizer.register(
            "product_details", self.product_details, depends_on={CART, FAVORITES, CATALOG}
        )
        synchronizer.register("occasions", self.occasions, depends_on={CATALOG})


def _int_param(value: Optional[str]) -> int:
    """Query parameter as a positive int, 0 when missing or invalid."""
    try:
        return int(value) if value else 0
    except ValueError:
        return 0
