"""Tests for server-side cart pricing."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from services.order_service.pricing import CartLine, compute_totals, price_cart, to_money
from shared.errors import NotFoundError, ValidationError

OWNER = "11111111-1111-1111-1111-111111111111"
STRANGER = "22222222-2222-2222-2222-222222222222"
STORE = "33333333-3333-3333-3333-333333333333"
OTHER_STORE = "44444444-4444-4444-4444-444444444444"
FOREIGN_STORE = "55555555-5555-5555-5555-555555555555"


def make_catalog(**prices):
    """Map product id -> fake product priced as given, all in STORE owned by OWNER."""
    store = SimpleNamespace(id=STORE, seller_id=OWNER)
    return {
        product_id: SimpleNamespace(id=product_id, price=price, store_id=STORE, store=store)
        for product_id, price in prices.items()
    }


def make_stores():
    """OTHER_STORE belongs to OWNER, FOREIGN_STORE to STRANGER."""
    return {
        OTHER_STORE: SimpleNamespace(id=OTHER_STORE, seller_id=OWNER),
        FOREIGN_STORE: SimpleNamespace(id=FOREIGN_STORE, seller_id=STRANGER),
    }


def lookup_in(catalog):
    async def lookup(product_id):
        return catalog.get(product_id)

    return lookup


class TestComputeTotals:
    def test_flat_shipping_and_five_percent_tax(self):
        shipping, tax, total = compute_totals(Decimal("200"))
        assert shipping == Decimal("50.00")
        assert tax == Decimal("10.00")
        assert total == Decimal("260.00")

    def test_tax_rounds_half_up_to_cents(self):
        # 0.05 * 0.30 = 0.015
        _, tax, total = compute_totals(Decimal("0.30"))
        assert tax == Decimal("0.02")
        assert total == Decimal("50.32")

    def test_to_money_quantizes_floats(self):
        assert to_money(19.999) == Decimal("20.00")
        assert to_money(0.1 + 0.2) == Decimal("0.30")


class TestPriceCart:
    async def test_uses_catalog_prices(self):
        catalog = make_catalog(a=100.0, b=12.5)
        cart = await price_cart(
            [CartLine("a", 2), CartLine("b", 4)],
            lookup_in(catalog),
        )

        assert cart.items_price == 250.0
        assert cart.shipping_price == 50.0
        assert cart.tax_price == 12.5
        assert cart.total_price == 312.5
        assert [(line.product_id, line.quantity, line.price, line.store_id) for line in cart.lines] == [
            ("a", 2, 100.0, STORE),
            ("b", 4, 12.5, STORE),
        ]

    async def test_empty_cart_is_rejected(self):
        with pytest.raises(ValidationError, match="Products are required"):
            await price_cart([], lookup_in({}))

    @pytest.mark.parametrize("quantity", [0, -1, 101])
    async def test_quantity_out_of_range_is_rejected(self, quantity):
        with pytest.raises(ValidationError):
            await price_cart([CartLine("a", quantity)], lookup_in(make_catalog(a=1.0)))

    async def test_missing_product_names_the_id(self):
        with pytest.raises(NotFoundError, match="Product with ID ghost not found"):
            await price_cart(
                [CartLine("a", 1), CartLine("ghost", 1)],
                lookup_in(make_catalog(a=1.0)),
            )

    async def test_client_price_ignored_for_anonymous_caller(self):
        cart = await price_cart(
            [CartLine("a", 1, price=1.0, store_id=OTHER_STORE)],
            lookup_in(make_catalog(a=100.0)),
        )
        assert cart.lines[0].price == 100.0
        assert cart.lines[0].store_id == STORE
        assert cart.items_price == 100.0

    async def test_client_price_ignored_for_other_seller(self):
        cart = await price_cart(
            [CartLine("a", 1, price=1.0)],
            lookup_in(make_catalog(a=100.0)),
            seller_id=STRANGER,
        )
        assert cart.lines[0].price == 100.0

    async def test_owning_seller_may_override_price_and_store(self):
        cart = await price_cart(
            [CartLine("a", 2, price=80.0, store_id=OTHER_STORE)],
            lookup_in(make_catalog(a=100.0)),
            seller_id=OWNER,
            store_lookup=lookup_in(make_stores()),
        )
        assert cart.lines[0].price == 80.0
        assert cart.lines[0].store_id == OTHER_STORE
        assert cart.items_price == 160.0
        assert cart.tax_price == 8.0
        assert cart.total_price == 218.0

    async def test_lookup_is_called_once_per_line(self):
        calls = []
        catalog = make_catalog(a=5.0)

        async def lookup(product_id):
            calls.append(product_id)
            return catalog.get(product_id)

        await price_cart([CartLine("a", 1), CartLine("a", 3)], lookup)
        assert calls == ["a", "a"]

    async def test_owner_cannot_move_line_to_foreign_store(self):
        cart = await price_cart(
            [CartLine("a", 1, price=80.0, store_id=FOREIGN_STORE)],
            lookup_in(make_catalog(a=100.0)),
            seller_id=OWNER,
            store_lookup=lookup_in(make_stores()),
        )
        assert cart.lines[0].store_id == STORE
        assert cart.lines[0].price == 80.0

    async def test_owner_cannot_move_line_to_missing_store(self):
        cart = await price_cart(
            [CartLine("a", 1, store_id="66666666-6666-6666-6666-666666666666")],
            lookup_in(make_catalog(a=100.0)),
            seller_id=OWNER,
            store_lookup=lookup_in(make_stores()),
        )
        assert cart.lines[0].store_id == STORE

    async def test_store_override_needs_a_store_lookup(self):
        cart = await price_cart(
            [CartLine("a", 1, store_id=OTHER_STORE)],
            lookup_in(make_catalog(a=100.0)),
            seller_id=OWNER,
        )
        assert cart.lines[0].store_id == STORE
