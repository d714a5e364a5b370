"""Server-side cart pricing.

`price_cart` resolves every cart line against the catalog and returns the
frozen line snapshot together with the order totals. It performs reads
only, through the supplied lookup; stock is never touched.

Client-supplied unit prices and store references are honoured only for
lines whose product belongs to a store owned by the calling seller. A store
reference must also resolve, through the store lookup, to an existing store
of that same seller. For everyone else the catalog is authoritative and the
override is dropped.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Awaitable, Callable, Optional, Sequence

import structlog

from shared.errors import NotFoundError, ValidationError

from .constants import MAX_LINE_QUANTITY, SHIPPING_PRICE, TAX_RATE

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")

# async (product_id) -> product with `price`, `store_id` and `store.seller_id`, or None
CatalogLookup = Callable[[str], Awaitable[Optional[Any]]]
# async (store_id) -> store with `seller_id`, or None
StoreLookup = Callable[[str], Awaitable[Optional[Any]]]


@dataclass(frozen=True)
class CartLine:
    product_id: str
    quantity: int
    price: Optional[float] = None
    store_id: Optional[str] = None


@dataclass(frozen=True)
class PricedLine:
    product_id: str
    quantity: int
    price: float
    store_id: str


@dataclass(frozen=True)
class PricedCart:
    lines: list[PricedLine]
    items_price: float
    shipping_price: float
    tax_price: float
    total_price: float


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_totals(items_price: Decimal) -> tuple[Decimal, Decimal, Decimal]:
    """Return (shipping, tax, total) for an items subtotal."""
    items_price = to_money(items_price)
    shipping_price = to_money(SHIPPING_PRICE)
    tax_price = to_money(items_price * TAX_RATE)
    return shipping_price, tax_price, items_price + shipping_price + tax_price


def _owned_by(product, seller_id: Optional[str]) -> bool:
    store = getattr(product, "store", None)
    return bool(seller_id) and store is not None and store.seller_id == seller_id


async def _store_owned_by(store_id: str, store_lookup: Optional[StoreLookup], seller_id: Optional[str]) -> bool:
    if store_lookup is None or not seller_id:
        return False
    store = await store_lookup(store_id)
    return store is not None and store.seller_id == seller_id


async def price_cart(
    lines: Sequence[CartLine],
    lookup: CatalogLookup,
    seller_id: Optional[str] = None,
    store_lookup: Optional[StoreLookup] = None,
) -> PricedCart:
    if not lines:
        raise ValidationError("Products are required")

    items_price = Decimal("0")
    priced: list[PricedLine] = []

    for line in lines:
        if line.quantity < 1 or line.quantity > MAX_LINE_QUANTITY:
            raise ValidationError(f"Quantity for product {line.product_id} must be between 1 and {MAX_LINE_QUANTITY}")

        product = await lookup(line.product_id)
        if product is None:
            raise NotFoundError(f"Product with ID {line.product_id} not found")

        trusted = _owned_by(product, seller_id)
        unit_price = to_money(product.price)
        store_id = product.store_id

        if line.price is not None and to_money(line.price) != unit_price:
            if trusted:
                unit_price = to_money(line.price)
            else:
                logger.warning(
                    "cart_price_override_ignored",
                    product_id=line.product_id,
                    client_price=line.price,
                    catalog_price=product.price,
                )

        if line.store_id and line.store_id != store_id:
            if trusted and await _store_owned_by(line.store_id, store_lookup, seller_id):
                store_id = line.store_id
            else:
                logger.warning(
                    "cart_store_override_ignored",
                    product_id=line.product_id,
                    client_store_id=line.store_id,
                    catalog_store_id=store_id,
                )

        items_price += unit_price * line.quantity
        priced.append(
            PricedLine(
                product_id=line.product_id,
                quantity=line.quantity,
                price=float(unit_price),
                store_id=store_id,
            )
        )

    shipping_price, tax_price, total_price = compute_totals(items_price)
    return PricedCart(
        lines=priced,
        items_price=float(to_money(items_price)),
        shipping_price=float(shipping_price),
        tax_price=float(tax_price),
        total_price=float(total_price),
    )
