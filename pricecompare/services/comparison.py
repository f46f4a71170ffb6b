# pricecompare/services/comparison.py
import secrets
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Sequence

from pricecompare.domain.schemas import (
    CartEntry,
    CheckoutIn,
    Comparison,
    Order,
    OrderItem,
    Product,
    QuoteItem,
    Store,
    StoreQuote,
)

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round to the cent, halves away from zero."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_quotes(
    cart: Iterable[CartEntry],
    products: Sequence[Product],
    stores: Sequence[Store],
) -> List[StoreQuote]:
    """
    Price the cart at every store.

    Each store starts from its delivery fee; every available offer adds
    price x quantity, every missing one is recorded by product name.
    Cart entries pointing at unknown products are skipped.
    Quotes come back in store declaration order.
    """
    by_id = {p.id: p for p in products}

    totals = {s.id: Decimal(s.delivery_fee) for s in stores}
    items = {s.id: [] for s in stores}
    unavailable = {s.id: [] for s in stores}

    for entry in cart:
        product = by_id.get(entry.product_id)
        if product is None:
            continue

        for store in stores:
            offer = product.pricing.get(store.id)
            if offer is not None and offer.available:
                items[store.id].append(
                    QuoteItem(product=product, quantity=entry.quantity, unit_price=offer.price)
                )
                totals[store.id] += offer.price * entry.quantity
            else:
                unavailable[store.id].append(product.name)

    return [
        StoreQuote(
            store_id=store.id,
            store_name=store.name,
            delivery_fee=store.delivery_fee,
            eta_label=store.eta_label,
            rating=store.rating,
            total=round_money(totals[store.id]),
            items=items[store.id],
            unavailable_product_names=unavailable[store.id],
            available_count=len(items[store.id]),
            missing_count=len(unavailable[store.id]),
        )
        for store in stores
    ]


def select_best_store(quotes: Sequence[StoreQuote]) -> StoreQuote | None:
    """Cheapest quote with nothing missing; the earliest store wins a tie."""
    best = None
    for quote in quotes:
        if quote.missing_count:
            continue
        if best is None or quote.total < best.total:
            best = quote
    return best


def compare(
    cart: Iterable[CartEntry],
    products: Sequence[Product],
    stores: Sequence[Store],
) -> Comparison:
    quotes = compute_quotes(cart, products, stores)
    best = select_best_store(quotes)
    return Comparison(
        quotes=quotes,
        best_store_id=best.store_id if best else None,
        best_store_name=best.store_name if best else None,
    )


def new_order_id(now: datetime) -> str:
    return f"ORD-{int(now.timestamp() * 1000)}-{secrets.token_hex(3)}"


def build_order(
    cart: Sequence[CartEntry],
    products: Sequence[Product],
    stores: Sequence[Store],
    params: CheckoutIn,
    now: datetime | None = None,
) -> Order | None:
    """
    Turn the cart into a Pending order without touching any state.

    The selected store is params.store_id when it is one of the quoted
    stores, otherwise the best store; with neither, the selection fields
    stay None and the comparison snapshot is kept anyway.
    Returns None for an empty cart.
    """
    if not cart:
        return None

    now = now or datetime.now(timezone.utc)
    quotes = compute_quotes(cart, products, stores)
    best = select_best_store(quotes)

    chosen = None
    if params.store_id is not None:
        chosen = next((q for q in quotes if q.store_id == params.store_id), None)
    chosen = chosen or best

    by_id = {p.id: p for p in products}
    order_items = []
    for entry in cart:
        product = by_id.get(entry.product_id)
        if product is None:
            continue
        order_items.append(
            OrderItem(
                product_id=product.id,
                name=product.name,
                brand=product.brand,
                category=product.category,
                description=product.description,
                specs=list(product.specs),
                quantity=entry.quantity,
            )
        )

    return Order(
        id=new_order_id(now),
        placed_at=now,
        customer=params.user.name or "Guest",
        customer_email=params.user.email or "-",
        items=order_items,
        store_comparisons=quotes,
        best_store_id=best.store_id if best else None,
        best_store_name=best.store_name if best else None,
        selected_store_id=chosen.store_id if chosen else None,
        selected_store_name=chosen.store_name if chosen else None,
        selected_store_total=chosen.total if chosen else None,
        selected_store_delivery=chosen.delivery_fee if chosen else None,
        payment_method=params.payment_method or "cod",
        payment_note=params.payment_note or "",
        address=params.address.model_copy(deep=True),
        status="Pending",
    )
