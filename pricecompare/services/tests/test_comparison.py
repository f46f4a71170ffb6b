from datetime import datetime, timezone
from decimal import Decimal

from pricecompare.domain.schemas import Address, CartEntry, Catalog, CheckoutIn, Customer, Store
from pricecompare.services.comparison import (
    build_order,
    compare,
    compute_quotes,
    round_money,
    select_best_store,
)
from pricecompare.conftest import make_product


def quotes_by_store(quotes):
    return {q.store_id: q for q in quotes}


def test_unavailable_offer_is_reported_and_not_priced(small_catalog):
    stores = small_catalog.stores[:2]
    cart = [CartEntry(product_id="p", quantity=1)]

    quotes = quotes_by_store(compute_quotes(cart, small_catalog.products, stores))

    assert quotes["a"].total == Decimal("13.99")
    assert quotes["a"].missing_count == 0
    assert quotes["b"].total == Decimal("2.49")
    assert quotes["b"].missing_count == 1
    assert quotes["b"].unavailable_product_names == ["P"]

    best = select_best_store(list(quotes.values()))
    assert best.store_id == "a"


def test_total_is_delivery_plus_price_times_quantity(small_catalog):
    cart = [CartEntry(product_id="p", quantity=2), CartEntry(product_id="q", quantity=1)]

    quote_c = quotes_by_store(compute_quotes(cart, small_catalog.products, small_catalog.stores))["c"]

    assert quote_c.total == Decimal("34.00")
    assert quote_c.available_count == 2
    assert [(i.product.id, i.quantity, i.unit_price) for i in quote_c.items] == [
        ("p", 2, Decimal("5.00")),
        ("q", 1, Decimal("20.00")),
    ]


def test_missing_store_entry_counts_as_unavailable(small_catalog):
    cart = [CartEntry(product_id="q", quantity=3)]

    quote_b = quotes_by_store(compute_quotes(cart, small_catalog.products, small_catalog.stores))["b"]

    assert quote_b.unavailable_product_names == ["Q"]
    assert quote_b.total == Decimal("2.49")


def test_empty_cart_quotes_only_delivery(small_catalog):
    quotes = compute_quotes([], small_catalog.products, small_catalog.stores)

    assert [q.store_id for q in quotes] == ["a", "b", "c"]
    for quote, store in zip(quotes, small_catalog.stores):
        assert quote.total == store.delivery_fee
        assert quote.missing_count == 0
        assert quote.items == []
        assert quote.unavailable_product_names == []


def test_unknown_product_is_skipped(small_catalog):
    cart = [CartEntry(product_id="ghost", quantity=4), CartEntry(product_id="p", quantity=1)]

    quotes = compute_quotes(cart, small_catalog.products, small_catalog.stores)

    for quote in quotes:
        assert quote.available_count + quote.missing_count == 1


def test_counts_cover_every_cart_product(catalog):
    cart = [CartEntry(product_id=p.id, quantity=i + 1) for i, p in enumerate(catalog.products)]

    for quote in compute_quotes(cart, catalog.products, catalog.stores):
        assert quote.available_count + quote.missing_count == len(catalog.products)
        assert quote.available_count == len(quote.items)
        assert quote.missing_count == len(quote.unavailable_product_names)


def test_recomputing_is_deterministic_and_leaves_inputs_alone(catalog):
    cart = [CartEntry(product_id="mouse-pro", quantity=3), CartEntry(product_id="dock-usbc", quantity=1)]
    before = [e.model_copy() for e in cart]

    first = compute_quotes(cart, catalog.products, catalog.stores)
    second = compute_quotes(cart, catalog.products, catalog.stores)

    assert first == second
    assert cart == before


def test_totals_round_half_up_to_the_cent():
    stores = [Store(id="s", name="S", delivery_fee=Decimal("0"))]
    products = [make_product("x", "X", {"s": ("1.005", True)})]

    quote = compute_quotes([CartEntry(product_id="x", quantity=1)], products, stores)[0]

    assert quote.total == Decimal("1.01")
    assert round_money(Decimal("2.675")) == Decimal("2.68")
    assert round_money(Decimal("0.1") + Decimal("0.2")) == Decimal("0.30")


def test_best_store_is_cheapest_fully_stocked(catalog):
    cart = [CartEntry(product_id="mouse-pro", quantity=1), CartEntry(product_id="keyboard-low", quantity=1)]

    quotes = compute_quotes(cart, catalog.products, catalog.stores)
    best = select_best_store(quotes)

    # techmart 3.99 + 24.99 + 59.99, gearhub 2.49 + 22.49 + 62.49, proshop 4.50 + 25.99 + 58.99
    assert best.store_id == "gearhub"
    assert best.total == Decimal("87.47")


def test_best_store_never_has_missing_items(catalog):
    cart = [CartEntry(product_id="headset-focus", quantity=1), CartEntry(product_id="chair-ergonomic", quantity=1)]

    quotes = compute_quotes(cart, catalog.products, catalog.stores)

    assert all(q.missing_count > 0 for q in quotes if q.store_id != "techmart")
    assert select_best_store(quotes).store_id == "techmart"


def test_no_fully_stocked_store_gives_none(catalog):
    cart = [CartEntry(product_id="monitor-27", quantity=1), CartEntry(product_id="dock-usbc", quantity=1),
            CartEntry(product_id="headset-focus", quantity=1)]
    stores = [s for s in catalog.stores if s.id != "techmart"]

    assert select_best_store(compute_quotes(cart, catalog.products, stores)) is None


def test_best_store_tie_goes_to_first_declared():
    stores = [
        Store(id="first", name="First", delivery_fee=Decimal("1.00")),
        Store(id="second", name="Second", delivery_fee=Decimal("2.00")),
    ]
    products = [make_product("x", "X", {"first": ("5.00", True), "second": ("4.00", True)})]

    quotes = compute_quotes([CartEntry(product_id="x", quantity=1)], products, stores)

    assert quotes[0].total == quotes[1].total
    assert select_best_store(quotes).store_id == "first"
    assert select_best_store(list(reversed(quotes))).store_id == "second"


def test_compare_reports_best_store(small_catalog):
    comparison = compare([CartEntry(product_id="p", quantity=1)], small_catalog.products, small_catalog.stores)

    assert comparison.best_store_id == "c"
    assert comparison.best_store_name == "Store C"
    assert len(comparison.quotes) == 3


def test_build_order_empty_cart_is_none(small_catalog):
    assert build_order([], small_catalog.products, small_catalog.stores, CheckoutIn()) is None


def test_build_order_defaults_to_best_store(small_catalog):
    now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    cart = [CartEntry(product_id="p", quantity=2)]
    params = CheckoutIn(
        user=Customer(name="Ada", email="ada@example.com"),
        address=Address(name="Ada", address="1 Main St", city="Springfield", zip="12345"),
    )

    order = build_order(cart, small_catalog.products, small_catalog.stores, params, now=now)

    assert order.id.startswith(f"ORD-{int(now.timestamp() * 1000)}-")
    assert order.placed_at == now
    assert order.status == "Pending"
    assert order.customer == "Ada"
    assert order.customer_email == "ada@example.com"
    assert order.best_store_id == "c"
    assert order.selected_store_id == "c"
    assert order.selected_store_name == "Store C"
    assert order.selected_store_total == Decimal("14.00")
    assert order.selected_store_delivery == Decimal("4.00")
    assert order.payment_method == "cod"
    assert order.payment_note == ""
    assert order.address.city == "Springfield"
    assert [(i.product_id, i.name, i.quantity) for i in order.items] == [("p", "P", 2)]
    assert len(order.store_comparisons) == 3


def test_build_order_honours_chosen_store(small_catalog):
    cart = [CartEntry(product_id="p", quantity=1)]
    params = CheckoutIn(store_id="b", payment_method="card", payment_note="leave at door")

    order = build_order(cart, small_catalog.products, small_catalog.stores, params)

    # b cannot supply P but the user picked it anyway
    assert order.selected_store_id == "b"
    assert order.selected_store_total == Decimal("2.49")
    assert order.best_store_id == "c"
    assert order.payment_method == "card"
    assert order.payment_note == "leave at door"
    assert order.customer == "Guest"
    assert order.customer_email == "-"


def test_build_order_unknown_store_falls_back_to_best(small_catalog):
    cart = [CartEntry(product_id="q", quantity=1)]

    order = build_order(cart, small_catalog.products, small_catalog.stores, CheckoutIn(store_id="nope"))

    assert order.selected_store_id == "c"
    assert order.selected_store_id in {q.store_id for q in order.store_comparisons}


def test_build_order_without_any_full_store_keeps_snapshot(small_catalog):
    only_b = Catalog(stores=[small_catalog.stores[1]], products=small_catalog.products)
    cart = [CartEntry(product_id="p", quantity=1)]

    order = build_order(cart, only_b.products, only_b.stores, CheckoutIn())

    assert order is not None
    assert order.best_store_id is None
    assert order.selected_store_id is None
    assert order.selected_store_total is None
    assert order.selected_store_delivery is None
    assert order.store_comparisons[0].missing_count == 1


def test_build_order_skips_dangling_products(small_catalog):
    cart = [CartEntry(product_id="ghost", quantity=1), CartEntry(product_id="q", quantity=2)]

    order = build_order(cart, small_catalog.products, small_catalog.stores, CheckoutIn())

    assert [i.product_id for i in order.items] == ["q"]
