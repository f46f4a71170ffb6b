# pricecompare/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Dict, Literal, get_args
from decimal import Decimal
from datetime import datetime


OrderStatus = Literal["Pending", "Scanned", "Fulfilled"]
ORDER_STATUSES = get_args(OrderStatus)


# =====================================================
# CATALOG (reference data, never mutated at runtime)
# =====================================================
class Store(BaseModel):
    """A store the cart can be priced against."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    delivery_fee: Decimal = Field(..., ge=0)
    eta_label: str = ""
    rating: float = 0.0
    logo: str | None = None


class Offer(BaseModel):
    """Price and availability of one product at one store."""

    model_config = ConfigDict(frozen=True)

    price: Decimal = Field(..., ge=0)
    available: bool


class Product(BaseModel):
    """Catalog product with per-store offers. A store missing from pricing does not sell it."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    brand: str
    description: str = ""
    specs: List[str] = Field(default_factory=list)
    hero_tag: str | None = None
    pricing: Dict[str, Offer] = Field(default_factory=dict)


class Catalog(BaseModel):
    model_config = ConfigDict(frozen=True)

    stores: List[Store]
    products: List[Product]

    def product(self, product_id: str) -> Product | None:
        return next((p for p in self.products if p.id == product_id), None)

    def store(self, store_id: str) -> Store | None:
        return next((s for s in self.stores if s.id == store_id), None)


# =====================================================
# CART
# =====================================================
class CartEntry(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class ItemIn(BaseModel):
    """Body for adding a product to the cart."""

    product_id: str = Field(..., min_length=1, description="Catalog product id")
    quantity: int = Field(1, gt=0, description="Quantity to add (must be > 0)")


class QuantityIn(BaseModel):
    """Body for setting a cart quantity. Zero or less removes the entry."""

    quantity: int


# =====================================================
# QUOTES
# =====================================================
class QuoteItem(BaseModel):
    product: Product
    quantity: int
    unit_price: Decimal


class StoreQuote(BaseModel):
    """Cost and availability of the current cart at one store."""

    store_id: str
    store_name: str
    delivery_fee: Decimal
    eta_label: str = ""
    rating: float = 0.0
    total: Decimal
    items: List[QuoteItem] = Field(default_factory=list)
    unavailable_product_names: List[str] = Field(default_factory=list)
    available_count: int = 0
    missing_count: int = 0


class Comparison(BaseModel):
    quotes: List[StoreQuote]
    best_store_id: str | None = None
    best_store_name: str | None = None


class CartOut(BaseModel):
    session_id: str
    items: List[CartEntry]
    comparison: Comparison


# =====================================================
# ORDERS
# =====================================================
class Customer(BaseModel):
    name: str | None = None
    email: str | None = None


class Address(BaseModel):
    """Free-form shipping details; unknown keys are kept as given."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    address: str | None = None
    city: str | None = None
    zip: str | None = None
    phone: str | None = None


class CheckoutIn(BaseModel):
    user: Customer = Field(default_factory=Customer)
    store_id: str | None = Field(None, description="Store picked by the user; defaults to the best store")
    address: Address = Field(default_factory=Address)
    payment_method: str | None = None
    payment_note: str | None = None


class OrderItem(BaseModel):
    """Product details as they were when the order was placed."""

    product_id: str
    name: str
    brand: str
    category: str
    description: str = ""
    specs: List[str] = Field(default_factory=list)
    quantity: int


class Order(BaseModel):
    id: str
    placed_at: datetime
    customer: str = "Guest"
    customer_email: str = "-"
    items: List[OrderItem]
    store_comparisons: List[StoreQuote]
    best_store_id: str | None = None
    best_store_name: str | None = None
    selected_store_id: str | None = None
    selected_store_name: str | None = None
    selected_store_total: Decimal | None = None
    selected_store_delivery: Decimal | None = None
    payment_method: str = "cod"
    payment_note: str = ""
    address: Address = Field(default_factory=Address)
    status: OrderStatus = "Pending"


class StatusIn(BaseModel):
    status: OrderStatus


class OrderStats(BaseModel):
    total: int = 0
    pending: int = 0
    scanned: int = 0
    fulfilled: int = 0
