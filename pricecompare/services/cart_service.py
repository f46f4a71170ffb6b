# pricecompare/services/cart_service.py
from typing import List

from sqlalchemy.orm import Session

from pricecompare.domain.schemas import Catalog, CartEntry, CheckoutIn, Comparison, Order
from pricecompare.repos.cart_repo import CartRepo, cart_key
from pricecompare.repos.order_repo import OrderRepo, ORDERS_KEY
from pricecompare.repos.document_repo import StorageError
from pricecompare.services.comparison import compare, build_order
from pricecompare.services.lock_service import LockService
from pricecompare.services.notification_service import NotificationService
from pricecompare.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart use cases for one shopper session.
    Commands (add, remove, update, clear, checkout) change state under the
    session lock, queries (get, quotes) only read.
    """

    def __init__(
        self,
        db: Session,
        catalog: Catalog,
        lock_service: LockService,
        notifier: NotificationService | None = None,
    ):
        self.repo = CartRepo(db)
        self.orders = OrderRepo(db)
        self.catalog = catalog
        self.lock_service = lock_service
        self.notifier = notifier or NotificationService()

    #query - tylko odczyt
    def get_cart(self, session_id: str) -> List[CartEntry]:
        return self.repo.get_cart(session_id)

    def get_quotes(self, session_id: str) -> Comparison:
        return compare(self.get_cart(session_id), self.catalog.products, self.catalog.stores)

    #commands - zmiana stanu pod lockiem sesji
    def add_product(self, session_id: str, product_id: str, quantity: int = 1) -> List[CartEntry]:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        if self.catalog.product(product_id) is None:
            raise ValueError(f"Unknown product {product_id}")

        with self.lock_service.hold(cart_key(session_id)):
            cart = self.repo.get_cart(session_id)
            existing = next((e for e in cart if e.product_id == product_id), None)

            if existing:
                logger.info(
                    f"Product {product_id} already in cart {session_id}, "
                    f"quantity {existing.quantity} -> {existing.quantity + quantity}"
                )
                existing.quantity += quantity
            else:
                logger.info(f"Adding product {product_id} to cart {session_id}")
                cart.append(CartEntry(product_id=product_id, quantity=quantity))

            self.repo.save_cart(session_id, cart)
            return cart

    def remove_product(self, session_id: str, product_id: str) -> List[CartEntry]:
        with self.lock_service.hold(cart_key(session_id)):
            cart = [e for e in self.repo.get_cart(session_id) if e.product_id != product_id]
            logger.info(f"Removing product {product_id} from cart {session_id}")
            self.repo.save_cart(session_id, cart)
            return cart

    def update_quantity(self, session_id: str, product_id: str, quantity: int) -> List[CartEntry]:
        if quantity <= 0:
            return self.remove_product(session_id, product_id)

        with self.lock_service.hold(cart_key(session_id)):
            cart = self.repo.get_cart(session_id)
            for entry in cart:
                if entry.product_id == product_id:
                    entry.quantity = quantity
                    logger.info(f"Product {product_id} in cart {session_id} set to {quantity}")
            self.repo.save_cart(session_id, cart)
            return cart

    def clear_cart(self, session_id: str) -> None:
        with self.lock_service.hold(cart_key(session_id)):
            logger.info(f"Clearing cart {session_id}")
            self.repo.clear_cart(session_id)

    def checkout(self, session_id: str, params: CheckoutIn) -> Order | None:
        """
        Place an order from the session cart.

        1. Prices the cart at every store and picks the selected store
        2. Prepends the order to the order history
        3. Clears the cart
        4. Queues an order-placed notification

        An empty cart returns None and changes nothing.
        If the order cannot be stored, StorageError is raised and the cart is kept.
        """
        with self.lock_service.hold(cart_key(session_id)):
            cart = self.repo.get_cart(session_id)
            order = build_order(cart, self.catalog.products, self.catalog.stores, params)

            if order is None:
                logger.info(f"Checkout of empty cart {session_id}, nothing to do")
                return None

            with self.lock_service.hold(ORDERS_KEY):
                try:
                    self.orders.create_order(order)
                except StorageError as e:
                    # zamowienie nie zapisane - koszyk zostaje nietkniety
                    logger.error(f"Checkout of cart {session_id} failed, cart kept: {e}")
                    raise

            if not self.repo.clear_cart(session_id):
                logger.warning(f"Order {order.id} placed but cart {session_id} was not cleared")

        logger.info(
            f"Order {order.id} placed from cart {session_id}: "
            f"store={order.selected_store_id} total={order.selected_store_total}"
        )
        self.notifier.send_order_placed(order.id, order.customer, order.selected_store_name)
        return order
