# pricecompare/services/order_service.py
from typing import Iterable, List

from sqlalchemy.orm import Session

from pricecompare.domain.schemas import Order, OrderStats, ORDER_STATUSES
from pricecompare.repos.order_repo import OrderRepo, ORDERS_KEY
from pricecompare.services.lock_service import LockService
from pricecompare.services.notification_service import NotificationService
from pricecompare.utils.logging import get_logger

logger = get_logger(__name__)


def can_delete(order: Order, customer: str | None, is_admin: bool) -> bool:
    """Admins may delete any order; owners only while it is still Pending."""
    if is_admin:
        return True
    return order.customer == customer and order.status == "Pending"


def order_stats(orders: Iterable[Order]) -> OrderStats:
    stats = OrderStats()
    for order in orders:
        stats.total += 1
        if order.status == "Pending":
            stats.pending += 1
        elif order.status == "Scanned":
            stats.scanned += 1
        elif order.status == "Fulfilled":
            stats.fulfilled += 1
    return stats


class OrderService:
    """
    Serwis historii zamowien.
    Zapisy ida pod lockiem orders, blad zapisu leci dalej jako StorageError.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        notifier: NotificationService | None = None,
    ):
        self.repo = OrderRepo(db)
        self.lock_service = lock_service
        self.notifier = notifier or NotificationService()

    def list_orders(self, customer: str | None = None) -> List[Order]:
        """Newest first; with a customer, only that customer's orders."""
        orders = self.repo.list_orders()
        if customer is None:
            return orders
        return [o for o in orders if o.customer == customer]

    def get_order(self, order_id: str) -> Order | None:
        return self.repo.get_order(order_id)

    def update_order_status(self, order_id: str, next_status: str) -> Order | None:
        if next_status not in ORDER_STATUSES:
            raise ValueError(f"Unknown order status {next_status}")

        with self.lock_service.hold(ORDERS_KEY):
            order = self.repo.update_order_status(order_id, next_status)

        if order is None:
            logger.info(f"Order {order_id} not found, status unchanged")
            return None

        logger.info(f"Order {order_id} status -> {next_status}")
        self.notifier.send_status_changed(order.id, order.customer, next_status)
        return order

    def delete_order(self, order_id: str, customer: str | None = None, is_admin: bool = True) -> bool:
        """
        Removes the order; False when it does not exist.
        The delete rule is checked under the orders lock, against the stored status.
        """
        with self.lock_service.hold(ORDERS_KEY):
            order = self.repo.get_order(order_id)
            if order is None:
                deleted = False
            elif not can_delete(order, customer, is_admin):
                raise PermissionError("Only pending orders can be deleted by their owner")
            else:
                deleted = self.repo.delete_order(order_id)

        if deleted:
            logger.info(f"Order {order_id} deleted")
        else:
            logger.info(f"Order {order_id} not found, nothing deleted")
        return deleted
