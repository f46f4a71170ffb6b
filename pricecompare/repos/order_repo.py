# pricecompare/repos/order_repo.py
from typing import List

from pydantic import TypeAdapter
from sqlalchemy.orm import Session

from pricecompare.domain.schemas import Order
from pricecompare.repos.document_repo import DocumentRepo, StorageError

ORDERS_KEY = "orders"

_ORDERS = TypeAdapter(List[Order])


class OrderRepo:
    """
    Order history, newest first.
    Writes raise StorageError when the history could not be saved,
    so nothing is reported as placed, updated or deleted that is not stored.
    """

    def __init__(self, db: Session):
        self.docs = DocumentRepo(db, _ORDERS)

    def list_orders(self) -> List[Order]:
        return self.docs.load(ORDERS_KEY)

    def save_orders(self, orders: List[Order]) -> bool:
        return self.docs.save(ORDERS_KEY, orders)

    def _commit(self, orders: List[Order], action: str) -> None:
        if not self.save_orders(orders):
            raise StorageError(f"Could not save order history ({action})")

    def get_order(self, order_id: str) -> Order | None:
        return next((o for o in self.list_orders() if o.id == order_id), None)

    def create_order(self, order: Order) -> Order:
        self._commit([order, *self.list_orders()], f"create {order.id}")
        return order

    def update_order_status(self, order_id: str, status: str) -> Order | None:
        orders = self.list_orders()
        updated = None
        for i, order in enumerate(orders):
            if order.id == order_id:
                updated = order.model_copy(update={"status": status})
                orders[i] = updated
        if updated:
            self._commit(orders, f"status {order_id}")
        return updated

    def delete_order(self, order_id: str) -> bool:
        orders = self.list_orders()
        remaining = [o for o in orders if o.id != order_id]
        if len(remaining) == len(orders):
            return False
        self._commit(remaining, f"delete {order_id}")
        return True
