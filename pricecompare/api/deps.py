# pricecompare/api/deps.py
from fastapi import Depends
from sqlalchemy.orm import Session

from pricecompare.data.database import get_db
from pricecompare.domain.schemas import Catalog
from pricecompare.services.cart_service import CartService
from pricecompare.services.catalog_service import get_catalog
from pricecompare.services.lock_service import LockService
from pricecompare.services.notification_service import NotificationService
from pricecompare.services.order_service import OrderService


def get_lock_service() -> LockService:
    return LockService()


def get_notifier() -> NotificationService:
    return NotificationService()


def get_cart_service(
    db: Session = Depends(get_db),
    catalog: Catalog = Depends(get_catalog),
    lock_service: LockService = Depends(get_lock_service),
    notifier: NotificationService = Depends(get_notifier),
) -> CartService:
    return CartService(db=db, catalog=catalog, lock_service=lock_service, notifier=notifier)


def get_order_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    notifier: NotificationService = Depends(get_notifier),
) -> OrderService:
    return OrderService(db=db, lock_service=lock_service, notifier=notifier)
