# pricecompare/services/notification_service.py
from pricecompare.celery_worker import celery_app
from pricecompare.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications.
    Work is handed to Celery so requests never wait on delivery.
    """

    @staticmethod
    def send_order_placed(order_id: str, customer: str, store_name: str | None):
        send_order_placed_task.delay(order_id, customer, store_name)

    @staticmethod
    def send_status_changed(order_id: str, customer: str, status: str):
        send_status_changed_task.delay(order_id, customer, status)


@celery_app.task(name="pricecompare.services.notification_service.send_order_placed_task")
def send_order_placed_task(order_id: str, customer: str, store_name: str | None):
    # a real deployment would hand this to an email / push provider
    logger.info(f"[NOTIFICATION] {customer}: order {order_id} placed with {store_name or 'no store selected'}")
    return {"order_id": order_id, "customer": customer, "status": "sent"}


@celery_app.task(name="pricecompare.services.notification_service.send_status_changed_task")
def send_status_changed_task(order_id: str, customer: str, status: str):
    logger.info(f"[NOTIFICATION] {customer}: order {order_id} is now {status}")
    return {"order_id": order_id, "customer": customer, "status": "sent"}
