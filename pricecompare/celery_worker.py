# pricecompare/celery_worker.py
from celery import Celery

from pricecompare.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "pricecompare",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# register task modules explicitly so the worker picks them up
celery_app.conf.imports = (
    "pricecompare.services.notification_service",
)

celery_app.conf.timezone = "UTC"
