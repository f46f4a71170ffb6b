# pricecompare/utils/settings.py
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./pricecompare.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", REDIS_URL)
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")

CATALOG_PATH = os.getenv(
    "CATALOG_PATH",
    str(Path(__file__).resolve().parent.parent / "data" / "catalog.json"),
)
CATALOG_SERVICE_URL = os.getenv("CATALOG_SERVICE_URL", "")

LOCK_TTL_SECONDS = int(os.getenv("LOCK_TTL_SECONDS", 30))
RETRY_ATTEMPTS = int(os.getenv("RETRY_ATTEMPTS", 3))
STORAGE_SCHEMA_VERSION = int(os.getenv("STORAGE_SCHEMA_VERSION", 1))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
