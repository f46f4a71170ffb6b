# pricecompare/services/catalog_service.py
from functools import lru_cache
from pathlib import Path

from pricecompare.domain.schemas import Catalog
from pricecompare.services.catalog_client import CatalogClient
from pricecompare.utils.settings import CATALOG_PATH, CATALOG_SERVICE_URL
from pricecompare.utils.logging import get_logger

logger = get_logger(__name__)


def load_catalog_file(path: str | Path) -> Catalog:
    raw = Path(path).read_text(encoding="utf-8")
    catalog = Catalog.model_validate_json(raw)
    logger.info(f"Loaded catalog from {path}: {len(catalog.stores)} stores, {len(catalog.products)} products")
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    """Process-wide catalog, loaded on first use."""
    if CATALOG_SERVICE_URL:
        return CatalogClient(CATALOG_SERVICE_URL).fetch_catalog()
    return load_catalog_file(CATALOG_PATH)
