# pricecompare/services/catalog_client.py
import requests

from pricecompare.domain.schemas import Catalog
from pricecompare.utils.retry import http_retry
from pricecompare.utils.settings import CATALOG_SERVICE_URL
from pricecompare.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogClient:
    def __init__(self, base_url: str | None = None, timeout: int = 2):
        self.base_url = (base_url or CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def fetch_catalog(self) -> Catalog:
        url = f"{self.base_url}/catalog"
        logger.info(f"CatalogClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return Catalog.model_validate(resp.json())
