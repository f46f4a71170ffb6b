# pricecompare/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import requests
import redis

from pricecompare.utils.settings import RETRY_ATTEMPTS


def _retry_on(exc_type, base: float, cap: float, attempts: int):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=base, min=base, max=cap),
        retry=retry_if_exception_type(exc_type),
    )


def http_retry(attempts: int = RETRY_ATTEMPTS):
    """Catalog service calls: connection errors, timeouts and HTTP error statuses."""
    return _retry_on(requests.RequestException, 0.3, 3, attempts)


def redis_retry(attempts: int = RETRY_ATTEMPTS):
    return _retry_on(redis.RedisError, 0.2, 2, attempts)
