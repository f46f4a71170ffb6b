# pricecompare/services/lock_service.py
import uuid
from contextlib import contextmanager

import redis

from pricecompare.utils.retry import redis_retry
from pricecompare.utils.settings import REDIS_URL, LOCK_TTL_SECONDS
from pricecompare.utils.logging import get_logger

logger = get_logger(__name__)

# compare-and-delete in one Lua call so nobody can slip in between GET and DEL
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Per-key mutex in Redis.

    Serialises writes to one cart or to the order history. Locks expire
    after the TTL so a crashed worker cannot hold them forever.
    """

    def __init__(self, url: str | None = None, ttl: int = LOCK_TTL_SECONDS):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @staticmethod
    def _key(name: str) -> str:
        return f"lock:{name}"

    @redis_retry()
    def acquire(self, name: str, token: str) -> bool:
        key = self._key(name)
        logger.debug(f"Acquire lock {key}")
        # SET lock:cart:abc <token> NX EX 30
        if self.redis.set(name=key, value=token, nx=True, ex=self.ttl):
            return True
        #retry po zgubionej odpowiedzi - lock moze juz byc nasz
        return self.redis.get(key) == token

    @redis_retry()
    def release(self, name: str, token: str) -> bool:
        key = self._key(name)
        logger.debug(f"Release lock {key}")
        return bool(self.redis.eval(_RELEASE_LUA, 1, key, token))

    @contextmanager
    def hold(self, name: str):
        token = uuid.uuid4().hex
        if not self.acquire(name, token):
            raise RuntimeError(f"Concurrent modification of {name}, try again")
        try:
            yield
        finally:
            self.release(name, token)
