import uuid

import redis

from marketplace.utils.retry import redis_retry
from marketplace.utils.settings import REDIS_URL
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

#compare-and-delete in one script, nobody can slip in between GET and DEL
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    -per-user checkout lock (SET NX EX)
    -release only by the holder of the token
    -TTL so a crashed request never wedges a user
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _checkout_key(user_id: int) -> str:
        return f"checkout:{user_id}:lock"

    def acquire_checkout_lock(self, user_id: int, ttl: int) -> str | None:
        key = self._checkout_key(user_id)
        # one token for every retry of this call
        token = uuid.uuid4().hex
        logger.info(f"Acquire lock {key}")
        return token if self._set_if_absent(key, token, ttl) else None

    @redis_retry()
    def _set_if_absent(self, key: str, token: str, ttl: int) -> bool:
        #SET checkout:7:lock "<token>" NX EX 30
        if self.redis.set(name=key, value=token, nx=True, ex=ttl):
            return True
        # an earlier attempt may have been applied with its reply lost
        return self.redis.get(key) == token

    @redis_retry()
    def release_checkout_lock(self, user_id: int, token: str) -> bool:
        key = self._checkout_key(user_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
