import threading
import uuid
from contextlib import contextmanager

import redis
from tenacity import Retrying, RetryError, stop_after_delay, wait_fixed, retry_if_result

from shopcart.domain.errors import ConflictError, InternalError
from shopcart.utils.retry import redis_retry
from shopcart.utils.settings import REDIS_URL, CART_LOCK_TTL_SECONDS, CART_LOCK_WAIT_SECONDS
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje atomowo przez lua, skrypt dziala jako jedna nieprzerywalna operacja
#nie mozna wcisnac sie miedzy GET a DEL, token z innego procesu nie zostanie usuniety


class LockService:
    """
    -blokada koszyka per wlasciciel (jeden writer na koszyk)
    -zwalnianie locka tylko przez wlasciciela tokenu
    -atomowosc przy pomocy lua
    """

    def __init__(
        self,
        url: str | None = None,
        ttl: int = CART_LOCK_TTL_SECONDS,
        wait: float = CART_LOCK_WAIT_SECONDS,
        client: redis.Redis | None = None,
    ):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl
        self.wait = wait

    @staticmethod
    def _key(owner: str) -> str:
        return f"cart:{owner}:lock"

    @redis_retry()
    def acquire_owner_lock(self, owner: str, token: str, ttl: int) -> bool:
        #SET cart:x@y.z:lock "<token>" NX EX 30
        return bool(self.redis.set(name=self._key(owner), value=token, nx=True, ex=ttl))

    @redis_retry()
    def release_owner_lock(self, owner: str, token: str) -> bool:
        res = self.redis.eval(_RELEASE_LUA, 1, self._key(owner), token)
        return bool(res)

    @contextmanager
    def owner_lock(self, owner: str):
        token = uuid.uuid4().hex
        logger.info(f"Acquire lock {self._key(owner)}")

        #czekamy max self.wait sekund, potem konflikt
        retryer = Retrying(
            stop=stop_after_delay(self.wait),
            wait=wait_fixed(0.05),
            retry=retry_if_result(lambda acquired: not acquired),
        )
        try:
            retryer(self.acquire_owner_lock, owner, token, self.ttl)
        except RetryError:
            logger.warning(f"Timeout waiting for lock {self._key(owner)}")
            raise ConflictError("Cart is busy, try again later")
        except redis.RedisError as e:
            logger.error(f"Redis unavailable while locking {self._key(owner)}: {e}")
            raise InternalError("Lock store unavailable") from e

        try:
            yield
        finally:
            #blad redisa przy zwalnianiu nie moze zastapic wyniku operacji, lock i tak wygasnie po ttl
            try:
                released = self.release_owner_lock(owner, token)
            except redis.RedisError as e:
                logger.warning(f"Failed to release lock {self._key(owner)}: {e}")
            else:
                if not released:
                    logger.warning(f"Lock {self._key(owner)} expired before release")


class InProcessLockService:
    """
    Ten sam interfejs co LockService, dla jednego procesu (threading.Lock per wlasciciel).
    Wpis dla wlasciciela jest usuwany, gdy nikt go nie trzyma ani na niego nie czeka.
    """

    def __init__(self, wait: float = CART_LOCK_WAIT_SECONDS):
        self.wait = wait
        self._guard = threading.Lock()
        # owner -> [lock, liczba trzymajacych/czekajacych]
        self._locks: dict[str, list] = {}

    def _checkout_lock(self, owner: str) -> threading.Lock:
        with self._guard:
            entry = self._locks.setdefault(owner, [threading.Lock(), 0])
            entry[1] += 1
            return entry[0]

    def _return_lock(self, owner: str):
        with self._guard:
            entry = self._locks[owner]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[owner]

    @contextmanager
    def owner_lock(self, owner: str):
        lock = self._checkout_lock(owner)
        if not lock.acquire(timeout=self.wait):
            self._return_lock(owner)
            logger.warning(f"Timeout waiting for in-process lock of {owner}")
            raise ConflictError("Cart is busy, try again later")
        try:
            yield
        finally:
            lock.release()
            self._return_lock(owner)
