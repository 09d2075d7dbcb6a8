"""Per-owner locking: Redis backend (with a mocked client) and in-process backend."""
import threading
import time
from unittest.mock import MagicMock

import pytest
import redis

from shopcart.domain.errors import ConflictError, InternalError, InvalidRequestError
from shopcart.services.cart_service import CartService
from shopcart.services.lock_service import InProcessLockService, LockService
from shopcart.utils.settings import REDIS_RETRY_ATTEMPTS


@pytest.fixture
def redis_client():
    client = MagicMock()
    client.set.return_value = True
    client.eval.return_value = 1
    return client


class TestRedisLockService:
    def test_lock_is_taken_and_released_with_same_token(self, redis_client):
        service = LockService(client=redis_client, ttl=30, wait=0.2)

        with service.owner_lock("buyer@example.com"):
            pass

        _, kwargs = redis_client.set.call_args
        assert kwargs["name"] == "cart:buyer@example.com:lock"
        assert kwargs["nx"] is True
        assert kwargs["ex"] == 30
        eval_args = redis_client.eval.call_args[0]
        assert eval_args[2] == "cart:buyer@example.com:lock"
        assert eval_args[3] == kwargs["value"]

    def test_lock_released_when_body_raises(self, redis_client):
        service = LockService(client=redis_client, wait=0.2)

        with pytest.raises(ValueError):
            with service.owner_lock("buyer@example.com"):
                raise ValueError("boom")

        redis_client.eval.assert_called_once()

    def test_busy_lock_times_out_with_conflict(self, redis_client):
        redis_client.set.return_value = None
        service = LockService(client=redis_client, wait=0.2)

        with pytest.raises(ConflictError):
            with service.owner_lock("buyer@example.com"):
                pytest.fail("body must not run without the lock")

        assert redis_client.set.call_count > 1
        redis_client.eval.assert_not_called()

    def test_redis_down_is_internal_error(self, redis_client):
        redis_client.set.side_effect = redis.ConnectionError("down")
        service = LockService(client=redis_client, wait=0.2)

        with pytest.raises(InternalError):
            with service.owner_lock("buyer@example.com"):
                pass

        assert redis_client.set.call_count == REDIS_RETRY_ATTEMPTS


class TestInProcessLockService:
    def test_same_owner_is_serialized(self):
        service = InProcessLockService(wait=2)
        active = []
        overlaps = []

        def worker():
            with service.owner_lock("buyer@example.com"):
                active.append(1)
                if len(active) > 1:
                    overlaps.append(True)
                time.sleep(0.02)
                active.pop()

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert overlaps == []

    def test_other_owner_is_not_blocked(self):
        service = InProcessLockService(wait=0.1)

        with service.owner_lock("a@example.com"):
            with service.owner_lock("b@example.com"):
                pass

    def test_wait_is_bounded(self):
        service = InProcessLockService(wait=0.05)
        held = threading.Event()
        done = threading.Event()

        def holder():
            with service.owner_lock("buyer@example.com"):
                held.set()
                done.wait(1)

        t = threading.Thread(target=holder)
        t.start()
        held.wait(1)
        try:
            with pytest.raises(ConflictError):
                with service.owner_lock("buyer@example.com"):
                    pass
        finally:
            done.set()
            t.join()


class TestRedisLockRelease:
    def test_release_failure_keeps_body_result(self, redis_client):
        redis_client.eval.side_effect = redis.ConnectionError("down")
        service = LockService(client=redis_client, wait=0.2)
        done = []

        with service.owner_lock("buyer@example.com"):
            done.append(True)

        assert done == [True]

    def test_release_failure_keeps_body_exception(self, redis_client):
        redis_client.eval.side_effect = redis.ConnectionError("down")
        service = LockService(client=redis_client, wait=0.2)

        with pytest.raises(InvalidRequestError, match="Product not in cart"):
            with service.owner_lock("buyer@example.com"):
                raise InvalidRequestError("Product not in cart")

    def test_committed_add_survives_release_failure(self, redis_client, db_session, catalog, shopper):
        redis_client.eval.side_effect = redis.ConnectionError("down")
        svc = CartService(db_session, catalog, LockService(client=redis_client, wait=0.2))

        cart = svc.add_product(shopper, "prodX", 1)

        assert [i.product.id for i in cart.items] == ["prodX"]
        assert [i.product.id for i in svc.get_cart(shopper).items] == ["prodX"]

    def test_domain_error_survives_release_failure(self, redis_client, db_session, catalog, shopper):
        redis_client.eval.side_effect = redis.ConnectionError("down")
        svc = CartService(db_session, catalog, LockService(client=redis_client, wait=0.2))

        with pytest.raises(InvalidRequestError, match="Product doesn't exist in database"):
            svc.add_product(shopper, "nope", 1)


class TestInProcessLockRegistry:
    def test_entry_dropped_after_release(self):
        service = InProcessLockService(wait=0.1)

        for n in range(3):
            with service.owner_lock(f"user{n}@example.com"):
                assert f"user{n}@example.com" in service._locks

        assert service._locks == {}

    def test_entry_dropped_after_timeout(self):
        service = InProcessLockService(wait=0.05)
        held = threading.Event()
        done = threading.Event()

        def holder():
            with service.owner_lock("buyer@example.com"):
                held.set()
                done.wait(1)

        t = threading.Thread(target=holder)
        t.start()
        held.wait(1)
        with pytest.raises(ConflictError):
            with service.owner_lock("buyer@example.com"):
                pass
        assert "buyer@example.com" in service._locks

        done.set()
        t.join()
        assert service._locks == {}
