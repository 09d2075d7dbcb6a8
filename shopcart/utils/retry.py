# shopcart/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import requests
import redis

from shopcart.utils.settings import (
    HTTP_RETRY_ATTEMPTS,
    HTTP_RETRY_BACKOFF_SECONDS,
    HTTP_RETRY_MAX_WAIT_SECONDS,
    REDIS_RETRY_ATTEMPTS,
    REDIS_RETRY_BACKOFF_SECONDS,
    REDIS_RETRY_MAX_WAIT_SECONDS,
)


def _transient_retry(exc_types, attempts: int, backoff: float, max_wait: float):
    #reraise: po ostatniej probie leci oryginalny wyjatek, nie RetryError
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=backoff, min=backoff, max=max_wait),
        retry=retry_if_exception_type(exc_types),
    )


def http_retry():
    """Catalog lookups: connection errors, timeouts and 5xx (raise_for_status)."""
    return _transient_retry(
        requests.RequestException,
        HTTP_RETRY_ATTEMPTS,
        HTTP_RETRY_BACKOFF_SECONDS,
        HTTP_RETRY_MAX_WAIT_SECONDS,
    )


def redis_retry():
    return _transient_retry(
        redis.RedisError,
        REDIS_RETRY_ATTEMPTS,
        REDIS_RETRY_BACKOFF_SECONDS,
        REDIS_RETRY_MAX_WAIT_SECONDS,
    )
