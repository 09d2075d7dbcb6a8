# shopcart/services/product_client.py
import requests
from requests import RequestException
from urllib.parse import quote

from shopcart.domain.errors import InternalError
from shopcart.domain.product import ProductSnapshot
from shopcart.utils.retry import http_retry
from shopcart.utils.settings import PRODUCT_SERVICE_URL, PRODUCT_SERVICE_TIMEOUT
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class ProductClient:
    """Katalog produktow (product-service) po HTTP, tylko odczyt."""

    def __init__(self, base_url: str | None = None, timeout: float = PRODUCT_SERVICE_TIMEOUT):
        self.base_url = (base_url or PRODUCT_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def fetch_product(self, product_id: str) -> dict | None:
        url = f"{self.base_url}/products/{quote(str(product_id), safe='')}"
        logger.info(f"ProductClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    def find_by_id(self, product_id: str) -> ProductSnapshot | None:
        try:
            data = self.fetch_product(product_id)
        except RequestException as e:
            logger.error(f"Product catalog unavailable for {product_id}: {e}")
            raise InternalError("Product catalog unavailable") from e

        if data is None:
            return None
        return ProductSnapshot.from_catalog(data)
