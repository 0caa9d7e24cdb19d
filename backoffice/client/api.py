"""HTTP client for the back office API."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from backoffice.core.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response; ``message`` carries the server's ``error`` field."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class BackofficeClient:

    def __init__(self, base_url: str = None, session: requests.Session = None, timeout: float = 10):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        response = self.session.request(method, url, timeout=self.timeout, **kwargs)

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("error"):
                message = body["error"]
            else:
                message = response.text or response.reason
            raise ApiError(response.status_code, message)

        return response.json()

    # Products

    def list_products(self, category: Optional[str] = None) -> List[Dict]:
        if category:
            return self._request("GET", f"/products/category/{quote(category)}")
        return self._request("GET", "/products")

    def get_product(self, product_id: int) -> Dict:
        return self._request("GET", f"/products/{product_id}")

    def list_categories(self) -> List[str]:
        return self._request("GET", "/categories")

    # Customers

    def list_customers(self) -> List[Dict]:
        return self._request("GET", "/customers")

    def get_customer(self, customer_id: int) -> Dict:
        return self._request("GET", f"/customers/{customer_id}")

    def add_customer(self, name: str, email: str, phone: str = None, address: str = None) -> int:
        data = self._request(
            "POST",
            "/customers",
            json={"name": name, "email": email, "phone": phone, "address": address},
        )
        return data["customerId"]

    def customer_orders(self, customer_id: int) -> List[Dict]:
        return self._request("GET", f"/customers/{customer_id}/orders")

    def customer_stats(self, customer_id: int) -> Dict:
        return self._request("GET", f"/customers/{customer_id}/stats")

    # Orders

    def list_orders(self) -> List[Dict]:
        return self._request("GET", "/orders")

    def get_order(self, order_id: int) -> Dict:
        return self._request("GET", f"/orders/{order_id}")

    def place_order(self, customer_id: int, items: List[Dict]) -> int:
        data = self._request(
            "POST",
            "/orders/multi",
            json={"customer_id": customer_id, "items": items},
        )
        return data["orderId"]

    def update_order_status(self, order_id: int, status: str) -> str:
        data = self._request("PATCH", f"/orders/{order_id}/status", json={"status": status})
        return data["message"]

    def stats(self) -> Dict:
        return self._request("GET", "/stats")
