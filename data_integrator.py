import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from domain.errors import NetworkError

logger = logging.getLogger(__name__)

Result = Tuple[bool, str, Any]


class ApiClient:
    """
    Thin client for the order-management REST backend.

    Every public call returns (ok, message, data). Read calls degrade to an
    empty list on failure; write calls carry the backend's own error message
    when it sends one.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None):
        if not base_url:
            raise ValueError("base_url must be a non-empty string")
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """
        Issue one request and return the decoded JSON body (None when empty).
        Raises NetworkError for connection failures and non-2xx answers.
        """
        url = self._url(path)
        try:
            resp = self.session.request(method, url, json=payload)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(f"Backend unreachable: {e}") from e

        body = _decode_body(resp)

        if not 200 <= resp.status_code < 300:
            detail = _backend_message(body)
            message = detail or f"HTTP {resp.status_code}"
            logger.warning("%s %s -> %s: %s", method, url, resp.status_code, message)
            raise NetworkError(message, status_code=resp.status_code, detail=detail)

        return body

    def _fetch_list(self, path: str, label: str) -> Tuple[bool, str, List[Dict[str, Any]]]:
        try:
            body = self._request("GET", path)
        except NetworkError as e:
            return False, f"Failed to fetch {label}: {e.message}", []

        # some endpoints wrap the list as {"success": ..., "data": [...]}
        if isinstance(body, dict) and isinstance(body.get("data"), list):
            body = body["data"]

        if not isinstance(body, list):
            return True, "No rows found", []
        return True, "Fetched", body

    def _write(
            self,
            method: str,
            path: str,
            payload: Optional[Dict[str, Any]],
            fallback: str,
            success: str,
    ) -> Result:
        try:
            body = self._request(method, path, payload)
        except NetworkError as e:
            # the backend's own message is surfaced verbatim when there is one
            return False, e.detail or fallback, None

        if isinstance(body, dict) and body.get("success") is False:
            return False, _backend_message(body) or fallback, body

        logger.info("%s %s ok", method, path)
        return True, _backend_message(body) or success, body

    # ------------------------------------------------------------------
    # Districts
    # ------------------------------------------------------------------

    def list_districts(self) -> Tuple[bool, str, List[Dict[str, Any]]]:
        return self._fetch_list("districts", "districts")

    def create_district(self, row: Dict[str, Any]) -> Result:
        return self._write("POST", "districts", row, "Failed to save district", "District created successfully")

    def update_district(self, district_id: int, row: Dict[str, Any]) -> Result:
        return self._write("PUT", f"districts/{district_id}", row,
                           "Failed to save district", "District updated successfully")

    def delete_district(self, district_id: int) -> Result:
        return self._write("DELETE", f"districts/{district_id}", None,
                           "Failed to delete district", "District deleted successfully")

    # ------------------------------------------------------------------
    # Ledgers (parties)
    # ------------------------------------------------------------------

    def list_ledgers(self) -> Tuple[bool, str, List[Dict[str, Any]]]:
        return self._fetch_list("ledgers", "ledgers")

    def create_ledger(self, row: Dict[str, Any]) -> Result:
        return self._write("POST", "ledgers", row, "Failed to save party", "Party created successfully")

    def update_ledger(self, ledger_id: int, row: Dict[str, Any]) -> Result:
        return self._write("PUT", f"ledgers/{ledger_id}", row, "Failed to save party", "Party updated successfully")

    def delete_ledger(self, ledger_id: int) -> Result:
        return self._write("DELETE", f"ledgers/{ledger_id}", None,
                           "Failed to delete party", "Party deleted successfully")

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def list_items(self) -> Tuple[bool, str, List[Dict[str, Any]]]:
        return self._fetch_list("items", "items")

    def create_item(self, row: Dict[str, Any]) -> Result:
        return self._write("POST", "items", row, "Failed to save item", "Item created successfully")

    def update_item(self, item_id: int, row: Dict[str, Any]) -> Result:
        return self._write("PUT", f"items/{item_id}", row, "Failed to save item", "Item updated successfully")

    def delete_item(self, item_id: int) -> Result:
        return self._write("DELETE", f"items/{item_id}", None, "Failed to delete item", "Item deleted successfully")

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    def list_orders(self) -> Tuple[bool, str, List[Dict[str, Any]]]:
        return self._fetch_list("orders", "orders")

    def list_orders_with_items(self) -> Tuple[bool, str, List[Dict[str, Any]]]:
        return self._fetch_list("orders/with-items/all", "orders")

    def get_order_with_items(self, order_id: int) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        """
        Returns (ok, message, order) where order is the header plus "items".
        """
        try:
            body = self._request("GET", f"orders/with-items/{order_id}")
        except NetworkError as e:
            return False, f"Failed to load order details: {e.message}", None

        if not isinstance(body, dict) or not body.get("success") or not body.get("data"):
            return False, _backend_message(body) or "Failed to load order details", None

        return True, "Fetched", body["data"]

    def create_order(self, payload: Dict[str, Any]) -> Result:
        return self._write("POST", "orders/bulk", payload, "Failed to create order", "Order created successfully")

    def update_order(self, order_id: int, payload: Dict[str, Any]) -> Result:
        return self._write("PUT", f"orders/bulk/{order_id}", payload,
                           "Failed to update order", "Order updated successfully")

    def delete_order(self, order_id: int) -> Result:
        """Deletes the order and all of its lines."""
        return self._write("DELETE", f"orders/bulk/{order_id}", None,
                           "Failed to delete order", "Order deleted successfully")

    def update_payment(self, order_id: int, payment: Dict[str, Any]) -> Result:
        return self._write("PATCH", f"orders/{order_id}/payment", payment,
                           "Failed to update payment", "Payment updated successfully")


def _decode_body(resp: requests.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return None


def _backend_message(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, str) and message:
            return message
    return None
