"""Pytest fixtures for order console tests."""

import json

import pytest
import requests

from data_integrator import ApiClient
from services.notifier import QueueNotifier


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body
        self.content = b"" if body is None else json.dumps(body).encode("utf-8")

    def json(self):
        return json.loads(self.content)


class FakeSession:
    """Records requests and answers from a queue of FakeResponse objects."""

    def __init__(self, responses=None, error=None):
        self.responses = list(responses or [])
        self.error = error
        self.calls = []

    def request(self, method, url, json=None):
        self.calls.append((method, url, json))
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


class FakeClient:
    """Stands in for ApiClient in service tests."""

    def __init__(self, result=(True, "ok", {"success": True})):
        self.result = result
        self.calls = []

    def create_order(self, payload):
        self.calls.append(("create_order", payload))
        return self.result

    def update_order(self, order_id, payload):
        self.calls.append(("update_order", order_id, payload))
        return self.result

    def update_payment(self, order_id, payment):
        self.calls.append(("update_payment", order_id, payment))
        return self.result


@pytest.fixture
def notifier():
    return QueueNotifier()


@pytest.fixture
def make_api():
    """Build an ApiClient over a FakeSession: make_api((status, body), ...)."""

    def _make(*responses, error=None):
        session = FakeSession([FakeResponse(status, body) for status, body in responses], error=error)
        return ApiClient("http://backend.test/api/", session=session), session

    return _make


@pytest.fixture
def unreachable_error():
    return requests.ConnectionError("connection refused")


@pytest.fixture
def ledgers():
    return [
        {"id": 1, "party_name": "Acme Traders", "party_code": "ACM", "party_type": "Customer",
         "state": "A", "gstin": "27ABCDE1234F1Z5", "mobile_number": "9800000001", "active_status": "Active"},
        {"id": 2, "party_name": "Bharat Steel", "party_code": "BHS", "party_type": "Supplier",
         "state": "B", "mobile_number": "9800000002", "active_status": "Active"},
        {"id": 3, "party_name": "Coastal Infra", "party_code": "CIN", "party_type": "Dealer",
         "state": "", "active_status": "Inactive"},
    ]


@pytest.fixture
def items():
    return [
        {"id": 10, "item_name": "TMT Bar 12mm", "item_code": "TMT12", "hsn_code": "7214",
         "gst_rate": 18, "opening_value": 52000, "opening_quantity": 40},
        {"id": 11, "item_name": "Binding Wire", "item_code": "BW", "hsn_code": "7217",
         "gst_rate": 12, "opening_value": 65.5, "opening_quantity": 5},
        {"id": 12, "item_name": "Cement Bag", "item_code": "CEM", "hsn_code": "2523",
         "gst_rate": 28, "opening_value": 380, "opening_quantity": 0},
    ]


@pytest.fixture
def orders():
    return [
        {"id": 100, "order_number": "ORD-1", "ledger_id": 1, "party_name": "Acme Traders",
         "order_date": "2024-03-10", "status": "Pending", "total_amount": 1000,
         "paid_amount": 0, "balance_due": 1000, "payment_status": "Unpaid", "payment_method": "Pending",
         "items": [{"item_id": 10, "item_name": "TMT Bar 12mm"}]},
        {"id": 101, "order_number": "ORD-2", "ledger_id": 2, "party_name": "Bharat Steel",
         "order_date": "2024-03-12T10:30:00.000Z", "status": "Dispatched", "total_amount": 500,
         "paid_amount": 500, "balance_due": 0, "payment_status": "Paid", "payment_method": "Cash",
         "items": [{"item_id": 11, "item_name": "Binding Wire"}]},
        {"id": 102, "order_number": "ORD-3", "ledger_id": "1", "party_name": "Acme Traders",
         "order_date": "2024-03-15", "status": "Delivered", "total_amount": 800,
         "paid_amount": 300, "balance_due": 500, "payment_status": "Partial", "payment_method": "Online",
         "items": [{"item_id": 12, "item_name": "Cement Bag"}, {"item_id": 10, "item_name": "TMT Bar 12mm"}]},
    ]


@pytest.fixture
def fake_client():
    """Factory: fake_client(result=(ok, message, data))."""
    return FakeClient
