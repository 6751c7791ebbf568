"""Tests for the REST client."""

import pytest

from data_integrator import ApiClient


class TestApiClient:
    def test_requires_base_url(self):
        with pytest.raises(ValueError):
            ApiClient("")

    def test_list_unwraps_data_envelope(self, make_api):
        api, session = make_api((200, {"success": True, "data": [{"id": 1}]}))

        ok, msg, rows = api.list_ledgers()

        assert ok is True
        assert rows == [{"id": 1}]
        assert session.calls == [("GET", "http://backend.test/api/ledgers", None)]

    def test_list_plain_array(self, make_api):
        api, _ = make_api((200, [{"id": 1}, {"id": 2}]))
        assert api.list_items() == (True, "Fetched", [{"id": 1}, {"id": 2}])

    def test_list_non_array_body_is_empty(self, make_api):
        api, _ = make_api((200, {"unexpected": True}))
        ok, _, rows = api.list_districts()
        assert ok is True
        assert rows == []

    def test_list_failure_degrades_to_empty(self, make_api):
        api, _ = make_api((500, {"message": "db down"}))

        ok, msg, rows = api.list_orders()

        assert ok is False
        assert msg == "Failed to fetch orders: db down"
        assert rows == []

    def test_unreachable_backend(self, make_api, unreachable_error):
        api, _ = make_api(error=unreachable_error)

        ok, msg, rows = api.list_orders_with_items()

        assert ok is False
        assert msg.startswith("Failed to fetch orders: Backend unreachable")
        assert rows == []

    def test_write_surfaces_backend_message_verbatim(self, make_api):
        api, _ = make_api((400, {"success": False, "message": "Order number already exists"}))

        ok, msg, _ = api.create_order({"order_header": {}, "order_items": []})

        assert ok is False
        assert msg == "Order number already exists"

    def test_write_uses_error_field(self, make_api):
        api, _ = make_api((409, {"error": "Duplicate party code"}))
        assert api.create_ledger({"party_name": "X"})[:2] == (False, "Duplicate party code")

    def test_write_fallback_without_backend_message(self, make_api):
        api, _ = make_api((500, None))
        assert api.update_order(3, {})[:2] == (False, "Failed to update order")

    def test_write_success_flag_false_on_2xx(self, make_api):
        api, _ = make_api((200, {"success": False}))
        assert api.delete_item(4)[:2] == (False, "Failed to delete item")

    def test_write_success(self, make_api):
        api, session = make_api((200, {"success": True, "data": {"id": 9}}))

        ok, msg, body = api.update_payment(9, {"paid_amount": 10.0})

        assert ok is True
        assert msg == "Payment updated successfully"
        assert body["data"] == {"id": 9}
        assert session.calls == [("PATCH", "http://backend.test/api/orders/9/payment", {"paid_amount": 10.0})]

    def test_write_unreachable_uses_fallback(self, make_api, unreachable_error):
        api, _ = make_api(error=unreachable_error)
        assert api.delete_order(2)[:2] == (False, "Failed to delete order")

    @pytest.mark.parametrize(
        "call, method, path",
        [
            (lambda api: api.create_order({}), "POST", "orders/bulk"),
            (lambda api: api.update_order(5, {}), "PUT", "orders/bulk/5"),
            (lambda api: api.delete_order(5), "DELETE", "orders/bulk/5"),
            (lambda api: api.update_district(2, {}), "PUT", "districts/2"),
            (lambda api: api.delete_ledger(3), "DELETE", "ledgers/3"),
            (lambda api: api.create_item({}), "POST", "items"),
        ],
    )
    def test_endpoints(self, make_api, call, method, path):
        api, session = make_api((200, {"success": True}))
        call(api)
        assert session.calls[0][:2] == (method, f"http://backend.test/api/{path}")


class TestGetOrderWithItems:
    def test_returns_data(self, make_api):
        order = {"id": 5, "order_number": "ORD-5", "items": []}
        api, session = make_api((200, {"success": True, "data": order}))

        assert api.get_order_with_items(5) == (True, "Fetched", order)
        assert session.calls[0][1] == "http://backend.test/api/orders/with-items/5"

    def test_missing_data_is_failure(self, make_api):
        api, _ = make_api((200, {"success": True}))
        assert api.get_order_with_items(5) == (False, "Failed to load order details", None)

    def test_not_found(self, make_api):
        api, _ = make_api((404, {"message": "Order not found"}))
        ok, msg, data = api.get_order_with_items(5)
        assert ok is False
        assert msg == "Failed to load order details: Order not found"
        assert data is None
