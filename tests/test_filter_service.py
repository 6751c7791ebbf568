"""Tests for the client-side table filters."""

from datetime import date

from services.filter_service import (
    apply_district,
    apply_state,
    filter_districts,
    filter_items,
    filter_ledgers,
    filter_orders,
    stock_status,
    unique_values,
)

DISTRICTS = [
    {"district_name": "Pune", "district_code": "PN", "postal_code": "411001", "state": "Maharashtra",
     "zone_region": "West", "active_status": "Active"},
    {"district_name": "Nagpur", "district_code": "NG", "postal_code": "440001", "state": "Maharashtra",
     "zone_region": "Central", "active_status": "Active"},
    {"district_name": "Surat", "district_code": "ST", "postal_code": "395003", "state": "Gujarat",
     "zone_region": "West", "active_status": "Inactive"},
]


class TestFilterOrders:
    def test_no_filters(self, orders):
        assert filter_orders(orders) == orders

    def test_search_matches_number_party_or_item(self, orders):
        assert [o["id"] for o in filter_orders(orders, query="ord-2")] == [101]
        assert [o["id"] for o in filter_orders(orders, query="acme")] == [100, 102]
        assert [o["id"] for o in filter_orders(orders, query="cement")] == [102]

    def test_all_options_do_not_filter(self, orders):
        result = filter_orders(orders, status="All Status", ledger_id="All Parties", payment_method="All Payment Methods")
        assert len(result) == 3

    def test_party_matches_across_id_types(self, orders):
        assert [o["id"] for o in filter_orders(orders, ledger_id=1)] == [100, 102]

    def test_item_matches_any_line(self, orders):
        assert [o["id"] for o in filter_orders(orders, item_id="10")] == [100, 102]

    def test_status_and_payment(self, orders):
        assert [o["id"] for o in filter_orders(orders, status="Dispatched")] == [101]
        assert [o["id"] for o in filter_orders(orders, payment_status="Partial")] == [102]
        assert [o["id"] for o in filter_orders(orders, payment_method="Pending")] == [100]

    def test_date_range_inclusive(self, orders):
        result = filter_orders(orders, date_from=date(2024, 3, 12), date_to=date(2024, 3, 15))
        assert [o["id"] for o in result] == [101, 102]

    def test_open_ended_date_range(self, orders):
        assert [o["id"] for o in filter_orders(orders, date_to=date(2024, 3, 11))] == [100]


class TestFilterLedgers:
    def test_search(self, ledgers):
        assert [r["id"] for r in filter_ledgers(ledgers, query="27abcde")] == [1]
        assert [r["id"] for r in filter_ledgers(ledgers, query="9800000002")] == [2]

    def test_group_and_status(self, ledgers):
        assert [r["id"] for r in filter_ledgers(ledgers, party_type="Dealer")] == [3]
        assert [r["id"] for r in filter_ledgers(ledgers, active_status="Active")] == [1, 2]


class TestDistrictCascade:
    def test_state_preselects_first_district(self):
        form = {"state": "", "district_name": "", "district_code": "", "postal_code": ""}

        apply_state(form, "Maharashtra", DISTRICTS)

        assert form == {"state": "Maharashtra", "district_name": "Pune", "district_code": "PN",
                        "postal_code": "411001"}

    def test_state_without_districts_clears(self):
        form = {"state": "Maharashtra", "district_name": "Pune", "district_code": "PN", "postal_code": "411001"}

        apply_state(form, "Goa", DISTRICTS)

        assert form["district_name"] == ""
        assert form["postal_code"] == ""

    def test_apply_district(self):
        form = apply_district({}, DISTRICTS[1])
        assert (form["district_name"], form["district_code"], form["postal_code"]) == ("Nagpur", "NG", "440001")


class TestItemsAndDistricts:
    def test_stock_status(self):
        assert stock_status({"opening_quantity": 40}) == "In Stock"
        assert stock_status({"opening_quantity": 10}) == "Low Stock"
        assert stock_status({"opening_quantity": None}) == "Out of Stock"

    def test_filter_items(self, items):
        assert [r["id"] for r in filter_items(items, query="7217")] == [11]
        assert [r["id"] for r in filter_items(items, gst_rate="28")] == [12]
        assert [r["id"] for r in filter_items(items, stock="Low Stock")] == [11]

    def test_filter_districts(self):
        assert [d["district_name"] for d in filter_districts(DISTRICTS, zone="West")] == ["Pune", "Surat"]
        assert [d["district_name"] for d in filter_districts(DISTRICTS, query="gujarat")] == ["Surat"]
        assert [d["district_name"] for d in filter_districts(DISTRICTS, active_status="Inactive")] == ["Surat"]

    def test_unique_values_sorted(self):
        assert unique_values(DISTRICTS, "state") == ["Gujarat", "Maharashtra"]
