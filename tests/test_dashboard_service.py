"""Tests for dashboard aggregation."""

from datetime import date

from services.dashboard_service import (
    compute_daily_trends,
    compute_dashboard_stats,
    compute_revenue_metrics,
    compute_sales_by_state,
    compute_status_breakdown,
    recent_orders,
)


class TestRevenue:
    def test_metrics(self, orders):
        metrics = compute_revenue_metrics(orders)

        assert metrics.total_revenue == 2300.0
        assert metrics.collected_revenue == 500.0
        assert metrics.outstanding_balance == 1500.0

    def test_string_amounts(self):
        metrics = compute_revenue_metrics([
            {"total_amount": "100.50", "paid_amount": "100.50", "balance_due": "0", "payment_status": "Paid"},
        ])
        assert metrics.total_revenue == 100.5
        assert metrics.collected_revenue == 100.5

    def test_empty(self):
        metrics = compute_revenue_metrics([])
        assert (metrics.total_revenue, metrics.collected_revenue, metrics.outstanding_balance) == (0, 0, 0)


class TestStats:
    def test_counts(self, orders, ledgers, items):
        stats = compute_dashboard_stats(orders, ledgers, items)

        assert stats.total_orders == 3
        assert stats.pending_orders == 1
        assert stats.total_dispatched == 1
        assert stats.total_items == 3
        assert stats.total_ledgers == 3


class TestDailyTrends:
    def test_thirty_empty_buckets(self):
        trends = compute_daily_trends([], reference_date=date(2024, 3, 15))

        assert len(trends) == 30
        assert all(t.order_count == 0 and t.revenue == 0 for t in trends)
        assert trends[0].day_of_month == 15  # 2024-02-15
        assert trends[-1].day_of_month == 15

    def test_orders_bucketed_by_calendar_day(self, orders):
        trends = compute_daily_trends(orders, reference_date=date(2024, 3, 15))
        by_day = {t.day_of_month: t for t in trends[-10:]}

        assert by_day[10].order_count == 1
        assert by_day[10].revenue == 1000.0
        assert by_day[12].order_count == 1
        assert by_day[15].revenue == 800.0
        assert by_day[11].order_count == 0

    def test_orders_outside_window_ignored(self, orders):
        trends = compute_daily_trends(orders, reference_date=date(2024, 5, 1))
        assert sum(t.order_count for t in trends) == 0


class TestStatusBreakdown:
    def test_cancelled_is_ten_percent_of_orders(self):
        orders = [{"status": "Pending"}] * 12 + [{"status": "Dispatched"}] * 7

        breakdown = compute_status_breakdown(orders)

        assert breakdown.pending == 12
        assert breakdown.completed == 7
        assert breakdown.cancelled == 1

    def test_real_cancelled_orders_not_counted(self):
        breakdown = compute_status_breakdown([{"status": "Cancelled"}] * 5)
        assert breakdown.cancelled == 0


class TestSalesByState:
    def test_top_five_states(self):
        ledgers = [{"id": i, "state": s} for i, s in enumerate("ABCDEF", start=1)]
        orders = [
            {"ledger_id": i, "total_amount": amount}
            for i, amount in zip(range(1, 7), (600, 500, 400, 300, 200, 100))
        ]

        sales = compute_sales_by_state(orders, ledgers)

        assert [s.state for s in sales] == ["A", "B", "C", "D", "E"]
        assert sales[0].amount == 600.0

    def test_unknown_party_or_missing_state_skipped(self, orders, ledgers):
        orders = orders + [{"ledger_id": 3, "total_amount": 999}, {"ledger_id": 77, "total_amount": 5}]

        sales = compute_sales_by_state(orders, ledgers)

        # ledger_id "1" on ORD-3 still matches ledger 1
        assert [(s.state, s.amount) for s in sales] == [("A", 1800.0), ("B", 500.0)]


def test_recent_orders_limited_by_status(orders):
    pending = [{"status": "Pending", "id": i} for i in range(8)]

    assert [o["id"] for o in recent_orders(pending + orders, "Pending")] == [0, 1, 2, 3, 4]
    assert [o["order_number"] for o in recent_orders(orders, "Dispatched")] == ["ORD-2"]
