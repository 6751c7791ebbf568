# services/dashboard_service.py

import math
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

from domain.models import (
    DailyTrend,
    DashboardStats,
    RevenueMetrics,
    StateSales,
    StatusBreakdown,
)
from services.reference_data import normalize_id
from utils.formatting import to_date
from utils.parsing import parse_float

TREND_DAYS = 30
TOP_STATES = 5


def compute_revenue_metrics(orders: Iterable[Dict[str, Any]]) -> RevenueMetrics:
    orders = list(orders or [])

    total_revenue = sum(parse_float(o.get("total_amount")) for o in orders)

    collected_revenue = sum(
        parse_float(o.get("paid_amount"))
        for o in orders
        if o.get("payment_status") == "Paid"
    )

    # The "== Partial" clause is already covered by "!= Paid"; kept so the
    # figure matches what the console has always reported.
    outstanding_balance = sum(
        parse_float(o.get("balance_due"))
        for o in orders
        if o.get("payment_status") != "Paid" or o.get("payment_status") == "Partial"
    )

    return RevenueMetrics(
        total_revenue=round(total_revenue, 2),
        collected_revenue=round(collected_revenue, 2),
        outstanding_balance=round(outstanding_balance, 2),
    )


def compute_dashboard_stats(
        orders: Iterable[Dict[str, Any]],
        ledgers: Iterable[Dict[str, Any]],
        items: Iterable[Dict[str, Any]],
) -> DashboardStats:
    orders = list(orders or [])
    return DashboardStats(
        revenue=compute_revenue_metrics(orders),
        pending_orders=sum(1 for o in orders if o.get("status") == "Pending"),
        total_orders=len(orders),
        total_dispatched=sum(1 for o in orders if o.get("status") == "Dispatched"),
        total_items=len(list(items or [])),
        total_ledgers=len(list(ledgers or [])),
    )


def compute_daily_trends(
        orders: Iterable[Dict[str, Any]],
        reference_date: Optional[date] = None,
        days: int = TREND_DAYS,
) -> List[DailyTrend]:
    """
    One bucket per calendar day for the `days` days ending at reference_date
    (inclusive), oldest first. Orders match on their order_date's calendar
    day; no timezone conversion is applied.
    """
    reference_date = reference_date or date.today()

    counts: Dict[date, int] = {}
    revenue: Dict[date, float] = {}
    for order in orders or []:
        order_day = to_date(order.get("order_date"))
        if order_day is None:
            continue
        counts[order_day] = counts.get(order_day, 0) + 1
        revenue[order_day] = revenue.get(order_day, 0.0) + parse_float(order.get("total_amount"))

    trends: List[DailyTrend] = []
    for offset in range(days - 1, -1, -1):
        day = reference_date - timedelta(days=offset)
        trends.append(
            DailyTrend(
                day_of_month=day.day,
                order_count=counts.get(day, 0),
                revenue=round(revenue.get(day, 0.0), 2),
            )
        )
    return trends


def compute_status_breakdown(orders: Iterable[Dict[str, Any]]) -> StatusBreakdown:
    orders = list(orders or [])
    return StatusBreakdown(
        completed=sum(1 for o in orders if o.get("status") == "Dispatched"),
        pending=sum(1 for o in orders if o.get("status") == "Pending"),
        # TODO: replace with a count of status == "Cancelled" once the product
        # owner confirms the chart should show real cancellations
        cancelled=math.floor(len(orders) * 0.1),
    )


def compute_sales_by_state(
        orders: Iterable[Dict[str, Any]],
        ledgers: Iterable[Dict[str, Any]],
        limit: int = TOP_STATES,
) -> List[StateSales]:
    """
    Total order value per party state, highest first, top `limit` only.
    Orders whose party is unknown or has no state are skipped.
    """
    ledger_map = {normalize_id(ledger.get("id")): ledger for ledger in ledgers or []}

    state_totals: Dict[str, float] = {}
    for order in orders or []:
        ledger = ledger_map.get(normalize_id(order.get("ledger_id")))
        if not ledger or not ledger.get("state"):
            continue
        state = ledger["state"]
        state_totals[state] = state_totals.get(state, 0.0) + parse_float(order.get("total_amount"))

    ranked = sorted(state_totals.items(), key=lambda kv: kv[1], reverse=True)
    return [StateSales(state=state, amount=round(amount, 2)) for state, amount in ranked[:limit]]


def recent_orders(
        orders: Iterable[Dict[str, Any]],
        status: str,
        limit: int = 5,
) -> List[Dict[str, Any]]:
    return [o for o in orders or [] if o.get("status") == status][:limit]
