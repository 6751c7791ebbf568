import streamlit as st
import pandas as pd

from element_component import get_client, get_notifier, records_table, show_notifications
from services.dashboard_service import (
    compute_daily_trends,
    compute_dashboard_stats,
    compute_sales_by_state,
    compute_status_breakdown,
    recent_orders,
)
from utils.formatting import format_rupee

st.set_page_config(page_title="Dashboard", page_icon="📊", layout="wide")
st.sidebar.header("📊 Dashboard")

client = get_client()
notifier = get_notifier()

if st.sidebar.button("🔄 Refresh"):
    st.rerun()

# -----------------------------------------------------------------------------
# Load snapshots
# -----------------------------------------------------------------------------
ok_o, msg_o, orders = client.list_orders()
ok_l, msg_l, ledgers = client.list_ledgers()
ok_i, msg_i, items = client.list_items()

for ok, msg in ((ok_o, msg_o), (ok_l, msg_l), (ok_i, msg_i)):
    if not ok:
        notifier.error(msg)

show_notifications(notifier)

stats = compute_dashboard_stats(orders, ledgers, items)

# -----------------------------------------------------------------------------
# Metrics
# -----------------------------------------------------------------------------
st.title("📊 Dashboard")

col_1, col_2, col_3 = st.columns(3)
col_1.metric("Total Revenue", format_rupee(stats.revenue.total_revenue))
col_2.metric("Collected Revenue", format_rupee(stats.revenue.collected_revenue))
col_3.metric("Outstanding Balance", format_rupee(stats.revenue.outstanding_balance))

col_4, col_5, col_6, col_7, col_8 = st.columns(5)
col_4.metric("Total Orders", stats.total_orders)
col_5.metric("Pending Orders", stats.pending_orders)
col_6.metric("Dispatched", stats.total_dispatched)
col_7.metric("Items", stats.total_items)
col_8.metric("Parties", stats.total_ledgers)

st.divider()

# -----------------------------------------------------------------------------
# Charts
# -----------------------------------------------------------------------------
trends = compute_daily_trends(orders)
df_trends = pd.DataFrame(
    [{"Day": t.day_of_month, "Orders": t.order_count, "Revenue": t.revenue} for t in trends]
)
# day_of_month repeats across a month boundary, so keep the bucket order
df_trends.index = [f"{i + 1:02d}|{t.day_of_month}" for i, t in enumerate(trends)]

chart_left, chart_right = st.columns(2)
with chart_left:
    st.subheader("Daily Revenue (30 days)")
    st.line_chart(df_trends["Revenue"])
with chart_right:
    st.subheader("Daily Orders (30 days)")
    st.bar_chart(df_trends["Orders"])

breakdown = compute_status_breakdown(orders)
sales = compute_sales_by_state(orders, ledgers)

chart_left, chart_right = st.columns(2)
with chart_left:
    st.subheader("Order Status")
    st.bar_chart(
        pd.DataFrame(
            {"Orders": [breakdown.completed, breakdown.pending, breakdown.cancelled]},
            index=["Completed", "Pending", "Cancelled"],
        )
    )
with chart_right:
    st.subheader("Top States by Sales")
    if sales:
        st.bar_chart(pd.DataFrame({"Amount": [s.amount for s in sales]}, index=[s.state for s in sales]))
    else:
        st.info("No sales with a known party state yet.")

st.divider()

# -----------------------------------------------------------------------------
# Recent orders
# -----------------------------------------------------------------------------
order_columns = {
    "order_number": "Order No",
    "party_name": "Party",
    "order_date": "Date",
    "total_amount": "Amount",
    "payment_status": "Payment",
}

table_left, table_right = st.columns(2)
with table_left:
    st.subheader("Pending Orders")
    records_table(recent_orders(orders, "Pending"), order_columns, money=["total_amount"])
with table_right:
    st.subheader("Dispatched Orders")
    records_table(recent_orders(orders, "Dispatched"), order_columns, money=["total_amount"])
