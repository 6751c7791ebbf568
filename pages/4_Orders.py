import streamlit as st
import pandas as pd

from domain.models import ORDER_STATUSES, PAYMENT_METHODS, PAYMENT_STATUSES
from element_component import (
    confirmation_dialog,
    get_client,
    get_notifier,
    payment_dialog,
    show_notifications,
)
from services.filter_service import filter_orders
from services.reference_data import ReferenceData
from utils.formatting import format_date, format_rupee
from utils.parsing import parse_float

st.set_page_config(page_title="Orders", page_icon="🧾", layout="wide")
st.sidebar.header("🧾 Orders")

client = get_client()
notifier = get_notifier()

# -----------------------------------------------------------------------------
# Load data
# -----------------------------------------------------------------------------
ok, msg, orders = client.list_orders_with_items()
if not ok:
    notifier.error(msg)
reference = ReferenceData.load(client, notifier)

# -----------------------------------------------------------------------------
# Header actions
# -----------------------------------------------------------------------------
st.title("🧾 Orders")

col_new, col_refresh, _ = st.columns([1, 1, 4])
if col_new.button("➕ Create Order", type="primary"):
    st.switch_page("pages/5_Create_Order.py")
if col_refresh.button("🔄 Refresh"):
    st.rerun()

# -----------------------------------------------------------------------------
# Filters
# -----------------------------------------------------------------------------
with st.expander("Filters", expanded=True):
    search = st.text_input("Search", placeholder="Order no, party or item")

    f1, f2, f3 = st.columns(3)
    status = f1.selectbox("Status", ("All Status",) + ORDER_STATUSES)
    party = f2.selectbox(
        "Party",
        ["All Parties"] + [ledger.id for ledger in reference.ledgers],
        format_func=lambda v: v if v == "All Parties" else reference.party_name(v),
    )
    item = f3.selectbox(
        "Item",
        ["All Items"] + [it.id for it in reference.items],
        format_func=lambda v: v if v == "All Items" else reference.item_name(v),
    )

    f4, f5, f6, f7 = st.columns(4)
    payment_status = f4.selectbox("Payment Status", ("All Payment Status",) + PAYMENT_STATUSES)
    payment_method = f5.selectbox("Payment Method", ("All Payment Methods", "Pending") + PAYMENT_METHODS)
    date_from = f6.date_input("From", value=None)
    date_to = f7.date_input("To", value=None)

filtered = filter_orders(
    orders,
    query=search,
    status=status,
    ledger_id=party,
    item_id=item,
    payment_status=payment_status,
    payment_method=payment_method,
    date_from=date_from,
    date_to=date_to,
)

show_notifications(notifier)

# -----------------------------------------------------------------------------
# Table
# -----------------------------------------------------------------------------
st.caption(f"Showing {len(filtered)} of {len(orders)} orders")

if not filtered:
    st.info("No orders found.")
    st.stop()


def _items_summary(order) -> str:
    rows = order.get("items") or []
    if not rows:
        return reference.item_name(order["item_id"]) if order.get("item_id") is not None else "-"
    return ", ".join(row.get("item_name") or reference.item_name(row.get("item_id")) for row in rows)


df_orders = pd.DataFrame(
    [
        {
            "Order No": o.get("order_number"),
            "Party": o.get("party_name") or reference.party_name(o.get("ledger_id")),
            "Items": _items_summary(o),
            "Order Date": format_date(o.get("order_date")),
            "Status": o.get("status"),
            "Amount": parse_float(o.get("total_amount")),
            "Paid": parse_float(o.get("paid_amount")),
            "Balance": parse_float(o.get("balance_due")),
            "Payment": o.get("payment_status"),
            "Method": o.get("payment_method"),
        }
        for o in filtered
    ]
)

df_display = df_orders.copy()
for col in ("Amount", "Paid", "Balance"):
    df_display[col] = df_display[col].apply(format_rupee)

st.dataframe(df_display, width="stretch", hide_index=True)

csv = df_orders.to_csv(index=False).encode("utf-8")
st.download_button("Download as CSV", data=csv, file_name="orders.csv", mime="text/csv")

st.divider()

# -----------------------------------------------------------------------------
# Row actions
# -----------------------------------------------------------------------------
orders_by_id = {o.get("id"): o for o in filtered}
selected_id = st.selectbox(
    "Select order",
    list(orders_by_id.keys()),
    format_func=lambda oid: f"{orders_by_id[oid].get('order_number')} - "
                            f"{orders_by_id[oid].get('party_name') or reference.party_name(orders_by_id[oid].get('ledger_id'))}",
)
selected = orders_by_id[selected_id]

a1, a2, a3, a4 = st.columns(4)
show_details = a1.button("👁 View Details")
if a2.button("✏️ Edit"):
    st.session_state["edit_order_id"] = selected_id
    st.switch_page("pages/6_Edit_Order.py")
if a3.button("💳 Payment"):
    payment_dialog(client, selected, notifier)
if a4.button("🗑 Delete"):
    def _delete() -> bool:
        ok_del, msg_del, _ = client.delete_order(selected_id)
        if ok_del:
            notifier.success("Order deleted successfully")
        else:
            notifier.error(msg_del)
        return ok_del

    confirmation_dialog(f"Delete order {selected.get('order_number')}?", _delete)

if show_details:
    ok_d, msg_d, details = client.get_order_with_items(selected_id)
    if not ok_d:
        st.error(msg_d)
    else:
        st.subheader(f"Order {details.get('order_number')}")
        d1, d2, d3 = st.columns(3)
        d1.write(f"**Party:** {details.get('party_name') or reference.party_name(details.get('ledger_id'))}")
        d1.write(f"**Status:** {details.get('status')}")
        d2.write(f"**Order Date:** {format_date(details.get('order_date'))}")
        d2.write(f"**Delivery Date:** {format_date(details.get('delivery_date'))}")
        d3.write(f"**Payment:** {details.get('payment_status')} ({details.get('payment_method')})")
        d3.write(f"**Remarks:** {details.get('remarks') or '-'}")

        line_rows = [
            {
                "Item": row.get("item_name") or reference.item_name(row.get("item_id")),
                "Code": row.get("item_code"),
                "HSN": row.get("hsn_code"),
                "GST %": row.get("gst_rate"),
                "MT Qty": row.get("qty_mt"),
                "PCS Qty": row.get("qty_pcs"),
                "Rate": format_rupee(row.get("rate")),
                "Amount": format_rupee(row.get("amount")),
            }
            for row in details.get("items") or []
        ]
        st.dataframe(pd.DataFrame(line_rows), width="stretch", hide_index=True)

        t1, t2, t3 = st.columns(3)
        t1.metric("Total", format_rupee(details.get("total_amount")))
        t2.metric("Paid", format_rupee(details.get("paid_amount")))
        t3.metric("Balance Due", format_rupee(details.get("balance_due")))
