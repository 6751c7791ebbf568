import streamlit as st

from element_component import (
    get_client,
    get_notifier,
    render_line_items,
    render_order_header,
    render_payment_fields,
    show_notifications,
)
from services.order_service import hydrate_order, save_order
from services.reference_data import ReferenceData

st.set_page_config(page_title="Edit Order", page_icon="✏️", layout="wide")
st.sidebar.header("✏️ Edit Order")

client = get_client()
notifier = get_notifier()

order_id = st.session_state.get("edit_order_id")
if order_id is None:
    st.warning("Pick an order to edit from the Orders page.")
    if st.button("Go to Orders"):
        st.switch_page("pages/4_Orders.py")
    st.stop()

ORDER_KEY = f"edit_order_{order_id}"
PREFIX = f"edit{order_id}_"

if ORDER_KEY not in st.session_state:
    ok, msg, record = client.get_order_with_items(order_id)
    if not ok:
        notifier.error("Failed to load order details")
        show_notifications(notifier)
        st.error(msg)
        st.stop()
    st.session_state[ORDER_KEY] = hydrate_order(record)

order = st.session_state[ORDER_KEY]
reference = ReferenceData.load(client, notifier)

st.title("✏️ Edit Order")
st.caption(f"{order.header.order_number} · {order.header.status}")

if st.button("↩ Back to Orders"):
    st.switch_page("pages/4_Orders.py")

with st.container(border=True):
    st.subheader("Order Details")
    render_order_header(order, reference, key_prefix=f"{PREFIX}hdr")

with st.container(border=True):
    render_line_items(order, reference, key_prefix=f"{PREFIX}line")

with st.container(border=True):
    st.subheader("Payment")
    render_payment_fields(order, key_prefix=f"{PREFIX}pay")

if st.button("💾 Update Order", type="primary"):
    if save_order(client, order, notifier, order_id=order_id):
        # the next visit reloads a fresh copy from the backend
        for key in [k for k in st.session_state.keys() if str(k).startswith(PREFIX)]:
            del st.session_state[key]
        del st.session_state[ORDER_KEY]
        st.session_state.pop("edit_order_id", None)
        st.switch_page("pages/4_Orders.py")

show_notifications(notifier)
