import streamlit as st

from element_component import (
    get_client,
    get_notifier,
    render_line_items,
    render_order_header,
    render_payment_fields,
    show_notifications,
)
from services.order_service import new_order, save_order
from services.reference_data import ReferenceData

st.set_page_config(page_title="Create Order", page_icon="📝", layout="wide")
st.sidebar.header("📝 Create Order")

client = get_client()
notifier = get_notifier()

ORDER_KEY = "create_order"

if ORDER_KEY not in st.session_state:
    st.session_state[ORDER_KEY] = new_order()

order = st.session_state[ORDER_KEY]
reference = ReferenceData.load(client, notifier)

st.title("📝 Create Order")

if st.button("↩ Back to Orders"):
    st.switch_page("pages/4_Orders.py")

with st.container(border=True):
    st.subheader("Order Details")
    render_order_header(order, reference, key_prefix="new")

with st.container(border=True):
    render_line_items(order, reference, key_prefix="new_line")

with st.container(border=True):
    st.subheader("Payment")
    render_payment_fields(order, key_prefix="new_pay")

col_save, col_reset, _ = st.columns([1, 1, 4])

if col_save.button("💾 Save Order", type="primary"):
    if save_order(client, order, notifier):
        # drop the draft and every widget bound to it
        for key in [k for k in st.session_state.keys() if str(k).startswith("new")]:
            del st.session_state[key]
        del st.session_state[ORDER_KEY]
        st.switch_page("pages/4_Orders.py")

if col_reset.button("Reset"):
    for key in [k for k in st.session_state.keys() if str(k).startswith("new")]:
        del st.session_state[key]
    del st.session_state[ORDER_KEY]
    st.rerun()

show_notifications(notifier)
