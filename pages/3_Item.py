import streamlit as st

from domain.models import Item
from element_component import confirmation_dialog, get_client, get_notifier, records_table, show_notifications
from services.filter_service import STOCK_STATUSES, filter_items, unique_values
from utils.parsing import parse_float, parse_int, to_display_str

st.set_page_config(page_title="Items", page_icon="📦", layout="wide")
st.sidebar.header("📦 Items")

client = get_client()
notifier = get_notifier()

ok, msg, items = client.list_items()
if not ok:
    notifier.error(msg)

st.title("📦 Items")
if st.button("🔄 Refresh"):
    st.rerun()

# -----------------------------------------------------------------------------
# Filters + table
# -----------------------------------------------------------------------------
col_q, col_gst, col_stock = st.columns([2, 1, 1])
search = col_q.text_input("Search", placeholder="Name, code or HSN")
gst_rate = col_gst.selectbox("GST Rate", ["All Rates"] + [str(r) for r in unique_values(items, "gst_rate")])
stock = col_stock.selectbox("Stock", ("All Stock Status",) + STOCK_STATUSES)

filtered = filter_items(items, query=search, gst_rate=gst_rate, stock=stock)

records_table(
    filtered,
    {
        "item_name": "Item",
        "item_code": "Code",
        "hsn_code": "HSN",
        "gst_rate": "GST %",
        "opening_value": "Rate",
        "opening_quantity": "Opening Qty",
    },
    money=["opening_value"],
)

st.divider()

# -----------------------------------------------------------------------------
# Create / edit form
# -----------------------------------------------------------------------------
by_id = {r.get("id"): r for r in items}
editing_id = st.selectbox(
    "Edit existing item",
    list(by_id.keys()),
    index=None,
    placeholder="New item",
    format_func=lambda i: by_id[i].get("item_name") or f"Item {i}",
)
current = Item.from_record(by_id[editing_id]) if editing_id is not None else Item()

with st.form(f"item_form_{editing_id}", enter_to_submit=False):
    st.subheader("Edit Item" if editing_id is not None else "Add Item")
    c1, c2, c3 = st.columns(3)
    name = c1.text_input("Item Name *", value=current.item_name)
    code = c2.text_input("Item Code", value=current.item_code)
    hsn = c3.text_input("HSN Code", value=current.hsn_code)
    gst = c1.text_input("GST Rate (%)", value=to_display_str(current.gst_rate))
    opening_value = c2.text_input("Opening Rate", value=to_display_str(current.opening_value))
    opening_qty = c3.text_input("Opening Quantity", value=to_display_str(current.opening_quantity))

    if st.form_submit_button("Save"):
        if not name.strip():
            st.error("Item name is required")
        else:
            row = {
                "item_name": name.strip(),
                "item_code": code.strip(),
                "hsn_code": hsn.strip(),
                "gst_rate": parse_float(gst),
                "opening_value": parse_float(opening_value),
                "opening_quantity": parse_int(opening_qty),
            }
            if editing_id is not None:
                ok_s, msg_s, _ = client.update_item(editing_id, {"id": editing_id, **row})
            else:
                ok_s, msg_s, _ = client.create_item(row)
            if ok_s:
                notifier.success(msg_s)
                st.rerun()
            else:
                notifier.error(msg_s)

if editing_id is not None and st.button("🗑 Delete item"):
    def _delete() -> bool:
        ok_d, msg_d, _ = client.delete_item(editing_id)
        notifier.notify(msg_d, "success" if ok_d else "error")
        return ok_d

    confirmation_dialog(f"Delete item {current.item_name}?", _delete)

show_notifications(notifier)
