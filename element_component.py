from typing import Any, Callable, Dict, List, Optional

import pandas as pd
import streamlit as st

from data_integrator import ApiClient
from domain.models import ORDER_STATUSES, PAYMENT_METHODS, Order
from services.notifier import QueueNotifier
from services.order_service import (
    add_line,
    remove_line,
    select_item,
    select_party,
    set_quantity_or_rate,
    sync_order_payment,
)
from services.payment_service import (
    PaymentForm,
    mark_fully_paid,
    on_paid_amount_change,
    reset_unpaid,
    submit_payment,
)
from services.reference_data import ReferenceData, normalize_id
from utils.config import configure_logging, load_settings
from utils.formatting import format_rupee, to_date

_TOAST_ICONS = {"success": "✅", "error": "❌", "warning": "⚠️", "info": "ℹ️"}


# -----------------------------------------------------------------------------
# App wiring
# -----------------------------------------------------------------------------

@st.cache_resource
def get_client() -> ApiClient:
    settings = load_settings()
    configure_logging(settings.log_level)
    return ApiClient(settings.api_base_url)


def get_notifier() -> QueueNotifier:
    """Notifier whose queue lives in the session, so messages survive st.rerun()."""
    queue = st.session_state.setdefault("notifications", [])
    return QueueNotifier(queue)


def show_notifications(notifier: QueueNotifier) -> None:
    for note in notifier.drain():
        st.toast(note.message, icon=_TOAST_ICONS.get(note.level))


# -----------------------------------------------------------------------------
# Dialogs
# -----------------------------------------------------------------------------

@st.dialog("Confirm")
def confirmation_dialog(prompt: str, on_confirm: Callable[[], bool]):
    st.write(prompt)

    col_yes, col_no = st.columns(2)

    with col_yes:
        if st.button("Yes", type="primary", key="confirm_yes"):
            on_confirm()
            st.rerun()
    with col_no:
        if st.button("No", key="confirm_no"):
            st.rerun()


@st.dialog("Payment Management")
def payment_dialog(client: ApiClient, order: Dict[str, Any], notifier: QueueNotifier):
    state_key = f"payment_form_{order.get('id')}"
    if state_key not in st.session_state:
        st.session_state[state_key] = PaymentForm.for_order(order)
    form: PaymentForm = st.session_state[state_key]
    pay_key = f"pay_amount_{order.get('id')}"

    st.caption(f"Order {order.get('order_number', '')}")
    st.metric("Total Amount", format_rupee(form.total_amount))

    col_full, col_reset = st.columns(2)
    with col_full:
        if st.button("Mark Fully Paid", key="pay_full"):
            mark_fully_paid(form)
            st.session_state[pay_key] = form.paid_amount
    with col_reset:
        if st.button("Reset to Unpaid", key="pay_reset"):
            reset_unpaid(form)
            st.session_state[pay_key] = form.paid_amount

    st.session_state.setdefault(pay_key, form.paid_amount)
    raw_paid = st.number_input("Paid Amount", min_value=0.0, step=1.0, key=pay_key,
                               help=f"Total: {format_rupee(form.total_amount)}")
    on_paid_amount_change(form, raw_paid)

    form.payment_method = st.selectbox(
        "Payment Method",
        PAYMENT_METHODS,
        index=PAYMENT_METHODS.index(form.payment_method),
    )

    c1, c2, c3 = st.columns(3)
    c1.metric("Paid", format_rupee(form.paid_amount))
    c2.metric("Balance Due", format_rupee(form.balance_due))
    c3.metric("Status", form.payment_status)

    if st.button("Update Payment", type="primary"):
        if submit_payment(client, form, notifier):
            del st.session_state[state_key]
            st.session_state.pop(pay_key, None)
            st.rerun()
        else:
            # keep the dialog open with the typed values; show the error here too
            for note in notifier.drain():
                st.error(note.message)


# -----------------------------------------------------------------------------
# Order editor (create / edit pages)
# -----------------------------------------------------------------------------

def _party_label(header, reference: ReferenceData):
    def label(ledger_id) -> str:
        # a party missing from /ledgers keeps the name the order was saved with
        if reference.ledger(ledger_id) is None and ledger_id == normalize_id(header.ledger_id) and header.party_name:
            return header.party_name
        return reference.party_name(ledger_id)

    return label


def render_order_header(order: Order, reference: ReferenceData, key_prefix: str):
    header = order.header

    ledger_ids = [normalize_id(ledger.id) for ledger in reference.ledgers]
    current_id = normalize_id(header.ledger_id)
    if current_id is not None and current_id not in ledger_ids:
        ledger_ids.append(current_id)
    current = ledger_ids.index(current_id) if current_id is not None else None

    col_a, col_b, col_c = st.columns(3)
    with col_a:
        ledger_id = st.selectbox(
            "Party Name *",
            ledger_ids,
            index=current,
            format_func=_party_label(header, reference),
            placeholder="Select party",
            key=f"{key_prefix}_party",
        )
        if ledger_id != current_id:
            select_party(order, ledger_id, reference.party_name(ledger_id) if ledger_id is not None else "")
    with col_b:
        header.order_number = st.text_input("Order No *", value=header.order_number, key=f"{key_prefix}_number")
    with col_c:
        order_date = st.date_input("Order Date", value=to_date(header.order_date), key=f"{key_prefix}_date")
        header.order_date = str(order_date) if order_date else ""

    col_d, col_e, col_f = st.columns(3)
    with col_d:
        delivery = st.date_input(
            "Delivery Date",
            value=to_date(header.delivery_date),
            key=f"{key_prefix}_delivery",
        )
        header.delivery_date = str(delivery) if delivery else ""
    with col_e:
        header.status = st.selectbox(
            "Status",
            ORDER_STATUSES,
            index=ORDER_STATUSES.index(header.status) if header.status in ORDER_STATUSES else 0,
            key=f"{key_prefix}_status",
        )
    with col_f:
        header.remarks = st.text_input("Remarks", value=header.remarks, key=f"{key_prefix}_remarks")


def _item_label(line, reference: ReferenceData):
    def label(item_id) -> str:
        if reference.item(item_id) is None and item_id == normalize_id(line.item_id) and line.item_name:
            return line.item_name
        return reference.item_name(item_id)

    return label


def render_line_items(order: Order, reference: ReferenceData, key_prefix: str):
    """
    One row per line item. Widget keys use the line's local_id, so a row keeps
    its inputs when other rows are removed.
    """
    top_left, top_right = st.columns([4, 1])
    top_left.subheader(f"Order Items ({len(order.lines)})")
    if top_right.button("➕ Add Item", key=f"{key_prefix}_add"):
        add_line(order)

    catalog_ids = [normalize_id(item.id) for item in reference.items]

    for line in list(order.lines):
        k = f"{key_prefix}_{line.local_id}"
        col_item, col_mt, col_pcs, col_rate, col_amt, col_del = st.columns([3, 1, 1, 1.2, 1.2, 0.5])

        with col_item:
            line_item_id = normalize_id(line.item_id)
            item_ids = list(catalog_ids)
            # an item gone from the catalog stays on the line until the user picks another
            if line_item_id is not None and line_item_id not in item_ids:
                item_ids.append(line_item_id)
            current = item_ids.index(line_item_id) if line_item_id is not None else None
            chosen = st.selectbox(
                "Item",
                item_ids,
                index=current,
                format_func=_item_label(line, reference),
                placeholder="Select item",
                key=f"{k}_item",
            )
            if chosen != line_item_id:
                select_item(line, reference.item(chosen) if chosen is not None else None)
                # a freshly defaulted rate must reach the rate box on this run
                st.session_state[f"{k}_rate"] = line.rate
            if line.item_id is not None:
                st.caption(f"Code: {line.item_code or '-'} | HSN: {line.hsn_code or '-'} | GST: {line.gst_rate or '-'}%")

        with col_mt:
            set_quantity_or_rate(line, "qty_mt", st.text_input("MT Qty", value=line.qty_mt, key=f"{k}_mt"))
        with col_pcs:
            set_quantity_or_rate(line, "qty_pcs", st.text_input("PCS Qty", value=line.qty_pcs, key=f"{k}_pcs"))
        with col_rate:
            st.session_state.setdefault(f"{k}_rate", line.rate)
            set_quantity_or_rate(line, "rate", st.text_input("Rate", key=f"{k}_rate"))
        with col_amt:
            st.markdown(f"**Amount**  \n{format_rupee(line.amount)}")
        with col_del:
            st.write("")
            if st.button("🗑", key=f"{k}_remove", disabled=len(order.lines) <= 1):
                remove_line(order, line.local_id)
                st.rerun()


def render_payment_fields(order: Order, key_prefix: str):
    header = order.header
    col_method, col_paid = st.columns(2)
    with col_method:
        methods = ("Pending",) + PAYMENT_METHODS
        header.payment_method = st.selectbox(
            "Payment Method",
            methods,
            index=methods.index(header.payment_method) if header.payment_method in methods else 0,
            key=f"{key_prefix}_method",
        )
    with col_paid:
        paid = st.number_input(
            "Paid Amount", min_value=0.0, value=float(header.paid_amount), step=1.0, key=f"{key_prefix}_paid"
        )
    sync_order_payment(order, paid)

    c1, c2, c3 = st.columns(3)
    c1.metric("Total Amount", format_rupee(order.total_amount))
    c2.metric("Balance Due", format_rupee(header.balance_due))
    c3.metric("Payment Status", header.payment_status)


# -----------------------------------------------------------------------------
# Tables
# -----------------------------------------------------------------------------

def records_table(records: List[Dict[str, Any]], columns: Dict[str, str], money: Optional[List[str]] = None):
    """
    Show records with renamed columns; `money` columns get currency format.
    """
    if not records:
        st.info("No records found.")
        return

    df = pd.DataFrame(records)
    for col in columns:
        if col not in df.columns:
            df[col] = None
    df = df[list(columns.keys())].copy()

    for col in money or []:
        df[col] = df[col].apply(format_rupee)

    df = df.rename(columns=columns)
    st.dataframe(df, width="stretch", hide_index=True)
