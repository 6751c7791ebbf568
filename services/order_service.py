# services/order_service.py

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from domain.errors import (
    MISSING_ORDER_NUMBER,
    MISSING_PARTY,
    NO_VALID_ITEMS,
    ValidationError,
)
from domain.models import LINE_NUMERIC_FIELDS, Item, LineItem, Order, OrderHeader
from services.notifier import Notifier
from services.payment_service import derive_payment_state
from utils.formatting import to_date_str
from utils.parsing import parse_float, parse_int, to_display_str

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Line items
# ---------------------------------------------------------------------------

def calculate_amount(line: LineItem) -> float:
    """
    amount = (qty_mt if qty_mt > 0 else qty_pcs) * rate, rounded to 2 places.
    """
    qty_mt = parse_float(line.qty_mt)
    qty_pcs = parse_float(line.qty_pcs)
    rate = parse_float(line.rate)
    total_qty = qty_mt if qty_mt > 0 else qty_pcs
    return round(total_qty * rate, 2)


def select_item(line: LineItem, item: Optional[Item]) -> LineItem:
    """
    Copy catalog fields onto the line. The item's opening rate is only used
    when the line has no rate yet; typed quantities and rate are never lost.
    """
    if item is None:
        line.item_id = None
        line.item_name = ""
        line.item_code = ""
        line.hsn_code = ""
        line.gst_rate = ""
    else:
        line.item_id = item.id
        line.item_name = item.item_name
        line.item_code = item.item_code or ""
        line.hsn_code = item.hsn_code or ""
        line.gst_rate = item.gst_rate if item.gst_rate is not None else ""
        if not str(line.rate).strip():
            line.rate = to_display_str(item.opening_value)

    line.amount = calculate_amount(line)
    return line


def set_quantity_or_rate(line: LineItem, field: str, value: Any) -> LineItem:
    if field not in LINE_NUMERIC_FIELDS:
        raise ValueError(f"Invalid line field: {field}")

    setattr(line, field, "" if value is None else str(value))
    line.amount = calculate_amount(line)
    return line


def is_submittable(line: LineItem) -> bool:
    """A line goes to the backend only with an item and a nonzero quantity."""
    if line.item_id in (None, ""):
        return False
    return parse_float(line.qty_mt) != 0 or parse_float(line.qty_pcs) != 0


# ---------------------------------------------------------------------------
# Order aggregate
# ---------------------------------------------------------------------------

def suggest_order_number(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"ORD-{now.strftime('%Y%m%d-%H%M%S')}"


def new_order(order_date: Optional[date] = None, order_number: Optional[str] = None) -> Order:
    header = OrderHeader(
        order_number=order_number if order_number is not None else suggest_order_number(),
        order_date=(order_date or date.today()).isoformat(),
    )
    return Order(header=header, lines=[LineItem(local_id=1)])


def next_local_id(order: Order) -> int:
    return max((line.local_id for line in order.lines), default=0) + 1


def add_line(order: Order) -> LineItem:
    line = LineItem(local_id=next_local_id(order))
    order.lines.append(line)
    return line


def remove_line(order: Order, local_id: int) -> bool:
    """
    Remove the line keyed by local_id. The editor always keeps one line, so
    removing the last one is refused.
    """
    if len(order.lines) <= 1:
        return False

    remaining = [line for line in order.lines if line.local_id != local_id]
    if len(remaining) == len(order.lines):
        return False

    order.lines[:] = remaining
    return True


def find_line(order: Order, local_id: int) -> Optional[LineItem]:
    return next((line for line in order.lines if line.local_id == local_id), None)


def compute_total(order: Order) -> float:
    return order.total_amount


def select_party(order: Order, ledger_id: Optional[int], party_name: str = "") -> None:
    order.header.ledger_id = ledger_id
    order.header.party_name = party_name if ledger_id is not None else ""


def sync_order_payment(order: Order, raw_paid: Any) -> None:
    """
    Re-derive the header's payment fields against the live order total.
    """
    state = derive_payment_state(order.total_amount, raw_paid)
    order.header.paid_amount = state.paid_amount
    order.header.balance_due = state.balance_due
    order.header.payment_status = state.payment_status


def valid_lines(order: Order) -> List[LineItem]:
    return [line for line in order.lines if is_submittable(line)]


def validate_for_submit(order: Order) -> List[LineItem]:
    """
    Check the aggregate is ready to send and return the lines that will be
    submitted. Raises ValidationError (MissingParty, MissingOrderNumber,
    NoValidItems, checked in that order).
    """
    if order.header.ledger_id in (None, ""):
        raise ValidationError(MISSING_PARTY)
    if not str(order.header.order_number or "").strip():
        raise ValidationError(MISSING_ORDER_NUMBER)

    lines = valid_lines(order)
    if not lines:
        raise ValidationError(NO_VALID_ITEMS)
    return lines


def to_submit_payload(order: Order) -> Dict[str, Any]:
    """
    Shape accepted by POST /orders/bulk and PUT /orders/bulk/{id}.
    Lines without an item or quantity are left out.
    """
    header = order.header
    return {
        "order_header": {
            "order_number": header.order_number,
            "ledger_id": header.ledger_id,
            "order_date": header.order_date,
            "delivery_date": header.delivery_date or None,
            "status": header.status,
            "payment_method": header.payment_method,
            "payment_status": header.payment_status,
            "paid_amount": header.paid_amount,
            "balance_due": header.balance_due,
            "remarks": header.remarks,
        },
        "order_items": [
            {
                "item_id": line.item_id,
                "qty_mt": parse_float(line.qty_mt),
                "qty_pcs": parse_int(line.qty_pcs),
                "rate": parse_float(line.rate),
                "amount": parse_float(line.amount),
            }
            for line in valid_lines(order)
        ],
    }


def hydrate_order(record: Dict[str, Any]) -> Order:
    """
    Build an editor aggregate from a GET /orders/with-items/{id} record.

    A submit payload ({"order_header", "order_items"}) is accepted too.
    Stored line amounts are kept as sent by the backend.
    """
    if "order_header" in record:
        header_src = record.get("order_header") or {}
        items_src = record.get("order_items") or []
    else:
        header_src = record
        items_src = record.get("items") or []

    header = OrderHeader(
        order_number=header_src.get("order_number") or "",
        ledger_id=header_src.get("ledger_id"),
        party_name=header_src.get("party_name") or "",
        order_date=to_date_str(header_src.get("order_date")),
        delivery_date=to_date_str(header_src.get("delivery_date")),
        status=header_src.get("status") or "Pending",
        payment_method=header_src.get("payment_method") or "Pending",
        payment_status=header_src.get("payment_status") or "Unpaid",
        paid_amount=parse_float(header_src.get("paid_amount")),
        balance_due=parse_float(header_src.get("balance_due")),
        remarks=header_src.get("remarks") or "",
    )

    lines = [
        LineItem(
            local_id=idx,
            item_id=row.get("item_id"),
            item_name=row.get("item_name") or "",
            item_code=row.get("item_code") or "",
            hsn_code=row.get("hsn_code") or "",
            gst_rate=row.get("gst_rate") or "",
            qty_mt=to_display_str(row.get("qty_mt")),
            qty_pcs=to_display_str(row.get("qty_pcs")),
            rate=to_display_str(row.get("rate")),
            amount=parse_float(row.get("amount")),
        )
        for idx, row in enumerate(items_src, start=1)
    ]

    if not lines:
        lines = [LineItem(local_id=1)]

    return Order(header=header, lines=lines)


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------

def save_order(client, order: Order, notifier: Notifier, order_id: Optional[int] = None) -> bool:
    """
    Validate and send the order (create when order_id is None, else update).

    Validation problems are reported without touching the network. On any
    failure the aggregate is left as-is so the user can fix and retry.
    """
    try:
        validate_for_submit(order)
    except ValidationError as e:
        notifier.error(str(e))
        return False

    payload = to_submit_payload(order)
    number = order.header.order_number

    if order_id is None:
        ok, msg, _ = client.create_order(payload)
        verb = "created"
    else:
        ok, msg, _ = client.update_order(order_id, payload)
        verb = "updated"

    if not ok:
        logger.warning("Saving order %s failed: %s", number, msg)
        notifier.error(msg)
        return False

    logger.info("Order %s %s with %d line(s)", number, verb, len(payload["order_items"]))
    notifier.success(f"Order {number} {verb} successfully!")
    return True
