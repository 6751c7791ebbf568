# services/payment_service.py

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from domain.models import PAYMENT_METHODS, PaymentState
from services.notifier import Notifier
from utils.parsing import parse_float

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_METHOD = "Cash"


def derive_payment_state(total_amount: Any, raw_value: Any) -> PaymentState:
    """
    Payment status and balance for a paid amount against an order total.

    The paid amount itself is kept as entered; only balance_due is clamped
    at zero.
    """
    total = parse_float(total_amount)
    paid = parse_float(raw_value)

    if paid >= total:
        status = "Paid"
    elif 0 < paid < total:
        status = "Partial"
    else:
        status = "Unpaid"

    return PaymentState(
        paid_amount=paid,
        balance_due=max(0.0, round(total - paid, 2)),
        payment_status=status,
    )


@dataclass
class PaymentForm:
    """
    Editable payment details for one existing order.
    """
    order_id: Any
    total_amount: float
    payment_status: str = "Unpaid"
    payment_method: str = DEFAULT_PAYMENT_METHOD
    paid_amount: float = 0.0
    balance_due: float = 0.0

    @classmethod
    def for_order(cls, record: Dict[str, Any]) -> "PaymentForm":
        method = record.get("payment_method")
        if method not in PAYMENT_METHODS:
            # orders created without a payment carry the "Pending" placeholder
            method = DEFAULT_PAYMENT_METHOD

        total = parse_float(record.get("total_amount"))
        raw_balance = record.get("balance_due")
        balance = total if raw_balance is None or raw_balance == "" else parse_float(raw_balance)

        return cls(
            order_id=record.get("id"),
            total_amount=total,
            payment_status=record.get("payment_status") or "Unpaid",
            payment_method=method,
            paid_amount=parse_float(record.get("paid_amount")),
            balance_due=balance,
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "payment_status": self.payment_status,
            "payment_method": self.payment_method,
            "paid_amount": self.paid_amount,
            "balance_due": self.balance_due,
        }


def on_paid_amount_change(form: PaymentForm, raw_value: Any) -> PaymentForm:
    state = derive_payment_state(form.total_amount, raw_value)
    form.paid_amount = state.paid_amount
    form.balance_due = state.balance_due
    form.payment_status = state.payment_status
    return form


def mark_fully_paid(form: PaymentForm) -> PaymentForm:
    return on_paid_amount_change(form, form.total_amount)


def reset_unpaid(form: PaymentForm) -> PaymentForm:
    return on_paid_amount_change(form, 0)


def submit_payment(
        client,
        form: PaymentForm,
        notifier: Notifier,
        on_updated: Optional[Callable[[], None]] = None,
) -> bool:
    """
    PATCH the payment fields of one order. The backend's error message is
    shown as-is; on success the caller's refresh callback runs.
    """
    if form.payment_method not in PAYMENT_METHODS:
        notifier.error(f"Invalid payment method: {form.payment_method}")
        return False

    ok, msg, _ = client.update_payment(form.order_id, form.to_payload())
    if not ok:
        logger.warning("Payment update for order %s failed: %s", form.order_id, msg)
        notifier.error(msg)
        return False

    logger.info(
        "Payment for order %s set to %s (%.2f paid)",
        form.order_id,
        form.payment_status,
        form.paid_amount,
    )
    notifier.success("Payment updated successfully")
    if on_updated is not None:
        on_updated()
    return True
