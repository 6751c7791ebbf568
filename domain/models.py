# domain/models.py

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

ORDER_STATUSES = ("Pending", "Dispatched", "Delivered", "Cancelled")
PAYMENT_STATUSES = ("Paid", "Unpaid", "Partial")
PAYMENT_METHODS = ("Cash", "Online", "Cheque", "COD", "Credit")
PARTY_TYPES = ("Customer", "Supplier", "Dealer")
ACTIVE_STATUSES = ("Active", "Inactive")

LINE_NUMERIC_FIELDS = ("qty_mt", "qty_pcs", "rate")


@dataclass
class Item:
    """
    Catalog item as served by GET /items.
    """
    id: Optional[int] = None
    item_name: str = ""
    item_code: str = ""
    hsn_code: str = ""
    gst_rate: Any = ""
    opening_value: Any = ""  # reference rate used to pre-fill order lines
    opening_quantity: Any = ""

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Item":
        return cls(
            id=record.get("id"),
            item_name=record.get("item_name") or "",
            item_code=record.get("item_code") or "",
            hsn_code=record.get("hsn_code") or "",
            gst_rate=record.get("gst_rate") if record.get("gst_rate") is not None else "",
            opening_value=record.get("opening_value") if record.get("opening_value") is not None else "",
            opening_quantity=record.get("opening_quantity") if record.get("opening_quantity") is not None else "",
        )

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Ledger:
    """
    A party (customer, supplier or dealer).
    """
    id: Optional[int] = None
    party_code: str = ""
    party_name: str = ""
    party_type: str = "Customer"
    address: str = ""
    state: str = ""
    district_code: str = ""
    district_name: str = ""
    postal_code: str = ""
    gstin: str = ""
    pan: str = ""
    contact_person: str = ""
    mobile_number: str = ""
    email: str = ""
    ledger_mapping: str = ""
    active_status: str = "Active"

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Ledger":
        known = cls.__dataclass_fields__.keys()
        values = {k: v for k, v in record.items() if k in known and v is not None}
        return cls(**values)

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class District:
    id: Optional[int] = None
    district_name: str = ""
    district_code: str = ""
    state: str = ""
    postal_code: str = ""
    zone_region: str = ""
    active_status: str = "Active"
    remarks: str = ""

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "District":
        known = cls.__dataclass_fields__.keys()
        values = {k: v for k, v in record.items() if k in known and v is not None}
        return cls(**values)

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class LineItem:
    """
    One row of the order editor.

    qty_mt, qty_pcs and rate keep the raw text typed by the user;
    amount is always derived from them.
    """
    local_id: int  # client-side row key, never sent to the backend
    item_id: Optional[int] = None
    item_name: str = ""
    item_code: str = ""
    hsn_code: str = ""
    gst_rate: Any = ""
    qty_mt: str = ""
    qty_pcs: str = ""
    rate: str = ""
    amount: float = 0.0


@dataclass
class OrderHeader:
    order_number: str = ""
    ledger_id: Optional[int] = None
    party_name: str = ""
    order_date: str = ""  # YYYY-MM-DD
    delivery_date: str = ""
    status: str = "Pending"
    payment_method: str = "Pending"
    payment_status: str = "Unpaid"
    paid_amount: float = 0.0
    balance_due: float = 0.0
    remarks: str = ""


@dataclass
class Order:
    """
    Order aggregate: header plus the ordered list of line items.
    """
    header: OrderHeader = field(default_factory=OrderHeader)
    lines: List[LineItem] = field(default_factory=list)

    @property
    def total_amount(self) -> float:
        return round(sum(line.amount for line in self.lines), 2)


@dataclass(frozen=True)
class PaymentState:
    paid_amount: float
    balance_due: float
    payment_status: str


@dataclass(frozen=True)
class RevenueMetrics:
    total_revenue: float
    collected_revenue: float
    outstanding_balance: float


@dataclass(frozen=True)
class DashboardStats:
    revenue: RevenueMetrics
    pending_orders: int
    total_orders: int
    total_dispatched: int
    total_items: int
    total_ledgers: int


@dataclass(frozen=True)
class DailyTrend:
    day_of_month: int
    order_count: int
    revenue: float


@dataclass(frozen=True)
class StatusBreakdown:
    completed: int
    pending: int
    cancelled: int  # synthetic: 10% of all orders, not a real count


@dataclass(frozen=True)
class StateSales:
    state: str
    amount: float
