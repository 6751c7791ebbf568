# services/filter_service.py

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from services.reference_data import normalize_id
from utils.formatting import to_date
from utils.parsing import parse_int

Record = Dict[str, Any]

STOCK_STATUSES = ("In Stock", "Low Stock", "Out of Stock")
LOW_STOCK_LIMIT = 10


def _is_all(value: Any) -> bool:
    # select boxes use "All Status", "All Parties", ... as the no-filter option
    return value is None or value == "" or (isinstance(value, str) and value.startswith("All "))


def _contains(value: Any, query: str) -> bool:
    return isinstance(value, str) and query in value.lower()


def unique_values(records: Iterable[Record], field: str) -> List[Any]:
    return sorted({r.get(field) for r in records or [] if r.get(field)})


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

def _in_range(day: Optional[date], lower: Optional[date], upper: Optional[date]) -> bool:
    if day is None:
        return False
    if lower and day < lower:
        return False
    if upper and day > upper:
        return False
    return True


def _order_item_ids(order: Record) -> set:
    ids = {normalize_id(row.get("item_id")) for row in order.get("items") or []}
    if order.get("item_id") is not None:
        ids.add(normalize_id(order.get("item_id")))
    return ids


def _order_item_names(order: Record) -> List[str]:
    names = [row.get("item_name") for row in order.get("items") or []]
    names.append(order.get("item_name"))
    return [n for n in names if isinstance(n, str)]


def filter_orders(
        orders: Iterable[Record],
        query: str = "",
        status: Optional[str] = None,
        ledger_id: Any = None,
        item_id: Any = None,
        payment_status: Optional[str] = None,
        payment_method: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
) -> List[Record]:
    """
    Client-side order table filter. The search text matches order number,
    party name or item name (case-insensitive); date bounds are inclusive.
    """
    result = list(orders or [])

    if query:
        q = query.lower()
        result = [
            o for o in result
            if _contains(o.get("order_number"), q)
            or _contains(o.get("party_name"), q)
            or any(_contains(name, q) for name in _order_item_names(o))
        ]

    if not _is_all(status):
        result = [o for o in result if o.get("status") == status]

    if not _is_all(ledger_id):
        wanted = normalize_id(ledger_id)
        result = [o for o in result if normalize_id(o.get("ledger_id")) == wanted]

    if not _is_all(item_id):
        wanted = normalize_id(item_id)
        result = [o for o in result if wanted in _order_item_ids(o)]

    if not _is_all(payment_status):
        result = [o for o in result if o.get("payment_status") == payment_status]

    if not _is_all(payment_method):
        result = [o for o in result if o.get("payment_method") == payment_method]

    if date_from or date_to:
        lower = to_date(date_from)
        upper = to_date(date_to)
        result = [o for o in result if _in_range(to_date(o.get("order_date")), lower, upper)]

    return result


# ---------------------------------------------------------------------------
# Ledgers
# ---------------------------------------------------------------------------

def filter_ledgers(
        ledgers: Iterable[Record],
        query: str = "",
        party_type: Optional[str] = None,
        state: Optional[str] = None,
        active_status: Optional[str] = None,
) -> List[Record]:
    result = list(ledgers or [])

    if query:
        q = query.lower()
        result = [
            r for r in result
            if _contains(r.get("party_name"), q)
            or _contains(r.get("party_code"), q)
            or _contains(r.get("gstin"), q)
            or _contains(r.get("mobile_number"), q)
        ]

    if not _is_all(party_type):
        result = [r for r in result if r.get("party_type") == party_type]
    if not _is_all(state):
        result = [r for r in result if r.get("state") == state]
    if not _is_all(active_status):
        result = [r for r in result if r.get("active_status") == active_status]

    return result


def districts_for_state(districts: Iterable[Record], state: str) -> List[Record]:
    return [d for d in districts or [] if d.get("state") == state]


def apply_district(ledger_form: Record, district: Optional[Record]) -> Record:
    """
    Copy district name, code and postal code onto a ledger form, or clear
    them when no district is given.
    """
    if district:
        ledger_form["district_name"] = district.get("district_name") or ""
        ledger_form["district_code"] = district.get("district_code") or ""
        ledger_form["postal_code"] = district.get("postal_code") or ""
    else:
        ledger_form["district_name"] = ""
        ledger_form["district_code"] = ""
        ledger_form["postal_code"] = ""
    return ledger_form


def apply_state(ledger_form: Record, state: str, districts: Iterable[Record]) -> Record:
    """Pick a state; its first district is preselected."""
    ledger_form["state"] = state
    matches = districts_for_state(districts, state)
    return apply_district(ledger_form, matches[0] if matches else None)


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

def stock_status(item: Record) -> str:
    qty = parse_int(item.get("opening_quantity"))
    if qty > LOW_STOCK_LIMIT:
        return "In Stock"
    if qty > 0:
        return "Low Stock"
    if qty == 0:
        return "Out of Stock"
    return ""


def filter_items(
        items: Iterable[Record],
        query: str = "",
        gst_rate: Any = None,
        stock: Optional[str] = None,
) -> List[Record]:
    result = list(items or [])

    if query:
        q = query.lower()
        result = [
            r for r in result
            if _contains(r.get("item_name"), q)
            or _contains(r.get("item_code"), q)
            or (isinstance(r.get("hsn_code"), str) and query in r["hsn_code"])
        ]

    if not _is_all(gst_rate):
        wanted = parse_int(gst_rate)
        result = [r for r in result if r.get("gst_rate") is not None and parse_int(r.get("gst_rate")) == wanted]

    if not _is_all(stock):
        result = [r for r in result if stock_status(r) == stock]

    return result


# ---------------------------------------------------------------------------
# Districts
# ---------------------------------------------------------------------------

def filter_districts(
        districts: Iterable[Record],
        query: str = "",
        state: Optional[str] = None,
        zone: Optional[str] = None,
        active_status: Optional[str] = None,
) -> List[Record]:
    result = list(districts or [])

    if query:
        q = query.lower()
        result = [
            d for d in result
            if _contains(d.get("district_name"), q)
            or _contains(d.get("state"), q)
            or _contains(d.get("district_code"), q)
        ]

    if not _is_all(state):
        result = [d for d in result if d.get("state") == state]
    if not _is_all(zone):
        result = [d for d in result if d.get("zone_region") == zone]
    if not _is_all(active_status):
        result = [d for d in result if d.get("active_status") == active_status]

    return result
