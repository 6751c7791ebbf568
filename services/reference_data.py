# services/reference_data.py

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from domain.models import Item, Ledger
from services.notifier import Notifier

logger = logging.getLogger(__name__)


def normalize_id(value: Any) -> Any:
    """
    Ids arrive as ints from JSON but as strings from some form widgets;
    numeric ids are compared as ints.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return value


@dataclass
class ReferenceData:
    """
    Parties and catalog items fetched once per page load, keyed by id.
    """
    ledgers_by_id: Dict[Any, Ledger] = field(default_factory=dict)
    items_by_id: Dict[Any, Item] = field(default_factory=dict)

    @classmethod
    def from_records(
            cls,
            ledgers: List[Dict[str, Any]],
            items: List[Dict[str, Any]],
    ) -> "ReferenceData":
        return cls(
            ledgers_by_id={
                normalize_id(row.get("id")): Ledger.from_record(row)
                for row in ledgers or []
                if row.get("id") is not None
            },
            items_by_id={
                normalize_id(row.get("id")): Item.from_record(row)
                for row in items or []
                if row.get("id") is not None
            },
        )

    @classmethod
    def load(cls, client, notifier: Notifier) -> "ReferenceData":
        """
        Fetch /ledgers and /items. A failed fetch leaves that side empty and
        raises a user-visible error; the page keeps working.
        """
        ok_l, msg_l, ledgers = client.list_ledgers()
        if not ok_l:
            logger.warning("Ledger fetch failed: %s", msg_l)
            notifier.error(msg_l)

        ok_i, msg_i, items = client.list_items()
        if not ok_i:
            logger.warning("Item fetch failed: %s", msg_i)
            notifier.error(msg_i)

        return cls.from_records(ledgers if ok_l else [], items if ok_i else [])

    @property
    def ledgers(self) -> List[Ledger]:
        return list(self.ledgers_by_id.values())

    @property
    def items(self) -> List[Item]:
        return list(self.items_by_id.values())

    def ledger(self, ledger_id: Any) -> Optional[Ledger]:
        return self.ledgers_by_id.get(normalize_id(ledger_id))

    def item(self, item_id: Any) -> Optional[Item]:
        return self.items_by_id.get(normalize_id(item_id))

    def party_name(self, ledger_id: Any) -> str:
        ledger = self.ledger(ledger_id)
        return ledger.party_name if ledger else f"Party {ledger_id}"

    def item_name(self, item_id: Any) -> str:
        item = self.item(item_id)
        return item.item_name if item else f"Item {item_id}"
