# domain/errors.py
"""Error types raised by the order console core."""

from typing import Optional

MISSING_PARTY = "MissingParty"
MISSING_ORDER_NUMBER = "MissingOrderNumber"
NO_VALID_ITEMS = "NoValidItems"

_VALIDATION_MESSAGES = {
    MISSING_PARTY: "Please select a party",
    MISSING_ORDER_NUMBER: "Order number is required",
    NO_VALID_ITEMS: "Please add at least one item with quantity",
}


class ConsoleError(Exception):
    """Base exception for all console errors."""

    pass


class ValidationError(ConsoleError):
    """Raised when an order is not ready to be submitted."""

    def __init__(self, reason: str, message: Optional[str] = None):
        self.reason = reason
        super().__init__(message or _VALIDATION_MESSAGES.get(reason, reason))


class NetworkError(ConsoleError):
    """Raised when the backend is unreachable or answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.detail = detail  # error message sent by the backend, if any
        super().__init__(message)
