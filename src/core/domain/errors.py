"""
Marketplace error taxonomy.

Every failure of a public operation raises one of these synchronously, and
the operation leaves all ledger state and the event log unchanged. Nothing
here is fatal: a corrected retry is always possible.
"""

from typing import Any, Optional


class MarketError(ValueError):
    """Base class for rejected marketplace and token operations."""


class InvalidArgument(MarketError):
    """Malformed or out-of-range input (non-positive price, cloud% > 100, ...)."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}={value!r}: {reason}")


class NotFound(MarketError):
    """Unknown offer id."""

    def __init__(self, offer_id: int):
        self.offer_id = offer_id
        super().__init__(f"Offer {offer_id} not found")


class Unauthorized(MarketError):
    """Caller is not the owner of the resource."""

    def __init__(self, caller: str, owner: str, offer_id: int):
        self.caller = caller
        self.owner = owner
        self.offer_id = offer_id
        super().__init__(f"Caller {caller} is not the owner of offer {offer_id}")


class InactiveOffer(MarketError):
    def __init__(self, offer_id: int):
        self.offer_id = offer_id
        super().__init__(f"Offer {offer_id} is not active")


class PaymentMismatch(MarketError):
    """Tendered amount differs from the computed cost (exact match required)."""

    def __init__(self, expected: int, tendered: int):
        self.expected = expected
        self.tendered = tendered
        super().__init__(f"Payment mismatch: expected {expected}, tendered {tendered}")


class InsufficientBalance(MarketError):
    def __init__(self, account: str, requested: int, available: int):
        self.account = account
        self.requested = requested
        self.available = available
        super().__init__(
            f"Account {account}: requested {requested}, available {available}"
        )


class TransferFailed(MarketError):
    """Routing funds to the offer owner was rejected."""

    def __init__(self, recipient: str, amount: int, reason: Optional[str] = None):
        self.recipient = recipient
        self.amount = amount
        self.reason = reason
        message = f"Transfer of {amount} to {recipient} failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
