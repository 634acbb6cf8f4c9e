"""
Domain models and value objects.

Contains Offer, audit event records, the token snapshot and the error taxonomy.
"""

from src.core.domain.errors import (
    InactiveOffer,
    InsufficientBalance,
    InvalidArgument,
    MarketError,
    NotFound,
    PaymentMismatch,
    TransferFailed,
    Unauthorized,
)
from src.core.domain.events import (
    EVENT_KINDS,
    AnyMarketEvent,
    EnergyMinted,
    EnergyPurchased,
    EnergyUsed,
    MarketEvent,
    OfferCreated,
    OfferUpdated,
)
from src.core.domain.offer import Offer
from src.core.domain.token_state import TokenSnapshot

__all__ = [
    # Errors
    "MarketError",
    "InvalidArgument",
    "NotFound",
    "Unauthorized",
    "InactiveOffer",
    "PaymentMismatch",
    "InsufficientBalance",
    "TransferFailed",
    # Events
    "EVENT_KINDS",
    "AnyMarketEvent",
    "MarketEvent",
    "OfferCreated",
    "OfferUpdated",
    "EnergyPurchased",
    "EnergyMinted",
    "EnergyUsed",
    # Models
    "Offer",
    "TokenSnapshot",
]
