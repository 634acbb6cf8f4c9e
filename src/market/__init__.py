"""Market — offer ledger, settlement and funds routing."""

from .marketplace import EnergyMarketplace
from .offer_ledger import OfferLedger
from .payments import InMemoryPayments, PaymentSink
from .settlement import PurchaseReceipt, SettlementEngine, compute_final_cost

__all__ = [
    "EnergyMarketplace",
    "OfferLedger",
    "SettlementEngine",
    "PurchaseReceipt",
    "compute_final_cost",
    "PaymentSink",
    "InMemoryPayments",
]
