"""Settlement Engine — weather-adjusted energy purchases.

buy_energy is the critical path of the marketplace:

1. offer must exist (NotFound) and be active (InactiveOffer)
2. 0 < quantity <= available, weather factor > 0 (InvalidArgument)
3. base_cost  = unit_price * quantity                 (unbounded int)
4. final_cost = floor(base_cost * factor_bps / 10000) (truncating)
5. tendered amount must equal final_cost exactly (PaymentMismatch)
6. inventory decrement + transfer to the seller as one unit (TransferFailed
   rolls the decrement back)
7. EnergyPurchased appended to the audit log

Trust boundary: the weather factor, description, location and cloud cover
are supplied by the caller and are NOT verified beyond range checks. The
engine guarantees exact arithmetic for whatever factor it is given and
records that factor permanently for audit.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.audit.event_log import EventLog
from src.core.domain.errors import InactiveOffer, InvalidArgument, PaymentMismatch
from src.core.domain.events import EnergyPurchased
from src.core.domain.validation import (
    require_address,
    require_cloud_percent,
    require_latitude,
    require_longitude,
    require_non_negative,
    require_positive,
)
from src.core.math.fixed_point import apply_bps
from src.market.offer_ledger import OfferLedger
from src.market.payments import InMemoryPayments, PaymentSink


logger = logging.getLogger(__name__)


def compute_final_cost(unit_price: int, quantity: int, weather_factor_bps: int) -> int:
    """
    Exact cost of a purchase.

    floor(floor(unit_price * quantity) * weather_factor_bps / 10000)

    Args:
        unit_price: Price per kWh (smallest payment unit)
        quantity: kWh bought
        weather_factor_bps: Weather factor, 10000 == 1.00x

    Returns:
        Cost in the smallest payment unit
    """
    base_cost = unit_price * quantity
    return apply_bps(base_cost, weather_factor_bps)


@dataclass(frozen=True)
class PurchaseReceipt:
    """Result of a committed purchase."""

    offer_id: int
    buyer: str
    seller: str
    quantity: int
    amount_paid: int
    remaining_quantity: int

    # Position of the EnergyPurchased record in the audit log
    event_sequence: int


class SettlementEngine:
    """Executes purchases against an OfferLedger.

    Shares the ledger's event log, so offer and purchase records form one
    history.
    """

    def __init__(self, ledger: OfferLedger, payments: Optional[PaymentSink] = None):
        """
        Args:
            ledger: Offer ledger to settle against
            payments: Funds routing (default: InMemoryPayments)
        """
        self.ledger = ledger
        self.payments = payments if payments is not None else InMemoryPayments()

    @property
    def event_log(self) -> EventLog:
        return self.ledger.event_log

    def quote(self, offer_id: int, quantity: int, weather_factor_bps: int) -> int:
        """Exact amount buy_energy will require, without side effects.

        Raises:
            NotFound: Unknown offer id
            InvalidArgument: Non-positive quantity/factor or quantity above inventory
        """
        offer = self.ledger.get_offer(offer_id)
        self._check_quantity(quantity, offer.available_quantity)
        require_positive(weather_factor_bps, "weather_factor_bps")
        return compute_final_cost(offer.unit_price, quantity, weather_factor_bps)

    def buy_energy(
        self,
        caller: str,
        offer_id: int,
        quantity: int,
        weather_factor_bps: int,
        weather_desc: str,
        lat_microdeg: int,
        lon_microdeg: int,
        cloud_percent: int,
        tendered_amount: int,
    ) -> PurchaseReceipt:
        """Buy `quantity` kWh from an offer at the weather-adjusted price.

        Args:
            caller: Buyer address
            offer_id: Offer to buy from
            quantity: kWh to buy
            weather_factor_bps: Caller-supplied price factor (bps)
            weather_desc: Free-text weather description
            lat_microdeg: Buyer latitude snapshot (microdegrees)
            lon_microdeg: Buyer longitude snapshot (microdegrees)
            cloud_percent: Cloud cover 0..100
            tendered_amount: Payment attached to the call

        Returns:
            PurchaseReceipt

        Raises:
            NotFound, InactiveOffer, InvalidArgument, PaymentMismatch, TransferFailed
        """
        require_address(caller)
        offer = self.ledger.get_offer(offer_id)
        if not offer.active:
            logger.warning("Purchase from inactive offer %s by %s", offer_id, caller)
            raise InactiveOffer(offer_id)

        self._check_quantity(quantity, offer.available_quantity)
        require_positive(weather_factor_bps, "weather_factor_bps")
        if not isinstance(weather_desc, str):
            raise InvalidArgument("weather_desc", weather_desc, "must be a string")
        require_latitude(lat_microdeg)
        require_longitude(lon_microdeg)
        require_cloud_percent(cloud_percent)
        require_non_negative(tendered_amount, "tendered_amount")

        final_cost = compute_final_cost(offer.unit_price, quantity, weather_factor_bps)
        if tendered_amount != final_cost:
            logger.warning(
                "Payment mismatch: offer=%s buyer=%s expected=%s tendered=%s",
                offer_id, caller, final_cost, tendered_amount,
            )
            raise PaymentMismatch(final_cost, tendered_amount)

        # Built before the commit so nothing can fail after the transfer
        event = EnergyPurchased(
            offer_id=offer_id,
            buyer=caller,
            seller=offer.owner,
            quantity=quantity,
            amount_paid=final_cost,
            weather_factor_bps=weather_factor_bps,
            weather_desc=weather_desc,
            lat_microdeg=lat_microdeg,
            lon_microdeg=lon_microdeg,
            cloud_percent=cloud_percent,
            remaining_quantity=offer.available_quantity - quantity,
        )

        with self.ledger.transaction():
            updated = self.ledger.record_sale(offer_id, quantity)
            self.payments.transfer(caller, offer.owner, tendered_amount)

        stored = self.event_log.append(event)
        logger.info(
            "Energy purchased: offer=%s buyer=%s quantity=%s paid=%s factor_bps=%s remaining=%s",
            offer_id, caller, quantity, final_cost, weather_factor_bps,
            updated.available_quantity,
        )

        return PurchaseReceipt(
            offer_id=offer_id,
            buyer=caller,
            seller=offer.owner,
            quantity=quantity,
            amount_paid=final_cost,
            remaining_quantity=updated.available_quantity,
            event_sequence=stored.sequence,
        )

    @staticmethod
    def _check_quantity(quantity: int, available: int) -> None:
        require_positive(quantity, "quantity")
        if quantity > available:
            raise InvalidArgument(
                "quantity", quantity, f"exceeds available quantity {available}"
            )
