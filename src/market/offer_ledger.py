"""Offer Ledger — keyed store of seller offers.

Operations:
- create_offer: sequential id, active offer, OfferCreated
- set_offer_status: owner only, OfferUpdated
- update_offer: owner only, overwrites price and quantity, OfferUpdated

Failure precedence: NotFound -> Unauthorized -> InvalidArgument.
Every failure leaves the ledger and the event log untouched.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from src.audit.event_log import EventLog
from src.core.config import MarketConfig
from src.core.domain.errors import InvalidArgument, NotFound, Unauthorized
from src.core.domain.events import OfferCreated, OfferUpdated
from src.core.domain.offer import Offer
from src.core.domain.validation import require_address, require_int, require_positive


logger = logging.getLogger(__name__)


class OfferLedger:
    """Mapping offer_id -> Offer plus the id counter.

    Offers are immutable; the ledger replaces whole records. The identifier
    counter only moves forward, ids are never reused.
    """

    def __init__(self, event_log: Optional[EventLog] = None, config: Optional[MarketConfig] = None):
        self.config = config or MarketConfig()
        self.event_log = event_log if event_log is not None else EventLog(self.config.audit)
        self._offers: Dict[int, Offer] = {}
        self._next_offer_id: int = self.config.first_offer_id

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_offer(self, caller: str, unit_price: int, total_quantity: int) -> int:
        """Create an active offer owned by `caller`.

        Args:
            caller: Seller address
            unit_price: Price per kWh in the smallest payment unit (> 0)
            total_quantity: kWh offered (> 0)

        Returns:
            The new offer id

        Raises:
            InvalidArgument: If unit_price or total_quantity is not positive
        """
        require_address(caller)
        require_positive(unit_price, "unit_price")
        require_positive(total_quantity, "total_quantity")

        offer_id = self._next_offer_id
        offer = Offer(
            offer_id=offer_id,
            owner=caller,
            unit_price=unit_price,
            available_quantity=total_quantity,
            active=True,
        )
        self._offers[offer_id] = offer
        self._next_offer_id += 1

        self.event_log.append(
            OfferCreated(
                offer_id=offer_id,
                owner=caller,
                unit_price=unit_price,
                total_quantity=total_quantity,
            )
        )
        logger.info(
            "Offer created: id=%s owner=%s unit_price=%s quantity=%s",
            offer_id, caller, unit_price, total_quantity,
        )
        return offer_id

    def set_offer_status(self, caller: str, offer_id: int, active: bool) -> Offer:
        """Activate or deactivate an offer (owner only).

        Raises:
            NotFound: Unknown offer id
            Unauthorized: Caller is not the owner
            InvalidArgument: `active` is not a bool
        """
        offer = self._get_owned(caller, offer_id)
        if not isinstance(active, bool):
            raise InvalidArgument("active", active, "must be a bool")

        updated = offer.with_status(active)
        self._offers[offer_id] = updated
        self._emit_updated(updated)
        logger.info("Offer %s status set: active=%s", offer_id, active)
        return updated

    def update_offer(
        self, caller: str, offer_id: int, new_unit_price: int, new_quantity: int
    ) -> Offer:
        """Overwrite price and quantity together; `active` is unchanged.

        Raises:
            NotFound: Unknown offer id
            Unauthorized: Caller is not the owner
            InvalidArgument: If either new value is not positive
        """
        offer = self._get_owned(caller, offer_id)
        require_positive(new_unit_price, "new_unit_price")
        require_positive(new_quantity, "new_quantity")

        updated = offer.with_price_and_quantity(new_unit_price, new_quantity)
        self._offers[offer_id] = updated
        self._emit_updated(updated)
        logger.info(
            "Offer %s updated: unit_price=%s quantity=%s",
            offer_id, new_unit_price, new_quantity,
        )
        return updated

    def record_sale(self, offer_id: int, quantity: int) -> Offer:
        """Decrement inventory of an offer. Settlement-internal.

        The caller must already have validated quantity against the offer;
        this only guards the never-negative invariant.
        """
        offer = self.get_offer(offer_id)
        updated = offer.with_quantity_sold(quantity)
        self._offers[offer_id] = updated
        return updated

    @contextmanager
    def transaction(self) -> Iterator["OfferLedger"]:
        """Commit-or-rollback boundary.

        Any exception raised inside the block restores every offer record and
        the id counter to their state on entry, then propagates.
        """
        saved_offers = dict(self._offers)
        saved_next_id = self._next_offer_id
        try:
            yield self
        except BaseException:
            self._offers = saved_offers
            self._next_offer_id = saved_next_id
            logger.debug("Offer ledger transaction rolled back")
            raise

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_offer(self, offer_id: int) -> Offer:
        """
        Raises:
            NotFound: Unknown offer id
        """
        require_int(offer_id, "offer_id")
        try:
            return self._offers[offer_id]
        except KeyError:
            raise NotFound(offer_id) from None

    @property
    def next_offer_id(self) -> int:
        return self._next_offer_id

    def offers_by_owner(self, owner: str) -> list[Offer]:
        return [o for o in self._offers.values() if o.owner == owner]

    def active_offers(self) -> list[Offer]:
        return [o for o in self._offers.values() if o.active]

    def __len__(self) -> int:
        return len(self._offers)

    def __contains__(self, offer_id: object) -> bool:
        return offer_id in self._offers

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _get_owned(self, caller: str, offer_id: int) -> Offer:
        offer = self.get_offer(offer_id)
        if not offer.is_owned_by(caller):
            logger.warning(
                "Unauthorized offer mutation: offer=%s caller=%s owner=%s",
                offer_id, caller, offer.owner,
            )
            raise Unauthorized(caller, offer.owner, offer_id)
        return offer

    def _emit_updated(self, offer: Offer) -> None:
        self.event_log.append(
            OfferUpdated(
                offer_id=offer.offer_id,
                owner=offer.owner,
                unit_price=offer.unit_price,
                available_quantity=offer.available_quantity,
                active=offer.active,
            )
        )
