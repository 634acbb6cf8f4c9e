"""Rebuild ledger state from the audit log alone.

Used to check that every record carries enough fields to reconstruct the
transition it caused: replaying a log must give exactly the state the
engines hold.
"""

from typing import Dict, Iterable

from src.core.domain.events import (
    EnergyMinted,
    EnergyPurchased,
    EnergyUsed,
    MarketEvent,
    OfferCreated,
    OfferUpdated,
)
from src.core.domain.offer import Offer
from src.core.domain.token_state import TokenSnapshot


def replay_offers(events: Iterable[MarketEvent]) -> Dict[int, Offer]:
    """Offer records as of the end of `events`.

    Token events are ignored.

    Raises:
        ValueError: If an update or purchase references an offer never created
    """
    offers: Dict[int, Offer] = {}

    for event in events:
        if isinstance(event, OfferCreated):
            offers[event.offer_id] = Offer(
                offer_id=event.offer_id,
                owner=event.owner,
                unit_price=event.unit_price,
                available_quantity=event.total_quantity,
                active=True,
            )
        elif isinstance(event, OfferUpdated):
            current = _require_offer(offers, event.offer_id, event)
            offers[event.offer_id] = current.with_price_and_quantity(
                event.unit_price, event.available_quantity
            ).with_status(event.active)
        elif isinstance(event, EnergyPurchased):
            current = _require_offer(offers, event.offer_id, event)
            offers[event.offer_id] = current.model_copy(
                update={"available_quantity": event.remaining_quantity}
            )

    return offers


def replay_token(events: Iterable[MarketEvent], initial_price: int) -> TokenSnapshot:
    """Token economy state as of the end of `events`.

    Offer events are ignored. `initial_price` is the price the engine was
    constructed with; it only matters for a log without token events.
    """
    price = initial_price
    total_supply = 0
    last_cloud_percent = 0
    balances: Dict[str, int] = {}

    for event in events:
        if isinstance(event, EnergyMinted):
            balances[event.account] = balances.get(event.account, 0) + event.minted
            price = event.new_price
            total_supply = event.total_supply
            last_cloud_percent = event.cloud_percent
        elif isinstance(event, EnergyUsed):
            balances[event.account] = balances.get(event.account, 0) - event.amount
            price = event.new_price
            total_supply = event.total_supply

    return TokenSnapshot(
        price=price,
        total_supply=total_supply,
        balances={k: v for k, v in balances.items() if v != 0},
        last_cloud_percent=last_cloud_percent,
    )


def _require_offer(offers: Dict[int, Offer], offer_id: int, event: MarketEvent) -> Offer:
    try:
        return offers[offer_id]
    except KeyError:
        raise ValueError(
            f"{event.kind} at sequence {event.sequence} references unknown offer {offer_id}"
        ) from None
