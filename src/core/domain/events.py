"""
Audit event records

Immutable Pydantic models, one per successful state-changing operation.
Each record carries the operation's inputs AND the resulting state, so the
full history can be replayed from the event log alone
(see src.audit.replay).

Contract compatibility: to_contract() output matches the JSON Schemas in
contracts/schema/<kind>.json.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


# =============================================================================
# BASE
# =============================================================================


class MarketEvent(BaseModel):
    """
    Base audit record.

    `sequence` is None until the event log appends the record; the log then
    stores a copy carrying its position in the history.
    """

    kind: str
    sequence: Optional[int] = Field(
        default=None, ge=0, description="Position in the event log, assigned on append"
    )

    model_config = {"frozen": True}

    def with_sequence(self, sequence: int) -> "MarketEvent":
        return self.model_copy(update={"sequence": sequence})

    def to_contract(self) -> dict:
        """JSON-ready dict for contract validation and export."""
        return self.model_dump(mode="json")


# =============================================================================
# OFFER LEDGER EVENTS
# =============================================================================


class OfferCreated(MarketEvent):
    kind: Literal["offer_created"] = "offer_created"

    offer_id: int = Field(..., ge=0)
    owner: str = Field(..., min_length=1)
    unit_price: int = Field(..., gt=0)
    total_quantity: int = Field(..., gt=0)


class OfferUpdated(MarketEvent):
    """Post-update snapshot of an offer (price, quantity and status)."""

    kind: Literal["offer_updated"] = "offer_updated"

    offer_id: int = Field(..., ge=0)
    owner: str = Field(..., min_length=1)
    unit_price: int = Field(..., gt=0)
    available_quantity: int = Field(..., ge=0)
    active: bool


# =============================================================================
# SETTLEMENT EVENTS
# =============================================================================


class EnergyPurchased(MarketEvent):
    """
    Purchase fact.

    weather_factor_bps, weather_desc, the lat/lon snapshot and cloud_percent
    are caller-supplied and unverified; they are recorded for later audit
    or dispute.
    """

    kind: Literal["energy_purchased"] = "energy_purchased"

    offer_id: int = Field(..., ge=0)
    buyer: str = Field(..., min_length=1)
    seller: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    amount_paid: int = Field(..., ge=0, description="Exact final cost routed to the seller")
    weather_factor_bps: int = Field(..., gt=0)
    weather_desc: str
    lat_microdeg: int
    lon_microdeg: int
    cloud_percent: int = Field(..., ge=0, le=100)
    remaining_quantity: int = Field(..., ge=0, description="Offer inventory after the purchase")


# =============================================================================
# TOKEN ISSUANCE EVENTS
# =============================================================================


class EnergyMinted(MarketEvent):
    kind: Literal["energy_minted"] = "energy_minted"

    account: str = Field(..., min_length=1)
    minted: int = Field(..., ge=0)
    weather_factor_bps: int = Field(..., gt=0)
    cloud_percent: int = Field(..., ge=0, le=100)
    previous_price: int = Field(..., gt=0)
    new_price: int = Field(..., gt=0)
    total_supply: int = Field(..., ge=0)


class EnergyUsed(MarketEvent):
    kind: Literal["energy_used"] = "energy_used"

    account: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)
    percent_burned_bps: int = Field(..., ge=0, le=10_000)
    previous_price: int = Field(..., gt=0)
    new_price: int = Field(..., gt=0)
    total_supply: int = Field(..., ge=0)


AnyMarketEvent = Union[OfferCreated, OfferUpdated, EnergyPurchased, EnergyMinted, EnergyUsed]

EVENT_KINDS: tuple[str, ...] = (
    "offer_created",
    "offer_updated",
    "energy_purchased",
    "energy_minted",
    "energy_used",
)
