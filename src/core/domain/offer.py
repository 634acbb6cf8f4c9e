"""
Offer — A seller's standing energy listing

Immutable Pydantic model. The offer ledger never mutates a record in place:
every change produces a new instance that replaces the old one, so a
snapshot handed to a reader can never change under it.

Lifecycle:
- created active by create_offer with a fresh sequential id
- price/quantity overwritten by update_offer (owner only)
- active toggled by set_offer_status (owner only)
- available_quantity decremented by buy_energy
- never deleted; deactivation is the terminal "not sellable" state
"""

from pydantic import BaseModel, Field


class Offer(BaseModel):
    """
    Standing inventory of one seller.

    unit_price is in the smallest indivisible payment unit (e.g. wei per kWh).
    """

    offer_id: int = Field(..., ge=0, description="Sequential offer identifier")
    owner: str = Field(..., min_length=1, description="Address of the creating seller")
    unit_price: int = Field(..., gt=0, description="Price per kWh, smallest payment unit")
    available_quantity: int = Field(..., ge=0, description="Remaining kWh, never negative")
    active: bool = Field(default=True, description="Purchases fail when False")

    model_config = {"frozen": True, "strict": True}

    def is_owned_by(self, address: str) -> bool:
        return self.owner == address

    def can_fill(self, quantity: int) -> bool:
        """True if the offer is active and holds at least `quantity` kWh."""
        return self.active and 0 < quantity <= self.available_quantity

    def with_price_and_quantity(self, unit_price: int, available_quantity: int) -> "Offer":
        return self.model_copy(
            update={"unit_price": unit_price, "available_quantity": available_quantity}
        )

    def with_status(self, active: bool) -> "Offer":
        return self.model_copy(update={"active": active})

    def with_quantity_sold(self, quantity: int) -> "Offer":
        remaining = self.available_quantity - quantity
        if remaining < 0:
            raise ValueError(
                f"Offer {self.offer_id}: cannot sell {quantity}, only "
                f"{self.available_quantity} available"
            )
        return self.model_copy(update={"available_quantity": remaining})
