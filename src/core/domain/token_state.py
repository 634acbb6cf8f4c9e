"""
TokenSnapshot — Read-only view of the token economy

Immutable Pydantic model produced by TokenIssuanceEngine.snapshot() and by
replaying the audit log. Two snapshots compare equal iff price, supply,
balances and the last cloud observation all match.
"""

from typing import Dict

from pydantic import BaseModel, Field, model_validator


class TokenSnapshot(BaseModel):
    price: int = Field(..., gt=0, description="Current token price (internal unit)")
    total_supply: int = Field(..., ge=0, description="Sum of all balances")
    balances: Dict[str, int] = Field(default_factory=dict, description="Non-zero balances")
    last_cloud_percent: int = Field(default=0, ge=0, le=100)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_supply_matches_balances(self) -> "TokenSnapshot":
        """totalSupply must equal the sum of balances, and no balance may be negative."""
        negative = {k: v for k, v in self.balances.items() if v < 0}
        if negative:
            raise ValueError(f"Negative balances: {negative}")
        held = sum(self.balances.values())
        if held != self.total_supply:
            raise ValueError(
                f"total_supply {self.total_supply} != sum of balances {held}"
            )
        return self
