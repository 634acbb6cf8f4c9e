"""Engine configuration.

Plain frozen dataclasses with defaults; each engine takes its config as a
constructor argument (`config or TokenConfig()`), there is no global state.
"""

from dataclasses import dataclass, field

from src.core.math.fixed_point import SCALE


# One ether in wei: initial token price of a freshly deployed token
WEI_PER_ETHER = 10**18


@dataclass(frozen=True)
class TokenConfig:
    """Token issuance parameters.

    - initial_price: starting token price (internal unit, must be > 0)
    - base_mint_amount: tokens minted at a 1.00x weather factor
    - scale: fixed at SCALE; rejected if anything else
    """
    initial_price: int = WEI_PER_ETHER
    base_mint_amount: int = 100 * WEI_PER_ETHER
    scale: int = SCALE

    def __post_init__(self):
        if self.initial_price <= 0:
            raise ValueError(f"initial_price must be positive, got {self.initial_price}")
        if self.base_mint_amount <= 0:
            raise ValueError(f"base_mint_amount must be positive, got {self.base_mint_amount}")
        if self.scale != SCALE:
            raise ValueError(f"scale is fixed at {SCALE} bps, got {self.scale}")


@dataclass(frozen=True)
class AuditConfig:
    """Event log behaviour.

    validate_contracts: check every exported record against its JSON Schema.
    """
    validate_contracts: bool = True


@dataclass(frozen=True)
class MarketConfig:
    """Offer ledger / settlement parameters."""
    first_offer_id: int = 0
    audit: AuditConfig = field(default_factory=AuditConfig)

    def __post_init__(self):
        if self.first_offer_id < 0:
            raise ValueError(f"first_offer_id must be non-negative, got {self.first_offer_id}")
