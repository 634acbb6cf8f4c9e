"""Token Issuance Engine — weather-driven mint/burn.

Single token economy: one price, one total supply, one balance per
participant. Both operations use integer basis-point arithmetic only.

mint_energy(factor_bps, clouds):
    minted = floor(base_mint_amount * factor_bps / 10000)
    price  = floor(price * 10000 / factor_bps)        (inverse to the factor)

use_energy(amount):
    percent_burned = floor(amount * 10000 / supply_before)
    price = floor(price * (10000 + percent_burned // 2) / 10000)

The burn formula adds HALF the burned share to the price. The halving is
integer division of percent_burned and is reproduced exactly.

Invariants:
- total_supply == sum(balances) after every operation
- no balance is ever negative
- price > 0
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from src.audit.event_log import EventLog
from src.core.config import TokenConfig
from src.core.domain.errors import InsufficientBalance, InvalidArgument
from src.core.domain.events import EnergyMinted, EnergyUsed
from src.core.domain.token_state import TokenSnapshot
from src.core.domain.validation import require_address, require_cloud_percent, require_positive
from src.core.math.fixed_point import SCALE, apply_bps, divide_by_bps, mul_div_floor, ratio_bps


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MintResult:
    account: str
    minted: int
    previous_price: int
    new_price: int
    total_supply: int
    balance: int
    event_sequence: int


@dataclass(frozen=True)
class BurnResult:
    account: str
    burned: int
    percent_burned_bps: int
    previous_price: int
    new_price: int
    total_supply: int
    balance: int
    event_sequence: int


class TokenIssuanceEngine:
    """Mints on claimed production, burns on claimed consumption.

    The weather factor is caller-supplied and unverified; only its range is
    checked. Each call either commits price, supply, balance and its event
    together or raises with nothing changed.
    """

    def __init__(self, config: Optional[TokenConfig] = None, event_log: Optional[EventLog] = None):
        self.config = config or TokenConfig()
        self.event_log = event_log if event_log is not None else EventLog()

        self._price: int = self.config.initial_price
        self._total_supply: int = 0
        self._balances: Dict[str, int] = {}
        self._last_cloud_percent: int = 0

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def mint_energy(self, caller: str, weather_factor_bps: int, cloud_percent: int) -> MintResult:
        """Credit `caller` with tokens for reported production.

        Args:
            caller: Producer address
            weather_factor_bps: Production factor, 10000 == 1.00x (> 0)
            cloud_percent: Cloud cover 0..100, stored for display/audit

        Returns:
            MintResult

        Raises:
            InvalidArgument: factor <= 0, cloud_percent outside 0..100, or a
                factor so large the price would truncate to zero
        """
        require_address(caller)
        require_positive(weather_factor_bps, "weather_factor_bps")
        require_cloud_percent(cloud_percent)

        minted = apply_bps(self.config.base_mint_amount, weather_factor_bps)
        previous_price = self._price
        new_price = divide_by_bps(previous_price, weather_factor_bps)
        if new_price <= 0:
            raise InvalidArgument(
                "weather_factor_bps",
                weather_factor_bps,
                f"would drive token price {previous_price} to zero",
            )

        new_balance = self._balances.get(caller, 0) + minted
        new_supply = self._total_supply + minted
        event = EnergyMinted(
            account=caller,
            minted=minted,
            weather_factor_bps=weather_factor_bps,
            cloud_percent=cloud_percent,
            previous_price=previous_price,
            new_price=new_price,
            total_supply=new_supply,
        )

        self._balances[caller] = new_balance
        self._total_supply = new_supply
        self._price = new_price
        self._last_cloud_percent = cloud_percent
        stored = self.event_log.append(event)

        logger.info(
            "Energy minted: account=%s minted=%s factor_bps=%s clouds=%s price=%s->%s",
            caller, minted, weather_factor_bps, cloud_percent, previous_price, new_price,
        )
        return MintResult(
            account=caller,
            minted=minted,
            previous_price=previous_price,
            new_price=new_price,
            total_supply=new_supply,
            balance=new_balance,
            event_sequence=stored.sequence,
        )

    def use_energy(self, caller: str, amount: int) -> BurnResult:
        """Burn `amount` of the caller's tokens for reported consumption.

        Raises:
            InvalidArgument: amount <= 0
            InsufficientBalance: amount exceeds the caller's balance
        """
        require_address(caller)
        require_positive(amount, "amount")

        balance = self._balances.get(caller, 0)
        if amount > balance:
            logger.warning(
                "Insufficient token balance: account=%s requested=%s available=%s",
                caller, amount, balance,
            )
            raise InsufficientBalance(caller, amount, balance)

        supply_before = self._total_supply
        # Implied by balance >= amount > 0 while supply == sum(balances)
        if supply_before <= 0:
            raise InsufficientBalance(caller, amount, supply_before)

        percent_burned = ratio_bps(amount, supply_before)
        previous_price = self._price
        new_price = mul_div_floor(previous_price, SCALE + percent_burned // 2, SCALE)

        new_balance = balance - amount
        new_supply = supply_before - amount
        event = EnergyUsed(
            account=caller,
            amount=amount,
            percent_burned_bps=percent_burned,
            previous_price=previous_price,
            new_price=new_price,
            total_supply=new_supply,
        )

        self._balances[caller] = new_balance
        self._total_supply = new_supply
        self._price = new_price
        stored = self.event_log.append(event)

        logger.info(
            "Energy used: account=%s amount=%s burned_bps=%s price=%s->%s",
            caller, amount, percent_burned, previous_price, new_price,
        )
        return BurnResult(
            account=caller,
            burned=amount,
            percent_burned_bps=percent_burned,
            previous_price=previous_price,
            new_price=new_price,
            total_supply=new_supply,
            balance=new_balance,
            event_sequence=stored.sequence,
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def price(self) -> int:
        return self._price

    @property
    def total_supply(self) -> int:
        return self._total_supply

    @property
    def last_cloud_percent(self) -> int:
        return self._last_cloud_percent

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def holders(self) -> list[str]:
        """Accounts with a non-zero balance."""
        return [account for account, balance in self._balances.items() if balance > 0]

    def snapshot(self) -> TokenSnapshot:
        return TokenSnapshot(
            price=self._price,
            total_supply=self._total_supply,
            balances={a: b for a, b in self._balances.items() if b != 0},
            last_cloud_percent=self._last_cloud_percent,
        )
