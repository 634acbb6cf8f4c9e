"""Marketplace facade: offer ledger + settlement over one audit log.

One entry point per operation, caller identity passed explicitly:

    market = EnergyMarketplace()
    offer_id = market.create_offer("0xseller", unit_price=5 * 10**15, total_quantity=10)
    cost = market.quote(offer_id, 2, weather_factor_bps=7500)
    market.buy_energy("0xbuyer", offer_id, 2, 7500, "broken clouds",
                      37_803_900, -122_401_100, 50, tendered_amount=cost)
"""

from typing import Optional

from src.audit.event_log import EventLog
from src.core.config import MarketConfig
from src.core.domain.offer import Offer
from src.market.offer_ledger import OfferLedger
from src.market.payments import PaymentSink
from src.market.settlement import PurchaseReceipt, SettlementEngine


class EnergyMarketplace:
    def __init__(
        self,
        config: Optional[MarketConfig] = None,
        payments: Optional[PaymentSink] = None,
        event_log: Optional[EventLog] = None,
    ):
        self.config = config or MarketConfig()
        self.ledger = OfferLedger(event_log=event_log, config=self.config)
        self.settlement = SettlementEngine(self.ledger, payments=payments)

    @property
    def event_log(self) -> EventLog:
        return self.ledger.event_log

    @property
    def payments(self) -> PaymentSink:
        return self.settlement.payments

    # Offer ledger

    def create_offer(self, caller: str, unit_price: int, total_quantity: int) -> int:
        return self.ledger.create_offer(caller, unit_price, total_quantity)

    def set_offer_status(self, caller: str, offer_id: int, active: bool) -> Offer:
        return self.ledger.set_offer_status(caller, offer_id, active)

    def update_offer(
        self, caller: str, offer_id: int, new_unit_price: int, new_quantity: int
    ) -> Offer:
        return self.ledger.update_offer(caller, offer_id, new_unit_price, new_quantity)

    def get_offer(self, offer_id: int) -> Offer:
        return self.ledger.get_offer(offer_id)

    @property
    def next_offer_id(self) -> int:
        return self.ledger.next_offer_id

    # Settlement

    def quote(self, offer_id: int, quantity: int, weather_factor_bps: int) -> int:
        return self.settlement.quote(offer_id, quantity, weather_factor_bps)

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
        return self.settlement.buy_energy(
            caller,
            offer_id,
            quantity,
            weather_factor_bps,
            weather_desc,
            lat_microdeg,
            lon_microdeg,
            cloud_percent,
            tendered_amount,
        )
