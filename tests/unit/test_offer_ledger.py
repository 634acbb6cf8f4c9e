"""
Tests for the Offer Ledger

Checks:
1. create_offer: sequential ids, stored fields, OfferCreated record
2. update_offer / set_offer_status: owner only, active untouched by updates
3. Failure precedence and full rollback on every failure
4. Read accessors are side-effect free
"""

import pytest
from pydantic import ValidationError

from src.audit.event_log import EventLog
from src.core.config import MarketConfig
from src.core.domain import (
    InvalidArgument,
    NotFound,
    Offer,
    OfferCreated,
    OfferUpdated,
    Unauthorized,
)
from src.market.offer_ledger import OfferLedger


SELLER = "0xseller"
OTHER = "0xintruder"


@pytest.fixture
def ledger() -> OfferLedger:
    return OfferLedger()


@pytest.fixture
def offer_id(ledger: OfferLedger) -> int:
    return ledger.create_offer(SELLER, unit_price=5 * 10**15, total_quantity=10)


# =============================================================================
# CREATE
# =============================================================================


class TestCreateOffer:
    def test_round_trip(self, ledger: OfferLedger) -> None:
        """Creating then reading returns identical field values"""
        oid = ledger.create_offer(SELLER, unit_price=1_000, total_quantity=25)
        offer = ledger.get_offer(oid)

        assert offer == Offer(
            offer_id=oid, owner=SELLER, unit_price=1_000, available_quantity=25, active=True
        )

    def test_ids_are_sequential(self, ledger: OfferLedger) -> None:
        ids = [ledger.create_offer(SELLER, 10, 1) for _ in range(3)]
        assert ids == [0, 1, 2]
        assert ledger.next_offer_id == 3

    def test_first_offer_id_configurable(self) -> None:
        ledger = OfferLedger(config=MarketConfig(first_offer_id=7))
        assert ledger.create_offer(SELLER, 10, 1) == 7
        assert ledger.next_offer_id == 8

    def test_emits_offer_created(self, ledger: OfferLedger) -> None:
        oid = ledger.create_offer(SELLER, unit_price=42, total_quantity=3)
        event = ledger.event_log.last()

        assert isinstance(event, OfferCreated)
        assert event.offer_id == oid
        assert event.owner == SELLER
        assert event.unit_price == 42
        assert event.total_quantity == 3
        assert event.sequence == 0

    @pytest.mark.parametrize(
        "price,quantity,field",
        [(0, 10, "unit_price"), (-1, 10, "unit_price"), (10, 0, "total_quantity"), (10, -5, "total_quantity")],
    )
    def test_non_positive_values_rejected(
        self, ledger: OfferLedger, price: int, quantity: int, field: str
    ) -> None:
        with pytest.raises(InvalidArgument) as exc_info:
            ledger.create_offer(SELLER, price, quantity)

        assert exc_info.value.field == field
        assert ledger.next_offer_id == 0
        assert len(ledger) == 0
        assert len(ledger.event_log) == 0

    def test_float_price_rejected(self, ledger: OfferLedger) -> None:
        with pytest.raises(InvalidArgument):
            ledger.create_offer(SELLER, 0.005, 10)  # type: ignore[arg-type]

    def test_empty_caller_rejected(self, ledger: OfferLedger) -> None:
        with pytest.raises(InvalidArgument):
            ledger.create_offer("", 10, 10)

    def test_shared_event_log(self) -> None:
        log = EventLog()
        ledger = OfferLedger(event_log=log)
        ledger.create_offer(SELLER, 10, 10)
        assert len(log) == 1


# =============================================================================
# UPDATE / STATUS
# =============================================================================


class TestUpdateOffer:
    def test_update_overwrites_price_and_quantity(self, ledger: OfferLedger, offer_id: int) -> None:
        ledger.set_offer_status(SELLER, offer_id, False)
        updated = ledger.update_offer(SELLER, offer_id, new_unit_price=777, new_quantity=3)

        assert updated.unit_price == 777
        assert updated.available_quantity == 3
        assert updated.active is False  # unchanged by update
        assert ledger.get_offer(offer_id) == updated

    def test_update_emits_post_state(self, ledger: OfferLedger, offer_id: int) -> None:
        ledger.update_offer(SELLER, offer_id, 11, 12)
        event = ledger.event_log.last()

        assert isinstance(event, OfferUpdated)
        assert (event.unit_price, event.available_quantity, event.active) == (11, 12, True)

    def test_update_by_non_owner(self, ledger: OfferLedger, offer_id: int) -> None:
        before = ledger.get_offer(offer_id)
        events_before = len(ledger.event_log)

        with pytest.raises(Unauthorized) as exc_info:
            ledger.update_offer(OTHER, offer_id, 1, 1)

        assert exc_info.value.caller == OTHER
        assert exc_info.value.owner == SELLER
        assert ledger.get_offer(offer_id).model_dump() == before.model_dump()
        assert len(ledger.event_log) == events_before

    @pytest.mark.parametrize("price,quantity", [(0, 1), (1, 0), (-3, 4)])
    def test_update_invalid_values(self, ledger: OfferLedger, offer_id: int, price: int, quantity: int) -> None:
        before = ledger.get_offer(offer_id)
        with pytest.raises(InvalidArgument):
            ledger.update_offer(SELLER, offer_id, price, quantity)
        assert ledger.get_offer(offer_id) == before

    def test_update_unknown_offer(self, ledger: OfferLedger) -> None:
        with pytest.raises(NotFound) as exc_info:
            ledger.update_offer(SELLER, 99, 1, 1)
        assert exc_info.value.offer_id == 99

    def test_not_found_precedes_unauthorized(self, ledger: OfferLedger) -> None:
        with pytest.raises(NotFound):
            ledger.update_offer(OTHER, 5, 0, 0)

    def test_unauthorized_precedes_invalid_argument(self, ledger: OfferLedger, offer_id: int) -> None:
        with pytest.raises(Unauthorized):
            ledger.update_offer(OTHER, offer_id, 0, 0)


class TestSetOfferStatus:
    def test_deactivate_and_reactivate(self, ledger: OfferLedger, offer_id: int) -> None:
        assert ledger.set_offer_status(SELLER, offer_id, False).active is False
        assert ledger.set_offer_status(SELLER, offer_id, True).active is True

    def test_deactivated_offer_persists(self, ledger: OfferLedger, offer_id: int) -> None:
        ledger.set_offer_status(SELLER, offer_id, False)
        assert offer_id in ledger
        assert ledger.active_offers() == []

    def test_status_by_non_owner(self, ledger: OfferLedger, offer_id: int) -> None:
        before = ledger.get_offer(offer_id)
        with pytest.raises(Unauthorized):
            ledger.set_offer_status(OTHER, offer_id, False)
        assert ledger.get_offer(offer_id).model_dump() == before.model_dump()

    def test_status_unknown_offer(self, ledger: OfferLedger) -> None:
        with pytest.raises(NotFound):
            ledger.set_offer_status(SELLER, 3, False)

    def test_status_must_be_bool(self, ledger: OfferLedger, offer_id: int) -> None:
        with pytest.raises(InvalidArgument):
            ledger.set_offer_status(SELLER, offer_id, 0)  # type: ignore[arg-type]

    def test_emits_offer_updated(self, ledger: OfferLedger, offer_id: int) -> None:
        ledger.set_offer_status(SELLER, offer_id, False)
        event = ledger.event_log.last()
        assert isinstance(event, OfferUpdated)
        assert event.active is False


# =============================================================================
# READS / TRANSACTION
# =============================================================================


class TestReads:
    def test_reads_are_idempotent(self, ledger: OfferLedger, offer_id: int) -> None:
        reads = [ledger.get_offer(offer_id) for _ in range(5)]
        assert all(r == reads[0] for r in reads)
        assert len(ledger.event_log) == 1

    def test_offers_by_owner(self, ledger: OfferLedger) -> None:
        ledger.create_offer(SELLER, 1, 1)
        ledger.create_offer(OTHER, 1, 1)
        ledger.create_offer(SELLER, 2, 2)
        assert [o.offer_id for o in ledger.offers_by_owner(SELLER)] == [0, 2]

    def test_offer_records_are_immutable(self, ledger: OfferLedger, offer_id: int) -> None:
        with pytest.raises(ValidationError):
            ledger.get_offer(offer_id).available_quantity = 0  # type: ignore[misc]


class TestTransaction:
    def test_rollback_restores_offers(self, ledger: OfferLedger, offer_id: int) -> None:
        before = ledger.get_offer(offer_id)

        with pytest.raises(RuntimeError):
            with ledger.transaction():
                ledger.record_sale(offer_id, 4)
                assert ledger.get_offer(offer_id).available_quantity == 6
                raise RuntimeError("boom")

        assert ledger.get_offer(offer_id) == before

    def test_commit_keeps_changes(self, ledger: OfferLedger, offer_id: int) -> None:
        with ledger.transaction():
            ledger.record_sale(offer_id, 4)
        assert ledger.get_offer(offer_id).available_quantity == 6

    def test_record_sale_never_goes_negative(self, ledger: OfferLedger, offer_id: int) -> None:
        with pytest.raises(ValueError):
            ledger.record_sale(offer_id, 11)
        assert ledger.get_offer(offer_id).available_quantity == 10
