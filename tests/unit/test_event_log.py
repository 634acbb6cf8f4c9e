"""
Tests for the Event/Audit log, JSON Schema contracts and replay

Checks:
1. Append-only: monotonic sequence numbers, no double append
2. Exported records satisfy their JSON Schema contracts
3. Replaying the log reproduces the engines' state exactly
"""

import pytest
from jsonschema import ValidationError
from pydantic import ValidationError as PydanticValidationError

from src.audit import EventLog, replay_offers, replay_token
from src.core.config import AuditConfig, TokenConfig
from src.core.contracts import EventContractValidator, validate_event_contract
from src.core.domain import OfferCreated, OfferUpdated, TransferFailed
from src.market import EnergyMarketplace, InMemoryPayments, compute_final_cost
from src.tokenomics import TokenIssuanceEngine


SELLER = "0xseller"
BUYER = "0xbuyer"


@pytest.fixture
def shared_log() -> EventLog:
    return EventLog()


@pytest.fixture
def populated(shared_log: EventLog):
    """Marketplace and token engine writing to one log, with some history."""
    payments = InMemoryPayments()
    market = EnergyMarketplace(payments=payments, event_log=shared_log)
    token = TokenIssuanceEngine(TokenConfig(initial_price=100, base_mint_amount=100), event_log=shared_log)

    first = market.create_offer(SELLER, unit_price=1_000, total_quantity=20)
    second = market.create_offer(BUYER, unit_price=3, total_quantity=5)
    token.mint_energy(SELLER, 20_000, 10)
    market.buy_energy(
        BUYER, first, 4, 7_500, "scattered clouds", 37_803_900, -122_401_100, 50,
        tendered_amount=compute_final_cost(1_000, 4, 7_500),
    )
    market.update_offer(SELLER, first, 1_200, 12)
    market.set_offer_status(BUYER, second, False)
    token.mint_energy(BUYER, 9_000, 20)
    token.use_energy(SELLER, 50)

    # A failed purchase leaves no trace
    payments.reject_payments(SELLER)
    with pytest.raises(TransferFailed):
        market.buy_energy(
            BUYER, first, 1, 10_000, "clear sky", 0, 0, 0,
            tendered_amount=compute_final_cost(1_200, 1, 10_000),
        )

    return market, token


# =============================================================================
# APPEND-ONLY LOG
# =============================================================================


class TestEventLog:
    def test_sequences_are_monotonic(self, populated, shared_log: EventLog) -> None:
        assert [r.sequence for r in shared_log] == list(range(len(shared_log)))
        assert len(shared_log) == 8

    def test_filter_by_kind(self, populated, shared_log: EventLog) -> None:
        assert len(shared_log.records("offer_created")) == 2
        assert len(shared_log.records("energy_purchased")) == 1
        assert len(shared_log.records("energy_minted")) == 2
        assert len(shared_log.records("energy_used")) == 1

    def test_double_append_rejected(self, shared_log: EventLog) -> None:
        stored = shared_log.append(OfferCreated(offer_id=0, owner=SELLER, unit_price=1, total_quantity=1))
        with pytest.raises(ValueError):
            shared_log.append(stored)
        assert len(shared_log) == 1

    def test_stored_records_are_frozen(self, shared_log: EventLog) -> None:
        stored = shared_log.append(OfferCreated(offer_id=0, owner=SELLER, unit_price=1, total_quantity=1))
        with pytest.raises(PydanticValidationError):
            stored.unit_price = 2  # type: ignore[misc]

    def test_records_returns_a_copy(self, populated, shared_log: EventLog) -> None:
        records = shared_log.records()
        assert isinstance(records, tuple)
        assert len(shared_log) == len(records)

    def test_empty_log(self) -> None:
        log = EventLog()
        assert log.last() is None
        assert log.to_contracts() == []


# =============================================================================
# CONTRACTS
# =============================================================================


class TestEventContracts:
    def test_export_validates(self, populated, shared_log: EventLog) -> None:
        exported = shared_log.to_contracts()
        assert len(exported) == len(shared_log)
        assert exported[0]["kind"] == "offer_created"

    def test_purchase_contract_fields(self, populated, shared_log: EventLog) -> None:
        purchase = shared_log.records("energy_purchased")[0].to_contract()
        validate_event_contract(purchase)
        assert purchase["amount_paid"] == 3_000
        assert purchase["lat_microdeg"] == 37_803_900

    def test_unappended_record_violates_contract(self) -> None:
        record = OfferCreated(offer_id=0, owner=SELLER, unit_price=1, total_quantity=1)
        with pytest.raises(ValidationError):
            validate_event_contract(record.to_contract())  # sequence is null

    def test_unknown_kind(self) -> None:
        validator = EventContractValidator()
        assert validator.is_valid({"kind": "offer_deleted"}) is False
        with pytest.raises(ValidationError):
            validator.validate({"kind": "offer_deleted"})

    def test_extra_fields_rejected(self, populated, shared_log: EventLog) -> None:
        data = shared_log.records("energy_minted")[0].to_contract()
        data["bonus"] = 1
        assert EventContractValidator().is_valid(data) is False

    def test_validation_can_be_disabled(self) -> None:
        log = EventLog(AuditConfig(validate_contracts=False))
        log.append(OfferCreated(offer_id=0, owner=SELLER, unit_price=1, total_quantity=1))
        assert len(log.to_contracts()) == 1


# =============================================================================
# REPLAY
# =============================================================================


class TestReplay:
    def test_offers_rebuilt_from_log(self, populated, shared_log: EventLog) -> None:
        market, _ = populated
        rebuilt = replay_offers(shared_log)

        assert set(rebuilt) == {0, 1}
        for offer_id, offer in rebuilt.items():
            assert offer == market.get_offer(offer_id)

    def test_token_rebuilt_from_log(self, populated, shared_log: EventLog) -> None:
        _, token = populated
        assert replay_token(shared_log, initial_price=100) == token.snapshot()

    def test_token_replay_without_events(self) -> None:
        snapshot = replay_token([], initial_price=100)
        assert snapshot.price == 100
        assert snapshot.total_supply == 0
        assert snapshot.balances == {}

    def test_update_of_unknown_offer_rejected(self) -> None:
        orphan = OfferUpdated(offer_id=3, owner=SELLER, unit_price=1, available_quantity=1, active=True)
        with pytest.raises(ValueError):
            replay_offers([orphan])
