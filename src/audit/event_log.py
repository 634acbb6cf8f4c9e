"""Event/Audit log — append-only history of state transitions.

- One record per successful state-changing operation
- Records are frozen Pydantic models; the log assigns each a monotonic
  `sequence` on append
- No mutation or truncation API: retention is the concern of whoever
  consumes to_contracts()
"""

import logging
from typing import Iterator, List, Optional

from src.core.config import AuditConfig
from src.core.domain.events import MarketEvent


logger = logging.getLogger(__name__)


class EventLog:
    """Append-only audit log shared by the engines that write to it.

    The log is owned by the core: readers get immutable records or tuples,
    never the underlying list.
    """

    def __init__(self, config: Optional[AuditConfig] = None):
        self.config = config or AuditConfig()
        self._records: List[MarketEvent] = []
        # Created on first export so that a log without exports never touches the schemas
        self._contract_validator = None

    def append(self, event: MarketEvent) -> MarketEvent:
        """Append a record and return the stored copy (with its sequence).

        Raises:
            ValueError: If the event already carries a sequence number
        """
        if event.sequence is not None:
            raise ValueError(
                f"Event {event.kind} already appended at sequence {event.sequence}"
            )
        stored = event.with_sequence(len(self._records))
        self._records.append(stored)
        logger.debug("audit append seq=%s kind=%s", stored.sequence, stored.kind)
        return stored

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MarketEvent]:
        return iter(tuple(self._records))

    def records(self, kind: Optional[str] = None) -> tuple[MarketEvent, ...]:
        if kind is None:
            return tuple(self._records)
        return tuple(r for r in self._records if r.kind == kind)

    def last(self) -> Optional[MarketEvent]:
        return self._records[-1] if self._records else None

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def to_contracts(self) -> list[dict]:
        """Export every record as a JSON-ready dict.

        When `validate_contracts` is enabled each dict is checked against the
        JSON Schema for its kind.

        Raises:
            jsonschema.ValidationError: If a record violates its contract
        """
        exported = [record.to_contract() for record in self._records]
        if self.config.validate_contracts:
            validator = self._get_contract_validator()
            for data in exported:
                validator.validate(data)
        return exported

    def _get_contract_validator(self):
        if self._contract_validator is None:
            from src.core.contracts.validators import EventContractValidator

            self._contract_validator = EventContractValidator()
        return self._contract_validator
