"""Funds routing for settlement.

The settlement engine only needs "move this exact amount to the seller,
succeed or fail atomically". PaymentSink is that seam; InMemoryPayments is
the in-process implementation used by the marketplace and the tests.
"""

import logging
from typing import Dict, Protocol, Set, runtime_checkable

from src.core.domain.errors import TransferFailed


logger = logging.getLogger(__name__)


@runtime_checkable
class PaymentSink(Protocol):
    """Routes a tendered amount from a buyer to a seller.

    Implementations either complete the transfer or raise TransferFailed
    without any observable effect.
    """

    def transfer(self, payer: str, recipient: str, amount: int) -> None: ...


class InMemoryPayments:
    """Accumulates routed funds per recipient.

    Recipients can be marked as rejecting, which makes every transfer to them
    fail, the way a contract without a payable fallback refuses ether.
    """

    def __init__(self):
        self._received: Dict[str, int] = {}
        self._rejecting: Set[str] = set()

    def transfer(self, payer: str, recipient: str, amount: int) -> None:
        """
        Raises:
            TransferFailed: If the recipient rejects payments or amount < 0
        """
        if recipient in self._rejecting:
            logger.warning(
                "Transfer rejected by recipient: payer=%s recipient=%s amount=%s",
                payer, recipient, amount,
            )
            raise TransferFailed(recipient, amount, "recipient rejects payments")
        if amount < 0:
            raise TransferFailed(recipient, amount, "negative amount")

        self._received[recipient] = self._received.get(recipient, 0) + amount

    def reject_payments(self, recipient: str) -> None:
        self._rejecting.add(recipient)

    def accept_payments(self, recipient: str) -> None:
        self._rejecting.discard(recipient)

    def received(self, recipient: str) -> int:
        return self._received.get(recipient, 0)

    @property
    def total_routed(self) -> int:
        return sum(self._received.values())
