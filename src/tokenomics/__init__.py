"""Tokenomics — weather-driven token issuance."""

from .issuance import BurnResult, MintResult, TokenIssuanceEngine

__all__ = [
    "TokenIssuanceEngine",
    "MintResult",
    "BurnResult",
]
