"""
Contract Validation Module

JSON Schema validation of exported audit records.
"""

from .validators import (
    ContractValidator,
    EventContractValidator,
    SchemaLoader,
    validate_event_contract,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "EventContractValidator",
    # Functions
    "validate_event_contract",
]
