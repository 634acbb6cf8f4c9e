"""
JSON Schema Contract Validators

Validates exported audit records against the formal JSON Schema contracts
in contracts/schema/ (Draft 2020-12), using the jsonschema library.

Schemas:
- offer_created.json
- offer_updated.json
- energy_purchased.json
- energy_minted.json
- energy_used.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from src.core.domain.events import EVENT_KINDS


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Loader for JSON Schema files.

    Schemas are looked up in contracts/schema/ relative to the project root.
    """

    def __init__(self, schema_dir: Path | None = None):
        # Project root is 4 levels up from this file
        self._schema_dir = schema_dir or (
            Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        )
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load (and cache) a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'energy_purchased')

        Returns:
            Parsed schema

        Raises:
            FileNotFoundError: If the schema file does not exist
            ValueError: If the file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation of the schema itself
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Validates dicts against one named schema."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: If data does not match the schema
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class EventContractValidator:
    """
    Dispatches an exported event record to the validator for its `kind`.

    Validators are built once per kind and reused.
    """

    def __init__(self):
        self._validators: Dict[str, ContractValidator] = {
            kind: ContractValidator(kind) for kind in EVENT_KINDS
        }

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: If `kind` is unknown or data does not match its schema
        """
        kind = data.get("kind")
        validator = self._validators.get(kind)
        if validator is None:
            raise ValidationError(f"Unknown event kind: {kind!r}")
        validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        validator = self._validators.get(data.get("kind"))
        return validator is not None and validator.is_valid(data)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_event_contract(data: Dict[str, Any]) -> None:
    """
    Validate one exported event record.

    Raises:
        ValidationError: If data does not match the schema for its kind
    """
    EventContractValidator().validate(data)
