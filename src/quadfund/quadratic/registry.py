from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import FormatChecker

SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"

INIT_MSG_SCHEMA = "init_msg.schema.json"
PROPOSAL_SCHEMA = "proposal.schema.json"
CONFIG_SCHEMA = "config.schema.json"


class MessageValidationError(ValueError):
    exit_code: int = 2

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


@dataclass(frozen=True)
class SchemaRegistry:
    schema_root: Path = SCHEMA_ROOT
    _validators: dict[str, jsonschema.Validator] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def default(cls) -> "SchemaRegistry":
        return _DEFAULT

    def schema_path(self, schema_filename: str) -> Path:
        return self.schema_root / schema_filename

    def load_schema(self, schema_filename: str) -> dict[str, Any]:
        path = self.schema_path(schema_filename)
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def validator_for(self, schema_filename: str) -> jsonschema.Validator:
        validator = self._validators.get(schema_filename)
        if validator is None:
            schema = self.load_schema(schema_filename)
            validator_cls = jsonschema.validators.validator_for(schema)
            validator_cls.check_schema(schema)
            validator = validator_cls(schema, format_checker=FormatChecker())
            self._validators[schema_filename] = validator
        return validator

    def validate_instance(self, instance: Any, schema_filename: str) -> None:
        validator = self.validator_for(schema_filename)
        errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
        if errors:
            formatted = [self._format_error(err) for err in errors]
            raise MessageValidationError(
                f"Schema validation failed for {schema_filename}: {'; '.join(formatted)}",
                errors=formatted,
            )

    @staticmethod
    def _format_error(error: jsonschema.ValidationError) -> str:
        location = "/".join(str(part) for part in error.path) or "<root>"
        return f"{location}: {error.message}"


_DEFAULT = SchemaRegistry()
