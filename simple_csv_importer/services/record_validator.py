from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Protocol

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

"""Record validation backed by JSON Schema.

Rules are per-field JSON Schema fragments, e.g.::

    {"age": {"type": "string", "pattern": "^[0-9]+$"}}

Messages map a failure to a template. Lookup order for a failed keyword on a
field: "<field>.<keyword>", "<field>", "<keyword>"; when nothing matches the
jsonschema message is used. Templates may use {field} and {value}.
"""

__all__ = [
    "JsonSchemaRecordValidator",
    "RecordValidator",
]


class RecordValidator(Protocol):
    def validate(
        self,
        record: Mapping[str, Any],
        rules: Mapping[str, Any],
        messages: Mapping[str, str],
    ) -> list[str]:
        """Return violation messages for record (empty list = valid)."""
        ...


class JsonSchemaRecordValidator:
    """Validate records against per-field JSON Schema rules."""

    def __init__(self, validator_class: type[Any] = Draft202012Validator) -> None:
        self.validator_class = validator_class
        # Compiled validators keyed by the serialized rules
        self._compiled: dict[str, Any] = {}

    def _validator_for(self, rules: Mapping[str, Any]) -> Any:
        key = json.dumps(rules, sort_keys=True, default=str)
        validator = self._compiled.get(key)
        if validator is None:
            schema = {"type": "object", "properties": dict(rules)}
            # SchemaError propagates: a broken rule set is a fatal problem
            self.validator_class.check_schema(schema)
            validator = self.validator_class(schema)
            self._compiled[key] = validator
        return validator

    def validate(
        self,
        record: Mapping[str, Any],
        rules: Mapping[str, Any],
        messages: Mapping[str, str],
    ) -> list[str]:
        if not rules:
            return []
        validator = self._validator_for(rules)
        order = {name: i for i, name in enumerate(rules)}

        def sort_key(error: ValidationError) -> tuple[int, str]:
            field = error.path[0] if error.path else None
            return (order.get(field, len(order)), str(error.validator))

        errors = sorted(validator.iter_errors(dict(record)), key=sort_key)
        return [self._message(error, messages) for error in errors]

    @staticmethod
    def _message(error: ValidationError, messages: Mapping[str, str]) -> str:
        field = str(error.path[0]) if error.path else ""
        keyword = str(error.validator)
        for key in (f"{field}.{keyword}", field, keyword):
            template = messages.get(key) if key else None
            if template is not None:
                return template.format(field=field, value=error.instance)
        return f"{field}: {error.message}" if field else error.message
