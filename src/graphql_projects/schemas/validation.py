"""Shared schema validation utilities.

Raw configurations are validated with JSON Schema. Schemas are stored as YAML
files under ``graphql_projects/data/schemas/`` and loaded in a single,
consistent way.
"""
from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from graphql_projects.data import get_data_path, read_yaml


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema dict.

    Automatically appends ``.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"

    if not get_data_path("schemas", schema_name).exists():
        raise FileNotFoundError(f"Schema not found: {schema_name}")

    schema = read_yaml("schemas", schema_name)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def validate_payload_safe(payload: Any, schema_name: str) -> List[str]:
    """Validate a payload and return list of error messages (empty if valid).

    Each message is prefixed with the dotted path of the offending value.
    Failures of ``anyOf`` / ``oneOf`` branches report the most relevant
    branch error instead of the generic "not valid under any" message.
    """
    validator = Draft202012Validator(load_schema(schema_name))
    errors: List[str] = []
    for found in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path]):
        error = best_match([found])
        if error.absolute_path:
            path_str = ".".join(str(p) for p in error.absolute_path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


__all__ = ["load_schema", "validate_payload_safe"]
