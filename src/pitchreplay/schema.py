"""JSON Schema validation for playback snapshot documents."""

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import Draft7Validator

from .version import get_schema_version, is_schema_compatible

SCHEMA_PATH = Path(__file__).parent / "schemas" / "replay_snapshot.schema.json"


def _load_schema() -> dict[str, Any]:
    """Load the snapshot JSON schema shipped with the package.

    Raises:
        FileNotFoundError: If schema file is missing.
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


def _create_validator() -> Draft7Validator:
    """Create a Draft-07 validator with format checking enabled."""
    return Draft7Validator(_load_schema(), format_checker=jsonschema.FormatChecker())


def _error_path(error: jsonschema.ValidationError) -> str:
    """Render ``snapshots[3].entities[0].position`` style paths."""
    parts = []
    for part in error.absolute_path:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        elif parts:
            parts.append(f".{part}")
        else:
            parts.append(str(part))
    return f" at path '{''.join(parts)}'" if parts else ""


def _format_validation_error(error: jsonschema.ValidationError) -> str:
    """Turn a validation error into a message naming the field and the fix."""
    where = _error_path(error)

    if error.validator == "required":
        missing = error.message.split("'")[1::2]
        return f"Missing required field(s): {', '.join(missing)}{where}"
    if error.validator == "enum":
        return (
            f"Invalid value{where}. Allowed values: {list(error.validator_value)}. "
            f"Got: {error.instance}"
        )
    if error.validator == "type":
        return (
            f"Invalid type{where}. Expected {error.validator_value}, "
            f"got {type(error.instance).__name__}: {error.instance}"
        )
    if error.validator == "minimum":
        return f"Value{where} must be >= {error.validator_value}. Got: {error.instance}"
    if error.validator in ("minItems", "maxItems"):
        return f"Positions{where} must have exactly 3 components. Got: {error.instance}"
    if error.validator == "additionalProperties":
        return f"Unknown field{where}: {error.message}"

    return f"{error.message}{where}"


def validate_snapshot(obj: dict[str, Any]) -> None:
    """Validate a snapshot document against the JSON schema.

    Documents written by a different major schema version are rejected even
    when their structure happens to match.

    Raises:
        jsonschema.ValidationError: If the document is invalid; the message
            names the offending path and the expected value.
        TypeError: If obj is not a dictionary.
    """
    if not isinstance(obj, dict):
        raise TypeError(f"Snapshot must be a dictionary, got {type(obj).__name__}")

    try:
        _create_validator().validate(obj)
    except jsonschema.ValidationError as e:
        raise jsonschema.ValidationError(_format_validation_error(e)) from e

    version = obj["schema_version"]
    if not is_schema_compatible(version):
        raise jsonschema.ValidationError(
            f"Incompatible schema_version {version}; "
            f"this release reads {get_schema_version().split('.')[0]}.x documents"
        )


def validate_snapshot_file(file_path: str) -> None:
    """Validate a snapshot JSON file against the schema."""
    with open(file_path, encoding="utf-8") as f:
        obj = json.load(f)

    validate_snapshot(obj)
