"""Tool argument validation.

Checks an argument object against the JSON schema declared for a tool in
server.TOOLS, using jsonschema, before any handler logic runs. Errors are
keyed by the offending field. A tool may also name a group of arguments of
which at least one must be present ("task_id or task_name"); that rule is
kept out of inputSchema and checked here.
"""
from typing import Any, Optional, Sequence

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as SchemaError


class ValidationError(Exception):
    """Raised when tool arguments fail validation."""

    def __init__(self, tool_name: str, errors: dict):
        self.tool_name = tool_name
        self.errors = errors
        details = "; ".join(f"{field}: {msg}" for field, msg in errors.items())
        super().__init__(f"Invalid arguments for {tool_name}: {details}")


def _present(value: Any) -> bool:
    return value is not None and value != ""


def field_name(error: SchemaError) -> str:
    """Top-level argument a jsonschema error is about."""
    if error.path:
        return str(error.path[0])
    if error.validator == "required":
        for name in error.validator_value:
            if name not in error.instance and repr(name) in error.message:
                return name
    return "arguments"


def validate_arguments(
    schema: dict,
    arguments: Any,
    one_of: Optional[Sequence[str]] = None,
) -> dict:
    """Validate arguments against a tool input schema.

    Returns:
        Empty dict if valid, otherwise dict of field name to error message.
        Only the first error per field is kept.
    """
    if not isinstance(arguments, dict):
        return {"arguments": "must be an object"}

    # Explicit nulls mean "not given"
    given = {k: v for k, v in arguments.items() if v is not None}

    errors = {}
    for error in Draft202012Validator(schema).iter_errors(given):
        errors.setdefault(field_name(error), error.message)

    if one_of and not any(_present(given.get(f)) for f in one_of):
        errors.setdefault(one_of[0], f"provide either {' or '.join(one_of)}")

    return errors


def validate_tool_arguments(
    tool_name: str,
    schema: dict,
    arguments: Any,
    one_of: Optional[Sequence[str]] = None,
) -> dict:
    """Validate and raise ValidationError on failure; returns the arguments."""
    errors = validate_arguments(schema, arguments, one_of=one_of)
    if errors:
        raise ValidationError(tool_name, errors)
    return arguments
