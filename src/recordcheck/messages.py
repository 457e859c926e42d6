"""Error-message resolution.

A configured message is used verbatim (the empty string included).
Otherwise a default is generated that names the field and, where it
helps, the threshold from the rule.
"""

from collections.abc import Mapping
from typing import Any

from recordcheck.checks import is_boolean, is_date, is_number
from recordcheck.rules import Message, Rule

# Failure kinds, in pipeline order
KINDS = ("required", "type", "min", "max", "validate", "match", "regex", "custom")


def describe(value: Any) -> str:
    """Short kind name for a value, used in type-mismatch messages."""
    if is_boolean(value):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_date(value):
        return "date"
    return type(value).__name__


def default_message(kind: str, field: str, rule: Rule, value: Any = None) -> str:
    """Generated text for a failure *kind* on *field*."""
    match kind:
        case "required":
            return f'"{field}" is a required field and cannot be empty.'
        case "type":
            return f"Expected a {rule.type}, but received {describe(value)}"
        case "min":
            return (
                f'"{field}" should be at least {rule.min} characters long '
                f"(or greater if a number)."
            )
        case "max":
            return (
                f'"{field}" should not exceed {rule.max} characters '
                f"(or be less if a number)."
            )
        case "validate":
            return f'"{field}" is not a valid email address. Please enter a valid email.'
        case "match":
            return f'"{field}" must match with the "{rule.match}" field.'
        case "regex":
            return f'"{field}" does not match the required format.'
        case "custom":
            return (
                f'Custom validation for "{field}" failed. '
                f"Ensure it meets the specific requirements."
            )
    msg = f"Unknown failure kind: {kind!r}"
    raise ValueError(msg)


def unrecognized_field_message(field: str) -> str:
    """Strict-mode text for a record key with no rule."""
    return f'"{field}" is not a recognized field and cannot be processed.'


def resolve_message(
    messages: Mapping[str, Message],
    kind: str,
    field: str,
    rule: Rule,
    value: Any = None,
) -> str:
    """Configured message for *field*/*kind*, falling back to the default."""
    configured = messages.get(field)
    if configured is not None:
        text = configured.get(kind)
        if text is not None:
            return text
    return default_message(kind, field, rule, value)
