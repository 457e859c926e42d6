"""Rule and message declarations.

A rule set maps field names to ``Rule`` objects; a message set maps the
same names to ``Message`` objects. Both accept plain dicts and coerce
them, checking the shape eagerly so a typo fails at construction time
instead of silently passing every record::

    rules = coerce_rules({
        "age": {"type": "number", "required": True, "min": 18},
        "email": {"type": "string", "validate": "email"},
    })

Rule attributes:

- ``type`` — one of ``FieldType``; optional.
- ``required`` — the value must be present and not ``""``.
- ``min`` / ``max`` — length for strings, magnitude for numbers.
- ``match`` — name of another field whose value must be strictly equal.
- ``validate`` — named special check; ``"email"`` is the only one.
- ``custom`` — ``(value) -> bool`` or an awaitable resolving to bool.
- ``skip`` — ``(record) -> bool``; truthy bypasses every other check.
- ``regex`` — pattern (``str`` or compiled) the value must contain.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any

from recordcheck.errors import ConfigurationError


class FieldType(StrEnum):
    """Declared kind of a field's value."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"


# Named special checks accepted by ``Rule.validate``
SPECIAL_CHECKS = frozenset({"email"})


@dataclass(frozen=True, slots=True)
class Rule:
    """Declarative constraint set for one field."""

    type: FieldType | None = None
    required: bool = False
    min: int | float | None = None
    max: int | float | None = None
    match: str | None = None
    validate: str | None = None
    custom: Callable[[Any], Any] | None = None
    skip: Callable[[Mapping[str, Any]], Any] | None = None
    regex: re.Pattern[str] | None = None

    @classmethod
    def from_mapping(cls, field: str, spec: Mapping[str, Any]) -> Rule:
        """Build a rule from a plain mapping, checking every attribute."""
        _reject_unknown("rule", field, spec, cls)
        values = dict(spec)

        kind = values.get("type")
        if kind is not None:
            try:
                values["type"] = FieldType(kind)
            except ValueError:
                allowed = ", ".join(t.value for t in FieldType)
                msg = f"The 'type' property for {field!r} must be one of: {allowed}."
                raise ConfigurationError(msg) from None

        if "required" in values and not isinstance(values["required"], bool):
            msg = f"The 'required' property for {field!r} must be of type bool."
            raise ConfigurationError(msg)

        for bound in ("min", "max"):
            value = values.get(bound)
            if value is not None and (
                isinstance(value, bool) or not isinstance(value, int | float)
            ):
                msg = f"The {bound!r} property for {field!r} must be a number."
                raise ConfigurationError(msg)

        match = values.get("match")
        if match is not None and not isinstance(match, str):
            msg = f"The 'match' property for {field!r} must be of type str."
            raise ConfigurationError(msg)

        special = values.get("validate")
        if special is not None and special not in SPECIAL_CHECKS:
            allowed = ", ".join(sorted(SPECIAL_CHECKS))
            msg = f"The 'validate' property for {field!r} must be one of: {allowed}."
            raise ConfigurationError(msg)

        for hook in ("custom", "skip"):
            value = values.get(hook)
            if value is not None and not callable(value):
                msg = f"The {hook!r} property for {field!r} must be callable."
                raise ConfigurationError(msg)

        pattern = values.get("regex")
        if isinstance(pattern, str):
            try:
                values["regex"] = re.compile(pattern)
            except re.error as exc:
                msg = f"The 'regex' property for {field!r} is not a valid pattern: {exc}"
                raise ConfigurationError(msg) from exc
        elif pattern is not None and not isinstance(pattern, re.Pattern):
            msg = f"The 'regex' property for {field!r} must be a str or compiled pattern."
            raise ConfigurationError(msg)

        return cls(**values)


@dataclass(frozen=True, slots=True)
class Message:
    """Per-failure-kind error text for one field.

    A kind left as ``None`` falls back to a generated default.
    """

    type: str | None = None
    required: str | None = None
    min: str | None = None
    max: str | None = None
    match: str | None = None
    validate: str | None = None
    custom: str | None = None
    regex: str | None = None

    @classmethod
    def from_mapping(cls, field: str, spec: Mapping[str, Any]) -> Message:
        _reject_unknown("message", field, spec, cls)
        for kind, text in spec.items():
            if text is not None and not isinstance(text, str):
                msg = f"The {kind!r} message for {field!r} must be of type str."
                raise ConfigurationError(msg)
        return cls(**spec)

    def get(self, kind: str) -> str | None:
        """Configured text for a failure *kind*, or ``None``."""
        return getattr(self, kind)


def _reject_unknown(
    what: str, field: str, spec: Mapping[str, Any], cls: type[Rule] | type[Message]
) -> None:
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(spec) - known)
    if unknown:
        msg = (
            f"Unknown {what} properties for {field!r}: {', '.join(unknown)}. "
            f"Known properties: {', '.join(sorted(known))}"
        )
        raise ConfigurationError(msg)


def _coerce(
    what: str, entries: Mapping[str, Any] | None, cls: type[Rule] | type[Message]
) -> dict[str, Any]:
    if entries is None:
        return {}
    if not isinstance(entries, Mapping):
        msg = f"The {what}s should be a mapping of field names, got {type(entries).__name__}."
        raise ConfigurationError(msg)
    coerced: dict[str, Any] = {}
    for field, spec in entries.items():
        if isinstance(spec, cls):
            # Instances get the same checks as plain mappings
            attrs = {f.name: getattr(spec, f.name) for f in fields(cls)}
            coerced[field] = cls.from_mapping(field, attrs)
        elif isinstance(spec, Mapping):
            coerced[field] = cls.from_mapping(field, spec)
        else:
            msg = f"The {what} for {field!r} should be a mapping or {cls.__name__}."
            raise ConfigurationError(msg)
    return coerced


def coerce_rules(rules: Mapping[str, Rule | Mapping[str, Any]] | None) -> dict[str, Rule]:
    """Normalize a rule set to ``{field: Rule}``."""
    return _coerce("rule", rules, Rule)


def coerce_messages(
    messages: Mapping[str, Message | Mapping[str, Any]] | None,
) -> dict[str, Message]:
    """Normalize a message set to ``{field: Message}``."""
    return _coerce("message", messages, Message)
