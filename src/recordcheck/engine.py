"""Rule engine — validate a record against per-field rules.

Usage::

    from recordcheck import Validator

    validator = Validator(
        {
            "age": {"type": "number", "required": True, "min": 18, "max": 60},
            "email": {"type": "string", "validate": "email"},
        },
        {"age": {"min": "You must be at least 18"}},
        {"track_passed_fields": True},
    )
    if not await validator.validate({"age": 17, "email": "ann@example.com"}):
        validator.get_errors()  # {"age": "You must be at least 18"}

Pipeline per field, in this order::

    1. skip      rule.skip(record) truthy -> field is valid, stop
    2. required  value unset or "" -> required error, stop
    3. absent    value unset -> field is valid, stop
    4. type      mismatch -> type error (keeps going)
    5. min, max  length of strings, magnitude of numbers
    6. validate  named special check ("email")
    7. match     strict equality with another field's raw value
    8. regex     unanchored search on the value's string form
    9. custom    rule.custom(value), awaited if it returns an awaitable

Each failure overwrites the field's error, so exactly one message
survives per field: the last check that failed.

Thread safety:
    Errors and passed fields are instance state, cleared and written in
    place. Concurrent ``validate()`` calls on one instance need external
    serialization; use one ``Validator`` per concurrent caller instead.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import asdict
from typing import Any

import anyio

from recordcheck import checks
from recordcheck._internal.invoke import invoke
from recordcheck.config import ValidatorOptions
from recordcheck.errors import ConfigurationError, InvalidInputError
from recordcheck.messages import resolve_message, unrecognized_field_message
from recordcheck.result import ValidationResult
from recordcheck.rules import Message, Rule, coerce_messages, coerce_rules

logger = logging.getLogger("recordcheck.engine")

# Stands in for a missing ``match`` target; equal to nothing
_MISSING = object()


def _is_unset(value: Any) -> bool:
    return value is None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _coerce_options(
    options: ValidatorOptions | Mapping[str, Any] | None,
) -> ValidatorOptions:
    if options is None:
        return ValidatorOptions()
    if isinstance(options, ValidatorOptions):
        return options
    if isinstance(options, Mapping):
        return ValidatorOptions.from_mapping(options)
    msg = f"The options should be a mapping or ValidatorOptions, got {type(options).__name__}."
    raise ConfigurationError(msg)


class Validator:
    """Validates keyed records against declarative per-field rules.

    Holds the rule, message and option configuration plus the result
    state of the most recent pass. Configuration changes only through
    the ``update_*`` methods, which shallow-merge by key.
    """

    __slots__ = ("_errors", "_messages", "_options", "_passed", "_rules")

    # Value predicates, exposed for callers writing their own checks
    is_email = staticmethod(checks.is_email)
    is_valid_regex = staticmethod(checks.is_valid_regex)
    is_integer = staticmethod(checks.is_integer)
    is_float = staticmethod(checks.is_float)
    is_date = staticmethod(checks.is_date)

    def __init__(
        self,
        rules: Mapping[str, Rule | Mapping[str, Any]] | None = None,
        messages: Mapping[str, Message | Mapping[str, Any]] | None = None,
        options: ValidatorOptions | Mapping[str, Any] | None = None,
    ) -> None:
        self._rules: dict[str, Rule] = coerce_rules(rules)
        self._messages: dict[str, Message] = coerce_messages(messages)
        self._options: ValidatorOptions = _coerce_options(options)
        self._errors: dict[str, str] = {}
        self._passed: dict[str, Any] = {}

    # -- Configuration --

    @property
    def rules(self) -> dict[str, Rule]:
        return dict(self._rules)

    @property
    def messages(self) -> dict[str, Message]:
        return dict(self._messages)

    @property
    def options(self) -> ValidatorOptions:
        return self._options

    def update_rules(self, partial: Mapping[str, Rule | Mapping[str, Any]]) -> None:
        """Merge *partial* into the rules; fields not named keep their rule."""
        self._rules = {**self._rules, **coerce_rules(partial)}
        logger.debug("Updated rules for: %s", ", ".join(partial))

    def update_messages(self, partial: Mapping[str, Message | Mapping[str, Any]]) -> None:
        """Merge *partial* into the messages; fields not named keep theirs."""
        self._messages = {**self._messages, **coerce_messages(partial)}
        logger.debug("Updated messages for: %s", ", ".join(partial))

    def update_options(
        self,
        partial: ValidatorOptions | Mapping[str, Any] | None = None,
        /,
        **changes: bool,
    ) -> None:
        """Merge option changes, given as a mapping and/or keywords::

            validator.update_options({"strict_mode": True})
            validator.update_options(track_passed_fields=True)
        """
        if isinstance(partial, ValidatorOptions):
            partial = asdict(partial)
        elif partial is not None and not isinstance(partial, Mapping):
            msg = f"The options should be a mapping, got {type(partial).__name__}."
            raise ConfigurationError(msg)
        merged = {**(partial or {}), **changes}
        self._options = self._options.merged(merged)
        logger.debug("Updated options: %s", self._options)

    # -- Result state --

    def get_errors(self) -> dict[str, str]:
        """Errors from the most recent pass, one message per field."""
        return dict(self._errors)

    def get_passed_fields(self) -> dict[str, Any]:
        """Fields that validated cleanly, accumulated until ``reset()``."""
        return dict(self._passed)

    def reset(self) -> None:
        """Clear errors and passed fields."""
        self._errors = {}
        self._passed = {}

    # -- Validation --

    async def validate(self, record: Mapping[str, Any]) -> bool:
        """Validate *record* against the rules.

        Returns True when no field failed and, in strict mode, the record
        has no unrecognized keys. Errors from the previous pass are
        discarded first.

        Raises:
            InvalidInputError: *record* is not a mapping.

        Exceptions raised by ``custom`` or ``skip`` predicates propagate.
        """
        if not isinstance(record, Mapping):
            raise InvalidInputError(record)

        self._errors = {}
        # A rule update during an awaited custom check applies to the next pass
        rules = dict(self._rules)
        options = self._options

        if options.concurrent_fields:
            outcomes = await self._evaluate_concurrently(rules, record)
        else:
            outcomes = {}
            for field, rule in rules.items():
                outcomes[field] = await self._evaluate_field(field, rule, record)

        for field in rules:
            error = outcomes.get(field)
            if error is not None:
                self._errors[field] = error

        if options.strict_mode:
            self._scan_unrecognized(rules, record)

        self._update_passed(rules, record, track=options.track_passed_fields)
        return not self._errors

    async def check(self, record: Mapping[str, Any]) -> ValidationResult:
        """Validate *record* and return a snapshot of the outcome."""
        await self.validate(record)
        return ValidationResult(errors=self.get_errors(), passed=self.get_passed_fields())

    async def _evaluate_field(
        self,
        field: str,
        rule: Rule,
        record: Mapping[str, Any],
    ) -> str | None:
        """Run one field's pipeline; return its surviving error, if any."""
        if rule.skip is not None and await invoke(rule.skip, record):
            return None

        value = record.get(field)

        if rule.required and _is_blank(value):
            return self._fail("required", field, rule, value)

        if _is_unset(value):
            return None

        failed: str | None = None

        if rule.type is not None and not checks.type_matches(rule.type, value):
            failed = "type"

        size = checks.bound_size(value)
        if rule.min is not None and size is not None and size < rule.min:
            failed = "min"
        if rule.max is not None and size is not None and size > rule.max:
            failed = "max"

        if rule.validate == "email" and not checks.is_email(value):
            failed = "validate"

        if rule.match is not None and not checks.strictly_equal(
            value, record.get(rule.match, _MISSING)
        ):
            failed = "match"

        if rule.regex is not None and not checks.is_valid_regex(value, rule.regex):
            failed = "regex"

        if rule.custom is not None and not await invoke(rule.custom, value):
            failed = "custom"

        if failed is None:
            return None
        return self._fail(failed, field, rule, value)

    async def _evaluate_concurrently(
        self,
        rules: dict[str, Rule],
        record: Mapping[str, Any],
    ) -> dict[str, str | None]:
        """Run every field's pipeline at once in an anyio task group.

        Each task writes only its own field's slot, so the merged result
        matches a sequential pass.
        """
        outcomes: dict[str, str | None] = {}

        async def _run(field: str, rule: Rule) -> None:
            outcomes[field] = await self._evaluate_field(field, rule, record)

        try:
            async with anyio.create_task_group() as tg:
                for field, rule in rules.items():
                    tg.start_soon(_run, field, rule)
        except ExceptionGroup as group:
            # Surface a lone predicate failure as itself, like a sequential pass
            if len(group.exceptions) == 1:
                raise group.exceptions[0] from group
            raise

        return outcomes

    def _fail(self, kind: str, field: str, rule: Rule, value: Any) -> str:
        logger.debug("Field %r failed %s check", field, kind)
        return resolve_message(self._messages, kind, field, rule, value)

    def _scan_unrecognized(self, rules: dict[str, Rule], record: Mapping[str, Any]) -> None:
        for key in record:
            if key not in rules:
                logger.debug("Rejecting unrecognized field %r", key)
                self._errors[key] = unrecognized_field_message(key)

    def _update_passed(
        self,
        rules: dict[str, Rule],
        record: Mapping[str, Any],
        *,
        track: bool,
    ) -> None:
        for field in rules:
            if field in self._errors:
                # A field that passed earlier but fails now is no longer passed
                self._passed.pop(field, None)
            elif track:
                self._passed[field] = record.get(field)


async def validate(
    record: Mapping[str, Any],
    rules: Mapping[str, Rule | Mapping[str, Any]],
    messages: Mapping[str, Message | Mapping[str, Any]] | None = None,
    **options: bool,
) -> ValidationResult:
    """Validate *record* once with a throwaway ``Validator``.

    Example::

        result = await validate(
            {"password": "123456", "confirm": "1234567"},
            {
                "password": {"type": "string", "required": True},
                "confirm": {"type": "string", "required": True, "match": "password"},
            },
        )
        if not result:
            # result.errors == {"confirm": '"confirm" must match with the "password" field.'}
            ...
    """
    return await Validator(rules, messages, options).check(record)
