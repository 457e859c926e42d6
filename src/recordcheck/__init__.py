"""recordcheck — declarative per-field validation for keyed records.

Checks a record (any mapping) against a rule set and reports one
human-readable message per failing field. Custom checks may be sync or
async; ``validate()`` always awaits them.

Basic usage::

    from recordcheck import Validator

    validator = Validator(
        {"age": {"type": "number", "required": True, "min": 18, "max": 60}},
        {"age": {"min": "Too young"}},
    )
    ok = await validator.validate({"age": 17})
    validator.get_errors()  # {"age": "Too young"}

One-shot::

    from recordcheck import validate

    result = await validate(record, rules, strict_mode=True)
    if not result:
        ...
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "ConfigurationError",
    "FieldType",
    "InvalidInputError",
    "Message",
    "RecordCheckError",
    "Rule",
    "ValidationResult",
    "Validator",
    "ValidatorOptions",
    "validate",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import recordcheck`` fast (anyio loads with the engine).
    """
    if name in ("Validator", "validate"):
        from recordcheck import engine as _engine

        return getattr(_engine, name)

    if name == "ValidatorOptions":
        from recordcheck.config import ValidatorOptions

        return ValidatorOptions

    if name in ("FieldType", "Message", "Rule"):
        from recordcheck import rules as _rules

        return getattr(_rules, name)

    if name == "ValidationResult":
        from recordcheck.result import ValidationResult

        return ValidationResult

    if name in ("ConfigurationError", "InvalidInputError", "RecordCheckError"):
        from recordcheck import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
