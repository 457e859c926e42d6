"""Value predicates used by the rule engine.

Every predicate is read-only: it inspects the value already present in
the record and returns a bool. Nothing here parses or coerces, so
``"42"`` is a string, never a number.

Each predicate has the signature::

    def check(value: Any) -> bool: ...
"""

import datetime
import re
from collections.abc import Callable
from typing import Any, TypeAlias

from recordcheck.rules import FieldType

# Type alias for a value predicate
Predicate: TypeAlias = Callable[[Any], bool]


# ---------------------------------------------------------------------------
# Kinds
# ---------------------------------------------------------------------------


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_number(value: Any) -> bool:
    """True for ``int`` and ``float`` values. ``bool`` is not a number."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_integer(value: Any) -> bool:
    """True for whole numbers: any ``int``, or a ``float`` with no fraction."""
    if not is_number(value):
        return False
    if isinstance(value, float):
        return value.is_integer()
    return True


def is_float(value: Any) -> bool:
    """True for numbers that are NOT whole.

    Strict on purpose: ``10`` and ``10.0`` fail, ``10.5`` passes.
    """
    return is_number(value) and not is_integer(value)


def is_date(value: Any) -> bool:
    """True for ``date`` and ``datetime`` instances, never for strings."""
    return isinstance(value, datetime.date)


TYPE_CHECKS: dict[FieldType, Predicate] = {
    FieldType.STRING: is_string,
    FieldType.NUMBER: is_number,
    FieldType.BOOLEAN: is_boolean,
    FieldType.INTEGER: is_integer,
    FieldType.FLOAT: is_float,
    FieldType.DATE: is_date,
}


def type_matches(kind: FieldType, value: Any) -> bool:
    """Return True if *value* is of the declared *kind*."""
    return TYPE_CHECKS[kind](value)


# ---------------------------------------------------------------------------
# Bounds
# ---------------------------------------------------------------------------


def bound_size(value: Any) -> int | float | None:
    """Size compared against ``min``/``max``.

    Length for strings, magnitude for numbers, ``None`` when bounds do not
    apply to the value (booleans, dates, lists, ...).
    """
    if isinstance(value, str):
        return len(value)
    if is_number(value):
        return value
    return None


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Structure only, not deliverability: local@domain.tld with a 2+ char tld
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]{2,}$")


def as_text(value: Any) -> str:
    """Text form of a value for pattern checks.

    Strings pass through. Booleans and whole floats are written the way a
    JSON record spells them (``true``, ``10``), everything else via ``str()``.
    """
    if isinstance(value, str):
        return value
    if is_boolean(value):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_email(value: Any) -> bool:
    """Value must look like an email address (basic format check)."""
    return _EMAIL_RE.match(as_text(value).lower()) is not None


def is_valid_regex(value: Any, pattern: re.Pattern[str] | str) -> bool:
    """Text form of the value (see ``as_text``) must contain a match for *pattern*.

    Unanchored; anchor the pattern with ``^``/``$`` for a full match.
    """
    return re.search(pattern, as_text(value)) is not None


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------


def strictly_equal(left: Any, right: Any) -> bool:
    """Equality without cross-kind coercion.

    ``True`` never equals ``1`` and a string never equals a number; ``1``
    and ``1.0`` are the same number and compare equal.
    """
    if is_boolean(left) or is_boolean(right):
        return is_boolean(left) and is_boolean(right) and left is right
    if is_number(left) and is_number(right):
        return left == right
    if type(left) is not type(right):
        return False
    return left == right
