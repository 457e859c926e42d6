"""Validation result — immutable snapshot of one validation pass."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a record against a rule set.

    ``is_valid`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = await validator.check(record)
        if not result:
            return render_errors(result.errors)

    ``errors`` maps field names to a single message each::

        {"age": '"age" should be at least 18 characters long (or greater if a number).'}

    ``passed`` holds the tracked passed fields (empty unless
    ``track_passed_fields`` is enabled).
    """

    errors: dict[str, str]
    passed: dict[str, Any] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid
