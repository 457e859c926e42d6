"""Validator options.

ValidatorOptions is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups inside the engine.
Updates produce a new instance via ``merged()``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from recordcheck.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ValidatorOptions:
    """Validator options. Immutable after creation.

    All fields default to off. Override what you need::

        options = ValidatorOptions(strict_mode=True, track_passed_fields=True)
    """

    # Record fields that end a pass without errors in the passed map
    track_passed_fields: bool = False

    # Reject record keys that have no rule
    strict_mode: bool = False

    # Evaluate field pipelines concurrently (errors identical to sequential)
    concurrent_fields: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> ValidatorOptions:
        """Build options from a plain mapping, rejecting unknown keys."""
        return cls().merged(options or {})

    def merged(self, partial: Mapping[str, Any]) -> ValidatorOptions:
        """Return a copy with *partial* shallow-merged over these options."""
        if not isinstance(partial, Mapping):
            msg = f"The options should be a mapping, got {type(partial).__name__}."
            raise ConfigurationError(msg)
        known = {f.name for f in fields(self)}
        for name, value in partial.items():
            if name not in known:
                allowed = ", ".join(sorted(known))
                msg = f"Unknown option {name!r}. Known options: {allowed}"
                raise ConfigurationError(msg)
            if not isinstance(value, bool):
                msg = f"The {name!r} option must be of type bool."
                raise ConfigurationError(msg)
        return replace(self, **partial)
