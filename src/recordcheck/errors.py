"""recordcheck exception hierarchy.

Only configuration mistakes and malformed input raise. A field that fails
its rules is data, recorded in the validator's error map, never an
exception.
"""


class RecordCheckError(Exception):
    """Base for all recordcheck-specific errors."""


class ConfigurationError(RecordCheckError):
    """Raised when rules, messages, or options are malformed.

    Raised eagerly from the ``Validator`` constructor and the
    ``update_*`` mutators, so a bad rule never reaches ``validate()``.
    """


class InvalidInputError(RecordCheckError, TypeError):
    """Raised when ``validate()`` receives something that is not a mapping."""

    def __init__(self, received: object) -> None:
        self.received = received
        super().__init__(
            f"Input must be a mapping of field names to values, "
            f"got {type(received).__name__}."
        )
