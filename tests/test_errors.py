"""Tests for recordcheck.errors — exception hierarchy and error messages."""

from recordcheck.errors import ConfigurationError, InvalidInputError, RecordCheckError


class TestHierarchy:
    def test_configuration_error_is_recordcheck_error(self) -> None:
        assert issubclass(ConfigurationError, RecordCheckError)

    def test_invalid_input_is_recordcheck_error(self) -> None:
        assert issubclass(InvalidInputError, RecordCheckError)

    def test_invalid_input_is_type_error(self) -> None:
        assert issubclass(InvalidInputError, TypeError)


class TestInvalidInputError:
    def test_names_received_type(self) -> None:
        err = InvalidInputError([1, 2])
        assert str(err) == "Input must be a mapping of field names to values, got list."

    def test_keeps_received_value(self) -> None:
        err = InvalidInputError("text")
        assert err.received == "text"
