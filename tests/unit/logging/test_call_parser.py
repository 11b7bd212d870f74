"""
Tests unitaires pour Logging - Call Parser

Analyse du message principal (normalize_message) et des paramètres
suivants (extract_error_and_extra).
"""

import pytest

from arklog.logging import (
    Error,
    LogLevel,
    extract_error_and_extra,
    normalize_message,
)
from arklog.logging.call_parser import (
    INVALID_MESSAGE_WARNING,
    OBJECT_LOGGED_MESSAGE,
    type_name_of,
)


class TestNormalizeMessage:
    """Argument principal."""

    def test_string(self) -> None:
        result = normalize_message("hello")

        assert result.message == "hello"
        assert result.error is None
        assert result.extra is None
        assert result.invalid_message_info is None

    def test_exception(self) -> None:
        exc = ValueError("bad")

        result = normalize_message(exc)

        assert result.message == "bad"
        assert result.error is exc

    def test_mapping_without_error(self) -> None:
        result = normalize_message({"userId": 1})

        assert result.message == OBJECT_LOGGED_MESSAGE
        assert result.extra == {"userId": 1}
        assert result.error is None

    def test_mapping_with_nested_error(self) -> None:
        """Erreur imbriquée promue, laissée en place dans extra."""
        exc = RuntimeError("inner")
        payload = {"ctx": {"cause": exc}, "code": 1}

        result = normalize_message(payload)

        assert result.message == "inner"
        assert result.error is exc
        assert result.extra == payload
        assert result.extra is not payload

    def test_none(self) -> None:
        result = normalize_message(None)

        assert result.message == "[null]"
        info = result.invalid_message_info
        assert info["invalidMessageWarning"] == INVALID_MESSAGE_WARNING
        assert info["originalMessageType"] == "object"
        assert info["originalMessage"] == "null"

    def test_number(self) -> None:
        result = normalize_message(3.5)

        assert result.message == "[OBJECT]: 3.5"
        assert result.invalid_message_info["originalMessageType"] == "number"

    def test_callstack_is_truncated(self) -> None:
        result = normalize_message(True)

        callstack = result.invalid_message_info["invalidMessageCallstack"]
        assert isinstance(callstack, str)
        assert callstack.count('File "') <= 5


class TestTypeNameOf:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "object"),
            (True, "boolean"),
            (1, "number"),
            (1.5, "number"),
            (2**60, "bigint"),
            ("s", "string"),
            (len, "function"),
            ([1], "object"),
            ({"a": 1}, "object"),
        ],
    )
    def test_type_names(self, value, expected: str) -> None:
        assert type_name_of(value) == expected


class TestExtractErrorAndExtra:
    """Paramètres suivant le message."""

    def test_empty(self) -> None:
        result = extract_error_and_extra((), LogLevel.LOG)

        assert result.error is None
        assert result.extra == {}

    def test_exception(self) -> None:
        exc = ValueError("x")

        assert extract_error_and_extra((exc,), LogLevel.DEBUG).error is exc

    def test_string_at_error_levels(self) -> None:
        for level in (LogLevel.WARN, LogLevel.ERROR, LogLevel.FATAL):
            result = extract_error_and_extra(("boom",), level)

            assert isinstance(result.error, Error)
            assert str(result.error) == "boom"
            assert result.extra == {}

    def test_string_below_warn(self) -> None:
        for level in (LogLevel.VERBOSE, LogLevel.DEBUG, LogLevel.LOG):
            result = extract_error_and_extra(("AuthService",), level)

            assert result.error is None
            assert result.extra == {"context": "AuthService"}

    def test_later_keys_override(self) -> None:
        result = extract_error_and_extra(({"a": 1, "b": 1}, {"b": 2}), LogLevel.LOG)

        assert result.extra == {"a": 1, "b": 2}

    def test_err_wins_over_error(self) -> None:
        err, error = ValueError("err"), ValueError("error")

        result = extract_error_and_extra(({"err": err, "error": error},), LogLevel.LOG)

        assert result.error is err
        assert result.extra == {"error": error}

    def test_exception_keys_before_string_keys(self) -> None:
        exc = ValueError("real")

        result = extract_error_and_extra(({"err": "text", "error": exc},), LogLevel.ERROR)

        assert result.error is exc
        assert result.extra == {"err": "text"}

    def test_string_error_key_at_error_level(self) -> None:
        result = extract_error_and_extra(({"error": "denied", "user": "u"},), LogLevel.ERROR)

        assert isinstance(result.error, Error)
        assert str(result.error) == "denied"
        assert result.extra == {"user": "u"}

    def test_string_error_key_below_warn(self) -> None:
        result = extract_error_and_extra(({"error": "denied"},), LogLevel.LOG)

        assert result.error is None
        assert result.extra == {"error": "denied"}

    def test_nested_error_promoted_in_place(self) -> None:
        exc = OSError("io")

        result = extract_error_and_extra(({"job": {"cause": exc}},), LogLevel.ERROR)

        assert result.error is exc
        assert result.extra == {"job": {"cause": exc}}

    def test_last_error_wins(self) -> None:
        first, second = ValueError("1"), ValueError("2")

        result = extract_error_and_extra((first, {"err": second}), LogLevel.ERROR)

        assert result.error is second

    def test_other_values_ignored(self) -> None:
        result = extract_error_and_extra((1, None, [1, 2], 2.5), LogLevel.ERROR)

        assert result.error is None
        assert result.extra == {}
