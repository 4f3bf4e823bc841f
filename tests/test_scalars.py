"""Tests for scalar codecs."""

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from gql_typed.core.errors import InvalidInputError
from gql_typed.core.scalars import (
    ID,
    Boolean,
    BooleanHandler,
    Date,
    DateHandler,
    DateTime,
    DateTimeHandler,
    Float,
    FloatHandler,
    IDHandler,
    Int,
    IntHandler,
    ScalarHandler,
    ScalarRegistry,
    as_decimal,
)


class TestBooleanHandler:
    """Tests for BooleanHandler."""

    def test_parse(self):
        handler = BooleanHandler()
        assert handler.parse("true") is True
        assert handler.parse("false") is False

    @pytest.mark.parametrize("text", ["maybe", '"maybe"', "2", "[true]", "True"])
    def test_parse_error(self, text):
        with pytest.raises(InvalidInputError):
            BooleanHandler().parse(text)

    def test_format(self):
        assert BooleanHandler().format(True) == "true"

    def test_decode(self):
        adapter = TypeAdapter(Boolean)
        assert adapter.validate_python(False) is False
        for bad in (123, [1, 2, 3], {}):
            with pytest.raises(ValidationError):
                adapter.validate_python(bad)


class TestIntHandler:
    """Tests for IntHandler."""

    def test_parse(self):
        handler = IntHandler()
        assert handler.parse("42") == 42
        assert handler.parse("-42") == -42

    @pytest.mark.parametrize("text", ["4.2", " 42", "", "2147483648", "0x10"])
    def test_parse_error(self, text):
        with pytest.raises(InvalidInputError):
            IntHandler().parse(text)

    def test_round_trip(self):
        handler = IntHandler()
        for text in ("0", "66000", "-2147483648", "2147483647"):
            assert handler.format(handler.parse(text)) == text

    def test_serialize_out_of_range(self):
        with pytest.raises(InvalidInputError):
            IntHandler().serialize(2**31)

    @pytest.mark.parametrize("value", [42, -42, 32000, -32000, 66000, -66000])
    def test_decode(self, value):
        assert TypeAdapter(Int).validate_python(value) == value

    @pytest.mark.parametrize("value", [2**31, -(2**31) - 1, "42", 4.5, True, [1, 2, 3], {}])
    def test_decode_error(self, value):
        with pytest.raises(ValidationError):
            TypeAdapter(Int).validate_python(value)

    def test_deserialize(self):
        handler = IntHandler()
        assert handler.deserialize(66000) == 66000
        with pytest.raises(InvalidInputError):
            handler.deserialize(2**40)


class TestFloatHandler:
    """Tests for FloatHandler."""

    def test_parse(self):
        assert FloatHandler().parse("3.14159") == 3.14159

    def test_parse_error(self):
        with pytest.raises(InvalidInputError):
            FloatHandler().parse("pi")

    def test_round_trip(self):
        handler = FloatHandler()
        for value in (0.1, -2.5, 1e300, 3.0):
            assert handler.parse(handler.format(value)) == value

    def test_serialize_rejects_non_finite(self):
        with pytest.raises(InvalidInputError):
            FloatHandler().serialize(float("inf"))

    def test_decode(self):
        assert TypeAdapter(Float).validate_python(3.5) == 3.5
        with pytest.raises(ValidationError):
            TypeAdapter(Float).validate_python("3.5")


class TestIDHandler:
    """Tests for IDHandler."""

    def test_parse_format(self):
        handler = IDHandler()
        assert handler.format(handler.parse("A1")) == "A1"

    def test_decode(self):
        assert TypeAdapter(ID).validate_python("A1") == "A1"
        with pytest.raises(ValidationError):
            TypeAdapter(ID).validate_python(5)


class TestDateHandler:
    """Tests for DateHandler."""

    def test_parse(self):
        assert DateHandler().parse("2024-04-05") == date(2024, 4, 5)

    @pytest.mark.parametrize("text", ["444.", "1/2/2022", "2024-4-5", "2024-02-30", "20240405"])
    def test_parse_error(self, text):
        with pytest.raises(InvalidInputError):
            DateHandler().parse(text)

    def test_format(self):
        assert DateHandler().format(date(1944, 6, 6)) == "1944-06-06"

    def test_round_trip(self):
        handler = DateHandler()
        assert handler.format(handler.parse("1944-06-06")) == "1944-06-06"

    def test_decode(self):
        adapter = TypeAdapter(Date)
        assert adapter.validate_python("2024-04-05") == date(2024, 4, 5)
        assert adapter.validate_json('"1944-06-06"') == date(1944, 6, 6)
        for bad in ("444.", "1/2/2022", 20240405):
            with pytest.raises(ValidationError):
                adapter.validate_python(bad)

    def test_encode(self):
        assert TypeAdapter(Date).dump_python(date(1944, 6, 6), mode="json") == "1944-06-06"


class TestDateTimeHandler:
    """Tests for DateTimeHandler."""

    def test_parse_epoch(self):
        value = DateTimeHandler().parse("1970-01-01T00:00:00.0Z")
        assert value == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_parse_timestamp(self):
        assert DateTimeHandler().parse("1944-06-06T00:06:00Z").timestamp() == -806975640

    @pytest.mark.parametrize(
        "text",
        [
            "1944-06-06T00:06:00Z",
            "2024-04-05T10:30:00+02:00",
            "2024-04-05T10:30:00-05:30",
            "2024-01-01T00:00:00.25Z",
        ],
    )
    def test_round_trip(self, text):
        handler = DateTimeHandler()
        assert handler.format(handler.parse(text)) == text

    @pytest.mark.parametrize(
        "text", ["444.", "1/2/2022", "2024-04-05", "1944-06-06T00:06:00", "1944-06-06 00:06:00Z"]
    )
    def test_parse_error(self, text):
        with pytest.raises(InvalidInputError):
            DateTimeHandler().parse(text)

    def test_format_requires_offset(self):
        with pytest.raises(InvalidInputError):
            DateTimeHandler().format(datetime(2024, 1, 1))

    def test_format_offset(self):
        value = datetime(2024, 1, 1, tzinfo=timezone(timedelta(hours=-3)))
        assert DateTimeHandler().format(value) == "2024-01-01T00:00:00-03:00"

    def test_from_unix_timestamp(self):
        value = DateTimeHandler.from_unix_timestamp(-806975640)
        assert DateTimeHandler().format(value) == "1944-06-06T00:06:00Z"

    def test_decode(self):
        adapter = TypeAdapter(DateTime)
        assert adapter.validate_python("1944-06-06T00:06:00Z").timestamp() == -806975640
        with pytest.raises(ValidationError):
            adapter.validate_python("1/2/2022")

    def test_encode(self):
        value = datetime(1944, 6, 6, 0, 6, tzinfo=timezone.utc)
        assert TypeAdapter(DateTime).dump_python(value, mode="json") == "1944-06-06T00:06:00Z"


class TestAsDecimal:
    """Tests for as_decimal."""

    def test_values(self):
        assert as_decimal(1, 2) == "0.01"
        assert as_decimal(12, 2) == "0.12"
        assert as_decimal(4212, 2) == "42.12"

    def test_negative(self):
        assert as_decimal(-4212, 2) == "-42.12"

    def test_no_decimals(self):
        assert as_decimal(42, 0) == "42"


class TestScalarRegistry:
    """Tests for ScalarRegistry."""

    def test_default_handlers_registered(self):
        registry = ScalarRegistry()
        for name in ("Boolean", "Int", "Float", "ID", "Date", "DateTime"):
            assert registry.has(name)

    def test_get_handler(self):
        handler = ScalarRegistry().get("DateTime")
        assert handler is not None
        assert handler.python_type == "datetime"

    def test_get_ignores_modifiers(self):
        assert isinstance(ScalarRegistry().get("[Int!]!"), IntHandler)

    def test_get_nonexistent(self):
        assert ScalarRegistry().get("NonExistent") is None

    def test_register_custom(self):
        from decimal import Decimal

        class MoneyHandler:
            wire_type = "Money"
            python_type = "Decimal"

            def parse(self, text):
                return Decimal(text)

            def format(self, value):
                return str(value)

            def serialize(self, value):
                return str(value)

            def deserialize(self, value):
                return Decimal(value)

        registry = ScalarRegistry()
        registry.register(MoneyHandler())
        assert registry.get("Money").parse("1.50") == Decimal("1.50")
        assert "Money" in registry.names()


class TestScalarHandlerProtocol:
    """Tests for protocol compliance."""

    @pytest.mark.parametrize(
        "handler",
        [BooleanHandler(), IntHandler(), FloatHandler(), IDHandler(), DateHandler(), DateTimeHandler()],
    )
    def test_builtin_handlers(self, handler):
        assert isinstance(handler, ScalarHandler)
