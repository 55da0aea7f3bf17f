"""Tests for the mtgjson_sdk.connection.values module."""

import datetime
import uuid
from decimal import Decimal

import pytest

from mtgjson_sdk import MtgjsonUnsupportedTypeError
from mtgjson_sdk.connection.values import row_to_canonical, to_canonical


class TestToCanonical:
    """Tests for converting engine values to canonical values."""

    @pytest.mark.parametrize("value", [None, True, False, 0, -7, 1.5, "text"])
    def test_passthrough(self, value):
        assert to_canonical(value) == value
        assert type(to_canonical(value)) is type(value)

    def test_wide_integers_become_strings(self):
        assert to_canonical(2**63 - 1) == 2**63 - 1
        assert to_canonical(2**63) == str(2**63)
        assert to_canonical(-(2**63) - 1) == str(-(2**63) - 1)

    def test_non_finite_floats(self):
        assert to_canonical(float("nan")) is None
        assert to_canonical(float("inf")) is None

    def test_decimal(self):
        assert to_canonical(Decimal("1.25")) == 1.25

    def test_blob(self):
        assert to_canonical(b"\x00\xff") == "blob:00ff"

    def test_uuid(self):
        value = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert to_canonical(value) == "12345678-1234-5678-1234-567812345678"

    def test_nested(self):
        value = {"a": [1, (2, None)], "b": {"c": Decimal("0.5")}}
        assert to_canonical(value) == {"a": [1, [2, None]], "b": {"c": 0.5}}

    def test_unsupported_lenient(self):
        assert to_canonical(datetime.date(2024, 1, 1)) is None

    def test_unsupported_strict(self):
        with pytest.raises(MtgjsonUnsupportedTypeError, match="date"):
            to_canonical(datetime.date(2024, 1, 1), strict=True)

    def test_unsupported_strict_nested(self):
        with pytest.raises(TypeError):
            to_canonical([datetime.timedelta(days=1)], strict=True)


def test_row_to_canonical():
    assert row_to_canonical(["a", "b"], (1, b"\x01")) == {"a": 1, "b": "blob:01"}
