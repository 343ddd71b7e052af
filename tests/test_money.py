"""
Test suite for money module

Tests amount parsing, rounding, and minor-unit conversion.
All monetary calculations must use Decimal precision.
"""

import pytest
from decimal import Decimal

from bank_ledger.errors import InvalidAmount
from bank_ledger.money import (
    parse_amount, decimal_from_string, quantize_amount,
    to_minor_units, from_minor_units
)


class TestParseAmount:
    """Test conversion of caller input to Decimal"""

    def test_decimal_passthrough(self):
        """Test Decimal input keeps its value"""
        assert parse_amount(Decimal('100.50')) == Decimal('100.50')

    def test_int_input(self):
        """Test integers become two-place decimals"""
        amount = parse_amount(500)
        assert amount == Decimal('500')
        assert str(amount) == '500.00'

    def test_rounds_half_up(self):
        """Test automatic rounding to two decimal places"""
        assert parse_amount(Decimal('100.555')) == Decimal('100.56')
        assert parse_amount("0.004") == Decimal('0.00')

    def test_string_formats(self):
        """Test common string formats"""
        assert parse_amount("250") == Decimal('250.00')
        assert parse_amount("$1,234.50") == Decimal('1234.50')
        assert parse_amount("12,5") == Decimal('12.50')
        assert parse_amount(" 42.10 ") == Decimal('42.10')

    def test_scientific_notation(self):
        """Test exponent markers are parsed, not stripped"""
        assert parse_amount("1e3") == Decimal('1000.00')
        assert parse_amount("1.5e2") == Decimal('150.00')
        assert parse_amount("2E-1") == Decimal('0.20')

    def test_stray_letters_rejected(self):
        """Test a letter suffix never collapses into a different number"""
        with pytest.raises(InvalidAmount):
            parse_amount("10 EUR")

    def test_sign_is_preserved(self):
        """Test that parsing does not judge the sign"""
        assert parse_amount("-5") == Decimal('-5.00')
        assert parse_amount(0) == Decimal('0')

    def test_float_rejected(self):
        """Test floats never reach the ledger"""
        with pytest.raises(InvalidAmount):
            parse_amount(10.5)

    def test_bool_rejected(self):
        """Test booleans are not treated as integers"""
        with pytest.raises(InvalidAmount):
            parse_amount(True)

    def test_garbage_rejected(self):
        """Test non-numeric strings"""
        for value in ["", "abc", "-", "1.2.3"]:
            with pytest.raises(InvalidAmount):
                parse_amount(value)

    def test_non_finite_rejected(self):
        """Test NaN and infinity"""
        with pytest.raises(InvalidAmount):
            parse_amount(Decimal('NaN'))
        with pytest.raises(InvalidAmount):
            parse_amount(Decimal('Infinity'))

    def test_oversized_rejected(self):
        """Test values too large for the decimal context"""
        with pytest.raises(InvalidAmount):
            parse_amount(Decimal('1E+40'))

    def test_unsupported_type_rejected(self):
        """Test other types"""
        with pytest.raises(InvalidAmount):
            parse_amount(None)


class TestDecimalFromString:
    """Test string cleaning"""

    def test_thousands_separator(self):
        """Test a single comma followed by three digits is a thousands separator"""
        assert decimal_from_string("1,234") == Decimal('1234')

    def test_error_carries_value(self):
        """Test the offending input is attached to the error"""
        with pytest.raises(InvalidAmount) as exc_info:
            decimal_from_string("abc")
        assert exc_info.value.amount == "abc"


class TestMinorUnits:
    """Test integer minor-unit conversion"""

    def test_to_minor_units(self):
        assert to_minor_units(Decimal('12.34')) == 1234
        assert to_minor_units(Decimal('500')) == 50000
        assert to_minor_units(Decimal('0.01')) == 1

    def test_from_minor_units(self):
        assert from_minor_units(1234) == Decimal('12.34')
        assert str(from_minor_units(50000)) == '500.00'
        assert from_minor_units(0) == Decimal('0')

    def test_from_minor_units_wider_than_context(self):
        """Test 29+ digit balances come back exactly"""
        units = 19999999999999999999999999998
        assert str(from_minor_units(units)) == '199999999999999999999999999.98'
        assert str(from_minor_units(-units)) == '-199999999999999999999999999.98'
        assert str(from_minor_units(7, 0)) == '7'

    def test_no_drift(self):
        """Test repeated tenths accumulate exactly"""
        units = sum(to_minor_units(Decimal('0.10')) for _ in range(10))
        assert from_minor_units(units) == Decimal('1.00')

    def test_quantize_precision(self):
        """Test custom precision"""
        assert quantize_amount(Decimal('1.23456'), 4) == Decimal('1.2346')
        assert quantize_amount(Decimal('7.5'), 0) == Decimal('8')
