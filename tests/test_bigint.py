"""Tests for the signed BigInteger type and its operations."""

from __future__ import annotations

import dataclasses

import pytest

import bigint
from bigint import ONE, ZERO, BigInteger, parse
from errors import (
    BigIntegerError,
    DivisionByZeroError,
    InvalidFormatError,
    ModuloByZeroError,
    NegativeExponentError,
    NegativeFactorialError,
)


def B(text: str) -> BigInteger:
    return parse(text)


# ---------------------------------------------------------------------------
# Construction and formatting
# ---------------------------------------------------------------------------

class TestParse:

    def test_leading_zeros_stripped(self):
        assert parse("007") == parse("7")
        assert parse("007").digits == "7"

    def test_negative_zero_is_zero(self):
        assert bigint.format_decimal(parse("-0")) == "0"
        assert parse("-000").negative is False
        assert parse("-0") == ZERO

    def test_negative(self):
        value = parse("-42")
        assert value.negative is True
        assert value.digits == "42"

    def test_very_long_literal(self):
        text = "9" * 500
        assert bigint.format_decimal(parse(text)) == text

    @pytest.mark.parametrize("text", [
        "", "-", "+5", "12a", "1.5", " 7", "7 ", "--1", "1-", "٣",
    ])
    def test_invalid(self, text):
        with pytest.raises(InvalidFormatError) as exc_info:
            parse(text)
        assert exc_info.value.text == text
        assert exc_info.value.kind == "InvalidFormat"

    def test_non_string_rejected(self):
        with pytest.raises(InvalidFormatError):
            parse(12)

    def test_invalid_format_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse("abc")


class TestConstruction:

    def test_default_is_zero(self):
        assert BigInteger() == ZERO

    def test_zero_sign_forced(self):
        assert BigInteger("000", negative=True).negative is False

    def test_digits_validated(self):
        with pytest.raises(InvalidFormatError):
            BigInteger("-5")

    @pytest.mark.parametrize("digits", ["", "1a", " 7"])
    def test_empty_or_non_digit_magnitude_rejected(self, digits):
        with pytest.raises(InvalidFormatError):
            BigInteger(digits)

    def test_from_string(self):
        assert BigInteger.from_string("-12") == BigInteger("12", negative=True)

    def test_from_int_round_trip(self):
        for n in (0, 7, -7, 10**30, -(10**30) + 1):
            assert int(BigInteger.from_int(n)) == n

    def test_str_and_repr(self):
        assert str(B("-12")) == "-12"
        assert repr(B("-12")) == "BigInteger('-12')"

    def test_immutable(self):
        value = B("5")
        with pytest.raises(dataclasses.FrozenInstanceError):
            value.negative = True

    def test_hashable(self):
        assert len({B("7"), B("007"), B("-0"), B("0")}) == 2


class TestFormat:

    @pytest.mark.parametrize("text", ["0", "1", "-1", "100", "-98765432109876543210"])
    def test_canonical_text(self, text):
        assert bigint.format_decimal(parse(text)) == text

    @pytest.mark.parametrize("raw, canonical", [
        ("-0", "0"), ("000123", "123"), ("-000123", "-123"),
    ])
    def test_normalized_text(self, raw, canonical):
        assert bigint.format_decimal(parse(raw)) == canonical

    def test_round_trip(self, big):
        for value in (big, bigint.negate(big), ZERO, ONE):
            assert parse(bigint.format_decimal(value)) == value


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

class TestCompare:

    @pytest.mark.parametrize("a, b, expected", [
        ("0", "0", 0),
        ("-1", "1", -1),
        ("1", "-1", 1),
        ("-5", "-3", -1),
        ("-3", "-5", 1),
        ("99", "100", -1),
        ("123", "123", 0),
        ("-0", "0", 0),
    ])
    def test_compare(self, a, b, expected):
        assert bigint.compare(B(a), B(b)) == expected

    def test_ordering_operators(self):
        assert B("-10") < B("-9") < B("0") < B("9") < B("10")
        assert B("100") >= B("100")
        assert max(B("3"), B("-30"), B("20")) == B("20")

    def test_no_ordering_against_int(self):
        with pytest.raises(TypeError):
            B("3") < 4

    def test_not_equal_to_int(self):
        assert B("3") != 3


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

class TestAddSubtract:

    @pytest.mark.parametrize("a, b, expected", [
        ("2", "3", "5"),
        ("-2", "-3", "-5"),
        ("5", "-3", "2"),
        ("3", "-5", "-2"),
        ("-5", "3", "-2"),
        ("5", "-5", "0"),
        ("999999999999999999", "1", "1000000000000000000"),
    ])
    def test_add(self, a, b, expected):
        assert bigint.add(B(a), B(b)) == B(expected)

    @pytest.mark.parametrize("a, b, expected", [
        ("5", "3", "2"),
        ("3", "5", "-2"),
        ("-3", "-5", "2"),
        ("0", "7", "-7"),
        ("1000000000000000000", "1", "999999999999999999"),
    ])
    def test_subtract(self, a, b, expected):
        assert bigint.subtract(B(a), B(b)) == B(expected)

    def test_additive_identity(self, big):
        assert bigint.add(big, parse("0")) == big

    def test_additive_inverse(self, big):
        assert bigint.add(big, bigint.subtract(parse("0"), big)) == parse("0")

    def test_cancel_gives_non_negative_zero(self):
        result = bigint.add(B("-7"), B("7"))
        assert result.negative is False
        assert bigint.format_decimal(result) == "0"

    def test_subtract_leaves_operands_unchanged(self):
        a, b = B("10"), B("-4")
        assert bigint.subtract(a, b) == B("14")
        assert bigint.subtract(a, b) == B("14")
        assert a == B("10") and b == B("-4")
        assert b.negative is True

    def test_subtract_same_object(self):
        value = B("-9")
        assert bigint.subtract(value, value) == ZERO
        assert value == B("-9")


class TestMultiply:

    def test_large_value_exact(self):
        assert bigint.multiply(
            parse("123456789123456789"), parse("987654321987654321")
        ) == parse("121932631137021795226407894448613247721")

    @pytest.mark.parametrize("a, b, expected", [
        ("6", "7", "42"),
        ("-6", "7", "-42"),
        ("6", "-7", "-42"),
        ("-6", "-7", "42"),
        ("-6", "0", "0"),
    ])
    def test_sign(self, a, b, expected):
        assert bigint.multiply(B(a), B(b)) == B(expected)

    def test_negative_times_zero_is_non_negative(self):
        assert bigint.multiply(B("-123"), ZERO).negative is False

    def test_commutative(self, big):
        other = B("-98765")
        assert bigint.multiply(big, other) == bigint.multiply(other, big)


class TestDivideModulo:

    @pytest.mark.parametrize("a, b, quotient, remainder", [
        ("7", "2", "3", "1"),
        ("-7", "2", "-3", "-1"),
        ("7", "-2", "-3", "1"),
        ("-7", "-2", "3", "-1"),
        ("6", "3", "2", "0"),
        ("-6", "3", "-2", "0"),
        ("1", "5", "0", "1"),
        ("-1", "5", "0", "-1"),
        ("0", "-5", "0", "0"),
    ])
    def test_truncating(self, a, b, quotient, remainder):
        assert bigint.divide(B(a), B(b)) == B(quotient)
        assert bigint.modulo(B(a), B(b)) == B(remainder)
        assert bigint.divide_with_remainder(B(a), B(b)) == (B(quotient), B(remainder))

    def test_reconstruction(self, big):
        for b in (B("7"), B("-7"), B("1000000007"), big, bigint.negate(big)):
            for a in (big, bigint.negate(big), B("5"), ZERO):
                q, r = bigint.divide(a, b), bigint.modulo(a, b)
                assert bigint.add(bigint.multiply(q, b), r) == a
                assert bigint.absolute(r) < bigint.absolute(b)

    def test_quotient_zero_is_non_negative(self):
        assert bigint.divide(B("-3"), B("7")).negative is False

    @pytest.mark.parametrize("a", ["0", "1", "-1", "123456789123456789123"])
    def test_division_by_zero(self, a):
        with pytest.raises(DivisionByZeroError):
            bigint.divide(B(a), ZERO)
        with pytest.raises(DivisionByZeroError):
            bigint.divide_with_remainder(B(a), ZERO)

    @pytest.mark.parametrize("a", ["0", "1", "-1", "123456789123456789123"])
    def test_modulo_by_zero(self, a):
        with pytest.raises(ModuloByZeroError):
            bigint.modulo(B(a), B("-0"))

    def test_zero_errors_are_zero_division(self):
        with pytest.raises(ZeroDivisionError):
            bigint.divide(ONE, ZERO)
        with pytest.raises(ZeroDivisionError):
            bigint.modulo(ONE, ZERO)


class TestPower:

    @pytest.mark.parametrize("x", ["0", "1", "-1", "2", "-17", "123456789123456789"])
    def test_zero_exponent(self, x):
        assert bigint.power(parse(x), parse("0")) == parse("1")

    def test_zero_to_the_zero(self):
        assert bigint.power(ZERO, ZERO) == ONE

    @pytest.mark.parametrize("base, exponent, expected", [
        ("2", "10", "1024"),
        ("-2", "3", "-8"),
        ("-2", "4", "16"),
        ("-1", "101", "-1"),
        ("0", "7", "0"),
        ("10", "30", "1" + "0" * 30),
    ])
    def test_values(self, base, exponent, expected):
        assert bigint.power(B(base), B(exponent)) == B(expected)

    def test_large(self):
        assert int(bigint.power(B("3"), B("200"))) == 3**200

    def test_negative_exponent(self):
        with pytest.raises(NegativeExponentError) as exc_info:
            bigint.power(parse("2"), parse("-1"))
        assert exc_info.value.exponent == "-1"
        assert exc_info.value.kind == "NegativeExponent"


class TestFactorial:

    def test_zero(self):
        assert bigint.factorial(parse("0")) == parse("1")

    def test_five(self):
        assert bigint.factorial(parse("5")) == parse("120")

    def test_thirty(self):
        assert bigint.factorial(B("30")) == B("265252859812191058636308480000000")

    def test_negative(self):
        with pytest.raises(NegativeFactorialError) as exc_info:
            bigint.factorial(B("-3"))
        assert exc_info.value.n == "-3"


class TestErrors:

    @pytest.mark.parametrize("call", [
        lambda: parse("x"),
        lambda: bigint.divide(ONE, ZERO),
        lambda: bigint.modulo(ONE, ZERO),
        lambda: bigint.power(ONE, B("-1")),
        lambda: bigint.factorial(B("-1")),
    ])
    def test_all_core_errors_share_a_base(self, call):
        with pytest.raises(BigIntegerError):
            call()


# ---------------------------------------------------------------------------
# Operator overloads
# ---------------------------------------------------------------------------

class TestOperators:

    def test_arithmetic(self):
        assert B("5") + B("-7") == B("-2")
        assert B("5") - B("-7") == B("12")
        assert B("5") * B("-7") == B("-35")
        assert B("-2") ** B("5") == B("-32")

    def test_int_operands(self):
        assert B("5") + 1 == B("6")
        assert 1 + B("5") == B("6")
        assert 10 - B("3") == B("7")
        assert 3 * B("-2") == B("-6")
        assert B("2") ** 8 == B("256")

    def test_unary(self):
        assert -B("5") == B("-5")
        assert +B("5") == B("5")
        assert abs(B("-5")) == B("5")
        assert -ZERO == ZERO

    def test_floor_operators_not_supported(self):
        with pytest.raises(TypeError):
            B("-7") // B("2")
        with pytest.raises(TypeError):
            B("-7") % B("2")

    def test_bool_and_float_rejected(self):
        with pytest.raises(TypeError):
            B("1") + True
        with pytest.raises(TypeError):
            B("1") + 1.5
