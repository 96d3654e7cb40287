"""
Тесты для DecimalValue модели

Проверяет:
1. Валидацию канонической формы (Pydantic)
2. Нормализацию через from_parts
3. Immutability (frozen)
4. Равенство / hash / упорядочивание
5. Арифметические операторы и конверсии
"""

from fractions import Fraction

import pytest
from pydantic import ValidationError

from bigdec.core.domain.context import local_context
from bigdec.core.domain.decimal_value import DecimalValue, Sign
from bigdec.core.math.parsing import parse

# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


class TestDecimalValueValidation:
    """Тесты инвариантов канонической формы"""

    def test_default_is_zero(self) -> None:
        zero = DecimalValue()
        assert zero.is_zero
        assert zero.sign is Sign.POSITIVE
        assert zero.exponent == 0

    def test_valid_construction(self) -> None:
        value = DecimalValue(sign=Sign.NEGATIVE, exponent=-1, coefficient=(1, 5))
        assert value.is_negative
        assert str(value) == "-0.15"

    def test_sign_from_int(self) -> None:
        value = DecimalValue(sign=-1, exponent=0, coefficient=[3])
        assert value.sign is Sign.NEGATIVE
        assert value.coefficient == (3,)

    def test_digit_out_of_range(self) -> None:
        with pytest.raises(ValidationError, match="0..9"):
            DecimalValue(exponent=0, coefficient=(1, 10))

    def test_empty_coefficient(self) -> None:
        with pytest.raises(ValidationError):
            DecimalValue(exponent=0, coefficient=())

    def test_leading_zeros_rejected(self) -> None:
        with pytest.raises(ValidationError, match="leading zeros"):
            DecimalValue(exponent=0, coefficient=(0, 1))

    def test_trailing_zeros_rejected(self) -> None:
        with pytest.raises(ValidationError, match="trailing zeros"):
            DecimalValue(exponent=1, coefficient=(1, 0))

    def test_negative_zero_rejected(self) -> None:
        with pytest.raises(ValidationError, match="zero must be stored"):
            DecimalValue(sign=Sign.NEGATIVE, exponent=0, coefficient=(0,))

    def test_zero_with_exponent_rejected(self) -> None:
        with pytest.raises(ValidationError, match="zero must be stored"):
            DecimalValue(exponent=3, coefficient=(0,))

    def test_frozen(self) -> None:
        value = parse("1.5")
        with pytest.raises(ValidationError):
            value.exponent = 2


class TestFromParts:
    """Тесты нормализации from_parts"""

    def test_strips_leading_and_trailing_zeros(self) -> None:
        value = DecimalValue.from_parts(Sign.POSITIVE, 2, [0, 0, 1, 2, 0])
        assert value.exponent == 0
        assert value.coefficient == (1, 2)

    def test_all_zeros_gives_positive_zero(self) -> None:
        value = DecimalValue.from_parts(Sign.NEGATIVE, 7, [0, 0, 0])
        assert value == DecimalValue()
        assert value.sign is Sign.POSITIVE

    def test_empty_digits_gives_zero(self) -> None:
        assert DecimalValue.from_parts(Sign.POSITIVE, 0, []).is_zero


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


class TestDecimalValueComparison:
    """Тесты равенства, hash и порядка"""

    def test_equal_values_equal_fields(self) -> None:
        """Каноническая форма: 1.50 и 1.5 неотличимы"""
        assert parse("1.50") == parse("1.5")
        assert hash(parse("1.50")) == hash(parse("1.5"))
        assert len({parse("1.50"), parse("1.5"), parse("15e-1")}) == 1

    def test_equal_to_native(self) -> None:
        assert parse("3") == 3
        assert parse("-3") == -3
        assert parse("0.5") == 0.5
        assert parse("1e25") == 10**25

    def test_string_is_not_equal(self) -> None:
        """Как decimal.Decimal: строка не число, для строк есть equal()"""
        assert parse("2") != "2.0"
        assert parse("2") != "2"
        assert (parse("1") == "abc") is False

    def test_float_compares_exactly(self) -> None:
        """0.1 в двоичном виде не равен десятичному 0.1"""
        assert parse("0.1") != 0.1
        assert parse("0.1000000000000000055511151231257827021181583404541015625") == 0.1
        assert parse("1") != float("nan")
        assert parse("1") != float("inf")

    def test_float_equality_in_strict_mode(self) -> None:
        with local_context(strict=True):
            assert parse("0.5") == 0.5
            assert parse("0.1") != 0.1

    def test_hash_matches_native_numbers(self) -> None:
        assert hash(parse("1")) == hash(1)
        assert hash(parse("-1")) == hash(-1)
        assert hash(parse("0")) == hash(0)
        assert hash(parse("0.5")) == hash(0.5)
        assert hash(parse("-2.25")) == hash(-2.25)
        assert hash(parse("1e30")) == hash(10**30)
        assert hash(parse("0.1")) == hash(Fraction(1, 10))
        assert hash(parse("-1.5e-20")) == hash(Fraction(-15, 10**21))

    def test_mixed_keys_in_set_and_dict(self) -> None:
        assert len({parse("1"), 1, 1.0}) == 1
        assert {parse("1"): "a"}[1] == "a"
        assert {2.5: "b"}[parse("2.5")] == "b"

    def test_unsupported_comparison(self) -> None:
        assert (parse("1") == None) is False  # noqa: E711
        assert parse("1") != [1]
        with pytest.raises(TypeError):
            parse("1") < [1]

    def test_ordering(self) -> None:
        assert parse("1") < parse("2")
        assert parse("-1") <= "-1"
        assert parse("10") > 9
        assert parse("0") >= "-0"
        assert parse("0.1") < 0.1
        assert parse("1e400") < float("inf")
        assert not parse("1") < float("nan")
        assert not parse("1") >= float("nan")
        assert sorted([parse("3"), parse("-1"), parse("2.5")]) == [
            parse("-1"),
            parse("2.5"),
            parse("3"),
        ]


# =============================================================================
# ОПЕРАТОРЫ
# =============================================================================


class TestDecimalValueOperators:
    """Тесты арифметических операторов"""

    def test_add(self) -> None:
        assert parse("1.5") + "2.25" == parse("3.75")
        assert 1 + parse("0.5") == parse("1.5")

    def test_subtract(self) -> None:
        assert 10 - parse("0.1") == parse("9.9")
        assert parse("1") - parse("1") == DecimalValue()

    def test_multiply(self) -> None:
        assert parse("3") * 2 == parse("6")
        assert "0.5" * parse("4") == parse("2")

    def test_divide(self) -> None:
        assert parse("1") / parse("4") == parse("0.25")
        assert 1 / parse("8") == parse("0.125")

    def test_divide_uses_ambient_context(self) -> None:
        with local_context(decimal_places=3):
            assert parse("2") / 3 == parse("0.667")

    def test_mod(self) -> None:
        assert parse("7") % 3 == parse("1")
        assert 7 % parse("-3") == parse("1")

    def test_pow(self) -> None:
        assert parse("2") ** 10 == parse("1024")
        assert parse("2") ** -1 == parse("0.5")

    def test_unary(self) -> None:
        assert -parse("5") == parse("-5")
        assert +parse("5") == parse("5")
        assert abs(parse("-5")) == parse("5")
        assert (-parse("0")).sign is Sign.POSITIVE

    def test_unsupported_operand(self) -> None:
        with pytest.raises(TypeError):
            parse("1") + [1]
        with pytest.raises(TypeError):
            True + parse("1")


class TestDecimalValueConversions:
    """Тесты конверсий в builtin-типы"""

    def test_float(self) -> None:
        assert float(parse("0.5")) == 0.5
        assert float(parse("-1.25e-3")) == -0.00125

    def test_int_truncates(self) -> None:
        assert int(parse("7.9")) == 7
        assert int(parse("-7.9")) == -7
        assert int(parse("0.5")) == 0
        assert int(parse("1e25")) == 10**25
        assert int(parse("-1234.5e2")) == -123450

    def test_int_beyond_int_string_limit(self) -> None:
        """int() строится арифметически, без str → int"""
        assert int(parse("1e5000")) == 10**5000
        assert int(parse("-" + "9" * 5000 + ".9")) == -(10**5000 - 1)

    def test_from_int(self) -> None:
        assert DecimalValue.from_int(0) == DecimalValue()
        assert DecimalValue.from_int(-1200) == parse("-1.2e3")
        assert DecimalValue.from_int(10**512) == parse("1e512")

    def test_bool(self) -> None:
        assert not parse("0")
        assert parse("0.0001")

    def test_str_and_repr(self) -> None:
        assert str(parse("1.50")) == "1.5"
        assert repr(parse("-2")) == "DecimalValue('-2')"
        assert str(parse("1e21")) == "1e+21"
