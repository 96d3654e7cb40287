"""
DecimalValue — Модель десятичного значения произвольной точности

Immutable Pydantic модель: (sign, exponent, coefficient).

    value = sign × d0.d1d2...dn × 10^exponent

exponent задаёт позицию десятичной точки относительно ПЕРВОЙ цифры
coefficient, а не последней.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. coefficient непустой, все цифры в диапазоне 0-9
2. Нет ведущих и хвостовых нулей, кроме единственного нуля:
   coefficient=(0,), exponent=0, sign=POSITIVE
3. Ноль всегда положительный, как бы он ни был получен (0 - 0, -0)
4. Представление каноническое: равенство полей == численное равенство

Арифметические операторы делегируют в bigdec.core.math и используют
ambient-контекст (см. context.get_context).
"""

import math
import sys
from enum import Enum
from typing import Final, Iterable, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

# Конверсия int <-> str кусками: обход лимита sys.get_int_max_str_digits()
_CHUNK_DIGITS: Final = 512
_CHUNK: Final = 10**_CHUNK_DIGITS

_HASH_MODULUS: Final = sys.hash_info.modulus
_HASH_10_INV: Final = pow(10, _HASH_MODULUS - 2, _HASH_MODULUS)


# =============================================================================
# ENUMS
# =============================================================================


class Sign(int, Enum):
    """Знак значения."""

    POSITIVE = 1
    NEGATIVE = -1

    def flip(self) -> "Sign":
        return Sign.NEGATIVE if self is Sign.POSITIVE else Sign.POSITIVE


# =============================================================================
# VALUE MODEL
# =============================================================================


class DecimalValue(BaseModel):
    """
    Точное десятичное значение.

    Прямое создание через поля требует канонической формы; для
    нормализации произвольных цифр используется from_parts(), для
    строк и чисел — bigdec.parse().

    Examples:
        >>> DecimalValue(sign=Sign.NEGATIVE, exponent=-1, coefficient=(1, 5))
        DecimalValue('-0.15')
        >>> DecimalValue.from_parts(Sign.POSITIVE, 2, [0, 1, 2, 0])
        DecimalValue('12')
    """

    sign: Sign = Field(Sign.POSITIVE, description="Знак")
    exponent: int = Field(0, description="Степень десяти первой цифры")
    coefficient: tuple[int, ...] = Field(
        (0,), min_length=1, description="Цифры, старшая первой"
    )

    model_config = {"frozen": True}

    @field_validator("coefficient")
    @classmethod
    def validate_digits(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Каждый элемент — одна десятичная цифра."""
        for digit in v:
            if not 0 <= digit <= 9:
                raise ValueError(f"coefficient digits must be in 0..9, got {digit}")
        return v

    @model_validator(mode="after")
    def validate_canonical(self) -> "DecimalValue":
        """Проверка канонической формы (инварианты 2-3)."""
        if self.coefficient[0] == 0:
            if len(self.coefficient) != 1:
                raise ValueError(f"coefficient has leading zeros: {self.coefficient}")
            if self.exponent != 0 or self.sign is not Sign.POSITIVE:
                raise ValueError(
                    "zero must be stored as sign=POSITIVE, exponent=0, "
                    f"got sign={self.sign.name}, exponent={self.exponent}"
                )
        elif self.coefficient[-1] == 0:
            raise ValueError(f"coefficient has trailing zeros: {self.coefficient}")
        return self

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_parts(
        cls, sign: Union[Sign, int], exponent: int, digits: Iterable[int]
    ) -> "DecimalValue":
        """
        Нормализация произвольной последовательности цифр.

        Ведущие нули снимаются со сдвигом exponent, хвостовые отбрасываются.
        Если цифр не осталось, возвращается канонический ноль.

        Args:
            sign: Знак результата (игнорируется для нуля)
            exponent: Степень десяти ПЕРВОГО элемента digits
            digits: Цифры 0-9, старшая первой

        Returns:
            DecimalValue в канонической форме
        """
        digits = list(digits)
        start = 0
        while start < len(digits) and digits[start] == 0:
            start += 1
        if start == len(digits):
            return cls()

        end = len(digits)
        while digits[end - 1] == 0:
            end -= 1

        return cls(
            sign=Sign(sign),
            exponent=exponent - start,
            coefficient=tuple(digits[start:end]),
        )

    @classmethod
    def from_int(cls, number: int) -> "DecimalValue":
        """
        Точная конверсия int любой длины.

        Examples:
            >>> DecimalValue.from_int(-1200)
            DecimalValue('-1200')
        """
        sign = Sign.NEGATIVE if number < 0 else Sign.POSITIVE
        number = abs(number)

        chunks = []
        while number >= _CHUNK:
            number, low = divmod(number, _CHUNK)
            chunks.append(str(low).zfill(_CHUNK_DIGITS))
        chunks.append(str(number))

        text = "".join(reversed(chunks))
        return cls.from_parts(sign, len(text) - 1, (int(ch) for ch in text))

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def is_zero(self) -> bool:
        return self.coefficient[0] == 0

    @property
    def is_negative(self) -> bool:
        return self.sign is Sign.NEGATIVE

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        # Строки не приводятся (как у decimal.Decimal): для них есть equal()
        if isinstance(other, float) and not math.isfinite(other):
            return False
        operand = _exact_operand(other)
        if operand is None:
            return NotImplemented
        return (
            self.sign is operand.sign
            and self.exponent == operand.exponent
            and self.coefficient == operand.coefficient
        )

    def __hash__(self) -> int:
        """
        Хэш, согласованный с int, float и Fraction равной величины.

        value = C × 10^scale, хэш — C × 10^scale mod P по правилам
        числовых типов Python (P = sys.hash_info.modulus).
        """
        residue = _digits_to_int(self.coefficient) % _HASH_MODULUS
        scale = self.exponent - len(self.coefficient) + 1
        base = 10 if scale >= 0 else _HASH_10_INV
        result = residue * pow(base, abs(scale), _HASH_MODULUS) % _HASH_MODULUS
        if self.is_negative:
            result = -result
        return -2 if result == -1 else result

    def __lt__(self, other: object) -> bool:
        order = _order(self, other)
        if order is NotImplemented:
            return order
        return order is not None and order < 0

    def __le__(self, other: object) -> bool:
        order = _order(self, other)
        if order is NotImplemented:
            return order
        return order is not None and order <= 0

    def __gt__(self, other: object) -> bool:
        order = _order(self, other)
        if order is NotImplemented:
            return order
        return order is not None and order > 0

    def __ge__(self, other: object) -> bool:
        order = _order(self, other)
        if order is NotImplemented:
            return order
        return order is not None and order >= 0

    # -------------------------------------------------------------------------
    # Arithmetic operators
    # -------------------------------------------------------------------------

    def __add__(self, other):
        from bigdec.core.math.arithmetic import add

        if not _is_operand(other):
            return NotImplemented
        return add(self, other)

    def __radd__(self, other):
        from bigdec.core.math.arithmetic import add

        if not _is_operand(other):
            return NotImplemented
        return add(other, self)

    def __sub__(self, other):
        from bigdec.core.math.arithmetic import subtract

        if not _is_operand(other):
            return NotImplemented
        return subtract(self, other)

    def __rsub__(self, other):
        from bigdec.core.math.arithmetic import subtract

        if not _is_operand(other):
            return NotImplemented
        return subtract(other, self)

    def __mul__(self, other):
        from bigdec.core.math.arithmetic import multiply

        if not _is_operand(other):
            return NotImplemented
        return multiply(self, other)

    def __rmul__(self, other):
        from bigdec.core.math.arithmetic import multiply

        if not _is_operand(other):
            return NotImplemented
        return multiply(other, self)

    def __truediv__(self, other):
        from bigdec.core.math.arithmetic import divide

        if not _is_operand(other):
            return NotImplemented
        return divide(self, other)

    def __rtruediv__(self, other):
        from bigdec.core.math.arithmetic import divide

        if not _is_operand(other):
            return NotImplemented
        return divide(other, self)

    def __mod__(self, other):
        from bigdec.core.math.arithmetic import mod

        if not _is_operand(other):
            return NotImplemented
        return mod(self, other)

    def __rmod__(self, other):
        from bigdec.core.math.arithmetic import mod

        if not _is_operand(other):
            return NotImplemented
        return mod(other, self)

    def __pow__(self, n):
        from bigdec.core.math.arithmetic import power

        return power(self, n)

    def __neg__(self) -> "DecimalValue":
        from bigdec.core.math.arithmetic import negate

        return negate(self)

    def __pos__(self) -> "DecimalValue":
        return self

    def __abs__(self) -> "DecimalValue":
        from bigdec.core.math.arithmetic import absolute_value

        return absolute_value(self)

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    def __bool__(self) -> bool:
        return not self.is_zero

    def __float__(self) -> float:
        from bigdec.core.math.formatting import to_number

        return to_number(self)

    def __int__(self) -> int:
        """Отбрасывание дробной части (к нулю)."""
        if self.is_zero or self.exponent < 0:
            return 0
        integral = self.coefficient[: self.exponent + 1]
        number = _digits_to_int(integral) * 10 ** (self.exponent + 1 - len(integral))
        return -number if self.is_negative else number

    def __str__(self) -> str:
        from bigdec.core.math.formatting import to_string

        return to_string(self)

    def __repr__(self) -> str:
        return f"DecimalValue('{self}')"


def _digits_to_int(digits: tuple[int, ...]) -> int:
    text = "".join(map(str, digits))
    number = 0
    for start in range(0, len(text), _CHUNK_DIGITS):
        piece = text[start : start + _CHUNK_DIGITS]
        number = number * 10 ** len(piece) + int(piece)
    return number


def _from_float_exact(value: float) -> DecimalValue:
    """Точное значение конечного float: n / 2^k == n × 5^k × 10^-k."""
    numerator, denominator = value.as_integer_ratio()
    scale = denominator.bit_length() - 1
    scaled = DecimalValue.from_int(numerator * 5**scale)
    return DecimalValue.from_parts(scaled.sign, scaled.exponent - scale, scaled.coefficient)


def _exact_operand(value: object) -> Optional[DecimalValue]:
    """Операнд сравнения без потери точности; None для чужих типов."""
    if isinstance(value, DecimalValue):
        return value
    if isinstance(value, int):
        return DecimalValue.from_int(value)
    if isinstance(value, float):
        return _from_float_exact(value)
    return None


def _order(value: DecimalValue, other: object):
    """
    Знак value - other: -1 / 0 / 1.

    None для NaN (любое сравнение ложно), NotImplemented для
    неподдерживаемых типов. Строки разбираются как в compare().
    """
    from bigdec.core.math.arithmetic import compare

    if isinstance(other, str):
        return compare(value, other)
    if isinstance(other, float) and not math.isfinite(other):
        if math.isnan(other):
            return None
        return -1 if other > 0 else 1
    operand = _exact_operand(other)
    if operand is None:
        return NotImplemented
    return compare(value, operand)


def _is_operand(value: object) -> bool:
    # bool исключён: он int, но не число в этой модели
    return isinstance(value, (DecimalValue, str, int, float)) and not isinstance(
        value, bool
    )
