"""
Formatting — текстовое представление и конверсия в float

- to_exponential: D[.DDD]e[+-]EXP
- to_fixed: обычная запись, ровно N знаков после точки
- to_precision: N значащих цифр, запись выбирается автоматически
- to_string / to_json: обычная или экспоненциальная по порогам NE / PE
- value_of: как to_string, но запрещён в strict-режиме
- to_number: float через строку, в strict-режиме только без потерь

Знак минус выводится для отрицательных исходных значений, даже если
после округления осталась только нулевая магнитуда:
to_fixed(-0.001, 0) == "-0", но to_fixed(0, 0) == "0".
"""

import math
from typing import Optional, Sequence, Union

from bigdec.core.domain.context import (
    MAX_DP,
    DecimalContext,
    RoundingMode,
    resolve_context,
)
from bigdec.core.errors import ImpreciseConversion, ValueOfDisallowed
from bigdec.core.math.parsing import DecimalLike, parse, parse_string
from bigdec.core.math.rounding import (
    resolve_rounding_mode,
    round_coefficient,
    validate_precision,
)

# =============================================================================
# RENDERING
# =============================================================================


def render(
    digits: Sequence[int], exponent: int, *, exponential: bool, negative: bool = False
) -> str:
    """
    Сборка строки из цифр и exponent.

    digits может содержать хвостовые нули (padding форматтера), они
    выводятся как есть.

    Examples:
        >>> render([1, 2, 3], -2, exponential=False)
        '0.0123'
        >>> render([1, 2, 3], 4, exponential=True, negative=True)
        '-1.23e+4'
        >>> render([5], 2, exponential=False)
        '500'
    """
    text = "".join(str(d) for d in digits)
    length = len(text)

    if exponential:
        text = text[0] + ("." + text[1:] if length > 1 else "")
        text += ("e" if exponent < 0 else "e+") + str(exponent)
    elif exponent < 0:
        text = "0." + "0" * (-exponent - 1) + text
    elif exponent > 0:
        if exponent + 1 > length:
            text += "0" * (exponent + 1 - length)
        elif exponent + 1 < length:
            text = text[: exponent + 1] + "." + text[exponent + 1 :]
    elif length > 1:
        text = text[0] + "." + text[1:]

    return "-" + text if negative else text


def _is_exponential(exponent: int, context: DecimalContext) -> bool:
    return (
        exponent <= context.negative_exponent_threshold
        or exponent >= context.positive_exponent_threshold
    )


# =============================================================================
# FIXED-FORMAT OUTPUT
# =============================================================================


def to_exponential(
    value: DecimalLike,
    decimal_places: Optional[int] = None,
    mode: Union[RoundingMode, int, None] = None,
    *,
    context: Optional[DecimalContext] = None,
) -> str:
    """
    Экспоненциальная запись с decimal_places цифрами после точки.

    Без decimal_places используется собственная точность значения.

    Raises:
        InvalidPrecision: decimal_places вне [0, MAX_DP]
        InvalidRoundingMode: Неизвестный режим

    Examples:
        >>> to_exponential("45.6", 0)
        '5e+1'
        >>> to_exponential("0.00123", 4)
        '1.2300e-3'
    """
    x = parse(value, context=context)
    digits, exponent = list(x.coefficient), x.exponent

    if decimal_places is not None:
        validate_precision(decimal_places, 0, MAX_DP, "decimal places")
        rounding_mode = resolve_rounding_mode(mode, context)
        digits, exponent = round_coefficient(digits, exponent, decimal_places + 1, rounding_mode)
        digits.extend([0] * (decimal_places + 1 - len(digits)))

    return render(digits, exponent, exponential=True, negative=x.is_negative)


def to_fixed(
    value: DecimalLike,
    decimal_places: Optional[int] = None,
    mode: Union[RoundingMode, int, None] = None,
    *,
    context: Optional[DecimalContext] = None,
) -> str:
    """
    Обычная запись (без экспоненты) с ровно decimal_places знаками после точки.

    Raises:
        InvalidPrecision: decimal_places вне [0, MAX_DP]
        InvalidRoundingMode: Неизвестный режим

    Examples:
        >>> to_fixed("1.005", 2)
        '1.01'
        >>> to_fixed("-0.001", 0)
        '-0'
        >>> to_fixed("1e21")
        '1000000000000000000000'
    """
    x = parse(value, context=context)
    digits, exponent = list(x.coefficient), x.exponent

    if decimal_places is not None:
        validate_precision(decimal_places, 0, MAX_DP, "decimal places")
        rounding_mode = resolve_rounding_mode(mode, context)
        digits, exponent = round_coefficient(
            digits, exponent, decimal_places + exponent + 1, rounding_mode
        )
        # exponent мог вырасти при переносе
        digits.extend([0] * (decimal_places + exponent + 1 - len(digits)))

    return render(digits, exponent, exponential=False, negative=x.is_negative)


def to_precision(
    value: DecimalLike,
    significant_digits: Optional[int] = None,
    mode: Union[RoundingMode, int, None] = None,
    *,
    context: Optional[DecimalContext] = None,
) -> str:
    """
    Запись с significant_digits значащими цифрами.

    Экспоненциальная, если significant_digits меньше числа цифр целой
    части, либо exponent вне [NE, PE).

    Raises:
        InvalidPrecision: significant_digits вне [1, MAX_DP]
        InvalidRoundingMode: Неизвестный режим

    Examples:
        >>> to_precision("123.456", 2)
        '1.2e+2'
        >>> to_precision("0.5", 3)
        '0.500'
    """
    ctx = resolve_context(context)
    x = parse(value, context=ctx)
    digits, exponent = list(x.coefficient), x.exponent

    if significant_digits is not None:
        validate_precision(significant_digits, 1, MAX_DP, "precision")
        rounding_mode = resolve_rounding_mode(mode, ctx)
        digits, exponent = round_coefficient(digits, exponent, significant_digits, rounding_mode)
        digits.extend([0] * (significant_digits - len(digits)))

    exponential = (
        significant_digits is not None and significant_digits <= exponent
    ) or _is_exponential(exponent, ctx)
    return render(digits, exponent, exponential=exponential, negative=x.is_negative)


# =============================================================================
# DEFAULT OUTPUT
# =============================================================================


def to_string(value: DecimalLike, *, context: Optional[DecimalContext] = None) -> str:
    """
    Представление по умолчанию.

    Экспоненциальная запись при exponent <= NE или exponent >= PE.

    Examples:
        >>> to_string("0.0000001")
        '1e-7'
        >>> to_string("123.45")
        '123.45'
    """
    ctx = resolve_context(context)
    x = parse(value, context=ctx)
    return render(
        x.coefficient, x.exponent, exponential=_is_exponential(x.exponent, ctx), negative=x.is_negative
    )


def to_json(value: DecimalLike, *, context: Optional[DecimalContext] = None) -> str:
    """JSON-представление: строка to_string (число в JSON потеряло бы точность)."""
    return to_string(value, context=context)


def value_of(value: DecimalLike, *, context: Optional[DecimalContext] = None) -> str:
    """
    Строка для неявного числового приведения.

    Raises:
        ValueOfDisallowed: strict-режим требует явной конверсии
    """
    ctx = resolve_context(context)
    if ctx.strict:
        raise ValueOfDisallowed("valueOf disallowed in strict mode")
    return to_string(value, context=ctx)


def to_number(value: DecimalLike, *, context: Optional[DecimalContext] = None) -> float:
    """
    Конверсия в float через экспоненциальную строку.

    Raises:
        ImpreciseConversion: strict-режим и float не представляет значение точно

    Examples:
        >>> to_number("0.1")
        0.1
    """
    ctx = resolve_context(context)
    x = parse(value, context=ctx)
    number = float(render(x.coefficient, x.exponent, exponential=True, negative=x.is_negative))

    if ctx.strict:
        # Каноническая форма: численное равенство == равенство полей
        if not math.isfinite(number) or parse_string(repr(number)) != x:
            raise ImpreciseConversion(f"Imprecise conversion of {to_string(x, context=ctx)}")
    return number
