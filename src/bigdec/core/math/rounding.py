"""
Rounding — округление до significant digits / decimal places

Четыре режима (RoundingMode):
- ROUND_DOWN: отбрасывание (к нулю)
- ROUND_HALF_UP: первая отброшенная цифра >= 5 → вверх
- ROUND_HALF_EVEN: > 5, или == 5 и (есть ненулевой хвост или последняя
  сохранённая цифра нечётная) → вверх
- ROUND_UP: любой ненулевой отброшенный хвост → вверх (от нуля)

Флаг more ("точность была отброшена выше по течению") передаётся из
деления: остаток != 0 означает, что отброшенный хвост длиннее видимых
цифр. Без него half-even ошибается на единицу последнего разряда
для частных вида ...5 с ненулевым остатком.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Округление работает только с магнитудой; знак сохраняет вызывающий
2. Перенос может пройти через все цифры: [9,9] → [1,0,0], exponent + 1
3. significant_digits < 1 даёт ноль или 1 × 10^k
4. Результат без хвостовых нулей (padding — забота форматтера)
"""

from typing import Optional, Union

from bigdec.core.domain.context import (
    MAX_DP,
    DecimalContext,
    RoundingMode,
    resolve_context,
)
from bigdec.core.domain.decimal_value import DecimalValue
from bigdec.core.errors import InvalidPrecision, InvalidRoundingMode
from bigdec.core.math.parsing import DecimalLike, parse

# =============================================================================
# ВАЛИДАЦИЯ ПАРАМЕТРОВ
# =============================================================================


def resolve_rounding_mode(
    mode: Union[RoundingMode, int, None], context: Optional[DecimalContext] = None
) -> RoundingMode:
    """
    Режим округления: явный или из контекста.

    Args:
        mode: RoundingMode, его целочисленный код 0-3, или None
        context: Контекст для значения по умолчанию

    Raises:
        InvalidRoundingMode: Неизвестный режим
    """
    if mode is None:
        return resolve_context(context).rounding_mode
    if isinstance(mode, bool) or not isinstance(mode, int):
        raise InvalidRoundingMode(f"Invalid rounding mode: {mode!r}")
    try:
        return RoundingMode(mode)
    except ValueError:
        raise InvalidRoundingMode(f"Invalid rounding mode: {mode!r}") from None


def validate_precision(value: object, min_value: int, max_value: int, name: str) -> int:
    """
    Проверка целочисленного параметра точности.

    Raises:
        InvalidPrecision: Не int или вне [min_value, max_value]
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPrecision(f"Invalid {name}: {value!r} is not an integer")
    if not min_value <= value <= max_value:
        raise InvalidPrecision(
            f"Invalid {name}: {value} not in [{min_value}, {max_value}]"
        )
    return value


# =============================================================================
# ЯДРО ОКРУГЛЕНИЯ
# =============================================================================


def round_coefficient(
    digits: list[int],
    exponent: int,
    significant_digits: int,
    mode: RoundingMode,
    more: bool = False,
) -> tuple[list[int], int]:
    """
    Округление магнитуды до significant_digits цифр.

    Args:
        digits: Цифры магнитуды, старшая первой
        exponent: Степень десяти первой цифры
        significant_digits: Сколько цифр оставить (может быть <= 0)
        mode: Режим округления
        more: Хвост за пределами digits был ненулевым (остаток деления)

    Returns:
        (digits, exponent) нового значения; [0], 0 для нуля

    Examples:
        >>> round_coefficient([1, 2, 5], 0, 2, RoundingMode.ROUND_HALF_EVEN)
        ([1, 2], 0)
        >>> round_coefficient([9, 9, 5], 0, 2, RoundingMode.ROUND_HALF_UP)
        ([1], 1)
        >>> round_coefficient([5], -1, 0, RoundingMode.ROUND_HALF_UP)
        ([1], 0)
    """
    if significant_digits < 1:
        first = digits[0]
        if mode is RoundingMode.ROUND_UP:
            round_up = more or first != 0
        elif significant_digits == 0 and mode is RoundingMode.ROUND_HALF_UP:
            round_up = first >= 5
        elif significant_digits == 0 and mode is RoundingMode.ROUND_HALF_EVEN:
            # Сохранённая цифра неявно 0 (чётная): ровно половина → вниз
            round_up = first > 5 or (first == 5 and (more or any(digits[1:])))
        else:
            round_up = False

        if round_up:
            # 1, 0.1, 0.01 ... на позиции последней сохраняемой цифры
            return [1], exponent - significant_digits + 1
        return [0], 0

    if significant_digits >= len(digits):
        return list(digits), exponent

    discarded = digits[significant_digits]
    if mode is RoundingMode.ROUND_HALF_UP:
        round_up = discarded >= 5
    elif mode is RoundingMode.ROUND_HALF_EVEN:
        round_up = discarded > 5 or (
            discarded == 5
            and (
                more
                or any(digits[significant_digits + 1 :])
                or digits[significant_digits - 1] % 2 == 1
            )
        )
    elif mode is RoundingMode.ROUND_UP:
        round_up = more or any(digits[significant_digits:])
    else:
        round_up = False

    kept = list(digits[:significant_digits])

    if round_up:
        position = significant_digits - 1
        while True:
            kept[position] += 1
            if kept[position] <= 9:
                break
            kept[position] = 0
            if position == 0:
                kept.insert(0, 1)
                exponent += 1
                break
            position -= 1

    while len(kept) > 1 and kept[-1] == 0:
        kept.pop()

    return kept, exponent


# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================


def round_significant(
    value: DecimalLike,
    significant_digits: int,
    mode: Union[RoundingMode, int, None] = None,
    *,
    more: bool = False,
    context: Optional[DecimalContext] = None,
) -> DecimalValue:
    """
    Округление до significant_digits значащих цифр.

    Args:
        value: Исходное значение
        significant_digits: Целое в [0, MAX_DP]; 0 даёт ноль или 1 × 10^(e+1)
        mode: Режим округления (default: context.rounding_mode)
        more: Был ли отброшен ненулевой хвост до вызова
        context: Контекст, по умолчанию ambient

    Raises:
        InvalidPrecision: significant_digits вне диапазона
        InvalidRoundingMode: Неизвестный режим

    Examples:
        >>> round_significant("123.456", 4)
        DecimalValue('123.5')
    """
    validate_precision(significant_digits, 0, MAX_DP, "significant digits")
    rounding_mode = resolve_rounding_mode(mode, context)
    value = parse(value, context=context)

    digits, exponent = round_coefficient(
        list(value.coefficient), value.exponent, significant_digits, rounding_mode, more
    )
    return DecimalValue.from_parts(value.sign, exponent, digits)


def round_decimal_places(
    value: DecimalLike,
    decimal_places: int = 0,
    mode: Union[RoundingMode, int, None] = None,
    *,
    context: Optional[DecimalContext] = None,
) -> DecimalValue:
    """
    Округление до decimal_places знаков после точки.

    Отрицательное decimal_places округляет до кратного 10^-decimal_places:
    round_decimal_places(1234, -2) → 1200.

    Raises:
        InvalidPrecision: decimal_places вне [-MAX_DP, MAX_DP]
        InvalidRoundingMode: Неизвестный режим
    """
    validate_precision(decimal_places, -MAX_DP, MAX_DP, "decimal places")
    rounding_mode = resolve_rounding_mode(mode, context)
    value = parse(value, context=context)

    digits, exponent = round_coefficient(
        list(value.coefficient),
        value.exponent,
        decimal_places + value.exponent + 1,
        rounding_mode,
    )
    return DecimalValue.from_parts(value.sign, exponent, digits)
