"""
Arithmetic — точная арифметика над DecimalValue

Школьные алгоритмы над последовательностями цифр, без float:
- add / subtract: выравнивание по сетке разрядов, перенос / заём справа налево
- multiply: длинное умножение, результат длиной len(a) + len(b)
- divide: длинное деление с подбором цифры 0-9 вычитанием,
  decimal_places + 1 guard-цифра, затем округление с флагом остатка
- mod: a - trunc(a / b) × b
- power: возведение в квадрат; n < 0 → 1 / a^|n| (с округлением)
- sqrt: оценка через math.sqrt + итерации Ньютона на точности DP + 4

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат всегда канонический (DecimalValue.from_parts)
2. Точный ноль всегда положительный (n - n = +0)
3. add / subtract / multiply / power(n >= 0) точны, без округления
4. divide / sqrt / power(n < 0) округляются до context.decimal_places
5. Контекст вызывающего не мутируется: mod и sqrt используют производные
   параметры точности
"""

import logging
import math
from typing import Optional

from bigdec.core.domain.context import (
    MAX_DP,
    MAX_POWER,
    DecimalContext,
    RoundingMode,
    resolve_context,
)
from bigdec.core.domain.decimal_value import DecimalValue, Sign
from bigdec.core.errors import DivisionByZero, InvalidExponent, NoSquareRoot
from bigdec.core.math.formatting import render
from bigdec.core.math.parsing import DecimalLike, parse, parse_string
from bigdec.core.math.rounding import round_coefficient, validate_precision

logger = logging.getLogger(__name__)

# Дополнительные decimal places рабочей точности итераций sqrt
SQRT_GUARD_DIGITS = 4


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def _compare_magnitudes(x: DecimalValue, y: DecimalValue) -> int:
    """Сравнение |x| и |y| для ненулевых значений."""
    if x.exponent != y.exponent:
        return 1 if x.exponent > y.exponent else -1
    # Лексикографическое сравнение кортежей: цифра за цифрой, затем длина
    if x.coefficient == y.coefficient:
        return 0
    return 1 if x.coefficient > y.coefficient else -1


def compare(
    a: DecimalLike, b: DecimalLike, *, context: Optional[DecimalContext] = None
) -> int:
    """
    Сравнение двух значений.

    Returns:
        -1 если a < b, 0 если a == b, 1 если a > b

    Examples:
        >>> compare("1.5", "1.50")
        0
        >>> compare("-2", "-10")
        1
    """
    x = parse(a, context=context)
    y = parse(b, context=context)

    if x.is_zero or y.is_zero:
        if x.is_zero:
            return 0 if y.is_zero else -int(y.sign)
        return int(x.sign)

    if x.sign is not y.sign:
        return int(x.sign)

    result = _compare_magnitudes(x, y)
    return -result if x.is_negative else result


def equal(a: DecimalLike, b: DecimalLike, *, context: Optional[DecimalContext] = None) -> bool:
    return compare(a, b, context=context) == 0


def greater_than(
    a: DecimalLike, b: DecimalLike, *, context: Optional[DecimalContext] = None
) -> bool:
    return compare(a, b, context=context) > 0


def greater_or_equal(
    a: DecimalLike, b: DecimalLike, *, context: Optional[DecimalContext] = None
) -> bool:
    return compare(a, b, context=context) >= 0


def less_than(
    a: DecimalLike, b: DecimalLike, *, context: Optional[DecimalContext] = None
) -> bool:
    return compare(a, b, context=context) < 0


def less_or_equal(
    a: DecimalLike, b: DecimalLike, *, context: Optional[DecimalContext] = None
) -> bool:
    return compare(a, b, context=context) <= 0


# =============================================================================
# ЗНАК
# =============================================================================


def absolute_value(a: DecimalLike, *, context: Optional[DecimalContext] = None) -> DecimalValue:
    x = parse(a, context=context)
    return DecimalValue.from_parts(Sign.POSITIVE, x.exponent, x.coefficient)


def negate(a: DecimalLike, *, context: Optional[DecimalContext] = None) -> DecimalValue:
    """Смена знака; ноль остаётся положительным."""
    x = parse(a, context=context)
    return DecimalValue.from_parts(x.sign.flip(), x.exponent, x.coefficient)


# =============================================================================
# СЛОЖЕНИЕ И ВЫЧИТАНИЕ
# =============================================================================


def _align(
    xc: tuple[int, ...], xe: int, yc: tuple[int, ...], ye: int
) -> tuple[list[int], list[int], int]:
    """
    Приведение двух магнитуд к общей сетке разрядов.

    Операнд с меньшим exponent дополняется нулями слева, затем более
    короткий — нулями справа.

    Returns:
        (x_digits, y_digits, exponent) одинаковой длины
    """
    x_digits, y_digits = list(xc), list(yc)
    if xe > ye:
        y_digits = [0] * (xe - ye) + y_digits
    elif ye > xe:
        x_digits = [0] * (ye - xe) + x_digits

    length = max(len(x_digits), len(y_digits))
    x_digits.extend([0] * (length - len(x_digits)))
    y_digits.extend([0] * (length - len(y_digits)))
    return x_digits, y_digits, max(xe, ye)


def _add_magnitudes(x: DecimalValue, y: DecimalValue) -> tuple[list[int], int]:
    x_digits, y_digits, exponent = _align(x.coefficient, x.exponent, y.coefficient, y.exponent)

    result = [0] * len(x_digits)
    carry = 0
    for i in range(len(x_digits) - 1, -1, -1):
        total = x_digits[i] + y_digits[i] + carry
        result[i] = total % 10
        carry = total // 10

    if carry:
        result.insert(0, carry)
        exponent += 1
    return result, exponent


def _subtract_magnitudes(x: DecimalValue, y: DecimalValue) -> tuple[list[int], int]:
    """|x| - |y| при условии |x| > |y|."""
    x_digits, y_digits, exponent = _align(x.coefficient, x.exponent, y.coefficient, y.exponent)

    result = [0] * len(x_digits)
    borrow = 0
    for i in range(len(x_digits) - 1, -1, -1):
        digit = x_digits[i] - y_digits[i] - borrow
        if digit < 0:
            digit += 10
            borrow = 1
        else:
            borrow = 0
        result[i] = digit

    # Ведущие нули снимет from_parts со сдвигом exponent
    return result, exponent


def add(a: DecimalLike, b: DecimalLike, *, context: Optional[DecimalContext] = None) -> DecimalValue:
    """
    Точная сумма a + b.

    При разных знаках вычитается меньшая магнитуда из большей, знак
    берётся у большей.

    Examples:
        >>> add("1.2", "0.003")
        DecimalValue('1.203')
        >>> add("5", "-5")
        DecimalValue('0')
    """
    x = parse(a, context=context)
    y = parse(b, context=context)

    if y.is_zero:
        return x
    if x.is_zero:
        return y

    if x.sign is y.sign:
        digits, exponent = _add_magnitudes(x, y)
        return DecimalValue.from_parts(x.sign, exponent, digits)

    order = _compare_magnitudes(x, y)
    if order == 0:
        return DecimalValue()
    if order > 0:
        digits, exponent = _subtract_magnitudes(x, y)
        return DecimalValue.from_parts(x.sign, exponent, digits)
    digits, exponent = _subtract_magnitudes(y, x)
    return DecimalValue.from_parts(y.sign, exponent, digits)


def subtract(
    a: DecimalLike, b: DecimalLike, *, context: Optional[DecimalContext] = None
) -> DecimalValue:
    """Точная разность a - b."""
    return add(a, negate(b, context=context), context=context)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def multiply(
    a: DecimalLike, b: DecimalLike, *, context: Optional[DecimalContext] = None
) -> DecimalValue:
    """
    Точное произведение a × b.

    Длинное умножение в массив длины len(a) + len(b). Старший разряд
    массива соответствует exponent a.e + b.e + 1; если он ноль (не было
    финального переноса), from_parts снимает его.

    Examples:
        >>> multiply("-1.5", "4")
        DecimalValue('-6')
    """
    x = parse(a, context=context)
    y = parse(b, context=context)

    if x.is_zero or y.is_zero:
        return DecimalValue()

    sign = Sign.POSITIVE if x.sign is y.sign else Sign.NEGATIVE
    xc, yc = x.coefficient, y.coefficient

    product = [0] * (len(xc) + len(yc))
    for i in range(len(yc) - 1, -1, -1):
        carry = 0
        for j in range(len(xc) - 1, -1, -1):
            total = product[i + j + 1] + yc[i] * xc[j] + carry
            product[i + j + 1] = total % 10
            carry = total // 10
        product[i] += carry

    return DecimalValue.from_parts(sign, x.exponent + y.exponent + 1, product)


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def _long_divide(
    dividend: tuple[int, ...], divisor: tuple[int, ...], significant_digits: int
) -> tuple[list[int], bool]:
    """
    Длинное деление магнитуд.

    Цифры частного генерируются, пока не исчерпаны и делимое, и остаток,
    либо пока не получено significant_digits + 1 цифр (одна guard-цифра).

    Args:
        dividend: Цифры делимого
        divisor: Цифры делителя
        significant_digits: Целевое число значащих цифр (может быть <= 0)

    Returns:
        (quotient_digits, truncated): truncated=True если остаток ненулевой
    """
    divisor_length = len(divisor)
    divisor_digits = list(divisor)
    padded_divisor = [0] + divisor_digits

    remainder = list(dividend[:divisor_length])
    remainder.extend([0] * (divisor_length - len(remainder)))
    next_index = divisor_length

    budget = max(significant_digits, 0)
    quotient: list[int] = []

    while True:
        # Сколько раз делитель помещается в остаток
        digit = 0
        order = 0
        while digit < 10:
            if divisor_length != len(remainder):
                order = 1 if divisor_length > len(remainder) else -1
            elif divisor_digits == remainder:
                order = 0
            else:
                order = 1 if divisor_digits > remainder else -1

            if order >= 0:
                break

            # Остаток не длиннее делителя более чем на одну цифру
            subtrahend = divisor_digits if len(remainder) == divisor_length else padded_divisor
            for i in range(len(remainder) - 1, -1, -1):
                if remainder[i] < subtrahend[i]:
                    k = i - 1
                    while remainder[k] == 0:
                        remainder[k] = 9
                        k -= 1
                    remainder[k] -= 1
                    remainder[i] += 10
                remainder[i] -= subtrahend[i]
            while remainder[0] == 0:
                remainder.pop(0)
            digit += 1

        if order == 0:
            quotient.append(digit + 1)
        else:
            quotient.append(digit)

        # Снос следующей цифры делимого
        if order != 0 and remainder and remainder[0] != 0:
            remainder.append(dividend[next_index] if next_index < len(dividend) else 0)
        else:
            remainder = [dividend[next_index]] if next_index < len(dividend) else []

        has_more = next_index < len(dividend) or bool(remainder)
        next_index += 1
        if not has_more or budget == 0:
            break
        budget -= 1

    return quotient, bool(remainder)


def _divide(
    x: DecimalValue, y: DecimalValue, decimal_places: int, mode: RoundingMode
) -> DecimalValue:
    """Деление с явными параметрами точности, без валидации контекста."""
    if y.is_zero:
        raise DivisionByZero("Division by zero")
    if x.is_zero:
        return DecimalValue()

    sign = Sign.POSITIVE if x.sign is y.sign else Sign.NEGATIVE
    exponent = x.exponent - y.exponent
    precision = decimal_places + exponent + 1

    quotient, truncated = _long_divide(x.coefficient, y.coefficient, precision)
    digit_count = len(quotient)

    # Ведущий ноль возможен максимум один; частное, равное нулю, не трогаем
    if quotient[0] == 0 and digit_count != 1:
        quotient.pop(0)
        exponent -= 1
        precision -= 1

    if len(quotient) > precision:
        quotient, exponent = round_coefficient(quotient, exponent, precision, mode, truncated)

    return DecimalValue.from_parts(sign, exponent, quotient)


def divide(
    a: DecimalLike, b: DecimalLike, *, context: Optional[DecimalContext] = None
) -> DecimalValue:
    """
    Частное a / b, округлённое до context.decimal_places.

    Решение об округлении учитывает ненулевой остаток деления (флаг more),
    а не только видимые guard-цифры.

    Raises:
        DivisionByZero: b == 0
        InvalidPrecision: context.decimal_places вне [0, MAX_DP]

    Examples:
        >>> divide("1", "3", context=DecimalContext(decimal_places=5))
        DecimalValue('0.33333')
        >>> divide("-1", "8")
        DecimalValue('-0.125')
    """
    ctx = resolve_context(context)
    validate_precision(ctx.decimal_places, 0, MAX_DP, "decimal places")
    x = parse(a, context=ctx)
    y = parse(b, context=ctx)
    return _divide(x, y, ctx.decimal_places, ctx.rounding_mode)


def mod(a: DecimalLike, b: DecimalLike, *, context: Optional[DecimalContext] = None) -> DecimalValue:
    """
    Остаток a - trunc(a / b) × b; знак результата совпадает со знаком a.

    Raises:
        DivisionByZero: b == 0

    Examples:
        >>> mod("7", "-3")
        DecimalValue('1')
        >>> mod("-7.5", "2")
        DecimalValue('-1.5')
    """
    ctx = resolve_context(context)
    x = parse(a, context=ctx)
    y = parse(b, context=ctx)

    if y.is_zero:
        raise DivisionByZero("Division by zero")

    if x.is_zero or _compare_magnitudes(y, x) > 0:
        return x

    truncated_quotient = _divide(x, y, 0, RoundingMode.ROUND_DOWN)
    return subtract(x, multiply(truncated_quotient, y))


# =============================================================================
# СТЕПЕНЬ И КОРЕНЬ
# =============================================================================


def power(a: DecimalLike, n: int, *, context: Optional[DecimalContext] = None) -> DecimalValue:
    """
    a в целой степени n.

    Неотрицательные степени точны. Отрицательные вычисляются как
    1 / a^|n| и округляются до context.decimal_places.

    Raises:
        InvalidExponent: n не int или |n| > MAX_POWER
        DivisionByZero: a == 0 и n < 0

    Examples:
        >>> power("2", 10)
        DecimalValue('1024')
        >>> power("2", -2)
        DecimalValue('0.25')
    """
    if isinstance(n, bool) or not isinstance(n, int) or not -MAX_POWER <= n <= MAX_POWER:
        raise InvalidExponent(f"Invalid exponent: {n!r}")

    ctx = resolve_context(context)
    base = parse(a, context=ctx)
    one = DecimalValue(coefficient=(1,))
    result = one

    remaining = abs(n)
    while True:
        if remaining & 1:
            result = multiply(result, base)
        remaining >>= 1
        if not remaining:
            break
        base = multiply(base, base)

    if n < 0:
        return divide(one, result, context=ctx)
    return result


def _round_to_places(value: DecimalValue, decimal_places: int, mode: RoundingMode) -> DecimalValue:
    digits, exponent = round_coefficient(
        list(value.coefficient), value.exponent, decimal_places + value.exponent + 1, mode
    )
    return DecimalValue.from_parts(value.sign, exponent, digits)


def _sqrt_estimate(x: DecimalValue) -> DecimalValue:
    """
    Начальная оценка корня через float.

    Если float-оценка уходит в 0 или inf, корень берётся из коэффициента
    как из целого, а exponent результата восстанавливается отдельно.
    """
    estimate = math.sqrt(float(render(x.coefficient, x.exponent, exponential=True)))
    if estimate != 0 and not math.isinf(estimate):
        return parse_string(repr(estimate))

    digits = "".join(str(d) for d in x.coefficient)
    exponent = x.exponent
    if not (len(digits) + exponent) & 1:
        digits += "0"

    estimate = math.sqrt(float(digits))
    half = (exponent + 1) // 2 if exponent + 1 >= 0 else -((-(exponent + 1)) // 2)
    exponent = half - (1 if exponent < 0 or exponent & 1 else 0)
    logger.debug("sqrt float estimate out of range, rescaled to exponent %d", exponent)

    if math.isinf(estimate):
        return parse_string(f"5e{exponent}")
    mantissa = format(estimate, ".16e").split("e")[0]
    return parse_string(f"{mantissa}e{exponent}")


def sqrt(a: DecimalLike, *, context: Optional[DecimalContext] = None) -> DecimalValue:
    """
    Квадратный корень, округлённый до context.decimal_places.

    Итерации Ньютона x' = (x + a / x) / 2 на точности DP + 4 до совпадения
    двух последовательных приближений на этой точности.

    Raises:
        NoSquareRoot: a < 0

    Examples:
        >>> sqrt("16")
        DecimalValue('4')
        >>> sqrt("2", context=DecimalContext(decimal_places=10))
        DecimalValue('1.4142135624')
    """
    ctx = resolve_context(context)
    validate_precision(ctx.decimal_places, 0, MAX_DP, "decimal places")
    x = parse(a, context=ctx)

    if x.is_zero:
        return x
    if x.is_negative:
        raise NoSquareRoot(f"No square root of negative value {x}")

    half = DecimalValue(exponent=-1, coefficient=(5,))
    working_places = ctx.decimal_places + SQRT_GUARD_DIGITS

    root = _sqrt_estimate(x)
    limit = root.exponent + working_places

    if limit <= 0:
        # Корень меньше 10^-(DP + 3): итерации не добавят ни одной значащей цифры
        logger.debug("sqrt root below working precision, skipping iterations")
    else:
        seen = {root}
        iterations = 0
        while True:
            previous = root
            quotient = _divide(x, previous, working_places, ctx.rounding_mode)
            root = _round_to_places(
                multiply(half, add(previous, quotient)), working_places, ctx.rounding_mode
            )
            iterations += 1
            # Округлённые итерации конечны: повтор означает цикл в последних цифрах
            converged = previous.coefficient[:limit] == root.coefficient[:limit]
            if converged or root.is_zero or root in seen:
                break
            seen.add(root)

        logger.debug("sqrt converged after %d iterations", iterations)

    return _round_to_places(root, ctx.decimal_places, ctx.rounding_mode)
