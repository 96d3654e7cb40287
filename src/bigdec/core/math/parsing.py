"""
Parsing — нормализация внешнего ввода в DecimalValue

Принимаются:
- str по грамматике  -?(digits[.digits*] | .digits)(e[+-]digits)?
- int (точно, разрешён и в strict-режиме)
- float через строковое представление (запрещён в strict-режиме)
- DecimalValue (структурная копия)

Всё остальное отклоняется с InvalidValue, некорректные строки — с InvalidNumber.
"""

import re
from typing import Final, Optional, Union

from bigdec.core.domain.context import DecimalContext, resolve_context
from bigdec.core.domain.decimal_value import DecimalValue, Sign
from bigdec.core.errors import InvalidNumber, InvalidValue

DecimalLike = Union[DecimalValue, str, int, float]

# [0-9] вместо \d: \d в Python совпадает с любыми Unicode-цифрами
NUMERIC_PATTERN: Final[re.Pattern] = re.compile(
    r"-?([0-9]+(\.[0-9]*)?|\.[0-9]+)(e[+-]?[0-9]+)?", re.IGNORECASE
)


def parse(value: DecimalLike, *, context: Optional[DecimalContext] = None) -> DecimalValue:
    """
    Конверсия str / int / float / DecimalValue в DecimalValue.

    Args:
        value: Исходное значение
        context: Контекст (strict-режим), по умолчанию ambient

    Returns:
        Новый DecimalValue в канонической форме

    Raises:
        InvalidNumber: Строка не соответствует грамматике (включая nan/inf)
        InvalidValue: float в strict-режиме, bool или неподдерживаемый тип

    Examples:
        >>> parse("-0.0120e2")
        DecimalValue('-1.2')
        >>> parse(-0.0)
        DecimalValue('0')
    """
    if isinstance(value, DecimalValue):
        return value.model_copy()

    if isinstance(value, bool):
        raise InvalidValue(f"Invalid value: {value!r}")

    if isinstance(value, int):
        return DecimalValue.from_int(value)

    if isinstance(value, float):
        if resolve_context(context).strict:
            raise InvalidValue(f"Invalid value: float {value!r} rejected in strict mode")
        # repr: кратчайшая строка, дающая тот же float; "-0.0" нормализуется в +0
        return parse_string(repr(value))

    if isinstance(value, str):
        return parse_string(value)

    raise InvalidValue(f"Invalid value: unsupported type {type(value).__name__}")


def parse_string(text: str) -> DecimalValue:
    """
    Разбор строки в каноническую форму.

    exponent = (позиция точки или длина целой части) + явная экспонента - 1,
    затем сдвиг на число ведущих нулей.
    """
    if not NUMERIC_PATTERN.fullmatch(text):
        raise InvalidNumber(f"Invalid number: {text!r}")

    sign = Sign.POSITIVE
    if text.startswith("-"):
        sign = Sign.NEGATIVE
        text = text[1:]

    mantissa, _, explicit = text.lower().partition("e")
    integer_part, _, fraction_part = mantissa.partition(".")

    digits = [int(ch) for ch in integer_part + fraction_part]
    try:
        shift = int(explicit) if explicit else 0
    except ValueError:
        # Длиннее sys.get_int_max_str_digits(): такой порядок не представим
        raise InvalidNumber(f"Invalid number: exponent of {len(explicit)} digits") from None
    exponent = len(integer_part) + shift - 1

    return DecimalValue.from_parts(sign, exponent, digits)
