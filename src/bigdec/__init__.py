"""
bigdec — десятичная арифметика произвольной точности

Точное представление (sign, exponent, digits), корректно округлённые
div / sqrt / pow(n < 0), четыре режима округления и форматированный вывод.

    >>> from bigdec import parse, divide, local_context
    >>> with local_context(decimal_places=5):
    ...     divide("1", "3")
    DecimalValue('0.33333')
"""

from bigdec.core.contracts import load_decimal_context
from bigdec.core.domain import (
    MAX_DP,
    MAX_POWER,
    DecimalContext,
    DecimalValue,
    RoundingMode,
    Sign,
    get_context,
    local_context,
    set_context,
)
from bigdec.core.errors import (
    DecimalError,
    DivisionByZero,
    ImpreciseConversion,
    InvalidExponent,
    InvalidNumber,
    InvalidPrecision,
    InvalidRoundingMode,
    InvalidValue,
    NoSquareRoot,
    ValueOfDisallowed,
)
from bigdec.core.math import (
    absolute_value,
    add,
    compare,
    divide,
    equal,
    greater_or_equal,
    greater_than,
    less_or_equal,
    less_than,
    mod,
    multiply,
    negate,
    parse,
    power,
    round_decimal_places,
    round_significant,
    sqrt,
    subtract,
    to_exponential,
    to_fixed,
    to_json,
    to_number,
    to_precision,
    to_string,
    value_of,
)

__version__ = "1.0.0"

__all__ = [
    # Models
    "DecimalContext",
    "DecimalValue",
    "RoundingMode",
    "Sign",
    # Limits
    "MAX_DP",
    "MAX_POWER",
    # Context
    "get_context",
    "load_decimal_context",
    "local_context",
    "set_context",
    # Errors
    "DecimalError",
    "DivisionByZero",
    "ImpreciseConversion",
    "InvalidExponent",
    "InvalidNumber",
    "InvalidPrecision",
    "InvalidRoundingMode",
    "InvalidValue",
    "NoSquareRoot",
    "ValueOfDisallowed",
    # Construction
    "parse",
    # Comparison
    "compare",
    "equal",
    "greater_or_equal",
    "greater_than",
    "less_or_equal",
    "less_than",
    # Arithmetic
    "absolute_value",
    "add",
    "divide",
    "mod",
    "multiply",
    "negate",
    "power",
    "sqrt",
    "subtract",
    # Rounding
    "round_decimal_places",
    "round_significant",
    # Formatting
    "to_exponential",
    "to_fixed",
    "to_json",
    "to_number",
    "to_precision",
    "to_string",
    "value_of",
]
