"""
Core math modules для bigdec

Парсинг, округление, точная арифметика и форматирование над DecimalValue.
"""

# Parsing
from bigdec.core.math.parsing import (
    NUMERIC_PATTERN,
    DecimalLike,
    parse,
    parse_string,
)

# Rounding
from bigdec.core.math.rounding import (
    resolve_rounding_mode,
    round_coefficient,
    round_decimal_places,
    round_significant,
    validate_precision,
)

# Formatting
from bigdec.core.math.formatting import (
    render,
    to_exponential,
    to_fixed,
    to_json,
    to_number,
    to_precision,
    to_string,
    value_of,
)

# Arithmetic
from bigdec.core.math.arithmetic import (
    SQRT_GUARD_DIGITS,
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
    power,
    sqrt,
    subtract,
)

__all__ = [
    # Parsing
    "NUMERIC_PATTERN",
    "DecimalLike",
    "parse",
    "parse_string",
    # Rounding
    "resolve_rounding_mode",
    "round_coefficient",
    "round_decimal_places",
    "round_significant",
    "validate_precision",
    # Formatting
    "render",
    "to_exponential",
    "to_fixed",
    "to_json",
    "to_number",
    "to_precision",
    "to_string",
    "value_of",
    # Arithmetic: constants
    "SQRT_GUARD_DIGITS",
    # Arithmetic: comparison
    "compare",
    "equal",
    "greater_or_equal",
    "greater_than",
    "less_or_equal",
    "less_than",
    # Arithmetic: operations
    "absolute_value",
    "add",
    "divide",
    "mod",
    "multiply",
    "negate",
    "power",
    "sqrt",
    "subtract",
]
