"""
Domain models для bigdec

Immutable модель значения и изменяемая (валидируемая) модель контекста.
"""

from .context import (
    DEFAULT_DECIMAL_PLACES,
    DEFAULT_NEGATIVE_EXPONENT,
    DEFAULT_POSITIVE_EXPONENT,
    MAX_DP,
    MAX_EXPONENT_THRESHOLD,
    MAX_POWER,
    DecimalContext,
    RoundingMode,
    get_context,
    local_context,
    resolve_context,
    set_context,
)
from .decimal_value import DecimalValue, Sign

__all__ = [
    # Constants
    "DEFAULT_DECIMAL_PLACES",
    "DEFAULT_NEGATIVE_EXPONENT",
    "DEFAULT_POSITIVE_EXPONENT",
    "MAX_DP",
    "MAX_EXPONENT_THRESHOLD",
    "MAX_POWER",
    # Enums
    "RoundingMode",
    "Sign",
    # Models
    "DecimalContext",
    "DecimalValue",
    # Ambient context
    "get_context",
    "local_context",
    "resolve_context",
    "set_context",
]
