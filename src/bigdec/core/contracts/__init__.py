"""
Contract Validation Module

Валидация внешних данных (конфигурация контекста, строковые значения)
по JSON Schema контрактам.
"""

from .validators import (
    ContractValidator,
    DecimalContextValidator,
    DecimalStringValidator,
    SchemaLoader,
    load_decimal_context,
    validate_decimal_context,
    validate_decimal_string,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DecimalContextValidator",
    "DecimalStringValidator",
    # Functions
    "load_decimal_context",
    "validate_decimal_context",
    "validate_decimal_string",
]
