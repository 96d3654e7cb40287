"""
JSON Schema Contract Validators

Валидация данных, приходящих извне процесса, по формальным JSON Schema
контрактам (Draft 2020-12):
- decimal_context.json: конфигурация DecimalContext (из JSON / TOML / env)
- decimal_string.json: строковое представление значения (to_json)

Схемы поставляются как package data рядом с этим модулем.
"""

import json
import logging
from pathlib import Path
from typing import Any, ClassVar, Dict, Iterator, Mapping, Optional

import jsonschema
from jsonschema import Draft202012Validator

from bigdec.core.domain.context import DecimalContext, RoundingMode

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Схемы из каталога (по умолчанию SCHEMA_DIR), с проверкой и кэшем."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self.schema_dir = SCHEMA_DIR if schema_dir is None else schema_dir
        if not self.schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self.schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: Нет файла <name>.json
            ValueError: Файл не проходит meta-validation
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        path = self.schema_dir / f"{name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        logger.debug("Loaded schema %s from %s", name, path)
        self._cache[name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор одного контракта.

    Подклассы задают schema_name; базовый класс можно создать и с явным
    именем схемы и загрузчиком.
    """

    schema_name: ClassVar[str] = ""

    def __init__(self, schema_name: Optional[str] = None, loader: Optional[SchemaLoader] = None):
        name = schema_name or self.schema_name
        if not name:
            raise ValueError("schema_name is required")
        self.schema = (loader or _SCHEMA_LOADER).load_schema(name)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """Raises jsonschema.ValidationError на первом нарушении."""
        self._validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self._validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[jsonschema.ValidationError]:
        return self._validator.iter_errors(data)


class DecimalContextValidator(ContractValidator):
    schema_name = "decimal_context"


class DecimalStringValidator(ContractValidator):
    schema_name = "decimal_string"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_decimal_context(data: Mapping[str, Any]) -> None:
    DecimalContextValidator().validate(data)


def validate_decimal_string(data: Any) -> None:
    DecimalStringValidator().validate(data)


def load_decimal_context(data: Mapping[str, Any]) -> DecimalContext:
    """
    DecimalContext из внешней конфигурации.

    Сначала проверяется контракт, затем строится модель. rounding_mode
    допускается как код (0-3) или имя ("ROUND_HALF_EVEN").

    Args:
        data: Распарсенный JSON / TOML объект

    Returns:
        Новый DecimalContext; отсутствующие поля берут значения по умолчанию

    Raises:
        ValidationError: Если данные не соответствуют контракту

    Examples:
        >>> ctx = load_decimal_context({"decimal_places": 4, "rounding_mode": "ROUND_DOWN"})
        >>> ctx.rounding_mode
        <RoundingMode.ROUND_DOWN: 0>
    """
    validate_decimal_context(data)

    values = dict(data)
    if isinstance(values.get("rounding_mode"), str):
        values["rounding_mode"] = RoundingMode[values["rounding_mode"]]

    context = DecimalContext.model_validate(values)
    logger.debug("Loaded decimal context from mapping: %s", context)
    return context
