"""
DecimalContext — конфигурация точности и округления

Явная модель конфигурации вместо глобальных переменных:
- decimal_places: точность результатов div / sqrt / pow с отрицательной степенью
- rounding_mode: режим округления по умолчанию
- negative_exponent_threshold / positive_exponent_threshold: границы,
  за которыми to_string переключается на экспоненциальную запись
- strict: запрет float на входе и потерь точности на выходе

Каждая операция принимает опциональный context=..., иначе читается
ambient-контекст текущего потока / asyncio-задачи (ContextVar).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любое присваивание поля валидируется (validate_assignment)
2. Ambient-контекст не разделяется между потоками
3. local_context() всегда восстанавливает предыдущий контекст
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum
from typing import Any, Final, Iterator, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# =============================================================================
# ЛИМИТЫ И ЗНАЧЕНИЯ ПО УМОЛЧАНИЮ
# =============================================================================

# Максимум decimal places (и significant digits) для округления и div
MAX_DP: Final[int] = 1_000_000

# Максимальный модуль показателя степени для power()
MAX_POWER: Final[int] = 1_000_000

# Максимальный модуль порогов экспоненциальной записи
MAX_EXPONENT_THRESHOLD: Final[int] = 1_000_000

DEFAULT_DECIMAL_PLACES: Final[int] = 20

# to_string: экспоненциальная запись при exponent <= NE
DEFAULT_NEGATIVE_EXPONENT: Final[int] = -7

# to_string: экспоненциальная запись при exponent >= PE
DEFAULT_POSITIVE_EXPONENT: Final[int] = 21


# =============================================================================
# ENUMS
# =============================================================================


class RoundingMode(int, Enum):
    """
    Режим округления.

    Целочисленные коды совместимы с внешними конфигурациями (0-3).
    """

    ROUND_DOWN = 0  # к нулю (truncate)
    ROUND_HALF_UP = 1  # к ближайшему, при равенстве от нуля
    ROUND_HALF_EVEN = 2  # к ближайшему, при равенстве к чётному
    ROUND_UP = 3  # от нуля


# =============================================================================
# CONTEXT MODEL
# =============================================================================


class DecimalContext(BaseModel):
    """
    Изменяемая, но всегда валидная конфигурация одного "домена точности".

    Examples:
        >>> ctx = DecimalContext(decimal_places=5)
        >>> ctx.rounding_mode
        <RoundingMode.ROUND_HALF_UP: 1>
        >>> ctx.decimal_places = -1  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ValidationError: ...
    """

    decimal_places: int = Field(
        DEFAULT_DECIMAL_PLACES,
        ge=0,
        le=MAX_DP,
        description="Decimal places для div / sqrt / pow(n < 0)",
    )
    rounding_mode: RoundingMode = Field(
        RoundingMode.ROUND_HALF_UP, description="Режим округления по умолчанию"
    )
    negative_exponent_threshold: int = Field(
        DEFAULT_NEGATIVE_EXPONENT,
        ge=-MAX_EXPONENT_THRESHOLD,
        le=0,
        description="Экспоненциальная запись при exponent <= NE",
    )
    positive_exponent_threshold: int = Field(
        DEFAULT_POSITIVE_EXPONENT,
        ge=0,
        le=MAX_EXPONENT_THRESHOLD,
        description="Экспоненциальная запись при exponent >= PE",
    )
    strict: bool = Field(
        False, description="Запрет float на входе и неточной конверсии в float"
    )

    model_config = {"validate_assignment": True, "extra": "forbid"}

    def copy_with(self, **changes: Any) -> "DecimalContext":
        """
        Валидированная копия с изменёнными полями.

        Raises:
            ValidationError: Если новое значение поля невалидно
        """
        return DecimalContext.model_validate({**self.model_dump(), **changes})


# =============================================================================
# AMBIENT CONTEXT
# =============================================================================

# Без default: каждый поток лениво получает собственный экземпляр
_CURRENT_CONTEXT: ContextVar[DecimalContext] = ContextVar("bigdec_context")


def get_context() -> DecimalContext:
    """
    Ambient-контекст текущего потока.

    Контекст не общий для процесса: каждый поток при первом обращении
    получает свой DecimalContext() со значениями по умолчанию, и
    настройки, сделанные в одном потоке (get_context().decimal_places = 3),
    в других потоках не видны. Для рабочих потоков контекст передаётся
    явно (context=...) или через set_context() внутри потока.
    asyncio-задача наследует контекст создавшего её кода.
    """
    try:
        return _CURRENT_CONTEXT.get()
    except LookupError:
        context = DecimalContext()
        _CURRENT_CONTEXT.set(context)
        return context


def set_context(context: DecimalContext) -> None:
    """Установка ambient-контекста для текущего потока / задачи."""
    if not isinstance(context, DecimalContext):
        raise TypeError(f"context must be DecimalContext, got {type(context).__name__}")
    _CURRENT_CONTEXT.set(context)


def resolve_context(context: Optional[DecimalContext] = None) -> DecimalContext:
    """Явный контекст, если передан, иначе ambient."""
    if context is None:
        return get_context()
    return context


@contextmanager
def local_context(
    context: Optional[DecimalContext] = None, **overrides: Any
) -> Iterator[DecimalContext]:
    """
    Временный контекст: копия (context или ambient) с overrides.

    Предыдущий ambient-контекст восстанавливается при выходе, в том числе
    при исключении.

    Examples:
        >>> with local_context(decimal_places=2) as ctx:
        ...     ctx.decimal_places
        2
    """
    base = resolve_context(context)
    scoped = base.copy_with(**overrides)
    token = _CURRENT_CONTEXT.set(scoped)
    logger.debug("Entering local decimal context: %s", overrides)
    try:
        yield scoped
    finally:
        _CURRENT_CONTEXT.reset(token)
