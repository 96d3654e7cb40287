"""
Errors — таксономия ошибок десятичного движка

Все ошибки детерминированы: это нарушения предусловий (невалидный ввод,
невалидные параметры округления, запреты strict-режима). Ни одна ошибка
не является transient, повтор вызова даст тот же результат.

Каждый класс дополнительно наследует ближайшее builtin-исключение, поэтому
вызывающий код может ловить как DecimalError, так и ValueError/TypeError/
ZeroDivisionError.
"""


class DecimalError(Exception):
    """Базовый класс всех ошибок bigdec."""

    pass


class InvalidNumber(DecimalError, ValueError):
    """Строка не соответствует числовой грамматике."""

    pass


class InvalidValue(DecimalError, TypeError):
    """
    Входное значение недопустимого типа.

    Возникает для float в strict-режиме, для bool и для любых типов,
    кроме str / int / float / DecimalValue.
    """

    pass


class DivisionByZero(DecimalError, ZeroDivisionError):
    """Делитель (или модуль) равен нулю."""

    pass


class NoSquareRoot(DecimalError, ValueError):
    """Квадратный корень из отрицательного значения."""

    pass


class InvalidExponent(DecimalError, ValueError):
    """Показатель степени не целый или вне [-MAX_POWER, MAX_POWER]."""

    pass


class InvalidPrecision(DecimalError, ValueError):
    """Число знаков (decimal places / significant digits) вне допустимого диапазона."""

    pass


class InvalidRoundingMode(DecimalError, ValueError):
    """Неизвестный режим округления."""

    pass


class ImpreciseConversion(DecimalError, ValueError):
    """
    Конверсия в float теряет точность (strict-режим).

    Проверка: строковое представление полученного float должно быть
    численно равно исходному значению.
    """

    pass


class ValueOfDisallowed(DecimalError, TypeError):
    """Неявное приведение к примитиву запрещено в strict-режиме."""

    pass
