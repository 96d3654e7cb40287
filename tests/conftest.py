"""Общие фикстуры: изоляция ambient-контекста между тестами."""

import pytest

from bigdec.core.domain.context import DecimalContext, set_context


@pytest.fixture(autouse=True)
def fresh_context():
    """Каждый тест начинает с контекста по умолчанию."""
    context = DecimalContext()
    set_context(context)
    yield context
    set_context(DecimalContext())
