"""
Тесты для DecimalContext и ambient-контекста

Проверяет:
1. Значения по умолчанию
2. Валидацию при создании и при присваивании (validate_assignment)
3. copy_with
4. get_context / set_context / local_context
5. Изоляцию ambient-контекста между потоками
"""

import threading

import pytest
from pydantic import ValidationError

from bigdec.core.domain.context import (
    DEFAULT_DECIMAL_PLACES,
    DEFAULT_NEGATIVE_EXPONENT,
    DEFAULT_POSITIVE_EXPONENT,
    MAX_DP,
    MAX_EXPONENT_THRESHOLD,
    DecimalContext,
    RoundingMode,
    get_context,
    local_context,
    resolve_context,
    set_context,
)
from bigdec.core.math.arithmetic import divide
from bigdec.core.math.parsing import parse

# =============================================================================
# МОДЕЛЬ
# =============================================================================


class TestDecimalContextModel:
    """Тесты модели DecimalContext"""

    def test_defaults(self) -> None:
        ctx = DecimalContext()
        assert ctx.decimal_places == DEFAULT_DECIMAL_PLACES == 20
        assert ctx.rounding_mode is RoundingMode.ROUND_HALF_UP
        assert ctx.negative_exponent_threshold == DEFAULT_NEGATIVE_EXPONENT == -7
        assert ctx.positive_exponent_threshold == DEFAULT_POSITIVE_EXPONENT == 21
        assert ctx.strict is False

    def test_rounding_mode_codes(self) -> None:
        assert [mode.value for mode in RoundingMode] == [0, 1, 2, 3]

    @pytest.mark.parametrize(
        "field, value",
        [
            ("decimal_places", -1),
            ("decimal_places", MAX_DP + 1),
            ("rounding_mode", 5),
            ("negative_exponent_threshold", 1),
            ("negative_exponent_threshold", -MAX_EXPONENT_THRESHOLD - 1),
            ("positive_exponent_threshold", -1),
            ("positive_exponent_threshold", MAX_EXPONENT_THRESHOLD + 1),
        ],
    )
    def test_invalid_on_create(self, field, value) -> None:
        with pytest.raises(ValidationError):
            DecimalContext(**{field: value})

    @pytest.mark.parametrize(
        "field, value",
        [
            ("decimal_places", -1),
            ("rounding_mode", 4),
            ("negative_exponent_threshold", 3),
            ("positive_exponent_threshold", -3),
        ],
    )
    def test_invalid_on_assignment(self, field, value) -> None:
        """Невалидное присваивание отклоняется, значение не меняется"""
        ctx = DecimalContext()
        before = getattr(ctx, field)
        with pytest.raises(ValidationError):
            setattr(ctx, field, value)
        assert getattr(ctx, field) == before

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DecimalContext(precision=10)

    def test_valid_assignment(self) -> None:
        ctx = DecimalContext()
        ctx.decimal_places = 0
        ctx.rounding_mode = 2
        assert ctx.decimal_places == 0
        assert ctx.rounding_mode is RoundingMode.ROUND_HALF_EVEN

    def test_boundaries_accepted(self) -> None:
        ctx = DecimalContext(
            decimal_places=MAX_DP,
            negative_exponent_threshold=-MAX_EXPONENT_THRESHOLD,
            positive_exponent_threshold=MAX_EXPONENT_THRESHOLD,
        )
        assert ctx.decimal_places == MAX_DP


class TestCopyWith:
    """Тесты copy_with"""

    def test_original_unchanged(self) -> None:
        ctx = DecimalContext()
        copy = ctx.copy_with(decimal_places=3, strict=True)
        assert copy.decimal_places == 3
        assert copy.strict is True
        assert ctx.decimal_places == 20
        assert ctx.strict is False

    def test_invalid_change(self) -> None:
        with pytest.raises(ValidationError):
            DecimalContext().copy_with(decimal_places=-5)


# =============================================================================
# AMBIENT CONTEXT
# =============================================================================


class TestAmbientContext:
    """Тесты get_context / set_context / local_context"""

    def test_get_context_is_stable(self, fresh_context) -> None:
        assert get_context() is fresh_context
        assert get_context() is get_context()

    def test_mutation_affects_operations(self) -> None:
        get_context().decimal_places = 5
        assert divide("1", "3") == parse("0.33333")

    def test_set_context(self) -> None:
        ctx = DecimalContext(decimal_places=2)
        set_context(ctx)
        assert get_context() is ctx
        assert divide("2", "3") == parse("0.67")

    def test_set_context_rejects_other_types(self) -> None:
        with pytest.raises(TypeError, match="DecimalContext"):
            set_context({"decimal_places": 2})

    def test_resolve_context(self) -> None:
        explicit = DecimalContext(decimal_places=1)
        assert resolve_context(explicit) is explicit
        assert resolve_context(None) is get_context()

    def test_explicit_context_overrides_ambient(self) -> None:
        get_context().decimal_places = 1
        assert divide("1", "3", context=DecimalContext(decimal_places=4)) == parse("0.3333")


class TestLocalContext:
    """Тесты local_context"""

    def test_overrides_and_restores(self) -> None:
        outer = get_context()
        with local_context(decimal_places=2) as ctx:
            assert get_context() is ctx
            assert ctx is not outer
            assert divide("1", "3") == parse("0.33")
        assert get_context() is outer
        assert outer.decimal_places == 20

    def test_restores_on_exception(self) -> None:
        outer = get_context()
        with pytest.raises(RuntimeError):
            with local_context(decimal_places=2):
                raise RuntimeError("boom")
        assert get_context() is outer

    def test_nested(self) -> None:
        with local_context(decimal_places=2):
            with local_context(rounding_mode=RoundingMode.ROUND_DOWN) as inner:
                # Наследует decimal_places внешнего блока
                assert inner.decimal_places == 2
                assert divide("2", "3") == parse("0.66")
            assert divide("2", "3") == parse("0.67")

    def test_from_explicit_base(self) -> None:
        base = DecimalContext(decimal_places=1, strict=True)
        with local_context(base, decimal_places=3) as ctx:
            assert ctx.strict is True
            assert ctx.decimal_places == 3
        assert base.decimal_places == 1

    def test_invalid_override(self) -> None:
        outer = get_context()
        with pytest.raises(ValidationError):
            with local_context(decimal_places=-1):
                pass
        assert get_context() is outer


class TestThreadIsolation:
    """Ambient-контекст не разделяется между потоками"""

    def test_thread_gets_own_default(self) -> None:
        get_context().decimal_places = 3
        seen = []

        def worker() -> None:
            ctx = get_context()
            seen.append((ctx.decimal_places, divide("1", "3")))
            ctx.decimal_places = 9

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

        assert seen == [(20, parse("0.33333333333333333333"))]
        assert get_context().decimal_places == 3
