"""
Tests for MathEngine (Evaluator)

Checks:
1. Tokenizer: literals, signs folded into literals, operators
2. Precedence and left-to-right evaluation
3. Decimal context: 34 digits, ROUND_HALF_UP at every step
4. Division by zero vs. malformed input
5. Result rendering (10 decimal places, trailing zeros stripped)
"""

from decimal import Decimal

import pytest

from pocketcalc import error as E
from pocketcalc.MathEngine import (
    PRECISION,
    Evaluator,
    apply_operator,
    evaluate,
    make_context,
    parse_literal,
    tokenize,
)

# =============================================================================
# TOKENIZER
# =============================================================================


class TestTokenize:
    """Tests for tokenize"""

    def test_literals_and_operators(self) -> None:
        """Literals stay text, operators are single characters"""
        assert tokenize("12.5*3-4") == ["12.5", "*", "3", "-", "4"]

    def test_leading_sign_is_part_of_literal(self) -> None:
        """A '-' at position 0 belongs to the first literal"""
        assert tokenize("-3*-2") == ["-3", "*", "-2"]

    def test_sign_after_operator_is_part_of_literal(self) -> None:
        """A '-' directly after an operator belongs to the literal"""
        assert tokenize("12+-5") == ["12", "+", "-5"]
        assert tokenize("12--5") == ["12", "-", "-5"]

    def test_whitespace_is_skipped(self) -> None:
        assert tokenize(" 2 + 3 ") == ["2", "+", "3"]

    def test_unexpected_character(self) -> None:
        """Anything outside digits, '.', operators is rejected"""
        with pytest.raises(E.InvalidExpression) as exc_info:
            tokenize("5a")
        assert exc_info.value.code == "3011"


class TestParseLiteral:
    """Tests for parse_literal"""

    def test_trailing_dot_is_valid(self) -> None:
        assert parse_literal("5.") == Decimal("5")

    def test_leading_dot_is_valid(self) -> None:
        assert parse_literal(".5") == Decimal("0.5")

    def test_second_dot_rejected(self) -> None:
        with pytest.raises(E.InvalidExpression) as exc_info:
            parse_literal("1.2.3")
        assert exc_info.value.code == "3008"

    def test_bare_sign_rejected(self) -> None:
        with pytest.raises(E.InvalidExpression):
            parse_literal("-")


# =============================================================================
# ARITHMETIC
# =============================================================================


class TestApplyOperator:
    """Tests for apply_operator"""

    def test_four_operations(self) -> None:
        context = make_context()
        assert apply_operator("+", Decimal(2), Decimal(3), context) == Decimal(5)
        assert apply_operator("-", Decimal(2), Decimal(3), context) == Decimal(-1)
        assert apply_operator("*", Decimal(2), Decimal(3), context) == Decimal(6)
        assert apply_operator("/", Decimal(3), Decimal(2), context) == Decimal("1.5")

    def test_division_by_exact_zero(self) -> None:
        """0, 0.0 and -0 all count as zero"""
        context = make_context()
        for zero in ("0", "0.0", "-0"):
            with pytest.raises(E.DivisionByZero):
                apply_operator("/", Decimal(1), Decimal(zero), context)

    def test_unknown_operator(self) -> None:
        with pytest.raises(E.InvalidExpression) as exc_info:
            apply_operator("^", Decimal(2), Decimal(3), make_context())
        assert exc_info.value.code == "3004"


class TestContext:
    """Tests for the arithmetic context"""

    def test_precision_never_below_34(self) -> None:
        assert make_context(10).prec == PRECISION
        assert make_context(50).prec == 50

    def test_every_step_is_rounded(self) -> None:
        """A 37 digit product is rounded to 34 digits"""
        result = evaluate("1234567890123456789012345678901234567*1")
        assert result == Decimal("1.234567890123456789012345678901235E+36")

    def test_round_half_up(self) -> None:
        """An exact tie rounds away from zero, not to even"""
        tie = "1" + "0" * 33 + ".5"
        assert evaluate(tie + "+0") == Decimal("1" + "0" * 32 + "1")

    def test_lone_literal_is_exact(self) -> None:
        """No operation, no rounding"""
        literal = "1234567890123456789012345678901234567"
        assert evaluate(literal) == Decimal(literal)

    def test_intermediate_results_keep_34_digits(self) -> None:
        assert evaluate("1/3*3") == Decimal("0." + "9" * 34)


# =============================================================================
# EVALUATOR
# =============================================================================


class TestEvaluate:
    """Tests for Evaluator.evaluate"""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("2+3*4", "14"),
            ("10-2-3", "5"),
            ("8/4/2", "1"),
            ("2*3+4*5", "26"),
            ("100-10*2/4", "95"),
            ("12+-5", "7"),
            ("12--5", "17"),
            ("-5+3", "-2"),
            ("-3*-2", "6"),
            ("0.1+0.2", "0.3"),
            ("5.", "5"),
        ],
    )
    def test_precedence_and_associativity(self, expression, expected) -> None:
        assert evaluate(expression) == Decimal(expected)

    def test_division_by_zero(self) -> None:
        """Division by zero carries the expression it was raised for"""
        with pytest.raises(E.DivisionByZero) as exc_info:
            Evaluator().evaluate("5/0")
        assert exc_info.value.code == "3003"
        assert exc_info.value.equation == "5/0"

    def test_zero_divided_by_zero(self) -> None:
        with pytest.raises(E.DivisionByZero):
            evaluate("0/0")

    def test_division_by_zero_after_reduction(self) -> None:
        """The right operand is checked after it was computed"""
        with pytest.raises(E.DivisionByZero):
            evaluate("1/0*5")

    @pytest.mark.parametrize("expression", ["", "5+", "+5", "*", "5 5", "-"])
    def test_malformed_expressions(self, expression) -> None:
        with pytest.raises(E.InvalidExpression) as exc_info:
            evaluate(expression)
        assert exc_info.value.equation == expression

    def test_failures_are_distinct(self) -> None:
        """DivisionByZero is not an InvalidExpression"""
        assert not issubclass(E.DivisionByZero, E.InvalidExpression)
        assert not issubclass(E.InvalidExpression, E.DivisionByZero)


class TestCalculate:
    """Tests for Evaluator.calculate (rendered result)"""

    def test_one_third(self) -> None:
        assert Evaluator().calculate("1/3") == "0.3333333333"

    def test_two_thirds_rounds_half_up(self) -> None:
        assert Evaluator().calculate("2/3") == "0.6666666667"

    def test_integer_result_has_no_dot(self) -> None:
        assert Evaluator().calculate("1.5*2") == "3"

    def test_rounding_hides_representation_error(self) -> None:
        assert Evaluator().calculate("1/3*3") == "1"

    def test_large_result_is_plain(self) -> None:
        """No exponent notation"""
        assert Evaluator().calculate("1000000*1000000*1000000") == "1000000000000000000"

    def test_custom_decimal_places(self) -> None:
        assert Evaluator(decimal_places=2).calculate("2/3") == "0.67"

    def test_decimal_places_floor(self) -> None:
        assert Evaluator(decimal_places=0).calculate("1/3") == "0.33"

    def test_negative_result(self) -> None:
        assert Evaluator().calculate("1-1.25") == "-0.25"
