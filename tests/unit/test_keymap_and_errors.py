"""
Tests for keymap and error

Checks:
1. Button labels, typed characters and named keys resolve to buffer commands
2. Unknown input is ignored
3. dispatch() drives an ExpressionBuffer
4. Failures map to "Undefined" / "Error" and to a categorised tooltip text
"""

import pytest

from pocketcalc import error as E
from pocketcalc import keymap
from pocketcalc.ExpressionBuffer import ExpressionBuffer

# =============================================================================
# KEYMAP
# =============================================================================


class TestResolve:
    """Tests for keymap.resolve / resolve_key"""

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("7", ("input", "7")),
            (".", ("input", ".")),
            (",", ("input", ".")),
            ("+", ("operator", "+")),
            ("×", ("operator", "*")),
            ("÷", ("operator", "/")),
            ("−", ("operator", "-")),
            ("±", ("negate", None)),
            ("%", ("percentage", None)),
            ("<", ("backspace", None)),
            ("C", ("clear", None)),
            ("=", ("calculate", None)),
        ],
    )
    def test_labels(self, label, expected) -> None:
        assert keymap.resolve(label) == expected

    @pytest.mark.parametrize("label", ["", None, "12", "x", "(", "^"])
    def test_unknown_is_ignored(self, label) -> None:
        assert keymap.resolve(label) is None

    def test_named_keys_win(self) -> None:
        assert keymap.resolve_key("Return", "\r") == ("calculate", None)
        assert keymap.resolve_key("Backspace", "\b") == ("backspace", None)
        assert keymap.resolve_key("Escape") == ("clear", None)

    def test_text_fallback(self) -> None:
        assert keymap.resolve_key(None, "*") == ("operator", "*")
        assert keymap.resolve_key(None, "") is None


class TestDispatch:
    """Tests for keymap.dispatch"""

    def test_full_calculation(self) -> None:
        buffer = ExpressionBuffer()
        display = ""
        for label in ["1", "2", "×", "3", "−", "4", "="]:
            display = keymap.dispatch(buffer, keymap.resolve(label))
        assert display == "32"

    def test_clear_shows_zero(self) -> None:
        buffer = ExpressionBuffer()
        keymap.dispatch(buffer, keymap.resolve("5"))
        assert keymap.dispatch(buffer, keymap.resolve("C")) == "0"
        assert buffer.current_expression() == ""


# =============================================================================
# ERRORS
# =============================================================================


class TestErrors:
    """Tests for error types and display mapping"""

    def test_display_text(self) -> None:
        assert E.display_text(E.DivisionByZero()) == "Undefined"
        assert E.display_text(E.InvalidExpression()) == "Error"
        assert E.display_text(E.CalculatorError("boom")) == "Error"

    def test_default_codes(self) -> None:
        assert E.DivisionByZero().code == "3003"
        assert E.InvalidExpression().code == "3012"

    def test_every_engine_code_has_a_message(self) -> None:
        for code in ("3003", "3004", "3008", "3011", "3012", "3026"):
            assert code in E.ERROR_MESSAGES

    def test_str_contains_code(self) -> None:
        error = E.InvalidExpression("Missing number", code="3012", equation="5+")
        assert str(error) == "[3012] Missing number"
        assert error.equation == "5+"

    def test_describe_names_the_category(self) -> None:
        assert E.describe(E.DivisionByZero()) == "Calculator Error 3003: Division by zero"
        assert E.describe(E.InvalidExpression("Bad", code="5001")) == "Configuration Error 5001: Bad"
        assert E.describe(E.CalculatorError("Odd", code="7000")) == "Unknown Error 7000: Odd"
