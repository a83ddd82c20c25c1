# MathEngine.py
"""
Evaluation engine for the Pocket Calculator.

Pipeline
--------
1) Tokenizer: splits a finished expression ("12.5*3-4") into literals and operators.
   A '-' at the start or right after an operator belongs to the literal.
2) Reduction: two stacks (operands / operators). Before an operator is pushed, every
   stacked operator of higher-or-equal precedence is applied, which gives
   '*' and '/' priority and keeps equal precedence left-to-right.
3) Arithmetic: every single step runs through one decimal.Context
   (34 significant digits, ROUND_HALF_UP by default).
4) Formatter: the result is rounded to a fixed number of fractional digits
   and rendered without trailing zeros (see Formatter.py).
"""

import decimal
import logging
from decimal import Decimal, Context, ROUND_HALF_UP

from . import error as E
from . import Formatter
from . import config_manager

logger = logging.getLogger(__name__)

# Minimum precision guaranteed for every intermediate step
PRECISION = 34

# Fewest fractional digits a result may be cut to
MIN_DECIMAL_PLACES = 2

# Operator -> precedence
PRECEDENCE = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
}


# -----------------------------
# Utilities / small helpers
# -----------------------------

def is_operator(char):
    """Return True if the character is one of the four binary operators."""
    return char in PRECEDENCE


def make_context(precision=PRECISION):
    """Arithmetic context used for every step. Precision below 34 is raised to 34."""
    return Context(
        prec=max(int(precision), PRECISION),
        rounding=ROUND_HALF_UP,
        traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
    )


def apply_operator(operator, left, right, context):
    """Compute `left <operator> right` in `context`.

    Raises E.DivisionByZero when dividing by an exact zero.
    """
    if operator == "+":
        return context.add(left, right)
    elif operator == "-":
        return context.subtract(left, right)
    elif operator == "*":
        return context.multiply(left, right)
    elif operator == "/":
        if right.is_zero():
            raise E.DivisionByZero()
        return context.divide(left, right)
    else:
        raise E.InvalidExpression(f"Unknown operator: {operator}", code="3004")


# -----------------------------
# Tokenizer
# -----------------------------

def tokenize(expression):
    """Split an expression into a flat list of literal strings and operator characters.

    Literals are kept as text; parse_literal turns them into Decimals.
    """
    tokens = []
    b = 0

    while b < len(expression):
        current_char = expression[b]

        # --- Whitespace (ignored) ---
        if current_char.isspace():
            b += 1
            continue

        # --- Literal, with an optional sign folded in ---
        starts_signed = current_char == "-" and (b == 0 or is_operator(expression[b - 1]))
        if current_char.isdigit() or current_char == "." or starts_signed:
            str_number = ""
            if starts_signed:
                str_number = current_char
                b += 1

            while b < len(expression) and (expression[b].isdigit() or expression[b] == "."):
                str_number += expression[b]
                b += 1

            if str_number == "-":
                raise E.InvalidExpression("Missing number after sign.", code="3012")
            tokens.append(str_number)
            continue

        # --- Operators ---
        if is_operator(current_char):
            tokens.append(current_char)
            b += 1
            continue

        raise E.InvalidExpression(f"Unexpected token: {current_char!r}", code="3011")

    return tokens


def parse_literal(literal):
    """Turn a literal token into an exact Decimal."""
    if literal.count(".") > 1:
        raise E.InvalidExpression(f"Double comma sign in {literal!r}", code="3008")
    try:
        return Decimal(literal)
    except decimal.InvalidOperation:
        raise E.InvalidExpression(f"Not a number: {literal!r}", code="3012")


# -----------------------------
# Evaluator
# -----------------------------

class Evaluator:
    """Reduces a finished expression string to a Decimal.

    The evaluator holds no state between calls apart from its configuration.
    """

    def __init__(self, precision=PRECISION, decimal_places=Formatter.DEFAULT_DECIMAL_PLACES):
        self.context = make_context(precision)
        self.decimal_places = max(int(decimal_places), MIN_DECIMAL_PLACES)

    @classmethod
    def from_settings(cls):
        """Build an evaluator from config.json ('precision', 'decimal_places').

        Values below their minimum are raised to it; unreadable values fall back to the defaults.
        """
        settings = config_manager.load_setting_value("all")
        try:
            return cls(
                precision=settings.get("precision", PRECISION),
                decimal_places=settings.get("decimal_places", Formatter.DEFAULT_DECIMAL_PLACES),
            )
        except (TypeError, ValueError) as e:
            logger.warning("Error 5001: %s Using defaults (%s)", E.ERROR_MESSAGES["5001"], e)
            return cls()

    def evaluate(self, expression):
        """Evaluate `expression` and return the exact Decimal result.

        Raises:
            E.DivisionByZero: right operand of '/' is exactly zero
            E.InvalidExpression: anything malformed (underflow, bad literal, leftovers)
        """
        try:
            ergebnis = self._reduce(expression)
        except E.CalculatorError as e:
            e.equation = expression
            raise e
        except decimal.Overflow:
            raise E.InvalidExpression("Number too large (Arithmetic overflow).", code="3026", equation=expression)
        except decimal.DecimalException as e:
            raise E.InvalidExpression(f"Arithmetic failure: {e!r}", code="3012", equation=expression)

        logger.debug("evaluate(%r) -> %s", expression, ergebnis)
        return ergebnis

    def calculate(self, expression):
        """Evaluate and render the canonical result string (rounded, trailing zeros stripped)."""
        return Formatter.format_result(self.evaluate(expression), self.decimal_places)

    def _reduce(self, expression):
        values = []
        operators = []

        for token in tokenize(expression):
            if is_operator(token):
                # Apply everything that binds at least as tight as the new operator
                while operators and PRECEDENCE[operators[-1]] >= PRECEDENCE[token]:
                    self._apply(values, operators.pop())
                operators.append(token)
            else:
                values.append(parse_literal(token))

        while operators:
            self._apply(values, operators.pop())

        if len(values) != 1:
            raise E.InvalidExpression(f"Expected one result, found {len(values)} values", code="3012")
        return values[0]

    def _apply(self, values, operator):
        """Pop right and left operand, apply `operator`, push the result."""
        if len(values) < 2:
            raise E.InvalidExpression(f"Missing number for '{operator}'", code="3012")
        right = values.pop()
        left = values.pop()
        values.append(apply_operator(operator, left, right, self.context))


def evaluate(expression, precision=PRECISION):
    """Module level shortcut: evaluate with a fresh default evaluator."""
    return Evaluator(precision=precision).evaluate(expression)


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    print("Enter the problem: ")
    problem = input()
    try:
        print(Evaluator.from_settings().calculate(problem))
    except E.CalculatorError as e:
        print(f"{E.display_text(e)} ({e})")


if __name__ == "__main__":
    # Allow running this module directly for quick CLI tests:
    #   python -m pocketcalc.MathEngine
    test_main()
