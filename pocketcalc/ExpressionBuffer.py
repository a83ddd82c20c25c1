# ExpressionBuffer.py
"""
Editable expression buffer behind the calculator display.

The buffer is a list of single characters ("12.5*3-4" -> ['1','2','.','5','*',...]).
Every command edits it in place and returns the text to display.

Invariants kept after every command
-----------------------------------
- at most one '.' per literal
- never two operators in a row, except a sign that belongs to a literal ("12+-5")
- a leading '-' only on an otherwise empty buffer
- '.' never starts a literal, a '0' is inserted in front of it

After a successful calculate() the buffer holds the result and `result_mode` is set:
a digit or '.' then starts a fresh expression, an operator continues from the result.
"""

import decimal
import logging
from decimal import Decimal, Context

from . import error as E
from . import Formatter
from .MathEngine import Evaluator, is_operator

logger = logging.getLogger(__name__)


# -----------------------------
# Boundary helpers
# -----------------------------

def find_last_literal(chars):
    """Return (start, end) of the last literal, sign included.

    end is always len(chars). start == end when the buffer ends in an operator.
    A '-' counts as a sign when it opens the buffer or follows another operator.
    """
    end = len(chars)
    start = end
    while start > 0 and (chars[start - 1].isdigit() or chars[start - 1] == "."):
        start -= 1

    if start > 0 and chars[start - 1] == "-" and (start == 1 or is_operator(chars[start - 2])):
        start -= 1
    return start, end


def ends_with_operator(chars):
    """True if the buffer ends in a binary operator or a dangling sign."""
    return bool(chars) and is_operator(chars[-1])


class ExpressionBuffer:
    """One calculator session: the expression being typed plus the ResultMode flag."""

    def __init__(self, evaluator=None):
        self.evaluator = evaluator or Evaluator()
        self._chars = []
        self.result_mode = False
        self.last_error = None

    def __repr__(self):
        return f"ExpressionBuffer({self.current_expression()!r}, result_mode={self.result_mode})"

    # --- Accessors ---

    def current_expression(self):
        return "".join(self._chars)

    def _display(self):
        return self.current_expression() or "0"

    def _is_lone_sign(self):
        return self._chars == ["-"]

    # --- Edit commands ---

    def input(self, token):
        """Append a digit, or a decimal point following the one-'.'-per-literal rule."""
        if self.result_mode:
            self.clear()

        if token == ".":
            self._add_decimal_point()
        else:
            self._chars.append(token)

        logger.debug("input(%r) -> %r", token, self.current_expression())
        return self.current_expression()

    def operator(self, op):
        """Append op, or overwrite a trailing operator / decimal point with it."""
        self.result_mode = False

        if not self._chars or self._is_lone_sign():
            # Only a sign can open an expression
            if op == "-":
                self._chars = ["-"]
            return self.current_expression()

        if ends_with_operator(self._chars) or self._chars[-1] == ".":
            self._drop_trailing_operator()

        self._chars.append(op)
        logger.debug("operator(%r) -> %r", op, self.current_expression())
        return self.current_expression()

    def backspace(self):
        """Remove the last character. An empty buffer shows "0"."""
        self.result_mode = False
        if self._chars:
            self._chars.pop()
        return self._display()

    def negate(self):
        """Flip the sign of the last literal."""
        return self._replace_last_literal(lambda value: value.copy_negate())

    def percentage(self):
        """Divide the last literal by 100 (exact)."""
        def to_percent(value):
            exact = Context(prec=len(value.as_tuple().digits) + 1)
            return value.scaleb(-2, context=exact)

        return self._replace_last_literal(to_percent)

    def clear(self):
        self._chars = []
        self.result_mode = False

    # --- Evaluation ---

    def calculate(self):
        """Evaluate the buffer and replace it with the result.

        Returns the result text, or "Undefined"/"Error" after resetting the buffer.
        Calling it again in result mode returns the result unchanged.
        """
        if self.result_mode or not self._chars:
            return self.current_expression()

        if ends_with_operator(self._chars):
            self._drop_trailing_operator()

        expression = self.current_expression()
        try:
            ergebnis = self.evaluator.calculate(expression)

        except E.CalculatorError as e:
            logger.warning("calculate(%r) failed: %s", expression, e)
            self.last_error = e
            self.clear()
            return E.display_text(e)

        self._chars = list(ergebnis)
        self.result_mode = True
        self.last_error = None
        logger.debug("calculate(%r) -> %r", expression, ergebnis)
        return ergebnis

    # --- Internals ---

    def _add_decimal_point(self):
        start, end = find_last_literal(self._chars)
        literal = self._chars[start:end]

        if "." in literal:
            return

        if not any(char.isdigit() for char in literal):
            self._chars.append("0")
        self._chars.append(".")

    def _drop_trailing_operator(self):
        """Remove a trailing operator or '.', plus a dangling sign left in front of it."""
        self._chars.pop()
        if len(self._chars) > 1 and is_operator(self._chars[-1]):
            self._chars.pop()

    def _replace_last_literal(self, transform):
        if not self._chars:
            return "0"

        start, end = find_last_literal(self._chars)
        literal = "".join(self._chars[start:end])

        try:
            value = Decimal(literal)
        except decimal.InvalidOperation:
            # Empty literal, "." or a bare sign
            return self.current_expression()

        self._chars[start:end] = list(Formatter.plain_string(transform(value)))
        logger.debug("replaced %r -> %r", literal, self.current_expression())
        return self.current_expression()
