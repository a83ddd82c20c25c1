"""
Pocket Calculator: editable expression buffer plus an exact decimal evaluator.

The Qt front-end lives in pocketcalc.UI and is imported on demand only.
"""

from .error import CalculatorError, DivisionByZero, InvalidExpression
from .ExpressionBuffer import ExpressionBuffer
from .MathEngine import Evaluator

__version__ = "1.0.0"

__all__ = [
    "CalculatorError",
    "DivisionByZero",
    "InvalidExpression",
    "ExpressionBuffer",
    "Evaluator",
]
