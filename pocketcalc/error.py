# error.py
"""
Error types raised by the calculation engine.

Only two failure kinds ever reach the user:
    DivisionByZero     -> "Undefined"
    InvalidExpression  -> "Error"
"""


class CalculatorError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

    def __str__(self):
        return f"[{self.code}] {self.message}"


class DivisionByZero(CalculatorError):
    def __init__(self, message="Division by zero", code="3003", equation=None):
        super().__init__(message, code=code, equation=equation)


class InvalidExpression(CalculatorError):
    def __init__(self, message="Invalid expression", code="3012", equation=None):
        super().__init__(message, code=code, equation=equation)


# Fixed strings shown in place of a result
UNDEFINED = "Undefined"
ERROR = "Error"


def display_text(error):
    """Map a failure to the string the display shows for it."""
    if isinstance(error, DivisionByZero):
        return UNDEFINED
    return ERROR


Error_Dictionary = {

    "1" : "Missing Files",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

#Error codes are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number


ERROR_MESSAGES = {
    "3003" : "Division by Zero",
    "3004" : "Invalid Operator: ", # + operator
    "3008" : "More than one '.' in one number.",
    "3011" : "Unexpected Token: ", # + Token
    "3012" : "Invalid expression: ", # + Expression
    "3026" : "Number too big.",

    "4501" : "Not all Settings could be saved: ", # + Error raising setting

    "5001" : "Configuration file could not be read.",

    "9999" : "Unexpected Error: " #+error
}


def describe(error):
    """Tooltip text for a failure, e.g. "Calculator Error 3003: Division by zero"."""
    category = Error_Dictionary.get(error.code[:1], "Unknown Error")
    return f"{category} {error.code}: {error.message}"
