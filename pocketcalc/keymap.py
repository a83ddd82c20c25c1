# keymap.py
"""
Maps raw UI events (button labels, typed characters, named keys) to buffer commands.

Everything that is not in the tables below is ignored, so the ExpressionBuffer only
ever receives the nine accepted tokens.
"""

# Display symbols -> engine operators
SYMBOLS = {
    "×": "*",
    "÷": "/",
    "−": "-",
}

DIGITS = "0123456789"

# Button label -> (command, argument)
BUTTON_COMMANDS = {
    "<": ("backspace", None),
    "C": ("clear", None),
    "%": ("percentage", None),
    "±": ("negate", None),
    "=": ("calculate", None),
    ".": ("input", "."),
}

# Named keys (Qt key names without the "Key_" prefix) -> (command, argument)
KEY_COMMANDS = {
    "Return": ("calculate", None),
    "Enter": ("calculate", None),
    "Backspace": ("backspace", None),
    "Escape": ("clear", None),
    "Delete": ("clear", None),
}

# Typed characters that are not button labels
TEXT_COMMANDS = {
    ",": ("input", "."),
    "n": ("negate", None),
    "c": ("clear", None),
}


def resolve(label):
    """Return (command, argument) for a button label or typed character, or None."""
    if not label:
        return None

    label = SYMBOLS.get(label, label)

    if label in DIGITS and len(label) == 1:
        return ("input", label)
    if label in ("+", "-", "*", "/"):
        return ("operator", label)
    if label in BUTTON_COMMANDS:
        return BUTTON_COMMANDS[label]
    return TEXT_COMMANDS.get(label)


def resolve_key(key_name, text=""):
    """Resolve a key press: named keys win, otherwise the typed text is used."""
    if key_name in KEY_COMMANDS:
        return KEY_COMMANDS[key_name]
    return resolve(text)


def dispatch(buffer, command):
    """Run a resolved command on an ExpressionBuffer and return the display string."""
    name, argument = command
    if name == "clear":
        buffer.clear()
        return "0"

    method = getattr(buffer, name)
    if argument is None:
        return method()
    return method(argument)
