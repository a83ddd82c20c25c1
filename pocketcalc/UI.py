# UI.py
"""
PySide6 user interface for the Pocket Calculator.

Structure
---------
- Calculator UI: main window with a trace label, the display and the button grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Translate button clicks and key presses into ExpressionBuffer commands (see keymap.py)
- Render the buffer's display string (digit grouping, "0" for an empty buffer)
- Show the previous expression above a result
- Keep the display readable (auto-shrinking font, dark/light mode)
- Copy the display to the clipboard (Ctrl+C)

The engine itself never sees raw UI events; everything goes through keymap.resolve().
"""

import logging
import sys

import pyperclip
from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, QTimer, Signal

from . import config_manager
from . import error as E
from . import keymap
from .ExpressionBuffer import ExpressionBuffer
from .Formatter import group_expression, ungroup
from .MathEngine import Evaluator

logger = logging.getLogger(__name__)

# Qt key code -> name used by keymap.KEY_COMMANDS
KEY_NAMES = {
    int(Qt.Key.Key_Return): "Return",
    int(Qt.Key.Key_Enter): "Enter",
    int(Qt.Key.Key_Backspace): "Backspace",
    int(Qt.Key.Key_Escape): "Escape",
    int(Qt.Key.Key_Delete): "Delete",
}

DARK_BG = "#2c2c2e"
BUTTON_GRAY = "#3a3a3c"
BUTTON_LIGHT_GRAY = "#a5a5a5"
BUTTON_ORANGE = "#ff9500"


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Every setting is either a checkbox (True/False) or an input
    field (integers such as decimal_places). Values and descriptions come from
    config_manager, OK saves them, Cancel drops the changes.

    """""

    settings_saved = Signal()  # Signal to tell the main window to update

    # Lower bounds for integer settings
    MINIMUM = {"decimal_places": 2, "precision": 34}

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}  # setting key -> widget

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 220)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            # --- 3a. Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            # --- 3b. Input Field Builder (for Integer settings) ---
            elif isinstance(value, int):
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                minimum = self.MINIMUM.get(key_value)
                label_text = description if minimum is None else f"{description} (min. {minimum}):"
                label = QtWidgets.QLabel(label_text)
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok | QtWidgets.QDialogButtonBox.StandardButton.Cancel
        )
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self):
        new_settings = dict(self.setting_value_list)

        for key_value, widget in self.widgets.items():

            # --- Checkboxes ---
            if isinstance(widget, QtWidgets.QCheckBox):
                new_settings[key_value] = widget.isChecked()

            # --- Input Fields ---
            elif isinstance(widget, QtWidgets.QLineEdit):
                new_value_str = widget.text().strip()

                # If user left it blank, keep the old value
                if new_value_str == "":
                    continue

                try:
                    new_value_int = int(new_value_str)
                    minimum = self.MINIMUM.get(key_value)
                    if minimum is not None and new_value_int < minimum:
                        raise ValueError(f"'{new_value_int}' is too small. Minimum is {minimum}.")
                except ValueError as e:
                    # Show an error box and STOP the save process
                    logger.info("Invalid input for %s: %s", key_value, e)
                    QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                                   f"Error in input for '{key_value}':\n\n{e}\n\nPlease correct your input.")
                    return

                new_settings[key_value] = new_value_int

        # --- Write to File ---
        if config_manager.save_setting(new_settings) != {}:
            self.setting_value_list = new_settings
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           f"Error 4501: {E.ERROR_MESSAGES['4501']}config.json")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"]:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):
    # --- Class-level attributes for button hold logic ---
    initial_delay = 500
    repeat_interval = 100
    MAX_FONT_SIZE = 48
    MIN_FONT_SIZE = 14

    def __init__(self, buffer=None):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State ---
        self.buffer = buffer or ExpressionBuffer(Evaluator.from_settings())
        self.was_held = False
        self.held_button_value = None
        self.hold_timer = QTimer(self)
        self.hold_timer.timeout.connect(self.handle_hold_tick)
        self.button_objects = {}

        # --- 3. Window Setup ---
        self.setWindowTitle("Calculator")
        self.resize(325, 485)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Trace label (previous expression) ---
        self.trace = QtWidgets.QLabel("")
        self.trace.setAlignment(Qt.AlignmentFlag.AlignRight)
        main_v_layout.addWidget(self.trace)

        # --- 5. Display Setup ---
        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        self.display.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        font = self.display.font()
        font.setPointSize(self.MAX_FONT_SIZE)
        self.display.setFont(font)
        main_v_layout.addWidget(self.display, 1)

        # --- 6. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 4)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(6)

        # (text, row, column, column span)
        self.buttons = [
            ('<', 0, 0, 1), ('C', 0, 1, 1), ('%', 0, 2, 1), ('÷', 0, 3, 1),
            ('7', 1, 0, 1), ('8', 1, 1, 1), ('9', 1, 2, 1), ('×', 1, 3, 1),
            ('4', 2, 0, 1), ('5', 2, 1, 1), ('6', 2, 2, 1), ('−', 2, 3, 1),
            ('1', 3, 0, 1), ('2', 3, 1, 1), ('3', 3, 2, 1), ('+', 3, 3, 1),
            ('±', 4, 0, 1), ('0', 4, 1, 1), ('.', 4, 2, 1), ('=', 4, 3, 1),
            ('⚙', 5, 0, 4),
        ]

        # Buttons that repeat while held
        HOLD_BUTTONS = ['0', '1', '2', '3', '4', '5', '6', '7', '8', '9', '<']

        # --- 7. Button Creation Loop ---
        for text, row, col, span in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)

            if text == '⚙':
                button.clicked.connect(self.open_settings)
            elif text in HOLD_BUTTONS:
                button.pressed.connect(lambda val=text: self.handle_button_pressed_hold(val))
                button.released.connect(self.handle_button_released_hold)
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_clicked_hold(val))
            else:
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))

            button_grid.addWidget(button, row, col, 1, span)
            self.button_objects[text] = button

        self.update_darkmode()

    # --- Button Hold Logic ---
    def handle_button_pressed_hold(self, value):
        self.was_held = False
        self.held_button_value = value
        self.hold_timer.setInterval(self.initial_delay)
        self.hold_timer.start()

    def handle_button_released_hold(self):
        self.hold_timer.stop()
        self.held_button_value = None

    def handle_button_clicked_hold(self, value):
        # A click that ends a hold must not fire once more
        if not self.was_held:
            self.handle_button_press(value)

    def handle_hold_tick(self):
        self.was_held = True
        if self.hold_timer.interval() == self.initial_delay:
            self.hold_timer.setInterval(self.repeat_interval)

        if self.held_button_value:
            self.handle_button_press(self.held_button_value)

    # --- Window/Key Event Handlers ---
    def resizeEvent(self, event):
        super().resizeEvent(event)
        for button in self.button_objects.values():
            font = button.font()
            font.setPointSize(max(12, int(button.height() / 3)))
            button.setFont(font)
        self.update_font_size_display()

    def keyPressEvent(self, event):
        if event.matches(QtGui.QKeySequence.StandardKey.Copy):
            pyperclip.copy(ungroup(self.display.text()))
            return

        command = keymap.resolve_key(KEY_NAMES.get(int(event.key())), event.text())
        if command is None:
            super().keyPressEvent(event)
            return
        self.run_command(command)

    def handle_button_press(self, value):
        command = keymap.resolve(value)
        if command is not None:
            self.run_command(command)

    def run_command(self, command):
        """Send one command to the buffer and refresh display and trace."""
        name = command[0]
        previous_expression = self.buffer.current_expression()
        was_result = self.buffer.result_mode

        display_text = keymap.dispatch(self.buffer, command)

        if name == "calculate" and not was_result and previous_expression:
            self.show_trace(previous_expression)
        elif name != "calculate" and not self.buffer.result_mode:
            self.trace.setText("")

        self.set_display(display_text)

    def show_trace(self, expression):
        if not self.setting_value_list["show_equation"]:
            return
        error = self.buffer.last_error
        if error is not None:
            self.trace.setToolTip(E.describe(error))
        else:
            self.trace.setToolTip("")
        self.trace.setText(self.format_for_display(expression) + " =")

    def format_for_display(self, text):
        if self.setting_value_list["thousands_separator"]:
            return group_expression(text)
        return text

    def set_display(self, text):
        self.display.setText(self.format_for_display(text or "0"))
        self.update_font_size_display()

    def update_font_size_display(self):
        # --- Dynamic Font Resizing for Display ---
        current_text = self.display.text()
        font = self.display.font()
        current_size = self.MAX_FONT_SIZE

        r_margin = self.display.textMargins().right()
        l_margin = self.display.textMargins().left()
        available_width = self.display.width() - (l_margin + r_margin + 10)

        font.setPointSize(current_size)
        fm = QtGui.QFontMetrics(font)

        # --- Shrink font until the text fits ---
        while fm.horizontalAdvance(current_text) > available_width and current_size > self.MIN_FONT_SIZE:
            current_size -= 1
            font.setPointSize(current_size)
            fm = QtGui.QFontMetrics(font)

        self.display.setFont(font)

    def update_darkmode(self):
        # --- Apply Dark/Light Mode to all buttons ---
        if self.setting_value_list["darkmode"]:
            for text, button in self.button_objects.items():
                if text in ('÷', '×', '−', '+', '='):
                    colour, foreground = BUTTON_ORANGE, "white"
                elif text in ('<', 'C', '%'):
                    colour, foreground = BUTTON_LIGHT_GRAY, "black"
                else:
                    colour, foreground = BUTTON_GRAY, "white"
                button.setStyleSheet(f"background-color: {colour}; color: {foreground}; border: none;")

            self.setStyleSheet(f"background-color: {DARK_BG};")
            self.display.setStyleSheet(f"background-color: {DARK_BG}; color: white; border: none;")
            self.trace.setStyleSheet("color: #8e8e93;")
        else:
            for button in self.button_objects.values():
                button.setStyleSheet("")
            self.setStyleSheet("")
            self.display.setStyleSheet("border: none;")
            self.trace.setStyleSheet("color: gray;")

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()

        # Reload settings after the dialog closes; the engine picks up precision changes
        self.setting_value_list = config_manager.load_setting_value("all")
        self.buffer.evaluator = Evaluator.from_settings()
        self.update_darkmode()
        self.set_display(self.buffer.current_expression())


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
