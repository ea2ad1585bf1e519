"""Keyboard and mouse state, and the key names the Lua scripts use."""

from __future__ import annotations

import enum
import time

from pob_runtime.geometry import Point

DOUBLE_CLICK_INTERVAL = 0.4


class KeyCode(enum.Enum):
    """Physical keys."""

    KEY_A = "KeyA"
    KEY_B = "KeyB"
    KEY_C = "KeyC"
    KEY_D = "KeyD"
    KEY_E = "KeyE"
    KEY_F = "KeyF"
    KEY_G = "KeyG"
    KEY_H = "KeyH"
    KEY_I = "KeyI"
    KEY_J = "KeyJ"
    KEY_K = "KeyK"
    KEY_L = "KeyL"
    KEY_M = "KeyM"
    KEY_N = "KeyN"
    KEY_O = "KeyO"
    KEY_P = "KeyP"
    KEY_Q = "KeyQ"
    KEY_R = "KeyR"
    KEY_S = "KeyS"
    KEY_T = "KeyT"
    KEY_U = "KeyU"
    KEY_V = "KeyV"
    KEY_W = "KeyW"
    KEY_X = "KeyX"
    KEY_Y = "KeyY"
    KEY_Z = "KeyZ"
    DIGIT_0 = "Digit0"
    DIGIT_1 = "Digit1"
    DIGIT_2 = "Digit2"
    DIGIT_3 = "Digit3"
    DIGIT_4 = "Digit4"
    DIGIT_5 = "Digit5"
    DIGIT_6 = "Digit6"
    DIGIT_7 = "Digit7"
    DIGIT_8 = "Digit8"
    DIGIT_9 = "Digit9"
    SHIFT_LEFT = "ShiftLeft"
    SHIFT_RIGHT = "ShiftRight"
    CONTROL_LEFT = "ControlLeft"
    CONTROL_RIGHT = "ControlRight"
    ALT_LEFT = "AltLeft"
    ALT_RIGHT = "AltRight"
    F1 = "F1"
    F2 = "F2"
    F3 = "F3"
    F4 = "F4"
    F5 = "F5"
    F6 = "F6"
    F7 = "F7"
    F8 = "F8"
    F9 = "F9"
    F10 = "F10"
    F11 = "F11"
    F12 = "F12"
    SPACE = "Space"
    BACKSPACE = "Backspace"
    TAB = "Tab"
    ENTER = "Enter"
    ESCAPE = "Escape"
    PAUSE = "Pause"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"
    END = "End"
    HOME = "Home"
    PRINT_SCREEN = "PrintScreen"
    INSERT = "Insert"
    DELETE = "Delete"
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ARROW_LEFT = "ArrowLeft"
    ARROW_RIGHT = "ArrowRight"
    NUM_LOCK = "NumLock"
    SCROLL_LOCK = "ScrollLock"
    CAPS_LOCK = "CapsLock"
    EQUAL = "Equal"
    MINUS = "Minus"
    COMMA = "Comma"
    PERIOD = "Period"
    SLASH = "Slash"
    NUMPAD_ADD = "NumpadAdd"
    NUMPAD_SUBTRACT = "NumpadSubtract"
    NUMPAD_ENTER = "NumpadEnter"
    NUMPAD_0 = "Numpad0"
    NUMPAD_1 = "Numpad1"


class MouseButton(enum.Enum):
    LEFT = "Left"
    RIGHT = "Right"
    MIDDLE = "Middle"
    BACK = "Back"
    FORWARD = "Forward"
    OTHER = "Other"


class Modifiers(enum.Flag):
    NONE = 0
    SHIFT = enum.auto()
    CONTROL = enum.auto()
    ALT = enum.auto()
    SUPER = enum.auto()


_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_DIGITS = "0123456789"

_NAMED_KEYS = {
    "SHIFT": KeyCode.SHIFT_LEFT,
    "CTRL": KeyCode.CONTROL_LEFT,
    "ALT": KeyCode.ALT_LEFT,
    **{f"F{n}": KeyCode[f"F{n}"] for n in range(1, 13)},
    " ": KeyCode.SPACE,
    "BACK": KeyCode.BACKSPACE,
    "TAB": KeyCode.TAB,
    "RETURN": KeyCode.ENTER,
    "ESCAPE": KeyCode.ESCAPE,
    "PAUSE": KeyCode.PAUSE,
    "PAGEUP": KeyCode.PAGE_UP,
    "PAGEDOWN": KeyCode.PAGE_DOWN,
    "END": KeyCode.END,
    "HOME": KeyCode.HOME,
    "PRINTSCREEN": KeyCode.PRINT_SCREEN,
    "INSERT": KeyCode.INSERT,
    "DELETE": KeyCode.DELETE,
    "UP": KeyCode.ARROW_UP,
    "DOWN": KeyCode.ARROW_DOWN,
    "LEFT": KeyCode.ARROW_LEFT,
    "RIGHT": KeyCode.ARROW_RIGHT,
    "NUMLOCK": KeyCode.NUM_LOCK,
    "SCROLL": KeyCode.SCROLL_LOCK,
}

_STR_TO_KEY = {
    **{letter: KeyCode[f"KEY_{letter}"] for letter in _LETTERS},
    **{digit: KeyCode[f"DIGIT_{digit}"] for digit in _DIGITS},
    **_NAMED_KEYS,
}

_KEY_TO_STR = {
    **{KeyCode[f"KEY_{letter}"]: letter.lower() for letter in _LETTERS},
    **{KeyCode[f"DIGIT_{digit}"]: digit for digit in _DIGITS},
    **{code: name for name, code in _NAMED_KEYS.items()},
    KeyCode.EQUAL: "+",
    KeyCode.MINUS: "-",
    KeyCode.COMMA: ",",
    KeyCode.PERIOD: ".",
    KeyCode.SLASH: "/",
    KeyCode.NUMPAD_ADD: "+",
    KeyCode.NUMPAD_SUBTRACT: "-",
    KeyCode.NUMPAD_ENTER: "RETURN",
    KeyCode.NUMPAD_0: "0",
}

_STR_TO_BUTTON = {
    "LEFTBUTTON": MouseButton.LEFT,
    "RIGHTBUTTON": MouseButton.RIGHT,
    "MIDDLEBUTTON": MouseButton.MIDDLE,
    "MOUSE4": MouseButton.BACK,
    "MOUSE5": MouseButton.FORWARD,
}
_BUTTON_TO_STR = {button: name for name, button in _STR_TO_BUTTON.items()}


def str_as_keycode(s: str) -> KeyCode | None:
    """Key for a script key name, case-insensitive; None if unknown."""
    return _STR_TO_KEY.get(s.upper())


def keycode_as_str(code: KeyCode) -> str | None:
    """Script key name for a key; None if the scripts have no name for it."""
    return _KEY_TO_STR.get(code)


def str_as_mousebutton(s: str) -> MouseButton | None:
    return _STR_TO_BUTTON.get(s.upper())


def mousebutton_as_str(button: MouseButton) -> str | None:
    return _BUTTON_TO_STR.get(button)


class InputState:
    """Tracks which keys and buttons are held, the cursor and the modifiers."""

    def __init__(self) -> None:
        self._modifiers = Modifiers.NONE
        self._keys_pressed: set[KeyCode] = set()
        self._mouse_pressed: set[MouseButton] = set()
        self._mouse_last_pressed: dict[MouseButton, float] = {}
        self._cursor_pos = Point(0.0, 0.0)

    @property
    def modifiers(self) -> Modifiers:
        return self._modifiers

    @property
    def mouse_pos(self) -> Point:
        return self._cursor_pos

    def key_pressed(self, code: KeyCode) -> bool:
        return code in self._keys_pressed

    def mouse_pressed(self, button: MouseButton) -> bool:
        return button in self._mouse_pressed

    def set_modifiers(self, modifiers: Modifiers) -> None:
        self._modifiers = modifiers

    def move_cursor(self, x: float, y: float) -> None:
        self._cursor_pos = Point(float(x), float(y))

    def on_key(self, code: KeyCode, pressed: bool) -> None:
        if pressed:
            self._keys_pressed.add(code)
        else:
            self._keys_pressed.discard(code)

    def on_mouse_button(self, button: MouseButton, pressed: bool) -> None:
        if pressed:
            self._mouse_pressed.add(button)
        else:
            self._mouse_pressed.discard(button)

    def is_double_click(self, button: MouseButton, now: float | None = None) -> bool:
        """Record a click and tell whether it came within 400 ms of the previous one.

        ``now`` is a monotonic time in seconds; the current time is used if omitted.
        """
        if now is None:
            now = time.monotonic()
        last = self._mouse_last_pressed.get(button)
        self._mouse_last_pressed[button] = now
        return last is not None and now - last < DOUBLE_CLICK_INTERVAL