"""Translate readchar key strings into KeyEvents."""

import readchar

from snpy.models import KeyEvent

_NAMED_KEYS: dict[str, str] = {
    readchar.key.UP: "up",
    readchar.key.DOWN: "down",
    readchar.key.ENTER: "return",
    "\r": "return",
    "\n": "return",
    readchar.key.BACKSPACE: "backspace",
    "\x7f": "backspace",
    "\x08": "backspace",
    readchar.key.SPACE: "space",
}

INTERRUPT = KeyEvent(char="c", ctrl=True)


def parse_key(raw: str) -> KeyEvent:
    """Convert one ``readchar.readkey()`` result into a KeyEvent."""
    if raw in _NAMED_KEYS:
        name = _NAMED_KEYS[raw]
        return KeyEvent(char=raw if name == "space" else None, name=name)

    if len(raw) == 1:
        code = ord(raw)
        if code < 32:  # Ctrl+letter
            return KeyEvent(char=chr(code + 96), ctrl=True)
        return KeyEvent(char=raw)

    # Alt+char arrives as ESC followed by the char
    if len(raw) == 2 and raw[0] == "\x1b" and raw[1].isprintable():
        return KeyEvent(char=raw[1], meta=True)

    return KeyEvent(char=None)


def is_interrupt(event: KeyEvent) -> bool:
    return event.ctrl and event.char == "c"
