"""Key event value type shared by every key handler.

prompt_toolkit reports modifiers inside the key name (``c-f``,
``s-left``, ``c-s-up``). Widgets match on a bare key plus a set of modifier
flags instead, so the conversion happens once in :meth:`KeyEvent.from_key_press`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Flag, auto

from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys


class Modifiers(Flag):
    NONE = 0
    SHIFT = auto()
    CONTROL = auto()


DIRECTION_KEYS = frozenset({Keys.Up.value, Keys.Down.value, Keys.Left.value, Keys.Right.value})

# Control sequences prompt_toolkit names after the control key they share a
# code with.
_ALIASES = {
    Keys.ControlM.value: "enter",
    Keys.ControlJ.value: "enter",
    Keys.ControlH.value: "backspace",
    Keys.ControlI.value: "tab",
}
_PREFIXES = (
    ("c-s-", Modifiers.CONTROL | Modifiers.SHIFT),
    ("s-c-", Modifiers.CONTROL | Modifiers.SHIFT),
    ("c-", Modifiers.CONTROL),
    ("s-", Modifiers.SHIFT),
)


@dataclass(frozen=True)
class KeyEvent:
    """A single key press: a printable character or a named key."""

    key: str
    modifiers: Modifiers = Modifiers.NONE

    @property
    def char(self) -> str | None:
        """The typed character, or None for named keys."""
        if len(self.key) == 1:
            return self.key
        return None

    @property
    def is_bare(self) -> bool:
        return self.modifiers == Modifiers.NONE

    def without_modifiers(self) -> "KeyEvent":
        return replace(self, modifiers=Modifiers.NONE)

    def is_focus_movement(self) -> bool:
        """Control+shift+arrow is reserved for moving focus between widgets."""
        return (
            self.modifiers == Modifiers.CONTROL | Modifiers.SHIFT
            and self.key in DIRECTION_KEYS
        )

    @classmethod
    def from_key_press(cls, press: KeyPress) -> "KeyEvent":
        key = press.key
        name = key.value if isinstance(key, Keys) else str(key)
        if len(name) == 1:
            return cls(name)
        if name == Keys.BackTab.value:
            return cls("tab", Modifiers.SHIFT)
        if name in _ALIASES:
            return cls(_ALIASES[name])
        for prefix, modifiers in _PREFIXES:
            if name.startswith(prefix) and len(name) > len(prefix):
                return cls(name[len(prefix):], modifiers)
        return cls(name)


__all__ = ["DIRECTION_KEYS", "KeyEvent", "Modifiers"]
