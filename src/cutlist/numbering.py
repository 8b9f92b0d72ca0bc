"""Part number labels: ``1, 2, ... 10`` or ``A, B, ... Z, AA, AB``."""

from __future__ import annotations

import string

_LETTERS = string.ascii_uppercase


def successor(label: str) -> str:
    """Return the label following ``label``.

    Digit labels count in decimal (``"9"`` -> ``"10"``). Upper case letter
    labels count in bijective base 26 (``"Z"`` -> ``"AA"``, ``"AZ"`` -> ``"BA"``,
    ``"ZZ"`` -> ``"AAA"``).
    """
    if label.isdigit() and label.isascii():
        return str(int(label) + 1)
    if label and all(ch in _LETTERS for ch in label):
        chars = list(label)
        i = len(chars) - 1
        while i >= 0:
            if chars[i] != "Z":
                chars[i] = _LETTERS[_LETTERS.index(chars[i]) + 1]
                return "".join(chars)
            chars[i] = "A"
            i -= 1
        return "A" + "".join(chars)
    raise ValueError(f"Cannot number parts after label {label!r}")


class PartNumberSequence:
    """Running part number sequence."""

    def __init__(self, letters: bool = False):
        self.initial = "A" if letters else "1"
        self._current = self.initial

    @property
    def current(self) -> str:
        return self._current

    def reset(self) -> None:
        self._current = self.initial

    def next(self) -> str:
        """Return the current label and advance."""
        label = self._current
        self._current = successor(label)
        return label
