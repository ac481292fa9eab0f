"""Bounded integer picker.

Out-of-range input is clamped to the nearest bound instead of being
rejected. Free-text input is kept as typed and committed only when it
parses to an in-range number; blur() always commits a valid value.
"""

from __future__ import annotations

import math
from collections.abc import Callable


def clamp(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, value))


def _parse(text: str) -> int | None:
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return round(number)


class NumberPicker:
    """Integer input bounded by [minimum, maximum].

    Example:
        picker = NumberPicker(minimum=1, maximum=168, default=24)
        picker.increment()       # 25
        picker.input_text("999") # text kept, nothing committed
        picker.blur()            # 168
    """

    def __init__(
        self,
        *,
        minimum: int = 1,
        maximum: int = 100,
        default: int | None = None,
        on_change: Callable[[int], None] | None = None,
    ) -> None:
        if minimum > maximum:
            raise ValueError(f"minimum ({minimum}) must not exceed maximum ({maximum})")
        self.minimum = minimum
        self.maximum = maximum
        self._on_change = on_change
        self._value = clamp(default if default is not None else minimum, minimum, maximum)
        self._text = str(self._value)

    @property
    def value(self) -> int:
        """Last committed value, always within bounds."""
        return self._value

    @property
    def text(self) -> str:
        return self._text

    @property
    def can_decrement(self) -> bool:
        return self._current() > self.minimum

    @property
    def can_increment(self) -> bool:
        return self._current() < self.maximum

    def set_value(self, value: int) -> int:
        clamped = clamp(value, self.minimum, self.maximum)
        self._text = str(clamped)
        self._commit(clamped)
        return clamped

    def increment(self) -> int:
        return self.set_value(self._current() + 1)

    def decrement(self) -> int:
        return self.set_value(self._current() - 1)

    def input_text(self, text: str) -> None:
        self._text = text.strip()
        number = _parse(self._text)
        if number is not None and self.minimum <= number <= self.maximum:
            self._commit(number)

    def blur(self) -> int:
        number = _parse(self._text)
        if number is None:
            return self.set_value(self.minimum)
        return self.set_value(number)

    def _current(self) -> int:
        number = _parse(self._text)
        return number if number else self.minimum

    def _commit(self, value: int) -> None:
        self._value = value
        if self._on_change is not None:
            self._on_change(value)
