"""
Sweep orders over pixel values.

A sweep is either dark-to-bright (thresholds rise, components are lower
level sets) or bright-to-dark (thresholds fall, components are upper level
sets). Everything direction-dependent in the builders goes through a
SweepOrder so the algorithms themselves are written once.
"""

from dataclasses import dataclass

import numpy as np

from localtypes import Value


@dataclass(frozen=True)
class SweepOrder:
    dark_to_bright: bool

    def argsort(self, levels: np.ndarray) -> np.ndarray:
        """
        Flat indices of a 1-D array of levels in sweep order.

        Equal levels are always visited by ascending flat index, in both
        directions, so that ties are broken the same way for every sweep.
        """
        if self.dark_to_bright:
            return np.argsort(levels, kind="stable")
        # Stable sort of the reversed array, read backwards, keeps ties ascending
        last = levels.size - 1
        return last - np.argsort(levels[::-1], kind="stable")[::-1]

    def is_after(self, a: Value, b: Value) -> bool:
        """True if level a is reached strictly later than level b."""
        return a > b if self.dark_to_bright else a < b

    def minus_delta(self, value: Value, delta: Value) -> Value:
        """The level reached delta units of sweep before value."""
        return value - delta if self.dark_to_bright else value + delta

    def __str__(self) -> str:
        return "dark-to-bright" if self.dark_to_bright else "bright-to-dark"


DARK_TO_BRIGHT = SweepOrder(dark_to_bright=True)
BRIGHT_TO_DARK = SweepOrder(dark_to_bright=False)


def sweep_order(dark_to_bright: bool) -> SweepOrder:
    return DARK_TO_BRIGHT if dark_to_bright else BRIGHT_TO_DARK
