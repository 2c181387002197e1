"""
Second-order section in direct form II.

    s0[n] = x[n] - a1 s0[n-1] - a2 s0[n-2]
    y[n]  = b0 s0[n] + b1 s0[n-1] + b2 s0[n-2]

The two delayed states persist between calls, so a stream can be filtered in
consecutive blocks.
"""

import numpy as np
from numba import jit


@jit(nopython=True, cache=True)
def _direct_form_ii(x, y, b0, b1, b2, a1, a2, state):
    s1 = state[0]
    s2 = state[1]
    for i in range(x.shape[0]):
        s0 = x[i] - a1 * s1 - a2 * s2
        y[i] = b0 * s0 + b1 * s1 + b2 * s2
        s2 = s1
        s1 = s0
    state[0] = s1
    state[1] = s2


class SecondOrderSection:
    """
    Biquad with a0 = 1.

    Args:
        b0, b1, b2: Numerator coefficients (powers of z^-1)
        a1, a2: Denominator coefficients
    """

    def __init__(self, b0: float, b1: float, b2: float, a1: float, a2: float):
        self.b0 = float(b0)
        self.b1 = float(b1)
        self.b2 = float(b2)
        self.a1 = float(a1)
        self.a2 = float(a2)
        self._state = np.zeros(2)

    def initialize(self) -> None:
        """Zero the states."""
        self._state[:] = 0.0

    @property
    def state(self) -> np.ndarray:
        return self._state.copy()

    def filter(self, x: np.ndarray) -> np.ndarray:
        x = np.ascontiguousarray(x, dtype=np.float64)
        if x.ndim != 1:
            raise ValueError(f"Input must be 1D, got shape {x.shape}")
        y = np.empty_like(x)
        _direct_form_ii(x, y, self.b0, self.b1, self.b2, self.a1, self.a2, self._state)
        return y

    def filter_sample(self, x: float) -> float:
        s1, s2 = self._state
        s0 = x - self.a1 * s1 - self.a2 * s2
        y = self.b0 * s0 + self.b1 * s1 + self.b2 * s2
        self._state[1] = s1
        self._state[0] = s0
        return float(y)

    def as_sos_row(self) -> np.ndarray:
        """[b0, b1, b2, 1, a1, a2], the row layout of scipy.signal's sos arrays."""
        return np.array([self.b0, self.b1, self.b2, 1.0, self.a1, self.a2])

    def __str__(self) -> str:
        return (f"  coefficients:\n"
                f"    b0: {self.b0}\n    b1: {self.b1}\n    b2: {self.b2}\n\n"
                f"    a1: {self.a1}\n    a2: {self.a2}\n"
                f"  states:\n"
                f"    s1: {self._state[0]}\n    s2: {self._state[1]}")
