"""
Allpass filters in lattice form.

An order-N allpass is specified by N reflection coefficients k.  The step-up
recursion builds the denominator A(z^-1) from k; the numerator is A with its
coefficients reversed, so |H| = 1 at every frequency.

Reference:
    A. H. Gray and J. D. Markel, "Digital Lattice and Ladder Filter
    Synthesis", IEEE Trans. Audio Electroacoust. AU-21(6), 1973, pp. 491-500.
"""

import math

import numpy as np
from numba import jit

from sigkit.filters.polynomial import Polynomial
from sigkit.filters.rational import Rational


@jit(nopython=True, cache=True)
def _lattice(x, y, k, state):
    order = k.shape[0]
    for n in range(x.shape[0]):
        v = x[n]
        for stage in range(order, 0, -1):
            v -= k[stage - 1] * state[stage - 1]
            state[stage] = k[stage - 1] * v + state[stage - 1]
        state[0] = v
        y[n] = state[order]


def step_up(k: np.ndarray) -> np.ndarray:
    """Denominator coefficients (a[0] = 1) from reflection coefficients."""
    order = k.shape[0]
    a = np.zeros(order + 1)
    a[0] = 1.0
    for p in range(order):
        b = np.zeros(order + 1)
        b[:p + 1] += a[:p + 1]
        b[1:p + 2] += k[p] * a[p::-1]
        a[:p + 2] = b[:p + 2]
    return a


class Allpass:
    """
    Lattice allpass filter.

    Args:
        k: Reflection coefficients; order = len(k)
    """

    def __init__(self, k):
        k = np.atleast_1d(np.asarray(k, dtype=np.float64)).copy()
        if k.ndim != 1:
            raise ValueError(f"Reflection coefficients must be 1D, got shape {k.shape}")
        self.k = k
        self.order = k.shape[0]
        self._state = np.zeros(self.order + 1)
        self._construct_rational_representation()

    @classmethod
    def from_polynomial(cls, A: Polynomial) -> 'Allpass':
        """Allpass whose denominator is A (normalized to A[0] = 1)."""
        return cls(A.reflection_coefficients())

    def _construct_rational_representation(self) -> None:
        a = step_up(self.k)
        self._T = Rational(Polynomial(a[::-1]), Polynomial(a))

    def initialize(self) -> None:
        self._state[:] = 0.0

    def filter(self, x: np.ndarray) -> np.ndarray:
        """Filter a block; the lattice state carries over to the next call."""
        x = np.ascontiguousarray(x, dtype=np.float64)
        if x.ndim != 1:
            raise ValueError(f"Input must be 1D, got shape {x.shape}")
        y = np.empty_like(x)
        _lattice(x, y, self.k, self._state)
        return y

    def filter_sample(self, x: float) -> float:
        return float(self.filter(np.array([x]))[0])

    @property
    def transfer_function(self) -> Rational:
        return self._T

    def evaluate(self, omega):
        """Frequency response at omega radians per sample."""
        return self._T.evaluate(np.exp(-1j * np.asarray(omega, dtype=np.float64)))

    def group_delay(self, omega):
        """Group delay in samples at omega radians per sample."""
        return self._T.discrete_time_group_delay(omega)

    def __str__(self) -> str:
        lines = [f"Allpass order:  {self.order}"]
        for i in range(self.order):
            lines.append(f"  {self.k[i]: .6f}  {self._state[i]}")
        return "\n".join(lines)


class ThiranAllpass(Allpass):
    """
    Thiran allpass with maximally flat group delay D at DC.

        a_i = (-1)^i C(N, i) prod_{n=0}^{N} (D - N + n) / (D - N + i + n)

    Args:
        order: N
        D: Delay in samples; the filter is stable for D > N - 1
    """

    def __init__(self, order: int, D: float):
        if order < 1:
            raise ValueError(f"order must be >= 1, got {order}")
        if D <= order - 1:
            raise ValueError(f"D must exceed order - 1 = {order - 1} for stability, got {D}")

        a = np.zeros(order + 1)
        a[0] = 1.0
        for i in range(1, order + 1):
            prod = 1.0
            for n in range(order + 1):
                prod *= (D - order + n) / (D - order + i + n)
            a[i] = (-1.0) ** i * math.comb(order, i) * prod

        self.D = D
        super().__init__(Polynomial(a).reflection_coefficients())
