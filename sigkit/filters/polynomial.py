"""
Real polynomials with coefficients stored in ascending order.

    P(x) = a[0] + a[1] x + ... + a[N] x^N

Used as the numerator and denominator of Rational transfer functions, both
for analog prototypes (x = s) and for digital filters (x = z^-1).
"""

from typing import Union

import numpy as np

Number = Union[int, float, complex]


class Polynomial:
    """
    Polynomial with real coefficients; arithmetic returns new objects.

    Args:
        coefficients: Scalar or 1D array of coefficients, lowest order first
    """

    # numpy scalars on the left defer to the reflected operators
    __array_ufunc__ = None

    def __init__(self, coefficients):
        if isinstance(coefficients, Polynomial):
            a = coefficients._a.copy()
        else:
            a = np.atleast_1d(np.asarray(coefficients, dtype=np.float64)).copy()
        if a.ndim != 1 or a.shape[0] == 0:
            raise ValueError(f"Polynomial coefficients must be a non-empty 1D array, got shape {a.shape}")
        self._a = a

    @property
    def order(self) -> int:
        return self._a.shape[0] - 1

    @property
    def coefficients(self) -> np.ndarray:
        """Copy of the coefficients, lowest order first."""
        return self._a.copy()

    def trim(self) -> 'Polynomial':
        """Drop zero high-order coefficients (the constant term is always kept)."""
        nonzero = np.flatnonzero(self._a)
        if nonzero.shape[0] == 0:
            return Polynomial(0.0)
        return Polynomial(self._a[:nonzero[-1] + 1])

    # ------------------------------------------------------------------
    # Arithmetic

    def __add__(self, other) -> 'Polynomial':
        if isinstance(other, Polynomial):
            n = max(self.order, other.order) + 1
            a = np.zeros(n)
            a[:self._a.shape[0]] += self._a
            a[:other._a.shape[0]] += other._a
            return Polynomial(a)
        a = self._a.copy()
        a[0] += other
        return Polynomial(a)

    __radd__ = __add__

    def __neg__(self) -> 'Polynomial':
        return Polynomial(-self._a)

    def __sub__(self, other) -> 'Polynomial':
        return self + (-other)

    def __rsub__(self, other) -> 'Polynomial':
        return (-self) + other

    def __mul__(self, other) -> 'Polynomial':
        if isinstance(other, Polynomial):
            return Polynomial(np.convolve(self._a, other._a))
        return Polynomial(self._a * other)

    __rmul__ = __mul__

    def __truediv__(self, c: float) -> 'Polynomial':
        return Polynomial(self._a / c)

    def __pow__(self, n: int) -> 'Polynomial':
        if n < 0:
            raise ValueError(f"Polynomial power must be non-negative, got {n}")
        result = Polynomial(1.0)
        for _ in range(n):
            result = result * self
        return result

    # ------------------------------------------------------------------

    def derivative(self) -> 'Polynomial':
        if self.order == 0:
            return Polynomial(0.0)
        return Polynomial(self._a[1:] * np.arange(1, self.order + 1))

    def evaluate(self, x):
        """Horner evaluation at real or complex x (scalar or array)."""
        return np.polyval(self._a[::-1], x)

    def __call__(self, x):
        return self.evaluate(x)

    def group_delay(self, omega):
        """
        Continuous-time group delay of P(j*omega).

        tau(omega) = -Re[ P'(j omega) / P(j omega) ]
        """
        if self.order == 0:
            return np.zeros_like(np.asarray(omega, dtype=np.float64))[()]
        s = 1j * np.asarray(omega, dtype=np.float64)
        return -np.real(self.derivative().evaluate(s) / self.evaluate(s))

    def discrete_time_group_delay(self, omega):
        """
        Group delay of P(e^{-j omega}), the polynomial read in powers of z^-1.

        tau(omega) = Re[ sum(i a_i e^{-j omega i}) / sum(a_i e^{-j omega i}) ]
        """
        z = np.exp(-1j * np.asarray(omega, dtype=np.float64))
        weighted = np.polyval((self._a * np.arange(self.order + 1))[::-1], z)
        return np.real(weighted / self.evaluate(z))

    def reflection_coefficients(self) -> np.ndarray:
        """
        Lattice reflection coefficients by the step-down recursion.

        The polynomial is normalized by a[0] first.  Requires |k| != 1 at
        every stage.
        """
        if self._a[0] == 0.0:
            raise ValueError("Reflection coefficients need a nonzero constant term")
        order = self.order
        b = self._a / self._a[0]
        k = np.zeros(order)
        for i in range(order, 0, -1):
            k[i - 1] = b[i]
            scale = 1.0 - k[i - 1] * k[i - 1]
            if scale == 0.0:
                raise ValueError(f"Reflection coefficient {i - 1} has unit magnitude")
            b[:i] = (b[:i] - k[i - 1] * b[i:0:-1]) / scale
        return k

    def __repr__(self) -> str:
        return f"Polynomial({self._a.tolist()})"

    def __str__(self) -> str:
        return "\n".join(f"{i:<4d} {c}" for i, c in enumerate(self._a))
