"""
Rational functions N(x)/D(x) built on Polynomial.

Filters are carried as products of rational sections; spectral
transformations and the bilinear transform are substitutions x -> S(x)
performed by ``Rational.map``.
"""

import numpy as np

from .polynomial import Polynomial


def _as_polynomial(p) -> Polynomial:
    return p if isinstance(p, Polynomial) else Polynomial(p)


class Rational:
    """
    Ratio of two real polynomials.

    Args:
        numerator: Polynomial, coefficient array or scalar
        denominator: Polynomial, coefficient array or scalar (default 1)
    """

    __array_ufunc__ = None

    def __init__(self, numerator, denominator=1.0):
        self._N = _as_polynomial(numerator)
        self._D = _as_polynomial(denominator)

    @property
    def numerator(self) -> Polynomial:
        return self._N

    @property
    def denominator(self) -> Polynomial:
        return self._D

    @property
    def order(self):
        """(numerator order, denominator order)."""
        return self._N.order, self._D.order

    def canonical_form(self):
        """
        Split off the ratio of leading coefficients.

        Returns:
            (R, gain) where R has monic numerator and denominator and
            self == gain * R
        """
        scale_n = self._N.coefficients[-1]
        scale_d = self._D.coefficients[-1]
        return Rational(self._N / scale_n, self._D / scale_d), scale_n / scale_d

    def __mul__(self, other) -> 'Rational':
        if isinstance(other, Rational):
            return Rational(self._N * other._N, self._D * other._D)
        return Rational(self._N * other, self._D)

    __rmul__ = __mul__

    def evaluate(self, x):
        """N(x)/D(x); points where D vanishes evaluate to 0."""
        num = np.asarray(self._N.evaluate(x))
        den = np.asarray(self._D.evaluate(x))
        dtype = np.result_type(num, den, np.float64)
        out = np.zeros(np.broadcast(num, den).shape, dtype=dtype)
        np.divide(num, den, out=out, where=(den != 0))
        return out[()]

    def __call__(self, x):
        return self.evaluate(x)

    def map(self, S: 'Rational') -> 'Rational':
        """
        Substitute x -> S(x) and clear the fractions.

        With S = P/Q and orders n (numerator) and d (denominator),
            N(S) / D(S) = [sum N_i P^i Q^(m-i)] / [sum D_i P^i Q^(m-i)],
        m = max(n, d).  High-order zeros are trimmed from the result.
        """
        P, Q = S._N, S._D

        def homogenize(A: Polynomial) -> Polynomial:
            a = A.coefficients
            result = Polynomial(a[-1])
            T = Polynomial(1.0)
            for i in range(A.order - 1, -1, -1):
                T = T * Q
                result = result * P + T * a[i]
            return result

        num = homogenize(self._N)
        den = homogenize(self._D)

        n, d = self.order
        if d > n:
            num = num * Q ** (d - n)
        elif n > d:
            den = den * Q ** (n - d)

        return Rational(num.trim(), den.trim())

    def residue(self, pole):
        """Residue at a simple pole: N(p) / D'(p)."""
        return self._N.evaluate(pole) / self._D.derivative().evaluate(pole)

    def group_delay(self, omega):
        """Continuous-time group delay at s = j*omega."""
        return self._N.group_delay(omega) - self._D.group_delay(omega)

    def discrete_time_group_delay(self, omega):
        """Group delay with N and D read in powers of z^-1, omega in radians."""
        return self._N.discrete_time_group_delay(omega) - self._D.discrete_time_group_delay(omega)

    def __repr__(self) -> str:
        return f"Rational({self._N!r}, {self._D!r})"

    def __str__(self) -> str:
        return f"Numerator:\n{self._N}\nDenominator:\n{self._D}"
