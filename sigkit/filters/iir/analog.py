"""
Analog lowpass prototypes and spectral transformations.

A prototype is a cascade of first- and second-order rational sections in s
with its band edge at omega = 1.  The lowpass-to-lowpass, lowpass-to-highpass
and lowpass-to-bandpass substitutions move the edge(s) to the requested
(prewarped) frequencies; the bandpass substitution doubles the order, and
each quadratic factor is split into two quadratics so the result is still a
cascade of second-order sections.
"""

from typing import List, Tuple

import numpy as np

from sigkit.filters.polynomial import Polynomial
from sigkit.filters.rational import Rational
from sigkit.utils.logging import get_logger

logger = get_logger(__name__)


def _bandpass_factors(P: Polynomial, bw: float, prod: float) -> Tuple[Polynomial, Polynomial]:
    """
    Factor the image of a quadratic under s -> (s^2 + prod) / (bw s).

    Each root r of P maps to the roots of s^2 - r bw s + prod.  Real roots
    give one real quadratic each; a complex pair gives two quadratics, one
    per conjugate pair of images.
    """
    p = P.coefficients
    c = p[0] / p[2]
    b = p[1] / p[2]
    discriminant = b * b - 4.0 * c

    if discriminant >= 0.0:
        factors = []
        for root in ((-b + np.sqrt(discriminant)) / 2.0, (-b - np.sqrt(discriminant)) / 2.0):
            factors.append(Polynomial([prod, -root * bw, 1.0]))
        return factors[0], factors[1]

    root = complex(-b / 2.0, np.sqrt(-discriminant) / 2.0)
    f1 = root * bw / 2.0
    r = np.sqrt(f1 * f1 - prod)
    factors = []
    for C in (f1 + r, f1 - r):
        factors.append(Polynomial([abs(C) ** 2, -2.0 * C.real, 1.0]))
    return factors[0], factors[1]


class AnalogPrototype:
    """Cascade of rational sections in s."""

    def __init__(self):
        self.sections: List[Rational] = []

    def add_section(self, R: Rational) -> None:
        self.sections.append(R)

    @property
    def num_sections(self) -> int:
        return len(self.sections)

    @property
    def transfer_function(self) -> Rational:
        """Product of all sections."""
        T = Rational(1.0)
        for section in self.sections:
            T = T * section
        return T

    def _mapped(self, T: Rational) -> 'AnalogPrototype':
        retval = AnalogPrototype()
        for section in self.sections:
            retval.add_section(section.map(T))
        return retval

    def lptolp(self, omega0: float) -> 'AnalogPrototype':
        """Lowpass with band edge omega0: s -> s / omega0."""
        return self._mapped(Rational([0.0, 1.0], [omega0]))

    def lptohp(self, omega0: float) -> 'AnalogPrototype':
        """Highpass with band edge omega0: s -> omega0 / s."""
        return self._mapped(Rational([omega0], [0.0, 1.0]))

    def lptobp(self, omega1: float, omega2: float) -> 'AnalogPrototype':
        """Bandpass over [omega1, omega2]: s -> (s^2 + omega1 omega2) / ((omega2 - omega1) s)."""
        bw = omega2 - omega1
        prod = omega1 * omega2
        T = Rational([prod, 0.0, 1.0], [0.0, bw])
        s = [0.0, 1.0]

        retval = AnalogPrototype()
        gain = 1.0
        for section in self.sections:
            mapped, scale = section.map(T).canonical_form()
            gain *= scale

            n_order, d_order = section.order
            if n_order < 2 and d_order < 2:
                retval.add_section(mapped)
            elif d_order == 2:
                D0, D1 = _bandpass_factors(section.denominator, bw, prod)
                if n_order == 0:
                    retval.add_section(Rational(s, D0))
                    retval.add_section(Rational(s, D1))
                elif n_order == 1:
                    # mapped numerator is s * (quadratic)
                    retval.add_section(Rational(s, D0))
                    retval.add_section(Rational(mapped.numerator.coefficients[1:], D1))
                else:
                    N0, N1 = _bandpass_factors(section.numerator, bw, prod)
                    retval.add_section(Rational(N0, D0))
                    retval.add_section(Rational(N1, D1))
            else:
                raise ValueError(f"Cannot transform a section of order {section.order} to bandpass")

        retval.sections[0] = retval.sections[0] * gain
        return retval

    def evaluate(self, omega):
        """Frequency response H(j omega)."""
        return self.transfer_function.evaluate(1j * np.asarray(omega, dtype=np.float64))

    def group_delay(self, omega):
        return self.transfer_function.group_delay(omega)

    def __str__(self) -> str:
        out = "AnalogPrototype:\n"
        for i, section in enumerate(self.sections):
            out += f"  section {i}:\n{section}\n"
        return out


def _check_order(order: int) -> None:
    if order < 1:
        raise ValueError(f"order must be >= 1, got {order}")


def _check_epsilon(epsilon: float) -> None:
    if epsilon <= 0.0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")


class AnalogButterworth(AnalogPrototype):
    """Butterworth prototype: poles equally spaced on the left unit semicircle."""

    def __init__(self, order: int):
        super().__init__()
        _check_order(order)

        n_real = order % 2
        n_pairs = order // 2

        if n_real == 1:
            self.add_section(Rational(1.0, [1.0, 1.0]))

        d_angle = np.pi / order
        for i in range(n_pairs):
            angle = -np.pi / 2 + d_angle / 2 * (1 + n_real) + i * d_angle
            self.add_section(Rational(1.0, [1.0, -2.0 * np.sin(angle), 1.0]))


def _chebyshev_parameters(order: int, epsilon: float):
    """sinh and cosh of asinh(1/epsilon) / order."""
    alpha = (1.0 + np.sqrt(1.0 + epsilon * epsilon)) / epsilon
    p = alpha ** (1.0 / order)
    a = 0.5 * (p - 1.0 / p)
    b = 0.5 * (p + 1.0 / p)
    logger.debug(f"Chebyshev order {order}, epsilon {epsilon}: alpha = {alpha}, a = {a}, b = {b}")
    return a, b


class AnalogChebyshevI(AnalogPrototype):
    """
    Chebyshev type I prototype: equiripple passband [0, 1].

    |H(j omega)|^2 = 1 / (1 + epsilon^2 T_n(omega)^2); odd orders have unit DC
    gain, even orders 1/sqrt(1 + epsilon^2).
    """

    def __init__(self, order: int, epsilon: float):
        super().__init__()
        _check_order(order)
        _check_epsilon(epsilon)

        a, b = _chebyshev_parameters(order, epsilon)
        n_real = order % 2
        n_pairs = order // 2

        if n_real == 1:
            self.add_section(Rational(1.0, [a, 1.0]))

        d_angle = np.pi / order
        for i in range(n_pairs):
            angle = -np.pi / 2 + d_angle / 2 * (1 + n_real) + i * d_angle
            pole = complex(a * np.sin(angle), b * np.cos(angle))
            self.add_section(Rational(1.0, [abs(pole) ** 2, -2.0 * pole.real, 1.0]))

        self.sections[0] = self.sections[0] * (1.0 / (2.0 ** (order - 1) * epsilon))


class AnalogChebyshevII(AnalogPrototype):
    """
    Chebyshev type II (inverse Chebyshev) prototype: equiripple stopband
    [1, inf) with attenuation 1/sqrt(1 + 1/epsilon^2) and unit DC gain.
    """

    def __init__(self, order: int, epsilon: float):
        super().__init__()
        _check_order(order)
        _check_epsilon(epsilon)

        a, b = _chebyshev_parameters(order, epsilon)
        n_real = order % 2
        n_pairs = order // 2

        if n_real == 1:
            self.add_section(Rational(1.0, [1.0 / a, 1.0]))

        d_angle = np.pi / order
        for i in range(n_pairs):
            angle = -np.pi / 2 + d_angle / 2 * (1 + n_real) + i * d_angle
            pole = 1.0 / complex(a * np.sin(angle), b * np.cos(angle))
            zero = 1.0 / np.cos((2 * i + 1) * np.pi / (2 * order))
            self.add_section(Rational([zero * zero, 0.0, 1.0], [abs(pole) ** 2, -2.0 * pole.real, 1.0]))

        # unit gain at s = 0
        self.sections[0] = self.sections[0] * (1.0 / abs(self.evaluate(0.0)))
