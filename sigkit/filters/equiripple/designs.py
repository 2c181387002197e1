"""
Concrete equiripple designs.

Frequencies are normalized to [0, 1], 1 being the Nyquist frequency.
"""

from typing import Optional, Union

import numpy as np

from sigkit.utils.config import DesignConfig

from .fir_types import FIRTypeI, FIRTypeII, FIRTypeIII, FIRTypeIV

RngLike = Union[int, np.random.Generator, None]


def _check_open_unit(name: str, value: float) -> None:
    if not (0.0 < value < 1.0):
        raise ValueError(f"{name}: {value} out of bounds (0.0 < {name} < 1.0)")


class EquirippleLowpass(FIRTypeI):
    """
    Lowpass filter with 2*n+1 taps.

    Args:
        n: Half order
        omega_p: Passband edge
        wp: Passband error weight
        omega_s: Stopband edge
        ws: Stopband error weight
    """

    def __init__(self, n: int, omega_p: float, wp: float, omega_s: float, ws: float,
                 config: Optional[DesignConfig] = None, rng: RngLike = None):
        super().__init__(2, n, config=config, rng=rng)
        if omega_p >= omega_s:
            raise ValueError(f"omega_p ({omega_p}) must be less than omega_s ({omega_s})")
        _check_open_unit('omega_p', omega_p)
        _check_open_unit('omega_s', omega_s)

        self.wp = wp
        self.ws = ws
        self.bands[0] = (0.0, omega_p)
        self.bands[1] = (omega_s, 1.0)
        self.generate_coefficients()

    def desired_response(self, omega: float) -> float:
        return 1.0 if self.in_band(0, omega) else 0.0

    def weight(self, omega: float) -> float:
        if self.in_band(0, omega):
            return self.wp
        elif self.in_band(1, omega):
            return self.ws
        return 0.0


class EquirippleHighpass(FIRTypeI):
    """
    Highpass filter with 2*n+1 taps.

    Args:
        n: Half order
        omega_s: Stopband edge
        ws: Stopband error weight
        omega_p: Passband edge
        wp: Passband error weight
    """

    def __init__(self, n: int, omega_s: float, ws: float, omega_p: float, wp: float,
                 config: Optional[DesignConfig] = None, rng: RngLike = None):
        super().__init__(2, n, config=config, rng=rng)
        if omega_s >= omega_p:
            raise ValueError(f"omega_s ({omega_s}) must be less than omega_p ({omega_p})")
        _check_open_unit('omega_s', omega_s)
        _check_open_unit('omega_p', omega_p)

        self.ws = ws
        self.wp = wp
        self.bands[0] = (0.0, omega_s)
        self.bands[1] = (omega_p, 1.0)
        self.generate_coefficients()

    def desired_response(self, omega: float) -> float:
        return 1.0 if self.in_band(1, omega) else 0.0

    def weight(self, omega: float) -> float:
        if self.in_band(0, omega):
            return self.ws
        elif self.in_band(1, omega):
            return self.wp
        return 0.0


class EquirippleHalfBandPrototype(FIRTypeII):
    """Single-band type II design used to build half-band filters; 2*n taps."""

    def __init__(self, n: int, omega_p: float,
                 config: Optional[DesignConfig] = None, rng: RngLike = None):
        super().__init__(1, n, config=config, rng=rng)
        _check_open_unit('omega_p', omega_p)

        self.bands[0] = (0.0, omega_p)
        self.generate_coefficients()

    def desired_response(self, omega: float) -> float:
        return 1.0 if self.in_band(0, omega) else 0.0

    def weight(self, omega: float) -> float:
        return 1.0 if self.in_band(0, omega) else 0.0


class EquirippleHalfBand:
    """
    Half-band lowpass filter with 4*n-1 taps.

    Every other tap is zero except the center tap, which is 0.5.  The nonzero
    taps are half those of a type II prototype designed with passband edge
    2*omega_p.

    Args:
        n: Half length of the prototype
        omega_p: Passband edge, < 0.5
    """

    def __init__(self, n: int, omega_p: float,
                 config: Optional[DesignConfig] = None, rng: RngLike = None):
        if not (0.0 < omega_p < 0.5):
            raise ValueError(f"omega_p: {omega_p} out of bounds (0.0 < omega_p < 0.5)")

        self.prototype = EquirippleHalfBandPrototype(n, 2.0 * omega_p, config=config, rng=rng)
        c = self.prototype.coefficients

        coefficients = np.zeros(2 * c.shape[0] - 1)
        coefficients[0::2] = 0.5 * c
        coefficients[c.shape[0] - 1] = 0.5
        self._coefficients = coefficients

    @property
    def coefficients(self) -> np.ndarray:
        return self._coefficients.copy()

    @property
    def design_result(self):
        return self.prototype.design_result


class CenteredDifferentiator(FIRTypeIII):
    """
    Differentiator with 2*n+1 taps and an integer-sample delay of n.

    Args:
        n: Half order
        delta: Sampling interval in seconds
        omega_p: Upper edge of the approximation band
    """

    def __init__(self, n: int, delta: float, omega_p: float,
                 config: Optional[DesignConfig] = None, rng: RngLike = None):
        super().__init__(1, n, config=config, rng=rng)
        _check_open_unit('omega_p', omega_p)
        if delta <= 0.0:
            raise ValueError(f"delta must be positive, got {delta}")

        self.delta = delta
        self.bands[0] = (1.0 / (2 * n), omega_p)
        self.generate_coefficients()

    def desired_response(self, omega: float) -> float:
        return -np.pi * omega / self.delta if self.in_band(0, omega) else 0.0

    def weight(self, omega: float) -> float:
        return 1.0 / omega if self.in_band(0, omega) else 0.0


class CenteredHilbertTransform(FIRTypeIII):
    """
    Hilbert transformer with 2*n+1 taps, equiripple over [omega1, omega2].

    Args:
        n: Half order
        omega1: Lower band edge
        omega2: Upper band edge
    """

    def __init__(self, n: int, omega1: float, omega2: float,
                 config: Optional[DesignConfig] = None, rng: RngLike = None):
        super().__init__(1, n, config=config, rng=rng)
        if not (0.0 < omega1 < omega2 < 1.0):
            raise ValueError(f"Band edges must satisfy 0.0 < omega1 < omega2 < 1.0, got {omega1}, {omega2}")

        self.bands[0] = (omega1, omega2)
        self.generate_coefficients()

    def desired_response(self, omega: float) -> float:
        return 1.0 if self.in_band(0, omega) else 0.0

    def weight(self, omega: float) -> float:
        return 1.0 if self.in_band(0, omega) else 0.0


class StaggeredDifferentiator(FIRTypeIV):
    """
    Differentiator with 2*n taps and a half-sample delay.

    Args:
        n: Half length
        delta: Sampling interval in seconds
    """

    def __init__(self, n: int, delta: float,
                 config: Optional[DesignConfig] = None, rng: RngLike = None):
        super().__init__(1, n, config=config, rng=rng)
        if delta <= 0.0:
            raise ValueError(f"delta must be positive, got {delta}")

        self.delta = delta
        self.bands[0] = (1.0 / (2 * n), 1.0)
        self.generate_coefficients()

    def desired_response(self, omega: float) -> float:
        return -np.pi * omega / self.delta if self.in_band(0, omega) else 0.0

    def weight(self, omega: float) -> float:
        return 1.0 / omega if self.in_band(0, omega) else 0.0


class StaggeredHilbertTransform(FIRTypeIV):
    """
    Hilbert transformer with 2*n taps, equiripple over [omega_p, 1].

    Args:
        n: Half length
        omega_p: Lower band edge
    """

    def __init__(self, n: int, omega_p: float,
                 config: Optional[DesignConfig] = None, rng: RngLike = None):
        super().__init__(1, n, config=config, rng=rng)
        _check_open_unit('omega_p', omega_p)

        self.bands[0] = (omega_p, 1.0)
        self.generate_coefficients()

    def desired_response(self, omega: float) -> float:
        return 1.0 if self.in_band(0, omega) else 0.0

    def weight(self, omega: float) -> float:
        return 1.0 if self.in_band(0, omega) else 0.0
