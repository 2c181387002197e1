"""
Digital IIR filters from analog prototypes by the bilinear transform.

Band edges are given in Hz together with the sampling interval delta (s).
Each edge is prewarped to tan(pi f delta), the prototype is moved to the
prewarped edge(s), and every section is mapped with

    s = (1 - z^-1) / (1 + z^-1)

into a second-order section in z^-1.
"""

from enum import Enum
from typing import List

import numpy as np

from sigkit.filters.rational import Rational
from sigkit.utils.logging import get_logger

from .analog import AnalogPrototype
from .sos import SecondOrderSection

logger = get_logger(__name__)

BILINEAR = Rational([1.0, -1.0], [1.0, 1.0])


class PassbandType(Enum):
    LOWPASS = 'lowpass'
    HIGHPASS = 'highpass'
    BANDPASS = 'bandpass'


def warp(f: float, delta: float) -> float:
    """Analog frequency that the bilinear transform maps onto f Hz."""
    return float(np.tan(np.pi * f * delta))


def _check_edges(passband_type: PassbandType, f1: float, f2: float, delta: float) -> None:
    if delta <= 0.0:
        raise ValueError(f"delta must be positive, got {delta}")
    nyquist = 0.5 / delta
    if passband_type is PassbandType.LOWPASS:
        if not (0.0 < f2 < nyquist):
            raise ValueError(f"f2: {f2} out of bounds (0.0 < f2 < {nyquist})")
    elif passband_type is PassbandType.HIGHPASS:
        if not (0.0 < f1 < nyquist):
            raise ValueError(f"f1: {f1} out of bounds (0.0 < f1 < {nyquist})")
    elif not (0.0 < f1 < f2 < nyquist):
        raise ValueError(f"Band edges must satisfy 0.0 < f1 < f2 < {nyquist}, got {f1}, {f2}")


class IIRFilter:
    """
    Cascade of second-order sections.

    Args:
        prototype: Analog lowpass prototype with band edge 1
        passband_type: LOWPASS (edge f2), HIGHPASS (edge f1) or BANDPASS (f1 to f2)
        f1: Lower band edge in Hz
        f2: Upper band edge in Hz
        delta: Sampling interval in seconds
    """

    def __init__(self, prototype: AnalogPrototype, passband_type: PassbandType,
                 f1: float, f2: float, delta: float):
        passband_type = PassbandType(passband_type)
        _check_edges(passband_type, f1, f2, delta)

        if passband_type is PassbandType.LOWPASS:
            analog = prototype.lptolp(warp(f2, delta))
        elif passband_type is PassbandType.HIGHPASS:
            analog = prototype.lptohp(warp(f1, delta))
        else:
            analog = prototype.lptobp(warp(f1, delta), warp(f2, delta))

        self.passband_type = passband_type
        self.sections: List[SecondOrderSection] = []
        T = Rational(1.0)

        for section in analog.sections:
            R = section.map(BILINEAR)
            T = T * R

            cn = np.zeros(3)
            cd = np.zeros(3)
            n = R.numerator.coefficients
            d = R.denominator.coefficients
            cn[:n.shape[0]] = n
            cd[:d.shape[0]] = d
            s = cd[0] if cd[0] != 0.0 else 1.0

            self.sections.append(SecondOrderSection(
                cn[0] / s, cn[1] / s, cn[2] / s, cd[1] / s, cd[2] / s
            ))

        self._T = T
        logger.debug(f"{type(self).__name__} ({passband_type.value}): {len(self.sections)} sections")

    def initialize(self) -> None:
        """Zero the states of every section."""
        for section in self.sections:
            section.initialize()

    def filter(self, x: np.ndarray) -> np.ndarray:
        """Filter a block; states carry over to the next call."""
        y = np.asarray(x, dtype=np.float64)
        for section in self.sections:
            y = section.filter(y)
        return y

    def filter_sample(self, x: float) -> float:
        y = x
        for section in self.sections:
            y = section.filter_sample(y)
        return y

    @property
    def transfer_function(self) -> Rational:
        """Overall response as a rational function of z^-1."""
        return self._T

    @property
    def sos(self) -> np.ndarray:
        """(n_sections, 6) coefficient array in scipy.signal's layout."""
        return np.array([section.as_sos_row() for section in self.sections])

    def evaluate(self, omega):
        """Frequency response at omega radians per sample."""
        return self._T.evaluate(np.exp(-1j * np.asarray(omega, dtype=np.float64)))

    def group_delay(self, omega):
        """Group delay in samples at omega radians per sample."""
        return self._T.discrete_time_group_delay(omega)

    def __str__(self) -> str:
        out = "IIR Filter:\n"
        for i, section in enumerate(self.sections):
            out += f"\n  Section {i}\n{section}\n"
        return out
