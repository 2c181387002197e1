"""
Butterworth and Chebyshev digital filters.

Chebyshev designs take epsilon instead of decibels: a type I passband ripple
of rp dB is epsilon = sqrt(10^(rp/10) - 1); a type II stopband attenuation
of rs dB is epsilon = 1 / sqrt(10^(rs/10) - 1).
"""

from .analog import AnalogButterworth, AnalogChebyshevI, AnalogChebyshevII
from .iir_filter import IIRFilter, PassbandType


class Butterworth(IIRFilter):
    """Maximally flat response; -3 dB at the band edge(s)."""

    def __init__(self, order: int, passband_type: PassbandType, f1: float, f2: float, delta: float):
        super().__init__(AnalogButterworth(order), passband_type, f1, f2, delta)


class ChebyshevI(IIRFilter):
    """Equiripple passband ending at the band edge(s)."""

    def __init__(self, order: int, epsilon: float, passband_type: PassbandType,
                 f1: float, f2: float, delta: float):
        super().__init__(AnalogChebyshevI(order, epsilon), passband_type, f1, f2, delta)


class ChebyshevII(IIRFilter):
    """Equiripple stopband starting at the band edge(s); monotone passband."""

    def __init__(self, order: int, epsilon: float, passband_type: PassbandType,
                 f1: float, f2: float, delta: float):
        super().__init__(AnalogChebyshevII(order, epsilon), passband_type, f1, f2, delta)
