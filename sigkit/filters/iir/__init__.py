"""
IIR filters: analog prototypes, bilinear-transform designs and allpasses.

Modules:
    - analog: Butterworth / Chebyshev I / Chebyshev II prototypes and spectral transformations
    - sos: direct form II second-order section
    - iir_filter: bilinear transform into a cascade of sections
    - designs: Butterworth, ChebyshevI, ChebyshevII digital filters
    - allpass: lattice allpass and Thiran fractional-delay allpass
"""

from .analog import AnalogPrototype, AnalogButterworth, AnalogChebyshevI, AnalogChebyshevII
from .sos import SecondOrderSection
from .iir_filter import IIRFilter, PassbandType, warp
from .designs import Butterworth, ChebyshevI, ChebyshevII
from .allpass import Allpass, ThiranAllpass, step_up

__all__ = [
    'AnalogPrototype',
    'AnalogButterworth',
    'AnalogChebyshevI',
    'AnalogChebyshevII',
    'SecondOrderSection',
    'IIRFilter',
    'PassbandType',
    'warp',
    'Butterworth',
    'ChebyshevI',
    'ChebyshevII',
    'Allpass',
    'ThiranAllpass',
    'step_up',
]
