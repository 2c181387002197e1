"""
Filtering: Lagrange interpolation, polynomial and rational algebra,
overlap-add convolution, equiripple FIR design, IIR design, interpolation
and analytic signals.
"""

from .lagrange import LagrangePolynomial, barycentric_weights, chebyshev_nodes
from .polynomial import Polynomial
from .rational import Rational
from .overlap_add import OverlapAdd
from .interpolator import Interpolator
from .analytic_signal import ComplexAnalyticSignal
from .equiripple import (
    EquirippleLowpass,
    EquirippleHighpass,
    EquirippleHalfBandPrototype,
    EquirippleHalfBand,
    CenteredDifferentiator,
    CenteredHilbertTransform,
    StaggeredDifferentiator,
    StaggeredHilbertTransform,
)
from .iir import (
    PassbandType,
    IIRFilter,
    Butterworth,
    ChebyshevI,
    ChebyshevII,
    Allpass,
    ThiranAllpass,
)

__all__ = [
    'LagrangePolynomial',
    'barycentric_weights',
    'chebyshev_nodes',
    'Polynomial',
    'Rational',
    'OverlapAdd',
    'Interpolator',
    'ComplexAnalyticSignal',
    'EquirippleLowpass',
    'EquirippleHighpass',
    'EquirippleHalfBandPrototype',
    'EquirippleHalfBand',
    'CenteredDifferentiator',
    'CenteredHilbertTransform',
    'StaggeredDifferentiator',
    'StaggeredHilbertTransform',
    'PassbandType',
    'IIRFilter',
    'Butterworth',
    'ChebyshevI',
    'ChebyshevII',
    'Allpass',
    'ThiranAllpass',
]
