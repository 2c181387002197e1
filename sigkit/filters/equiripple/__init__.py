"""
Equiripple FIR design by the Parks-McClellan (Remez exchange) algorithm.

Modules:
    - grid: dense frequency grid and extremal set
    - designer: Remez exchange and coefficient extraction
    - base: abstract filter with grid construction and filtering
    - fir_types: linear-phase symmetry classes I-IV
    - designs: lowpass, highpass, half-band, differentiators, Hilbert transformers
"""

from .grid import DesignGrid
from .designer import RemezResult, remez, calculate_coefficients, compute_delta, MAX_ITERATIONS
from .base import EquirippleFIRFilter
from .fir_types import FIRTypeI, FIRTypeII, FIRTypeIII, FIRTypeIV
from .designs import (
    EquirippleLowpass,
    EquirippleHighpass,
    EquirippleHalfBandPrototype,
    EquirippleHalfBand,
    CenteredDifferentiator,
    CenteredHilbertTransform,
    StaggeredDifferentiator,
    StaggeredHilbertTransform,
)

__all__ = [
    'DesignGrid',
    'RemezResult',
    'remez',
    'calculate_coefficients',
    'compute_delta',
    'MAX_ITERATIONS',
    'EquirippleFIRFilter',
    'FIRTypeI',
    'FIRTypeII',
    'FIRTypeIII',
    'FIRTypeIV',
    'EquirippleLowpass',
    'EquirippleHighpass',
    'EquirippleHalfBandPrototype',
    'EquirippleHalfBand',
    'CenteredDifferentiator',
    'CenteredHilbertTransform',
    'StaggeredDifferentiator',
    'StaggeredHilbertTransform',
]
