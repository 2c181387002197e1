"""
DSP Core Module - Split-Radix FFT, Real DFT, Windows and Sequence Helpers

This module provides the transform engine used by the filtering code:

Modules:
    - kernels: numba-compiled split-radix butterflies and real-DFT passes
    - cdft: complex DFT objects (split-radix, power-of-two lengths >= 8)
    - rdft: real-sequence DFT objects with the packed spectrum format
    - fft: array-in/array-out wrappers
    - window: Hamming / Hann data windows
    - sequence: shifts, stretching, decimation
"""

from .cdft import ComplexDFT, TransformStateError, UnlinkedTransformError, split_radix_tables
from .rdft import RealDFT
from .fft import cdft, icdft, rdft, irdft, unpack_real_spectrum, pack_real_spectrum
from .window import Window, HammingWindow, HanningWindow, get_window
from .sequence import circular_shift, zero_shift, stretch, decimate, alias, rmean

__all__ = [
    # Transform objects
    'ComplexDFT',
    'RealDFT',
    'TransformStateError',
    'UnlinkedTransformError',
    'split_radix_tables',
    # Functional transforms
    'cdft',
    'icdft',
    'rdft',
    'irdft',
    'unpack_real_spectrum',
    'pack_real_spectrum',
    # Windows
    'Window',
    'HammingWindow',
    'HanningWindow',
    'get_window',
    # Sequence helpers
    'circular_shift',
    'zero_shift',
    'stretch',
    'decimate',
    'alias',
    'rmean',
]
