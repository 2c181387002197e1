"""
Complex analytic signal by FIR Hilbert transform.
"""

import numpy as np

from sigkit.dsp_core import zero_shift

from .equiripple import CenteredHilbertTransform

HILBERT_HALF_ORDER = 50


class ComplexAnalyticSignal:
    """
    Analytic signal x + j*H{x} of a real sequence.

    The Hilbert transformer is equiripple over [0.03, 0.97], so components near
    DC and Nyquist are not transformed accurately.
    """

    def __init__(self, real_signal: np.ndarray):
        self._real_part = np.array(real_signal, dtype=np.float64)
        if self._real_part.ndim != 1:
            raise ValueError(f"real_signal must be 1D, got shape {self._real_part.shape}")

        transformer = CenteredHilbertTransform(HILBERT_HALF_ORDER, 0.03, 0.97)
        tmp = zero_shift(transformer.filter(self._real_part), -HILBERT_HALF_ORDER)
        self._imag_part = tmp[:self._real_part.shape[0]].copy()

    @property
    def real_part(self) -> np.ndarray:
        return self._real_part.copy()

    @property
    def imag_part(self) -> np.ndarray:
        return self._imag_part.copy()

    @property
    def envelope(self) -> np.ndarray:
        return np.sqrt(self._real_part ** 2 + self._imag_part ** 2)
