"""
Band-limited interpolation by an integer factor.
"""

import numpy as np

from sigkit.dsp_core import HammingWindow, stretch

from .overlap_add import OverlapAdd


class Interpolator:
    """
    Streaming interpolator using a Hamming-windowed sinc kernel.

    Each input block is zero-stuffed by ``rate`` and convolved by overlap-add,
    so output lags input by rate*design_factor samples.

    Args:
        rate: Interpolation factor
        design_factor: Kernel half length in units of the input sample interval
        block_size: Input samples per block
    """

    def __init__(self, rate: int, design_factor: int, block_size: int):
        if rate < 1:
            raise ValueError(f"rate must be >= 1, got {rate}")
        if design_factor < 1:
            raise ValueError(f"design_factor must be >= 1, got {design_factor}")

        self.rate = rate
        self.block_size = block_size

        half = rate * design_factor
        kernel = HammingWindow(2 * half + 1).array
        x = np.pi * np.arange(1, half + 1) / rate
        kernel[half + 1:] *= np.sin(x) / x
        kernel[:half] = kernel[half + 1:][::-1]
        self.kernel = kernel

        self._overlap_add = OverlapAdd(kernel, block_size * rate)

    def interpolate(self, block: np.ndarray) -> np.ndarray:
        """Interpolate one block; returns block_size * rate samples."""
        block = np.asarray(block, dtype=np.float64)
        if block.shape != (self.block_size,):
            raise ValueError(f"Block length {block.shape} not equal to blockSize {self.block_size}")
        return self._overlap_add.filter(stretch(block, self.rate))
