"""
Overlap-add block convolution with an FIR kernel.
"""

import numpy as np

from sigkit.dsp_core import RealDFT


def _fft_size(length: int, minimum: int = 16):
    """Smallest power of two >= max(length, minimum), with its log2."""
    nfft = minimum
    log2nfft = minimum.bit_length() - 1
    while nfft < length:
        nfft *= 2
        log2nfft += 1
    return nfft, log2nfft


class OverlapAdd:
    """
    Streaming FIR filter that convolves consecutive fixed-size blocks by FFT.

    Each call to ``filter`` consumes one block of ``block_size`` samples and
    returns the next ``block_size`` output samples; ``flush`` drains the
    remaining tail of the convolution one block at a time.

    Args:
        kernel: FIR filter coefficients
        block_size: Number of samples per block
    """

    def __init__(self, kernel: np.ndarray, block_size: int, _master: 'OverlapAdd' = None):
        kernel = np.asarray(kernel, dtype=np.float64)
        if kernel.ndim != 1 or kernel.shape[0] == 0:
            raise ValueError(f"kernel must be a non-empty 1D array, got shape {kernel.shape}")
        if block_size < 1:
            raise ValueError(f"block_size must be >= 1, got {block_size}")

        self.kernel_length = kernel.shape[0]
        self.block_size = block_size

        if _master is None:
            self.nfft, log2nfft = _fft_size(kernel.shape[0] + block_size - 1)
            self._fft = RealDFT(log2nfft)
        else:
            self.nfft = _master.nfft
            self._fft = _master._fft

        self._shift_register = np.zeros(self.nfft)
        self._segment = np.zeros(self.nfft)
        self._transform = np.zeros(self.nfft)
        self._kernel = np.zeros(self.nfft)

        self._segment[:kernel.shape[0]] = kernel
        self._fft.evaluate(self._segment, self._kernel)

    @classmethod
    def from_master(cls, kernel: np.ndarray, master: 'OverlapAdd') -> 'OverlapAdd':
        """
        Create a filter that shares ``master``'s transform object.

        The kernel must have the master's length.  Filters sharing a transform
        must not be run concurrently.
        """
        kernel = np.asarray(kernel, dtype=np.float64)
        if kernel.shape[0] != master.kernel_length:
            raise ValueError(
                f"Slave kernel length {kernel.shape[0]} inconsistent with master kernel length {master.kernel_length}"
            )
        return cls(kernel, master.block_size, _master=master)

    def filter(self, block: np.ndarray) -> np.ndarray:
        """Filter one block; returns block_size output samples."""
        block = np.asarray(block, dtype=np.float64)
        if block.shape != (self.block_size,):
            raise ValueError(f"Data array length {block.shape} not equal to blockSize {self.block_size}")

        self._segment[:] = 0.0
        self._segment[:self.block_size] = block

        # circular convolution by dft
        self._fft.evaluate(self._segment, self._transform)
        RealDFT.dft_product(self._kernel, self._transform, 1.0)
        self._fft.evaluate_inverse(self._transform, self._segment)

        self._shift_register += self._segment
        return self._advance()

    def flush(self) -> np.ndarray:
        """Return the next block_size samples of the tail without new input."""
        return self._advance()

    def reset(self) -> None:
        self._shift_register[:] = 0.0

    def _advance(self) -> np.ndarray:
        out = self._shift_register[:self.block_size].copy()
        self._shift_register[:-self.block_size] = self._shift_register[self.block_size:]
        self._shift_register[-self.block_size:] = 0.0
        return out
