"""
Real-sequence DFT built on a half-length split-radix complex DFT.

A length-N real sequence is packed into a length-N/2 complex sequence (even
samples as real parts, odd samples as imaginary parts), transformed, and
separated with one pass of O(N) butterflies.

Packed spectrum layout (length N):

    index     0      1  ...  N/2-1       N/2      N/2+1   ...   N-1
    value   Xr[0]  Xr[1] ... Xr[N/2-1]  Xr[N/2]  Xi[N/2-1] ...  Xi[1]

DC and Nyquist bins are purely real; the imaginary parts are stored in
descending index order so that X[N-k] holds Xi[k].
"""

import numpy as np

from . import kernels
from .cdft import ComplexDFT, _check_buffer


class RealDFT:
    """
    Forward and inverse DFT of one fixed power-of-two length N >= 16 for
    real sequences, using the packed spectrum format.

    Owns half-length scratch buffers, so an instance must not be evaluated
    from several threads at once.

    Args:
        log2n: Base-2 logarithm of the transform length (>= 4)
    """

    def __init__(self, log2n: int):
        if log2n < 4:
            raise ValueError(f"DFT size must be >= 16, got log2n={log2n}")

        self.log2n = log2n
        self.n = 1 << log2n
        n2 = self.n // 2
        n4 = self.n // 4

        self._zr = np.zeros(n2)
        self._zi = np.zeros(n2)
        self._Zr = np.zeros(n2)
        self._Zi = np.zeros(n2)

        i = np.arange(n4, dtype=np.float64)
        self._s = np.sin(2.0 * np.pi / self.n * i)
        self._c = np.cos(2.0 * np.pi / self.n * i)

        self._dft = ComplexDFT(log2n - 1)

    def __len__(self) -> int:
        return self.n

    def evaluate(self, x, X: np.ndarray) -> None:
        """Forward DFT of the real sequence x into the packed spectrum X."""
        x = _check_buffer('x', x, self.n)
        X = _check_buffer('X', X, self.n, writable=True)

        kernels.deinterleave(x, self._zr, self._zi)
        self._dft.evaluate(self._zr, self._zi, self._Zr, self._Zi)
        kernels.real_forward_butterflies(self._Zr, self._Zi, X, self._c, self._s)

    def evaluate_inverse(self, X, x: np.ndarray) -> None:
        """Inverse DFT of the packed spectrum X into the real sequence x."""
        X = _check_buffer('X', X, self.n)
        x = _check_buffer('x', x, self.n, writable=True)

        kernels.real_inverse_butterflies(X, self._Zr, self._Zi, self._c, self._s)
        # forward transform of the spectrum, inverted by index reversal below
        self._dft.evaluate(self._Zr, self._Zi, self._zr, self._zi)
        kernels.reinterleave_reversed(self._zr, self._zi, x, 1.0 / self.n)

    @staticmethod
    def dft_product(kernel: np.ndarray, transform: np.ndarray, sign: float = 1.0) -> None:
        """
        Multiply two packed real spectra, result into transform.

        Bins 0 and N/2 are real and multiply directly; the pairs (i, N-i) are
        treated as complex numbers.

        Args:
            kernel: Packed spectrum of the filter kernel
            transform: Packed spectrum of the data (overwritten)
            sign: +1 for convolution, -1 for correlation
        """
        if kernel.shape != transform.shape:
            raise ValueError("kernel and transform arrays must have the same size")
        kernels.packed_product(kernel, transform, float(sign))
