"""
Functional FFT Interface

Array-in/array-out wrappers around the split-radix transform objects:

    - cdft / icdft: complex DFT and its inverse (length >= 8)
    - rdft / irdft: real DFT in packed format and its inverse (length >= 16)
    - unpack_real_spectrum / pack_real_spectrum: convert between the packed
      layout and the usual one-sided N/2+1 complex spectrum

All lengths must be powers of two.  Plans and twiddle tables are cached per
size, so repeated calls only allocate the result arrays.
"""

import numpy as np

from .cdft import ComplexDFT
from .rdft import RealDFT


def _log2_length(n: int, minimum: int) -> int:
    if n < minimum or n & (n - 1) != 0:
        raise ValueError(f"Length must be a power of two >= {minimum}, got {n}")
    return n.bit_length() - 1


def cdft(x: np.ndarray) -> np.ndarray:
    """
    Compute the unnormalized complex DFT of x.

    Parameters
    ----------
    x : np.ndarray
        1-D input, real or complex, power-of-two length >= 8

    Returns
    -------
    np.ndarray
        complex128 transform in natural order

    Examples
    --------
    >>> X = cdft(np.ones(8))
    >>> # X[0] == 8, all other bins 0
    """
    x = np.asarray(x)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")
    dft = ComplexDFT(_log2_length(x.shape[0], 8))

    xr = np.ascontiguousarray(x.real, dtype=np.float64)
    xi = np.ascontiguousarray(x.imag, dtype=np.float64) if np.iscomplexobj(x) else np.zeros_like(xr)
    Xr = np.empty_like(xr)
    Xi = np.empty_like(xr)
    dft.evaluate(xr, xi, Xr, Xi)
    return Xr + 1j * Xi


def icdft(X: np.ndarray) -> np.ndarray:
    """Compute the inverse complex DFT (1/N scaling) of X."""
    X = np.asarray(X)
    if X.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {X.shape}")
    dft = ComplexDFT(_log2_length(X.shape[0], 8))

    Xr = np.ascontiguousarray(X.real, dtype=np.float64)
    Xi = np.ascontiguousarray(X.imag, dtype=np.float64) if np.iscomplexobj(X) else np.zeros_like(Xr)
    xr = np.empty_like(Xr)
    xi = np.empty_like(Xr)
    dft.evaluate_inverse(Xr, Xi, xr, xi)
    return xr + 1j * xi


def rdft(x: np.ndarray) -> np.ndarray:
    """
    Compute the DFT of a real sequence in packed format.

    Returns a float64 array of the same length as x; see
    ``unpack_real_spectrum`` for the conventional complex form.
    """
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")
    dft = RealDFT(_log2_length(x.shape[0], 16))
    X = np.empty_like(x)
    dft.evaluate(x, X)
    return X


def irdft(X: np.ndarray) -> np.ndarray:
    """Inverse of ``rdft``: packed spectrum -> real sequence."""
    X = np.asarray(X, dtype=np.float64)
    if X.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {X.shape}")
    dft = RealDFT(_log2_length(X.shape[0], 16))
    x = np.empty_like(X)
    dft.evaluate_inverse(X, x)
    return x


def unpack_real_spectrum(X: np.ndarray) -> np.ndarray:
    """
    Convert a packed real spectrum to the one-sided complex spectrum.

    Returns N/2+1 complex bins X[0..N/2], matching ``numpy.fft.rfft``.
    """
    X = np.asarray(X, dtype=np.float64)
    n = X.shape[0]
    half = n // 2

    Z = np.zeros(half + 1, dtype=np.complex128)
    Z.real = X[:half + 1]
    # X[N-k] holds the imaginary part of bin k
    Z.imag[1:half] = X[:half:-1]
    return Z


def pack_real_spectrum(Z: np.ndarray, n: int) -> np.ndarray:
    """
    Convert a one-sided complex spectrum of n/2+1 bins to packed format.

    The imaginary parts of the DC and Nyquist bins are discarded.
    """
    Z = np.asarray(Z)
    half = n // 2
    if Z.shape != (half + 1,):
        raise ValueError(f"Expected {half + 1} bins for length {n}, got shape {Z.shape}")

    X = np.empty(n, dtype=np.float64)
    X[:half + 1] = Z.real
    X[half + 1:] = Z.imag[half - 1:0:-1]
    return X
