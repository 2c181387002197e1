"""
Elementary sequence operations used by the filtering code.

All functions return new arrays; inputs are never modified.
"""

import numpy as np


def circular_shift(y: np.ndarray, shift: int) -> np.ndarray:
    """
    Rotate a sequence.

    A positive shift moves samples to the right (towards higher indices),
    wrapping the tail around to the front; a negative shift moves left.
    """
    y = np.asarray(y)
    if y.shape[0] == 0:
        return y.copy()
    return np.roll(y, shift)


def zero_shift(y: np.ndarray, shift: int) -> np.ndarray:
    """
    Shift a sequence and feed in zeros.

    Unlike ``circular_shift`` the samples shifted off the end are lost.  A
    negative shift is to the left (zeros enter from the right).
    """
    y = np.asarray(y)
    out = np.zeros_like(y)
    n = y.shape[0]
    if abs(shift) >= n:
        return out
    if shift > 0:
        out[shift:] = y[:n - shift]
    elif shift < 0:
        out[:n + shift] = y[-shift:]
    else:
        out[:] = y
    return out


def stretch(y: np.ndarray, rate: int, n_out: int = None) -> np.ndarray:
    """
    Upsample by zero insertion: out[i*rate] = y[i], zeros elsewhere.

    Args:
        y: Input sequence
        rate: Stretch factor (>= 1)
        n_out: Output length (default: len(y) * rate)
    """
    if rate < 1:
        raise ValueError(f"rate must be >= 1, got {rate}")
    y = np.asarray(y)
    if n_out is None:
        n_out = y.shape[0] * rate
    out = np.zeros(n_out, dtype=np.result_type(y.dtype, np.float64))
    n = min(y.shape[0], n_out // rate)
    out[:n * rate:rate] = y[:n]
    return out


def decimate(y: np.ndarray, rate: int) -> np.ndarray:
    """Keep every rate-th sample (no anti-alias filtering)."""
    if rate < 1:
        raise ValueError(f"rate must be >= 1, got {rate}")
    y = np.asarray(y)
    return y[:(y.shape[0] // rate) * rate:rate].copy()


def alias(y: np.ndarray, n: int) -> np.ndarray:
    """Wrap a sequence onto n samples by summing every n-sample segment."""
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    y = np.asarray(y, dtype=np.float64)
    out = np.zeros(n)
    np.add.at(out, np.arange(y.shape[0]) % n, y)
    return out


def rmean(y: np.ndarray) -> np.ndarray:
    """Remove the mean."""
    y = np.asarray(y, dtype=np.float64)
    return y - y.mean()
