import numpy as np
from typing import Union


class Window:
    """
    Fixed-length data window.

    Args:
        w: Window coefficients (copied)
    """

    def __init__(self, w: np.ndarray):
        self._w = np.array(w, dtype=np.float64)
        if self._w.ndim != 1:
            raise ValueError(f"Window must be 1D, got shape {self._w.shape}")

    def __len__(self) -> int:
        return self._w.shape[0]

    @property
    def length(self) -> int:
        return self._w.shape[0]

    @property
    def array(self) -> np.ndarray:
        """Copy of the window coefficients."""
        return self._w.copy()

    def times_equals(self, x: np.ndarray) -> None:
        """Multiply the window coefficients by x (in place)."""
        x = np.asarray(x)
        if x.shape != self._w.shape:
            raise ValueError(f"Argument length {x.shape[0]} does not match window length {self.length}")
        self._w *= x

    def window(self, x: np.ndarray, index: int) -> np.ndarray:
        """
        Extract the windowed segment x[index:index+len(window)].

        Samples that fall outside x are treated as zeros, so index may be
        negative or run past the end of the data.
        """
        x = np.asarray(x, dtype=np.float64)
        n = self.length
        segment = np.zeros(n)
        lo = max(index, 0)
        hi = min(index + n, x.shape[0])
        if hi > lo:
            segment[lo - index:hi - index] = x[lo:hi]
        return segment * self._w


class HammingWindow(Window):
    """Symmetric Hamming window: w[n] = 0.54 + 0.46 * cos(-pi + 2*pi*n / (N-1))."""

    def __init__(self, n: int):
        if n < 2:
            raise ValueError(f"Window length must be >= 2, got {n}")
        i = np.arange(n)
        super().__init__(0.54 + 0.46 * np.cos(-np.pi + i * 2.0 * np.pi / (n - 1)))


class HanningWindow(Window):
    """Symmetric Hann window: w[n] = 0.5 + 0.5 * cos(-pi + 2*pi*n / (N-1))."""

    def __init__(self, n: int):
        if n < 2:
            raise ValueError(f"Window length must be >= 2, got {n}")
        i = np.arange(n)
        super().__init__(0.5 + 0.5 * np.cos(-np.pi + i * 2.0 * np.pi / (n - 1)))


def get_window(window: Union[str, np.ndarray], win_length: int) -> Window:
    """
    Generate a window object.

    Parameters
    ----------
    window : str or np.ndarray
        Window specification:
        - 'hamming': Hamming window
        - 'hann' / 'hanning': Hann window
        - np.ndarray: custom window (must have length win_length)
    win_length : int
        Length of the window

    Returns
    -------
    Window
        Window of length win_length
    """
    if isinstance(window, np.ndarray):
        if len(window) != win_length:
            raise ValueError(f"Custom window length {len(window)} != win_length {win_length}")
        return Window(window)

    if window == 'hamming':
        return HammingWindow(win_length)
    elif window in ('hann', 'hanning'):
        return HanningWindow(win_length)
    else:
        raise ValueError(f"Unknown window type: {window}")
