"""
Unit Tests for Windows and Sequence Helpers

Run:
    pytest tests/test_windows_sequence.py -v
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from scipy.signal import get_window as scipy_get_window

from sigkit.dsp_core import (
    Window, HammingWindow, HanningWindow, get_window,
    circular_shift, zero_shift, stretch, decimate, alias, rmean,
)


class TestWindows:
    """Test suite for data windows."""

    def test_hamming_matches_scipy(self):
        w = HammingWindow(33)
        assert len(w) == 33
        assert np.allclose(w.array, scipy_get_window('hamming', 33, fftbins=False))
        assert np.isclose(w.array[0], 0.08)
        assert np.isclose(w.array[16], 1.0)

    def test_hann_matches_scipy(self):
        w = HanningWindow(16)
        assert np.allclose(w.array, scipy_get_window('hann', 16, fftbins=False))
        assert np.isclose(w.array[0], 0.0)

    def test_get_window(self):
        assert isinstance(get_window('hamming', 8), HammingWindow)
        assert isinstance(get_window('hann', 8), HanningWindow)
        assert isinstance(get_window('hanning', 8), HanningWindow)

        custom = get_window(np.ones(8), 8)
        assert np.array_equal(custom.array, np.ones(8))

        with pytest.raises(ValueError):
            get_window('blackman', 8)
        with pytest.raises(ValueError):
            get_window(np.ones(7), 8)

    def test_array_is_copy(self):
        w = HammingWindow(8)
        w.array[:] = 0.0
        assert w.array.max() > 0.9

    def test_times_equals(self):
        w = Window(np.ones(4))
        w.times_equals(np.array([1.0, 2.0, 3.0, 4.0]))
        assert np.array_equal(w.array, [1.0, 2.0, 3.0, 4.0])
        with pytest.raises(ValueError):
            w.times_equals(np.ones(3))

    def test_window_segment(self):
        """Samples outside the data are treated as zeros."""
        w = Window(np.array([1.0, 2.0, 3.0]))
        x = np.array([1.0, 1.0, 1.0, 1.0])

        assert np.array_equal(w.window(x, 1), [1.0, 2.0, 3.0])
        assert np.array_equal(w.window(x, -1), [0.0, 2.0, 3.0])
        assert np.array_equal(w.window(x, 3), [1.0, 0.0, 0.0])
        assert np.array_equal(w.window(x, 10), [0.0, 0.0, 0.0])

    def test_too_short(self):
        with pytest.raises(ValueError):
            HammingWindow(1)


class TestSequence:
    """Test suite for sequence helpers."""

    def test_circular_shift(self):
        y = np.arange(5.0)
        assert np.array_equal(circular_shift(y, 2), [3.0, 4.0, 0.0, 1.0, 2.0])
        assert np.array_equal(circular_shift(y, -1), [1.0, 2.0, 3.0, 4.0, 0.0])
        assert np.array_equal(y, np.arange(5.0))

    def test_zero_shift(self):
        y = np.arange(1.0, 6.0)
        assert np.array_equal(zero_shift(y, 2), [0.0, 0.0, 1.0, 2.0, 3.0])
        assert np.array_equal(zero_shift(y, -2), [3.0, 4.0, 5.0, 0.0, 0.0])
        assert np.array_equal(zero_shift(y, 0), y)
        assert np.array_equal(zero_shift(y, 7), np.zeros(5))

    def test_stretch(self):
        y = np.array([1.0, 2.0, 3.0])
        assert np.array_equal(stretch(y, 2), [1.0, 0.0, 2.0, 0.0, 3.0, 0.0])
        assert np.array_equal(stretch(y, 3, n_out=7), [1.0, 0.0, 0.0, 2.0, 0.0, 0.0, 0.0])
        assert np.array_equal(stretch(y, 3, n_out=5), [1.0, 0.0, 0.0, 0.0, 0.0])
        with pytest.raises(ValueError):
            stretch(y, 0)

    def test_decimate(self):
        y = np.arange(10.0)
        assert np.array_equal(decimate(y, 3), [0.0, 3.0, 6.0])
        assert np.array_equal(decimate(stretch(y, 4), 4), y)

    def test_alias(self):
        y = np.arange(7.0)
        assert np.array_equal(alias(y, 3), [0.0 + 3.0 + 6.0, 1.0 + 4.0, 2.0 + 5.0])

    def test_rmean(self):
        y = rmean(np.array([1.0, 2.0, 3.0, 6.0]))
        assert np.isclose(y.mean(), 0.0)
        assert np.allclose(y, [-2.0, -1.0, 0.0, 3.0])


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
