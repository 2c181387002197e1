"""
Unit Tests for Block Filtering

Validates overlap-add streaming convolution, integer-factor interpolation and
the complex analytic signal.

Run:
    pytest tests/test_filters.py -v
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest

from sigkit.filters import OverlapAdd, Interpolator, ComplexAnalyticSignal


class TestOverlapAdd:
    """Test suite for overlap-add convolution."""

    def test_streaming_matches_convolve(self):
        rng = np.random.default_rng(0)
        h = rng.standard_normal(20)
        x = rng.standard_normal(80)

        ola = OverlapAdd(h, 16)
        assert ola.nfft == 64

        out = [ola.filter(x[i:i + 16]) for i in range(0, 80, 16)]
        out += [ola.flush(), ola.flush()]
        y = np.concatenate(out)

        direct = np.convolve(x, h)
        assert np.allclose(y[:99], direct, atol=1e-10)
        assert np.allclose(y[99:], 0.0, atol=1e-10)

    def test_reset(self):
        rng = np.random.default_rng(1)
        h = rng.standard_normal(8)
        block = rng.standard_normal(16)

        ola = OverlapAdd(h, 16)
        first = ola.filter(block)
        ola.filter(block)
        ola.reset()
        assert np.allclose(ola.filter(block), first, atol=1e-12)

    def test_from_master(self):
        rng = np.random.default_rng(2)
        h1 = rng.standard_normal(12)
        h2 = rng.standard_normal(12)
        x = rng.standard_normal(32)

        master = OverlapAdd(h1, 32)
        slave = OverlapAdd.from_master(h2, master)
        assert slave.nfft == master.nfft

        assert np.allclose(master.filter(x), np.convolve(x, h1)[:32], atol=1e-10)
        assert np.allclose(slave.filter(x), np.convolve(x, h2)[:32], atol=1e-10)

    def test_from_master_length_mismatch(self):
        master = OverlapAdd(np.ones(12), 32)
        with pytest.raises(ValueError):
            OverlapAdd.from_master(np.ones(10), master)

    def test_wrong_block_length(self):
        ola = OverlapAdd(np.ones(4), 16)
        with pytest.raises(ValueError):
            ola.filter(np.zeros(15))

    def test_invalid_construction(self):
        with pytest.raises(ValueError):
            OverlapAdd(np.zeros(0), 16)
        with pytest.raises(ValueError):
            OverlapAdd(np.ones(4), 0)


class TestInterpolator:
    """Test suite for windowed-sinc interpolation."""

    def test_kernel(self):
        interp = Interpolator(2, 4, 32)
        k = interp.kernel
        assert k.shape == (17,)
        assert np.isclose(k[8], 1.0)
        assert np.allclose(k, k[::-1])
        # sinc zeros fall on the input sample positions
        assert np.allclose(k[8 + 2 * np.arange(1, 5)], 0.0, atol=1e-12)

    def test_passes_input_samples(self):
        """Every rate-th output (after the kernel delay) is an input sample."""
        rate, design_factor, block_size = 2, 4, 32
        half = rate * design_factor
        x = np.random.default_rng(3).standard_normal(4 * block_size)

        interp = Interpolator(rate, design_factor, block_size)
        y = np.concatenate([interp.interpolate(x[i:i + block_size]) for i in range(0, x.shape[0], block_size)])
        assert y.shape == (x.shape[0] * rate,)

        k = np.arange((y.shape[0] - half) // rate)
        assert np.allclose(y[half + rate * k], x[k], atol=1e-9)

    def test_smooth_interpolation(self):
        """A slow sinusoid is reconstructed between samples."""
        rate, design_factor, block_size = 4, 8, 64
        half = rate * design_factor
        f = 0.02
        x = np.sin(2.0 * np.pi * f * np.arange(4 * block_size))

        interp = Interpolator(rate, design_factor, block_size)
        y = np.concatenate([interp.interpolate(x[i:i + block_size]) for i in range(0, x.shape[0], block_size)])

        t = (np.arange(y.shape[0]) - half) / rate
        expected = np.sin(2.0 * np.pi * f * t)
        middle = slice(2 * half, y.shape[0] - 2 * half)
        assert np.abs(y[middle] - expected[middle]).max() < 0.02

    def test_invalid(self):
        with pytest.raises(ValueError):
            Interpolator(0, 4, 32)
        interp = Interpolator(2, 4, 32)
        with pytest.raises(ValueError):
            interp.interpolate(np.zeros(31))


class TestComplexAnalyticSignal:
    """Test suite for the Hilbert-transform analytic signal."""

    def test_envelope_of_sinusoid(self):
        x = np.cos(2.0 * np.pi * 0.1 * np.arange(512))
        cas = ComplexAnalyticSignal(x)

        assert cas.real_part.shape == (512,)
        assert cas.imag_part.shape == (512,)
        assert np.array_equal(cas.real_part, x)

        env = cas.envelope
        assert np.abs(env[100:400] - 1.0).max() < 0.05

    def test_quadrature(self):
        """The imaginary part is in quadrature with the real part."""
        n = np.arange(1024)
        x = np.cos(2.0 * np.pi * 0.125 * n)
        cas = ComplexAnalyticSignal(x)

        middle = slice(200, 800)
        im = cas.imag_part[middle]
        assert abs(np.dot(im, x[middle])) / np.dot(x[middle], x[middle]) < 0.05
        assert abs(np.abs(im).max() - 1.0) < 0.05

    def test_modulated_envelope(self):
        n = np.arange(2048)
        envelope = 1.0 + 0.5 * np.cos(2.0 * np.pi * 0.002 * n)
        x = envelope * np.cos(2.0 * np.pi * 0.15 * n)

        env = ComplexAnalyticSignal(x).envelope
        assert np.abs(env[200:1800] - envelope[200:1800]).max() < 0.08

    def test_returns_copies(self):
        cas = ComplexAnalyticSignal(np.ones(64))
        cas.real_part[:] = 0.0
        assert np.all(cas.real_part == 1.0)

    def test_rejects_2d(self):
        with pytest.raises(ValueError):
            ComplexAnalyticSignal(np.zeros((4, 4)))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
