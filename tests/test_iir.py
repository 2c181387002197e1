"""
Unit Tests for IIR Filters

Validates the analog prototypes against their closed-form magnitude
responses, the bilinear-transform designs against scipy.signal
(butter/cheby1/cheby2, freqz_zpk, sosfilt, group_delay), streaming through
second-order sections, and the lattice and Thiran allpass filters.

Run:
    pytest tests/test_iir.py -v
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from numpy.polynomial import chebyshev
from scipy import signal

from sigkit.filters import Polynomial
from sigkit.filters.iir import (
    AnalogButterworth,
    AnalogChebyshevI,
    AnalogChebyshevII,
    SecondOrderSection,
    PassbandType,
    Butterworth,
    ChebyshevI,
    ChebyshevII,
    Allpass,
    ThiranAllpass,
    step_up,
)

DELTA = 0.05        # 20 Hz sampling, Nyquist at 10 Hz
RP = 1.0            # Chebyshev I passband ripple, dB
RS = 40.0           # Chebyshev II stopband attenuation, dB
EPS_I = np.sqrt(10.0 ** (RP / 10.0) - 1.0)
EPS_II = 1.0 / np.sqrt(10.0 ** (RS / 10.0) - 1.0)

# (passband, f1, f2, scipy Wn, scipy btype); Wn = 2 f delta
BANDS = [
    (PassbandType.LOWPASS, 0.0, 2.0, 0.2, 'lowpass'),
    (PassbandType.HIGHPASS, 3.0, 0.0, 0.3, 'highpass'),
    (PassbandType.BANDPASS, 2.0, 4.0, [0.2, 0.4], 'bandpass'),
]


def _designs(order, passband, f1, f2, wn, btype):
    """(sigkit design, scipy zpk, scipy sos) for every family."""
    return [
        (Butterworth(order, passband, f1, f2, DELTA),
         signal.butter(order, wn, btype=btype, output='zpk'),
         signal.butter(order, wn, btype=btype, output='sos')),
        (ChebyshevI(order, EPS_I, passband, f1, f2, DELTA),
         signal.cheby1(order, RP, wn, btype=btype, output='zpk'),
         signal.cheby1(order, RP, wn, btype=btype, output='sos')),
        (ChebyshevII(order, EPS_II, passband, f1, f2, DELTA),
         signal.cheby2(order, RS, wn, btype=btype, output='zpk'),
         signal.cheby2(order, RS, wn, btype=btype, output='sos')),
    ]


def _impulse(n: int = 256) -> np.ndarray:
    x = np.zeros(n)
    x[0] = 1.0
    return x


class TestAnalogPrototypes:
    """Closed-form magnitude responses of the lowpass prototypes."""

    @pytest.mark.parametrize("order", [1, 2, 5, 6])
    def test_butterworth(self, order):
        omega = np.linspace(0.0, 3.0, 31)
        H = AnalogButterworth(order).evaluate(omega)
        assert np.allclose(np.abs(H) ** 2, 1.0 / (1.0 + omega ** (2 * order)), atol=1e-12)

    @pytest.mark.parametrize("order", [3, 4])
    def test_chebyshev_i(self, order):
        omega = np.linspace(0.0, 2.0, 41)
        T = chebyshev.chebval(omega, [0.0] * order + [1.0])
        H = AnalogChebyshevI(order, EPS_I).evaluate(omega)
        assert np.allclose(np.abs(H) ** 2, 1.0 / (1.0 + EPS_I ** 2 * T ** 2), atol=1e-10)

    @pytest.mark.parametrize("order", [3, 4])
    def test_chebyshev_ii(self, order):
        omega = np.linspace(0.1, 3.0, 30)
        T2 = chebyshev.chebval(1.0 / omega, [0.0] * order + [1.0]) ** 2
        H = AnalogChebyshevII(order, EPS_II).evaluate(omega)
        expected = EPS_II ** 2 * T2 / (1.0 + EPS_II ** 2 * T2)
        assert np.allclose(np.abs(H) ** 2, expected, atol=1e-10)
        assert np.isclose(abs(AnalogChebyshevII(order, EPS_II).evaluate(0.0)), 1.0)

    def test_section_structure(self):
        assert AnalogButterworth(5).num_sections == 3
        assert AnalogButterworth(4).num_sections == 2
        assert AnalogChebyshevII(4, EPS_II).sections[0].order == (2, 2)

    def test_lowpass_transformation(self):
        lp = AnalogButterworth(4).lptolp(2.5)
        assert np.isclose(abs(lp.evaluate(2.5)), 1.0 / np.sqrt(2.0))
        assert np.isclose(abs(lp.evaluate(0.0)), 1.0)

    def test_highpass_transformation(self):
        hp = AnalogButterworth(3).lptohp(2.0)
        assert np.isclose(abs(hp.evaluate(2.0)), 1.0 / np.sqrt(2.0))
        assert abs(hp.evaluate(1e-3)) < 1e-6
        assert np.isclose(abs(hp.evaluate(1e4)), 1.0, atol=1e-9)

    @pytest.mark.parametrize("order", [3, 4])
    def test_bandpass_transformation(self, order):
        w1, w2 = 1.0, 4.0
        bp = AnalogButterworth(order).lptobp(w1, w2)
        assert bp.num_sections == order
        assert np.isclose(abs(bp.evaluate(np.sqrt(w1 * w2))), 1.0)
        assert np.isclose(abs(bp.evaluate(w1)), 1.0 / np.sqrt(2.0))
        assert np.isclose(abs(bp.evaluate(w2)), 1.0 / np.sqrt(2.0))

    def test_chebyshev_ii_bandpass_zeros(self):
        """Stopband zeros survive the bandpass split as numerator quadratics."""
        bp = AnalogChebyshevII(4, EPS_II).lptobp(1.0, 4.0)
        assert all(section.order == (2, 2) for section in bp.sections)
        reference = AnalogChebyshevII(4, EPS_II)
        # the bandpass image of prototype frequency 1 lies at (s^2 + 4) / (3 s) = 1
        omega = (3.0 + np.sqrt(9.0 + 16.0)) / 2.0
        assert np.isclose(abs(bp.evaluate(omega)), abs(reference.evaluate(1.0)))

    def test_group_delay(self):
        omega = np.linspace(0.0, 3.0, 7)
        assert np.allclose(AnalogButterworth(1).group_delay(omega), 1.0 / (1.0 + omega ** 2))

    def test_invalid(self):
        with pytest.raises(ValueError):
            AnalogButterworth(0)
        with pytest.raises(ValueError):
            AnalogChebyshevI(4, 0.0)
        with pytest.raises(ValueError):
            AnalogChebyshevII(4, -1.0)


class TestDigitalDesigns:
    """Bilinear-transform designs against scipy.signal."""

    @pytest.mark.parametrize("order", [3, 4])
    @pytest.mark.parametrize("band", BANDS, ids=[b[4] for b in BANDS])
    def test_frequency_response(self, order, band):
        omega = np.linspace(0.01, np.pi - 0.01, 64)
        for design, (z, p, k), _ in _designs(order, *band):
            _, reference = signal.freqz_zpk(z, p, k, worN=omega)
            assert np.allclose(design.evaluate(omega), reference, atol=1e-8), type(design).__name__

    @pytest.mark.parametrize("order", [3, 4])
    @pytest.mark.parametrize("band", BANDS, ids=[b[4] for b in BANDS])
    def test_impulse_response(self, order, band):
        x = _impulse()
        for design, _, sos in _designs(order, *band):
            assert np.allclose(design.filter(x), signal.sosfilt(sos, x), atol=1e-10), type(design).__name__

    def test_section_count(self):
        assert len(Butterworth(5, PassbandType.LOWPASS, 0.0, 2.0, DELTA).sections) == 3
        assert len(Butterworth(5, PassbandType.BANDPASS, 2.0, 4.0, DELTA).sections) == 5
        assert Butterworth(4, PassbandType.LOWPASS, 0.0, 2.0, DELTA).sos.shape == (2, 6)

    def test_sos_layout(self):
        """The sos array drives scipy.signal.sosfilt to the same output."""
        design = ChebyshevI(5, EPS_I, PassbandType.BANDPASS, 1.0, 3.0, DELTA)
        x = np.random.default_rng(0).standard_normal(300)
        y = design.filter(x)
        assert np.allclose(signal.sosfilt(design.sos, x), y, atol=1e-10)
        assert np.all(design.sos[:, 3] == 1.0)

    def test_band_edges(self):
        lp = Butterworth(6, PassbandType.LOWPASS, 0.0, 2.0, DELTA)
        edge = 2.0 * np.pi * 2.0 * DELTA
        assert np.isclose(abs(lp.evaluate(0.0)), 1.0)
        assert np.isclose(abs(lp.evaluate(edge)), 1.0 / np.sqrt(2.0))
        assert abs(lp.evaluate(np.pi)) < 1e-10

        hp = ChebyshevII(5, EPS_II, PassbandType.HIGHPASS, 3.0, 0.0, DELTA)
        stop = np.linspace(0.0, 2.0 * np.pi * 3.0 * DELTA, 50)
        assert np.abs(hp.evaluate(stop)).max() <= EPS_II / np.sqrt(1.0 + EPS_II ** 2) + 1e-9

    def test_group_delay(self):
        design = Butterworth(4, PassbandType.LOWPASS, 0.0, 2.0, DELTA)
        b, a = signal.butter(4, 0.2)
        omega = np.linspace(0.05, 2.5, 20)
        _, reference = signal.group_delay((b, a), w=omega)
        assert np.allclose(design.group_delay(omega), reference, atol=1e-6)

    def test_streaming(self):
        """Consecutive blocks give the one-shot output; initialize() resets the states."""
        design = ChebyshevII(4, EPS_II, PassbandType.LOWPASS, 0.0, 2.0, DELTA)
        x = np.random.default_rng(1).standard_normal(200)

        whole = design.filter(x)
        design.initialize()
        blocks = np.concatenate([design.filter(x[:64]), design.filter(x[64:150]), design.filter(x[150:])])
        assert np.allclose(blocks, whole, atol=1e-12)

        design.initialize()
        samples = np.array([design.filter_sample(v) for v in x[:20]])
        assert np.allclose(samples, whole[:20], atol=1e-12)

    def test_passband_type_from_string(self):
        a = Butterworth(3, 'highpass', 3.0, 0.0, DELTA)
        b = Butterworth(3, PassbandType.HIGHPASS, 3.0, 0.0, DELTA)
        assert np.allclose(a.sos, b.sos)

    @pytest.mark.parametrize("args", [
        (0, PassbandType.LOWPASS, 0.0, 2.0, DELTA),       # order
        (4, PassbandType.LOWPASS, 0.0, 12.0, DELTA),      # above Nyquist
        (4, PassbandType.HIGHPASS, 0.0, 2.0, DELTA),      # highpass edge at DC
        (4, PassbandType.BANDPASS, 4.0, 2.0, DELTA),      # f1 >= f2
        (4, PassbandType.LOWPASS, 0.0, 2.0, 0.0),         # sampling interval
        (4, 'notch', 0.0, 2.0, DELTA),                    # passband type
    ])
    def test_invalid_arguments(self, args):
        with pytest.raises(ValueError):
            Butterworth(*args)


class TestSecondOrderSection:

    def test_matches_lfilter(self):
        section = SecondOrderSection(0.2, 0.4, 0.2, -0.5, 0.25)
        x = np.random.default_rng(2).standard_normal(100)
        reference = signal.lfilter([0.2, 0.4, 0.2], [1.0, -0.5, 0.25], x)
        assert np.allclose(section.filter(x), reference, atol=1e-12)

    def test_state(self):
        section = SecondOrderSection(1.0, 0.0, 0.0, -0.5, 0.0)
        section.filter(np.array([1.0]))
        assert np.allclose(section.state, [1.0, 0.0])
        section.initialize()
        assert np.allclose(section.state, 0.0)

    def test_rejects_2d(self):
        with pytest.raises(ValueError):
            SecondOrderSection(1.0, 0.0, 0.0, 0.0, 0.0).filter(np.zeros((2, 2)))


class TestAllpass:

    K = np.array([0.5, -0.3, 0.2])

    def test_unit_magnitude(self):
        omega = np.linspace(0.0, np.pi, 50)
        assert np.allclose(np.abs(Allpass(self.K).evaluate(omega)), 1.0)

    def test_rational_representation(self):
        T = Allpass(self.K).transfer_function
        a = step_up(self.K)
        assert np.allclose(T.denominator.coefficients, a)
        assert np.allclose(T.numerator.coefficients, a[::-1])

    def test_lattice_matches_transfer_function(self):
        ap = Allpass(self.K)
        T = ap.transfer_function
        x = _impulse(64)
        reference = signal.lfilter(T.numerator.coefficients, T.denominator.coefficients, x)
        assert np.allclose(ap.filter(x), reference, atol=1e-12)

    def test_streaming(self):
        ap = Allpass(self.K)
        x = np.random.default_rng(3).standard_normal(100)
        whole = ap.filter(x)
        ap.initialize()
        assert np.allclose(np.concatenate([ap.filter(x[:37]), ap.filter(x[37:])]), whole, atol=1e-12)

        ap.initialize()
        samples = np.array([ap.filter_sample(v) for v in x[:10]])
        assert np.allclose(samples, whole[:10], atol=1e-12)

    def test_from_polynomial(self):
        A = Polynomial([2.0, 0.6, 0.2])
        ap = Allpass.from_polynomial(A)
        assert ap.order == 2
        assert np.allclose(ap.transfer_function.denominator.coefficients, [1.0, 0.3, 0.1])


class TestThiranAllpass:

    def test_first_order(self):
        """N = 1: a1 = (1 - D) / (1 + D)."""
        ap = ThiranAllpass(1, 0.5)
        assert np.allclose(ap.transfer_function.denominator.coefficients, [1.0, 1.0 / 3.0])

    @pytest.mark.parametrize("order,D", [(1, 0.5), (3, 3.3), (4, 3.7)])
    def test_group_delay_at_dc(self, order, D):
        ap = ThiranAllpass(order, D)
        assert np.isclose(ap.group_delay(0.0), D, atol=1e-9)
        # maximally flat: still close to D at low frequency
        assert abs(ap.group_delay(0.05) - D) < 1e-3

    def test_fractional_delay(self):
        """A slow sinusoid comes out delayed by D samples."""
        D = 3.3
        ap = ThiranAllpass(3, D)
        f = 0.01
        n = np.arange(600)
        y = ap.filter(np.sin(2.0 * np.pi * f * n))
        expected = np.sin(2.0 * np.pi * f * (n - D))
        assert np.abs(y[200:] - expected[200:]).max() < 1e-3

    def test_invalid(self):
        with pytest.raises(ValueError):
            ThiranAllpass(0, 1.0)
        with pytest.raises(ValueError):
            ThiranAllpass(3, 1.5)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
