"""
Unit Tests for the Command Line Designer

Run:
    pytest tests/test_cli.py -v
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest

from sigkit.cli import main, build_parser


class TestCLI:

    def test_lowpass(self, tmp_path):
        output = tmp_path / 'lowpass.txt'
        code = main(['--seed', '1', '--quiet', '--output', str(output), 'lowpass', '--n', '10'])
        assert code == 0

        h = np.loadtxt(output)
        assert h.shape == (21,)
        assert np.allclose(h, h[::-1], atol=1e-10)

    def test_halfband(self, tmp_path):
        output = tmp_path / 'halfband.txt'
        assert main(['--quiet', '--output', str(output), 'halfband', '--n', '6', '--omega-p', '0.2']) == 0
        assert np.loadtxt(output).shape == (23,)

    @pytest.mark.parametrize("argv", [
        ['highpass', '--n', '12'],
        ['hilbert', '--n', '20', '--omega1', '0.05', '--omega2', '0.95'],
        ['hilbert', '--n', '10', '--omega1', '0.1', '--staggered'],
        ['differentiator', '--n', '10', '--omega-p', '0.7'],
        ['differentiator', '--n', '10', '--staggered'],
    ])
    def test_designs(self, argv):
        assert main(argv) == 0

    def test_invalid_design(self):
        assert main(['lowpass', '--omega-p', '0.4', '--omega-s', '0.3']) == 2

    def test_iir(self, tmp_path):
        output = tmp_path / 'sos.txt'
        code = main(['--quiet', '--output', str(output), 'iir', '--family', 'chebyshev2', '--order', '5',
                     '--passband', 'bandpass', '--f1', '1', '--f2', '3'])
        assert code == 0

        sos = np.loadtxt(output)
        assert sos.shape == (5, 6)
        assert np.allclose(sos[:, 3], 1.0)

    @pytest.mark.parametrize("family", ['butterworth', 'chebyshev1'])
    def test_iir_families(self, family):
        assert main(['iir', '--family', family, '--passband', 'highpass', '--f1', '3']) == 0

    def test_invalid_iir(self):
        assert main(['iir', '--passband', 'lowpass', '--f2', '12', '--delta', '0.05']) == 2

    def test_config_and_log_file(self, tmp_path):
        config = tmp_path / 'design.yaml'
        config.write_text("design:\n  grid_density: 16\n  max_iterations: 30\nseed: 5\n")
        log_file = tmp_path / 'design.log'

        assert main(['--config', str(config), '--log-file', str(log_file), '--quiet', 'lowpass']) == 0
        text = log_file.read_text()
        assert "EquirippleLowpass DESIGN" in text
        assert "grid_density: 16" in text

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
