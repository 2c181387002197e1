"""
Unit Tests for Design Configuration and Logging

Run:
    pytest tests/test_config.py -v
"""

import sys
import os
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
import yaml

from sigkit.utils import (
    DesignConfig, DEFAULT_CONFIG, load_config, config_from_dict,
    make_rng, get_seed_from_config, setup_logging, get_logger,
)


class TestDesignConfig:

    def test_defaults(self):
        assert DEFAULT_CONFIG.grid_density == 20
        assert DEFAULT_CONFIG.max_iterations == 25
        assert DEFAULT_CONFIG.min_nfft == 64
        assert DEFAULT_CONFIG.seed is None

    @pytest.mark.parametrize("kwargs", [
        {'grid_density': 2},
        {'max_iterations': 0},
        {'band_edge_tolerance': -1.0},
        {'min_nfft': 48},
        {'min_nfft': 8},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            DesignConfig(**kwargs)

    def test_with_overrides(self):
        config = DesignConfig(seed=1).with_overrides(seed=None, max_iterations=10)
        assert config.seed == 1
        assert config.max_iterations == 10

    def test_frozen(self):
        with pytest.raises(Exception):
            DEFAULT_CONFIG.grid_density = 4


class TestLoadConfig:

    def test_design_section(self, tmp_path):
        path = tmp_path / 'design.yaml'
        path.write_text(yaml.safe_dump({
            'design': {'grid_density': 16, 'max_iterations': 40},
            'seed': 1234,
        }))
        config = load_config(path)
        assert config.grid_density == 16
        assert config.max_iterations == 40
        assert config.seed == 1234

    def test_top_level_keys(self, tmp_path):
        path = tmp_path / 'design.yaml'
        path.write_text("min_nfft: 128\nevaluation:\n  seed: 7\n")
        config = load_config(str(path))
        assert config.min_nfft == 128
        assert config.seed == 7
        assert config.grid_density == 20

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text("")
        assert load_config(path) == DEFAULT_CONFIG

    def test_unknown_key(self):
        with pytest.raises(ValueError):
            config_from_dict({'design': {'grid_densty': 20}})

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            config_from_dict([1, 2, 3])


class TestSeed:

    def test_get_seed_from_config(self):
        assert get_seed_from_config({'seed': '5'}) == 5
        assert get_seed_from_config({'evaluation': {'seed': 9}}) == 9
        assert get_seed_from_config({}) is None
        assert get_seed_from_config(None) is None

    def test_make_rng(self):
        a = make_rng(3).integers(0, 1000, size=10)
        b = make_rng(3).integers(0, 1000, size=10)
        assert np.array_equal(a, b)

        g = np.random.default_rng(0)
        assert make_rng(g) is g


class TestLogging:

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / 'logs' / 'design.log'
        logger = setup_logging(log_file=str(log_file), level=logging.DEBUG, name='sigkit.test')
        logger.debug("grid built")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "grid built" in log_file.read_text()
        assert len(logger.handlers) == 2

        # repeated setup replaces handlers
        logger = setup_logging(name='sigkit.test')
        assert len(logger.handlers) == 1

    def test_get_logger(self):
        assert get_logger('sigkit.filters') is logging.getLogger('sigkit.filters')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
