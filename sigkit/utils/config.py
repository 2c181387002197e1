"""
Design configuration.

Defaults reproduce the classic Parks-McClellan settings; a YAML file can
override them either at top level or under a ``design:`` section:

    design:
      grid_density: 20
      max_iterations: 25
    seed: 1234
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional, Union

import yaml

from .seed import get_seed_from_config


@dataclass(frozen=True)
class DesignConfig:
    """Tunable parameters of the equiripple designer."""
    grid_density: int = 20             # grid points per extremum interval
    max_iterations: int = 25           # Remez exchange iteration cap
    band_edge_tolerance: float = 1e-6  # tolerance for band membership tests
    min_nfft: int = 64                 # smallest DFT used for coefficient extraction
    seed: Optional[int] = None         # initial-extrema jitter seed

    def __post_init__(self):
        if self.grid_density < 3:
            raise ValueError(f"grid_density must be >= 3, got {self.grid_density}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if self.band_edge_tolerance < 0.0:
            raise ValueError(f"band_edge_tolerance must be >= 0, got {self.band_edge_tolerance}")
        if self.min_nfft < 16 or self.min_nfft & (self.min_nfft - 1) != 0:
            raise ValueError(f"min_nfft must be a power of two >= 16, got {self.min_nfft}")

    def with_overrides(self, **kwargs) -> 'DesignConfig':
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


DEFAULT_CONFIG = DesignConfig()


def config_from_dict(config: dict) -> DesignConfig:
    """Build a DesignConfig from a parsed YAML mapping."""
    if config is None:
        return DEFAULT_CONFIG
    if not isinstance(config, dict):
        raise ValueError(f"Configuration must be a mapping, got {type(config).__name__}")

    section = config.get('design', config)
    if not isinstance(section, dict):
        raise ValueError("'design' section must be a mapping")

    known = {f.name for f in fields(DesignConfig)}
    ignored = {'design', 'evaluation'}
    unknown = set(section) - known - ignored
    if unknown:
        raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")

    values = {k: v for k, v in section.items() if k in known and k != 'seed'}
    seed = get_seed_from_config(section)
    if seed is None:
        seed = get_seed_from_config(config)
    return DesignConfig(seed=seed, **values)


def load_config(path: Union[str, Path]) -> DesignConfig:
    """Load a DesignConfig from a YAML file."""
    with open(path, 'r', encoding='utf-8') as f:
        return config_from_dict(yaml.safe_load(f))
