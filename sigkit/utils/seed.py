from typing import Optional, Union

import numpy as np


def make_rng(seed: Union[int, np.random.Generator, None] = None) -> np.random.Generator:
    """Return a Generator; an existing Generator is passed through unchanged."""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def get_seed_from_config(config: dict) -> Optional[int]:
    if not isinstance(config, dict):
        return None
    seed = config.get('seed', None)
    if seed is not None:
        return int(seed)
    evaluation = config.get('evaluation', {})
    if isinstance(evaluation, dict) and evaluation.get('seed', None) is not None:
        return int(evaluation['seed'])
    return None
