from dataclasses import dataclass, field

import numpy as np


@dataclass
class DesignGrid:
    """
    Dense frequency-sampling grid used by the Remez exchange algorithm.

    Frequencies are normalized so that 1.0 is the Nyquist frequency.  All
    per-point arrays are parallel to ``grid``.

    Attributes:
        grid: Ascending sample frequencies in [0, 1]
        X: cos(pi * grid), the abscissas of the interpolation problem
        H: Desired (symmetry-adjusted) response on the grid
        W: Weight (symmetry-adjusted) on the grid
        band_edge_indices: Grid indices of every band's first and last sample
        extrema_indices: Current alternation set, strictly ascending
        contains_zero: Whether grid[0] is DC
        contains_pi: Whether grid[-1] is the Nyquist frequency
    """
    grid: np.ndarray
    X: np.ndarray = None
    H: np.ndarray = None
    W: np.ndarray = None
    band_edge_indices: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int64))
    extrema_indices: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int64))
    contains_zero: bool = False
    contains_pi: bool = False

    GRID_DENSITY = 20

    def __post_init__(self):
        self.grid = np.asarray(self.grid, dtype=np.float64)
        if self.X is None:
            self.X = np.cos(np.pi * self.grid)
        if self.H is None:
            self.H = np.zeros_like(self.grid)
        if self.W is None:
            self.W = np.zeros_like(self.grid)
        self.band_edge_indices = np.asarray(self.band_edge_indices, dtype=np.int64)
        self.extrema_indices = np.asarray(self.extrema_indices, dtype=np.int64)

    @property
    def grid_size(self) -> int:
        return self.grid.shape[0]

    def describe(self) -> str:
        """One line per grid point, marking band edges and extrema."""
        band_edges = set(self.band_edge_indices.tolist())
        extrema = set(self.extrema_indices.tolist())
        lines = []
        for i in range(self.grid_size):
            line = f"{i}  {self.grid[i]}  {self.X[i]}  {self.H[i]}  {self.W[i]}"
            if i in band_edges:
                line += "  band edge"
            if i in extrema:
                line += "  extremum"
            lines.append(line)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()
