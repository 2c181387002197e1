"""
Linear-phase symmetry classes.

    Type I    odd length,  even symmetry   A(w) = sum a_k cos(k w)
    Type II   even length, even symmetry   A(w) = cos(w/2) P(w)
    Type III  odd length,  odd symmetry    A(w) = sin(w) P(w)
    Type IV   even length, odd symmetry    A(w) = sin(w/2) P(w)

Types II-IV divide the desired response by their fixed factor and multiply
the weight by it, so that the Remez problem is always a plain cosine series
P(w).  The coefficients of P are converted back to taps by the matching
convolution with the factor's two- or three-tap sequence.
"""

from typing import Optional, Union

import numpy as np

from sigkit.dsp_core import circular_shift
from sigkit.utils.config import DesignConfig

from .base import EquirippleFIRFilter
from .grid import DesignGrid


class _SymmetryClass(EquirippleFIRFilter):

    def _sample(self, G: DesignGrid):
        H = np.array([self.desired_response(omega) for omega in G.grid])
        W = np.array([self.weight(omega) for omega in G.grid])
        return H, W

    def _touches_zero(self, G: DesignGrid) -> bool:
        return abs(G.grid[0]) < self.config.band_edge_tolerance

    def _touches_pi(self, G: DesignGrid) -> bool:
        return abs(G.grid[-1] - 1.0) < self.config.band_edge_tolerance


class FIRTypeI(_SymmetryClass):
    """Odd length (2*n_half+1), even symmetry."""

    def __init__(self, num_bands: int, n_half: int,
                 config: Optional[DesignConfig] = None,
                 rng: Union[int, np.random.Generator, None] = None):
        super().__init__(num_bands, n_half + 1, 2 * n_half + 1, config=config, rng=rng)

    def populate_grid(self, G: DesignGrid) -> None:
        G.H, G.W = self._sample(G)
        G.contains_zero = self._touches_zero(G)
        G.contains_pi = self._touches_pi(G)

    def interpret_coefficients(self, coefficients: np.ndarray) -> np.ndarray:
        c = circular_shift(coefficients, self.n - 1)
        return c[:self.nc].copy()


class FIRTypeII(_SymmetryClass):
    """Even length (2*n_half), even symmetry; response forced to zero at Nyquist."""

    def __init__(self, num_bands: int, n_half: int,
                 config: Optional[DesignConfig] = None,
                 rng: Union[int, np.random.Generator, None] = None):
        super().__init__(num_bands, n_half, 2 * n_half, config=config, rng=rng)

    def populate_grid(self, G: DesignGrid) -> None:
        H, W = self._sample(G)
        factor = np.cos(G.grid * np.pi / 2.0)
        G.H = H / factor
        G.W = W * factor
        G.contains_zero = self._touches_zero(G)
        G.contains_pi = False

    def interpret_coefficients(self, coefficients: np.ndarray) -> np.ndarray:
        nc = self.nc
        c = circular_shift(coefficients, self.n - 1)
        retval = np.empty(nc)
        retval[0] = 0.5 * c[0]
        retval[1:nc - 1] = 0.5 * (c[1:nc - 1] + c[0:nc - 2])
        retval[nc - 1] = 0.5 * c[nc - 2]
        return retval


class FIRTypeIII(_SymmetryClass):
    """Odd length (2*n_half+1), odd symmetry; response forced to zero at DC and Nyquist."""

    def __init__(self, num_bands: int, n_half: int,
                 config: Optional[DesignConfig] = None,
                 rng: Union[int, np.random.Generator, None] = None):
        super().__init__(num_bands, n_half, 2 * n_half + 1, config=config, rng=rng)

    def populate_grid(self, G: DesignGrid) -> None:
        H, W = self._sample(G)
        factor = np.sin(G.grid * np.pi)
        G.H = H / factor
        G.W = W * factor
        G.contains_zero = False
        G.contains_pi = False

    def interpret_coefficients(self, coefficients: np.ndarray) -> np.ndarray:
        nc = self.nc
        c = circular_shift(coefficients, self.n - 1)
        retval = np.empty(nc)
        retval[0] = -0.5 * c[0]
        retval[1] = -0.5 * c[1]
        retval[2:nc - 2] = 0.5 * (c[0:nc - 4] - c[2:nc - 2])
        retval[nc - 2] = 0.5 * c[nc - 4]
        retval[nc - 1] = 0.5 * c[nc - 3]
        return retval


class FIRTypeIV(_SymmetryClass):
    """Even length (2*n_half), odd symmetry; response forced to zero at DC."""

    def __init__(self, num_bands: int, n_half: int,
                 config: Optional[DesignConfig] = None,
                 rng: Union[int, np.random.Generator, None] = None):
        super().__init__(num_bands, n_half, 2 * n_half, config=config, rng=rng)

    def populate_grid(self, G: DesignGrid) -> None:
        H, W = self._sample(G)
        factor = np.sin(G.grid * np.pi / 2.0)
        G.H = H / factor
        G.W = W * factor
        G.contains_zero = False
        G.contains_pi = self._touches_pi(G)

    def interpret_coefficients(self, coefficients: np.ndarray) -> np.ndarray:
        nc = self.nc
        c = circular_shift(coefficients, self.n - 1)
        retval = np.empty(nc)
        retval[0] = -0.5 * c[0]
        retval[1:nc - 1] = 0.5 * (c[0:nc - 2] - c[1:nc - 1])
        retval[nc - 1] = 0.5 * c[nc - 2]
        return retval
