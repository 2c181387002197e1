"""
Base class for equiripple (Parks-McClellan) FIR filters.

A concrete filter fixes its bands, desired response and weight; a symmetry
class (type I-IV) maps those onto the cosine-basis approximation problem and
turns the resulting cosine coefficients back into filter taps.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union

import numpy as np

from sigkit.dsp_core import RealDFT
from sigkit.filters.overlap_add import OverlapAdd, _fft_size
from sigkit.utils.config import DesignConfig, DEFAULT_CONFIG
from sigkit.utils.logging import get_logger
from sigkit.utils.seed import make_rng

from .designer import RemezResult, remez, calculate_coefficients
from .grid import DesignGrid

logger = get_logger(__name__)


class EquirippleFIRFilter(ABC):
    """
    Equiripple FIR filter designed by the Remez exchange algorithm.

    Args:
        num_bands: Number of bands
        n: Number of approximating functions in the Remez problem
        nc: Number of filter coefficients
        config: Design parameters (grid density, iteration cap, tolerance, seed)
        rng: Seed or Generator for the initial extrema jitter; overrides config.seed
    """

    def __init__(
        self,
        num_bands: int,
        n: int,
        nc: int,
        config: Optional[DesignConfig] = None,
        rng: Union[int, np.random.Generator, None] = None
    ):
        if num_bands < 1:
            raise ValueError(f"num_bands must be >= 1, got {num_bands}")
        if n + 1 < 2 * num_bands:
            raise ValueError(f"Filter order too small: {n} approximating functions for {num_bands} band(s)")

        self.num_bands = num_bands
        self.n = n
        self.nc = nc
        self.config = config if config is not None else DEFAULT_CONFIG
        self._rng = make_rng(rng if rng is not None else self.config.seed)

        self.bands = np.zeros((num_bands, 2))
        self._coefficients: Optional[np.ndarray] = None
        self._design_result: Optional[RemezResult] = None
        self._grid: Optional[DesignGrid] = None

    # ------------------------------------------------------------------
    # Hooks supplied by symmetry classes and concrete filters

    @abstractmethod
    def populate_grid(self, G: DesignGrid) -> None:
        """Fill H and W (symmetry adjusted) and the DC/Nyquist flags."""

    @abstractmethod
    def desired_response(self, omega: float) -> float:
        """Desired amplitude response at normalized frequency omega."""

    @abstractmethod
    def weight(self, omega: float) -> float:
        """Error weight at normalized frequency omega."""

    @abstractmethod
    def interpret_coefficients(self, coefficients: np.ndarray) -> np.ndarray:
        """Convert cosine-basis coefficients into nc filter taps."""

    # ------------------------------------------------------------------

    def lte(self, x: float, y: float) -> bool:
        """x <= y within the band-edge tolerance."""
        return x < y or abs(x - y) < self.config.band_edge_tolerance

    def in_band(self, ib: int, omega: float) -> bool:
        return self.lte(self.bands[ib, 0], omega) and self.lte(omega, self.bands[ib, 1])

    def validate_bands(self) -> None:
        """Bands must lie in [0, 1], each with start < end, ascending and disjoint."""
        for ib in range(self.num_bands):
            lo, hi = self.bands[ib]
            if not (0.0 <= lo < hi <= 1.0):
                raise ValueError(f"Band {ib} edges [{lo}, {hi}] must satisfy 0 <= start < end <= 1")
            if ib > 0 and lo <= self.bands[ib - 1, 1]:
                raise ValueError(
                    f"Band {ib} starts at {lo}, which does not follow band {ib - 1} ending at {self.bands[ib - 1, 1]}"
                )

    def create_grid(self) -> DesignGrid:
        """
        Dense grid over the bands with an initial guess of n+1 extrema.

        Extrema are shared among bands in proportion to bandwidth (every band
        keeps both edges); interior guesses are jittered by one grid point.
        """
        density = self.config.grid_density
        widths = self.bands[:, 1] - self.bands[:, 0]
        total_bandwidth = widths.sum()

        m = self.n + 1 - 2 * self.num_bands
        nextrema = [int(round(m * B / total_bandwidth)) + 2 for B in widths]
        largest_band = int(np.argmax(nextrema))

        # rounding may leave the count off by a few; the largest band absorbs it
        np_total = sum(nextrema)
        nextrema[largest_band] += self.n + 1 - np_total

        grid = []
        extrema = []
        band_edges = []
        gridpt = 0
        for ib in range(self.num_bands):
            npts = 1 + (nextrema[ib] - 1) * density
            dB = widths[ib] / (npts - 1)
            base = self.bands[ib, 0]
            for i in range(npts):
                grid.append(base + dB * i)

                if i % density == 0:
                    if i != 0 and i != npts - 1:
                        perturbation = int(self._rng.integers(-1, 2))
                    else:
                        perturbation = 0
                    extrema.append(gridpt + perturbation)
                if i == 0 or i == npts - 1:
                    band_edges.append(gridpt)

                gridpt += 1

        return DesignGrid(
            grid=np.array(grid),
            band_edge_indices=np.array(band_edges, dtype=np.int64),
            extrema_indices=np.array(extrema, dtype=np.int64)
        )

    def generate_coefficients(self) -> None:
        """Run the full design: grid, Remez exchange, coefficient extraction."""
        self.validate_bands()
        G = self.create_grid()
        self.populate_grid(G)
        self._design_result = remez(G, max_iterations=self.config.max_iterations)
        self._grid = G

        cosine_coefficients = calculate_coefficients(G, self.nc, min_nfft=self.config.min_nfft)
        self._coefficients = self.interpret_coefficients(cosine_coefficients)

        logger.debug(
            f"{type(self).__name__}: {self.nc} taps, {self._design_result.iterations} iterations, "
            f"delta = {self._design_result.delta:.6e}, converged = {self._design_result.converged}"
        )

    @property
    def coefficients(self) -> np.ndarray:
        """Copy of the filter taps."""
        if self._coefficients is None:
            raise RuntimeError("Coefficients accessed before the design was generated")
        return self._coefficients.copy()

    @property
    def design_result(self) -> Optional[RemezResult]:
        return self._design_result

    @property
    def design_grid(self) -> Optional[DesignGrid]:
        """Grid holding the final extremal set."""
        return self._grid

    def get_implementation(self, block_size: int) -> OverlapAdd:
        """Streaming overlap-add implementation of this filter."""
        return OverlapAdd(self.coefficients, block_size)

    def filter(self, x: np.ndarray) -> np.ndarray:
        """
        Convolve x with the filter (one-shot FFT convolution).

        Returns len(x) + nc - 1 samples.
        """
        x = np.asarray(x, dtype=np.float64)
        coefficients = self.coefficients
        n = x.shape[0] + coefficients.shape[0] - 1
        nfft, log2nfft = _fft_size(n)

        fft = RealDFT(log2nfft)
        tmp = np.zeros(nfft)
        transform = np.zeros(nfft)
        kernel = np.zeros(nfft)

        tmp[:x.shape[0]] = x
        fft.evaluate(tmp, transform)

        tmp[:] = 0.0
        tmp[:coefficients.shape[0]] = coefficients
        fft.evaluate(tmp, kernel)

        RealDFT.dft_product(kernel, transform, 1.0)
        fft.evaluate_inverse(transform, tmp)

        return tmp[:n].copy()
