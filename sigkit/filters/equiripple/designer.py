"""
Parks-McClellan equiripple FIR design: the Remez exchange algorithm.

References:
    T. W. Parks and J. H. McClellan, "Chebyshev Approximation for
    Nonrecursive Digital Filters with Linear Phase", IEEE Trans. Circuit
    Theory CT-19(2), 1972, pp. 189-194.

    J. H. McClellan and T. W. Parks, "A Unified Approach to the Design of
    Optimum Linear Phase FIR Digital Filters", IEEE Trans. Circuit Theory
    CT-20(6), 1973, pp. 697-701.

All state lives in the caller's DesignGrid; independent designs on separate
grids share nothing.
"""

from dataclasses import dataclass

import numpy as np

from sigkit.dsp_core import RealDFT
from sigkit.filters.lagrange import LagrangePolynomial, barycentric_weights
from sigkit.utils.logging import get_logger

from .grid import DesignGrid

logger = get_logger(__name__)

MAX_ITERATIONS = 25


@dataclass
class RemezResult:
    """Diagnostics of one Remez run."""
    iterations: int   # number of exchanges performed
    delta: float      # deviation on the final extremal set
    converged: bool   # False when the iteration cap stopped the exchange


def sgn(x: float) -> int:
    """1, -1 or 0 for x > 0, x < 0, x == 0."""
    if x > 0.0:
        return 1
    elif x < 0.0:
        return -1
    return 0


def compute_delta(G: DesignGrid) -> float:
    """
    Minimax deviation achievable on the current set of extrema.

    delta = sum(gamma_i * H[e_i]) / sum((-1)^i * gamma_i / W[e_i])
    """
    e = G.extrema_indices
    gamma = barycentric_weights(G.X[e])
    signs = np.where(np.arange(e.shape[0]) % 2 == 0, 1.0, -1.0)

    num = np.sum(gamma * G.H[e])
    denom = np.sum(signs * gamma / G.W[e])
    return float(num / denom)


def construct_interpolating_polynomial(G: DesignGrid, delta: float) -> LagrangePolynomial:
    """
    Lagrange polynomial through all extrema but the last, with ordinates
    H - (+/-)delta/W alternating in sign starting at +.
    """
    e = G.extrema_indices[:-1]
    signs = np.where(np.arange(e.shape[0]) % 2 == 0, 1.0, -1.0)
    x = G.X[e]
    f = G.H[e] - signs * delta / G.W[e]
    return LagrangePolynomial(x, f)


def _search_extrema(G: DesignGrid, E: np.ndarray):
    """Walk from every current extremum to the end of its monotone error segment."""
    size = G.grid_size
    # slope[i] = sgn(E[i+1] - E[i])
    slope = np.sign(np.diff(E)).astype(np.int64)

    new_extrema = []
    change = 0
    for current in G.extrema_indices.tolist():
        s = sgn(E[current])

        # search forward
        ptr = current + 1
        while ptr < size and slope[ptr - 1] == s:
            ptr += 1
        ptr -= 1

        if ptr == current:
            # forward search failed, try backward search
            ptr = current - 1
            while ptr >= 0 and -slope[ptr] == s:
                ptr -= 1
            ptr += 1

        new_extrema.append(ptr)
        if ptr != current:
            change += 1

    return new_extrema, change


def _exchange_endpoints(G: DesignGrid, E: np.ndarray, new_extrema: list) -> int:
    """
    When both 0 and pi are on the grid, let an endpoint extremum move to the
    opposite endpoint if the error there is larger and keeps the alternation.
    """
    grid_pi = G.grid_size - 1
    old = G.extrema_indices

    if 0 in new_extrema:
        if grid_pi not in new_extrema:
            if sgn(E[grid_pi]) != sgn(E[old[-1]]) and abs(E[grid_pi]) > abs(E[0]):
                new_extrema.pop(0)
                new_extrema.append(grid_pi)
                return 1
    elif grid_pi in new_extrema:
        if sgn(E[0]) != sgn(E[old[0]]) and abs(E[0]) > abs(E[grid_pi]):
            new_extrema.pop()
            new_extrema.insert(0, 0)
            return 1
    return 0


def remez(G: DesignGrid, max_iterations: int = MAX_ITERATIONS) -> RemezResult:
    """
    Remez exchange on a populated grid.

    Iterates until no extremum moves or ``max_iterations`` exchanges have been
    made.  Reaching the cap is not an error: the grid is left holding the best
    extremal set found, and the result reports ``converged=False``.

    Args:
        G: Grid with H, W and an initial extremal set; extrema are updated in place
        max_iterations: Iteration cap

    Returns:
        RemezResult with the iteration count and final deviation
    """
    niter = 0
    converged = False
    delta = 0.0

    while True:
        delta = compute_delta(G)
        logger.debug(f"iteration {niter}: delta = {delta:.6e}")

        LP = construct_interpolating_polynomial(G, delta)

        # current approximant and error function on the grid
        GA = LP.evaluate(G.X)
        E = GA - G.H

        new_extrema, change = _search_extrema(G, E)

        if G.contains_zero and G.contains_pi:
            change += _exchange_endpoints(G, E, new_extrema)

        if change == 0:
            converged = True
            break

        G.extrema_indices = np.asarray(new_extrema, dtype=np.int64)

        niter += 1
        if niter >= max_iterations:
            delta = compute_delta(G)
            logger.info(f"Remez exchange stopped at the {max_iterations}-iteration cap, delta = {delta:.6e}")
            break

    return RemezResult(iterations=niter, delta=delta, converged=converged)


def calculate_coefficients(G: DesignGrid, num_coefficients: int, min_nfft: int = 64) -> np.ndarray:
    """
    Cosine-basis coefficients of the best approximation on the final extrema.

    The interpolant is sampled at cos(2*pi*i/nfft), i = 0..nfft/2, where nfft
    is the smallest power of two >= max(num_coefficients, min_nfft), and the
    samples are inverse transformed as a purely real packed spectrum.  The
    result is a zero-centered even sequence of length nfft.
    """
    LP = construct_interpolating_polynomial(G, compute_delta(G))

    log2nfft = int(min_nfft).bit_length() - 1
    nfft = 1 << log2nfft
    while nfft < num_coefficients:
        nfft *= 2
        log2nfft += 1

    X = np.zeros(nfft)
    X[:nfft // 2 + 1] = LP.evaluate(np.cos(2.0 * np.pi * np.arange(nfft // 2 + 1) / nfft))

    x = np.zeros(nfft)
    RealDFT(log2nfft).evaluate_inverse(X, x)
    return x
