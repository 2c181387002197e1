"""
Barycentric Lagrange interpolation.

Reference:
    J.-P. Berrut and L. N. Trefethen, "Barycentric Lagrange Interpolation",
    SIAM Review 46(3), 2004, pp. 501-517.
"""

from typing import Union

import numpy as np


def barycentric_weights(z: np.ndarray) -> np.ndarray:
    """
    Barycentric weights gamma_j = 1 / prod_{i != j} (z[j] - z[i]).

    Args:
        z: Distinct interpolation abscissas

    Returns:
        Array of weights, same length as z
    """
    z = np.asarray(z, dtype=np.float64)
    diff = z[:, np.newaxis] - z[np.newaxis, :]
    np.fill_diagonal(diff, 1.0)
    return 1.0 / np.prod(diff, axis=1)


def chebyshev_nodes(a: float, b: float, n: int) -> np.ndarray:
    """n Chebyshev points of the first kind on [a, b]."""
    i = np.arange(n)
    return (a + b) / 2.0 + (b - a) / 2.0 * np.cos((2 * i + 1) / (2.0 * n) * np.pi)


class LagrangePolynomial:
    """
    Polynomial through the points (x[j], y[j]), evaluated in barycentric form.

    Args:
        x: Interpolation abscissas (distinct)
        y: Values at the abscissas
    """

    def __init__(self, x: np.ndarray, y: np.ndarray):
        x = np.array(x, dtype=np.float64)
        y = np.array(y, dtype=np.float64)
        if x.shape != y.shape:
            raise ValueError(f"Lengths of x and y arrays do not match: {x.shape} vs {y.shape}")
        if x.ndim != 1 or x.shape[0] == 0:
            raise ValueError(f"x must be a non-empty 1D array, got shape {x.shape}")

        self._x = x
        self._y = y
        self._weights = barycentric_weights(x)

    @property
    def order(self) -> int:
        return self._x.shape[0] - 1

    @property
    def nodes(self) -> np.ndarray:
        return self._x.copy()

    @property
    def weights(self) -> np.ndarray:
        return self._weights.copy()

    def evaluate(self, xp: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """
        Evaluate the polynomial at xp (scalar or array).

        A query that coincides with a node returns that node's value directly.
        """
        xp = np.asarray(xp, dtype=np.float64)
        q = np.atleast_1d(xp).ravel()

        diff = q[:, np.newaxis] - self._x[np.newaxis, :]
        exact = diff == 0.0
        with np.errstate(divide='ignore', invalid='ignore'):
            terms = self._weights / diff
            result = (terms @ self._y) / terms.sum(axis=1)

        hit = exact.any(axis=1)
        if hit.any():
            result[hit] = self._y[np.argmax(exact[hit], axis=1)]

        if xp.ndim == 0:
            return float(result[0])
        return result.reshape(xp.shape)

    __call__ = evaluate
