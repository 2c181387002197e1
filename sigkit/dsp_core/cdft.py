"""
Split-radix complex DFT for power-of-two lengths >= 8.

The decomposition tree (one N/2 and two N/4 sub-transforms per level,
bottoming out at hand-unrolled length-8 and length-16 kernels) is built once
per transform size and flattened into a post-order plan of hard-wired
offsets and strides.  Evaluation is a single compiled pass over that plan,
so the inner loops do no index arithmetic beyond the loop counters.

The transform is not computed in place: the input sequence is read with
strides and the output is written in natural order, which removes the
bit-reversal step.

Example
-------
>>> import numpy as np
>>> dft = ComplexDFT(10)
>>> xr, xi = np.random.randn(1024), np.zeros(1024)
>>> Xr, Xi = np.empty(1024), np.empty(1024)
>>> dft.evaluate(xr, xi, Xr, Xi)
"""

from functools import lru_cache
from typing import Optional, Tuple

import numpy as np

from . import kernels


class TransformStateError(RuntimeError):
    """Raised when a transform object is used in a state that cannot be evaluated."""


class UnlinkedTransformError(TransformStateError):
    """Raised when a no-argument evaluation is requested before any buffers were linked."""


def _build_plan(log2n: int) -> np.ndarray:
    """Flatten the split-radix tree for a length-2**log2n DFT into post-order rows."""
    n_top = 1 << log2n
    rows = []

    def visit(size, data_offset, data_stride, transform_offset):
        if size == 8:
            rows.append((kernels.LEAF8, data_offset, data_stride, transform_offset, 8, 0))
            return
        if size == 16:
            rows.append((kernels.LEAF16, data_offset, data_stride, transform_offset, 16, 0))
            return
        visit(size // 2, data_offset, data_stride * 2, transform_offset)
        visit(size // 4, data_offset + data_stride, data_stride * 4, transform_offset + size // 2)
        visit(size // 4, data_offset + 3 * data_stride, data_stride * 4, transform_offset + 3 * size // 4)
        rows.append((kernels.SPLIT, data_offset, data_stride, transform_offset, size, n_top // size))

    visit(n_top, 0, 1, 0)
    return np.array(rows, dtype=np.int64)


@lru_cache(maxsize=None)
def split_radix_tables(log2n: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Plan and twiddle tables for a length-2**log2n split-radix DFT.

    Returns (plan, cos, cos3, sin, sin3).  The tables hold N/8 entries:
    cos(2*pi*i/N), cos(6*pi*i/N), -sin(2*pi*i/N), -sin(6*pi*i/N).  All arrays
    are read-only and shared between every transform of the same size.
    """
    if log2n < 3:
        raise ValueError(f"DFT size must be >= 8, got log2n={log2n}")

    n = 1 << log2n
    i = np.arange(n // 8, dtype=np.float64)
    c = np.cos(2.0 * np.pi * i / n)
    c3 = np.cos(2.0 * np.pi * 3.0 * i / n)
    s = -np.sin(2.0 * np.pi * i / n)
    s3 = -np.sin(2.0 * np.pi * 3.0 * i / n)
    plan = _build_plan(log2n)

    for table in (plan, c, c3, s, s3):
        table.setflags(write=False)
    return plan, c, c3, s, s3


def _check_buffer(name: str, buf, n: int, writable: bool = False) -> np.ndarray:
    if not isinstance(buf, np.ndarray):
        if writable:
            raise ValueError(f"{name} must be a numpy array, got {type(buf).__name__}")
        buf = np.asarray(buf, dtype=np.float64)
    if buf.ndim != 1 or buf.shape[0] != n:
        raise ValueError(f"{name} must be a 1-D array of length {n}, got shape {buf.shape}")
    if writable and not (buf.flags.writeable and np.issubdtype(buf.dtype, np.floating)):
        raise ValueError(f"{name} must be a writable floating-point array, got dtype {buf.dtype}")
    return buf


class ComplexDFT:
    """
    Forward and inverse complex DFT of one fixed power-of-two length.

    Buffers are supplied as (real, imaginary) array pairs.  They can be passed
    to every ``evaluate``/``evaluate_inverse`` call, or bound once at
    construction and reused with the no-argument forms.  In the bound form,
    (xr, xi) hold the sequence and (yr, yi) the transform on a forward
    evaluation; the roles are reversed for the inverse.

    An instance keeps references to the last linked buffers, so it must not be
    evaluated from several threads at once.  The plan and twiddle tables are
    read-only and shared.

    Args:
        log2n: Base-2 logarithm of the transform length (>= 3)
        xr, xi, yr, yi: Optional buffers to link at construction time
    """

    def __init__(
        self,
        log2n: int,
        xr: Optional[np.ndarray] = None,
        xi: Optional[np.ndarray] = None,
        yr: Optional[np.ndarray] = None,
        yi: Optional[np.ndarray] = None
    ):
        if log2n < 3:
            raise ValueError(f"DFT size must be >= 8, got log2n={log2n}")

        self.log2n = log2n
        self.n = 1 << log2n
        self._plan, self._c, self._c3, self._s, self._s3 = split_radix_tables(log2n)

        self._links = None
        buffers = (xr, xi, yr, yi)
        if any(b is not None for b in buffers):
            if any(b is None for b in buffers):
                raise ValueError("Either all four buffers or none must be supplied")
            self.link(xr, xi, yr, yi)

    def __len__(self) -> int:
        return self.n

    @property
    def is_linked(self) -> bool:
        return self._links is not None

    def link(self, xr, xi, yr, yi) -> None:
        """Bind input (xr, xi) and output (yr, yi) buffers for subsequent evaluations."""
        n = self.n
        xr = _check_buffer('xr', xr, n)
        xi = _check_buffer('xi', xi, n)
        yr = _check_buffer('yr', yr, n, writable=True)
        yi = _check_buffer('yi', yi, n, writable=True)
        for out_name, out in (('yr', yr), ('yi', yi)):
            for in_name, inp in (('xr', xr), ('xi', xi)):
                if np.may_share_memory(out, inp):
                    raise ValueError(f"Output buffer {out_name} overlaps input buffer {in_name}")
        if np.may_share_memory(yr, yi):
            raise ValueError("Output buffers yr and yi overlap")
        self._links = (xr, xi, yr, yi)

    def _linked(self):
        if self._links is None:
            raise UnlinkedTransformError("Sequence and transform arrays are not linked")
        return self._links

    def evaluate(self, xr=None, xi=None, Xr=None, Xi=None) -> None:
        """
        Forward DFT (no scaling) of (xr, xi) into (Xr, Xi).

        Called without arguments, uses the buffers linked earlier.
        """
        if xr is not None or xi is not None or Xr is not None or Xi is not None:
            self.link(xr, xi, Xr, Xi)
        xr, xi, yr, yi = self._linked()
        kernels.execute_plan(self._plan, self._c, self._c3, self._s, self._s3, xr, xi, yr, yi)

    def evaluate_inverse(self, Xr=None, Xi=None, xr=None, xi=None) -> None:
        """
        Inverse DFT (1/N scaling) of (Xr, Xi) into (xr, xi).

        The forward machinery runs on the spectrum; reversing bins 1..N-1 and
        scaling gives the natural-order inverse.  Called without arguments,
        uses the buffers linked earlier.
        """
        if Xr is not None or Xi is not None or xr is not None or xi is not None:
            self.link(Xr, Xi, xr, xi)
        Xr, Xi, yr, yi = self._linked()
        kernels.execute_plan(self._plan, self._c, self._c3, self._s, self._s3, Xr, Xi, yr, yi)
        kernels.reverse_and_scale(yr, yi, 1.0 / self.n)

    @staticmethod
    def dft_product(Xr: np.ndarray, Xi: np.ndarray, Yr: np.ndarray, Yi: np.ndarray, sign: float = 1.0) -> None:
        """
        Multiply two complex transforms of the same size, result into (Yr, Yi).

        Args:
            sign: +1 for a convolution-type product, -1 for correlation
        """
        if Xr.shape != Yr.shape or Xi.shape != Yi.shape or Xr.shape != Xi.shape:
            raise ValueError("Transform array lengths are not equal")
        kernels.complex_product(Xr, Xi, Yr, Yi, float(sign))
