"""
Numba-compiled inner loops for the split-radix DFT engine.

The complex DFT is evaluated from a flattened plan: one row per node of the
split-radix decomposition tree, listed in post-order so that every node's
three children have been evaluated before its own butterflies run.

Plan row layout:
    (tag, data_offset, data_stride, transform_offset, size, table_stride)

Leaf rows read the input sequence with the given offset/stride and write a
contiguous block of the output transform.  SPLIT rows combine the outputs of
their children in place.

Reference:
    H. V. Sorensen, M. T. Heideman and C. S. Burrus, "On Computing the
    Split-Radix FFT", IEEE Trans. ASSP-34, no. 1, Feb. 1986, pp. 152-156.
"""

import math

import numpy as np
from numba import jit

LEAF8 = 0
LEAF16 = 1
SPLIT = 2

SQRT2BY2 = math.sqrt(2.0) / 2.0
C_1_16 = math.cos(2.0 * math.pi / 16.0)
C_3_16 = math.cos(2.0 * math.pi * 3.0 / 16.0)


@jit(nopython=True, cache=True)
def _leaf8(xr, xi, Xr, Xi, n0, stride, m0):
    """Hand-unrolled length-8 DFT."""
    n1 = n0 + stride
    n2 = n1 + stride
    n3 = n2 + stride
    n4 = n3 + stride
    n5 = n4 + stride
    n6 = n5 + stride
    n7 = n6 + stride
    m1 = m0 + 1
    m2 = m0 + 2
    m3 = m0 + 3
    m4 = m0 + 4
    m5 = m0 + 5
    m6 = m0 + 6
    m7 = m0 + 7

    # length 2
    Xr[m0] = xr[n0] + xr[n4]
    Xi[m0] = xi[n0] + xi[n4]
    Xr[m1] = xr[n0] - xr[n4]
    Xi[m1] = xi[n0] - xi[n4]

    # length 4, k = 0
    Rr = xr[n2] + xr[n6]
    Ri = xi[n2] + xi[n6]
    Sr = xi[n6] - xi[n2]
    Si = xr[n2] - xr[n6]

    Xr[m2] = Xr[m0] - Rr
    Xi[m2] = Xi[m0] - Ri
    Xr[m3] = Xr[m1] + Sr
    Xi[m3] = Xi[m1] + Si

    Xr[m0] += Rr
    Xi[m0] += Ri
    Xr[m1] -= Sr
    Xi[m1] -= Si

    # length 2
    Xr[m4] = xr[n1] + xr[n5]
    Xi[m4] = xi[n1] + xi[n5]
    Xr[m5] = xr[n1] - xr[n5]
    Xi[m5] = xi[n1] - xi[n5]

    # length 2
    Xr[m6] = xr[n3] + xr[n7]
    Xi[m6] = xi[n3] + xi[n7]
    Xr[m7] = xr[n3] - xr[n7]
    Xi[m7] = xi[n3] - xi[n7]

    # length 8, k = 0
    Rr = Xr[m4] + Xr[m6]
    Ri = Xi[m4] + Xi[m6]
    Sr = Xi[m6] - Xi[m4]
    Si = Xr[m4] - Xr[m6]

    Xr[m4] = Xr[m0] - Rr
    Xi[m4] = Xi[m0] - Ri
    Xr[m6] = Xr[m2] + Sr
    Xi[m6] = Xi[m2] + Si

    Xr[m0] += Rr
    Xi[m0] += Ri
    Xr[m2] -= Sr
    Xi[m2] -= Si

    # length 8, k = 1
    T1r = SQRT2BY2 * (Xr[m5] + Xi[m5])
    T1i = SQRT2BY2 * (Xi[m5] - Xr[m5])
    T3r = SQRT2BY2 * (Xi[m7] - Xr[m7])
    T3i = -SQRT2BY2 * (Xi[m7] + Xr[m7])

    Rr = T1r + T3r
    Ri = T1i + T3i
    Sr = T3i - T1i
    Si = T1r - T3r

    Xr[m5] = Xr[m1] - Rr
    Xi[m5] = Xi[m1] - Ri
    Xr[m7] = Xr[m3] + Sr
    Xi[m7] = Xi[m3] + Si

    Xr[m1] += Rr
    Xi[m1] += Ri
    Xr[m3] -= Sr
    Xi[m3] -= Si


@jit(nopython=True, cache=True)
def _combine(Xr, Xi, kp, kpN4, kpN2, kp3N4, T1r, T1i, T3r, T3i):
    """Split-radix combine of R = T1 + T3, S = i*(T1 - T3) into four outputs."""
    Rr = T1r + T3r
    Ri = T1i + T3i
    Sr = T3i - T1i
    Si = T1r - T3r

    Xr[kpN2] = Xr[kp] - Rr
    Xi[kpN2] = Xi[kp] - Ri
    Xr[kp3N4] = Xr[kpN4] + Sr
    Xi[kp3N4] = Xi[kpN4] + Si

    Xr[kp] += Rr
    Xi[kp] += Ri
    Xr[kpN4] -= Sr
    Xi[kpN4] -= Si


@jit(nopython=True, cache=True)
def _length4(xr, xi, Xr, Xi, a, b, c, d, m0):
    """Length-4 DFT of inputs a, c (even) and b, d (odd) into Xr[m0:m0+4]."""
    m1 = m0 + 1
    Xr[m0] = xr[a] + xr[c]
    Xi[m0] = xi[a] + xi[c]
    Xr[m1] = xr[a] - xr[c]
    Xi[m1] = xi[a] - xi[c]

    Rr = xr[b] + xr[d]
    Ri = xi[b] + xi[d]
    Sr = xi[d] - xi[b]
    Si = xr[b] - xr[d]

    Xr[m0 + 2] = Xr[m0] - Rr
    Xi[m0 + 2] = Xi[m0] - Ri
    Xr[m0 + 3] = Xr[m1] + Sr
    Xi[m0 + 3] = Xi[m1] + Si

    Xr[m0] += Rr
    Xi[m0] += Ri
    Xr[m1] -= Sr
    Xi[m1] -= Si


@jit(nopython=True, cache=True)
def _leaf16(xr, xi, Xr, Xi, n0, stride, m0):
    """Hand-unrolled length-16 DFT."""
    s = stride

    # length-8 DFT of the even samples into m0..m7
    _length4(xr, xi, Xr, Xi, n0, n0 + 4 * s, n0 + 8 * s, n0 + 12 * s, m0)

    Xr[m0 + 4] = xr[n0 + 2 * s] + xr[n0 + 10 * s]
    Xi[m0 + 4] = xi[n0 + 2 * s] + xi[n0 + 10 * s]
    Xr[m0 + 5] = xr[n0 + 2 * s] - xr[n0 + 10 * s]
    Xi[m0 + 5] = xi[n0 + 2 * s] - xi[n0 + 10 * s]

    Xr[m0 + 6] = xr[n0 + 6 * s] + xr[n0 + 14 * s]
    Xi[m0 + 6] = xi[n0 + 6 * s] + xi[n0 + 14 * s]
    Xr[m0 + 7] = xr[n0 + 6 * s] - xr[n0 + 14 * s]
    Xi[m0 + 7] = xi[n0 + 6 * s] - xi[n0 + 14 * s]

    # length 8, k = 0
    T1r = Xr[m0 + 4]
    T1i = Xi[m0 + 4]
    T3r = Xr[m0 + 6]
    T3i = Xi[m0 + 6]
    _combine(Xr, Xi, m0, m0 + 2, m0 + 4, m0 + 6, T1r, T1i, T3r, T3i)

    # length 8, k = 1
    T1r = SQRT2BY2 * (Xr[m0 + 5] + Xi[m0 + 5])
    T1i = SQRT2BY2 * (Xi[m0 + 5] - Xr[m0 + 5])
    T3r = SQRT2BY2 * (Xi[m0 + 7] - Xr[m0 + 7])
    T3i = -SQRT2BY2 * (Xi[m0 + 7] + Xr[m0 + 7])
    _combine(Xr, Xi, m0 + 1, m0 + 3, m0 + 5, m0 + 7, T1r, T1i, T3r, T3i)

    # two length-4 DFTs of the odd samples into m8..m11 and m12..m15
    _length4(xr, xi, Xr, Xi, n0 + s, n0 + 5 * s, n0 + 9 * s, n0 + 13 * s, m0 + 8)
    _length4(xr, xi, Xr, Xi, n0 + 3 * s, n0 + 7 * s, n0 + 11 * s, n0 + 15 * s, m0 + 12)

    # length 16, k = 0
    T1r = Xr[m0 + 8]
    T1i = Xi[m0 + 8]
    T3r = Xr[m0 + 12]
    T3i = Xi[m0 + 12]
    _combine(Xr, Xi, m0, m0 + 4, m0 + 8, m0 + 12, T1r, T1i, T3r, T3i)

    # k = 1
    T1r = C_1_16 * Xr[m0 + 9] + C_3_16 * Xi[m0 + 9]
    T1i = C_1_16 * Xi[m0 + 9] - C_3_16 * Xr[m0 + 9]
    T3r = C_3_16 * Xr[m0 + 13] + C_1_16 * Xi[m0 + 13]
    T3i = C_3_16 * Xi[m0 + 13] - C_1_16 * Xr[m0 + 13]
    _combine(Xr, Xi, m0 + 1, m0 + 5, m0 + 9, m0 + 13, T1r, T1i, T3r, T3i)

    # k = 2
    T1r = SQRT2BY2 * (Xr[m0 + 10] + Xi[m0 + 10])
    T1i = SQRT2BY2 * (Xi[m0 + 10] - Xr[m0 + 10])
    T3r = SQRT2BY2 * (Xi[m0 + 14] - Xr[m0 + 14])
    T3i = -SQRT2BY2 * (Xi[m0 + 14] + Xr[m0 + 14])
    _combine(Xr, Xi, m0 + 2, m0 + 6, m0 + 10, m0 + 14, T1r, T1i, T3r, T3i)

    # k = 3
    T1r = C_3_16 * Xr[m0 + 11] + C_1_16 * Xi[m0 + 11]
    T1i = C_3_16 * Xi[m0 + 11] - C_1_16 * Xr[m0 + 11]
    T3r = -C_1_16 * Xr[m0 + 15] - C_3_16 * Xi[m0 + 15]
    T3i = -C_1_16 * Xi[m0 + 15] + C_3_16 * Xr[m0 + 15]
    _combine(Xr, Xi, m0 + 3, m0 + 7, m0 + 11, m0 + 15, T1r, T1i, T3r, T3i)


@jit(nopython=True, cache=True)
def _split_butterflies(Xr, Xi, offset, n, f, c, c3, s, s3):
    """
    Combine the three child transforms of a size-n node in place.

    The (n/2)-point child lives at offset, the two (n/4)-point children at
    offset + n/2 and offset + 3n/4.  Twiddles for k > n/8 are read from the
    reflected table position, which keeps the tables at N/8 entries.
    """
    Ndiv8 = n // 8
    Ndiv4 = n // 4
    reflect = 2 * c.shape[0]

    # k = 0
    kp = offset
    kpN4 = kp + Ndiv4
    kpN2 = kpN4 + Ndiv4
    kp3N4 = kpN2 + Ndiv4
    _combine(Xr, Xi, kp, kpN4, kpN2, kp3N4, Xr[kpN2], Xi[kpN2], Xr[kp3N4], Xi[kp3N4])

    # 1 <= k < n/8
    for k in range(1, Ndiv8):
        fk = f * k
        kp = k + offset
        kpN4 = kp + Ndiv4
        kpN2 = kpN4 + Ndiv4
        kp3N4 = kpN2 + Ndiv4

        Wr = c[fk]
        Wi = s[fk]
        T1r = Wr * Xr[kpN2] - Wi * Xi[kpN2]
        T1i = Wr * Xi[kpN2] + Wi * Xr[kpN2]
        Wr = c3[fk]
        Wi = s3[fk]
        T3r = Wr * Xr[kp3N4] - Wi * Xi[kp3N4]
        T3i = Wr * Xi[kp3N4] + Wi * Xr[kp3N4]
        _combine(Xr, Xi, kp, kpN4, kpN2, kp3N4, T1r, T1i, T3r, T3i)

    # k = n/8
    kp = Ndiv8 + offset
    kpN4 = kp + Ndiv4
    kpN2 = kpN4 + Ndiv4
    kp3N4 = kpN2 + Ndiv4
    T1r = SQRT2BY2 * (Xr[kpN2] + Xi[kpN2])
    T1i = SQRT2BY2 * (Xi[kpN2] - Xr[kpN2])
    T3r = SQRT2BY2 * (Xi[kp3N4] - Xr[kp3N4])
    T3i = -SQRT2BY2 * (Xi[kp3N4] + Xr[kp3N4])
    _combine(Xr, Xi, kp, kpN4, kpN2, kp3N4, T1r, T1i, T3r, T3i)

    # n/8 < k < n/4
    for k in range(Ndiv8 + 1, Ndiv4):
        fk = reflect - f * k
        kp = k + offset
        kpN4 = kp + Ndiv4
        kpN2 = kpN4 + Ndiv4
        kp3N4 = kpN2 + Ndiv4

        Wr = -s[fk]
        Wi = -c[fk]
        T1r = Wr * Xr[kpN2] - Wi * Xi[kpN2]
        T1i = Wr * Xi[kpN2] + Wi * Xr[kpN2]
        Wr = s3[fk]
        Wi = c3[fk]
        T3r = Wr * Xr[kp3N4] - Wi * Xi[kp3N4]
        T3i = Wr * Xi[kp3N4] + Wi * Xr[kp3N4]
        _combine(Xr, Xi, kp, kpN4, kpN2, kp3N4, T1r, T1i, T3r, T3i)


@jit(nopython=True, cache=True)
def execute_plan(plan, c, c3, s, s3, xr, xi, Xr, Xi):
    """Run every row of a split-radix plan (post-order) over the given buffers."""
    for p in range(plan.shape[0]):
        tag = plan[p, 0]
        if tag == LEAF8:
            _leaf8(xr, xi, Xr, Xi, plan[p, 1], plan[p, 2], plan[p, 3])
        elif tag == LEAF16:
            _leaf16(xr, xi, Xr, Xi, plan[p, 1], plan[p, 2], plan[p, 3])
        else:
            _split_butterflies(Xr, Xi, plan[p, 3], plan[p, 4], plan[p, 5], c, c3, s, s3)


@jit(nopython=True, cache=True)
def reverse_and_scale(yr, yi, scale):
    """Turn a forward DFT of a spectrum into its natural-order inverse."""
    n = yr.shape[0]
    half = n // 2

    yr[0] *= scale
    yi[0] *= scale
    yr[half] *= scale
    yi[half] *= scale

    i = 1
    j = n - 1
    while i < j:
        tmp = yr[i]
        yr[i] = yr[j] * scale
        yr[j] = tmp * scale
        tmp = yi[i]
        yi[i] = yi[j] * scale
        yi[j] = tmp * scale
        i += 1
        j -= 1


@jit(nopython=True, cache=True)
def complex_product(Xr, Xi, Yr, Yi, sign):
    """Y <- X * Y (sign=+1) or conj(X) * Y (sign=-1), elementwise."""
    for i in range(Xr.shape[0]):
        tmp = Xr[i] * Yr[i] - sign * Xi[i] * Yi[i]
        Yi[i] = Xr[i] * Yi[i] + sign * Xi[i] * Yr[i]
        Yr[i] = tmp


# ============== Real-sequence butterflies ==============

@jit(nopython=True, cache=True)
def deinterleave(x, zr, zi):
    """Even samples -> real part, odd samples -> imaginary part."""
    for i in range(zr.shape[0]):
        zr[i] = x[2 * i]
        zi[i] = x[2 * i + 1]


@jit(nopython=True, cache=True)
def real_forward_butterflies(Zr, Zi, X, c, s):
    """
    Split the half-length complex DFT Z of the packed sequence into the packed
    length-N real spectrum X.

    Uses x[2n] + j*x[2n+1] <-> X[k] + X[k+N/2] + j*W^k*(X[k] - X[k+N/2])
    together with X[k] = conj(X[N-k]) for real sequences.
    """
    N2 = Zr.shape[0]
    N = 2 * N2
    N4 = N2 // 2

    X[0] = Zr[0] + Zi[0]
    X[N2] = Zr[0] - Zi[0]

    N2pk = N2 + 1
    N2mk = N2 - 1
    Nmk = N - 1
    for k in range(1, N4):
        Zrk = Zr[k]
        Zik = Zi[k]
        ZrN2mk = Zr[N2mk]
        ZiN2mk = Zi[N2mk]

        Sr = (Zrk + ZrN2mk) / 2.0
        Si = (Zik - ZiN2mk) / 2.0

        Dr = (Zik + ZiN2mk) / 2.0
        Di = (ZrN2mk - Zrk) / 2.0

        tmp = c[k] * Dr + s[k] * Di
        Di = c[k] * Di - s[k] * Dr
        Dr = tmp

        X[k] = Sr + Dr
        X[Nmk] = Si + Di

        X[N2mk] = Sr - Dr
        X[N2pk] = Di - Si

        N2pk += 1
        N2mk -= 1
        Nmk -= 1

    # k = N/4: the twiddle is exactly (0, 1)
    X[N4] = Zr[N4]
    X[N2 + N4] = -Zi[N4]


@jit(nopython=True, cache=True)
def real_inverse_butterflies(X, Zr, Zi, c, s):
    """Unpack a length-N packed real spectrum into the half-length complex spectrum."""
    N2 = Zr.shape[0]
    N = 2 * N2
    N4 = N2 // 2

    Zr[0] = X[0] + X[N2]
    Zi[0] = X[0] - X[N2]

    N2pk = N2 + 1
    N2mk = N2 - 1
    Nmk = N - 1
    for k in range(1, N4):
        Xrk = X[k]
        Xik = X[Nmk]
        XrkpN2 = X[N2mk]
        XikpN2 = -X[N2pk]

        Dr = Xrk - XrkpN2
        Di = Xik - XikpN2

        Zr[k] = Xrk + XrkpN2 - s[k] * Dr - c[k] * Di
        Zi[k] = Xik + XikpN2 + c[k] * Dr - s[k] * Di

        N2pk += 1
        N2mk -= 1
        Nmk -= 1

    Zr[N4] = 2.0 * X[N4]
    Zi[N4] = -2.0 * X[N2 + N4]

    # N/4 < k < N/2: twiddles read from the reflected position N/2 - k
    N2pk = N2 + N4 + 1
    N2mk = N4 - 1
    Nmk = N - N4 - 1
    reflect = N4 - 1
    for k in range(N4 + 1, N2):
        Xrk = X[k]
        Xik = X[Nmk]
        XrkpN2 = X[N2mk]
        XikpN2 = -X[N2pk]

        Dr = Xrk - XrkpN2
        Di = Xik - XikpN2

        Zr[k] = Xrk + XrkpN2 - s[reflect] * Dr + c[reflect] * Di
        Zi[k] = Xik + XikpN2 - c[reflect] * Dr - s[reflect] * Di

        N2pk += 1
        N2mk -= 1
        Nmk -= 1
        reflect -= 1


@jit(nopython=True, cache=True)
def reinterleave_reversed(zr, zi, x, scale):
    """
    Re-interleave the forward DFT of a half-length spectrum into the natural
    order real sequence (index reversal performs the inverse).
    """
    N2 = zr.shape[0]
    x[0] = zr[0] * scale
    x[1] = zi[0] * scale

    j = N2 - 1
    for k in range(1, N2):
        i = 2 * k
        x[i] = zr[j] * scale
        x[i + 1] = zi[j] * scale
        j -= 1


@jit(nopython=True, cache=True)
def packed_product(kernel, transform, sign):
    """Multiply two packed real spectra in place (into transform)."""
    n = kernel.shape[0]
    half = n // 2
    transform[0] *= kernel[0]
    transform[half] *= kernel[half]

    for i in range(1, half):
        im = n - i
        tmp = kernel[i] * transform[i] - sign * kernel[im] * transform[im]
        transform[im] = kernel[i] * transform[im] + sign * kernel[im] * transform[i]
        transform[i] = tmp
