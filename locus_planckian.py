# -*- coding: utf-8 -*-
"""
Locus: Correlated colour temperature on and around the Planckian locus
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Planckian Locus Approximation
=============================
Closed-form cubic polynomials (Kim et al. / Krystek form) that map an
absolute temperature directly onto CIE 1931 (x, y), valid from 1667 K to
25000 K. This is the default forward path: several hundred times cheaper
than integrating Planck's law and well below perceptual thresholds inside
each coefficient band.

    x(T) = a3 / T^3 + a2 / T^2 + a1 / T + a0     (T <= 4000 K | T > 4000 K)
    y(x) = b3 x^3  + b2 x^2  + b1 x  + b0        (three bands in T)

The bands join continuously but not smoothly at 2222 K and 4000 K.

Also provides the CIE daylight locus (Illuminant D series), 4000-25000 K.

Temperatures outside the documented band return NaN. The Duv offset along
the isotherm normal lives in ``locus_geometry``.

References:
    - Kim, B. et al. (2002). "Design of advanced color temperature control
      system for HDTV applications". J. Korean Phys. Soc. 41 (6).
    - Krystek, M. (1985). "An algorithm to calculate correlated colour
      temperature". Color Res. Appl. 10 (1).
    - CIE 15:2004 "Colorimetry", eq. 3.3/3.4 (daylight locus)
"""

import numpy as np
from numba import njit, prange
from typing import Final

from locus_cmf import ArrayFloat
from locus_chromaticity import xy_to_uv1960

__all__ = [
    "K_MIN",
    "K_MAX",
    "DAYLIGHT_K_MIN",
    "DAYLIGHT_K_MAX",
    "locus_xy",
    "locus_uv1960",
    "locus_xy_batch",
    "daylight_xy",
]

# --- Validity Bands ---
K_MIN: Final[float] = 1667.0
K_MAX: Final[float] = 25000.0
DAYLIGHT_K_MIN: Final[float] = 4000.0
DAYLIGHT_K_MAX: Final[float] = 25000.0


@njit(cache=True, fastmath=False)
def locus_xy(K: float) -> tuple[float, float]:
    """
    Planckian locus chromaticity (x, y) at temperature K.

    Args:
        K: Absolute temperature in Kelvin, [1667, 25000].

    Returns:
        (x, y), or (NaN, NaN) outside the valid band.
    """
    # NaN fails both comparisons and lands here too.
    if not (K >= K_MIN and K <= K_MAX):
        return np.nan, np.nan

    inv = 1.0 / K
    inv2 = inv * inv
    inv3 = inv2 * inv

    if K <= 4000.0:
        x = -0.2661239e9 * inv3 - 0.2343589e6 * inv2 + 0.8776956e3 * inv + 0.179910
    else:
        x = -3.0258469e9 * inv3 + 2.1070379e6 * inv2 + 0.2226347e3 * inv + 0.240390

    x2 = x * x
    x3 = x2 * x
    if K <= 2222.0:
        y = -1.1063814 * x3 - 1.34811020 * x2 + 2.18555832 * x - 0.20219683
    elif K <= 4000.0:
        y = -0.9549476 * x3 - 1.37418593 * x2 + 2.09137015 * x - 0.16748867
    else:
        y = 3.0817580 * x3 - 5.87338670 * x2 + 3.75112997 * x - 0.37001483
    return x, y

@njit(cache=True, fastmath=False)
def locus_uv1960(K: float) -> tuple[float, float]:
    """Planckian locus in CIE 1960 (u, v) via the polynomial model."""
    x, y = locus_xy(K)
    return xy_to_uv1960(x, y)

@njit(cache=True, fastmath=False, parallel=True)
def _locus_xy_kernel(K: ArrayFloat) -> ArrayFloat:
    n = K.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    for i in prange(n):
        x, y = locus_xy(K[i])
        out[i, 0] = x
        out[i, 1] = y
    return out

def locus_xy_batch(K: ArrayFloat) -> ArrayFloat:
    """
    Vectorised ``locus_xy``.

    Args:
        K: Temperatures, shape (N,) or scalar.

    Returns:
        (N, 2) chromaticities, or (2,) for a scalar input.
    """
    K_arr = np.asarray(K, dtype=np.float64)
    res = _locus_xy_kernel(np.ascontiguousarray(np.atleast_1d(K_arr).ravel()))
    if K_arr.ndim == 0:
        return res[0]
    return res.reshape(K_arr.shape + (2,))

@njit(cache=True, fastmath=False)
def daylight_xy(K: float) -> tuple[float, float]:
    """
    CIE daylight locus chromaticity (x, y), 4000-25000 K, NaN outside.
    """
    if not (K >= DAYLIGHT_K_MIN and K <= DAYLIGHT_K_MAX):
        return np.nan, np.nan
    inv = 1.0 / K
    inv2 = inv * inv
    inv3 = inv2 * inv
    if K <= 7000.0:
        x = -4.607e9 * inv3 + 2.9678e6 * inv2 + 0.09911e3 * inv + 0.244063
    else:
        x = -2.0064e9 * inv3 + 1.9018e6 * inv2 + 0.24748e3 * inv + 0.23704
    return x, 2.87 * x - 3.0 * x * x - 0.275


if __name__ == "__main__":
    print("--- Locus Planckian Polynomial Validation ---")

    # 1. Reference point (2700 K, CIE 1931)
    x, y = locus_xy(2700.0)
    ok = abs(x - 0.45931) < 1e-4 and abs(y - 0.41066) < 1e-4
    print(f"1. xy(2700 K) = ({x:.5f}, {y:.5f}) {'[PASS]' if ok else '[FAIL]'}")

    # 2. Domain boundaries
    lo = np.isnan(locus_xy(1666.0)[0])
    hi = np.isnan(locus_xy(25001.0)[0])
    print(f"2. NaN outside [1667, 25000]: {'[PASS]' if lo and hi else '[FAIL]'}")

    # 3. Batch agrees with scalar
    Ks = np.linspace(1667.0, 25000.0, 500)
    batch = locus_xy_batch(Ks)
    scalar = np.array([locus_xy(k) for k in Ks])
    print(f"3. Batch == scalar: {'[PASS]' if np.array_equal(batch, scalar) else '[FAIL]'}")
