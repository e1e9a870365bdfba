# -*- coding: utf-8 -*-
"""
Locus: Correlated colour temperature on and around the Planckian locus
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Isotherm Geometry
=================
Unit normals to the Planckian locus ("isotherm" directions) in CIE 1960
(u, v), and the two operations built on them:

    offset:   p = L(T) + Duv * n(T)
    measure:  Duv = (p - L(T)) . n(T)

The tangent dL/dT is a central finite difference whose step is banded by
temperature: very small around 1500-2000 K where the locus bends hardest
and v peaks, proportionally larger at high temperature where the locus is
numerically flat. A stencil that would leave the model's valid band is
clipped to it (one-sided at the edges). If the tangent comes back
non-finite or zero-length, the step is shrunk to 1 % and retried once;
a second failure raises ``ValueError``: callers must stay inside the
documented temperature range.

Sign convention: n is always rotated so that n_v >= 0. Positive Duv points
toward increasing v (green), negative toward magenta.

Two locus models are supported, selected by an integer code so the
geometry compiles into the batch kernels:

    MODEL_POLYNOMIAL  Krystek polynomial, 1667-25000 K
    MODEL_BLACKBODY   Planck integral, 100-100000 K
"""

import numpy as np
from numba import njit, prange
from typing import Final

from locus_cmf import ArrayFloat
from locus_chromaticity import uv1960_to_xy, xy_to_uv1960
from locus_planckian import K_MAX, K_MIN, locus_uv1960, locus_xy
from locus_blackbody import BB_K_MAX, BB_K_MIN, blackbody_uv1960

__all__ = [
    "MODEL_POLYNOMIAL",
    "MODEL_BLACKBODY",
    "RETRY_FACTOR",
    "slope_step",
    "model_bounds",
    "model_uv1960",
    "finite_difference_tangent",
    "isotherm_normal_kernel",
    "isotherm_normal",
    "offset_uv1960",
    "offset_xy",
    "offset_xy_batch",
    "measure_duv_kernel",
    "measure_duv",
    "measure_duv_xy",
]

MODEL_POLYNOMIAL: Final[int] = 0
MODEL_BLACKBODY: Final[int] = 1

RETRY_FACTOR: Final[float] = 0.01
_MAX_ATTEMPTS: Final[int] = 2


# =============================================================================
# 1. MODEL DISPATCH
# =============================================================================

@njit(cache=True, fastmath=False)
def model_bounds(model: int) -> tuple[float, float]:
    if model == MODEL_POLYNOMIAL:
        return K_MIN, K_MAX
    return BB_K_MIN, BB_K_MAX

@njit(cache=True, fastmath=False)
def model_uv1960(model: int, K: float) -> tuple[float, float]:
    if model == MODEL_POLYNOMIAL:
        return locus_uv1960(K)
    return blackbody_uv1960(K)


# =============================================================================
# 2. FINITE DIFFERENCES
# =============================================================================

@njit(cache=True, fastmath=False)
def slope_step(K: float) -> float:
    """Central-difference half step (Kelvin) for the locus tangent at K."""
    if K >= 1620.0 and K <= 1700.0:
        return 0.001
    if K >= 1550.0 and K <= 1750.0:
        return 0.01
    if K >= 1400.0 and K <= 1800.0:
        return 0.1
    if K >= 1000.0 and K <= 2000.0:
        return 1.0
    if K >= 50000.0:
        return K * 1e-5
    if K >= 20000.0:
        return K * 1e-4
    return min(10.0, K * 0.001)

@njit(cache=True, fastmath=False)
def finite_difference_tangent(model: int, K: float, h: float) -> tuple[float, float]:
    """d(u, v)/dK by central difference, clipped to the model's valid band."""
    lo, hi = model_bounds(model)
    k1 = max(K - h, lo)
    k2 = min(K + h, hi)
    if not k2 > k1:
        return np.nan, np.nan
    u1, v1 = model_uv1960(model, k1)
    u2, v2 = model_uv1960(model, k2)
    dk = k2 - k1
    return (u2 - u1) / dk, (v2 - v1) / dk

@njit(cache=True, fastmath=False)
def isotherm_normal_kernel(model: int, K: float) -> tuple[float, float, int]:
    """Returns (n_u, n_v, attempts); attempts == _MAX_ATTEMPTS means failure."""
    h = slope_step(K)
    for attempt in range(_MAX_ATTEMPTS):
        tu, tv = finite_difference_tangent(model, K, h)
        length = np.sqrt(tu * tu + tv * tv)
        if np.isfinite(length) and length > 0.0:
            nu = tv / length
            nv = -tu / length
            if nv < 0.0:
                nu = -nu
                nv = -nv
            return nu, nv, attempt
        h *= RETRY_FACTOR
    return np.nan, np.nan, _MAX_ATTEMPTS

def _raise_undefined(K: float, model: int) -> None:
    raise ValueError(
        f"Isotherm normal undefined at K={K} (model {model}): finite "
        f"difference degenerate after {_MAX_ATTEMPTS} attempts."
    )

def isotherm_normal(K: float, model: int = MODEL_POLYNOMIAL) -> tuple[float, float]:
    """
    Unit isotherm normal at temperature K.

    Args:
        K: Temperature in Kelvin, inside the model's valid band.
        model: ``MODEL_POLYNOMIAL`` or ``MODEL_BLACKBODY``.

    Returns:
        (n_u, n_v) with n_v >= 0.

    Raises:
        ValueError: If the tangent is undefined even after the retry.
    """
    nu, nv, attempts = isotherm_normal_kernel(model, float(K))
    if attempts >= _MAX_ATTEMPTS:
        _raise_undefined(K, model)
    return nu, nv


# =============================================================================
# 3. OFFSET & MEASURE
# =============================================================================
# Kernels report a failed normal through ``ok``; the Python wrappers turn
# it into ``ValueError`` so compiled code never raises inside ``prange``.

@njit(cache=True, fastmath=False)
def _offset_uv_kernel(model: int, K: float, duv: float) -> tuple[float, float, bool]:
    u, v = model_uv1960(model, K)
    if np.isnan(u) or duv == 0.0:
        return u, v, True
    nu, nv, attempts = isotherm_normal_kernel(model, K)
    if attempts >= _MAX_ATTEMPTS:
        return np.nan, np.nan, False
    return u + duv * nu, v + duv * nv, True

def offset_uv1960(K: float, duv: float, model: int = MODEL_POLYNOMIAL) -> tuple[float, float]:
    """Locus point at K moved ``duv`` along the isotherm normal, CIE 1960."""
    u, v, ok = _offset_uv_kernel(model, float(K), float(duv))
    if not ok:
        _raise_undefined(K, model)
    return u, v

@njit(cache=True, fastmath=False)
def _offset_xy_kernel(model: int, K: float, duv: float) -> tuple[float, float, bool]:
    if duv == 0.0 and model == MODEL_POLYNOMIAL:
        x, y = locus_xy(K)
        return x, y, True
    u, v, ok = _offset_uv_kernel(model, K, duv)
    x, y = uv1960_to_xy(u, v)
    return x, y, ok

def offset_xy(K: float, duv: float = 0.0, model: int = MODEL_POLYNOMIAL) -> tuple[float, float]:
    """
    Chromaticity (x, y) at temperature K displaced by ``duv``.

    With ``duv == 0`` on the polynomial model this is exactly ``locus_xy``.
    Out-of-band temperatures return NaN.
    """
    x, y, ok = _offset_xy_kernel(model, float(K), float(duv))
    if not ok:
        _raise_undefined(K, model)
    return x, y

@njit(cache=True, fastmath=False, parallel=True)
def _offset_xy_batch_kernel(model: int, cct: ArrayFloat) -> tuple[ArrayFloat, ArrayFloat]:
    n = cct.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    ok = np.empty(n, dtype=np.bool_)
    for i in prange(n):
        x, y, good = _offset_xy_kernel(model, cct[i, 0], cct[i, 1])
        out[i, 0] = x
        out[i, 1] = y
        ok[i] = good
    return out, ok

def offset_xy_batch(cct: ArrayFloat, model: int = MODEL_POLYNOMIAL) -> ArrayFloat:
    """
    Vectorised ``offset_xy``.

    Args:
        cct: (N, 2) rows of (K, Duv), or a single (2,) row.

    Returns:
        (N, 2) chromaticities, or (2,).
    """
    arr = np.asarray(cct, dtype=np.float64)
    arr_in = np.ascontiguousarray(np.atleast_2d(arr))
    if arr_in.ndim != 2 or arr_in.shape[-1] != 2:
        raise ValueError(f"Expected (K, Duv) rows of shape (N, 2), got {arr.shape}")
    res, ok = _offset_xy_batch_kernel(model, arr_in)
    if not ok.all():
        _raise_undefined(float(arr_in[np.argmin(ok), 0]), model)
    if arr.ndim == 1:
        return res[0]
    return res

@njit(cache=True, fastmath=False)
def measure_duv_kernel(model: int, u: float, v: float, K: float) -> tuple[float, bool]:
    lu, lv = model_uv1960(model, K)
    if np.isnan(lu) or np.isnan(u) or np.isnan(v):
        return np.nan, True
    nu, nv, attempts = isotherm_normal_kernel(model, K)
    if attempts >= _MAX_ATTEMPTS:
        return np.nan, False
    return (u - lu) * nu + (v - lv) * nv, True

def measure_duv(u: float, v: float, K: float, model: int = MODEL_POLYNOMIAL) -> float:
    """Signed distance of CIE 1960 (u, v) from the locus point at K, along n(K)."""
    duv, ok = measure_duv_kernel(model, float(u), float(v), float(K))
    if not ok:
        _raise_undefined(K, model)
    return duv

def measure_duv_xy(x: float, y: float, K: float, model: int = MODEL_POLYNOMIAL) -> float:
    u, v = xy_to_uv1960(float(x), float(y))
    return measure_duv(u, v, K, model)


if __name__ == "__main__":
    print("--- Locus Isotherm Geometry Validation ---")

    # 1. Normals are unit length with canonical sign
    Ks = np.geomspace(1667.0, 25000.0, 200)
    norms = np.array([isotherm_normal(k) for k in Ks])
    unit = np.allclose(np.hypot(norms[:, 0], norms[:, 1]), 1.0)
    canon = bool(np.all(norms[:, 1] >= 0.0))
    print(f"1. Unit, canonical normals: {'[PASS]' if unit and canon else '[FAIL]'}")

    # 2. Offset then measure
    u, v = offset_uv1960(4000.0, 0.02)
    d = measure_duv(u, v, 4000.0)
    print(f"2. Offset/measure Duv = {d:.12f} {'[PASS]' if abs(d - 0.02) < 1e-12 else '[FAIL]'}")

    # 3. Contract violation is fatal
    try:
        isotherm_normal(50.0, MODEL_BLACKBODY)
    except ValueError as e:
        print(f"3. Caught expected error: {e}")
