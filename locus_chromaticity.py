# -*- coding: utf-8 -*-
"""
Locus: Correlated colour temperature on and around the Planckian locus
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Chromaticity Coordinates
========================
Conversions between the three equivalent chromaticity representations used
throughout Locus, plus the minimal sRGB rendering collaborator needed to
turn a locus point into a displayable colour.

    CIE 1931 (x, y)   ->  CIE 1960 (u, v)     u  = 4x / (-2x + 12y + 3)
                                              v  = 6y / (-2x + 12y + 3)
    CIE 1960 (u, v)   ->  CIE 1976 (u', v')   u' = u,  v' = 1.5 v

Every scalar function is a Numba ``njit`` function returning a plain tuple,
so it can be called both from Python and from other compiled kernels. The
batch functions accept ``(2,)`` or ``(N, 2)`` arrays and mirror the
``handle_shapes`` convention: single pair in, single pair out.

Degenerate inputs (a zero denominator, NaN in, black XYZ) produce NaN
rather than the 0.0 fallback a rendering pipeline would use, because a
silent zero would be indistinguishable from a real chromaticity.

References:
    - CIE 15:2004 "Colorimetry", section 8
    - IEC 61966-2-1:1999 (sRGB Standard)
"""

import functools
import numpy as np
from numba import njit, prange
from typing import Any, Callable, Final

from locus_cmf import ArrayFloat

__all__ = [
    # --- Constants ---
    "M_XYZ_TO_SRGB",
    "DENOM_EPSILON",

    # --- Decorators ---
    "handle_pairs",

    # --- Scalar conversions ---
    "xy_to_uv1960",
    "uv1960_to_xy",
    "xy_to_uv1976",
    "uv1976_to_xy",
    "uv1960_to_uv1976",
    "uv1976_to_uv1960",
    "xy_to_xyz",
    "xyz_to_xy",
    "xyz_to_uv1960",

    # --- Batch conversions ---
    "xy_to_uv1960_batch",
    "uv1960_to_xy_batch",

    # --- Rendering collaborator ---
    "xy_to_linear_srgb",
    "xy_to_srgb",
    "srgb_to_hex",
]

# IEC 61966-2-1, XYZ (D65) -> linear sRGB.
M_XYZ_TO_SRGB: Final[ArrayFloat] = np.array([
    [ 3.2404542, -1.5371385, -0.4985314],
    [-0.9692660,  1.8760108,  0.0415560],
    [ 0.0556434, -0.2040259,  1.0572252]
], dtype=np.float64)
M_XYZ_TO_SRGB.setflags(write=False)

DENOM_EPSILON: Final[float] = 1e-12


# =============================================================================
# 1. ROBUST DECORATORS
# =============================================================================

def handle_pairs(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator to normalize chromaticity inputs to (N, 2) float64 batches.

    - If input is (2,), returns the first row of the result.
    - If input is (N, 2), returns the full result.
    """
    @functools.wraps(func)
    def wrapper(arr: ArrayFloat, *args: Any, **kwargs: Any) -> ArrayFloat:
        arr = np.asarray(arr, dtype=np.float64)
        arr_in = np.ascontiguousarray(np.atleast_2d(arr))

        if arr_in.ndim != 2 or arr_in.shape[-1] != 2:
            raise ValueError(f"Expected shape (2,) or (N, 2), got {arr.shape}")

        res = func(arr_in, *args, **kwargs)

        if arr.ndim == 1:
            return res[0]
        return res
    return wrapper


# =============================================================================
# 2. SCALAR KERNELS (callable from Python and from other kernels)
# =============================================================================
# fastmath stays off: NaN must survive every comparison below.

@njit(cache=True, fastmath=False)
def xy_to_uv1960(x: float, y: float) -> tuple[float, float]:
    """CIE 1931 (x, y) -> CIE 1960 (u, v)."""
    denom = -2.0 * x + 12.0 * y + 3.0
    if not abs(denom) > DENOM_EPSILON:
        return np.nan, np.nan
    return 4.0 * x / denom, 6.0 * y / denom

@njit(cache=True, fastmath=False)
def uv1960_to_xy(u: float, v: float) -> tuple[float, float]:
    """CIE 1960 (u, v) -> CIE 1931 (x, y)."""
    denom = 2.0 * u - 8.0 * v + 4.0
    if not abs(denom) > DENOM_EPSILON:
        return np.nan, np.nan
    return 3.0 * u / denom, 2.0 * v / denom

@njit(cache=True, fastmath=False)
def xy_to_uv1976(x: float, y: float) -> tuple[float, float]:
    """CIE 1931 (x, y) -> CIE 1976 (u', v')."""
    denom = -2.0 * x + 12.0 * y + 3.0
    if not abs(denom) > DENOM_EPSILON:
        return np.nan, np.nan
    return 4.0 * x / denom, 9.0 * y / denom

@njit(cache=True, fastmath=False)
def uv1976_to_xy(u: float, v: float) -> tuple[float, float]:
    """CIE 1976 (u', v') -> CIE 1931 (x, y)."""
    denom = 6.0 * u - 16.0 * v + 12.0
    if not abs(denom) > DENOM_EPSILON:
        return np.nan, np.nan
    return 9.0 * u / denom, 4.0 * v / denom

@njit(cache=True, fastmath=False)
def uv1960_to_uv1976(u: float, v: float) -> tuple[float, float]:
    return u, 1.5 * v

@njit(cache=True, fastmath=False)
def uv1976_to_uv1960(u: float, v: float) -> tuple[float, float]:
    return u, v / 1.5

@njit(cache=True, fastmath=False)
def xy_to_xyz(x: float, y: float, Y: float = 1.0) -> tuple[float, float, float]:
    """
    CIE xyY -> XYZ.

    A chromaticity with y == 0 has no defined luminance scaling and maps
    to NaN.
    """
    if not abs(y) > DENOM_EPSILON:
        return np.nan, np.nan, np.nan
    scale = Y / y
    return x * scale, Y, (1.0 - x - y) * scale

@njit(cache=True, fastmath=False)
def xyz_to_xy(X: float, Y: float, Z: float) -> tuple[float, float]:
    total = X + Y + Z
    if not abs(total) > DENOM_EPSILON:
        return np.nan, np.nan
    return X / total, Y / total

@njit(cache=True, fastmath=False)
def xyz_to_uv1960(X: float, Y: float, Z: float) -> tuple[float, float]:
    """XYZ -> CIE 1960 (u, v) using u = 4X / (X + 15Y + 3Z), v = 6Y / (...)."""
    denom = X + 15.0 * Y + 3.0 * Z
    if not abs(denom) > DENOM_EPSILON:
        return np.nan, np.nan
    return 4.0 * X / denom, 6.0 * Y / denom


# =============================================================================
# 3. BATCH KERNELS
# =============================================================================

@njit(cache=True, fastmath=False, parallel=True)
def _xy_to_uv1960_kernel(xy: ArrayFloat) -> ArrayFloat:
    n = xy.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    for i in prange(n):
        u, v = xy_to_uv1960(xy[i, 0], xy[i, 1])
        out[i, 0] = u
        out[i, 1] = v
    return out

@njit(cache=True, fastmath=False, parallel=True)
def _uv1960_to_xy_kernel(uv: ArrayFloat) -> ArrayFloat:
    n = uv.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    for i in prange(n):
        x, y = uv1960_to_xy(uv[i, 0], uv[i, 1])
        out[i, 0] = x
        out[i, 1] = y
    return out

@handle_pairs
def xy_to_uv1960_batch(xy: ArrayFloat) -> ArrayFloat:
    """Batch CIE 1931 (x, y) -> CIE 1960 (u, v). Shape (N, 2) or (2,)."""
    return _xy_to_uv1960_kernel(xy)

@handle_pairs
def uv1960_to_xy_batch(uv: ArrayFloat) -> ArrayFloat:
    """Batch CIE 1960 (u, v) -> CIE 1931 (x, y). Shape (N, 2) or (2,)."""
    return _uv1960_to_xy_kernel(uv)


# =============================================================================
# 4. sRGB RENDERING COLLABORATOR
# =============================================================================

@njit(cache=True, fastmath=False)
def _srgb_oetf(v: float) -> float:
    """sRGB OETF (IEC 61966-2-1)."""
    if v <= 0.0031308:
        return 12.92 * v
    return 1.055 * (v ** (1.0 / 2.4)) - 0.055

def xy_to_linear_srgb(x: float, y: float) -> tuple[float, float, float]:
    """
    Linear sRGB for a chromaticity at Y = 1, normalised so the largest
    channel is 1.

    Returns NaN channels when the chromaticity is invalid or every channel
    is non-positive.
    """
    X, Y, Z = xy_to_xyz(x, y, 1.0)
    rgb = M_XYZ_TO_SRGB @ np.array([X, Y, Z], dtype=np.float64)
    peak = rgb.max()
    if not peak > 0.0:
        return np.nan, np.nan, np.nan
    rgb /= peak
    return float(rgb[0]), float(rgb[1]), float(rgb[2])

def xy_to_srgb(x: float, y: float) -> tuple[float, float, float]:
    """
    Gamma-encoded sRGB in [0, 1] for a chromaticity.

    Out-of-gamut (negative) linear channels are clipped to 0 before
    encoding; brightness is normalised by the maximum channel.
    """
    r, g, b = xy_to_linear_srgb(x, y)
    if np.isnan(r):
        return np.nan, np.nan, np.nan
    return (
        _srgb_oetf(min(max(r, 0.0), 1.0)),
        _srgb_oetf(min(max(g, 0.0), 1.0)),
        _srgb_oetf(min(max(b, 0.0), 1.0)),
    )

def srgb_to_hex(r: float, g: float, b: float) -> str:
    """
    Encodes gamma-encoded sRGB channels in [0, 1] as ``rrggbb``.

    Raises:
        ValueError: If any channel is NaN or infinite.
    """
    channels = (r, g, b)
    if not all(np.isfinite(c) for c in channels):
        raise ValueError(f"Cannot hex-encode non-finite RGB {channels}")
    return "".join(f"{int(round(min(max(c, 0.0), 1.0) * 255.0)):02x}" for c in channels)


if __name__ == "__main__":
    print("--- Locus Chromaticity Validation ---")

    # 1. Round trip through every representation
    xy_in = np.random.uniform(0.2, 0.5, size=(1000, 2))
    uv = xy_to_uv1960_batch(xy_in)
    xy_out = uv1960_to_xy_batch(uv)
    err = np.max(np.abs(xy_in - xy_out))
    print(f"1. xy -> uv1960 -> xy max error: {err:.2e} {'[PASS]' if err < 1e-14 else '[FAIL]'}")

    # 2. Degenerate input
    u, v = uv1960_to_xy(0.0, 0.5)
    print(f"2. Degenerate uv -> xy gives NaN: {'[PASS]' if np.isnan(u) and np.isnan(v) else '[FAIL]'}")

    # 3. Shape safety
    try:
        xy_to_uv1960_batch(np.zeros((4, 3)))
    except ValueError as e:
        print(f"3. Caught expected error: {e}")
