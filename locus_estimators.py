# -*- coding: utf-8 -*-
"""
Locus: Correlated colour temperature on and around the Planckian locus
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

CCT Estimators
==============
Four interchangeable strategies that map a chromaticity to (K, Duv) and,
symmetrically, (K, Duv) back to a chromaticity. They share one interface
(``InverseEstimator``) and differ in the locus model and interpolation:

    Method               Inverse                            Valid K
    -------------------  ---------------------------------  ---------------
    POLYNOMIAL           McCamy seed + 3 Newton steps       1667 - 25000
    ROBERTSON_1968       31 isotherms, linear ratio weight  1667 - inf
    ROBERTSON_IMPROVED   dense exact isotherms, exact weight ~972 - inf
    OHNO_2013            515 Planckian samples, parabola    1000 - 100000

Robertson walk (both variants), with t_i = (n_v, -n_u) pointing toward
increasing mired:

    dt_i = (p - c_i) . t_i        first i with dt_i <= 0 closes the bracket
    f    = -dt_i / (dt_{i-1} - dt_i)                    (weight of entry i-1)

The improved variant replaces that first-order weight by the f at which p
lies exactly on the interpolated isotherm through lerp(c, f) with
direction lerp(n, f); this is a quadratic in f and makes the inverse
exact for points produced by the table forward path.

Ohno (2013) takes the nearest Planckian sample m and its two neighbours.
The triangular solution is used for |Duv| < 0.002, otherwise a parabola
d(T) = a T^2 + b T + c is fitted through the three distances and its
vertex gives T and |Duv|.

Every scalar kernel is ``njit``-compiled with ``fastmath=False`` and
returns NaN for points outside its domain; the batch entry points run the
same kernels under ``prange``.

References:
    - McCamy, C. S. (1992). "Correlated color temperature as an explicit
      function of chromaticity coordinates". Color Res. Appl. 17 (2).
    - Robertson, A. R. (1968). JOSA 58 (11).
    - Ohno, Y. (2014). "Practical use and calculation of CCT and Duv".
      LEUKOS 10 (1).
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Union

import numpy as np
from numba import njit, prange

from locus_cmf import ArrayFloat
from locus_chromaticity import handle_pairs, uv1960_to_xy, xy_to_uv1960
from locus_planckian import K_MAX, K_MIN, locus_uv1960, locus_xy
from locus_geometry import (
    MODEL_POLYNOMIAL,
    measure_duv_kernel,
    offset_uv1960,
    offset_xy,
    offset_xy_batch,
)
from locus_isotherm import (
    OHNO_K_MAX,
    OHNO_K_MIN,
    ROBERTSON_1968,
    IsothermTable,
    PlanckianTable,
    planckian_table,
    robertson_improved,
)

__all__ = [
    "Method",
    "InverseEstimator",
    "PolynomialNewton",
    "Robertson1968",
    "RobertsonImproved",
    "Ohno2013",
    "estimator_for",
    "polynomial_newton_kernel",
    "robertson_invert_kernel",
    "robertson_forward_kernel",
    "ohno_invert_kernel",
    "ohno_forward_kernel",
]

# --- Polynomial + Newton domain ---
XY_X_MIN: Final[float] = 0.25
XY_X_MAX: Final[float] = 0.565
XY_Y_MIN: Final[float] = 0.20
XY_Y_MAX: Final[float] = 0.45
NEWTON_ITERATIONS: Final[int] = 3
NEWTON_TOLERANCE: Final[float] = 1e-10
_BAND_SLACK: Final[float] = 1e-4

# --- Ohno ---
OHNO_PARABOLIC_DUV: Final[float] = 0.002
OHNO_RANGE_SLACK: Final[float] = 1e-4

_ROOT_SLACK: Final[float] = 1e-9


class Method(Enum):
    """Selects the forward model and inverse estimator."""
    POLYNOMIAL         = "polynomial"
    ROBERTSON_1968     = "robertson-1968"
    ROBERTSON_IMPROVED = "robertson-improved"
    OHNO_2013          = "ohno-2013"

    @classmethod
    def coerce(cls, value: Union[Method, str]) -> Method:
        """
        Accepts a ``Method``, its name (``"OHNO_2013"``) or its value
        (``"ohno-2013"``), case-insensitively.

        Raises:
            ValueError: Unknown name.
            TypeError: Neither a ``Method`` nor a string.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise TypeError(f"Method must be a Method or str, got {type(value).__name__}")
        key = value.strip()
        for member in cls:
            if key.upper() == member.name or key.lower() == member.value:
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown CCT method '{value}'. Expected one of: {valid}")


# =============================================================================
# 1. POLYNOMIAL + NEWTON
# =============================================================================

@njit(cache=True, fastmath=False)
def _newton_adjust(K: float) -> float:
    """Relative secant step for the tangent, banded by the seed temperature."""
    if K < 7000.0:
        return 0.000489
    if K < 15000.0:
        return 0.0024
    return 0.00095

@njit(cache=True, fastmath=False)
def mccamy_seed(x: float, y: float) -> float:
    n = (x - 0.3320) / (0.1858 - y)
    return 449.0 * n * n * n + 3525.0 * n * n + 6823.3 * n + 5520.33

@njit(cache=True, fastmath=False)
def polynomial_newton_kernel(x: float, y: float) -> tuple[float, float, bool]:
    """
    (K, Duv, ok) for a CIE 1931 chromaticity.

    Convergence is judged on the xy residual. The step itself projects the
    uv residual onto the uv tangent, so an off-locus point settles on its
    own isotherm rather than on the nearest locus point in xy.

    Iterates are clamped to the polynomial band. A clamped K that meets
    the residual tolerance is accepted; otherwise the last unclamped
    iterate must lie inside the band (within ``_BAND_SLACK``).
    """
    if not (x >= XY_X_MIN and x <= XY_X_MAX and y >= XY_Y_MIN and y <= XY_Y_MAX):
        return np.nan, np.nan, True
    K = mccamy_seed(x, y)
    if not np.isfinite(K):
        return np.nan, np.nan, True
    K = min(max(K, K_MIN), K_MAX)
    raw = K
    converged = False
    adjust = _newton_adjust(K)
    u, v = xy_to_uv1960(x, y)

    for _ in range(NEWTON_ITERATIONS):
        lx, ly = locus_xy(K)
        ex = x - lx
        ey = y - ly
        if ex * ex + ey * ey < NEWTON_TOLERANCE:
            converged = True
            break
        h = K * adjust
        if K + h > K_MAX:
            h = -h
        lu, lv = xy_to_uv1960(lx, ly)
        u2, v2 = locus_uv1960(K + h)
        tu = (u2 - lu) / h
        tv = (v2 - lv) / h
        tt = tu * tu + tv * tv
        if not tt > 0.0:
            return np.nan, np.nan, True
        raw = K + ((u - lu) * tu + (v - lv) * tv) / tt
        K = min(max(raw, K_MIN), K_MAX)

    if not converged and not (raw >= K_MIN * (1.0 - _BAND_SLACK) and raw <= K_MAX * (1.0 + _BAND_SLACK)):
        return np.nan, np.nan, True
    duv, ok = measure_duv_kernel(MODEL_POLYNOMIAL, u, v, K)
    return K, duv, ok

@njit(cache=True, fastmath=False, parallel=True)
def _polynomial_newton_batch(xy: ArrayFloat) -> tuple[ArrayFloat, ArrayFloat]:
    n = xy.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    ok = np.empty(n, dtype=np.bool_)
    for i in prange(n):
        K, duv, good = polynomial_newton_kernel(xy[i, 0], xy[i, 1])
        out[i, 0] = K
        out[i, 1] = duv
        ok[i] = good
    return out, ok


# =============================================================================
# 2. ROBERTSON (isotherm tables)
# =============================================================================
# Table rows: mired, u, v, normal_u, normal_v.

@njit(cache=True, fastmath=False)
def _tangential(table: ArrayFloat, i: int, u: float, v: float) -> float:
    return (u - table[i, 1]) * table[i, 4] - (v - table[i, 2]) * table[i, 3]

@njit(cache=True, fastmath=False)
def _exact_weight(table: ArrayFloat, i: int, u: float, v: float, f_lin: float) -> float:
    """Root in [0, 1] of (p - c(f)) . t(f), with c and t linear in f."""
    pu = u - table[i, 1]
    pv = v - table[i, 2]
    dcu = table[i - 1, 1] - table[i, 1]
    dcv = table[i - 1, 2] - table[i, 2]
    tu = table[i, 4]
    tv = -table[i, 3]
    dtu = table[i - 1, 4] - table[i, 4]
    dtv = table[i, 3] - table[i - 1, 3]

    A = pu * tu + pv * tv
    B = pu * dtu + pv * dtv - (dcu * tu + dcv * tv)
    C = -(dcu * dtu + dcv * dtv)

    if C == 0.0:
        return -A / B if B != 0.0 else f_lin
    disc = B * B - 4.0 * A * C
    if disc < 0.0:
        return f_lin
    q = -0.5 * (B + np.copysign(np.sqrt(disc), B))
    best = f_lin
    best_gap = np.inf
    for root in (q / C, A / q if q != 0.0 else np.nan):
        if root >= -_ROOT_SLACK and root <= 1.0 + _ROOT_SLACK:
            gap = abs(root - f_lin)
            if gap < best_gap:
                best = min(max(root, 0.0), 1.0)
                best_gap = gap
    return best

@njit(cache=True, fastmath=False)
def robertson_invert_kernel(table: ArrayFloat, exact: bool, u: float, v: float) -> tuple[float, float]:
    """
    (K, Duv) by walking the isotherms in ascending mired.

    Returns (+inf, Duv) for points beyond the infinite-temperature anchor
    and NaN for points past the last isotherm.
    """
    n = table.shape[0]
    dt_prev = _tangential(table, 0, u, v)
    for i in range(1, n):
        dt = _tangential(table, i, u, v)
        if not dt <= 0.0:
            dt_prev = dt
            continue
        if i == 1 and dt_prev <= 0.0:
            duv = (u - table[0, 1]) * table[0, 3] + (v - table[0, 2]) * table[0, 4]
            return np.inf, duv

        f = -dt / (dt_prev - dt)
        if exact:
            f = _exact_weight(table, i, u, v, f)
        fc = 1.0 - f

        mired = table[i, 0] * fc + table[i - 1, 0] * f
        cu = table[i, 1] * fc + table[i - 1, 1] * f
        cv = table[i, 2] * fc + table[i - 1, 2] * f
        nu = table[i, 3] * fc + table[i - 1, 3] * f
        nv = table[i, 4] * fc + table[i - 1, 4] * f
        length = np.sqrt(nu * nu + nv * nv)
        duv = ((u - cu) * nu + (v - cv) * nv) / length
        K = np.inf if mired == 0.0 else 1e6 / mired
        return K, duv
    return np.nan, np.nan

@njit(cache=True, fastmath=False)
def robertson_forward_kernel(table: ArrayFloat, K: float, duv: float) -> tuple[float, float]:
    """(u, v) at K, interpolated linearly in mired and offset along the
    normalised interpolated normal."""
    if not K > 0.0:
        return np.nan, np.nan
    mired = 1e6 / K
    n = table.shape[0]
    if not mired <= table[n - 1, 0]:
        return np.nan, np.nan
    if mired == 0.0:
        return table[0, 1] + duv * table[0, 3], table[0, 2] + duv * table[0, 4]

    lo = 0
    hi = n - 1
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if table[mid, 0] < mired:
            lo = mid
        else:
            hi = mid
    t = (mired - table[lo, 0]) / (table[hi, 0] - table[lo, 0])
    cu = table[lo, 1] + t * (table[hi, 1] - table[lo, 1])
    cv = table[lo, 2] + t * (table[hi, 2] - table[lo, 2])
    if duv == 0.0:
        return cu, cv
    nu = table[lo, 3] + t * (table[hi, 3] - table[lo, 3])
    nv = table[lo, 4] + t * (table[hi, 4] - table[lo, 4])
    length = np.sqrt(nu * nu + nv * nv)
    return cu + duv * nu / length, cv + duv * nv / length

@njit(cache=True, fastmath=False, parallel=True)
def _robertson_invert_batch(table: ArrayFloat, exact: bool, xy: ArrayFloat) -> ArrayFloat:
    n = xy.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    for i in prange(n):
        u, v = xy_to_uv1960(xy[i, 0], xy[i, 1])
        K, duv = robertson_invert_kernel(table, exact, u, v)
        out[i, 0] = K
        out[i, 1] = duv
    return out

@njit(cache=True, fastmath=False, parallel=True)
def _robertson_forward_batch(table: ArrayFloat, cct: ArrayFloat) -> ArrayFloat:
    n = cct.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    for i in prange(n):
        u, v = robertson_forward_kernel(table, cct[i, 0], cct[i, 1])
        x, y = uv1960_to_xy(u, v)
        out[i, 0] = x
        out[i, 1] = y
    return out


# =============================================================================
# 3. OHNO (2013)
# =============================================================================

@njit(cache=True, fastmath=False)
def ohno_invert_kernel(kelvin: ArrayFloat, uv: ArrayFloat, u: float, v: float) -> tuple[float, float]:
    """(K, Duv) from the nearest Planckian sample and its neighbours."""
    n = kelvin.shape[0]
    m = -1
    best = np.inf
    for i in range(n):
        du = u - uv[i, 0]
        dv = v - uv[i, 1]
        d = du * du + dv * dv
        if d < best:
            best = d
            m = i
    if m < 0:
        return np.nan, np.nan
    m = min(max(m, 1), n - 2)

    T0 = kelvin[m - 1]
    T1 = kelvin[m]
    T2 = kelvin[m + 1]
    d0 = np.hypot(u - uv[m - 1, 0], v - uv[m - 1, 1])
    d1 = np.hypot(u - uv[m, 0], v - uv[m, 1])
    d2 = np.hypot(u - uv[m + 1, 0], v - uv[m + 1, 1])

    # Triangular solution on the chord m-1 -> m+1.
    cu = uv[m + 1, 0] - uv[m - 1, 0]
    cv = uv[m + 1, 1] - uv[m - 1, 1]
    chord = np.hypot(cu, cv)
    along = (d0 * d0 - d2 * d2 + chord * chord) / (2.0 * chord)
    T = T0 + (T2 - T0) * along / chord
    v_foot = uv[m - 1, 1] + cv * along / chord
    sign = 1.0 if v - v_foot >= 0.0 else -1.0
    duv = sign * np.sqrt(max(d0 * d0 - along * along, 0.0))

    if abs(duv) >= OHNO_PARABOLIC_DUV:
        # Parabola in s = T - T1 for numerical conditioning.
        s0 = T0 - T1
        s2 = T2 - T1
        X = s2 * (s0 - s2) * (-s0)
        a = (s0 * (d2 - d1) + s2 * (d1 - d0)) / X
        b = -(s0 * s0 * (d2 - d1) + s2 * s2 * (d1 - d0)) / X
        c = -(d1 * (s0 - s2) * s0 * s2) / X
        if a > 0.0:
            s = -b / (2.0 * a)
            T = T1 + s
            duv = sign * (a * s * s + b * s + c)

    if not (T >= OHNO_K_MIN * (1.0 - OHNO_RANGE_SLACK) and T <= OHNO_K_MAX * (1.0 + OHNO_RANGE_SLACK)):
        return np.nan, np.nan
    return T, duv

@njit(cache=True, fastmath=False)
def ohno_forward_kernel(kelvin: ArrayFloat, uv: ArrayFloat, K: float, duv: float) -> tuple[float, float]:
    """(u, v) by linear interpolation in K, offset along the chord normal."""
    n = kelvin.shape[0]
    if not (K >= kelvin[0] and K <= kelvin[n - 1]):
        return np.nan, np.nan
    k = np.searchsorted(kelvin, K, side="right") - 1
    k = min(max(k, 0), n - 2)
    t = (K - kelvin[k]) / (kelvin[k + 1] - kelvin[k])
    du = uv[k + 1, 0] - uv[k, 0]
    dv = uv[k + 1, 1] - uv[k, 1]
    u0 = uv[k, 0] + t * du
    v0 = uv[k, 1] + t * dv
    if duv == 0.0:
        return u0, v0
    length = np.sqrt(du * du + dv * dv)
    nu = dv / length
    nv = -du / length
    if nv < 0.0:
        nu = -nu
        nv = -nv
    return u0 + duv * nu, v0 + duv * nv

@njit(cache=True, fastmath=False, parallel=True)
def _ohno_invert_batch(kelvin: ArrayFloat, uv: ArrayFloat, xy: ArrayFloat) -> ArrayFloat:
    n = xy.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    for i in prange(n):
        u, v = xy_to_uv1960(xy[i, 0], xy[i, 1])
        K, duv = ohno_invert_kernel(kelvin, uv, u, v)
        out[i, 0] = K
        out[i, 1] = duv
    return out

@njit(cache=True, fastmath=False, parallel=True)
def _ohno_forward_batch(kelvin: ArrayFloat, uv: ArrayFloat, cct: ArrayFloat) -> ArrayFloat:
    n = cct.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    for i in prange(n):
        u, v = ohno_forward_kernel(kelvin, uv, cct[i, 0], cct[i, 1])
        x, y = uv1960_to_xy(u, v)
        out[i, 0] = x
        out[i, 1] = y
    return out


# =============================================================================
# 4. STRATEGY OBJECTS
# =============================================================================

class InverseEstimator:
    """
    Common interface of the four CCT methods.

    Subclasses implement the CIE 1960 primitives ``forward_uv1960`` and
    ``invert_uv1960`` plus the two batch kernels; the CIE 1931 entry
    points are derived here. Instances hold no per-call state and are
    safe to share between threads.
    """
    method: Method

    def forward_uv1960(self, K: float, duv: float = 0.0) -> tuple[float, float]:
        raise NotImplementedError

    def invert_uv1960(self, u: float, v: float) -> tuple[float, float]:
        raise NotImplementedError

    def _forward_pairs(self, cct: ArrayFloat) -> ArrayFloat:
        raise NotImplementedError

    def _invert_pairs(self, xy: ArrayFloat) -> ArrayFloat:
        raise NotImplementedError

    def forward_xy(self, K: float, duv: float = 0.0) -> tuple[float, float]:
        u, v = self.forward_uv1960(K, duv)
        return uv1960_to_xy(u, v)

    def invert(self, x: float, y: float) -> tuple[float, float]:
        """(K, Duv) for a CIE 1931 chromaticity; NaN outside the domain."""
        u, v = xy_to_uv1960(float(x), float(y))
        return self.invert_uv1960(u, v)

    def forward_batch(self, cct: ArrayFloat) -> ArrayFloat:
        """(K, Duv) rows -> (x, y) rows. Shape (N, 2) or (2,)."""
        return handle_pairs(self._forward_pairs)(cct)

    def invert_batch(self, xy: ArrayFloat) -> ArrayFloat:
        """(x, y) rows -> (K, Duv) rows. Shape (N, 2) or (2,)."""
        return handle_pairs(self._invert_pairs)(xy)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PolynomialNewton(InverseEstimator):
    """Krystek polynomial forward; McCamy seed refined by Gauss-Newton."""
    method = Method.POLYNOMIAL

    def forward_uv1960(self, K: float, duv: float = 0.0) -> tuple[float, float]:
        return offset_uv1960(K, duv, MODEL_POLYNOMIAL)

    def forward_xy(self, K: float, duv: float = 0.0) -> tuple[float, float]:
        return offset_xy(K, duv, MODEL_POLYNOMIAL)

    def invert(self, x: float, y: float) -> tuple[float, float]:
        K, duv, ok = polynomial_newton_kernel(float(x), float(y))
        if not ok:
            raise ValueError(f"Isotherm normal undefined at K={K} for xy=({x}, {y})")
        return K, duv

    def invert_uv1960(self, u: float, v: float) -> tuple[float, float]:
        x, y = uv1960_to_xy(float(u), float(v))
        return self.invert(x, y)

    def _forward_pairs(self, cct: ArrayFloat) -> ArrayFloat:
        return offset_xy_batch(cct, MODEL_POLYNOMIAL)

    def _invert_pairs(self, xy: ArrayFloat) -> ArrayFloat:
        out, ok = _polynomial_newton_batch(xy)
        if not ok.all():
            raise ValueError(f"Isotherm normal undefined at K={out[np.argmin(ok), 0]}")
        return out


class _RobertsonEstimator(InverseEstimator):
    """Shared walk over an ``IsothermTable``."""
    _exact: bool = False

    @property
    def table(self) -> IsothermTable:
        raise NotImplementedError

    def forward_uv1960(self, K: float, duv: float = 0.0) -> tuple[float, float]:
        return robertson_forward_kernel(self.table.entries, float(K), float(duv))

    def invert_uv1960(self, u: float, v: float) -> tuple[float, float]:
        return robertson_invert_kernel(self.table.entries, self._exact, float(u), float(v))

    def _forward_pairs(self, cct: ArrayFloat) -> ArrayFloat:
        return _robertson_forward_batch(self.table.entries, cct)

    def _invert_pairs(self, xy: ArrayFloat) -> ArrayFloat:
        return _robertson_invert_batch(self.table.entries, self._exact, xy)


class Robertson1968(_RobertsonEstimator):
    """Robertson's 31 published isotherms with the classic linear weight."""
    method = Method.ROBERTSON_1968

    @property
    def table(self) -> IsothermTable:
        return ROBERTSON_1968


class RobertsonImproved(_RobertsonEstimator):
    """Dense exact-Planck isotherms with the exact interpolation weight."""
    method = Method.ROBERTSON_IMPROVED
    _exact = True

    @property
    def table(self) -> IsothermTable:
        return robertson_improved()


class Ohno2013(InverseEstimator):
    """Ohno's triangular / parabolic solution on 515 exact locus samples."""
    method = Method.OHNO_2013

    @property
    def table(self) -> PlanckianTable:
        return planckian_table()

    def forward_uv1960(self, K: float, duv: float = 0.0) -> tuple[float, float]:
        t = self.table
        return ohno_forward_kernel(t.kelvin, t.uv, float(K), float(duv))

    def invert_uv1960(self, u: float, v: float) -> tuple[float, float]:
        t = self.table
        return ohno_invert_kernel(t.kelvin, t.uv, float(u), float(v))

    def _forward_pairs(self, cct: ArrayFloat) -> ArrayFloat:
        t = self.table
        return _ohno_forward_batch(t.kelvin, t.uv, cct)

    def _invert_pairs(self, xy: ArrayFloat) -> ArrayFloat:
        t = self.table
        return _ohno_invert_batch(t.kelvin, t.uv, xy)


_ESTIMATORS: Final[dict[Method, InverseEstimator]] = {
    Method.POLYNOMIAL:         PolynomialNewton(),
    Method.ROBERTSON_1968:     Robertson1968(),
    Method.ROBERTSON_IMPROVED: RobertsonImproved(),
    Method.OHNO_2013:          Ohno2013(),
}

def estimator_for(method: Union[Method, str]) -> InverseEstimator:
    """The shared estimator instance for ``method`` (a ``Method`` or its name)."""
    return _ESTIMATORS[Method.coerce(method)]


if __name__ == "__main__":
    print("--- Locus Estimator Validation ---")

    # 1. Zero-Duv round trip at 5000 K for every method
    for m in Method:
        est = estimator_for(m)
        x, y = est.forward_xy(5000.0)
        K, duv = est.invert(x, y)
        ok = abs(K - 5000.0) < 5.0 and abs(duv) < 1e-4
        print(f"1. {m.value:<20} K={K:10.3f} Duv={duv:+.6f} {'[PASS]' if ok else '[FAIL]'}")

    # 2. Duv sign
    x, y = estimator_for(Method.OHNO_2013).forward_xy(3000.0, 0.01)
    _, duv = estimator_for(Method.OHNO_2013).invert(x, y)
    print(f"2. Positive Duv recovered: {duv:+.6f} {'[PASS]' if duv > 0 else '[FAIL]'}")

    # 3. Domain
    K, _ = estimator_for(Method.POLYNOMIAL).invert(0.1, 0.1)
    print(f"3. Polynomial NaN outside box: {'[PASS]' if np.isnan(K) else '[FAIL]'}")

    # 4. Unknown method name
    try:
        estimator_for("bogus")
    except ValueError as e:
        print(f"4. Caught expected error: {e}")
