# -*- coding: utf-8 -*-
"""
Locus: Correlated colour temperature on and around the Planckian locus
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

CCT Value Type
==============
``CCT`` pairs an absolute temperature with a signed distance from the
Planckian locus (Duv, CIE 1960 units) and is the public entry point for
both directions:

    CCT(2700.0, 0.01).xy()          # forward, default method
    CCT.from_xy(0.4476, 0.4074)     # inverse, default method

Forward and inverse share one ``Method`` so that a round trip stays inside
a single model. ``None`` selects the module default (``Method.POLYNOMIAL``
unless changed with ``set_default_method``).

Invalid values are data, not errors: a NaN in either field makes the whole
CCT invalid, and every forward conversion of an invalid CCT is NaN.
Only rendering to a hex string raises, since a string has no NaN.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from locus_cmf import ArrayFloat
from locus_chromaticity import (
    srgb_to_hex,
    uv1960_to_uv1976,
    uv1960_to_xy,
    uv1976_to_uv1960,
    xy_to_srgb,
    xy_to_xyz,
    xyz_to_xy,
)
from locus_planckian import daylight_xy
from locus_blackbody import SpectralPowerDistribution, blackbody_spectrum
from locus_geometry import MODEL_BLACKBODY, offset_uv1960
from locus_estimators import InverseEstimator, Method, estimator_for

__all__ = [
    "Method",
    "CCT",
    "set_default_method",
    "get_default_method",
    "cct_from_xy",
    "xy_from_cct",
]

MethodLike = Union[Method, str]


# --- Runtime Configuration ---
# Method used wherever a ``method`` argument is left as None.
#
# Toggle at runtime via:
#     import locus_cct as lc
#     lc.set_default_method("ohno-2013")
#     lc.set_default_method(lc.Method.POLYNOMIAL)   # back to the default
_DEFAULT_METHOD: Method = Method.POLYNOMIAL

def set_default_method(method: MethodLike) -> None:
    """
    Sets the process-wide default CCT method.

    Args:
        method: A ``Method`` or its name/value string.

    Raises:
        ValueError: Unknown method name.
        TypeError: Unsupported argument type.
    """
    global _DEFAULT_METHOD
    _DEFAULT_METHOD = Method.coerce(method)

def get_default_method() -> Method:
    return _DEFAULT_METHOD

def _estimator(method: Optional[MethodLike]) -> InverseEstimator:
    return estimator_for(_DEFAULT_METHOD if method is None else method)


# =============================================================================
# 1. VALUE TYPE
# =============================================================================

@dataclass(slots=True, frozen=True)
class CCT:
    """
    Correlated colour temperature and its distance from the locus.

    Attributes:
        K:   Temperature in Kelvin (``inf`` is allowed for the table methods).
        Duv: Signed offset along the isotherm normal; positive is toward +v
             (greenish), negative toward magenta.
    """
    K:   float
    Duv: float = 0.0

    def __post_init__(self) -> None:
        K = float(self.K)
        duv = float(self.Duv)
        if np.isnan(K) or np.isnan(duv):
            K = duv = np.nan
        object.__setattr__(self, "K", K)
        object.__setattr__(self, "Duv", duv)

    @property
    def invalid(self) -> bool:
        return bool(np.isnan(self.K))

    @property
    def mired(self) -> float:
        return 1e6 / self.K if self.K != 0.0 else np.inf

    def __str__(self) -> str:
        if self.invalid:
            return "CCT(invalid)"
        return f"{self.K:.1f} K, Duv {self.Duv:+.5f}"

    # --- Forward ---------------------------------------------------------

    def xy(self, method: Optional[MethodLike] = None) -> tuple[float, float]:
        """CIE 1931 chromaticity through ``method``'s forward model."""
        if self.invalid:
            return np.nan, np.nan
        return _estimator(method).forward_xy(self.K, self.Duv)

    def uv1960(self, method: Optional[MethodLike] = None) -> tuple[float, float]:
        if self.invalid:
            return np.nan, np.nan
        return _estimator(method).forward_uv1960(self.K, self.Duv)

    def uv1976(self, method: Optional[MethodLike] = None) -> tuple[float, float]:
        u, v = self.uv1960(method)
        return uv1960_to_uv1976(u, v)

    def xyz(self, Y: float = 100.0, method: Optional[MethodLike] = None) -> tuple[float, float, float]:
        x, y = self.xy(method)
        return xy_to_xyz(x, y, Y)

    def xy_exact(self) -> tuple[float, float]:
        """
        Chromaticity from the Planck integral, Duv applied along the exact
        isotherm normal. Valid 100-100000 K.
        """
        if self.invalid:
            return np.nan, np.nan
        u, v = offset_uv1960(self.K, self.Duv, MODEL_BLACKBODY)
        return uv1960_to_xy(u, v)

    def xyz_exact(self, Y: float = 100.0) -> tuple[float, float, float]:
        x, y = self.xy_exact()
        return xy_to_xyz(x, y, Y)

    def xy_daylight(self) -> tuple[float, float]:
        """CIE daylight locus at K (4000-25000 K); Duv is not applied."""
        return daylight_xy(self.K)

    def srgb(self, method: Optional[MethodLike] = None) -> tuple[float, float, float]:
        """Gamma-encoded sRGB in [0, 1], brightest channel at 1."""
        x, y = self.xy(method)
        return xy_to_srgb(x, y)

    def hex(self, method: Optional[MethodLike] = None) -> str:
        """
        ``rrggbb`` string of ``srgb()``.

        Raises:
            ValueError: If the CCT has no valid chromaticity under ``method``.
        """
        return srgb_to_hex(*self.srgb(method))

    def spectrum(self, start: int = 380, end: int = 780, step: int = 5) -> SpectralPowerDistribution:
        """Planckian spectrum at K normalised to Y = 100; Duv is not applied."""
        return blackbody_spectrum(self.K, start, end, step)

    # --- Inverse ---------------------------------------------------------

    @classmethod
    def from_xy(cls, x: float, y: float, method: Optional[MethodLike] = None) -> CCT:
        K, duv = _estimator(method).invert(x, y)
        return cls(K, duv)

    @classmethod
    def from_uv1960(cls, u: float, v: float, method: Optional[MethodLike] = None) -> CCT:
        K, duv = _estimator(method).invert_uv1960(u, v)
        return cls(K, duv)

    @classmethod
    def from_uv1976(cls, u: float, v: float, method: Optional[MethodLike] = None) -> CCT:
        u0, v0 = uv1976_to_uv1960(float(u), float(v))
        return cls.from_uv1960(u0, v0, method)

    @classmethod
    def from_xyz(cls, X: float, Y: float, Z: float, method: Optional[MethodLike] = None) -> CCT:
        x, y = xyz_to_xy(float(X), float(Y), float(Z))
        return cls.from_xy(x, y, method)


# =============================================================================
# 2. BATCH HELPERS
# =============================================================================

def cct_from_xy(xy: ArrayFloat, method: Optional[MethodLike] = None) -> ArrayFloat:
    """
    Vectorised inverse.

    Args:
        xy: (N, 2) chromaticities, or a single (2,) pair.
        method: Estimator; None for the module default.

    Returns:
        (N, 2) rows of (K, Duv), NaN rows where the estimator has no answer.
    """
    return _estimator(method).invert_batch(xy)

def xy_from_cct(cct: ArrayFloat, method: Optional[MethodLike] = None) -> ArrayFloat:
    """Vectorised forward: (N, 2) rows of (K, Duv) -> (N, 2) chromaticities."""
    return _estimator(method).forward_batch(cct)


if __name__ == "__main__":
    print("--- Locus CCT Validation ---")

    # 1. Reference colour of a 2700 K lamp
    h = CCT(2700.0).hex()
    print(f"1. CCT(2700).hex() = {h} {'[PASS]' if h == 'ffad59' else '[FAIL]'}")

    # 2. Round trip with the default method
    c = CCT(4000.0, -0.005)
    back = CCT.from_xy(*c.xy())
    ok = abs(back.K - 4000.0) < 1.0 and abs(back.Duv + 0.005) < 1e-4
    print(f"2. Round trip: {back} {'[PASS]' if ok else '[FAIL]'}")

    # 3. Invalid propagates
    bad = CCT.from_xy(0.1, 0.1)
    print(f"3. Invalid inverse: {bad} {'[PASS]' if bad.invalid else '[FAIL]'}")

    # 4. Configuration
    set_default_method("ohno-2013")
    print(f"4. Default method: {get_default_method().value}")
    set_default_method(Method.POLYNOMIAL)
