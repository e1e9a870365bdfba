# -*- coding: utf-8 -*-
"""
Locus: Correlated colour temperature on and around the Planckian locus
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Blackbody Radiator
==================
Exact tristimulus values of an ideal Planckian radiator, obtained by
integrating Planck's law against the CIE 1931 observer on the 81-sample
5 nm grid of ``locus_cmf``:

    B(lambda, T) = c1 / (lambda^5 * (exp(c2 / (lambda T)) - 1))

    X = sum B * xbar,  Y = sum B * ybar,  Z = sum B * zbar

No normalisation is applied by ``blackbody_xyz``; the result is
proportional to the radiator's absolute output and callers rescale as
needed. This is the slow, exact reference model (100 K - 100000 K) from
which the isotherm tables are generated.

The module also produces the spectral power distribution of the radiator
for consumers that score spectra rather than chromaticities.

Performance Note:
    All kernels compile with ``fastmath=False``. The out-of-range
    contract is "all NaN", and NaN handling is exactly what fastmath is
    allowed to break.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numba import njit, prange
from scipy.interpolate import PchipInterpolator
from typing import Final

from locus_cmf import (
    ArrayFloat,
    C1,
    C2,
    CMF_1931,
    EXPONENT_LIMIT,
    N_SAMPLES,
    WAVELENGTHS_M,
    WAVELENGTHS_NM,
    WAVELENGTH_STEP_NM,
    XBAR,
    YBAR,
    ZBAR,
)
from locus_chromaticity import xyz_to_uv1960, xyz_to_xy

__all__ = [
    "BB_K_MIN",
    "BB_K_MAX",
    "planck_radiance",
    "blackbody_xyz",
    "blackbody_xyz_batch",
    "blackbody_xy",
    "blackbody_uv1960",
    "SpectralPowerDistribution",
    "blackbody_spectrum",
]

BB_K_MIN: Final[float] = 100.0
BB_K_MAX: Final[float] = 100000.0


# =============================================================================
# 1. PLANCK KERNELS
# =============================================================================

@njit(cache=True, fastmath=False)
def planck_radiance(wavelength_m: float, K: float) -> float:
    """
    Spectral radiant exitance of a blackbody, W / m^3.

    Exponents above ``EXPONENT_LIMIT`` contribute zero.
    """
    exponent = C2 / (wavelength_m * K)
    if exponent > EXPONENT_LIMIT:
        return 0.0
    lam5 = wavelength_m * wavelength_m * wavelength_m * wavelength_m * wavelength_m
    return C1 / (lam5 * (np.exp(exponent) - 1.0))

@njit(cache=True, fastmath=False)
def blackbody_xyz(K: float) -> tuple[float, float, float]:
    """
    Absolute tristimulus values of a Planckian radiator.

    Args:
        K: Temperature in Kelvin, [100, 100000].

    Returns:
        (X, Y, Z), or all NaN outside the valid range.
    """
    if not (K >= BB_K_MIN and K <= BB_K_MAX):
        return np.nan, np.nan, np.nan
    X = 0.0
    Y = 0.0
    Z = 0.0
    for i in range(N_SAMPLES):
        B = planck_radiance(WAVELENGTHS_M[i], K)
        X += B * XBAR[i]
        Y += B * YBAR[i]
        Z += B * ZBAR[i]
    return X, Y, Z

@njit(cache=True, fastmath=False)
def _relative_xyz(K: float) -> tuple[float, float, float]:
    # Absolute XYZ at a few hundred Kelvin is far below DENOM_EPSILON.
    X, Y, Z = blackbody_xyz(K)
    total = X + Y + Z
    if not total > 0.0:
        return np.nan, np.nan, np.nan
    return X / total, Y / total, Z / total

@njit(cache=True, fastmath=False)
def blackbody_xy(K: float) -> tuple[float, float]:
    X, Y, Z = _relative_xyz(K)
    return xyz_to_xy(X, Y, Z)

@njit(cache=True, fastmath=False)
def blackbody_uv1960(K: float) -> tuple[float, float]:
    """Exact Planckian locus point in CIE 1960 (u, v)."""
    X, Y, Z = _relative_xyz(K)
    return xyz_to_uv1960(X, Y, Z)

@njit(cache=True, fastmath=False, parallel=True)
def _blackbody_xyz_kernel(K: ArrayFloat) -> ArrayFloat:
    n = K.shape[0]
    out = np.empty((n, 3), dtype=np.float64)
    for i in prange(n):
        X, Y, Z = blackbody_xyz(K[i])
        out[i, 0] = X
        out[i, 1] = Y
        out[i, 2] = Z
    return out

def blackbody_xyz_batch(K: ArrayFloat, normalize: bool = False) -> ArrayFloat:
    """
    Vectorised ``blackbody_xyz``.

    Args:
        K: Temperatures, shape (N,) or scalar.
        normalize: If True, scale every row to Y = 100.

    Returns:
        (N, 3) tristimulus values, or (3,) for a scalar input.
    """
    K_arr = np.asarray(K, dtype=np.float64)
    res = _blackbody_xyz_kernel(np.ascontiguousarray(np.atleast_1d(K_arr).ravel()))
    if normalize:
        with np.errstate(divide="ignore", invalid="ignore"):
            res = res * (100.0 / res[:, 1:2])
    if K_arr.ndim == 0:
        return res[0]
    return res.reshape(K_arr.shape + (3,))


# =============================================================================
# 2. SPECTRAL POWER DISTRIBUTION
# =============================================================================

@dataclass(slots=True, frozen=True)
class SpectralPowerDistribution:
    """
    Wavelength-sampled spectral power.

    Wavelengths are in nm and strictly increasing; values share their
    shape. Both arrays are stored read-only.
    """
    wavelengths: np.ndarray
    values:      np.ndarray

    def __post_init__(self) -> None:
        wl = np.array(self.wavelengths, dtype=np.float64)
        vals = np.array(self.values, dtype=np.float64)
        if wl.ndim != 1 or vals.shape != wl.shape:
            raise ValueError(
                f"SpectralPowerDistribution shape mismatch: {wl.shape}, {vals.shape}"
            )
        if wl.size < 2 or np.any(np.diff(wl) <= 0.0):
            raise ValueError("Wavelengths must be strictly increasing with >= 2 samples.")
        wl.setflags(write=False)
        vals.setflags(write=False)
        object.__setattr__(self, "wavelengths", wl)
        object.__setattr__(self, "values", vals)

    @property
    def is_valid(self) -> bool:
        return not bool(np.isnan(self.values).any())

    def resample(self, wavelengths: ArrayFloat) -> SpectralPowerDistribution:
        """
        Shape-preserving (PCHIP) resampling onto a new grid.

        Samples outside the original range are zero.
        """
        wl_new = np.asarray(wavelengths, dtype=np.float64)
        vals = PchipInterpolator(self.wavelengths, self.values, extrapolate=False)(wl_new)
        if self.is_valid:
            vals = np.nan_to_num(vals, nan=0.0)
        return SpectralPowerDistribution(wl_new, vals)

    def _on_cmf_grid(self) -> ArrayFloat:
        if self.wavelengths.shape == WAVELENGTHS_NM.shape and np.array_equal(
            self.wavelengths, WAVELENGTHS_NM
        ):
            return self.values
        return self.resample(WAVELENGTHS_NM).values

    def to_xyz(self) -> tuple[float, float, float]:
        """Tristimulus values against the CIE 1931 observer (5 nm rectangle rule)."""
        xyz = self._on_cmf_grid() @ CMF_1931 * WAVELENGTH_STEP_NM
        return float(xyz[0]), float(xyz[1]), float(xyz[2])

    def normalize(self, Y: float = 100.0) -> SpectralPowerDistribution:
        """Rescales so the luminance integral equals ``Y``; all NaN if Y is 0."""
        current = self.to_xyz()[1]
        scale = Y / current if current > 0.0 else np.nan
        return SpectralPowerDistribution(self.wavelengths, self.values * scale)


def blackbody_spectrum(
    K: float, start: int = 380, end: int = 780, step: int = 5
) -> SpectralPowerDistribution:
    """
    Planckian spectrum at temperature K, normalised to Y = 100.

    Args:
        K: Temperature in Kelvin, [100, 100000]; NaN values outside.
        start, end, step: Wavelength grid in nm (inclusive).

    Returns:
        SpectralPowerDistribution on ``range(start, end + 1, step)``.
    """
    if step <= 0 or end < start:
        raise ValueError(f"Invalid wavelength grid: start={start}, end={end}, step={step}")
    wl = np.arange(start, end + 1, step, dtype=np.float64)
    if not (BB_K_MIN <= K <= BB_K_MAX):
        return SpectralPowerDistribution(wl, np.full(wl.shape, np.nan))
    vals = np.array([planck_radiance(w * 1e-9, float(K)) for w in wl], dtype=np.float64)
    return SpectralPowerDistribution(wl, vals).normalize()


if __name__ == "__main__":
    print("--- Locus Blackbody Validation ---")

    # 1. Illuminant A chromaticity (2856 K at c2 = 1.435e-2)
    x, y = blackbody_xy(2856.0 * C2 / 1.435e-2)
    ok = abs(x - 0.44757) < 2e-4 and abs(y - 0.40745) < 2e-4
    print(f"1. Illuminant A xy = ({x:.5f}, {y:.5f}) {'[PASS]' if ok else '[FAIL]'}")

    # 2. Domain
    print(f"2. NaN below 100 K: {'[PASS]' if np.isnan(blackbody_xyz(99.0)[0]) else '[FAIL]'}")

    # 3. Spectrum normalisation
    spd = blackbody_spectrum(6500.0)
    Y = spd.to_xyz()[1]
    print(f"3. SPD Y = {Y:.6f} {'[PASS]' if abs(Y - 100.0) < 1e-9 else '[FAIL]'}")
