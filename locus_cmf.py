# -*- coding: utf-8 -*-
"""
Locus: Correlated colour temperature on and around the Planckian locus
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

CIE 1931 Standard Observer & Radiation Constants
================================================
Pure data module. The 2-degree colour matching functions are tabulated at
81 samples between 380 nm and 780 nm (5 nm spacing), which is the grid
every spectral integration in Locus runs on.

The Planck radiation constants are derived from the exact SI defining
constants exposed by ``scipy.constants`` rather than being hard-coded:

    c1 = 2 * pi * h * c^2     (first radiation constant, W m^2)
    c2 = h * c / k            (second radiation constant, m K)

References:
    - CIE 15:2004 "Colorimetry", Table T.4
    - CODATA 2018 / SI 2019 exact defining constants
"""

import numpy as np
from scipy import constants
from typing import Final, TypeAlias

__all__ = [
    "ArrayFloat",
    "WAVELENGTH_START_NM",
    "WAVELENGTH_END_NM",
    "WAVELENGTH_STEP_NM",
    "N_SAMPLES",
    "WAVELENGTHS_NM",
    "WAVELENGTHS_M",
    "XBAR",
    "YBAR",
    "ZBAR",
    "CMF_1931",
    "C1",
    "C2",
    "EXPONENT_LIMIT",
    "cmf_table",
]

# --- Type Aliases ---
ArrayFloat: TypeAlias = np.typing.NDArray[np.floating]

# --- Sampling Grid ---
WAVELENGTH_START_NM: Final[int] = 380
WAVELENGTH_END_NM: Final[int] = 780
WAVELENGTH_STEP_NM: Final[int] = 5
N_SAMPLES: Final[int] = (WAVELENGTH_END_NM - WAVELENGTH_START_NM) // WAVELENGTH_STEP_NM + 1

WAVELENGTHS_NM: Final[ArrayFloat] = np.arange(
    WAVELENGTH_START_NM, WAVELENGTH_END_NM + 1, WAVELENGTH_STEP_NM, dtype=np.float64
)
WAVELENGTHS_M: Final[ArrayFloat] = WAVELENGTHS_NM * 1e-9

# --- Radiation Constants ---
C1: Final[float] = 2.0 * np.pi * constants.h * constants.c * constants.c
C2: Final[float] = constants.h * constants.c / constants.k

# exp(x) overflows float64 just above x = 709; the radiance there is
# below 1e-300 of the peak and is taken as zero.
EXPONENT_LIMIT: Final[float] = 700.0

# --- CIE 1931 2-degree Observer (380-780 nm @ 5 nm) ---
XBAR: Final[ArrayFloat] = np.array([
    0.001368, 0.002236, 0.004243, 0.00765, 0.01431, 0.02319, 0.04351, 0.07763, 0.13438,
    0.21477, 0.2839, 0.3285, 0.34828, 0.34806, 0.3362, 0.3187, 0.2908, 0.2511, 0.19536,
    0.1421, 0.09564, 0.05795, 0.03201, 0.0147, 0.0049, 0.0024, 0.0093, 0.0291, 0.06327,
    0.1096, 0.1655, 0.22575, 0.2904, 0.3597, 0.43345, 0.51205, 0.5945, 0.6784, 0.7621,
    0.8425, 0.9163, 0.9786, 1.0263, 1.0567, 1.0622, 1.0456, 1.0026, 0.9384, 0.85445,
    0.7514, 0.6424, 0.5419, 0.4479, 0.3608, 0.2835, 0.2187, 0.1649, 0.1212, 0.0874,
    0.0636, 0.04677, 0.0329, 0.0227, 0.01584, 0.011359, 0.008111, 0.00579, 0.004109,
    0.002899, 0.002049, 0.00144, 0.001, 0.00069, 0.000476, 0.000332, 0.000235, 0.000166,
    0.000117, 0.000083, 0.000059, 0.000042,
], dtype=np.float64)

YBAR: Final[ArrayFloat] = np.array([
    0.000039, 0.000064, 0.00012, 0.000217, 0.000396, 0.00064, 0.00121, 0.00218, 0.004,
    0.0073, 0.0116, 0.01684, 0.023, 0.0298, 0.038, 0.048, 0.06, 0.0739, 0.09098, 0.1126,
    0.13902, 0.1693, 0.20802, 0.2586, 0.323, 0.4073, 0.503, 0.6082, 0.71, 0.7932, 0.862,
    0.91485, 0.954, 0.9803, 0.99495, 1.0, 0.995, 0.9786, 0.952, 0.9154, 0.87, 0.8163,
    0.757, 0.6949, 0.631, 0.5668, 0.503, 0.4412, 0.381, 0.321, 0.265, 0.217, 0.175,
    0.1382, 0.107, 0.0816, 0.061, 0.04458, 0.032, 0.0232, 0.017, 0.01192, 0.00821,
    0.005723, 0.004102, 0.002929, 0.002091, 0.001484, 0.001047, 0.00074, 0.00052,
    0.000361, 0.000249, 0.000172, 0.00012, 0.000085, 0.00006, 0.000042, 0.00003,
    0.000021, 0.000015,
], dtype=np.float64)

ZBAR: Final[ArrayFloat] = np.array([
    0.00645, 0.01055, 0.02005, 0.03621, 0.06785, 0.1102, 0.2074, 0.3713, 0.6456,
    1.03905, 1.3856, 1.62296, 1.74706, 1.7826, 1.77211, 1.7441, 1.6692, 1.5281, 1.28764,
    1.0419, 0.81295, 0.6162, 0.46518, 0.3533, 0.272, 0.2123, 0.1582, 0.1117, 0.07825,
    0.05725, 0.04216, 0.02984, 0.0203, 0.0134, 0.00875, 0.00575, 0.0039, 0.00275, 0.0021,
    0.0018, 0.00165, 0.0014, 0.0011, 0.001, 0.0008, 0.0006, 0.00034, 0.00024, 0.00019,
    0.0001, 0.00005, 0.00003, 0.00002, 0.00001, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0,
], dtype=np.float64)

# Column-stacked (81, 3) view for dot-product integration.
CMF_1931: Final[ArrayFloat] = np.ascontiguousarray(np.stack([XBAR, YBAR, ZBAR], axis=1))

for _arr in (WAVELENGTHS_NM, WAVELENGTHS_M, XBAR, YBAR, ZBAR, CMF_1931):
    _arr.setflags(write=False)
del _arr


def cmf_table() -> tuple[ArrayFloat, ArrayFloat]:
    """Returns ``(wavelengths_nm, cmf)`` with ``cmf`` of shape (81, 3)."""
    return WAVELENGTHS_NM, CMF_1931


if __name__ == "__main__":
    print("--- Locus CMF Data Validation ---")
    ok = all(a.shape == (N_SAMPLES,) for a in (XBAR, YBAR, ZBAR))
    print(f"1. Sample count {N_SAMPLES}: {'[PASS]' if ok and N_SAMPLES == 81 else '[FAIL]'}")
    peak = WAVELENGTHS_NM[np.argmax(YBAR)]
    print(f"2. ybar peak at {peak:.0f} nm: {'[PASS]' if peak == 555 else '[FAIL]'}")
    print(f"3. c1 = {C1:.9e}, c2 = {C2:.9e}")
