import numpy as np
import pytest

from locus_planckian import (
    K_MAX,
    K_MIN,
    daylight_xy,
    locus_uv1960,
    locus_xy,
    locus_xy_batch,
)
from locus_blackbody import blackbody_xy
from locus_chromaticity import xy_to_uv1960


def test_reference_point_2700k():
    x, y = locus_xy(2700.0)
    assert x == pytest.approx(0.4593, abs=5e-4)
    assert y == pytest.approx(0.4107, abs=5e-4)


@pytest.mark.parametrize("K", [1666.9, 25000.1, 100.0, 1e6, -5000.0, np.nan, np.inf])
def test_nan_outside_band(K):
    assert np.isnan(locus_xy(K)).all()
    assert np.isnan(locus_uv1960(K)).all()


def test_band_edges_are_valid():
    assert np.isfinite(locus_xy(K_MIN)).all()
    assert np.isfinite(locus_xy(K_MAX)).all()


@pytest.mark.parametrize("K", [2000.0, 2856.0, 4000.0, 6500.0, 10000.0, 20000.0])
def test_polynomial_tracks_planck_integral(K):
    u, v = locus_uv1960(K)
    bu, bv = xy_to_uv1960(*blackbody_xy(K))
    assert np.hypot(u - bu, v - bv) < 1e-3


def test_continuous_across_band_joins():
    for K in (2222.0, 4000.0):
        lo = np.array(locus_xy(K))
        hi = np.array(locus_xy(K + 1e-6))
        np.testing.assert_allclose(lo, hi, atol=1e-4)


def test_batch_matches_scalar():
    Ks = np.linspace(1500.0, 26000.0, 300)
    batch = locus_xy_batch(Ks)
    scalar = np.array([locus_xy(k) for k in Ks])
    np.testing.assert_array_equal(batch, scalar)
    assert locus_xy_batch(3000.0).shape == (2,)
    assert locus_xy_batch(np.ones((4, 5)) * 3000.0).shape == (4, 5, 2)


def test_daylight_locus():
    x, y = daylight_xy(6504.0)
    assert x == pytest.approx(0.3127, abs=3e-4)
    assert y == pytest.approx(0.3291, abs=3e-4)
    assert np.isnan(daylight_xy(3999.0)).all()
    assert np.isnan(daylight_xy(25001.0)).all()
