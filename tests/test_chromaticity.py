import numpy as np
import pytest

from locus_chromaticity import (
    srgb_to_hex,
    uv1960_to_uv1976,
    uv1960_to_xy,
    uv1960_to_xy_batch,
    uv1976_to_uv1960,
    uv1976_to_xy,
    xy_to_linear_srgb,
    xy_to_srgb,
    xy_to_uv1960,
    xy_to_uv1960_batch,
    xy_to_uv1976,
    xy_to_xyz,
    xyz_to_uv1960,
    xyz_to_xy,
)

D65 = (0.31271, 0.32902)


def test_d65_in_cie1960():
    u, v = xy_to_uv1960(*D65)
    assert u == pytest.approx(0.19783, abs=5e-5)
    assert v == pytest.approx(0.31222, abs=5e-5)


def test_1976_is_1960_with_scaled_v():
    u, v = xy_to_uv1960(0.4, 0.38)
    up, vp = xy_to_uv1976(0.4, 0.38)
    assert up == pytest.approx(u)
    assert vp == pytest.approx(1.5 * v)
    assert uv1960_to_uv1976(u, v) == pytest.approx((up, vp))
    assert uv1976_to_uv1960(up, vp) == pytest.approx((u, v))


@pytest.mark.parametrize("xy", [(0.25, 0.22), (0.3127, 0.329), (0.55, 0.41), (0.18, 0.6)])
def test_round_trips(xy):
    assert uv1960_to_xy(*xy_to_uv1960(*xy)) == pytest.approx(xy, abs=1e-14)
    assert uv1976_to_xy(*xy_to_uv1976(*xy)) == pytest.approx(xy, abs=1e-14)
    X, Y, Z = xy_to_xyz(*xy, 42.0)
    assert Y == 42.0
    assert xyz_to_xy(X, Y, Z) == pytest.approx(xy, abs=1e-14)
    assert xyz_to_uv1960(X, Y, Z) == pytest.approx(xy_to_uv1960(*xy), abs=1e-14)


def test_degenerate_inputs_are_nan():
    assert np.isnan(uv1960_to_xy(0.0, 0.5)).all()
    assert np.isnan(xyz_to_xy(0.0, 0.0, 0.0)).all()
    assert np.isnan(xy_to_xyz(0.3, 0.0)).all()
    assert np.isnan(xy_to_uv1960(np.nan, 0.3)).all()


def test_batch_matches_scalar_and_keeps_shape():
    rng = np.random.default_rng(7)
    xy = rng.uniform(0.2, 0.5, size=(64, 2))
    uv = xy_to_uv1960_batch(xy)
    assert uv.shape == (64, 2)
    expected = np.array([xy_to_uv1960(a, b) for a, b in xy])
    np.testing.assert_allclose(uv, expected, rtol=0, atol=1e-15)
    np.testing.assert_allclose(uv1960_to_xy_batch(uv), xy, atol=1e-14)

    single = xy_to_uv1960_batch(np.array([0.3, 0.3]))
    assert single.shape == (2,)


def test_batch_rejects_bad_shape():
    with pytest.raises(ValueError):
        xy_to_uv1960_batch(np.zeros((4, 3)))


def test_d65_renders_white():
    r, g, b = xy_to_linear_srgb(*D65)
    assert (r, g, b) == pytest.approx((1.0, 1.0, 1.0), abs=2e-3)
    assert srgb_to_hex(*xy_to_srgb(*D65)) == "ffffff"


def test_out_of_gamut_channels_are_clipped():
    r, g, b = xy_to_srgb(0.17, 0.7)
    assert min(r, g, b) >= 0.0
    assert max(r, g, b) == pytest.approx(1.0)


def test_hex_encoding():
    assert srgb_to_hex(1.0, 0.0, 0.0) == "ff0000"
    assert srgb_to_hex(0.5, 0.5, 0.5) == "808080"
    with pytest.raises(ValueError):
        srgb_to_hex(np.nan, 0.0, 0.0)
