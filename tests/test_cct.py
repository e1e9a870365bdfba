import dataclasses

import numpy as np
import pytest

import locus_cct as lc
from locus_cct import CCT, Method, cct_from_xy, get_default_method, set_default_method, xy_from_cct
from locus_blackbody import blackbody_xy
from locus_chromaticity import xy_to_uv1960, xy_to_uv1976
from locus_planckian import locus_xy


@pytest.fixture
def restore_default_method():
    yield
    set_default_method(Method.POLYNOMIAL)


# --- Value semantics -----------------------------------------------------

def test_defaults_and_immutability():
    c = CCT(3000)
    assert c.K == 3000.0 and isinstance(c.K, float)
    assert c.Duv == 0.0
    assert not c.invalid
    assert c.mired == pytest.approx(333.333, abs=1e-3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        c.K = 4000.0
    assert CCT(3000.0, 0.001) == CCT(3000, 0.001)


@pytest.mark.parametrize("K, duv", [(np.nan, 0.0), (3000.0, np.nan), (np.nan, np.nan)])
def test_nan_in_either_field_invalidates_both(K, duv):
    c = CCT(K, duv)
    assert c.invalid
    assert np.isnan(c.K) and np.isnan(c.Duv)
    assert str(c) == "CCT(invalid)"
    assert np.isnan(c.xy()).all()
    assert np.isnan(c.xy_exact()).all()


def test_str():
    assert str(CCT(6500.0, -0.0012)) == "6500.0 K, Duv -0.00120"


# --- Forward -------------------------------------------------------------

def test_hex_of_warm_white():
    assert CCT(2700.0).hex() == "ffad59"
    assert CCT(2700.0, 0.01).hex() in {"ffb32a", "ffb32b"}


def test_hex_of_invalid_raises():
    with pytest.raises(ValueError):
        CCT(1000.0).hex()


def test_default_forward_is_the_polynomial():
    assert CCT(5000.0).xy() == locus_xy(5000.0)
    assert np.isnan(CCT(1000.0).xy()).all()
    assert np.isnan(CCT(30000.0).xy()).all()


def test_forward_per_method():
    for method in Method:
        x, y = CCT(4000.0, 0.004).xy(method)
        assert CCT.from_xy(x, y, method).K == pytest.approx(4000.0, rel=2e-3)
    assert np.isfinite(CCT(1000.0).xy("ohno-2013")).all()
    assert np.isfinite(CCT(1000.0).xy(Method.ROBERTSON_IMPROVED)).all()
    assert np.isnan(CCT(1000.0).xy(Method.ROBERTSON_1968)).all()


def test_chromaticity_representations_agree():
    c = CCT(3500.0, -0.003)
    x, y = c.xy()
    assert c.uv1960() == pytest.approx(xy_to_uv1960(x, y), abs=1e-14)
    assert c.uv1976() == pytest.approx(xy_to_uv1976(x, y), abs=1e-14)
    X, Y, Z = c.xyz()
    assert Y == 100.0
    assert (X / (X + Y + Z), Y / (X + Y + Z)) == pytest.approx((x, y), abs=1e-14)
    assert c.xyz(Y=1.0)[1] == 1.0


def test_exact_forward():
    assert CCT(2856.0).xy_exact() == pytest.approx(blackbody_xy(2856.0), abs=1e-15)
    assert CCT(500.0).xyz_exact()[1] == 100.0
    assert np.isnan(CCT(50.0).xy_exact()).all()
    assert np.isnan(CCT(200000.0).xy_exact()).all()
    x, y = CCT(2856.0, 0.01).xy_exact()
    recovered = CCT.from_xy(x, y, Method.ROBERTSON_IMPROVED)
    assert recovered.Duv == pytest.approx(0.01, abs=2e-4)


def test_exact_and_polynomial_forward_are_close():
    for K in (2000.0, 4000.0, 6500.0, 15000.0):
        poly = np.array(CCT(K).uv1960())
        exact = np.array(xy_to_uv1960(*CCT(K).xy_exact()))
        assert np.hypot(*(poly - exact)) < 1e-3


def test_daylight():
    assert CCT(6504.0).xy_daylight() == pytest.approx((0.3127, 0.3291), abs=3e-4)
    assert CCT(6504.0, 0.01).xy_daylight() == CCT(6504.0).xy_daylight()
    assert np.isnan(CCT(3000.0).xy_daylight()).all()


def test_srgb_is_normalised():
    r, g, b = CCT(2700.0).srgb()
    assert r == pytest.approx(1.0)
    assert r > g > b > 0.0
    r, g, b = CCT(12000.0).srgb()
    assert b == pytest.approx(1.0)


def test_spectrum():
    spd = CCT(5000.0, 0.02).spectrum()
    assert spd.to_xyz()[1] == pytest.approx(100.0)
    assert spd.wavelengths[0] == 380.0
    assert spd.wavelengths[-1] == 780.0
    assert len(CCT(5000.0).spectrum(400, 700, 10).values) == 31
    assert not CCT(1e6).spectrum().is_valid


# --- Inverse -------------------------------------------------------------

def test_inverse_entry_points_agree():
    x, y = CCT(4200.0, 0.006).xy()
    ref = CCT.from_xy(x, y)
    assert CCT.from_uv1960(*xy_to_uv1960(x, y)).K == pytest.approx(ref.K, rel=1e-9)
    assert CCT.from_uv1976(*xy_to_uv1976(x, y)).K == pytest.approx(ref.K, rel=1e-9)
    X, Y, Z = CCT(4200.0, 0.006).xyz(Y=37.0)
    from_xyz = CCT.from_xyz(X, Y, Z)
    assert from_xyz.K == pytest.approx(ref.K, rel=1e-9)
    assert from_xyz.Duv == pytest.approx(ref.Duv, abs=1e-12)


def test_inverse_outside_domain_is_invalid():
    assert CCT.from_xy(0.1, 0.1).invalid
    assert CCT.from_xyz(0.0, 0.0, 0.0).invalid


@pytest.mark.parametrize("method", list(Method))
@pytest.mark.parametrize("K", [2000.0, 4000.0, 8000.0])
def test_duv_sign(method, K):
    assert CCT.from_xy(*CCT(K, 0.01).xy(method), method).Duv > 0.0
    assert CCT.from_xy(*CCT(K, -0.01).xy(method), method).Duv < 0.0


@pytest.mark.parametrize("K", [1700.0, 3000.0, 6500.0, 20000.0])
def test_locus_points_measure_zero_duv(K):
    for method in Method:
        assert abs(CCT.from_xy(*CCT(K).xy(method), method).Duv) < 1e-3


# --- Configuration -------------------------------------------------------

def test_default_method_configuration(restore_default_method):
    assert get_default_method() is Method.POLYNOMIAL
    set_default_method("ohno-2013")
    assert get_default_method() is Method.OHNO_2013
    assert np.isfinite(CCT(1000.0).xy()).all()
    assert CCT.from_xy(*blackbody_xy(1200.0)).K == pytest.approx(1200.0, rel=1e-3)
    set_default_method(Method.ROBERTSON_IMPROVED)
    assert lc._DEFAULT_METHOD is Method.ROBERTSON_IMPROVED


def test_default_method_rejects_bad_values(restore_default_method):
    with pytest.raises(ValueError):
        set_default_method("mccamy")
    with pytest.raises(TypeError):
        set_default_method(None)
    assert get_default_method() is Method.POLYNOMIAL


# --- Batch ---------------------------------------------------------------

def test_batch_helpers():
    cct = np.array([[2700.0, 0.0], [4000.0, 0.005], [6500.0, -0.003], [50000.0, 0.0]])
    xy = xy_from_cct(cct)
    assert xy.shape == (4, 2)
    assert np.isnan(xy[3]).all()
    back = cct_from_xy(xy[:3])
    np.testing.assert_allclose(back[:, 0], cct[:3, 0], rtol=1e-3)
    np.testing.assert_allclose(back[:, 1], cct[:3, 1], atol=1e-4)

    single = cct_from_xy(xy[0], method="ohno-2013")
    assert single.shape == (2,)
    assert single[0] == pytest.approx(2700.0, rel=5e-3)
