import numpy as np
import pytest

from locus_cmf import (
    C1,
    C2,
    CMF_1931,
    N_SAMPLES,
    WAVELENGTHS_M,
    WAVELENGTHS_NM,
    XBAR,
    YBAR,
    ZBAR,
    cmf_table,
)


def test_grid_is_380_to_780_in_5nm_steps():
    assert N_SAMPLES == 81
    assert WAVELENGTHS_NM[0] == 380.0
    assert WAVELENGTHS_NM[-1] == 780.0
    np.testing.assert_allclose(np.diff(WAVELENGTHS_NM), 5.0)
    np.testing.assert_allclose(WAVELENGTHS_M, WAVELENGTHS_NM * 1e-9)


def test_table_columns_match_observer_arrays():
    wl, cmf = cmf_table()
    assert wl is WAVELENGTHS_NM
    assert cmf.shape == (81, 3)
    np.testing.assert_array_equal(cmf[:, 0], XBAR)
    np.testing.assert_array_equal(cmf[:, 1], YBAR)
    np.testing.assert_array_equal(cmf[:, 2], ZBAR)


def test_ybar_peaks_at_555nm():
    assert WAVELENGTHS_NM[np.argmax(YBAR)] == 555.0
    assert YBAR.max() == 1.0


def test_equal_energy_white_is_near_one_third():
    total = XBAR.sum() + YBAR.sum() + ZBAR.sum()
    assert XBAR.sum() / total == pytest.approx(1.0 / 3.0, abs=1e-3)
    assert YBAR.sum() / total == pytest.approx(1.0 / 3.0, abs=1e-3)


def test_data_is_read_only():
    with pytest.raises(ValueError):
        CMF_1931[0, 0] = 1.0
    with pytest.raises(ValueError):
        YBAR[0] = 1.0


def test_radiation_constants():
    assert C1 == pytest.approx(3.741771852e-16, rel=1e-9)
    assert C2 == pytest.approx(1.438776877e-2, rel=1e-9)
