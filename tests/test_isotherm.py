import numpy as np
import pytest

import locus_isotherm as li
from locus_isotherm import (
    ANCHOR_SLOPE,
    OHNO_K_MAX,
    OHNO_K_MIN,
    OHNO_SIZE,
    ROBERTSON_1968,
    IsothermEntry,
    IsothermTable,
    PlanckianTable,
    anchor_entry,
    generate_isotherm_table,
    isotherm_entry,
    load_table,
    planckian_table,
    robertson_improved,
    save_table,
    walk_temperatures,
)
from locus_blackbody import blackbody_uv1960


@pytest.fixture
def restore_table_path():
    yield
    li.set_table_path(None)


def test_anchor_entry():
    a = anchor_entry()
    assert a.mired == 0.0
    assert (a.u, a.v) == (0.18006, 0.26352)
    assert np.hypot(a.normal_u, a.normal_v) == pytest.approx(1.0)
    assert a.normal_v >= 0.0
    # the isotherm itself has slope dv/du = ANCHOR_SLOPE
    assert a.normal_v / a.normal_u == pytest.approx(ANCHOR_SLOPE)
    assert a.kelvin == np.inf


def test_robertson_1968_table():
    assert len(ROBERTSON_1968) == 31
    np.testing.assert_allclose(tuple(ROBERTSON_1968[0]), anchor_entry(), atol=1e-6)
    assert ROBERTSON_1968[-1].mired == 600.0
    assert ROBERTSON_1968.kelvin_min == pytest.approx(1666.667, abs=1e-3)
    assert np.all(np.diff(ROBERTSON_1968.mired) > 0.0)


def test_entries_iterate_as_named_tuples():
    entries = list(ROBERTSON_1968)
    assert len(entries) == 31
    assert isinstance(entries[4], IsothermEntry)
    assert entries[4].kelvin == pytest.approx(25000.0)


def test_walk_is_ascending_and_bounded():
    Ks = list(walk_temperatures())
    assert Ks[0] == pytest.approx(971.56535)
    assert all(b > a for a, b in zip(Ks, Ks[1:]))
    assert Ks[-1] == 100000.0
    assert Ks[-2] > 95000.0


def test_walk_closes_on_end_temperature():
    assert list(walk_temperatures(1000.0, 1010.0)) == [1000.0, 1010.0]
    # an end the walk lands on exactly is not repeated
    Ks = list(walk_temperatures(1000.0, 1000.0))
    assert Ks == [1000.0]
    assert list(walk_temperatures(2000.0, 1000.0)) == []


def test_generated_table_layout():
    table = generate_isotherm_table()
    assert 100 < len(table) < 170
    np.testing.assert_array_equal(table.entries[0], np.array(anchor_entry()))
    assert np.all(np.diff(table.mired) > 0.0)
    assert table.kelvin_min == pytest.approx(971.56535, rel=1e-9)
    assert table[1].mired == pytest.approx(10.0, rel=1e-12)
    assert table[1].kelvin == pytest.approx(100000.0, rel=1e-12)
    row = table[len(table) // 2]
    assert (row.u, row.v) == pytest.approx(blackbody_uv1960(row.kelvin), abs=1e-12)


def test_isotherm_entry_uses_exact_geometry():
    e = isotherm_entry(6500.0)
    assert e.mired == pytest.approx(1e6 / 6500.0)
    assert np.hypot(e.normal_u, e.normal_v) == pytest.approx(1.0)


def test_generated_table_is_close_to_1968_table():
    dense = robertson_improved()
    for entry in list(ROBERTSON_1968)[1:]:
        i = int(np.searchsorted(dense.mired, entry.mired))
        lo, hi = dense[i - 1], dense[i]
        t = (entry.mired - lo.mired) / (hi.mired - lo.mired)
        u = lo.u + t * (hi.u - lo.u)
        v = lo.v + t * (hi.v - lo.v)
        assert np.hypot(u - entry.u, v - entry.v) < 5e-4


def test_tables_are_read_only():
    with pytest.raises(ValueError):
        ROBERTSON_1968.entries[1, 1] = 0.0
    with pytest.raises(AttributeError):
        ROBERTSON_1968.entries = np.zeros((2, 5))


def _valid_rows():
    return np.array(ROBERTSON_1968.entries[:4])


@pytest.mark.parametrize(
    "mutate",
    [
        lambda a: a[:, :4],                                  # wrong width
        lambda a: a[:1],                                     # too short
        lambda a: a[1:],                                     # no anchor
        lambda a: a[[0, 2, 1, 3]],                           # unsorted
        lambda a: np.where(np.arange(5) == 3, a * 2.0, a),   # non-unit normals
        lambda a: a * np.array([1.0, 1.0, 1.0, -1.0, -1.0]), # non-canonical
        lambda a: np.where(a == a[2, 1], np.nan, a),         # non-finite
    ],
)
def test_table_validation(mutate):
    with pytest.raises(ValueError):
        IsothermTable("bad", mutate(_valid_rows()))


def test_save_and_load_bit_for_bit(tmp_path):
    path = tmp_path / "table.npy"
    save_table(ROBERTSON_1968, str(path))
    loaded = load_table(str(path))
    assert loaded.entries.tobytes() == ROBERTSON_1968.entries.tobytes()
    assert loaded.name == str(path)


def test_load_warns_on_foreign_anchor(tmp_path):
    rows = _valid_rows()
    rows[0, 1] += 0.01
    path = tmp_path / "foreign.npy"
    np.save(path, rows)
    with pytest.warns(UserWarning, match="anchor"):
        table = load_table(str(path), name="foreign")
    assert table.name == "foreign"


def test_set_table_path(tmp_path, restore_table_path):
    path = tmp_path / "lut.npy"
    save_table(ROBERTSON_1968, str(path))
    li.set_table_path(str(path))
    table = robertson_improved()
    assert table.name == "robertson-improved"
    assert len(table) == 31
    assert robertson_improved() is table

    li.set_table_path(None)
    assert len(robertson_improved()) > 31


def test_planckian_table():
    table = planckian_table()
    assert isinstance(table, PlanckianTable)
    assert 500 < len(table) <= OHNO_SIZE
    assert table.kelvin[0] == OHNO_K_MIN
    assert table.kelvin[-1] == OHNO_K_MAX
    assert np.all(np.diff(table.kelvin) > 0.0)
    steps = table.kelvin[1:] / table.kelvin[:-1]
    assert steps[2:-2].max() < 1.0135
    np.testing.assert_allclose(table.uv[100], blackbody_uv1960(table.kelvin[100]), atol=1e-15)
    assert planckian_table() is table


def test_cli_prints_and_writes(tmp_path, capsys):
    out = tmp_path / "cli.npy"
    assert li._main(["--table", "1968", "--out", str(out)]) == 0
    text = capsys.readouterr().out
    assert "robertson-1968: 31 entries" in text
    assert load_table(str(out)).entries.tobytes() == ROBERTSON_1968.entries.tobytes()


def test_isotherm_entry_outside_exact_range_raises():
    with pytest.raises(ValueError):
        isotherm_entry(50.0)
