# -*- coding: utf-8 -*-
"""
Locus: Correlated colour temperature on and around the Planckian locus
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Isotherm Tables
===============
Precomputed, read-only samples of the Planckian locus used by the
table-driven CCT estimators.

IsothermTable
    Flat (N, 5) float64 array of rows ``(mired, u, v, normal_u, normal_v)``
    in CIE 1960, strictly ascending in mired, starting with a synthetic
    mired = 0 anchor for the T -> infinity limit. Normals are unit length
    and canonical (normal_v >= 0), so the positive-Duv side is the same for
    every row.

    * ``ROBERTSON_1968``: Robertson's original 31 isotherms (0-600 mired).
    * ``robertson_improved()``: 131 isotherms generated from the exact
      Planck integral with an adaptive temperature walk (971 K - 100000 K),
      built on first use or loaded from ``set_table_path()``.

PlanckianTable
    515 exact locus samples from 1000 K to 100000 K with geometric spacing
    of 1.34 % that tightens toward 0.134 % at 100000 K, for Ohno (2013).

Both lazily-built tables are constructed exactly once per process under a
lock and are never mutated afterwards.

Usage:
    python -m locus_isotherm                 # print the generated table
    python -m locus_isotherm --out lut.npy   # persist it for set_table_path()

References:
    - Robertson, A. R. (1968). "Computation of correlated color temperature
      and distribution temperature". JOSA 58 (11).
    - Ohno, Y. (2014). "Practical use and calculation of CCT and Duv".
      LEUKOS 10 (1).
"""

from __future__ import annotations

import argparse
import threading
import warnings
from dataclasses import dataclass
from typing import Final, Iterator, NamedTuple, Optional

import numpy as np

from locus_cmf import ArrayFloat
from locus_blackbody import blackbody_uv1960
from locus_geometry import MODEL_BLACKBODY, isotherm_normal, isotherm_normal_kernel

__all__ = [
    "IsothermEntry",
    "IsothermTable",
    "PlanckianTable",
    "ANCHOR_U",
    "ANCHOR_V",
    "ANCHOR_SLOPE",
    "anchor_entry",
    "ROBERTSON_1968",
    "walk_temperatures",
    "isotherm_entry",
    "generate_isotherm_table",
    "OHNO_K_MIN",
    "OHNO_K_MAX",
    "OHNO_SIZE",
    "generate_planckian_table",
    "robertson_improved",
    "planckian_table",
    "set_table_path",
    "save_table",
    "load_table",
]

# --- Infinite-temperature limit ---
ANCHOR_U: Final[float] = 0.18006
ANCHOR_V: Final[float] = 0.26352
# Limiting isotherm slope dv/du as T -> infinity.
ANCHOR_SLOPE: Final[float] = -0.24341

WALK_START_K: Final[float] = 971.56535
WALK_END_K: Final[float] = 100000.0
_WALK_DAMPING: Final[float] = 0.996

_NORMAL_TOLERANCE: Final[float] = 1e-5


class IsothermEntry(NamedTuple):
    """One isotherm: its reciprocal temperature and CIE 1960 geometry."""
    mired:    float
    u:        float
    v:        float
    normal_u: float
    normal_v: float

    @property
    def kelvin(self) -> float:
        return np.inf if self.mired == 0.0 else 1e6 / self.mired


def anchor_entry() -> IsothermEntry:
    """The mired = 0 row with its normal derived from ``ANCHOR_SLOPE``."""
    length = np.sqrt(1.0 + ANCHOR_SLOPE * ANCHOR_SLOPE)
    # (1, slope) has a negative v component; flip to the canonical side.
    return IsothermEntry(0.0, ANCHOR_U, ANCHOR_V, -1.0 / length, -ANCHOR_SLOPE / length)


# =============================================================================
# 1. TABLE TYPES
# =============================================================================

@dataclass(slots=True, frozen=True)
class IsothermTable:
    """
    Immutable isotherm lookup table.

    Raises:
        ValueError: On a wrong shape, non-finite values, mired not strictly
            ascending, a missing mired = 0 anchor, or non-unit / non-canonical
            normals.
    """
    name:    str
    entries: np.ndarray

    def __post_init__(self) -> None:
        arr = np.array(self.entries, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != 5 or arr.shape[0] < 2:
            raise ValueError(f"IsothermTable '{self.name}' must be (N>=2, 5), got {arr.shape}")
        if not np.all(np.isfinite(arr)):
            raise ValueError(f"IsothermTable '{self.name}' contains non-finite values.")
        if arr[0, 0] != 0.0:
            raise ValueError(f"IsothermTable '{self.name}' must start with the mired=0 anchor.")
        if np.any(np.diff(arr[:, 0]) <= 0.0):
            raise ValueError(f"IsothermTable '{self.name}' is not strictly ascending in mired.")
        lengths = np.hypot(arr[:, 3], arr[:, 4])
        if np.any(np.abs(lengths - 1.0) > _NORMAL_TOLERANCE):
            raise ValueError(f"IsothermTable '{self.name}' has non-unit normals.")
        if np.any(arr[:, 4] < 0.0):
            raise ValueError(f"IsothermTable '{self.name}' has non-canonical normals (normal_v < 0).")
        arr.setflags(write=False)
        object.__setattr__(self, "entries", arr)

    def __len__(self) -> int:
        return self.entries.shape[0]

    def __iter__(self) -> Iterator[IsothermEntry]:
        for row in self.entries:
            yield IsothermEntry(*(float(c) for c in row))

    def __getitem__(self, index: int) -> IsothermEntry:
        return IsothermEntry(*(float(c) for c in self.entries[index]))

    @property
    def mired(self) -> ArrayFloat:
        return self.entries[:, 0]

    @property
    def kelvin_min(self) -> float:
        """Lowest temperature covered (the last isotherm)."""
        return 1e6 / float(self.entries[-1, 0])


@dataclass(slots=True, frozen=True)
class PlanckianTable:
    """Exact locus samples: ``kelvin`` (N,) ascending, ``uv`` (N, 2) CIE 1960."""
    kelvin: np.ndarray
    uv:     np.ndarray

    def __post_init__(self) -> None:
        k = np.array(self.kelvin, dtype=np.float64)
        uv = np.array(self.uv, dtype=np.float64)
        if k.ndim != 1 or uv.shape != (k.shape[0], 2) or k.shape[0] < 3:
            raise ValueError(f"PlanckianTable shape mismatch: {k.shape}, {uv.shape}")
        if np.any(np.diff(k) <= 0.0):
            raise ValueError("PlanckianTable temperatures must be strictly ascending.")
        k.setflags(write=False)
        uv.setflags(write=False)
        object.__setattr__(self, "kelvin", k)
        object.__setattr__(self, "uv", uv)

    def __len__(self) -> int:
        return self.kelvin.shape[0]


# =============================================================================
# 2. ROBERTSON (1968)
# =============================================================================
# mired, u, v, normal_u, normal_v  (normals rotated to normal_v >= 0)
_ROBERTSON_1968_ROWS: Final[tuple[tuple[float, float, float, float, float], ...]] = (
    (0.0,   0.18006, 0.26352, -0.9716304,   0.23650457),   # infinity
    (10.0,  0.18066, 0.26589, -0.9690406,   0.24690185),   # 100000 K
    (20.0,  0.18133, 0.26846, -0.9657298,   0.25954953),   # 50000 K
    (30.0,  0.18208, 0.27119, -0.96160626,  0.2744328),    # 33333 K
    (40.0,  0.18293, 0.27407, -0.95658004,  0.29146993),   # 25000 K
    (50.0,  0.18388, 0.27709, -0.95054394,  0.31059024),   # 20000 K
    (60.0,  0.18494, 0.28021, -0.9433986,   0.33166122),   # 16667 K
    (70.0,  0.18611, 0.28342, -0.93504727,  0.35452315),   # 14286 K
    (80.0,  0.1874,  0.28668, -0.925398,    0.37899676),   # 12500 K
    (90.0,  0.1888,  0.28997, -0.9143755,   0.40486717),   # 11111 K
    (100.0, 0.19032, 0.29326, -0.9019168,   0.4319099),    # 10000 K
    (125.0, 0.19462, 0.30141, -0.864265,    0.5030368),    # 8000 K
    (150.0, 0.19962, 0.30921, -0.81741905,  0.5760434),    # 6667 K
    (175.0, 0.20525, 0.31647, -0.7623116,   0.6472102),    # 5714 K
    (200.0, 0.21142, 0.32312, -0.70070165,  0.7134544),    # 5000 K
    (225.0, 0.21807, 0.32909, -0.6349235,   0.77257496),   # 4444 K
    (250.0, 0.22511, 0.33439, -0.5674147,   0.8234322),    # 4000 K
    (275.0, 0.23247, 0.33904, -0.5004877,   0.86574364),   # 3636 K
    (300.0, 0.2401,  0.34308, -0.43606806,  0.8999136),    # 3333 K
    (325.0, 0.24792, 0.34655, -0.3755177,   0.9268153),    # 3077 K
    (350.0, 0.25591, 0.34951, -0.31966853,  0.94752944),   # 2857 K
    (375.0, 0.264,   0.352,   -0.2689336,   0.9631587),    # 2667 K
    (400.0, 0.27218, 0.35407, -0.22339252,  0.9747285),    # 2500 K
    (425.0, 0.28039, 0.35577, -0.18286845,  0.98313737),   # 2353 K
    (450.0, 0.28863, 0.35714, -0.14705601,  0.9891282),    # 2222 K
    (475.0, 0.29685, 0.35823, -0.11556052,  0.9933004),    # 2105 K
    (500.0, 0.30505, 0.35907, -0.08796569,  0.9961235),    # 2000 K
    (525.0, 0.3132,  0.35968, -0.063857116, 0.997959),     # 1905 K
    (550.0, 0.32129, 0.36011, -0.042833105, 0.9990822),    # 1818 K
    (575.0, 0.32931, 0.36038, -0.024520462, 0.9996993),    # 1739 K
    (600.0, 0.33724, 0.36051, -0.0085870605, 0.9999631),   # 1667 K
)

ROBERTSON_1968: Final[IsothermTable] = IsothermTable("robertson-1968", np.array(_ROBERTSON_1968_ROWS))


# =============================================================================
# 3. GENERATOR (exact Planck integral)
# =============================================================================

def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t

def _walk_factor(K: float) -> float:
    """Multiplicative temperature step: fine where the locus bends, coarse where flat."""
    if K < 2000.0:
        return _lerp(1.03, 1.037, K / 2000.0)
    if K < 7000.0:
        return _lerp(1.037, 1.045, (K - 2000.0) / 5000.0)
    if K < 20000.0:
        return _lerp(1.045, 1.05, (K - 7000.0) / 13000.0)
    if K < 40000.0:
        return _lerp(1.05, 1.0525, (K - 20000.0) / 20000.0)
    if K < 60000.0:
        return _lerp(1.048, 1.0432, (K - 40000.0) / 20000.0)
    if K < 100000.0:
        return _lerp(1.0432, 1.03106657, (K - 60000.0) / 20000.0)
    return 1.025

def walk_temperatures(start: float = WALK_START_K, end: float = WALK_END_K) -> Iterator[float]:
    """
    Yields the sampling temperatures, ascending. The walk always closes on
    ``end`` itself so the hottest isotherm sits exactly at the table limit.
    """
    K = start
    last = None
    while K <= end:
        yield K
        last = K
        K *= _walk_factor(K) * _WALK_DAMPING
    if last is not None and last < end:
        yield end

def isotherm_entry(K: float) -> IsothermEntry:
    """
    Exact locus point and isotherm normal at K (Planck integral).

    Warns if the tangent needed the reduced retry step; raises
    ``ValueError`` if it failed both times.
    """
    u, v = blackbody_uv1960(K)
    nu, nv, attempts = isotherm_normal_kernel(MODEL_BLACKBODY, float(K))
    if attempts > 0:
        nu, nv = isotherm_normal(K, MODEL_BLACKBODY)
        warnings.warn(
            f"Isotherm slope at {K:.5f} K needed a reduced finite-difference step.",
            stacklevel=2,
        )
    return IsothermEntry(1e6 / K, u, v, nu, nv)

def generate_isotherm_table(
    start: float = WALK_START_K, end: float = WALK_END_K, name: str = "robertson-improved"
) -> IsothermTable:
    """
    Samples the exact locus along the adaptive walk, sorts by mired and
    prepends the infinite-temperature anchor.
    """
    rows = [isotherm_entry(K) for K in walk_temperatures(start, end)]
    rows.sort(key=lambda e: e.mired)
    return IsothermTable(name, np.array([anchor_entry(), *rows], dtype=np.float64))


# =============================================================================
# 4. OHNO PLANCKIAN TABLE
# =============================================================================

OHNO_K_MIN: Final[float] = 1000.0
OHNO_K_MAX: Final[float] = 100000.0
OHNO_SIZE: Final[int] = 515
_OHNO_STEP: Final[float] = 1.0134

def _ohno_temperatures() -> ArrayFloat:
    Ks = [OHNO_K_MIN, OHNO_K_MIN + 1.0]
    K = Ks[-1]
    step = _OHNO_STEP
    while len(Ks) < OHNO_SIZE - 2:
        K *= step
        if K >= OHNO_K_MAX - 1.0:
            break
        Ks.append(K)
        D = min(max((K - OHNO_K_MIN) / (OHNO_K_MAX - OHNO_K_MIN), 0.0), 1.0)
        step = _OHNO_STEP * (1.0 - D) + (1.0 + (_OHNO_STEP - 1.0) / 10.0) * D
    Ks.extend([OHNO_K_MAX - 1.0, OHNO_K_MAX])
    return np.array(Ks, dtype=np.float64)

def generate_planckian_table() -> PlanckianTable:
    Ks = _ohno_temperatures()
    uv = np.array([blackbody_uv1960(K) for K in Ks], dtype=np.float64)
    return PlanckianTable(Ks, uv)


# =============================================================================
# 5. LAZY SINGLETONS & CONFIGURATION
# =============================================================================
# Optional .npy file to load the improved table from instead of generating
# it. Toggle via:
#     import locus_isotherm as li
#     li.set_table_path("robertson_improved.npy")
_TABLE_PATH: Optional[str] = None
_IMPROVED: Optional[IsothermTable] = None
_PLANCKIAN: Optional[PlanckianTable] = None
_LOCK = threading.Lock()

def set_table_path(path: Optional[str]) -> None:
    """
    Load ``robertson_improved()`` from ``path`` (``None`` = generate).

    Takes effect on the next access; an already-built table is discarded.
    """
    global _TABLE_PATH, _IMPROVED
    with _LOCK:
        _TABLE_PATH = None if path is None else str(path)
        _IMPROVED = None

def robertson_improved() -> IsothermTable:
    """The generated (or loaded) dense isotherm table, built once."""
    global _IMPROVED
    table = _IMPROVED
    if table is None:
        with _LOCK:
            if _IMPROVED is None:
                if _TABLE_PATH is not None:
                    _IMPROVED = load_table(_TABLE_PATH, name="robertson-improved")
                else:
                    _IMPROVED = generate_isotherm_table()
            table = _IMPROVED
    return table

def planckian_table() -> PlanckianTable:
    """The 515-sample Ohno table, built once."""
    global _PLANCKIAN
    table = _PLANCKIAN
    if table is None:
        with _LOCK:
            if _PLANCKIAN is None:
                _PLANCKIAN = generate_planckian_table()
            table = _PLANCKIAN
    return table


# =============================================================================
# 6. PERSISTENCE
# =============================================================================

def save_table(table: IsothermTable, path: str) -> None:
    """Writes the (N, 5) float64 rows bit-for-bit with ``numpy.save``."""
    np.save(path, np.ascontiguousarray(table.entries), allow_pickle=False)

def load_table(path: str, name: Optional[str] = None) -> IsothermTable:
    """
    Reads a table written by ``save_table``.

    Warns if the anchor row differs from the built-in infinite-temperature
    anchor; the table is still returned.
    """
    arr = np.load(path, allow_pickle=False)
    table = IsothermTable(name or str(path), arr)
    if not np.allclose(table.entries[0], anchor_entry(), rtol=0.0, atol=1e-6):
        warnings.warn(
            f"load_table({path!r}): anchor row {tuple(table.entries[0])} differs "
            f"from the built-in mired=0 anchor.",
            stacklevel=2,
        )
    return table


def _main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="locus_isotherm",
        description="Generate and print the isotherm lookup table.",
    )
    parser.add_argument("--out", help="write the table to this .npy file")
    parser.add_argument(
        "--table", choices=("improved", "1968"), default="improved",
        help="which table to print (default: improved)",
    )
    args = parser.parse_args(argv)

    table = generate_isotherm_table() if args.table == "improved" else ROBERTSON_1968
    print(f"# {table.name}: {len(table)} entries")
    print("# mired, u, v, normal_u, normal_v  |  K")
    for entry in table:
        print(
            f"{entry.mired:.6f}, {entry.u:.8f}, {entry.v:.8f}, "
            f"{entry.normal_u:.8f}, {entry.normal_v:.8f}  |  {entry.kelvin:.4f}"
        )
    if args.out:
        save_table(table, args.out)
        print(f"# written to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
