"""
utils.py — Indexing Helpers
============================
Small pure routines shared by the physics modules.

Every field is a flat buffer of (N+2)² floats, viewed as an (N+2, N+2)
array. Cell (i, j) lives at flat offset i*(N+2) + j, so field[i, j] on the
2D view and flat[ix(i, j, config)] are the same number.
"""

from functools import lru_cache

import numpy as np


def ix(i: int, j: int, config) -> int:
    """Linear offset of cell (i, j) in a flat field buffer."""
    return i * (config.N + 2) + j


def for_each_cell(config, fn):
    """
    Call fn(i, j) once for every interior cell, i = 1..N outer, j = 1..N inner.

    This is the reference ordering of a Gauss-Seidel sweep. The physics
    modules use vectorised equivalents; this is kept for scalar code paths.
    """
    N = config.N
    for i in range(1, N + 1):
        for j in range(1, N + 1):
            fn(i, j)


@lru_cache(maxsize=16)
def interior_diagonals(N: int) -> tuple:
    """
    Interior cells grouped by anti-diagonal k = i + j, for k = 2..2N.

    Returns a tuple of (I, J) index-array pairs, one per anti-diagonal, in
    sweep order. A cell on diagonal k only touches neighbours on k-1 and
    k+1, so updating one whole diagonal at a time reproduces a lexicographic
    (i outer, j inner) Gauss-Seidel sweep exactly.
    """
    diagonals = []
    for k in range(2, 2 * N + 1):
        i = np.arange(max(1, k - N), min(N, k - 1) + 1)
        j = k - i
        i.flags.writeable = False
        j.flags.writeable = False
        diagonals.append((i, j))
    return tuple(diagonals)
